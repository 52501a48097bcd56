"""
Instance template validator - entry point called by the host.

validate() runs a fixed battery of field checks and reports every failure
to the accumulator instead of stopping at the first one:

    1. Local checks: VM size, FQDN suffix, instance name prefix
    2. Remote checks, in one guarded block with a freshly acquired lookup:
       resource group, virtual network resource group, virtual network,
       subnet, NSG resource group, NSG, availability set, VM image
    3. Anything escaping the guarded block (credential acquisition failure,
       unexpected SDK error) becomes one generic, unscoped record

Usage:
    validator = InstanceTemplateValidator(plugin_config, image_registry,
                                          AzureCredentials(...), "westus")
    accumulator = ConditionAccumulator()
    validator.validate("worker", config, accumulator, LocalizationContext())
    if accumulator.has_error():
        ...
"""

import logging
from typing import Optional

from azure_template_validator import constants as CONSTANTS
from azure_template_validator.core.accumulator import ConditionAccumulator
from azure_template_validator.core.context import InstanceTemplate, LocalizationContext, PluginConfig
from azure_template_validator.core.protocols import ConfigurationSource, LookupProvider
from .images import ConfigurableImageRegistry
from . import checks

logger = logging.getLogger(__name__)

LOCAL_CHECKS = (
    checks.check_vm_size,
    checks.check_fqdn_suffix,
    checks.check_instance_prefix,
)

REMOTE_CHECKS = (
    checks.check_resource_group,
    checks.check_virtual_network_resource_group,
    checks.check_virtual_network,
    checks.check_subnet,
    checks.check_network_security_group_resource_group,
    checks.check_network_security_group,
    checks.check_availability_set,
)


class InstanceTemplateValidator:
    """
    Validator for Azure compute instance templates.

    Holds only immutable inputs; all per-call state lives in the accumulator
    passed to validate(), so one instance may serve concurrent validations.

    Attributes:
        plugin_config: Supported VM sizes and naming patterns
        image_registry: Configurable images
        lookup_provider: Hands out a fresh ResourceLookup per validate() call
        location: Region marketplace images are checked in
    """

    def __init__(
        self,
        plugin_config: PluginConfig,
        image_registry: ConfigurableImageRegistry,
        lookup_provider: LookupProvider,
        location: str
    ):
        self._plugin_config = plugin_config
        self._image_registry = image_registry
        self._lookup_provider = lookup_provider
        self._location = location

    @property
    def plugin_config(self) -> PluginConfig:
        return self._plugin_config

    @property
    def image_registry(self) -> ConfigurableImageRegistry:
        return self._image_registry

    @property
    def lookup_provider(self) -> LookupProvider:
        return self._lookup_provider

    @property
    def location(self) -> str:
        return self._location

    def validate(
        self,
        name: str,
        config: ConfigurationSource,
        accumulator: ConditionAccumulator,
        localization_context: LocalizationContext
    ) -> None:
        """
        Validate a template configuration against the plugin config and Azure.

        Never raises for validation failures; inspect the accumulator afterwards.
        """
        logger.info(f"Validating instance template '{name}'")

        for check in LOCAL_CHECKS:
            check(config, accumulator, localization_context, self._plugin_config)

        try:
            # Acquired per call, never cached on the validator
            lookup = self._lookup_provider.get_resource_lookup()
            for check in REMOTE_CHECKS:
                check(config, accumulator, localization_context, lookup)
            checks.check_vm_image(config, accumulator, localization_context, lookup,
                                  self._image_registry, self._location)
        except Exception as e:
            logger.error(CONSTANTS.GENERIC_MSG, exc_info=True)
            accumulator.add_error(None, localization_context, CONSTANTS.GENERIC_MSG, exception=e)

        logger.info(
            f"Validation of '{name}' finished with {len(accumulator.errors())} error(s)"
        )

    def validate_template(
        self,
        template: InstanceTemplate,
        accumulator: Optional[ConditionAccumulator] = None
    ) -> ConditionAccumulator:
        """Validate an InstanceTemplate and return the accumulator used."""
        if accumulator is None:
            accumulator = ConditionAccumulator()
        self.validate(template.name, template.configuration, accumulator,
                      template.localization_context)
        return accumulator
