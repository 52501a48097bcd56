"""
Field checks for Azure compute instance templates.

Each check validates one template field, reads what it needs from the
configuration and reports at most one FailureRecord to the accumulator.
Checks are independent of each other: none of them assumes another passed.

Local checks (no Azure call):
    check_vm_size, check_fqdn_suffix, check_instance_prefix

Remote checks (one ResourceLookup call each):
    check_resource_group, check_virtual_network_resource_group,
    check_virtual_network, check_subnet,
    check_network_security_group_resource_group, check_network_security_group,
    check_availability_set, check_vm_image
"""

import logging
import re
from typing import Any, Callable, Sequence

from azure_template_validator import constants as CONSTANTS
from azure_template_validator.constants import InstanceTemplateProperty as Prop
from azure_template_validator.core.accumulator import ConditionAccumulator, format_message
from azure_template_validator.core.context import LocalizationContext, PluginConfig
from azure_template_validator.core.exceptions import ImageMissingError, ImageConfigIncompleteError
from azure_template_validator.core.protocols import ConfigurationSource, ResourceLookup
from azure_template_validator.core.results import LookupFailureClass, LookupResult
from .images import ConfigurableImageRegistry

logger = logging.getLogger(__name__)


def _report(
    accumulator: ConditionAccumulator,
    token: Prop,
    localization_context: LocalizationContext,
    template: str,
    *args: Any
) -> None:
    logger.error(format_message(template, *args))
    accumulator.add_error(token, localization_context, template, *args)


# ==========================================
# 1. Local Checks
# ==========================================

def check_vm_size(
    config: ConfigurationSource,
    accumulator: ConditionAccumulator,
    localization_context: LocalizationContext,
    plugin_config: PluginConfig
) -> None:
    """Check that the VM size is one of the supported instances (exact, case-sensitive)."""
    vm_size = config.get_configuration_value(Prop.VMSIZE, localization_context)

    if vm_size not in plugin_config.supported_instances:
        _report(accumulator, Prop.VMSIZE, localization_context,
                CONSTANTS.VIRTUAL_MACHINE_MSG, vm_size)


def _check_pattern(
    config: ConfigurationSource,
    accumulator: ConditionAccumulator,
    localization_context: LocalizationContext,
    token: Prop,
    pattern: 're.Pattern[str]',
    template: str
) -> None:
    # search semantics: a match anywhere in the value is enough
    value = config.get_configuration_value(token, localization_context)
    if pattern.search(value or "") is None:
        _report(accumulator, token, localization_context, template, value, pattern.pattern)


def check_fqdn_suffix(
    config: ConfigurationSource,
    accumulator: ConditionAccumulator,
    localization_context: LocalizationContext,
    plugin_config: PluginConfig
) -> None:
    """Check that the host FQDN suffix satisfies the Azure DNS name suffix pattern."""
    _check_pattern(config, accumulator, localization_context, Prop.HOST_FQDN_SUFFIX,
                   plugin_config.fqdn_suffix_pattern, CONSTANTS.FQDN_SUFFIX_MSG)


def check_instance_prefix(
    config: ConfigurationSource,
    accumulator: ConditionAccumulator,
    localization_context: LocalizationContext,
    plugin_config: PluginConfig
) -> None:
    """Check that the instance name prefix satisfies the Azure DNS label pattern."""
    _check_pattern(config, accumulator, localization_context, Prop.INSTANCE_NAME_PREFIX,
                   plugin_config.instance_prefix_pattern, CONSTANTS.INSTANCE_NAME_PREFIX_MSG)


# ==========================================
# 2. Remote Existence Checks
# ==========================================

def _check_exists(
    lookup_call: Callable[[], LookupResult],
    accumulator: ConditionAccumulator,
    localization_context: LocalizationContext,
    token: Prop,
    not_found_template: str,
    args: Sequence[Any]
) -> None:
    """
    Run one lookup and report its failure, if any.

    COMMUNICATION maps to the generic communication message (formatted with
    the primary name); NOT_FOUND and MALFORMED both map to the resource's
    "does not exist" message.
    """
    result = lookup_call()
    if result.ok:
        logger.debug(f"Found {token.config_key} '{args[0]}'")
        return

    if result.failure is LookupFailureClass.COMMUNICATION:
        _report(accumulator, token, localization_context, CONSTANTS.COMMUNICATION_MSG, args[0])
    else:
        _report(accumulator, token, localization_context, not_found_template, *args)


def check_resource_group(
    config: ConfigurationSource,
    accumulator: ConditionAccumulator,
    localization_context: LocalizationContext,
    lookup: ResourceLookup
) -> None:
    """Check that the compute Resource Group exists in Azure."""
    rg_name = config.get_configuration_value(Prop.COMPUTE_RESOURCE_GROUP, localization_context)

    _check_exists(lambda: lookup.resource_group(rg_name), accumulator, localization_context,
                  Prop.COMPUTE_RESOURCE_GROUP, CONSTANTS.RESOURCE_GROUP_MSG, (rg_name,))


def check_virtual_network_resource_group(
    config: ConfigurationSource,
    accumulator: ConditionAccumulator,
    localization_context: LocalizationContext,
    lookup: ResourceLookup
) -> None:
    """
    Check that the Virtual Network Resource Group exists in Azure.

    This Resource Group defines where to look for the Virtual Network.
    """
    vnrg_name = config.get_configuration_value(
        Prop.VIRTUAL_NETWORK_RESOURCE_GROUP, localization_context)

    _check_exists(lambda: lookup.resource_group(vnrg_name), accumulator, localization_context,
                  Prop.VIRTUAL_NETWORK_RESOURCE_GROUP,
                  CONSTANTS.VIRTUAL_NETWORK_RESOURCE_GROUP_MSG, (vnrg_name,))


def check_virtual_network(
    config: ConfigurationSource,
    accumulator: ConditionAccumulator,
    localization_context: LocalizationContext,
    lookup: ResourceLookup
) -> None:
    """Check that the Virtual Network exists within its Resource Group."""
    vn_name = config.get_configuration_value(Prop.VIRTUAL_NETWORK, localization_context)
    vnrg_name = config.get_configuration_value(
        Prop.VIRTUAL_NETWORK_RESOURCE_GROUP, localization_context)

    _check_exists(lambda: lookup.virtual_network(vnrg_name, vn_name), accumulator,
                  localization_context, Prop.VIRTUAL_NETWORK,
                  CONSTANTS.VIRTUAL_NETWORK_MSG, (vn_name, vnrg_name))


def check_subnet(
    config: ConfigurationSource,
    accumulator: ConditionAccumulator,
    localization_context: LocalizationContext,
    lookup: ResourceLookup
) -> None:
    """Check that the subnet exists under the Virtual Network."""
    vn_name = config.get_configuration_value(Prop.VIRTUAL_NETWORK, localization_context)
    vnrg_name = config.get_configuration_value(
        Prop.VIRTUAL_NETWORK_RESOURCE_GROUP, localization_context)
    subnet_name = config.get_configuration_value(Prop.SUBNET_NAME, localization_context)

    _check_exists(lambda: lookup.subnet(vnrg_name, vn_name, subnet_name), accumulator,
                  localization_context, Prop.SUBNET_NAME,
                  CONSTANTS.SUBNET_MSG, (subnet_name, vn_name))


def check_network_security_group_resource_group(
    config: ConfigurationSource,
    accumulator: ConditionAccumulator,
    localization_context: LocalizationContext,
    lookup: ResourceLookup
) -> None:
    """
    Check that the Network Security Group Resource Group exists in Azure.

    This Resource Group defines where to look for the Network Security Group.
    """
    nsgrg_name = config.get_configuration_value(
        Prop.NETWORK_SECURITY_GROUP_RESOURCE_GROUP, localization_context)

    _check_exists(lambda: lookup.resource_group(nsgrg_name), accumulator, localization_context,
                  Prop.NETWORK_SECURITY_GROUP_RESOURCE_GROUP,
                  CONSTANTS.NETWORK_SECURITY_GROUP_RESOURCE_GROUP_MSG, (nsgrg_name,))


def check_network_security_group(
    config: ConfigurationSource,
    accumulator: ConditionAccumulator,
    localization_context: LocalizationContext,
    lookup: ResourceLookup
) -> None:
    """Check that the Network Security Group exists within its Resource Group."""
    nsg_name = config.get_configuration_value(Prop.NETWORK_SECURITY_GROUP, localization_context)
    nsgrg_name = config.get_configuration_value(
        Prop.NETWORK_SECURITY_GROUP_RESOURCE_GROUP, localization_context)

    _check_exists(lambda: lookup.network_security_group(nsgrg_name, nsg_name), accumulator,
                  localization_context, Prop.NETWORK_SECURITY_GROUP,
                  CONSTANTS.NETWORK_SECURITY_GROUP_MSG, (nsg_name, nsgrg_name))


def check_availability_set(
    config: ConfigurationSource,
    accumulator: ConditionAccumulator,
    localization_context: LocalizationContext,
    lookup: ResourceLookup
) -> None:
    """Check that the Availability Set exists in the compute Resource Group."""
    as_name = config.get_configuration_value(Prop.AVAILABILITY_SET, localization_context)
    compute_rg_name = config.get_configuration_value(
        Prop.COMPUTE_RESOURCE_GROUP, localization_context)

    _check_exists(lambda: lookup.availability_set(compute_rg_name, as_name), accumulator,
                  localization_context, Prop.AVAILABILITY_SET,
                  CONSTANTS.AVAILABILITY_SET_MSG, (as_name,))


# ==========================================
# 3. VM Image Check
# ==========================================

IMAGE_FAILURE_MESSAGES = {
    LookupFailureClass.COMMUNICATION: CONSTANTS.COMMUNICATION_MSG,
    LookupFailureClass.MALFORMED: CONSTANTS.MALFORMED_ARGUMENT_MSG,
    LookupFailureClass.NOT_FOUND: CONSTANTS.IMAGE_MISSING_IN_AZURE_MSG,
}


def check_vm_image(
    config: ConfigurationSource,
    accumulator: ConditionAccumulator,
    localization_context: LocalizationContext,
    lookup: ResourceLookup,
    image_registry: ConfigurableImageRegistry,
    location: str
) -> None:
    """
    Check that the image is in the configurable image list and exists in the
    Azure Marketplace for the given location.

    A missing or incomplete registry entry is reported without calling Azure.
    """
    image_name = config.get_configuration_value(Prop.IMAGE, localization_context)

    try:
        image_info = image_registry.get(image_name)
    except ImageMissingError:
        _report(accumulator, Prop.IMAGE, localization_context,
                CONSTANTS.IMAGE_MISSING_IN_CONFIG_MSG, image_name)
        return
    except ImageConfigIncompleteError as e:
        logger.debug(e.message)
        _report(accumulator, Prop.IMAGE, localization_context,
                CONSTANTS.IMAGE_CFG_MISSING_REQUIRED_FIELD_MSG, image_name)
        return

    # Insufficient read permission on the subscription surfaces as MALFORMED
    result = lookup.marketplace_image(location, image_info)
    if result.ok:
        logger.debug(f"Found marketplace image '{image_info}' in {location}")
        return

    _report(accumulator, Prop.IMAGE, localization_context,
            IMAGE_FAILURE_MESSAGES[result.failure], str(image_info))
