"""
Azure compute instance template validator.

Checks that an instance template (VM size, network, resource groups, image,
naming) refers to resources that exist in an Azure subscription before
provisioning is attempted. Every problem found is reported in one pass
through a ConditionAccumulator.

Usage:
    from azure_template_validator import (
        InstanceTemplateValidator, ConditionAccumulator, LocalizationContext,
        SimpleConfiguration, AzureCredentials,
    )
    from azure_template_validator.core.config_loader import (
        load_plugin_config, load_configurable_images
    )

    validator = InstanceTemplateValidator(
        plugin_config=load_plugin_config(Path("azure-plugin.json")),
        image_registry=load_configurable_images(Path("images.json")),
        lookup_provider=AzureCredentials.from_dict(credentials),
        location="westus",
    )
    accumulator = ConditionAccumulator()
    validator.validate("worker", SimpleConfiguration(values), accumulator, LocalizationContext())
"""

from .constants import InstanceTemplateProperty
from .core import (
    ConditionAccumulator,
    FailureRecord,
    LocalizationContext,
    LookupFailureClass,
    LookupResult,
    PluginConfig,
    SimpleConfiguration,
    InstanceTemplate,
    ConfigurationError,
    InstanceTemplateValidationError,
)
from .validation import InstanceTemplateValidator, ConfigurableImageRegistry, VmImageInfo
from .providers.azure import AzureCredentials, AzureResourceLookup

__version__ = "1.0.0"

__all__ = [
    "InstanceTemplateProperty",
    "ConditionAccumulator",
    "FailureRecord",
    "LocalizationContext",
    "LookupFailureClass",
    "LookupResult",
    "PluginConfig",
    "SimpleConfiguration",
    "InstanceTemplate",
    "ConfigurationError",
    "InstanceTemplateValidationError",
    "InstanceTemplateValidator",
    "ConfigurableImageRegistry",
    "VmImageInfo",
    "AzureCredentials",
    "AzureResourceLookup",
]
