"""
Core abstractions for the instance template validator.

Modules:
    protocols: Interface definitions (ConfigurationSource, ResourceLookup, LookupProvider)
    context: LocalizationContext, SimpleConfiguration, InstanceTemplate, PluginConfig
    results: LookupResult tagged result and LookupFailureClass
    accumulator: FailureRecord and ConditionAccumulator
    config_loader: JSON loading of plugin config and configurable images
    exceptions: Custom exception types
"""

from .exceptions import (
    ValidatorError,
    ConfigurationError,
    ImageRegistryError,
    ImageMissingError,
    ImageConfigIncompleteError,
    InstanceTemplateValidationError,
)
from .protocols import ConfigurationSource, ResourceLookup, LookupProvider
from .results import LookupFailureClass, LookupResult
from .context import LocalizationContext, SimpleConfiguration, InstanceTemplate, PluginConfig
from .accumulator import ConditionAccumulator, FailureRecord, Severity

__all__ = [
    # Protocols
    "ConfigurationSource",
    "ResourceLookup",
    "LookupProvider",
    # Results
    "LookupFailureClass",
    "LookupResult",
    # Context
    "LocalizationContext",
    "SimpleConfiguration",
    "InstanceTemplate",
    "PluginConfig",
    # Accumulator
    "ConditionAccumulator",
    "FailureRecord",
    "Severity",
    # Exceptions
    "ValidatorError",
    "ConfigurationError",
    "ImageRegistryError",
    "ImageMissingError",
    "ImageConfigIncompleteError",
    "InstanceTemplateValidationError",
]
