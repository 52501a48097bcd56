"""
Configuration context classes.

The host hands the validator an opaque, read-only configuration plus a
localization context. This module provides the concrete shapes used by the
validator and by tests:

    - LocalizationContext: locale + key prefix used to scope failure records
    - SimpleConfiguration: mapping-backed ConfigurationSource
    - InstanceTemplate: named template bundling configuration and tags
    - PluginConfig: supported VM sizes and naming patterns

Usage:
    from azure_template_validator.core.context import SimpleConfiguration

    config = SimpleConfiguration({"type": "Standard_DS14", "image": "centos"})
    config.get_configuration_value(InstanceTemplateProperty.VMSIZE, LocalizationContext())
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from azure_template_validator.constants import (
    InstanceTemplateProperty,
    DEFAULT_LOCALE,
    AZURE_CONFIG_INSTANCE_SUPPORTED,
    AZURE_CONFIG_INSTANCE_DNS_LABEL_REGEX,
    AZURE_CONFIG_INSTANCE_FQDN_SUFFIX_REGEX,
    REQUIRED_PLUGIN_CONFIG_FIELDS,
)
from .exceptions import ConfigurationError
from .protocols import ConfigurationSource


@dataclass(frozen=True)
class LocalizationContext:
    """
    Locale and key prefix of the host form the configuration came from.

    The prefix is prepended to config keys when failure records are created,
    so the host can attach each record to the right form field.

    Attributes:
        locale: Locale identifier (e.g. "en_US")
        key_prefix: Dotted prefix for config keys; empty for the root context
    """
    locale: str = DEFAULT_LOCALE
    key_prefix: str = ""

    def localize_key(self, key: str) -> str:
        if not self.key_prefix:
            return key
        return f"{self.key_prefix}.{key}"

    def child(self, suffix: str) -> 'LocalizationContext':
        """Derive a nested context, e.g. root -> "template" -> "template.network"."""
        return LocalizationContext(self.locale, self.localize_key(suffix))


class SimpleConfiguration:
    """
    Read-only ConfigurationSource backed by a plain mapping.

    Keys are the properties' config keys ("type", "computeResourceGroup", ...).
    Missing properties read as an empty string.
    """

    def __init__(self, values: Optional[Mapping[str, str]] = None):
        self._values: Dict[str, str] = dict(values or {})

    def get_configuration_value(
        self,
        token: InstanceTemplateProperty,
        localization_context: LocalizationContext
    ) -> str:
        return self._values.get(token.config_key, "")

    def __repr__(self) -> str:
        return f"SimpleConfiguration({self._values!r})"


@dataclass
class InstanceTemplate:
    """
    An Azure compute instance template as submitted by the host.

    Attributes:
        name: Template name (used in logs)
        configuration: Source of the template's property values
        tags: Free-form instance tags
        localization_context: Context used to scope failure records
    """
    name: str
    configuration: ConfigurationSource
    tags: Dict[str, str] = field(default_factory=dict)
    localization_context: LocalizationContext = field(default_factory=LocalizationContext)

    def get_configuration_value(self, token: InstanceTemplateProperty) -> str:
        return self.configuration.get_configuration_value(token, self.localization_context)


@dataclass(frozen=True)
class PluginConfig:
    """
    The "provider" section of the plugin config.

    Attributes:
        supported_instances: VM sizes the plugin accepts (exact, case-sensitive)
        instance_prefix_regex: Pattern the instance name prefix must contain a match for
        fqdn_suffix_regex: Pattern the host FQDN suffix must contain a match for
    """
    supported_instances: Tuple[str, ...]
    instance_prefix_regex: str
    fqdn_suffix_regex: str

    def __post_init__(self):
        for key, regex in (
            (AZURE_CONFIG_INSTANCE_DNS_LABEL_REGEX, self.instance_prefix_regex),
            (AZURE_CONFIG_INSTANCE_FQDN_SUFFIX_REGEX, self.fqdn_suffix_regex),
        ):
            try:
                re.compile(regex)
            except (re.error, TypeError) as e:
                raise ConfigurationError(f"Invalid regular expression for '{key}': {e}")

    @property
    def instance_prefix_pattern(self) -> 're.Pattern[str]':
        return re.compile(self.instance_prefix_regex)

    @property
    def fqdn_suffix_pattern(self) -> 're.Pattern[str]':
        return re.compile(self.fqdn_suffix_regex)

    @classmethod
    def from_dict(cls, section: Mapping[str, Any]) -> 'PluginConfig':
        """
        Build from the parsed "provider" section.

        Raises:
            ConfigurationError: If a required key is missing or has the wrong type
        """
        missing = [k for k in REQUIRED_PLUGIN_CONFIG_FIELDS if k not in section]
        if missing:
            raise ConfigurationError(
                f"Missing required plugin config fields: {', '.join(missing)}"
            )

        supported = section[AZURE_CONFIG_INSTANCE_SUPPORTED]
        if not isinstance(supported, list) or not all(isinstance(s, str) for s in supported):
            raise ConfigurationError(
                f"'{AZURE_CONFIG_INSTANCE_SUPPORTED}' must be a list of strings"
            )

        return cls(
            supported_instances=tuple(supported),
            instance_prefix_regex=section[AZURE_CONFIG_INSTANCE_DNS_LABEL_REGEX],
            fqdn_suffix_regex=section[AZURE_CONFIG_INSTANCE_FQDN_SUFFIX_REGEX],
        )
