"""
Configuration loading utilities.

This module loads the two static inputs of the validator from JSON files:

    1. Plugin config - the "provider" section with supported VM sizes and
       the naming regular expressions
    2. Configurable images - logical image name -> marketplace descriptor

Both are loaded once, before any validation runs.

Usage:
    from azure_template_validator.core.config_loader import (
        load_plugin_config, load_configurable_images
    )

    plugin_config = load_plugin_config(Path("azure-plugin.json"))
    images = load_configurable_images(Path("images.json"))
"""

import json
from pathlib import Path
from typing import Any, Dict, TYPE_CHECKING

from azure_template_validator.constants import PLUGIN_CONFIG_PROVIDER_SECTION
from .context import PluginConfig
from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from azure_template_validator.validation.images import ConfigurableImageRegistry


def _load_json_file(file_path: Path) -> Dict[str, Any]:
    """
    Load a JSON file that must contain an object.

    Raises:
        ConfigurationError: If the file is missing, has invalid JSON or is not an object
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise ConfigurationError(
            f"Required configuration file not found: {file_path.name}",
            config_file=str(file_path)
        )

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            content = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in configuration file: {e}",
            config_file=str(file_path)
        )

    if not isinstance(content, dict):
        raise ConfigurationError(
            "Configuration file must contain a JSON object",
            config_file=str(file_path)
        )
    return content


def load_plugin_config(file_path: Path) -> PluginConfig:
    """
    Load the plugin config.

    The file may either be the full plugin config (the "provider" section is
    picked out) or the provider section on its own.

    Example file:
        {
            "provider": {
                "supported-instances": ["STANDARD_DS12_V2", "STANDARD_DS13_V2"],
                "instance-prefix-regex": "^[a-z][a-z0-9-]{1,15}$",
                "dns-fqdn-suffix-regex": "^([a-z0-9-]+\\\\.)*[a-z0-9-]+$"
            }
        }

    Raises:
        ConfigurationError: If the file or a required field is missing or invalid
    """
    content = _load_json_file(file_path)
    section = content.get(PLUGIN_CONFIG_PROVIDER_SECTION, content)
    if not isinstance(section, dict):
        raise ConfigurationError(
            f"'{PLUGIN_CONFIG_PROVIDER_SECTION}' section must be a JSON object",
            config_file=str(file_path)
        )

    try:
        return PluginConfig.from_dict(section)
    except ConfigurationError as e:
        raise ConfigurationError(e.message, config_file=str(file_path)) from e


def load_configurable_images(file_path: Path) -> 'ConfigurableImageRegistry':
    """
    Load the configurable images file into a registry.

    Entries are not checked here; an incomplete entry is reported by the
    image check of the templates that reference it.

    Example file:
        {
            "cloudera-centos-72-latest": {
                "publisher": "cloudera",
                "offer": "cloudera-centos-os",
                "sku": "7_2",
                "version": "latest"
            }
        }
    """
    from azure_template_validator.validation.images import ConfigurableImageRegistry

    return ConfigurableImageRegistry(_load_json_file(file_path))
