"""
Environment-driven settings.

Values are read from environment variables prefixed with AZURE_VALIDATOR_
(or a .env file), e.g. AZURE_VALIDATOR_SUBSCRIPTION_ID.

Usage:
    from azure_template_validator.settings import ValidatorSettings, build_validator

    validator = build_validator(ValidatorSettings())
"""

from typing import Optional, TYPE_CHECKING

from pydantic_settings import BaseSettings, SettingsConfigDict

from azure_template_validator.constants import SETTINGS_ENV_PREFIX

if TYPE_CHECKING:
    from azure_template_validator.validation.validator import InstanceTemplateValidator


class ValidatorSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix=SETTINGS_ENV_PREFIX,
        env_file=".env",
        extra="ignore",
    )

    # Azure service principal (client id/secret/tenant optional: DefaultAzureCredential fallback)
    subscription_id: str = ""
    tenant_id: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None

    # Region marketplace images are checked in
    location: str = "westus"

    # Static inputs
    plugin_config_path: str = "azure-plugin.json"
    images_config_path: str = "images.json"

    # "DEBUG" enables debug logging
    mode: str = "PRODUCTION"

    @property
    def debug_mode(self) -> bool:
        return self.mode.upper() == "DEBUG"


def build_validator(settings: ValidatorSettings) -> 'InstanceTemplateValidator':
    """
    Wire loaders, credentials and validator together from settings.

    Raises:
        ConfigurationError: If a config file is invalid or the subscription id is missing
    """
    from pathlib import Path
    from azure_template_validator.core.config_loader import (
        load_plugin_config, load_configurable_images
    )
    from azure_template_validator.providers.azure import AzureCredentials
    from azure_template_validator.validation.validator import InstanceTemplateValidator

    return InstanceTemplateValidator(
        plugin_config=load_plugin_config(Path(settings.plugin_config_path)),
        image_registry=load_configurable_images(Path(settings.images_config_path)),
        lookup_provider=AzureCredentials.from_settings(settings),
        location=settings.location,
    )
