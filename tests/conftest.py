import pytest
from unittest.mock import MagicMock

from azure_template_validator.constants import InstanceTemplateProperty as Prop
from azure_template_validator.core.accumulator import ConditionAccumulator
from azure_template_validator.core.context import LocalizationContext, PluginConfig, SimpleConfiguration
from azure_template_validator.core.results import LookupResult
from azure_template_validator.validation.images import ConfigurableImageRegistry
from azure_template_validator.validation.validator import InstanceTemplateValidator

LOOKUP_METHODS = [
    "resource_group",
    "virtual_network",
    "subnet",
    "network_security_group",
    "availability_set",
    "marketplace_image",
]


@pytest.fixture(scope="function", autouse=True)
def clear_validator_env(monkeypatch):
    """Drop AZURE_VALIDATOR_* variables so settings tests see only what they set."""
    import os
    for key in list(os.environ):
        if key.startswith("AZURE_VALIDATOR_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def plugin_config():
    """Plugin config with two supported sizes and lower-case DNS patterns."""
    return PluginConfig(
        supported_instances=("STANDARD_DS12_V2", "STANDARD_DS13_V2", "STANDARD_DS14"),
        instance_prefix_regex=r"^[a-z][a-z0-9-]{0,14}$",
        fqdn_suffix_regex=r"^([a-z0-9-]+\.)*[a-z0-9-]+$",
    )


@pytest.fixture
def image_registry():
    return ConfigurableImageRegistry({
        "cloudera-centos-72-latest": {
            "publisher": "cloudera",
            "offer": "cloudera-centos-os",
            "sku": "7_2",
            "version": "latest",
        },
        "no-version-image": {
            "publisher": "cloudera",
            "offer": "cloudera-centos-os",
            "sku": "6_8",
        },
    })


@pytest.fixture
def template_values():
    """Property values of a template where every check passes against a healthy lookup."""
    return {
        Prop.VMSIZE.config_key: "STANDARD_DS14",
        Prop.COMPUTE_RESOURCE_GROUP.config_key: "compute-rg",
        Prop.VIRTUAL_NETWORK.config_key: "vnet",
        Prop.VIRTUAL_NETWORK_RESOURCE_GROUP.config_key: "network-rg",
        Prop.SUBNET_NAME.config_key: "default",
        Prop.NETWORK_SECURITY_GROUP.config_key: "nsg",
        Prop.NETWORK_SECURITY_GROUP_RESOURCE_GROUP.config_key: "nsg-rg",
        Prop.AVAILABILITY_SET.config_key: "as-workers",
        Prop.HOST_FQDN_SUFFIX.config_key: "cdh-cluster.internal",
        Prop.INSTANCE_NAME_PREFIX.config_key: "director",
        Prop.IMAGE.config_key: "cloudera-centos-72-latest",
    }


@pytest.fixture
def config(template_values):
    return SimpleConfiguration(template_values)


@pytest.fixture
def localization_context():
    return LocalizationContext()


@pytest.fixture
def accumulator():
    return ConditionAccumulator()


@pytest.fixture
def make_lookup():
    """
    Factory for a fake ResourceLookup.

    Every method returns a successful LookupResult unless overridden, e.g.
    make_lookup(subnet=LookupResult.not_found()).
    """
    def _make(**overrides):
        lookup = MagicMock()
        for method in LOOKUP_METHODS:
            result = overrides.get(method, LookupResult.found(MagicMock(name=method)))
            getattr(lookup, method).return_value = result
        return lookup
    return _make


@pytest.fixture
def mock_lookup(make_lookup):
    return make_lookup()


@pytest.fixture
def mock_lookup_provider(mock_lookup):
    provider = MagicMock()
    provider.get_resource_lookup.return_value = mock_lookup
    return provider


@pytest.fixture
def validator(plugin_config, image_registry, mock_lookup_provider):
    return InstanceTemplateValidator(
        plugin_config=plugin_config,
        image_registry=image_registry,
        lookup_provider=mock_lookup_provider,
        location="westus",
    )
