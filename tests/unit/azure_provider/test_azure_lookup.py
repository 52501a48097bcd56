"""
Tests for AzureResourceLookup.

The management clients are MagicMocks; each test makes the relevant SDK
operation return a resource or raise an azure.core exception and checks the
LookupResult failure class it is mapped to.
"""

import pytest
from unittest.mock import MagicMock

from azure.core.exceptions import (
    ClientAuthenticationError,
    HttpResponseError,
    ResourceNotFoundError,
    ServiceRequestError,
    ServiceResponseError,
)

from azure_template_validator import constants as CONSTANTS
from azure_template_validator.core.results import LookupFailureClass
from azure_template_validator.providers.azure.lookup import AzureResourceLookup
from azure_template_validator.validation.images import VmImageInfo
from azure_template_validator.validation.validator import InstanceTemplateValidator


def _http_error(status_code):
    error = HttpResponseError(message=f"status {status_code}")
    error.status_code = status_code
    return error


@pytest.fixture
def clients():
    return MagicMock(), MagicMock(), MagicMock()


@pytest.fixture
def lookup(clients):
    resource_client, network_client, compute_client = clients
    return AzureResourceLookup(resource_client, network_client, compute_client)


# ==========================================
# SDK call wiring
# ==========================================

class TestLookupCalls:

    def test_resource_group(self, lookup, clients):
        resource_client = clients[0]
        resource_client.resource_groups.get.return_value = "rg-object"

        result = lookup.resource_group("compute-rg")

        assert result.ok
        assert result.resource == "rg-object"
        resource_client.resource_groups.get.assert_called_once_with("compute-rg")

    def test_virtual_network(self, lookup, clients):
        network_client = clients[1]

        assert lookup.virtual_network("network-rg", "vnet").ok
        network_client.virtual_networks.get.assert_called_once_with("network-rg", "vnet")

    def test_subnet(self, lookup, clients):
        network_client = clients[1]

        assert lookup.subnet("network-rg", "vnet", "default").ok
        network_client.subnets.get.assert_called_once_with("network-rg", "vnet", "default")

    def test_network_security_group(self, lookup, clients):
        network_client = clients[1]

        assert lookup.network_security_group("nsg-rg", "nsg").ok
        network_client.network_security_groups.get.assert_called_once_with("nsg-rg", "nsg")

    def test_availability_set(self, lookup, clients):
        compute_client = clients[2]

        assert lookup.availability_set("compute-rg", "as-workers").ok
        compute_client.availability_sets.get.assert_called_once_with("compute-rg", "as-workers")


# ==========================================
# Exception classification
# ==========================================

class TestFailureClassification:

    @pytest.mark.parametrize("error,expected", [
        (ServiceRequestError("connection refused"), LookupFailureClass.COMMUNICATION),
        (ServiceResponseError("connection reset"), LookupFailureClass.COMMUNICATION),
        (ResourceNotFoundError("ResourceGroupNotFound"), LookupFailureClass.NOT_FOUND),
        (_http_error(400), LookupFailureClass.MALFORMED),
        (_http_error(403), LookupFailureClass.MALFORMED),
        (_http_error(404), LookupFailureClass.NOT_FOUND),
        (_http_error(500), LookupFailureClass.NOT_FOUND),
        (ValueError("resource_group_name must not be empty"), LookupFailureClass.MALFORMED),
    ])
    def test_sdk_exception_mapping(self, lookup, clients, error, expected):
        clients[0].resource_groups.get.side_effect = error

        result = lookup.resource_group("compute-rg")

        assert not result.ok
        assert result.failure is expected
        assert result.reason

    def test_unexpected_exception_propagates(self, lookup, clients):
        clients[1].subnets.get.side_effect = RuntimeError("SDK bug")

        with pytest.raises(RuntimeError, match="SDK bug"):
            lookup.subnet("network-rg", "vnet", "default")

    def test_authentication_error_propagates(self, lookup, clients):
        clients[0].resource_groups.get.side_effect = ClientAuthenticationError(
            "AADSTS7000222: The provided client secret keys are expired."
        )

        with pytest.raises(ClientAuthenticationError):
            lookup.resource_group("compute-rg")

    def test_expired_credential_gives_one_generic_record(self, clients, plugin_config,
                                                         image_registry, config, accumulator,
                                                         localization_context):
        """An authentication failure must not surface as per-resource 'does not exist' records."""
        expired = ClientAuthenticationError("AADSTS7000222: The provided client secret keys are expired.")
        for client in clients:
            for operations in ("resource_groups", "virtual_networks", "subnets",
                               "network_security_groups", "availability_sets"):
                getattr(client, operations).get.side_effect = expired
            client.virtual_machine_images.get.side_effect = expired
            client.virtual_machine_images.list.side_effect = expired

        provider = MagicMock()
        provider.get_resource_lookup.return_value = AzureResourceLookup(*clients)
        validator = InstanceTemplateValidator(plugin_config, image_registry, provider, "westus")

        validator.validate("worker", config, accumulator, localization_context)

        assert len(accumulator) == 1
        record = accumulator.records[0]
        assert record.key is None
        assert record.message == CONSTANTS.GENERIC_MSG
        assert isinstance(record.exception, ClientAuthenticationError)
        assert not any("does not exist" in r.message for r in accumulator)


# ==========================================
# Marketplace images
# ==========================================

class TestMarketplaceImage:

    def test_pinned_version_uses_get(self, lookup, clients):
        images = clients[2].virtual_machine_images
        info = VmImageInfo(publisher="cloudera", offer="cloudera-centos-os", sku="7_2", version="1.0.1")

        result = lookup.marketplace_image("westus", info)

        assert result.ok
        images.get.assert_called_once_with(
            location="westus",
            publisher_name="cloudera",
            offer="cloudera-centos-os",
            skus="7_2",
            version="1.0.1",
        )
        images.list.assert_not_called()

    def test_latest_version_lists_versions(self, lookup, clients):
        images = clients[2].virtual_machine_images
        images.list.return_value = iter([MagicMock(name="1.0.0"), MagicMock(name="1.0.1")])
        info = VmImageInfo(publisher="cloudera", offer="cloudera-centos-os", sku="7_2", version="latest")

        result = lookup.marketplace_image("westus", info)

        assert result.ok
        assert len(result.resource) == 2
        images.list.assert_called_once_with(
            location="westus",
            publisher_name="cloudera",
            offer="cloudera-centos-os",
            skus="7_2",
        )
        images.get.assert_not_called()

    def test_latest_with_no_versions_is_not_found(self, lookup, clients):
        clients[2].virtual_machine_images.list.return_value = iter([])
        info = VmImageInfo(publisher="cloudera", offer="cloudera-centos-os", sku="7_2", version="LATEST")

        result = lookup.marketplace_image("westus", info)

        assert result.failure is LookupFailureClass.NOT_FOUND

    def test_listing_failure_is_classified(self, lookup, clients):
        clients[2].virtual_machine_images.list.side_effect = ServiceRequestError("timeout")
        info = VmImageInfo(publisher="cloudera", offer="cloudera-centos-os", sku="7_2", version="latest")

        result = lookup.marketplace_image("westus", info)

        assert result.failure is LookupFailureClass.COMMUNICATION

    def test_unknown_sku_is_not_found(self, lookup, clients):
        clients[2].virtual_machine_images.get.side_effect = ResourceNotFoundError("Artifact not found")
        info = VmImageInfo(publisher="cloudera", offer="cloudera-centos-os", sku="9_9", version="1.0.0")

        result = lookup.marketplace_image("eastus", info)

        assert result.failure is LookupFailureClass.NOT_FOUND
