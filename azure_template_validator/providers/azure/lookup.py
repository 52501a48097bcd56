"""
Azure SDK implementation of the ResourceLookup protocol.

Each lookup is a single management-plane GET. SDK exceptions are turned
into LookupResult failure classes here, so nothing above this module needs
to know about azure.core.exceptions:

    ServiceRequestError / ServiceResponseError       -> COMMUNICATION
    ResourceNotFoundError                            -> NOT_FOUND
    HTTP 400/403 (bad argument, AuthorizationFailed) -> MALFORMED
    any other HttpResponseError                      -> NOT_FOUND
    ValueError (SDK argument validation)             -> MALFORMED

ClientAuthenticationError and any other exception propagate; the validator
reports them as a generic failure.

SDK Clients Used:
    - ResourceManagementClient: Resource Groups
    - NetworkManagementClient: Virtual Networks, Subnets, Network Security Groups
    - ComputeManagementClient: Availability Sets, Marketplace VM images
"""

import logging
from typing import Any, Callable

from azure.core.exceptions import (
    ClientAuthenticationError,
    HttpResponseError,
    ResourceNotFoundError,
    ServiceRequestError,
    ServiceResponseError,
)

from azure_template_validator.constants import LATEST_IMAGE_VERSION
from azure_template_validator.core.results import LookupResult
from azure_template_validator.validation.images import VmImageInfo

logger = logging.getLogger(__name__)

MALFORMED_STATUS_CODES = (400, 403)


class AzureResourceLookup:
    """
    ResourceLookup backed by Azure management clients.

    Instances are created by AzureCredentials.get_resource_lookup() and are
    meant to live for a single validation run.
    """

    def __init__(self, resource_client: Any, network_client: Any, compute_client: Any):
        self._resource_client = resource_client
        self._network_client = network_client
        self._compute_client = compute_client

    def _lookup(self, description: str, call: Callable[[], Any]) -> LookupResult:
        try:
            resource = call()
        except (ServiceRequestError, ServiceResponseError) as e:
            logger.warning(f"Connection error looking up {description}: {e}")
            return LookupResult.communication_error(str(e))
        except ResourceNotFoundError as e:
            logger.info(f"✗ {description} not found")
            return LookupResult.not_found(str(e))
        except ClientAuthenticationError:
            # Handled by the validator as a generic failure
            raise
        except HttpResponseError as e:
            if e.status_code in MALFORMED_STATUS_CODES:
                logger.warning(f"Azure rejected lookup of {description} ({e.status_code}): {e}")
                return LookupResult.malformed_argument(str(e))
            logger.info(f"✗ {description} not available ({e.status_code})")
            return LookupResult.not_found(str(e))
        except ValueError as e:
            logger.warning(f"Invalid argument looking up {description}: {e}")
            return LookupResult.malformed_argument(str(e))

        logger.debug(f"✓ {description} exists")
        return LookupResult.found(resource)

    def resource_group(self, name: str) -> LookupResult:
        return self._lookup(
            f"resource group '{name}'",
            lambda: self._resource_client.resource_groups.get(name)
        )

    def virtual_network(self, resource_group: str, name: str) -> LookupResult:
        return self._lookup(
            f"virtual network '{resource_group}/{name}'",
            lambda: self._network_client.virtual_networks.get(resource_group, name)
        )

    def subnet(self, resource_group: str, virtual_network: str, name: str) -> LookupResult:
        return self._lookup(
            f"subnet '{resource_group}/{virtual_network}/{name}'",
            lambda: self._network_client.subnets.get(resource_group, virtual_network, name)
        )

    def network_security_group(self, resource_group: str, name: str) -> LookupResult:
        return self._lookup(
            f"network security group '{resource_group}/{name}'",
            lambda: self._network_client.network_security_groups.get(resource_group, name)
        )

    def availability_set(self, resource_group: str, name: str) -> LookupResult:
        return self._lookup(
            f"availability set '{resource_group}/{name}'",
            lambda: self._compute_client.availability_sets.get(resource_group, name)
        )

    def marketplace_image(self, location: str, image_info: VmImageInfo) -> LookupResult:
        """
        Look up a marketplace image in a region.

        A version of "latest" cannot be fetched directly, so the available
        versions are listed instead and an empty listing counts as not found.
        """
        images = self._compute_client.virtual_machine_images
        description = f"marketplace image '{image_info}' in {location}"

        if image_info.version.lower() == LATEST_IMAGE_VERSION:
            result = self._lookup(description, lambda: list(images.list(
                location=location,
                publisher_name=image_info.publisher,
                offer=image_info.offer,
                skus=image_info.sku,
            )))
            if result.ok and not result.resource:
                logger.info(f"✗ {description} has no published versions")
                return LookupResult.not_found(f"No versions published for {image_info}")
            return result

        return self._lookup(description, lambda: images.get(
            location=location,
            publisher_name=image_info.publisher,
            offer=image_info.offer,
            skus=image_info.sku,
            version=image_info.version,
        ))
