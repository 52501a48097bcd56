"""
Azure credentials and lookup acquisition.

AzureCredentials implements the LookupProvider protocol. Every call to
get_resource_lookup() builds a new azure-identity credential and new
management clients, so a validation run never reuses a token acquired for
an earlier one.

Usage:
    credentials = AzureCredentials.from_dict({
        "azure_subscription_id": "...",
        "azure_tenant_id": "...",
        "azure_client_id": "...",
        "azure_client_secret": "...",
    })
    lookup = credentials.get_resource_lookup()
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, TYPE_CHECKING

from azure_template_validator.core.exceptions import ConfigurationError
from .lookup import AzureResourceLookup

if TYPE_CHECKING:
    from azure_template_validator.settings import ValidatorSettings

logger = logging.getLogger(__name__)

MANAGEMENT_SCOPE = "https://management.azure.com/.default"


@dataclass(frozen=True)
class AzureCredentials:
    """
    Service principal (or ambient identity) used to query Azure.

    When tenant_id, client_id and client_secret are all set a
    ClientSecretCredential is used; otherwise DefaultAzureCredential picks up
    environment, managed identity or CLI login.
    """
    subscription_id: str
    tenant_id: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = field(default=None, repr=False)

    def __post_init__(self):
        if not self.subscription_id:
            raise ConfigurationError(
                "Missing required credential 'azure_subscription_id'. "
                "Azure subscription ID must be provided."
            )

    @classmethod
    def from_dict(cls, credentials: Mapping[str, Any]) -> 'AzureCredentials':
        """
        Build from a credentials dictionary.

        Args:
            credentials: Dictionary with:
                - azure_subscription_id: Azure subscription ID (REQUIRED)
                - azure_tenant_id: Azure AD tenant ID (optional)
                - azure_client_id: Service principal client ID (optional)
                - azure_client_secret: Service principal secret (optional)

        Raises:
            ConfigurationError: If azure_subscription_id is missing
        """
        return cls(
            subscription_id=credentials.get("azure_subscription_id") or "",
            tenant_id=credentials.get("azure_tenant_id"),
            client_id=credentials.get("azure_client_id"),
            client_secret=credentials.get("azure_client_secret"),
        )

    @classmethod
    def from_settings(cls, settings: 'ValidatorSettings') -> 'AzureCredentials':
        return cls(
            subscription_id=settings.subscription_id,
            tenant_id=settings.tenant_id,
            client_id=settings.client_id,
            client_secret=settings.client_secret,
        )

    @property
    def uses_service_principal(self) -> bool:
        return bool(self.tenant_id and self.client_id and self.client_secret)

    def _get_credential(self) -> Any:
        """Get a new Azure credential for SDK clients."""
        from azure.identity import DefaultAzureCredential, ClientSecretCredential

        if self.uses_service_principal:
            return ClientSecretCredential(
                tenant_id=self.tenant_id,
                client_id=self.client_id,
                client_secret=self.client_secret
            )
        return DefaultAzureCredential()

    def get_resource_lookup(self) -> AzureResourceLookup:
        """
        Create a fresh credential and the management clients the lookup needs.

        A token is requested up front, so authentication failures raise from
        this call.

        Raises:
            azure.core.exceptions.ClientAuthenticationError: If no token can be acquired
        """
        from azure.mgmt.resource import ResourceManagementClient
        from azure.mgmt.network import NetworkManagementClient
        from azure.mgmt.compute import ComputeManagementClient

        credential = self._get_credential()
        credential.get_token(MANAGEMENT_SCOPE)
        subscription_id = self.subscription_id
        logger.debug(f"Acquired Azure credential for subscription {subscription_id}")

        return AzureResourceLookup(
            resource_client=ResourceManagementClient(credential=credential, subscription_id=subscription_id),
            network_client=NetworkManagementClient(credential=credential, subscription_id=subscription_id),
            compute_client=ComputeManagementClient(credential=credential, subscription_id=subscription_id),
        )
