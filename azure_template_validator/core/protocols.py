"""
Protocol definitions for the instance template validator.

This module defines the abstract interfaces (Protocols) the validator talks
to. The validator never imports the Azure SDK; it only depends on these
shapes, so tests can hand it fakes and the Azure adapter in
providers.azure can be swapped out.

    - ConfigurationSource: read access to the template's property values
    - ResourceLookup: existence checks against the cloud account
    - LookupProvider: hands out a fresh ResourceLookup per validation run

Why Protocols instead of ABC?
    - No explicit inheritance required (duck typing)
    - MagicMock-based fakes satisfy them without subclassing
    - Runtime checking with @runtime_checkable decorator
"""

from typing import Protocol, runtime_checkable, TYPE_CHECKING

if TYPE_CHECKING:
    from azure_template_validator.constants import InstanceTemplateProperty
    from azure_template_validator.validation.images import VmImageInfo
    from .context import LocalizationContext
    from .results import LookupResult


@runtime_checkable
class ConfigurationSource(Protocol):
    """Read-only view over a template's configuration values."""

    def get_configuration_value(
        self,
        token: 'InstanceTemplateProperty',
        localization_context: 'LocalizationContext'
    ) -> str:
        ...


@runtime_checkable
class ResourceLookup(Protocol):
    """
    Protocol defining existence lookups against a cloud account.

    Every method returns a LookupResult. Expected failures (connection
    problems, missing resources, rejected arguments) are reported through
    the result's failure class; anything else may propagate as an exception
    and is handled by the validator as a generic failure.
    """

    def resource_group(self, name: str) -> 'LookupResult':
        """Look up a resource group by name."""
        ...

    def virtual_network(self, resource_group: str, name: str) -> 'LookupResult':
        """Look up a virtual network inside a resource group."""
        ...

    def subnet(self, resource_group: str, virtual_network: str, name: str) -> 'LookupResult':
        """Look up a subnet of a virtual network inside a resource group."""
        ...

    def network_security_group(self, resource_group: str, name: str) -> 'LookupResult':
        """Look up a network security group inside a resource group."""
        ...

    def availability_set(self, resource_group: str, name: str) -> 'LookupResult':
        """Look up an availability set inside a resource group."""
        ...

    def marketplace_image(self, location: str, image_info: 'VmImageInfo') -> 'LookupResult':
        """Look up a marketplace VM image in the given region."""
        ...


@runtime_checkable
class LookupProvider(Protocol):
    """
    Source of ResourceLookup instances.

    get_resource_lookup() is called once per validate() call. Implementations
    must return a lookup with freshly acquired authorization, because a token
    cached across validation runs may have expired. Acquisition may raise
    (e.g. invalid or expired credentials).
    """

    def get_resource_lookup(self) -> ResourceLookup:
        ...
