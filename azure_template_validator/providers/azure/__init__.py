"""
Azure adapter package.

Provides the azure-identity / azure-mgmt backed implementations of the
LookupProvider and ResourceLookup protocols.
"""

from .credentials import AzureCredentials
from .lookup import AzureResourceLookup

__all__ = ["AzureCredentials", "AzureResourceLookup"]
