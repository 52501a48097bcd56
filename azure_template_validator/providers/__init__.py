"""
Cloud adapters implementing the lookup protocols from core.protocols.

    providers/
    ├── __init__.py         # This file
    └── azure/
        ├── credentials.py  # AzureCredentials (LookupProvider)
        └── lookup.py       # AzureResourceLookup (ResourceLookup)
"""
