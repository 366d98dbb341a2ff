"""
Identity handling for Rackspace cloud APIs.
"""

from .authentication import (
    AccessInfo,
    ApiKeyCredentials,
    CatalogEntry,
    EntryEndpoint,
    KeystoneAuthenticator,
    PasswordCredentials,
    StaticTokenAuthenticator,
)
from .credential_provider import CredentialProvider, JsonCredentialProvider, credentials_from_record

__all__ = [
    "AccessInfo",
    "ApiKeyCredentials",
    "CatalogEntry",
    "EntryEndpoint",
    "KeystoneAuthenticator",
    "PasswordCredentials",
    "StaticTokenAuthenticator",
    "CredentialProvider",
    "JsonCredentialProvider",
    "credentials_from_record",
]
