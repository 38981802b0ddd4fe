"""Credential persistence."""

from homekrew_api.storage.credential_store import (
    CredentialStore,
    FileCredentialStore,
    InMemoryCredentialStore,
)

__all__ = [
    "CredentialStore",
    "FileCredentialStore",
    "InMemoryCredentialStore",
]
