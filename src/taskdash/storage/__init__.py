"""Local persistence: session credentials and settings."""

from taskdash.storage.config import AppSettings
from taskdash.storage.session import CredentialStore, get_credential_store

__all__ = ["AppSettings", "CredentialStore", "get_credential_store"]
