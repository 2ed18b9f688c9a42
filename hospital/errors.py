"""
hospital/errors.py

Exceptions raised by the store.  Missing ids and unreadable persisted data
are not represented here as raised errors; they degrade to a no-op or a
reset to seed data.
"""


class HospitalStoreError(Exception):
    """Base class for all store errors."""


class ConfigError(HospitalStoreError):
    """Invalid environment configuration."""


class MalformedPersistedData(HospitalStoreError):
    """A durable value exists but cannot be decoded, decrypted or validated."""

    def __init__(self, key: str, reason: str):
        super().__init__(f"Persisted value for '{key}' is unusable: {reason}")
        self.key = key
        self.reason = reason


class UnknownFieldError(HospitalStoreError, ValueError):
    """An update named a field the entity does not have."""
