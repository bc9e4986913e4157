"""Persistence of gathered values between invocations."""

from launchpad.storage.local_storage import DEFAULT_STORAGE_PATH, LocalStorage

__all__ = ["DEFAULT_STORAGE_PATH", "LocalStorage"]
