"""Exception hierarchy raised by the JSON file store."""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class StoreError(Exception):
    """Base class for every error raised by the store."""


class StorageIOError(StoreError, OSError):
    """Raised when a filesystem operation on the store fails."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class KeyNotFoundError(StoreError, KeyError):
    """Raised when a key is required to exist but has no entry."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Key {self.key} not found."


class SerializationError(StoreError, ValueError):
    """Raised when a value cannot be encoded or stored content cannot be decoded."""

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        super().__init__(message)
        self.key = key


class InvalidKeyError(StoreError, ValueError):
    """Raised when a key cannot be used as a single file name."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"invalid key {key!r}: {reason}")
        self.key = key
