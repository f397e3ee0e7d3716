"""JSON file store package exports."""
from .codec import Codec, JSONCodec, PydanticCodec
from .config import StoreOptions, coerce_options
from .errors import (
    InvalidKeyError,
    KeyNotFoundError,
    SerializationError,
    StorageIOError,
    StoreError,
)
from .store import Store, database

__all__ = [
    "Codec",
    "JSONCodec",
    "PydanticCodec",
    "StoreOptions",
    "coerce_options",
    "InvalidKeyError",
    "KeyNotFoundError",
    "SerializationError",
    "StorageIOError",
    "StoreError",
    "Store",
    "database",
]
