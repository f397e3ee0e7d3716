"""File-per-key JSON store.

Each entry lives in ``<root>/<key>.json``; the presence of that file is the
only record that the key exists. Nothing is cached in memory, so every call
goes straight to the filesystem.
"""
from __future__ import annotations

import errno
import logging
import os
import shutil
import stat
from pathlib import Path
from typing import Any, Callable, Dict, Generic, Iterator, List, Optional, Tuple, Type, TypeVar

from .codec import Codec, JSONCodec, PydanticCodec
from .config import OptionsLike, coerce_options
from .errors import InvalidKeyError, KeyNotFoundError, SerializationError, StorageIOError

logger = logging.getLogger(__name__)

SUFFIX = ".json"
_TMP_SUFFIX = ".tmp"

V = TypeVar("V")


class Store(Generic[V]):
    """Maps string keys to values persisted as one JSON file per key."""

    def __init__(self, options: OptionsLike = None, *, codec: Optional[Codec[V]] = None) -> None:
        self._options = coerce_options(options)
        self._root = self._options.path
        self._codec: Codec[V] = codec or JSONCodec()
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageIOError(f"cannot create store directory {self._root}: {exc}", self._root) from exc
        logger.debug("opened store at %s", self._root)

    @property
    def path(self) -> Path:
        return self._root

    @property
    def codec(self) -> Codec[V]:
        return self._codec

    # ------------------------------------------------------------------
    def set(self, key: str, value: V) -> V:
        path = self._entry_path(key)
        try:
            payload = self._codec.encode(value)
        except SerializationError as exc:
            exc.key = key
            raise
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"cannot encode entry {key}: {exc}", key) from exc
        tmp = path.with_name(path.name + _TMP_SUFFIX)
        try:
            tmp.write_bytes(payload)
            os.replace(tmp, path)
        except OSError as exc:
            tmp.unlink(missing_ok=True)
            raise StorageIOError(f"cannot write entry {key}: {exc}", path) from exc
        logger.debug("wrote %s (%d bytes)", path, len(payload))
        return value

    def get(self, key: str, require_exist: bool = False) -> Optional[V]:
        """Return the value for ``key``.

        A missing key yields ``None`` unless ``require_exist`` is set, in
        which case :class:`KeyNotFoundError` is raised.
        """
        if require_exist:
            return self.get_or_fail(key)
        return self.try_get(key)

    def try_get(self, key: str) -> Optional[V]:
        try:
            return self._read(key, self._entry_path(key))
        except FileNotFoundError:
            return None

    def get_or_fail(self, key: str) -> V:
        try:
            return self._read(key, self._entry_path(key))
        except FileNotFoundError:
            raise KeyNotFoundError(key) from None

    def delete(self, key: str) -> bool:
        path = self._entry_path(key)
        if not self._is_entry(key, path):
            return False
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise StorageIOError(f"cannot delete entry {key}: {exc}", path) from exc
        logger.debug("deleted %s", path)
        return True

    remove = delete

    def has(self, key: str) -> bool:
        return self._is_entry(key, self._entry_path(key))

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    # ------------------------------------------------------------------
    def clear(self) -> None:
        """Drop every entry. The root directory itself is kept."""
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            for child in self._root.iterdir():
                if child.is_dir() and not child.is_symlink():
                    shutil.rmtree(child)
                else:
                    child.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageIOError(f"cannot clear store {self._root}: {exc}", self._root) from exc
        logger.debug("cleared store at %s", self._root)

    def keys(self) -> List[str]:
        return [name[: -len(SUFFIX)] for name in self._list_entry_names()]

    def entries(self) -> List[Tuple[str, V]]:
        pairs: List[Tuple[str, V]] = []
        for key in self.keys():
            try:
                pairs.append((key, self._read(key, self._root / f"{key}{SUFFIX}")))
            except FileNotFoundError:
                # removed after the listing was taken
                continue
        return pairs

    def values(self) -> List[V]:
        return [value for _, value in self.entries()]

    def size(self) -> int:
        return len(self._list_entry_names())

    def map(self) -> Dict[str, V]:
        return dict(self.entries())

    def for_each(self, visitor: Callable[[V, str], Any]) -> None:
        for key, value in self.map().items():
            visitor(value, key)

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={str(self._root)!r})"

    # ------------------------------------------------------------------
    def _entry_path(self, key: str) -> Path:
        _validate_key(key)
        return self._root / f"{key}{SUFFIX}"

    def _is_entry(self, key: str, path: Path) -> bool:
        # only a regular file counts, matching what enumeration lists
        try:
            return stat.S_ISREG(os.stat(path).st_mode)
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise StorageIOError(f"cannot stat entry {key}: {exc}", path) from exc

    def _read(self, key: str, path: Path) -> V:
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            raise  # a miss, not an I/O failure
        except OSError as exc:
            if not self._is_entry(key, path):
                raise FileNotFoundError(errno.ENOENT, "not an entry file", str(path)) from exc
            raise StorageIOError(f"cannot read entry {key}: {exc}", path) from exc
        try:
            return self._codec.decode(raw)
        except SerializationError as exc:
            exc.key = key
            raise
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"cannot decode entry {key}: {exc}", key) from exc

    def _list_entry_names(self) -> List[str]:
        try:
            with os.scandir(self._root) as it:
                return [
                    entry.name
                    for entry in it
                    if entry.name.endswith(SUFFIX) and len(entry.name) > len(SUFFIX) and entry.is_file()
                ]
        except OSError as exc:
            raise StorageIOError(f"cannot list store {self._root}: {exc}", self._root) from exc


def _validate_key(key: str) -> None:
    if not isinstance(key, str):
        raise InvalidKeyError(str(key), "keys must be strings")
    if not key:
        raise InvalidKeyError(key, "keys must not be empty")
    if key in (".", ".."):
        raise InvalidKeyError(key, "relative directory names are not allowed")
    if "\x00" in key:
        raise InvalidKeyError(key, "keys must not contain NUL")
    for sep in {"/", os.sep, os.altsep}:
        if sep and sep in key:
            raise InvalidKeyError(key, f"keys must not contain {sep!r}")


def database(options: OptionsLike = None, *, value_type: Optional[Type[V]] = None) -> Store[Any]:
    """Create a store rooted at ``options.path`` (``database`` by default).

    Passing ``value_type`` returns a typed store whose values are validated
    with pydantic on every write and read.
    """
    if value_type is not None:
        return Store(options, codec=PydanticCodec(value_type))
    return Store(options)
