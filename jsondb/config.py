"""Configuration model for the JSON file store."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Union

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PATH = Path("database")


class StoreOptions(BaseModel):
    """Options accepted when creating a store."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: Path = Field(DEFAULT_PATH, description="Root directory holding one JSON file per key")

    @classmethod
    def from_env(cls, prefix: str = "JSONDB_") -> "StoreOptions":
        load_dotenv(find_dotenv(usecwd=True))
        path = os.getenv(f"{prefix}PATH")
        if not path:
            return cls()
        return cls(path=path)


OptionsLike = Union[StoreOptions, Mapping[str, Any], str, Path, None]


def coerce_options(options: OptionsLike) -> StoreOptions:
    if options is None:
        return StoreOptions()
    if isinstance(options, StoreOptions):
        return options
    if isinstance(options, (str, Path)):
        return StoreOptions(path=options) if str(options) else StoreOptions()
    payload: Dict[str, Any] = dict(options)
    # an empty or null path means "use the default"
    if "path" in payload and not payload["path"]:
        del payload["path"]
    return StoreOptions.model_validate(payload)
