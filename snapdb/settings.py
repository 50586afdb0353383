from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from . import crypto
from .exceptions import ConfigurationError
from .paths import DEFAULT_FILE_NAME, resolve_file_path


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class StoreOptions(BaseModel):
    """
    Immutable store configuration.

    Accepts snake_case names or the camelCase aliases (filePath,
    encryptionKey). Unknown keys are ignored. Invalid values raise
    ConfigurationError whether built directly or through parse().
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    file_path: Path = Field(default=Path(DEFAULT_FILE_NAME), alias="filePath", validate_default=True)
    encryption_key: str | None = Field(default=None, alias="encryptionKey", repr=False)
    pretty: bool = True
    debug: bool = False

    def __init__(self, **data: Any):
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise ConfigurationError(str(e)) from e

    @field_validator("file_path", mode="after")
    @classmethod
    def _absolute(cls, v: Path) -> Path:
        return resolve_file_path(v)

    @field_validator("encryption_key", mode="after")
    @classmethod
    def _key_length(cls, v: str | None) -> str | None:
        if not v:
            return None
        crypto.key_bytes(v)
        return v

    @property
    def encrypted(self) -> bool:
        return self.encryption_key is not None

    @classmethod
    def parse(cls, options: "StoreOptions | str | os.PathLike[str] | Mapping[str, Any] | None") -> "StoreOptions":
        if isinstance(options, StoreOptions):
            return options
        if options is None:
            options = {}
        elif isinstance(options, (str, os.PathLike)):
            options = {"file_path": options}
        try:
            return cls.model_validate(dict(options))
        except ValidationError as e:
            raise ConfigurationError(str(e)) from e

    @classmethod
    def from_env(cls, env_file: str | os.PathLike[str] | None = None) -> "StoreOptions":
        """
        Build options from SNAPDB_* environment variables, after loading a
        dotenv file (defaults to the nearest .env from the working directory).
        """
        load_dotenv(env_file if env_file is not None else find_dotenv(usecwd=True))
        return cls.parse(
            {
                "file_path": os.getenv("SNAPDB_FILE_PATH", DEFAULT_FILE_NAME),
                "encryption_key": os.getenv("SNAPDB_ENCRYPTION_KEY") or None,
                "pretty": _env_bool("SNAPDB_PRETTY", True),
                "debug": _env_bool("SNAPDB_DEBUG", False),
            }
        )
