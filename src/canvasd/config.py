"""Configuration: schema, defaults, and load-or-create of the JSON config file."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import json5
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    ValidationError,
    ValidationInfo,
    model_validator,
)
from pydantic_core import PydanticCustomError

from canvasd.errors import FilesystemError, ParseError, SerializationError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"

DEFAULT_INTERFACE = "0.0.0.0"
DEFAULT_PORT = 3250
DEFAULT_DATABASE_PATH = "database.db"

# Validation context used when parsing a document: every key must be present.
_DOCUMENT_CONTEXT = {"require_all_keys": True}


class _Section(BaseModel):
    """Base for config sections: defaults in code, all keys required in a document."""

    model_config = ConfigDict(validate_assignment=True)

    @model_validator(mode="before")
    @classmethod
    def require_all_keys(cls, data: Any, info: ValidationInfo) -> Any:
        if info.context and info.context.get("require_all_keys") and isinstance(data, dict):
            missing = [name for name in cls.model_fields if name not in data]
            if missing:
                raise PydanticCustomError(
                    "missing_keys", "missing key(s): {keys}", {"keys": ", ".join(missing)}
                )
        return data


class NetworkConfig(_Section):
    """Address the service listens on.

    ``interface`` may be a gateway address (devices on the same network), a
    specific address, or ``127.0.0.1`` / ``localhost`` (local machine only).
    ``port`` is any unsigned 16-bit integer.
    """

    interface: StrictStr = DEFAULT_INTERFACE
    port: StrictInt = Field(default=DEFAULT_PORT, ge=0, le=65535)


class Config(_Section):
    """Top-level application configuration."""

    network: NetworkConfig = Field(default_factory=NetworkConfig)
    database_path: StrictStr = DEFAULT_DATABASE_PATH


def default_config() -> Config:
    """Fresh configuration with every field at its default."""
    return Config()


def config_exists(path: Path | str) -> bool:
    """True if a regular file exists at path (the load-or-create decision)."""
    return Path(path).is_file()


def dump_config(config: Config) -> str:
    """Serialize config to stable, pretty-printed JSON (2-space indent, trailing newline)."""
    try:
        return json.dumps(config.model_dump(mode="json"), indent=2) + "\n"
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Failed to serialize configuration: {exc}") from exc


def _dotted(loc: tuple) -> str:
    return ".".join(str(p) for p in loc) or "<root>"


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        if err["type"] == "missing_keys":
            for key in err["ctx"]["keys"].split(", "):
                parts.append(f"{_dotted(err['loc'] + (key,))}: missing key")
        else:
            parts.append(f"{_dotted(err['loc'])}: {err['msg']}")
    return "; ".join(parts)


def parse_config(text: str, source: Path | str | None = None) -> Config:
    """
    Parse configuration text into a Config.

    Accepts JSON plus comments and trailing commas. Every key must be present;
    unknown keys are ignored. Raises ParseError on any syntax, type, range or
    missing-key problem.
    """
    where = f" {source}" if source is not None else ""
    try:
        data = json5.loads(text)
    except (ValueError, RecursionError) as exc:
        raise ParseError(
            f"Configuration file{where} contains invalid JSON: {exc}", path=source
        ) from exc
    try:
        return Config.model_validate(data, context=_DOCUMENT_CONTEXT)
    except ValidationError as exc:
        raise ParseError(
            f"Configuration file{where} does not match the expected schema: {_describe(exc)}",
            path=source,
        ) from exc


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def write_config(path: Path | str, config: Config) -> None:
    """
    Write config to path, creating parent directories as needed.

    The text goes to a temporary sibling first and is then moved over path,
    so an interrupted write never leaves partial content behind.
    """
    path = Path(path)
    text = dump_config(config)
    parent = path.parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(
            f"Failed to create directory for configuration file {path}: {exc}",
            path=path,
            step="create directory",
        ) from exc

    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as fh:
            tmp_name = fh.name
            fh.write(text)
        os.chmod(tmp_name, 0o666 & ~_current_umask())
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
        raise FilesystemError(
            f"Failed to write configuration file {path}: {exc}",
            path=path,
            step="write",
        ) from exc


def load_config(path: Path | str) -> Config:
    """
    Load configuration from path, or create it with defaults if it does not exist.

    First run: builds the defaults, creates any missing parent directories,
    writes the file and returns the defaults. Later runs only read and parse;
    a file that fails to parse is left untouched.
    """
    path = Path(path)
    if not config_exists(path):
        config = default_config()
        write_config(path, config)
        logger.info("Wrote default configuration to %s", path)
        return config

    logger.debug("Loading configuration from %s", path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FilesystemError(
            f"Failed to read configuration file {path}: {exc}",
            path=path,
            step="read",
        ) from exc
    return parse_config(text, source=path)
