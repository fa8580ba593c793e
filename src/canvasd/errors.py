"""Public error types for canvasd."""

from __future__ import annotations

from pathlib import Path

# Shown with every configuration parse failure; the file is meant to be edited by hand.
PARSE_HINTS = (
    "Missing or extra commas",
    "Unquoted string values",
    "Missing closing brackets or braces",
)


class CanvasdError(Exception):
    """Base class for all canvasd errors."""


class ConfigError(CanvasdError):
    """Raised when the configuration file cannot be loaded or materialized.

    ``step`` names the failing stage: "serialize" or "parse". Filesystem
    failures are raised as FilesystemError.
    """

    step = "load"

    def __init__(
        self,
        message: str,
        *,
        path: Path | str | None = None,
        step: str | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        if step is not None:
            self.step = step


class FilesystemError(CanvasdError, OSError):
    """A filesystem step failed: creating a directory or file, reading, or writing.

    Raised by both the config loader and the store bootstrap. Also an OSError.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path | str | None = None,
        step: str = "write",
    ) -> None:
        super().__init__(message)
        self.path = path
        self.step = step


class SerializationError(ConfigError):
    """The configuration could not be encoded to text."""

    step = "serialize"


class ParseError(ConfigError, ValueError):
    """The configuration file is not valid JSON or does not match the schema."""

    step = "parse"

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        hints = "\n".join(f"- {hint}" for hint in PARSE_HINTS)
        super().__init__(
            f"{message}\n"
            "Please check the syntax of your configuration file. Common issues include:\n"
            f"{hints}",
            path=path,
        )
        self.detail = message


class PreconditionError(CanvasdError, ValueError):
    """Raised when an argument violates a documented precondition (e.g. empty path)."""


class StoreError(CanvasdError):
    """Base class for embedded store failures."""

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = path


class StoreOpenError(StoreError):
    """The store file could not be created or the connection could not be opened."""


class StoreInitError(StoreError):
    """The initialization script failed against the opened store."""
