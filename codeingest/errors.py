"""Exception types raised by codeingest."""

from __future__ import annotations


class CodeIngestError(RuntimeError):
    """Base class for errors surfaced to callers."""


class InvalidPathError(CodeIngestError, ValueError):
    """Raised when the analysis root is not a usable path argument."""


class ConfigError(CodeIngestError):
    """Raised when the configuration file cannot be parsed."""


__all__ = ["CodeIngestError", "ConfigError", "InvalidPathError"]
