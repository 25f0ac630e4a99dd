# sfclint/errors.py
"""
Exception types raised by sfclint.

Hierarchy
─────────
  SfcLintError (base)
  ├── ConfigurationError  - bad config file, unknown rule, invalid options
  └── SfcReadError        - a source file could not be read or decoded

Configuration errors are fatal: they are raised while the configuration is
built, before any file is analysed, and the CLI maps them to exit code 2.
"""

from __future__ import annotations

from typing import Optional

from sfclint.template_ast import SourceLoc


class SfcLintError(Exception):
    """
    Base exception for all sfclint errors.

    Carries an optional source location so the CLI can print it in the
    same ``file:line:col: error: message`` shape as diagnostics.
    """

    def __init__(self, message: str, loc: Optional[SourceLoc] = None) -> None:
        super().__init__(message)
        self.message = message
        self.loc = loc

    def to_gcc_format(self) -> str:
        if self.loc is None:
            return f"error: {self.message}"
        return f"{self.loc}: error: {self.message}"

    def __str__(self) -> str:
        return self.to_gcc_format()


class ConfigurationError(SfcLintError):
    """Invalid configuration: unreadable config file, bad rule options, bad pattern."""


class SfcReadError(SfcLintError):
    """A single-file component could not be read."""


__all__ = [
    "SfcLintError",
    "ConfigurationError",
    "SfcReadError",
]
