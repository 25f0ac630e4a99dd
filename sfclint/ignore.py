"""
sfclint/ignore.py — user-configured name exemptions.

Patterns are regular expressions searched (not anchored) against the raw
usage name and each of its casing forms, so ``^Foo`` exempts ``FooBar``
whether it was written ``<FooBar>`` or ``<foo-bar>``.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Pattern, Sequence

from sfclint.casing import casing_variants
from sfclint.errors import ConfigurationError

_log = logging.getLogger(__name__)


class IgnoreMatcher:
    """
    Compiled set of ignore patterns.

    All patterns are compiled up front; a non-string or invalid pattern
    raises :class:`ConfigurationError` before any file is analysed.
    """

    def __init__(self, patterns: Iterable[object] = ()) -> None:
        self._patterns: List[Pattern[str]] = []
        for index, pattern in enumerate(patterns):
            if not isinstance(pattern, str):
                raise ConfigurationError(
                    f"ignorePatterns[{index}] must be a string, "
                    f"got {type(pattern).__name__}"
                )
            try:
                self._patterns.append(re.compile(pattern))
            except re.error as exc:
                raise ConfigurationError(
                    f"ignorePatterns[{index}] is not a valid regular "
                    f"expression: {pattern!r} ({exc})"
                ) from exc
        _log.debug("compiled %d ignore pattern(s)", len(self._patterns))

    @property
    def patterns(self) -> Sequence[str]:
        return [p.pattern for p in self._patterns]

    def matches(self, name: str) -> bool:
        """True if any pattern matches any casing variant of ``name``."""
        if not self._patterns:
            return False
        variants = casing_variants(name)
        return any(
            pattern.search(variant)
            for pattern in self._patterns
            for variant in variants
        )

    def __repr__(self) -> str:
        return f"<IgnoreMatcher {self.patterns!r}>"


__all__ = ["IgnoreMatcher"]
