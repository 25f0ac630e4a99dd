"""Built-in rules."""

from __future__ import annotations

from sfclint.checkers import CheckerRegistry
from sfclint.rules.no_unregistered_components import NoUnregisteredComponentsChecker


def default_registry() -> CheckerRegistry:
    """A registry holding every built-in rule."""
    registry = CheckerRegistry()
    registry.register(NoUnregisteredComponentsChecker)
    return registry


__all__ = [
    "NoUnregisteredComponentsChecker",
    "default_registry",
]
