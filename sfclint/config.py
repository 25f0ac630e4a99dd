"""
sfclint/config.py — configuration loading.

Configuration lives in a JSON file, ``.sfclintrc.json`` by default::

    {
      "rules": {
        "no-unregistered-components": ["error", {"ignorePatterns": ["^Base"]}]
      },
      "suppress": {"legacy/*.vue": ["no-unregistered-components"]}
    }

A rule entry is either a level (``"off"``, ``"warning"``/``"warn"``,
``"error"``) or a ``[level, options]`` pair.  Options are validated by the
rule's checker class while the configuration is built, so a bad pattern
fails before any file is analysed.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from sfclint.checkers import CheckerRegistry, DiagnosticSeverity, SuppressionManager
from sfclint.errors import ConfigurationError

_log = logging.getLogger(__name__)

CONFIG_FILENAME = ".sfclintrc.json"

_LEVELS: Dict[str, Optional[DiagnosticSeverity]] = {
    "off": None,
    "warn": DiagnosticSeverity.WARNING,
    "warning": DiagnosticSeverity.WARNING,
    "error": DiagnosticSeverity.ERROR,
}


@dataclass(frozen=True)
class RuleConfig:
    """``severity`` is ``None`` when the rule is turned off."""
    severity: Optional[DiagnosticSeverity]
    options: Dict[str, Any] = field(default_factory=dict)

    @property
    def enabled(self) -> bool:
        return self.severity is not None


@dataclass
class LintConfig:
    rules: Dict[str, RuleConfig] = field(default_factory=dict)
    file_suppressions: Dict[str, List[str]] = field(default_factory=dict)
    source: Optional[Path] = None

    def options(self) -> Dict[str, Any]:
        return {name: rule.options for name, rule in self.rules.items()}

    def severities(self) -> Dict[str, DiagnosticSeverity]:
        return {
            name: rule.severity
            for name, rule in self.rules.items()
            if rule.severity is not None
        }

    def disabled(self) -> List[str]:
        return [name for name, rule in self.rules.items() if not rule.enabled]

    def suppression_manager(self) -> SuppressionManager:
        sm = SuppressionManager()
        for pattern, rules in self.file_suppressions.items():
            for rule in rules:
                sm.add_file_suppression(rule, pattern)
        return sm


def _parse_level(rule: str, level: Any) -> Optional[DiagnosticSeverity]:
    if not isinstance(level, str) or level.lower() not in _LEVELS:
        raise ConfigurationError(
            f"rule '{rule}': level must be one of {', '.join(sorted(_LEVELS))}, got {level!r}"
        )
    return _LEVELS[level.lower()]


def _parse_rule_entry(rule: str, entry: Any) -> tuple:
    if isinstance(entry, str):
        return _parse_level(rule, entry), None
    if isinstance(entry, list) and 1 <= len(entry) <= 2:
        options = entry[1] if len(entry) == 2 else None
        return _parse_level(rule, entry[0]), options
    raise ConfigurationError(
        f"rule '{rule}': expected a level or [level, options], got {entry!r}"
    )


def build_config(
    data: Mapping[str, Any],
    registry: CheckerRegistry,
    extra_ignore_patterns: Sequence[str] = (),
    source: Optional[Path] = None,
) -> LintConfig:
    """
    Validate raw configuration ``data`` against the rules in ``registry``.

    ``extra_ignore_patterns`` (from the command line) are appended to the
    ``ignorePatterns`` of ``no-unregistered-components``.
    """
    if not isinstance(data, Mapping):
        raise ConfigurationError("configuration must be a JSON object")
    unknown_keys = sorted(set(data) - {"rules", "suppress"})
    if unknown_keys:
        raise ConfigurationError(f"unknown configuration key(s): {', '.join(unknown_keys)}")

    raw_rules = data.get("rules", {})
    if not isinstance(raw_rules, Mapping):
        raise ConfigurationError("'rules' must be an object")

    rules: Dict[str, RuleConfig] = {}
    for rule, entry in raw_rules.items():
        cls = registry.get_by_name(rule)
        if cls is None:
            raise ConfigurationError(f"unknown rule: {rule!r}")
        severity, options = _parse_rule_entry(rule, entry)
        rules[rule] = RuleConfig(severity=severity, options=cls.validate_options(options))

    if extra_ignore_patterns:
        rule = "no-unregistered-components"
        cls = registry.get_by_name(rule)
        if cls is None:
            raise ConfigurationError(f"unknown rule: {rule!r}")
        current = rules.get(rule)
        patterns = list(current.options.get("ignorePatterns", [])) if current else []
        patterns.extend(extra_ignore_patterns)
        rules[rule] = RuleConfig(
            severity=current.severity if current else cls.default_severity,
            options=cls.validate_options({"ignorePatterns": patterns}),
        )

    raw_suppress = data.get("suppress", {})
    if not isinstance(raw_suppress, Mapping) or not all(
        isinstance(v, list) and all(isinstance(r, str) for r in v)
        for v in raw_suppress.values()
    ):
        raise ConfigurationError("'suppress' must map file patterns to lists of rule names")

    return LintConfig(
        rules=rules,
        file_suppressions={k: list(v) for k, v in raw_suppress.items()},
        source=source,
    )


def find_config(start: Union[str, Path]) -> Optional[Path]:
    """Search ``start`` and its parents for ``.sfclintrc.json``."""
    here = Path(start).expanduser().resolve()
    if here.is_file():
        here = here.parent
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(
    path: Optional[Union[str, Path]],
    registry: CheckerRegistry,
    extra_ignore_patterns: Iterable[str] = (),
) -> LintConfig:
    """Load and validate a config file; ``None`` gives the default config."""
    extra = list(extra_ignore_patterns)
    if path is None:
        return build_config({}, registry, extra)

    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"cannot read config file {p}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(
            f"config file {p} is not valid JSON: {exc.msg} (line {exc.lineno})"
        ) from exc

    _log.info("using configuration %s", p)
    return build_config(data, registry, extra, source=p)


__all__ = [
    "CONFIG_FILENAME",
    "RuleConfig",
    "LintConfig",
    "build_config",
    "find_config",
    "load_config",
]
