"""
sfclint/checkers.py
═══════════════════

Checker framework: the diagnostic model, suppressions, the checker base
class, the registry and the runner that drives checkers over parsed
single-file components.

Architecture
────────────

  ┌─────────────────────────────────────────────────────────┐
  │                   CheckerRunner                         │
  │  ┌──────────────────────────────┐                       │
  │  │ NoUnregisteredComponents     │   (one fresh checker  │
  │  │   Checker                    │    per document)      │
  │  └──────────────┬───────────────┘                       │
  │                 │                                       │
  │  ┌──────────────▼────────────────────────────────────┐  │
  │  │           SuppressionManager                      │  │
  │  │  <!-- sfclint-disable-next-line --> / file pattern│  │
  │  └──────────────┬────────────────────────────────────┘  │
  │                 │                                       │
  │  ┌──────────────▼────────────────────────────────────┐  │
  │  │        Diagnostic Formatter (JSON / gcc)          │  │
  │  └───────────────────────────────────────────────────┘  │
  └─────────────────────────────────────────────────────────┘

Each Checker follows a four-phase lifecycle:

  1. **configure()**        — read options, set up per-document state
  2. **collect_evidence()** — walk the document, gather suspicious sites
  3. **diagnose()**         — turn evidence into Diagnostics
  4. **report()**           — emit Diagnostics (filtered by suppressions)
"""

from __future__ import annotations

import json
import logging
import re
import time
from abc import ABC, abstractmethod
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from fnmatch import fnmatch
from typing import (
    Any,
    ClassVar,
    Dict,
    FrozenSet,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Set,
    Tuple,
    Type,
)

from sfclint.errors import ConfigurationError
from sfclint.template_ast import NO_LOC, SfcDocument, SourceLoc

_log = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════════════
#  PART 1 — DIAGNOSTIC MODEL
# ═════════════════════════════════════════════════════════════════════════

class DiagnosticSeverity(Enum):
    ERROR = "error"
    WARNING = "warning"
    INFORMATION = "information"


@dataclass(frozen=True)
class Diagnostic:
    """
    A single diagnostic finding.

    Attributes
    ----------
    error_id     : Unique identifier (e.g., "unregisteredComponent")
    message      : Human-readable description
    severity     : DiagnosticSeverity
    location     : Source location of the offending node
    checker_name : Name of the rule that produced this
    evidence     : Machine-readable data for downstream tooling
    """
    error_id: str
    message: str
    severity: DiagnosticSeverity
    location: SourceLoc
    checker_name: str = ""
    evidence: Dict[str, Any] = field(default_factory=dict)

    def to_json(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "file": self.location.file,
            "line": self.location.line,
            "column": self.location.col,
            "severity": self.severity.value,
            "message": self.message,
            "ruleId": self.checker_name,
            "errorId": self.error_id,
        }
        if self.evidence:
            result["data"] = dict(self.evidence)
        return result

    def to_json_str(self) -> str:
        """Single-line JSON string."""
        return json.dumps(self.to_json())

    def to_gcc_format(self) -> str:
        """GCC-style diagnostic string: file:line:col: severity: message."""
        return (
            f"{self.location}: {self.severity.value}: {self.message} "
            f"[{self.checker_name or self.error_id}]"
        )


# ═════════════════════════════════════════════════════════════════════════
#  PART 2 — SUPPRESSION MANAGER
# ═════════════════════════════════════════════════════════════════════════

_DISABLE_NEXT_LINE_RE = re.compile(r"^\s*sfclint-disable-next-line\b(.*)$", re.S)


class SuppressionManager:
    """
    Manages diagnostic suppressions from multiple sources.

    Sources:
      1. Inline template comments:
         ``<!-- sfclint-disable-next-line no-unregistered-components -->``
         (no rule list suppresses every rule on the next line)
      2. File-level suppressions (the config file's ``suppress`` map;
         the pattern ``"*"`` covers every file)

    Rules are matched by rule name or error id.

    Usage
    -----
    >>> sm = SuppressionManager()
    >>> sm.load_inline_suppressions(document)
    >>> sm.add_file_suppression("no-unregistered-components", "legacy/*.vue")
    >>> if not sm.is_suppressed(diagnostic):
    ...     emit(diagnostic)
    """

    def __init__(self) -> None:
        # {(file, line)} → set of rule names suppressed on that line
        self._inline: Dict[Tuple[str, int], Set[str]] = defaultdict(set)
        # file pattern → set of rule names
        self._file_level: Dict[str, Set[str]] = defaultdict(set)

    def load_inline_suppressions(self, document: SfcDocument) -> None:
        """Scan the document's markup comments for disable directives."""
        for comment in document.comments:
            m = _DISABLE_NEXT_LINE_RE.match(comment.text)
            if m is None:
                continue
            rules = {r for r in re.split(r"[\s,]+", m.group(1)) if r} or {"*"}
            next_line = comment.loc.line + comment.text.count("\n") + 1
            self._inline[(comment.loc.file, next_line)].update(rules)

    def add_file_suppression(self, rule: str, file_pattern: str) -> None:
        """Suppress ``rule`` in files matching ``file_pattern``."""
        self._file_level[file_pattern].add(rule)

    @staticmethod
    def _hits(ids: Set[str], diag: Diagnostic) -> bool:
        return "*" in ids or diag.error_id in ids or diag.checker_name in ids

    def is_suppressed(self, diag: Diagnostic) -> bool:
        loc = diag.location
        inline = self._inline.get((loc.file, loc.line))
        if inline and self._hits(inline, diag):
            return True

        for pattern, ids in self._file_level.items():
            if self._hits(ids, diag) and (
                pattern == loc.file
                or loc.file.endswith(pattern)
                or fnmatch(loc.file, pattern)
            ):
                return True

        return False

    def filter_diagnostics(
        self, diagnostics: Iterable[Diagnostic]
    ) -> List[Diagnostic]:
        """Return only non-suppressed diagnostics."""
        return [d for d in diagnostics if not self.is_suppressed(d)]


# ═════════════════════════════════════════════════════════════════════════
#  PART 3 — CHECKER BASE CLASS
# ═════════════════════════════════════════════════════════════════════════

@dataclass
class CheckerContext:
    """
    Context passed to every checker for one document.

    Attributes
    ----------
    document     : the parsed single-file component
    suppressions : SuppressionManager
    options      : rule name → validated options dict
    severities   : rule name → configured severity
    """
    document: SfcDocument
    suppressions: SuppressionManager = field(default_factory=SuppressionManager)
    options: Dict[str, Any] = field(default_factory=dict)
    severities: Dict[str, DiagnosticSeverity] = field(default_factory=dict)

    def get_option(self, key: str, default: Any = None) -> Any:
        return self.options.get(key, default)


class Checker(ABC):
    """
    Abstract base class for all checkers.

    Subclass Contract
    ─────────────────
      - Override ``name``, ``description``, ``error_ids``
      - Implement ``collect_evidence()`` and ``diagnose()``
      - Override ``validate_options()`` when the rule accepts options
    """

    name: ClassVar[str] = "base-checker"
    description: ClassVar[str] = ""
    error_ids: ClassVar[FrozenSet[str]] = frozenset()
    default_severity: ClassVar[DiagnosticSeverity] = DiagnosticSeverity.WARNING

    def __init__(self) -> None:
        self._diagnostics: List[Diagnostic] = []
        self._severity: DiagnosticSeverity = self.default_severity

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return list(self._diagnostics)

    @classmethod
    def validate_options(cls, options: Any) -> Dict[str, Any]:
        """
        Check and normalise user options, raising ConfigurationError.

        The default accepts no options at all.
        """
        if options in (None, {}):
            return {}
        raise ConfigurationError(f"rule '{cls.name}' does not accept options")

    def configure(self, ctx: CheckerContext) -> None:
        """Called before evidence collection."""
        self._severity = ctx.severities.get(self.name, self.default_severity)

    @abstractmethod
    def collect_evidence(self, ctx: CheckerContext) -> None:
        ...

    @abstractmethod
    def diagnose(self, ctx: CheckerContext) -> None:
        """Append diagnostics to ``self._diagnostics``."""
        ...

    def report(self, ctx: CheckerContext) -> List[Diagnostic]:
        """Return final diagnostics, filtered by suppressions."""
        return ctx.suppressions.filter_diagnostics(self._diagnostics)

    def _emit(
        self,
        error_id: str,
        message: str,
        location: SourceLoc,
        severity: Optional[DiagnosticSeverity] = None,
        evidence: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._diagnostics.append(Diagnostic(
            error_id=error_id,
            message=message,
            severity=severity or self._severity,
            location=location,
            checker_name=self.name,
            evidence=evidence or {},
        ))

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} '{self.name}'>"


# ═════════════════════════════════════════════════════════════════════════
#  PART 4 — CHECKER REGISTRY
# ═════════════════════════════════════════════════════════════════════════

class CheckerRegistry:
    """
    Registry of available checkers.

    >>> registry = CheckerRegistry()
    >>> registry.register(NoUnregisteredComponentsChecker)
    >>> registry.disable("no-unregistered-components")
    """

    def __init__(self) -> None:
        self._checkers: Dict[str, Type[Checker]] = {}
        self._disabled: Set[str] = set()

    def register(self, checker_cls: Type[Checker]) -> None:
        self._checkers[checker_cls.name] = checker_cls

    def unregister(self, name: str) -> None:
        self._checkers.pop(name, None)

    def disable(self, name: str) -> None:
        self._disabled.add(name)

    def enable(self, name: str) -> None:
        self._disabled.discard(name)

    def is_enabled(self, name: str) -> bool:
        return name in self._checkers and name not in self._disabled

    def get_enabled(self) -> List[Type[Checker]]:
        return [
            cls for name, cls in self._checkers.items()
            if name not in self._disabled
        ]

    def get_by_name(self, name: str) -> Optional[Type[Checker]]:
        return self._checkers.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._checkers

    @property
    def names(self) -> List[str]:
        return sorted(self._checkers.keys())


# ═════════════════════════════════════════════════════════════════════════
#  PART 5 — CHECKER RUNNER
# ═════════════════════════════════════════════════════════════════════════

@dataclass
class CheckerRunResults:
    """
    Aggregate results from running a suite of checkers.

    Attributes
    ----------
    diagnostics            : All diagnostics, in document then report order
    diagnostics_by_checker : Diagnostics grouped by checker name
    stats                  : Timing statistics
    checker_names          : Names of checkers that were run
    files                  : Paths of the documents that were checked
    """
    diagnostics: List[Diagnostic] = field(default_factory=list)
    diagnostics_by_checker: Dict[str, List[Diagnostic]] = field(
        default_factory=lambda: defaultdict(list)
    )
    stats: Dict[str, float] = field(default_factory=dict)
    checker_names: List[str] = field(default_factory=list)
    files: List[str] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return sum(
            1 for d in self.diagnostics
            if d.severity == DiagnosticSeverity.ERROR
        )

    @property
    def warning_count(self) -> int:
        return sum(
            1 for d in self.diagnostics
            if d.severity == DiagnosticSeverity.WARNING
        )

    @property
    def total_count(self) -> int:
        return len(self.diagnostics)

    def by_severity(self, severity: DiagnosticSeverity) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == severity]

    def by_file(self, file: str) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.location.file == file]

    def merge(self, other: "CheckerRunResults") -> None:
        self.diagnostics.extend(other.diagnostics)
        for name, diags in other.diagnostics_by_checker.items():
            self.diagnostics_by_checker[name].extend(diags)
        for key, val in other.stats.items():
            self.stats[key] = self.stats.get(key, 0.0) + val
        for name in other.checker_names:
            if name not in self.checker_names:
                self.checker_names.append(name)
        self.files.extend(other.files)

    def to_json_lines(self) -> str:
        return "\n".join(d.to_json_str() for d in self.diagnostics)

    def to_gcc_format(self) -> str:
        return "\n".join(d.to_gcc_format() for d in self.diagnostics)

    def summary(self) -> str:
        lines = [
            f"Checked {len(self.files)} file(s): {self.total_count} diagnostics "
            f"({self.error_count} errors, {self.warning_count} warnings)",
        ]
        for name in self.checker_names:
            count = len(self.diagnostics_by_checker.get(name, []))
            elapsed = self.stats.get(f"{name}_elapsed_ms", 0.0)
            lines.append(f"  {name}: {count} findings ({elapsed:.1f}ms)")
        return "\n".join(lines)


class CheckerRunner:
    """
    Runs a suite of checkers against parsed documents.

    Every document gets fresh checker instances, so no analysis state is
    shared between files.

    >>> runner = CheckerRunner(options={"no-unregistered-components":
    ...                                 {"ignorePatterns": ["^Base"]}})
    >>> results = runner.run_all(parse_file(p) for p in paths)
    >>> print(results.summary())
    """

    def __init__(
        self,
        registry: Optional[CheckerRegistry] = None,
        suppressions: Optional[SuppressionManager] = None,
        options: Optional[Mapping[str, Any]] = None,
        severities: Optional[Mapping[str, DiagnosticSeverity]] = None,
    ) -> None:
        if registry is None:
            from sfclint.rules import default_registry
            registry = default_registry()
        self.registry = registry
        self.suppressions = suppressions or SuppressionManager()
        self.options = dict(options or {})
        self.severities = dict(severities or {})

    def _select(self, checkers: Optional[Sequence[str]]) -> List[Type[Checker]]:
        if checkers is None:
            return self.registry.get_enabled()
        selected: List[Type[Checker]] = []
        for name in checkers:
            cls = self.registry.get_by_name(name)
            if cls is None:
                raise ConfigurationError(f"unknown rule: {name!r}")
            if not self.registry.is_enabled(name):
                _log.info("rule %s is turned off; not running it", name)
                continue
            selected.append(cls)
        return selected

    def run(
        self,
        document: SfcDocument,
        checkers: Optional[Sequence[str]] = None,
    ) -> CheckerRunResults:
        """Run checkers against a single document."""
        results = CheckerRunResults(files=[document.path])
        self.suppressions.load_inline_suppressions(document)
        ctx = CheckerContext(
            document=document,
            suppressions=self.suppressions,
            options=self.options,
            severities=self.severities,
        )

        for cls in self._select(checkers):
            checker = cls()
            checker_name = cls.name
            results.checker_names.append(checker_name)

            t0 = time.monotonic()
            try:
                checker.configure(ctx)
                checker.collect_evidence(ctx)
                checker.diagnose(ctx)
                diags = checker.report(ctx)
            except ConfigurationError:
                raise
            except Exception as exc:
                _log.debug("checker %s crashed on %s", checker_name,
                           document.path, exc_info=True)
                diags = [Diagnostic(
                    error_id="checkerInternalError",
                    message=f"Checker '{checker_name}' failed: {exc}",
                    severity=DiagnosticSeverity.INFORMATION,
                    location=SourceLoc(file=document.path) if document.path else NO_LOC,
                    checker_name=checker_name,
                )]
            elapsed_ms = (time.monotonic() - t0) * 1000.0

            results.diagnostics.extend(diags)
            results.diagnostics_by_checker[checker_name].extend(diags)
            results.stats[f"{checker_name}_elapsed_ms"] = elapsed_ms

        return results

    def run_all(
        self,
        documents: Iterable[SfcDocument],
        checkers: Optional[Sequence[str]] = None,
    ) -> CheckerRunResults:
        combined = CheckerRunResults()
        for document in documents:
            combined.merge(self.run(document, checkers=checkers))
        return combined


__all__ = [
    "Diagnostic",
    "DiagnosticSeverity",
    "SuppressionManager",
    "Checker",
    "CheckerContext",
    "CheckerRegistry",
    "CheckerRunner",
    "CheckerRunResults",
]
