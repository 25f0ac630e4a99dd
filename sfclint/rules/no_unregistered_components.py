"""
no_unregistered_components.py — report components used but never registered.

Detects template usages of custom components whose name matches no entry
of the component's ``components`` registration object:

  - ``<my-widget/>`` / ``<MyWidget/>``      custom element usage
  - ``<div :is="'my-widget'">``             literal dynamic-component binding
  - ``<tr is="my-row">``                    in-DOM ``is`` attribute

Names are compared by their kebab-case form, so ``<MyWidget>`` matches a
registration written ``'my-widget'`` and vice versa.

Options::

    {"ignorePatterns": ["^Base", "^router-"]}

A usage is exempt when any pattern matches the raw name or any of its
kebab, pascal, camel or snake forms.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from sfclint.casing import kebab_case
from sfclint.checkers import Checker, CheckerContext, DiagnosticSeverity
from sfclint.elements import is_html_well_known_element_name
from sfclint.errors import ConfigurationError
from sfclint.ignore import IgnoreMatcher
from sfclint.registration import extract_registered_names
from sfclint.template_ast import Attribute, Element, SourceLoc
from sfclint.walker import ElementClass, TemplateVisitor, TemplateWalker, classify_element

_log = logging.getLogger(__name__)

MESSAGE = 'The "{name}" component has been used but not registered.'


# ─────────────────────────────────────────────────────────────────────────
#  Per-file analysis state
# ─────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class UsageRecord:
    """A component referenced by name; ``source`` positions the diagnostic."""
    source: Union[Element, Attribute]
    name: str

    @property
    def loc(self) -> SourceLoc:
        return self.source.loc


class ReconcileState(Enum):
    COLLECTING = auto()
    RECONCILING = auto()
    DONE = auto()


@dataclass(eq=False)
class AnalysisContext:
    """All mutable state for analysing one file."""
    usages: List[UsageRecord] = field(default_factory=list)
    registered_names: List[str] = field(default_factory=list)
    template_location: Optional[SourceLoc] = None
    state: ReconcileState = ReconcileState.COLLECTING

    def add_usage(self, source: Union[Element, Attribute], name: str) -> None:
        self.usages.append(UsageRecord(source=source, name=name))

    def register(self, names: Iterable[str]) -> None:
        self.registered_names.extend(names)


# ─────────────────────────────────────────────────────────────────────────
#  Usage collection
# ─────────────────────────────────────────────────────────────────────────

class UsageCollector(TemplateVisitor):
    """
    Records usages while the template is walked and fires
    ``on_template_exit`` when the outermost ``<template>`` is left.
    """

    def __init__(
        self,
        analysis: AnalysisContext,
        on_template_exit: Callable[[], None],
    ) -> None:
        self.analysis = analysis
        self._on_template_exit = on_template_exit

    def enter_element(self, element: Element) -> None:
        if element.name == "template" and self.analysis.template_location is None:
            self.analysis.template_location = element.loc
        if classify_element(element) is ElementClass.CUSTOM:
            self.analysis.add_usage(element, element.raw_name)

    def visit_directive_attribute(self, attribute: Attribute, element: Element) -> None:
        if attribute.directive != "bind" or attribute.argument != "is":
            return
        expression = attribute.expression
        if expression is None or not expression.is_string_literal:
            return
        if is_html_well_known_element_name(expression.value):
            return
        self.analysis.add_usage(attribute, expression.value)

    def visit_static_attribute(self, attribute: Attribute, element: Element) -> None:
        if attribute.name == "is" and attribute.value is not None:
            self.analysis.add_usage(attribute, attribute.value)

    def leave_element(self, element: Element) -> None:
        if element.name != "template":
            return
        if element.loc != self.analysis.template_location:
            return
        if element.has_attribute("src"):
            _log.debug("%s: template has an external source; not reconciling", element.loc)
            return
        self._on_template_exit()


# ─────────────────────────────────────────────────────────────────────────
#  Reconciliation
# ─────────────────────────────────────────────────────────────────────────

class Reconciler:
    """Matches collected usages against registered names."""

    def __init__(self, matcher: IgnoreMatcher) -> None:
        self.matcher = matcher

    def reconcile(
        self,
        analysis: AnalysisContext,
        report: Callable[[UsageRecord], None],
    ) -> int:
        """
        Report every usage that is neither ignored nor registered, in
        collection order.  Runs at most once per analysis; returns the
        number of usages reported.
        """
        if analysis.state is not ReconcileState.COLLECTING:
            return 0
        analysis.state = ReconcileState.RECONCILING

        registered = {kebab_case(name) for name in analysis.registered_names}
        reported = 0
        for usage in analysis.usages:
            if self.matcher.matches(usage.name):
                continue
            if kebab_case(usage.name) in registered:
                continue
            report(usage)
            reported += 1

        analysis.state = ReconcileState.DONE
        _log.debug("reconciled %d usage(s) against %d registration(s): %d unregistered",
                   len(analysis.usages), len(registered), reported)
        return reported


# ─────────────────────────────────────────────────────────────────────────
#  Checker
# ─────────────────────────────────────────────────────────────────────────

class NoUnregisteredComponentsChecker(Checker):
    """
    Reports components used in the template but missing from the
    component's registrations.
    """

    name = "no-unregistered-components"
    description = "Disallow using components that are not registered inside templates"
    error_ids = frozenset({"unregisteredComponent"})
    default_severity = DiagnosticSeverity.ERROR

    def __init__(self) -> None:
        super().__init__()
        self._analysis = AnalysisContext()
        self._reconciler = Reconciler(IgnoreMatcher())
        self._unregistered: List[UsageRecord] = []

    @classmethod
    def validate_options(cls, options: Any) -> Dict[str, Any]:
        if options is None:
            return {"ignorePatterns": []}
        if not isinstance(options, Mapping):
            raise ConfigurationError(f"options for '{cls.name}' must be an object")
        unknown = sorted(set(options) - {"ignorePatterns"})
        if unknown:
            raise ConfigurationError(
                f"unknown option(s) for '{cls.name}': {', '.join(unknown)}"
            )
        patterns = options.get("ignorePatterns", [])
        if not isinstance(patterns, (list, tuple)):
            raise ConfigurationError(f"'{cls.name}' option ignorePatterns must be an array")
        IgnoreMatcher(patterns)
        return {"ignorePatterns": list(patterns)}

    def configure(self, ctx: CheckerContext) -> None:
        super().configure(ctx)
        options = self.validate_options(ctx.get_option(self.name))
        self._reconciler = Reconciler(IgnoreMatcher(options["ignorePatterns"]))

    def collect_evidence(self, ctx: CheckerContext) -> None:
        for declaration in ctx.document.declarations:
            self._analysis.register(extract_registered_names(declaration))
        collector = UsageCollector(self._analysis, on_template_exit=self._reconcile)
        TemplateWalker(collector).walk(ctx.document.template)

    def _reconcile(self) -> None:
        self._reconciler.reconcile(self._analysis, self._unregistered.append)

    def diagnose(self, ctx: CheckerContext) -> None:
        for usage in self._unregistered:
            self._emit(
                error_id="unregisteredComponent",
                message=MESSAGE.format(name=usage.name),
                location=usage.loc,
                evidence={"name": usage.name},
            )


__all__ = [
    "MESSAGE",
    "UsageRecord",
    "ReconcileState",
    "AnalysisContext",
    "UsageCollector",
    "Reconciler",
    "NoUnregisteredComponentsChecker",
]
