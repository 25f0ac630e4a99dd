# tests/test_checkers.py
"""
Tests for the checker framework: diagnostics, suppressions, the registry
and the runner.
"""

import json

import pytest

from sfclint.checkers import (
    Checker,
    CheckerRegistry,
    CheckerRunner,
    CheckerRunResults,
    Diagnostic,
    DiagnosticSeverity,
    SuppressionManager,
)
from sfclint.config import build_config
from sfclint.errors import ConfigurationError
from sfclint.rules import NoUnregisteredComponentsChecker, default_registry
from sfclint.sfc_parser import parse_sfc
from sfclint.template_ast import SourceLoc
from tests.conftest import BASIC_SFC, make_sfc

SUPPRESSED_SFC = """\
<template>
  <div>
    <!-- sfclint-disable-next-line {rules} -->
    <Baz/>
    <Qux/>
  </div>
</template>
"""


def diagnostic(file="App.vue", line=4, error_id="unregisteredComponent",
               checker_name="no-unregistered-components"):
    return Diagnostic(
        error_id=error_id,
        message='The "Baz" component has been used but not registered.',
        severity=DiagnosticSeverity.ERROR,
        location=SourceLoc(file, line, 5),
        checker_name=checker_name,
        evidence={"name": "Baz"},
    )


class CrashingChecker(Checker):
    name = "crashing"

    def collect_evidence(self, ctx):
        raise RuntimeError("boom")

    def diagnose(self, ctx):
        pass


class MisconfiguredChecker(Checker):
    name = "misconfigured"

    def collect_evidence(self, ctx):
        raise ConfigurationError("bad options")

    def diagnose(self, ctx):
        pass


class TestDiagnostic:

    def test_gcc_format(self):
        assert diagnostic().to_gcc_format() == (
            'App.vue:4:5: error: The "Baz" component has been used but not '
            'registered. [no-unregistered-components]'
        )

    def test_json(self):
        data = json.loads(diagnostic().to_json_str())
        assert data == {
            "file": "App.vue",
            "line": 4,
            "column": 5,
            "severity": "error",
            "message": 'The "Baz" component has been used but not registered.',
            "ruleId": "no-unregistered-components",
            "errorId": "unregisteredComponent",
            "data": {"name": "Baz"},
        }


class TestSuppressions:

    def _names(self, source, runner=None):
        runner = runner or CheckerRunner()
        results = runner.run(parse_sfc(source, path="App.vue"))
        return [d.evidence["name"] for d in results.diagnostics]

    @pytest.mark.parametrize("rules", [
        "",
        "no-unregistered-components",
        "unregisteredComponent",
        "some-other-rule, no-unregistered-components",
    ])
    def test_inline_suppression(self, rules):
        assert self._names(SUPPRESSED_SFC.format(rules=rules)) == ["Qux"]

    def test_inline_suppression_for_other_rule(self):
        assert self._names(SUPPRESSED_SFC.format(rules="some-other-rule")) == ["Baz", "Qux"]

    def test_inline_suppression_is_per_file(self):
        sm = SuppressionManager()
        sm.load_inline_suppressions(parse_sfc(SUPPRESSED_SFC.format(rules=""), path="App.vue"))
        assert sm.is_suppressed(diagnostic(file="App.vue", line=4))
        assert not sm.is_suppressed(diagnostic(file="Other.vue", line=4))
        assert not sm.is_suppressed(diagnostic(file="App.vue", line=5))

    def test_file_suppression(self):
        sm = SuppressionManager()
        sm.add_file_suppression("no-unregistered-components", "legacy/*.vue")
        assert sm.is_suppressed(diagnostic(file="legacy/Old.vue"))
        assert not sm.is_suppressed(diagnostic(file="src/New.vue"))

    def test_suppression_for_every_file(self):
        config = build_config({"suppress": {"*": ["unregisteredComponent"]}}, default_registry())
        sm = config.suppression_manager()
        assert sm.filter_diagnostics([diagnostic(), diagnostic(file="B.vue")]) == []


class TestRegistry:

    def test_default_registry(self):
        registry = default_registry()
        assert "no-unregistered-components" in registry
        assert registry.names == ["no-unregistered-components"]
        assert registry.get_by_name("no-unregistered-components") is NoUnregisteredComponentsChecker

    def test_disable_and_enable(self):
        registry = default_registry()
        registry.disable("no-unregistered-components")
        assert registry.get_enabled() == []
        registry.enable("no-unregistered-components")
        assert registry.get_enabled() == [NoUnregisteredComponentsChecker]

    def test_unregister(self):
        registry = default_registry()
        registry.unregister("no-unregistered-components")
        assert "no-unregistered-components" not in registry
        assert registry.get_by_name("no-unregistered-components") is None

    def test_base_checker_accepts_no_options(self):
        assert CrashingChecker.validate_options(None) == {}
        with pytest.raises(ConfigurationError, match="does not accept options"):
            CrashingChecker.validate_options({"x": 1})


class TestRunner:

    def test_run_single_document(self):
        results = CheckerRunner().run(parse_sfc(BASIC_SFC, path="App.vue"))
        assert results.total_count == 1
        assert results.error_count == 1
        assert results.files == ["App.vue"]
        assert results.checker_names == ["no-unregistered-components"]
        assert len(results.diagnostics_by_checker["no-unregistered-components"]) == 1

    def test_disabled_rule_does_not_run(self):
        registry = default_registry()
        registry.disable("no-unregistered-components")
        results = CheckerRunner(registry=registry).run(parse_sfc(BASIC_SFC))
        assert results.diagnostics == []

    def test_explicit_rule_selection(self):
        registry = default_registry()
        registry.register(CrashingChecker)
        results = CheckerRunner(registry=registry).run(
            parse_sfc(BASIC_SFC), checkers=["no-unregistered-components"],
        )
        assert results.checker_names == ["no-unregistered-components"]

    def test_explicit_selection_keeps_disabled_rules_off(self):
        registry = default_registry()
        registry.disable("no-unregistered-components")
        results = CheckerRunner(registry=registry).run(
            parse_sfc(BASIC_SFC), checkers=["no-unregistered-components"],
        )
        assert results.diagnostics == []
        assert results.checker_names == []

    def test_unknown_rule(self):
        with pytest.raises(ConfigurationError, match="unknown rule"):
            CheckerRunner().run(parse_sfc(BASIC_SFC), checkers=["no-such-rule"])

    def test_checker_crash_becomes_diagnostic(self):
        registry = CheckerRegistry()
        registry.register(CrashingChecker)
        results = CheckerRunner(registry=registry).run(parse_sfc(BASIC_SFC, path="App.vue"))
        (diag,) = results.diagnostics
        assert diag.error_id == "checkerInternalError"
        assert diag.severity is DiagnosticSeverity.INFORMATION
        assert diag.location.file == "App.vue"
        assert "boom" in diag.message

    def test_configuration_error_propagates(self):
        registry = CheckerRegistry()
        registry.register(MisconfiguredChecker)
        with pytest.raises(ConfigurationError):
            CheckerRunner(registry=registry).run(parse_sfc(BASIC_SFC))

    def test_options_reach_the_checker(self):
        runner = CheckerRunner(options={
            "no-unregistered-components": {"ignorePatterns": ["^Baz$"]},
        })
        assert runner.run(parse_sfc(BASIC_SFC)).diagnostics == []


class TestResults:

    def _results(self):
        runner = CheckerRunner()
        return runner.run_all([
            parse_sfc(BASIC_SFC, path="A.vue"),
            parse_sfc(make_sfc("<Qux/><Quux/>"), path="B.vue"),
            parse_sfc(make_sfc("<Baz/>", ["Baz"]), path="C.vue"),
        ])

    def test_aggregation(self):
        results = self._results()
        assert results.files == ["A.vue", "B.vue", "C.vue"]
        assert results.total_count == 3
        assert len(results.by_file("B.vue")) == 2
        assert results.by_file("C.vue") == []
        assert len(results.by_severity(DiagnosticSeverity.ERROR)) == 3
        assert results.checker_names == ["no-unregistered-components"]

    def test_summary(self):
        summary = self._results().summary()
        assert summary.splitlines()[0] == "Checked 3 file(s): 3 diagnostics (3 errors, 0 warnings)"
        assert "no-unregistered-components: 3 findings" in summary

    def test_renderings(self):
        results = self._results()
        assert len(results.to_gcc_format().splitlines()) == 3
        names = [json.loads(line)["data"]["name"] for line in results.to_json_lines().splitlines()]
        assert names == ["Baz", "Qux", "Quux"]

    def test_empty(self):
        results = CheckerRunResults()
        assert results.to_gcc_format() == ""
        assert results.summary() == "Checked 0 file(s): 0 diagnostics (0 errors, 0 warnings)"
