# tests/test_config.py
"""
Tests for configuration loading and validation.
"""

import json

import pytest

from sfclint.checkers import Diagnostic, DiagnosticSeverity
from sfclint.config import CONFIG_FILENAME, build_config, find_config, load_config
from sfclint.errors import ConfigurationError
from sfclint.rules import default_registry
from sfclint.template_ast import SourceLoc

RULE = "no-unregistered-components"


@pytest.fixture
def registry():
    return default_registry()


class TestBuildConfig:

    def test_empty(self, registry):
        config = build_config({}, registry)
        assert config.rules == {}
        assert config.options() == {}
        assert config.disabled() == []

    @pytest.mark.parametrize("level, severity", [
        ("error", DiagnosticSeverity.ERROR),
        ("warning", DiagnosticSeverity.WARNING),
        ("warn", DiagnosticSeverity.WARNING),
        ("ERROR", DiagnosticSeverity.ERROR),
    ])
    def test_levels(self, registry, level, severity):
        config = build_config({"rules": {RULE: level}}, registry)
        assert config.severities() == {RULE: severity}
        assert config.options() == {RULE: {"ignorePatterns": []}}

    def test_off(self, registry):
        config = build_config({"rules": {RULE: "off"}}, registry)
        assert config.disabled() == [RULE]
        assert config.severities() == {}
        assert not config.rules[RULE].enabled

    def test_level_with_options(self, registry):
        config = build_config(
            {"rules": {RULE: ["warn", {"ignorePatterns": ["^Foo"]}]}}, registry,
        )
        assert config.rules[RULE].severity is DiagnosticSeverity.WARNING
        assert config.options() == {RULE: {"ignorePatterns": ["^Foo"]}}

    def test_command_line_patterns_are_appended(self, registry):
        config = build_config(
            {"rules": {RULE: ["warn", {"ignorePatterns": ["^Foo"]}]}},
            registry,
            extra_ignore_patterns=["^Bar"],
        )
        assert config.options()[RULE]["ignorePatterns"] == ["^Foo", "^Bar"]
        assert config.rules[RULE].severity is DiagnosticSeverity.WARNING

    def test_command_line_patterns_without_rule_entry(self, registry):
        config = build_config({}, registry, extra_ignore_patterns=["^Bar"])
        assert config.rules[RULE].severity is DiagnosticSeverity.ERROR
        assert config.options()[RULE]["ignorePatterns"] == ["^Bar"]

    def test_file_suppressions(self, registry):
        config = build_config({"suppress": {"legacy/*.vue": [RULE]}}, registry)
        sm = config.suppression_manager()
        diag = Diagnostic(
            error_id="unregisteredComponent",
            message="m",
            severity=DiagnosticSeverity.ERROR,
            location=SourceLoc("legacy/Old.vue", 1, 1),
            checker_name=RULE,
        )
        assert sm.is_suppressed(diag)


class TestBuildConfigErrors:

    @pytest.mark.parametrize("data, message", [
        ([], "must be a JSON object"),
        ({"extends": "x"}, "unknown configuration key"),
        ({"rules": []}, "'rules' must be an object"),
        ({"rules": {"no-such-rule": "error"}}, "unknown rule"),
        ({"rules": {RULE: "loud"}}, "level must be one of"),
        ({"rules": {RULE: 2}}, "expected a level"),
        ({"rules": {RULE: ["error", {}, "extra"]}}, "expected a level"),
        ({"rules": {RULE: ["error", {"ignorePatterns": ["("]}]}}, "not a valid regular expression"),
        ({"rules": {RULE: ["error", {"bogus": 1}]}}, "unknown option"),
        ({"suppress": {"*.vue": RULE}}, "'suppress' must map"),
    ])
    def test_rejected(self, registry, data, message):
        with pytest.raises(ConfigurationError, match=message):
            build_config(data, registry)

    def test_invalid_command_line_pattern(self, registry):
        with pytest.raises(ConfigurationError, match=r"ignorePatterns\[0\]"):
            build_config({}, registry, extra_ignore_patterns=["[x"])


class TestLoading:

    def test_find_config_walks_up(self, tmp_path):
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("{}", encoding="utf-8")
        nested = tmp_path / "src" / "components"
        nested.mkdir(parents=True)
        component = nested / "App.vue"
        component.write_text("", encoding="utf-8")
        assert find_config(component) == config_file.resolve()
        assert find_config(nested) == config_file.resolve()

    def test_load_config(self, tmp_path, registry):
        path = tmp_path / CONFIG_FILENAME
        path.write_text(json.dumps({"rules": {RULE: "warn"}}), encoding="utf-8")
        config = load_config(path, registry)
        assert config.source == path
        assert config.severities() == {RULE: DiagnosticSeverity.WARNING}

    def test_no_config_file(self, registry):
        config = load_config(None, registry, ["^Base"])
        assert config.source is None
        assert config.options()[RULE]["ignorePatterns"] == ["^Base"]

    def test_invalid_json(self, tmp_path, registry):
        path = tmp_path / CONFIG_FILENAME
        path.write_text("{rules: }", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="not valid JSON"):
            load_config(path, registry)

    def test_undecodable_file(self, tmp_path, registry):
        path = tmp_path / CONFIG_FILENAME
        path.write_bytes(b"\xff\xfe{}")
        with pytest.raises(ConfigurationError, match="cannot read config file"):
            load_config(path, registry)

    def test_missing_file(self, tmp_path, registry):
        with pytest.raises(ConfigurationError, match="cannot read config file"):
            load_config(tmp_path / "missing.json", registry)
