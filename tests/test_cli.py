# tests/test_cli.py
"""
End-to-end tests for the ``sfclint`` command line.
"""

import io
import json

import pytest

from sfclint import __version__
from sfclint.config import CONFIG_FILENAME
from sfclint.main import EXIT_ERROR, EXIT_INFRA, EXIT_OK, main
from tests.conftest import FULLY_REGISTERED_SFC


def run(argv):
    out = io.StringIO()
    code = main(argv, stream=out)
    return code, out.getvalue()


class TestExitCodes:

    def test_unregistered_component(self, vue_project):
        code, out = run([str(vue_project / "src")])
        assert code == EXIT_ERROR
        (line,) = out.splitlines()
        assert line.endswith(
            'App.vue:4:5: error: The "Baz" component has been used but not '
            'registered. [no-unregistered-components]'
        )

    def test_clean_file(self, vue_project):
        code, out = run([str(vue_project / "src" / "components" / "Page.vue")])
        assert code == EXIT_OK
        assert out == ""

    def test_ignore_pattern_option(self, vue_project):
        code, out = run([str(vue_project / "src"), "--ignore-pattern", "^Baz$"])
        assert code == EXIT_OK
        assert out == ""

    def test_no_paths(self):
        assert run([])[0] == EXIT_INFRA

    def test_unreadable_file_still_checks_the_rest(self, vue_project):
        code, out = run([
            str(vue_project / "src" / "Missing.vue"),
            str(vue_project / "src" / "App.vue"),
        ])
        assert code == EXIT_INFRA
        assert "Baz" in out


class TestConfiguration:

    def test_config_file_is_discovered(self, vue_project):
        (vue_project / CONFIG_FILENAME).write_text(
            json.dumps({"rules": {"no-unregistered-components": "warn"}}),
            encoding="utf-8",
        )
        code, out = run([str(vue_project / "src")])
        assert code == EXIT_OK
        assert ": warning: " in out

    def test_rule_turned_off(self, vue_project):
        (vue_project / CONFIG_FILENAME).write_text(
            json.dumps({"rules": {"no-unregistered-components": "off"}}),
            encoding="utf-8",
        )
        assert run([str(vue_project / "src")]) == (EXIT_OK, "")

    def test_explicit_config(self, vue_project, tmp_path):
        config = tmp_path / "ci.json"
        config.write_text(json.dumps({
            "rules": {"no-unregistered-components": ["error", {"ignorePatterns": ["^B"]}]},
        }), encoding="utf-8")
        code, _ = run(["--config", str(config), str(vue_project / "src")])
        assert code == EXIT_OK

    def test_file_suppression(self, vue_project):
        (vue_project / CONFIG_FILENAME).write_text(
            json.dumps({"suppress": {"*/App.vue": ["no-unregistered-components"]}}),
            encoding="utf-8",
        )
        assert run([str(vue_project / "src")]) == (EXIT_OK, "")

    def test_bad_config(self, vue_project, capsys):
        (vue_project / CONFIG_FILENAME).write_text("{not json", encoding="utf-8")
        code, out = run([str(vue_project / "src")])
        assert code == EXIT_INFRA
        assert out == ""
        assert "not valid JSON" in capsys.readouterr().err

    def test_undecodable_config(self, vue_project, capsys):
        (vue_project / CONFIG_FILENAME).write_bytes(b'{"rules": "\xff"}')
        code, out = run([str(vue_project / "src")])
        assert code == EXIT_INFRA
        assert out == ""
        assert "cannot read config file" in capsys.readouterr().err

    def test_bad_ignore_pattern(self, vue_project, capsys):
        code, _ = run([str(vue_project / "src"), "--ignore-pattern", "(oops"])
        assert code == EXIT_INFRA
        assert "sfclint: error: ignorePatterns[0]" in capsys.readouterr().err

    def test_unknown_rule(self, vue_project):
        assert run([str(vue_project / "src"), "--rule", "no-such-rule"])[0] == EXIT_INFRA

    def test_named_rule_stays_off(self, vue_project):
        (vue_project / CONFIG_FILENAME).write_text(
            json.dumps({"rules": {"no-unregistered-components": "off"}}),
            encoding="utf-8",
        )
        argv = [str(vue_project / "src"), "--rule", "no-unregistered-components"]
        assert run(argv) == (EXIT_OK, "")

    def test_suppress_everywhere(self, vue_project):
        (vue_project / CONFIG_FILENAME).write_text(
            json.dumps({"suppress": {"*": ["unregisteredComponent"]}}),
            encoding="utf-8",
        )
        assert run([str(vue_project / "src")]) == (EXIT_OK, "")


class TestOutput:

    def test_json_format(self, vue_project):
        code, out = run([str(vue_project / "src"), "--format", "json"])
        assert code == EXIT_ERROR
        (record,) = [json.loads(line) for line in out.splitlines()]
        assert record["ruleId"] == "no-unregistered-components"
        assert record["line"] == 4
        assert record["column"] == 5
        assert record["data"] == {"name": "Baz"}

    def test_summary_format(self, vue_project):
        code, out = run([str(vue_project / "src"), "--format", "summary"])
        assert code == EXIT_ERROR
        assert "Checked 2 file(s): 1 diagnostics (1 errors, 0 warnings)" in out

    def test_list_rules(self):
        code, out = run(["--list-rules"])
        assert code == EXIT_OK
        assert "no-unregistered-components" in out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--version"])
        assert excinfo.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_verbose_logs_progress(self, vue_project, caplog):
        (vue_project / "src" / "Only.vue").write_text(FULLY_REGISTERED_SFC, encoding="utf-8")
        caplog.set_level("INFO", logger="sfclint")
        run(["-v", str(vue_project / "src" / "Only.vue")])
        assert any("checking" in r.getMessage() for r in caplog.records)
