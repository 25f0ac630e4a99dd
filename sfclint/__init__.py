"""
sfclint — unregistered-component check for single-file components
=================================================================

Reports components that a ``.vue`` template uses but that the component
definition never registers, e.g. a typo in ``<MyWidgt/>`` or a forgotten
entry in ``components: {…}``.

Quick start
-----------
>>> from sfclint import lint_source
>>> diags = lint_source('''
... <template><div><foo-bar/><Baz/></div></template>
... <script>export default { components: { FooBar } }</script>
... ''')
>>> [d.message for d in diags]
['The "Baz" component has been used but not registered.']

Package layout
--------------
::

    sfclint/
    ├── __init__.py            ← this file
    ├── template_ast.py        tagged-variant template model
    ├── sfc_parser.py          parsimonious grammars → SfcDocument
    ├── elements.py            HTML / SVG / built-in vocabularies
    ├── walker.py              template traversal + element classification
    ├── casing.py              kebab / pascal / camel / snake conversions
    ├── ignore.py              ignore-pattern matcher
    ├── registration.py        registered-name extraction
    ├── checkers.py            diagnostics, suppressions, runner
    ├── config.py              .sfclintrc.json loading
    ├── rules/                 the rules themselves
    └── main.py                command-line interface
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from sfclint.checkers import CheckerRunner, Diagnostic, DiagnosticSeverity
from sfclint.errors import ConfigurationError, SfcLintError, SfcReadError
from sfclint.rules import default_registry
from sfclint.sfc_parser import parse_sfc

__version__ = "0.1.0"
__license__ = "MIT"

logging.getLogger(__name__).addHandler(logging.NullHandler())


def lint_source(
    source: str,
    path: str = "<sfc>",
    options: Optional[Mapping[str, Any]] = None,
) -> List[Diagnostic]:
    """
    Parse ``source`` and run every built-in rule over it.

    ``options`` maps rule names to their options, e.g.
    ``{"no-unregistered-components": {"ignorePatterns": ["^Foo"]}}``.
    """
    registry = default_registry()
    validated = {}
    for name, rule_options in (options or {}).items():
        cls = registry.get_by_name(name)
        if cls is None:
            raise ConfigurationError(f"unknown rule: {name!r}")
        validated[name] = cls.validate_options(rule_options)

    runner = CheckerRunner(registry=registry, options=validated)
    return runner.run(parse_sfc(source, path=path)).diagnostics


__all__ = [
    "__version__",
    "lint_source",
    "Diagnostic",
    "DiagnosticSeverity",
    "SfcLintError",
    "ConfigurationError",
    "SfcReadError",
]
