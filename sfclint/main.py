#!/usr/bin/env python3
"""sfclint/main.py — command-line entry point.

Usage examples
--------------
    # Check every .vue file under src/
    sfclint src/

    # Exempt base components and emit JSON lines
    sfclint src/ --ignore-pattern '^Base' --format json

    # Use an explicit configuration file
    sfclint --config ci/sfclintrc.json src/components/App.vue

Exit codes
----------
    0   No diagnostics with severity ERROR.
    1   One or more diagnostics with severity ERROR were emitted.
    2   Infrastructure failure (bad configuration, unreadable file, ...).

``python -m sfclint`` calls :func:`main` through ``sfclint/__main__.py``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, TextIO

from sfclint import __version__
from sfclint.checkers import CheckerRunner, CheckerRunResults
from sfclint.config import find_config, load_config
from sfclint.errors import ConfigurationError, SfcReadError
from sfclint.rules import default_registry
from sfclint.sfc_parser import parse_file

_log = logging.getLogger("sfclint")

EXIT_OK: int = 0
EXIT_ERROR: int = 1
EXIT_INFRA: int = 2


def _configure_logging(verbosity: int) -> None:
    """Set up the ``sfclint`` logger: 0 → WARNING, 1 → INFO, 2+ → DEBUG."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root = logging.getLogger("sfclint")
    # repeated main() calls in one process must not stack handlers
    for old in [h for h in root.handlers if isinstance(h, logging.StreamHandler)]:
        root.removeHandler(old)
    root.setLevel(level)
    root.addHandler(handler)


def _iter_sources(paths: Sequence[str]) -> Iterator[Path]:
    """Expand directories into the ``.vue`` files beneath them."""
    for raw in paths:
        p = Path(raw).expanduser()
        if p.is_dir():
            yield from sorted(f for f in p.rglob("*.vue") if f.is_file())
        else:
            yield p


def _emit_results(results: CheckerRunResults, fmt: str, stream: TextIO) -> None:
    if fmt == "json":
        text = results.to_json_lines()
    elif fmt == "summary":
        text = results.to_gcc_format()
        text = f"{text}\n{results.summary()}" if text else results.summary()
    else:
        text = results.to_gcc_format()
    if text:
        stream.write(text + "\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sfclint",
        description="Report components used in .vue templates but never registered.",
    )
    parser.add_argument("paths", nargs="*", help=".vue files or directories to check")
    parser.add_argument(
        "--config", metavar="FILE", default=None,
        help="Configuration file (default: nearest .sfclintrc.json)",
    )
    parser.add_argument(
        "--ignore-pattern", dest="ignore_patterns", action="append", default=[],
        metavar="REGEX", help="Component name pattern to ignore (repeatable)",
    )
    parser.add_argument(
        "--rule", dest="rules", action="append", default=None,
        metavar="NAME", help="Only run the named rule (repeatable)",
    )
    parser.add_argument(
        "--format", choices=["gcc", "json", "summary"], default="gcc",
        help="Output format",
    )
    parser.add_argument(
        "--list-rules", action="store_true",
        help="List available rules and exit",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None, stream: Optional[TextIO] = None) -> int:
    args = build_parser().parse_args(argv)
    out = stream or sys.stdout
    _configure_logging(args.verbose)

    registry = default_registry()
    if args.list_rules:
        for name in registry.names:
            cls = registry.get_by_name(name)
            out.write(f"  {name:30s} {cls.description if cls else ''}\n")
        return EXIT_OK

    if not args.paths:
        _log.error("no input paths given")
        return EXIT_INFRA

    try:
        config_path = args.config or find_config(args.paths[0])
        config = load_config(config_path, registry, args.ignore_patterns)
        for name in config.disabled():
            registry.disable(name)
        runner = CheckerRunner(
            registry=registry,
            suppressions=config.suppression_manager(),
            options=config.options(),
            severities=config.severities(),
        )

        results = CheckerRunResults()
        read_failures = 0
        for path in _iter_sources(args.paths):
            try:
                document = parse_file(path)
            except SfcReadError as exc:
                _log.error("%s", exc.message)
                read_failures += 1
                continue
            _log.info("checking %s", path)
            results.merge(runner.run(document, checkers=args.rules))
    except ConfigurationError as exc:
        sys.stderr.write(f"sfclint: {exc}\n")
        return EXIT_INFRA

    _emit_results(results, args.format, out)

    if read_failures:
        return EXIT_INFRA
    return EXIT_ERROR if results.error_count > 0 else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
