# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Command-line driver: read PN-encoded manifests, validate them, print
diagnostics.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

from manifestc.core.diagnostics import Diagnostic, has_errors
from manifestc.core.issues import Strictness
from manifestc.core.span import Span
from manifestc.parser.pn import PNError, read_pn
from manifestc.validator import validate_manifest, validate_workflow

logger = logging.getLogger(__name__)

_STRICTNESS = {
	"off": Strictness.OFF,
	"warning": Strictness.WARNING,
	"error": Strictness.ERROR,
}


def check_file(source_path: Path, strict: Strictness, workflow: bool) -> List[Diagnostic]:
	"""Read and validate one file. Reader failures come back as diagnostics."""
	logger.debug("reading %s", source_path)
	try:
		root = read_pn(source_path.read_text(encoding="utf-8"))
	except PNError as exc:
		line = exc.loc.line if exc.loc is not None else None
		column = exc.loc.column if exc.loc is not None else None
		return [Diagnostic(message=exc.reason, phase="reader", span=Span(file=str(source_path), line=line, column=column))]
	except OSError as exc:
		return [Diagnostic(message=f"cannot read file: {exc.strerror or exc}", phase="reader", span=Span(file=str(source_path)))]
	except UnicodeDecodeError as exc:
		return [Diagnostic(message=f"file is not valid UTF-8: {exc.reason} at byte {exc.start}", phase="reader", span=Span(file=str(source_path)))]
	validate = validate_workflow if workflow else validate_manifest
	return validate(root, strict, file=str(source_path))


def _diag_to_json(diag: Diagnostic, source: Path) -> dict:
	"""Render a Diagnostic to a structured JSON-friendly dict."""
	return {
		"phase": diag.phase,
		"code": diag.code.value if diag.code is not None else None,
		"message": diag.message,
		"severity": diag.severity,
		"file": diag.span.file or str(source),
		"line": diag.span.line,
		"column": diag.span.column,
		"notes": list(diag.notes),
	}


def main(argv: list[str] | None = None) -> int:
	"""
	Validate each source file and report every diagnostic.

	Exit code is 1 when any error-severity diagnostic was produced (warnings
	alone do not fail). With --json, prints {"exit_code", "diagnostics"} to
	stdout; otherwise prints one line per diagnostic to stderr.
	"""
	parser = argparse.ArgumentParser(prog="manifestc", description="Semantic validator for PN-encoded manifests")
	parser.add_argument("source", type=Path, nargs="+", help="Path(s) to PN files")
	parser.add_argument(
		"--strict",
		choices=sorted(_STRICTNESS),
		default="error",
		help="Severity of demotable issues such as statements with no effect (default: error)",
	)
	parser.add_argument(
		"--workflow",
		action="store_true",
		help="Also apply workflow activity checks",
	)
	parser.add_argument(
		"--json",
		action="store_true",
		help="Emit diagnostics as JSON (phase/code/message/severity/file/line/column)",
	)
	parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
	args = parser.parse_args(argv)

	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.WARNING,
		format="%(levelname)s %(name)s: %(message)s",
	)

	strict = _STRICTNESS[args.strict]
	reported: list[tuple[Path, Diagnostic]] = []
	for source_path in args.source:
		for diag in check_file(source_path, strict, args.workflow):
			reported.append((source_path, diag))

	exit_code = 1 if has_errors([d for _, d in reported]) else 0
	if args.json:
		payload = {
			"exit_code": exit_code,
			"diagnostics": [_diag_to_json(d, src) for src, d in reported],
		}
		print(json.dumps(payload))
	else:
		for _, diag in reported:
			print(str(diag), file=sys.stderr)
	return exit_code


if __name__ == "__main__":
	raise SystemExit(main())
