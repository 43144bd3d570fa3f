# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List

from .config import PluginConfig, load_config
from .core.diagnostics import Diagnostic
from .driver import check_file
from .errors import ConfigError, EnforceAccessError

logger = logging.getLogger(__name__)


def _diag_to_json(diag: Diagnostic, source: Path) -> dict:
	"""Render a Diagnostic to a structured JSON-friendly dict."""
	file = diag.span.file if diag.span.file is not None else str(source)
	return {
		"phase": diag.phase,
		"code": diag.code,
		"message": diag.message,
		"severity": diag.severity,
		"path": diag.path,
		"file": file,
		"line": diag.span.line,
		"column": diag.span.column,
		"notes": list(diag.notes),
	}


def _error_to_json(err: EnforceAccessError, phase: str) -> dict:
	return {
		"phase": phase,
		"code": err.reason_code,
		"message": err.message,
		"severity": "error",
		"path": None,
		"file": err.path,
		"line": None,
		"column": None,
		"notes": [],
	}


def _build_config(args: argparse.Namespace) -> PluginConfig:
	config = load_config(args.config) if args.config is not None else PluginConfig()
	if args.path:
		config = config.extended(args.path)
	return config


def main(argv: list[str] | None = None) -> int:
	"""
	Check JavaScript sources against a protected-path policy.

	With --json, prints one document `{"exit_code": n, "diagnostics": [...]}`
	to stdout; otherwise prints `file:line:column: severity: message` lines to
	stderr. Exit code 1 when any error is reported, 2 on configuration errors.
	"""
	parser = argparse.ArgumentParser(
		prog="enforce-direct-access",
		description="Reject optional chaining and destructuring on protected access paths",
	)
	parser.add_argument("source", type=Path, nargs="+", help="Path(s) to JavaScript source file(s)")
	parser.add_argument("--config", type=Path, default=None, help='JSON config file ({"paths": [...]})')
	parser.add_argument(
		"--path",
		action="append",
		default=[],
		metavar="PATH",
		help="Protected access path (repeatable; appended after --config paths)",
	)
	parser.add_argument("--json", action="store_true", help="Emit diagnostics as JSON")
	parser.add_argument("--warn", action="store_true", help="Report policy violations as warnings")
	parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
	args = parser.parse_args(argv)

	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.WARNING,
		format="%(levelname)s %(name)s: %(message)s",
	)

	try:
		config = _build_config(args)
	except ConfigError as err:
		if args.json:
			print(json.dumps({"exit_code": 2, "diagnostics": [_error_to_json(err, "config")]}))
		else:
			print(f"{err.path or '<config>'}:?:?: error: {err.format_human()}", file=sys.stderr)
		return 2

	results: list[tuple[Path, List[Diagnostic]]] = []
	for source_path in args.source:
		try:
			diags = check_file(source_path, config)
		except EnforceAccessError as err:
			diags = [
				Diagnostic(
					message=err.message,
					code=err.reason_code,
					phase="driver",
					severity="error",
				)
			]
		if args.warn:
			diags = [replace(d, severity="warning") if d.phase == "policy" else d for d in diags]
		results.append((source_path, diags))

	exit_code = 1 if any(d.severity == "error" for _, diags in results for d in diags) else 0
	logger.debug("checked %d file(s), exit code %d", len(results), exit_code)

	if args.json:
		payload = {
			"exit_code": exit_code,
			"diagnostics": [_diag_to_json(d, source_path) for source_path, diags in results for d in diags],
		}
		print(json.dumps(payload))
	else:
		for source_path, diags in results:
			for d in diags:
				file = d.span.file if d.span.file is not None else str(source_path)
				print(f"{file}:{d.span.describe()}: {d.severity}: {d.message}", file=sys.stderr)
				for note in d.notes:
					print(f"{file}:{d.span.describe()}: note: {note}", file=sys.stderr)
	return exit_code


__all__ = ["main"]
