# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Parse-and-check pipeline for one compilation unit.

`check_source` never raises for bad input text: parse failures come back as a
single `E_PARSE` diagnostic so callers can render every file the same way.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .checker import EnforceDirectAccessChecker
from .config import PluginConfig
from .core.diagnostics import Diagnostic
from .errors import EnforceAccessError
from .parser import parse_source

logger = logging.getLogger(__name__)


def check_source(source: str, config: PluginConfig, *, file: Optional[str] = None) -> List[Diagnostic]:
	checker = EnforceDirectAccessChecker(config)
	parsed = parse_source(source, file=file)
	if parsed.program is None:
		logger.debug("%s: parse failed", file or "<source>")
		return parsed.diagnostics
	if not checker.enabled:
		logger.debug("%s: no protected paths configured", file or "<source>")
	result = checker.check(parsed.program)
	logger.debug("%s: %d violation(s)", file or "<source>", len(result.diagnostics))
	if file is None:
		return result.diagnostics
	return [replace(d, span=replace(d.span, file=file)) for d in result.diagnostics]


def check_file(path: Path | str, config: PluginConfig) -> List[Diagnostic]:
	path = Path(path)
	try:
		source = path.read_text(encoding="utf-8")
	except (OSError, UnicodeDecodeError) as err:
		raise EnforceAccessError(reason_code="source-unreadable", message=str(err), path=str(path)) from err
	return check_source(source, config, file=str(path))


__all__ = ["check_file", "check_source"]
