# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Parser adapter: source text -> `Program` plus parser-phase diagnostics.

Collects lark syntax errors and tree-builder rejections as diagnostics instead
of raising, so the driver can report them alongside checker results.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional

from lark.exceptions import UnexpectedInput

from ..core.diagnostics import Diagnostic
from ..core.span import Span
from . import ast
from .parser import MetaPropertyError, ParseError, PatternError, parse_program


@dataclass
class ParseResult:
	program: Optional[ast.Program]
	diagnostics: List[Diagnostic] = field(default_factory=list)


def parse_source(source: str, *, file: Optional[str] = None) -> ParseResult:
	"""Parse `source`; on failure return no program and one `E_PARSE` diagnostic."""
	try:
		program = parse_program(source)
	except ParseError as err:
		return ParseResult(program=None, diagnostics=[_parse_diagnostic(str(err), replace(err.loc, file=file))])
	except UnexpectedInput as err:
		span = Span(
			file=file,
			line=getattr(err, "line", None),
			column=getattr(err, "column", None),
		)
		diag = _parse_diagnostic(_describe_unexpected(err), span, notes=_expected_notes(err))
		return ParseResult(program=None, diagnostics=[diag])
	return ParseResult(program=program)


def _parse_diagnostic(message: str, span: Span, notes: Optional[List[str]] = None) -> Diagnostic:
	return Diagnostic(
		message=message,
		code="E_PARSE",
		phase="parser",
		severity="error",
		span=span,
		notes=list(notes or []),
	)


def _describe_unexpected(err: UnexpectedInput) -> str:
	# lark messages span several lines (context + expected set); keep the first.
	text = str(err).strip()
	return text.splitlines()[0] if text else "syntax error"


def _expected_notes(err: UnexpectedInput) -> List[str]:
	# UnexpectedToken carries `expected`, UnexpectedCharacters `allowed`.
	expected = getattr(err, "expected", None) or getattr(err, "allowed", None)
	if not expected:
		return []
	return [f"expected one of: {', '.join(sorted(expected))}"]


__all__ = [
	"MetaPropertyError",
	"ParseError",
	"ParseResult",
	"PatternError",
	"ast",
	"parse_program",
	"parse_source",
]
