# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Common diagnostic structure for the checker and the driver.

A diagnostic is a message plus a code, the protected path it names (for policy
violations) and the span of the triggering node. Diagnostics are plain data:
emitting one never alters the tree or stops the walk.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .span import Span


class DiagnosticKind(Enum):
	"""Policy violation kinds, each with a stable code and a message template."""

	OPTIONAL_CHAINING = (
		"E_OPTIONAL_CHAINING",
		"Optional chaining with '{path}' is unsafe: access it directly so it can be statically replaced",
	)
	DESTRUCTURING_WITH_OPTIONAL = (
		"E_DESTRUCTURING_WITH_OPTIONAL",
		"Destructuring with optional chaining on '{path}' is unsafe: access its properties directly",
	)
	DESTRUCTURING = (
		"E_DESTRUCTURING",
		"Destructuring '{path}' is unsafe: access it directly so it can be statically replaced",
	)

	def __init__(self, code: str, template: str) -> None:
		self.code = code
		self.template = template

	def render(self, path: str) -> str:
		return self.template.format(path=path)


@dataclass
class Diagnostic:
	"""Represents a checker diagnostic (error/warning)."""

	message: str
	code: str | None = None
	# "policy" for rule violations, "parser" for front-end failures.
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Source location (Span() denotes unknown).
	# Protected path the violation names; None for non-policy diagnostics.
	path: str | None = None
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	@classmethod
	def violation(cls, kind: DiagnosticKind, path: str, span: Span) -> "Diagnostic":
		return cls(
			message=kind.render(path),
			code=kind.code,
			phase="policy",
			span=span,
			path=path,
		)


__all__ = ["Diagnostic", "DiagnosticKind"]
