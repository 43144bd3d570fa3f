# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lightweight source span representation used by syntax nodes and diagnostics.

Lines and columns are 1-based; `start`/`end` are 0-based character offsets
into the source text. A default-constructed Span() denotes an unknown location.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Represents a source span (best-effort file/line/column plus offsets)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	end_line: Optional[int] = None
	end_column: Optional[int] = None
	start: Optional[int] = None
	end: Optional[int] = None

	@classmethod
	def from_meta(cls, meta: Any) -> "Span":
		"""
		Construct a Span from a lark `Meta` (or `Token`) object.

		Trees built with `propagate_positions=True` carry a `meta` with
		line/column/end_line/end_column/start_pos/end_pos. Empty rules have no
		position, in which case an unknown Span is returned.
		"""
		if meta is None or getattr(meta, "empty", False):
			return cls()
		return cls(
			line=getattr(meta, "line", None),
			column=getattr(meta, "column", None),
			end_line=getattr(meta, "end_line", None),
			end_column=getattr(meta, "end_column", None),
			start=getattr(meta, "start_pos", None),
			end=getattr(meta, "end_pos", None),
		)

	def describe(self) -> str:
		"""Render `line:column` (or `?:?` when unknown)."""
		line = self.line if self.line is not None else "?"
		column = self.column if self.column is not None else "?"
		return f"{line}:{column}"


__all__ = ["Span"]
