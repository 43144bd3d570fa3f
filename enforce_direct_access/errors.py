# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class EnforceAccessError(Exception):
	"""
	A structured, serializable error raised outside the checker core.

	Policy violations are never raised; they are diagnostics. This covers the
	failures around them (bad configuration, unreadable inputs).
	"""

	reason_code: str
	message: str
	path: str | None = None  # file the failure relates to, when known

	def __str__(self) -> str:
		return self.format_human()

	def to_dict(self) -> dict[str, Any]:
		return {
			"reason_code": self.reason_code,
			"message": self.message,
			"path": self.path,
		}

	def format_human(self) -> str:
		parts: list[str] = [f"[{self.reason_code}] {self.message}"]
		if self.path:
			parts.append(f"path={self.path}")
		return " ".join(parts)


@dataclass(frozen=True)
class ConfigError(EnforceAccessError):
	pass


__all__ = ["ConfigError", "EnforceAccessError"]
