# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Protected-path store.

Built once per checker from the configured `paths` list. Duplicates are
dropped; the first occurrence fixes a path's position in `ordered`, which is
the scan order the optional-chain rule uses. An empty store disables every
rule.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Iterator, Tuple


@dataclass(frozen=True)
class PolicyStore:
	ordered: Tuple[str, ...] = ()
	_members: FrozenSet[str] = field(default=frozenset(), init=False, repr=False, compare=False)

	def __post_init__(self) -> None:
		object.__setattr__(self, "_members", frozenset(self.ordered))

	@classmethod
	def from_paths(cls, paths: Iterable[str]) -> "PolicyStore":
		return cls(ordered=tuple(dict.fromkeys(paths)))

	@property
	def enabled(self) -> bool:
		return bool(self.ordered)

	def __contains__(self, path: object) -> bool:
		return path in self._members

	def __iter__(self) -> Iterator[str]:
		return iter(self.ordered)

	def __len__(self) -> int:
		return len(self.ordered)


__all__ = ["PolicyStore"]
