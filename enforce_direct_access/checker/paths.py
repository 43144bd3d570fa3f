# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Dotted-path resolution for member-access chains.

`resolve_path` walks from an expression towards its innermost object and
rebuilds the canonical dotted spelling of the access:

	process.env.API_KEY      -> ("process.env.API_KEY", False)
	process?.env             -> ("process.env", True)
	import.meta.env          -> ("import.meta.env", False)
	process["env"]           -> None   (computed access)
	getEnv().API_KEY         -> None   (call in the chain)

Only identifier-keyed member links, identifier-keyed optional-chain member
links, a bare identifier root and the `import.meta` / `new.target`
meta-properties are understood. Any other node anywhere in the chain makes the
whole expression unresolvable; partial paths are never returned.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ..parser import ast as A


@dataclass(frozen=True)
class ResolvedPath:
	path: str
	# True when at least one optional-chain link was crossed.
	has_optional: bool = False


def resolve_path(expr: A.Expr) -> Optional[ResolvedPath]:
	parts: List[str] = []
	has_optional = False
	current: A.Expr = expr
	while True:
		if isinstance(current, A.MemberExpr):
			if not isinstance(current.prop, A.Ident):
				return None
			parts.insert(0, current.prop.name)
			current = current.obj
		elif isinstance(current, A.OptChainExpr):
			has_optional = True
			base = current.base
			if not isinstance(base, A.MemberExpr) or not isinstance(base.prop, A.Ident):
				return None
			parts.insert(0, base.prop.name)
			current = base.obj
		elif isinstance(current, A.Ident):
			parts.insert(0, current.name)
			break
		elif isinstance(current, A.MetaPropExpr):
			parts[0:0] = current.kind.value.split(".")
			break
		else:
			return None

	if not parts:
		return None
	return ResolvedPath(path=".".join(parts), has_optional=has_optional)


__all__ = ["ResolvedPath", "resolve_path"]
