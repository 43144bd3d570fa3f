# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from typing import List

from ..core.diagnostics import Diagnostic, DiagnosticKind
from ..parser import ast as A
from .paths import resolve_path
from .policy import PolicyStore


def check_optional_chain(expr: A.OptChainExpr, policy: PolicyStore, diagnostics: List[Diagnostic]) -> None:
	"""
	Flag optional chaining at (or immediately after) a protected path.

	For `obj?.prop` the object path and `object_path.prop` are compared with
	each protected path in store order; the first exact match reports one
	diagnostic. Chaining deeper than a protected path
	(`process.env.API_KEY?.trim()` for `process.env`) is allowed.
	"""
	if not policy.enabled:
		return
	member = expr.base
	if not isinstance(member, A.MemberExpr):
		return
	resolved = resolve_path(member.obj)
	if resolved is None:
		return
	object_path = resolved.path
	full_path = f"{object_path}.{member.prop.name}" if isinstance(member.prop, A.Ident) else None

	for protected in policy:
		if object_path == protected or (full_path is not None and full_path == protected):
			diagnostics.append(Diagnostic.violation(DiagnosticKind.OPTIONAL_CHAINING, protected, expr.span))
			return


__all__ = ["check_optional_chain"]
