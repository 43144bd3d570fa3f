# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from typing import List, Optional

from ..core.diagnostics import Diagnostic, DiagnosticKind
from ..parser import ast as A
from .paths import resolve_path
from .policy import PolicyStore


def check_destructuring(declarator: A.VarDeclarator, policy: PolicyStore, diagnostics: List[Diagnostic]) -> None:
	"""
	Flag object destructuring that reaches a protected path.

	- `const { API_KEY } = process?.env` (optional-chained initializer that is
	  itself protected) reports once and stops;
	- `const { env } = process` reports every binding whose
	  `init_path.name` is protected, unless the initializer went through
	  optional chaining.
	"""
	if not policy.enabled:
		return
	pattern = declarator.name
	if not isinstance(pattern, A.ObjectPat) or declarator.init is None:
		return
	resolved = resolve_path(declarator.init)
	if resolved is None:
		return

	if resolved.has_optional and resolved.path in policy:
		diagnostics.append(
			Diagnostic.violation(DiagnosticKind.DESTRUCTURING_WITH_OPTIONAL, resolved.path, declarator.span)
		)
		return

	for prop in pattern.props:
		name = _binding_key(prop)
		if name is None:
			continue
		candidate = f"{resolved.path}.{name}"
		if candidate in policy and not resolved.has_optional:
			diagnostics.append(Diagnostic.violation(DiagnosticKind.DESTRUCTURING, candidate, declarator.span))


def _binding_key(prop: A.ObjectPatProp) -> Optional[str]:
	# String, numeric and computed keys are not resolvable; rest elements bind no key.
	if isinstance(prop, A.KeyValuePatProp):
		return prop.key.name if isinstance(prop.key, A.Ident) else None
	if isinstance(prop, A.AssignPatProp):
		return prop.key.name
	return None


__all__ = ["check_destructuring"]
