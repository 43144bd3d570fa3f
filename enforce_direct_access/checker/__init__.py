# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Direct-access policy checker.

One `EnforceDirectAccessChecker` is created per compilation unit from a
`PluginConfig`. `check(program)` walks the tree once and returns the policy
diagnostics in the order they were found:

- optional-chain expressions go through `check_optional_chain`;
- variable declarators with an object pattern go through
  `check_destructuring`.

Both rules run before the walker descends into the node's children, and the
walker always descends, so violations nested anywhere are found.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ..config import PluginConfig
from ..core.diagnostics import Diagnostic
from ..parser import ast as A
from .destructuring import check_destructuring
from .optional_chain import check_optional_chain
from .paths import ResolvedPath, resolve_path
from .policy import PolicyStore
from .walker import Visitor, iter_children


@dataclass
class CheckResult:
	diagnostics: List[Diagnostic] = field(default_factory=list)

	@property
	def ok(self) -> bool:
		return not self.diagnostics


class _PolicyVisitor(Visitor):
	def __init__(self, policy: PolicyStore, diagnostics: List[Diagnostic]) -> None:
		self.policy = policy
		self.diagnostics = diagnostics

	def visit_OptChainExpr(self, node: A.OptChainExpr) -> None:
		check_optional_chain(node, self.policy, self.diagnostics)
		self.visit_children(node)

	def visit_VarDeclarator(self, node: A.VarDeclarator) -> None:
		if isinstance(node.name, A.ObjectPat) and node.init is not None:
			check_destructuring(node, self.policy, self.diagnostics)
		self.visit_children(node)


class EnforceDirectAccessChecker:
	def __init__(self, config: PluginConfig | None = None) -> None:
		config = config or PluginConfig()
		self.policy = PolicyStore.from_paths(config.paths)

	@property
	def enabled(self) -> bool:
		return self.policy.enabled

	def check(self, program: A.Node) -> CheckResult:
		result = CheckResult()
		if not self.enabled:
			return result
		_PolicyVisitor(self.policy, result.diagnostics).visit(program)
		return result


__all__ = [
	"CheckResult",
	"EnforceDirectAccessChecker",
	"PolicyStore",
	"ResolvedPath",
	"Visitor",
	"check_destructuring",
	"check_optional_chain",
	"iter_children",
	"resolve_path",
]
