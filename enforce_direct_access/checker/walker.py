# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Read-only pre-order traversal over the syntax tree.

`Visitor.visit` dispatches on the node's class name to a `visit_<ClassName>`
hook when the subclass defines one, otherwise it just descends. A hook decides
what to do with its node and calls `visit_children` to keep walking; the
traversal itself never changes the tree.
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from typing import Iterator

from ..parser import ast as A


def iter_children(node: A.Node) -> Iterator[A.Node]:
	"""Yield the direct child nodes of `node` in field order."""
	if not is_dataclass(node):
		return
	for f in fields(node):
		value = getattr(node, f.name, None)
		if isinstance(value, A.Node):
			yield value
		elif isinstance(value, list):
			for item in value:
				if isinstance(item, A.Node):
					yield item


class Visitor:
	def visit(self, node: A.Node) -> None:
		hook = getattr(self, f"visit_{type(node).__name__}", None)
		if hook is None:
			self.visit_children(node)
		else:
			hook(node)

	def visit_children(self, node: A.Node) -> None:
		for child in iter_children(node):
			self.visit(child)


__all__ = ["Visitor", "iter_children"]
