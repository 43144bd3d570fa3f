# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Syntax tree for the supported ECMAScript subset.

Nodes are plain dataclasses; every field that holds a child node (or a list of
child nodes) is part of the generic traversal in `checker.walker`. Node shapes
follow the ESTree/SWC hosts where the checker cares about them:

- `MemberExpr` is a plain `obj.prop` / `obj[expr]` access;
- `OptChainExpr` wraps every link of an optional chain. The link written with
  `?.` has `optional=True`; later links of the same chain (`a?.b.c` -> `.c`)
  have `optional=False`. Parentheses end a chain;
- `MetaPropExpr` is `import.meta` / `new.target`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from ..core.span import Span


class Node:
	"""Base class for all syntax nodes."""
	span: Span


class Expr(Node):
	"""Base class for expressions."""
	pass


class Stmt(Node):
	"""Base class for statements."""
	pass


class Pat(Node):
	"""Base class for binding patterns."""
	pass


# Expressions

@dataclass
class Ident(Expr):
	name: str
	span: Span = field(default_factory=Span)


@dataclass
class Literal(Expr):
	"""Number, string, boolean or null literal."""
	value: object
	raw: str
	span: Span = field(default_factory=Span)


@dataclass
class ThisExpr(Expr):
	span: Span = field(default_factory=Span)


@dataclass
class ComputedProp(Node):
	"""Computed member key: the `expr` in `obj[expr]`."""
	expr: Expr
	span: Span = field(default_factory=Span)


MemberProp = Union[Ident, ComputedProp]


@dataclass
class MemberExpr(Expr):
	obj: Expr
	prop: MemberProp
	span: Span = field(default_factory=Span)


@dataclass
class CallExpr(Expr):
	callee: Expr
	args: List[Expr]
	span: Span = field(default_factory=Span)


@dataclass
class OptChainExpr(Expr):
	"""One link of an optional chain. `base` is a MemberExpr or a CallExpr."""
	base: Union[MemberExpr, CallExpr]
	optional: bool
	span: Span = field(default_factory=Span)


class MetaPropKind(Enum):
	IMPORT_META = "import.meta"
	NEW_TARGET = "new.target"


@dataclass
class MetaPropExpr(Expr):
	kind: MetaPropKind
	span: Span = field(default_factory=Span)


@dataclass
class NewExpr(Expr):
	callee: Expr
	args: List[Expr]
	span: Span = field(default_factory=Span)


@dataclass
class SpreadElement(Expr):
	arg: Expr
	span: Span = field(default_factory=Span)


@dataclass
class ArrayLit(Expr):
	elems: List[Expr]
	span: Span = field(default_factory=Span)


@dataclass
class KeyValueProp(Node):
	key: "PropName"
	value: Expr
	span: Span = field(default_factory=Span)


@dataclass
class ShorthandProp(Node):
	key: Ident
	span: Span = field(default_factory=Span)


@dataclass
class MethodProp(Node):
	key: "PropName"
	params: List[Pat]
	body: "Block"
	is_async: bool = False
	span: Span = field(default_factory=Span)


@dataclass
class ObjectLit(Expr):
	props: List[Union[KeyValueProp, ShorthandProp, MethodProp, SpreadElement]]
	span: Span = field(default_factory=Span)


@dataclass
class UnaryExpr(Expr):
	"""Prefix operators, including `typeof`, `void`, `delete` and `await`."""
	op: str
	arg: Expr
	span: Span = field(default_factory=Span)


@dataclass
class UpdateExpr(Expr):
	op: str
	prefix: bool
	arg: Expr
	span: Span = field(default_factory=Span)


@dataclass
class BinaryExpr(Expr):
	"""Arithmetic, bitwise, comparison (`in`, `instanceof`) and logical (`&&`, `||`, `??`) operators."""
	op: str
	left: Expr
	right: Expr
	span: Span = field(default_factory=Span)


@dataclass
class CondExpr(Expr):
	test: Expr
	cons: Expr
	alt: Expr
	span: Span = field(default_factory=Span)


@dataclass
class AssignExpr(Expr):
	op: str
	target: Expr
	value: Expr
	span: Span = field(default_factory=Span)


@dataclass
class SeqExpr(Expr):
	exprs: List[Expr]
	span: Span = field(default_factory=Span)


@dataclass
class TemplateLit(Expr):
	"""
	Template literal. `quasis` are the raw text chunks around the `${...}`
	substitutions, so `len(quasis) == len(exprs) + 1`.
	"""
	quasis: List[str]
	exprs: List[Expr]
	span: Span = field(default_factory=Span)


@dataclass
class ParenExpr(Expr):
	expr: Expr
	span: Span = field(default_factory=Span)


@dataclass
class FunctionExpr(Expr):
	name: Optional[Ident]
	params: List[Pat]
	body: "Block"
	is_async: bool = False
	span: Span = field(default_factory=Span)


@dataclass
class ArrowExpr(Expr):
	params: List[Pat]
	body: Union["Block", Expr]
	is_async: bool = False
	span: Span = field(default_factory=Span)


# Property names (object literal keys and object pattern keys)

@dataclass
class StrKey(Node):
	value: str
	span: Span = field(default_factory=Span)


@dataclass
class NumKey(Node):
	value: str
	span: Span = field(default_factory=Span)


PropName = Union[Ident, StrKey, NumKey, ComputedProp]


# Patterns

@dataclass
class IdentPat(Pat):
	name: str
	span: Span = field(default_factory=Span)


@dataclass
class AssignPat(Pat):
	"""Pattern with a default value: `left = right`."""
	left: Pat
	right: Expr
	span: Span = field(default_factory=Span)


@dataclass
class RestPat(Pat):
	arg: Pat
	span: Span = field(default_factory=Span)


@dataclass
class KeyValuePatProp(Node):
	"""`{ key: value }` entry of an object pattern."""
	key: PropName
	value: Pat
	span: Span = field(default_factory=Span)


@dataclass
class AssignPatProp(Node):
	"""Shorthand `{ key }` / `{ key = default }` entry of an object pattern."""
	key: Ident
	value: Optional[Expr] = None
	span: Span = field(default_factory=Span)


ObjectPatProp = Union[KeyValuePatProp, AssignPatProp, RestPat]


@dataclass
class ObjectPat(Pat):
	props: List[ObjectPatProp]
	span: Span = field(default_factory=Span)


@dataclass
class ArrayPat(Pat):
	elems: List[Pat]
	span: Span = field(default_factory=Span)


# Statements

@dataclass
class Block(Stmt):
	statements: List[Stmt]
	span: Span = field(default_factory=Span)


@dataclass
class VarDeclarator(Node):
	name: Pat
	init: Optional[Expr]
	span: Span = field(default_factory=Span)


@dataclass
class VarDecl(Stmt):
	kind: str  # "const" | "let" | "var"
	declarators: List[VarDeclarator]
	span: Span = field(default_factory=Span)


@dataclass
class ExprStmt(Stmt):
	expr: Expr
	span: Span = field(default_factory=Span)


@dataclass
class ReturnStmt(Stmt):
	value: Optional[Expr]
	span: Span = field(default_factory=Span)


@dataclass
class ThrowStmt(Stmt):
	value: Expr
	span: Span = field(default_factory=Span)


@dataclass
class IfStmt(Stmt):
	test: Expr
	cons: Stmt
	alt: Optional[Stmt] = None
	span: Span = field(default_factory=Span)


@dataclass
class FunctionDecl(Stmt):
	name: Ident
	params: List[Pat]
	body: Block
	is_async: bool = False
	span: Span = field(default_factory=Span)


@dataclass
class EmptyStmt(Stmt):
	span: Span = field(default_factory=Span)


@dataclass
class ImportSpecifier(Node):
	"""`imported as local`; `imported` is None for default imports, "*" for namespaces."""
	imported: Optional[str]
	local: Ident
	span: Span = field(default_factory=Span)


@dataclass
class ImportDecl(Stmt):
	specifiers: List[ImportSpecifier]
	source: str
	span: Span = field(default_factory=Span)


@dataclass
class ExportDecl(Stmt):
	decl: Union[VarDecl, FunctionDecl]
	span: Span = field(default_factory=Span)


@dataclass
class ExportDefault(Stmt):
	expr: Expr
	span: Span = field(default_factory=Span)


@dataclass
class Program(Node):
	body: List[Stmt]
	span: Span = field(default_factory=Span)


__all__ = [
	"ArrayLit",
	"ArrayPat",
	"ArrowExpr",
	"AssignExpr",
	"AssignPat",
	"AssignPatProp",
	"BinaryExpr",
	"Block",
	"CallExpr",
	"ComputedProp",
	"CondExpr",
	"EmptyStmt",
	"ExportDecl",
	"ExportDefault",
	"Expr",
	"ExprStmt",
	"FunctionDecl",
	"FunctionExpr",
	"Ident",
	"IdentPat",
	"IfStmt",
	"ImportDecl",
	"ImportSpecifier",
	"KeyValuePatProp",
	"KeyValueProp",
	"Literal",
	"MemberExpr",
	"MemberProp",
	"MetaPropExpr",
	"MetaPropKind",
	"MethodProp",
	"NewExpr",
	"Node",
	"NumKey",
	"ObjectLit",
	"ObjectPat",
	"ObjectPatProp",
	"OptChainExpr",
	"ParenExpr",
	"Pat",
	"PropName",
	"Program",
	"RestPat",
	"ReturnStmt",
	"SeqExpr",
	"ShorthandProp",
	"SpreadElement",
	"Stmt",
	"StrKey",
	"TemplateLit",
	"ThisExpr",
	"ThrowStmt",
	"UnaryExpr",
	"UpdateExpr",
	"VarDecl",
	"VarDeclarator",
]
