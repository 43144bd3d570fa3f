# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
lark front-end: source text -> `ast.Program`.

The grammar lives next to this file (`grammar.lark`). Parsing is LALR with the
basic lexer; `TerminatorInserter` sits between the lexer and the parser and
implements automatic semicolon insertion plus the two token-context decisions
the grammar cannot make on its own (block vs object braces, function
declaration vs function expression).
"""

from __future__ import annotations

import ast as py_ast
from pathlib import Path
from typing import List, Optional, Tuple

from lark import Lark, Token, Tree

from ..core.span import Span
from .ast import (
	ArrayLit,
	ArrayPat,
	ArrowExpr,
	AssignExpr,
	AssignPat,
	AssignPatProp,
	BinaryExpr,
	Block,
	CallExpr,
	ComputedProp,
	CondExpr,
	EmptyStmt,
	ExportDecl,
	ExportDefault,
	Expr,
	ExprStmt,
	FunctionDecl,
	FunctionExpr,
	Ident,
	IdentPat,
	IfStmt,
	ImportDecl,
	ImportSpecifier,
	KeyValuePatProp,
	KeyValueProp,
	Literal,
	MemberExpr,
	MetaPropExpr,
	MetaPropKind,
	MethodProp,
	NewExpr,
	NumKey,
	ObjectLit,
	ObjectPat,
	OptChainExpr,
	ParenExpr,
	Pat,
	Program,
	PropName,
	RestPat,
	ReturnStmt,
	SeqExpr,
	ShorthandProp,
	SpreadElement,
	Stmt,
	StrKey,
	TemplateLit,
	ThisExpr,
	ThrowStmt,
	UnaryExpr,
	UpdateExpr,
	VarDecl,
	VarDeclarator,
)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()


class ParseError(ValueError):
	"""
	Source rejected by the tree builder after lark accepted the token stream.

	Examples: `import.foo`, an arrow parameter list that is not a valid pattern,
	a `{ a = 1 }` initializer outside of a destructuring pattern. Carries the
	span of the offending construct so callers can report a diagnostic.
	"""

	def __init__(self, message: str, *, loc: Span) -> None:
		super().__init__(message)
		self.loc = loc


class MetaPropertyError(ParseError):
	"""`import.<name>` / `new.<name>` with a name other than `meta` / `target`."""


class PatternError(ParseError):
	"""An expression used where a binding pattern is required."""


class TerminatorInserter:
	"""
	Postlexer turning `;` and significant newlines into TERMINATOR tokens.

	A newline terminates a statement when the previous token can end one, the
	innermost open bracket is a block (or none is open) and the next token does
	not continue the expression. A terminator is also inserted before a `}`
	that closes a block and at the end of input.

	With `statements=False` the stream is a single expression (a template
	substitution): only newlines inside function bodies terminate anything.
	"""

	always_accept = ("NEWLINE", "SEMI")

	TERMINABLE = {
		"NAME",
		"NUMBER",
		"STRING",
		"TEMPLATE",
		"TRUE",
		"FALSE",
		"NULL",
		"THIS",
		"RPAR",
		"RSQB",
		"RBRACE",
		"RETURN",
		"INCR",
		"DECR",
	}

	# Keywords are plain property names after `.` / `?.`.
	KEYWORDS = {
		"CONST",
		"LET",
		"VAR",
		"FUNCTION",
		"RETURN",
		"THROW",
		"IF",
		"ELSE",
		"NEW",
		"IMPORT",
		"EXPORT",
		"DEFAULT",
		"THIS",
		"TRUE",
		"FALSE",
		"NULL",
		"TYPEOF",
		"VOID",
		"DELETE",
		"IN",
		"INSTANCEOF",
		"ASYNC",
		"AWAIT",
	}

	# `++` / `--` never continue a line: `a\n++b` is two statements.
	CONTINUATION = {
		"DOT",
		"_OPTDOT",
		"COMMA",
		"COLON",
		"QMARK",
		"NULLISH",
		"ARROW",
		"EQ_OP",
		"REL_OP",
		"IN",
		"INSTANCEOF",
		"ASSIGN_OP",
		"EQUAL",
		"OR",
		"AND",
		"BITOR",
		"BITAND",
		"CARET",
		"SHIFT_OP",
		"PLUS",
		"MINUS",
		"STAR",
		"STARSTAR",
		"SLASH",
		"PERCENT",
		"LPAR",
		"LSQB",
	}

	BLOCK_AFTER = {"RPAR", "ARROW", "ELSE"}

	def __init__(self, statements: bool = True) -> None:
		self.statements = statements
		self._reset()

	def _reset(self) -> None:
		self.brackets: List[str] = []
		self.can_terminate = False
		self.at_statement_start = self.statements
		self.decl_context = False
		self.prev_type: Optional[str] = None
		self.pending: Optional[Token] = None

	def process(self, stream):
		self._reset()
		last: Optional[Token] = None
		for token in stream:
			ttype = token.type
			if ttype == "NEWLINE":
				if self.pending is None and self._should_emit_terminator():
					self.pending = token
				continue
			if self.pending is not None:
				if not self._continues(ttype):
					yield self._terminator(self.pending)
				self.pending = None
			if ttype == "SEMI":
				yield self._terminator(token)
				continue
			if ttype == "RBRACE" and self._innermost() == "block" and self.can_terminate:
				yield self._terminator(token)
			token = self._retype(token)
			yield token
			last = token
			self._advance(token)
		if last is not None and self._should_emit_terminator():
			yield self._terminator(last)

	def _terminator(self, borrow: Token) -> Token:
		self.can_terminate = False
		self.at_statement_start = True
		self.prev_type = "TERMINATOR"
		return Token.new_borrow_pos("TERMINATOR", borrow.value, borrow)

	def _retype(self, token: Token) -> Token:
		if token.type == "LBRACE" and (self.at_statement_start or self.prev_type in self.BLOCK_AFTER):
			return Token.new_borrow_pos("BLOCK_OPEN", token.value, token)
		if token.type == "FUNCTION" and (self.at_statement_start or self.decl_context):
			return Token.new_borrow_pos("FUNCTION_DECL", token.value, token)
		return token

	def _advance(self, token: Token) -> None:
		ttype = token.type
		closed: Optional[str] = None
		if ttype in ("LPAR", "LSQB"):
			self.brackets.append(ttype)
		elif ttype == "LBRACE":
			self.brackets.append("object")
		elif ttype == "BLOCK_OPEN":
			self.brackets.append("block")
		elif ttype in ("RPAR", "RSQB", "RBRACE") and self.brackets:
			closed = self.brackets.pop()
		self.can_terminate = ttype in self.TERMINABLE or (
			ttype in self.KEYWORDS and self.prev_type in ("DOT", "_OPTDOT")
		)
		# `function` after `export` or a statement-initial `async` declares.
		if ttype == "ASYNC":
			self.decl_context = self.at_statement_start or self.decl_context
		else:
			self.decl_context = ttype == "EXPORT"
		self.at_statement_start = ttype == "BLOCK_OPEN" or closed == "block"
		self.prev_type = ttype

	def _innermost(self) -> Optional[str]:
		return self.brackets[-1] if self.brackets else None

	def _should_emit_terminator(self) -> bool:
		innermost = self._innermost()
		return self.can_terminate and (innermost == "block" or (innermost is None and self.statements))

	def _continues(self, next_type: str) -> bool:
		if next_type == "ELSE":
			# `}\nelse` continues an if statement; `x()\nelse` ends its branch.
			return self.prev_type == "RBRACE"
		return next_type in self.CONTINUATION


_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start="program",
	propagate_positions=True,
	maybe_placeholders=False,
	postlex=TerminatorInserter(),
)

# Template substitutions: `${...}` bodies are parsed as standalone expressions.
_EXPR_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start="expr",
	propagate_positions=True,
	maybe_placeholders=False,
	postlex=TerminatorInserter(statements=False),
)


def parse_program(source: str) -> Program:
	"""
	Parse JavaScript source into a `Program`.

	Raises `lark.exceptions.UnexpectedInput` for syntax errors and `ParseError`
	for constructs the tree builder rejects.
	"""
	tree = _PARSER.parse(source)
	return _build_program(tree)


def _build_program(tree: Tree) -> Program:
	return Program(body=[_build_stmt(child) for child in _trees(tree)], span=_span(tree))


def _build_stmt(tree: Tree) -> Stmt:
	kind = _name(tree)
	span = _span(tree)
	if kind == "var_decl":
		return _build_var_decl(tree)
	if kind == "expr_stmt":
		return ExprStmt(expr=_build_expr(_trees(tree)[0]), span=span)
	if kind == "return_stmt":
		children = _trees(tree)
		return ReturnStmt(value=_build_expr(children[0]) if children else None, span=span)
	if kind == "throw_stmt":
		return ThrowStmt(value=_build_expr(_trees(tree)[0]), span=span)
	if kind == "if_stmt":
		children = _trees(tree)
		alt = _build_stmt(children[2]) if len(children) > 2 else None
		return IfStmt(test=_build_expr(children[0]), cons=_build_stmt(children[1]), alt=alt, span=span)
	if kind == "func_decl":
		return _build_function_decl(tree)
	if kind == "block":
		return _build_block(tree)
	if kind == "empty_stmt":
		return EmptyStmt(span=span)
	if kind == "import_from":
		return _build_import(tree)
	if kind == "import_bare":
		source = _tokens(tree, "STRING")[0]
		return ImportDecl(specifiers=[], source=_decode_string(source), span=span)
	if kind == "export_var":
		return ExportDecl(decl=_build_var_decl(_trees(tree)[0]), span=span)
	if kind == "export_func":
		return ExportDecl(decl=_build_function_decl(_trees(tree)[0]), span=span)
	if kind == "export_default":
		return ExportDefault(expr=_build_expr(_trees(tree)[0]), span=span)
	raise ParseError(f"unsupported statement '{kind}'", loc=span)


def _build_var_decl(tree: Tree) -> VarDecl:
	kind_token = next(c for c in tree.children if isinstance(c, Token) and c.type in ("CONST", "LET", "VAR"))
	declarators: List[VarDeclarator] = []
	for child in _trees(tree):
		parts = _trees(child)
		init = _build_expr(parts[1]) if len(parts) > 1 else None
		declarators.append(VarDeclarator(name=_build_pattern(parts[0]), init=init, span=_span(child)))
	return VarDecl(kind=kind_token.value, declarators=declarators, span=_span(tree))


def _build_function_decl(tree: Tree) -> FunctionDecl:
	name_token = _tokens(tree, "NAME")[0]
	return FunctionDecl(
		name=_ident(name_token),
		params=_build_params(_child(tree, "params")),
		body=_build_block(_required_child(tree, "block")),
		is_async=_is_async(tree),
		span=_span(tree),
	)


def _build_block(tree: Tree) -> Block:
	return Block(statements=[_build_stmt(child) for child in _trees(tree)], span=_span(tree))


def _build_params(tree: Optional[Tree]) -> List[Pat]:
	if tree is None:
		return []
	return [_build_pattern(child) for child in _trees(tree)]


def _build_import(tree: Tree) -> ImportDecl:
	clause = _trees(tree)[0]
	from_token, source_token = [c for c in tree.children if isinstance(c, Token) and c.type in ("NAME", "STRING")]
	if from_token.value != "from":
		raise ParseError(f"expected 'from', found '{from_token.value}'", loc=_span(from_token))
	return ImportDecl(
		specifiers=_build_import_clause(clause),
		source=_decode_string(source_token),
		span=_span(tree),
	)


def _build_import_clause(tree: Tree) -> List[ImportSpecifier]:
	kind = _name(tree)
	if kind == "import_default":
		name = _tokens(tree, "NAME")[0]
		return [ImportSpecifier(imported=None, local=_ident(name), span=_span(name))]
	if kind == "import_default_and":
		name = _tokens(tree, "NAME")[0]
		default = ImportSpecifier(imported=None, local=_ident(name), span=_span(name))
		return [default] + _build_import_clause(_trees(tree)[0])
	if kind == "import_namespace":
		as_token, local = _tokens(tree, "NAME")
		_expect_as(as_token)
		return [ImportSpecifier(imported="*", local=_ident(local), span=_span(tree))]
	specifiers: List[ImportSpecifier] = []
	for spec in _trees(tree):
		tokens = [c for c in spec.children if isinstance(c, Token)]
		imported = tokens[0]
		local = imported
		if len(tokens) == 3:
			_expect_as(tokens[1])
			local = tokens[2]
		specifiers.append(ImportSpecifier(imported=imported.value, local=_ident(local), span=_span(spec)))
	return specifiers


def _expect_as(token: Token) -> None:
	if token.value != "as":
		raise ParseError(f"expected 'as', found '{token.value}'", loc=_span(token))


def _build_expr(tree: Tree) -> Expr:
	kind = _name(tree)
	span = _span(tree)
	if kind == "ident":
		return _ident(tree.children[0])
	if kind == "number":
		raw = tree.children[0].value
		return Literal(value=_number_value(raw), raw=raw, span=span)
	if kind == "string":
		token = tree.children[0]
		return Literal(value=_decode_string(token), raw=token.value, span=span)
	if kind == "template":
		return _build_template(tree.children[0], span)
	if kind in ("true", "false"):
		return Literal(value=kind == "true", raw=kind, span=span)
	if kind == "null":
		return Literal(value=None, raw="null", span=span)
	if kind == "this":
		return ThisExpr(span=span)
	if kind == "import_meta":
		return _build_meta_prop(tree, "meta", MetaPropKind.IMPORT_META)
	if kind == "new_target":
		return _build_meta_prop(tree, "target", MetaPropKind.NEW_TARGET)
	if kind in ("member", "opt_member"):
		obj_tree, prop_token = tree.children
		member = MemberExpr(obj=_build_expr(obj_tree), prop=_ident(prop_token), span=span)
		return _chain_link(member, optional=kind == "opt_member")
	if kind in ("computed_member", "opt_computed_member"):
		obj_tree, key_tree = _trees(tree)
		prop = ComputedProp(expr=_build_expr(key_tree), span=_span(key_tree))
		member = MemberExpr(obj=_build_expr(obj_tree), prop=prop, span=span)
		return _chain_link(member, optional=kind == "opt_computed_member")
	if kind in ("call", "opt_call"):
		callee_tree, args_tree = _trees(tree)
		call = CallExpr(callee=_build_expr(callee_tree), args=_build_args(args_tree), span=span)
		return _chain_link(call, optional=kind == "opt_call")
	if kind == "new_expr":
		children = _trees(tree)
		args = _build_args(children[1]) if len(children) > 1 else []
		return NewExpr(callee=_build_expr(children[0]), args=args, span=span)
	if kind == "spread":
		return SpreadElement(arg=_build_expr(_trees(tree)[0]), span=span)
	if kind == "array":
		return ArrayLit(elems=[_build_expr(child) for child in _trees(tree)], span=span)
	if kind == "object":
		return ObjectLit(props=[_build_obj_prop(child) for child in _trees(tree)], span=span)
	if kind == "func_expr":
		names = _tokens(tree, "NAME")
		return FunctionExpr(
			name=_ident(names[0]) if names else None,
			params=_build_params(_child(tree, "params")),
			body=_build_block(_required_child(tree, "block")),
			is_async=_is_async(tree),
			span=span,
		)
	if kind == "arrow_fn":
		params_tree, body_tree = _trees(tree)
		body = _build_block(body_tree) if _name(body_tree) == "block" else _build_expr(body_tree)
		return ArrowExpr(params=_build_arrow_params(params_tree), body=body, is_async=_is_async(tree), span=span)
	if kind == "paren_list":
		items = _trees(tree)
		for item in items:
			if _name(item) == "spread":
				raise ParseError("spread is only valid in arrow function parameters", loc=_span(item))
		if len(items) == 1:
			return ParenExpr(expr=_build_expr(items[0]), span=span)
		return ParenExpr(expr=SeqExpr(exprs=[_build_expr(item) for item in items], span=span), span=span)
	if kind == "assign":
		target_tree, op_token, value_tree = tree.children
		return AssignExpr(op=op_token.value, target=_build_expr(target_tree), value=_build_expr(value_tree), span=span)
	if kind == "cond":
		test, cons, alt = _trees(tree)
		return CondExpr(test=_build_expr(test), cons=_build_expr(cons), alt=_build_expr(alt), span=span)
	if kind == "binary":
		left, op_token, right = tree.children
		return BinaryExpr(op=op_token.value, left=_build_expr(left), right=_build_expr(right), span=span)
	if kind == "unary":
		op_token, arg = tree.children
		return UnaryExpr(op=op_token.value, arg=_build_expr(arg), span=span)
	if kind == "update_prefix":
		op_token, arg = tree.children
		return UpdateExpr(op=op_token.value, prefix=True, arg=_build_expr(arg), span=span)
	if kind == "update_postfix":
		arg, op_token = tree.children
		return UpdateExpr(op=op_token.value, prefix=False, arg=_build_expr(arg), span=span)
	if kind == "sequence":
		left, right = _trees(tree)
		first = _build_expr(left)
		exprs = list(first.exprs) if isinstance(first, SeqExpr) else [first]
		return SeqExpr(exprs=exprs + [_build_expr(right)], span=span)
	raise ParseError(f"unsupported expression '{kind}'", loc=span)


def _chain_link(base: MemberExpr | CallExpr, *, optional: bool) -> Expr:
	"""
	Wrap a member/call link in `OptChainExpr` when it belongs to an optional chain.

	A link written with `?.` starts (or continues) a chain. Any later link whose
	object/callee is already part of the chain is wrapped too, with
	`optional=False`. Parentheses produce a `ParenExpr`, which ends the chain.
	"""
	inner = base.obj if isinstance(base, MemberExpr) else base.callee
	if optional or isinstance(inner, OptChainExpr):
		return OptChainExpr(base=base, optional=optional, span=base.span)
	return base


def _build_template(token: Token, span: Span) -> TemplateLit:
	quasis, holes = _template_parts(token)
	exprs = [_parse_substitution(token, offset, text) for offset, text in holes]
	return TemplateLit(quasis=quasis, exprs=exprs, span=span)


def _template_parts(token: Token) -> Tuple[List[str], List[Tuple[int, str]]]:
	"""
	Split a template token into its text chunks and `${...}` substitutions.

	Substitutions are returned as `(offset, text)` with `offset` relative to the
	opening backtick. Braces and quoted strings inside a substitution are
	balanced so `${ {a: "}"}.a }` is one substitution.
	"""
	raw = token.value
	quasis: List[str] = []
	holes: List[Tuple[int, str]] = []
	chunk_start = 1
	i = 1
	end = len(raw) - 1
	while i < end:
		ch = raw[i]
		if ch == "\\":
			i += 2
			continue
		if ch == "$" and raw.startswith("{", i + 1):
			quasis.append(raw[chunk_start:i])
			start = i + 2
			close = _substitution_end(raw, start, end)
			if close is None:
				raise ParseError("unterminated template substitution", loc=_span(token))
			holes.append((start, raw[start:close]))
			chunk_start = i = close + 1
			continue
		i += 1
	quasis.append(raw[chunk_start:end])
	return quasis, holes


def _substitution_end(raw: str, start: int, end: int) -> Optional[int]:
	depth = 0
	quote: Optional[str] = None
	i = start
	while i < end:
		ch = raw[i]
		if quote is not None:
			if ch == "\\":
				i += 1
			elif ch == quote:
				quote = None
		elif ch in ("'", '"'):
			quote = ch
		elif ch == "{":
			depth += 1
		elif ch == "}":
			if depth == 0:
				return i
			depth -= 1
		i += 1
	return None


def _parse_substitution(token: Token, offset: int, text: str) -> Expr:
	# Pad the substitution so lark reports positions in the enclosing source.
	before = token.value[:offset]
	line = token.line + before.count("\n")
	newline = before.rfind("\n")
	column = offset - newline if newline >= 0 else token.column + offset
	start_pos = token.start_pos + offset
	pad = " " * (start_pos - (line - 1) - (column - 1)) + "\n" * (line - 1) + " " * (column - 1)
	return _build_expr(_EXPR_PARSER.parse(pad + text))


def _build_meta_prop(tree: Tree, expected: str, kind: MetaPropKind) -> MetaPropExpr:
	name = _tokens(tree, "NAME")[0]
	if name.value != expected:
		raise MetaPropertyError(
			f"'{kind.value.split('.')[0]}.{name.value}' is not a meta property",
			loc=_span(tree),
		)
	return MetaPropExpr(kind=kind, span=_span(tree))


def _build_args(tree: Tree) -> List[Expr]:
	return [_build_expr(child) for child in _trees(tree)]


def _build_obj_prop(tree: Tree):
	kind = _name(tree)
	span = _span(tree)
	if kind == "kv_prop":
		key_tree, value_tree = _trees(tree)
		return KeyValueProp(key=_build_prop_key(key_tree), value=_build_expr(value_tree), span=span)
	if kind == "shorthand_prop":
		return ShorthandProp(key=_ident(tree.children[0]), span=span)
	if kind == "shorthand_init_prop":
		raise ParseError("shorthand property initializer is only valid in a destructuring pattern", loc=span)
	if kind == "spread":
		return SpreadElement(arg=_build_expr(_trees(tree)[0]), span=span)
	if kind == "method_prop":
		return MethodProp(
			key=_build_prop_key(_trees(tree)[0]),
			params=_build_params(_child(tree, "params")),
			body=_build_block(_required_child(tree, "block")),
			is_async=_is_async(tree),
			span=span,
		)
	raise ParseError(f"unsupported object property '{kind}'", loc=span)


def _build_prop_key(tree: Tree) -> PropName:
	kind = _name(tree)
	span = _span(tree)
	if kind == "ident_key":
		return _ident(tree.children[0])
	if kind == "str_key":
		return StrKey(value=_decode_string(tree.children[0]), span=span)
	if kind == "num_key":
		return NumKey(value=tree.children[0].value, span=span)
	return ComputedProp(expr=_build_expr(_trees(tree)[0]), span=span)


def _build_pattern(tree: Tree) -> Pat:
	kind = _name(tree)
	span = _span(tree)
	if kind == "ident_pat":
		return IdentPat(name=tree.children[0].value, span=span)
	if kind == "object_pat":
		props = []
		for prop in _trees(tree):
			prop_kind = _name(prop)
			if prop_kind == "kv_pat_prop":
				key_tree, value_tree = _trees(prop)
				props.append(KeyValuePatProp(key=_build_prop_key(key_tree), value=_build_pattern(value_tree), span=_span(prop)))
			elif prop_kind == "shorthand_pat_prop":
				default = _trees(prop)
				props.append(
					AssignPatProp(
						key=_ident(prop.children[0]),
						value=_build_expr(default[0]) if default else None,
						span=_span(prop),
					)
				)
			else:
				props.append(RestPat(arg=_build_pattern(_trees(prop)[0]), span=_span(prop)))
		return ObjectPat(props=props, span=span)
	if kind == "array_pat":
		return ArrayPat(elems=[_build_pattern(child) for child in _trees(tree)], span=span)
	if kind == "default_pat":
		left, right = _trees(tree)
		return AssignPat(left=_build_pattern(left), right=_build_expr(right), span=span)
	if kind == "rest_pat":
		return RestPat(arg=_build_pattern(_trees(tree)[0]), span=span)
	raise PatternError(f"unsupported pattern '{kind}'", loc=span)


def _build_arrow_params(tree: Tree) -> List[Pat]:
	kind = _name(tree)
	if kind == "arrow_single":
		token = tree.children[0]
		return [IdentPat(name=token.value, span=_span(token))]
	if kind == "arrow_empty":
		return []
	return [_cover_to_pattern(item) for item in _trees(tree)]


def _cover_to_pattern(tree: Tree) -> Pat:
	"""
	Reinterpret a parenthesized expression as an arrow parameter pattern.

	`(a, { b, c = 1 }, [d], e = 2, ...f) =>` is parsed with the expression
	grammar first; this maps identifiers, object/array literals, `=`
	assignments and spreads onto the matching pattern nodes.
	"""
	kind = _name(tree)
	span = _span(tree)
	if kind == "ident":
		return IdentPat(name=tree.children[0].value, span=span)
	if kind == "spread":
		return RestPat(arg=_cover_to_pattern(_trees(tree)[0]), span=span)
	if kind == "assign":
		target_tree, op_token, value_tree = tree.children
		if op_token.value == "=":
			return AssignPat(left=_cover_to_pattern(target_tree), right=_build_expr(value_tree), span=span)
	if kind == "array":
		return ArrayPat(elems=[_cover_to_pattern(child) for child in _trees(tree)], span=span)
	if kind == "object":
		props = []
		for prop in _trees(tree):
			prop_kind = _name(prop)
			prop_span = _span(prop)
			if prop_kind == "kv_prop":
				key_tree, value_tree = _trees(prop)
				props.append(KeyValuePatProp(key=_build_prop_key(key_tree), value=_cover_to_pattern(value_tree), span=prop_span))
			elif prop_kind == "shorthand_prop":
				props.append(AssignPatProp(key=_ident(prop.children[0]), span=prop_span))
			elif prop_kind == "shorthand_init_prop":
				props.append(
					AssignPatProp(key=_ident(prop.children[0]), value=_build_expr(_trees(prop)[0]), span=prop_span)
				)
			elif prop_kind == "spread":
				props.append(RestPat(arg=_cover_to_pattern(_trees(prop)[0]), span=prop_span))
			else:
				raise PatternError("invalid destructuring pattern in arrow function parameters", loc=prop_span)
		return ObjectPat(props=props, span=span)
	raise PatternError("invalid arrow function parameter", loc=span)


def _number_value(raw: str) -> float | int:
	if raw[:2] in ("0x", "0X"):
		return int(raw, 16)
	value = float(raw)
	return int(value) if value.is_integer() and "." not in raw and "e" not in raw.lower() else value


def _decode_string(token: Token) -> str:
	try:
		return py_ast.literal_eval(token.value)
	except (SyntaxError, ValueError):
		return token.value[1:-1]


def _ident(token: Token) -> Ident:
	return Ident(name=token.value, span=_span(token))


def _span(node: Tree | Token) -> Span:
	if isinstance(node, Tree):
		return Span.from_meta(node.meta)
	return Span.from_meta(node)


def _trees(tree: Tree) -> List[Tree]:
	return [child for child in tree.children if isinstance(child, Tree)]


def _tokens(tree: Tree, ttype: str) -> List[Token]:
	return [child for child in tree.children if isinstance(child, Token) and child.type == ttype]


def _child(tree: Tree, name: str) -> Optional[Tree]:
	return next((child for child in _trees(tree) if _name(child) == name), None)


def _required_child(tree: Tree, name: str) -> Tree:
	child = _child(tree, name)
	if child is None:
		raise ParseError(f"'{_name(tree)}' is missing its {name}", loc=_span(tree))
	return child


def _is_async(tree: Tree) -> bool:
	return bool(_tokens(tree, "ASYNC"))


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	if isinstance(node, Token):
		return node.type
	return str(node)


__all__ = [
	"MetaPropertyError",
	"ParseError",
	"PatternError",
	"TerminatorInserter",
	"parse_program",
]
