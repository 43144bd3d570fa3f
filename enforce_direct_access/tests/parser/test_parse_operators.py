# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest
from lark import Tree
from lark.exceptions import UnexpectedInput

from enforce_direct_access.parser import ParseError, ast as A, parse_program, parse_source
from enforce_direct_access.parser.parser import _required_child


def _expr(source: str) -> A.Expr:
	"""Return the expression of the single expression statement in `source`."""
	stmts = [s for s in parse_program(source).body if not isinstance(s, A.EmptyStmt)]
	assert len(stmts) == 1
	stmt = stmts[0]
	assert isinstance(stmt, A.ExprStmt)
	return stmt.expr


def _init(source: str) -> A.Expr:
	stmt = parse_program(source).body[0]
	assert isinstance(stmt, A.VarDecl)
	init = stmt.declarators[0].init
	assert init is not None
	return init


def test_update_expressions() -> None:
	prog = parse_program("let i = 0; i++; --i\nj--\n")
	updates = [s.expr for s in prog.body if isinstance(s, A.ExprStmt)]
	assert [(u.op, u.prefix) for u in updates] == [("++", False), ("--", True), ("--", False)]  # type: ignore[attr-defined]
	assert all(isinstance(u, A.UpdateExpr) for u in updates)
	assert updates[0].arg.name == "i"  # type: ignore[attr-defined]


def test_newline_before_increment_starts_a_new_statement() -> None:
	prog = parse_program("a\n++b\n")
	first, second = [s for s in prog.body if isinstance(s, A.ExprStmt)]
	assert isinstance(first.expr, A.Ident)
	assert isinstance(second.expr, A.UpdateExpr) and second.expr.prefix


def test_in_and_instanceof() -> None:
	test_in = _expr('"API_KEY" in process.env')
	assert isinstance(test_in, A.BinaryExpr) and test_in.op == "in"
	assert isinstance(test_in.right, A.MemberExpr)

	test_instanceof = _expr("err instanceof TypeError")
	assert isinstance(test_instanceof, A.BinaryExpr) and test_instanceof.op == "instanceof"


def test_in_binds_tighter_than_equality() -> None:
	expr = _expr("a in b === c < d")
	assert isinstance(expr, A.BinaryExpr) and expr.op == "==="
	assert isinstance(expr.left, A.BinaryExpr) and expr.left.op == "in"
	assert isinstance(expr.right, A.BinaryExpr) and expr.right.op == "<"


def test_bitwise_precedence() -> None:
	expr = _expr("a | b ^ c & d")
	assert isinstance(expr, A.BinaryExpr) and expr.op == "|"
	xor = expr.right
	assert isinstance(xor, A.BinaryExpr) and xor.op == "^"
	assert isinstance(xor.right, A.BinaryExpr) and xor.right.op == "&"

	logical = _expr("a && b | c")
	assert isinstance(logical, A.BinaryExpr) and logical.op == "&&"
	assert isinstance(logical.right, A.BinaryExpr) and logical.right.op == "|"


def test_shift_operators() -> None:
	for op in ("<<", ">>", ">>>"):
		expr = _expr(f"a {op} 1 + 2")
		assert isinstance(expr, A.BinaryExpr) and expr.op == op
		assert isinstance(expr.right, A.BinaryExpr) and expr.right.op == "+"

	compare = _expr("a >> 1 > b")
	assert isinstance(compare, A.BinaryExpr) and compare.op == ">"
	assert isinstance(compare.left, A.BinaryExpr) and compare.left.op == ">>"


def test_exponent_is_right_associative() -> None:
	expr = _expr("a ** 2 ** 3")
	assert isinstance(expr, A.BinaryExpr) and expr.op == "**"
	assert isinstance(expr.left, A.Ident)
	assert isinstance(expr.right, A.BinaryExpr) and expr.right.op == "**"

	scaled = _expr("2 * a ** 2")
	assert isinstance(scaled, A.BinaryExpr) and scaled.op == "*"
	assert isinstance(scaled.right, A.BinaryExpr) and scaled.right.op == "**"


def test_unary_operand_of_exponent_is_rejected() -> None:
	with pytest.raises(UnexpectedInput):
		parse_program("-a ** 2;")


def test_compound_assignment_operators() -> None:
	ops = []
	for op in (">>>=", "<<=", ">>=", "**=", "&&=", "||=", "??=", "|=", "&=", "^=", "%="):
		expr = _expr(f"x {op} 1")
		assert isinstance(expr, A.AssignExpr)
		ops.append(expr.op)
	assert ops == [">>>=", "<<=", ">>=", "**=", "&&=", "||=", "??=", "|=", "&=", "^=", "%="]


def test_comma_operator_outside_parentheses() -> None:
	expr = _expr("a = 1, b = 2, c")
	assert isinstance(expr, A.SeqExpr)
	assert [type(e).__name__ for e in expr.exprs] == ["AssignExpr", "AssignExpr", "Ident"]

	prog = parse_program("let a = 1, b = 2;")
	decl = prog.body[0]
	assert isinstance(decl, A.VarDecl) and len(decl.declarators) == 2


def test_async_functions_and_await() -> None:
	prog = parse_program("async function load() {\n\tconst env = await fetchEnv()\n\treturn env\n}\n")
	fn = prog.body[0]
	assert isinstance(fn, A.FunctionDecl) and fn.is_async
	assert fn.name.name == "load"
	decl = fn.body.statements[0]
	assert isinstance(decl, A.VarDecl)
	awaited = decl.declarators[0].init
	assert isinstance(awaited, A.UnaryExpr) and awaited.op == "await"
	assert isinstance(awaited.arg, A.CallExpr)

	plain = parse_program("function f() {}").body[0]
	assert isinstance(plain, A.FunctionDecl) and not plain.is_async


def test_async_arrows_expressions_and_methods() -> None:
	arrow = _init("const f = async x => x")
	assert isinstance(arrow, A.ArrowExpr) and arrow.is_async
	paren_arrow = _init("const g = async (a, b) => { await a }")
	assert isinstance(paren_arrow, A.ArrowExpr) and paren_arrow.is_async
	assert len(paren_arrow.params) == 2

	func = _init("const h = async function () {}")
	assert isinstance(func, A.FunctionExpr) and func.is_async

	obj = _init("const o = { async load() {}, async: 1, async() {} }")
	assert isinstance(obj, A.ObjectLit)
	method, value, named_async = obj.props
	assert isinstance(method, A.MethodProp) and method.is_async
	assert isinstance(value, A.KeyValueProp) and value.key.name == "async"  # type: ignore[union-attr]
	assert isinstance(named_async, A.MethodProp) and not named_async.is_async


def test_export_async_function() -> None:
	prog = parse_program("export async function main() {}\nexport default async function () {}\n")
	named, default = [s for s in prog.body if not isinstance(s, A.EmptyStmt)]
	assert isinstance(named, A.ExportDecl)
	assert isinstance(named.decl, A.FunctionDecl) and named.decl.is_async
	assert isinstance(default, A.ExportDefault)
	assert isinstance(default.expr, A.FunctionExpr) and default.expr.is_async


def test_question_dot_digit_is_a_conditional() -> None:
	expr = _init("const x = a?.5:1;")
	assert isinstance(expr, A.CondExpr)
	assert isinstance(expr.cons, A.Literal) and expr.cons.value == 0.5
	assert isinstance(expr.alt, A.Literal) and expr.alt.value == 1

	chained = _init("const y = a?.b;")
	assert isinstance(chained, A.OptChainExpr) and chained.optional


def test_template_without_substitutions() -> None:
	expr = _init("const s = `plain text`;")
	assert isinstance(expr, A.TemplateLit)
	assert expr.quasis == ["plain text"]
	assert expr.exprs == []


def test_template_substitutions_are_expressions() -> None:
	expr = _init("const s = `a${process.env?.A}b${ {k: '}'}.k }c`;")
	assert isinstance(expr, A.TemplateLit)
	assert expr.quasis == ["a", "b", "c"]
	first, second = expr.exprs
	assert isinstance(first, A.OptChainExpr) and first.optional
	assert isinstance(second, A.MemberExpr)
	assert isinstance(second.obj, A.ObjectLit)


def test_template_escapes_are_not_substitutions() -> None:
	expr = _init("const s = `cost: \\${price}`;")
	assert isinstance(expr, A.TemplateLit)
	assert expr.exprs == []
	assert len(expr.quasis) == 1


def test_template_substitution_positions() -> None:
	source = "const s = `first\n  ${value}`;\nconst t = `${other}`;\n"
	prog = parse_program(source)
	first, second = [s for s in prog.body if isinstance(s, A.VarDecl)]
	tmpl = first.declarators[0].init
	assert isinstance(tmpl, A.TemplateLit)
	(value,) = tmpl.exprs
	assert isinstance(value, A.Ident)
	assert (value.span.line, value.span.column) == (2, 5)
	assert source[value.span.start:value.span.end] == "value"

	other_tmpl = second.declarators[0].init
	assert isinstance(other_tmpl, A.TemplateLit)
	(other,) = other_tmpl.exprs
	assert (other.span.line, other.span.column) == (3, 14)
	assert source[other.span.start:other.span.end] == "other"


def test_template_substitution_with_function_body() -> None:
	expr = _init("const s = `${items.map(x => {\n\treturn x.name\n})}`;")
	assert isinstance(expr, A.TemplateLit)
	(call,) = expr.exprs
	assert isinstance(call, A.CallExpr)
	(arrow,) = call.args
	assert isinstance(arrow, A.ArrowExpr) and isinstance(arrow.body, A.Block)


def test_bad_template_substitutions() -> None:
	with pytest.raises(UnexpectedInput):
		parse_program("const s = `${}`;")
	with pytest.raises(ParseError):
		parse_program("const s = `${a`;")

	result = parse_source("const s = `ok ${a +}`;", file="t.js")
	assert result.program is None
	assert [d.code for d in result.diagnostics] == ["E_PARSE"]


def test_missing_function_body_is_a_parse_error() -> None:
	with pytest.raises(ParseError) as excinfo:
		_required_child(Tree("func_expr", []), "block")
	assert "block" in str(excinfo.value)
