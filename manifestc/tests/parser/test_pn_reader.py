# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from pathlib import Path

import pytest

from manifestc.parser import PNError, read_pn, read_pn_file
from manifestc.parser import ast as A


def _strip_locs(node):
	"""Rebuild `node` with every loc cleared so trees compare structurally."""
	if isinstance(node, list):
		return [_strip_locs(n) for n in node]
	if not isinstance(node, A.Expression):
		return node
	values = {}
	for name in node.__dataclass_fields__:
		values[name] = None if name == "loc" else _strip_locs(getattr(node, name))
	return type(node)(**values)


def test_literals() -> None:
	assert _strip_locs(read_pn('"hi"')) == A.LiteralString("hi")
	assert _strip_locs(read_pn("42")) == A.LiteralInteger(42)
	assert _strip_locs(read_pn("-7")) == A.LiteralInteger(-7)
	assert _strip_locs(read_pn("2.5")) == A.LiteralFloat(2.5)
	assert _strip_locs(read_pn("true")) == A.LiteralBoolean(True)
	assert _strip_locs(read_pn("false")) == A.LiteralBoolean(False)
	assert _strip_locs(read_pn("nil")) == A.LiteralUndef()


def test_string_escapes_are_decoded() -> None:
	assert read_pn(r'"a\"b\\c"').value == 'a"b\\c'


def test_assignment_block() -> None:
	tree = read_pn(
		"""
		; $x = 'y'
		(block
			(assign "=" (var "x") "y"))
		"""
	)
	assert _strip_locs(tree) == A.BlockExpression(
		statements=[A.AssignmentExpression(operator="=", lhs=A.VariableExpression("x"), rhs=A.LiteralString("y"))]
	)


def test_operator_forms_map_to_node_types() -> None:
	tree = _strip_locs(
		read_pn(
			"""
			(block
				(arith "+" 1 2)
				(compare "==" true (not false))
				(match "=~" (var "x") "^a")
				(relationship "->" (qr "Package") (qr "Service"))
				(in "a" (array "a" "b"))
				(and true (or false (paren (neg 1)))))
			"""
		)
	)
	assert [type(s) for s in tree.statements] == [
		A.ArithmeticExpression,
		A.ComparisonExpression,
		A.MatchExpression,
		A.RelationshipExpression,
		A.InExpression,
		A.AndExpression,
	]
	assert tree.statements[1].rhs == A.NotExpression(expr=A.LiteralBoolean(False))
	assert tree.statements[5].rhs.rhs == A.ParenthesizedExpression(expr=A.UnaryMinusExpression(expr=A.LiteralInteger(1)))


def test_resource_forms() -> None:
	tree = _strip_locs(
		read_pn(
			"""
			(block
				(resource (qn "file")
					(body "/tmp/foo" (attr "ensure" "=>" (qn "file")) (splat (var "opts"))))
				(defaults (qr "File") (attr "mode" "=>" "0644"))
				(override (access (qr "Service") (qn "apache")) (attr "require" "+>" (qr "File")))
				(collect (qr "User") (exported-query (compare "==" (qn "tag") "x")) (attr "ensure" "=>" "present"))
				(capability-mapping "produces" (qr "Mysql") (qr "Sql") (attr "port" "=>" 3306)))
			"""
		)
	)
	resource, defaults, override, collect, mapping = tree.statements
	assert resource == A.ResourceExpression(
		type_name=A.QualifiedName("file"),
		bodies=[
			A.ResourceBody(
				title=A.LiteralString("/tmp/foo"),
				operations=[
					A.AttributeOperation(name="ensure", operator="=>", value=A.QualifiedName("file")),
					A.AttributesOperation(expr=A.VariableExpression("opts")),
				],
			)
		],
	)
	assert isinstance(defaults, A.ResourceDefaultsExpression)
	assert override.operations[0].operator == "+>"
	assert isinstance(collect.query, A.ExportedQuery)
	assert mapping.kind == "produces"
	assert mapping.mappings[0].value == A.LiteralInteger(3306)


def test_definitions_and_calls() -> None:
	tree = _strip_locs(
		read_pn(
			"""
			(block
				(function "foo" [(param "a") (param "b" 1)] (block (var "a")))
				(class "apache" [])
				(define "apache::vhost" [(param "port" 80)] (block))
				(type-alias "MyInt" (access (qr "Integer") 0 10))
				(call (qn "notice") "hi"))
			"""
		)
	)
	function, klass, define, alias, call = tree.statements
	assert function.parameters == [A.Parameter("a"), A.Parameter("b", A.LiteralInteger(1))]
	assert function.body == A.BlockExpression(statements=[A.VariableExpression("a")])
	assert isinstance(klass, A.HostClassDefinition) and klass.body is None
	assert isinstance(define, A.ResourceTypeDefinition)
	assert isinstance(alias, A.TypeAlias)
	assert call == A.CallNamedFunctionExpression(functor=A.QualifiedName("notice"), arguments=[A.LiteralString("hi")])


def test_control_flow_forms() -> None:
	tree = _strip_locs(
		read_pn(
			"""
			(block
				(case (var "z") (when [2 3] (block true)) (when [(default)] (block false)))
				(if (var "z") (block 3) (block 4))
				(unless (var "z") (block 3))
				(render (var "x"))
				(render-string "text"))
			"""
		)
	)
	case, if_, unless, render, text = tree.statements
	assert case.options[0].values == [A.LiteralInteger(2), A.LiteralInteger(3)]
	assert case.options[1].values == [A.LiteralDefault()]
	assert type(if_) is A.IfExpression and if_.else_ is not None
	assert type(unless) is A.UnlessExpression and unless.else_ is None
	assert render == A.RenderExpression(expr=A.VariableExpression("x"))
	assert text == A.RenderStringExpression("text")


def test_hash_and_activity() -> None:
	tree = _strip_locs(
		read_pn(
			"""
			(activity "stateHandler" "deploy"
				(hash (entry "input" (array (qn "x"))))
				(block (call (qn "notice") "ok")))
			"""
		)
	)
	assert tree.style == "stateHandler"
	assert tree.name == "deploy"
	assert tree.properties == A.LiteralHash(
		entries=[A.KeyedEntry(key=A.LiteralString("input"), value=A.LiteralList(elements=[A.QualifiedName("x")]))]
	)
	assert isinstance(tree.definition, A.BlockExpression)


def test_activity_without_properties() -> None:
	tree = read_pn('(activity "action" "a" (block))')
	assert tree.properties is None
	assert isinstance(tree.definition, A.BlockExpression)


def test_forms_carry_locations() -> None:
	tree = read_pn('(block\n  (var "x")\n  (var "y"))')
	assert tree.loc is not None and tree.loc.line == 1
	assert [s.loc.line for s in tree.statements] == [2, 3]


@pytest.mark.parametrize(
	"source, fragment",
	[
		('(bogus 1)', "unknown form 'bogus'"),
		('[1 2]', "a list is not an expression"),
		('(var x)', "malformed PN input"),
		('(var 1)', "variable name must be a string"),
		('(var "a" "b")', "'var' takes 1 argument(s), got 2"),
		('(assign "=" (var "x"))', "'assign' takes 3 argument(s), got 2"),
		('(function "f" (var "x"))', "parameter list must be a [...] list"),
		('(attr "a" "=" 1)', "attribute operator must be '=>' or '+>'"),
		('(capability-mapping "needs" (qr "A") (qr "B"))', "capability mapping kind"),
		('(case 1 (var "x"))', "case option must be a case option"),
		('(block (var "x")', "malformed PN input"),
		(r'(var "\x1")', "invalid string escape"),
		(r'(var "\N")', "invalid string escape"),
		(r'(var "\u12")', "invalid string escape"),
	],
)
def test_malformed_input_raises(source: str, fragment: str) -> None:
	with pytest.raises(PNError) as excinfo:
		read_pn(source)
	assert fragment in str(excinfo.value)


def test_error_location_is_reported() -> None:
	with pytest.raises(PNError) as excinfo:
		read_pn('(block\n  (bogus))')
	assert excinfo.value.loc is not None
	assert excinfo.value.loc.line == 2
	assert excinfo.value.reason == "unknown form 'bogus'"
	assert str(excinfo.value).startswith("2:")


def test_invalid_escape_reports_string_location() -> None:
	with pytest.raises(PNError) as excinfo:
		read_pn('(block\n  (var "\\x1"))')
	assert excinfo.value.loc is not None
	assert excinfo.value.loc.line == 2
	assert excinfo.value.reason.startswith("invalid string escape")


def test_read_pn_file(tmp_path: Path) -> None:
	src = tmp_path / "site.pn"
	src.write_text('(block (assign "=" (var "x") 1))\n')
	tree = read_pn_file(src)
	assert isinstance(tree, A.BlockExpression)
	assert isinstance(tree.statements[0], A.AssignmentExpression)
