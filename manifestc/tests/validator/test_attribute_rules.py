# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Context-sensitive attribute operator rules: `+>` is only legal directly
inside a collector or an override; `* =>` is not legal directly inside a
resource form, a collector, or a capability mapping.
"""

from __future__ import annotations

import pytest

from manifestc.core.issues import IssueCode
from manifestc.parser import ast as A
from manifestc.validator import validate_manifest


def _append(name: str = "require") -> A.AttributeOperation:
	return A.AttributeOperation(
		name=name,
		operator="+>",
		value=A.AccessExpression(operand=A.QualifiedReference("File"), keys=[A.LiteralString("apache.pem")]),
	)


def _splat(value: A.Expression | None = None) -> A.AttributesOperation:
	return A.AttributesOperation(expr=value or A.VariableExpression("file_ownership"))


def _run(stmt: A.Expression):
	return validate_manifest(A.BlockExpression(statements=[stmt]))


def test_append_in_override_is_legal() -> None:
	override = A.ResourceOverrideExpression(
		resources=A.AccessExpression(operand=A.QualifiedReference("Service"), keys=[A.QualifiedName("apache")]),
		operations=[_append()],
	)
	assert _run(override) == []


def test_append_in_collector_is_legal() -> None:
	collect = A.CollectExpression(
		type_ref=A.QualifiedReference("Service"),
		query=A.VirtualQuery(),
		operations=[_append()],
	)
	assert _run(collect) == []


def test_append_in_resource_body_reports() -> None:
	op = _append("require")
	resource = A.ResourceExpression(
		type_name=A.QualifiedName("service"),
		bodies=[A.ResourceBody(title=A.QualifiedName("apache"), operations=[op])],
	)
	diags = _run(resource)
	assert [d.code for d in diags] == [IssueCode.ILLEGAL_ATTRIBUTE_APPEND]
	assert diags[0].node is op
	assert diags[0].args == {"attr": "require", "expression": "a resource body"}


@pytest.mark.parametrize(
	"container_factory",
	[
		lambda op: A.ResourceDefaultsExpression(type_ref=A.QualifiedReference("File"), operations=[op]),
		lambda op: A.CapabilityMapping(
			kind="produces",
			component=A.QualifiedReference("Foo"),
			capability=A.QualifiedReference("Sql"),
			mappings=[op],
		),
	],
)
def test_append_in_other_containers_reports(container_factory) -> None:
	assert [d.code for d in _run(container_factory(_append()))] == [IssueCode.ILLEGAL_ATTRIBUTE_APPEND]


def test_append_legality_depends_on_direct_container_only() -> None:
	# The collector is an ancestor, but the direct container is a resource body.
	nested = A.ResourceExpression(
		type_name=A.QualifiedName("file"),
		bodies=[A.ResourceBody(title=A.LiteralString("/tmp/x"), operations=[_append("before")])],
	)
	collect = A.CollectExpression(
		type_ref=A.QualifiedReference("File"),
		query=A.VirtualQuery(),
		operations=[A.AttributeOperation(name="content", operator="=>", value=nested)],
	)
	assert [d.code for d in _run(collect)] == [IssueCode.ILLEGAL_ATTRIBUTE_APPEND]


def test_append_at_top_level_names_the_top_level() -> None:
	op = _append("require")
	diags = validate_manifest(op)
	assert [d.code for d in diags] == [IssueCode.ILLEGAL_ATTRIBUTE_APPEND]
	assert diags[0].args["expression"] == "the top level"
	assert diags[0].message.endswith("This operator can not be used in the top level")


def test_plain_arrow_is_never_an_append_violation() -> None:
	op = A.AttributeOperation(name="ensure", operator="=>", value=A.QualifiedName("file"))
	resource = A.ResourceExpression(
		type_name=A.QualifiedName("file"),
		bodies=[A.ResourceBody(title=A.LiteralString("/tmp/foo"), operations=[op])],
	)
	assert _run(resource) == []


def test_splat_in_resource_body_is_legal() -> None:
	resource = A.ResourceExpression(
		type_name=A.QualifiedName("file"),
		bodies=[
			A.ResourceBody(
				title=A.LiteralString("/tmp/foo"),
				operations=[
					A.AttributeOperation(name="ensure", operator="=>", value=A.QualifiedName("file")),
					_splat(),
				],
			)
		],
	)
	assert _run(resource) == []


@pytest.mark.parametrize(
	"container_factory, described",
	[
		(
			lambda op: A.CollectExpression(
				type_ref=A.QualifiedReference("File"),
				query=A.VirtualQuery(
					expr=A.ComparisonExpression(operator="==", lhs=A.QualifiedName("mode"), rhs=A.LiteralString("0644"))
				),
				operations=[op],
			),
			"a collect expression",
		),
		(
			lambda op: A.ResourceDefaultsExpression(type_ref=A.QualifiedReference("File"), operations=[op]),
			"a resource defaults expression",
		),
		(
			lambda op: A.ResourceOverrideExpression(
				resources=A.AccessExpression(operand=A.QualifiedReference("File"), keys=[A.LiteralString("/tmp/foo")]),
				operations=[op],
			),
			"a resource override",
		),
		(
			lambda op: A.CapabilityMapping(
				kind="consumes",
				component=A.QualifiedReference("Foo"),
				capability=A.QualifiedReference("Sql"),
				mappings=[op],
			),
			"a capability mapping",
		),
	],
)
def test_splat_in_unsupported_context_reports_on_container(container_factory, described: str) -> None:
	container = container_factory(_splat())
	diags = _run(container)
	assert [d.code for d in diags] == [IssueCode.UNSUPPORTED_OPERATOR_IN_CONTEXT]
	assert diags[0].node is container
	assert diags[0].args == {"operator": "* =>", "value": described}
	assert diags[0].message == f"The operator '* =>' in {described} is not supported"


def test_splat_value_must_be_an_rvalue() -> None:
	resource = A.ResourceExpression(
		type_name=A.QualifiedName("file"),
		bodies=[
			A.ResourceBody(
				title=A.LiteralString("/tmp/foo"),
				operations=[_splat(A.FunctionDefinition(name="foo", body=A.BlockExpression()))],
			)
		],
	)
	diags = _run(resource)
	assert [d.code for d in diags] == [IssueCode.NOT_RVALUE]
	assert diags[0].message == "A function definition is not applicable as a value"


def test_splat_reports_context_and_rvalue_independently() -> None:
	defaults = A.ResourceDefaultsExpression(
		type_ref=A.QualifiedReference("File"),
		operations=[_splat(A.CollectExpression(type_ref=A.QualifiedReference("User"), query=A.ExportedQuery()))],
	)
	assert [d.code for d in _run(defaults)] == [
		IssueCode.UNSUPPORTED_OPERATOR_IN_CONTEXT,
		IssueCode.NOT_RVALUE,
	]
