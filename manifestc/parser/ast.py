# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
AST node family for the manifest language.

Nodes are plain dataclasses. A few abstract bases act as capabilities shared by
several concrete nodes (any binary operator, any unary operator, any
declaration, any resource form); the validator dispatches on both.

Fields are declared in source order, so `iter_children` yields children in the
order they appear in the manifest. `loc` is always the last field and is not a
child.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Iterator, List, Optional


@dataclass(frozen=True)
class Located:
	line: int
	column: int


class Expression:
	"""Base class for all manifest AST nodes."""

	LABEL = "expression"
	loc: Optional[Located]

	def label(self) -> str:
		return self.LABEL


# Capabilities

class BinaryExpression(Expression):
	"""Any node with a left and a right operand."""

	lhs: Expression
	rhs: Expression


class UnaryExpression(Expression):
	"""Any node wrapping a single operand in `expr`."""

	expr: Expression


class Definition(Expression):
	"""Class, defined type, function and type-alias declarations."""

	name: str


class AbstractResource(Expression):
	"""Resource declarations, defaults and overrides."""


# Literals and names

@dataclass
class LiteralString(Expression):
	LABEL = "literal string"
	value: str
	loc: Optional[Located] = None


@dataclass
class LiteralInteger(Expression):
	LABEL = "literal integer"
	value: int
	loc: Optional[Located] = None


@dataclass
class LiteralFloat(Expression):
	LABEL = "literal float"
	value: float
	loc: Optional[Located] = None


@dataclass
class LiteralBoolean(Expression):
	LABEL = "boolean"
	value: bool
	loc: Optional[Located] = None


@dataclass
class LiteralUndef(Expression):
	LABEL = "undef value"
	loc: Optional[Located] = None


@dataclass
class LiteralDefault(Expression):
	LABEL = "'default' expression"
	loc: Optional[Located] = None


@dataclass
class LiteralList(Expression):
	LABEL = "array expression"
	elements: List[Expression] = field(default_factory=list)
	loc: Optional[Located] = None


@dataclass
class KeyedEntry(Expression):
	LABEL = "hash entry"
	key: Expression
	value: Expression
	loc: Optional[Located] = None


@dataclass
class LiteralHash(Expression):
	LABEL = "hash expression"
	entries: List[KeyedEntry] = field(default_factory=list)
	loc: Optional[Located] = None


@dataclass
class QualifiedName(Expression):
	"""A bare (lower case) name such as `notice` or `apache::params`."""

	LABEL = "name"
	value: str
	loc: Optional[Located] = None


@dataclass
class QualifiedReference(Expression):
	"""A capitalized type name such as `File` or `Enum`."""

	LABEL = "type name"
	name: str
	loc: Optional[Located] = None


@dataclass
class VariableExpression(Expression):
	LABEL = "variable"
	name: str  # without the leading '$'
	loc: Optional[Located] = None


@dataclass
class AccessExpression(Expression):
	LABEL = "'[]' expression"
	operand: Expression
	keys: List[Expression] = field(default_factory=list)
	loc: Optional[Located] = None


@dataclass
class BlockExpression(Expression):
	LABEL = "block expression"
	statements: List[Expression] = field(default_factory=list)
	loc: Optional[Located] = None


# Unary operators

@dataclass
class NotExpression(UnaryExpression):
	LABEL = "'!' expression"
	expr: Expression
	loc: Optional[Located] = None


@dataclass
class UnaryMinusExpression(UnaryExpression):
	LABEL = "unary minus expression"
	expr: Expression
	loc: Optional[Located] = None


@dataclass
class ParenthesizedExpression(UnaryExpression):
	LABEL = "parenthesized expression"
	expr: Expression
	loc: Optional[Located] = None


# Binary operators

class _OperatorLabel:
	operator: str

	def label(self) -> str:
		return f"'{self.operator}' expression"


@dataclass
class AssignmentExpression(_OperatorLabel, BinaryExpression):
	operator: str  # '=', '+=' or '-='
	lhs: Expression
	rhs: Expression
	loc: Optional[Located] = None


@dataclass
class ArithmeticExpression(_OperatorLabel, BinaryExpression):
	operator: str
	lhs: Expression
	rhs: Expression
	loc: Optional[Located] = None


@dataclass
class ComparisonExpression(_OperatorLabel, BinaryExpression):
	operator: str
	lhs: Expression
	rhs: Expression
	loc: Optional[Located] = None


@dataclass
class MatchExpression(_OperatorLabel, BinaryExpression):
	operator: str  # '=~' or '!~'
	lhs: Expression
	rhs: Expression
	loc: Optional[Located] = None


@dataclass
class InExpression(BinaryExpression):
	LABEL = "'in' expression"
	lhs: Expression
	rhs: Expression
	loc: Optional[Located] = None


@dataclass
class AndExpression(BinaryExpression):
	LABEL = "'and' expression"
	lhs: Expression
	rhs: Expression
	loc: Optional[Located] = None


@dataclass
class OrExpression(BinaryExpression):
	LABEL = "'or' expression"
	lhs: Expression
	rhs: Expression
	loc: Optional[Located] = None


@dataclass
class RelationshipExpression(_OperatorLabel, BinaryExpression):
	operator: str  # '->', '<-', '~>' or '<~'
	lhs: Expression
	rhs: Expression
	loc: Optional[Located] = None


# Calls

@dataclass
class CallNamedFunctionExpression(Expression):
	LABEL = "function call"
	functor: Expression
	arguments: List[Expression] = field(default_factory=list)
	loc: Optional[Located] = None


# Definitions

@dataclass
class Parameter(Expression):
	LABEL = "parameter"
	name: str
	value: Optional[Expression] = None
	loc: Optional[Located] = None


@dataclass
class FunctionDefinition(Definition):
	LABEL = "function definition"
	name: str
	parameters: List[Parameter] = field(default_factory=list)
	body: Optional[Expression] = None
	loc: Optional[Located] = None


@dataclass
class HostClassDefinition(Definition):
	LABEL = "host class definition"
	name: str
	parameters: List[Parameter] = field(default_factory=list)
	body: Optional[Expression] = None
	loc: Optional[Located] = None


@dataclass
class ResourceTypeDefinition(Definition):
	LABEL = "resource type definition"
	name: str
	parameters: List[Parameter] = field(default_factory=list)
	body: Optional[Expression] = None
	loc: Optional[Located] = None


@dataclass
class TypeAlias(Definition):
	LABEL = "type alias"
	name: str
	type_expr: Expression
	loc: Optional[Located] = None


# Resources

@dataclass
class AttributeOperation(Expression):
	"""`name => value` or `name +> value`."""

	LABEL = "attribute operation"
	name: str
	operator: str
	value: Expression
	loc: Optional[Located] = None


@dataclass
class AttributesOperation(Expression):
	"""`* => value`: sets every attribute from a hash."""

	LABEL = "attributes operation"
	expr: Expression
	loc: Optional[Located] = None


@dataclass
class ResourceBody(Expression):
	LABEL = "resource body"
	title: Expression
	operations: List[Expression] = field(default_factory=list)
	loc: Optional[Located] = None


@dataclass
class ResourceExpression(AbstractResource):
	LABEL = "resource expression"
	type_name: Expression
	bodies: List[ResourceBody] = field(default_factory=list)
	loc: Optional[Located] = None


@dataclass
class ResourceDefaultsExpression(AbstractResource):
	LABEL = "resource defaults expression"
	type_ref: Expression
	operations: List[Expression] = field(default_factory=list)
	loc: Optional[Located] = None


@dataclass
class ResourceOverrideExpression(AbstractResource):
	LABEL = "resource override"
	resources: Expression
	operations: List[Expression] = field(default_factory=list)
	loc: Optional[Located] = None


@dataclass
class VirtualQuery(Expression):
	LABEL = "virtual query"
	expr: Optional[Expression] = None
	loc: Optional[Located] = None


@dataclass
class ExportedQuery(Expression):
	LABEL = "exported query"
	expr: Optional[Expression] = None
	loc: Optional[Located] = None


@dataclass
class CollectExpression(Expression):
	LABEL = "collect expression"
	type_ref: Expression
	query: Expression
	operations: List[Expression] = field(default_factory=list)
	loc: Optional[Located] = None


@dataclass
class CapabilityMapping(Expression):
	LABEL = "capability mapping"
	kind: str  # 'produces' or 'consumes'
	component: Expression
	capability: Expression
	mappings: List[Expression] = field(default_factory=list)
	loc: Optional[Located] = None


# Control flow

@dataclass
class CaseOption(Expression):
	LABEL = "case option"
	values: List[Expression]
	then: Expression
	loc: Optional[Located] = None


@dataclass
class CaseExpression(Expression):
	LABEL = "'case' statement"
	test: Expression
	options: List[CaseOption] = field(default_factory=list)
	loc: Optional[Located] = None


@dataclass
class IfExpression(Expression):
	LABEL = "'if' statement"
	test: Expression
	then: Expression
	else_: Optional[Expression] = None
	loc: Optional[Located] = None


@dataclass
class UnlessExpression(IfExpression):
	LABEL = "'unless' statement"


# Templates

@dataclass
class RenderExpression(Expression):
	LABEL = "epp render expression"
	expr: Expression
	loc: Optional[Located] = None


@dataclass
class RenderStringExpression(Expression):
	LABEL = "epp text"
	value: str
	loc: Optional[Located] = None


# Workflow

class ActivityStyle(str, Enum):
	ACTION = "action"
	RESOURCE = "resource"
	STATE_HANDLER = "stateHandler"
	WORKFLOW = "workflow"


@dataclass
class ActivityExpression(Expression):
	"""
	An activity declaration. `style` is kept as the raw tag so that styles
	outside `ActivityStyle` can still be represented (and rejected).
	"""

	LABEL = "activity"
	style: str
	name: str
	properties: Optional[LiteralHash] = None
	definition: Optional[Expression] = None
	loc: Optional[Located] = None


def iter_children(node: Expression) -> Iterator[Expression]:
	"""Yield the direct child nodes of `node` in field (source) order."""
	for f in fields(node):
		val = getattr(node, f.name)
		if isinstance(val, Expression):
			yield val
		elif isinstance(val, list):
			for item in val:
				if isinstance(item, Expression):
					yield item


