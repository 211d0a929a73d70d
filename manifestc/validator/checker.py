# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Manifest rule set.

Each rule reports through `accept` and never raises; a rule that finds
nothing wrong is silent. See `walker.Validator` for how nodes reach the rules.
"""

from __future__ import annotations

import re

from manifestc.core.describe import a_an, a_an_uc, label
from manifestc.core.issues import IssueCode
from manifestc.parser import ast as A

from .idem import is_idem
from .walker import Validator

# Numeric names are reserved for match captures ($0, $1, ...).
NUMERIC_VAR_NAME = re.compile(r"\A(?:0|[1-9][0-9]*)\Z")
DOUBLE_COLON = "::"


class Checker(Validator):
	EXACT_CHECKS = {
		A.AssignmentExpression: "_check_assignment",
		A.AttributeOperation: "_check_attribute_operation",
		A.AttributesOperation: "_check_attributes_operation",
		A.BlockExpression: "_check_block",
		A.CallNamedFunctionExpression: "_check_call_named_function",
	}
	CAPABILITY_CHECKS = (
		(A.BinaryExpression, "_check_binary"),
	)

	def _check_assignment(self, e: A.AssignmentExpression) -> None:
		if e.operator == "=":
			self._check_assign_target(e.lhs)
		else:
			self.accept(IssueCode.APPENDS_DELETES_NO_LONGER_SUPPORTED, e, operator=e.operator)

	def _check_assign_target(self, e: A.Expression) -> None:
		if isinstance(e, A.AccessExpression):
			self.accept(IssueCode.ILLEGAL_ASSIGNMENT_VIA_INDEX, e)
		elif isinstance(e, A.LiteralList):
			for elem in e.elements:
				self._check_assign_target(elem)
		elif isinstance(e, A.VariableExpression):
			if NUMERIC_VAR_NAME.match(e.name):
				self.accept(IssueCode.ILLEGAL_NUMERIC_ASSIGNMENT, e, var=e.name)
			if DOUBLE_COLON in e.name:
				self.accept(IssueCode.CROSS_SCOPE_ASSIGNMENT, e, name=e.name)
		# other target shapes are rejected by the grammar

	def _check_attribute_operation(self, e: A.AttributeOperation) -> None:
		if e.operator != "+>":
			return
		p = self.container()
		if isinstance(p, (A.CollectExpression, A.ResourceOverrideExpression)):
			return
		self.accept(IssueCode.ILLEGAL_ATTRIBUTE_APPEND, e, attr=e.name, expression=a_an(p))

	def _check_attributes_operation(self, e: A.AttributesOperation) -> None:
		p = self.container()
		if isinstance(p, (A.AbstractResource, A.CollectExpression, A.CapabilityMapping)):
			self.accept(IssueCode.UNSUPPORTED_OPERATOR_IN_CONTEXT, p, operator="* =>", value=a_an(p))
		self._check_rvalue(e.expr)

	def _check_binary(self, e: A.BinaryExpression) -> None:
		self._check_rvalue(e.lhs)
		self._check_rvalue(e.rhs)

	def _check_block(self, e: A.BlockExpression) -> None:
		last = len(e.statements) - 1
		for idx, statement in enumerate(e.statements):
			if idx != last and is_idem(statement):
				self.accept(IssueCode.IDEM_EXPRESSION_NOT_LAST, statement, expression=label(statement))
				break

	def _check_call_named_function(self, e: A.CallNamedFunctionExpression) -> None:
		functor = e.functor
		if isinstance(functor, (A.QualifiedName, A.QualifiedReference)):
			return
		if isinstance(functor, A.AccessExpression) and isinstance(functor.operand, A.QualifiedReference):
			# call to parameterized type, e.g. Enum['a', 'b']('a')
			return
		self.accept(
			IssueCode.ILLEGAL_EXPRESSION,
			functor,
			expression=a_an(functor),
			feature="function name",
			container=a_an(e),
		)

	def _check_rvalue(self, e: A.Expression) -> None:
		if isinstance(e, A.UnaryExpression):
			self._check_rvalue(e.expr)
		elif isinstance(e, (A.Definition, A.CollectExpression)):
			self.accept(IssueCode.NOT_RVALUE, e, value=a_an_uc(e))


__all__ = ["Checker", "NUMERIC_VAR_NAME"]
