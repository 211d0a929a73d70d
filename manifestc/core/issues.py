# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Issue catalogue for the manifest validator.

Every rule violation is reported under an `IssueCode`. The catalogue maps each
code to a message template (named `str.format` fields) and a default severity.
Some codes are demotable: the pass strictness decides whether they are errors,
warnings, or dropped entirely.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping


class IssueCode(Enum):
	ILLEGAL_ASSIGNMENT_VIA_INDEX = "VALIDATE_ILLEGAL_ASSIGNMENT_VIA_INDEX"
	ILLEGAL_NUMERIC_ASSIGNMENT = "VALIDATE_ILLEGAL_NUMERIC_ASSIGNMENT"
	CROSS_SCOPE_ASSIGNMENT = "VALIDATE_CROSS_SCOPE_ASSIGNMENT"
	APPENDS_DELETES_NO_LONGER_SUPPORTED = "VALIDATE_APPENDS_DELETES_NO_LONGER_SUPPORTED"
	ILLEGAL_ATTRIBUTE_APPEND = "VALIDATE_ILLEGAL_ATTRIBUTE_APPEND"
	UNSUPPORTED_OPERATOR_IN_CONTEXT = "VALIDATE_UNSUPPORTED_OPERATOR_IN_CONTEXT"
	NOT_RVALUE = "VALIDATE_NOT_RVALUE"
	ILLEGAL_EXPRESSION = "VALIDATE_ILLEGAL_EXPRESSION"
	IDEM_EXPRESSION_NOT_LAST = "VALIDATE_IDEM_EXPRESSION_NOT_LAST"
	INVALID_ACTIVITY_STYLE = "VALIDATE_INVALID_ACTIVITY_STYLE"


class Severity(Enum):
	IGNORE = "ignore"
	WARNING = "warning"
	ERROR = "error"


class Strictness(Enum):
	"""How demotable issues are treated by a validation pass."""

	OFF = Severity.IGNORE
	WARNING = Severity.WARNING
	ERROR = Severity.ERROR


@dataclass(frozen=True)
class IssueDef:
	code: IssueCode
	template: str
	severity: Severity = Severity.ERROR
	demotable: bool = False

	def format(self, args: Mapping[str, object]) -> str:
		return self.template.format(**args)


def _defs(*defs: IssueDef) -> Dict[IssueCode, IssueDef]:
	return {d.code: d for d in defs}


ISSUES: Dict[IssueCode, IssueDef] = _defs(
	IssueDef(
		IssueCode.ILLEGAL_ASSIGNMENT_VIA_INDEX,
		"Illegal attempt to assign via [index/key]. Not an assignable reference",
	),
	IssueDef(
		IssueCode.ILLEGAL_NUMERIC_ASSIGNMENT,
		"Illegal attempt to assign to the numeric match result variable '${var}'. Numeric variables are not assignable",
	),
	IssueDef(
		IssueCode.CROSS_SCOPE_ASSIGNMENT,
		"Illegal attempt to assign to '${name}'. Cannot assign to variables in other namespaces",
	),
	IssueDef(
		IssueCode.APPENDS_DELETES_NO_LONGER_SUPPORTED,
		"The operator '{operator}' is no longer supported",
	),
	IssueDef(
		IssueCode.ILLEGAL_ATTRIBUTE_APPEND,
		"Illegal +> operation on attribute {attr}. This operator can not be used in {expression}",
	),
	IssueDef(
		IssueCode.UNSUPPORTED_OPERATOR_IN_CONTEXT,
		"The operator '{operator}' in {value} is not supported",
	),
	IssueDef(
		IssueCode.NOT_RVALUE,
		"{value} is not applicable as a value",
	),
	IssueDef(
		IssueCode.ILLEGAL_EXPRESSION,
		"Illegal expression. {expression} is unacceptable as {feature} in {container}",
	),
	IssueDef(
		IssueCode.IDEM_EXPRESSION_NOT_LAST,
		"This {expression} has no effect. A value was produced and then forgotten "
		"(one or more preceding expressions may have the wrong form)",
		demotable=True,
	),
	IssueDef(
		IssueCode.INVALID_ACTIVITY_STYLE,
		"Invalid activity style '{style}'",
	),
)


def severities_for(strict: Strictness) -> Dict[IssueCode, Severity]:
	"""Effective severity per code for a pass running at `strict`."""
	return {
		code: (strict.value if d.demotable else d.severity)
		for code, d in ISSUES.items()
	}


__all__ = [
	"IssueCode",
	"IssueDef",
	"ISSUES",
	"Severity",
	"Strictness",
	"severities_for",
]
