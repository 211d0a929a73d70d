# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Common diagnostic structure for the reader/validator passes.

A Diagnostic is a rendered message plus the issue code and arguments it was
formatted from, so tests and tooling can match on the code rather than on
message text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .issues import ISSUES, IssueCode, Severity
from .span import Span


@dataclass
class Diagnostic:
	"""Represents a diagnostic (error/warning) produced by a pass."""

	message: str
	code: IssueCode | None = None
	# "validator" for rule issues, "reader" for PN input problems.
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Span() denotes unknown.
	args: Dict[str, Any] = field(default_factory=dict)
	notes: list[str] = field(default_factory=list)
	# The offending node; not part of equality so diagnostics compare by content.
	node: Any = field(default=None, compare=False, repr=False)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	def __str__(self) -> str:
		code = f" [{self.code.value}]" if self.code is not None else ""
		return f"{self.span}: {self.severity}{code}: {self.message}"


class IssueSink:
	"""
	Ordered issue accumulator owned by a single validation pass.

	`report` formats the issue from the catalogue and appends it unless the
	effective severity for the code is `ignore`.
	"""

	def __init__(self, severities: Mapping[IssueCode, Severity], file: Optional[str] = None) -> None:
		self._severities = dict(severities)
		self._file = file
		self._issues: List[Diagnostic] = []

	def report(self, code: IssueCode, node: Any, **args: Any) -> None:
		severity = self._severities.get(code, ISSUES[code].severity)
		if severity is Severity.IGNORE:
			return
		self._issues.append(
			Diagnostic(
				message=ISSUES[code].format(args),
				code=code,
				phase="validator",
				severity=severity.value,
				span=Span.from_loc(getattr(node, "loc", None), file=self._file),
				args=dict(args),
				node=node,
			)
		)

	@property
	def issues(self) -> List[Diagnostic]:
		return list(self._issues)


def has_errors(diagnostics: List[Diagnostic]) -> bool:
	return any(d.severity == Severity.ERROR.value for d in diagnostics)


__all__ = ["Diagnostic", "IssueSink", "has_errors"]
