# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Side-effect classification ("idem": latin for "the same").

An expression is idem when the evaluation state is known to be unchanged after
evaluating it. The answer is conservative toward True: nothing is known about
what a called function does, so calls count as idem even when they are not.
A False answer is authoritative; a True answer is not.
"""

from __future__ import annotations

from manifestc.parser import ast as A


def is_idem(e: A.Expression) -> bool:
	if isinstance(e, (A.AssignmentExpression, A.RelationshipExpression, A.RenderExpression, A.RenderStringExpression)):
		return False
	if isinstance(e, A.BlockExpression):
		return all(is_idem(stmt) for stmt in e.statements)
	if isinstance(e, A.CaseExpression):
		return _idem_case(e)
	if isinstance(e, A.CaseOption):
		return all(is_idem(value) for value in e.values) and is_idem(e.then)
	if isinstance(e, A.IfExpression):
		# also covers UnlessExpression
		return is_idem(e.test) and is_idem(e.then) and (e.else_ is None or is_idem(e.else_))
	if isinstance(e, A.ParenthesizedExpression):
		return is_idem(e.expr)
	return True


def _idem_case(e: A.CaseExpression) -> bool:
	if not is_idem(e.test):
		return False
	return all(is_idem(option) for option in e.options)


__all__ = ["is_idem"]
