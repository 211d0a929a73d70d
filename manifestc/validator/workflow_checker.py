# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Workflow rule set: the manifest rules plus activity-style dispatch.
"""

from __future__ import annotations

from manifestc.core.issues import IssueCode
from manifestc.parser import ast as A

from .checker import Checker


class WorkflowChecker(Checker):
	EXACT_CHECKS = {
		**Checker.EXACT_CHECKS,
		A.ActivityExpression: "_check_activity",
	}

	_STYLE_CHECKS = {
		A.ActivityStyle.ACTION.value: "_check_action",
		A.ActivityStyle.RESOURCE.value: "_check_resource",
		A.ActivityStyle.STATE_HANDLER.value: "_check_state_handler",
		A.ActivityStyle.WORKFLOW.value: "_check_workflow",
	}

	def _check_activity(self, e: A.ActivityExpression) -> None:
		style = getattr(e.style, "value", e.style)
		routine = self._STYLE_CHECKS.get(style)
		if routine is None:
			self.accept(IssueCode.INVALID_ACTIVITY_STYLE, e, style=style)
			return
		getattr(self, routine)(e)

	# Per-style hooks; no style-specific rules yet.

	def _check_action(self, e: A.ActivityExpression) -> None:
		pass

	def _check_resource(self, e: A.ActivityExpression) -> None:
		pass

	def _check_state_handler(self, e: A.ActivityExpression) -> None:
		pass

	def _check_workflow(self, e: A.ActivityExpression) -> None:
		pass


__all__ = ["WorkflowChecker"]
