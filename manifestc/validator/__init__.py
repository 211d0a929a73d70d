# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
manifestc.validator: semantic validation passes over a manifest AST.

`validate_manifest` runs the manifest rule set; `validate_workflow` runs the
same rules plus the activity-style checks. Both return the issues in
traversal order and never mutate the tree.
"""

from __future__ import annotations

from typing import List, Optional

from manifestc.core.diagnostics import Diagnostic
from manifestc.core.issues import Strictness
from manifestc.parser import ast as A

from .checker import Checker
from .idem import is_idem
from .walker import Validator
from .workflow_checker import WorkflowChecker


def validate_manifest(root: A.Expression, strict: Strictness = Strictness.ERROR, file: Optional[str] = None) -> List[Diagnostic]:
	return Checker(strict, file=file).validate(root)


def validate_workflow(root: A.Expression, strict: Strictness = Strictness.ERROR, file: Optional[str] = None) -> List[Diagnostic]:
	return WorkflowChecker(strict, file=file).validate(root)


__all__ = [
	"Checker",
	"Validator",
	"WorkflowChecker",
	"is_idem",
	"validate_manifest",
	"validate_workflow",
]
