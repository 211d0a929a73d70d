# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Traversal and context tracking shared by the manifest and workflow checkers.

A Validator walks the tree depth-first in pre-order. Each node is dispatched
while its parent is on top of the context stack, then pushed while its own
children are visited. Rules ask `container()` for the direct parent of the
node they are looking at; nodes hold no back-references of their own.

Dispatch is table driven: `EXACT_CHECKS` (keyed by concrete node type) is
consulted first, then `CAPABILITY_CHECKS` in order (matched with isinstance).
The first hit wins, so a node runs at most one rule routine. Subclasses extend
the tables rather than editing them.
"""

from __future__ import annotations

import logging
from typing import ClassVar, Dict, List, Optional, Tuple, Type

from manifestc.core.diagnostics import Diagnostic, IssueSink
from manifestc.core.issues import IssueCode, Strictness, severities_for
from manifestc.parser import ast as A

logger = logging.getLogger(__name__)


class Validator:
	EXACT_CHECKS: ClassVar[Dict[Type[A.Expression], str]] = {}
	CAPABILITY_CHECKS: ClassVar[Tuple[Tuple[Type[A.Expression], str], ...]] = ()

	def __init__(self, strict: Strictness = Strictness.ERROR, file: Optional[str] = None) -> None:
		self.strict = strict
		self.file = file
		self._path: List[A.Expression] = []
		self._sink = IssueSink(severities_for(strict), file=file)

	def validate(self, root: A.Expression) -> List[Diagnostic]:
		"""Run one pass over `root` and return the issues in traversal order."""
		self._path = []
		self._sink = IssueSink(severities_for(self.strict), file=self.file)
		logger.debug("%s: validating %s (strict=%s)", type(self).__name__, type(root).__name__, self.strict.name)
		self._walk(root)
		issues = self._sink.issues
		logger.debug("%s: %d issue(s)", type(self).__name__, len(issues))
		return issues

	def _walk(self, node: A.Expression) -> None:
		self.dispatch(node)
		self._path.append(node)
		try:
			for child in A.iter_children(node):
				self._walk(child)
		finally:
			self._path.pop()

	def dispatch(self, node: A.Expression) -> None:
		routine = self.EXACT_CHECKS.get(type(node))
		if routine is None:
			for capability, name in self.CAPABILITY_CHECKS:
				if isinstance(node, capability):
					routine = name
					break
		if routine is not None:
			getattr(self, routine)(node)

	def container(self) -> Optional[A.Expression]:
		"""Direct parent of the node being checked; None at the root."""
		return self._path[-1] if self._path else None

	def accept(self, code: IssueCode, node: A.Expression, **args: object) -> None:
		self._sink.report(code, node, **args)

	@property
	def issues(self) -> List[Diagnostic]:
		return self._sink.issues


__all__ = ["Validator"]
