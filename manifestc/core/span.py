# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lightweight source span representation used by diagnostics.

Nodes carry a `Located(line, column)` at best; a Span wraps that (or any
other location object) while exposing optional file/line/column fields.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Represents a source span (best-effort file/line/column plus raw loc)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	raw: Any = None

	@classmethod
	def from_loc(cls, loc: Any, file: Optional[str] = None) -> "Span":
		"""
		Construct a Span from a node location.

		If `loc` is already a Span it is returned unchanged (with `file` filled
		in when missing); otherwise line/column are read off the object and the
		object itself is kept in `raw`.
		"""
		if loc is None:
			return cls(file=file)
		if isinstance(loc, cls):
			if loc.file is None and file is not None:
				return cls(file=file, line=loc.line, column=loc.column, raw=loc.raw)
			return loc
		return cls(
			file=file or getattr(loc, "file", None),
			line=getattr(loc, "line", None),
			column=getattr(loc, "column", None),
			raw=loc,
		)

	def __str__(self) -> str:
		parts = []
		if self.file:
			parts.append(self.file)
		if self.line is not None:
			parts.append(f"{self.line}:{self.column if self.column is not None else 0}")
		return ":".join(parts) if parts else "<unknown location>"


__all__ = ["Span"]
