# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Render nodes as noun phrases for diagnostics ("a resource override").
"""

from __future__ import annotations

from typing import Any

_VOWELS = frozenset("aeiouAEIOU")


def label(node: Any) -> str:
	if node is None:
		return "top level"
	fn = getattr(node, "label", None)
	if callable(fn):
		return fn()
	return type(node).__name__


def _article(text: str) -> str:
	first = text.lstrip("'")[:1]
	return "an" if first in _VOWELS else "a"


def a_an(node: Any) -> str:
	if node is None:
		return "the top level"
	text = label(node)
	return f"{_article(text)} {text}"


def a_an_uc(node: Any) -> str:
	text = a_an(node)
	return text[:1].upper() + text[1:]


__all__ = ["label", "a_an", "a_an_uc"]
