# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Reader for PN, the parenthesized interchange notation of manifest ASTs.

The front-end that parses manifest source hands trees over in PN; this module
turns PN text into `manifestc.parser.ast` nodes. Each form is `(head arg...)`;
bare strings, numbers, `true`/`false` and `nil` are literals; `[...]` lists
group positional arguments (parameters, case option values).

Malformed input raises PNError carrying the line/column of the offending form.
"""

from __future__ import annotations

import ast
from functools import lru_cache
from pathlib import Path
from typing import Callable, Dict, List, Optional

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput

from . import ast as A

_GRAMMAR_PATH = Path(__file__).with_name("pn.lark")


@lru_cache(maxsize=None)
def _parser() -> Lark:
	return Lark(
		_GRAMMAR_PATH.read_text(),
		parser="lalr",
		lexer="basic",
		start="start",
		propagate_positions=True,
		maybe_placeholders=False,
	)


class PNError(Exception):
	def __init__(self, message: str, loc: Optional[A.Located] = None) -> None:
		self.loc = loc
		self.reason = message
		if loc is not None:
			message = f"{loc.line}:{loc.column}: {message}"
		super().__init__(message)


def read_pn(source: str) -> A.Expression:
	"""Parse PN text and build the node tree it describes."""
	try:
		tree = _parser().parse(source)
	except UnexpectedInput as exc:
		raise PNError(f"malformed PN input: {exc}", A.Located(line=exc.line, column=exc.column)) from exc
	return _build_expr(tree)


def read_pn_file(path: Path) -> A.Expression:
	return read_pn(Path(path).read_text(encoding="utf-8"))


def _name(tree: Tree) -> str:
	return tree.data if isinstance(tree.data, str) else tree.data.value


def _loc(tree: Tree) -> Optional[A.Located]:
	meta = tree.meta
	if getattr(meta, "empty", True):
		return None
	return A.Located(line=meta.line, column=meta.column)


def _build_expr(tree: Tree) -> A.Expression:
	kind = _name(tree)
	loc = _loc(tree)
	if kind == "string":
		return A.LiteralString(value=_decode_string(tree.children[0]), loc=loc)
	if kind == "number":
		return _build_number(tree.children[0], loc)
	if kind == "true":
		return A.LiteralBoolean(value=True, loc=loc)
	if kind == "false":
		return A.LiteralBoolean(value=False, loc=loc)
	if kind == "nil":
		return A.LiteralUndef(loc=loc)
	if kind == "list":
		raise PNError("a list is not an expression", loc)
	head: Token = tree.children[0]
	builder = _FORMS.get(head.value)
	if builder is None:
		raise PNError(f"unknown form '{head.value}'", loc)
	return builder(head.value, list(tree.children[1:]), loc)


def _build_optional(tree: Optional[Tree]) -> Optional[A.Expression]:
	return None if tree is None else _build_expr(tree)


def _build_all(trees: List[Tree]) -> List[A.Expression]:
	return [_build_expr(t) for t in trees]


def _decode_string(tok: Token) -> str:
	# ESCAPED_STRING admits any backslash pair; malformed escapes surface here.
	try:
		return ast.literal_eval(tok.value)
	except (SyntaxError, ValueError) as exc:
		loc = A.Located(line=tok.line, column=tok.column)
		raise PNError(f"invalid string escape in {tok.value}", loc) from exc


def _build_number(tok: Token, loc: Optional[A.Located]) -> A.Expression:
	text = tok.value
	if any(ch in text for ch in ".eE"):
		return A.LiteralFloat(value=float(text), loc=loc)
	return A.LiteralInteger(value=int(text), loc=loc)


def _arity(head: str, args: List[Tree], loc: Optional[A.Located], min_n: int, max_n: Optional[int] = None) -> None:
	n = len(args)
	if n < min_n or (max_n is not None and n > max_n):
		if max_n is None:
			expected = f"at least {min_n}"
		elif max_n == min_n:
			expected = str(min_n)
		else:
			expected = f"{min_n} to {max_n}"
		raise PNError(f"'{head}' takes {expected} argument(s), got {n}", loc)


def _string(tree: Tree, what: str) -> str:
	if _name(tree) != "string":
		raise PNError(f"{what} must be a string", _loc(tree))
	return _decode_string(tree.children[0])


def _list(tree: Tree, what: str) -> List[Tree]:
	if _name(tree) != "list":
		raise PNError(f"{what} must be a [...] list", _loc(tree))
	return list(tree.children)


def _typed(tree: Tree, cls: type, what: str):
	node = _build_expr(tree)
	if not isinstance(node, cls):
		raise PNError(f"{what} must be a {cls.LABEL}", _loc(tree))
	return node


# Form builders: (head, args, loc) -> node


def _block(head, args, loc):
	return A.BlockExpression(statements=_build_all(args), loc=loc)


def _array(head, args, loc):
	return A.LiteralList(elements=_build_all(args), loc=loc)


def _hash(head, args, loc):
	return A.LiteralHash(entries=[_typed(a, A.KeyedEntry, "hash element") for a in args], loc=loc)


def _entry(head, args, loc):
	_arity(head, args, loc, 2, 2)
	return A.KeyedEntry(key=_build_expr(args[0]), value=_build_expr(args[1]), loc=loc)


def _var(head, args, loc):
	_arity(head, args, loc, 1, 1)
	return A.VariableExpression(name=_string(args[0], "variable name"), loc=loc)


def _qn(head, args, loc):
	_arity(head, args, loc, 1, 1)
	return A.QualifiedName(value=_string(args[0], "name"), loc=loc)


def _qr(head, args, loc):
	_arity(head, args, loc, 1, 1)
	return A.QualifiedReference(name=_string(args[0], "type name"), loc=loc)


def _default(head, args, loc):
	_arity(head, args, loc, 0, 0)
	return A.LiteralDefault(loc=loc)


def _access(head, args, loc):
	_arity(head, args, loc, 1)
	return A.AccessExpression(operand=_build_expr(args[0]), keys=_build_all(args[1:]), loc=loc)


_OPERATOR_NODES: Dict[str, type] = {
	"assign": A.AssignmentExpression,
	"arith": A.ArithmeticExpression,
	"compare": A.ComparisonExpression,
	"match": A.MatchExpression,
	"relationship": A.RelationshipExpression,
}

_PLAIN_BINARY_NODES: Dict[str, type] = {
	"in": A.InExpression,
	"and": A.AndExpression,
	"or": A.OrExpression,
}

_UNARY_NODES: Dict[str, type] = {
	"not": A.NotExpression,
	"neg": A.UnaryMinusExpression,
	"paren": A.ParenthesizedExpression,
}


def _operator_binary(head, args, loc):
	_arity(head, args, loc, 3, 3)
	cls = _OPERATOR_NODES[head]
	return cls(operator=_string(args[0], "operator"), lhs=_build_expr(args[1]), rhs=_build_expr(args[2]), loc=loc)


def _plain_binary(head, args, loc):
	_arity(head, args, loc, 2, 2)
	return _PLAIN_BINARY_NODES[head](lhs=_build_expr(args[0]), rhs=_build_expr(args[1]), loc=loc)


def _unary(head, args, loc):
	_arity(head, args, loc, 1, 1)
	return _UNARY_NODES[head](expr=_build_expr(args[0]), loc=loc)


def _call(head, args, loc):
	_arity(head, args, loc, 1)
	return A.CallNamedFunctionExpression(functor=_build_expr(args[0]), arguments=_build_all(args[1:]), loc=loc)


def _param(head, args, loc):
	_arity(head, args, loc, 1, 2)
	value = _build_expr(args[1]) if len(args) > 1 else None
	return A.Parameter(name=_string(args[0], "parameter name"), value=value, loc=loc)


_DEFINITION_NODES: Dict[str, type] = {
	"function": A.FunctionDefinition,
	"class": A.HostClassDefinition,
	"define": A.ResourceTypeDefinition,
}


def _definition(head, args, loc):
	_arity(head, args, loc, 2, 3)
	params = [_typed(p, A.Parameter, "parameter") for p in _list(args[1], "parameter list")]
	body = _build_expr(args[2]) if len(args) > 2 else None
	return _DEFINITION_NODES[head](name=_string(args[0], f"{head} name"), parameters=params, body=body, loc=loc)


def _type_alias(head, args, loc):
	_arity(head, args, loc, 2, 2)
	return A.TypeAlias(name=_string(args[0], "type alias name"), type_expr=_build_expr(args[1]), loc=loc)


def _resource(head, args, loc):
	_arity(head, args, loc, 1)
	bodies = [_typed(b, A.ResourceBody, "resource body") for b in args[1:]]
	return A.ResourceExpression(type_name=_build_expr(args[0]), bodies=bodies, loc=loc)


def _body(head, args, loc):
	_arity(head, args, loc, 1)
	return A.ResourceBody(title=_build_expr(args[0]), operations=_build_all(args[1:]), loc=loc)


def _defaults(head, args, loc):
	_arity(head, args, loc, 1)
	return A.ResourceDefaultsExpression(type_ref=_build_expr(args[0]), operations=_build_all(args[1:]), loc=loc)


def _override(head, args, loc):
	_arity(head, args, loc, 1)
	return A.ResourceOverrideExpression(resources=_build_expr(args[0]), operations=_build_all(args[1:]), loc=loc)


def _collect(head, args, loc):
	_arity(head, args, loc, 2)
	return A.CollectExpression(
		type_ref=_build_expr(args[0]),
		query=_build_expr(args[1]),
		operations=_build_all(args[2:]),
		loc=loc,
	)


def _query(head, args, loc):
	_arity(head, args, loc, 0, 1)
	cls = A.VirtualQuery if head == "virtual-query" else A.ExportedQuery
	return cls(expr=_build_optional(args[0] if args else None), loc=loc)


def _capability_mapping(head, args, loc):
	_arity(head, args, loc, 3)
	kind = _string(args[0], "capability mapping kind")
	if kind not in ("produces", "consumes"):
		raise PNError(f"capability mapping kind must be 'produces' or 'consumes', got '{kind}'", loc)
	return A.CapabilityMapping(
		kind=kind,
		component=_build_expr(args[1]),
		capability=_build_expr(args[2]),
		mappings=_build_all(args[3:]),
		loc=loc,
	)


def _attr(head, args, loc):
	_arity(head, args, loc, 3, 3)
	operator = _string(args[1], "attribute operator")
	if operator not in ("=>", "+>"):
		raise PNError(f"attribute operator must be '=>' or '+>', got '{operator}'", loc)
	return A.AttributeOperation(name=_string(args[0], "attribute name"), operator=operator, value=_build_expr(args[2]), loc=loc)


def _splat(head, args, loc):
	_arity(head, args, loc, 1, 1)
	return A.AttributesOperation(expr=_build_expr(args[0]), loc=loc)


def _case(head, args, loc):
	_arity(head, args, loc, 1)
	options = [_typed(o, A.CaseOption, "case option") for o in args[1:]]
	return A.CaseExpression(test=_build_expr(args[0]), options=options, loc=loc)


def _when(head, args, loc):
	_arity(head, args, loc, 2, 2)
	values = _build_all(_list(args[0], "case option values"))
	return A.CaseOption(values=values, then=_build_expr(args[1]), loc=loc)


def _if(head, args, loc):
	_arity(head, args, loc, 2, 3)
	cls = A.UnlessExpression if head == "unless" else A.IfExpression
	else_ = _build_expr(args[2]) if len(args) > 2 else None
	return cls(test=_build_expr(args[0]), then=_build_expr(args[1]), else_=else_, loc=loc)


def _render(head, args, loc):
	_arity(head, args, loc, 1, 1)
	return A.RenderExpression(expr=_build_expr(args[0]), loc=loc)


def _render_string(head, args, loc):
	_arity(head, args, loc, 1, 1)
	return A.RenderStringExpression(value=_string(args[0], "rendered text"), loc=loc)


def _activity(head, args, loc):
	_arity(head, args, loc, 2, 4)
	style = _string(args[0], "activity style")
	name = _string(args[1], "activity name")
	rest = _build_all(args[2:])
	properties: Optional[A.LiteralHash] = None
	if rest and isinstance(rest[0], A.LiteralHash):
		properties = rest.pop(0)
	if len(rest) > 1:
		raise PNError("activity takes an optional property hash followed by an optional definition", loc)
	definition = rest[0] if rest else None
	return A.ActivityExpression(style=style, name=name, properties=properties, definition=definition, loc=loc)


_FORMS: Dict[str, Callable[[str, List[Tree], Optional[A.Located]], A.Expression]] = {
	"block": _block,
	"array": _array,
	"hash": _hash,
	"entry": _entry,
	"var": _var,
	"qn": _qn,
	"qr": _qr,
	"default": _default,
	"access": _access,
	"assign": _operator_binary,
	"arith": _operator_binary,
	"compare": _operator_binary,
	"match": _operator_binary,
	"relationship": _operator_binary,
	"in": _plain_binary,
	"and": _plain_binary,
	"or": _plain_binary,
	"not": _unary,
	"neg": _unary,
	"paren": _unary,
	"call": _call,
	"param": _param,
	"function": _definition,
	"class": _definition,
	"define": _definition,
	"type-alias": _type_alias,
	"resource": _resource,
	"body": _body,
	"defaults": _defaults,
	"override": _override,
	"collect": _collect,
	"virtual-query": _query,
	"exported-query": _query,
	"capability-mapping": _capability_mapping,
	"attr": _attr,
	"splat": _splat,
	"case": _case,
	"when": _when,
	"if": _if,
	"unless": _if,
	"render": _render,
	"render-string": _render_string,
	"activity": _activity,
}


__all__ = ["PNError", "read_pn", "read_pn_file"]
