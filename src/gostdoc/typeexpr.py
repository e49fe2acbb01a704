from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from .errors import ScanError, UnresolvableTypeError


@dataclass(frozen=True)
class Named:
    name: str


@dataclass(frozen=True)
class Qualified:
    # `path.name`; path may itself be Qualified for chained selectors.
    path: "TypeExpr"
    name: "TypeExpr"


@dataclass(frozen=True)
class Pointer:
    inner: "TypeExpr"


@dataclass(frozen=True)
class Slice:
    element: "TypeExpr"


@dataclass(frozen=True)
class Map:
    key: "TypeExpr"
    value: "TypeExpr"


@dataclass(frozen=True)
class AnonymousRecord:
    pass


@dataclass(frozen=True)
class Unresolvable:
    node: str  # AST node kind that has no rendering (func, chan, interface, ...)


TypeExpr = Union[Named, Qualified, Pointer, Slice, Map, AnonymousRecord, Unresolvable]


def resolve_full(expr: TypeExpr) -> str:
    """Render a type expression keeping `*`, `[]` and `map[..]` wrappers."""
    if isinstance(expr, Named):
        return expr.name
    if isinstance(expr, Pointer):
        return "*" + resolve_full(expr.inner)
    if isinstance(expr, Slice):
        return "[]" + resolve_full(expr.element)
    if isinstance(expr, Qualified):
        return resolve_full(expr.path) + "." + resolve_full(expr.name)
    if isinstance(expr, Map):
        return "map[" + resolve_full(expr.key) + "]" + resolve_full(expr.value)
    if isinstance(expr, AnonymousRecord):
        return "struct{}"
    raise UnresolvableTypeError(f"can't detect type name: {_describe(expr)}")


def resolve_base(expr: TypeExpr) -> str:
    """Render a type expression without pointer and slice wrappers.

    Map key and value are rendered with `resolve_full`, so `map[string]*Bar`
    keeps its inner `*`. Consumers grouping fields by base type rely on this.
    """
    if isinstance(expr, Named):
        return expr.name
    if isinstance(expr, Pointer):
        return resolve_base(expr.inner)
    if isinstance(expr, Slice):
        return resolve_base(expr.element)
    if isinstance(expr, Qualified):
        return resolve_base(expr.path) + "." + resolve_base(expr.name)
    if isinstance(expr, Map):
        return "map[" + resolve_full(expr.key) + "]" + resolve_full(expr.value)
    if isinstance(expr, AnonymousRecord):
        return "struct{}"
    raise UnresolvableTypeError(f"can't detect type name: {_describe(expr)}")


def _describe(expr: Any) -> str:
    if isinstance(expr, Unresolvable):
        return expr.node
    return type(expr).__name__


def is_ptr(expr: TypeExpr) -> bool:
    return isinstance(expr, Pointer)


def is_array(expr: TypeExpr) -> bool:
    return isinstance(expr, Slice)


def is_ptr_array(expr: TypeExpr) -> bool:
    return isinstance(expr, Pointer) and isinstance(expr.inner, Slice)


def is_array_ptr(expr: TypeExpr) -> bool:
    return isinstance(expr, Slice) and isinstance(expr.element, Pointer)


def is_ptr_array_ptr(expr: TypeExpr) -> bool:
    return isinstance(expr, Pointer) and is_array_ptr(expr.inner)


def expr_from_json(obj: Any) -> TypeExpr:
    """Decode the tagged-object form emitted by the Go scanner helper."""
    if not isinstance(obj, dict):
        raise ScanError(f"type expression must be an object, got {type(obj).__name__}")
    kind = obj.get("kind")
    if not isinstance(kind, str) or not kind:
        raise ScanError("type expression is missing 'kind'")

    if kind == "ident":
        name = obj.get("name")
        if not isinstance(name, str) or not name:
            raise ScanError("ident expression is missing 'name'")
        return Named(name)
    if kind == "selector":
        return Qualified(expr_from_json(obj.get("x")), expr_from_json(obj.get("sel")))
    if kind == "star":
        return Pointer(expr_from_json(obj.get("x")))
    if kind == "array":
        n = obj.get("len")
        if n is not None:
            # Fixed-size arrays have no rendering in the type name contract.
            return Unresolvable(f"array[{n}]")
        return Slice(expr_from_json(obj.get("elt")))
    if kind == "map":
        return Map(expr_from_json(obj.get("key")), expr_from_json(obj.get("value")))
    if kind == "struct":
        return AnonymousRecord()
    return Unresolvable(kind)
