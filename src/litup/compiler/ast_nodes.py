"""Node types for template trees.

Authors write templates as plain Python data (lists for elements, strings
for text) plus the marker classes below. The parser classifies that data
into the canonical variants (``Text``, ``Element``, ``Opaque``, ``Empty``
and the ``ControlForm`` subclasses) before code generation.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Expr:
    """Python expression source evaluated on every instantiation.

    Usage:
        ["span", Expr("user.name")]
        ["input", {"prop/value": Expr("form.email")}]
    """

    source: str


@dataclass(frozen=True)
class ParsedTag:
    base: str
    id: Optional[str] = None
    classes: Tuple[str, ...] = ()


@dataclass
class Text:
    value: str


@dataclass
class Element:
    """Canonical ``(tag, attributes, children)`` triple.

    ``attributes`` never contains a ``class`` entry; the merged class value
    lives in ``classes`` (``None`` when the element has no class at all).
    """

    tag: ParsedTag
    attributes: Dict[Any, Any] = field(default_factory=dict)
    classes: Optional[List[Any]] = None
    children: List[Any] = field(default_factory=list)


@dataclass
class Opaque:
    """Any value that is not interpreted at compile time."""

    value: Any


class _EmptyType:
    _instance: Optional["_EmptyType"] = None

    def __new__(cls) -> "_EmptyType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Empty"


Empty = _EmptyType()


class ControlForm:
    """Base class for control-flow nodes whose bodies hold template nodes."""


class When(ControlForm):
    """Render ``body`` when ``test`` is truthy, nothing otherwise.

    Usage:
        When("user.is_admin", ["span.badge", "admin"])
    """

    def __init__(self, test: Any, *body: Any):
        self.test = test
        self.body: Tuple[Any, ...] = body

    def __repr__(self) -> str:
        return f"When({self.test!r}, {', '.join(repr(b) for b in self.body)})"


class If(ControlForm):
    """Two-branch conditional."""

    def __init__(self, test: Any, then: Any, otherwise: Any = None):
        self.test = test
        self.then = then
        self.otherwise = otherwise

    def __repr__(self) -> str:
        return f"If({self.test!r}, {self.then!r}, {self.otherwise!r})"


class For(ControlForm):
    """Render ``body`` once per iteration of a comprehension clause.

    ``binding`` is comprehension source, filters included:
        For("item in items if item.visible", ["li", Expr("item.title")])
    """

    def __init__(self, binding: Any, *body: Any):
        self.binding = binding
        self.body: Tuple[Any, ...] = body

    def __repr__(self) -> str:
        return f"For({self.binding!r}, {', '.join(repr(b) for b in self.body)})"


class Cond(ControlForm):
    """First matching branch of ``(test, body)`` clauses.

    Usage:
        Cond(
            ("status == 'ok'", ["b.ok", "fine"]),
            ("True", ["i", "unknown"]),
        )
    """

    def __init__(self, *clauses: Any):
        self.clauses: Tuple[Any, ...] = clauses

    def __repr__(self) -> str:
        return f"Cond({', '.join(repr(c) for c in self.clauses)})"
