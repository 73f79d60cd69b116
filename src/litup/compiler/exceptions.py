"""Compile-time errors raised while lowering a template tree."""

from typing import Any, Optional


class TemplateCompileError(Exception):
    """Base exception for all template compilation errors."""

    def __init__(self, message: str, node: Optional[Any] = None):
        self.message = message
        self.node = node
        super().__init__(f"{message}\n\n  Node: {node!r}" if node is not None else message)


class MalformedTag(TemplateCompileError):
    """Tag token does not match ``base(#id)?(.class)*``."""


class DuplicateId(TemplateCompileError):
    """Id given both as a ``#id`` tag suffix and in the attribute map."""


class UnknownElementShape(TemplateCompileError):
    """Vector is not a literal tagged element."""


class InvalidTopLevel(TemplateCompileError):
    """Top-level template argument is not a literal tagged element."""


class InvalidExpression(TemplateCompileError):
    """Expression source does not parse as Python."""


class MalformedControlForm(TemplateCompileError):
    pass


class TemplateChanged(TemplateCompileError):
    """A call site produced different strings or slots than its cached recipe.

    Values that vary between calls at one call site must be passed as
    ``Expr`` or opaque objects, not as literal text.
    """
