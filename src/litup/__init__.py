try:
    from ._version import __version__
except ImportError:
    from importlib.metadata import version, PackageNotFoundError

    try:
        __version__ = version("litup")
    except PackageNotFoundError:
        __version__ = "unknown"

from litup.compiler.ast_nodes import Cond, Expr, For, If, When
from litup.compiler.codegen.generator import CompiledTemplate, TemplateCompiler
from litup.compiler.exceptions import (
    DuplicateId,
    InvalidExpression,
    InvalidTopLevel,
    MalformedControlForm,
    MalformedTag,
    TemplateChanged,
    TemplateCompileError,
    UnknownElementShape,
)
from litup.core.directive import directive, is_directive
from litup.runtime.cache import TemplateCache
from litup.runtime.helpers import class_map
from litup.runtime.loader import TemplateLoader, get_loader, html, template
from litup.runtime.render import (
    RenderEngine,
    RenderEngineNotConfigured,
    get_engine,
    render,
    set_engine,
)
from litup.runtime.result import ArityMismatch, TemplateResult, make_template_result

__all__ = [
    "html",
    "template",
    "Expr",
    "When",
    "If",
    "For",
    "Cond",
    "render",
    "set_engine",
    "get_engine",
    "RenderEngine",
    "TemplateResult",
    "make_template_result",
    "class_map",
    "directive",
    "is_directive",
    "TemplateCompiler",
    "CompiledTemplate",
    "TemplateLoader",
    "TemplateCache",
    "get_loader",
    "TemplateCompileError",
    "MalformedTag",
    "DuplicateId",
    "UnknownElementShape",
    "InvalidTopLevel",
    "InvalidExpression",
    "MalformedControlForm",
    "TemplateChanged",
    "ArityMismatch",
    "RenderEngineNotConfigured",
]
