"""Template loader - compiles each call site once and memoises the recipe."""

import logging
import sys
import threading
from types import FrameType
from typing import Any, Dict, Optional, Sequence

from litup.compiler.codegen.generator import CompiledTemplate, TemplateCompiler
from litup.runtime.result import TemplateResult

logger = logging.getLogger(__name__)


class TemplateLoader:
    """Maps call-site tokens to compiled templates."""

    def __init__(self, compiler: Optional[TemplateCompiler] = None) -> None:
        self.compiler = compiler or TemplateCompiler()
        self._cache: Dict[str, CompiledTemplate] = {}  # token -> compiled template
        self._compile_lock = threading.Lock()

    def load(
        self, nodes: Sequence[Any], token: str, use_cache: bool = True
    ) -> CompiledTemplate:
        """Return the compiled template for ``token``, compiling on first use."""
        if use_cache:
            compiled = self._cache.get(token)
            if compiled is not None:
                return compiled

        with self._compile_lock:
            compiled = self._cache.get(token) if use_cache else None
            if compiled is None:
                compiled = self.compiler.compile(*nodes, token=token)
                self._cache[token] = compiled
        return compiled

    def bind(self, nodes: Sequence[Any], token: str) -> CompiledTemplate:
        """Load the recipe for ``token`` with the opaque objects of ``nodes``.

        Raises TemplateChanged when ``nodes`` no longer match the recipe.
        """
        compiled = self.load(nodes, token)
        return self.compiler.bind(compiled, *nodes)

    def invalidate_cache(self, token: Optional[str] = None) -> None:
        """Forget compiled recipes.

        Cached strings are kept, so recompiling a token into different
        strings raises TemplateChanged.
        """
        if token is None:
            self._cache.clear()
        else:
            self._cache.pop(token, None)


# Global instance for html() and template()
_loader_instance = TemplateLoader()


def get_loader() -> TemplateLoader:
    """Get global loader instance."""
    return _loader_instance


def call_site_token(frame: FrameType) -> str:
    """Identify a call site by file, line and bytecode offset."""
    return f"{frame.f_code.co_filename}:{frame.f_lineno}:{frame.f_lasti}"


def html(*nodes: Any, **context: Any) -> TemplateResult:
    """Compile (once) and instantiate a template at this call site.

    Expressions are evaluated against the caller's globals and locals,
    overridden by ``context``.

    Usage:
        def card(user):
            return html(["div.card", ["h2", Expr("user.name")]])
    """
    frame = sys._getframe(1)
    try:
        token = call_site_token(frame)
        scope = dict(frame.f_globals)
        scope.update(frame.f_locals)
    finally:
        del frame

    compiled = _loader_instance.bind(nodes, token)
    return compiled.render(scope, **context)


def template(*nodes: Any, token: Optional[str] = None) -> CompiledTemplate:
    """Compile a reusable template; call it with keyword context.

    Usage:
        row = template(["tr", ["td", Expr("name")]])
        row(name="Ada")
    """
    if token is None:
        frame = sys._getframe(1)
        try:
            token = call_site_token(frame)
        finally:
            del frame
    return _loader_instance.bind(nodes, token)
