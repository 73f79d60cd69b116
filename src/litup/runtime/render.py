"""Render entry point delegating to a pluggable DOM rendering engine."""

import logging
from typing import Any, Optional, Protocol, runtime_checkable

from litup.runtime.result import TemplateResult

logger = logging.getLogger(__name__)


class RenderEngineNotConfigured(RuntimeError):
    """Raised when rendering is requested before an engine is set."""

    pass


@runtime_checkable
class RenderEngine(Protocol):
    """Mounts or incrementally updates a container from a TemplateResult."""

    def render(self, result: TemplateResult, container: Any, options: Any) -> Any: ...


_ENGINE: Optional[RenderEngine] = None


def set_engine(engine: Optional[RenderEngine]) -> Optional[RenderEngine]:
    """Install the engine used by ``render``; returns the previous one."""
    global _ENGINE
    if engine is not None and not isinstance(engine, RenderEngine):
        raise TypeError(f"{engine!r} does not implement render(result, container, options)")
    previous = _ENGINE
    _ENGINE = engine
    return previous


def get_engine() -> Optional[RenderEngine]:
    return _ENGINE


def render(result: TemplateResult, container: Any, options: Any = None) -> Any:
    """Render ``result`` into ``container``.

    ``options`` is passed through to the engine untouched.
    """
    engine = _ENGINE
    if engine is None:
        raise RenderEngineNotConfigured(
            "No render engine configured; call litup.set_engine() first"
        )
    logger.debug("Rendering %d-slot template into %r", len(result.values), container)
    return engine.render(result, container, options)
