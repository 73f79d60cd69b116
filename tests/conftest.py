from typing import Any

import pytest

from litup.compiler.codegen.generator import CompiledTemplate, TemplateCompiler
from litup.runtime.cache import TemplateCache


@pytest.fixture
def cache() -> TemplateCache:
    return TemplateCache()


@pytest.fixture
def compiler(cache: TemplateCache) -> TemplateCompiler:
    return TemplateCompiler(cache=cache)


@pytest.fixture
def compile_nodes(compiler: TemplateCompiler) -> Any:
    """Compile nodes under a fixed token with an isolated cache."""

    def _compile(*nodes: Any, token: str = "t") -> CompiledTemplate:
        return compiler.compile(*nodes, token=token)

    return _compile
