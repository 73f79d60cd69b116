"""Template assembly: top-level compilation and instantiation."""

import ast
import copy
import logging
import threading
from types import CodeType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Type

from litup.compiler.ast_nodes import ControlForm
from litup.compiler.codegen.control_flow import ControlFormCodegen
from litup.compiler.codegen.template import TemplateCodegen
from litup.compiler.exceptions import InvalidTopLevel, MalformedTag, TemplateChanged
from litup.compiler.parser import is_element_vector, parse_tag
from litup.compiler.stream import CompiledStream, Slot, normalize_stream
from litup.runtime.cache import TemplateCache, get_cache
from litup.runtime.helpers import class_map
from litup.runtime.result import TemplateResult, make_template_result

logger = logging.getLogger(__name__)


class CompiledTemplate:
    """Recipe for one call site.

    ``strings`` is the cached tuple for ``token``; calling the template
    evaluates the slot expressions against a fresh scope and returns a
    TemplateResult sharing that tuple. Opaque objects from the tree live in
    ``namespace`` under the names listed in ``constants``.
    """

    def __init__(
        self,
        token: str,
        stream: CompiledStream,
        code: CodeType,
        namespace: Dict[str, Any],
        nested: Dict[str, Tuple[str, ...]],
        constants: Sequence[str] = (),
    ):
        self.token = token
        self.strings = stream.strings
        self.slots: List[Slot] = stream.slots
        self.code = code
        self.namespace = namespace
        self.nested = nested
        self.constants = tuple(constants)
        self._slot_sources: Optional[List[str]] = None

    def slot_sources(self) -> List[str]:
        if self._slot_sources is None:
            self._slot_sources = [slot.source() for slot in self.slots]
        return list(self._slot_sources)

    def with_constants(self, constants: Mapping[str, Any]) -> "CompiledTemplate":
        """Same recipe with its opaque objects replaced."""
        if all(self.namespace.get(name) is value for name, value in constants.items()):
            return self
        bound = copy.copy(self)
        bound.namespace = {**self.namespace, **constants}
        return bound

    def render(self, scope: Optional[Mapping[str, Any]] = None, **context: Any) -> TemplateResult:
        env: Dict[str, Any] = dict(scope) if scope else {}
        env.update(context)
        # Compiler names win over user names
        env.update(self.namespace)
        return eval(self.code, env)

    __call__ = render

    def __repr__(self) -> str:
        return f"<CompiledTemplate {self.token} strings={len(self.strings)} slots={len(self.slots)}>"


class TemplateCompiler:
    """Compiles template trees into CompiledTemplates.

    Configuration:
        cache: TemplateCache shared by every template this compiler builds
            (defaults to the process-wide cache)
        container_tags: tags always written with a closing tag
        control_handlers: extra or replacement control form codegens
    """

    def __init__(
        self,
        cache: Optional[TemplateCache] = None,
        container_tags: Optional[Iterable[str]] = None,
        control_handlers: Optional[Dict[Type[ControlForm], ControlFormCodegen]] = None,
    ) -> None:
        self.cache = cache if cache is not None else get_cache()
        self.template_codegen = TemplateCodegen(
            container_tags=container_tags, control_handlers=control_handlers
        )
        self._lock = threading.Lock()

    def _check_top_level(self, nodes: Sequence[Any]) -> None:
        if not nodes:
            raise InvalidTopLevel("A template needs at least one element")
        for node in nodes:
            if not is_element_vector(node):
                raise InvalidTopLevel(
                    "Top-level template arguments must be elements with a literal tag",
                    node=node,
                )
            try:
                parse_tag(node[0])
            except MalformedTag as e:
                raise InvalidTopLevel(
                    f"Top-level tag {node[0]!r} is not a literal tag", node=node
                ) from e

    def _generate(
        self, nodes: Sequence[Any], token: str
    ) -> Tuple[CompiledStream, Dict[str, Any], Dict[str, Any], Dict[str, Tuple[str, ...]]]:
        codegen = self.template_codegen
        # Codegen keeps per-compile state
        with self._lock:
            raw = codegen.generate(nodes, token)
            namespace = dict(codegen.namespace)
            constants = dict(codegen.constants)
            nested = dict(codegen.templates)
        return normalize_stream(raw), namespace, constants, nested

    def compile(self, *nodes: Any, token: str) -> CompiledTemplate:
        self._check_top_level(nodes)
        codegen = self.template_codegen
        stream, namespace, constants, nested = self._generate(nodes, token)

        # A token keeps the strings it was first cached with
        for key, strings in [(token, stream.strings), *nested.items()]:
            cached = self.cache.get(key)
            if cached is not None and cached != strings:
                raise TemplateChanged(
                    f"Template {key} is already cached with different strings: "
                    f"{list(cached)!r} != {list(strings)!r}"
                )

        for nested_token, strings in nested.items():
            self.cache.put(nested_token, strings)
        stream.strings = self.cache.put(token, stream.strings)

        strings_name = "__strings__"
        namespace[strings_name] = stream.strings
        namespace[codegen.template_helper] = self.instantiate
        namespace[codegen.class_codegen.helper_name] = class_map

        body = codegen.template_call(
            token, ast.Name(id=strings_name, ctx=ast.Load()), stream.slots
        )
        module = ast.Expression(body=body)
        ast.fix_missing_locations(module)
        code = compile(module, f"<litup template {token}>", "eval")

        logger.debug(
            "Compiled template %s: %d strings, %d slots, %d nested",
            token,
            len(stream.strings),
            len(stream.slots),
            len(nested),
        )
        return CompiledTemplate(token, stream, code, namespace, nested, list(constants))

    def bind(self, compiled: CompiledTemplate, *nodes: Any) -> CompiledTemplate:
        """Reuse ``compiled`` for ``nodes``, taking opaque objects from ``nodes``.

        Raises TemplateChanged if ``nodes`` lower to different strings or
        slot expressions than the ones ``compiled`` was built from.
        """
        self._check_top_level(nodes)
        stream, _, constants, nested = self._generate(nodes, compiled.token)

        if (
            stream.strings != compiled.strings
            or nested != compiled.nested
            or [slot.source() for slot in stream.slots] != compiled.slot_sources()
        ):
            raise TemplateChanged(
                f"Template {compiled.token} changed since it was compiled; "
                "pass values that vary between calls as Expr or objects, not literal text"
            )
        return compiled.with_constants(constants)

    def instantiate(
        self, token: str, strings: Tuple[str, ...], values: Sequence[Any]
    ) -> TemplateResult:
        """Runtime half of a template: cached strings plus fresh values."""
        return make_template_result(self.cache.put(token, strings), values)
