"""Template lowering: element and node codegen."""

import ast
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple, Type

from litup.compiler.ast_nodes import (
    ControlForm,
    Element,
    Empty,
    Expr,
    Opaque,
    Text,
)
from litup.compiler.codegen.attributes import AttributeCodegen
from litup.compiler.codegen.classes import ClassCodegen
from litup.compiler.codegen.control_flow import (
    DEFAULT_CONTROL_HANDLERS,
    ControlFormCodegen,
)
from litup.compiler.exceptions import InvalidExpression, MalformedControlForm
from litup.compiler.parser import (
    classify_node,
    flatten_children,
    is_element_vector,
    normalize_element,
)
from litup.compiler.stream import Slot, StreamItem, normalize_stream
from litup.runtime.escape import escape_html


class TemplateCodegen:
    """Lowers template nodes into a stream of fragments and slots.

    Slot expressions are Python AST evaluated against the render scope.
    Values that cannot be written as literals are stored in ``namespace``
    and referenced by name, and so are the strings of nested templates,
    which are recorded in ``templates`` under their derived tokens.
    """

    # Elements that must always be written with an explicit closing tag
    CONTAINER_TAGS = frozenset(
        {
            "a",
            "article",
            "aside",
            "b",
            "body",
            "button",
            "canvas",
            "dd",
            "div",
            "dl",
            "dt",
            "em",
            "fieldset",
            "footer",
            "form",
            "h1",
            "h2",
            "h3",
            "h4",
            "h5",
            "h6",
            "head",
            "header",
            "html",
            "i",
            "iframe",
            "label",
            "li",
            "main",
            "nav",
            "ol",
            "option",
            "p",
            "pre",
            "script",
            "section",
            "select",
            "span",
            "strong",
            "style",
            "table",
            "tbody",
            "td",
            "textarea",
            "th",
            "thead",
            "title",
            "tr",
            "ul",
            "video",
        }
    )

    template_helper = "__template__"

    def __init__(
        self,
        container_tags: Optional[Iterable[str]] = None,
        control_handlers: Optional[Dict[Type[ControlForm], ControlFormCodegen]] = None,
    ) -> None:
        self.container_tags: FrozenSet[str] = (
            frozenset(container_tags) if container_tags is not None else self.CONTAINER_TAGS
        )
        self.control_handlers: Dict[Type[ControlForm], ControlFormCodegen] = dict(
            DEFAULT_CONTROL_HANDLERS
        )
        if control_handlers:
            self.control_handlers.update(control_handlers)

        self.attribute_codegen = AttributeCodegen()
        self.class_codegen = ClassCodegen()
        self._reset_state("")

    def _reset_state(self, token: str) -> None:
        self.token = token
        self.namespace: Dict[str, Any] = {}
        self.constants: Dict[str, Any] = {}
        self.templates: Dict[str, Tuple[str, ...]] = {}
        self._const_counter = 0
        self._nested_counter = 0

    def generate(self, nodes: Sequence[Any], token: str) -> List[StreamItem]:
        """Lower top-level nodes for one call site into a raw stream."""
        self._reset_state(token)
        out: List[StreamItem] = []
        for node in nodes:
            self._add_node(classify_node(node), out)
        return out

    def _add_node(self, node: Any, out: List[StreamItem]) -> None:
        if node is Empty:
            return
        if isinstance(node, Text):
            out.append(escape_html(node.value, quote=False))
        elif isinstance(node, Element):
            self._add_element(node, out)
        elif isinstance(node, ControlForm):
            out.append(Slot(self.control_form(node)))
        elif isinstance(node, Opaque):
            out.append(Slot(self.value_expr(node.value)))
        else:
            raise TypeError(f"Unclassified template node {node!r}")

    def _add_element(self, element: Element, out: List[StreamItem]) -> None:
        base = element.tag.base
        attributes = dict(element.attributes)
        children = flatten_children(element.children)

        # id, class, then the rest in mapping order
        groups: List[List[StreamItem]] = []
        if "id" in attributes:
            groups.extend(
                self.attribute_codegen.generate({"id": attributes.pop("id")}, self)
            )
        if element.classes is not None:
            groups.append(self.class_codegen.generate(element.classes, self))
        groups.extend(self.attribute_codegen.generate(attributes, self))

        out.append(f"<{base} ")
        for i, group in enumerate(groups):
            if i:
                out.append(" ")
            out.extend(group)

        if children or base in self.container_tags:
            out.append(">")
            for child in children:
                self._add_node(child, out)
            out.append(f"</{base}>")
        else:
            out.append(" />" if groups else "/>")

    def control_form(self, form: ControlForm) -> ast.expr:
        for cls in type(form).__mro__:
            handler = self.control_handlers.get(cls)
            if handler is not None:
                return handler.generate(form, self)
        raise MalformedControlForm(
            f"No codegen registered for {type(form).__name__}", node=form
        )

    def nested_template(self, element: Any) -> ast.expr:
        """Compile an element in a body position into its own template.

        Produces ``__template__(token, strings, [values...])`` where the
        value expressions are inlined, so they see loop variables bound by
        the enclosing control form.
        """
        if not isinstance(element, Element):
            element = normalize_element(element)

        index = self._nested_counter
        self._nested_counter += 1
        token = f"{self.token}#{index}"

        raw: List[StreamItem] = []
        self._add_element(element, raw)
        stream = normalize_stream(raw)

        strings_name = f"__strings_{index}__"
        self.namespace[strings_name] = stream.strings
        self.templates[token] = stream.strings
        return self.template_call(token, ast.Name(id=strings_name, ctx=ast.Load()), stream.slots)

    def template_call(
        self, token: str, strings: ast.expr, slots: Sequence[Slot]
    ) -> ast.expr:
        return ast.Call(
            func=ast.Name(id=self.template_helper, ctx=ast.Load()),
            args=[
                ast.Constant(value=token),
                strings,
                ast.List(elts=[slot.expr for slot in slots], ctx=ast.Load()),
            ],
            keywords=[],
        )

    def lower_body(self, body: Sequence[Any]) -> ast.expr:
        """Lower a control-form body; several nodes produce a list."""
        if not body:
            return ast.Constant(value=None)
        if len(body) == 1:
            return self.lower_value(body[0])
        return ast.List(elts=[self.lower_value(b) for b in body], ctx=ast.Load())

    def lower_value(self, node: Any) -> ast.expr:
        """Lower a node in a body position."""
        if isinstance(node, Element) or is_element_vector(node):
            return self.nested_template(node)
        if isinstance(node, (list, tuple)):
            # Raises UnknownElementShape for untagged vectors
            normalize_element(node)
        return self.value_expr(node)

    def value_expr(self, value: Any) -> ast.expr:
        """Lower an opaque value: Expr source, control form or constant."""
        if isinstance(value, Expr):
            return self.parse_expr(value.source, node=value)
        if isinstance(value, ControlForm):
            return self.control_form(value)
        return self.constant(value)

    def expression(self, value: Any) -> ast.expr:
        """Lower a value in an expression position; strings are source."""
        if isinstance(value, str):
            return self.parse_expr(value, node=value)
        return self.value_expr(value)

    def parse_expr(self, source: str, node: Any = None) -> ast.expr:
        try:
            tree = ast.parse(source.strip(), mode="eval")
        except SyntaxError as e:
            raise InvalidExpression(
                f"Invalid expression {source!r}: {e.msg}", node=node
            ) from e
        return tree.body

    def constant(self, value: Any) -> ast.expr:
        if value is None or isinstance(value, (bool, int, float, complex, str, bytes)):
            return ast.Constant(value=value)

        name = f"__const_{self._const_counter}__"
        self._const_counter += 1
        self.namespace[name] = self.constants[name] = value
        return ast.Name(id=name, ctx=ast.Load())
