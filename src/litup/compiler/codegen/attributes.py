"""Attribute binding dispatch."""

import enum
from typing import TYPE_CHECKING, Any, List, Mapping, Tuple

from litup.compiler.stream import Slot, StreamItem
from litup.runtime.escape import escape_html

if TYPE_CHECKING:
    from litup.compiler.codegen.template import TemplateCodegen


class AttributeKind(enum.Enum):
    PLAIN = ""
    BOOLEAN_FLAG = "?"
    PROPERTY = "."
    EVENT = "@"


NAMESPACES = {
    "flag": AttributeKind.BOOLEAN_FLAG,
    "prop": AttributeKind.PROPERTY,
    "on": AttributeKind.EVENT,
}

PREFIXES = {kind.value: kind for kind in AttributeKind if kind.value}


def classify_attribute(key: Any) -> Tuple[AttributeKind, str]:
    """Return the binding kind and bare name for an attribute key.

    ``"on/click"`` and ``"@click"`` both give ``(EVENT, "click")``.
    """
    key = key if isinstance(key, str) else str(key)

    namespace, sep, name = key.partition("/")
    if sep and name and namespace in NAMESPACES:
        return NAMESPACES[namespace], name

    if len(key) > 1 and key[0] in PREFIXES:
        return PREFIXES[key[0]], key[1:]

    return AttributeKind.PLAIN, key


def render_key(key: Any) -> str:
    kind, name = classify_attribute(key)
    return f"{kind.value}{name}"


class AttributeCodegen:
    """Emits one fragment group per rendered attribute.

    Groups are joined with single spaces by the element codegen. The class
    attribute is never handled here.
    """

    def generate(
        self, attributes: Mapping[Any, Any], codegen: "TemplateCodegen"
    ) -> List[List[StreamItem]]:
        groups: List[List[StreamItem]] = []
        for key, value in attributes.items():
            # None suppresses the attribute entirely
            if value is None:
                continue

            rendered = render_key(key)
            if isinstance(value, str):
                groups.append([f'{rendered}="{escape_html(value)}"'])
            else:
                groups.append([f"{rendered}=", Slot(codegen.value_expr(value))])
        return groups
