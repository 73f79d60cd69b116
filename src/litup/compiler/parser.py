"""Tag parsing, attribute normalization and node classification."""

import re
from collections.abc import Mapping
from functools import lru_cache
from typing import Any, List, Optional

from litup.compiler.ast_nodes import (
    ControlForm,
    Element,
    Empty,
    Opaque,
    ParsedTag,
    Text,
)
from litup.compiler.exceptions import DuplicateId, MalformedTag, UnknownElementShape

# base(#id)?(.class)* where every segment is a run free of whitespace, '.' and '#'
TAG_PATTERN = re.compile(r"^([^\s.#]+)(?:#([^\s.#]+))?((?:\.[^\s.#]+)*)$")


@lru_cache(maxsize=1024)
def parse_tag(token: str) -> ParsedTag:
    """Split a tag token such as ``div#main.card.wide`` into its parts."""
    match = TAG_PATTERN.match(token)
    if not match:
        raise MalformedTag(f"Malformed tag {token!r}", node=token)

    base, tag_id, class_suffix = match.groups()
    classes = tuple(c for c in class_suffix.split(".") if c)
    return ParsedTag(base=base, id=tag_id, classes=classes)


def is_element_vector(node: Any) -> bool:
    return isinstance(node, (list, tuple)) and bool(node) and isinstance(node[0], str)


def classify_node(node: Any) -> Any:
    """Map raw template data onto a node variant.

    Returns ``Empty``, ``Text``, ``Element``, a ``ControlForm`` instance
    (unchanged) or ``Opaque``.
    """
    if node is None or node is False:
        return Empty
    if isinstance(node, bool):
        return Opaque(node)
    if isinstance(node, str):
        return Text(node)
    if isinstance(node, (int, float)):
        return Text(str(node))
    if isinstance(node, (list, tuple)):
        return normalize_element(node)
    if isinstance(node, ControlForm):
        return node
    # Expr and arbitrary objects are both slot values
    return Opaque(node)


def normalize_element(vector: Any) -> Element:
    """Produce the canonical element for a tagged vector.

    The second item is the attribute map only when it is a mapping,
    otherwise it is the first child.
    """
    if not is_element_vector(vector):
        raise UnknownElementShape(
            "Element must be a vector starting with a literal tag", node=vector
        )

    tag = parse_tag(vector[0])
    rest = list(vector[1:])
    attrs: Mapping = {}
    if rest and isinstance(rest[0], Mapping):
        attrs = rest.pop(0)

    attributes = {}
    attr_id = attrs.get("id")
    if tag.id is not None and attr_id is not None:
        raise DuplicateId(
            f"Id given twice on <{tag.base}>: #{tag.id} and id={attr_id!r}",
            node=vector,
        )
    if tag.id is not None:
        attributes["id"] = tag.id
    elif attr_id is not None:
        attributes["id"] = attr_id

    for key, value in attrs.items():
        if key in ("id", "class"):
            continue
        attributes[key] = value

    return Element(
        tag=tag,
        attributes=attributes,
        classes=merge_classes(tag.classes, attrs.get("class")),
        children=rest,
    )


def merge_classes(tag_classes: Any, attr_class: Any) -> Optional[List[Any]]:
    """Concatenate tag classes with the attribute map's class value.

    Returns ``None`` when neither side supplies a class, so that no class
    attribute is rendered. An explicit empty value still yields ``[]``.
    """
    merged: List[Any] = list(tag_classes)

    if attr_class is None:
        return merged or None

    if isinstance(attr_class, str):
        merged.extend(attr_class.split())
    elif isinstance(attr_class, Mapping):
        merged.append(attr_class)
    elif isinstance(attr_class, (list, tuple)):
        for item in attr_class:
            if item is None or item is False:
                continue
            merged.append(item)
    else:
        # Expr or other opaque value, resolved through the class-map helper
        merged.append(attr_class)
    return merged


def flatten_children(children: List[Any]) -> List[Any]:
    """Classify children, dropping the ones that contribute nothing."""
    nodes = []
    for child in children:
        node = classify_node(child)
        if node is Empty:
            continue
        nodes.append(node)
    return nodes
