"""Helpers referenced by compiled template code."""

from typing import Any, Mapping


def class_map(classes: Mapping[Any, Any]) -> str:
    """Join the class names whose condition is truthy.

    Keys that are not strings are stringified. Order follows the mapping.

    Usage:
        class_map({"btn": True, "active": is_active, "hidden": False})
        -> "btn active"
    """
    return " ".join(
        name if isinstance(name, str) else str(name)
        for name, enabled in classes.items()
        if enabled
    )
