import functools
from typing import Any, Callable, TypeVar

F = TypeVar("F", bound=Callable[..., Any])


def directive(factory: F) -> F:
    """Mark everything ``factory`` returns as a rendering-engine directive.

    Usage:
        @directive
        def until(value, placeholder):
            def apply(part):
                ...
            return apply

    The returned object must accept attributes (plain functions do).
    """

    @functools.wraps(factory)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        result = factory(*args, **kwargs)
        setattr(result, "_litup_directive", True)
        return result

    return wrapper  # type: ignore[return-value]


def is_directive(value: Any) -> bool:
    return getattr(value, "_litup_directive", False) is True
