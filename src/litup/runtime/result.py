"""Template results handed to the rendering engine."""

from typing import Any, Iterator, Optional, Sequence, Tuple


class ArityMismatch(Exception):
    """Raised when a template has the wrong number of values for its strings."""

    pass


class TemplateResult:
    """The ``(strings, values)`` pair for one instantiation of a template.

    ``strings`` is shared by every instantiation of the same call site and
    must never be mutated; ``values`` is fresh each time.
    """

    __slots__ = ("strings", "values", "type", "processor")

    def __init__(
        self,
        strings: Tuple[str, ...],
        values: Sequence[Any],
        type: str = "html",
        processor: Optional[Any] = None,
    ):
        if len(values) != len(strings) - 1:
            raise ArityMismatch(
                f"Can't happen: template with {len(strings)} strings "
                f"and {len(values)} values."
            )
        self.strings = strings
        self.values = list(values)
        self.type = type
        self.processor = processor

    def parts(self) -> Iterator[Any]:
        """Yield strings and values interleaved in emission order."""
        yield self.strings[0]
        for value, string in zip(self.values, self.strings[1:]):
            yield value
            yield string

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TemplateResult):
            return NotImplemented
        return (
            self.strings == other.strings
            and self.values == other.values
            and self.type == other.type
        )

    def __repr__(self) -> str:
        return f"TemplateResult(strings={self.strings!r}, values={self.values!r})"


def make_template_result(strings: Tuple[str, ...], values: Sequence[Any]) -> TemplateResult:
    """Build an html TemplateResult, validating arity."""
    return TemplateResult(strings, values, "html")
