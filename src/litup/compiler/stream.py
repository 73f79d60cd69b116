"""Fragment/slot streams and their normalization."""

import ast
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple, Union


@dataclass
class Slot:
    """A dynamic position; ``expr`` is evaluated on every instantiation."""

    expr: ast.expr

    def source(self) -> str:
        return ast.unparse(self.expr)


StreamItem = Union[str, Slot]


@dataclass
class CompiledStream:
    """Strings and slots satisfying ``len(slots) == len(strings) - 1``."""

    strings: Tuple[str, ...] = ("",)
    slots: List[Slot] = field(default_factory=list)

    def items(self) -> List[StreamItem]:
        """Re-interleave strings and slots in emission order."""
        out: List[StreamItem] = [self.strings[0]]
        for slot, string in zip(self.slots, self.strings[1:]):
            out.append(slot)
            out.append(string)
        return out


def normalize_stream(items: Iterable[StreamItem]) -> CompiledStream:
    """Merge adjacent strings and pad between adjacent slots.

    A stream starting or ending with a slot gets an empty leading or
    trailing string, so the result always alternates string, slot, string.
    """
    strings = [""]
    slots: List[Slot] = []
    for item in items:
        if isinstance(item, Slot):
            slots.append(item)
            strings.append("")
        else:
            strings[-1] += item
    return CompiledStream(strings=tuple(strings), slots=slots)
