"""Class attribute codegen.

The merged class value is a list whose items are literal class names,
class-maps (name -> condition) or opaque values. When every item is a
literal the attribute is fully static::

    class="a b c"

Otherwise all items are folded into one mapping, literals first and mapped
to ``True``, then each class-map in order (later keys override earlier),
and the attribute becomes a single slot::

    class=${__class_map__({"a": True, "active": is_active})}
"""

import ast
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, List

from litup.compiler.stream import Slot, StreamItem
from litup.runtime.escape import escape_html

if TYPE_CHECKING:
    from litup.compiler.codegen.template import TemplateCodegen


class ClassCodegen:
    helper_name = "__class_map__"

    def generate(self, classes: List[Any], codegen: "TemplateCodegen") -> List[StreamItem]:
        if all(isinstance(c, str) for c in classes):
            return [f'class="{escape_html(" ".join(classes))}"']

        keys: List[ast.expr] = []
        values: List[ast.expr] = []

        for name in classes:
            if isinstance(name, str):
                keys.append(ast.Constant(value=name))
                values.append(ast.Constant(value=True))

        for item in classes:
            if isinstance(item, str):
                continue
            if isinstance(item, Mapping):
                for name, condition in item.items():
                    keys.append(codegen.value_expr(name))
                    values.append(codegen.expression(condition))
            else:
                # Opaque class name, always on
                keys.append(codegen.value_expr(item))
                values.append(ast.Constant(value=True))

        call = ast.Call(
            func=ast.Name(id=self.helper_name, ctx=ast.Load()),
            args=[ast.Dict(keys=keys, values=values)],
            keywords=[],
        )
        return ["class=", Slot(call)]
