"""Codegen for control forms.

Each handler rewrites its form into a single Python expression. Test and
binding positions are expressions; body positions are template nodes,
lowered through ``TemplateCodegen.lower_body`` so that elements become
nested templates at any depth.
"""

import ast
from typing import TYPE_CHECKING, Dict, Type

from litup.compiler.ast_nodes import Cond, ControlForm, Expr, For, If, When
from litup.compiler.exceptions import InvalidExpression, MalformedControlForm

if TYPE_CHECKING:
    from litup.compiler.codegen.template import TemplateCodegen


class ControlFormCodegen:
    """Base class for control form handlers."""

    def generate(self, form: ControlForm, codegen: "TemplateCodegen") -> ast.expr:
        raise NotImplementedError


class WhenCodegen(ControlFormCodegen):
    def generate(self, form: ControlForm, codegen: "TemplateCodegen") -> ast.expr:
        assert isinstance(form, When)
        # body if test else None
        return ast.IfExp(
            test=codegen.expression(form.test),
            body=codegen.lower_body(form.body),
            orelse=ast.Constant(value=None),
        )


class IfCodegen(ControlFormCodegen):
    def generate(self, form: ControlForm, codegen: "TemplateCodegen") -> ast.expr:
        assert isinstance(form, If)
        return ast.IfExp(
            test=codegen.expression(form.test),
            body=codegen.lower_value(form.then),
            orelse=codegen.lower_value(form.otherwise),
        )


class ForCodegen(ControlFormCodegen):
    placeholder = "__body__"

    def generate(self, form: ControlForm, codegen: "TemplateCodegen") -> ast.expr:
        assert isinstance(form, For)
        binding = form.binding.source if isinstance(form.binding, Expr) else form.binding
        if not isinstance(binding, str) or not binding.strip():
            raise MalformedControlForm(
                "For binding must be comprehension source like 'x in xs'", node=form
            )

        # [body for <binding>]; the binding may carry its own if-filters
        try:
            tree = ast.parse(f"[{self.placeholder} for {binding.strip()}]", mode="eval")
        except SyntaxError as e:
            raise InvalidExpression(f"Invalid for binding: {e.msg}", node=form) from e

        comp = tree.body
        if (
            not isinstance(comp, ast.ListComp)
            or not isinstance(comp.elt, ast.Name)
            or comp.elt.id != self.placeholder
        ):
            raise MalformedControlForm("For binding must be a single clause", node=form)

        comp.elt = codegen.lower_body(form.body)
        return comp


class CondCodegen(ControlFormCodegen):
    def generate(self, form: ControlForm, codegen: "TemplateCodegen") -> ast.expr:
        assert isinstance(form, Cond)
        for clause in form.clauses:
            if not isinstance(clause, tuple) or len(clause) != 2:
                raise MalformedControlForm(
                    f"Cond clause must be a (test, body) pair, got {clause!r}", node=form
                )

        # t1 ? b1 : (t2 ? b2 : ... None)
        result: ast.expr = ast.Constant(value=None)
        for test, body in reversed(form.clauses):
            result = ast.IfExp(
                test=codegen.expression(test),
                body=codegen.lower_value(body),
                orelse=result,
            )
        return result


DEFAULT_CONTROL_HANDLERS: Dict[Type[ControlForm], ControlFormCodegen] = {
    When: WhenCodegen(),
    If: IfCodegen(),
    For: ForCodegen(),
    Cond: CondCodegen(),
}
