import ast

import pytest

from litup.compiler.ast_nodes import Cond, ControlForm, Expr, For, If, When
from litup.compiler.codegen.control_flow import ControlFormCodegen
from litup.compiler.codegen.generator import TemplateCompiler
from litup.compiler.exceptions import InvalidExpression, MalformedControlForm
from litup.runtime.cache import TemplateCache
from litup.runtime.result import TemplateResult


def test_when_inside_element_is_one_slot(compile_nodes):
    t = compile_nodes(["div", When("cond", ["span", Expr("x")])])
    assert t.strings == ("<div >", "</div>")
    assert len(t.slots) == 1
    assert t.slot_sources()[0].endswith("if cond else None")


def test_when_body_matches_standalone_template(compile_nodes):
    t = compile_nodes(["div", When("cond", ["span", Expr("x")])])
    standalone = compile_nodes(["span", Expr("x")], token="standalone")

    nested = t(cond=True, x=7).values[0]
    assert isinstance(nested, TemplateResult)
    assert nested.strings == standalone.strings
    assert nested.values == standalone(x=7).values == [7]

    assert t(cond=False, x=7).values == [None]


def test_when_with_non_element_body(compile_nodes):
    t = compile_nodes(["p", When("show", "hello", Expr("name"))])
    assert t(show=True, name="Ada").values == [["hello", "Ada"]]
    assert t(show=False, name="Ada").values == [None]


def test_for_produces_one_result_per_item(compile_nodes, cache):
    t = compile_nodes(["ul", For("item in items", ["li", Expr("item")])])
    assert t.strings == ("<ul >", "</ul>")

    rows = t(items=["a", "b"]).values[0]
    assert [r.values for r in rows] == [["a"], ["b"]]
    assert rows[0].strings is rows[1].strings
    assert rows[0].strings is cache.get("t#0")


def test_for_binding_with_filter_and_unpacking(compile_nodes):
    t = compile_nodes(
        ["dl", For("k, v in pairs if v", ["dt", Expr("k")], ["dd", Expr("v")])]
    )
    groups = t(pairs=[("a", 1), ("b", 0), ("c", 3)]).values[0]
    assert [[r.values[0] for r in group] for group in groups] == [["a", 1], ["c", 3]]


def test_nested_for_sees_outer_loop_variable(compile_nodes):
    t = compile_nodes(
        [
            "table",
            For("row in rows", ["tr", For("cell in row", ["td", Expr("cell * scale")])]),
        ]
    )
    result = t(rows=[[1, 2], [3]], scale=10)
    rows = result.values[0]
    assert [[cell.values[0] for cell in row.values[0]] for row in rows] == [[10, 20], [30]]
    assert rows[0].strings == ("<tr >", "</tr>")


def test_if_two_branches(compile_nodes):
    t = compile_nodes(["div", If("ok", ["b", "yes"], ["i", "no"])])
    assert t(ok=True).values[0].strings == ("<b >yes</b>",)
    assert t(ok=False).values[0].strings == ("<i >no</i>",)
    assert set(t.nested) == {"t#0", "t#1"}


def test_cond_first_match_wins(compile_nodes):
    t = compile_nodes(
        ["div", Cond(("n > 1", ["b", "many"]), ("n == 1", "one"), ("True", None))]
    )
    assert t(n=5).values[0].strings == ("<b >many</b>",)
    assert t(n=1).values == ["one"]
    assert t(n=0).values == [None]


def test_cond_without_match(compile_nodes):
    t = compile_nodes(["div", Cond(("False", ["b", "never"]))])
    assert t().values == [None]


def test_control_form_as_attribute_value(compile_nodes):
    t = compile_nodes(["div", {"title": If("short", "S", "Long")}])
    assert t(short=False).values == ["Long"]


def test_malformed_cond_clause(compile_nodes):
    with pytest.raises(MalformedControlForm):
        compile_nodes(["div", Cond("x")])


def test_malformed_for_binding(compile_nodes):
    with pytest.raises(MalformedControlForm):
        compile_nodes(["div", For("", ["b"])])
    with pytest.raises(InvalidExpression):
        compile_nodes(["div", For("x in", ["b"])])


def test_unregistered_control_form(compile_nodes):
    class Loop(ControlForm):
        pass

    with pytest.raises(MalformedControlForm):
        compile_nodes(["div", Loop()])


class Unless(ControlForm):
    def __init__(self, test, body):
        self.test = test
        self.body = body


class UnlessCodegen(ControlFormCodegen):
    def generate(self, form, codegen):
        return ast.IfExp(
            test=codegen.expression(form.test),
            body=ast.Constant(value=None),
            orelse=codegen.lower_value(form.body),
        )


def test_custom_control_form_handler():
    compiler = TemplateCompiler(cache=TemplateCache(), control_handlers={Unless: UnlessCodegen()})
    t = compiler.compile(["div", Unless("hidden", ["em", "shown"])], token="u")
    assert t(hidden=False).values[0].strings == ("<em >shown</em>",)
    assert t(hidden=True).values == [None]
