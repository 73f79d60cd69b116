from litup.compiler.ast_nodes import Expr


def test_static_class_string(compile_nodes):
    t = compile_nodes(["div", {"class": "a b"}])
    assert t.strings == ('<div class="a b"></div>',)


def test_tag_classes_precede_attribute_class(compile_nodes):
    t = compile_nodes(["div.a.b", {"class": "c"}])
    assert t.strings == ('<div class="a b c"></div>',)


def test_class_list_of_strings_is_static(compile_nodes):
    t = compile_nodes(["div.a", {"class": ["b", "c"]}])
    assert t.strings == ('<div class="a b c"></div>',)


def test_explicit_empty_class(compile_nodes):
    t = compile_nodes(["div", {"class": ""}])
    assert t.strings == ('<div class=""></div>',)


def test_class_map_becomes_single_slot(compile_nodes):
    t = compile_nodes(["div", {"class": {"active": Expr("flag")}}])
    assert t.strings == ("<div class=", "></div>")
    assert t.slot_sources() == ["__class_map__({'active': flag})"]
    assert t(flag=True).values == ["active"]
    assert t(flag=False).values == [""]


def test_literals_fold_into_class_map(compile_nodes):
    t = compile_nodes(["div.base", {"class": ["x", {"on": Expr("active")}]}])
    assert t.slot_sources() == ["__class_map__({'base': True, 'x': True, 'on': active})"]
    assert t(active=False).values == ["base x"]
    assert t(active=True).values == ["base x on"]


def test_later_class_maps_override_earlier(compile_nodes):
    t = compile_nodes(["div", {"class": [{"a": True, "b": True}, {"a": "False"}]}])
    assert t().values == ["b"]


def test_class_map_conditions_are_expression_source(compile_nodes):
    t = compile_nodes(["li", {"class": {"done": "item.done", "todo": "not item.done"}}])

    class Item:
        done = True

    assert t(item=Item()).values == ["done"]


def test_id_then_class_then_rest(compile_nodes):
    t = compile_nodes(["section#s.wide", {"title": "T"}, "x"])
    assert t.strings == ('<section id="s" class="wide" title="T">x</section>',)


def test_opaque_class_value(compile_nodes):
    t = compile_nodes(["div.card", {"class": Expr("theme")}])
    assert t(theme="dark").values == ["card dark"]
