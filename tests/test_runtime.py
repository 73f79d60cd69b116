import pytest

from litup import (
    ArityMismatch,
    RenderEngineNotConfigured,
    TemplateResult,
    class_map,
    directive,
    get_engine,
    is_directive,
    make_template_result,
    render,
    set_engine,
)
from litup.runtime.escape import escape_html


class RecordingEngine:
    def __init__(self):
        self.calls = []

    def render(self, result, container, options):
        self.calls.append((result, container, options))
        return "rendered"


@pytest.fixture
def engine():
    engine = RecordingEngine()
    previous = set_engine(engine)
    yield engine
    set_engine(previous)


def test_template_result_arity():
    result = make_template_result(("<p>", "</p>"), ["hi"])
    assert result.type == "html"
    assert list(result.parts()) == ["<p>", "hi", "</p>"]

    with pytest.raises(ArityMismatch, match="2 strings and 0 values"):
        make_template_result(("<p>", "</p>"), [])


def test_template_result_equality():
    strings = ("a", "b")
    assert TemplateResult(strings, [1]) == TemplateResult(("a", "b"), [1])
    assert TemplateResult(strings, [1]) != TemplateResult(strings, [2])
    assert TemplateResult(strings, [1], type="svg") != TemplateResult(strings, [1])


def test_class_map():
    assert class_map({"a": True, "b": 0, 3: 1}) == "a 3"
    assert class_map({}) == ""


def test_escape_html():
    assert escape_html('<a href="x">&</a>') == "&lt;a href=&quot;x&quot;&gt;&amp;&lt;/a&gt;"
    assert escape_html('"q" & <b>', quote=False) == '"q" &amp; &lt;b&gt;'


def test_render_delegates_to_engine(engine):
    result = make_template_result(("<p>", "</p>"), ["x"])
    options = {"host": object()}
    assert render(result, "container", options) == "rendered"
    assert engine.calls == [(result, "container", options)]
    assert get_engine() is engine


def test_render_without_engine():
    previous = set_engine(None)
    try:
        with pytest.raises(RenderEngineNotConfigured):
            render(make_template_result(("",), []), "container")
    finally:
        set_engine(previous)


def test_set_engine_rejects_non_engines():
    with pytest.raises(TypeError):
        set_engine(object())


def test_directive_marks_results():
    @directive
    def until(value):
        def apply(part):
            return value

        return apply

    applied = until(3)
    assert is_directive(applied)
    assert applied(None) == 3
    assert until.__name__ == "until"
    assert not is_directive(lambda part: None)
    assert not is_directive("text")
