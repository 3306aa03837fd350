from station_export.schemas.document import InlineRun, runs_text
from station_export.services.markup.inline import parse_inline


def test_nested_styles_combine():
    assert parse_inline("<strong><em>x</em></strong>") == [InlineRun(text="x", bold=True, italic=True)]


def test_plain_and_bold_runs():
    assert parse_inline("Hello <strong>world</strong>") == [
        InlineRun(text="Hello "),
        InlineRun(text="world", bold=True),
    ]


def test_style_tags():
    runs = parse_inline('<b>b</b><i>i</i><u>u</u><a href="https://x">link</a><code>c</code>')
    assert runs == [
        InlineRun(text="b", bold=True),
        InlineRun(text="i", italic=True),
        InlineRun(text="u", underline=True),
        InlineRun(text="link", underline=True),
        InlineRun(text="c", code=True),
    ]


def test_line_break_keeps_current_style():
    runs = parse_inline("<em>a<br>b</em>")
    assert [r.text for r in runs] == ["a", "\n", "b"]
    assert all(r.italic for r in runs)


def test_span_and_unknown_tags_pass_style_through():
    assert parse_inline('<span class="c">x</span>') == [InlineRun(text="x")]
    assert parse_inline("<b><mark>hi</mark></b>") == [InlineRun(text="hi", bold=True)]


def test_stray_closing_tag_is_skipped():
    assert runs_text(parse_inline("a</b>c")) == "ac"


def test_entities_are_decoded():
    assert parse_inline("Tom &amp; Jerry") == [InlineRun(text="Tom & Jerry")]


def test_empty_input():
    assert parse_inline("") == []


def test_deep_nesting():
    html = "<b>" * 3000 + "x" + "</b>" * 3000
    assert parse_inline(html) == [InlineRun(text="x", bold=True)]


def test_misnested_close_pops_inner_styles():
    assert parse_inline("<b><i>x</b>y</i>") == [InlineRun(text="x", bold=True, italic=True), InlineRun(text="y")]


def test_void_and_self_closing_tags_do_not_leak_style():
    assert parse_inline('a<img src="x.png">b<b/>c') == [InlineRun(text="a"), InlineRun(text="b"), InlineRun(text="c")]


def test_unclosed_tag_styles_rest():
    assert parse_inline("a<em>b") == [InlineRun(text="a"), InlineRun(text="b", italic=True)]
