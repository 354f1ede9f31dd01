from typing import Any, Callable

import pytest

import htmlsafe
from htmlsafe.runtime.escape import ESCAPE_TABLE, escape_html, h, html_escape

METACHARACTERS = "&<>\"'"
REFERENCES = ("&amp;", "&lt;", "&gt;", "&quot;", "&#39;")


@pytest.fixture(
    params=[escape_html, html_escape, h, htmlsafe.h, htmlsafe.html_escape],
    ids=["escape_html", "html_escape", "h", "htmlsafe.h", "htmlsafe.html_escape"],
)
def escape(request: pytest.FixtureRequest) -> Callable[[Any], str]:
    """Every exported name for the escaper runs the same assertions."""
    return request.param


def test_plain_text_unchanged(escape: Callable[[Any], str]) -> None:
    assert escape("Hello, World!") == "Hello, World!"


def test_script_tag(escape: Callable[[Any], str]) -> None:
    assert (
        escape("<script>alert(1)</script>")
        == "&lt;script&gt;alert(1)&lt;/script&gt;"
    )


def test_ampersand(escape: Callable[[Any], str]) -> None:
    assert escape("a & b") == "a &amp; b"


def test_quotes(escape: Callable[[Any], str]) -> None:
    assert (
        escape("\"quoted\" and 'apos'")
        == "&quot;quoted&quot; and &#39;apos&#39;"
    )


def test_number(escape: Callable[[Any], str]) -> None:
    assert escape(42) == "42"


def test_none_is_empty(escape: Callable[[Any], str]) -> None:
    assert escape(None) == ""


def test_empty_string(escape: Callable[[Any], str]) -> None:
    assert escape("") == ""


def test_only_metacharacters(escape: Callable[[Any], str]) -> None:
    assert escape(METACHARACTERS) == "".join(REFERENCES)


def test_reescaping_escapes_ampersands_again(escape: Callable[[Any], str]) -> None:
    once = escape("<b>")
    assert once == "&lt;b&gt;"
    assert escape(once) == "&amp;lt;b&amp;gt;"
    assert escape("&amp;") == "&amp;amp;"


def test_multibyte_and_whitespace_preserved(escape: Callable[[Any], str]) -> None:
    text = "  héllo\t<日本語>\n  ✓ "
    assert escape(text) == "  héllo\t&lt;日本語&gt;\n  ✓ "


def test_object_with_str(escape: Callable[[Any], str]) -> None:
    class Tag:
        def __str__(self) -> str:
            return "<tag attr='x'>"

    assert escape(Tag()) == "&lt;tag attr=&#39;x&#39;&gt;"


def test_conversion_error_propagates(escape: Callable[[Any], str]) -> None:
    class Broken:
        def __str__(self) -> str:
            raise RuntimeError("no text form")

    with pytest.raises(RuntimeError, match="no text form"):
        escape(Broken())


@pytest.mark.parametrize(
    "text",
    [
        "",
        "plain",
        "<a href=\"/x?a=1&b='2'\">link</a>",
        "&&&<<<>>>\"\"\"'''",
        "5 > 3 && 2 < 4",
        "already &amp; escaped",
    ],
)
def test_output_has_no_bare_metacharacters(
    escape: Callable[[Any], str], text: str
) -> None:
    result = escape(text)
    for char in "<>\"'":
        assert char not in result

    # Every ampersand in the output starts one of the references
    index = result.find("&")
    while index != -1:
        assert result.startswith(REFERENCES, index)
        index = result.find("&", index + 1)

    # One reference per metacharacter in the input
    for char, ref in ESCAPE_TABLE.items():
        assert result.count(ref) == text.count(char)


def test_aliases_are_the_same_function() -> None:
    assert h is escape_html
    assert html_escape is escape_html
    assert htmlsafe.escape_html is escape_html


def test_escape_table_contents() -> None:
    assert dict(ESCAPE_TABLE) == {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#39;",
    }


def test_escape_table_is_read_only() -> None:
    with pytest.raises(TypeError):
        ESCAPE_TABLE["x"] = "y"  # type: ignore[index]


def test_custom_converter() -> None:
    assert escape_html([1, 2], converter=lambda v: "<" + ",".join(map(str, v)) + ">") == "&lt;1,2&gt;"


def test_str_subclass_is_escaped_as_plain_text() -> None:
    class Safe(str):
        pass

    result = escape_html(Safe("<b>"))
    assert result == "&lt;b&gt;"
    assert type(result) is str


def test_input_not_mutated() -> None:
    text = "<p>"
    escape_html(text)
    assert text == "<p>"
