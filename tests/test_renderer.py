from jinja2 import Environment
from markupsafe import Markup

from htmlsafe.runtime.renderer import (
    ESCAPE_FILTERS,
    create_environment,
    escape_filter,
    get_environment,
    render_string,
)


def test_filters_registered():
    env = create_environment()
    for name in ESCAPE_FILTERS:
        assert env.filters[name] is escape_filter


def test_h_filter_not_double_escaped():
    assert render_string("<p>{{ v|h }}</p>", {"v": "<b>'x'</b>"}) == (
        "<p>&lt;b&gt;&#39;x&#39;&lt;/b&gt;</p>"
    )


def test_autoescape_on_by_default():
    assert render_string("{{ v }}", {"v": "<i>"}) == "&lt;i&gt;"


def test_filter_without_autoescape():
    env = create_environment(autoescape=False)
    assert render_string("{{ v }}|{{ v|html_escape }}", {"v": "a&b"}, env=env) == (
        "a&b|a&amp;b"
    )


def test_filter_handles_none_and_numbers():
    assert render_string("[{{ a|escape_html }}][{{ b|h }}]", {"a": None, "b": 42}) == (
        "[][42]"
    )


def test_escape_filter_returns_markup():
    result = escape_filter('"q"')
    assert isinstance(result, Markup)
    assert str(result) == "&quot;q&quot;"


def test_environment_options_passed_through():
    env = create_environment(trim_blocks=True)
    assert isinstance(env, Environment)
    assert env.trim_blocks is True


def test_default_environment_is_shared():
    assert get_environment() is get_environment()
