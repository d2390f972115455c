from __future__ import annotations

from tests.support.variables import desired
from varsync.domain.templates import detect_variable_names, missing_variables, render_preview

CONTENT = "Write about {{topic}} in a {{tone}} tone. Mention {{topic}} twice. {{not closed}"


def test_detect_variable_names_in_first_appearance_order() -> None:
    assert detect_variable_names(CONTENT) == ["topic", "tone"]


def test_detect_variable_names_without_placeholders() -> None:
    assert detect_variable_names("plain text") == []


def test_detect_variable_names_ignores_non_ascii_placeholders() -> None:
    assert detect_variable_names("{{café}} {{cafe}} {{größe}}") == ["cafe"]


def test_missing_variables_lists_undefined_placeholders() -> None:
    assert missing_variables(CONTENT, [desired("topic")]) == ["tone"]


def test_render_preview_prefers_values_then_defaults() -> None:
    variables = [desired("topic"), desired("tone", default_value="neutral")]

    rendered = render_preview(CONTENT, variables, {"topic": "tides"})

    assert rendered == (
        "Write about tides in a neutral tone. Mention tides twice. {{not closed}"
    )


def test_render_preview_keeps_placeholders_without_value() -> None:
    rendered = render_preview("Hi {{name}} and {{other}}", [desired("name")], {"name": ""})

    assert rendered == "Hi {{name}} and {{other}}"


def test_render_preview_leaves_non_ascii_placeholders_alone() -> None:
    rendered = render_preview("{{café}}", [desired("café", default_value="x")], {})

    assert rendered == "{{café}}"
