"""Unit tests for the safe template engine."""

from __future__ import annotations

from src.registry.template import render_template


class TestSimpleVariableReplacement:
    """Test basic {{variable}} replacement."""

    def test_simple_variable_replacement(self) -> None:
        """{{name}} is replaced with value from context."""
        assert render_template("<text>{{name}}</text>", {"name": "Peach"}) == "<text>Peach</text>"

    def test_repeated_variable(self) -> None:
        """The same placeholder can appear several times."""
        assert render_template("#{{hex}}/#{{hex}}", {"hex": "FFDAB9"}) == "#FFDAB9/#FFDAB9"

    def test_variable_with_spaces(self) -> None:
        """Spaces around variable name are trimmed."""
        assert render_template("{{ hex }}", {"hex": "000000"}) == "000000"

    def test_non_string_values(self) -> None:
        assert render_template("{{n}}", {"n": 5}) == "5"


class TestEdgeCases:
    """Missing values and literal braces."""

    def test_missing_variable_is_empty(self) -> None:
        assert render_template("a{{missing}}b", {}) == "ab"

    def test_dotted_text_not_a_placeholder(self) -> None:
        assert render_template("{{color.name}}", {"color": "x"}) == "{{color.name}}"

    def test_single_braces_untouched(self) -> None:
        """CSS blocks in the SVG template survive rendering."""
        css = ".base { fill: black; }"
        assert render_template(css, {}) == css

    def test_empty_template(self) -> None:
        assert render_template("", {"a": 1}) == ""

    def test_no_recursive_expansion(self) -> None:
        assert render_template("{{a}}", {"a": "{{b}}", "b": "x"}) == "{{b}}"

