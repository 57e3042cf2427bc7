"""
Integration Tests for the Conversion Pipeline
=============================================

Integration tests for the Figma JSON to HTML/CSS pipeline, from file
parsing through style resolution to document rendering.
"""

import pytest

from figma_html.core.figma.parser import SceneParser
from figma_html.core.rendering.html_generator import FigmaHTMLConverter

from tests.data.sample_figma_files import (
    ALL_SAMPLE_FILES,
    HIDDEN_LAYERS_FILE,
    LOGIN_CARD_FILE,
    STACKED_LIST_FILE,
)
from tests.utils.assertions import (
    assert_declarations_exclude,
    assert_declarations_include,
    assert_valid_conversion,
    record_for,
)


pytestmark = pytest.mark.integration


class TestBasicPipeline:
    """Test parse, convert and render in sequence."""

    @pytest.fixture
    def scene_parser(self, test_settings):
        """Create scene parser instance."""
        return SceneParser(max_depth=test_settings.max_tree_depth)

    @pytest.mark.parametrize("name", sorted(ALL_SAMPLE_FILES))
    def test_sample_files_convert(self, name, scene_parser, converter):
        """Every sample file parses and converts consistently."""
        parse_result = scene_parser.parse_file(ALL_SAMPLE_FILES[name])
        assert parse_result.success, parse_result.errors

        result = converter.convert(parse_result.figma_file)
        assert_valid_conversion(result)

        document = converter.render_document(parse_result.figma_file.name, result.html, result.css)
        assert result.html in document

    def test_login_card_markup(self, converter):
        """Auto-layout cards nest their children in order."""
        result = converter.convert(LOGIN_CARD_FILE)
        assert result.html == (
            '<div class="figma-node-0">\n'
            '  <div class="figma-node-1">Sign in</div>\n'
            '  <div class="figma-node-2"></div>\n'
            '  <div class="figma-node-3">\n'
            '    <div class="figma-node-4">Continue &amp; go</div>\n'
            "  </div>\n"
            "</div>"
        )

    def test_login_card_styles(self, converter):
        """Card, text, input and button rules."""
        result = converter.convert(LOGIN_CARD_FILE)

        card = record_for(result, "1:1").declarations
        assert list(card.items()) == [
            ("position", "relative"),
            ("width", "360px"),
            ("height", "280px"),
            ("background-color", "rgb(255, 255, 255)"),
            ("border-radius", "12px"),
            ("display", "flex"),
            ("flex-direction", "column"),
            ("gap", "16px"),
            ("padding", "24px 24px 24px 24px"),
            ("justify-content", "flex-start"),
            ("align-items", "center"),
            ("box-shadow", "0px 8px 24px rgba(0, 0, 0, 0.12)"),
            ("overflow", "hidden"),
        ]

        title = record_for(result, "1:2").declarations
        assert_declarations_include(
            title,
            {
                "position": "relative",
                "font-family": '"Inter", sans-serif',
                "font-size": "24px",
                "font-weight": "700",
                "line-height": "32px",
                "text-align": "center",
                "display": "flex",
                "justify-content": "center",
                "color": "rgb(0, 0, 0)",
            },
        )
        assert_declarations_exclude(title, "left", "top", "background-color")

        email = record_for(result, "1:3").declarations
        assert_declarations_include(
            email,
            {
                "box-sizing": "border-box",
                "border": "1px solid rgb(204, 204, 204)",
                "border-radius": "8px",
            },
        )

        button = record_for(result, "1:4").declarations
        assert_declarations_include(
            button,
            {
                "position": "relative",
                "background": "linear-gradient(90deg, rgb(51, 102, 255) 0%, rgb(102, 51, 255) 100%)",
                "display": "flex",
                "flex-direction": "row",
                "justify-content": "center",
                "align-items": "center",
            },
        )

        label = record_for(result, "1:5").declarations
        assert label["color"] == "rgb(255, 255, 255)"
        assert label["position"] == "relative"

    def test_stacked_list_borders(self, converter):
        """Stacked rows do not double their shared edges."""
        result = converter.convert(STACKED_LIST_FILE)
        border = "1px solid rgb(204, 204, 204)"

        top = record_for(result, "2:2").declarations
        assert_declarations_include(
            top,
            {
                "position": "absolute",
                "left": "40px",
                "top": "40px",
                "border-top": border,
                "border-radius": "8px 8px 0px 0px",
            },
        )
        assert_declarations_exclude(top, "border-bottom", "border")

        middle = record_for(result, "2:3").declarations
        assert middle["border"] == border
        assert_declarations_exclude(middle, "border-radius")

        bottom = record_for(result, "2:4").declarations
        assert bottom["top"] == "152px"
        assert bottom["border-bottom"] == border
        assert_declarations_exclude(bottom, "border-top", "border")

    def test_hidden_and_unsupported_layers(self, converter):
        """Hidden subtrees vanish; boolean groups lift their children."""
        result = converter.convert(HIDDEN_LAYERS_FILE)

        assert "never shown" not in result.html
        assert [record.node_id for record in result.records] == ["3:1", "3:5"]
        shape = record_for(result, "3:5").declarations
        assert_declarations_include(
            shape,
            {
                "position": "absolute",
                "left": "20px",
                "top": "30px",
                "background-color": "rgb(0, 0, 0)",
            },
        )

    def test_convert_document(self, converter):
        """The full document inlines the stylesheet used on disk."""
        document, css = converter.convert_document(LOGIN_CARD_FILE)

        assert "<title>Login Screen</title>" in document
        assert ".figma-node-0 {\n  position: relative;" in css
        assert css in document
        assert document.count('<div class="figma-node-') == 5

    def test_idempotent_across_converters(self, test_settings):
        """Two fresh converters produce byte-identical output."""
        first = FigmaHTMLConverter(test_settings).convert_document(LOGIN_CARD_FILE)
        second = FigmaHTMLConverter(test_settings).convert_document(LOGIN_CARD_FILE)
        assert first == second
