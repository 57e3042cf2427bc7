"""
HTML Generator
==============

Convert Figma scene trees into HTML markup and a CSS stylesheet.

The converter walks the tree once, depth first and in child order. Every
emitted element gets a generated class name and a StyleRecord resolved
against its immediate rendered parent. All per-run state lives in a
ConversionContext, so one converter can serve concurrent conversions.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple, Union

import jinja2

from figma_html.config.logging import get_logger
from figma_html.config.settings import Settings, get_settings
from figma_html.core.figma.parser import SceneParser, StructureError
from figma_html.core.rendering.styles import StyleResolver
from figma_html.models.schemas import (
    ConversionResult,
    FigmaFile,
    NodeKind,
    SceneNode,
    StyleRecord,
)

logger = get_logger(__name__)

STYLESHEET_HEADER = """/* Generated CSS from Figma */

* {
  box-sizing: border-box;
}

body {
  margin: 0;
  padding: 0;
  font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
  display: flex;
  justify-content: center;
  align-items: center;
  min-height: 100vh;
  background-color: #f5f5f5;
}

"""

HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
}


class HTMLGenerationError(Exception):
    """Exception raised when document rendering fails."""

    pass


@dataclass
class StyledNode:
    """An emitted element waiting for style resolution."""

    class_name: str
    node: SceneNode
    parent: Optional[SceneNode]


@dataclass
class ConversionContext:
    """Per-run identifier table and traversal bookkeeping."""

    class_prefix: str
    max_depth: int
    class_names: Dict[str, str] = field(default_factory=dict)
    styled_nodes: List[StyledNode] = field(default_factory=list)
    path: Set[int] = field(default_factory=set)

    def register(self, node: SceneNode, parent: Optional[SceneNode]) -> str:
        """Assign the node's class name and queue it for styling."""
        class_name = f"{self.class_prefix}-{len(self.styled_nodes)}"
        # Repeated ids (duplicated instances) still get their own class
        key = node.id if node.id is not None else f"@{id(node)}"
        self.class_names.setdefault(key, class_name)
        self.styled_nodes.append(StyledNode(class_name, node, parent))
        return class_name


def escape_html(text: str) -> str:
    """Escape HTML special characters."""
    if not text:
        return ""
    return "".join(HTML_ESCAPES.get(char, char) for char in text)


def generate_stylesheet(records: List[StyleRecord]) -> str:
    """
    Build the stylesheet for a conversion.

    Args:
        records: Style records in emission order

    Returns:
        Reset and body rules followed by one rule per non-empty record
    """
    rules = [record.to_css() for record in records]
    return STYLESHEET_HEADER + "".join(f"{rule}\n" for rule in rules if rule)


class FigmaHTMLConverter:
    """Scene tree to HTML/CSS converter."""

    def __init__(
        self, settings: Optional[Settings] = None, resolver: Optional[StyleResolver] = None
    ) -> None:
        self.settings = settings or get_settings()
        self.logger: Any = logger.bind(component="converter")  # structlog.BoundLoggerBase
        self.resolver = resolver or StyleResolver()
        self._setup_jinja2_environment()

    def _setup_jinja2_environment(self) -> None:
        """Setup Jinja2 template environment."""
        template_dir = Path(__file__).parent / "templates"
        self.env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            autoescape=jinja2.select_autoescape(["html", "xml"]),
        )

    def new_context(self) -> ConversionContext:
        return ConversionContext(
            class_prefix=self.settings.class_prefix, max_depth=self.settings.max_tree_depth
        )

    def convert(self, root: Union[SceneNode, FigmaFile, Dict[str, Any]]) -> ConversionResult:
        """
        Convert a scene tree into markup, stylesheet and style records.

        Args:
            root: Root node, parsed file, or plain node/file JSON object

        Returns:
            ConversionResult for this tree

        Raises:
            SceneParseError: If a plain JSON root is not a node object
            StructureError: If the tree is cyclic or nested too deeply
        """
        node = self._coerce_root(root)
        context = self.new_context()

        self.logger.info("Converting scene tree", root_id=node.id, root_type=node.type)
        html = self.generate_markup(node, context)

        records = [
            StyleRecord(
                class_name=styled.class_name,
                node_id=styled.node.id,
                declarations=self.resolver.resolve(styled.node, styled.parent),
            )
            for styled in context.styled_nodes
        ]
        css = generate_stylesheet(records)

        self.logger.info(
            "Conversion completed", element_count=len(records), html_length=len(html)
        )
        return ConversionResult(html=html, css=css, records=records)

    def generate_markup(self, root: SceneNode, context: ConversionContext) -> str:
        """
        Generate the markup fragment for a tree.

        Args:
            root: Root node
            context: Run context receiving class names and nodes to style

        Returns:
            Markup with two-space indentation per nesting level
        """
        return self._render_node(root, context, depth=0, parent=None)

    def _render_node(
        self,
        node: SceneNode,
        context: ConversionContext,
        depth: int,
        parent: Optional[SceneNode],
    ) -> str:
        if not node.is_visible:
            return ""

        marker = id(node)
        if marker in context.path:
            raise StructureError(f"Node {node.id!r} contains itself")
        if len(context.path) >= context.max_depth:
            raise StructureError(f"Scene tree deeper than {context.max_depth} levels")

        context.path.add(marker)
        try:
            kind = node.kind
            if kind.is_transparent:
                if kind is NodeKind.UNKNOWN:
                    # Lifted children keep the current rendered parent
                    self.logger.debug("Passing through node", node_id=node.id, node_type=node.type)
                    return self._render_children(node, context, depth, parent)
                return self._render_children(node, context, depth, parent=None)

            indent = "  " * depth
            class_name = context.register(node, parent)

            if kind is NodeKind.TEXT:
                return f'{indent}<div class="{class_name}">{escape_html(node.characters or "")}</div>'

            children_html = self._render_children(node, context, depth + 1, node)
            if children_html:
                return f'{indent}<div class="{class_name}">\n{children_html}\n{indent}</div>'
            return f'{indent}<div class="{class_name}"></div>'
        finally:
            context.path.discard(marker)

    def _render_children(
        self,
        node: SceneNode,
        context: ConversionContext,
        depth: int,
        parent: Optional[SceneNode],
    ) -> str:
        parts = [self._render_node(child, context, depth, parent) for child in node.children]
        return "\n".join(part for part in parts if part)

    def _coerce_root(self, root: Union[SceneNode, FigmaFile, Dict[str, Any]]) -> SceneNode:
        if isinstance(root, FigmaFile):
            return root.document
        if isinstance(root, SceneNode):
            return root

        parser = SceneParser(max_depth=self.settings.max_tree_depth)
        if "document" in root:
            return parser.parse_node(root["document"])
        return parser.parse_node(root)

    def render_document(self, title: str, body_html: str, css: str) -> str:
        """
        Wrap markup and stylesheet into a complete HTML document.

        Args:
            title: Document title, escaped on output
            body_html: Markup body fragment
            css: Stylesheet inlined into the head

        Returns:
            Complete HTML document

        Raises:
            HTMLGenerationError: If the template cannot be rendered
        """
        try:
            template = self.env.get_template("document.html")
            return template.render(title=title, body=body_html, css=css)
        except jinja2.TemplateError as e:
            error_msg = f"Template rendering failed: {e}"
            self.logger.error("Document rendering failed", error=error_msg)
            raise HTMLGenerationError(error_msg) from e

    def convert_document(
        self, root: Union[SceneNode, FigmaFile, Dict[str, Any]], title: Optional[str] = None
    ) -> Tuple[str, str]:
        """
        Convert a tree straight into a full HTML document and its stylesheet.

        Args:
            root: Root node, parsed file, or plain JSON object
            title: Document title; defaults to the file or root node name

        Returns:
            Tuple of (document_html, css)
        """
        if title is None:
            if isinstance(root, FigmaFile):
                title = root.name
            elif isinstance(root, SceneNode):
                title = root.name
            else:
                title = root.get("name")

        result = self.convert(root)
        return self.render_document(title or "Figma Design", result.html, result.css), result.css


def convert_scene(root: Union[SceneNode, FigmaFile, Dict[str, Any]]) -> ConversionResult:
    """
    Convert a scene tree with default settings.

    Args:
        root: Root node, parsed file, or plain JSON object

    Returns:
        ConversionResult for this tree
    """
    return FigmaHTMLConverter().convert(root)
