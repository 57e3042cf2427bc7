"""
Style Resolution
================

Translate a single Figma scene node into CSS declarations.

The resolver looks at one node and its immediate rendered parent and
produces an ordered mapping of CSS property to value covering positioning,
paint, corners and strokes, shadows, text metrics and auto-layout. Missing or
partial source data only removes the rules that depend on it.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from figma_html.config.logging import get_logger
from figma_html.models.schemas import (
    Color,
    EffectType,
    LayoutMode,
    NodeKind,
    Paint,
    PaintType,
    SceneNode,
    StrokeAlign,
)

logger = get_logger(__name__)

Declarations = Dict[str, str]

TEXT_ALIGN_HORIZONTAL = {
    "LEFT": "left",
    "CENTER": "center",
    "RIGHT": "right",
    "JUSTIFIED": "justify",
}

TEXT_ALIGN_VERTICAL = {
    "TOP": "flex-start",
    "CENTER": "center",
    "BOTTOM": "flex-end",
}

PRIMARY_AXIS_ALIGN = {
    "MIN": "flex-start",
    "CENTER": "center",
    "MAX": "flex-end",
    "SPACE_BETWEEN": "space-between",
}

COUNTER_AXIS_ALIGN = {
    "MIN": "flex-start",
    "CENTER": "center",
    "MAX": "flex-end",
}

SHADOW_EFFECTS = {EffectType.DROP_SHADOW.value: "", EffectType.INNER_SHADOW.value: "inset "}
BLUR_EFFECTS = {EffectType.LAYER_BLUR.value, EffectType.BACKGROUND_BLUR.value}


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def round_px(value: float) -> float:
    """Round to the nearest 0.01; halves round up on the scaled value."""
    return _round_half_up(value * 100) / 100


def format_number(value: float) -> str:
    """Format a number without a trailing ``.0`` (``10.0`` -> ``10``)."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def px(value: float) -> str:
    """Round and format a pixel length."""
    return f"{format_number(round_px(value))}px"


def css_string(value: str) -> str:
    """Quote a value as a CSS string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("<", "\\3c ")
    return f'"{escaped}"'


def rgba_to_css(color: Color, opacity: Optional[float] = None) -> str:
    """
    Convert a Figma color to CSS.

    Args:
        color: Color with channels in [0, 1]
        opacity: Paint-level opacity; replaces the color's own alpha when given

    Returns:
        ``rgb(r, g, b)`` when fully opaque, ``rgba(r, g, b, a)`` otherwise
    """
    r = _round_half_up(color.r * 255)
    g = _round_half_up(color.g * 255)
    b = _round_half_up(color.b * 255)
    alpha = opacity if opacity is not None else color.a

    if alpha == 1:
        return f"rgb({r}, {g}, {b})"
    return f"rgba({r}, {g}, {b}, {format_number(alpha)})"


def gradient_angle(paint: Paint) -> float:
    """CSS angle in degrees for a linear gradient's handle positions."""
    handles = paint.gradient_handle_positions
    if len(handles) < 2:
        return 90.0
    dx = handles[1].x - handles[0].x
    dy = handles[1].y - handles[0].y
    return round_px(math.degrees(math.atan2(dy, dx)) + 90)


def linear_gradient_css(paint: Paint) -> Optional[str]:
    """Build a ``linear-gradient()`` value; None when the paint has no stops."""
    if not paint.gradient_stops:
        return None

    stops = ", ".join(
        f"{rgba_to_css(stop.color)} {_round_half_up(stop.position * 100)}%"
        for stop in paint.gradient_stops
    )
    return f"linear-gradient({format_number(gradient_angle(paint))}deg, {stops})"


class CornerPattern(str, Enum):
    """Which corners of a shape are rounded."""
    TOP_ONLY = "top_only"
    BOTTOM_ONLY = "bottom_only"
    OTHER = "other"


@dataclass(frozen=True)
class CornerRadii:
    """Rounded corner radii in top-left, top-right, bottom-right, bottom-left order."""

    top_left: float
    top_right: float
    bottom_right: float
    bottom_left: float
    uniform: bool = False

    @classmethod
    def from_node(cls, node: SceneNode) -> Optional["CornerRadii"]:
        """Per-corner radii win over a single corner radius."""
        radii = node.rectangle_corner_radii
        if radii is not None and len(radii) == 4:
            top_left, top_right, bottom_right, bottom_left = (round_px(r) for r in radii)
            return cls(top_left, top_right, bottom_right, bottom_left)

        if node.corner_radius is not None and node.corner_radius > 0:
            radius = round_px(node.corner_radius)
            return cls(radius, radius, radius, radius, uniform=True)

        return None

    @property
    def values(self) -> tuple:
        return (self.top_left, self.top_right, self.bottom_right, self.bottom_left)

    @property
    def pattern(self) -> CornerPattern:
        top_rounded = self.top_left > 0 and self.top_right > 0
        bottom_rounded = self.bottom_right > 0 and self.bottom_left > 0
        if top_rounded and self.bottom_right == 0 and self.bottom_left == 0:
            return CornerPattern.TOP_ONLY
        if bottom_rounded and self.top_left == 0 and self.top_right == 0:
            return CornerPattern.BOTTOM_ONLY
        return CornerPattern.OTHER

    def to_css(self) -> Optional[str]:
        if all(value == 0 for value in self.values):
            return None
        if self.uniform:
            return f"{format_number(self.top_left)}px"
        return " ".join(f"{format_number(value)}px" for value in self.values)


class StyleResolver:
    """Resolve the CSS declarations of one scene node."""

    def __init__(self) -> None:
        self.logger: Any = logger.bind(component="style_resolver")  # structlog.BoundLoggerBase

    def resolve(self, node: SceneNode, parent: Optional[SceneNode] = None) -> Declarations:
        """
        Resolve the declarations for a node.

        Args:
            node: Node being styled
            parent: Immediate rendered parent, None for root-level nodes

        Returns:
            Ordered mapping of CSS property to value
        """
        styles: Declarations = {}
        shadows: List[str] = []
        radii = CornerRadii.from_node(node)

        self._apply_geometry(node, parent, styles)
        self._apply_fill(node, styles)
        self._apply_stroke(node, radii, styles, shadows)

        if radii is not None:
            radius_css = radii.to_css()
            if radius_css:
                styles["border-radius"] = radius_css

        if node.opacity is not None and node.opacity < 1:
            styles["opacity"] = format_number(node.opacity)

        if node.kind is NodeKind.TEXT:
            self._apply_text(node, styles)

        styles = self._apply_auto_layout(node, parent, styles)
        self._apply_effects(node, shadows)

        if shadows:
            styles["box-shadow"] = ", ".join(shadows)

        if node.clips_content:
            styles["overflow"] = "hidden"

        return styles

    def _apply_geometry(
        self, node: SceneNode, parent: Optional[SceneNode], styles: Declarations
    ) -> None:
        box = node.absolute_bounding_box
        if box is None:
            self.logger.debug("Skipping geometry", node_id=node.id, skipped="missing_geometry")
            return

        if parent is None or parent.uses_auto_layout:
            # Root nodes sit in the body's centering shell; flex parents place their children
            styles["position"] = "relative"
        else:
            left, top = box.x, box.y
            parent_box = parent.absolute_bounding_box
            if parent_box is not None:
                left = box.x - parent_box.x - (parent.padding_left or 0)
                top = box.y - parent_box.y - (parent.padding_top or 0)
            styles["position"] = "absolute"
            styles["left"] = px(left)
            styles["top"] = px(top)

        styles["width"] = px(box.width)
        if node.kind is NodeKind.TEXT:
            # Wrapped text must be able to grow past the measured height
            styles["min-height"] = px(box.height)
        else:
            styles["height"] = px(box.height)

    def _apply_fill(self, node: SceneNode, styles: Declarations) -> None:
        if not node.fills:
            return

        fill = node.fills[0]
        if fill.visible is False:
            return

        if fill.type == PaintType.SOLID.value and fill.color is not None:
            styles["background-color"] = rgba_to_css(fill.color, fill.opacity)
        elif fill.type == PaintType.GRADIENT_LINEAR.value:
            gradient = linear_gradient_css(fill)
            if gradient is None:
                self.logger.debug("Skipping gradient", node_id=node.id, skipped="missing_paint")
            else:
                styles["background"] = gradient

    def _apply_stroke(
        self,
        node: SceneNode,
        radii: Optional[CornerRadii],
        styles: Declarations,
        shadows: List[str],
    ) -> None:
        if not node.strokes or not node.stroke_weight or node.stroke_weight <= 0:
            return

        stroke = node.strokes[0]
        if stroke.visible is False or stroke.color is None:
            self.logger.debug("Skipping stroke", node_id=node.id, skipped="missing_paint")
            return

        color = rgba_to_css(stroke.color, stroke.opacity)
        weight = px(node.stroke_weight)
        border = f"{weight} solid {color}"
        align = node.stroke_align or StrokeAlign.INSIDE.value

        if align == StrokeAlign.INSIDE.value:
            styles["box-sizing"] = "border-box"
            pattern = radii.pattern if radii is not None else CornerPattern.OTHER

            # Stacked rows share an edge; only the top row draws it
            if pattern is CornerPattern.TOP_ONLY:
                styles["border-left"] = border
                styles["border-right"] = border
                styles["border-top"] = border
            elif pattern is CornerPattern.BOTTOM_ONLY:
                styles["border-left"] = border
                styles["border-right"] = border
                styles["border-bottom"] = border
            else:
                styles["border"] = border
        elif align == StrokeAlign.CENTER.value:
            styles["border"] = border
        else:
            # Outside strokes never change the box size
            shadows.append(f"0 0 0 {weight} {color}")

    def _apply_text(self, node: SceneNode, styles: Declarations) -> None:
        text_style = node.style
        if text_style is None:
            self.logger.debug("Skipping text metrics", node_id=node.id, skipped="missing_text_style")
        else:
            if text_style.font_family:
                styles["font-family"] = f"{css_string(text_style.font_family)}, sans-serif"
            if text_style.font_size is not None:
                styles["font-size"] = px(text_style.font_size)
            if text_style.font_weight is not None:
                styles["font-weight"] = format_number(text_style.font_weight)
            if text_style.letter_spacing:
                styles["letter-spacing"] = px(text_style.letter_spacing)

            if text_style.line_height_px:
                styles["line-height"] = px(text_style.line_height_px)
            elif text_style.line_height_percent:
                styles["line-height"] = format_number(
                    _round_half_up(text_style.line_height_percent) / 100
                )

            horizontal = text_style.text_align_horizontal
            if horizontal:
                styles["text-align"] = TEXT_ALIGN_HORIZONTAL.get(horizontal, horizontal.lower())
                if horizontal == "CENTER":
                    self._ensure_flex(styles)
                    styles["justify-content"] = "center"

            vertical = TEXT_ALIGN_VERTICAL.get(text_style.text_align_vertical or "")
            if vertical:
                self._ensure_flex(styles)
                styles["align-items"] = vertical

        if node.fills:
            fill = node.fills[0]
            if (
                fill.visible is not False
                and fill.type == PaintType.SOLID.value
                and fill.color is not None
            ):
                styles["color"] = rgba_to_css(fill.color, fill.opacity)
                styles.pop("background-color", None)

        # Source boxes do not say whether wrapping was disabled
        styles["white-space"] = "pre-wrap"
        styles["word-wrap"] = "break-word"

    @staticmethod
    def _ensure_flex(styles: Declarations) -> None:
        if styles.get("display") != "flex":
            styles["display"] = "flex"

    def _apply_auto_layout(
        self, node: SceneNode, parent: Optional[SceneNode], styles: Declarations
    ) -> Declarations:
        if not node.uses_auto_layout:
            return styles

        styles["display"] = "flex"
        styles["flex-direction"] = "row" if node.layout_mode == LayoutMode.HORIZONTAL.value else "column"

        if node.item_spacing:
            styles["gap"] = px(node.item_spacing)

        paddings = (node.padding_top, node.padding_right, node.padding_bottom, node.padding_left)
        if any(paddings):
            styles["padding"] = " ".join(px(side or 0) for side in paddings)

        if node.primary_axis_align_items:
            styles["justify-content"] = PRIMARY_AXIS_ALIGN.get(
                node.primary_axis_align_items, "flex-start"
            )
        if node.counter_axis_align_items:
            styles["align-items"] = COUNTER_AXIS_ALIGN.get(
                node.counter_axis_align_items, "flex-start"
            )

        if parent is None or "position" in styles:
            return styles

        # Nested auto-layout frame that geometry could not place
        placement: Declarations = {"position": "absolute"}
        box = node.absolute_bounding_box
        parent_box = parent.absolute_bounding_box
        if box is not None and parent_box is not None:
            left = round_px(box.x - parent_box.x)
            top = round_px(box.y - parent_box.y)
            if left != 0:
                placement["left"] = px(left)
            if top != 0:
                placement["top"] = px(top)
        placement.update(styles)
        return placement

    def _apply_effects(self, node: SceneNode, shadows: List[str]) -> None:
        for effect in node.effects:
            if effect.visible is False:
                continue

            if effect.type in BLUR_EFFECTS:
                self.logger.debug(
                    "Skipping effect",
                    node_id=node.id,
                    effect_type=effect.type,
                    skipped="unsupported_effect_kind",
                )
                continue

            prefix = SHADOW_EFFECTS.get(effect.type)
            if prefix is None or effect.offset is None or effect.color is None:
                continue

            shadows.append(
                f"{prefix}{px(effect.offset.x)} {px(effect.offset.y)} "
                f"{px(effect.radius or 0)} {rgba_to_css(effect.color)}"
            )
