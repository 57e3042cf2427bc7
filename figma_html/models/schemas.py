"""
Pydantic Models and Schemas
===========================

Data models for Figma documents as served by the REST API and for the
output of a conversion. Field names follow Python conventions and accept the
API's camelCase keys through aliases.
"""

from types import MappingProxyType
from typing import Optional, List, Dict, Any, Mapping
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


# Enums
class NodeKind(str, Enum):
    """Scene node kinds understood by the converter."""
    DOCUMENT = "DOCUMENT"
    CANVAS = "CANVAS"
    TEXT = "TEXT"
    RECTANGLE = "RECTANGLE"
    ELLIPSE = "ELLIPSE"
    VECTOR = "VECTOR"
    FRAME = "FRAME"
    GROUP = "GROUP"
    COMPONENT = "COMPONENT"
    INSTANCE = "INSTANCE"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def _missing_(cls, value: object) -> "NodeKind":
        return cls.UNKNOWN

    @property
    def is_transparent(self) -> bool:
        """Kinds that contribute only their children's markup."""
        return self in (NodeKind.DOCUMENT, NodeKind.CANVAS, NodeKind.UNKNOWN)


class PaintType(str, Enum):
    """Fill and stroke paint types."""
    SOLID = "SOLID"
    GRADIENT_LINEAR = "GRADIENT_LINEAR"
    GRADIENT_RADIAL = "GRADIENT_RADIAL"
    GRADIENT_ANGULAR = "GRADIENT_ANGULAR"
    GRADIENT_DIAMOND = "GRADIENT_DIAMOND"
    IMAGE = "IMAGE"


class EffectType(str, Enum):
    """Node effect types."""
    DROP_SHADOW = "DROP_SHADOW"
    INNER_SHADOW = "INNER_SHADOW"
    LAYER_BLUR = "LAYER_BLUR"
    BACKGROUND_BLUR = "BACKGROUND_BLUR"


class StrokeAlign(str, Enum):
    """Stroke placement relative to the shape outline."""
    INSIDE = "INSIDE"
    CENTER = "CENTER"
    OUTSIDE = "OUTSIDE"


class LayoutMode(str, Enum):
    """Auto-layout axis."""
    NONE = "NONE"
    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"


COLOR_CHANNEL_TOLERANCE = 1e-6


class _FigmaModel(BaseModel):
    """Base for models parsed from Figma JSON."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# Geometry and paint
class Vector(_FigmaModel):
    """2D point or offset."""
    x: float = 0.0
    y: float = 0.0


class BoundingBox(_FigmaModel):
    """Absolute bounding box in document coordinates."""
    x: float
    y: float
    width: float
    height: float


class Color(_FigmaModel):
    """RGBA color with channels in [0, 1]."""
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 1.0

    @field_validator("r", "g", "b", "a")
    @classmethod
    def validate_channel(cls, v: float) -> float:
        """Clamp float noise at the range edges; reject anything further out."""
        if not -COLOR_CHANNEL_TOLERANCE <= v <= 1.0 + COLOR_CHANNEL_TOLERANCE:
            raise ValueError("Color channel must be between 0 and 1")
        return min(max(v, 0.0), 1.0)


class ColorStop(_FigmaModel):
    """Gradient color stop."""
    position: float = Field(..., description="Fractional position along the gradient")
    color: Color


class Paint(_FigmaModel):
    """Fill or stroke paint."""
    type: str = Field(..., description="Paint type")
    visible: Optional[bool] = None
    opacity: Optional[float] = Field(None, ge=0.0, le=1.0)
    color: Optional[Color] = None
    gradient_handle_positions: List[Vector] = Field(
        default_factory=list, alias="gradientHandlePositions"
    )
    gradient_stops: List[ColorStop] = Field(default_factory=list, alias="gradientStops")
    scale_mode: Optional[str] = Field(None, alias="scaleMode")
    image_ref: Optional[str] = Field(None, alias="imageRef")


class Effect(_FigmaModel):
    """Shadow or blur effect."""
    type: str = Field(..., description="Effect type")
    visible: Optional[bool] = None
    radius: Optional[float] = None
    color: Optional[Color] = None
    offset: Optional[Vector] = None
    spread: Optional[float] = None
    blend_mode: Optional[str] = Field(None, alias="blendMode")


class TypeStyle(_FigmaModel):
    """Text style of a TEXT node."""
    font_family: Optional[str] = Field(None, alias="fontFamily")
    font_post_script_name: Optional[str] = Field(None, alias="fontPostScriptName")
    font_weight: Optional[float] = Field(None, alias="fontWeight")
    font_size: Optional[float] = Field(None, alias="fontSize")
    letter_spacing: Optional[float] = Field(None, alias="letterSpacing")
    line_height_px: Optional[float] = Field(None, alias="lineHeightPx")
    line_height_percent: Optional[float] = Field(None, alias="lineHeightPercent")
    text_align_horizontal: Optional[str] = Field(None, alias="textAlignHorizontal")
    text_align_vertical: Optional[str] = Field(None, alias="textAlignVertical")


# Scene graph
class SceneNode(_FigmaModel):
    """One node of the Figma document tree."""
    id: Optional[str] = Field(None, description="Stable node identifier")
    name: Optional[str] = Field(None, description="Layer name")
    type: str = Field(NodeKind.UNKNOWN.value, description="Figma node type")
    visible: Optional[bool] = None

    # Geometry
    absolute_bounding_box: Optional[BoundingBox] = Field(None, alias="absoluteBoundingBox")

    # Paint
    fills: List[Paint] = Field(default_factory=list)
    strokes: List[Paint] = Field(default_factory=list)
    stroke_weight: Optional[float] = Field(None, alias="strokeWeight")
    stroke_align: Optional[str] = Field(None, alias="strokeAlign")
    opacity: Optional[float] = Field(None, ge=0.0, le=1.0)
    effects: List[Effect] = Field(default_factory=list)

    # Shape
    corner_radius: Optional[float] = Field(None, alias="cornerRadius")
    rectangle_corner_radii: Optional[List[float]] = Field(None, alias="rectangleCornerRadii")
    clips_content: bool = Field(False, alias="clipsContent")

    # Text
    characters: Optional[str] = None
    style: Optional[TypeStyle] = None

    # Auto-layout
    layout_mode: Optional[str] = Field(None, alias="layoutMode")
    item_spacing: Optional[float] = Field(None, alias="itemSpacing")
    padding_left: Optional[float] = Field(None, alias="paddingLeft")
    padding_right: Optional[float] = Field(None, alias="paddingRight")
    padding_top: Optional[float] = Field(None, alias="paddingTop")
    padding_bottom: Optional[float] = Field(None, alias="paddingBottom")
    primary_axis_align_items: Optional[str] = Field(None, alias="primaryAxisAlignItems")
    counter_axis_align_items: Optional[str] = Field(None, alias="counterAxisAlignItems")

    # Hierarchy
    children: List["SceneNode"] = Field(default_factory=list)

    @property
    def kind(self) -> NodeKind:
        """Closed node kind; unlisted Figma types map to UNKNOWN."""
        return NodeKind(self.type)

    @property
    def is_visible(self) -> bool:
        return self.visible is not False

    @property
    def uses_auto_layout(self) -> bool:
        return self.layout_mode in (LayoutMode.HORIZONTAL.value, LayoutMode.VERTICAL.value)


SceneNode.model_rebuild()


class FigmaFile(_FigmaModel):
    """File envelope returned by GET /v1/files/{key}."""
    name: str = Field("Untitled", description="File name")
    last_modified: Optional[str] = Field(None, alias="lastModified")
    version: Optional[str] = None
    schema_version: Optional[int] = Field(None, alias="schemaVersion")
    thumbnail_url: Optional[str] = Field(None, alias="thumbnailUrl")
    document: SceneNode
    components: Dict[str, Any] = Field(default_factory=dict)
    styles: Dict[str, Any] = Field(default_factory=dict)


# Parsing Results
class ParseResult(BaseModel):
    """Result of parsing a Figma document."""
    success: bool = Field(..., description="Whether parsing succeeded")
    figma_file: Optional[FigmaFile] = Field(None, description="Parsed file")
    errors: List[str] = Field(default_factory=list, description="Parsing errors")
    warnings: List[str] = Field(default_factory=list, description="Parsing warnings")
    processing_time: Optional[float] = Field(None, description="Parsing time in seconds")


# Conversion output
class StyleRecord(BaseModel):
    """Resolved CSS declarations for one emitted node."""
    model_config = ConfigDict(frozen=True)

    class_name: str = Field(..., description="Generated class name")
    node_id: Optional[str] = Field(None, description="Source node identifier")
    declarations: Mapping[str, str] = Field(default_factory=dict, validate_default=True)

    @field_validator("declarations")
    @classmethod
    def freeze_declarations(cls, v: Mapping[str, str]) -> Mapping[str, str]:
        """Store declarations as a read-only copy in insertion order."""
        return MappingProxyType(dict(v))

    @field_serializer("declarations")
    def serialize_declarations(self, v: Mapping[str, str]) -> Dict[str, str]:
        return dict(v)

    def to_css(self) -> str:
        """Render the record as a CSS rule; empty records render nothing."""
        if not self.declarations:
            return ""
        body = "".join(f"  {prop}: {value};\n" for prop, value in self.declarations.items())
        return f".{self.class_name} {{\n{body}}}\n"


class ConversionResult(BaseModel):
    """Markup, stylesheet and style records of one conversion."""
    html: str = Field(..., description="Markup body fragment")
    css: str = Field(..., description="Stylesheet text")
    records: List[StyleRecord] = Field(default_factory=list)
