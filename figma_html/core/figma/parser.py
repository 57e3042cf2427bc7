"""
Scene Parser
============

Convert Figma file JSON into typed scene nodes.

Conversion is tolerant: a malformed block of a node (a bounding box with a
non-numeric width, a fill with an unknown color shape) is dropped with a
warning while the rest of the node and its siblings are kept.
"""

from typing import Dict, List, Any, Optional, Set, Type, TypeVar, Union
import json
import time

from cerberus import Validator  # type: ignore[import-untyped]
from pydantic import BaseModel, ValidationError

from figma_html.config.logging import get_logger
from figma_html.config.settings import get_settings
from figma_html.models.schemas import (
    BoundingBox,
    Effect,
    FigmaFile,
    NodeKind,
    Paint,
    ParseResult,
    SceneNode,
    TypeStyle,
)

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

LIST_BLOCKS: Dict[str, Type[BaseModel]] = {
    "fills": Paint,
    "strokes": Paint,
    "effects": Effect,
}

OBJECT_BLOCKS: Dict[str, Type[BaseModel]] = {
    "absoluteBoundingBox": BoundingBox,
    "style": TypeStyle,
}

NESTED_FIELDS = {"children", *LIST_BLOCKS, *OBJECT_BLOCKS}


class SceneParseError(Exception):
    """Exception raised when a Figma document cannot be read at all."""

    pass


class StructureError(Exception):
    """Exception raised when the scene tree is cyclic or nested too deeply."""

    pass


class FigmaFileValidator:
    """Envelope validation for Figma file JSON using Cerberus schemas."""

    def __init__(self) -> None:
        self.logger: Any = logger.bind(component="validator")  # structlog.BoundLoggerBase
        self._setup_schemas()

    def _setup_schemas(self) -> None:
        """Setup validation schemas."""
        self.node_schema = {
            "id": {"type": "string"},
            "name": {"type": "string", "nullable": True},
            "type": {"type": "string", "required": True},
            "visible": {"type": "boolean"},
            "children": {"type": "list"},
        }

        self.file_schema: Dict[str, Any] = {
            "name": {"type": "string"},
            "lastModified": {"type": "string"},
            "version": {"type": "string"},
            "schemaVersion": {"type": "integer"},
            "thumbnailUrl": {"type": "string", "nullable": True},
            "document": {
                "type": "dict",
                "required": True,
                "allow_unknown": True,
                "schema": self.node_schema,
            },
            "components": {"type": "dict"},
            "styles": {"type": "dict"},
        }

    def validate_file(self, data: Dict[str, Any]) -> tuple[bool, List[str], List[str]]:
        """
        Validate the file envelope.

        Args:
            data: Decoded file JSON

        Returns:
            Tuple of (is_valid, errors, warnings)
        """
        validator = Validator(self.file_schema)  # type: ignore[misc]
        validator.allow_unknown = True  # type: ignore[attr-defined]

        is_valid = validator.validate(data)  # type: ignore[misc]
        errors: List[str] = []
        warnings: List[str] = []

        if not is_valid:
            errors.extend(self._format_validation_errors(validator.errors))  # type: ignore[attr-defined]
            return False, errors, warnings

        document = data["document"]
        if document.get("type") != NodeKind.DOCUMENT.value:
            warnings.append(f"document: expected type DOCUMENT, got {document.get('type')}")
        if not document.get("children"):
            warnings.append("document: no pages to convert")

        return True, errors, warnings

    def _format_validation_errors(self, errors: Any, path: str = "") -> List[str]:
        """Format Cerberus validation errors into readable messages."""
        formatted_errors: List[str] = []

        for field, error_info in errors.items():
            current_path = f"{path}.{field}" if path else str(field)

            if isinstance(error_info, list):
                for error in error_info:
                    if isinstance(error, dict):
                        formatted_errors.extend(self._format_validation_errors(error, current_path))
                    else:
                        formatted_errors.append(f"{current_path}: {error}")
            elif isinstance(error_info, dict):
                formatted_errors.extend(self._format_validation_errors(error_info, current_path))

        return formatted_errors


class SceneParser:
    """Figma JSON to scene node conversion."""

    def __init__(self, max_depth: Optional[int] = None) -> None:
        self.logger: Any = logger.bind(component="scene_parser")  # structlog.BoundLoggerBase
        self.validator = FigmaFileValidator()
        self.max_depth = max_depth or get_settings().max_tree_depth

    def parse_file(self, content: Union[str, bytes, Dict[str, Any]]) -> ParseResult:
        """
        Parse a Figma file document.

        Args:
            content: Raw JSON text or an already decoded file object

        Returns:
            ParseResult containing the parsed file or errors
        """
        start_time = time.time()

        try:
            self.logger.info("Parsing Figma file")
            raw_data = self._load(content)

            is_valid, errors, warnings = self.validator.validate_file(raw_data)
            if not is_valid:
                return ParseResult(
                    success=False,
                    errors=errors,
                    warnings=warnings,
                    processing_time=time.time() - start_time,
                )

            document = self.parse_node(raw_data["document"], warnings)
            envelope = {key: value for key, value in raw_data.items() if key != "document"}
            figma_file = self._validate_envelope(envelope, document, warnings)

            self.logger.info(
                "Figma file parsed", file_name=figma_file.name, warning_count=len(warnings)
            )
            return ParseResult(
                success=True,
                figma_file=figma_file,
                warnings=warnings,
                processing_time=time.time() - start_time,
            )

        except SceneParseError as e:
            self.logger.error("Figma file parsing failed", error=str(e))
            return ParseResult(
                success=False, errors=[str(e)], processing_time=time.time() - start_time
            )
        except StructureError as e:
            error_msg = f"Structure error: {e}"
            self.logger.error("Figma file parsing failed", error=error_msg)
            return ParseResult(
                success=False, errors=[error_msg], processing_time=time.time() - start_time
            )

    def parse_node(self, data: Dict[str, Any], warnings: Optional[List[str]] = None) -> SceneNode:
        """
        Convert a node object and its subtree.

        Args:
            data: Node JSON object
            warnings: Optional list collecting messages about dropped blocks

        Returns:
            SceneNode tree

        Raises:
            SceneParseError: If data is not a JSON object
            StructureError: If the subtree references itself or is nested too deeply
        """
        if not isinstance(data, dict):
            raise SceneParseError(f"Node must be an object, got {type(data).__name__}")
        if warnings is None:
            warnings = []
        return self._convert_node(data, "document", warnings, set())

    def _load(self, content: Union[str, bytes, Dict[str, Any]]) -> Dict[str, Any]:
        if isinstance(content, dict):
            return content
        if not isinstance(content, (str, bytes, bytearray)):
            raise SceneParseError(
                f"Figma file must be a JSON object, got {type(content).__name__}"
            )

        try:
            raw_data = json.loads(content)
        except json.JSONDecodeError as e:
            raise SceneParseError(
                f"Invalid JSON syntax at line {e.lineno}, column {e.colno}: {e.msg}"
            ) from e

        if not isinstance(raw_data, dict):
            raise SceneParseError(
                f"Figma file must be a JSON object, got {type(raw_data).__name__}"
            )
        return raw_data

    def _validate_envelope(
        self, envelope: Dict[str, Any], document: SceneNode, warnings: List[str]
    ) -> FigmaFile:
        fields = dict(envelope)
        while True:
            try:
                return FigmaFile.model_validate({**fields, "document": document})
            except ValidationError as e:
                bad_keys = {str(err["loc"][0]) for err in e.errors() if err["loc"]}
                bad_keys &= set(fields)
                if not bad_keys:
                    raise SceneParseError(f"Invalid file envelope: {e}") from e
                for key in sorted(bad_keys):
                    warnings.append(f"file.{key}: dropped invalid value")
                    fields.pop(key)

    def _convert_node(
        self, data: Dict[str, Any], path: str, warnings: List[str], ancestors: Set[int]
    ) -> SceneNode:
        marker = id(data)
        if marker in ancestors:
            raise StructureError(f"{path}: node {data.get('id')!r} contains itself")
        if len(ancestors) >= self.max_depth:
            raise StructureError(f"{path}: tree deeper than {self.max_depth} levels")

        ancestors.add(marker)
        try:
            node = self._validate_scalars(data, path, warnings)

            for key, model in OBJECT_BLOCKS.items():
                if data.get(key) is not None:
                    block = self._validate_block(model, data[key], f"{path}.{key}", warnings)
                    setattr(node, _field_name(key), block)

            for key, model in LIST_BLOCKS.items():
                items = data.get(key)
                if items is None:
                    continue
                if not isinstance(items, list):
                    warnings.append(f"{path}.{key}: expected a list")
                    continue
                validated = [
                    self._validate_block(model, item, f"{path}.{key}[{i}]", warnings)
                    for i, item in enumerate(items)
                ]
                setattr(node, key, [item for item in validated if item is not None])

            children: List[SceneNode] = []
            raw_children = data.get("children") or []
            if not isinstance(raw_children, list):
                warnings.append(f"{path}.children: expected a list")
                raw_children = []
            for i, child in enumerate(raw_children):
                child_path = f"{path}.children[{i}]"
                if not isinstance(child, dict):
                    warnings.append(f"{child_path}: node must be an object")
                    continue
                children.append(self._convert_node(child, child_path, warnings, ancestors))
            node.children = children

            return node
        finally:
            ancestors.discard(marker)

    def _validate_scalars(self, data: Dict[str, Any], path: str, warnings: List[str]) -> SceneNode:
        fields = {key: value for key, value in data.items() if key not in NESTED_FIELDS}
        while True:
            try:
                return SceneNode.model_validate(fields)
            except ValidationError as e:
                bad_keys = {str(err["loc"][0]) for err in e.errors() if err["loc"]} & set(fields)
                if not bad_keys:
                    raise SceneParseError(f"{path}: {e}") from e
                for key in sorted(bad_keys):
                    warnings.append(f"{path}.{key}: dropped invalid value")
                    self.logger.warning("Dropping invalid node field", path=path, field=key)
                    fields.pop(key)

    def _validate_block(
        self, model: Type[ModelT], value: Any, path: str, warnings: List[str]
    ) -> Optional[ModelT]:
        try:
            return model.model_validate(value)
        except ValidationError as e:
            warnings.append(f"{path}: dropped invalid block ({e.error_count()} errors)")
            self.logger.warning("Dropping invalid block", path=path, errors=e.error_count())
            return None


def _field_name(alias: str) -> str:
    for name, field in SceneNode.model_fields.items():
        if field.alias == alias or name == alias:
            return name
    raise KeyError(alias)


def find_node(root: SceneNode, node_id: str) -> Optional[SceneNode]:
    """
    Find a node by id in a scene tree.

    Args:
        root: Tree to search
        node_id: Node identifier, e.g. ``1:2``

    Returns:
        The first matching node in depth-first order, or None
    """
    stack = [root]
    seen: Set[int] = set()
    while stack:
        node = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        if node.id == node_id:
            return node
        stack.extend(reversed(node.children))
    return None


def parse_figma_file(content: Union[str, bytes, Dict[str, Any]]) -> ParseResult:
    """
    Parse a Figma file document.

    Args:
        content: Raw JSON text or decoded file object

    Returns:
        ParseResult containing the parsed file or errors
    """
    return SceneParser().parse_file(content)
