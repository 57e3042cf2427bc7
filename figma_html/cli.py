"""
Command Line Interface
======================

Fetch a Figma file (or read a saved one) and write ``index.html`` and
``styles.css``.

Usage:
    figma-html https://www.figma.com/file/ABC123/My-Design
    figma-html ABC123 --node-id 1:2 --output-dir build
    figma-html --input saved_file.json
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from figma_html.config.logging import get_logger, setup_logging
from figma_html.config.settings import Settings, get_settings
from figma_html.core.figma.client import (
    FigmaAPIError,
    FigmaClient,
    extract_file_key,
    extract_node_id,
)
from figma_html.core.figma.parser import SceneParser, StructureError, find_node
from figma_html.core.rendering.html_generator import FigmaHTMLConverter, HTMLGenerationError

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for problems the user can fix from the command line."""

    pass


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="figma-html", description="Convert a Figma design into HTML and CSS"
    )
    parser.add_argument("source", nargs="?", help="Figma file URL or file key")
    parser.add_argument("--input", type=Path, help="Convert a saved file JSON instead of fetching")
    parser.add_argument("--node-id", help="Convert only this node's subtree (e.g. 1:2)")
    parser.add_argument("--output-dir", type=Path, help="Output directory (fallback: settings)")
    parser.add_argument(
        "--save-json", action="store_true", help="Also save the fetched file JSON to the output dir"
    )
    return parser


async def fetch_file(file_key: str, settings: Settings) -> Dict[str, Any]:
    """Fetch a file's JSON from the Figma API."""
    async with FigmaClient(settings.figma_access_token or "") as client:
        return await client.get_file(file_key)


def load_source(args: argparse.Namespace, settings: Settings) -> Tuple[Dict[str, Any], Optional[str], Optional[str]]:
    """
    Resolve the file JSON from the command line arguments.

    Returns:
        Tuple of (file JSON, file key or None, node id from the URL or None)
    """
    if args.input is not None:
        try:
            return json.loads(args.input.read_text(encoding="utf-8")), None, None
        except OSError as e:
            raise CLIError(f"Cannot read {args.input}: {e}") from e
        except json.JSONDecodeError as e:
            raise CLIError(f"{args.input} is not valid JSON: {e.msg}") from e

    if not args.source:
        raise CLIError("Provide a Figma file URL or file key, or --input with a saved file")
    if not settings.has_access_token:
        raise CLIError(
            "Set FIGMA_ACCESS_TOKEN in the environment or .env "
            "(create one at https://www.figma.com/settings)"
        )

    file_key = extract_file_key(args.source)
    print(f"📋 File Key: {file_key}")
    print("📥 Fetching Figma file...")
    return asyncio.run(fetch_file(file_key, settings)), file_key, extract_node_id(args.source)


def write_outputs(
    output_dir: Path, document_html: str, css: str, settings: Settings
) -> Tuple[Path, Path]:
    """Write the document and stylesheet, creating the directory if needed."""
    output_dir.mkdir(parents=True, exist_ok=True)
    html_path = output_dir / settings.html_filename
    css_path = output_dir / settings.css_filename
    html_path.write_text(document_html, encoding="utf-8")
    css_path.write_text(css, encoding="utf-8")
    return html_path, css_path


def run(args: argparse.Namespace, settings: Settings) -> None:
    """Run one conversion."""
    raw_file, file_key, url_node_id = load_source(args, settings)
    output_dir: Path = args.output_dir or settings.output_dir

    if args.save_json and file_key:
        output_dir.mkdir(parents=True, exist_ok=True)
        json_path = output_dir / f"{file_key}.json"
        json_path.write_text(json.dumps(raw_file, ensure_ascii=False, indent=2), encoding="utf-8")
        print(f"✅ Saved: {json_path}")

    result = SceneParser(max_depth=settings.max_tree_depth).parse_file(raw_file)
    if not result.success or result.figma_file is None:
        raise CLIError("Cannot parse Figma file: " + "; ".join(result.errors))
    for warning in result.warnings:
        logger.warning("Figma file warning", warning=warning)

    figma_file = result.figma_file
    print(f"✅ Loaded: {figma_file.name}")
    if figma_file.last_modified:
        print(f"   Last modified: {figma_file.last_modified}")
    if figma_file.schema_version is not None:
        print(f"   Schema version: {figma_file.schema_version}")

    root = figma_file.document
    node_id = args.node_id or url_node_id
    if node_id:
        found = find_node(root, node_id)
        if found is None:
            raise CLIError(f"Node {node_id} not found in {figma_file.name}")
        root = found

    print("🔄 Converting to HTML/CSS...")
    converter = FigmaHTMLConverter(settings)
    conversion = converter.convert(root)
    document_html = converter.render_document(figma_file.name, conversion.html, conversion.css)

    html_path, css_path = write_outputs(output_dir, document_html, conversion.css, settings)
    print(f"✅ Generated: {html_path}")
    print(f"✅ Generated: {css_path}")
    print(f"✨ Conversion complete! Open {html_path} in your browser to view the result.")


def main(argv: Optional[List[str]] = None) -> int:
    """Console entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(settings)

    try:
        run(args, settings)
    except (CLIError, FigmaAPIError, StructureError, HTMLGenerationError) as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1
    return 0
