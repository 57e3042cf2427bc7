"""
Sample Figma Files
==================

Collection of Figma file documents shaped like GET /v1/files/{key} responses,
from a single auto-layout card to trees with hidden and unsupported layers.
"""

WHITE = {"r": 1, "g": 1, "b": 1, "a": 1}
BLACK = {"r": 0, "g": 0, "b": 0, "a": 1}
BORDER_GREY = {"r": 0.8, "g": 0.8, "b": 0.8, "a": 1}

# Auto-layout login card
LOGIN_CARD_FILE = {
    "name": "Login Screen",
    "lastModified": "2024-05-01T10:00:00Z",
    "version": "4321",
    "schemaVersion": 0,
    "document": {
        "id": "0:0",
        "name": "Document",
        "type": "DOCUMENT",
        "children": [
            {
                "id": "0:1",
                "name": "Page 1",
                "type": "CANVAS",
                "children": [
                    {
                        "id": "1:1",
                        "name": "Login Card",
                        "type": "FRAME",
                        "absoluteBoundingBox": {"x": 0, "y": 0, "width": 360, "height": 280},
                        "fills": [{"type": "SOLID", "color": WHITE}],
                        "cornerRadius": 12,
                        "clipsContent": True,
                        "layoutMode": "VERTICAL",
                        "itemSpacing": 16,
                        "paddingTop": 24,
                        "paddingRight": 24,
                        "paddingBottom": 24,
                        "paddingLeft": 24,
                        "primaryAxisAlignItems": "MIN",
                        "counterAxisAlignItems": "CENTER",
                        "effects": [
                            {
                                "type": "DROP_SHADOW",
                                "visible": True,
                                "radius": 24,
                                "offset": {"x": 0, "y": 8},
                                "color": {"r": 0, "g": 0, "b": 0, "a": 0.12},
                            }
                        ],
                        "children": [
                            {
                                "id": "1:2",
                                "name": "Title",
                                "type": "TEXT",
                                "characters": "Sign in",
                                "absoluteBoundingBox": {"x": 24, "y": 24, "width": 312, "height": 32},
                                "fills": [{"type": "SOLID", "color": BLACK}],
                                "style": {
                                    "fontFamily": "Inter",
                                    "fontWeight": 700,
                                    "fontSize": 24,
                                    "lineHeightPx": 32,
                                    "textAlignHorizontal": "CENTER",
                                },
                            },
                            {
                                "id": "1:3",
                                "name": "Email",
                                "type": "RECTANGLE",
                                "absoluteBoundingBox": {"x": 24, "y": 72, "width": 312, "height": 44},
                                "fills": [{"type": "SOLID", "color": WHITE}],
                                "strokes": [{"type": "SOLID", "color": BORDER_GREY}],
                                "strokeWeight": 1,
                                "strokeAlign": "INSIDE",
                                "cornerRadius": 8,
                            },
                            {
                                "id": "1:4",
                                "name": "Submit",
                                "type": "INSTANCE",
                                "absoluteBoundingBox": {"x": 24, "y": 132, "width": 312, "height": 48},
                                "fills": [
                                    {
                                        "type": "GRADIENT_LINEAR",
                                        "gradientHandlePositions": [
                                            {"x": 0, "y": 0.5},
                                            {"x": 1, "y": 0.5},
                                        ],
                                        "gradientStops": [
                                            {"position": 0, "color": {"r": 0.2, "g": 0.4, "b": 1, "a": 1}},
                                            {"position": 1, "color": {"r": 0.4, "g": 0.2, "b": 1, "a": 1}},
                                        ],
                                    }
                                ],
                                "cornerRadius": 8,
                                "layoutMode": "HORIZONTAL",
                                "primaryAxisAlignItems": "CENTER",
                                "counterAxisAlignItems": "CENTER",
                                "children": [
                                    {
                                        "id": "1:5",
                                        "name": "Label",
                                        "type": "TEXT",
                                        "characters": "Continue & go",
                                        "absoluteBoundingBox": {"x": 140, "y": 144, "width": 80, "height": 24},
                                        "fills": [{"type": "SOLID", "color": WHITE}],
                                        "style": {"fontFamily": "Inter", "fontWeight": 600, "fontSize": 16},
                                    }
                                ],
                            },
                        ],
                    }
                ],
            }
        ],
    },
    "components": {},
    "styles": {},
}


def _list_row(node_id, y, radii):
    return {
        "id": node_id,
        "name": f"Row {node_id}",
        "type": "RECTANGLE",
        "absoluteBoundingBox": {"x": 40, "y": y, "width": 280, "height": 56},
        "fills": [{"type": "SOLID", "color": WHITE}],
        "strokes": [{"type": "SOLID", "color": BORDER_GREY}],
        "strokeWeight": 1,
        "strokeAlign": "INSIDE",
        "rectangleCornerRadii": radii,
    }


# Absolutely positioned list whose rows share edges
STACKED_LIST_FILE = {
    "name": "Settings List",
    "document": {
        "id": "0:0",
        "name": "Document",
        "type": "DOCUMENT",
        "children": [
            {
                "id": "0:1",
                "name": "Page 1",
                "type": "CANVAS",
                "children": [
                    {
                        "id": "2:1",
                        "name": "List",
                        "type": "FRAME",
                        "absoluteBoundingBox": {"x": 0, "y": 0, "width": 360, "height": 240},
                        "children": [
                            _list_row("2:2", 40, [8, 8, 0, 0]),
                            _list_row("2:3", 96, [0, 0, 0, 0]),
                            _list_row("2:4", 152, [0, 0, 8, 8]),
                        ],
                    }
                ],
            }
        ],
    },
}

# Hidden layers and node kinds without an element of their own
HIDDEN_LAYERS_FILE = {
    "name": "Hidden Layers",
    "document": {
        "id": "0:0",
        "name": "Document",
        "type": "DOCUMENT",
        "children": [
            {
                "id": "0:1",
                "name": "Page 1",
                "type": "CANVAS",
                "children": [
                    {
                        "id": "3:1",
                        "name": "Screen",
                        "type": "FRAME",
                        "absoluteBoundingBox": {"x": 0, "y": 0, "width": 200, "height": 200},
                        "children": [
                            {
                                "id": "3:2",
                                "name": "Hidden group",
                                "type": "GROUP",
                                "visible": False,
                                "absoluteBoundingBox": {"x": 0, "y": 0, "width": 100, "height": 100},
                                "children": [
                                    {
                                        "id": "3:3",
                                        "name": "Inside hidden group",
                                        "type": "TEXT",
                                        "characters": "never shown",
                                    }
                                ],
                            },
                            {
                                "id": "3:4",
                                "name": "Union",
                                "type": "BOOLEAN_OPERATION",
                                "absoluteBoundingBox": {"x": 10, "y": 10, "width": 50, "height": 50},
                                "children": [
                                    {
                                        "id": "3:5",
                                        "name": "Shape",
                                        "type": "ELLIPSE",
                                        "absoluteBoundingBox": {"x": 20, "y": 30, "width": 40, "height": 40},
                                        "fills": [{"type": "SOLID", "color": BLACK}],
                                    }
                                ],
                            },
                        ],
                    }
                ],
            }
        ],
    },
}


def create_deeply_nested_frame(depth=10):
    """Create a chain of nested frames ending in a text node."""
    node = {
        "id": f"9:{depth}",
        "type": "TEXT",
        "characters": f"Nested level {depth}",
    }
    for level in range(depth - 1, -1, -1):
        node = {"id": f"9:{level}", "type": "FRAME", "children": [node]}
    return node


# Collection of all sample files
ALL_SAMPLE_FILES = {
    "login_card": LOGIN_CARD_FILE,
    "stacked_list": STACKED_LIST_FILE,
    "hidden_layers": HIDDEN_LAYERS_FILE,
}


def get_sample_file(name):
    """Get a sample file by name."""
    return ALL_SAMPLE_FILES.get(name)
