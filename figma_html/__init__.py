"""
Figma to HTML/CSS Converter
===========================

Converts a Figma document tree into standalone HTML markup and a CSS
stylesheet that reproduce the design's visual appearance in a browser.

This package provides:
- Figma REST API client for fetching file documents
- Tolerant scene parsing into typed node models
- Style resolution engine mapping nodes to CSS declarations
- Document shell and stylesheet emission
- Command line interface
"""

__version__ = "1.0.0"
__author__ = "Figma HTML Converter Team"
