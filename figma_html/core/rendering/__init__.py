"""
Rendering Module
===============

HTML and CSS generation from Figma scene nodes.

Components:
- styles: per-node style resolution
- html_generator: traversal, markup generation, stylesheet and document emission
- templates: HTML document shell
"""
