"""
Core Business Logic
==================

Core modules for Figma document processing and HTML/CSS generation.

Modules:
- figma: Figma REST API client and scene parsing
- rendering: style resolution, markup generation and document emission
"""
