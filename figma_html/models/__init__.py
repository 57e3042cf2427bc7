"""
Data Models
===========

Pydantic data models for the Figma scene graph and conversion output.

Models:
- schemas: scene node, paint, text style, file envelope and result models
"""
