"""
Figma Module
============

Access to Figma documents.

Components:
- client: REST API client and URL helpers
- parser: validation and tolerant conversion of file JSON into scene nodes
"""
