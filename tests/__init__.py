"""
Test Suite
==========

Test suite matching the figma_html/ package structure.

Test Categories:
- unit: Unit tests for individual components
- integration: End-to-end conversion of sample documents
"""
