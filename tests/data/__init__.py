"""
Test Data Package
================

Sample Figma file documents for conversion tests.
"""

from .sample_figma_files import (
    ALL_SAMPLE_FILES,
    get_sample_file,
    LOGIN_CARD_FILE,
    STACKED_LIST_FILE,
    HIDDEN_LAYERS_FILE,
)

__all__ = [
    "ALL_SAMPLE_FILES",
    "get_sample_file",
    "LOGIN_CARD_FILE",
    "STACKED_LIST_FILE",
    "HIDDEN_LAYERS_FILE",
]
