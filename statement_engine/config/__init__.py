"""
Configuration module for the Statement Engine.

This module contains the extraction and pagination configuration dictionaries.
"""

from .extraction_config import EXTRACTION_CONFIG, PAGINATION_CONFIG
from .keyword_loader import load_direction_keywords_csv, merge_keyword_tables

__all__ = [
    "EXTRACTION_CONFIG",
    "PAGINATION_CONFIG",
    "load_direction_keywords_csv",
    "merge_keyword_tables",
]
