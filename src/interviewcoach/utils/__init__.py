"""
Utility modules for configuration, logging and text processing.
"""
from .logger import setup_logger
from .text_utils import (
    normalize_text,
    tokenize,
    count_term_occurrences,
    find_keywords,
    extract_json_object,
    truncate,
    unique_items
)

__all__ = [
    'setup_logger',
    'normalize_text',
    'tokenize',
    'count_term_occurrences',
    'find_keywords',
    'extract_json_object',
    'truncate',
    'unique_items'
]
