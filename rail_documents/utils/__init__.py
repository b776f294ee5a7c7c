"""
Utility modules for rail-documents.
"""

from .sanitization import (
    SANITIZERS,
    clean_html,
    get_sanitizer,
    sanitize_html,
    sanitize_object,
)

__all__ = [
    "SANITIZERS",
    "clean_html",
    "get_sanitizer",
    "sanitize_html",
    "sanitize_object",
]
