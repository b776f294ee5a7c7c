"""
Sanitization utilities for rail-documents.

This module provides the string sanitizers used by write filters and the
walker that applies one to every string leaf of a document.
"""

import html
from typing import Any, Callable, MutableMapping, MutableSequence

import bleach

from ..config_proxy import get_setting
from ..exceptions import SanitizationError

Sanitizer = Callable[[str], str]


def sanitize_html(content: str) -> str:
    """
    Sanitize HTML content by escaping special characters.

    Args:
        content: HTML content to sanitize.

    Returns:
        Escaped HTML content.

    Examples:
        >>> sanitize_html("<script>alert('xss')</script>")
        "&lt;script&gt;alert(&#x27;xss&#x27;)&lt;/script&gt;"
    """
    if not content:
        return content
    return html.escape(content)


def clean_html(content: str) -> str:
    """
    Strip every HTML tag from the content, escaping what remains.

    Examples:
        >>> clean_html("<b>bold</b> & more")
        "bold &amp; more"
    """
    if not content:
        return content
    return bleach.clean(content, tags=set(), attributes={}, strip=True)


SANITIZERS: dict[str, Sanitizer] = {
    "escape": sanitize_html,
    "clean": clean_html,
}


def get_sanitizer(mode: str = None) -> Sanitizer:
    """Return the sanitizer for ``mode`` (defaults to the configured mode)."""
    mode = mode or get_setting("filter_settings.sanitize_mode", "escape")
    try:
        return SANITIZERS[mode]
    except KeyError:
        raise ValueError(f"Unknown sanitize mode '{mode}'") from None


def sanitize_object(obj: Any, sanitizer: Sanitizer = sanitize_html) -> Any:
    """
    Replace every string leaf of ``obj`` with its sanitized form, in place.

    Nested mappings and lists are walked depth-first. Other values are left
    untouched. Sanitizer failures are raised as SanitizationError.

    Args:
        obj: Mapping or list to walk.
        sanitizer: Callable applied to each string.

    Returns:
        The same object, for chaining.
    """
    if isinstance(obj, MutableMapping):
        items = list(obj.items())
    elif isinstance(obj, MutableSequence):
        items = list(enumerate(obj))
    else:
        return obj

    for key, child in items:
        if isinstance(child, str):
            try:
                obj[key] = sanitizer(child)
            except Exception as exc:
                raise SanitizationError(
                    f"Could not sanitize value of '{key}': {exc}", field_name=str(key)
                ) from exc
        elif isinstance(child, (MutableMapping, MutableSequence)):
            sanitize_object(child, sanitizer)

    return obj
