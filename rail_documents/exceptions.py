"""
Custom exceptions for document filtering and denormalization.

This module defines specific exception types for better error handling
when registering document types and transforming documents.
"""

from typing import Optional


class DocumentFilterError(Exception):
    """Base exception for rail-documents errors."""

    def __init__(self, message: str, type_name: Optional[str] = None):
        self.type_name = type_name
        super().__init__(message)


class ConfigurationError(DocumentFilterError):
    """Raised when a document type is registered with invalid configuration."""

    def __init__(
        self,
        message: str,
        type_name: Optional[str] = None,
        field_name: Optional[str] = None,
    ):
        self.field_name = field_name
        super().__init__(message, type_name)


class SanitizationError(DocumentFilterError):
    """Raised when a string leaf cannot be sanitized during a write filter."""

    def __init__(
        self,
        message: str,
        type_name: Optional[str] = None,
        field_name: Optional[str] = None,
    ):
        self.field_name = field_name
        super().__init__(message, type_name)


class UnregisteredTypeError(KeyError, DocumentFilterError):
    """Raised when looking up a document type that was never registered."""

    def __init__(self, type_name: str):
        DocumentFilterError.__init__(
            self, f"Document type '{type_name}' is not registered", type_name
        )

    def __str__(self) -> str:
        return str(self.args[0])
