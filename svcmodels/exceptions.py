"""Descriptor resolution exception hierarchy.

NOT_FOUND is deliberately absent here: a source that cannot answer returns
the sentinel, it does not raise.
"""
from __future__ import annotations

from pathlib import Path


class DescriptorError(Exception):
    """Base descriptor subsystem exception."""


class InvalidDirectoryError(DescriptorError, ValueError):
    """Raised when a provider is configured with a missing directory."""


class InvalidDocumentTypeError(DescriptorError, ValueError):
    """Raised for a document type outside api/paginator/waiter."""


class ParseError(DescriptorError, ValueError):
    """Raised when a descriptor file exists but cannot be decoded.

    Never converted to NOT_FOUND; a chain must not skip a corrupt file.
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class UnresolvedDescriptorError(DescriptorError, LookupError):
    """Raised by ``resolve`` when every source reported NOT_FOUND."""

    def __init__(
        self,
        message: str,
        doc_type: str | None = None,
        service: str | None = None,
        version: str | None = None,
    ) -> None:
        super().__init__(message)
        self.doc_type = doc_type
        self.service = service
        self.version = version


class ManifestLoadError(DescriptorError):
    """Raised when a version manifest is missing or malformed."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


__all__ = [
    "DescriptorError",
    "InvalidDirectoryError",
    "InvalidDocumentTypeError",
    "ParseError",
    "UnresolvedDescriptorError",
    "ManifestLoadError",
]
