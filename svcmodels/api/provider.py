"""DescriptorProvider interface.

A provider is any callable ``(type, service, version)`` returning parsed
descriptor data or ``NOT_FOUND``. Built-in providers subclass
``DescriptorProvider``; plain functions with the same signature can be
chained alongside them.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from .types import DocumentType, ProviderResult

ProviderFn = Callable[[str, str, str], ProviderResult]


class DescriptorProvider(ABC):
    def __call__(
        self, doc_type: str | DocumentType, service: str, version: str
    ) -> ProviderResult:
        """Validate the type token, then look the document up."""
        return self._load(DocumentType.parse(doc_type), service, version)

    @abstractmethod
    def _load(
        self, doc_type: DocumentType, service: str, version: str
    ) -> ProviderResult:
        """Return parsed data or NOT_FOUND (never raise for absence)."""
