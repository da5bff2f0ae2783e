"""Shared descriptor types: document kinds and the NOT_FOUND marker."""
from __future__ import annotations

from enum import Enum
from typing import Any, Union

from svcmodels.exceptions import InvalidDocumentTypeError


class DocumentType(str, Enum):
    API = "api"
    PAGINATOR = "paginator"
    WAITER = "waiter"

    @property
    def category(self) -> str:
        """On-disk category token used in file names."""
        return _CATEGORIES[self]

    @classmethod
    def parse(cls, value: "str | DocumentType") -> "DocumentType":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidDocumentTypeError(f"Unknown type: {value}") from None


_CATEGORIES = {
    DocumentType.API: "api",
    DocumentType.PAGINATOR: "paginators",
    DocumentType.WAITER: "waiters2",
}


class _NotFoundType:
    """Singleton returned by providers when a source has no answer.

    Distinct from any parsed descriptor (``[]``, ``{}`` and ``None`` are
    all valid file contents).
    """

    _instance: "_NotFoundType | None" = None

    def __new__(cls) -> "_NotFoundType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND = _NotFoundType()

# Parsed descriptor document (opaque to this package).
Descriptor = Any
ProviderResult = Union[Descriptor, _NotFoundType]
