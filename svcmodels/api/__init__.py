"""Descriptor providers.

A provider is a callable ``(type, service, version)`` returning parsed
descriptor data, or ``NOT_FOUND`` when it has nothing for the request.
Wrap calls in :func:`resolve` to turn NOT_FOUND into an exception:

    provider = default_provider()
    provider("api", "s3", "2006-03-01")                # data or NOT_FOUND
    resolve(provider, "api", "elasticfood", "latest")  # data or raises

Several sources compose with :func:`chain`; the first answer wins.
"""

from .types import NOT_FOUND, Descriptor, DocumentType  # noqa: F401
from .provider import DescriptorProvider  # noqa: F401
from .document_loader import (  # noqa: F401
    DOCUMENT_FORMATS,
    DocumentFormat,
    load_document,
)
from .filesystem_provider import FilesystemProvider  # noqa: F401
from .manifest_provider import (  # noqa: F401
    ManifestProvider,
    default_provider,
    get_service_versions,
)
from .chain import ChainProvider, chain  # noqa: F401
from .resolver import resolve  # noqa: F401
from .compiler import compile_directory, compile_document  # noqa: F401

__all__ = [
    "NOT_FOUND",
    "Descriptor",
    "DocumentType",
    "DescriptorProvider",
    "DOCUMENT_FORMATS",
    "DocumentFormat",
    "load_document",
    "FilesystemProvider",
    "ManifestProvider",
    "default_provider",
    "get_service_versions",
    "ChainProvider",
    "chain",
    "resolve",
    "compile_directory",
    "compile_document",
]
