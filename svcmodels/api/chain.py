"""Provider composition: first non-NOT_FOUND answer wins.

    overrides = FilesystemProvider("/tmp/beta-models")
    bundled = default_provider()
    provider = chain(overrides, bundled)
    provider("api", "betaservice", "2015-08-08")  # overrides answers
    provider("api", "s3", "2006-03-01")           # bundled answers

Only NOT_FOUND falls through; any exception propagates at once.
"""
from __future__ import annotations

from typing import Iterator, Tuple

from .provider import DescriptorProvider, ProviderFn
from .types import NOT_FOUND, DocumentType, ProviderResult


class ChainProvider(DescriptorProvider):
    def __init__(self, *providers: ProviderFn) -> None:
        for p in providers:
            if not callable(p):
                raise TypeError(f"provider is not callable: {p!r}")
        self._providers: Tuple[ProviderFn, ...] = tuple(providers)

    def _load(
        self, doc_type: DocumentType, service: str, version: str
    ) -> ProviderResult:
        for provider in self._providers:
            result = provider(doc_type.value, service, version)
            if result is not NOT_FOUND:
                return result
        return NOT_FOUND

    def __len__(self) -> int:
        return len(self._providers)

    def __iter__(self) -> Iterator[ProviderFn]:
        return iter(self._providers)

    def __repr__(self) -> str:
        inner = ", ".join(repr(p) for p in self._providers)
        return f"ChainProvider({inner})"


def chain(*providers: ProviderFn) -> ChainProvider:
    return ChainProvider(*providers)
