"""Descriptor document loader.

Candidate files are named ``{service}-{version}.{category}.{suffix}`` and
tried in format order: the precompiled msgpack fast path first, JSON
second. Both decoders build plain containers only; nothing in a data
directory is ever executed.

A missing file yields NOT_FOUND; a present but undecodable file raises
ParseError so that chained providers never skip over corrupt data.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from time import perf_counter
from typing import Any, Callable, Sequence

import msgpack

from svcmodels.config import get_config
from svcmodels import metrics
from svcmodels.errors import map_exception, validate_error_type
from svcmodels.events import DescriptorLoaded, DescriptorParseFailed, emit
from svcmodels.exceptions import ParseError
from .types import NOT_FOUND, DocumentType, ProviderResult


@dataclass(frozen=True)
class DocumentFormat:
    suffix: str
    parse: Callable[[bytes], Any]


def _parse_msgpack(raw: bytes) -> Any:
    # ext types come back as inert ExtType values
    return msgpack.unpackb(raw, raw=False, strict_map_key=False)


def _parse_json(raw: bytes) -> Any:
    return json.loads(raw.decode("utf-8"))


DOCUMENT_FORMATS: dict[str, DocumentFormat] = {
    "msgpack": DocumentFormat("msgpack", _parse_msgpack),
    "json": DocumentFormat("json", _parse_json),
}


def configured_formats() -> list[DocumentFormat]:
    return [DOCUMENT_FORMATS[name] for name in get_config().loader.formats]


def document_path(
    base_dir: Path,
    doc_type: DocumentType,
    service: str,
    version: str,
    suffix: str,
) -> Path:
    return Path(base_dir) / f"{service}-{version}.{doc_type.category}.{suffix}"


def load_document(
    doc_type: str | DocumentType,
    service: str,
    version: str,
    base_dir: str | Path,
    formats: Sequence[DocumentFormat] | None = None,
) -> ProviderResult:
    doc_type = DocumentType.parse(doc_type)
    if formats is None:
        formats = configured_formats()
    for fmt in formats:
        path = document_path(
            Path(base_dir), doc_type, service, version, fmt.suffix
        )
        if not path.is_file():
            continue
        t0 = perf_counter()
        raw = path.read_bytes()
        try:
            data = fmt.parse(raw)
        except Exception as e:  # noqa: BLE001
            err = ParseError(f"Unable to parse {path}: {e}", path=path)
            emit(
                DescriptorParseFailed(
                    doc_type=doc_type.value,
                    service=service,
                    version=version,
                    path=str(path),
                    error_type=validate_error_type(map_exception(err)),
                    message=str(e),
                )
            )
            raise err from e
        emit(
            DescriptorLoaded(
                doc_type=doc_type.value,
                service=service,
                version=version,
                format=fmt.suffix,
                path=str(path),
                load_ms=(perf_counter() - t0) * 1000,
            )
        )
        return data
    metrics.inc("descriptor_not_found_total", {"type": doc_type.value})
    return NOT_FOUND
