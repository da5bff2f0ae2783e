"""Provider that serves descriptors straight from a directory.

"latest" is resolved by scanning ``{service}-*.api.*`` and taking the
highest date token (lexicographic order; versions are ``YYYY-MM-DD``).
The pick is cached per instance for its lifetime, so files added later are
only seen by a new provider instance. Failed scans are not cached.
"""
from __future__ import annotations

import glob
import threading
from pathlib import Path
from typing import Dict, Optional

from svcmodels.events import LatestVersionResolved, emit
from svcmodels import metrics
from ._dirs import check_dir
from .document_loader import load_document
from .provider import DescriptorProvider
from .types import NOT_FOUND, DocumentType, ProviderResult

LATEST = "latest"
# Width of a YYYY-MM-DD version token.
VERSION_TOKEN_LEN = 10


class FilesystemProvider(DescriptorProvider):
    def __init__(self, base_dir: str | Path | None = None) -> None:
        self._dir = check_dir(base_dir)
        self._latest: Dict[str, str] = {}
        # guards _latest and _scan_locks; scans hold only their service lock
        self._latest_lock = threading.Lock()
        self._scan_locks: Dict[str, threading.Lock] = {}

    @property
    def base_dir(self) -> Path:
        return self._dir

    def latest_versions(self) -> Dict[str, str]:
        with self._latest_lock:
            return dict(self._latest)

    def _load(
        self, doc_type: DocumentType, service: str, version: str
    ) -> ProviderResult:
        if version == LATEST:
            resolved = self._resolve_latest(service)
            if resolved is None:
                return NOT_FOUND
            version = resolved
        return load_document(doc_type, service, version, self._dir)

    def _cached_latest(self, service: str) -> Optional[str]:
        with self._latest_lock:
            return self._latest.get(service)

    def _scan_lock(self, service: str) -> threading.Lock:
        with self._latest_lock:
            return self._scan_locks.setdefault(service, threading.Lock())

    def _resolve_latest(self, service: str) -> Optional[str]:
        cached = self._cached_latest(service)
        if cached is not None:
            return cached
        with self._scan_lock(service):
            # another caller may have filled it while we waited
            cached = self._cached_latest(service)
            if cached is not None:
                return cached
            tokens = self._scan_versions(service)
            if not tokens:
                metrics.inc("latest_scan_total", {"result": "miss"})
                return None
            tokens.sort(reverse=True)
            with self._latest_lock:
                self._latest[service] = tokens[0]
        emit(
            LatestVersionResolved(
                service=service,
                version=tokens[0],
                candidates=len(tokens),
                base_dir=str(self._dir),
            )
        )
        return tokens[0]

    def _scan_versions(self, service: str) -> list[str]:
        start = len(service) + 1
        pattern = f"{glob.escape(service)}-*.api.*"
        return [
            p.name[start:start + VERSION_TOKEN_LEN]
            for p in self._dir.glob(pattern)
        ]

    def __repr__(self) -> str:
        return f"FilesystemProvider({str(self._dir)!r})"
