"""Manifest loader: parses the version manifest file (YAML or JSON)."""
from __future__ import annotations

import threading
from pathlib import Path
from typing import Dict

import yaml
from yaml import YAMLError

from svcmodels.config import default_manifest_path
from svcmodels.events import ManifestLoaded, emit
from svcmodels.exceptions import ManifestLoadError
from .manifest import VersionManifest

_registry_lock = threading.Lock()
_manifest_cache: Dict[Path, VersionManifest] = {}


def _parse_manifest_file(path: Path) -> VersionManifest:
    if not path.is_file():
        raise ManifestLoadError(f"Manifest not found: {path}", path=path)
    try:
        raw_text = path.read_text(encoding="utf-8")
        data = yaml.safe_load(raw_text) or {}
    except (OSError, UnicodeDecodeError, YAMLError) as e:
        raise ManifestLoadError(
            f"Invalid manifest {path.name}: {e}", path=path
        ) from e
    if not isinstance(data, dict):
        raise ManifestLoadError(
            f"Invalid manifest {path.name}: mapping expected", path=path
        )
    try:
        return VersionManifest.from_mapping(data)
    except Exception as e:  # noqa: BLE001
        raise ManifestLoadError(
            f"Invalid manifest {path.name}: {e}", path=path
        ) from e


def _loaded(path: Path, manifest: VersionManifest) -> None:
    emit(ManifestLoaded(path=str(path), services=len(manifest.services)))


def load_manifest(path: str | Path) -> VersionManifest:
    """Parse one manifest file (uncached).

    JSON manifests load through the same YAML parser.
    """
    path = Path(path)
    manifest = _parse_manifest_file(path)
    _loaded(path, manifest)
    return manifest


def get_manifest(path: str | Path | None = None) -> VersionManifest:
    """Return the manifest for ``path`` (default location if None).

    Parsed at most once per resolved path per process (thread-safe cache).
    ManifestLoaded is emitted after the cache lock is released, so
    subscribers may call back into the registry.
    """
    key = Path(path if path is not None else default_manifest_path())
    key = key.resolve()
    with _registry_lock:
        manifest = _manifest_cache.get(key)
        if manifest is not None:
            return manifest
        manifest = _parse_manifest_file(key)
        _manifest_cache[key] = manifest
    _loaded(key, manifest)
    return manifest


def clear_manifest_cache(path: str | Path | None = None) -> None:
    """Clear cached manifests.

    If path provided, clear only that entry; else clear all.
    """
    with _registry_lock:
        if path is None:
            _manifest_cache.clear()
        else:
            _manifest_cache.pop(Path(path).resolve(), None)
