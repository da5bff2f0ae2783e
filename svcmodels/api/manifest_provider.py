"""Provider resolving versions through a version manifest.

Manifest data maps service names to version aliases:

    ec2:
      latest: "2014-10-01"
      "2014-10-01": "2014-10-01"
      "2014-09-01": "2014-10-01"

A request is answered only when ``manifest[service][version]`` exists;
the concrete target is then loaded from the provider's directory.
"""
from __future__ import annotations

from pathlib import Path
from typing import List

from svcmodels.config import get_config
from svcmodels.registry import VersionManifest, get_manifest, load_manifest
from ._dirs import check_dir
from .document_loader import load_document
from .provider import DescriptorProvider
from .types import NOT_FOUND, DocumentType, ProviderResult


class ManifestProvider(DescriptorProvider):
    def __init__(
        self,
        manifest: VersionManifest | None = None,
        base_dir: str | Path | None = None,
    ) -> None:
        self._dir = check_dir(base_dir)
        self._manifest = manifest if manifest is not None else get_manifest()

    @classmethod
    def from_directory(cls, base_dir: str | Path) -> "ManifestProvider":
        """Serve a self-contained directory holding its own manifest file."""
        path = check_dir(base_dir)
        manifest = load_manifest(path / get_config().data.manifest_file)
        return cls(manifest, path)

    @property
    def base_dir(self) -> Path:
        return self._dir

    @property
    def manifest(self) -> VersionManifest:
        return self._manifest

    def service_versions(self, service: str) -> List[str]:
        return self._manifest.service_versions(service)

    def _load(
        self, doc_type: DocumentType, service: str, version: str
    ) -> ProviderResult:
        concrete = self._manifest.resolve(service, version)
        if concrete is None:
            return NOT_FOUND
        return load_document(doc_type, service, concrete, self._dir)

    def __repr__(self) -> str:
        return f"ManifestProvider({str(self._dir)!r})"


def default_provider() -> ManifestProvider:
    """Manifest provider over the default manifest and data directory."""
    return ManifestProvider()


def get_service_versions(
    service: str, manifest: VersionManifest | None = None
) -> List[str]:
    """Distinct concrete versions for a service ([] when unknown)."""
    if manifest is None:
        manifest = get_manifest()
    return manifest.service_versions(service)
