"""Manifest store.

Responsibilities:
- Load the version manifest (service → alias → concrete version)
- Normalize it (identity entries, YAML date scalars)
- Memoize the default manifest per process

Hosts composing several data directories pass in-memory
`VersionManifest` objects to providers instead of the default.
"""
from .manifest import VersionManifest  # noqa: F401
from .loader import (  # noqa: F401
    clear_manifest_cache,
    get_manifest,
    load_manifest,
)

__all__ = [
    "VersionManifest",
    "load_manifest",
    "get_manifest",
    "clear_manifest_cache",
]
