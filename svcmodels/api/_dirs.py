from __future__ import annotations

from pathlib import Path

from svcmodels.config import default_data_dir
from svcmodels.exceptions import InvalidDirectoryError


def check_dir(base_dir: str | Path | None) -> Path:
    """Normalize a provider directory; fail fast when it does not exist."""
    if base_dir is None or str(base_dir) == "":
        path = default_data_dir()
    else:
        raw = str(base_dir)
        path = Path(raw.rstrip("/\\") or raw)
    if path.is_dir():
        return path
    raise InvalidDirectoryError(f"Directory not found: {path}")
