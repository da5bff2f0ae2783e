"""Data directory schema: where descriptors and the manifest live."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DataConfig(BaseModel):
    # None -> bundled svcmodels/data directory
    data_dir: str | None = None
    manifest_file: str = Field(
        "api-version-manifest.yaml",
        description="Manifest file name relative to the data directory",
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("manifest_file")
    @classmethod
    def _manifest_file_not_empty(cls, v: str) -> str:  # noqa: D401
        if not v.strip():
            raise ValueError("manifest_file cannot be empty")
        return v
