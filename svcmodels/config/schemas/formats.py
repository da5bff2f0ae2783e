"""Document loader schema (format precedence)."""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Names must match svcmodels.api.document_loader.DOCUMENT_FORMATS.
KNOWN_FORMATS = ("msgpack", "json")


class LoaderConfig(BaseModel):
    formats: List[str] = Field(
        default_factory=lambda: list(KNOWN_FORMATS),
        description="Descriptor formats tried in order (first hit wins)",
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("formats", mode="before")
    @classmethod
    def _split_env_string(cls, v):  # noqa: D401
        # env overrides arrive as "msgpack,json"
        if isinstance(v, str):
            return [p.strip() for p in v.split(",") if p.strip()]
        return v

    @field_validator("formats")
    @classmethod
    def _known_unique(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("formats cannot be empty")
        unknown = [f for f in v if f not in KNOWN_FORMATS]
        if unknown:
            raise ValueError(f"unknown formats: {unknown}")
        if len(set(v)) != len(v):
            raise ValueError("formats must not repeat")
        return v
