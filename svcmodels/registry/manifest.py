"""Version manifest schema.

Maps service name → {version alias → concrete version}:

    dynamodb:
      latest: "2012-08-10"
      "2012-08-10": "2012-08-10"
      "2011-12-05": "2012-08-10"

Validated manifests are read-only at every level, so one memoized instance
can be shared by all providers and threads.
"""
from __future__ import annotations

import datetime
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_version(value: Any) -> Any:
    # unquoted YAML dates load as datetime.date
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()[:10]
    return value


class VersionManifest(BaseModel):
    services: Mapping[str, Mapping[str, str]] = Field(
        default_factory=dict, validate_default=True
    )

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("services", mode="before")
    @classmethod
    def _coerce_dates(cls, v: Any) -> Any:
        if not isinstance(v, Mapping):
            return v
        out: Dict[Any, Any] = {}
        for service, aliases in v.items():
            if isinstance(aliases, Mapping):
                aliases = {
                    _as_version(k): _as_version(t) for k, t in aliases.items()
                }
            out[service] = aliases
        return out

    @field_validator("services")
    @classmethod
    def _freeze_with_identity_entries(
        cls, v: Mapping[str, Mapping[str, str]]
    ) -> Mapping[str, Mapping[str, str]]:
        """Every concrete version also resolves to itself."""
        frozen: Dict[str, Mapping[str, str]] = {}
        for service, aliases in v.items():
            table = dict(aliases)
            for target in list(table.values()):
                table.setdefault(target, target)
            frozen[service] = MappingProxyType(table)
        return MappingProxyType(frozen)

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Mapping[str, str]] | None
    ) -> "VersionManifest":
        return cls(services=dict(data or {}))

    def resolve(self, service: str, version: str) -> Optional[str]:
        return self.services.get(service, {}).get(version)

    def service_versions(self, service: str) -> List[str]:
        """Distinct concrete versions in first-seen order."""
        aliases = self.services.get(service)
        if not aliases:
            return []
        return list(dict.fromkeys(aliases.values()))

    def services_list(self) -> List[str]:
        return list(self.services.keys())

    def __contains__(self, service: object) -> bool:
        return service in self.services
