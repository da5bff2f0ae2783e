"""Configuration loading & validation.

Precedence (last wins): base.yaml → overrides.local.yaml → ENV
(SVCMODELS__*).

Legacy configs without `schema_version` are migrated to 1 with a warning.
Unknown section keys are rejected.
"""
from __future__ import annotations

import os
import pathlib
import threading
from functools import lru_cache
from typing import Any, Dict, Type

import yaml
from pydantic import BaseModel, ConfigDict
from yaml import YAMLError

from svcmodels import metrics
from svcmodels.errors import validate_error_type

from .schemas.formats import LoaderConfig
from .schemas.storage import DataConfig


class AggregatedConfig(BaseModel):
    schema_version: int = 1
    data: DataConfig = DataConfig()
    loader: LoaderConfig = LoaderConfig()

    model_config = ConfigDict(extra="forbid")


DEFAULT_CONFIG_DIR = "configs"
ENV_PREFIX = "SVCMODELS__"
PACKAGE_DATA_DIR = pathlib.Path(__file__).resolve().parent.parent / "data"

SUB_SCHEMA_CLASSES: Dict[str, Type[BaseModel]] = {
    "data": DataConfig,
    "loader": LoaderConfig,
}


class ConfigError(Exception):
    pass


def _load_yaml_if_exists(path: pathlib.Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except YAMLError as e:
        raise ConfigError(f"Invalid config {path.name}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config {path.name}: mapping expected")
    return data


def _merge_dict(
    base: Dict[str, Any], override: Dict[str, Any]
) -> Dict[str, Any]:
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            base[k] = _merge_dict(base[k], v)
        else:
            base[k] = v
    return base


def _cast_env_value(value: str) -> Any:
    if value.lower() in {"true", "false"}:
        return value.lower() == "true"
    try:
        return int(value)
    except ValueError:
        try:
            return float(value)
        except ValueError:
            return value


def _apply_env(cfg: Dict[str, Any]) -> None:
    prefix_len = len(ENV_PREFIX)
    for env_key, value in os.environ.items():
        if not env_key.startswith(ENV_PREFIX):
            continue
        path_parts = env_key[prefix_len:].lower().split("__")
        target = cfg
        for part in path_parts[:-1]:
            if part not in target or not isinstance(target[part], dict):
                target[part] = {}
            target = target[part]
        leaf = path_parts[-1]
        cast_val = _cast_env_value(value)
        target[leaf] = cast_val
        dotted_path = ".".join(path_parts)
        metrics.inc("env_override_total", {"path": dotted_path})
        print(
            f"[config-env-override] path={dotted_path} value=*** source=env"
        )  # noqa: T201


_lock = threading.Lock()


def _resolve_config_dir() -> pathlib.Path:
    """Resolve config directory each call honoring env var changes."""
    return pathlib.Path(
        os.getenv("SVCMODELS_CONFIG_DIR", DEFAULT_CONFIG_DIR)
    )


def _migrate_legacy(data: Dict[str, Any]) -> Dict[str, Any]:
    """Apply in-place migrations for legacy configs.

    Rules:
    - `schema_version` absent → set to 1 and emit warning.
    - top-level `data_dir` (pre-sections layout) → moved to `data.data_dir`.
    """
    if "schema_version" not in data:
        print(
            "[config-migration] schema_version missing → assuming 1"
        )  # noqa: T201
        data["schema_version"] = 1
    if "data_dir" in data:
        legacy_dir = data.pop("data_dir")
        section = data.setdefault("data", {})
        if isinstance(section, dict):
            section.setdefault("data_dir", legacy_dir)
    return data


def _normalize_and_validate(raw: Dict[str, Any]) -> None:
    """Apply normalizations and cross-field validation.

    Normalizations:
      - data.data_dir: trailing '/' and '\\' stripped.
    Validations (error → raise):
      - data.manifest_file must be a bare file name (no directories).
    """
    errors: list[tuple[str, str, str]] = []  # (path, code, msg)
    data = raw.get("data")
    if isinstance(data, dict):
        data_dir = data.get("data_dir")
        if isinstance(data_dir, str) and data_dir.rstrip("/\\"):
            data["data_dir"] = data_dir.rstrip("/\\")
        manifest_file = data.get("manifest_file")
        if isinstance(manifest_file, str) and (
            "/" in manifest_file or "\\" in manifest_file
        ):
            errors.append(
                (
                    "data.manifest_file",
                    "config-out-of-range",
                    "bare file name required",
                )
            )

    if errors:
        for path, code, _ in errors:
            validate_error_type(code)
            metrics.inc(
                "config_validation_errors_total",
                {"path": path, "code": code},
            )
        details = ", ".join(f"{p}:{c}:{m}" for p, c, m in errors)
        raise ConfigError(f"config validation failed: {details}")


def _validate_sub_schemas(raw: Dict[str, Any]) -> Dict[str, Any]:
    validated: Dict[str, Any] = {}
    for name, cls in SUB_SCHEMA_CLASSES.items():
        if name in raw:
            try:
                validated[name] = cls.model_validate(raw[name] or {})
            except Exception as e:  # noqa: BLE001
                metrics.inc(
                    "config_validation_errors_total",
                    {"path": name, "code": "config-invalid"},
                )
                raise ConfigError(
                    f"Validation failed for section '{name}': {e}"
                ) from e
    return validated


@lru_cache(maxsize=1)
def get_config() -> AggregatedConfig:  # noqa: D401
    with _lock:
        cfg_dir = _resolve_config_dir()
        base_cfg = _load_yaml_if_exists(cfg_dir / "base.yaml")
        overrides_cfg = _load_yaml_if_exists(cfg_dir / "overrides.local.yaml")
        merged = _merge_dict(base_cfg, overrides_cfg)
        _apply_env(merged)
        migrated = _migrate_legacy(merged)
        _normalize_and_validate(migrated)
        validated_sub = _validate_sub_schemas(migrated)
        top = {k: v for k, v in migrated.items() if k not in validated_sub}
        try:
            return AggregatedConfig.model_validate({**top, **validated_sub})
        except Exception as e:  # noqa: BLE001
            raise ConfigError(str(e)) from e


def clear_config_cache() -> None:
    """Clear cached config (primarily for tests)."""
    get_config.cache_clear()


def as_dict() -> Dict[str, Any]:
    return get_config().model_dump()


def default_data_dir() -> pathlib.Path:
    """Configured descriptor directory, else the bundled package data."""
    data_dir = get_config().data.data_dir
    if data_dir:
        return pathlib.Path(data_dir)
    return PACKAGE_DATA_DIR


def default_manifest_path() -> pathlib.Path:
    return default_data_dir() / get_config().data.manifest_file
