"""Pytest configuration ensuring project root is importable.

Adds repository root to sys.path explicitly to avoid interpreter/path quirks.
"""
from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import msgpack
import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

MANIFEST_YAML = """\
dynamodb:
  latest: "2012-08-10"
  "2012-08-10": "2012-08-10"
  "2011-12-05": "2012-08-10"
  "2010-02-04": "2010-02-04"
"""


@pytest.fixture(autouse=True)
def _isolate_config_env():  # noqa: D401
    """Ensure global config/manifest side effects do not leak between tests.

    - Clear config and manifest caches between tests
    - Restore SVCMODELS_CONFIG_DIR and drop SVCMODELS__* overrides
    """
    from svcmodels.config import clear_config_cache  # local import
    from svcmodels.registry import clear_manifest_cache

    prev = os.environ.get("SVCMODELS_CONFIG_DIR")
    prev_overrides = {
        k: v for k, v in os.environ.items() if k.startswith("SVCMODELS__")
    }
    clear_config_cache()
    clear_manifest_cache()
    try:
        yield
    finally:
        clear_config_cache()
        clear_manifest_cache()
        for k in [k for k in os.environ if k.startswith("SVCMODELS__")]:
            del os.environ[k]
        os.environ.update(prev_overrides)
        if prev is None:
            os.environ.pop("SVCMODELS_CONFIG_DIR", None)
        else:
            os.environ["SVCMODELS_CONFIG_DIR"] = prev


@pytest.fixture
def fixture_dir(tmp_path: Path) -> Path:
    """Descriptor directory with one msgpack and several JSON documents."""
    d = tmp_path / "api_provider_fixtures"
    d.mkdir()
    (d / "dynamodb-2010-02-04.api.msgpack").write_bytes(msgpack.packb([]))
    (d / "dynamodb-2012-08-10.api.json").write_text(
        json.dumps({"foo": "bar"}), encoding="utf-8"
    )
    (d / "dynamodb-2012-08-10.paginators.json").write_text(
        json.dumps({"abc": "123"}), encoding="utf-8"
    )
    (d / "dynamodb-2012-08-10.waiters2.json").write_text(
        json.dumps({"abc": "456"}), encoding="utf-8"
    )
    (d / "api-version-manifest.yaml").write_text(
        MANIFEST_YAML, encoding="utf-8"
    )
    return d


@pytest.fixture
def config_dir(tmp_path: Path):
    """Point SVCMODELS_CONFIG_DIR at an empty temp dir and return a writer."""
    from svcmodels.config import clear_config_cache

    cfg = tmp_path / "configs"
    cfg.mkdir()
    os.environ["SVCMODELS_CONFIG_DIR"] = str(cfg)
    clear_config_cache()

    def _write(yaml_text: str, name: str = "base.yaml") -> Path:
        (cfg / name).write_text(yaml_text, encoding="utf-8")
        clear_config_cache()
        return cfg

    return _write
