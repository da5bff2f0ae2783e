import os
from pathlib import Path

import pytest

from svcmodels import metrics
from svcmodels.config import (
    ConfigError,
    as_dict,
    default_data_dir,
    default_manifest_path,
    get_config,
)
from svcmodels.config.loader import PACKAGE_DATA_DIR


def test_defaults_without_config_files(config_dir):
    cfg = get_config()
    assert cfg.schema_version == 1
    assert cfg.data.data_dir is None
    assert cfg.loader.formats == ["msgpack", "json"]
    assert default_data_dir() == PACKAGE_DATA_DIR
    assert default_manifest_path() == (
        PACKAGE_DATA_DIR / "api-version-manifest.yaml"
    )


def test_valid_load_with_overrides(config_dir, tmp_path: Path):
    config_dir(
        "schema_version: 1\n"
        "data:\n"
        "  data_dir: /srv/models/\n"
        "  manifest_file: manifest.json\n"
    )
    config_dir("loader:\n  formats: [json]\n", name="overrides.local.yaml")
    cfg = get_config()
    assert cfg.data.data_dir == "/srv/models"
    assert cfg.data.manifest_file == "manifest.json"
    assert cfg.loader.formats == ["json"]
    assert default_manifest_path() == Path("/srv/models/manifest.json")


def test_invalid_key_rejected(config_dir):
    config_dir("data:\n  unknown_field: 123\n")
    with pytest.raises(ConfigError):
        get_config()


def test_unknown_section_rejected(config_dir):
    config_dir("schema_version: 1\nllm: {}\n")
    with pytest.raises(ConfigError):
        get_config()


@pytest.mark.parametrize(
    "formats", ["[yaml]", "[]", "[json, json]"]
)
def test_invalid_formats_rejected(config_dir, formats: str):
    config_dir(f"loader:\n  formats: {formats}\n")
    with pytest.raises(ConfigError):
        get_config()


def test_manifest_file_must_be_bare_name(config_dir):
    metrics.reset_for_tests()
    config_dir("data:\n  manifest_file: sub/manifest.yaml\n")
    with pytest.raises(ConfigError, match="config-out-of-range"):
        get_config()
    assert metrics.get_counter(
        "config_validation_errors_total",
        {"path": "data.manifest_file", "code": "config-out-of-range"},
    ) == 1


def test_legacy_migration(config_dir, capsys):
    config_dir("data_dir: /legacy/models\n")
    cfg = get_config()
    assert cfg.schema_version == 1
    assert cfg.data.data_dir == "/legacy/models"
    assert "[config-migration]" in capsys.readouterr().out


def test_env_override_metric_and_logging(config_dir, capsys):
    metrics.reset_for_tests()
    os.environ["SVCMODELS__LOADER__FORMATS"] = "json,msgpack"
    cfg = as_dict()
    assert cfg["loader"]["formats"] == ["json", "msgpack"]
    counters = metrics.snapshot()["counters"]
    assert "env_override_total{path=loader.formats}" in counters
    out = capsys.readouterr().out
    assert "config-env-override" in out
    assert "path=loader.formats" in out


def test_env_beats_files(config_dir):
    config_dir("data:\n  data_dir: /from/file\n")
    os.environ["SVCMODELS__DATA__DATA_DIR"] = "/from/env"
    assert get_config().data.data_dir == "/from/env"


def test_config_is_memoized(config_dir):
    assert get_config() is get_config()
