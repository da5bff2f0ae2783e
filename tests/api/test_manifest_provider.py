from pathlib import Path

import pytest

from svcmodels.api import (
    NOT_FOUND,
    ManifestProvider,
    default_provider,
    get_service_versions,
    resolve,
)
from svcmodels.exceptions import (
    InvalidDirectoryError,
    InvalidDocumentTypeError,
    ManifestLoadError,
)
from svcmodels.registry import VersionManifest, load_manifest


def _provider(fixture_dir: Path) -> ManifestProvider:
    manifest = load_manifest(fixture_dir / "api-version-manifest.yaml")
    return ManifestProvider(manifest, fixture_dir)


def test_returns_not_found_for_missing_service(fixture_dir: Path):
    p = ManifestProvider(VersionManifest.from_mapping({}), fixture_dir)
    assert p("api", "foo", "2015-02-02") is NOT_FOUND


def test_can_load_data(fixture_dir: Path):
    data = _provider(fixture_dir)("api", "dynamodb", "latest")
    assert isinstance(data, dict)
    assert "foo" in data


def test_paginator_and_waiter_for_compatible_versions(fixture_dir: Path):
    p = _provider(fixture_dir)
    assert p("paginator", "dynamodb", "latest") == {"abc": "123"}
    assert p("paginator", "dynamodb", "2011-12-05") == {"abc": "123"}
    assert p("waiter", "dynamodb", "latest") == {"abc": "456"}
    assert p("waiter", "dynamodb", "2011-12-05") == {"abc": "456"}


def test_unknown_alias_is_not_found(fixture_dir: Path):
    p = _provider(fixture_dir)
    assert p("api", "dynamodb", "1999-01-01") is NOT_FOUND


def test_alias_resolution_is_transparent(fixture_dir: Path):
    p = _provider(fixture_dir)
    aliases = p.manifest.services["dynamodb"]
    for alias, concrete in aliases.items():
        assert resolve(p, "api", "dynamodb", alias) == resolve(
            p, "api", "dynamodb", concrete
        )


def test_throws_on_bad_type(fixture_dir: Path):
    p = _provider(fixture_dir)
    with pytest.raises(InvalidDocumentTypeError, match="Unknown type: foo"):
        p("foo", "dynamodb", "latest")
    # type is validated even when the manifest has no answer
    with pytest.raises(InvalidDocumentTypeError):
        p("foo", "s3", "latest")


def test_invalid_directory(fixture_dir: Path):
    with pytest.raises(InvalidDirectoryError):
        ManifestProvider(VersionManifest(), fixture_dir / "missing")


def test_from_directory_reads_local_manifest(fixture_dir: Path):
    p = ManifestProvider.from_directory(fixture_dir)
    assert p("api", "dynamodb", "latest") == {"foo": "bar"}
    assert p("api", "dynamodb", "2010-02-04") == []
    assert p.service_versions("dynamodb") == ["2012-08-10", "2010-02-04"]
    assert p.service_versions("foo") == []


def test_from_directory_requires_manifest(tmp_path: Path):
    with pytest.raises(ManifestLoadError):
        ManifestProvider.from_directory(tmp_path)


def test_default_provider_uses_bundled_data():
    p = default_provider()
    assert p.base_dir.name == "data"
    assert p("api", "foo", "latest") is NOT_FOUND
    assert get_service_versions("foo") == []


def test_default_provider_honors_configured_data_dir(
    fixture_dir: Path, config_dir
):
    config_dir(f"data:\n  data_dir: '{fixture_dir.as_posix()}'\n")
    p = default_provider()
    assert p.base_dir == fixture_dir
    assert resolve(p, "api", "dynamodb", "latest") == {"foo": "bar"}
    assert get_service_versions("dynamodb") == ["2012-08-10", "2010-02-04"]


def test_get_service_versions_with_explicit_manifest():
    manifest = VersionManifest.from_mapping(
        {"ec2": {"latest": "2014-10-01", "2014-09-01": "2014-10-01"}}
    )
    assert get_service_versions("ec2", manifest) == ["2014-10-01"]
