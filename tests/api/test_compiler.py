import json
import os
from pathlib import Path

import pytest

from svcmodels.api import (
    FilesystemProvider,
    compile_directory,
    compile_document,
)
from svcmodels.exceptions import ParseError


def test_compile_directory_writes_msgpack_siblings(fixture_dir: Path):
    written = compile_directory(fixture_dir)
    names = sorted(p.name for p in written)
    assert names == [
        "dynamodb-2012-08-10.api.msgpack",
        "dynamodb-2012-08-10.paginators.msgpack",
        "dynamodb-2012-08-10.waiters2.msgpack",
    ]
    # manifest and non-descriptor files are left alone
    assert not (fixture_dir / "api-version-manifest.msgpack").exists()


def test_loader_prefers_compiled_file(fixture_dir: Path):
    src = fixture_dir / "dynamodb-2012-08-10.api.json"
    compile_document(src)
    # JSON changes after compile are shadowed by the msgpack fast path
    src.write_text(json.dumps({"foo": "changed"}), encoding="utf-8")
    p = FilesystemProvider(fixture_dir)
    assert p("api", "dynamodb", "2012-08-10") == {"foo": "bar"}


def test_up_to_date_files_are_skipped(fixture_dir: Path):
    assert compile_directory(fixture_dir)
    assert compile_directory(fixture_dir) == []
    assert len(compile_directory(fixture_dir, overwrite=True)) == 3


def test_stale_msgpack_is_recompiled(fixture_dir: Path):
    compile_directory(fixture_dir)
    src = fixture_dir / "dynamodb-2012-08-10.api.json"
    target = fixture_dir / "dynamodb-2012-08-10.api.msgpack"
    stat = target.stat()
    os.utime(src, (stat.st_atime + 10, stat.st_mtime + 10))
    assert compile_directory(fixture_dir) == [target]


def test_invalid_json_raises(tmp_path: Path):
    bad = tmp_path / "svc-2020-01-01.api.json"
    bad.write_text("foo, bar", encoding="utf-8")
    with pytest.raises(ParseError):
        compile_directory(tmp_path)


def test_compile_script(fixture_dir: Path, capsys):
    import importlib.util

    script = Path(__file__).resolve().parents[2] / "scripts" / (
        "compile_descriptors.py"
    )
    spec = importlib.util.spec_from_file_location("compile_script", script)
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    assert mod.main([str(fixture_dir)]) == 0
    assert "3 file(s)" in capsys.readouterr().out
    assert mod.main([str(fixture_dir / "missing")]) == 1
