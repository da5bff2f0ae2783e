"""Precompile JSON descriptors into the msgpack fast-path format.

For every ``{service}-{version}.{category}.json`` in a directory a sibling
``.msgpack`` is written; the document loader prefers it on later loads.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import List

import msgpack

from svcmodels.exceptions import ParseError
from ._dirs import check_dir
from .types import DocumentType

_CATEGORIES = tuple(t.category for t in DocumentType)
COMPILED_SUFFIX = ".msgpack"


def is_descriptor_file(path: Path) -> bool:
    parts = path.name.split(".")
    return len(parts) == 3 and parts[1] in _CATEGORIES


def compile_document(json_path: str | Path) -> Path:
    json_path = Path(json_path)
    try:
        data = json.loads(json_path.read_bytes().decode("utf-8"))
    except ValueError as e:
        raise ParseError(
            f"Unable to parse {json_path}: {e}", path=json_path
        ) from e
    target = json_path.with_suffix(COMPILED_SUFFIX)
    tmp = target.with_name(target.name + ".tmp")
    tmp.write_bytes(msgpack.packb(data, use_bin_type=True))
    tmp.replace(target)
    return target


def compile_directory(
    base_dir: str | Path, overwrite: bool = False
) -> List[Path]:
    """Compile all JSON descriptors; returns the written msgpack paths.

    Existing msgpack files newer than their JSON source are kept unless
    ``overwrite`` is set.
    """
    root = check_dir(base_dir)
    written: List[Path] = []
    for src in sorted(root.glob("*.json")):
        if not src.is_file() or not is_descriptor_file(src):
            continue
        target = src.with_suffix(COMPILED_SUFFIX)
        if (
            not overwrite
            and target.exists()
            and target.stat().st_mtime >= src.stat().st_mtime
        ):
            continue
        written.append(compile_document(src))
    return written
