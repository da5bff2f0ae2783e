"""Precompile JSON descriptors of a data directory into msgpack files.

Usage: python scripts/compile_descriptors.py [DATA_DIR] [--force]
DATA_DIR defaults to the configured data directory.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure project root on path when executed directly
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from svcmodels.api import compile_directory  # noqa: E402
from svcmodels.config import default_data_dir  # noqa: E402
from svcmodels.exceptions import DescriptorError  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    ap.add_argument("data_dir", nargs="?", default=None)
    ap.add_argument(
        "--force", action="store_true", help="rewrite up-to-date msgpack files"
    )
    args = ap.parse_args(argv)
    data_dir = args.data_dir or default_data_dir()
    try:
        written = compile_directory(data_dir, overwrite=args.force)
    except DescriptorError as e:
        print(f"[compile] error: {e}", file=sys.stderr)
        return 1
    for path in written:
        print(f"[compile] wrote {path}")
    print(f"[compile] {len(written)} file(s) in {data_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
