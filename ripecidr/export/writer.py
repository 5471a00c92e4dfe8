# ripecidr/export/writer.py

from __future__ import annotations
import gzip
from pathlib import Path
from typing import Union

import pandas as pd

from ripecidr.utils.logging import get_logger

log = get_logger(__name__)


PathLike = Union[str, Path]


def write_text(
    content: str,
    path: PathLike,
    compress: bool = False
) -> tuple[int, int]:
    """
    Write rendered output to a file, optionally with a gzip copy next to it.

    Returns:
        tuple of (original_size_bytes, written_size_bytes); the second value
        is the size of the .gz copy when compress is set.
    """
    out_path = Path(path).expanduser()
    out_path.parent.mkdir(parents=True, exist_ok=True)

    data = content.encode("utf-8")
    original_size = len(data)
    out_path.write_bytes(data)

    if compress:
        gz_path = out_path.with_suffix(out_path.suffix + ".gz")
        with gzip.open(gz_path, "wb", compresslevel=9) as f:
            f.write(data)
        compressed_size = gz_path.stat().st_size
        log.info(
            f"Wrote {out_path} ({original_size / 1024:.1f} KB) and "
            f"{gz_path.name} ({compressed_size / 1024:.1f} KB)"
        )
        return original_size, compressed_size

    log.info(f"Wrote {out_path} ({original_size / 1024:.1f} KB)")
    return original_size, original_size


def save_csv(df: pd.DataFrame, path: PathLike) -> Path:
    """Write the matched-range frame as CSV (no index column)."""
    out_path = Path(path).expanduser()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out_path, index=False)
    log.info("Wrote %d rows to %s", len(df), out_path)
    return out_path
