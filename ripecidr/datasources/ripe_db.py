# ripecidr/datasources/ripe_db.py
"""
Reader for the RIPE ``inetnum`` flat-file export.

The export is a sequence of objects separated by blank lines; each line of an
object is ``attribute-name: value``::

    inetnum:        193.0.0.0 - 193.0.7.255
    netname:        RIPE-NCC
    country:        NL

Only ``inetnum`` and ``country`` have meaning here. Every other attribute is
opaque text that is searched for keywords.
"""
from __future__ import annotations

import gzip
from pathlib import Path
from typing import IO, Iterable, Iterator, List, Union

from ripecidr.config import DB_ENCODING
from ripecidr.errors import DatabaseNotFoundError, MalformedRecordError
from ripecidr.models import AddressRange, Record, ip_to_int
from ripecidr.utils.logging import get_logger

log = get_logger(__name__)

PathLike = Union[str, Path]


def _build_record(lines: List[str]) -> Record:
    record = Record(lines=lines)
    for line in lines:
        key, sep, value = line.partition(":")
        if not sep:
            continue
        key = key.strip().lower()
        if not key:
            continue
        record.add(key, value.strip())
    return record


def iter_records(lines: Iterable[str]) -> Iterator[Record]:
    """
    Group a line stream into Records, one per blank-line-delimited block.

    Lazy: only the current block is held in memory.
    """
    buffer: List[str] = []
    for raw in lines:
        line = raw.rstrip("\r\n")
        if not line.strip():
            if buffer:
                yield _build_record(buffer)
                buffer = []
            continue
        buffer.append(line)
    if buffer:
        yield _build_record(buffer)


def parse_inetnum(value: str) -> AddressRange:
    """
    Parse an ``inetnum`` value of the form ``<startIP> - <endIP>``.

    Raises:
        MalformedRecordError: the value is not two dash-separated parts
        AddressParseError: an endpoint is not a dotted-quad IPv4 address
        InvalidRangeError: start is after end
    """
    parts = value.split("-")
    if len(parts) != 2:
        raise MalformedRecordError(f"inetnum is not a 'start - end' range: {value!r}")
    start_s, end_s = parts[0].strip(), parts[1].strip()
    if not start_s or not end_s:
        raise MalformedRecordError(f"inetnum has an empty endpoint: {value!r}")
    return AddressRange(ip_to_int(start_s), ip_to_int(end_s))


class RipeDbSource:
    """
    A local inetnum database file.

    The path is supplied by the caller; ``.gz`` files are decompressed on the
    fly. Each call to records() opens its own handle, so one source can be
    scanned repeatedly or concurrently.
    """

    def __init__(self, path: PathLike, encoding: str = DB_ENCODING):
        self.path = Path(path)
        self.encoding = encoding

    def open(self) -> IO[str]:
        if not self.path.exists():
            raise DatabaseNotFoundError(f"RIPE database not found: {self.path}")
        log.debug("Opening RIPE database %s", self.path)
        if self.path.suffix == ".gz":
            return gzip.open(self.path, "rt", encoding=self.encoding, errors="replace")
        return open(self.path, "r", encoding=self.encoding, errors="replace")

    def records(self) -> Iterator[Record]:
        with self.open() as fh:
            yield from iter_records(fh)

    def __repr__(self) -> str:
        return f"RipeDbSource({str(self.path)!r})"
