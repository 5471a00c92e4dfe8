# ripecidr/processing/pipeline.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from ripecidr.errors import AddressParseError, InvalidRangeError, MalformedRecordError
from ripecidr.datasources.ripe_db import parse_inetnum
from ripecidr.models import CIDRBlock, RangeRecord, Record
from ripecidr.processing.decompose import decompose_range
from ripecidr.processing.match import Matcher
from ripecidr.processing.redundancy import Removed, dedupe, filter_redundant_report, sort_blocks
from ripecidr.utils.logging import get_logger

log = get_logger(__name__)


@dataclass
class QueryResult:
    blocks: List[CIDRBlock] = field(default_factory=list)
    ranges: List[RangeRecord] = field(default_factory=list)
    removed: List[Removed] = field(default_factory=list)
    records_seen: int = 0
    records_matched: int = 0
    ranges_discarded: int = 0
    blocks_raw: int = 0

    @property
    def cidrs(self) -> List[str]:
        return [str(b) for b in self.blocks]

    @property
    def blocks_removed(self) -> int:
        return len(self.removed)


def record_to_range(record: Record) -> Optional[RangeRecord]:
    """
    Decompose the record's inetnum, or return None when it yields nothing.

    Blocks without a usable inetnum are skipped quietly; unparsable addresses
    and inverted ranges are skipped with a warning.
    """
    inetnum = record.get("inetnum")
    if not inetnum:
        return None
    try:
        addr_range = parse_inetnum(inetnum)
    except MalformedRecordError as e:
        log.debug("Skipping block: %s", e)
        return None
    except (AddressParseError, InvalidRangeError) as e:
        log.warning("Discarding inetnum %r: %s", inetnum, e)
        return None

    blocks = decompose_range(addr_range)
    log.debug("Found inetnum %s -> %s", addr_range, ", ".join(str(b) for b in blocks))
    return RangeRecord(
        inetnum=inetnum,
        start=addr_range.start,
        end=addr_range.end,
        country=record.country,
        netname=record.get("netname"),
        descr=record.get("descr"),
        cidrs=blocks,
    )


def run_query(
        records: Iterable[Record],
        country: Optional[str] = None,
        keywords: Optional[Sequence[str]] = None,
        filtered: bool = True,
) -> QueryResult:
    """
    Stream records through match -> decompose -> dedupe (-> nested filter).

    With filtered=False only exact duplicates are dropped, matching the
    unfiltered ACL and route outputs.
    """
    matcher = Matcher(country, keywords)
    log.info("Scanning records (%s)", matcher.describe())

    result = QueryResult()
    raw: List[CIDRBlock] = []
    for record in records:
        result.records_seen += 1
        if "inetnum" not in record or not matcher(record):
            continue
        result.records_matched += 1
        rr = record_to_range(record)
        if rr is None:
            result.ranges_discarded += 1
            continue
        result.ranges.append(rr)
        raw.extend(rr.cidrs)

    result.blocks_raw = len(raw)
    if filtered:
        result.blocks, result.removed = filter_redundant_report(raw)
    else:
        result.blocks = sort_blocks(dedupe(raw))
        result.removed = []

    log.info(
        "Scanned %d records, matched %d, discarded %d; %d CIDR blocks (%d raw)",
        result.records_seen,
        result.records_matched,
        result.ranges_discarded,
        len(result.blocks),
        result.blocks_raw,
    )
    return result
