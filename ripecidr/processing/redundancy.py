# ripecidr/processing/redundancy.py
from __future__ import annotations

from typing import Iterable, List, Optional, Set, Tuple, Union

from ripecidr.models import CIDRBlock, prefix_mask
from ripecidr.utils.logging import get_logger

log = get_logger(__name__)

BlockLike = Union[CIDRBlock, str]

# (removed block, reason, covering block or None)
Removed = Tuple[CIDRBlock, str, Optional[CIDRBlock]]

REASON_DUPLICATE = "duplicate"
REASON_COVERED = "covered"


def _as_block(item: BlockLike) -> CIDRBlock:
    if isinstance(item, CIDRBlock):
        return item
    return CIDRBlock.from_string(item)


def sort_key(block: CIDRBlock) -> Tuple[int, int]:
    """Address order; for equal bases the wider block first."""
    return (block.base, block.prefix_len)


def sort_blocks(blocks: Iterable[CIDRBlock]) -> List[CIDRBlock]:
    return sorted(blocks, key=sort_key)


def dedupe(blocks: Iterable[BlockLike]) -> List[CIDRBlock]:
    """Drop exact duplicates, keeping the first occurrence and input order."""
    seen: Set[CIDRBlock] = set()
    result: List[CIDRBlock] = []
    for item in blocks:
        block = _as_block(item)
        if block in seen:
            continue
        seen.add(block)
        result.append(block)
    return result


def filter_redundant_report(blocks: Iterable[BlockLike]) -> Tuple[List[CIDRBlock], List[Removed]]:
    """
    Remove duplicates and blocks nested inside another block.

    Candidates are visited widest prefix first (then by address), so every
    possible container is already in the kept set when a block is checked.
    A kept block contains the candidate iff it is the candidate's supernet at
    its own prefix length, which turns the containment scan into at most 32
    set lookups per candidate.

    Returns:
        (kept blocks sorted by address, removed entries with reasons)
    """
    removed: List[Removed] = []
    seen: Set[CIDRBlock] = set()
    uniques: List[CIDRBlock] = []
    for item in blocks:
        block = _as_block(item)
        if block in seen:
            removed.append((block, REASON_DUPLICATE, block))
            continue
        seen.add(block)
        uniques.append(block)

    uniques.sort(key=lambda b: (b.prefix_len, b.base))

    kept: List[CIDRBlock] = []
    kept_by_prefix: List[Set[int]] = [set() for _ in range(33)]
    for block in uniques:
        covered_by = None
        for p in range(block.prefix_len - 1, -1, -1):
            super_base = block.base & prefix_mask(p)
            if super_base in kept_by_prefix[p]:
                covered_by = CIDRBlock(super_base, p)
                break
        if covered_by is not None:
            log.debug("Filtered out redundant CIDR %s (contained in %s)", block, covered_by)
            removed.append((block, REASON_COVERED, covered_by))
            continue
        kept.append(block)
        kept_by_prefix[block.prefix_len].add(block.base)

    return sort_blocks(kept), removed


def filter_redundant(blocks: Iterable[BlockLike]) -> List[CIDRBlock]:
    kept, _ = filter_redundant_report(blocks)
    return kept
