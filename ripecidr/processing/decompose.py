# ripecidr/processing/decompose.py
"""
Exact conversion of an inclusive address range into CIDR blocks.

Each step takes the largest block that both starts exactly at ``start``
(limited by the alignment of ``start``) and does not run past ``end``
(limited by the remaining span). The result is the unique minimal list of
aligned blocks whose union is exactly ``[start, end]``.

A single block picked from the common prefix of ``start`` and ``end`` is not
equivalent: for ranges that are not themselves one aligned block it covers
addresses outside the range.
"""
from __future__ import annotations

from typing import List

from ripecidr.errors import InvalidRangeError
from ripecidr.models import MAX_IPV4, AddressRange, CIDRBlock, int_to_ip


def _trailing_zeros(value: int) -> int:
    if value == 0:
        return 32
    return (value & -value).bit_length() - 1


def decompose(start: int, end: int) -> List[CIDRBlock]:
    """
    Return the CIDR blocks covering exactly ``start..end``, in address order.

    Raises InvalidRangeError when start > end or either bound is outside
    the 32-bit address space.
    """
    if not (0 <= start <= MAX_IPV4 and 0 <= end <= MAX_IPV4):
        raise InvalidRangeError(f"range outside IPv4 space: {start}-{end}")
    if start > end:
        raise InvalidRangeError(
            f"range start {int_to_ip(start)} is after end {int_to_ip(end)}"
        )

    blocks: List[CIDRBlock] = []
    while start <= end:
        align = _trailing_zeros(start)
        max_span_bits = (end - start + 1).bit_length() - 1
        size_bits = min(align, max_span_bits)
        blocks.append(CIDRBlock(start, 32 - size_bits))
        # may step to 2**32 after the last block; the loop test ends it
        start += 1 << size_bits
    return blocks


def decompose_range(addr_range: AddressRange) -> List[CIDRBlock]:
    return decompose(addr_range.start, addr_range.end)
