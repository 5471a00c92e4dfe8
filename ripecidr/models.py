# ripecidr/models.py
from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ripecidr.errors import AddressParseError, InvalidRangeError

MAX_IPV4 = 0xFFFFFFFF


def prefix_mask(prefix_len: int) -> int:
    """Integer netmask for a prefix length (0 -> 0, 32 -> 0xFFFFFFFF)."""
    if not 0 <= prefix_len <= 32:
        raise ValueError(f"prefix length out of range: {prefix_len}")
    if prefix_len == 0:
        return 0
    return (MAX_IPV4 << (32 - prefix_len)) & MAX_IPV4


def prefix_to_netmask(prefix_len: int) -> str:
    """Dotted-decimal netmask, e.g. 24 -> "255.255.255.0" (OpenVPN route syntax)."""
    return str(ipaddress.IPv4Address(prefix_mask(prefix_len)))


def int_to_ip(value: int) -> str:
    return str(ipaddress.IPv4Address(value))


def ip_to_int(text: str) -> int:
    """
    Parse a dotted-quad IPv4 literal into a host-order integer.

    Raises AddressParseError for anything else (IPv6, extra octets, garbage).
    """
    try:
        return int(ipaddress.IPv4Address(text.strip()))
    except ValueError as e:
        raise AddressParseError(f"invalid IPv4 address {text!r}: {e}") from e


@dataclass
class Record:
    """
    One blank-line-delimited block of the registry export.

    attributes maps lower-cased keys to every value seen, in file order.
    get() applies the last-occurrence-wins policy.
    """
    lines: List[str] = field(default_factory=list)
    attributes: Dict[str, List[str]] = field(default_factory=dict)

    def add(self, key: str, value: str) -> None:
        self.attributes.setdefault(key, []).append(value)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        values = self.attributes.get(key.lower())
        if not values:
            return default
        return values[-1]

    def get_all(self, key: str) -> List[str]:
        return list(self.attributes.get(key.lower(), []))

    def __contains__(self, key: str) -> bool:
        return key.lower() in self.attributes

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def country(self) -> Optional[str]:
        value = self.get("country")
        if not value:
            return None
        return value.split()[0].upper()


@dataclass(frozen=True)
class AddressRange:
    start: int
    end: int

    def __post_init__(self):
        if not (0 <= self.start <= MAX_IPV4 and 0 <= self.end <= MAX_IPV4):
            raise InvalidRangeError(f"range outside IPv4 space: {self.start}-{self.end}")
        if self.start > self.end:
            raise InvalidRangeError(
                f"range start {int_to_ip(self.start)} is after end {int_to_ip(self.end)}"
            )

    @property
    def size(self) -> int:
        return self.end - self.start + 1

    def __str__(self) -> str:
        return f"{int_to_ip(self.start)} - {int_to_ip(self.end)}"


@dataclass(frozen=True)
class CIDRBlock:
    """
    An aligned IPv4 network: base/prefix_len.

    Construction rejects a base with host bits set, so every instance in
    circulation is a valid network address.
    """
    base: int
    prefix_len: int

    def __post_init__(self):
        if not 0 <= self.prefix_len <= 32:
            raise ValueError(f"prefix length out of range: {self.prefix_len}")
        if not 0 <= self.base <= MAX_IPV4:
            raise ValueError(f"base address outside IPv4 space: {self.base}")
        if self.base & ~prefix_mask(self.prefix_len) & MAX_IPV4:
            raise ValueError(
                f"{int_to_ip(self.base)}/{self.prefix_len} has host bits set"
            )

    @classmethod
    def from_string(cls, text: str) -> "CIDRBlock":
        """Parse "a.b.c.d/n" (a bare address is a /32)."""
        try:
            net = ipaddress.IPv4Network(text.strip(), strict=True)
        except ValueError as e:
            raise AddressParseError(f"invalid IPv4 CIDR {text!r}: {e}") from e
        return cls(int(net.network_address), net.prefixlen)

    @property
    def netmask(self) -> int:
        return prefix_mask(self.prefix_len)

    @property
    def netmask_dotted(self) -> str:
        return prefix_to_netmask(self.prefix_len)

    @property
    def last(self) -> int:
        """Broadcast (last) address of the block."""
        return self.base | (~self.netmask & MAX_IPV4)

    @property
    def size(self) -> int:
        return 1 << (32 - self.prefix_len)

    @property
    def network_address(self) -> str:
        return int_to_ip(self.base)

    def contains(self, other: "CIDRBlock") -> bool:
        return self.base <= other.base and other.last <= self.last

    def __str__(self) -> str:
        return f"{self.network_address}/{self.prefix_len}"


@dataclass
class RangeRecord:
    """One matched inetnum range together with its exact CIDR decomposition."""
    inetnum: str             # "a.b.c.d - e.f.g.h" as written in the database
    start: int
    end: int
    country: Optional[str]   # two-letter code, upper-cased
    netname: Optional[str] = None
    descr: Optional[str] = None
    cidrs: List[CIDRBlock] = field(default_factory=list)

    @property
    def num_addresses(self) -> int:
        return self.end - self.start + 1
