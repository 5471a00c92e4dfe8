import pytest

from ripecidr.errors import AddressParseError, InvalidRangeError
from ripecidr.models import AddressRange, CIDRBlock, ip_to_int, prefix_mask, prefix_to_netmask


@pytest.mark.parametrize(
    "prefix_len, expected",
    [(0, "0.0.0.0"), (1, "128.0.0.0"), (8, "255.0.0.0"), (23, "255.255.254.0"), (24, "255.255.255.0"), (32, "255.255.255.255")],
)
def test_prefix_to_netmask(prefix_len, expected):
    assert prefix_to_netmask(prefix_len) == expected


def test_prefix_mask_bounds():
    with pytest.raises(ValueError):
        prefix_mask(33)
    with pytest.raises(ValueError):
        prefix_mask(-1)


def test_block_properties():
    block = CIDRBlock.from_string("192.168.4.0/22")
    assert block.network_address == "192.168.4.0"
    assert block.netmask_dotted == "255.255.252.0"
    assert block.last == ip_to_int("192.168.7.255")
    assert block.size == 1024
    assert str(block) == "192.168.4.0/22"


def test_bare_address_is_host_block():
    assert CIDRBlock.from_string("8.8.8.8") == CIDRBlock(ip_to_int("8.8.8.8"), 32)


def test_unaligned_block_is_rejected():
    with pytest.raises(ValueError):
        CIDRBlock(ip_to_int("10.0.0.1"), 24)
    with pytest.raises(AddressParseError):
        CIDRBlock.from_string("10.0.0.1/24")


def test_block_rejects_bad_prefix():
    with pytest.raises(ValueError):
        CIDRBlock(0, 33)


def test_contains():
    outer = CIDRBlock.from_string("10.0.0.0/8")
    inner = CIDRBlock.from_string("10.20.0.0/16")
    other = CIDRBlock.from_string("11.0.0.0/16")
    assert outer.contains(inner)
    assert outer.contains(outer)
    assert not inner.contains(outer)
    assert not outer.contains(other)


def test_blocks_are_hashable_values():
    assert len({CIDRBlock.from_string("10.0.0.0/8"), CIDRBlock(10 << 24, 8)}) == 1


def test_ipv6_literal_is_rejected():
    with pytest.raises(AddressParseError):
        ip_to_int("2001:db8::1")


def test_address_range():
    r = AddressRange(ip_to_int("10.0.0.0"), ip_to_int("10.0.0.255"))
    assert r.size == 256
    assert str(r) == "10.0.0.0 - 10.0.0.255"
    with pytest.raises(InvalidRangeError):
        AddressRange(5, 4)
