# ripecidr/export/formats.py
"""
Text renderers for the final CIDR list.

All renderers take blocks already deduplicated and sorted by the pipeline and
return the full file content, newline-terminated.
"""
from __future__ import annotations

from typing import Iterable, List

from ripecidr.models import CIDRBlock


def _join(lines: List[str]) -> str:
    return "\n".join(lines) + "\n"


def render_bind_acl(name: str, blocks: Iterable[CIDRBlock]) -> str:
    """
    BIND ``acl`` statement::

        acl "RU" {
          1.2.3.0/24;
        };
    """
    entries = [f"  {b};" for b in blocks]
    return f'acl "{name}" {{\n' + "\n".join(entries) + "\n};\n"


def openvpn_route(block: CIDRBlock, push: bool = False) -> str:
    route = f"route {block.network_address} {block.netmask_dotted} net_gateway"
    if push:
        return f'push "{route}"'
    return route


def render_openvpn(
        blocks: Iterable[CIDRBlock],
        country: str,
        push: bool = False,
        filtered: bool = False,
) -> str:
    """
    OpenVPN config fragment sending all traffic through the tunnel except the
    given networks, which are routed via the local gateway.

    push=True wraps each route in a server-side ``push "..."`` directive.
    """
    header = f"# Exclude {country.upper()} IPs from VPN"
    if filtered:
        header += " (FILTERED)"
    redirect = 'push "redirect-gateway def1"' if push else "redirect-gateway def1"
    lines = [
        "# Redirect all traffic through VPN",
        redirect,
        "",
        header,
    ]
    lines.extend(openvpn_route(b, push=push) for b in blocks)
    return _join(lines)


def render_nginx_allow(blocks: Iterable[CIDRBlock]) -> str:
    return _join([f"allow {b};" for b in blocks])


def render_testcookie(blocks: Iterable[CIDRBlock]) -> str:
    # testcookie_whitelist { ... } body entries
    return _join([f"{b};" for b in blocks])


def render_plain(blocks: Iterable[CIDRBlock]) -> str:
    return _join([str(b) for b in blocks])
