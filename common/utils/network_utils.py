"""Network helpers for announcing where screens and phones can reach the server."""

from __future__ import annotations

import logging
import socket
from typing import Optional
from urllib.parse import urlencode

import psutil

logger = logging.getLogger(__name__)

# Interface name prefixes that phones on the same WiFi cannot reach
VIRTUAL_INTERFACE_PREFIXES = (
    "bridge",
    "docker",
    "veth",
    "vmnet",
    "vboxnet",
    "virbr",
    "tun",
    "tap",
    "utun",
    "vnic",
    "ppp",
)


def get_lan_address() -> Optional[str]:
    """Return the first non-virtual, non-loopback IPv4 address, if any.

    Link-local (169.254.x.x) addresses are skipped as well since a phone
    will never be able to reach them.
    """
    try:
        interfaces = psutil.net_if_addrs()
    except OSError as e:
        logger.warning("lan_address_lookup_failed error=%s", e)
        return None

    for interface_name, addresses in interfaces.items():
        if interface_name.lower().startswith(VIRTUAL_INTERFACE_PREFIXES):
            continue
        for address in addresses:
            if address.family != socket.AF_INET:
                continue
            ip = address.address
            if ip.startswith("127.") or ip.startswith("169.254."):
                continue
            return ip
    return None


def build_join_url(base_url: str, remote_path: str, room_id: str) -> str:
    """Build the link a phone opens to join ``room_id`` as a remote."""

    path = "/" + remote_path.lstrip("/")
    return f"{base_url.rstrip('/')}{path}?{urlencode({'room': room_id})}"
