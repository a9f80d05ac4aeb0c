"""Tests for LAN address discovery and join link building."""

import socket
from types import SimpleNamespace

from common.utils import network_utils
from common.utils.network_utils import build_join_url, get_lan_address


def _addr(ip, family=socket.AF_INET):
    return SimpleNamespace(family=family, address=ip)


def test_build_join_url_normalises_slashes():
    assert build_join_url('http://10.0.0.5:3001/', 'remote', 'room42') == \
        'http://10.0.0.5:3001/remote?room=room42'
    assert build_join_url('http://10.0.0.5:3001', '/remote', 'a&b') == \
        'http://10.0.0.5:3001/remote?room=a%26b'


def test_lan_address_skips_loopback_and_virtual(monkeypatch):
    interfaces = {
        'lo': [_addr('127.0.0.1')],
        'docker0': [_addr('172.17.0.1')],
        'wlan0': [_addr('fe80::1', socket.AF_INET6), _addr('169.254.3.3'), _addr('192.168.1.20')],
    }
    monkeypatch.setattr(network_utils.psutil, 'net_if_addrs', lambda: interfaces)

    assert get_lan_address() == '192.168.1.20'


def test_lan_address_none_when_only_loopback(monkeypatch):
    monkeypatch.setattr(network_utils.psutil, 'net_if_addrs',
                        lambda: {'lo': [_addr('127.0.0.1')]})

    assert get_lan_address() is None
