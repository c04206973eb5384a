"""Unit tests for submitter provenance"""

from __future__ import annotations

from pasteq.pastes.provenance import compact_suffix, derive_provenance
from pasteq.pastes.types import ConnectionInfo


def test_plain_remote_address():
    result = derive_provenance(ConnectionInfo(remote_addr="203.0.113.7"), False)

    assert result.origin == "203.0.113.7"
    assert result.sender == "Remote IP: 203.0.113.7"


def test_loopback_omitted_from_sender():
    result = derive_provenance(ConnectionInfo(remote_addr="127.0.0.1"), False)

    assert result.origin == "127.0.0.1"
    assert result.sender == "Unknown"


def test_forwarded_for_recorded_but_not_trusted():
    connection = ConnectionInfo(remote_addr="10.0.0.2", forwarded_for=("198.51.100.1",))

    result = derive_provenance(connection, trust_forwarded_for=False)

    assert result.origin == "10.0.0.2"
    assert result.sender == "Remote IP: 10.0.0.2, X-Forwarded-For: 198.51.100.1"


def test_trusted_forwarded_for_becomes_origin():
    connection = ConnectionInfo(
        remote_addr="127.0.0.1", forwarded_for=("198.51.100.1", "198.51.100.2")
    )

    result = derive_provenance(connection, trust_forwarded_for=True)

    assert result.origin == "198.51.100.1 / 198.51.100.2"
    assert result.sender == "X-Forwarded-For: 198.51.100.1 / 198.51.100.2"


def test_remote_addr_header_listed():
    connection = ConnectionInfo(remote_addr="127.0.0.1", remote_addr_header=("192.0.2.9",))

    assert derive_provenance(connection, False).sender == "REMOTE_ADDR: 192.0.2.9"


def test_compact_suffix():
    assert compact_suffix(False, False) == ""
    assert compact_suffix(True, False) == ", response=micro"
    assert compact_suffix(True, True) == ", response=microv2"
