"""
Submitter provenance.

`origin` is what the rate limiter keys on: the socket address, or the
X-Forwarded-For chain when the deployment says the proxy can be trusted.
`sender` is the human-readable record stored on the paste and always lists
every address source that was seen.
"""

from __future__ import annotations

from pasteq.pastes.types import ConnectionInfo, Provenance

LOOPBACK_ORIGINS = frozenset({"127.0.0.1", "::1", "[::1]"})


def derive_provenance(connection: ConnectionInfo, trust_forwarded_for: bool) -> Provenance:
    origin = connection.remote_addr or "unknown"
    parts: list[str] = []

    if origin not in LOOPBACK_ORIGINS:
        parts.append(f"Remote IP: {origin}")

    if connection.forwarded_for:
        forwarded = " / ".join(connection.forwarded_for)
        parts.append(f"X-Forwarded-For: {forwarded}")
        if trust_forwarded_for:
            origin = forwarded

    if connection.remote_addr_header:
        parts.append("REMOTE_ADDR: " + " / ".join(connection.remote_addr_header))

    sender = ", ".join(parts) or "Unknown"
    return Provenance(origin=origin, sender=sender)


def compact_suffix(compact: bool, compact_v2: bool) -> str:
    """Marker appended to `sender` for compact-response submissions."""
    if not compact:
        return ""
    return ", response=microv2" if compact_v2 else ", response=micro"
