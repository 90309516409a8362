"""
Address Helpers

Client IP normalization and private-range classification.

DESIGN RULES:
- Pure functions, no network calls
- Never raise (malformed input passes through as an opaque string)
- Textual matching only, no address parsing
"""

import re
from typing import List, Optional


UNKNOWN_IP = "unknown"

MAPPED_PREFIX = "::ffff:"

# RFC1918 + loopback, with the IPv4-mapped IPv6 prefix tolerated
_PRIVATE_RE = re.compile(
    r"^(::ffff:)?(?:10\.|172\.(1[6-9]|2\d|3[0-1])\.|192\.168\.|127\.|::1\b)",
    re.IGNORECASE,
)


def strip_mapped_prefix(address: str) -> str:
    """Remove a leading ``::ffff:`` from an address, if present."""
    if address[:len(MAPPED_PREFIX)].lower() == MAPPED_PREFIX:
        return address[len(MAPPED_PREFIX):]
    return address


def split_forwarded_for(value: Optional[str]) -> List[str]:
    """
    Split an X-Forwarded-For value into its hops.

    Entries are trimmed and empty entries dropped. The leftmost hop is
    the original client by convention.
    """
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def is_private(address: Optional[str]) -> bool:
    """
    Check whether an address is private (RFC1918) or loopback.

    Args:
        address: Address text, optionally ``::ffff:``-prefixed

    Returns:
        True on a textual match; False for empty or unmatched input
    """
    if not address:
        return False
    return _PRIVATE_RE.match(str(address)) is not None


def normalize_ip(
    forwarded_for: Optional[str],
    real_ip: Optional[str],
    peer: Optional[str],
) -> str:
    """
    Pick the client address for a request.

    Preference order: first X-Forwarded-For hop, X-Real-IP, transport
    peer, then the ``unknown`` sentinel. The chosen value has its
    ``::ffff:`` prefix stripped.
    """
    hops = split_forwarded_for(forwarded_for)
    for candidate in (hops[0] if hops else None, real_ip, peer):
        if candidate and candidate.strip():
            return strip_mapped_prefix(candidate.strip())
    return UNKNOWN_IP
