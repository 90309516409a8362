"""
Client Signal

Immutable snapshot of the request metadata the classifier inspects.
Built once per request from headers and the transport peer.
"""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple

from detection.addresses import normalize_ip, split_forwarded_for, strip_mapped_prefix


# Headers that reverse proxies and forward proxies add
PROXY_INDICATOR_HEADERS: Tuple[str, ...] = (
    "x-forwarded-for",
    "x-forwarded-host",
    "via",
    "x-real-ip",
    "forwarded",
    "x-forwarded-proto",
)


@dataclass(frozen=True)
class ClientSignal:
    """
    Per-request client metadata.

    ``socket_address`` is the peer with any ``::ffff:`` prefix removed;
    ``remote_addr`` is the peer exactly as the transport reported it.
    """

    ip: str
    user_agent: str = ""
    host: Optional[str] = None
    forwarded_for: Optional[str] = None
    forwarded_hops: Tuple[str, ...] = field(default_factory=tuple)
    proxy_headers: Tuple[str, ...] = field(default_factory=tuple)
    socket_address: str = ""
    remote_addr: Optional[str] = None

    @classmethod
    def from_request_metadata(
        cls,
        headers: Mapping[str, str],
        peer: Optional[str] = None,
    ) -> "ClientSignal":
        """
        Build a signal from raw request metadata.

        Args:
            headers: Request headers (any key casing)
            peer: Transport-level peer address, if known

        Returns:
            ClientSignal for the request
        """
        # Repeated header lines are equivalent to one comma-joined value
        lowered: Dict[str, str] = {}
        for name, value in headers.items():
            key = str(name).lower()
            lowered[key] = f"{lowered[key]}, {value}" if key in lowered else value

        forwarded_for = lowered.get("x-forwarded-for") or None

        return cls(
            ip=normalize_ip(forwarded_for, lowered.get("x-real-ip"), peer),
            user_agent=lowered.get("user-agent", ""),
            host=lowered.get("host") or None,
            forwarded_for=forwarded_for,
            forwarded_hops=tuple(split_forwarded_for(forwarded_for)),
            proxy_headers=tuple(h for h in PROXY_INDICATOR_HEADERS if lowered.get(h)),
            socket_address=strip_mapped_prefix(peer or ""),
            remote_addr=peer or None,
        )
