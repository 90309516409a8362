"""
Detection Verdict

Accumulates reason signals for one request and derives the
proxy/VPN booleans from them.

DESIGN RULES:
- Signals are append-only
- is_proxy / is_vpn are always derived, never assigned
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from detection.rules import Signal
from enrichment.providers import IpInfoResult


@dataclass
class DetectionVerdict:
    """Proxy/VPN verdict with supporting reasons."""
    signals: List[Signal] = field(default_factory=list)
    ipinfo: Optional[IpInfoResult] = None
    external_flag: Optional[str] = None
    note: str = ""

    def add(self, signal: Optional[Signal]) -> None:
        """Append a signal; None is ignored."""
        if signal is not None:
            self.signals.append(signal)

    @property
    def reasons(self) -> List[str]:
        return [s.tag for s in self.signals]

    @property
    def is_proxy(self) -> bool:
        return any(s.counts_as_proxy for s in self.signals)

    @property
    def is_vpn(self) -> bool:
        return any(s.counts_as_vpn for s in self.signals)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isProxy": self.is_proxy,
            "isVPN": self.is_vpn,
            "reasons": self.reasons,
            "ipinfo": self.ipinfo.to_dict() if self.ipinfo else None,
            "note": self.note,
        }
