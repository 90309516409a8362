"""
Request Classifier

Composes the proxy/VPN verdict for one request.

FLOW:
ClientSignal → header rules → proxy/VPN lookup → org lookup → DetectionVerdict

GUARANTEES:
- Lookups run sequentially, each at most once per request
- A failed lookup contributes nothing and never raises
- An unknown client address skips everything except the no-ip tag
"""

import logging
from typing import List, Optional

from detection.addresses import UNKNOWN_IP
from detection.rules import (
    HEADER_RULES,
    NO_IP_TAG,
    HeaderRule,
    Signal,
    evaluate_header_rules,
    hosting_provider_signal,
    proxycheck_signal,
)
from detection.signals import ClientSignal
from detection.verdict import DetectionVerdict
from enrichment.providers import IpInfoProvider, ProxyCheckProvider


logger = logging.getLogger(__name__)

NOTE_IPINFO_USED = "ipinfo used"
NOTE_IPINFO_MISSING = "set IPINFO_TOKEN to check ASN/org"


class RequestClassifier:
    """
    Entry point for proxy/VPN detection.

    Providers are optional: without them the classifier runs on header
    heuristics alone.
    """

    def __init__(
        self,
        proxycheck: Optional[ProxyCheckProvider] = None,
        ipinfo: Optional[IpInfoProvider] = None,
        rules: Optional[List[HeaderRule]] = None,
    ):
        """
        Args:
            proxycheck: Proxy/VPN lookup (None disables it)
            ipinfo: Organization lookup (None when no token is configured)
            rules: Header rules (uses HEADER_RULES if not provided)
        """
        self._proxycheck = proxycheck
        self._ipinfo = ipinfo
        self._rules = rules if rules is not None else HEADER_RULES

    @property
    def note(self) -> str:
        return NOTE_IPINFO_USED if self._ipinfo is not None else NOTE_IPINFO_MISSING

    async def classify(self, client: ClientSignal) -> DetectionVerdict:
        """
        Build the verdict for a client.

        Args:
            client: Request metadata snapshot

        Returns:
            DetectionVerdict with reasons in evaluation order
        """
        verdict = DetectionVerdict(note=self.note)

        if not client.ip or client.ip == UNKNOWN_IP:
            verdict.add(Signal(NO_IP_TAG))
            return verdict

        for signal in evaluate_header_rules(client, self._rules):
            verdict.add(signal)

        if self._proxycheck is not None:
            result = await self._proxycheck.lookup(client.ip)
            if result is not None:
                signal = proxycheck_signal(result.is_proxy, result.type)
                if signal is not None:
                    verdict.add(signal)
                    verdict.external_flag = signal.tag

        if self._ipinfo is not None:
            info = await self._ipinfo.lookup(client.ip)
            if info is not None:
                verdict.ipinfo = info
                verdict.add(hosting_provider_signal(info.org))

        logger.debug(
            "[%s] proxy=%s vpn=%s reasons=%s",
            client.ip, verdict.is_proxy, verdict.is_vpn, verdict.reasons,
        )
        return verdict
