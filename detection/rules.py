"""
Detection Rules

Declarative heuristics that turn request metadata and lookup results
into reason signals.

DESIGN RULES:
- Each rule yields zero or one Signal
- Rules are independent of each other
- Only the Signal flags feed the verdict booleans
- Header presence alone is informational, never a proxy signal
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from detection.addresses import is_private, strip_mapped_prefix
from detection.signals import ClientSignal


NO_IP_TAG = "no-ip"
XFF_MULTIPLE_TAG = "xff-multiple"
XFF_PRIVATE_TO_PUBLIC_TAG = "xff-private-to-public"
SCRIPTED_UA_TAG = "scripted-ua"
PROXY_HEADERS_PREFIX = "proxy-headers:"
PROXYCHECK_PREFIX = "proxycheck:"
HOSTING_PROVIDER_PREFIX = "hosting-provider:"

# User-Agent substrings of scripted HTTP clients (matched lowercase)
SCRIPTED_UA_MARKERS: Tuple[str, ...] = (
    "curl",
    "wget",
    "python-requests",
    "httpclient",
    "postman",
    "libhttp",
    "okhttp",
    "node-fetch",
)

# Organization substrings of well-known hosting networks (matched lowercase)
HOSTING_PROVIDERS: Tuple[str, ...] = (
    "amazon",
    "aws",
    "digitalocean",
    "linode",
    "google",
    "google cloud",
    "microsoft",
    "azure",
    "hetzner",
    "ovh",
    "cloudflare",
    "vultr",
    "dreamhost",
)


@dataclass(frozen=True)
class Signal:
    """A single reason tag and what it contributes to the verdict."""
    tag: str
    counts_as_proxy: bool = False
    counts_as_vpn: bool = False


@dataclass(frozen=True)
class HeaderRule:
    """Definition of a single header heuristic."""
    name: str
    description: str
    evaluate: Callable[[ClientSignal], Optional[Signal]]


def _xff_multiple(client: ClientSignal) -> Optional[Signal]:
    if len(client.forwarded_hops) > 1:
        return Signal(XFF_MULTIPLE_TAG, counts_as_proxy=True)
    return None


def _xff_private_to_public(client: ClientSignal) -> Optional[Signal]:
    # A lone private hop is the home-NAT case: first == last, never matches
    if not client.forwarded_hops:
        return None
    first = strip_mapped_prefix(client.forwarded_hops[0])
    last = strip_mapped_prefix(client.forwarded_hops[-1])
    if is_private(first) and not is_private(last):
        return Signal(XFF_PRIVATE_TO_PUBLIC_TAG, counts_as_proxy=True)
    return None


def _scripted_user_agent(client: ClientSignal) -> Optional[Signal]:
    ua = (client.user_agent or "").lower()
    if ua and any(marker in ua for marker in SCRIPTED_UA_MARKERS):
        return Signal(SCRIPTED_UA_TAG)
    return None


def _proxy_headers_present(client: ClientSignal) -> Optional[Signal]:
    if client.proxy_headers:
        return Signal(PROXY_HEADERS_PREFIX + ",".join(client.proxy_headers))
    return None


# Evaluated in order; order is the order tags appear in the response
HEADER_RULES: List[HeaderRule] = [
    HeaderRule(
        name="xff_multiple",
        description="Forwarded-for chain has more than one hop",
        evaluate=_xff_multiple,
    ),
    HeaderRule(
        name="xff_private_to_public",
        description="Forwarded-for chain starts private and ends public",
        evaluate=_xff_private_to_public,
    ),
    HeaderRule(
        name="scripted_ua",
        description="User-Agent belongs to a scripted HTTP client",
        evaluate=_scripted_user_agent,
    ),
    HeaderRule(
        name="proxy_headers",
        description="Proxy-indicator headers are present (informational)",
        evaluate=_proxy_headers_present,
    ),
]


def evaluate_header_rules(
    client: ClientSignal,
    rules: Optional[List[HeaderRule]] = None,
) -> List[Signal]:
    """
    Run the header heuristics against a client signal.

    Args:
        client: Request metadata snapshot
        rules: Rule list (uses HEADER_RULES if not provided)

    Returns:
        Signals in rule order
    """
    signals: List[Signal] = []
    for rule in rules if rules is not None else HEADER_RULES:
        signal = rule.evaluate(client)
        if signal is not None:
            signals.append(signal)
    return signals


def proxycheck_signal(is_proxy: bool, proxy_type: Optional[str]) -> Optional[Signal]:
    """Signal for a proxy/VPN lookup result, or None when not flagged."""
    if not is_proxy:
        return None
    tag = PROXYCHECK_PREFIX + ((proxy_type or "").upper() or "proxy")
    return Signal(tag, counts_as_proxy=True, counts_as_vpn="vpn" in tag.lower())


def hosting_provider_signal(org: Optional[str]) -> Optional[Signal]:
    """Signal for an organization that belongs to a hosting network."""
    if not org:
        return None
    lowered = org.lower()
    if any(provider in lowered for provider in HOSTING_PROVIDERS):
        return Signal(HOSTING_PROVIDER_PREFIX + org, counts_as_proxy=True)
    return None
