"""
Speed Rating

Maps handler execution time to a speed tier.

This measures in-process time only, not network round-trip.
"""

from dataclasses import dataclass
from typing import List, Optional

from rating.config import SPEED_TIERS, SpeedTier


@dataclass(frozen=True)
class SpeedRating:
    """Rating for one request."""
    level: str
    score: int
    emoji: str
    recommendation: str
    response_time_ms: int

    @property
    def response_time(self) -> str:
        return f"{self.response_time_ms}ms"


def select_tier(elapsed_ms: float, tiers: Optional[List[SpeedTier]] = None) -> SpeedTier:
    """
    Pick the first tier whose exclusive upper bound exceeds elapsed_ms.

    Deterministic and fast. Negative input lands in the fastest tier.
    """
    tiers = tiers or SPEED_TIERS
    for tier in tiers:
        if tier.upper_bound_ms is None or elapsed_ms < tier.upper_bound_ms:
            return tier
    return tiers[-1]


def rate_speed(elapsed_ms: float) -> SpeedRating:
    """
    Rate a response time.

    Args:
        elapsed_ms: Handler execution time in milliseconds

    Returns:
        SpeedRating with the tier's label, score, emoji and recommendation
    """
    tier = select_tier(elapsed_ms)
    return SpeedRating(
        level=tier.level,
        score=tier.score,
        emoji=tier.emoji,
        recommendation=tier.recommendation,
        response_time_ms=max(0, int(elapsed_ms)),
    )
