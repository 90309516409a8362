"""
Speed Tier Configuration

Tier definitions, ordered fastest first.
"""

from dataclasses import dataclass
from typing import List, Optional

@dataclass(frozen=True)
class SpeedTier:
    """A speed tier; upper_bound_ms is exclusive, None means unbounded."""
    level: str
    score: int
    emoji: str
    recommendation: str
    upper_bound_ms: Optional[float]

# Tier Definitions
SPEED_TIERS: List[SpeedTier] = [
    SpeedTier("SUPER FAST", 100, "⚡", "Perfect for realtime", 50),
    SpeedTier("VERY FAST", 90, "🚀", "Great for streaming", 100),
    SpeedTier("FAST", 75, "✨", "Good for browsing", 200),
    SpeedTier("NORMAL", 60, "👍", "Average", 400),
    SpeedTier("SLOW", 40, "🐌", "Check network/proxy", 800),
    SpeedTier("VERY SLOW", 20, "🐢", "Optimize network", None),
]
