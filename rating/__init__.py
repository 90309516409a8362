# Rating Package
from rating.config import SPEED_TIERS, SpeedTier
from rating.classifier import SpeedRating, rate_speed

__all__ = ["SPEED_TIERS", "SpeedTier", "SpeedRating", "rate_speed"]
