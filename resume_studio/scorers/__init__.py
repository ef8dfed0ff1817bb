"""CV scoring against a job description."""

from .score_aggregator import ScoreAggregator, round_half_up, weighted_total
from .vision_scorer import VisionAnalysis, VisionScorer

__all__ = [
    "ScoreAggregator",
    "VisionAnalysis",
    "VisionScorer",
    "round_half_up",
    "weighted_total",
]
