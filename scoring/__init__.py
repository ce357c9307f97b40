"""
scoring package marker.
"""

from scoring.base import BaseScorer
from scoring.rarity import AnomalyScorer, rarity_score

__all__ = ["AnomalyScorer", "BaseScorer", "rarity_score"]
