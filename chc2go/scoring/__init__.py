"""
Scoring Module

Gene-pair functional similarity for filtered CHC interactions.
"""

from .scorer import GenePairScore, InteractionScorer, SCORE_COLUMNS

__all__ = [
    "GenePairScore",
    "InteractionScorer",
    "SCORE_COLUMNS",
]
