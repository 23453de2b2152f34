"""Similarity scoring and winner selection."""

from .similarity import (
    SimilarityScorer,
    levenshtein_distance,
    literal_similarity,
    cosine_similarity,
    normalize_text
)
from .winners import select_winners

__all__ = [
    "SimilarityScorer",
    "levenshtein_distance",
    "literal_similarity",
    "cosine_similarity",
    "normalize_text",
    "select_winners"
]
