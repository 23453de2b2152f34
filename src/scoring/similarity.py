"""
Similarity scoring between an original phrase and its round-tripped text.

Literal similarity is a normalized Levenshtein distance. Semantic similarity
is the cosine of two embedding vectors and is only computed when the scorer
has an embedding-capable client.
"""

import asyncio
from typing import Optional, Sequence

import numpy as np

from config.config import SYSTEM_CONFIG
from src.llm_clients.base_client import BaseLLMClient
from src.models.schemas import SimilarityScore, EmbeddingFallback


def normalize_text(text: str) -> str:
    """Trim and case-fold a text before comparison."""
    return text.strip().casefold()


def levenshtein_distance(s1: str, s2: str) -> int:
    """
    Unit-cost edit distance between two strings.

    Walks the strings row by row, keeping only the previous row.
    """
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    previous = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1, start=1):
        current = [i]
        for j, c2 in enumerate(s2, start=1):
            current.append(min(
                previous[j] + 1,         # deletion
                current[j - 1] + 1,      # insertion
                previous[j - 1] + (c1 != c2)
            ))
        previous = current

    return previous[-1]


def literal_similarity(s1: str, s2: str) -> float:
    """
    Normalized inverse edit distance in [0, 1].

    Both strings are normalized first; two empty strings are identical.
    """
    s1 = normalize_text(s1)
    s2 = normalize_text(s2)

    if s1 == s2:
        return 1.0

    longer, shorter = (s1, s2) if len(s1) > len(s2) else (s2, s1)
    if len(longer) == 0:
        return 1.0

    return 1.0 - levenshtein_distance(longer, shorter) / len(longer)


def cosine_similarity(v1: Sequence[float], v2: Sequence[float]) -> float:
    """Cosine of two vectors clamped to [0, 1]. Zero vectors score 0."""
    a = np.asarray(v1, dtype=float)
    b = np.asarray(v2, dtype=float)
    if a.shape != b.shape:
        raise ValueError(f"Embedding dimensions differ: {a.shape} vs {b.shape}")

    norm = np.linalg.norm(a) * np.linalg.norm(b)
    if norm == 0:
        return 0.0

    return float(np.clip(np.dot(a, b) / norm, 0.0, 1.0))


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))


class SimilarityScorer:
    """Scores how well a final text preserved the original phrase."""

    def __init__(
        self,
        embedding_client: Optional[BaseLLMClient] = None,
        semantic_weight: float = SYSTEM_CONFIG.semantic_weight,
        literal_weight: float = SYSTEM_CONFIG.literal_weight,
        fallback: EmbeddingFallback = SYSTEM_CONFIG.embedding_fallback,
        verbose: bool = True
    ):
        """
        Initialize the scorer.

        Args:
            embedding_client: Client used for semantic similarity. Without
                one, scoring is literal only.
            semantic_weight: Weight of the semantic term in the blend
            literal_weight: Weight of the literal term in the blend
            fallback: Combined score policy when an embedding call fails
            verbose: Whether to print scoring problems
        """
        self.embedding_client = embedding_client
        self.semantic_weight = semantic_weight
        self.literal_weight = literal_weight
        self.fallback = fallback
        self.verbose = verbose

    @property
    def semantic_enabled(self) -> bool:
        return self.embedding_client is not None

    def _log(self, message: str):
        """Print message if verbose mode is enabled."""
        if self.verbose:
            print(f"[SimilarityScorer] {message}")

    async def score(self, original: str, candidate: str) -> SimilarityScore:
        """
        Compare a candidate text against the original.

        Args:
            original: The original phrase
            candidate: The text to compare

        Returns:
            SimilarityScore with literal, semantic and combined values
        """
        if normalize_text(original) == normalize_text(candidate):
            return SimilarityScore(
                literal=1.0,
                semantic=1.0 if self.semantic_enabled else None,
                combined=1.0
            )

        literal = literal_similarity(original, candidate)
        if not self.semantic_enabled:
            return SimilarityScore(literal=literal, semantic=None, combined=literal)

        try:
            semantic = await self._semantic_similarity(original, candidate)
        except Exception as e:
            self._log(f"Embedding failed, falling back to literal scoring: {e}")
            return self._fallback_score(literal)

        return SimilarityScore(
            literal=literal,
            semantic=semantic,
            combined=_clamp(self.semantic_weight * semantic + self.literal_weight * literal)
        )

    async def _semantic_similarity(self, original: str, candidate: str) -> float:
        v1, v2 = await asyncio.gather(
            self.embedding_client.embed(original),
            self.embedding_client.embed(candidate)
        )
        return cosine_similarity(v1, v2)

    def _fallback_score(self, literal: float) -> SimilarityScore:
        if self.fallback == EmbeddingFallback.LITERAL_ONLY:
            return SimilarityScore(literal=literal, semantic=None, combined=literal)

        # The semantic term counts as zero; its weight is not redistributed
        return SimilarityScore(
            literal=literal,
            semantic=0.0,
            combined=_clamp(self.literal_weight * literal)
        )
