"""Pydantic models for game records and results."""

from .schemas import (
    ORIGINAL_LANGUAGE,
    WinnerPolicy,
    EmbeddingFallback,
    UpdateKind,
    ModelDescriptor,
    TranslationStep,
    SimilarityScore,
    ModelRunResult,
    ProgressUpdate,
    GameResult
)

__all__ = [
    "ORIGINAL_LANGUAGE",
    "WinnerPolicy",
    "EmbeddingFallback",
    "UpdateKind",
    "ModelDescriptor",
    "TranslationStep",
    "SimilarityScore",
    "ModelRunResult",
    "ProgressUpdate",
    "GameResult"
]
