"""
Pydantic models for the Translation Telephone game.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from enum import Enum


ORIGINAL_LANGUAGE = "Original"


class WinnerPolicy(str, Enum):
    """How the winners of a game are chosen."""
    HIGHEST_SIMILARITY = "highest_similarity"
    FASTEST_AMONG_BEST = "fastest_among_best"


class EmbeddingFallback(str, Enum):
    """What the combined score becomes when an embedding call fails."""
    ZERO_SEMANTIC = "zero_semantic"
    LITERAL_ONLY = "literal_only"


class UpdateKind(str, Enum):
    """Kinds of progress records emitted by a chain runner."""
    PARTIAL = "partial"
    STEP_COMPLETE = "step_complete"
    FINAL = "final"
    FAILED = "failed"


# ============== Static Model Description ==============

class ModelDescriptor(BaseModel):
    """Static description of a competing model."""
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    id: str = Field(..., description="Catalog key of the model")
    display_name: str = Field(..., description="Human readable model name")
    model_id: str = Field(..., description="Provider model identifier")
    provider: str = Field(..., description="Provider name")
    pricing: str = Field(default="", description="Pricing note for display")


# ============== Chain Models ==============

class TranslationStep(BaseModel):
    """One hop of the chain. Step 0 is the original phrase."""
    model_config = ConfigDict(frozen=True)

    step_index: int = Field(..., ge=0, description="Ordinal position in the chain")
    language: str = Field(..., description="Language of this text")
    text: str = Field(..., description="Text produced at this step")
    produced_by: str = Field(..., description="Key of the model that produced it")
    error: Optional[str] = Field(default=None, description="Failure message if this is a sentinel step")


class SimilarityScore(BaseModel):
    """How closely a final text matches the original phrase."""
    model_config = ConfigDict(frozen=True)

    literal: float = Field(..., ge=0.0, le=1.0, description="Normalized inverse edit distance")
    semantic: Optional[float] = Field(default=None, ge=0.0, le=1.0, description="Embedding cosine similarity")
    combined: float = Field(..., ge=0.0, le=1.0, description="Blended score used for ranking")


class ModelRunResult(BaseModel):
    """Everything one model produced for one game."""
    model_config = ConfigDict(protected_namespaces=())

    model_id: str = Field(..., description="Catalog key of the model")
    model_name: str = Field(..., description="Display name of the model")
    steps: List[TranslationStep] = Field(..., description="Ordered translation steps")
    final_text: str = Field(..., description="Text of the last step")
    similarity: SimilarityScore = Field(..., description="Final text vs original phrase")
    duration_ms: Optional[float] = Field(default=None, description="Wall-clock run time")
    failed: bool = Field(default=False, description="Whether the run hit a fatal error")
    error: Optional[str] = Field(default=None, description="Fatal error message")


# ============== Streaming Models ==============

class ProgressUpdate(BaseModel):
    """
    A progress record from one chain runner.

    The same record type is used in batch and streaming modes. Terminal
    records (``final`` and ``failed``) are the last record a runner emits;
    only ``final`` carries a similarity score.
    """
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    kind: UpdateKind = Field(..., description="Record variant")
    model_id: str = Field(..., description="Catalog key of the model")
    model_name: str = Field(..., description="Display name of the model")
    step_index: int = Field(..., ge=0, description="Ordinal step this record belongs to")
    language: str = Field(..., description="Language of the step")
    text: str = Field(..., description="Accumulated text of the step")
    is_complete: bool = Field(..., description="Whether the step text is final")
    similarity: Optional[SimilarityScore] = Field(default=None, description="Set on the final record")
    duration_ms: Optional[float] = Field(default=None, description="Set on the final record")
    error: Optional[str] = Field(default=None, description="Step or run failure message")

    @property
    def is_final(self) -> bool:
        return self.kind in (UpdateKind.FINAL, UpdateKind.FAILED)


# ============== Game Result ==============

class GameResult(BaseModel):
    """Complete result of one telephone game across all models."""
    original_phrase: str = Field(..., description="The phrase that was passed along")
    chain: List[str] = Field(..., description="Languages the phrase went through")
    results: List[ModelRunResult] = Field(..., description="One result per competing model")
    winners: List[str] = Field(default_factory=list, description="Keys of the winning models")
    winner_policy: WinnerPolicy = Field(..., description="Policy used to pick winners")
    execution_time_seconds: float = Field(..., description="Total game time")

    def winning_results(self) -> List[ModelRunResult]:
        """Results of the winning models, in result order."""
        return [r for r in self.results if r.model_id in self.winners]
