"""
Configuration module for the Translation Telephone game.
Handles API keys, the competing model catalog, and scoring settings.
"""

import os
from dataclasses import dataclass
from typing import Optional, List, Tuple
from dotenv import load_dotenv

from src.models.schemas import ModelDescriptor, WinnerPolicy, EmbeddingFallback

# Load environment variables from .env file
load_dotenv()


@dataclass(frozen=True)
class ModelConfig:
    """Configuration for one competing model."""
    key: str
    name: str
    api_key: Optional[str]
    model_id: str
    provider: str
    pricing: str = ""
    max_tokens: int = 1024
    temperature: float = 0.3

    def descriptor(self) -> ModelDescriptor:
        """Static description of this model for results and display."""
        return ModelDescriptor(
            id=self.key,
            display_name=self.name,
            model_id=self.model_id,
            provider=self.provider,
            pricing=self.pricing
        )


@dataclass(frozen=True)
class SystemConfig:
    """System-wide configuration settings."""
    # Timeout for API calls in seconds
    api_timeout: int = 60

    # Whether to print per-chunk streaming traces
    debug: bool = False

    # Language every chain ends in; scores compare against the original in it
    comparison_language: str = "English"

    default_chain: Tuple[str, ...] = ("French", "Spanish", "English")

    # Semantic scoring needs an embedding-capable client (OpenAI)
    semantic_scoring: bool = False
    embedding_model: str = "text-embedding-3-small"
    semantic_weight: float = 0.7
    literal_weight: float = 0.3
    embedding_fallback: EmbeddingFallback = EmbeddingFallback.ZERO_SEMANTIC

    # Winner selection tolerances
    score_tolerance: float = 1e-4
    duration_tolerance_ms: float = 50.0
    winner_policy: WinnerPolicy = WinnerPolicy.FASTEST_AMONG_BEST


# Model configurations
GEMINI_CONFIG = ModelConfig(
    key="gemini",
    name="Gemini 2.5 Flash Lite",
    api_key=os.getenv("GOOGLE_API_KEY"),
    model_id="gemini-2.5-flash-lite",
    provider="Google",
    pricing="$0.10/M input"
)

LLAMA_CONFIG = ModelConfig(
    key="llama",
    name="Llama 3.3 70B",
    api_key=os.getenv("GROQ_API_KEY"),
    model_id="llama-3.3-70b-versatile",
    provider="Groq",
    pricing="$0.05/M input"
)

GPT_CONFIG = ModelConfig(
    key="gpt",
    name="GPT-4o Mini",
    api_key=os.getenv("OPENAI_API_KEY"),
    model_id="gpt-4o-mini",
    provider="OpenAI",
    pricing="$0.15/M input"
)

CLAUDE_CONFIG = ModelConfig(
    key="claude",
    name="Claude 3 Haiku",
    api_key=os.getenv("ANTHROPIC_API_KEY"),
    model_id="claude-3-haiku-20240307",
    provider="Anthropic",
    pricing="$0.25/M input"
)

# System configuration
SYSTEM_CONFIG = SystemConfig(
    api_timeout=int(os.getenv("API_TIMEOUT", "60")),
    debug=os.getenv("DEBUG", "false").lower() == "true",
    semantic_scoring=os.getenv("SEMANTIC_SCORING", "false").lower() == "true",
    embedding_model=os.getenv("EMBEDDING_MODEL", "text-embedding-3-small"),
    embedding_fallback=EmbeddingFallback(
        os.getenv("EMBEDDING_FALLBACK", EmbeddingFallback.ZERO_SEMANTIC.value)
    ),
    winner_policy=WinnerPolicy(
        os.getenv("WINNER_POLICY", WinnerPolicy.FASTEST_AMONG_BEST.value)
    )
)

# All competing models, in display order
COMPETING_MODELS: List[ModelConfig] = [
    GEMINI_CONFIG,
    LLAMA_CONFIG,
    GPT_CONFIG,
    CLAUDE_CONFIG
]

ALL_MODELS = {config.key: config for config in COMPETING_MODELS}

AVAILABLE_LANGUAGES = [
    "French",
    "Spanish",
    "German",
    "Italian",
    "Portuguese",
    "Russian",
    "Japanese",
    "Chinese",
    "Hindi",
    "Arabic",
    "Korean",
    "Turkish",
    "Dutch",
    "Swedish",
    "Polish",
]


def get_model_config(model_name: str) -> ModelConfig:
    """Get configuration for a specific model."""
    if model_name.lower() not in ALL_MODELS:
        raise ValueError(f"Unknown model: {model_name}. Available: {list(ALL_MODELS.keys())}")
    return ALL_MODELS[model_name.lower()]


def validate_api_keys() -> dict[str, bool]:
    """Check which API keys are configured."""
    return {
        name: config.api_key is not None and len(config.api_key) > 0
        for name, config in ALL_MODELS.items()
    }


def build_chain(languages: List[str], comparison_language: Optional[str] = None) -> List[str]:
    """
    Build a translation chain from a user's language selection.

    The comparison language is always appended so the last hop brings the
    phrase back to the language it is scored in.
    """
    comparison_language = comparison_language or SYSTEM_CONFIG.comparison_language
    return [*languages, comparison_language]
