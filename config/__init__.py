"""Configuration package for the Translation Telephone game."""

from .config import (
    ModelConfig,
    SystemConfig,
    GEMINI_CONFIG,
    LLAMA_CONFIG,
    GPT_CONFIG,
    CLAUDE_CONFIG,
    SYSTEM_CONFIG,
    COMPETING_MODELS,
    ALL_MODELS,
    AVAILABLE_LANGUAGES,
    get_model_config,
    validate_api_keys,
    build_chain
)

__all__ = [
    "ModelConfig",
    "SystemConfig",
    "GEMINI_CONFIG",
    "LLAMA_CONFIG",
    "GPT_CONFIG",
    "CLAUDE_CONFIG",
    "SYSTEM_CONFIG",
    "COMPETING_MODELS",
    "ALL_MODELS",
    "AVAILABLE_LANGUAGES",
    "get_model_config",
    "validate_api_keys",
    "build_chain"
]
