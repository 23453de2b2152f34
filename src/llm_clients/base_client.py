"""
Abstract base class for LLM clients.
Provides a unified interface for translating with different LLM providers.
"""

from abc import ABC, abstractmethod
from typing import AsyncIterator, List, Optional

from config.config import ModelConfig
from src.models.schemas import ModelDescriptor


class BaseLLMClient(ABC):
    """Abstract base class for LLM API clients."""

    def __init__(self, config: ModelConfig):
        """
        Initialize the LLM client.

        Args:
            config: Model configuration including API key and settings
        """
        self.config = config
        self.key = config.key
        self.name = config.name
        self.model_id = config.model_id

    @property
    def descriptor(self) -> ModelDescriptor:
        return self.config.descriptor()

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None
    ) -> str:
        """
        Generate a text response from the LLM.

        Args:
            prompt: The user prompt
            system_prompt: Optional system prompt to set context
            temperature: Override default temperature
            max_tokens: Override default max tokens

        Returns:
            The generated text response
        """
        pass

    @abstractmethod
    def generate_stream(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None
    ) -> AsyncIterator[str]:
        """
        Generate a text response as it arrives.

        Args:
            prompt: The user prompt
            system_prompt: Optional system prompt to set context
            temperature: Override default temperature
            max_tokens: Override default max tokens

        Yields:
            Text chunks in arrival order
        """
        pass

    async def embed(self, text: str) -> List[float]:
        """
        Embed a text into a fixed-length vector.

        Only some providers offer embeddings; the rest raise.
        """
        raise NotImplementedError(f"{self.name} does not provide embeddings")

    def _temperature(self, temperature: Optional[float]) -> float:
        # 0.0 is a valid override
        return self.config.temperature if temperature is None else temperature

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name}, model={self.model_id})"
