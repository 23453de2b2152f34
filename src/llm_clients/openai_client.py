"""
OpenAI GPT client implementation.
Also serves as the embedding capability for semantic scoring.
"""

from typing import AsyncIterator, List, Optional
from openai import AsyncOpenAI

from .base_client import BaseLLMClient
from config.config import ModelConfig, GPT_CONFIG, SYSTEM_CONFIG


class OpenAIClient(BaseLLMClient):
    """Client for OpenAI's GPT API."""

    def __init__(self, config: Optional[ModelConfig] = None):
        """
        Initialize the OpenAI client.

        Args:
            config: Model configuration, defaults to GPT_CONFIG
        """
        config = config or GPT_CONFIG
        super().__init__(config)

        if not config.api_key:
            raise ValueError("OpenAI API key not configured")

        self.client = AsyncOpenAI(api_key=config.api_key, timeout=SYSTEM_CONFIG.api_timeout)

    def _messages(self, prompt: str, system_prompt: Optional[str]) -> list:
        messages = []

        if system_prompt:
            messages.append({
                "role": "system",
                "content": system_prompt
            })

        messages.append({
            "role": "user",
            "content": prompt
        })
        return messages

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None
    ) -> str:
        """
        Generate a response using OpenAI GPT.

        Args:
            prompt: The user prompt
            system_prompt: Optional system prompt
            temperature: Override temperature
            max_tokens: Override max tokens

        Returns:
            Generated text response
        """
        response = await self.client.chat.completions.create(
            model=self.model_id,
            messages=self._messages(prompt, system_prompt),
            temperature=self._temperature(temperature),
            max_completion_tokens=max_tokens or self.config.max_tokens
        )

        return response.choices[0].message.content or ""

    async def generate_stream(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None
    ) -> AsyncIterator[str]:
        """Stream a response from OpenAI GPT chunk by chunk."""
        stream = await self.client.chat.completions.create(
            model=self.model_id,
            messages=self._messages(prompt, system_prompt),
            temperature=self._temperature(temperature),
            max_completion_tokens=max_tokens or self.config.max_tokens,
            stream=True
        )

        async for chunk in stream:
            if chunk.choices and chunk.choices[0].delta.content:
                yield chunk.choices[0].delta.content

    async def embed(self, text: str) -> List[float]:
        """
        Embed a text with the configured OpenAI embedding model.

        Args:
            text: Text to embed

        Returns:
            Embedding vector
        """
        response = await self.client.embeddings.create(
            model=SYSTEM_CONFIG.embedding_model,
            input=text
        )

        return list(response.data[0].embedding)
