"""
Groq client implementation for Llama models.
Uses Groq's OpenAI-compatible API endpoint.
"""

from typing import AsyncIterator, Optional
from openai import AsyncOpenAI

from .base_client import BaseLLMClient
from config.config import ModelConfig, LLAMA_CONFIG, SYSTEM_CONFIG


class GroqClient(BaseLLMClient):
    """Client for Groq-hosted models (OpenAI-compatible)."""

    BASE_URL = "https://api.groq.com/openai/v1"

    def __init__(self, config: Optional[ModelConfig] = None):
        """
        Initialize the Groq client.

        Args:
            config: Model configuration, defaults to LLAMA_CONFIG
        """
        config = config or LLAMA_CONFIG
        super().__init__(config)

        if not config.api_key:
            raise ValueError("Groq API key not configured")

        # Groq uses an OpenAI-compatible API
        self.client = AsyncOpenAI(
            api_key=config.api_key,
            base_url=self.BASE_URL,
            timeout=SYSTEM_CONFIG.api_timeout
        )

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
        Generate a response using a Groq-hosted model.

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
            max_tokens=max_tokens or self.config.max_tokens
        )

        return response.choices[0].message.content or ""

    async def generate_stream(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None
    ) -> AsyncIterator[str]:
        """Stream a response from a Groq-hosted model chunk by chunk."""
        stream = await self.client.chat.completions.create(
            model=self.model_id,
            messages=self._messages(prompt, system_prompt),
            temperature=self._temperature(temperature),
            max_tokens=max_tokens or self.config.max_tokens,
            stream=True
        )

        async for chunk in stream:
            if chunk.choices and chunk.choices[0].delta.content:
                yield chunk.choices[0].delta.content
