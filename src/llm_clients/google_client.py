"""
Google Gemini client implementation using the google-genai SDK.
"""

from typing import AsyncIterator, Optional
from google import genai
from google.genai import types

from .base_client import BaseLLMClient
from config.config import ModelConfig, GEMINI_CONFIG


class GoogleClient(BaseLLMClient):
    """Client for Google's Gemini API."""

    def __init__(self, config: Optional[ModelConfig] = None):
        """
        Initialize the Google Gemini client.

        Args:
            config: Model configuration, defaults to GEMINI_CONFIG
        """
        config = config or GEMINI_CONFIG
        super().__init__(config)

        if not config.api_key:
            raise ValueError("Google API key not configured")

        self.client = genai.Client(api_key=config.api_key)

    def _generation_config(
        self,
        system_prompt: Optional[str],
        temperature: Optional[float],
        max_tokens: Optional[int]
    ) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            temperature=self._temperature(temperature),
            max_output_tokens=max_tokens or self.config.max_tokens,
            system_instruction=system_prompt if system_prompt else None
        )

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None
    ) -> str:
        """
        Generate a response using Gemini.

        Args:
            prompt: The user prompt
            system_prompt: Optional system prompt
            temperature: Override temperature
            max_tokens: Override max tokens

        Returns:
            Generated text response
        """
        response = await self.client.aio.models.generate_content(
            model=self.model_id,
            contents=prompt,
            config=self._generation_config(system_prompt, temperature, max_tokens)
        )

        return response.text or ""

    async def generate_stream(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None
    ) -> AsyncIterator[str]:
        """Stream a response from Gemini chunk by chunk."""
        stream = await self.client.aio.models.generate_content_stream(
            model=self.model_id,
            contents=prompt,
            config=self._generation_config(system_prompt, temperature, max_tokens)
        )

        async for chunk in stream:
            if chunk.text:
                yield chunk.text
