"""
Anthropic Claude client implementation.
"""

from typing import AsyncIterator, Optional
from anthropic import AsyncAnthropic

from .base_client import BaseLLMClient
from config.config import ModelConfig, CLAUDE_CONFIG, SYSTEM_CONFIG


class AnthropicClient(BaseLLMClient):
    """Client for Anthropic's Claude API."""

    def __init__(self, config: Optional[ModelConfig] = None):
        """
        Initialize the Anthropic client.

        Args:
            config: Model configuration, defaults to CLAUDE_CONFIG
        """
        config = config or CLAUDE_CONFIG
        super().__init__(config)

        if not config.api_key:
            raise ValueError("Anthropic API key not configured")

        self.client = AsyncAnthropic(api_key=config.api_key, timeout=SYSTEM_CONFIG.api_timeout)

    def _request(
        self,
        prompt: str,
        system_prompt: Optional[str],
        temperature: Optional[float],
        max_tokens: Optional[int]
    ) -> dict:
        kwargs = {
            "model": self.model_id,
            "max_tokens": max_tokens or self.config.max_tokens,
            "temperature": self._temperature(temperature),
            "messages": [
                {
                    "role": "user",
                    "content": prompt
                }
            ]
        }

        if system_prompt:
            kwargs["system"] = system_prompt

        return kwargs

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None
    ) -> str:
        """
        Generate a response using Claude.

        Args:
            prompt: The user prompt
            system_prompt: Optional system prompt
            temperature: Override temperature
            max_tokens: Override max tokens

        Returns:
            Generated text response
        """
        response = await self.client.messages.create(
            **self._request(prompt, system_prompt, temperature, max_tokens)
        )

        return response.content[0].text

    async def generate_stream(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None
    ) -> AsyncIterator[str]:
        """Stream a response from Claude chunk by chunk."""
        async with self.client.messages.stream(
            **self._request(prompt, system_prompt, temperature, max_tokens)
        ) as stream:
            async for text in stream.text_stream:
                yield text
