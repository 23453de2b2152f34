"""
Shared fixtures for the Translation Telephone tests.

FakeClient stands in for a provider: it translates with a plain Python
function, can fail on chosen languages, and streams in fixed-size chunks.
"""

from __future__ import annotations

import asyncio
import re
from typing import AsyncIterator, Callable, Dict, List, Optional, Sequence

import pytest

from config.config import ModelConfig
from src.llm_clients.base_client import BaseLLMClient
from src.models.schemas import ModelRunResult, SimilarityScore, TranslationStep

LANGUAGE_PATTERN = re.compile(r"to (.+?)\. Only return")


class FakeClient(BaseLLMClient):
    """Scripted translation client with no network access."""

    def __init__(
        self,
        key: str,
        translate: Optional[Callable[[str, str], str]] = None,
        fail_languages: Sequence[str] = (),
        delay: float = 0.0,
        chunk_size: int = 3,
        fail_after_chunks: Optional[int] = None,
        vectors: Optional[Dict[str, List[float]]] = None,
        fail_embeddings: bool = False,
    ) -> None:
        super().__init__(ModelConfig(
            key=key,
            name=f"Fake {key.title()}",
            api_key="test-key",
            model_id=f"fake-{key}",
            provider="Fake",
        ))
        self.translate = translate or (lambda text, language: text)
        self.fail_languages = set(fail_languages)
        self.delay = delay
        self.chunk_size = chunk_size
        self.fail_after_chunks = fail_after_chunks
        self.vectors = vectors or {}
        self.fail_embeddings = fail_embeddings
        self.calls: list[tuple[str, str]] = []
        self.embed_calls: list[str] = []

    def _language(self, system_prompt: Optional[str]) -> str:
        match = LANGUAGE_PATTERN.search(system_prompt or "")
        assert match, f"Unexpected system prompt: {system_prompt!r}"
        return match.group(1)

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        language = self._language(system_prompt)
        self.calls.append((prompt, language))
        if self.delay:
            await asyncio.sleep(self.delay)
        if language in self.fail_languages:
            raise ConnectionError(f"provider unavailable for {language}")
        return self.translate(prompt, language)

    async def generate_stream(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> AsyncIterator[str]:
        language = self._language(system_prompt)
        self.calls.append((prompt, language))
        if self.delay:
            await asyncio.sleep(self.delay)
        if language in self.fail_languages and self.fail_after_chunks is None:
            raise ConnectionError(f"provider unavailable for {language}")

        text = self.translate(prompt, language)
        for index, start in enumerate(range(0, len(text), self.chunk_size)):
            if language in self.fail_languages and index == self.fail_after_chunks:
                raise ConnectionError(f"stream interrupted for {language}")
            await asyncio.sleep(0)
            yield text[start:start + self.chunk_size]

    async def embed(self, text: str) -> List[float]:
        self.embed_calls.append(text)
        if self.fail_embeddings:
            raise TimeoutError("embedding service timed out")
        return self.vectors[text]


@pytest.fixture
def make_client() -> Callable[..., FakeClient]:
    """Factory for scripted clients."""

    def _make(key: str = "fake", **kwargs) -> FakeClient:
        return FakeClient(key, **kwargs)

    return _make


@pytest.fixture
def make_result() -> Callable[..., ModelRunResult]:
    """Factory for finished runs with a given score and duration."""

    def _make(
        key: str,
        combined: float,
        duration_ms: Optional[float] = None,
        failed: bool = False,
    ) -> ModelRunResult:
        return ModelRunResult(
            model_id=key,
            model_name=key.title(),
            steps=[TranslationStep(step_index=0, language="Original", text="hi", produced_by=key)],
            final_text="hi",
            similarity=SimilarityScore(literal=combined, semantic=None, combined=combined),
            duration_ms=duration_ms,
            failed=failed,
        )

    return _make
