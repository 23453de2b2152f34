"""
Chain Runner
Drives one model through the translation chain, one hop at a time.
"""

import time
from typing import Awaitable, Callable, List, Optional

from config.config import SYSTEM_CONFIG
from src.errors import ChainValidationError, UpdateListenerError
from src.llm_clients.base_client import BaseLLMClient
from src.scoring.similarity import SimilarityScorer
from src.models.schemas import (
    ORIGINAL_LANGUAGE,
    ModelRunResult,
    ProgressUpdate,
    SimilarityScore,
    TranslationStep,
    UpdateKind
)

UpdateCallback = Callable[[ProgressUpdate], Awaitable[None]]


def validate_chain(chain: List[str]) -> None:
    """Raise ChainValidationError unless every hop names a language."""
    if not isinstance(chain, (list, tuple)) or not chain:
        raise ChainValidationError("Translation chain must be a non-empty list of languages")

    for index, language in enumerate(chain):
        if not isinstance(language, str) or not language.strip():
            raise ChainValidationError(f"Chain entry {index} is not a language name: {language!r}")


def error_marker(language: str) -> str:
    """Text recorded in place of a failed translation."""
    return f"[Error translating to {language}]"


class ChainRunner:
    """Runs the full translation chain for a single model."""

    TRANSLATOR_SYSTEM_PROMPT = (
        "You are a helpful translator. Translate the following text to {language}. "
        "Only return the translated text, nothing else."
    )

    def __init__(
        self,
        client: BaseLLMClient,
        scorer: Optional[SimilarityScorer] = None,
        verbose: bool = True
    ):
        """
        Initialize the runner.

        Args:
            client: Client of the model that does the translating
            scorer: Scorer for the final text; literal only if None
            verbose: Whether to print step failures
        """
        self.client = client
        self.scorer = scorer or SimilarityScorer(verbose=verbose)
        self.verbose = verbose

    def _log(self, message: str):
        """Print message if verbose mode is enabled."""
        if self.verbose:
            print(f"[ChainRunner:{self.client.key}] {message}")

    def _update(self, kind: UpdateKind, step: TranslationStep, **extra) -> ProgressUpdate:
        return ProgressUpdate(
            kind=kind,
            model_id=self.client.key,
            model_name=self.client.name,
            step_index=step.step_index,
            language=step.language,
            text=step.text,
            is_complete=kind != UpdateKind.PARTIAL,
            **extra
        )

    async def run(
        self,
        original_phrase: str,
        chain: List[str],
        on_update: Optional[UpdateCallback] = None,
        stream: bool = False
    ) -> ModelRunResult:
        """
        Translate the phrase through every language of the chain in order.

        Each hop translates the previous hop's text. A failed hop records an
        error marker as its text and the chain carries on from the marker.
        An error raised by on_update is not a translation failure and ends
        the run with UpdateListenerError.

        Args:
            original_phrase: The phrase to pass along
            chain: Languages to translate through, ending in the comparison language
            on_update: Optional coroutine called with every progress record
            stream: Whether to stream each hop chunk by chunk

        Returns:
            ModelRunResult with all steps and the similarity score
        """
        if not isinstance(original_phrase, str):
            raise ChainValidationError("Original phrase must be a string")
        validate_chain(chain)

        start_time = time.perf_counter()

        async def emit(kind: UpdateKind, step: TranslationStep, **extra):
            if on_update is None:
                return
            update = self._update(kind, step, **extra)
            try:
                await on_update(update)
            except Exception as e:
                raise UpdateListenerError(f"Progress listener failed: {e!r}") from e

        steps = [TranslationStep(
            step_index=0,
            language=ORIGINAL_LANGUAGE,
            text=original_phrase,
            produced_by=self.client.key
        )]
        await emit(UpdateKind.STEP_COMPLETE, steps[0])

        current_text = original_phrase
        for step_index, language in enumerate(chain, start=1):
            step = await self._translate_step(current_text, language, step_index, stream, emit)
            steps.append(step)
            await emit(UpdateKind.STEP_COMPLETE, step, error=step.error)
            current_text = step.text

        similarity = await self.scorer.score(original_phrase, current_text)
        duration_ms = (time.perf_counter() - start_time) * 1000

        await emit(
            UpdateKind.FINAL,
            steps[-1],
            similarity=similarity,
            duration_ms=duration_ms
        )

        return ModelRunResult(
            model_id=self.client.key,
            model_name=self.client.name,
            steps=steps,
            final_text=current_text,
            similarity=similarity,
            duration_ms=duration_ms
        )

    async def _translate_step(
        self,
        text: str,
        language: str,
        step_index: int,
        stream: bool,
        emit
    ) -> TranslationStep:
        system_prompt = self.TRANSLATOR_SYSTEM_PROMPT.format(language=language)

        try:
            if stream:
                translated = ""
                async for chunk in self.client.generate_stream(prompt=text, system_prompt=system_prompt):
                    translated += chunk
                    if SYSTEM_CONFIG.debug:
                        self._log(f"step {step_index} chunk: {chunk!r}")
                    await emit(UpdateKind.PARTIAL, TranslationStep(
                        step_index=step_index,
                        language=language,
                        text=translated,
                        produced_by=self.client.key
                    ))
            else:
                translated = await self.client.generate(prompt=text, system_prompt=system_prompt)
        except UpdateListenerError:
            # Only the provider call is recoverable per step
            raise
        except Exception as e:
            self._log(f"[ERROR] Error translating to {language}: {e}")
            return TranslationStep(
                step_index=step_index,
                language=language,
                text=error_marker(language),
                produced_by=self.client.key,
                error=str(e) or e.__class__.__name__
            )

        return TranslationStep(
            step_index=step_index,
            language=language,
            text=translated.strip(),
            produced_by=self.client.key
        )


def failed_result(client: BaseLLMClient, original_phrase: str, error: Exception) -> ModelRunResult:
    """Result recorded for a run that could not complete."""
    return ModelRunResult(
        model_id=client.key,
        model_name=client.name,
        steps=[TranslationStep(
            step_index=0,
            language=ORIGINAL_LANGUAGE,
            text=original_phrase if isinstance(original_phrase, str) else "",
            produced_by=client.key
        )],
        final_text="",
        similarity=SimilarityScore(literal=0.0, semantic=None, combined=0.0),
        failed=True,
        error=str(error) or error.__class__.__name__
    )
