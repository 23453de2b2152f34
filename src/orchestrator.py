"""
Competition Orchestrator for the Translation Telephone game.
Runs every competing model through the same chain and picks the winners.
"""

import asyncio
import time
from typing import Dict, List, Optional

from config.config import SYSTEM_CONFIG, COMPETING_MODELS, ModelConfig
from src.errors import InvalidPhraseError
from src.llm_clients.base_client import BaseLLMClient
from src.llm_clients.openai_client import OpenAIClient
from src.llm_clients.anthropic_client import AnthropicClient
from src.llm_clients.google_client import GoogleClient
from src.llm_clients.groq_client import GroqClient
from src.scoring.similarity import SimilarityScorer
from src.scoring.winners import select_winners
from src.stages.chain_runner import ChainRunner, UpdateCallback, failed_result
from src.streaming import GameStream
from src.models.schemas import (
    GameResult,
    ModelRunResult,
    ProgressUpdate,
    UpdateKind,
    WinnerPolicy
)


CLIENT_CLASSES = {
    "Google": GoogleClient,
    "Groq": GroqClient,
    "OpenAI": OpenAIClient,
    "Anthropic": AnthropicClient
}


class TelephoneOrchestrator:
    """
    Orchestrates a Translation Telephone game.

    Workflow:
    1. Fan out: one ChainRunner per competing model, all concurrent
    2. Each runner translates the phrase through the chain and scores it
    3. Fan in: wait for every runner, then select the winners
    """

    def __init__(
        self,
        clients: Optional[Dict[str, BaseLLMClient]] = None,
        scorer: Optional[SimilarityScorer] = None,
        winner_policy: Optional[WinnerPolicy] = None,
        semantic: Optional[bool] = None,
        verbose: bool = True
    ):
        """
        Initialize the orchestrator.

        Args:
            clients: Optional dictionary of LLM clients. If None, will initialize from config.
            scorer: Similarity scorer shared by all runners. If None, built from config.
            winner_policy: Winner selection policy, defaults to the configured one
            semantic: Whether the built scorer uses embeddings; overrides SEMANTIC_SCORING.
                Ignored when a scorer is given.
            verbose: Whether to print progress messages
        """
        self.verbose = verbose

        if clients:
            self.clients = clients
        else:
            self.clients = self._initialize_clients()

        self.scorer = scorer or self._initialize_scorer(semantic)
        self.winner_policy = winner_policy or SYSTEM_CONFIG.winner_policy

        self.runners = {
            key: ChainRunner(client, self.scorer, verbose=verbose)
            for key, client in self.clients.items()
        }

    def _initialize_clients(self) -> Dict[str, BaseLLMClient]:
        """
        Initialize LLM clients from configuration.

        Returns:
            Dictionary mapping model keys to clients
        """
        clients = {}

        for config in COMPETING_MODELS:
            try:
                clients[config.key] = self._build_client(config)
                self._log(f"Initialized {config.name} client")
            except Exception as e:
                self._log(f"Warning: Could not initialize {config.name}: {e}")

        if not clients:
            self._log("Warning: No clients available. Configure at least one API key.")

        return clients

    def _build_client(self, config: ModelConfig) -> BaseLLMClient:
        client_class = CLIENT_CLASSES.get(config.provider)
        if client_class is None:
            raise ValueError(f"Unsupported provider: {config.provider}")
        return client_class(config)

    def _initialize_scorer(self, semantic: Optional[bool] = None) -> SimilarityScorer:
        """Build the scorer, with semantic scoring if requested and possible."""
        embedding_client = None
        if semantic is None:
            semantic = SYSTEM_CONFIG.semantic_scoring

        if semantic:
            embedding_client = next(
                (c for c in self.clients.values() if isinstance(c, OpenAIClient)),
                None
            )
            if embedding_client is None:
                self._log("Warning: Semantic scoring needs an OpenAI client. Using literal scoring.")

        return SimilarityScorer(embedding_client=embedding_client, verbose=self.verbose)

    def _log(self, message: str):
        """Print message if verbose mode is enabled."""
        if self.verbose:
            print(f"[Orchestrator] {message}")

    def _check_phrase(self, phrase: str) -> None:
        if not isinstance(phrase, str) or not phrase.strip():
            raise InvalidPhraseError("Enter a phrase to pass along")

    def _resolve_chain(self, chain):
        """
        Copy the requested chain, or the configured one if None.

        Anything but a list or tuple is handed to the runners unchanged so
        each of them fails on it; a bare string is not a chain of letters.
        """
        if chain is None:
            return list(SYSTEM_CONFIG.default_chain)
        if isinstance(chain, (list, tuple)):
            return list(chain)
        return chain

    async def run_game(
        self,
        phrase: str,
        chain: Optional[List[str]] = None,
        on_update: Optional[UpdateCallback] = None,
        stream: bool = False
    ) -> GameResult:
        """
        Run one game for all models and wait for the result.

        Args:
            phrase: The phrase to pass along
            chain: Languages to translate through; defaults to the configured chain
            on_update: Optional coroutine called with every progress record
            stream: Whether runners stream each hop chunk by chunk

        Returns:
            GameResult with every model's run and the winners
        """
        self._check_phrase(phrase)
        chain = self._resolve_chain(chain)

        start_time = time.time()

        self._log(f"\n{'='*60}")
        self._log(f"Starting game: \"{phrase}\"")
        if isinstance(chain, list):
            self._log(f"Chain: {' -> '.join(map(str, chain))}")
        self._log(f"Models: {', '.join(c.name for c in self.clients.values())}")
        self._log(f"{'='*60}")

        tasks = [
            self._run_isolated(runner, phrase, chain, on_update, stream)
            for runner in self.runners.values()
        ]
        results = await asyncio.gather(*tasks)

        return self._build_result(phrase, chain, list(results), time.time() - start_time)

    def stream_game(self, phrase: str, chain: Optional[List[str]] = None) -> GameStream:
        """
        Start a streaming game.

        The returned stream yields every progress record of every model as it
        arrives and holds the GameResult once fully consumed.

        Args:
            phrase: The phrase to pass along
            chain: Languages to translate through; defaults to the configured chain

        Returns:
            Single-pass GameStream
        """
        self._check_phrase(phrase)
        chain = self._resolve_chain(chain)

        def start(on_update: UpdateCallback):
            return self.run_game(phrase, chain, on_update=on_update, stream=True)

        return GameStream(start, expected_models=len(self.runners))

    async def _run_isolated(
        self,
        runner: ChainRunner,
        phrase: str,
        chain: List[str],
        on_update: Optional[UpdateCallback],
        stream: bool
    ) -> ModelRunResult:
        """Run one model, turning a fatal error into a failed result."""
        try:
            result = await runner.run(phrase, chain, on_update=on_update, stream=stream)
        except Exception as e:
            self._log(f"[ERROR] {runner.client.name} failed to run: {e}")
            result = failed_result(runner.client, phrase, e)
            if on_update is not None:
                try:
                    await on_update(ProgressUpdate(
                        kind=UpdateKind.FAILED,
                        model_id=result.model_id,
                        model_name=result.model_name,
                        step_index=0,
                        language=result.steps[0].language,
                        text=result.steps[0].text,
                        is_complete=True,
                        error=result.error
                    ))
                except Exception as listener_error:
                    self._log(f"[ERROR] Could not report failure of {runner.client.name}: {listener_error}")
            return result

        self._log(
            f"  {result.model_name}: \"{result.final_text}\" "
            f"(similarity {result.similarity.combined:.3f}, {result.duration_ms:.0f}ms)"
        )
        return result

    def _build_result(
        self,
        phrase: str,
        chain: List[str],
        results: List[ModelRunResult],
        execution_time: float
    ) -> GameResult:
        winners = select_winners(results, policy=self.winner_policy)

        if winners:
            names = [r.model_name for r in results if r.model_id in winners]
            self._log(f"\n[Result] Winner(s): {', '.join(names)}")
        else:
            self._log("\n[Result] No model completed the game")
        self._log(f"  Time: {execution_time:.2f}s")

        # A chain the runners rejected is recorded as empty
        if not isinstance(chain, list) or not all(isinstance(language, str) for language in chain):
            chain = []

        return GameResult(
            original_phrase=phrase,
            chain=chain,
            results=results,
            winners=winners,
            winner_policy=self.winner_policy,
            execution_time_seconds=execution_time
        )
