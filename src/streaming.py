"""
Single-pass channel between running chain runners and a streaming consumer.
"""

import asyncio
from typing import AsyncIterator, Awaitable, Callable, Optional

from src.models.schemas import GameResult, ProgressUpdate


class GameStream:
    """
    Live progress of one game.

    Runners push ProgressUpdate records into a queue; iterating the stream
    drains it until every model has delivered its terminal record. After
    that ``result`` holds the GameResult. A stream can be iterated once.
    """

    def __init__(
        self,
        start: Callable[[Callable[[ProgressUpdate], Awaitable[None]]], Awaitable[GameResult]],
        expected_models: int
    ):
        """
        Args:
            start: Starts the game given the callback runners push records to
            expected_models: Number of runners that will report a terminal record
        """
        self._start = start
        self._expected_models = expected_models
        self._queue: asyncio.Queue = asyncio.Queue()
        self._consumed = False
        self._result: Optional[GameResult] = None

    @property
    def done(self) -> bool:
        return self._result is not None

    @property
    def result(self) -> GameResult:
        if self._result is None:
            raise RuntimeError("GameStream has not been fully consumed yet")
        return self._result

    def __aiter__(self) -> AsyncIterator[ProgressUpdate]:
        if self._consumed:
            raise RuntimeError("GameStream can only be iterated once")
        self._consumed = True
        return self._drain()

    async def _drain(self) -> AsyncIterator[ProgressUpdate]:
        game = asyncio.ensure_future(self._start(self._queue.put))
        remaining = self._expected_models

        try:
            while remaining > 0:
                update = await self._next_update(game)
                yield update
                if update.is_final:
                    remaining -= 1

            self._result = await game
        finally:
            if not game.done():
                game.cancel()

    async def _next_update(self, game: asyncio.Future) -> ProgressUpdate:
        """Wait for the next record, surfacing a crash of the game itself."""
        while True:
            if not self._queue.empty():
                return self._queue.get_nowait()

            if game.done():
                # Re-raises the game's own error if it crashed
                game.result()
                raise RuntimeError("Game finished before every model reported a final update")

            getter = asyncio.ensure_future(self._queue.get())
            await asyncio.wait({getter, game}, return_when=asyncio.FIRST_COMPLETED)

            if getter.done():
                return getter.result()
            getter.cancel()
