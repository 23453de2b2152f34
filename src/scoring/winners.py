"""
Winner selection for a completed game.
"""

from typing import List

from config.config import SYSTEM_CONFIG
from src.models.schemas import ModelRunResult, WinnerPolicy


def select_winners(
    results: List[ModelRunResult],
    policy: WinnerPolicy = SYSTEM_CONFIG.winner_policy,
    score_tolerance: float = SYSTEM_CONFIG.score_tolerance,
    duration_tolerance_ms: float = SYSTEM_CONFIG.duration_tolerance_ms
) -> List[str]:
    """
    Pick the winning models of a game.

    Every result whose combined similarity is within ``score_tolerance`` of
    the best one is tied for first. Under ``HIGHEST_SIMILARITY`` all of them
    win. Under ``FASTEST_AMONG_BEST`` the fastest tied run wins, together
    with any tied run within ``duration_tolerance_ms`` of it; runs without a
    duration only win if no tied run has one.

    Runs that failed fatally never win.

    Args:
        results: Results of one game
        policy: Winner selection policy
        score_tolerance: Combined scores this close are a tie
        duration_tolerance_ms: Durations this close are a tie

    Returns:
        Model keys of the winners, in result order
    """
    eligible = [r for r in results if not r.failed]
    if not eligible:
        return []

    best_score = max(r.similarity.combined for r in eligible)
    tied = [r for r in eligible if abs(r.similarity.combined - best_score) < score_tolerance]

    if policy == WinnerPolicy.FASTEST_AMONG_BEST:
        timed = [r for r in tied if r.duration_ms is not None]
        if timed:
            fastest = min(r.duration_ms for r in timed)
            tied = [r for r in timed if r.duration_ms - fastest < duration_tolerance_ms]

    return [r.model_id for r in tied]
