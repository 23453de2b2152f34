"""
Translation Telephone
Terminal entry point for running a game between the competing models.

Usage:
    python main.py --phrase "The early bird catches the worm"
    python main.py --phrase "..." --languages German Japanese --stream
    python main.py --check-keys
    python main.py --check-keys --test-connections
"""

import argparse
import asyncio
import time
from typing import List, Optional

from config.config import (
    validate_api_keys,
    build_chain,
    COMPETING_MODELS,
    AVAILABLE_LANGUAGES,
    SYSTEM_CONFIG
)
from src.orchestrator import TelephoneOrchestrator, CLIENT_CLASSES
from src.models.schemas import GameResult, ProgressUpdate, UpdateKind, WinnerPolicy


def check_api_keys():
    """Check and report API key status."""
    print("\n" + "=" * 60)
    print("API Key Status")
    print("=" * 60)

    status = validate_api_keys()
    any_configured = False

    for model, configured in status.items():
        status_str = "[OK] Configured" if configured else "[X] Missing"
        print(f"  {model.upper()}: {status_str}")
        if configured:
            any_configured = True

    if not all(status.values()):
        print("\nWarning: Some API keys are missing. Those models will sit this game out.")
        print("Create a .env file with your API keys:")
        print("  GOOGLE_API_KEY=your_key")
        print("  GROQ_API_KEY=your_key")
        print("  OPENAI_API_KEY=your_key")
        print("  ANTHROPIC_API_KEY=your_key")

    return any_configured


async def test_api_connections(test_phrase: str = "Hello, how are you?"):
    """
    Test API connections by asking each model for a single translation.

    Args:
        test_phrase: Phrase each model translates to French
    """
    print("\n" + "=" * 60)
    print("API Connection Test")
    print("=" * 60)
    print(f"Test phrase: \"{test_phrase}\"")
    print("-" * 60)

    results = {}

    for config in COMPETING_MODELS:
        print(f"\n  Testing {config.name}...", end=" ", flush=True)

        try:
            client = CLIENT_CLASSES[config.provider](config)

            start_time = time.time()
            response = await client.generate(
                prompt=test_phrase,
                system_prompt="Translate the following text to French. Only return the translated text.",
                max_tokens=100
            )
            elapsed = time.time() - start_time

            print(f"[OK] ({elapsed:.2f}s)")
            print(f"    Response: {response[:100]}{'...' if len(response) > 100 else ''}")
            results[config.key] = {"status": "success", "time": elapsed, "response": response}

        except ValueError as e:
            # API key not configured
            print("[SKIP] API key not configured")
            results[config.key] = {"status": "skipped", "error": str(e)}

        except Exception as e:
            # Connection or API error
            print("[FAIL]")
            print(f"    Error: {str(e)}")
            results[config.key] = {"status": "failed", "error": str(e)}

    print("\n" + "-" * 60)
    success_count = sum(1 for r in results.values() if r["status"] == "success")
    fail_count = sum(1 for r in results.values() if r["status"] == "failed")
    print(f"  Successful: {success_count}")
    print(f"  Failed: {fail_count}")

    return results


def print_result(result: GameResult):
    """Print every model's transcript and the winner banner."""
    print("\n" + "=" * 60)
    print(f"Original: \"{result.original_phrase}\"")
    print(f"Chain: {' -> '.join(result.chain)}")
    print("=" * 60)

    for run in result.results:
        marker = "*" if run.model_id in result.winners else " "
        print(f"\n{marker} {run.model_name}")

        if run.failed:
            print(f"    Failed to run: {run.error}")
            continue

        for step in run.steps:
            print(f"    {step.step_index}. {step.language}: {step.text}")

        score = run.similarity
        semantic = f", semantic {score.semantic:.3f}" if score.semantic is not None else ""
        print(f"    Similarity: {score.combined:.3f} (literal {score.literal:.3f}{semantic})")
        if run.duration_ms is not None:
            print(f"    Time: {run.duration_ms:.0f}ms")

    print("\n" + "-" * 60)
    winners = result.winning_results()
    if winners:
        names = ", ".join(w.model_name for w in winners)
        print(f"WINNER: {names} ({winners[0].similarity.combined * 100:.1f}% match)")
    else:
        print("Failed to run the game. Check your API keys and network access.")
    print("-" * 60)


async def run_streaming(orchestrator: TelephoneOrchestrator, phrase: str, chain: List[str]) -> GameResult:
    """Run a game and print each completed step as it arrives."""
    game = orchestrator.stream_game(phrase, chain)

    async for update in game:
        _print_update(update)

    return game.result


def _print_update(update: ProgressUpdate):
    if update.kind == UpdateKind.PARTIAL:
        return
    if update.kind == UpdateKind.FAILED:
        print(f"  [{update.model_name}] failed: {update.error}")
    elif update.kind == UpdateKind.FINAL:
        print(f"  [{update.model_name}] done, similarity {update.similarity.combined:.3f}")
    else:
        print(f"  [{update.model_name}] {update.step_index}. {update.language}: {update.text}")


def build_orchestrator(policy: Optional[str], semantic: bool) -> TelephoneOrchestrator:
    orchestrator = TelephoneOrchestrator(
        winner_policy=WinnerPolicy(policy) if policy else None,
        semantic=True if semantic else None,
        verbose=SYSTEM_CONFIG.debug
    )

    if semantic and not orchestrator.scorer.semantic_enabled:
        print("Warning: Semantic scoring needs OPENAI_API_KEY. Using literal scoring.")

    return orchestrator


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Translation Telephone: which model keeps a phrase intact?",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Available languages:
    {', '.join(AVAILABLE_LANGUAGES)}

Examples:
    python main.py --phrase "Time flies like an arrow"
    python main.py --phrase "Time flies like an arrow" --languages French Japanese --stream
    python main.py --check-keys --test-connections
        """
    )

    parser.add_argument('--phrase', type=str, default=None,
                       help='Phrase to pass along the chain')
    parser.add_argument('--languages', nargs='+', default=None,
                       help='Languages to translate through before returning to English')
    parser.add_argument('--stream', action='store_true',
                       help='Show each step as it is translated')
    parser.add_argument('--policy', choices=[p.value for p in WinnerPolicy], default=None,
                       help='Winner selection policy')
    parser.add_argument('--semantic', action='store_true',
                       help='Blend in embedding similarity (needs OPENAI_API_KEY)')
    parser.add_argument('--check-keys', action='store_true',
                       help='Check API key configuration')
    parser.add_argument('--test-connections', action='store_true',
                       help='Send a test translation to each model (use with --check-keys)')

    args = parser.parse_args()

    if args.check_keys:
        check_api_keys()
        if args.test_connections:
            asyncio.run(test_api_connections())
        return

    if not args.phrase or not args.phrase.strip():
        parser.error("--phrase is required")

    if not check_api_keys():
        print("\nPlease configure at least one API key before playing.")
        return

    chain = build_chain(args.languages) if args.languages else list(SYSTEM_CONFIG.default_chain)
    orchestrator = build_orchestrator(args.policy, args.semantic)

    if args.stream:
        result = asyncio.run(run_streaming(orchestrator, args.phrase, chain))
    else:
        result = asyncio.run(orchestrator.run_game(args.phrase, chain))

    print_result(result)


if __name__ == "__main__":
    main()
