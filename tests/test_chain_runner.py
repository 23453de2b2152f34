"""
Tests for the per-model chain runner in batch and streaming modes.
"""

from __future__ import annotations

import pytest

from src.errors import ChainValidationError, UpdateListenerError
from src.models.schemas import ProgressUpdate, UpdateKind
from src.scoring.similarity import SimilarityScorer
from src.stages.chain_runner import ChainRunner, error_marker, failed_result

CHAIN = ["French", "Spanish", "English"]


def tagging_translator(text: str, language: str) -> str:
    """Prefixes each hop so the fold order is visible in the output."""
    return f"{language[:2].lower()}:{text}"


class UpdateRecorder:
    """Collects progress records in arrival order."""

    def __init__(self) -> None:
        self.updates: list[ProgressUpdate] = []

    async def __call__(self, update: ProgressUpdate) -> None:
        self.updates.append(update)

    def kinds(self) -> list[UpdateKind]:
        return [u.kind for u in self.updates]


@pytest.fixture
def recorder() -> UpdateRecorder:
    return UpdateRecorder()


def make_runner(client) -> ChainRunner:
    return ChainRunner(client, SimilarityScorer(verbose=False), verbose=False)


class TestBatchMode:
    """One generate call per hop."""

    async def test_produces_one_step_per_chain_entry_plus_original(self, make_client) -> None:
        runner = make_runner(make_client("gpt"))

        result = await runner.run("hello", CHAIN)

        assert [s.language for s in result.steps] == ["Original", "French", "Spanish", "English"]
        assert [s.step_index for s in result.steps] == [0, 1, 2, 3]
        assert result.steps[0].text == "hello"
        assert len(result.steps) == len(CHAIN) + 1
        assert all(s.produced_by == "gpt" for s in result.steps)

    async def test_each_hop_translates_the_previous_output(self, make_client) -> None:
        client = make_client(translate=tagging_translator)

        result = await make_runner(client).run("hello", CHAIN)

        assert client.calls == [
            ("hello", "French"),
            ("fr:hello", "Spanish"),
            ("sp:fr:hello", "English"),
        ]
        assert result.final_text == "en:sp:fr:hello"

    async def test_perfect_round_trip_scores_one(self, make_client) -> None:
        result = await make_runner(make_client()).run("The early bird", CHAIN)

        assert result.similarity.combined == 1.0
        assert result.failed is False
        assert result.duration_ms is not None and result.duration_ms >= 0

    async def test_scores_final_text_against_original(self, make_client) -> None:
        client = make_client(translate=lambda text, language: "hallo" if language == "English" else text)

        result = await make_runner(client).run("hello", CHAIN)

        assert result.final_text == "hallo"
        assert result.similarity.literal == pytest.approx(0.8)

    async def test_emits_step_records_then_final(self, make_client, recorder) -> None:
        await make_runner(make_client()).run("hello", CHAIN, on_update=recorder)

        assert recorder.kinds() == [UpdateKind.STEP_COMPLETE] * 4 + [UpdateKind.FINAL]
        final = recorder.updates[-1]
        assert final.is_final and final.is_complete
        assert final.similarity is not None
        assert final.duration_ms is not None
        assert final.step_index == 3
        assert final.language == "English"
        assert all(u.similarity is None for u in recorder.updates[:-1])


class TestStepFailures:
    """A failed hop degrades the run instead of aborting it."""

    async def test_failure_on_second_of_three_steps_continues(self, make_client) -> None:
        client = make_client(translate=tagging_translator, fail_languages=["Spanish"])

        result = await make_runner(client).run("hello", CHAIN)

        assert len(result.steps) == 4
        assert result.steps[2].text == error_marker("Spanish") == "[Error translating to Spanish]"
        assert "provider unavailable" in result.steps[2].error
        # The third hop translates the error marker
        assert client.calls[2] == ("[Error translating to Spanish]", "English")
        assert result.steps[3].text == "en:[Error translating to Spanish]"
        assert result.steps[3].error is None
        assert result.failed is False

    async def test_every_step_failing_still_produces_a_score(self, make_client, recorder) -> None:
        client = make_client(fail_languages=CHAIN)

        result = await make_runner(client).run("hello", CHAIN, on_update=recorder)

        assert result.final_text == "[Error translating to English]"
        assert 0.0 <= result.similarity.combined < 0.5
        assert recorder.kinds()[-1] == UpdateKind.FINAL
        assert [u.error is not None for u in recorder.updates[1:4]] == [True, True, True]


class TestStreamingMode:
    """Hops stream chunk by chunk."""

    async def test_partial_updates_accumulate_text(self, make_client, recorder) -> None:
        client = make_client(chunk_size=2)

        await make_runner(client).run("hello", ["French"], on_update=recorder, stream=True)

        partials = [u.text for u in recorder.updates if u.kind == UpdateKind.PARTIAL]
        assert partials == ["he", "hell", "hello"]
        assert all(not u.is_complete for u in recorder.updates if u.kind == UpdateKind.PARTIAL)
        assert recorder.kinds() == [
            UpdateKind.STEP_COMPLETE,
            UpdateKind.PARTIAL,
            UpdateKind.PARTIAL,
            UpdateKind.PARTIAL,
            UpdateKind.STEP_COMPLETE,
            UpdateKind.FINAL,
        ]

    async def test_step_indices_never_decrease(self, make_client, recorder) -> None:
        client = make_client(translate=tagging_translator)

        result = await make_runner(client).run("hello", CHAIN, on_update=recorder, stream=True)

        indices = [u.step_index for u in recorder.updates]
        assert indices == sorted(indices)
        assert result.final_text == "en:sp:fr:hello"

    async def test_interrupted_stream_records_error_marker(self, make_client, recorder) -> None:
        client = make_client(fail_languages=["Spanish"], fail_after_chunks=1, chunk_size=2)

        result = await make_runner(client).run("hello", CHAIN, on_update=recorder, stream=True)

        assert result.steps[2].text == "[Error translating to Spanish]"
        assert client.calls[2] == ("[Error translating to Spanish]", "English")
        spanish_complete = [
            u for u in recorder.updates
            if u.step_index == 2 and u.kind == UpdateKind.STEP_COMPLETE
        ]
        assert spanish_complete[0].text == "[Error translating to Spanish]"
        assert spanish_complete[0].error is not None

    async def test_listener_error_on_partial_record_is_fatal(self, make_client) -> None:
        client = make_client()

        async def broken_listener(update: ProgressUpdate) -> None:
            if update.kind == UpdateKind.PARTIAL:
                raise KeyError("consumer bug")

        with pytest.raises(UpdateListenerError) as excinfo:
            await make_runner(client).run("hello", CHAIN, on_update=broken_listener, stream=True)

        assert isinstance(excinfo.value.__cause__, KeyError)
        assert [language for _, language in client.calls] == ["French"]

    async def test_listener_error_on_step_record_is_fatal(self, make_client) -> None:
        client = make_client()

        async def broken_listener(update: ProgressUpdate) -> None:
            if update.step_index == 1:
                raise KeyError("consumer bug")

        with pytest.raises(UpdateListenerError):
            await make_runner(client).run("hello", CHAIN, on_update=broken_listener)

        assert len(client.calls) == 1

    async def test_batch_and_streaming_agree(self, make_client) -> None:
        runner = make_runner(make_client(translate=tagging_translator))

        batch = await runner.run("hello", CHAIN)
        streamed = await runner.run("hello", CHAIN, stream=True)

        assert [s.text for s in batch.steps] == [s.text for s in streamed.steps]
        assert batch.similarity == streamed.similarity


class TestChainShapes:
    """Chain validation and repeated languages."""

    async def test_repeated_languages_keep_separate_steps(self, make_client, recorder) -> None:
        chain = ["French", "English", "French", "English"]
        client = make_client(translate=tagging_translator)

        result = await make_runner(client).run("hi", chain, on_update=recorder)

        assert [s.step_index for s in result.steps] == [0, 1, 2, 3, 4]
        assert [s.text for s in result.steps] == [
            "hi", "fr:hi", "en:fr:hi", "fr:en:fr:hi", "en:fr:en:fr:hi"
        ]
        completed = {u.step_index: u.text for u in recorder.updates if u.kind == UpdateKind.STEP_COMPLETE}
        assert completed[1] == "fr:hi"
        assert completed[3] == "fr:en:fr:hi"

    @pytest.mark.parametrize("chain", [[], ["French", ""], ["French", None], "French"])
    async def test_malformed_chain_is_fatal(self, make_client, chain) -> None:
        client = make_client()

        with pytest.raises(ChainValidationError):
            await make_runner(client).run("hello", chain)
        assert client.calls == []

    def test_failed_result_keeps_original_step(self, make_client) -> None:
        result = failed_result(make_client("claude"), "hello", RuntimeError("boom"))

        assert result.failed is True
        assert result.error == "boom"
        assert result.steps[0].text == "hello"
        assert result.similarity.combined == 0.0
