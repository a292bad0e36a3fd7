"""Tests for the fallback recommendation pipeline."""

import asyncio
import random
from unittest.mock import MagicMock

import pytest
from conftest import make_track

from mood_radio.config import RECENCY_CONSTRAINT
from mood_radio.core.exceptions import AuthError, AuthRequired, NetworkError, NoRecommendationsFound
from mood_radio.core.models import InputType, MoodAnalysis, Scenario
from mood_radio.recommend.pipeline import (
    FallbackPipeline,
    build_fallback_stages,
    to_recommendations,
)

CALM = MoodAnalysis(primary_mood="calm", keywords=("calm",), input_type=InputType.MOOD)
STUDYING = MoodAnalysis(
    primary_mood="focused",
    secondary_moods=("calm",),
    input_type=InputType.SCENARIO,
    scenario=Scenario(activity="studying", setting="office", time_of_day="night"),
)


def queries(catalog):
    return [call.args[0] for call in catalog.search_tracks.call_args_list]


# =============================================================================
# Stage construction
# =============================================================================


class TestBuildFallbackStages:
    def test_five_stages_without_scenario(self):
        stages = build_fallback_stages(CALM, random.Random(0))
        assert [s.name for s in stages] == ["optimized", "focused", "genre", "artist", "popular"]

    def test_scenario_stage_last(self):
        stages = build_fallback_stages(STUDYING, random.Random(0))
        assert stages[-1].name == "scenario"
        assert stages[-1].query == f"studying office night {RECENCY_CONSTRAINT}"

    def test_optimized_query_override(self):
        stages = build_fallback_stages(CALM, random.Random(0), optimized_query="bright luminous")
        assert stages[0].query == "bright luminous"

    def test_stage_queries(self):
        stages = build_fallback_stages(CALM, random.Random(0))
        assert stages[1].query == "calm"
        assert stages[2].query.startswith("genre:ambient calm")
        assert stages[3].query.startswith("artist:")
        assert stages[4].query.startswith("track:")


# =============================================================================
# Pipeline runs
# =============================================================================


class TestFallbackPipeline:
    def test_first_stage_wins(self, catalog):
        catalog.search_tracks.return_value = [make_track("a")]
        pipeline = FallbackPipeline(catalog, rng=random.Random(0))

        stage, tracks = asyncio.run(pipeline.search(CALM))

        assert stage.name == "optimized"
        assert [t.id for t in tracks] == ["a"]
        assert catalog.search_tracks.call_count == 1

    def test_falls_through_in_order(self, catalog):
        catalog.search_tracks.side_effect = [[], [], [make_track("g")]]
        pipeline = FallbackPipeline(catalog, rng=random.Random(0))

        stage, _ = asyncio.run(pipeline.search(CALM))

        assert stage.name == "genre"
        expected = [s.query for s in build_fallback_stages(CALM, random.Random(0))][:3]
        assert queries(catalog) == expected

    def test_scenario_stage_is_last_resort(self, catalog):
        catalog.search_tracks.side_effect = [[], [], [], [], [], [make_track("s")]]
        pipeline = FallbackPipeline(catalog, rng=random.Random(0))

        stage, _ = asyncio.run(pipeline.search(STUDYING))

        assert stage.name == "scenario"
        assert catalog.search_tracks.call_count == 6

    def test_network_error_moves_to_next_stage(self, catalog):
        catalog.search_tracks.side_effect = [NetworkError("timeout"), [make_track("f")]]
        pipeline = FallbackPipeline(catalog, rng=random.Random(0))

        stage, tracks = asyncio.run(pipeline.search(CALM))

        assert stage.name == "focused"
        assert tracks[0].id == "f"

    def test_auth_error_stops_and_requires_login(self, catalog):
        catalog.search_tracks.side_effect = AuthError("expired", "https://login")
        hook = MagicMock()
        pipeline = FallbackPipeline(catalog, rng=random.Random(0), on_auth_required=hook)

        with pytest.raises(AuthRequired) as exc_info:
            asyncio.run(pipeline.search(CALM))

        assert exc_info.value.login_url == "https://login"
        assert catalog.search_tracks.call_count == 1
        hook.assert_called_once_with("https://login")

    def test_all_stages_empty(self, catalog):
        pipeline = FallbackPipeline(catalog, rng=random.Random(0))

        with pytest.raises(NoRecommendationsFound):
            asyncio.run(pipeline.search(CALM))

        assert catalog.search_tracks.call_count == 5

    def test_all_stages_failing(self, catalog):
        catalog.search_tracks.side_effect = NetworkError("down")
        pipeline = FallbackPipeline(catalog, rng=random.Random(0))

        with pytest.raises(NoRecommendationsFound):
            asyncio.run(pipeline.search(STUDYING))

    def test_run_converts_and_caps(self, catalog):
        catalog.search_tracks.return_value = [make_track(str(i)) for i in range(10)]
        pipeline = FallbackPipeline(catalog, rng=random.Random(0))

        recs = asyncio.run(pipeline.run(CALM, limit=4))

        assert [r.id for r in recs] == ["0", "1", "2", "3"]


class TestToRecommendations:
    def test_dedupes_and_keeps_order(self):
        tracks = [make_track("a"), make_track("b"), make_track("a"), make_track("c")]
        recs = to_recommendations(tracks, CALM, limit=20)
        assert [r.id for r in recs] == ["a", "b", "c"]

    def test_fields(self):
        track = make_track("a", name="Weightless", artist="Marconi Union")
        rec = to_recommendations([track], CALM, limit=20)[0]

        assert rec.title == "Weightless"
        assert rec.artist == "Marconi Union"
        assert rec.spotify_url == track.external_url
        assert rec.image_url == track.image_url
        assert rec.mood == "calm"
        assert rec.genres == ("ambient", "classical", "jazz")
        assert rec.tempo == 120
        assert '"Weightless" by Marconi Union is a calm track' in rec.description

    def test_empty(self):
        assert to_recommendations([], CALM, limit=20) == []
