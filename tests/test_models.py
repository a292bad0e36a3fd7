"""Tests for Pydantic models."""

import pytest
from pydantic import ValidationError

from mood_radio.core.models import (
    EnergyLevel,
    ImageAnalysis,
    InputType,
    MoodAnalysis,
    MoodParams,
    Recommendation,
    Scenario,
    Track,
    VisualFeatures,
)


SPOTIFY_TRACK = {
    "id": "4uLU6hMCjMI75M1A2tKUQC",
    "name": "Clair de Lune",
    "artists": [{"name": "Claude Debussy"}, {"name": "Someone Else"}],
    "album": {
        "name": "Suite bergamasque",
        "images": [{"url": "https://i.scdn.co/image/large"}, {"url": "https://i.scdn.co/image/small"}],
    },
    "preview_url": "https://p.scdn.co/mp3-preview/abc",
    "external_urls": {"spotify": "https://open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC"},
}


class TestScenario:
    def test_empty_by_default(self):
        assert Scenario().is_empty

    def test_not_empty_with_any_field(self):
        assert not Scenario(time_of_day="night").is_empty

    def test_populate_by_alias(self):
        scenario = Scenario(timeOfDay="morning", energyLevel="high")
        assert scenario.time_of_day == "morning"
        assert scenario.energy_level == EnergyLevel.HIGH

    def test_rejects_unknown_energy_level(self):
        with pytest.raises(ValidationError):
            Scenario(energy_level="extreme")

    def test_frozen(self):
        scenario = Scenario(activity="studying")
        with pytest.raises(ValidationError):
            scenario.activity = "partying"


class TestMoodAnalysis:
    def test_defaults_are_neutral(self):
        analysis = MoodAnalysis()
        assert analysis.primary_mood == "neutral"
        assert analysis.secondary_moods == ()
        assert analysis.confidence == 0.5
        assert analysis.input_type == InputType.MIXED

    def test_rejects_empty_primary_mood(self):
        with pytest.raises(ValidationError):
            MoodAnalysis(primary_mood="")

    def test_rejects_more_than_three_secondary_moods(self):
        with pytest.raises(ValidationError):
            MoodAnalysis(secondary_moods=("a", "b", "c", "d"))

    def test_rejects_confidence_out_of_range(self):
        with pytest.raises(ValidationError):
            MoodAnalysis(confidence=1.5)

    def test_enriched_returns_copy(self):
        analysis = MoodAnalysis(primary_mood="calm")
        enriched = analysis.enriched("Because.", ["Soft dynamics"])

        assert enriched is not analysis
        assert enriched.explanation == "Because."
        assert enriched.musical_qualities == ("Soft dynamics",)
        assert analysis.explanation is None

    def test_serializes_with_aliases(self):
        data = MoodAnalysis(primary_mood="happy").model_dump(by_alias=True)
        assert data["primaryMood"] == "happy"
        assert "secondaryMoods" in data


class TestTrack:
    def test_from_spotify(self):
        track = Track.from_spotify(SPOTIFY_TRACK)
        assert track.id == "4uLU6hMCjMI75M1A2tKUQC"
        assert track.name == "Clair de Lune"
        assert track.artist == "Claude Debussy"
        assert track.album == "Suite bergamasque"
        assert track.image_url == "https://i.scdn.co/image/large"
        assert track.preview_url == "https://p.scdn.co/mp3-preview/abc"
        assert track.external_url.endswith("/4uLU6hMCjMI75M1A2tKUQC")

    def test_from_spotify_missing_optional_fields(self):
        track = Track.from_spotify({"id": "x1", "name": "Bare"})
        assert track.artist == ""
        assert track.album == ""
        assert track.image_url == ""
        assert track.preview_url is None

    def test_uri(self):
        assert Track(id="abc", name="n").uri == "spotify:track:abc"


class TestRecommendation:
    def test_uri_from_spotify_url(self):
        rec = Recommendation(
            id="internal", title="t", artist="a", album="b",
            spotify_url="https://open.spotify.com/track/xyz",
        )
        assert rec.uri == "spotify:track:xyz"

    def test_uri_falls_back_to_id(self):
        rec = Recommendation(id="abc", title="t", artist="a", album="b")
        assert rec.uri == "spotify:track:abc"

    def test_default_tempo(self):
        rec = Recommendation(id="abc", title="t", artist="a", album="b")
        assert rec.tempo == 120


class TestImageModels:
    def test_visual_features_bounds(self):
        with pytest.raises(ValidationError):
            VisualFeatures(brightness=1.2, contrast=0.5, saturation=0.5, warmth=0.5)

    def test_image_analysis_alias(self):
        features = VisualFeatures(brightness=0.5, contrast=0.5, saturation=0.5, warmth=0.5)
        analysis = ImageAnalysis(
            mood="happy", colors=("red",), aesthetic="urban vibrancy",
            confidence=0.8, visualFeatures=features,
        )
        assert analysis.visual_features == features

    def test_mood_params_defaults(self):
        params = MoodParams()
        assert (params.energy, params.valence, params.danceability) == (0.5, 0.5, 0.5)
