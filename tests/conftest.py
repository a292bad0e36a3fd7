"""Shared test fixtures and configuration."""

from unittest.mock import AsyncMock

import pytest

from mood_radio.core.models import Recommendation, Track


def make_track(track_id: str, name: str = None, artist: str = "Test Artist") -> Track:
    """Build a catalog track with predictable fields."""
    return Track(
        id=track_id,
        name=name or f"Song {track_id}",
        artist=artist,
        album="Test Album",
        image_url=f"https://i.scdn.co/image/{track_id}",
        external_url=f"https://open.spotify.com/track/{track_id}",
    )


def make_recommendation(track_id: str, mood: str = "happy") -> Recommendation:
    """Build a recommendation with predictable fields."""
    return Recommendation(
        id=track_id,
        title=f"Song {track_id}",
        artist="Test Artist",
        album="Test Album",
        spotify_url=f"https://open.spotify.com/track/{track_id}",
        mood=mood,
    )


@pytest.fixture
def catalog():
    """Catalog client double: every search and seed lookup returns nothing."""
    client = AsyncMock()
    client.search_tracks.return_value = []
    client.get_recommendations.return_value = []
    return client
