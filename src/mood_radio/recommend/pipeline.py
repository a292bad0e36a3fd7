"""Fallback recommendation pipeline.

Tries a fixed sequence of increasingly generic catalog searches, strictly
one after another, and stops at the first stage that returns any tracks:

1. optimized query built from the full analysis
2. focused query (mood + activity + setting)
3. ``genre:`` query for the mood's top genre
4. ``artist:`` query for a well-known artist of the mood
5. ``track:`` query for a canonical song of the mood
6. scenario query (only when the analysis has a scenario)

A NetworkError on one stage counts as zero results. An AuthError ends the
run and surfaces as AuthRequired.
"""

import logging
import random
from typing import Callable, NamedTuple, Optional, Sequence

from ..analysis.explanation import describe_track
from ..analysis.lexicon import genres_for_mood
from ..catalog.client import CatalogClient
from ..config import STATION_RESULT_LIMIT
from ..core.exceptions import AuthError, AuthRequired, NetworkError, NoRecommendationsFound
from ..core.models import MoodAnalysis, Recommendation, Track
from .query_builder import (
    artist_query,
    build_search_query,
    focused_query,
    genre_query,
    popular_song_query,
    scenario_query,
)

logger = logging.getLogger(__name__)

DEFAULT_TEMPO = 120


class SearchStage(NamedTuple):
    """One fallback strategy: a label for logging and the query it sends."""
    name: str
    query: str


def build_fallback_stages(
    analysis: MoodAnalysis,
    rng: random.Random,
    optimized_query: Optional[str] = None,
) -> list[SearchStage]:
    """Build the ordered search stages for an analysis.

    Args:
        analysis: Analysis the queries are derived from.
        rng: Source for the artist and song picks.
        optimized_query: Replaces the first stage's query (used by the
            image path, which has its own query terms).

    Returns:
        Stages in the order they must be attempted.
    """
    mood = analysis.primary_mood
    stages = [
        SearchStage("optimized", optimized_query or build_search_query(analysis)),
        SearchStage("focused", focused_query(analysis)),
        SearchStage("genre", genre_query(mood)),
        SearchStage("artist", artist_query(mood, rng)),
        SearchStage("popular", popular_song_query(mood, rng)),
    ]
    if analysis.scenario is not None:
        stages.append(SearchStage("scenario", scenario_query(analysis.scenario)))
    return stages


def to_recommendations(
    tracks: Sequence[Track], analysis: MoodAnalysis, limit: int
) -> list[Recommendation]:
    """Convert catalog tracks into recommendations, one per unique track id.

    Order is preserved and the result is capped at ``limit``.
    """
    genres = genres_for_mood(analysis.primary_mood)[:3]
    seen: set[str] = set()
    recommendations: list[Recommendation] = []
    for track in tracks:
        if track.id in seen:
            continue
        seen.add(track.id)
        recommendations.append(
            Recommendation(
                id=track.id,
                title=track.name,
                artist=track.artist,
                album=track.album,
                image_url=track.image_url,
                preview_url=track.preview_url,
                spotify_url=track.external_url,
                description=describe_track(track, analysis),
                mood=analysis.primary_mood,
                genres=genres,
                tempo=DEFAULT_TEMPO,
            )
        )
        if len(recommendations) >= limit:
            break
    return recommendations


class FallbackPipeline:
    """Runs the fallback stages against a catalog client.

    Args:
        client: Catalog collaborator.
        rng: Random source for artist/song stage picks. Defaults to a
             fresh ``random.Random()``.
        on_auth_required: Called with the login URL (or None) before
             AuthRequired is raised, so a caller can restart the login flow.
    """

    def __init__(
        self,
        client: CatalogClient,
        rng: Optional[random.Random] = None,
        on_auth_required: Optional[Callable[[Optional[str]], None]] = None,
    ) -> None:
        self.client = client
        self.rng = rng or random.Random()
        self.on_auth_required = on_auth_required

    def auth_required(self, error: AuthError) -> AuthRequired:
        """Notify the login hook and build the AuthRequired to raise."""
        if self.on_auth_required is not None:
            self.on_auth_required(error.login_url)
        return AuthRequired(login_url=error.login_url)

    async def search(
        self, analysis: MoodAnalysis, optimized_query: Optional[str] = None
    ) -> tuple[SearchStage, list[Track]]:
        """Attempt each stage in order until one returns tracks.

        Returns:
            The winning stage and its tracks.

        Raises:
            AuthRequired: The catalog rejected the credentials.
            NoRecommendationsFound: Every stage came back empty or failed.
        """
        for stage in build_fallback_stages(analysis, self.rng, optimized_query):
            if not stage.query:
                continue
            logger.info("Trying %s search: %s", stage.name, stage.query)
            try:
                tracks = await self.client.search_tracks(stage.query)
            except AuthError as e:
                raise self.auth_required(e) from e
            except NetworkError:
                logger.warning("%s search failed", stage.name, exc_info=True)
                continue
            if tracks:
                logger.info("%s search returned %d tracks", stage.name, len(tracks))
                return stage, tracks
            logger.info("%s search returned no tracks", stage.name)

        raise NoRecommendationsFound()

    async def run(
        self,
        analysis: MoodAnalysis,
        limit: int = STATION_RESULT_LIMIT,
        optimized_query: Optional[str] = None,
    ) -> list[Recommendation]:
        """Search with fallbacks and convert the winning tracks."""
        _, tracks = await self.search(analysis, optimized_query)
        return to_recommendations(tracks, analysis, limit)
