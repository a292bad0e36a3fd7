"""Recommendation facade used by the CLI and any other front end.

MoodRecommender wires the classifier, the fallback pipeline, the result
cache and the image analyzer together behind a small async API.
"""

import logging
import random
from typing import Callable, Optional, Sequence

from ..analysis.explanation import enrich_analysis
from ..analysis.image_analyzer import ImageAnalyzer, ImagePayload, SeededImageAnalyzer
from ..analysis.lexicon import MOOD_AUDIO_TARGETS
from ..analysis.mood_classifier import analyze_text
from ..catalog.client import CatalogClient
from ..config import Config, config as default_config
from ..core.exceptions import AuthError, LowConfidenceAnalysis
from ..core.models import ImageAnalysis, MoodAnalysis, MoodParams, Recommendation, Track
from .cache import RecommendationCache
from .pipeline import FallbackPipeline, to_recommendations
from .query_builder import build_image_query, format_search_query, image_mood_analysis

logger = logging.getLogger(__name__)


def mood_params(mood: str) -> MoodParams:
    """Target energy/valence/danceability for a mood (0.5 each if unknown)."""
    targets = MOOD_AUDIO_TARGETS.get(mood.lower())
    if targets is None:
        return MoodParams()
    energy, valence, danceability = targets
    return MoodParams(energy=energy, valence=valence, danceability=danceability)


class MoodRecommender:
    """Turns prompts and images into track recommendations.

    Args:
        client: Catalog collaborator.
        cache: Text recommendation cache; a fresh one is created per
               recommender so instances never share entries.
        image_analyzer: Image analyzer, defaults to SeededImageAnalyzer.
        rng: Random source for the artist/song fallback stages.
        on_auth_required: Hook invoked with the login URL when the catalog
               rejects the credentials.
        settings: Limits and thresholds, defaults to the global config.
    """

    def __init__(
        self,
        client: CatalogClient,
        cache: Optional[RecommendationCache] = None,
        image_analyzer: Optional[ImageAnalyzer] = None,
        rng: Optional[random.Random] = None,
        on_auth_required: Optional[Callable[[Optional[str]], None]] = None,
        settings: Optional[Config] = None,
    ) -> None:
        self.client = client
        self.settings = settings or default_config
        self.cache = cache if cache is not None else RecommendationCache(ttl=self.settings.cache_ttl)
        self.image_analyzer = image_analyzer or SeededImageAnalyzer()
        self.pipeline = FallbackPipeline(client, rng=rng, on_auth_required=on_auth_required)

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def analyze_text(self, text: str) -> MoodAnalysis:
        """Classify a prompt (pure, synchronous, never raises)."""
        return analyze_text(text)

    def explain_text(self, text: str) -> MoodAnalysis:
        """Classify a prompt and attach explanation and musical qualities."""
        return enrich_analysis(analyze_text(text), text)

    async def get_recommendations_from_text(self, text: str) -> list[Recommendation]:
        """Recommendations for a prompt, served from cache when fresh.

        Raises:
            AuthRequired: The catalog rejected the credentials.
            NoRecommendationsFound: Every fallback stage came back empty.
        """
        cached = self.cache.get(text)
        if cached is not None:
            logger.debug("Returning cached recommendations for %r", text)
            return cached

        analysis = self.explain_text(text)
        recommendations = await self.pipeline.run(analysis, limit=self.settings.station_limit)
        self.cache.put(text, recommendations)
        return recommendations

    async def search_catalog(self, text: str) -> list[Track]:
        """Raw catalog search using the formatted form of ``text``."""
        try:
            return await self.client.search_tracks(format_search_query(text))
        except AuthError as e:
            raise self.pipeline.auth_required(e) from e

    async def expand_from_seeds(
        self, recommendations: Sequence[Recommendation], analysis: MoodAnalysis
    ) -> list[Recommendation]:
        """Find similar tracks using the first recommendations as seeds."""
        seeds = [rec.id for rec in recommendations]
        try:
            tracks = await self.client.get_recommendations(seeds, mood_params(analysis.primary_mood))
        except AuthError as e:
            raise self.pipeline.auth_required(e) from e
        return to_recommendations(tracks, analysis, self.settings.station_limit)

    # ------------------------------------------------------------------
    # Image
    # ------------------------------------------------------------------

    def analyze_image(self, image: ImagePayload) -> ImageAnalysis:
        """Run the configured image analyzer."""
        return self.image_analyzer.analyze(image)

    async def get_recommendations_from_image(self, image: ImagePayload) -> list[Recommendation]:
        """Recommendations matching an image's mood, palette and aesthetic.

        Results are not cached and are capped at the prompt limit.

        Raises:
            LowConfidenceAnalysis: Image confidence is below the threshold.
            AuthRequired: The catalog rejected the credentials.
            NoRecommendationsFound: Every fallback stage came back empty.
        """
        image_analysis = self.analyze_image(image)
        if image_analysis.confidence < self.settings.min_image_confidence:
            raise LowConfidenceAnalysis(image_analysis.confidence)

        analysis = image_mood_analysis(image_analysis)
        recommendations = await self.pipeline.run(
            analysis,
            limit=self.settings.prompt_limit,
            optimized_query=build_image_query(image_analysis),
        )
        colors = ", ".join(image_analysis.colors)
        description = (
            f"A {image_analysis.aesthetic} song that matches the {image_analysis.mood} "
            f"mood and {colors} colors of your image."
        )
        return [
            rec.model_copy(
                update={
                    "colors": image_analysis.colors,
                    "aesthetic": image_analysis.aesthetic,
                    "description": description,
                }
            )
            for rec in recommendations
        ]
