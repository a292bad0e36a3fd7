"""Catalog search query construction.

Turns a MoodAnalysis (or an ImageAnalysis, or raw text) into the search
strings sent to the catalog. Nothing here raises; missing inputs simply
contribute no terms.
"""

import logging
import random
import re
from typing import Iterable, Optional

from ..analysis.image_analyzer import IMAGE_MOOD_TO_TEXT_MOOD
from ..analysis.lexicon import (
    CONCEPT_PATTERNS,
    CONTEXT_GENRE_HINTS,
    SIGNIFICANT_PHRASES,
    SPATIAL_PATTERNS,
    STOP_WORDS,
    TEMPORAL_PATTERNS,
    all_matches,
    artists_for_mood,
    genres_for_activity,
    genres_for_mood,
    songs_for_mood,
)
from ..config import RECENCY_CONSTRAINT
from ..core.models import ImageAnalysis, InputType, MoodAnalysis, Scenario

logger = logging.getLogger(__name__)

MAX_QUERY_TERMS = 5
MOOD_GENRE_HINTS = 2


def unique_terms(terms: Iterable[Optional[str]]) -> list[str]:
    """Lower-case, drop blanks and duplicates, keep first occurrence order."""
    seen: list[str] = []
    for term in terms:
        if not term:
            continue
        term = term.strip().lower()
        if term and term not in seen:
            seen.append(term)
    return seen


def _enum_value(value) -> Optional[str]:
    return getattr(value, "value", value)


# ---------------------------------------------------------------------------
# Optimized query (first pipeline stage)
# ---------------------------------------------------------------------------


def _mood_query(analysis: MoodAnalysis) -> str:
    genres = genres_for_mood(analysis.primary_mood)[:MOOD_GENRE_HINTS]
    terms = unique_terms([
        analysis.primary_mood,
        *analysis.secondary_moods,
        *analysis.keywords,
        *(analysis.musical_qualities or ()),
    ])[:MAX_QUERY_TERMS]
    return " ".join(unique_terms([*genres, *terms]))


def _scenario_query(analysis: MoodAnalysis, scenario: Scenario) -> str:
    genres = genres_for_activity(scenario.activity)
    terms = unique_terms([
        scenario.activity,
        scenario.setting,
        scenario.time_of_day,
        analysis.primary_mood,
        *analysis.secondary_moods,
        *(analysis.musical_qualities or ()),
    ])
    return " ".join(unique_terms([*genres, *terms]))


def _mixed_query(analysis: MoodAnalysis) -> str:
    genres = genres_for_mood(analysis.primary_mood)
    terms = unique_terms([
        *analysis.keywords,
        analysis.primary_mood,
        *analysis.secondary_moods,
        *analysis.themes,
        *(analysis.musical_qualities or ()),
    ])[:MAX_QUERY_TERMS]
    return " ".join(unique_terms([*genres, *terms]))


def build_search_query(analysis: MoodAnalysis) -> str:
    """Build the optimized catalog query for an analysis.

    Branches on ``analysis.input_type``; a scenario-typed analysis without
    a scenario is treated as mixed.
    """
    if analysis.input_type == InputType.MOOD:
        query = _mood_query(analysis)
    elif analysis.input_type == InputType.SCENARIO and analysis.scenario is not None:
        query = _scenario_query(analysis, analysis.scenario)
    else:
        query = _mixed_query(analysis)
    logger.debug("Built %s query: %s", analysis.input_type.value, query)
    return query


# ---------------------------------------------------------------------------
# Fallback stage queries
# ---------------------------------------------------------------------------


def focused_query(analysis: MoodAnalysis) -> str:
    """Primary mood plus scenario activity and setting."""
    scenario = analysis.scenario
    parts = [
        analysis.primary_mood,
        scenario.activity if scenario else None,
        scenario.setting if scenario else None,
    ]
    return " ".join(part for part in parts if part)


def genre_query(mood: str) -> str:
    """``genre:`` filter on the mood's most characteristic genre."""
    return f"genre:{genres_for_mood(mood)[0]} {mood} {RECENCY_CONSTRAINT}"


def artist_query(mood: str, rng: random.Random) -> str:
    """``artist:`` filter on a well-known artist for the mood."""
    return f"artist:{rng.choice(artists_for_mood(mood))} {RECENCY_CONSTRAINT}"


def popular_song_query(mood: str, rng: random.Random) -> str:
    """``track:`` filter on a canonical song for the mood."""
    return f"track:{rng.choice(songs_for_mood(mood))} {RECENCY_CONSTRAINT}"


def scenario_query(scenario: Scenario) -> str:
    """Every extracted scenario field plus the recency constraint."""
    parts = [
        scenario.activity,
        scenario.setting,
        scenario.time_of_day,
        _enum_value(scenario.energy_level),
        _enum_value(scenario.social_context),
        RECENCY_CONSTRAINT,
    ]
    return " ".join(part for part in parts if part)


# ---------------------------------------------------------------------------
# Raw search formatting
# ---------------------------------------------------------------------------


def significant_words(text: str) -> list[str]:
    """Words longer than two characters that are not stop words."""
    words = (word.strip(".,!?;:\"'()") for word in text.lower().split())
    return [word for word in words if len(word) > 2 and word not in STOP_WORDS]


def key_phrases(text: str) -> list[str]:
    """Adjacent word pairs that match a known activity phrase."""
    words = text.lower().split()
    pairs = (f"{first} {second}" for first, second in zip(words, words[1:]))
    return [pair for pair in pairs if any(p.search(pair) for p in SIGNIFICANT_PHRASES)]


def context_genre_hints(text: str) -> list[str]:
    """Genre hints triggered by activity and mood cues in raw text."""
    hints: list[str] = []
    for pattern, genres in CONTEXT_GENRE_HINTS:
        if pattern.search(text):
            hints.extend(genres)
    return unique_terms(hints)


def format_search_query(text: str) -> str:
    """Format raw user text into a catalog search query.

    Keeps at most two key phrases and two concepts (falling back to the
    first significant words when neither is found), the first temporal
    and spatial cue, two genre hints, and always the recency constraint.
    """
    parts: list[str] = []
    phrases = key_phrases(text)[:2]
    concepts = all_matches(CONCEPT_PATTERNS, text)[:2]
    parts.extend(phrases)
    parts.extend(concepts)
    if not phrases and not concepts:
        parts.extend(significant_words(text)[:3])

    temporal = all_matches(TEMPORAL_PATTERNS, text)
    if temporal:
        parts.append(temporal[0])
    spatial = all_matches(SPATIAL_PATTERNS, text)
    if spatial:
        parts.append(spatial[0])

    parts.extend(context_genre_hints(text)[:2])
    parts.append(RECENCY_CONSTRAINT)

    terms = unique_terms(term for part in parts for term in re.split(r"\s+", part))
    query = " ".join(terms)
    logger.debug("Formatted search query: %s", query)
    return query


# ---------------------------------------------------------------------------
# Image queries
# ---------------------------------------------------------------------------


def build_image_query(analysis: ImageAnalysis) -> str:
    """Mood, aesthetic, palette and visual-feature terms for an image."""
    features = analysis.visual_features
    terms = [analysis.mood, analysis.aesthetic, *analysis.colors]

    if features.brightness > 0.7:
        terms += ["bright", "luminous"]
    elif features.brightness < 0.3:
        terms += ["dark", "moody"]

    if features.contrast > 0.7:
        terms += ["bold", "dramatic"]
    elif features.contrast < 0.3:
        terms += ["subtle", "soft"]

    if features.saturation > 0.6:
        terms += ["vibrant", "colorful"]
    elif features.saturation < 0.4:
        terms += ["muted", "desaturated"]

    if features.warmth > 0.6:
        terms += ["warm", "sunny"]
    elif features.warmth < 0.4:
        terms += ["cool", "calm"]

    return " ".join(unique_terms(terms))


def image_mood_analysis(analysis: ImageAnalysis) -> MoodAnalysis:
    """Express an image analysis as a mood-typed MoodAnalysis.

    The image mood is mapped into the text mood taxonomy so the genre,
    artist and song fallback stages have tables to draw from.
    """
    mood = IMAGE_MOOD_TO_TEXT_MOOD.get(analysis.mood, "neutral")
    return MoodAnalysis(
        primary_mood=mood,
        keywords=tuple(unique_terms([analysis.mood, analysis.aesthetic])),
        confidence=analysis.confidence,
        input_type=InputType.MOOD,
        explanation=analysis.description or None,
    )
