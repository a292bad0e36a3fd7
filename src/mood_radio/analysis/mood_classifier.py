"""Rule-based mood classifier for free-text prompts.

Scores the prompt against the mood and theme lexicons, picks a primary
mood plus up to three secondary moods, and applies context overrides for
prompts whose mood signal is weak but whose activity is obvious
("studying", "party", ...).
"""

import logging
import string
from typing import Iterable, NamedTuple

from ..core.models import InputType, MoodAnalysis
from .lexicon import (
    CONTEXT_OVERRIDES,
    MOOD_KEYWORDS,
    OVERRIDE_SCORE_THRESHOLD,
    THEME_KEYWORDS,
    first_match,
)
from .scenario import determine_input_type, extract_scenario

logger = logging.getLogger(__name__)

NEUTRAL_MOOD = "neutral"
MAX_SECONDARY_MOODS = 3

# Tokens shorter than this only count as exact matches
MIN_PARTIAL_TOKEN_LENGTH = 4


class LexiconScores(NamedTuple):
    """Per-label scores (only labels with score > 0) and matched keywords."""
    scores: dict[str, int]
    keywords: list[str]


def tokenize(text: str) -> list[str]:
    """Lower-case, split on whitespace, strip surrounding punctuation."""
    tokens = (word.strip(string.punctuation) for word in text.lower().split())
    return [token for token in tokens if token]


def score_keywords(tokens: Iterable[str], keywords: Iterable[str]) -> tuple[int, list[str]]:
    """Score one keyword set against a token list.

    Each keyword contributes at most once: 2 for an exact token match,
    otherwise 1 when a token (of at least ``MIN_PARTIAL_TOKEN_LENGTH``
    characters) contains the keyword or is contained in it.

    Returns:
        Tuple of (score, matched keywords in keyword order).
    """
    token_list = list(tokens)
    token_set = set(token_list)
    partial_tokens = [t for t in token_list if len(t) >= MIN_PARTIAL_TOKEN_LENGTH]

    score = 0
    matched: list[str] = []
    for keyword in keywords:
        if keyword in token_set:
            score += 2
            matched.append(keyword)
        elif any(keyword in token or token in keyword for token in partial_tokens):
            score += 1
            matched.append(keyword)
    return score, matched


def score_lexicon(tokens: list[str], lexicon: dict[str, tuple[str, ...]]) -> LexiconScores:
    """Score every label of a lexicon, dropping labels that scored zero.

    The returned ``scores`` dict keeps the lexicon's declaration order.
    """
    scores: dict[str, int] = {}
    keywords: list[str] = []
    for label, label_keywords in lexicon.items():
        score, matched = score_keywords(tokens, label_keywords)
        if score > 0:
            scores[label] = score
            for keyword in matched:
                if keyword not in keywords:
                    keywords.append(keyword)
    return LexiconScores(scores, keywords)


def rank_moods(scores: dict[str, int]) -> tuple[str, list[str]]:
    """Pick the primary mood and the ranked secondary moods.

    Ties go to the mood declared first in the lexicon.
    """
    primary = NEUTRAL_MOOD
    best = 0
    for mood, score in scores.items():
        if score > best:
            primary, best = mood, score

    others = [mood for mood in scores if mood != primary]
    # sorted() is stable, so equal scores keep declaration order
    secondary = sorted(others, key=lambda mood: scores[mood], reverse=True)
    return primary, secondary[:MAX_SECONDARY_MOODS]


def apply_context_overrides(
    text: str, primary: str, secondary: list[str], scores: dict[str, int]
) -> tuple[str, list[str]]:
    """Force a primary mood from high-signal context words.

    Only fires when the primary mood is neutral or scored below
    ``OVERRIDE_SCORE_THRESHOLD``. The displaced primary mood moves to the
    front of the secondary list so no mood is lost.
    """
    if primary != NEUTRAL_MOOD and scores.get(primary, 0) >= OVERRIDE_SCORE_THRESHOLD:
        return primary, secondary

    target = first_match(CONTEXT_OVERRIDES, text)
    if target is None or target == primary:
        return primary, secondary

    logger.debug("Context override: %s -> %s", primary, target)
    new_secondary = [mood for mood in secondary if mood != target]
    if primary != NEUTRAL_MOOD:
        new_secondary.insert(0, primary)
    return target, new_secondary[:MAX_SECONDARY_MOODS]


def compute_confidence(max_score: int) -> float:
    """Confidence grows with the strongest match: 0.5 floor, 1.0 cap."""
    return min(0.5 + max_score / 10, 1.0)


def extract_themes(text: str) -> list[str]:
    """Return every theme with a positive score, strongest first."""
    scores = score_lexicon(tokenize(text), THEME_KEYWORDS).scores
    return sorted(scores, key=lambda theme: scores[theme], reverse=True)


def analyze_text(text: str) -> MoodAnalysis:
    """Classify a prompt into a MoodAnalysis.

    Never raises: text without any lexicon match yields a neutral
    analysis with confidence 0.5.

    Args:
        text: Free-form description of a mood or a listening scenario.

    Returns:
        MoodAnalysis without explanation or musical qualities.
    """
    tokens = tokenize(text)
    mood_scores = score_lexicon(tokens, MOOD_KEYWORDS)

    primary, secondary = rank_moods(mood_scores.scores)
    max_score = max(mood_scores.scores.values(), default=0)
    primary, secondary = apply_context_overrides(
        text, primary, secondary, mood_scores.scores
    )

    input_type = determine_input_type(text)
    scenario = extract_scenario(text) if input_type != InputType.MOOD else None

    analysis = MoodAnalysis(
        primary_mood=primary,
        secondary_moods=tuple(secondary),
        keywords=tuple(mood_scores.keywords),
        themes=tuple(extract_themes(text)),
        confidence=compute_confidence(max_score),
        input_type=input_type,
        scenario=scenario,
    )
    logger.debug(
        "Analyzed %r: primary=%s secondary=%s type=%s",
        text, analysis.primary_mood, list(analysis.secondary_moods), input_type.value,
    )
    return analysis
