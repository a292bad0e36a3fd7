"""Input-type detection and scenario extraction.

Every lookup is a first-match-wins scan over the ordered pattern tables in
:mod:`mood_radio.analysis.lexicon`, so the same text always yields the
same result.
"""

from typing import NamedTuple, Optional

from ..core.models import EnergyLevel, InputType, Scenario, SocialContext
from .lexicon import (
    ACTIVITY_PATTERNS,
    CONTEXT_ACTIVITY_PATTERNS,
    CONTEXT_SETTING_PATTERNS,
    CONTEXT_TIME_PATTERNS,
    ENERGY_PATTERNS,
    INSTRUMENTAL_PATTERNS,
    MOOD_INDICATORS,
    MOOD_WORDS,
    SCENARIO_INDICATORS,
    SCENARIO_WORDS,
    SETTING_PATTERNS,
    SOCIAL_PATTERNS,
    TIME_OF_DAY_PATTERNS,
    first_match,
)


class ExplanationContext(NamedTuple):
    """Coarse activity/time/setting cues used by the explanation text."""
    activity: Optional[str] = None
    time_of_day: Optional[str] = None
    setting: Optional[str] = None


def count_indicators(text: str) -> tuple[int, int]:
    """Count mood and scenario signals in ``text``.

    Each indicator regex counts once if it matches anywhere, and each word
    of the fixed mood/scenario word lists counts once if it occurs.

    Returns:
        Tuple of (mood_count, scenario_count).
    """
    lowered = text.lower()
    mood_count = sum(1 for pattern in MOOD_INDICATORS if pattern.search(text))
    mood_count += sum(1 for word in MOOD_WORDS if word in lowered)

    scenario_count = sum(1 for pattern in SCENARIO_INDICATORS if pattern.search(text))
    scenario_count += sum(1 for word in SCENARIO_WORDS if word in lowered)
    return mood_count, scenario_count


def determine_input_type(text: str) -> InputType:
    """Classify text as a mood, a scenario, or a mix of both.

    A side wins only when its count is strictly greater than the other's
    and greater than 1.
    """
    mood_count, scenario_count = count_indicators(text)
    if mood_count > scenario_count and mood_count > 1:
        return InputType.MOOD
    if scenario_count > mood_count and scenario_count > 1:
        return InputType.SCENARIO
    return InputType.MIXED


def _instrumental_preference(text: str) -> Optional[bool]:
    match = first_match(INSTRUMENTAL_PATTERNS, text)
    if match is None:
        return None
    return match == "instrumental"


def extract_scenario(text: str) -> Scenario:
    """Extract activity, setting, time, energy, social and vocal cues.

    Tables are independent: each field takes the first matching entry of
    its own table and stays ``None`` when nothing matched.
    """
    energy = first_match(ENERGY_PATTERNS, text)
    social = first_match(SOCIAL_PATTERNS, text)
    return Scenario(
        activity=first_match(ACTIVITY_PATTERNS, text),
        setting=first_match(SETTING_PATTERNS, text),
        time_of_day=first_match(TIME_OF_DAY_PATTERNS, text),
        energy_level=EnergyLevel(energy) if energy else None,
        social_context=SocialContext(social) if social else None,
        instrumental_preference=_instrumental_preference(text),
    )


def extract_context(text: str) -> ExplanationContext:
    """Narrow activity/time/setting lookup for the "Perfect for ..." clause."""
    return ExplanationContext(
        activity=first_match(CONTEXT_ACTIVITY_PATTERNS, text),
        time_of_day=first_match(CONTEXT_TIME_PATTERNS, text),
        setting=first_match(CONTEXT_SETTING_PATTERNS, text),
    )
