"""Explanation text, musical qualities and per-track descriptions.

All output is template-driven: the same MoodAnalysis always produces the
same text.
"""

from typing import Optional

from ..core.models import EnergyLevel, MoodAnalysis, Scenario, SocialContext, Track
from .scenario import ExplanationContext, extract_context

# ---------------------------------------------------------------------------
# Musical qualities
# ---------------------------------------------------------------------------

_RELAXED_QUALITIES = (
    "Slow to medium tempo", "Smooth transitions", "Peaceful melodies", "Soft dynamics",
)

MUSICAL_QUALITIES: dict[str, tuple[str, ...]] = {
    "focused": ("Steady tempo and rhythm", "Minimal vocal distractions", "Clear instrumental focus", "Consistent energy level"),
    "party": ("High energy beats", "Strong dance rhythms", "Upbeat melodies", "Dynamic bass lines"),
    "chill": ("Smooth melodies", "Relaxed tempo", "Ambient textures", "Gentle harmonies"),
    "happy": ("Bright major chords", "Upbeat rhythms", "Cheerful melodies", "Positive lyrics"),
    "sad": ("Minor key progressions", "Emotional melodies", "Introspective lyrics", "Subtle dynamics"),
    "energetic": ("Fast tempo", "Powerful rhythms", "Strong dynamics", "Driving bass"),
    "calm": _RELAXED_QUALITIES,
    "relaxed": _RELAXED_QUALITIES,
    "inspirational": ("Building arrangements", "Uplifting progressions", "Motivational lyrics", "Dynamic crescendos"),
    "introspective": ("Complex harmonies", "Thoughtful lyrics", "Layered textures", "Subtle nuances"),
    "nostalgic": ("Retro elements", "Familiar melodies", "Vintage sounds", "Classic arrangements"),
    "romantic": ("Intimate melodies", "Soft dynamics", "Emotional lyrics", "Warm harmonies"),
    "cinematic": ("Epic arrangements", "Dramatic dynamics", "Orchestral elements", "Thematic development"),
    "urban": ("Modern production", "Contemporary beats", "City-inspired sounds", "Urban rhythms"),
    "nature": ("Organic sounds", "Natural textures", "Environmental elements", "Peaceful melodies"),
    "dreamy": ("Atmospheric textures", "Ethereal sounds", "Floating melodies", "Ambient layers"),
    "angry": ("Heavy dynamics", "Aggressive rhythms", "Intense energy", "Powerful sounds"),
    "peaceful": ("Gentle melodies", "Soft dynamics", "Calming harmonies", "Tranquil atmosphere"),
    "neutral": ("Balanced arrangements", "Moderate tempo", "Versatile style", "Adaptable mood"),
}

DEFAULT_QUALITIES = ("Balanced musical elements", "Versatile style", "Adaptable mood")


def musical_qualities(mood: str) -> list[str]:
    """Return the musical qualities associated with a mood."""
    return list(MUSICAL_QUALITIES.get(mood.lower(), DEFAULT_QUALITIES))


# ---------------------------------------------------------------------------
# Explanation templates
# ---------------------------------------------------------------------------

MOOD_TEMPLATES: dict[str, str] = {
    "focused": "These tracks are carefully selected to enhance your concentration and productivity. They feature steady rhythms and minimal distractions to help you maintain focus.",
    "party": "Get ready to dance! These high-energy tracks are perfect for creating an energetic atmosphere and getting everyone moving.",
    "chill": "These laid-back tunes create a relaxed atmosphere perfect for unwinding and taking it easy.",
    "happy": "Bright and uplifting melodies to boost your mood and spread positivity.",
    "sad": "Emotional and introspective tracks that resonate with your current feelings.",
    "energetic": "Powerful and dynamic tracks to boost your energy levels and motivation.",
    "calm": "Smooth and calming compositions to help you unwind and find peace.",
    "inspirational": "Uplifting and motivational tracks to spark creativity and drive.",
    "introspective": "Thoughtful and deep tracks that encourage self-reflection.",
    "nostalgic": "Songs that evoke memories and create a sense of longing for the past.",
    "romantic": "Sweet and intimate tracks perfect for romantic moments.",
    "cinematic": "Epic and dramatic compositions that create a movie-like atmosphere.",
    "urban": "Modern and contemporary tracks that capture the energy of city life.",
    "nature": "Organic and natural sounds that connect you with the outdoors.",
    "dreamy": "Ethereal and atmospheric tracks that transport you to another world.",
    "angry": "Intense and powerful tracks to channel your emotions.",
    "peaceful": "Serene and tranquil compositions to find inner peace.",
    "neutral": "Balanced and versatile tracks suitable for various situations.",
}

DEFAULT_TEMPLATE = "These tracks are selected based on your current mood and preferences."

ACTIVITY_PARAGRAPHS: dict[str, str] = {
    "studying": "we've selected tracks with minimal distractions and steady rhythms to help you maintain focus.",
    "exercising": "we've chosen high-energy tracks with strong beats to keep you motivated during your workout.",
    "relaxing": "we've picked calming tracks with smooth melodies to help you unwind and relax.",
    "partying": "we've selected upbeat tracks with danceable rhythms to create an energetic atmosphere.",
    "commuting": "we've chosen tracks that make your journey more enjoyable and less stressful.",
    "socializing": "we've selected tracks that create a positive and engaging atmosphere for social interaction.",
    "working": "we've chosen tracks that enhance productivity while maintaining focus.",
    "creative": "we've selected tracks that inspire creativity and artistic expression.",
}
DEFAULT_ACTIVITY_PARAGRAPH = "we've chosen tracks that complement your activity and enhance the experience."

SETTING_PARAGRAPHS: dict[str, str] = {
    "nature": "we've selected tracks with organic sounds and peaceful melodies that connect with the natural environment.",
    "urban": "we've chosen tracks that capture the energy and rhythm of city life.",
    "home": "we've selected tracks that create a comfortable and relaxing atmosphere for your home environment.",
    "office": "we've chosen tracks that enhance focus and productivity in a work environment.",
    "transport": "we've selected tracks that make your journey more enjoyable and less stressful.",
    "entertainment": "we've chosen tracks that enhance the entertainment experience and create the right atmosphere.",
}
DEFAULT_SETTING_PARAGRAPH = "we've selected tracks that complement your setting and enhance the experience."

ENERGY_CLAUSES: dict[EnergyLevel, str] = {
    EnergyLevel.LOW: "The tracks have a relaxed pace and gentle dynamics to match your low-energy environment.",
    EnergyLevel.MEDIUM: "The tracks have a balanced energy level that's neither too intense nor too relaxed.",
    EnergyLevel.HIGH: "The tracks have high energy and strong dynamics to match your energetic environment.",
}

SOCIAL_CLAUSES: dict[SocialContext, str] = {
    SocialContext.ALONE: "These tracks are perfect for personal reflection and solo activities.",
    SocialContext.WITH_FRIENDS: "These tracks create a fun and engaging atmosphere for hanging out with friends.",
    SocialContext.WITH_FAMILY: "These tracks are suitable for family gatherings and create a warm, welcoming atmosphere.",
    SocialContext.IN_CROWD: "These tracks are designed to stand out in a busy environment and create a shared experience.",
}

INSTRUMENTAL_CLAUSE = "The selection includes instrumental tracks to minimize distractions."
VOCAL_CLAUSE = "The selection includes tracks with vocals to provide lyrical content and engagement."

# Closing sentence of per-track descriptions; first matching mood group wins
TRACK_CLOSINGS: tuple[tuple[frozenset[str], str], ...] = (
    (frozenset({"focused", "calm"}), "Perfect for studying or working."),
    (frozenset({"energetic", "party"}), "Great for workouts or parties."),
    (frozenset({"chill", "peaceful"}), "Ideal for relaxing or unwinding."),
    (frozenset({"inspirational"}), "Perfect for motivation and creativity."),
    (frozenset({"cinematic"}), "Great for creating a dramatic atmosphere."),
    (frozenset({"urban"}), "Perfect for city vibes and nightlife."),
    (frozenset({"nature"}), "Ideal for outdoor activities and nature."),
    (frozenset({"dreamy"}), "Perfect for daydreaming and relaxation."),
    (frozenset({"introspective"}), "Great for reflection and mindfulness."),
)
DEFAULT_TRACK_CLOSING = "Perfect for your current vibe."


def _scenario_paragraph(scenario: Scenario) -> Optional[str]:
    if scenario.activity:
        opening = f"Based on your {scenario.activity} activity"
        if scenario.setting:
            opening += f" in a {scenario.setting} setting"
        body = ACTIVITY_PARAGRAPHS.get(scenario.activity, DEFAULT_ACTIVITY_PARAGRAPH)
        return f"{opening}, {body}"
    if scenario.setting:
        opening = f"For your {scenario.setting} setting"
        if scenario.time_of_day:
            opening += f" during the {scenario.time_of_day}"
        body = SETTING_PARAGRAPHS.get(scenario.setting, DEFAULT_SETTING_PARAGRAPH)
        return f"{opening}, {body}"
    return None


def _scenario_clauses(scenario: Scenario) -> list[str]:
    clauses = []
    if scenario.energy_level is not None:
        clauses.append(ENERGY_CLAUSES[scenario.energy_level])
    if scenario.social_context is not None:
        clauses.append(SOCIAL_CLAUSES[scenario.social_context])
    if scenario.instrumental_preference is not None:
        clauses.append(INSTRUMENTAL_CLAUSE if scenario.instrumental_preference else VOCAL_CLAUSE)
    return clauses


def generate_explanation(
    analysis: MoodAnalysis, context: Optional[ExplanationContext] = None
) -> str:
    """Build the explanation shown alongside a set of recommendations.

    The mood template is extended with context, keyword and theme clauses.
    When the analysis carries a scenario with an activity or a setting, a
    scenario paragraph replaces that text; energy, social and vocal
    clauses are then appended.

    Args:
        analysis: Analysis of the prompt.
        context: Coarse context cues extracted from the prompt text.

    Returns:
        Explanation text.
    """
    context = context or ExplanationContext()
    explanation = MOOD_TEMPLATES.get(analysis.primary_mood.lower(), DEFAULT_TEMPLATE)

    if context.activity:
        clause = f" Perfect for {context.activity}"
        if context.time_of_day:
            clause += f" during the {context.time_of_day}"
        if context.setting:
            clause += f" in a {context.setting} environment"
        explanation += clause + "."

    if analysis.keywords:
        explanation += f" The selection emphasizes {', '.join(analysis.keywords[:3])} elements."

    if analysis.themes:
        explanation += f" The music reflects {' and '.join(analysis.themes[:2])} themes."

    scenario = analysis.scenario
    if scenario is not None:
        paragraph = _scenario_paragraph(scenario)
        if paragraph is not None:
            explanation = paragraph
        for clause in _scenario_clauses(scenario):
            explanation += f" {clause}"

    return explanation


def enrich_analysis(analysis: MoodAnalysis, text: str) -> MoodAnalysis:
    """Attach the explanation and musical qualities to an analysis."""
    explanation = generate_explanation(analysis, extract_context(text))
    return analysis.enriched(explanation, musical_qualities(analysis.primary_mood))


def describe_track(track: Track, analysis: MoodAnalysis) -> str:
    """One-paragraph description of why a track fits the analysis."""
    mood = analysis.primary_mood
    if analysis.keywords:
        description = f"Based on your {' and '.join(analysis.keywords[:2])} vibe, "
    else:
        description = f"Based on your {mood} mood, "

    description += f'"{track.name}" by {track.artist} is a {mood} track'
    if analysis.secondary_moods:
        description += f" with {' and '.join(analysis.secondary_moods[:2])} elements"

    closing = next(
        (text for moods, text in TRACK_CLOSINGS if mood in moods), DEFAULT_TRACK_CLOSING
    )
    description += f". {closing}"

    if analysis.explanation:
        description += f" {analysis.explanation}"
    return description
