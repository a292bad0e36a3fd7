"""Tests for explanation text and track descriptions."""

from mood_radio.analysis.explanation import (
    DEFAULT_QUALITIES,
    DEFAULT_TEMPLATE,
    DEFAULT_TRACK_CLOSING,
    MOOD_TEMPLATES,
    describe_track,
    enrich_analysis,
    generate_explanation,
    musical_qualities,
)
from mood_radio.analysis.mood_classifier import analyze_text
from mood_radio.analysis.scenario import ExplanationContext
from mood_radio.core.models import EnergyLevel, MoodAnalysis, Scenario, SocialContext, Track


class TestMusicalQualities:
    def test_known_mood(self):
        assert musical_qualities("party")[0] == "High energy beats"

    def test_calm_uses_relaxed_qualities(self):
        assert musical_qualities("calm") == musical_qualities("relaxed")

    def test_case_insensitive(self):
        assert musical_qualities("HAPPY") == musical_qualities("happy")

    def test_unknown_mood(self):
        assert musical_qualities("bewildered") == list(DEFAULT_QUALITIES)


class TestGenerateExplanation:
    def test_template_only(self):
        analysis = MoodAnalysis(primary_mood="happy")
        assert generate_explanation(analysis) == MOOD_TEMPLATES["happy"]

    def test_unknown_mood_uses_default_template(self):
        analysis = MoodAnalysis(primary_mood="bewildered")
        assert generate_explanation(analysis) == DEFAULT_TEMPLATE

    def test_context_keyword_and_theme_clauses(self):
        analysis = MoodAnalysis(
            primary_mood="focused",
            keywords=("study", "focused", "coding", "deadline"),
            themes=("study", "night", "rain"),
        )
        context = ExplanationContext(activity="studying", time_of_day="night")

        explanation = generate_explanation(analysis, context)

        assert explanation == (
            MOOD_TEMPLATES["focused"]
            + " Perfect for studying during the night."
            + " The selection emphasizes study, focused, coding elements."
            + " The music reflects study and night themes."
        )

    def test_context_without_activity_adds_nothing(self):
        analysis = MoodAnalysis(primary_mood="happy")
        context = ExplanationContext(time_of_day="morning", setting="home")
        assert generate_explanation(analysis, context) == MOOD_TEMPLATES["happy"]

    def test_activity_scenario_replaces_text(self):
        analysis = MoodAnalysis(
            primary_mood="focused",
            keywords=("study",),
            scenario=Scenario(
                activity="studying",
                setting="office",
                energy_level=EnergyLevel.LOW,
                instrumental_preference=True,
            ),
        )

        explanation = generate_explanation(analysis)

        assert explanation.startswith("Based on your studying activity in a office setting, ")
        assert "The selection emphasizes" not in explanation
        assert explanation.endswith(
            "The tracks have a relaxed pace and gentle dynamics to match your low-energy environment."
            " The selection includes instrumental tracks to minimize distractions."
        )

    def test_setting_scenario(self):
        analysis = MoodAnalysis(
            primary_mood="nature",
            scenario=Scenario(setting="nature", time_of_day="morning"),
        )
        explanation = generate_explanation(analysis)
        assert explanation.startswith("For your nature setting during the morning, ")

    def test_scenario_clauses_without_paragraph(self):
        analysis = MoodAnalysis(
            primary_mood="happy",
            scenario=Scenario(social_context=SocialContext.WITH_FRIENDS, instrumental_preference=False),
        )
        explanation = generate_explanation(analysis)
        assert explanation.startswith(MOOD_TEMPLATES["happy"])
        assert "hanging out with friends" in explanation
        assert explanation.endswith("lyrical content and engagement.")

    def test_deterministic(self):
        text = "I'm studying late at night for finals, need something calm"
        first = enrich_analysis(analyze_text(text), text)
        second = enrich_analysis(analyze_text(text), text)
        assert first.explanation == second.explanation


class TestEnrichAnalysis:
    def test_attaches_explanation_and_qualities(self):
        analysis = analyze_text("I feel happy and excited")
        enriched = enrich_analysis(analysis, "I feel happy and excited")

        assert enriched.explanation.startswith(MOOD_TEMPLATES["happy"])
        assert enriched.musical_qualities == tuple(musical_qualities("happy"))
        assert analysis.explanation is None


class TestDescribeTrack:
    def setup_method(self):
        self.track = Track(id="1", name="Weightless", artist="Marconi Union")

    def test_keywords_and_secondary_moods(self):
        analysis = MoodAnalysis(
            primary_mood="calm",
            keywords=("calm", "quiet", "soft"),
            secondary_moods=("peaceful", "chill", "dreamy"),
        )
        assert describe_track(self.track, analysis) == (
            'Based on your calm and quiet vibe, "Weightless" by Marconi Union is a calm '
            "track with peaceful and chill elements. Perfect for studying or working."
        )

    def test_without_keywords(self):
        analysis = MoodAnalysis()
        assert describe_track(self.track, analysis) == (
            'Based on your neutral mood, "Weightless" by Marconi Union is a neutral track. '
            + DEFAULT_TRACK_CLOSING
        )

    def test_appends_explanation(self):
        analysis = MoodAnalysis(primary_mood="party", explanation="Let's go.")
        description = describe_track(self.track, analysis)
        assert description.endswith("Great for workouts or parties. Let's go.")
