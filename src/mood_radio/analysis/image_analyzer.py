"""Image analyzer protocol and the seeded pseudo-analyzer.

No computer-vision model is involved: :class:`SeededImageAnalyzer` hashes
the image payload into a seed and draws visual features from a
linear-congruential generator, so the same bytes always produce the same
analysis. Anything implementing :class:`ImageAnalyzer` can replace it
without touching query building.
"""

from __future__ import annotations

from typing import Callable, Protocol, Union, runtime_checkable

from ..core.models import ImageAnalysis, VisualFeatures

ImagePayload = Union[bytes, str]

LCG_MULTIPLIER = 16807
LCG_MODULUS = 2147483647  # 2^31 - 1

IMAGE_MOODS = (
    "peaceful", "dreamy", "happy", "energetic", "mysterious",
    "melancholic", "nostalgic", "inspiring", "romantic", "playful",
)

COLOR_PALETTES = (
    ("green", "blue", "golden", "white"),
    ("neon", "dark", "bright", "colorful"),
    ("blue", "purple", "swirling", "ethereal"),
    ("warm", "natural", "skin tones", "soft"),
    ("vibrant", "sunny", "tropical", "bright"),
    ("muted", "pastel", "soft", "gentle"),
    ("dark", "moody", "dramatic", "rich"),
    ("autumn", "warm", "earthy", "cozy"),
    ("winter", "cool", "crisp", "clear"),
    ("spring", "fresh", "light", "renewing"),
)

AESTHETICS = (
    "natural beauty",
    "urban vibrancy",
    "abstract expressionism",
    "natural portraiture",
    "coastal serenity",
    "garden tranquility",
    "mountain majesty",
    "city elegance",
    "artistic expression",
    "street authenticity",
    "renaissance classicism",
    "impressionist softness",
    "minimalist simplicity",
    "baroque richness",
    "romantic idealism",
)

# Image moods expressed in the text mood taxonomy used by the catalog stages
IMAGE_MOOD_TO_TEXT_MOOD: dict[str, str] = {
    "peaceful": "peaceful",
    "dreamy": "dreamy",
    "happy": "happy",
    "energetic": "energetic",
    "mysterious": "cinematic",
    "melancholic": "sad",
    "nostalgic": "nostalgic",
    "inspiring": "inspirational",
    "romantic": "romantic",
    "playful": "happy",
}

QUALITY_WEIGHTS = {
    "brightness": 0.3,
    "contrast": 0.3,
    "saturation": 0.2,
    "warmth": 0.2,
}
MIN_CONFIDENCE = 0.3


@runtime_checkable
class ImageAnalyzer(Protocol):
    """Protocol for image-to-mood analyzers."""

    def analyze(self, image: ImagePayload) -> ImageAnalysis:
        """Derive mood, palette and aesthetic from an image payload."""
        ...


def rolling_hash(payload: ImagePayload) -> int:
    """Signed 32-bit ``h * 31 + c`` hash over bytes (or characters)."""
    values = payload if isinstance(payload, bytes) else (ord(c) for c in payload)
    h = 0
    for value in values:
        h = (h * 31 + value) & 0xFFFFFFFF
    return h - 0x100000000 if h >= 0x80000000 else h


def seed_from_payload(payload: ImagePayload) -> int:
    """Map a payload to a valid LCG seed in ``[1, 2^31 - 2]``."""
    seed = abs(rolling_hash(payload)) % LCG_MODULUS
    return seed or 1


def seeded_random(seed: int) -> Callable[[], float]:
    """Return a Park-Miller generator producing floats in ``[0, 1)``."""
    state = seed

    def next_value() -> float:
        nonlocal state
        state = (state * LCG_MULTIPLIER) % LCG_MODULUS
        return (state - 1) / (LCG_MODULUS - 1)

    return next_value


def assess_quality(features: VisualFeatures) -> float:
    """Weighted closeness of each feature to the 0.5 midpoint."""
    return sum(
        weight * (1 - abs(getattr(features, name) - 0.5) * 2)
        for name, weight in QUALITY_WEIGHTS.items()
    )


def _is_bright_and_saturated(f: VisualFeatures) -> bool:
    return f.brightness > 0.7 and f.saturation > 0.6


def select_mood(features: VisualFeatures, rng: Callable[[], float]) -> str:
    if _is_bright_and_saturated(features):
        return IMAGE_MOODS[2 + int(rng() * 2)]  # happy / energetic
    if features.brightness < 0.3 and features.contrast > 0.6:
        return IMAGE_MOODS[4 + int(rng() * 2)]  # mysterious / melancholic
    if features.brightness > 0.5 and features.saturation < 0.4:
        return IMAGE_MOODS[int(rng() * 2)]  # peaceful / dreamy
    if features.contrast < 0.4:
        return IMAGE_MOODS[int(rng() * 2)]
    return IMAGE_MOODS[int(rng() * len(IMAGE_MOODS))]


def select_palette(features: VisualFeatures, rng: Callable[[], float]) -> tuple[str, ...]:
    if _is_bright_and_saturated(features):
        return COLOR_PALETTES[4]
    if features.brightness < 0.3:
        return COLOR_PALETTES[1]
    if features.saturation < 0.4:
        return COLOR_PALETTES[5]
    return COLOR_PALETTES[int(rng() * len(COLOR_PALETTES))]


def select_aesthetic(features: VisualFeatures, rng: Callable[[], float]) -> str:
    if _is_bright_and_saturated(features):
        return AESTHETICS[0]
    if features.brightness < 0.3:
        return AESTHETICS[1]
    if features.saturation < 0.4:
        return AESTHETICS[2]
    return AESTHETICS[int(rng() * len(AESTHETICS))]


def _grade(value: float, high: str, low: str, middle: str) -> str:
    if value > 0.7:
        return high
    if value < 0.3:
        return low
    return middle


def describe_image(
    mood: str, colors: tuple[str, ...], aesthetic: str, features: VisualFeatures
) -> str:
    """Human-readable summary of the derived visual features."""
    brightness = _grade(features.brightness, "bright", "dark", "moderate")
    contrast = _grade(features.contrast, "high contrast", "low contrast", "moderate contrast")
    saturation = _grade(features.saturation, "vibrant", "muted", "moderate")
    warmth = _grade(features.warmth, "warm", "cool", "neutral")
    return (
        f"A {brightness}, {contrast}, {saturation}, and {warmth} image with "
        f"{', '.join(colors)} colors, evoking a {mood} mood with a {aesthetic} aesthetic."
    )


class SeededImageAnalyzer:
    """Deterministic stand-in for a vision model.

    One generator stream per payload: four draws for the visual features,
    one for the base confidence, then whatever the mood/palette/aesthetic
    rules need when they fall through to a random pick.
    """

    def analyze(self, image: ImagePayload) -> ImageAnalysis:
        rng = seeded_random(seed_from_payload(image))
        features = VisualFeatures(
            brightness=rng(),
            contrast=rng(),
            saturation=rng(),
            warmth=rng(),
        )
        base_confidence = 0.7 + rng() * 0.3
        quality = assess_quality(features)
        confidence = max(MIN_CONFIDENCE, base_confidence - (1 - quality) * 0.5)

        mood = select_mood(features, rng)
        colors = select_palette(features, rng)
        aesthetic = select_aesthetic(features, rng)
        return ImageAnalysis(
            mood=mood,
            colors=colors,
            aesthetic=aesthetic,
            confidence=min(confidence, 1.0),
            visual_features=features,
            description=describe_image(mood, colors, aesthetic, features),
        )
