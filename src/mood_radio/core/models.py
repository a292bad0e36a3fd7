"""Pydantic models for mood analysis, catalog tracks and recommendations."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, computed_field


class InputType(str, Enum):
    """How a free-text prompt was classified."""
    MOOD = "mood"
    SCENARIO = "scenario"
    MIXED = "mixed"


class EnergyLevel(str, Enum):
    """Energy level requested by a scenario."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SocialContext(str, Enum):
    """Who the listener is with."""
    ALONE = "alone"
    WITH_FRIENDS = "with_friends"
    WITH_FAMILY = "with_family"
    IN_CROWD = "in_crowd"


class Scenario(BaseModel):
    """Structured listening context extracted from text.

    Every field is optional; ``None`` means the text did not say, not "no".
    """
    activity: Optional[str] = None
    setting: Optional[str] = None
    time_of_day: Optional[str] = Field(default=None, alias="timeOfDay")
    energy_level: Optional[EnergyLevel] = Field(default=None, alias="energyLevel")
    social_context: Optional[SocialContext] = Field(default=None, alias="socialContext")
    instrumental_preference: Optional[bool] = Field(default=None, alias="instrumentalPreference")

    model_config = {"populate_by_name": True, "frozen": True}

    @property
    def is_empty(self) -> bool:
        """True when no pattern table matched."""
        return all(value is None for value in self.model_dump().values())


class MoodAnalysis(BaseModel):
    """Result of analyzing a text prompt."""
    primary_mood: str = Field(default="neutral", alias="primaryMood", min_length=1)
    secondary_moods: tuple[str, ...] = Field(default=(), alias="secondaryMoods", max_length=3)
    keywords: tuple[str, ...] = ()
    themes: tuple[str, ...] = ()
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)
    input_type: InputType = Field(default=InputType.MIXED, alias="inputType")
    scenario: Optional[Scenario] = None
    explanation: Optional[str] = None
    musical_qualities: Optional[tuple[str, ...]] = Field(default=None, alias="musicalQualities")

    model_config = {"populate_by_name": True, "frozen": True}

    def enriched(self, explanation: str, musical_qualities: list[str]) -> "MoodAnalysis":
        """Return a copy carrying the explanation and musical qualities."""
        return self.model_copy(
            update={
                "explanation": explanation,
                "musical_qualities": tuple(musical_qualities),
            }
        )


class MoodParams(BaseModel):
    """Target audio features sent with seed-track recommendation requests."""
    energy: float = Field(default=0.5, ge=0.0, le=1.0)
    valence: float = Field(default=0.5, ge=0.0, le=1.0)
    danceability: float = Field(default=0.5, ge=0.0, le=1.0)

    model_config = {"frozen": True}


class Track(BaseModel):
    """A track record as returned by the catalog."""
    id: str
    name: str
    artist: str = ""
    album: str = ""
    image_url: str = ""
    preview_url: Optional[str] = None
    external_url: str = ""

    model_config = {"frozen": True}

    @computed_field
    @property
    def uri(self) -> str:
        """Catalog URI used when adding the track to a playlist."""
        return f"spotify:track:{self.id}"

    @classmethod
    def from_spotify(cls, item: dict[str, Any]) -> "Track":
        """Build a Track from a Spotify Web API track object."""
        artists = item.get("artists") or []
        album = item.get("album") or {}
        images = album.get("images") or []
        return cls(
            id=item["id"],
            name=item.get("name", ""),
            artist=artists[0].get("name", "") if artists else "",
            album=album.get("name", ""),
            image_url=images[0].get("url", "") if images else "",
            preview_url=item.get("preview_url"),
            external_url=(item.get("external_urls") or {}).get("spotify", ""),
        )


class Recommendation(BaseModel):
    """A track recommended for a prompt, with a generated description."""
    id: str
    title: str
    artist: str
    album: str
    image_url: str = Field(default="", alias="imageUrl")
    preview_url: Optional[str] = Field(default=None, alias="previewUrl")
    spotify_url: str = Field(default="", alias="spotifyUrl")
    description: str = ""
    mood: str = "neutral"
    genres: tuple[str, ...] = ()
    tempo: int = 120
    colors: Optional[tuple[str, ...]] = None
    aesthetic: Optional[str] = None

    model_config = {"populate_by_name": True, "frozen": True}

    @property
    def uri(self) -> str:
        """Catalog URI derived from the Spotify URL (falls back to the id)."""
        track_id = self.spotify_url.rstrip("/").split("/")[-1] if self.spotify_url else ""
        return f"spotify:track:{track_id or self.id}"


class VisualFeatures(BaseModel):
    """Visual features of an image, each in [0, 1]."""
    brightness: float = Field(ge=0.0, le=1.0)
    contrast: float = Field(ge=0.0, le=1.0)
    saturation: float = Field(ge=0.0, le=1.0)
    warmth: float = Field(ge=0.0, le=1.0)

    model_config = {"frozen": True}


class ImageAnalysis(BaseModel):
    """Mood, palette and aesthetic derived from an image."""
    mood: str
    colors: tuple[str, ...]
    aesthetic: str
    confidence: float = Field(ge=0.0, le=1.0)
    visual_features: VisualFeatures = Field(alias="visualFeatures")
    description: str = ""

    model_config = {"populate_by_name": True, "frozen": True}
