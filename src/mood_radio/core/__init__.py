"""Core data models and errors."""

from .exceptions import (
    AuthError,
    AuthRequired,
    CatalogError,
    LowConfidenceAnalysis,
    MoodRadioError,
    NetworkError,
    NoRecommendationsFound,
)
from .models import (
    EnergyLevel,
    ImageAnalysis,
    InputType,
    MoodAnalysis,
    MoodParams,
    Recommendation,
    Scenario,
    SocialContext,
    Track,
    VisualFeatures,
)

__all__ = [
    "AuthError",
    "AuthRequired",
    "CatalogError",
    "EnergyLevel",
    "ImageAnalysis",
    "InputType",
    "LowConfidenceAnalysis",
    "MoodAnalysis",
    "MoodParams",
    "MoodRadioError",
    "NetworkError",
    "NoRecommendationsFound",
    "Recommendation",
    "Scenario",
    "SocialContext",
    "Track",
    "VisualFeatures",
]
