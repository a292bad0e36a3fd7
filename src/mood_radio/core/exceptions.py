"""Errors raised by the catalog client and the recommendation pipeline."""

from typing import Optional


class MoodRadioError(Exception):
    """Base class for all mood_radio errors."""


class CatalogError(MoodRadioError):
    """A catalog request failed."""


class AuthError(CatalogError):
    """Catalog credentials are missing, expired or lack permissions."""

    def __init__(self, message: str, login_url: Optional[str] = None) -> None:
        super().__init__(message)
        self.login_url = login_url


class NetworkError(CatalogError):
    """Transport failure or unexpected HTTP status from the catalog."""


class AuthRequired(MoodRadioError):
    """The user has to log in again before recommendations can be fetched."""

    def __init__(
        self,
        message: str = "Please log in to Spotify to continue.",
        login_url: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.login_url = login_url


class NoRecommendationsFound(MoodRadioError):
    """Every fallback search stage came back empty."""

    def __init__(
        self,
        message: str = (
            "Unable to find suitable recommendations. Please try a different "
            "description or be more specific about your preferences."
        ),
    ) -> None:
        super().__init__(message)


class LowConfidenceAnalysis(MoodRadioError):
    """Image analysis confidence was below the usable threshold."""

    def __init__(self, confidence: float) -> None:
        super().__init__(
            "Could not analyze the image with sufficient confidence "
            f"({confidence:.2f}). Please try a different image."
        )
        self.confidence = confidence
