"""Radio stations preloaded concurrently from canned prompts.

The daily-pulse and trending stations run their pipelines concurrently.
A failing station records its error without affecting the others, and a
track shown by an earlier station is never repeated by a later one. The
echo-chamber station then expands on the tracks the other stations found.
"""

import asyncio
import logging
from datetime import datetime
from typing import Callable, NamedTuple, Optional

from pydantic import BaseModel

from ..config import STATION_RESULT_LIMIT
from ..core.exceptions import MoodRadioError
from ..core.models import Recommendation
from .recommender import MoodRecommender

logger = logging.getLogger(__name__)

TRENDING_PROMPT = "popular music trending now"

# (start hour inclusive, end hour exclusive, time of day, theme, prompt)
DAILY_PULSE_THEMES = (
    (5, 12, "morning", "Early Morning Jams", "upbeat energetic morning music"),
    (12, 17, "afternoon", "Mid Day Hits", "happy upbeat afternoon hits"),
    (17, 22, "evening", "Evening Vibes", "chill relaxing evening vibes"),
)
LATE_NIGHT_THEME = ("night", "Late Night Jams", "chill mellow late night music")


class StationPrompt(NamedTuple):
    """What a station is called and the prompt that fills it."""
    key: str
    title: str
    prompt: str


class Station(BaseModel):
    """A loaded station: its tracks, or the error that prevented loading."""
    key: str
    title: str
    prompt: str
    recommendations: list[Recommendation] = []
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def daily_pulse_theme(hour: int) -> tuple[str, str, str]:
    """Return (time of day, theme title, prompt) for an hour of the day."""
    for start, end, time_of_day, theme, prompt in DAILY_PULSE_THEMES:
        if start <= hour < end:
            return time_of_day, theme, prompt
    return LATE_NIGHT_THEME


class StationLoader:
    """Loads every station for a recommender.

    Args:
        recommender: Recommender the station prompts are sent to.
        limit: Maximum tracks per station.
        now: Callable returning the current local time (daily-pulse theme).
    """

    def __init__(
        self,
        recommender: MoodRecommender,
        limit: int = STATION_RESULT_LIMIT,
        now: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.recommender = recommender
        self.limit = limit
        self._now = now or datetime.now

    def station_prompts(self) -> list[StationPrompt]:
        """Stations filled directly from a prompt, in priority order."""
        _, theme, prompt = daily_pulse_theme(self._now().hour)
        return [
            StationPrompt("daily-pulse", theme, prompt),
            StationPrompt("trending", "Trending Now", TRENDING_PROMPT),
        ]

    async def _load_echo_chamber(
        self, seeds: list[Recommendation], played: set[str]
    ) -> Station:
        prompt = self.station_prompts()[0].prompt
        station = Station(key="echo-chamber", title="Echo Chamber", prompt=prompt)
        if not seeds:
            station.error = "No seed tracks available"
            return station
        try:
            analysis = self.recommender.analyze_text(prompt)
            expanded = await self.recommender.expand_from_seeds(seeds, analysis)
        except MoodRadioError as e:
            logger.warning("Station echo-chamber failed: %s", e)
            station.error = str(e)
            return station
        station.recommendations = self._take_unplayed(expanded, played)
        return station

    def _take_unplayed(
        self, recommendations: list[Recommendation], played: set[str]
    ) -> list[Recommendation]:
        fresh = [rec for rec in recommendations if rec.id not in played][: self.limit]
        played.update(rec.id for rec in fresh)
        return fresh

    async def load_all(self) -> list[Station]:
        """Load every station; errors are recorded per station, not raised."""
        entries = self.station_prompts()
        results = await asyncio.gather(
            *(self.recommender.get_recommendations_from_text(entry.prompt) for entry in entries),
            return_exceptions=True,
        )

        played: set[str] = set()
        stations: list[Station] = []
        for entry, result in zip(entries, results):
            station = Station(key=entry.key, title=entry.title, prompt=entry.prompt)
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.warning("Station %s failed: %s", entry.key, result)
                station.error = str(result)
            else:
                station.recommendations = self._take_unplayed(result, played)
                logger.info("Station %s loaded %d tracks", entry.key, len(station.recommendations))
            stations.append(station)

        seeds = [rec for station in stations for rec in station.recommendations]
        stations.append(await self._load_echo_chamber(seeds, played))
        return stations
