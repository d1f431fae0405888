"""Series and season models.

A ``SeriesModel`` is created empty for each run, filled in page by page by
``tvi.scrapers.series`` and ``tvi.processors.derived``, and then only read
by the query and display layers.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from ..constants.config import EMPTY_DESCRIPTION
from .episode import Coordinate, EpisodeModel
from .person import PersonModel


class ScheduleModel(BaseModel):
    """Broadcast schedule parsed from the index page tagline."""
    
    ended: bool = Field(default=False, description="Whether the series has ended")
    day: str = Field(default="", description="Broadcast weekday, e.g. 'Sunday'")
    time: str = Field(
        default="",
        description="Broadcast time (e.g. '9:00 PM'), or the final year once ended"
    )
    network: str = Field(default="", description="Broadcasting network")


class SeriesTitle(BaseModel):
    """The three forms of a series title."""
    
    proper: str = Field(default="", description="Display title, e.g. 'The Wire'")
    url: str = Field(default="", description="URL form, e.g. 'the-wire'")
    given: str = Field(default="", description="Title as typed by the user, e.g. 'the wire'")


class SeasonModel(BaseModel):
    """One season and its episodes."""
    
    number: int = Field(..., description="Season number (1-based)")
    episodes: List[EpisodeModel] = Field(default_factory=list, description="Episodes in air order")
    rating: Optional[float] = Field(
        default=None,
        description="Mean rating of aired episodes; None when none have aired"
    )
    
    @property
    def total_episodes(self) -> int:
        return len(self.episodes)


class SeriesModel(BaseModel):
    """A TV series with its seasons, schedule and cast."""
    
    title: SeriesTitle = Field(default_factory=SeriesTitle, description="Series title forms")
    description: str = Field(default=EMPTY_DESCRIPTION, description="Series description")
    rating: Optional[float] = Field(
        default=None,
        description="Mean of the defined season ratings; None when no season has one"
    )
    seasons: List[SeasonModel] = Field(default_factory=list, description="Seasons in order")
    total_episodes: int = Field(default=0, description="Episode count across all seasons")
    air_start: str = Field(default="", description="Air date of the first episode")
    air_end: str = Field(default="", description="Air date of the last episode")
    schedule: ScheduleModel = Field(default_factory=ScheduleModel, description="Broadcast schedule")
    cast: List[PersonModel] = Field(default_factory=list, description="Cast and crew")
    
    @property
    def total_seasons(self) -> int:
        return len(self.seasons)
    
    def season(self, number: int) -> SeasonModel:
        """Get a season by its 1-based number."""
        return self.seasons[number - 1]
    
    def episode(self, coordinate: Coordinate) -> EpisodeModel:
        """Get the episode at a 1-based (season, episode) coordinate."""
        return self.seasons[coordinate.season - 1].episodes[coordinate.episode - 1]
    
    def coordinates(self) -> List[Coordinate]:
        """All episode coordinates in series order."""
        return [
            Coordinate(season=season.number, episode=episode.number)
            for season in self.seasons
            for episode in season.episodes
        ]
