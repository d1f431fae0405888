"""Episode model for scraped season page data."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..constants.config import EMPTY_DESCRIPTION


class EpisodeModel(BaseModel):
    """Pydantic model for one episode scraped from a season page."""
    
    number: int = Field(..., description="Episode number within its season (1-based)")
    title: str = Field(default="", description="Episode title")
    air: str = Field(default="", description="Air date exactly as scraped (e.g. '9/29/13')")
    has_aired: bool = Field(default=False, description="Whether the air date/time is in the past")
    rating: Optional[float] = Field(
        default=0.0,
        description="Episode rating; None when the episode has not aired"
    )
    description: str = Field(default=EMPTY_DESCRIPTION, description="Episode description")


class Coordinate(BaseModel):
    """A (season, episode) position in a series, both 1-based."""
    
    model_config = ConfigDict(frozen=True)
    
    season: int = Field(..., description="Season number")
    episode: int = Field(..., description="Episode number within the season")
