"""Attributes derived from a fully scraped series.

Run ``finalize_series`` once every season page has been parsed: it decides
which episodes have aired and computes the season and series aggregates.
"""

import logging
from datetime import datetime
from statistics import fmean
from typing import Optional

from ..constants.config import AIR_DATE_FORMAT, AIR_DATETIME_FORMAT
from ..models.episode import EpisodeModel
from ..models.series import ScheduleModel, SeasonModel, SeriesModel


logger = logging.getLogger(__name__)


def parse_air_time(air: str, schedule_time: str) -> datetime:
    """
    Combine an episode air date with the broadcast time of day.

    The time is only used when it looks like a clock time (contains a colon);
    ended series keep their final year in that field instead.

    Raises:
        ValueError: If the combined string does not match the air date layout
    """
    if ":" in schedule_time:
        return datetime.strptime(f"{air} {schedule_time}", AIR_DATETIME_FORMAT)
    return datetime.strptime(air, AIR_DATE_FORMAT)


def set_episode_has_aired(
    episode: EpisodeModel,
    schedule: ScheduleModel,
    now: datetime,
) -> bool:
    """
    Decide whether an episode has aired and drop ratings of those that have not.

    Ratings shown on the site before an episode airs are placeholders, so
    unaired episodes always end up with ``rating = None``.
    """
    episode.has_aired = False
    if not episode.air:
        logger.debug("no air date for \"%s\"", episode.title)
    else:
        try:
            episode.has_aired = parse_air_time(episode.air, schedule.time) < now
        except ValueError:
            logger.error(
                "failed to get time value from air date/time \"%s %s\"",
                episode.air,
                schedule.time,
            )

    if not episode.has_aired:
        episode.rating = None
    return episode.has_aired


def set_season_rating(season: SeasonModel) -> Optional[float]:
    """Average the ratings of aired episodes; None if nothing has aired."""
    ratings = [
        episode.rating
        for episode in season.episodes
        if episode.has_aired and episode.rating is not None
    ]
    season.rating = fmean(ratings) if ratings else None
    return season.rating


def set_series_rating(series: SeriesModel) -> Optional[float]:
    """Average the season ratings, skipping seasons without one."""
    ratings = [season.rating for season in series.seasons if season.rating is not None]
    series.rating = fmean(ratings) if ratings else None
    return series.rating


def set_series_air_span(series: SeriesModel) -> None:
    """Set the first and last air dates from the first and last episodes."""
    seasons = [season for season in series.seasons if season.episodes]
    series.air_start = seasons[0].episodes[0].air if seasons else ""
    series.air_end = seasons[-1].episodes[-1].air if seasons else ""


def finalize_series(series: SeriesModel, now: Optional[datetime] = None) -> SeriesModel:
    """
    Derive air status and aggregates for a series whose pages are all parsed.

    Args:
        series: Fully scraped series
        now: Reference time (defaults to the current local time)

    Returns:
        The same series
    """
    if now is None:
        now = datetime.now()

    for season in series.seasons:
        for episode in season.episodes:
            set_episode_has_aired(episode, series.schedule, now)
        set_season_rating(season)

    series.total_episodes = sum(season.total_episodes for season in series.seasons)
    set_series_rating(series)
    set_series_air_span(series)
    return series
