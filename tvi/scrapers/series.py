"""Series model builder for tv.com pages.

Each ``parse_*`` function reads one kind of page (search results, episodes
index, season, cast) and fills in the matching level of a ``SeriesModel``.
Missing fields never raise here; they come back empty and are logged.
"""

import logging
from typing import List, Optional

from ..constants.config import EMPTY_DESCRIPTION
from ..constants.landmarks import (
    CAST_NAME,
    CAST_ROLE,
    EPISODE_AIR,
    EPISODE_DESCRIPTION,
    EPISODE_MARKER,
    EPISODE_RATING,
    SEARCH_HREF,
    SEARCH_SHOW,
    SEASON_MARKER,
    SERIES_DESCRIPTION,
    SERIES_TAGLINE,
    SERIES_TITLE,
    SERIES_TITLE_END,
    TAGLINE_ENDED,
)
from ..models.episode import EpisodeModel
from ..models.person import PersonModel
from ..models.series import ScheduleModel, SeasonModel, SeriesModel
from .markup import (
    extract_rich_span,
    extract_span,
    probe_until_miss,
    recover_anchor_title,
)


logger = logging.getLogger(__name__)


def parse_search_page(html: str) -> Optional[str]:
    """
    Get the URL title of the first show in a search results page.

    Args:
        html: Raw search page HTML

    Returns:
        URL title (e.g. "the-wire"), or None if there is no show result
    """
    result = html.find(SEARCH_SHOW)
    if result < 0:
        return None
    url_title = extract_span(html, SEARCH_HREF, "/", start=result).text.strip()
    return url_title or None


def parse_series_title(html: str) -> str:
    """Get the display title, which is the page title up to the dash."""
    title = extract_span(html, SERIES_TITLE, SERIES_TITLE_END).text.strip()
    if not title:
        logger.debug("failed to parse proper title")
    return title


def parse_series_description(html: str) -> str:
    description = extract_span(html, SERIES_DESCRIPTION, '"').text.strip()
    if not description:
        logger.debug("failed to parse series description")
        return EMPTY_DESCRIPTION
    return description


def parse_schedule(tagline: str) -> ScheduleModel:
    """
    Parse a schedule tagline.

    Two forms exist:
        "NETWORK (ended YEAR)", e.g. "AMC (ended 2013)"
        "DAY TIME on NETWORK", e.g. "Sunday 9:00 PM on HBO"

    For ended series the year is stored as the schedule time.
    """
    schedule = ScheduleModel()
    tagline = tagline.strip()
    if not tagline:
        return schedule

    ended = tagline.find(TAGLINE_ENDED)
    if ended >= 0:
        schedule.ended = True
        schedule.network = tagline[:ended].rstrip(" (")
        schedule.time = tagline[ended + len(TAGLINE_ENDED):].split(")")[0].strip()
        return schedule

    when, _, network = tagline.partition(" on ")
    words = when.split()
    schedule.day = words[0] if words else ""
    schedule.time = " ".join(words[1:3])
    schedule.network = network.strip()
    return schedule


def parse_episodes_page(series: SeriesModel, html: str) -> SeriesModel:
    """
    Fill in the series level fields from the episodes index page.

    Seasons are counted by probing for "Season 1", "Season 2"... until one
    is missing; each one found adds an empty season to be filled by
    ``parse_season_page``.

    Args:
        series: Series to fill in
        html: Raw episodes page HTML

    Returns:
        The same series
    """
    series.title.proper = parse_series_title(html)
    series.description = parse_series_description(html)

    tagline = extract_span(html, SERIES_TAGLINE, "<")
    if tagline.found:
        series.schedule = parse_schedule(tagline.text)
    else:
        logger.debug("no schedule tagline for \"%s\"", series.title.proper)

    series.seasons = [
        SeasonModel(number=number)
        for number, _ in probe_until_miss(html, SEASON_MARKER)
    ]
    logger.debug("found %d seasons of \"%s\"", len(series.seasons), series.title.proper)
    return series


def _parse_rating(text: str, title: str) -> float:
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        logger.debug("unreadable rating %r for \"%s\"", text, title)
        return 0.0


def parse_episode(html: str, number: int, start: int, end: Optional[int]) -> EpisodeModel:
    """
    Parse one episode whose "Episode N" marker is at ``start``.

    Args:
        html: Raw season page HTML
        number: Episode number within the season
        start: Offset of the episode marker
        end: Offset of the following episode marker, or None

    Returns:
        EpisodeModel with has_aired not yet derived
    """
    title = recover_anchor_title(html, start)
    air = extract_span(html, EPISODE_AIR, "<", start, end).text.strip()
    rating_text = extract_span(
        html, EPISODE_RATING, "<", start, end, skip_past=">"
    ).text.strip()
    description = extract_rich_span(html, EPISODE_DESCRIPTION, start, end).text

    if not description:
        logger.debug("failed to parse episode description (\"%s\")", title)
        description = EMPTY_DESCRIPTION

    return EpisodeModel(
        number=number,
        title=title,
        air=air,
        rating=_parse_rating(rating_text, title),
        description=description,
    )


def parse_season_page(html: str, number: int) -> SeasonModel:
    """
    Parse a season page into a season with its episodes.

    Episodes are found by probing for "Episode 1", "Episode 2"... until one
    is missing. Field searches for an episode stop at the next marker on the
    page so a missing field is never taken from a neighbouring episode.
    """
    season = SeasonModel(number=number)
    markers = list(probe_until_miss(html, EPISODE_MARKER))
    offsets = sorted(pos for _, pos in markers)

    for episode_number, pos in markers:
        end = next((offset for offset in offsets if offset > pos), None)
        season.episodes.append(parse_episode(html, episode_number, pos, end))

    return season


def parse_cast_page(html: str) -> List[PersonModel]:
    """
    Parse the cast page into people.

    Each name anchor starts a person; the role is the first role block
    after the name and before the next name.
    """
    people: List[PersonModel] = []
    pos = html.find(CAST_NAME)

    while pos >= 0:
        next_pos = html.find(CAST_NAME, pos + len(CAST_NAME))
        name = extract_span(html, CAST_NAME, "<", start=pos, skip_past=">")
        role = extract_span(
            html,
            CAST_ROLE,
            "<",
            start=name.end if name.found else pos,
            end=next_pos if next_pos >= 0 else None,
        )
        people.append(PersonModel(name=name.text.strip(), role=role.text.strip()))
        pos = next_pos

    logger.debug("found %d cast members", len(people))
    return people
