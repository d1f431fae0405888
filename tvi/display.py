"""Render series data and query results as text."""

import shutil
from typing import List, Optional

import click

from .constants.config import (
    DEFAULT_TERMINAL_WIDTH,
    DESCRIPTION_INDENT_RATIO,
    EMPTY_DESCRIPTION,
    NOT_RATED,
    SEASON_DESCRIPTION,
    UNDEFINED_RATING,
)
from .models.episode import Coordinate
from .models.options import DisplayOptions, QueryOptions
from .models.person import PersonModel
from .models.series import SeriesModel
from .processors.selection import (
    find_last_aired,
    find_next_to_air,
    find_rated_extremes,
    search_cast,
    select_episodes,
    validate_selection,
)


def terminal_width() -> int:
    return shutil.get_terminal_size((DEFAULT_TERMINAL_WIDTH, 24)).columns


def format_rating(rating: Optional[float]) -> str:
    return UNDEFINED_RATING if rating is None else f"{rating:.1f}"


def wrap_description(description: str, width: int) -> str:
    """Wrap a description, indenting the first line twice as deep as the rest."""
    indent = int(width * DESCRIPTION_INDENT_RATIO)
    return click.wrap_text(
        " ".join(description.split()),
        width=width,
        initial_indent=" " * (indent * 2),
        subsequent_indent=" " * indent,
    )


def format_episode(
    series: SeriesModel,
    coordinate: Coordinate,
    display: DisplayOptions,
    width: int,
) -> str:
    episode = series.episode(coordinate)
    lines = [f"Season {coordinate.season} Episode {coordinate.episode}: {episode.title}"]

    if display.rating:
        rating = format_rating(episode.rating) if episode.has_aired else NOT_RATED
        lines.append(f"  Rating:      {rating}")

    if display.air:
        suffix = "" if episode.has_aired else " (not yet aired)"
        lines.append(f"  Air Date:    {episode.air}{suffix}")

    if display.description:
        if episode.description == EMPTY_DESCRIPTION:
            lines.append(f"  Description: {episode.description}")
        else:
            lines.append("  Description:")
            lines.append(wrap_description(episode.description, width))
        lines.append("")

    return "\n".join(lines)


def format_episodes(
    series: SeriesModel,
    coordinates: List[Coordinate],
    display: DisplayOptions,
    width: int,
) -> str:
    return "\n".join(format_episode(series, c, display, width) for c in coordinates)


def format_series_info(series: SeriesModel, width: int) -> str:
    """Overview: size, air span, schedule, ratings and description."""
    title = series.title.proper
    schedule = series.schedule
    lines = [
        f"{title} ({series.total_seasons} seasons, {series.total_episodes} episodes) "
        f"{series.air_start} - {series.air_end}"
    ]
    if schedule.network:
        if schedule.ended:
            lines.append(f"Ended in {schedule.time} on {schedule.network}")
        else:
            lines.append(f"Airs {schedule.day}s at {schedule.time} on {schedule.network}")
    for season in series.seasons:
        lines.append(f"Season {season.number} rating: {format_rating(season.rating)}")
    lines.append(f"Series overall rating: {format_rating(series.rating)}")
    lines.append(wrap_description(series.description, width))
    return "\n".join(lines)


def format_summary(
    series: SeriesModel,
    seasons: List[int],
    display: DisplayOptions,
    width: int,
) -> str:
    """
    Summarize the requested attributes for the whole series, or per season
    when seasons were given.
    """
    labelled = display.count > 1
    lines: List[str] = []

    if not seasons:
        if labelled:
            lines.append(f"{series.title.proper}:")
        if display.air:
            label = "  Air dates:   " if labelled else ""
            lines.append(f"{label}{series.air_start} - {series.air_end}")
        if display.rating:
            label = "  Rating:      " if labelled else ""
            lines.append(f"{label}{format_rating(series.rating)}")
        if display.description:
            if series.description == EMPTY_DESCRIPTION:
                label = "  Description: " if labelled else ""
                lines.append(f"{label}{series.description}")
            else:
                if labelled:
                    lines.append("  Description:")
                lines.append(wrap_description(series.description, width))
        return "\n".join(lines)

    indent = "  " if len(seasons) > 1 else ""
    for number in seasons:
        season = series.season(number)
        if len(seasons) > 1:
            lines.append(f"Season {number}:")
        if display.air:
            label = "Air dates:   " if labelled else ""
            first = season.episodes[0].air if season.episodes else ""
            last = season.episodes[-1].air if season.episodes else ""
            lines.append(f"{indent}{label}{first} - {last}")
        if display.rating:
            label = "Rating:      " if labelled else ""
            lines.append(f"{indent}{label}{format_rating(season.rating)}")
        if display.description:
            label = "Description: " if labelled else ""
            lines.append(f"{indent}{label}{SEASON_DESCRIPTION}")
    return "\n".join(lines)


def format_cast(series: SeriesModel, people: List[PersonModel], query: str = "") -> str:
    """Two column name/role table."""
    heading = f'matching "{query}"' if query else "all"
    longest = max((len(person.name) for person in people), default=0)
    longest = max(longest, len("Name"))
    rows = [("Name", "Role"), ("----", "----")]
    rows.extend((person.name, person.role) for person in people)
    lines = [f"{series.title.proper} cast and crew ({heading}):"]
    lines.extend(f"  {name.ljust(longest)}    {role}".rstrip() for name, role in rows)
    return "\n".join(lines)


def format_extremes(
    series: SeriesModel,
    coordinates: List[Coordinate],
    highest: bool,
    display: DisplayOptions,
    width: int,
) -> str:
    direction = "highest" if highest else "lowest"
    if not coordinates:
        return f"\"{series.title.proper}\" has no rated episodes."
    parts = []
    if len(coordinates) > 1:
        parts.append(
            f"There is a tie between {len(coordinates)} {direction} rated episodes "
            f"of \"{series.title.proper}\".\n"
        )
    parts.append(format_episodes(series, coordinates, display, width))
    return "\n".join(parts)


def format_air_query(
    series: SeriesModel,
    coordinate: Optional[Coordinate],
    last: bool,
    display: DisplayOptions,
    width: int,
) -> str:
    """Render the last aired or next to air episode, or why there is none."""
    title = series.title.proper
    if coordinate is not None:
        return format_episode(series, coordinate, display, width)
    if last or find_last_aired(series) is None:
        return f"\"{title}\" has not yet aired any episodes."
    return f"\"{title}\" has no new episodes.\nThe last episode aired on {series.air_end}."


def render_series(
    series: SeriesModel,
    query: QueryOptions,
    display: DisplayOptions,
    width: Optional[int] = None,
) -> str:
    """
    Answer a query against a finalized series.

    Raises:
        SpecRangeException: If the season/episode specs do not fit the series
    """
    if width is None:
        width = terminal_width()

    if query.info:
        return format_series_info(series, width)

    if query.cast is not None:
        return format_cast(series, search_cast(series, query.cast), query.cast)

    if query.highest_rated or query.lowest_rated:
        coordinates = find_rated_extremes(series, highest=query.highest_rated)
        forced = DisplayOptions(air=True, description=True, rating=True)
        return format_extremes(series, coordinates, query.highest_rated, forced, width)

    if query.last:
        forced = DisplayOptions(air=True, description=True, rating=True)
        return format_air_query(series, find_last_aired(series), True, forced, width)

    if query.next:
        forced = DisplayOptions(air=True, description=True)
        return format_air_query(series, find_next_to_air(series), False, forced, width)

    validate_selection(series, query.seasons, query.episodes)

    if display.any and not query.episodes:
        return format_summary(series, query.seasons, display, width)

    coordinates = select_episodes(series, query.seasons, query.episodes)
    return format_episodes(series, coordinates, display, width)
