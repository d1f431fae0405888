"""Queries against a finalized series.

Season and episode numbers here are always 1-based, as typed by the user.
"""

import logging
import math
import re
from typing import List, Optional

from ..constants.config import SPEC_DELIMITER
from ..exceptions import SpecRangeException, SpecSyntaxException
from ..models.episode import Coordinate
from ..models.person import PersonModel
from ..models.series import SeriesModel
from ..utils.normalization import query_tokens


logger = logging.getLogger(__name__)

_SPEC_PATTERN = re.compile(rf"[0-9]+(?:{re.escape(SPEC_DELIMITER)}[0-9]+)*")


def parse_spec(text: str) -> List[int]:
    """
    Parse a selection spec such as "1,3,5".

    Order and duplicates are kept. An empty string selects nothing in
    particular (everything is in scope).

    Raises:
        SpecSyntaxException: If the text is anything but numbers separated
            by single delimiters
    """
    if text == "":
        return []
    if not _SPEC_PATTERN.fullmatch(text):
        raise SpecSyntaxException(text)
    return [int(value) for value in text.split(SPEC_DELIMITER)]


def validate_selection(
    series: SeriesModel,
    seasons: List[int],
    episodes: List[int],
) -> None:
    """
    Check season and episode specs against the series.

    Every problem is collected before anything is raised so the user can fix
    them all in one go.

    Raises:
        SpecRangeException: With one message per problem
    """
    title = series.title.proper
    messages: List[str] = []

    if episodes and not seasons:
        invalid = [e for e in episodes if not 1 <= e <= series.total_episodes]
        if invalid:
            messages.extend(f"invalid episode specified -- {e}" for e in invalid)
            messages.append(f"\"{title}\" has a total of {series.total_episodes} episodes")
            messages.append(f"specify a value between 1-{series.total_episodes}")

    valid_seasons = [s for s in seasons if 1 <= s <= series.total_seasons]
    if len(valid_seasons) != len(seasons):
        messages.extend(
            f"invalid season specified -- {s}" for s in seasons if s not in valid_seasons
        )
        messages.append(f"\"{title}\" has a total of {series.total_seasons} seasons")
        messages.append(f"specify a value between 1-{series.total_seasons}")

    if episodes:
        for number in valid_seasons:
            total = series.season(number).total_episodes
            invalid = [e for e in episodes if not 1 <= e <= total]
            if invalid:
                messages.extend(
                    f"invalid episode specified for season {number} -- {e}" for e in invalid
                )
                messages.append(
                    f"season {number} of \"{title}\" has a total of {total} episodes"
                )
                messages.append(f"specify value(s) between 1-{total}")

    if messages:
        raise SpecRangeException(messages)


def select_episodes(
    series: SeriesModel,
    seasons: List[int],
    episodes: List[int],
) -> List[Coordinate]:
    """
    Turn season and episode specs into episode coordinates.

    - no specs: every episode
    - seasons only: every episode of each season
    - episodes only: each number is read both as a position within every
      season and as a running number across the series, and episodes
      matching either reading are selected
    - both: every season paired with every episode number
    """
    if not seasons and not episodes:
        return series.coordinates()

    if seasons and not episodes:
        return [
            Coordinate(season=number, episode=episode.number)
            for number in seasons
            for episode in series.season(number).episodes
        ]

    if episodes and not seasons:
        selected: List[Coordinate] = []
        for wanted in episodes:
            overall = 0
            for season in series.seasons:
                for episode in season.episodes:
                    overall += 1
                    if wanted == overall or wanted == episode.number:
                        selected.append(Coordinate(season=season.number, episode=episode.number))
        return selected

    return [
        Coordinate(season=season, episode=episode)
        for season in seasons
        for episode in episodes
    ]


def find_rated_extremes(series: SeriesModel, highest: bool = True) -> List[Coordinate]:
    """
    Find the highest (or lowest) rated aired episodes.

    Every aired episode sharing the extreme rating is returned, in series
    order, so ties can be reported.
    """
    best = -math.inf if highest else math.inf
    for coordinate in series.coordinates():
        episode = series.episode(coordinate)
        if not episode.has_aired or episode.rating is None:
            continue
        if (highest and episode.rating > best) or (not highest and episode.rating < best):
            best = episode.rating

    if math.isinf(best):
        logger.debug("no rated episodes have aired for %s", series.title.proper)
        return []

    ties: List[Coordinate] = []
    for coordinate in series.coordinates():
        episode = series.episode(coordinate)
        if episode.has_aired and episode.rating == best and coordinate not in ties:
            ties.append(coordinate)
    return ties


def find_last_aired(series: SeriesModel) -> Optional[Coordinate]:
    """Walk back from the final episode to the most recent one that has aired."""
    for season in reversed(series.seasons):
        for episode in reversed(season.episodes):
            if episode.has_aired:
                return Coordinate(season=season.number, episode=episode.number)
    return None


def find_next_to_air(series: SeriesModel) -> Optional[Coordinate]:
    """
    Find the episode after the last aired one.

    None when nothing has aired yet or the last aired episode is the finale.
    """
    last = find_last_aired(series)
    if last is None:
        return None

    coordinates = series.coordinates()
    position = coordinates.index(last)
    if position == len(coordinates) - 1:
        return None
    return coordinates[position + 1]


def search_cast(series: SeriesModel, query: str = "") -> List[PersonModel]:
    """
    Find cast members whose name or role contains any word of the query.

    An empty query matches everyone.
    """
    tokens = query_tokens(query)
    if not tokens:
        return list(series.cast)
    return [
        person
        for person in series.cast
        if any(token in person.name.lower() or token in person.role.lower() for token in tokens)
    ]
