import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import pytest

# Ensure root path is available for imports
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from tvi.models.episode import EpisodeModel  # noqa: E402
from tvi.models.person import PersonModel  # noqa: E402
from tvi.models.series import SeasonModel, SeriesModel, SeriesTitle  # noqa: E402
from tvi.processors.derived import finalize_series  # noqa: E402

NOW = datetime(2014, 1, 1, 12, 0)
AIRED_DATE = "3/14/10"
UNAIRED_DATE = "3/14/30"


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_series():
    """Build a finalized series from per-season rating lists; None marks an unaired episode."""

    def _make(*seasons: list[Optional[float]], title: str = "Test Show") -> SeriesModel:
        series = SeriesModel(title=SeriesTitle(proper=title, url="test-show", given="test show"))
        for season_number, ratings in enumerate(seasons, start=1):
            season = SeasonModel(number=season_number)
            for episode_number, rating in enumerate(ratings, start=1):
                season.episodes.append(EpisodeModel(
                    number=episode_number,
                    title=f"Episode {season_number}x{episode_number}",
                    air=AIRED_DATE if rating is not None else UNAIRED_DATE,
                    rating=rating if rating is not None else 0.0,
                ))
            series.seasons.append(season)
        return finalize_series(series, NOW)

    return _make


@pytest.fixture
def cast_series(make_series) -> SeriesModel:
    series = make_series([8.0])
    series.cast = [
        PersonModel(name="Dominic West", role="Jimmy McNulty"),
        PersonModel(name="Idris Elba", role="Stringer Bell"),
        PersonModel(name="Wendell Pierce", role="Bunk Moreland"),
    ]
    return series


def build_episodes_page(
    title: str = "The Wire",
    description: Optional[str] = "Crime drama set in Baltimore.",
    tagline: Optional[str] = "HBO (ended 2008)",
    seasons: int = 2,
) -> str:
    parts = [f"<html><head><title>{title} - Episodes, Season Guides and more</title>"]
    if description is not None:
        parts.append(f'<meta property="og:description" content="{description}"/>')
    parts.append("</head><body>")
    if tagline is not None:
        parts.append(f'<div class="tagline">{tagline}</div>')
    for number in range(1, seasons + 1):
        parts.append(f'<li><a href="/shows/the-wire/season-{number}/"><strong>Season {number}</strong></a></li>')
    parts.append("</body></html>")
    return "\r\n".join(parts)


def build_episode_block(
    number: int,
    title: str,
    air: str = AIRED_DATE,
    rating: Optional[str] = "8.5",
    description: Optional[str] = "Something happens.",
) -> str:
    block = (
        f'<li class="episode"><div class="title"><a class="title" href="/shows/x/ep-{number}/">{title}</a></div>\r\n'
        f'<div class="ep_info">Episode {number}\r\n</div>\r\n'
        f'<div class="date">{air}</div>\r\n'
    )
    if rating is not None:
        block += f'<div class="score"><span class="number" id="ep_{number}_rating">{rating}</span></div>\r\n'
    if description is not None:
        block += f'<div class="description">{description}</div>\r\n'
    return block + "</li>\r\n"


def build_season_page(*blocks: str) -> str:
    return "<html><body><ul>\r\n" + "".join(blocks) + "</ul></body></html>"


def build_cast_page(*people: tuple[str, Optional[str]]) -> str:
    parts = ["<html><body>"]
    for name, role in people:
        parts.append(f'<div class="person"><a itemprop="name" href="/people/x/">{name}</a>')
        if role is not None:
            parts.append(f'<div class="role">{role}</div>')
        parts.append("</div>")
    parts.append("</body></html>")
    return "\r\n".join(parts)


def build_search_page(url_title: Optional[str]) -> str:
    if url_title is None:
        return '<html><body><div class="no_results">No results</div></body></html>'
    return (
        '<html><body><ul><li class="result person"><a href="/people/someone/">Someone</a></li>'
        f'<li class="result show"><div class="info"><a href="/shows/{url_title}/">Show</a></div></li>'
        "</ul></body></html>"
    )


@pytest.fixture
def pages():
    """Page builders for tv.com templates."""

    class Pages:
        episodes = staticmethod(build_episodes_page)
        episode = staticmethod(build_episode_block)
        season = staticmethod(build_season_page)
        cast = staticmethod(build_cast_page)
        search = staticmethod(build_search_page)

    return Pages
