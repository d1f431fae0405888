"""Fetch tv.com pages and build a series from them."""

import asyncio
import logging
from datetime import datetime
from typing import Callable, Optional

import aiohttp

from ..constants.config import (
    CAST_URL,
    EPISODES_URL,
    FETCH_TIMEOUT,
    SEARCH_URL,
    SEASON_URL,
    USER_AGENT,
)
from ..exceptions import FetchException, SeriesNotFoundException
from ..models.series import SeriesModel, SeriesTitle
from ..processors.derived import finalize_series
from ..utils.normalization import encode_search_title, guess_url_title
from .series import (
    parse_cast_page,
    parse_episodes_page,
    parse_search_page,
    parse_season_page,
)


logger = logging.getLogger(__name__)


async def fetch_page(session: aiohttp.ClientSession, url: str) -> str:
    """
    Fetch a single page. There is exactly one attempt per URL.

    Args:
        session: aiohttp session
        url: Page URL

    Returns:
        Page text

    Raises:
        FetchException: On any non-200 response or client error
    """
    logger.debug("connecting to \"%s\"...", url)
    try:
        async with session.get(url) as response:
            if response.status != 200:
                raise FetchException(url, response.status)
            return await response.text()
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise FetchException(url, reason=str(e) or type(e).__name__) from e


async def retrieve_series(
    given_title: str,
    with_cast: bool = False,
    on_page_fetched: Optional[Callable[[str], None]] = None,
    now: Optional[datetime] = None,
) -> SeriesModel:
    """
    Build a series from the search, episodes index and season (or cast) pages.

    Pages are fetched one after another. When ``with_cast`` is set, the cast
    page is fetched instead of the season pages.

    Args:
        given_title: Title as typed by the user
        with_cast: Fetch the cast page instead of the season pages
        on_page_fetched: Callback with each URL once its page is fetched
        now: Reference time for air status (defaults to the current time)

    Returns:
        Populated SeriesModel

    Raises:
        SeriesNotFoundException: If the episodes index is unreachable or
            does not name a series
        FetchException: If the cast page cannot be fetched
    """
    series = SeriesModel(title=SeriesTitle(given=given_title))
    timeout = aiohttp.ClientTimeout(total=FETCH_TIMEOUT)

    async with aiohttp.ClientSession(headers={"User-Agent": USER_AGENT}, timeout=timeout) as session:

        async def get(url: str) -> str:
            html = await fetch_page(session, url)
            if on_page_fetched:
                on_page_fetched(url)
            return html

        search_url = SEARCH_URL.format(title=encode_search_title(given_title))
        url_title: Optional[str] = None
        try:
            url_title = parse_search_page(await get(search_url))
        except FetchException as e:
            logger.warning("search failed: %s", e)

        if not url_title:
            url_title = guess_url_title(given_title)
            logger.debug("guessed URL title for \"%s\": \"%s\"", given_title, url_title)
        series.title.url = url_title

        try:
            index_html = await get(EPISODES_URL.format(url_title=url_title))
        except FetchException as e:
            raise SeriesNotFoundException(given_title) from e

        parse_episodes_page(series, index_html)
        if not series.title.proper:
            raise SeriesNotFoundException(given_title)

        if with_cast:
            series.cast = parse_cast_page(await get(CAST_URL.format(url_title=url_title)))
            return series

        for index, season in enumerate(series.seasons):
            url = SEASON_URL.format(url_title=url_title, number=season.number)
            try:
                season_html = await get(url)
            except FetchException as e:
                logger.warning("season %d left empty: %s", season.number, e)
                continue
            series.seasons[index] = parse_season_page(season_html, season.number)
            if not series.seasons[index].episodes:
                logger.warning("no episodes found on \"%s\"", url)

    return finalize_series(series, now)
