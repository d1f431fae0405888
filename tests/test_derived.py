import logging
from datetime import datetime

import pytest

from tvi.models.episode import EpisodeModel
from tvi.models.series import ScheduleModel, SeasonModel, SeriesModel
from tvi.processors.derived import (
    finalize_series,
    parse_air_time,
    set_episode_has_aired,
    set_season_rating,
    set_series_rating,
)


def test_parse_air_time_with_clock_time():
    assert parse_air_time("9/29/13", "9:00 PM") == datetime(2013, 9, 29, 21, 0)


def test_parse_air_time_ignores_non_clock_time():
    assert parse_air_time("9/29/13", "2013") == datetime(2013, 9, 29)


def test_parse_air_time_rejects_other_layouts():
    with pytest.raises(ValueError):
        parse_air_time("September 29, 2013", "9:00 PM")


def test_has_aired_uses_broadcast_time():
    schedule = ScheduleModel(day="Sunday", time="9:00 PM", network="AMC")
    episode = EpisodeModel(number=1, air="9/29/13", rating=9.9)

    assert not set_episode_has_aired(episode, schedule, datetime(2013, 9, 29, 20, 59))
    assert episode.rating is None

    episode.rating = 9.9
    assert set_episode_has_aired(episode, schedule, datetime(2013, 9, 29, 21, 1))
    assert episode.rating == 9.9


def test_unaired_rating_is_discarded(now):
    episode = EpisodeModel(number=1, air="1/1/30", rating=7.5)

    set_episode_has_aired(episode, ScheduleModel(), now)

    assert not episode.has_aired
    assert episode.rating is None


def test_unparsable_air_date_is_logged_not_raised(now, caplog):
    episode = EpisodeModel(number=1, title="Pilot", air="TBA", rating=8.0)

    with caplog.at_level(logging.ERROR):
        aired = set_episode_has_aired(episode, ScheduleModel(time="8:00 PM"), now)

    assert not aired
    assert episode.rating is None
    assert "failed to get time value" in caplog.text


def test_season_rating_averages_aired_episodes(now):
    season = SeasonModel(number=1, episodes=[
        EpisodeModel(number=1, air="1/1/10", rating=8.0),
        EpisodeModel(number=2, air="1/8/10", rating=9.0),
        EpisodeModel(number=3, air="1/1/30", rating=2.0),
    ])
    for episode in season.episodes:
        set_episode_has_aired(episode, ScheduleModel(), now)

    assert set_season_rating(season) == pytest.approx(8.5)
    assert season.rating == pytest.approx(8.5)


def test_season_rating_without_aired_episodes_is_undefined():
    season = SeasonModel(number=1, episodes=[EpisodeModel(number=1, rating=None)])

    assert set_season_rating(season) is None


def test_series_rating_skips_undefined_seasons():
    series = SeriesModel(seasons=[
        SeasonModel(number=1, rating=8.0),
        SeasonModel(number=2, rating=None),
        SeasonModel(number=3, rating=7.0),
    ])

    assert set_series_rating(series) == pytest.approx(7.5)


def test_series_rating_without_defined_seasons_is_undefined():
    series = SeriesModel(seasons=[SeasonModel(number=1), SeasonModel(number=2)])

    assert set_series_rating(series) is None


def test_finalize_series(make_series):
    series = make_series([8.0, 9.0], [7.0, None, None])

    assert series.total_episodes == 5
    assert series.total_episodes == sum(s.total_episodes for s in series.seasons)
    assert series.seasons[0].rating == pytest.approx(8.5)
    assert series.seasons[1].rating == pytest.approx(7.0)
    assert series.rating == pytest.approx(7.75)
    assert series.air_start == "3/14/10"
    assert series.air_end == "3/14/30"


def test_finalize_series_skips_empty_seasons_for_air_span(now):
    series = SeriesModel(seasons=[
        SeasonModel(number=1, episodes=[EpisodeModel(number=1, air="1/1/10")]),
        SeasonModel(number=2),
    ])

    finalize_series(series, now)

    assert series.air_start == "1/1/10"
    assert series.air_end == "1/1/10"
    assert series.total_episodes == 1


def test_finalize_series_with_nothing_aired(make_series):
    series = make_series([None, None])

    assert series.seasons[0].rating is None
    assert series.rating is None
