from unittest.mock import AsyncMock

import pytest
from click.testing import CliRunner

from tvi.cli import attach_cast_name, cli, exclusive_option_errors
from tvi.exceptions import FetchException, SeriesNotFoundException


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def retrieve(mocker, make_series):
    series = make_series([8.0, 9.5], [7.0], title="The Wire")
    return mocker.patch("tvi.cli.retrieve_series", new_callable=AsyncMock, return_value=series)


def test_exclusive_option_errors():
    assert exclusive_option_errors(["air", "rating", "season"]) == []
    assert exclusive_option_errors(["next", "season", "episode"]) == [
        "options --next and --season are mutually exclusive",
        "options --next and --episode are mutually exclusive",
    ]


def test_exclusive_options_exit_before_fetching(runner, retrieve):
    result = runner.invoke(cli, ["--cast=x", "--info", "the", "wire"])

    assert result.exit_code == 1
    assert "tvi: options --cast and --info are mutually exclusive" in result.output
    retrieve.assert_not_called()


def test_malformed_spec_is_rejected(runner, retrieve):
    result = runner.invoke(cli, ["-e", "1,,5", "the", "wire"])

    assert result.exit_code == 2
    assert "must be of the form" in result.output
    retrieve.assert_not_called()


def test_title_is_required(runner, retrieve):
    result = runner.invoke(cli, ["-r"])

    assert result.exit_code == 2
    retrieve.assert_not_called()


def test_list_season(runner, retrieve):
    result = runner.invoke(cli, ["-s", "1", "-N", "the", "wire"])

    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "Season 1 Episode 1: Episode 1x1",
        "Season 1 Episode 2: Episode 1x2",
    ]
    args, kwargs = retrieve.call_args
    assert args == ("the wire",)
    assert kwargs["with_cast"] is False
    assert kwargs["on_page_fetched"] is None


def test_progress_callback_when_enabled(runner, retrieve):
    runner.invoke(cli, ["the", "wire"])

    assert callable(retrieve.call_args.kwargs["on_page_fetched"])


def test_cast_option_without_name(runner, retrieve):
    result = runner.invoke(cli, ["-N", "the", "wire", "--cast"])

    assert result.exit_code == 0
    assert "The Wire cast and crew (all):" in result.output
    assert retrieve.call_args.kwargs["with_cast"] is True


@pytest.mark.parametrize("cast_args", [["-c"], ["--cast"], ["-Nc"]])
def test_bare_cast_option_leaves_title_alone(runner, retrieve, cast_args):
    result = runner.invoke(cli, ["-N", *cast_args, "the", "wire"])

    assert result.exit_code == 0
    assert retrieve.call_args.args == ("the wire",)
    assert "The Wire cast and crew (all):" in result.output


@pytest.mark.parametrize("cast_args", [["-cmcnulty"], ["--cast=mcnulty"], ["-Ncmcnulty"]])
def test_attached_cast_name(runner, retrieve, cast_args):
    result = runner.invoke(cli, ["-N", *cast_args, "the", "wire"])

    assert result.exit_code == 0
    assert retrieve.call_args.args == ("the wire",)
    assert 'The Wire cast and crew (matching "mcnulty"):' in result.output


def test_attach_cast_name():
    assert attach_cast_name(["-c", "the", "wire"]) == ["--cast=", "the", "wire"]
    assert attach_cast_name(["-rcbunk", "lost"]) == ["-r", "--cast=bunk", "lost"]
    assert attach_cast_name(["-s1", "--", "-c"]) == ["-s1", "--", "-c"]
    assert attach_cast_name(["-s", "2", "lost"]) == ["-s", "2", "lost"]


def test_out_of_range_spec(runner, retrieve):
    result = runner.invoke(cli, ["-N", "-s", "3", "the", "wire"])

    assert result.exit_code == 1
    assert "tvi: invalid season specified -- 3" in result.output
    assert 'tvi: "The Wire" has a total of 2 seasons' in result.output


def test_series_not_found(runner, retrieve):
    retrieve.side_effect = SeriesNotFoundException("no such show")

    result = runner.invoke(cli, ["-N", "no", "such", "show"])

    assert result.exit_code == 1
    assert 'tvi: no TV series found for "no such show"' in result.output


def test_network_failure(runner, retrieve):
    retrieve.side_effect = FetchException("http://www.tv.com/shows/the-wire/cast/", 500)

    result = runner.invoke(cli, ["-N", "the", "wire", "--cast"])

    assert result.exit_code == 2
    assert "Failed to fetch" in result.output


def test_highest_rated(runner, retrieve):
    result = runner.invoke(cli, ["-N", "--highest-rated", "the", "wire"])

    assert result.exit_code == 0
    assert result.output.startswith("Season 1 Episode 2: Episode 1x2")
    assert "Rating:      9.5" in result.output


def test_version(runner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "3.4.2" in result.output
