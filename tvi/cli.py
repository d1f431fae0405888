"""CLI entry point for looking up TV series information."""

import asyncio
import logging
import sys
from typing import Iterable, List, Optional

import click

from .constants.config import (
    PROGRAM_NAME,
    PROGRAM_VERSION,
    SPEC_ERROR_MESSAGE,
    TVDOTCOM,
    ExitStatus,
)
from .display import render_series
from .exceptions import (
    FetchException,
    SeriesNotFoundException,
    SpecRangeException,
    SpecSyntaxException,
)
from .models.options import DisplayOptions, QueryOptions
from .processors.selection import parse_spec
from .scrapers.retrieval import retrieve_series
from .utils.normalization import join_given_title


# Option -> options it cannot be combined with
EXCLUSIVE_OPTIONS = {
    "cast": (
        "air", "desc", "rating", "info", "last",
        "highest-rated", "lowest-rated", "next", "season", "episode",
    ),
    "highest-rated": ("info", "last", "lowest-rated", "next", "season", "episode"),
    "lowest-rated": ("info", "last", "next", "season", "episode"),
    "info": ("last", "next", "season", "episode"),
    "last": ("next", "season", "episode"),
    "next": ("season", "episode"),
}


def exclusive_option_errors(active: Iterable[str]) -> List[str]:
    """Describe every mutually exclusive pair among the options given."""
    active = set(active)
    return [
        f"options --{option} and --{other} are mutually exclusive"
        for option, others in EXCLUSIVE_OPTIONS.items()
        if option in active
        for other in others
        if other in active
    ]


def _spec_option(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> List[int]:
    if value is None:
        return []
    try:
        return parse_spec(value)
    except SpecSyntaxException:
        raise click.BadParameter(f"`{value}' {SPEC_ERROR_MESSAGE}")


# Short flags that may share a cluster with -c, as in -Nc or -rcNAME
_CLUSTER_FLAGS = frozenset("adHilLnNr")


def attach_cast_name(args: List[str]) -> List[str]:
    """
    Rewrite every -c[NAME] and --cast[=NAME] as --cast=NAME.

    The cast name is only ever taken when it is attached to the option, so a
    bare -c never swallows the first word of the title.
    """
    rewritten: List[str] = []
    for index, arg in enumerate(args):
        if arg == "--":
            rewritten.extend(args[index:])
            break
        if arg == "--cast":
            rewritten.append("--cast=")
            continue
        if arg.startswith("-") and not arg.startswith("--") and len(arg) > 1:
            cluster = arg[1:]
            flags = 0
            while flags < len(cluster) and cluster[flags] in _CLUSTER_FLAGS:
                flags += 1
            if flags < len(cluster) and cluster[flags] == "c":
                if flags:
                    rewritten.append(f"-{cluster[:flags]}")
                rewritten.append(f"--cast={cluster[flags + 1:]}")
                continue
        rewritten.append(arg)
    return rewritten


class TviCommand(click.Command):
    def parse_args(self, ctx: click.Context, args: List[str]) -> List[str]:
        return super().parse_args(ctx, attach_cast_name(args))


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _fail(status: ExitStatus, *messages: str) -> None:
    for message in messages:
        click.echo(f"{PROGRAM_NAME}: {message}", err=True)
    sys.exit(status)


@click.command(
    cls=TviCommand,
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=f"Only 1 TITLE can be provided at a time. All TV series data is obtained from <{TVDOTCOM}/>.",
)
@click.argument("title", nargs=-1, required=True)
@click.option("-a", "--air", is_flag=True, help="Print the air date for each episode")
@click.option(
    "-c", "--cast",
    default=None,
    metavar="[NAME]",
    help=(
        "Print cast and crew members. With NAME (-cNAME or --cast=NAME), only "
        "members whose name or role matches it"
    ),
)
@click.option("-d", "--desc", is_flag=True, help="Print description for each episode")
@click.option(
    "-e", "--episode",
    callback=_spec_option,
    metavar="N[,N,...]",
    help='Episode(s) to show, as a comma-separated list (e.g. "1,2,3")',
)
@click.option("-H", "--highest-rated", is_flag=True, help="Print highest rated episode of series")
@click.option("-i", "--info", is_flag=True, help="Print an overview of the series")
@click.option("-l", "--last", is_flag=True, help="Print most recently aired episode")
@click.option("-L", "--lowest-rated", is_flag=True, help="Print lowest rated episode of series")
@click.option("-n", "--next", "next_", is_flag=True, help="Print next episode scheduled to air")
@click.option(
    "-N", "--no-progress",
    is_flag=True,
    help="Do not report progress while downloading (useful when writing output to a file)",
)
@click.option("-r", "--rating", is_flag=True, help="Print rating for each episode")
@click.option(
    "-s", "--season",
    callback=_spec_option,
    metavar="N[,N,...]",
    help='Season(s) to show, as a comma-separated list (e.g. "1,2,3")',
)
@click.option("--verbose", is_flag=True, help="Log debugging information to stderr")
@click.version_option(PROGRAM_VERSION, "-v", "--version", prog_name=PROGRAM_NAME)
def cli(
    title: tuple[str, ...],
    air: bool,
    cast: Optional[str],
    desc: bool,
    episode: List[int],
    highest_rated: bool,
    info: bool,
    last: bool,
    lowest_rated: bool,
    next_: bool,
    no_progress: bool,
    rating: bool,
    season: List[int],
    verbose: bool,
):
    """Look up seasons, episodes, ratings and cast of a TV series.

    Examples:

        tvi breaking bad

        tvi -s 2 -e 1,2 -r the wire

        tvi --highest-rated -N mad men

        tvi --cast=walter breaking bad
    """
    _configure_logging(verbose)

    given = {
        "air": air,
        "cast": cast is not None,
        "desc": desc,
        "episode": bool(episode),
        "highest-rated": highest_rated,
        "info": info,
        "last": last,
        "lowest-rated": lowest_rated,
        "next": next_,
        "rating": rating,
        "season": bool(season),
    }
    errors = exclusive_option_errors(name for name, on in given.items() if on)
    if errors:
        _fail(ExitStatus.OPTION, *errors)

    query = QueryOptions(
        seasons=season,
        episodes=episode,
        cast=cast,
        info=info,
        highest_rated=highest_rated,
        lowest_rated=lowest_rated,
        last=last,
        next=next_,
        show_progress=not no_progress,
    )
    display = DisplayOptions(air=air, description=desc, rating=rating)

    def on_page_fetched(url: str) -> None:
        click.echo(f"Loaded {url}", err=True)

    given_title = join_given_title(title)
    try:
        series = asyncio.run(retrieve_series(
            given_title,
            with_cast=query.cast is not None,
            on_page_fetched=on_page_fetched if query.show_progress else None,
        ))
    except SeriesNotFoundException as e:
        _fail(ExitStatus.OPTION, str(e))
    except FetchException as e:
        _fail(ExitStatus.INTERNET, str(e))

    try:
        output = render_series(series, query, display)
    except SpecRangeException as e:
        _fail(ExitStatus.OPTION, *e.messages)

    click.echo(output)
