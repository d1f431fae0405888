"""Normalization utilities for series titles and cast queries."""

import re
from typing import Iterable, List
from urllib.parse import quote


def join_given_title(words: Iterable[str]) -> str:
    """Join the title words given on the command line into one title."""
    return " ".join(word for word in words if word)


def encode_search_title(given: str) -> str:
    """Percent-encode a title for use as a search query."""
    return quote(given, safe="")


def guess_url_title(given: str) -> str:
    """Best guess at the URL form of a title, e.g. "Grey's Anatomy" -> "greys-anatomy"."""
    # Drop apostrophes, colons and periods
    title = re.sub(r"['.:]", "", given.strip())
    # Replace spaces with dashes
    title = re.sub(r" ", "-", title)
    return title.lower()


def query_tokens(query: str) -> List[str]:
    """Split a cast query into lowercase whitespace separated tokens."""
    return [token.lower() for token in query.split()]
