"""Literal markup fragments the scrapers anchor on.

These match the tv.com page templates byte for byte. A change to the site
templates invalidates them.
"""

# Episodes index page
SERIES_TITLE = "<title>"
SERIES_TITLE_END = "-"
SERIES_DESCRIPTION = '"og:description" content="'
SERIES_TAGLINE = 'class="tagline">'
TAGLINE_ENDED = "ended"
SEASON_MARKER = "<strong>Season {number}"

# Season page
EPISODE_MARKER = "Episode {number}\r\n"
EPISODE_AIR = 'class="date">'
EPISODE_DESCRIPTION = 'class="description">'
EPISODE_RATING = "_rating"

# Search page
SEARCH_SHOW = 'class="result show">'
SEARCH_HREF = ' href="/shows/'

# Cast page
CAST_NAME = '<a itemprop="name"'
CAST_ROLE = '<div class="role">'

# Anchors
ANCHOR_CLOSE = "</a>"
