"""Program, site and display configuration constants."""

from enum import IntEnum

PROGRAM_NAME = "tvi"
PROGRAM_VERSION = "3.4.2"

# Site URLs
TVDOTCOM = "http://www.tv.com"
SEARCH_URL = TVDOTCOM + "/search?q={title}/"
EPISODES_URL = TVDOTCOM + "/shows/{url_title}/episodes/"
CAST_URL = TVDOTCOM + "/shows/{url_title}/cast/"
SEASON_URL = TVDOTCOM + "/shows/{url_title}/season-{number}/"

USER_AGENT = f"{PROGRAM_NAME}(TV Info)/{PROGRAM_VERSION}"

# Total seconds allowed for a single page fetch
FETCH_TIMEOUT = 30

# Placeholders
EMPTY_DESCRIPTION = "(no description)"
SEASON_DESCRIPTION = "(no description for seasons)"
NOT_RATED = "not rated"
UNDEFINED_RATING = "n/a"

# Selection specs
SPEC_DELIMITER = ","
SPEC_ERROR_MESSAGE = (
    'must be of the form "N,N,N..." (e.g. "1,23", "4", "5,6,7", etc.)'
)

# Air date layouts, with and without a broadcast clock time
AIR_DATETIME_FORMAT = "%m/%d/%y %I:%M %p"
AIR_DATE_FORMAT = "%m/%d/%y"

# Descriptions are indented by this share of the terminal width
DESCRIPTION_INDENT_RATIO = 0.05
DEFAULT_TERMINAL_WIDTH = 80


class ExitStatus(IntEnum):
    """Process exit statuses."""

    OKAY = 0
    OPTION = 1
    INTERNET = 2
    SYSTEM = 3
