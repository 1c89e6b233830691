from typing import Literal

DEFAULT_COMMENT_INDICATOR = ";"
DEFAULT_PROPERTY_DELIMITER = "="
SECTION_NAME_OPENER = "["
SECTION_NAME_CLOSER = "]"
LINE_BREAK = "\n"
VALID_MARKERS = Literal[
    "\\",
    "!",
    '"',
    "%",
    "&",
    "/",
    "(",
    ")",
    "?",
    ":",
    ";",
    "#",
    "'",
    "*",
    ">",
    "<",
    "=",
]
"""Common single characters for markers (property delimiter or comment indicator).
Any other non-empty string is accepted as well."""
