"""
String ID rules.

A string ID is the human-readable token of a short link. The service accepts
only latin letters, digits, minuses and underscores, so anything else is
rejected here before a request is made.
"""

import string

STRID_SEPARATOR = "+"

ALLOWED_STRID_CHARACTERS = frozenset(string.ascii_letters + string.digits + "-_")


def is_valid_strid(strid: str) -> bool:
    """Return True if strid is non-empty and uses only allowed characters."""
    # An empty ID (`url+`) would be posted to `/api/add/`, which the service
    # cannot tell apart from `/api/add`, so it is refused here.
    return bool(strid) and all(char in ALLOWED_STRID_CHARACTERS for char in strid)


def split_link_argument(argument: str) -> tuple[str, str | None]:
    """
    Split a `<url>(+<strid>)` command-line argument.

    Only the first `+` separates, so the string ID keeps any further `+`
    (and is then rejected as invalid).

    Examples:
        >>> split_link_argument("http://example.com")
        ('http://example.com', None)
        >>> split_link_argument("http://example.com+mylink")
        ('http://example.com', 'mylink')
    """
    url, separator, strid = argument.partition(STRID_SEPARATOR)
    if not separator:
        return url, None
    return url, strid
