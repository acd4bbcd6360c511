"""
Helpers shared by the Atom and RSS extractors.
"""

import datetime
import logging
import re
from typing import Optional

from dateutil.parser import parse as dateutil_parse

from feedread.models import TagNode

logger = logging.getLogger(__name__)

# Common timezone abbreviations found in RFC 822 feed dates
TZINFOS = {
    "UT": datetime.timezone.utc,
    "UTC": datetime.timezone.utc,
    "GMT": datetime.timezone.utc,
    "Z": datetime.timezone.utc,
    "EST": datetime.timezone(datetime.timedelta(hours=-5)),
    "EDT": datetime.timezone(datetime.timedelta(hours=-4)),
    "CST": datetime.timezone(datetime.timedelta(hours=-6)),
    "CDT": datetime.timezone(datetime.timedelta(hours=-5)),
    "MST": datetime.timezone(datetime.timedelta(hours=-7)),
    "MDT": datetime.timezone(datetime.timedelta(hours=-6)),
    "PST": datetime.timezone(datetime.timedelta(hours=-8)),
    "PDT": datetime.timezone(datetime.timedelta(hours=-7)),
    "BST": datetime.timezone(datetime.timedelta(hours=1)),
    "CET": datetime.timezone(datetime.timedelta(hours=1)),
    "CEST": datetime.timezone(datetime.timedelta(hours=2)),
}

# Not an HTML parser: greedy, but a match never crosses a line break.
_SCRIPT_RE = re.compile(r"<script.*</script>", re.IGNORECASE)


def scrub_html(html: str) -> str:
    """Removes <script> blocks from a string of HTML."""
    if not html:
        return ""
    return _SCRIPT_RE.sub("", html)


def child_by_name(parent: Optional[TagNode], name: str) -> Optional[TagNode]:
    """Finds the first direct child of `parent` with the given tag name."""
    if parent is None:
        return None
    for child in parent.children:
        if isinstance(child, TagNode) and child.name == name:
            return child
    return None


def node_text(node: Optional[TagNode]) -> str:
    """Joins the text segments directly under `node`."""
    if node is None:
        return ""
    return "".join(child for child in node.children if isinstance(child, str))


def child_text(parent: Optional[TagNode], name: str) -> str:
    """Text of the first child named `name`, or "" when there is none."""
    return node_text(child_by_name(parent, name))


def first_non_empty(*candidates: Optional[str]) -> str:
    """Returns the first candidate that is a non-empty string."""
    for candidate in candidates:
        if candidate:
            return candidate
    return ""


def parse_date(value: str) -> Optional[datetime.datetime]:
    """Parses a feed date, returning None when it is empty or malformed."""
    if not value:
        return None
    try:
        return dateutil_parse(value, tzinfos=TZINFOS)
    except (ValueError, OverflowError) as e:
        logger.debug("Unparsable date %r: %s", value, e)
        return None
