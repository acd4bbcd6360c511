"""
Feed reader.

Fetches RSS and Atom feeds over HTTP and extracts their articles. Each
article is a dict with "title", "author", "link", "content", "published"
and "feed" ({"name", "source", "link"}).
"""

import concurrent.futures
import logging
import re
from typing import List, Optional, Sequence, Union

from feedread import config
from feedread.models import Article
from feedread.parsers.atom import AtomExtractor
from feedread.parsers.rss import RSSExtractor
from feedread.services.transport import HttpTransport, Transport

logger = logging.getLogger(__name__)

TYPE_ATOM = "atom"
TYPE_RSS = "rss"

_RSS_RE = re.compile(r"<(rss|rdf)\b", re.IGNORECASE)
_ATOM_RE = re.compile(r"<feed\b", re.IGNORECASE)
_RSS_BYTES_RE = re.compile(rb"<(rss|rdf)\b", re.IGNORECASE)
_ATOM_BYTES_RE = re.compile(rb"<feed\b", re.IGNORECASE)


class FeedFormatError(ValueError):
    """Raised when a fetched body is neither RSS nor Atom."""

    def __init__(self, url: str, status: Optional[int] = None):
        self.url = url
        self.status = status
        super().__init__(f"Body is not RSS or ATOM <{url}> (status {status})")


def identify(xml: Union[str, bytes]) -> Union[str, bool]:
    """
    Checks whether a document is RSS, Atom, or neither.

    Detection is textual: an opening `<rss` or `<rdf` tag anywhere means RSS,
    otherwise an opening `<feed` tag means Atom.

    Returns "atom", "rss", or False when it is neither.
    """
    if isinstance(xml, bytes):
        rss_re, atom_re = _RSS_BYTES_RE, _ATOM_BYTES_RE
    else:
        rss_re, atom_re = _RSS_RE, _ATOM_RE

    if rss_re.search(xml):
        return TYPE_RSS
    if atom_re.search(xml):
        return TYPE_ATOM
    return False


def atom(xml: Union[str, bytes], source: str = "") -> List[Article]:
    """Parses the articles from an Atom document."""
    return AtomExtractor(source).parse(xml)


def rss(xml: Union[str, bytes], source: str = "") -> List[Article]:
    """Parses the articles from an RSS or RDF document."""
    return RSSExtractor(source).parse(xml)


def get(feed_url: str, transport: Optional[Transport] = None) -> List[Article]:
    """
    Fetches a single feed and returns its articles.

    Transport errors propagate unchanged; a body that is neither RSS nor
    Atom raises FeedFormatError.
    """
    transport = transport or HttpTransport()
    logger.info("Fetching %s", feed_url)
    try:
        status, body = transport.get(feed_url)
    except Exception as e:
        logger.error("Network error fetching %s: %s", feed_url, e)
        raise

    feed_type = identify(body)
    if feed_type == TYPE_ATOM:
        articles = atom(body, feed_url)
    elif feed_type == TYPE_RSS:
        articles = rss(body, feed_url)
    else:
        logger.error("Unrecognized feed format at %s (status %s)", feed_url, status)
        raise FeedFormatError(feed_url, status)

    logger.info("Read %d %s articles from %s", len(articles), feed_type, feed_url)
    return articles


def fetch_all(
    feed_urls: Sequence[str], transport: Optional[Transport] = None
) -> List[Article]:
    """
    Fetches feeds one at a time and concatenates their articles.

    The first failure aborts the whole batch; nothing fetched before it is
    returned.
    """
    transport = transport or HttpTransport()
    articles: List[Article] = []
    for feed_url in feed_urls:
        articles.extend(get(feed_url, transport))
    logger.info("Read %d articles from %d feeds", len(articles), len(feed_urls))
    return articles


def fetch_all_parallel(
    feed_urls: Sequence[str],
    transport: Optional[Transport] = None,
    max_workers: Optional[int] = None,
) -> List[Article]:
    """
    Concurrent variant of fetch_all.

    Articles keep the order of `feed_urls`. If any feed fails, the error of
    the earliest failing URL is raised and no articles are returned.
    """
    transport = transport or HttpTransport()
    articles: List[Article] = []

    with concurrent.futures.ThreadPoolExecutor(
        max_workers=max_workers or config.MAX_WORKERS
    ) as executor:
        futures = [executor.submit(get, url, transport) for url in feed_urls]
        try:
            for future in futures:
                articles.extend(future.result())
        except Exception:
            for future in futures:
                future.cancel()
            raise

    logger.info("Read %d articles from %d feeds", len(articles), len(feed_urls))
    return articles


def read(
    feed_url: Union[str, Sequence[str]], transport: Optional[Transport] = None
) -> List[Article]:
    """Fetches the articles from one feed url, or from a list of urls."""
    if isinstance(feed_url, str):
        return get(feed_url, transport)
    return fetch_all(feed_url, transport)
