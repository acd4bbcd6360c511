"""
RSS feed extractor.

This module provides the RSSExtractor class for RSS 0.9x/2.0 and RDF
(RSS 1.0) documents.
"""

from feedread.models import Article, TagNode
from feedread.parsers.extractor import BaseExtractor
from feedread.parsers.fields import child_text, first_non_empty, parse_date, scrub_html


class RSSExtractor(BaseExtractor):
    """Extracts articles from RSS `<item>` elements."""

    entry_tag = "item"

    def on_feed_tag(self, name: str, node: TagNode) -> None:
        if name == "channel":
            if not self.meta["link"]:
                self.meta["link"] = child_text(node, "link")
            self.meta["name"] = child_text(node, "title")

    def build_article(self, entry: TagNode) -> Article:
        return Article(
            title=child_text(entry, "title"),
            author=first_non_empty(
                child_text(entry, "author"), child_text(entry, "dc:creator")
            ),
            # RSS links are element text, not an href attribute
            link=child_text(entry, "link"),
            content=first_non_empty(
                scrub_html(child_text(entry, "content:encoded")),
                scrub_html(child_text(entry, "description")),
            ),
            published=parse_date(child_text(entry, "pubDate")),
            feed=self.meta,
        )
