"""
Atom feed extractor.

This module provides the AtomExtractor class for turning an Atom document
into a list of Article records.
"""

from typing import Optional

from feedread.models import Article, TagNode
from feedread.parsers.extractor import BaseExtractor
from feedread.parsers.fields import (
    child_by_name,
    child_text,
    first_non_empty,
    node_text,
    parse_date,
    scrub_html,
)


class AtomExtractor(BaseExtractor):
    """Extracts articles from Atom `<entry>` elements."""

    entry_tag = "entry"

    def __init__(self, source: str = ""):
        super().__init__(source)
        # Used when an entry has no author of its own.
        self.default_author: Optional[str] = None

    def on_feed_tag(self, name: str, node: TagNode) -> None:
        if name == "author" and self.entry is None:
            self.default_author = child_text(node, "name")
        elif name == "link" and node.attributes.get("rel") != "self":
            if not self.meta["link"]:
                self.meta["link"] = node.attributes.get("href", "")
        elif name == "title":
            parent = self.builder.parent(node)
            if parent is not None and self.builder.parent(parent) is None:
                self.meta["name"] = node_text(node)

    def build_article(self, entry: TagNode) -> Article:
        link = child_by_name(entry, "link")
        return Article(
            title=child_text(entry, "title"),
            author=first_non_empty(
                child_text(child_by_name(entry, "author"), "name"),
                self.default_author,
            ),
            link=link.attributes.get("href", "") if link is not None else "",
            content=scrub_html(child_text(entry, "content")),
            published=parse_date(
                first_non_empty(
                    child_text(entry, "published"), child_text(entry, "updated")
                )
            ),
            feed=self.meta,
        )
