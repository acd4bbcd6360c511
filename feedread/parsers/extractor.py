"""
Shared listener logic for the Atom and RSS extractors.
"""

import logging
from abc import abstractmethod
from typing import List, Optional, Union

from feedread.models import Article, FeedMeta, TagNode
from feedread.parsers.base import TagListener
from feedread.parsers.tree import TagTreeBuilder

logger = logging.getLogger(__name__)


class BaseExtractor(TagListener):
    """
    Collects article subtrees while the tree is built and maps them to
    Article records at the end of the document.

    Subclasses set `entry_tag` and implement `build_article`; feed-level
    tags are handed to `on_feed_tag`. An extractor reads one document.
    """

    entry_tag = ""

    def __init__(self, source: str = ""):
        self.meta: FeedMeta = {"source": source or "", "name": "", "link": ""}
        self.entries: List[TagNode] = []
        self.entry: Optional[TagNode] = None
        self.articles: List[Article] = []
        self.builder = TagTreeBuilder(self)

    def parse(self, xml: Union[str, bytes]) -> List[Article]:
        """Reads the document and returns its articles."""
        self.builder.write(xml)
        return self.articles

    def on_open_tag(self, node: TagNode) -> None:
        if node.name == self.entry_tag:
            self.entry = node

    def on_close_tag(self, name: str, node: TagNode) -> None:
        if name == self.entry_tag:
            if self.entry is not None:
                self.entries.append(self.entry)
            self.entry = None
        else:
            self.on_feed_tag(name, node)

    def on_end(self) -> None:
        # Self-closed or empty entries carry nothing worth returning.
        self.articles = [
            self.build_article(entry) for entry in self.entries if entry.children
        ]
        logger.debug(
            "Extracted %d of %d <%s> elements from %r",
            len(self.articles),
            len(self.entries),
            self.entry_tag,
            self.meta["source"],
        )

    def on_feed_tag(self, name: str, node: TagNode) -> None:
        """Hook for closed tags other than the entry tag."""

    @abstractmethod
    def build_article(self, entry: TagNode) -> Article:
        """Maps one closed entry subtree to an Article."""
