"""
Data models for the feedread package.
"""

import datetime
from typing import Dict, List, Optional, TypedDict, Union


class FeedMeta(TypedDict):
    """Information about the feed itself, shared by all of its articles."""

    source: str
    name: str
    link: str


class Article(TypedDict):
    """Type definition for an article."""

    title: str
    author: str
    link: str
    content: str  # HTML with <script> blocks removed
    published: Optional[datetime.datetime]
    feed: FeedMeta


class TagNode:
    """
    One element of the tag tree.

    Nodes live in the builder's arena; `parent` is the arena index of the
    enclosing node and is cleared once the node has been closed.
    """

    __slots__ = ("index", "name", "attributes", "children", "parent")

    def __init__(
        self,
        index: int,
        name: str,
        attributes: Optional[Dict[str, str]] = None,
        parent: Optional[int] = None,
    ):
        self.index = index
        self.name = name
        self.attributes: Dict[str, str] = attributes or {}
        self.children: List[Union["TagNode", str]] = []
        self.parent = parent

    def __repr__(self) -> str:
        return f"TagNode({self.name!r}, children={len(self.children)})"
