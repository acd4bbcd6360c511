"""
Base classes and interfaces for feed parsers.

This module defines the contract between the tag-tree builder and the
format-specific extractors that observe it.
"""

from typing import Protocol

from feedread.models import TagNode


class TagListener(Protocol):
    """
    Protocol for tag-tree listeners.

    The builder reports structure only through these hooks; it has no
    knowledge of which feed format is being read.
    """

    def on_open_tag(self, node: TagNode) -> None:
        """Called after `node` has been linked into the tree."""

    def on_close_tag(self, name: str, node: TagNode) -> None:
        """Called with the node being closed, before it is popped."""

    def on_end(self) -> None:
        """Called once, after the end of the document."""
