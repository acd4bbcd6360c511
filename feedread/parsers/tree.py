"""
Streaming tag-tree builder.

This module provides the TagTreeBuilder class, which turns the event stream
of a tolerant lxml parser into a tree of TagNode objects and reports the
structure to a TagListener while the document is being read.
"""

import logging
import re
from typing import Dict, List, Optional, Union

from lxml import etree

from feedread.models import TagNode
from feedread.parsers.base import TagListener

logger = logging.getLogger(__name__)

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"

# lxml hands CDATA to the target through data(), like plain text, so CDATA
# sections are bracketed with these processing instructions before parsing.
CDATA_START_PI = "feedread-cdata"
CDATA_END_PI = "feedread-cdata-end"

_CDATA_RE = re.compile(rb"<!\[CDATA\[.*?\]\]>", re.DOTALL)


def mark_cdata(data: bytes) -> bytes:
    """Wraps every CDATA section of an ASCII-compatible document in markers."""
    start = f"<?{CDATA_START_PI}?>".encode("ascii")
    end = f"<?{CDATA_END_PI}?>".encode("ascii")
    return _CDATA_RE.sub(lambda m: start + m.group(0) + end, data)


class TagTreeBuilder:
    """
    Builds a tag tree in a single forward pass.

    The builder is used as an lxml parser target (`start`, `end`, `data`,
    `pi`, `start_ns`, `end_ns`, `close`). Parse errors never abort the pass.
    Text is trimmed and its whitespace collapsed; CDATA is kept as written.
    """

    def __init__(self, listener: TagListener):
        self.listener = listener
        self.nodes: List[TagNode] = []
        self.current: Optional[TagNode] = None
        self._text: List[str] = []
        self._in_cdata = False
        self._prefixes: Dict[str, str] = {XML_NAMESPACE: "xml"}

    def write(self, xml: Union[str, bytes]) -> None:
        """Parses a whole document, then fires `on_end`."""
        if isinstance(xml, str):
            data = xml.encode("utf-8")
            encoding: Optional[str] = "utf-8"
        else:
            data = xml
            encoding = None
        data = mark_cdata(data)

        parser = etree.XMLParser(
            target=self,
            encoding=encoding,
            recover=True,
            resolve_entities=False,
            no_network=True,
        )
        try:
            parser.feed(data)
            parser.close()
        except (etree.XMLSyntaxError, etree.ParserError) as e:
            self.on_error(e)
        for entry in parser.error_log:
            self.on_error(entry)

        self._flush_text()
        self.on_end()

    # Tree operations

    def on_open_tag(self, name: str, attributes: Dict[str, str]) -> TagNode:
        parent = self.current.index if self.current is not None else None
        node = TagNode(len(self.nodes), name, attributes, parent)
        self.nodes.append(node)
        if self.current is not None:
            self.current.children.append(node)
        self.current = node
        self.listener.on_open_tag(node)
        return node

    def on_close_tag(self, name: str) -> None:
        node = self.current
        if node is None:
            logger.debug("Ignoring close of <%s> with no open tag", name)
            return
        self.listener.on_close_tag(name, node)
        parent = self.parent(node)
        node.parent = None
        self.current = parent

    def on_text(self, text: str) -> None:
        if self.current is not None:
            self.current.children.append(text)

    on_cdata = on_text

    def on_error(self, err: object) -> None:
        # Malformed documents still yield whatever was built.
        logger.debug("XML error ignored: %s", err)

    def on_end(self) -> None:
        self.listener.on_end()

    def parent(self, node: TagNode) -> Optional[TagNode]:
        """Returns the enclosing node of an open node, or None."""
        if node.parent is None:
            return None
        return self.nodes[node.parent]

    # lxml parser target interface

    def start_ns(self, prefix: Optional[str], uri: str) -> None:
        # A default-namespace binding wins over a prefixed one for the same URI.
        if self._prefixes.get(uri) != "":
            self._prefixes[uri] = prefix or ""

    def end_ns(self, prefix: Optional[str]) -> None:
        pass

    def start(self, tag: str, attrib, nsmap=None) -> None:
        self._flush_text()
        self._in_cdata = False
        attributes = {self._qualify(k): v for k, v in attrib.items()}
        self.on_open_tag(self._qualify(tag), attributes)

    def end(self, tag: str) -> None:
        self._flush_text()
        self._in_cdata = False
        self.on_close_tag(self._qualify(tag))

    def data(self, data: str) -> None:
        self._text.append(data)

    def pi(self, target: str, data: Optional[str] = None) -> None:
        if target == CDATA_START_PI:
            self._flush_text()
            self._in_cdata = True
        elif target == CDATA_END_PI:
            self._flush_text()
            self._in_cdata = False

    def close(self) -> None:
        self._flush_text()

    def _flush_text(self) -> None:
        if not self._text:
            return
        raw = "".join(self._text)
        self._text = []
        if self._in_cdata:
            if raw:
                self.on_cdata(raw)
            return
        text = " ".join(raw.split())
        if text:
            self.on_text(text)

    def _qualify(self, name: str) -> str:
        """Turns lxml's `{uri}local` names back into `prefix:local`."""
        if not name.startswith("{"):
            return name
        uri, local = name[1:].split("}", 1)
        prefix = self._prefixes.get(uri)
        return f"{prefix}:{local}" if prefix else local
