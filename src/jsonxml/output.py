"""Replay reader events into SAX handlers and XML text."""

from __future__ import annotations

import io
from typing import IO, Iterable
from xml.sax.handler import ContentHandler
from xml.sax.saxutils import XMLGenerator
from xml.sax.xmlreader import AttributesImpl

from .model import XMLNS_ATTRIBUTE, Event, EventType


def _attributes(event: Event) -> AttributesImpl:
    attrs: dict[str, str] = {}
    for decl in event.namespaces:
        key = f"{XMLNS_ATTRIBUTE}:{decl.prefix}" if decl.prefix else XMLNS_ATTRIBUTE
        attrs[key] = decl.uri
    for attr in event.attributes:
        attrs[str(attr.name)] = attr.value
    return AttributesImpl(attrs)


def to_sax(events: Iterable[Event], handler: ContentHandler) -> None:
    """Drive *handler* with the events of a reader.

    Elements are reported with qualified names (``startElement``), and
    namespace declarations as ``xmlns`` attributes, which is what
    :class:`~xml.sax.saxutils.XMLGenerator` expects.
    """
    for event in events:
        kind = event.type
        if kind is EventType.START_DOCUMENT:
            handler.startDocument()
        elif kind is EventType.END_DOCUMENT:
            handler.endDocument()
        elif kind is EventType.START_ELEMENT:
            handler.startElement(str(event.name), _attributes(event))
        elif kind is EventType.END_ELEMENT:
            handler.endElement(str(event.name))
        elif kind is EventType.CHARACTERS:
            handler.characters(event.text)
        elif kind is EventType.PROCESSING_INSTRUCTION:
            handler.processingInstruction(event.target, event.data or "")


class _XMLWriter(XMLGenerator):
    """XMLGenerator writing at most one ``<?xml ...?>`` declaration.

    The declaration goes first in the output, before any PI or content, even
    when a document array reports one START_DOCUMENT per item.
    """

    def __init__(self, out: IO[str], encoding: str, declaration: bool) -> None:
        super().__init__(out, encoding, short_empty_elements=True)
        self._declare = declaration

    def _write_declaration(self) -> None:
        if self._declare:
            self._declare = False
            super().startDocument()

    def startDocument(self) -> None:
        self._write_declaration()

    def startElement(self, name, attrs) -> None:
        self._write_declaration()
        super().startElement(name, attrs)

    def characters(self, content) -> None:
        self._write_declaration()
        super().characters(content)

    def processingInstruction(self, target, data) -> None:
        self._write_declaration()
        if data:
            super().processingInstruction(target, data)
            return
        self._finish_pending_start_element()
        self._write(f"<?{target}?>")


def to_xml(
    events: Iterable[Event],
    out: IO[str] | None = None,
    encoding: str = "utf-8",
    declaration: bool = True,
) -> str | None:
    """Serialize events as XML text.

    Writes to *out* and returns ``None``, or returns the text when *out* is
    omitted.
    """
    target = out if out is not None else io.StringIO()
    to_sax(events, _XMLWriter(target, encoding, declaration))
    if out is None:
        return target.getvalue()
    return None
