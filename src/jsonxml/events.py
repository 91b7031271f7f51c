"""EventReader — pull iterator over XML-shaped events.

Subclasses implement :meth:`EventReader.produce_next_event` and report what
they read through the ``read_*`` methods.  The reader queues the reported
events and hands them out one at a time via :meth:`has_next` / :meth:`next`
or plain iteration.

A start element is held back until the next non-attribute event, so that
attributes and namespace declarations reported right after it end up on
the same ``START_ELEMENT`` event.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any

from .errors import JsonXMLError, StructuralError
from .model import (
    XML_NS_PREFIX,
    XML_NS_URI,
    XMLNS_ATTRIBUTE,
    XMLNS_ATTRIBUTE_NS_URI,
    Attribute,
    Event,
    EventType,
    NamespaceDecl,
    QName,
)

logger = logging.getLogger(__name__)


@dataclass
class _ElementScope:
    name: QName
    namespaces: list[NamespaceDecl] = field(default_factory=list)
    info: Any = None


class EventReader:
    """Base class of pull readers producing :class:`~jsonxml.model.Event`."""

    def __init__(self) -> None:
        self._queue: deque[Event] = deque()
        self._elements: list[_ElementScope] = []
        self._pending: Event | None = None
        self._start_document_read = False
        self._exhausted = False
        self._event: Event | None = None

    # -- Subclass hook --------------------------------------------------

    def produce_next_event(self) -> bool:
        """Read input until at least one event has been reported.

        Returns ``False`` once the input is exhausted.
        """
        raise NotImplementedError

    # -- Report API -----------------------------------------------------

    @property
    def start_document_read(self) -> bool:
        return self._start_document_read

    def read_start_document(
        self,
        version: str | None = None,
        encoding: str | None = None,
        standalone: bool | None = None,
    ) -> None:
        self._flush_start_element()
        self._start_document_read = True
        self._queue.append(
            Event(
                EventType.START_DOCUMENT,
                version=version,
                encoding=encoding,
                standalone=standalone,
            )
        )

    def read_end_document(self) -> None:
        self._flush_start_element()
        if self._elements:
            raise StructuralError(f"Document ends inside element '{self._elements[-1].name}'")
        # A document array carries one document per item
        self._start_document_read = False
        self._queue.append(Event(EventType.END_DOCUMENT))

    def read_start_element_tag(
        self,
        prefix: str,
        local_name: str,
        namespace_uri: str | None = None,
        scope_info: Any = None,
    ) -> None:
        self._flush_start_element()
        name = QName(prefix, local_name, namespace_uri)
        self._elements.append(_ElementScope(name=name, info=scope_info))
        self._pending = Event(EventType.START_ELEMENT, name=name)

    def read_end_element_tag(self) -> None:
        self._flush_start_element()
        if not self._elements:
            raise StructuralError("Element end without matching start")
        element = self._elements.pop()
        self._queue.append(
            Event(
                EventType.END_ELEMENT,
                name=element.name,
                namespaces=list(element.namespaces),
            )
        )

    def read_attr(
        self,
        prefix: str,
        local_name: str,
        namespace_uri: str | None,
        value: str,
    ) -> None:
        event = self._pending_or_fail(f"attribute '{local_name}'")
        event.attributes.append(Attribute(QName(prefix, local_name, namespace_uri), value))

    def read_ns_decl(self, prefix: str, uri: str) -> None:
        event = self._pending_or_fail(f"namespace declaration '{prefix}'")
        decl = NamespaceDecl(prefix, uri)
        event.namespaces.append(decl)
        self._elements[-1].namespaces.append(decl)

    def read_data(self, text: str, event_type: EventType = EventType.CHARACTERS) -> None:
        self._flush_start_element()
        self._queue.append(Event(event_type, text=text))

    def read_pi(self, target: str, data: str | None) -> None:
        self._flush_start_element()
        self._queue.append(Event(EventType.PROCESSING_INSTRUCTION, target=target, data=data))

    def _pending_or_fail(self, what: str) -> Event:
        if self._pending is None:
            if self._elements:
                raise StructuralError(
                    f"Cannot read {what}: element '{self._elements[-1].name}' already has content"
                )
            raise StructuralError(f"Cannot read {what} outside of an element")
        return self._pending

    def _flush_start_element(self) -> None:
        event = self._pending
        if event is None:
            return
        self._pending = None
        if event.name.namespace_uri is None:
            event.name.namespace_uri = self.namespace_uri(event.name.prefix)
        for attr in event.attributes:
            # Unprefixed attributes are in no namespace
            if attr.name.namespace_uri is None and attr.name.prefix:
                attr.name.namespace_uri = self.namespace_uri(attr.name.prefix)
        self._queue.append(event)

    # -- Namespace context ----------------------------------------------

    def namespace_uri(self, prefix: str) -> str | None:
        """Resolve *prefix* against the declarations of the open elements."""
        if prefix == XML_NS_PREFIX:
            return XML_NS_URI
        if prefix == XMLNS_ATTRIBUTE:
            return XMLNS_ATTRIBUTE_NS_URI
        for element in reversed(self._elements):
            for decl in reversed(element.namespaces):
                if decl.prefix == prefix:
                    return decl.uri or None
        return None

    @property
    def depth(self) -> int:
        """Number of currently open elements."""
        return len(self._elements)

    @property
    def scope_info(self) -> Any:
        """The ``scope_info`` given for the innermost open element."""
        return self._elements[-1].info if self._elements else None

    # -- Pull API -------------------------------------------------------

    @property
    def event(self) -> Event | None:
        """The event returned by the last :meth:`next` call."""
        return self._event

    def has_next(self) -> bool:
        while not self._queue and not self._exhausted:
            if not self.produce_next_event():
                self._exhausted = True
                self._flush_start_element()
        return bool(self._queue)

    def next(self) -> Event:
        if not self.has_next():
            raise StopIteration
        self._event = self._queue.popleft()
        return self._event

    def __iter__(self) -> EventReader:
        return self

    def __next__(self) -> Event:
        return self.next()

    # -- Lifecycle ------------------------------------------------------

    def close(self) -> None:
        self._queue.clear()
        self._pending = None
        self._exhausted = True

    def __enter__(self) -> EventReader:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is None:
            self.close()
            return
        # Keep the error raised inside the with block
        try:
            self.close()
        except JsonXMLError:
            logger.debug("close failed while handling %s", exc_type.__name__, exc_info=True)
