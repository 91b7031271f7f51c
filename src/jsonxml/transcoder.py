"""JsonXMLStreamReader — JSON tokens in, XML events out.

Mapping rules (one JSON object per XML element):

- ``{"alice": "bob"}``              → ``<alice>bob</alice>``
- ``{"alice": {"@id": "1"}}``       → ``<alice id="1"/>``
- ``{"alice": {"$": "bob"}}``       → ``<alice>bob</alice>``
- ``{"alice": ["x", "y"]}``         → ``<?xml-multiple alice?><alice>x</alice><alice>y</alice>``
- ``{"alice": {"@xmlns": {"$": "urn:a", "p": "urn:p"}}}``
                                    → ``<alice xmlns="urn:a" xmlns:p="urn:p"/>``

A JSON array at the top level is a sequence of documents; a scalar at the
top level is read as bare character data.  Mixed content is not supported.
"""

from __future__ import annotations

import dataclasses
import io
import logging
import os
from typing import IO

from .config import JsonXMLConfig
from .errors import InvalidAttributeValueError, MissingNameError, SourceIOError, StructuralError
from .events import EventReader
from .model import DEFAULT_NS_PREFIX, MULTIPLE_PI_TARGET, TEXT_SIGIL, XMLNS_ATTRIBUTE, TokenKind
from .names import declared_prefix, is_text_field, split_name, strip_attribute_sigil
from .scope import Scope, ScopeStack
from .source import JsonTokenSource

logger = logging.getLogger(__name__)


class JsonXMLStreamReader(EventReader):
    """Pull reader presenting a JSON token source as XML events.

    Usage::

        source = JsonTokenSource.from_string('{"alice": "bob"}')
        with JsonXMLStreamReader(source) as reader:
            for event in reader:
                print(event.type, event.name, event.text)
    """

    def __init__(self, source: JsonTokenSource, config: JsonXMLConfig | None = None) -> None:
        super().__init__()
        self._source = source
        self._config = config or JsonXMLConfig()
        self._scopes = ScopeStack()
        self._document_array = False

    @property
    def config(self) -> JsonXMLConfig:
        return self._config

    @property
    def document_array(self) -> bool:
        """True when the input is a top-level array of documents."""
        return self._document_array

    # -- State machine --------------------------------------------------

    def produce_next_event(self) -> bool:
        source = self._source
        while True:
            scope = self._scopes.current()
            token = source.peek()

            if token is TokenKind.NAME:
                self._consume_name(scope)
                continue

            if token is TokenKind.START_ARRAY:
                source.start_array()
                self._start_array(scope)
                continue

            if token is TokenKind.START_OBJECT:
                source.start_object()
                self._start_object(scope)
                continue

            if token is TokenKind.END_OBJECT:
                source.end_object()
                return self._end_object(scope)

            if token is TokenKind.VALUE:
                self._consume_value(scope)
                return True

            if token is TokenKind.END_ARRAY:
                source.end_array()
                return self._end_array(scope)

            if token is TokenKind.NONE:
                return False

            raise StructuralError(f"Unexpected token: {token}")

    # -- Per-token handlers ---------------------------------------------

    def _consume_name(self, scope: Scope) -> None:
        field_name = self._source.name()
        attr_name = strip_attribute_sigil(field_name)
        if attr_name is not None:
            token = self._source.peek()
            if token is TokenKind.VALUE:
                self._read_attr_or_ns_decl(attr_name, self._source.value())
            elif token is TokenKind.START_OBJECT and attr_name == XMLNS_ATTRIBUTE:
                self._read_ns_decl_object()
            else:
                raise InvalidAttributeValueError(
                    f"Expected attribute value for '{field_name}', got {token.name}"
                )
        elif is_text_field(field_name):
            text = self._source.value()
            if text is not None:
                self.read_data(text)
        else:
            scope.pending_tag_name = field_name

    def _start_array(self, scope: Scope) -> None:
        if scope.is_array:
            raise StructuralError("Array start inside array")
        if self._at_document_level():
            if self._document_array:
                raise StructuralError("Array start inside array")
            logger.debug("top-level array: reading a sequence of documents")
            self._document_array = True
            element_name = None
        else:
            element_name = scope.pending_tag_name
            if element_name is None:
                raise MissingNameError("Array name missing")
            scope.start_array(element_name)
            scope.pending_tag_name = None
        if self._config.multiple_pi:
            self.read_pi(MULTIPLE_PI_TARGET, element_name)

    def _start_object(self, scope: Scope) -> None:
        if self._at_document_level():
            self.read_start_document()
            return
        name = self._element_name(scope, "Object")
        self._read_start_element(name)
        scope.pending_tag_name = None

    def _end_object(self, scope: Scope) -> bool:
        if scope.is_array:
            raise StructuralError("Object end inside array")
        if self._scopes.is_root_and_current():
            if not self.start_document_read:
                raise StructuralError("Object end without matching start")
            self.read_end_document()
            # Another document may follow in a top-level array
            return self._document_array
        self.read_end_element_tag()
        self._scopes.pop()
        return True

    def _consume_value(self, scope: Scope) -> None:
        text = self._source.value()
        if self._at_document_level():
            # The whole document is a single scalar
            if text is not None:
                self.read_data(text)
            return
        name = self._element_name(scope, "Value")
        self._read_start_element(name)
        if text is not None:
            self.read_data(text)
        self.read_end_element_tag()
        self._scopes.pop()
        scope.pending_tag_name = None

    def _end_array(self, scope: Scope) -> bool:
        if scope.is_array:
            scope.end_array()
            return True
        if self._scopes.is_root_and_current() and self._document_array:
            return False
        raise StructuralError("Array end without matching start")

    # -- Helpers --------------------------------------------------------

    def _at_document_level(self) -> bool:
        return self._scopes.is_root_and_current() and not self.start_document_read

    def _element_name(self, scope: Scope, what: str) -> str:
        """Name for the next element in *scope*; counts array items."""
        if scope.is_array:
            scope.inc_array_size()
            return scope.array.element_name
        if scope.pending_tag_name is None:
            raise MissingNameError(f"{what} name missing")
        return scope.pending_tag_name

    def _read_start_element(self, name: str) -> None:
        prefix, local_name = split_name(name, self._config.namespace_separator)
        self.read_start_element_tag(prefix, local_name, None, self._scopes.push())

    def _read_attr_or_ns_decl(self, name: str, value: str | None) -> None:
        if value is None:
            value = ""
        separator = self._config.namespace_separator
        prefix = declared_prefix(name, separator)
        if prefix is not None:
            self.read_ns_decl(prefix, value)
        else:
            prefix, local_name = split_name(name, separator)
            self.read_attr(prefix, local_name, None, value)

    def _read_ns_decl_object(self) -> None:
        """Read ``"@xmlns": {"$": default-uri, prefix: uri, ...}``."""
        source = self._source
        source.start_object()
        while source.peek() is TokenKind.NAME:
            prefix = source.name()
            uri = source.value() or ""
            if prefix == TEXT_SIGIL:
                prefix = DEFAULT_NS_PREFIX
            self.read_ns_decl(prefix, uri)
        source.end_object()

    # -- Lifecycle ------------------------------------------------------

    def close(self) -> None:
        super().close()
        try:
            self._source.close()
        except OSError as exc:
            raise SourceIOError(f"Cannot close JSON source: {exc}") from exc


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

def create_reader(
    data: str | bytes | os.PathLike | IO[bytes],
    config: JsonXMLConfig | None = None,
    **overrides,
) -> JsonXMLStreamReader:
    """Build a reader for JSON text, a path, or a binary file-like object.

    ``str`` and ``bytes`` are read as JSON text; use :class:`pathlib.Path`
    for files.  Keyword overrides replace fields of *config*::

        create_reader('{"a": [1, 2]}', multiple_pi=False)
    """
    config = config or JsonXMLConfig()
    if overrides:
        config = dataclasses.replace(config, **overrides)
    if isinstance(data, (str, bytes)):
        source = JsonTokenSource.from_string(data)
    elif isinstance(data, os.PathLike):
        source = JsonTokenSource.open(data)
    elif isinstance(data, io.TextIOBase):
        raise TypeError("JSON streams must be opened in binary mode")
    else:
        source = JsonTokenSource.from_stream(data)
    return JsonXMLStreamReader(source, config)
