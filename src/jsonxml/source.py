"""Token source: pull-style JSON tokens on top of ijson."""

from __future__ import annotations

import io
import logging
import os
from decimal import Decimal
from typing import IO, Any, Iterable, Iterator

import ijson

from .errors import SourceIOError, StructuralError
from .model import TokenKind

logger = logging.getLogger(__name__)


_EVENT_KINDS: dict[str, TokenKind] = {
    "map_key": TokenKind.NAME,
    "start_map": TokenKind.START_OBJECT,
    "end_map": TokenKind.END_OBJECT,
    "start_array": TokenKind.START_ARRAY,
    "end_array": TokenKind.END_ARRAY,
    "string": TokenKind.VALUE,
    "number": TokenKind.VALUE,
    "boolean": TokenKind.VALUE,
    "null": TokenKind.VALUE,
}


def scalar_text(value: Any) -> str | None:
    """Render a JSON scalar as the text of an XML value."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Decimal):
        # Decimal spells 1e5 as "1E+5"; keep the JSON exponent form
        return str(value).replace("E+", "e").replace("E", "e")
    return str(value)


class JsonTokenSource:
    """Sequence of JSON tokens with one token of lookahead.

    *events* is an iterable of ``(event, value)`` pairs in the shape
    produced by :func:`ijson.basic_parse`.  *stream*, when given, is closed
    by :meth:`close`.

    Usage::

        with open("doc.json", "rb") as fh:
            source = JsonTokenSource.from_stream(fh)
            source.peek()          # → TokenKind.START_OBJECT
            source.start_object()
    """

    def __init__(self, events: Iterable[tuple[str, Any]], stream: IO | None = None) -> None:
        self._events: Iterator[tuple[str, Any]] = iter(events)
        self._stream = stream
        self._kind: TokenKind | None = None
        self._value: Any = None

    # -- Construction ---------------------------------------------------

    @classmethod
    def from_stream(cls, stream: IO, close_stream: bool = False) -> JsonTokenSource:
        """Tokenize a binary file-like object incrementally."""
        return cls(ijson.basic_parse(stream), stream if close_stream else None)

    @classmethod
    def from_string(cls, data: str | bytes) -> JsonTokenSource:
        if isinstance(data, str):
            data = data.encode("utf-8")
        return cls.from_stream(io.BytesIO(data), close_stream=True)

    @classmethod
    def open(cls, path: str | os.PathLike) -> JsonTokenSource:
        try:
            stream = open(path, "rb")
        except OSError as exc:
            raise SourceIOError(f"Cannot open '{path}': {exc}") from exc
        logger.debug("opened JSON source %s", path)
        return cls.from_stream(stream, close_stream=True)

    # -- Lookahead ------------------------------------------------------

    def peek(self) -> TokenKind:
        """Return the kind of the next token without consuming it."""
        if self._kind is None:
            self._advance()
        return self._kind

    def _advance(self) -> None:
        try:
            event, value = next(self._events)
        except StopIteration:
            self._kind, self._value = TokenKind.NONE, None
            return
        except ijson.JSONError as exc:
            raise SourceIOError(f"Invalid JSON: {exc}") from exc
        except OSError as exc:
            raise SourceIOError(f"Cannot read JSON source: {exc}") from exc
        kind = _EVENT_KINDS.get(event)
        if kind is None:
            raise StructuralError(f"Unexpected token: {event}")
        self._kind, self._value = kind, value

    def _take(self, expected: TokenKind) -> Any:
        kind = self.peek()
        if kind is not expected:
            raise StructuralError(f"Expected {expected.name}, got {kind.name}")
        value = self._value
        self._kind, self._value = None, None
        return value

    # -- Consumption ----------------------------------------------------

    def name(self) -> str:
        return self._take(TokenKind.NAME)

    def value(self) -> str | None:
        return scalar_text(self._take(TokenKind.VALUE))

    def start_object(self) -> None:
        self._take(TokenKind.START_OBJECT)

    def end_object(self) -> None:
        self._take(TokenKind.END_OBJECT)

    def start_array(self) -> None:
        self._take(TokenKind.START_ARRAY)

    def end_array(self) -> None:
        self._take(TokenKind.END_ARRAY)

    def close(self) -> None:
        """Release the tokenizer and the owned stream.

        ``OSError`` from the stream is not caught here; the reader wraps it.
        """
        close_events = getattr(self._events, "close", None)
        if close_events is not None:
            close_events()
        if self._stream is not None:
            stream, self._stream = self._stream, None
            stream.close()
            logger.debug("closed JSON source stream")
