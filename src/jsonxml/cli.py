"""``jsonxml`` command line: read JSON, write XML (or the raw event stream)."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import IO

from .config import JsonXMLConfig
from .errors import JsonXMLError
from .model import Event, EventType
from .output import to_xml
from .transcoder import create_reader

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Event formatting
# ---------------------------------------------------------------------------

def format_event(event: Event) -> str:
    """One-line rendering of an event for ``--events``."""
    kind = event.type
    if kind in (EventType.START_ELEMENT, EventType.END_ELEMENT):
        parts = [kind.name, str(event.name)]
        if event.name.namespace_uri:
            parts.append(f"{{{event.name.namespace_uri}}}")
        if kind is EventType.START_ELEMENT:
            for decl in event.namespaces:
                parts.append(f"xmlns{':' + decl.prefix if decl.prefix else ''}={decl.uri!r}")
            for attr in event.attributes:
                parts.append(f"@{attr.name}={attr.value!r}")
        return " ".join(parts)
    if kind is EventType.CHARACTERS:
        return f"{kind.name} {event.text!r}"
    if kind is EventType.PROCESSING_INSTRUCTION:
        return f"{kind.name} {event.target} {event.data or ''}".rstrip()
    return kind.name


def _write_events(events, dest: IO[str]) -> None:
    for event in events:
        print(format_event(event), file=dest)


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsonxml",
        description="Stream a JSON document as XML.",
    )
    parser.add_argument("file", nargs="?", help="JSON input (default: stdin)")
    parser.add_argument("--events", action="store_true", help="print one line per XML event")
    parser.add_argument(
        "--no-multiple-pi",
        dest="multiple_pi",
        action="store_false",
        help="do not emit <?xml-multiple?> at array starts",
    )
    parser.add_argument("--separator", default=":", help="namespace prefix separator (default ':')")
    parser.add_argument(
        "--no-declaration",
        dest="declaration",
        action="store_false",
        help="omit the <?xml ...?> declaration",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run ``jsonxml`` (also ``python -m jsonxml.cli``)."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = JsonXMLConfig(multiple_pi=args.multiple_pi, namespace_separator=args.separator)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    data = Path(args.file) if args.file else sys.stdin.buffer
    try:
        with create_reader(data, config) as reader:
            if args.events:
                _write_events(reader, sys.stdout)
            else:
                to_xml(reader, sys.stdout, declaration=args.declaration)
                print(file=sys.stdout)
    except (JsonXMLError, OSError) as exc:
        logger.debug("transcoding failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
