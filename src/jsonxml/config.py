"""Reader configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class JsonXMLConfig:
    """Options consumed by :class:`~jsonxml.transcoder.JsonXMLStreamReader`.

    ``multiple_pi``: emit ``<?xml-multiple name?>`` when an array starts.
    ``namespace_separator``: single character between prefix and local name.
    """

    multiple_pi: bool = True
    namespace_separator: str = ":"

    def __post_init__(self) -> None:
        if len(self.namespace_separator) != 1:
            raise ValueError(
                f"namespace_separator must be a single character, "
                f"got {self.namespace_separator!r}"
            )
