"""Data model for tokens, XML events and names."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_NS_PREFIX = ""
XML_NS_PREFIX = "xml"
XML_NS_URI = "http://www.w3.org/XML/1998/namespace"
XMLNS_ATTRIBUTE = "xmlns"
XMLNS_ATTRIBUTE_NS_URI = "http://www.w3.org/2000/xmlns/"

ATTRIBUTE_SIGIL = "@"
TEXT_SIGIL = "$"

# <?xml-multiple element-name?> marks the start of a repeated element group
MULTIPLE_PI_TARGET = "xml-multiple"


# ---------------------------------------------------------------------------
# TokenKind
# ---------------------------------------------------------------------------

class TokenKind(Enum):
    NAME = auto()
    START_OBJECT = auto()
    END_OBJECT = auto()
    START_ARRAY = auto()
    END_ARRAY = auto()
    VALUE = auto()
    NONE = auto()


# ---------------------------------------------------------------------------
# EventType
# ---------------------------------------------------------------------------

class EventType(Enum):
    START_DOCUMENT = auto()
    END_DOCUMENT = auto()
    START_ELEMENT = auto()
    END_ELEMENT = auto()
    CHARACTERS = auto()
    PROCESSING_INSTRUCTION = auto()


# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class QName:
    prefix: str
    local_name: str
    namespace_uri: str | None = None

    def __str__(self) -> str:
        if self.prefix:
            return f"{self.prefix}:{self.local_name}"
        return self.local_name


@dataclass(slots=True)
class Attribute:
    name: QName
    value: str


@dataclass(slots=True)
class NamespaceDecl:
    prefix: str  # "" = default namespace
    uri: str


# ---------------------------------------------------------------------------
# Event
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Event:
    """One XML-shaped event.

    Only the fields relevant to ``type`` are set:

    - START_DOCUMENT: ``version``, ``encoding``, ``standalone``
    - START_ELEMENT / END_ELEMENT: ``name``, ``attributes``, ``namespaces``
    - CHARACTERS: ``text``
    - PROCESSING_INSTRUCTION: ``target``, ``data``
    """

    type: EventType
    name: QName | None = None
    text: str | None = None
    attributes: list[Attribute] = field(default_factory=list)
    namespaces: list[NamespaceDecl] = field(default_factory=list)
    target: str | None = None
    data: str | None = None
    version: str | None = None
    encoding: str | None = None
    standalone: bool | None = None

    def attribute(self, local_name: str, prefix: str = DEFAULT_NS_PREFIX) -> str | None:
        """Return the value of the named attribute, or ``None``."""
        for attr in self.attributes:
            if attr.name.local_name == local_name and attr.name.prefix == prefix:
                return attr.value
        return None
