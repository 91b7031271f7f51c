"""jsonxml — stream JSON documents as XML events."""

from .config import JsonXMLConfig
from .errors import (
    InvalidAttributeValueError,
    JsonXMLError,
    MissingNameError,
    SourceIOError,
    StructuralError,
)
from .events import EventReader
from .model import (
    MULTIPLE_PI_TARGET,
    Attribute,
    Event,
    EventType,
    NamespaceDecl,
    QName,
    TokenKind,
)
from .names import split_name
from .output import to_sax, to_xml
from .source import JsonTokenSource
from .transcoder import JsonXMLStreamReader, create_reader

__all__ = [
    "create_reader",
    "JsonXMLStreamReader",
    "JsonTokenSource",
    "JsonXMLConfig",
    "EventReader",
    "Event",
    "EventType",
    "TokenKind",
    "QName",
    "Attribute",
    "NamespaceDecl",
    "MULTIPLE_PI_TARGET",
    "split_name",
    "to_sax",
    "to_xml",
    "JsonXMLError",
    "StructuralError",
    "MissingNameError",
    "InvalidAttributeValueError",
    "SourceIOError",
]
