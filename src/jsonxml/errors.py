"""Error family raised while transcoding JSON tokens into XML events."""

from __future__ import annotations


class JsonXMLError(Exception):
    """Base class for all transcoding errors."""


class StructuralError(JsonXMLError):
    """The token stream does not fit the element/array nesting rules."""


class MissingNameError(StructuralError):
    """An array, object or value has no field name to use as element name."""


class InvalidAttributeValueError(JsonXMLError):
    """An ``@name`` field is followed by something other than a scalar."""


class SourceIOError(JsonXMLError):
    """Reading from or closing the token source failed."""
