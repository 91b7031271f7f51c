"""Qualified-name splitting and JSON field-name classification."""

from __future__ import annotations

from .model import ATTRIBUTE_SIGIL, DEFAULT_NS_PREFIX, TEXT_SIGIL, XMLNS_ATTRIBUTE


def split_name(name: str, separator: str = ":") -> tuple[str, str]:
    """Split ``prefix<sep>local`` at the first separator.

    A name without separator is in the default namespace::

        split_name("p:item")  → ("p", "item")
        split_name("item")    → ("", "item")
    """
    index = name.find(separator)
    if index < 0:
        return DEFAULT_NS_PREFIX, name
    return name[:index], name[index + 1:]


def strip_attribute_sigil(field_name: str) -> str | None:
    """Return the attribute name of an ``@name`` field, else ``None``."""
    if field_name.startswith(ATTRIBUTE_SIGIL):
        return field_name[len(ATTRIBUTE_SIGIL):]
    return None


def is_text_field(field_name: str) -> bool:
    return field_name == TEXT_SIGIL


def declared_prefix(name: str, separator: str = ":") -> str | None:
    """Return the prefix declared by an attribute name, or ``None``.

    - ``xmlns``        → ``""`` (default namespace)
    - ``xmlns<sep>p``  → ``"p"``
    - anything else    → ``None`` (a plain attribute, e.g. ``xmlnsx:y``)
    """
    if name == XMLNS_ATTRIBUTE:
        return DEFAULT_NS_PREFIX
    prefix, local_name = split_name(name, separator)
    if prefix == XMLNS_ATTRIBUTE:
        return local_name
    return None
