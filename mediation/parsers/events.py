"""The structural events that the parser consumes.

A tokenizer (see :func:`mediation.parsers.xml.iter_events`) translates XML text
into a flat stream of these events. The stream can also be constructed by hand,
which is useful to feed other sources (or tests) into the parser.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

__all__ = (
    "DocumentStart",
    "DocumentEnd",
    "ElementStart",
    "ElementEnd",
    "Characters",
    "XmlEvent",
)


@dataclass(frozen=True)
class DocumentStart:
    """The ``<?xml ...?>`` declaration. This event is optional in a stream."""

    version: str = "1.0"
    encoding: str = "UTF-8"

    def __str__(self):
        return f'<?xml version="{self.version}" encoding="{self.encoding}"?>'


@dataclass(frozen=True)
class DocumentEnd:
    """The end of the document."""

    def __str__(self):
        return "end of document"


@dataclass(frozen=True)
class ElementStart:
    """An opening tag, with its attributes in document order.

    When ``self_closing`` is set, the event represents the complete empty element;
    no :class:`ElementEnd` follows for it.
    """

    local_name: str
    attributes: tuple[tuple[str, str], ...] = ()
    self_closing: bool = False

    def get_attribute(self, name: str) -> str | None:
        """Find the attribute value. The first attribute with the given name wins."""
        for attr_name, value in self.attributes:
            if attr_name == name:
                return value
        return None

    def __str__(self):
        attrs = "".join(f' {name}="{value}"' for name, value in self.attributes)
        return f"<{self.local_name}{attrs}{'/' if self.self_closing else ''}>"


@dataclass(frozen=True)
class ElementEnd:
    """A closing tag."""

    local_name: str

    def __str__(self):
        return f"</{self.local_name}>"


@dataclass(frozen=True)
class Characters:
    """Text content. This is never valid in the supported grammar."""

    text: str

    def __str__(self):
        return f"text {self.text!r}"


XmlEvent = Union[DocumentStart, DocumentEnd, ElementStart, ElementEnd, Characters]
