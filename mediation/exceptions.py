"""Exceptions for parsing mediation configurations.

All errors derive from :class:`ExternalParsingError`, which is a ``ValueError``
so callers can distinguish malformed input from internal bugs.
The first grammar violation aborts the parse; no partial tree is returned.
"""

from __future__ import annotations

import typing
from collections.abc import Iterable

if typing.TYPE_CHECKING:
    from mediation.parsers.events import XmlEvent

__all__ = (
    "ExternalParsingError",
    "XmlElementNotSupported",
    "InvalidXmlElement",
    "UnsupportedMediator",
    "UnbalancedElement",
    "UnexpectedEvent",
    "UnexpectedEndOfStream",
    "MalformedMediator",
    "MalformedLog",
    "MalformedProperty",
)


class ExternalParsingError(ValueError):
    """Raise a ValueError for a parsing problem."""


class XmlElementNotSupported(ExternalParsingError):
    """Raise a ValueError when an XML tag is not known by the parser at all."""

    label = "Unsupported tag"

    def __init__(self, element_name: str, allowed: Iterable[str] = ()):
        text = f"{self.label}: <{element_name}>"
        if allowed:
            text = f"{text}, expected one of: {', '.join(f'<{name}>' for name in allowed)}."
        super().__init__(text)
        self.element_name = element_name


class InvalidXmlElement(ExternalParsingError):
    """Raise a ValueError when a particular XML tag wasn't expected."""


class UnsupportedMediator(XmlElementNotSupported):
    """An element is found where a mediator is expected, but it's not a supported mediator."""

    label = "Not a supported mediator"


class UnbalancedElement(InvalidXmlElement):
    """A close tag doesn't match the open element, or the stream ended before it was closed."""

    def __init__(self, expected_name: str, found_name: str | None = None):
        if found_name:
            text = f"Expected </{expected_name}> to close the element, got </{found_name}>"
        else:
            text = f"Element <{expected_name}> is not closed"
        super().__init__(text)
        self.expected_name = expected_name
        self.found_name = found_name


class UnexpectedEvent(InvalidXmlElement):
    """The lookahead event is not valid at the current position of the grammar."""

    def __init__(self, event: XmlEvent, expected: str | None = None):
        text = f"Unexpected {event}"
        if expected:
            text = f"{text}, expected {expected}"
        super().__init__(text)
        self.event = event
        self.expected = expected


class UnexpectedEndOfStream(ExternalParsingError):
    """The events are exhausted before the end of the document was reached."""

    def __init__(self, text="Unexpected end of stream, the document end is missing"):
        super().__init__(text)


class MalformedMediator(ExternalParsingError):
    """A mediator element misses a required attribute."""

    def __init__(self, element_name: str, attribute: str):
        super().__init__(f"Element <{element_name}> misses required attribute '{attribute}'")
        self.element_name = element_name
        self.attribute = attribute


class MalformedLog(MalformedMediator):
    """The ``<log>`` element misses its ``level`` attribute."""

    def __init__(self, attribute: str = "level"):
        super().__init__("log", attribute)


class MalformedProperty(MalformedMediator):
    """The ``<property>`` element misses its ``name`` or ``value`` (strict mode only)."""

    def __init__(self, attribute: str):
        super().__init__("property", attribute)
