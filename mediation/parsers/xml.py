"""Tokenizer that turns XML text into structural events.

This logic uses the expat parser from the standard library,
wrapped by defusedxml so incoming DOS attacks are prevented.
Instead of building an element tree, a custom parser target
records the callbacks as a flat list of :mod:`~mediation.parsers.events`.

Whitespace between elements is dropped, and namespaces are reduced to local names.
The text may contain multiple root elements, as a program can have multiple top-level nodes.
The result can be fed to the :class:`~mediation.parsers.program.MediationParser`.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from xml.parsers.expat import errors as expat_errors

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import DefusedXMLParser, ParseError

from mediation.exceptions import ExternalParsingError, UnbalancedElement

from .events import Characters, DocumentEnd, DocumentStart, ElementEnd, ElementStart, XmlEvent

logger = logging.getLogger(__name__)

__all__ = (
    "EventTarget",
    "iter_events",
    "tokenize",
    "split_ns",
)

RE_XML_DECLARATION = re.compile(
    r"""\A\s*<\?xml\s+version=["'](?P<version>[^"']+)["']"""
    r"""(?:\s+encoding=["'](?P<encoding>[^"']+)["'])?[^?]*\?>"""
)

# Expat error code that means the document structure isn't balanced.
TAG_MISMATCH = expat_errors.codes[expat_errors.XML_ERROR_TAG_MISMATCH]

# The body is wrapped in this element, so a sequence of root elements can be parsed.
WRAPPER_TAG = "mediation-document"
WRAPPER_START = f"<{WRAPPER_TAG}>"


class EventTarget:
    """Parser target for the expat-based XMLParser, which collects events.

    The outermost element is the wrapper around the document body, which is not reported.
    The stack of open elements is tracked,
    so structural errors can report which element wasn't closed.
    """

    def __init__(self):
        self.events: list[XmlEvent] = []
        self.open_elements: list[str] = []
        self._text = []
        self._in_wrapper = False

    def start(self, tag, attrs):
        self._flush()
        if not self._in_wrapper:
            self._in_wrapper = True
            return

        local_name = split_ns(tag)[1]
        attributes = tuple((split_ns(name)[1], value) for name, value in attrs.items())
        self.events.append(ElementStart(local_name, attributes))
        self.open_elements.append(local_name)

    def end(self, tag):
        self._flush()
        if not self.open_elements:
            return  # end of the wrapper

        self.open_elements.pop()
        self.events.append(ElementEnd(split_ns(tag)[1]))

    def data(self, data):
        # Expat may report a single text node in multiple chunks.
        self._text.append(data)

    def close(self) -> list[XmlEvent]:
        self._flush()
        return self.events

    def _flush(self):
        text = "".join(self._text)
        self._text.clear()
        if text.strip():  # whitespace between elements is dropped
            self.events.append(Characters(text))


def tokenize(xml_string: str | bytes) -> list[XmlEvent]:
    """Translate the XML text into a list of structural events.

    The text may hold multiple root elements, which are reported in document order.
    The list always starts with a :class:`DocumentStart` and ends with a :class:`DocumentEnd`.
    """
    target = EventTarget()

    # Passing a custom parser potentially circumvents defusedxml,
    # so note the parser is again configured in the same way:
    parser = DefusedXMLParser(
        target=target,
        forbid_dtd=True,
        forbid_entities=True,
        forbid_external=True,
    )

    document_start = _get_document_start(xml_string)
    if isinstance(xml_string, bytes):
        try:
            xml_string = xml_string.decode(document_start.encoding)
        except (LookupError, UnicodeDecodeError) as e:
            raise ExternalParsingError(f"Unable to decode XML: {e}") from e

    xml_string = xml_string.lstrip("\ufeff")  # byte order mark
    if xml_string.lstrip().startswith("<?"):
        # The text is decoded, the encoding declaration no longer applies.
        xml_string = xml_string[xml_string.find("?>") + 2 :]

    try:
        parser.feed(f"{WRAPPER_START}{xml_string}</{WRAPPER_TAG}>")
        events = parser.close()
    except ParseError as e:
        logger.debug("Parsing XML error: %s: %s", e, xml_string)
        if e.code == TAG_MISMATCH and target.open_elements:
            raise UnbalancedElement(target.open_elements[-1]) from e

        # Offer consistent results for callers to check for invalid data.
        raise ExternalParsingError(_get_error_message(e)) from e
    except DefusedXmlException as e:
        logger.debug("Rejected unsafe XML: %s", e)
        raise ExternalParsingError(str(e)) from e

    return [document_start, *events, DocumentEnd()]


def iter_events(xml_string: str | bytes) -> Iterator[XmlEvent]:
    """Provide the events of the XML text as iterator.
    The text is tokenized completely before the first event is returned.
    """
    return iter(tokenize(xml_string))


def split_ns(xml_name: str) -> tuple[str | None, str]:
    """Split the element tag or attribute name into the namespace and local name.
    The stdlib etree doesn't have the properties for this (lxml does).
    """
    # Tags may start with a `{ns}`
    if xml_name.startswith("{"):
        end = xml_name.index("}")
        return xml_name[1:end], xml_name[end + 1 :]
    else:
        return None, xml_name


def _get_document_start(xml_string: str | bytes) -> DocumentStart:
    """Read the version and encoding from the ``<?xml ...?>`` declaration, if any."""
    head = xml_string[:200]
    if isinstance(head, bytes):
        head = head.decode("latin-1")

    match = RE_XML_DECLARATION.match(head)
    if match is None:
        return DocumentStart()
    return DocumentStart(version=match["version"], encoding=match["encoding"] or "UTF-8")


def _get_error_message(exception: ParseError) -> str:
    """Report the error position, relative to the text without the wrapper element."""
    line, column = exception.position
    if line == 1:
        column = max(column - len(WRAPPER_START), 0)
    return f"{expat_errors.messages[exception.code]}: line {line}, column {column}"
