"""The tree builder, which turns the event stream into a :class:`Program`.

This is a recursive-descent parser with a single lookahead event.
Each element class consumes its own events (see :mod:`mediation.parsers.ast`),
the :class:`MediationParser` handles the document level.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from mediation import conf
from mediation.exceptions import ExternalParsingError, UnexpectedEndOfStream, UnexpectedEvent

from .ast import AstNode
from .cursor import EventCursor
from .events import DocumentEnd, DocumentStart, XmlEvent
from .mediators import LogMediator, Mediator, PropertyMediator
from .sequences import InSequence
from .xml import iter_events

logger = logging.getLogger(__name__)

__all__ = (
    "Program",
    "MediationParser",
    "parse_events",
    "parse_string",
)


@dataclass(frozen=True)
class Program:
    """The root of the syntax tree: all top-level nodes in document order."""

    nodes: tuple[AstNode, ...] = ()

    def __iter__(self) -> Iterator[AstNode]:
        return iter(self.nodes)

    def __len__(self):
        return len(self.nodes)

    def as_xml(self) -> str:
        """Render the program as canonical XML."""
        return "".join(node.as_xml() for node in self.nodes)

    def __str__(self):
        return self.as_xml()


class MediationParser:
    """Build the syntax tree from a stream of structural events.

    Usage:

    .. code-block:: python

        program = MediationParser(iter_events(xml_text)).parse()

    The first grammar violation raises an :class:`~mediation.exceptions.ExternalParsingError`,
    a partially constructed tree is never returned.
    """

    def __init__(self, events: Iterable[XmlEvent]):
        self.cursor = EventCursor(events)

    def parse(self) -> Program:
        """Parse the complete document."""
        try:
            program = self._parse_program()
        except ExternalParsingError as e:
            logger.debug("Parsing mediation config failed at %s: %s", self.cursor.current, e)
            raise

        logger.debug("Parsed mediation config with %d top-level nodes", len(program))
        return program

    def _parse_program(self) -> Program:
        cursor = self.cursor
        if isinstance(cursor.current, DocumentStart):
            cursor.advance()

        nodes = []
        while not isinstance(cursor.current, DocumentEnd):
            nodes.append(self._parse_top_level_node())

        cursor.advance()  # consume the end of the document
        return Program(nodes=tuple(nodes))

    def _parse_top_level_node(self) -> AstNode:
        cursor = self.cursor
        if cursor.current is None:
            raise UnexpectedEndOfStream()
        elif cursor.is_start("inSequence"):
            return self.parse_in_sequence()
        elif cursor.is_start(*Mediator.get_tag_names()):
            if not conf.MEDIATION_ALLOW_TOP_LEVEL_MEDIATORS:
                raise UnexpectedEvent(
                    cursor.current, expected="<inSequence>, mediators must be placed in a sequence"
                )
            return self.parse_mediator()
        else:
            raise UnexpectedEvent(cursor.current, expected="<inSequence> or a mediator")

    def parse_in_sequence(self) -> InSequence:
        """Parse the ``<inSequence>`` element at the cursor."""
        return InSequence.from_events(self.cursor)

    def parse_mediator(self) -> Mediator:
        """Parse any supported mediator element at the cursor."""
        return Mediator.child_from_events(self.cursor)

    def parse_log(self) -> LogMediator:
        """Parse the ``<log>`` element at the cursor."""
        return LogMediator.from_events(self.cursor)

    def parse_property(self) -> PropertyMediator:
        """Parse the ``<property>`` element at the cursor."""
        return PropertyMediator.from_events(self.cursor)


def parse_events(events: Iterable[XmlEvent]) -> Program:
    """Parse a stream of structural events into a :class:`Program`."""
    return MediationParser(events).parse()


def parse_string(xml_string: str | bytes) -> Program:
    """Parse the XML text into a :class:`Program`."""
    return parse_events(iter_events(xml_string))
