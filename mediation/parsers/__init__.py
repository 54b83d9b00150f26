"""All parser logic to process mediation configurations.

This handles the tags:

* ``<inSequence>``
* ``<log>``
* ``<property>``

The XML text is first translated into a stream of structural events,
which is translated into an Abstract Syntax Tree (AST).
These objects can render themselves back into canonical XML.
"""

from .events import Characters, DocumentEnd, DocumentStart, ElementEnd, ElementStart, XmlEvent
from .mediators import LogMediator, Mediator, PropertyMediator
from .program import MediationParser, Program, parse_events, parse_string
from .sequences import InSequence, Sequence
from .xml import iter_events, tokenize

__all__ = (
    "Characters",
    "DocumentEnd",
    "DocumentStart",
    "ElementEnd",
    "ElementStart",
    "XmlEvent",
    "InSequence",
    "Sequence",
    "LogMediator",
    "Mediator",
    "PropertyMediator",
    "MediationParser",
    "Program",
    "parse_events",
    "parse_string",
    "iter_events",
    "tokenize",
)
