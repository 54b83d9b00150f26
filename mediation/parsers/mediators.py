"""The mediators, which are the individual steps in a mediation pipeline.

Inheritance structure:

* :class:`Mediator`

 * :class:`LogMediator`
 * :class:`PropertyMediator`
"""

from __future__ import annotations

from dataclasses import dataclass

from mediation import conf
from mediation.exceptions import (
    MalformedLog,
    MalformedProperty,
    UnbalancedElement,
    UnsupportedMediator,
)
from mediation.output.utils import render_attributes

from .ast import AstNode, tag_registry
from .cursor import EventCursor

__all__ = (
    "Mediator",
    "LogMediator",
    "PropertyMediator",
)


class Mediator(AstNode):
    """Abstract base class for all mediators.
    Any element that is parsed in place of a mediator needs to extend from this node.
    """

    unsupported_error = UnsupportedMediator


@dataclass(frozen=True)
@tag_registry.register("property")
class PropertyMediator(Mediator):
    """The ``<property>`` element.

    This parses the syntax::

        <property name="/validate" value="inSequence" />

    The element has no content. It's placed inside a :class:`LogMediator`.
    """

    name: str
    value: str

    @classmethod
    def from_events(cls, cursor: EventCursor):
        start = cursor.enter("property")
        name = start.get_attribute("name")
        value = start.get_attribute("value")

        if conf.MEDIATION_STRICT_PROPERTY_ATTRIBUTES:
            if name is None:
                raise MalformedProperty("name")
            if value is None:
                raise MalformedProperty("value")

        # The start event was consumed, only the matching end event may follow.
        if not start.self_closing and not cursor.expect_end("property"):
            raise UnbalancedElement("property")

        return cls(name=name or "", value=value or "")

    def as_xml(self) -> str:
        return f"<property{render_attributes(('name', self.name), ('value', self.value))}/>"


@dataclass(frozen=True)
@tag_registry.register("log")
class LogMediator(Mediator):
    """The ``<log>`` element.

    This parses the syntax::

        <log level="custom">
            <property name="/validate" value="inSequence" />
        </log>

    The ``level`` attribute is required, but its value is not validated.
    """

    level: str
    properties: tuple[PropertyMediator, ...] = ()

    @classmethod
    def from_events(cls, cursor: EventCursor):
        start = cursor.enter("log")
        level = start.get_attribute("level")
        if level is None:
            raise MalformedLog()

        properties = []
        if not start.self_closing:
            while not cursor.expect_end("log"):
                properties.append(PropertyMediator.child_from_events(cursor))

        return cls(level=level, properties=tuple(properties))

    def as_xml(self) -> str:
        body = "".join(prop.as_xml() for prop in self.properties)
        return f"<log{render_attributes(('level', self.level))}>{body}</log>"
