"""The sequences, which group mediators into a pipeline stage.

Only the ``<inSequence>`` is supported, which handles the inbound path of a message.
"""

from __future__ import annotations

from dataclasses import dataclass

from .ast import AstNode, tag_registry
from .cursor import EventCursor
from .mediators import Mediator

__all__ = (
    "Sequence",
    "InSequence",
)


class Sequence(AstNode):
    """Abstract base class for all sequences."""


@dataclass(frozen=True)
@tag_registry.register("inSequence")
class InSequence(Sequence):
    """The ``<inSequence>`` element.

    This parses the syntax::

        <inSequence>
            <log level="custom">
                <property name="/validate" value="inSequence" />
            </log>
            <log level="full" />
        </inSequence>

    The mediators are kept in document order. An empty sequence is valid.
    """

    mediators: tuple[Mediator, ...] = ()

    @classmethod
    def from_events(cls, cursor: EventCursor):
        start = cursor.enter("inSequence")
        mediators = []
        if not start.self_closing:
            while not cursor.expect_end("inSequence"):
                mediators.append(Mediator.child_from_events(cursor))

        return cls(mediators=tuple(mediators))

    def as_xml(self) -> str:
        body = "".join(mediator.as_xml() for mediator in self.mediators)
        return f"<inSequence>{body}</inSequence>"
