from __future__ import annotations

from collections.abc import Iterable

from mediation.exceptions import UnbalancedElement, UnexpectedEndOfStream, UnexpectedEvent

from .events import DocumentEnd, ElementEnd, ElementStart, XmlEvent

__all__ = ("EventCursor",)


class EventCursor:
    """A cursor over the event stream, with a single lookahead slot.

    The recognizers inspect :attr:`current` to decide which grammar rule applies,
    and call :meth:`advance` to consume it. There is no backtracking.
    """

    def __init__(self, events: Iterable[XmlEvent]):
        self._events = iter(events)
        self.current: XmlEvent | None = None
        self.advance()

    def __repr__(self):
        return f"<{self.__class__.__name__}: current={self.current!r}>"

    def advance(self) -> XmlEvent | None:
        """Pull the next event into the lookahead slot.
        Once the events are exhausted, the lookahead becomes ``None``.
        """
        self.current = next(self._events, None)
        return self.current

    def is_start(self, *names: str) -> bool:
        """Tell whether the lookahead is an opening tag (with one of the given names)."""
        current = self.current
        return isinstance(current, ElementStart) and (not names or current.local_name in names)

    def is_end(self, name: str) -> bool:
        """Tell whether the lookahead is the closing tag of the given name."""
        current = self.current
        return isinstance(current, ElementEnd) and current.local_name == name

    def enter(self, name: str) -> ElementStart:
        """Consume the opening tag of an element, and return it.

        When the event is a self-closing element, callers should not
        look for a body or closing tag, see :meth:`expect_end`.
        """
        start = self.current
        if start is None:
            raise UnexpectedEndOfStream()
        if not isinstance(start, ElementStart) or start.local_name != name:
            raise UnexpectedEvent(start, expected=f"<{name}>")

        self.advance()
        return start

    def expect_end(self, name: str) -> bool:
        """Check whether the body of element ``name`` is complete.

        This returns ``True`` and consumes the closing tag when it's found,
        or ``False`` when another child element starts.
        The nesting must be correct: any other closing tag,
        or the end of the stream is reported as an unbalanced element.
        """
        if self.is_end(name):
            self.advance()
            return True

        current = self.current
        if isinstance(current, ElementEnd):
            raise UnbalancedElement(name, found_name=current.local_name)
        elif isinstance(current, ElementStart):
            return False
        elif current is None or isinstance(current, DocumentEnd):
            raise UnbalancedElement(name)
        else:
            raise UnexpectedEvent(current, expected=f"a child element or </{name}>")
