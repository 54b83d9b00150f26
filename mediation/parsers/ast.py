"""Utilities for building an Abstract Syntax Tree (AST) from the event stream.

Python classes can inherit :class:`AstNode` and register themselves as the parser
for a given tag. The class should implement a :meth:`AstNode.from_events` class method,
which consumes the events of that element from the :class:`~mediation.parsers.cursor.EventCursor`.

Next, when :meth:`AstNode.child_from_events` is called on a base class,
it will detect which subclass the current element refers to and let it consume the element.
Only subclasses of the called base class are accepted, so an invalid child element
is reported instead of creating an invalid Abstract Syntax Tree.
"""

from __future__ import annotations

from typing import TypeVar

from mediation.exceptions import (
    InvalidXmlElement,
    UnexpectedEndOfStream,
    UnexpectedEvent,
    XmlElementNotSupported,
)

from .cursor import EventCursor
from .events import ElementEnd, ElementStart

__all__ = (
    "AstNode",
    "TagRegistry",
    "tag_registry",
)


class AstNode:
    """The base node for all classes that represent an XML tag.

    Each subclass should implement :meth:`from_events` to translate
    the element into a Python (data) class, and :meth:`as_xml` to render it back.
    """

    #: The exception to raise when an unknown tag is found in place of this node.
    unsupported_error: type[XmlElementNotSupported] = XmlElementNotSupported

    _xml_tags = []

    def __init_subclass__(cls):
        # Each class level has a fresh list of supported tags.
        cls._xml_tags = []

    @classmethod
    def from_events(cls, cursor: EventCursor):
        """Initialize this Python class from the events of the corresponding XML tag.
        Each subclass overrides this to consume that particular XML tag.
        """
        raise NotImplementedError(
            f"{cls.__name__}.from_events() is not implemented to parse {cursor.current}"
        )

    @classmethod
    def child_from_events(cls, cursor: EventCursor) -> AstNode:
        """Parse the current element, returning the correct subclass of this class.

        When ``Mediator.child_from_events(cursor)`` is called, it may
        return a ``LogMediator`` or ``PropertyMediator`` node.
        """
        sub_class = tag_registry.resolve_class(cursor, allowed_types=(cls,))
        return sub_class.from_events(cursor)

    @classmethod
    def get_tag_names(cls) -> list[str]:
        """Provide all known XML tags that this code can parse."""
        try:
            # Because a cached class property is hard to build
            return _KNOWN_TAG_NAMES[cls]
        except KeyError:
            all_xml_tags = cls._xml_tags.copy()
            for sub_cls in cls.__subclasses__():
                all_xml_tags.extend(sub_cls.get_tag_names())
            _KNOWN_TAG_NAMES[cls] = all_xml_tags
            return all_xml_tags

    def as_xml(self) -> str:
        """Render the node as canonical XML."""
        raise NotImplementedError(f"{self.__class__.__name__}.as_xml() is not implemented")

    def __str__(self):
        return self.as_xml()


_KNOWN_TAG_NAMES = {}

A = TypeVar("A", bound=AstNode)


class TagRegistry:
    """Registration of all classes that can parse XML elements.

    The same class can be registered multiple times for different tag names.
    """

    parsers: dict[str, type[AstNode]]

    def __init__(self):
        self.parsers = {}

    def register(self, tag: str | None = None):
        """Decorator to register a class as XML element parser.

        Usage:

        .. code-block:: python

            @dataclass(frozen=True)
            @tag_registry.register("log")
            class LogMediator(Mediator):
                @classmethod
                def from_events(cls, cursor: EventCursor):
                    return cls(...)

        Whenever an element with the registered name is found,
        the given class will consume it.
        """

        def _dec(node_class: type[AstNode]) -> type[AstNode]:
            self._register_tag_parser(node_class, tag=tag or node_class.__name__)
            return node_class

        return _dec

    def _register_tag_parser(self, node_class: type[AstNode], tag: str):
        """Register a Python (data) class as parser for an XML element."""
        if not issubclass(node_class, AstNode):
            raise TypeError(f"{node_class} must be a subclass of AstNode")

        if tag in self.parsers:
            raise RuntimeError(f"Another class is already registered to parse the <{tag}> tag.")

        self.parsers[tag] = node_class  # Track this parser to resolve the tag.
        node_class._xml_tags.append(tag)  # Allow fetching all names later

    def resolve_class(
        self, cursor: EventCursor, allowed_types: tuple[type[A]] | None = None
    ) -> type[A]:
        """Find the :class:`AstNode` subclass that corresponds to the current element.

        The element name is taken from the opening tag. A closing tag is also tolerated here,
        so the error message can name the element that was found.
        """
        event = cursor.current
        if event is None:
            raise UnexpectedEndOfStream()
        elif not isinstance(event, (ElementStart, ElementEnd)):
            raise UnexpectedEvent(event, expected="an element")

        try:
            node_class = self.parsers[event.local_name]
        except KeyError:
            if allowed_types:
                error_class = allowed_types[0].unsupported_error
                allowed = _get_allowed_tag_names(*allowed_types)
            else:
                error_class = XmlElementNotSupported
                allowed = ()
            raise error_class(event.local_name, allowed=allowed) from None

        # Check whether the resolved class is indeed a valid option here.
        if allowed_types is not None and not issubclass(node_class, allowed_types):
            types = ", ".join(c.__name__ for c in allowed_types)
            raise InvalidXmlElement(
                f"Unexpected {node_class.__name__} for <{event.local_name}> node, "
                f"expected one of: {types}"
            )

        return node_class


def _get_allowed_tag_names(*expect_types: type[AstNode]) -> list[str]:
    # Resolve arguments late, as get_tag_names() depends on __subclasses__()
    # which may not be completely known at import time.
    tag_names = []
    for child_type in expect_types:
        tag_names.extend(child_type.get_tag_names())
    return sorted(set(tag_names))


#: The tag registry to register new parsing classes at.
tag_registry = TagRegistry()
