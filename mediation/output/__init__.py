"""Output rendering logic.

The syntax tree is rendered back into canonical XML:
each node renders itself through its ``as_xml()`` method,
and the functions here provide the entry points for complete documents.
"""

from __future__ import annotations

import logging
import typing

from .utils import attr_escape, render_attributes

if typing.TYPE_CHECKING:
    from mediation.parsers.ast import AstNode
    from mediation.parsers.program import Program

logger = logging.getLogger(__name__)

__all__ = (
    "attr_escape",
    "render_attributes",
    "render",
    "render_document",
)

XML_DECLARATION = b'<?xml version="1.0" encoding="UTF-8"?>\n'


def render(node: Program | AstNode) -> str:
    """Render the program, or a single node of the syntax tree as XML text."""
    return node.as_xml()


def render_document(program: Program) -> bytes:
    """Render the program as a complete UTF-8 encoded XML document."""
    xml_body = program.as_xml()
    logger.debug("Rendered %d top-level nodes", len(program))
    return XML_DECLARATION + xml_body.encode("utf-8")
