import pytest

from mediation.exceptions import ExternalParsingError, UnbalancedElement
from mediation.parsers.events import (
    Characters,
    DocumentEnd,
    DocumentStart,
    ElementEnd,
    ElementStart,
)
from mediation.parsers.xml import iter_events, split_ns, tokenize


def test_split_ns():
    """Prove that xml names can be properly splitted into their namespace and localname"""
    ns, localname = split_ns("{http://ws.apache.org/ns/synapse}inSequence")
    assert ns == "http://ws.apache.org/ns/synapse"
    assert localname == "inSequence"

    assert split_ns("log") == (None, "log")


class TestTokenizer:
    """Prove that the tokenizer produces the expected structural events."""

    def test_events(self):
        events = tokenize(
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<log level="custom">\n'
            '    <property name="/validate" value="inSequence" />\n'
            "</log>\n"
        )
        assert events == [
            DocumentStart(version="1.0", encoding="UTF-8"),
            ElementStart("log", (("level", "custom"),)),
            ElementStart("property", (("name", "/validate"), ("value", "inSequence"))),
            ElementEnd("property"),
            ElementEnd("log"),
            DocumentEnd(),
        ]

    def test_no_declaration(self):
        """The document start is always reported, using the defaults."""
        events = tokenize("<inSequence/>")
        assert events == [
            DocumentStart(),
            ElementStart("inSequence"),
            ElementEnd("inSequence"),
            DocumentEnd(),
        ]

    def test_bytes_declaration(self):
        events = tokenize(b'<?xml version="1.0" encoding="ISO-8859-1"?><log level="caf\xe9"/>')
        assert events[0] == DocumentStart(version="1.0", encoding="ISO-8859-1")
        assert events[1] == ElementStart("log", (("level", "café"),))

    def test_attribute_order(self):
        """Attributes are reported in document order."""
        events = tokenize('<property value="b" name="a"/>')
        assert events[1].attributes == (("value", "b"), ("name", "a"))

    def test_namespaces(self):
        """Namespaces are reduced to the local name, and xmlns is not an attribute."""
        events = tokenize(
            '<inSequence xmlns="http://ws.apache.org/ns/synapse" xmlns:x="urn:x">'
            '<x:log x:level="full"/>'
            "</inSequence>"
        )
        assert events[1:-1] == [
            ElementStart("inSequence"),
            ElementStart("log", (("level", "full"),)),
            ElementEnd("log"),
            ElementEnd("inSequence"),
        ]

    def test_text(self):
        """Whitespace is dropped, other text is reported."""
        events = tokenize("<log level='x'>\n  hello <!-- comment --> world\n</log>")
        assert events[2] == Characters("\n  hello  world\n")

    def test_multiple_roots(self):
        """A program can have multiple top-level elements, which are reported in order."""
        events = tokenize('<?xml version="1.0"?>\n<log level="a"/>\n<inSequence/>')
        assert events == [
            DocumentStart(),
            ElementStart("log", (("level", "a"),)),
            ElementEnd("log"),
            ElementStart("inSequence"),
            ElementEnd("inSequence"),
            DocumentEnd(),
        ]

    @pytest.mark.parametrize("xml_text", ["", "\n  ", '<?xml version="1.0"?>'])
    def test_empty(self, xml_text):
        assert tokenize(xml_text) == [DocumentStart(), DocumentEnd()]

    def test_iter_events(self):
        events = iter_events("<inSequence/>")
        assert next(events) == DocumentStart()
        assert list(events) == [ElementStart("inSequence"), ElementEnd("inSequence"), DocumentEnd()]


class TestTokenizerErrors:
    """Prove that bad input is reported consistently."""

    def test_bad_input(self):
        with pytest.raises(ExternalParsingError):
            tokenize("<inSequence")

    def test_mismatched_tag(self):
        with pytest.raises(UnbalancedElement) as e:
            tokenize('<inSequence><log level="x"></inSequence>')

        assert e.value.expected_name == "log"
        assert str(e.value) == "Element <log> is not closed"

    def test_unclosed(self):
        with pytest.raises(UnbalancedElement) as e:
            tokenize("<inSequence><log level='x'/>")

        assert e.value.expected_name == "inSequence"

    def test_dtd_forbidden(self):
        xml_text = '<!DOCTYPE inSequence [<!ENTITY a "aaa">]><inSequence/>'
        with pytest.raises(ExternalParsingError):
            tokenize(xml_text)

    def test_stray_close_tag(self):
        """Error positions are relative to the input text."""
        with pytest.raises(ExternalParsingError) as e:
            tokenize('<log level="a"/></log>')

        assert not isinstance(e.value, UnbalancedElement)
        assert str(e.value) == "mismatched tag: line 1, column 18"

        with pytest.raises(ExternalParsingError, match="mismatched tag: line 2, column 2"):
            tokenize('<log level="a"/>\n</log>')
