from __future__ import annotations

from mediation.parsers.events import ElementEnd, ElementStart

VALIDATE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<inSequence>
    <log level="custom">
        <property name="/validate" value="inSequence" />
    </log>
    <log level="full" />
    <log level="debug">
        <property name="/validate" value="foobar" />
    </log>
</inSequence>
"""

API_XML = """<?xml version="1.0" encoding="UTF-8"?>
<api context="/validate" name="validate_xfcc" xmlns="http://ws.apache.org/ns/synapse">
  <resource methods="GET" uri-template="/">
    <inSequence>
      <log level="custom">
        <property name="/validate" value="inSequence" />
      </log>
      <class name="ch.integon.XfccMediator" />
      <log level="full" />
      <respond/>
    </inSequence>
  </resource>
</api>
"""


def start(local_name: str, **attributes) -> ElementStart:
    """Shortcut to create an opening tag event, attributes are kept in the given order."""
    return ElementStart(local_name, tuple(attributes.items()))


def empty(local_name: str, **attributes) -> list:
    """Create the events for an empty element, as the tokenizer reports them."""
    return [start(local_name, **attributes), ElementEnd(local_name)]
