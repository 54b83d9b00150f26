"""Parser for the Synapse mediation pipeline configuration language.

Only a small part of the vocabulary is supported:
``<inSequence>``, ``<log>`` and ``<property>``.
"""

__version__ = "1.0"
