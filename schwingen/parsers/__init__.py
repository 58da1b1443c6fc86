"""Parsers for pasted start lists and standings."""

from .base import RecordParser

# Parser registry - import parsers here to register them
_parsers: list[type[RecordParser]] = []


def register_parser(parser_class: type[RecordParser]) -> type[RecordParser]:
    """Decorator to register a parser class."""
    _parsers.append(parser_class)
    return parser_class


def get_all_parsers() -> list[type[RecordParser]]:
    """Return all registered parser classes."""
    return _parsers.copy()


def get_parser(kind: str) -> RecordParser:
    """Return a parser instance for the given kind ("roster" or "standing")."""
    for parser_class in _parsers:
        if parser_class.KIND == kind:
            return parser_class()
    raise KeyError(f"No parser registered for {kind!r}")


def detect_parser(text: str) -> RecordParser | None:
    """Auto-detect and return an appropriate parser instance for pasted text."""
    for parser_class in get_all_parsers():
        parser = parser_class()
        if parser.can_parse(text):
            return parser
    return None


def get_supported_formats() -> str:
    """Return a user-friendly description of the accepted line formats."""
    lines = ["We accept one entry per line:"]
    for parser_class in get_all_parsers():
        example = getattr(parser_class, "EXAMPLE_LINE", None)
        if example:
            lines.append(f"  - {parser_class.KIND}: {example}")
    return "\n".join(lines)


# Registration happens on import
from . import roster  # noqa: E402, F401
from . import standing  # noqa: E402, F401
