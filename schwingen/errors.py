"""Exceptions raised by the ranking engine.

None of these are fatal to a session: callers show the message next to the
offending field or bout slot and let the operator retry.
"""


class SchwingenError(Exception):
    """Base class for all engine errors."""
    pass


class ValidationError(SchwingenError, ValueError):
    """Raised for malformed or missing input."""
    pass


class DuplicateNameError(ValidationError):
    """Raised when a roster contains the same name twice."""
    pass


class StateError(ValidationError):
    """Raised when an operation conflicts with the current session state."""
    pass


class SlotOccupiedError(StateError):
    """Raised when writing a round slot that already holds a result.

    Overwriting is never implicit: callers must clear the slot first.
    """
    pass


class UnknownCompetitorError(SchwingenError, LookupError):
    """Raised for a competitor id or name that is not in the collection."""
    pass


class FestivalNotFoundError(SchwingenError, LookupError):
    """Raised when a festival name has no stored session."""
    pass
