"""Exceptions raised by the FieldDay tournament core."""


class FieldDayError(Exception):
    """Base exception for all FieldDay errors.

    Every failure is scoped to the single requested operation; none of them
    leaves partial state behind.
    """

    pass


class InvalidInputError(FieldDayError, ValueError):
    """Raised for malformed or out-of-range arguments (e.g. not six competitors)."""

    pass


class InvalidResultError(FieldDayError, ValueError):
    """Raised when a match result violates the sport's scoring semantics."""

    pass


class IllegalStateError(FieldDayError, RuntimeError):
    """Raised when an operation is attempted in a state that forbids it."""

    pass


class NotFoundError(FieldDayError, LookupError):
    """Raised when a referenced tournament, match or player does not exist."""

    pass
