"""Exceptions raised by the multiple testing procedures.

All exceptions derive from :class:`ValueError`, so callers that already guard
procedure calls with ``except ValueError`` keep working.
"""

from __future__ import annotations


class MultipleTestingError(ValueError):
    """Base class for argument errors raised by the procedures."""


class InvalidArgumentError(MultipleTestingError):
    """A p-value, criterion parameter, weight or tuning value is out of its domain."""


class MissingRequiredValueError(MultipleTestingError):
    """The requested output view needs a critical value that was not supplied."""


class UnrecognizedOutputModeError(MultipleTestingError):
    """The requested output view is not one of the supported modes."""


__all__ = [
    "MultipleTestingError",
    "InvalidArgumentError",
    "MissingRequiredValueError",
    "UnrecognizedOutputModeError",
]
