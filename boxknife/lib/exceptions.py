"""
Exception types that are raised by boxknife units and the library code they use. The type of an
exception decides how `boxknife.units.Unit` reports it when running on the command line.
"""
from __future__ import annotations


class BoxKnifeException(Exception):
    """
    The base class of all custom exceptions raised by boxknife.
    """


class BoxKnifeCriticalException(BoxKnifeException):
    """
    Raised when an internal invariant was violated. This always indicates a defect rather than a
    problem with the input.
    """


class BoxKnifePotentialUserError(BoxKnifeException):
    """
    Raised when the input or the configuration of a unit is likely the cause of a failure. The
    message of this exception is shown to the user verbatim.
    """
