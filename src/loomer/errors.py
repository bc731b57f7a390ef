"""
Error Taxonomy
==============

Exceptions raised by the looming stimulus core.

Every validation failure is detected before any computation runs and is
reported with a message naming the offending parameter. None of these are
retried: they are deterministic input errors.

Hierarchy:
    LoomerError
        InvalidInputError       - wrong model variant, bad parameter values
        MissingParameterError   - required argument not supplied
        OutOfRangeError         - frame index outside the series
        UnextractableError      - derivative requested where undefined
        InvalidConfigError      - unrecognised option string
        InvariantViolationError - internal defect (fatal)
"""


class LoomerError(Exception):
    """Base class for all loomer errors."""


class InvalidInputError(LoomerError, ValueError):
    """Input has the wrong type, shape or value."""


class MissingParameterError(LoomerError, ValueError):
    """A required parameter was not supplied."""


class OutOfRangeError(LoomerError, IndexError):
    """A frame index lies outside the frame series."""


class UnextractableError(LoomerError, ValueError):
    """A value cannot be extracted at the requested frame."""


class InvalidConfigError(LoomerError, ValueError):
    """An option string is not one of the recognised values."""


class InvariantViolationError(LoomerError, RuntimeError):
    """
    An internal invariant was broken.
    
    Indicates a programming defect, not a user error. Callers should
    let it propagate and abort the operation.
    """
