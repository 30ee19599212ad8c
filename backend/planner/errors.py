"""Allocation input errors.

Both are deterministic functions of the input: retrying with the same input
always fails the same way, so callers should ask the user to correct it.
"""


class EmptyInputError(ValueError):
    """Cannot allocate with zero (usable) subjects."""


class InvalidRangeError(ValueError):
    """Hours per day or number of days outside the accepted bounds."""
