"""Error types for the mortgage calculator.

Every public operation validates its inputs on entry and raises
``InvalidArgument`` before doing any work. The calculations are pure, so a
failing call fails the same way every time and nothing is retried.
"""


class InvalidArgument(ValueError):
    """A required argument is missing, out of range or cannot be parsed."""
