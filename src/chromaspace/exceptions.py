"""
Exceptions raised by chromaspace.
"""

from typing import Optional


class RangeError(ValueError):
    """A value fell outside the interval allowed for a color field or parameter."""

    def __init__(self, field: str, minimum: float, maximum: Optional[float] = None,
                 value: Optional[float] = None, message: Optional[str] = None):
        self.field = field
        self.minimum = minimum
        self.maximum = maximum
        self.value = value

        if message is None:
            if maximum is None:
                message = f"{field} must be greater than {minimum}"
            else:
                message = f"{field} must be between {minimum} and {maximum}"
            if value is not None:
                message = f"{message}, got {value}"
        super().__init__(message)
