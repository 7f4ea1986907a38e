"""Custom exceptions for tile addressing.

These exceptions carry the offending argument alongside a human-readable
message so callers building cache keys or render requests can report
exactly which input was rejected.
"""

from typing import Any


class TileAddressError(Exception):
    """Base exception for all tile addressing errors."""

    def __init__(self, message: str) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error description.
        """
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        return self.message


class InvalidArgumentError(TileAddressError, ValueError):
    """Raised when an argument is outside the domain an operation accepts.

    This error is raised when:
    - A column, row or level is negative or not an integer
    - A tile size is not a positive integer
    - An identity string cannot be parsed
    """

    def __init__(
        self,
        message: str,
        *,
        argument: str | None = None,
        value: Any = None,
    ) -> None:
        """Initialize with the rejected argument.

        Args:
            message: Human-readable error description.
            argument: Name of the rejected parameter.
            value: The rejected value.
        """
        self.argument = argument
        self.value = value
        super().__init__(message)

    def _format_message(self) -> str:
        if self.argument is None:
            return self.message
        return f"{self.message} ({self.argument}={self.value!r})"


class InvalidQuadrantError(InvalidArgumentError):
    """Raised when a child quadrant is not one of 0, 1, 2 or 3."""

    def __init__(self, quadrant: Any) -> None:
        super().__init__(
            "Quadrant must be 0, 1, 2 or 3",
            argument="quadrant",
            value=quadrant,
        )


class ArithmeticOverflowError(TileAddressError, OverflowError):
    """Raised when a pyramid size does not fit its coordinate width.

    Attributes:
        limit_bits: Width of the unsigned coordinate that overflowed.
    """

    def __init__(self, message: str, *, limit_bits: int) -> None:
        self.limit_bits = limit_bits
        super().__init__(message)

    def _format_message(self) -> str:
        return f"{self.message} (limit: unsigned {self.limit_bits}-bit)"
