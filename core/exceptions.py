"""
Exception classes for mathtone.

FormatError is raised by the number converter when a digit string does not
belong to the alphabet of its declared base. It subclasses ValueError so
callers that only care about "bad input" can catch the builtin.
"""
from typing import Optional


class MathToneError(Exception):
    """Base class for all mathtone errors."""


class FormatError(MathToneError, ValueError):
    """
    Raised when a digit string is not valid for a number format.

    Attributes:
        message: Explanation of the error
        character: Offending character (if known)
        position: Index of the offending character (if known)
        base: Numeric base the string was parsed against (if known)
    """

    def __init__(self,
                 message: str = "Invalid digit string.",
                 character: Optional[str] = None,
                 position: Optional[int] = None,
                 base: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.character = character
        self.position = position
        self.base = base
