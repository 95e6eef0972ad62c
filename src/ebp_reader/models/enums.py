"""
EBP Enums - Enumeration types for decoded EBP data

Both enums carry the numeric code used in the project file as their value and
a lowercase label for display. Unknown codes always map to NONE.
"""

from enum import IntEnum
from typing import Optional


class Direction(IntEnum):
    """Physical channel direction"""
    NONE = -1
    BOTH = 0
    INPUT = 1
    OUTPUT = 2

    @property
    def label(self) -> str:
        """Lowercase display label ("" for NONE)"""
        return "" if self is Direction.NONE else self.name.lower()

    @classmethod
    def from_id(cls, code: Optional[int]) -> "Direction":
        """Create Direction from a numeric code"""
        try:
            return cls(code)
        except ValueError:
            return cls.NONE

    @classmethod
    def from_string(cls, text: Optional[str]) -> "Direction":
        """Create Direction from its label, case-insensitive"""
        normalized = (text or "").strip().lower()
        for member in (cls.BOTH, cls.INPUT, cls.OUTPUT):
            if member.label == normalized:
                return member
        return cls.NONE

    def __str__(self) -> str:
        return self.label


class N2kDirection(IntEnum):
    """NMEA 2000 transmit/receive direction of a component"""
    NONE = -1
    TRANSMIT = 0
    RECEIVE = 1

    @property
    def label(self) -> str:
        """Lowercase display label ("" for NONE)"""
        return "" if self is N2kDirection.NONE else self.name.lower()

    @classmethod
    def from_id(cls, code: Optional[int]) -> "N2kDirection":
        """Create N2kDirection from a numeric code"""
        try:
            return cls(code)
        except ValueError:
            return cls.NONE

    def __str__(self) -> str:
        return self.label
