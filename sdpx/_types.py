"""
Type definitions for the SDP codec.

This module centralizes the enums, exceptions, configuration and type
aliases used throughout the package, including the parser states and the
closed set of line keys defined by RFC 4566.
"""

from __future__ import annotations

import typing
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


# =============================================================================
# Exceptions
# =============================================================================


class SDPError(Exception):
    """Base exception for SDP errors."""

    pass


class SDPDecodeError(SDPError, ValueError):
    """
    Raised when a line does not match its field grammar.

    Sub-parsers fill in ``field`` and ``value``; the parser adds the
    position of the offending line through ``at_line``.
    """

    def __init__(
        self,
        reason: str,
        *,
        field: Optional[str] = None,
        value: Optional[str] = None,
        key: Optional[str] = None,
        line_number: Optional[int] = None,
    ) -> None:
        self.reason = reason
        self.field = field
        self.value = value
        self.key = key
        self.line_number = line_number
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.line_number is None:
            return self.reason
        return f"line {self.line_number} ({self.key}={self.value}): {self.reason}"

    def at_line(self, line: SDPLine) -> SDPDecodeError:
        """Return a copy of this error located at ``line``."""
        return SDPDecodeError(
            self.reason,
            field=self.field,
            value=line.value,
            key=line.key,
            line_number=line.number,
        )


class SDPEncodeError(SDPError, ValueError):
    """Raised when a description is missing a field serialization requires."""

    pass


# =============================================================================
# Field Enums (RFC 4566)
# =============================================================================


class IntervalUnit(str, Enum):
    """Units for typed times in r= and z= lines."""

    DAYS = "d"
    HOURS = "h"
    MINUTES = "m"
    SECONDS = "s"

    @property
    def seconds(self) -> int:
        return _UNIT_SECONDS[self]


_UNIT_SECONDS = {
    IntervalUnit.DAYS: 86400,
    IntervalUnit.HOURS: 3600,
    IntervalUnit.MINUTES: 60,
    IntervalUnit.SECONDS: 1,
}


class EncryptionMethod(str, Enum):
    """Key methods for k= lines (RFC 4566 Section 5.12)."""

    CLEAR = "clear"
    BASE64 = "base64"
    URI = "uri"
    PROMPT = "prompt"


class LineType(str, Enum):
    """
    The closed set of line keys understood by the codec.

    Keys outside this set are reported as unrecognized and ignored.
    """

    VERSION = "v"
    ORIGIN = "o"
    SESSION_NAME = "s"
    INFORMATION = "i"
    URI = "u"
    EMAIL = "e"
    PHONE = "p"
    CONNECTION = "c"
    BANDWIDTH = "b"
    TIMING = "t"
    REPEAT = "r"
    TIME_ZONES = "z"
    ENCRYPTION_KEY = "k"
    ATTRIBUTE = "a"
    MEDIA = "m"

    @classmethod
    def from_key(cls, key: str) -> Optional[LineType]:
        """Classify a line key, returning None for unrecognized keys."""
        try:
            return cls(key)
        except ValueError:
            return None


# =============================================================================
# FSM States
# =============================================================================


class ParserState(Enum):
    """
    States of the description state machine.

    SESSION → MEDIA on the first m= line; every further m= line re-enters
    MEDIA with a new active media record.
    """

    SESSION = auto()  # Initial state, before any m= line
    MEDIA = auto()  # Inside a media block


# =============================================================================
# Lines and Diagnostics
# =============================================================================


@dataclass(frozen=True, slots=True)
class SDPLine:
    """One ``key=value`` line of an SDP text, with its 1-based position."""

    number: int
    key: str
    value: str

    @property
    def line_type(self) -> Optional[LineType]:
        return LineType.from_key(self.key)

    def __str__(self) -> str:
        return f"{self.key}={self.value}"


@dataclass(frozen=True, slots=True)
class ParseWarning:
    """A recoverable anomaly found while parsing."""

    message: str
    line_number: int
    key: str
    value: str

    def __str__(self) -> str:
        return f"line {self.line_number} ({self.key}={self.value}): {self.message}"


# =============================================================================
# Type Aliases
# =============================================================================

WarningCallback = typing.Callable[[ParseWarning], None]
TextLike = typing.Union[str, bytes]


# =============================================================================
# Parser Configuration
# =============================================================================


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for SDP parsing."""

    # Raise SDPDecodeError on malformed lines instead of skipping them
    strict: bool = True

    # Diagnostics
    log_warnings: bool = True
    on_warning: Optional[WarningCallback] = None

    # Decoding of bytes input
    encoding: str = "utf-8"


# =============================================================================
# Re-exports for convenience
# =============================================================================

__all__ = [
    # Exceptions
    "SDPError",
    "SDPDecodeError",
    "SDPEncodeError",
    # Field enums
    "IntervalUnit",
    "EncryptionMethod",
    "LineType",
    # FSM enums
    "ParserState",
    # Lines and diagnostics
    "SDPLine",
    "ParseWarning",
    # Configuration
    "ParserConfig",
    # Type aliases
    "WarningCallback",
    "TextLike",
]
