"""sdpx - Session Description Protocol (RFC 4566) codec for Python."""

from __future__ import annotations

# Codec entry points
from ._codec import parse, stringify

# Parser and state machine
from ._fsm import DescriptionStateMachine
from ._parser import SDPParser, iter_lines

# Message models
from ._models import (
    Attribute,
    BandwidthDescription,
    ConnectionDescription,
    Contact,
    EncryptionKey,
    Interval,
    MediaDescription,
    Origin,
    Repeat,
    SessionDescription,
    Time,
    TimeZoneAdjustment,
)

# Types, configuration and exceptions
from ._types import (
    EncryptionMethod,
    IntervalUnit,
    LineType,
    ParserConfig,
    ParserState,
    ParseWarning,
    SDPDecodeError,
    SDPEncodeError,
    SDPError,
    SDPLine,
)

__version__ = "0.1.0"

__all__ = [
    # Codec
    "parse",
    "stringify",
    # Parser
    "SDPParser",
    "DescriptionStateMachine",
    "iter_lines",
    # Models
    "SessionDescription",
    "MediaDescription",
    "Origin",
    "Contact",
    "ConnectionDescription",
    "BandwidthDescription",
    "Time",
    "Repeat",
    "Interval",
    "TimeZoneAdjustment",
    "EncryptionKey",
    "Attribute",
    # Enums
    "EncryptionMethod",
    "IntervalUnit",
    "LineType",
    "ParserState",
    # Configuration and diagnostics
    "ParserConfig",
    "ParseWarning",
    "SDPLine",
    # Exceptions
    "SDPError",
    "SDPDecodeError",
    "SDPEncodeError",
]
