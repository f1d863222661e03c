"""
SDP Models Package.

This package contains the value types for session descriptions, media
blocks and the individual SDP fields.
"""

from ._fields import (
    Attribute,
    BandwidthDescription,
    ConnectionDescription,
    Contact,
    EncryptionKey,
    Interval,
    Origin,
    Repeat,
    Time,
    TimeZoneAdjustment,
)
from ._media import MediaDescription
from ._session import SessionDescription

__all__ = [
    # Session and media
    "SessionDescription",
    "MediaDescription",
    # Session-level fields
    "Origin",
    "Contact",
    "ConnectionDescription",
    "BandwidthDescription",
    # Timing
    "Time",
    "Repeat",
    "Interval",
    "TimeZoneAdjustment",
    # Keys and attributes
    "EncryptionKey",
    "Attribute",
]
