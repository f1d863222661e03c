"""
SDP field value types (RFC 4566 Section 5).

Each type parses the text that follows ``key=`` on its line and renders it
back. Parsers raise SDPDecodeError naming the field on malformed input; the
line number and key are attached by the caller.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from .._types import EncryptionMethod, IntervalUnit, SDPDecodeError
from .._utils import (
    ADDRESS_TYPE_IP4,
    ADDRESS_TYPE_IP6,
    NETWORK_TYPE_IN,
    NTP_UNIX_OFFSET,
    parse_uint,
    split_once,
    split_tokens,
)


# ============================================================================
# Origin (o=)
# ============================================================================


@dataclass(frozen=True, slots=True)
class Origin:
    """
    Originator of the session.

    Example:
        o=jdoe 2890844526 2890842807 IN IP4 10.47.16.5
    """

    username: str
    session_id: int
    version: int
    network_type: str = NETWORK_TYPE_IN
    address_type: str = ADDRESS_TYPE_IP4
    address: str = "127.0.0.1"

    @classmethod
    def parse(cls, value: str) -> Origin:
        """
        Parse ``<username> <sess-id> <sess-version> <nettype> <addrtype> <address>``.

        Raises:
            SDPDecodeError: If there are not exactly six tokens or an id is not numeric
        """
        username, session_id, version, network_type, address_type, address = (
            split_tokens(value, "origin", 6, 6)
        )
        return cls(
            username=username,
            session_id=parse_uint(session_id, "origin session id"),
            version=parse_uint(version, "origin session version"),
            network_type=network_type,
            address_type=address_type,
            address=address,
        )

    def __str__(self) -> str:
        return (
            f"{self.username} {self.session_id} {self.version} "
            f"{self.network_type} {self.address_type} {self.address}"
        )


# ============================================================================
# Connection (c=)
# ============================================================================


@dataclass(frozen=True, slots=True)
class ConnectionDescription:
    """
    Connection data.

    The TTL is only carried by IN IP4 addresses; the layer count applies to
    both IP4 and IP6 multicast addresses. Other network/address type pairs
    keep the address verbatim.
    """

    network_type: str
    address_type: str
    address: str
    time_to_live: Optional[int] = None
    layer_count: int = 1

    @classmethod
    def parse(cls, value: str) -> ConnectionDescription:
        """
        Parse ``<nettype> <addrtype> <address>[/<ttl>][/<layers>]``.

        Example:
            >>> ConnectionDescription.parse("IN IP4 224.2.17.12/127")
            ConnectionDescription(network_type='IN', address_type='IP4', address='224.2.17.12', time_to_live=127, layer_count=1)
        """
        network_type, address_type, address = split_tokens(value, "connection", 3, 3)
        time_to_live = None
        layer_count = 1

        if network_type == NETWORK_TYPE_IN and address_type == ADDRESS_TYPE_IP4:
            parts = address.split("/")
            if len(parts) > 3:
                raise SDPDecodeError(
                    "IP4 connection address takes at most a TTL and a layer count",
                    field="connection",
                    value=value,
                )
            address = parts[0]
            if len(parts) > 1:
                time_to_live = parse_uint(parts[1], "connection TTL")
            if len(parts) > 2:
                layer_count = parse_uint(parts[2], "connection layer count")
        elif network_type == NETWORK_TYPE_IN and address_type == ADDRESS_TYPE_IP6:
            parts = address.split("/")
            if len(parts) > 2:
                raise SDPDecodeError(
                    "IP6 connection address takes at most a layer count",
                    field="connection",
                    value=value,
                )
            address = parts[0]
            if len(parts) > 1:
                layer_count = parse_uint(parts[1], "connection layer count")

        return cls(
            network_type=network_type,
            address_type=address_type,
            address=address,
            time_to_live=time_to_live,
            layer_count=layer_count,
        )

    def __str__(self) -> str:
        address = self.address
        if self.network_type == NETWORK_TYPE_IN:
            if self.address_type == ADDRESS_TYPE_IP4:
                if self.time_to_live is not None:
                    address = f"{address}/{self.time_to_live}"
                    if self.layer_count > 1:
                        address = f"{address}/{self.layer_count}"
            elif self.address_type == ADDRESS_TYPE_IP6:
                if self.layer_count > 1:
                    address = f"{address}/{self.layer_count}"
        return f"{self.network_type} {self.address_type} {address}"


# ============================================================================
# Bandwidth (b=)
# ============================================================================


@dataclass(frozen=True, slots=True)
class BandwidthDescription:
    """Bandwidth in kilobits per second, e.g. ``b=AS:128``."""

    modifier: str
    value: int

    @classmethod
    def parse(cls, value: str) -> BandwidthDescription:
        modifier, amount = split_once(value, ":")
        if amount is None or not modifier:
            raise SDPDecodeError(
                "bandwidth must be <modifier>:<value>", field="bandwidth", value=value
            )
        return cls(modifier=modifier, value=parse_uint(amount, "bandwidth value"))

    def __str__(self) -> str:
        return f"{self.modifier}:{self.value}"


# ============================================================================
# Timing (t=, r=, z=)
# ============================================================================

_INTERVAL_RE = re.compile(r"(-?[0-9]+)([dhms]?)")


@dataclass(frozen=True, slots=True)
class Interval:
    """
    A typed time such as ``7d``, ``25h`` or ``-1h``.

    ``unit`` is None for a bare number, which RFC 4566 reads as seconds.
    """

    value: int
    unit: Optional[IntervalUnit] = None

    @classmethod
    def parse(cls, value: str, signed: bool = False) -> Interval:
        """
        Parse a typed time.

        Args:
            value: Token such as ``7d`` or ``3600``
            signed: Accept a leading ``-`` (z= offsets only)
        """
        match = _INTERVAL_RE.fullmatch(value)
        if match is None or (not signed and value.startswith("-")):
            raise SDPDecodeError(
                f"invalid typed time {value!r}", field="interval", value=value
            )
        number, unit = match.groups()
        return cls(value=int(number), unit=IntervalUnit(unit) if unit else None)

    @property
    def total_seconds(self) -> int:
        if self.unit is None:
            return self.value
        return self.value * self.unit.seconds

    def __str__(self) -> str:
        return f"{self.value}{self.unit.value if self.unit else ''}"


@dataclass(frozen=True, slots=True)
class Repeat:
    """Repeat times for the preceding t= line."""

    interval: Interval
    duration: Interval
    offsets: Tuple[Interval, ...]

    @classmethod
    def parse(cls, value: str) -> Repeat:
        interval, duration, *offsets = [
            Interval.parse(token) for token in split_tokens(value, "repeat times", 3)
        ]
        return cls(interval=interval, duration=duration, offsets=tuple(offsets))

    def __str__(self) -> str:
        return " ".join(str(part) for part in (self.interval, self.duration, *self.offsets))


@dataclass(frozen=True, slots=True)
class Time:
    """Start and stop NTP times; a stop time of 0 leaves the session unbounded."""

    start: int
    stop: int
    repeats: Tuple[Repeat, ...] = ()

    @classmethod
    def parse(cls, value: str) -> Time:
        start, stop = split_tokens(value, "timing", 2, 2)
        return cls(
            start=parse_uint(start, "start time"), stop=parse_uint(stop, "stop time")
        )

    @property
    def is_unbounded(self) -> bool:
        return self.stop == 0

    @property
    def start_datetime(self) -> Optional[datetime]:
        return _ntp_to_datetime(self.start)

    @property
    def stop_datetime(self) -> Optional[datetime]:
        return _ntp_to_datetime(self.stop)

    def __str__(self) -> str:
        return f"{self.start} {self.stop}"


def _ntp_to_datetime(seconds: int) -> Optional[datetime]:
    """Convert NTP seconds to UTC; None for 0 or a time datetime cannot hold."""
    if seconds == 0:
        return None
    try:
        return _UNIX_EPOCH + timedelta(seconds=seconds - NTP_UNIX_OFFSET)
    except OverflowError:
        return None


_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True, slots=True)
class TimeZoneAdjustment:
    """One ``<adjustment time> <offset>`` pair of a z= line."""

    time: int
    adjustment: Interval

    @classmethod
    def parse_all(cls, value: str) -> Tuple[TimeZoneAdjustment, ...]:
        """
        Parse a whole z= value into its adjustments.

        Example:
            z=2882844526 -1h 2898848070 0
        """
        tokens = split_tokens(value, "time zones", 2)
        if len(tokens) % 2:
            raise SDPDecodeError(
                "time zones need <time> <offset> pairs", field="time zones", value=value
            )
        return tuple(
            cls(
                time=parse_uint(tokens[i], "time zone adjustment time"),
                adjustment=Interval.parse(tokens[i + 1], signed=True),
            )
            for i in range(0, len(tokens), 2)
        )

    def __str__(self) -> str:
        return f"{self.time} {self.adjustment}"


# ============================================================================
# Encryption Key (k=)
# ============================================================================


@dataclass(frozen=True, slots=True)
class EncryptionKey:
    """Legacy encryption key, ``k=<method>[:<key>]``."""

    method: EncryptionMethod
    key: Optional[str] = None

    @classmethod
    def parse(cls, value: str) -> EncryptionKey:
        method, key = split_once(value, ":")
        try:
            return cls(method=EncryptionMethod(method), key=key)
        except ValueError:
            raise SDPDecodeError(
                f"unknown encryption method {method!r}",
                field="encryption key",
                value=value,
            ) from None

    def __str__(self) -> str:
        if self.key is None:
            return self.method.value
        return f"{self.method.value}:{self.key}"


# ============================================================================
# Attribute (a=)
# ============================================================================


@dataclass(frozen=True, slots=True)
class Attribute:
    """
    Attribute line, ``a=<name>`` or ``a=<name>:<value>``.

    A property attribute such as ``a=recvonly`` has value None, which is
    distinct from ``a=name:`` (empty string value).
    """

    name: str
    value: Optional[str] = None

    @classmethod
    def parse(cls, value: str) -> Attribute:
        name, attr_value = split_once(value, ":")
        return cls(name=name, value=attr_value)

    def __str__(self) -> str:
        if self.value is None:
            return self.name
        return f"{self.name}:{self.value}"


# ============================================================================
# Contact (e=, p=)
# ============================================================================

_CONTACT_PAREN_RE = re.compile(r"(.*) +\((.*)\)")
_CONTACT_ANGLE_RE = re.compile(r"(.*) +<(.*)>")


@dataclass(frozen=True, slots=True)
class Contact:
    """Email address or phone number with an optional display name."""

    value: str
    name: Optional[str] = None

    @classmethod
    def parse(cls, value: str) -> Contact:
        """
        Parse one of the three accepted shapes.

        Example:
            j.doe@example.com (Jane Doe)
            Jane Doe <j.doe@example.com>
            +1 617 555-6011
        """
        match = _CONTACT_PAREN_RE.fullmatch(value)
        if match:
            return cls(value=match.group(1), name=match.group(2))
        match = _CONTACT_ANGLE_RE.fullmatch(value)
        if match:
            return cls(value=match.group(2), name=match.group(1))
        return cls(value=value)

    def __str__(self) -> str:
        if self.name is None:
            return self.value
        return f"{self.value} ({self.name})"


# ============================================================================
# Exports
# ============================================================================


__all__ = [
    "Origin",
    "ConnectionDescription",
    "BandwidthDescription",
    "Interval",
    "Repeat",
    "Time",
    "TimeZoneAdjustment",
    "EncryptionKey",
    "Attribute",
    "Contact",
]
