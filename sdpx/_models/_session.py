"""
Session descriptions (RFC 4566).

The serializer lives here: ``SessionDescription.to_lines`` walks the value
and emits every line in the canonical order of RFC 4566 Section 5.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .._types import SDPEncodeError
from .._utils import EOL
from ._fields import (
    Attribute,
    BandwidthDescription,
    ConnectionDescription,
    Contact,
    EncryptionKey,
    Origin,
    Time,
    TimeZoneAdjustment,
)
from ._media import MediaDescription


@dataclass(frozen=True, slots=True)
class SessionDescription:
    """
    Session Description Protocol (RFC 4566).

    Session-level fields followed by zero or more media blocks. Values are
    immutable; build a new description to change one.

    Example:
        sdp = SessionDescription(
            origin=Origin("-", 2890844526, 2890842807, address="10.47.16.5"),
            session_name="SIP Call",
            connection=ConnectionDescription("IN", "IP4", "10.47.16.5"),
            times=(Time(0, 0),),
            media=(MediaDescription("audio", 49170, "RTP/AVP", ("0",)),),
        )
        sdp.to_string()
    """

    # Required session fields
    version: int = 0  # v=
    origin: Optional[Origin] = None  # o=, None only if the text had no o= line
    session_name: str = "-"  # s=

    # Optional session fields
    information: Optional[str] = None  # i=
    uri: Optional[str] = None  # u=
    emails: Tuple[Contact, ...] = ()  # e=
    phone_numbers: Tuple[Contact, ...] = ()  # p=
    connection: Optional[ConnectionDescription] = None  # c=
    bandwidths: Tuple[BandwidthDescription, ...] = ()  # b=
    times: Tuple[Time, ...] = ()  # t= and r=
    time_zones: Tuple[TimeZoneAdjustment, ...] = ()  # z=
    encryption_key: Optional[EncryptionKey] = None  # k= (deprecated in RFC 4566)
    attributes: Tuple[Attribute, ...] = ()  # a=

    media: Tuple[MediaDescription, ...] = ()

    def get_media_by_type(self, media_type: str) -> Optional[MediaDescription]:
        """
        Find the first media block of a given type.

        Args:
            media_type: audio, video, application, ...

        Returns:
            MediaDescription or None
        """
        for media in self.media:
            if media.media_type == media_type:
                return media
        return None

    def find_attribute(self, name: str) -> Optional[Attribute]:
        """Return the first session-level attribute called ``name``, if any."""
        return next((attr for attr in self.attributes if attr.name == name), None)

    def find_attributes(self, name: str) -> List[Attribute]:
        return [attr for attr in self.attributes if attr.name == name]

    def to_lines(self) -> List[str]:
        """
        Convert the description to lines.

        Order: v, o, s, [i], [u], e*, p*, [c], b*, (t r*)*, [z], [k], a*,
        then each media block.

        Raises:
            SDPEncodeError: If the description has no origin
        """
        if self.origin is None:
            raise SDPEncodeError("Cannot serialize a session description without an origin")

        lines = [
            f"v={self.version}",
            f"o={self.origin}",
            f"s={self.session_name}",
        ]

        if self.information is not None:
            lines.append(f"i={self.information}")

        if self.uri is not None:
            lines.append(f"u={self.uri}")

        for email in self.emails:
            lines.append(f"e={email}")

        for phone in self.phone_numbers:
            lines.append(f"p={phone}")

        if self.connection is not None:
            lines.append(f"c={self.connection}")

        for bandwidth in self.bandwidths:
            lines.append(f"b={bandwidth}")

        # Timing, each t= followed by its own r= lines
        for time in self.times:
            lines.append(f"t={time}")
            for repeat in time.repeats:
                lines.append(f"r={repeat}")

        if self.time_zones:
            lines.append(f"z={' '.join(str(zone) for zone in self.time_zones)}")

        if self.encryption_key is not None:
            lines.append(f"k={self.encryption_key}")

        for attribute in self.attributes:
            lines.append(f"a={attribute}")

        for media in self.media:
            lines.extend(media.to_lines())

        return lines

    def to_string(self) -> str:
        """Serialize SDP to string with CRLF line endings."""
        return EOL.join(self.to_lines()) + EOL

    def to_bytes(self) -> bytes:
        """Serialize SDP to bytes."""
        return self.to_string().encode("utf-8")

    def __str__(self) -> str:
        """Return string representation (serialized SDP)."""
        return self.to_string()


__all__ = ["SessionDescription"]
