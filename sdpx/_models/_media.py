"""
Media descriptions (m= blocks).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .._utils import parse_uint, split_tokens
from ._fields import (
    Attribute,
    BandwidthDescription,
    ConnectionDescription,
    EncryptionKey,
)


@dataclass(frozen=True, slots=True)
class MediaDescription:
    """
    One media block: the m= line and the i=, c=, b=, k=, a= lines after it.

    Formats are kept as text since some transports use symbolic formats.

    Example:
        media = MediaDescription(
            media_type="audio",
            port=49170,
            transport="RTP/AVP",
            formats=("0", "8"),
            attributes=(Attribute("rtpmap", "0 PCMU/8000"),),
        )
    """

    media_type: str
    port: int
    transport: str
    formats: Tuple[str, ...]
    number_of_ports: int = 1
    title: Optional[str] = None
    connections: Tuple[ConnectionDescription, ...] = ()
    bandwidths: Tuple[BandwidthDescription, ...] = ()
    encryption_key: Optional[EncryptionKey] = None
    attributes: Tuple[Attribute, ...] = ()

    @classmethod
    def parse(cls, value: str) -> MediaDescription:
        """
        Parse an m= header, ``<media> <port>[/<number of ports>] <proto> <fmt> ...``.

        The returned block has no title, connections, bandwidths, key or
        attributes; those come from the lines that follow.

        Raises:
            SDPDecodeError: If there are fewer than four tokens or the port is malformed
        """
        media_type, port_spec, transport, *formats = split_tokens(value, "media", 4)

        # Port first, count second
        port_str, has_count, count_str = port_spec.partition("/")
        port = parse_uint(port_str, "media port")
        number_of_ports = parse_uint(count_str, "media port count") if has_count else 1

        return cls(
            media_type=media_type,
            port=port,
            transport=transport,
            formats=tuple(formats),
            number_of_ports=number_of_ports,
        )

    @property
    def is_rejected(self) -> bool:
        """Check if the stream is rejected or disabled (port 0)."""
        return self.port == 0

    def find_attribute(self, name: str) -> Optional[Attribute]:
        """Return the first attribute called ``name``, if any."""
        return next((attr for attr in self.attributes if attr.name == name), None)

    def find_attributes(self, name: str) -> List[Attribute]:
        return [attr for attr in self.attributes if attr.name == name]

    def header(self) -> str:
        """Render the value of the m= line."""
        port = str(self.port)
        if self.number_of_ports > 1:
            port = f"{port}/{self.number_of_ports}"
        return f"{self.media_type} {port} {self.transport} {' '.join(self.formats)}"

    def to_lines(self) -> List[str]:
        """Convert the media block to lines in RFC 4566 order."""
        lines = [f"m={self.header()}"]

        # i= line (title)
        if self.title is not None:
            lines.append(f"i={self.title}")

        # c= lines (media-level connections)
        for connection in self.connections:
            lines.append(f"c={connection}")

        # b= lines (this block's own bandwidths)
        for bandwidth in self.bandwidths:
            lines.append(f"b={bandwidth}")

        if self.encryption_key is not None:
            lines.append(f"k={self.encryption_key}")

        for attribute in self.attributes:
            lines.append(f"a={attribute}")

        return lines


__all__ = ["MediaDescription"]
