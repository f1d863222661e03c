"""Entry points for parsing and serializing session descriptions."""

from __future__ import annotations

from typing import Optional

from ._models import SessionDescription
from ._parser import SDPParser
from ._types import ParserConfig, TextLike, WarningCallback


def parse(
    data: TextLike,
    *,
    strict: bool = True,
    on_warning: Optional[WarningCallback] = None,
) -> SessionDescription:
    """
    Parse SDP text into a SessionDescription.

    Args:
        data: SDP text (str, or UTF-8 bytes)
        strict: Raise SDPDecodeError on a malformed line; when False the
            line is skipped and reported as a warning
        on_warning: Receives a ParseWarning for every recoverable anomaly

    Example:
        >>> sdp = parse("v=0\\r\\no=- 1 1 IN IP4 10.0.0.1\\r\\ns=-\\r\\nt=0 0\\r\\n")
        >>> sdp.origin.address
        '10.0.0.1'
    """
    config = ParserConfig(strict=strict, on_warning=on_warning)
    return SDPParser(config).parse(data)


def stringify(description: SessionDescription) -> str:
    """
    Serialize a SessionDescription to SDP text.

    Lines follow the RFC 4566 order and are each terminated by CRLF.

    Raises:
        SDPEncodeError: If the description has no origin
    """
    return description.to_string()


__all__ = ["parse", "stringify"]
