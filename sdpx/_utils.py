"""Utilities and constants for the SDP codec."""

import logging
import re
from typing import List

from rich.console import Console
from rich.logging import RichHandler

from ._types import SDPDecodeError

# Rich Console for pretty printing
console = Console()

# Configure logging with RichHandler
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
)

# Get logger for the package
logger = logging.getLogger("sdpx")

EOL = "\r\n"

# Seconds between the NTP epoch (1900-01-01) and the Unix epoch
NTP_UNIX_OFFSET = 2208988800

# Session ids, versions and NTP timestamps are 64-bit unsigned
MAX_UINT64 = 2**64 - 1

NETWORK_TYPE_IN = "IN"
ADDRESS_TYPE_IP4 = "IP4"
ADDRESS_TYPE_IP6 = "IP6"

# Line keys (RFC 4566 Section 5) -> field names used in diagnostics
FIELD_NAMES = {
    "v": "protocol version",
    "o": "origin",
    "s": "session name",
    "i": "information",
    "u": "uri",
    "e": "email",
    "p": "phone number",
    "c": "connection",
    "b": "bandwidth",
    "t": "timing",
    "r": "repeat times",
    "z": "time zones",
    "k": "encryption key",
    "a": "attribute",
    "m": "media",
}

_UINT_RE = re.compile(r"[0-9]+")


def parse_uint(token: str, field: str, maximum: int = MAX_UINT64) -> int:
    """
    Parse an unsigned decimal token.

    Args:
        token: Raw token text
        field: Field name reported on failure
        maximum: Largest accepted value

    Returns:
        The parsed integer

    Raises:
        SDPDecodeError: If the token is not a decimal number in range
    """
    if not _UINT_RE.fullmatch(token):
        raise SDPDecodeError(
            f"{field} must be an unsigned integer, got {token!r}",
            field=field,
            value=token,
        )
    number = int(token)
    if number > maximum:
        raise SDPDecodeError(
            f"{field} {number} exceeds {maximum}", field=field, value=token
        )
    return number


def split_tokens(
    value: str, field: str, minimum: int, maximum: int | None = None
) -> List[str]:
    """Split a field value on whitespace and check the token count."""
    tokens = value.split()
    if len(tokens) < minimum:
        raise SDPDecodeError(
            f"{field} needs at least {minimum} tokens, got {len(tokens)}",
            field=field,
            value=value,
        )
    if maximum is not None and len(tokens) > maximum:
        raise SDPDecodeError(
            f"{field} takes at most {maximum} tokens, got {len(tokens)}",
            field=field,
            value=value,
        )
    return tokens


def split_once(value: str, separator: str) -> tuple[str, str | None]:
    """Split at the first separator; the second part is None when absent."""
    head, found, tail = value.partition(separator)
    return head, (tail if found else None)
