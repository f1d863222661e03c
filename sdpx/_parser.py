"""
SDP parser.

Splits the text into lines, feeds them to the description state machine
and applies the strict/lenient policy to lines that fail to decode.
"""

from __future__ import annotations

from typing import Iterator, Optional

from ._fsm import DescriptionStateMachine
from ._models import SessionDescription
from ._types import ParserConfig, ParseWarning, SDPDecodeError, SDPLine, TextLike
from ._utils import logger


def iter_lines(text: str) -> Iterator[SDPLine]:
    """
    Yield the ``key=value`` lines of an SDP text.

    LF and CRLF terminators are handled alike and blank lines are skipped.
    A line without ``=`` yields its whole text as key with an empty value.
    """
    for number, raw in enumerate(text.split("\n"), start=1):
        if raw.endswith("\r"):
            raw = raw[:-1]
        if not raw:
            continue
        key, _, value = raw.partition("=")
        yield SDPLine(number=number, key=key, value=value)


class SDPParser:
    """
    Parser for SDP texts (RFC 4566).

    Instances only hold their configuration and can be reused and shared
    between threads.

    Example:
        parser = SDPParser(ParserConfig(strict=False, on_warning=warnings.append))
        sdp = parser.parse(raw_body)
    """

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        self.config = config or ParserConfig()

    def parse(self, data: TextLike) -> SessionDescription:
        """
        Parse an SDP text.

        Args:
            data: SDP text, or bytes in the configured encoding

        Returns:
            SessionDescription instance

        Raises:
            SDPDecodeError: If the bytes do not decode, the text is empty, or
                a line is malformed in strict mode
        """
        if isinstance(data, bytes):
            try:
                data = data.decode(self.config.encoding)
            except UnicodeDecodeError as exc:
                raise SDPDecodeError(
                    f"SDP is not valid {self.config.encoding}: {exc.reason}"
                ) from exc

        if not data.strip():
            raise SDPDecodeError("Empty SDP")

        machine = DescriptionStateMachine(warn=self._warn)
        for line in iter_lines(data):
            try:
                machine.feed(line)
            except SDPDecodeError as exc:
                error = exc.at_line(line)
                if self.config.strict:
                    raise error from None
                self._warn(line, f"skipped malformed line: {error.reason}")

        session = machine.finish()
        logger.debug(
            "Parsed SDP with %d media description(s)",
            len(session.media),
        )
        return session

    def _warn(self, line: SDPLine, message: str) -> None:
        warning = ParseWarning(
            message=message, line_number=line.number, key=line.key, value=line.value
        )
        if self.config.log_warnings:
            logger.warning("SDP: %s", warning)
        if self.config.on_warning is not None:
            self.config.on_warning(warning)


__all__ = ["SDPParser", "iter_lines"]
