"""
Finite state machine for SDP line dispatch.

The parser feeds every ``key=value`` line into a DescriptionStateMachine,
which routes it to the field sub-parser and the record it belongs to.

FSM Overview:
=============

  SESSION ──m=──▶ MEDIA ──m=──▶ MEDIA ...

SESSION accepts v o s i u e p c b t r z k a.
MEDIA accepts i c b k a for the active media record; every m= line opens a
new record and makes its index the active one.

Lines the current state does not accept are reported through the warning
callback and otherwise ignored. Sub-parser failures propagate as
SDPDecodeError so the caller can decide between aborting and skipping.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from ._models import (
    Attribute,
    BandwidthDescription,
    ConnectionDescription,
    Contact,
    EncryptionKey,
    MediaDescription,
    Origin,
    Repeat,
    SessionDescription,
    Time,
    TimeZoneAdjustment,
)
from ._types import LineType, ParserState, SDPDecodeError, SDPLine
from ._utils import FIELD_NAMES, parse_uint

LineWarning = Callable[[SDPLine, str], None]


@dataclass
class MediaDraft:
    """Media block being assembled from the lines after its m= header."""

    header: MediaDescription
    title: Optional[str] = None
    connections: List[ConnectionDescription] = field(default_factory=list)
    bandwidths: List[BandwidthDescription] = field(default_factory=list)
    encryption_key: Optional[EncryptionKey] = None
    attributes: List[Attribute] = field(default_factory=list)

    # Single-valued keys already seen in this block
    seen: set = field(default_factory=set)

    def build(self) -> MediaDescription:
        return dataclasses.replace(
            self.header,
            title=self.title,
            connections=tuple(self.connections),
            bandwidths=tuple(self.bandwidths),
            encryption_key=self.encryption_key,
            attributes=tuple(self.attributes),
        )


@dataclass
class SessionDraft:
    """Session-level fields collected so far."""

    version: int = 0
    origin: Optional[Origin] = None
    session_name: str = "-"
    information: Optional[str] = None
    uri: Optional[str] = None
    emails: List[Contact] = field(default_factory=list)
    phone_numbers: List[Contact] = field(default_factory=list)
    connection: Optional[ConnectionDescription] = None
    bandwidths: List[BandwidthDescription] = field(default_factory=list)
    times: List[Time] = field(default_factory=list)
    time_zones: List[TimeZoneAdjustment] = field(default_factory=list)
    encryption_key: Optional[EncryptionKey] = None
    attributes: List[Attribute] = field(default_factory=list)
    media: List[MediaDraft] = field(default_factory=list)

    # Single-valued keys already seen, for duplicate warnings
    seen: set = field(default_factory=set)

    def build(self) -> SessionDescription:
        return SessionDescription(
            version=self.version,
            origin=self.origin,
            session_name=self.session_name,
            information=self.information,
            uri=self.uri,
            emails=tuple(self.emails),
            phone_numbers=tuple(self.phone_numbers),
            connection=self.connection,
            bandwidths=tuple(self.bandwidths),
            times=tuple(self.times),
            time_zones=tuple(self.time_zones),
            encryption_key=self.encryption_key,
            attributes=tuple(self.attributes),
            media=tuple(media.build() for media in self.media),
        )


class DescriptionStateMachine:
    """
    Two-state machine that assembles a SessionDescription line by line.

    Example:
        >>> machine = DescriptionStateMachine()
        >>> machine.feed(SDPLine(1, "v", "0"))
        >>> machine.feed(SDPLine(2, "m", "audio 49170 RTP/AVP 0"))
        >>> machine.state, machine.active_media
        (<ParserState.MEDIA: 2>, 0)
    """

    def __init__(self, warn: Optional[LineWarning] = None) -> None:
        """
        Initialize the state machine.

        Args:
            warn: Called with the offending line and a message for every
                recoverable anomaly
        """
        self.state = ParserState.SESSION
        self.active_media: Optional[int] = None
        self._session = SessionDraft()
        self._warn = warn or (lambda line, message: None)

    def transition_to(
        self, new_state: ParserState, active_media: Optional[int] = None
    ) -> None:
        """
        Transition to a new state.

        Args:
            new_state: The new state
            active_media: Index of the media record lines now attach to;
                None in SESSION, or in MEDIA after a header that failed to decode
        """
        self.state = new_state
        self.active_media = active_media

    def feed(self, line: SDPLine) -> None:
        """
        Route one line to its sub-parser and target record.

        Raises:
            SDPDecodeError: If the line's value does not match its field grammar
        """
        line_type = line.line_type

        if line_type is LineType.MEDIA:
            self._open_media(line)
            return

        if self.state is ParserState.SESSION:
            handler = _SESSION_HANDLERS.get(line_type)
            if handler is None:
                self._warn(line, "unrecognized line at session level")
                return
            handler(self, line)
            return

        handler = _MEDIA_HANDLERS.get(line_type)
        if handler is None:
            self._warn(line, "unrecognized line in media description")
            return
        if self.active_media is None:
            self._warn(line, "dropped line of a media description that failed to decode")
            return
        media = self._session.media[self.active_media]
        handler(media, line)
        if line_type in _MEDIA_SINGLE_VALUED:
            if line.key in media.seen:
                self._warn(
                    line, f"duplicate media {FIELD_NAMES[line.key]} line, keeping the last one"
                )
            media.seen.add(line.key)

    def finish(self) -> SessionDescription:
        """Build the immutable description from everything fed so far."""
        return self._session.build()

    # Media level

    def _open_media(self, line: SDPLine) -> None:
        try:
            header = MediaDescription.parse(line.value)
        except SDPDecodeError:
            # Later i/c/b/k/a lines must not land on the previous block
            self.transition_to(ParserState.MEDIA, None)
            raise
        self._session.media.append(MediaDraft(header))
        self.transition_to(ParserState.MEDIA, len(self._session.media) - 1)

    # Session level

    def _set_once(self, line: SDPLine, name: str, value: object) -> None:
        if line.key in self._session.seen:
            self._warn(line, f"duplicate {FIELD_NAMES[line.key]} line, keeping the last one")
        self._session.seen.add(line.key)
        setattr(self._session, name, value)

    def _on_version(self, line: SDPLine) -> None:
        self._set_once(line, "version", parse_uint(line.value, "protocol version"))

    def _on_origin(self, line: SDPLine) -> None:
        self._set_once(line, "origin", Origin.parse(line.value))

    def _on_session_name(self, line: SDPLine) -> None:
        self._set_once(line, "session_name", line.value)

    def _on_information(self, line: SDPLine) -> None:
        self._set_once(line, "information", line.value)

    def _on_uri(self, line: SDPLine) -> None:
        self._set_once(line, "uri", line.value)

    def _on_email(self, line: SDPLine) -> None:
        self._session.emails.append(Contact.parse(line.value))

    def _on_phone(self, line: SDPLine) -> None:
        self._session.phone_numbers.append(Contact.parse(line.value))

    def _on_connection(self, line: SDPLine) -> None:
        self._set_once(line, "connection", ConnectionDescription.parse(line.value))

    def _on_bandwidth(self, line: SDPLine) -> None:
        self._session.bandwidths.append(BandwidthDescription.parse(line.value))

    def _on_timing(self, line: SDPLine) -> None:
        self._session.times.append(Time.parse(line.value))

    def _on_repeat(self, line: SDPLine) -> None:
        times = self._session.times
        if not times:
            self._warn(line, "r= line without a preceding t= line")
            return
        repeat = Repeat.parse(line.value)
        times[-1] = dataclasses.replace(times[-1], repeats=times[-1].repeats + (repeat,))

    def _on_time_zones(self, line: SDPLine) -> None:
        self._session.time_zones.extend(TimeZoneAdjustment.parse_all(line.value))

    def _on_encryption_key(self, line: SDPLine) -> None:
        self._set_once(line, "encryption_key", EncryptionKey.parse(line.value))

    def _on_attribute(self, line: SDPLine) -> None:
        self._session.attributes.append(Attribute.parse(line.value))


def _media_title(media: MediaDraft, line: SDPLine) -> None:
    media.title = line.value


def _media_connection(media: MediaDraft, line: SDPLine) -> None:
    media.connections.append(ConnectionDescription.parse(line.value))


def _media_bandwidth(media: MediaDraft, line: SDPLine) -> None:
    media.bandwidths.append(BandwidthDescription.parse(line.value))


def _media_encryption_key(media: MediaDraft, line: SDPLine) -> None:
    media.encryption_key = EncryptionKey.parse(line.value)


def _media_attribute(media: MediaDraft, line: SDPLine) -> None:
    media.attributes.append(Attribute.parse(line.value))


_SESSION_HANDLERS: Dict[LineType, Callable[[DescriptionStateMachine, SDPLine], None]] = {
    LineType.VERSION: DescriptionStateMachine._on_version,
    LineType.ORIGIN: DescriptionStateMachine._on_origin,
    LineType.SESSION_NAME: DescriptionStateMachine._on_session_name,
    LineType.INFORMATION: DescriptionStateMachine._on_information,
    LineType.URI: DescriptionStateMachine._on_uri,
    LineType.EMAIL: DescriptionStateMachine._on_email,
    LineType.PHONE: DescriptionStateMachine._on_phone,
    LineType.CONNECTION: DescriptionStateMachine._on_connection,
    LineType.BANDWIDTH: DescriptionStateMachine._on_bandwidth,
    LineType.TIMING: DescriptionStateMachine._on_timing,
    LineType.REPEAT: DescriptionStateMachine._on_repeat,
    LineType.TIME_ZONES: DescriptionStateMachine._on_time_zones,
    LineType.ENCRYPTION_KEY: DescriptionStateMachine._on_encryption_key,
    LineType.ATTRIBUTE: DescriptionStateMachine._on_attribute,
}

_MEDIA_HANDLERS: Dict[LineType, Callable[[MediaDraft, SDPLine], None]] = {
    LineType.INFORMATION: _media_title,
    LineType.CONNECTION: _media_connection,
    LineType.BANDWIDTH: _media_bandwidth,
    LineType.ENCRYPTION_KEY: _media_encryption_key,
    LineType.ATTRIBUTE: _media_attribute,
}

_MEDIA_SINGLE_VALUED = frozenset({LineType.INFORMATION, LineType.ENCRYPTION_KEY})


__all__ = [
    "DescriptionStateMachine",
    "SessionDraft",
    "MediaDraft",
]
