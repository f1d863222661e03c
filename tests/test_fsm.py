"""Tests for the session/media state machine on its own."""

import pytest

from sdpx import (
    Attribute,
    DescriptionStateMachine,
    LineType,
    ParserState,
    SDPDecodeError,
    SDPLine,
)


def feed_all(machine, *lines):
    for number, text in enumerate(lines, start=1):
        key, _, value = text.partition("=")
        machine.feed(SDPLine(number, key, value))


@pytest.fixture
def warnings():
    return []


@pytest.fixture
def machine(warnings):
    return DescriptionStateMachine(
        warn=lambda line, message: warnings.append((line.key, message))
    )


class TestStates:
    def test_starts_at_session_level(self, machine) -> None:
        assert machine.state is ParserState.SESSION
        assert machine.active_media is None

    def test_every_media_line_opens_a_new_record(self, machine) -> None:
        feed_all(machine, "v=0", "m=audio 5004 RTP/AVP 0")
        assert machine.state is ParserState.MEDIA
        assert machine.active_media == 0

        feed_all(machine, "m=video 5006 RTP/AVP 31")
        assert machine.state is ParserState.MEDIA
        assert machine.active_media == 1

    def test_failed_media_header_leaves_no_active_record(self, machine, warnings) -> None:
        feed_all(machine, "m=audio 5004 RTP/AVP 0")
        with pytest.raises(SDPDecodeError):
            feed_all(machine, "m=video")
        assert machine.state is ParserState.MEDIA
        assert machine.active_media is None

        feed_all(machine, "a=sendonly")
        assert len(warnings) == 1
        assert machine.finish().media[0].attributes == ()

    def test_finish_builds_immutable_description(self, machine) -> None:
        feed_all(
            machine,
            "o=- 1 1 IN IP4 10.0.0.1",
            "a=group:BUNDLE 0",
            "m=audio 5004 RTP/AVP 0",
            "a=mid:0",
        )
        sdp = machine.finish()
        assert sdp.attributes == (Attribute("group", "BUNDLE 0"),)
        assert sdp.media[0].attributes == (Attribute("mid", "0"),)
        assert isinstance(sdp.media, tuple)


class TestDispatch:
    @pytest.mark.parametrize("key", ["v", "o", "s", "u", "e", "p", "t", "r", "z"])
    def test_session_only_keys_warn_in_media(self, machine, warnings, key) -> None:
        feed_all(machine, "m=audio 5004 RTP/AVP 0")
        machine.feed(SDPLine(2, key, "anything"))
        assert warnings == [(key, "unrecognized line in media description")]

    def test_unknown_key_warns_at_session_level(self, machine, warnings) -> None:
        feed_all(machine, "y=1")
        assert warnings == [("y", "unrecognized line at session level")]

    def test_orphan_repeat(self, machine, warnings) -> None:
        feed_all(machine, "r=7d 1h 0")
        assert warnings == [("r", "r= line without a preceding t= line")]
        assert machine.finish().times == ()

    def test_time_zone_line_extends_adjustments(self, machine) -> None:
        feed_all(machine, "z=2882844526 -1h", "z=2898848070 0")
        assert len(machine.finish().time_zones) == 2

    def test_line_types_are_a_closed_set(self) -> None:
        assert LineType.from_key("a") is LineType.ATTRIBUTE
        assert LineType.from_key("x") is None
        assert LineType.from_key("") is None
        assert LineType.from_key("ab") is None
