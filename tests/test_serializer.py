"""Tests for sdpx.stringify and the canonical line order."""

import pytest

from sdpx import (
    Attribute,
    BandwidthDescription,
    ConnectionDescription,
    Contact,
    EncryptionKey,
    EncryptionMethod,
    Interval,
    IntervalUnit,
    MediaDescription,
    Origin,
    Repeat,
    SDPEncodeError,
    SessionDescription,
    Time,
    TimeZoneAdjustment,
    parse,
    stringify,
)

ORIGIN = Origin("-", 1, 1, address="10.0.0.1")

RFC4566_EXAMPLE = (
    "v=0\r\n"
    "o=jdoe 2890844526 2890842807 IN IP4 10.47.16.5\r\n"
    "s=SDP Seminar\r\n"
    "i=A Seminar on the session description protocol\r\n"
    "u=http://www.example.com/seminars/sdp.pdf\r\n"
    "e=j.doe@example.com (Jane Doe)\r\n"
    "c=IN IP4 224.2.17.12/127\r\n"
    "t=2873397496 2873404696\r\n"
    "a=recvonly\r\n"
    "m=audio 49170 RTP/AVP 0\r\n"
    "m=video 51372 RTP/AVP 99\r\n"
    "a=rtpmap:99 h263-1998/90000\r\n"
)

FULL_EXAMPLE = (
    "v=0\r\n"
    "o=- 3724394400 3724394405 IN IP4 198.51.100.1\r\n"
    "s=Multicast\r\n"
    "i=Full featured\r\n"
    "u=http://example.com/sdp\r\n"
    "e=alice@example.com (Alice)\r\n"
    "e=bob@example.com\r\n"
    "p=+1 617 555-6011\r\n"
    "c=IN IP4 233.252.0.1/127/3\r\n"
    "b=CT:128\r\n"
    "t=2873397496 2873404696\r\n"
    "r=7d 1h 0 25h\r\n"
    "r=604800 3600 0 90000\r\n"
    "t=0 0\r\n"
    "z=2882844526 -1h 2898848070 0\r\n"
    "k=prompt\r\n"
    "a=recvonly\r\n"
    "a=tool:\r\n"
    "m=audio 49170/2 RTP/AVP 0 8\r\n"
    "i=Audio stream\r\n"
    "c=IN IP6 ff15::101/3\r\n"
    "c=IN IP4 233.252.0.2/64\r\n"
    "b=AS:64\r\n"
    "k=clear:secret\r\n"
    "a=rtpmap:0 PCMU/8000\r\n"
    "a=sendonly\r\n"
    "m=video 0 RTP/AVP 31\r\n"
    "b=AS:256\r\n"
    "a=inactive\r\n"
)


class TestRoundTrip:
    def test_rfc_example(self) -> None:
        assert stringify(parse(RFC4566_EXAMPLE)) == RFC4566_EXAMPLE

    def test_rfc_example_from_lf_text(self) -> None:
        assert stringify(parse(RFC4566_EXAMPLE.replace("\r\n", "\n"))) == RFC4566_EXAMPLE

    def test_every_field(self) -> None:
        assert stringify(parse(FULL_EXAMPLE)) == FULL_EXAMPLE

    def test_parse_of_output_is_stable(self) -> None:
        sdp = parse(FULL_EXAMPLE)
        assert parse(stringify(sdp)) == sdp

    def test_attribute_absence_and_empty_value(self) -> None:
        text = "v=0\r\no=- 1 1 IN IP4 10.0.0.1\r\ns=-\r\na=recvonly\r\na=recvonly:\r\n"
        sdp = parse(text)
        assert sdp.attributes[0].value is None
        assert sdp.attributes[1].value == ""
        assert stringify(sdp) == text


class TestLineOrder:
    def test_session_order(self) -> None:
        sdp = SessionDescription(
            origin=ORIGIN,
            attributes=(Attribute("recvonly"),),
            encryption_key=EncryptionKey(EncryptionMethod.CLEAR, "k"),
            time_zones=(TimeZoneAdjustment(2882844526, Interval(-1, IntervalUnit.HOURS)),),
            times=(Time(0, 0),),
            bandwidths=(BandwidthDescription("AS", 64),),
            connection=ConnectionDescription("IN", "IP4", "10.0.0.1"),
            phone_numbers=(Contact("+1 617 555-6011"),),
            emails=(Contact("a@example.com", "A"),),
            uri="http://example.com",
            information="info",
            session_name="name",
        )
        keys = [line[0] for line in sdp.to_lines()]
        assert keys == ["v", "o", "s", "i", "u", "e", "p", "c", "b", "t", "z", "k", "a"]

    def test_repeats_follow_their_time(self) -> None:
        repeat = Repeat(Interval(7, IntervalUnit.DAYS), Interval(1, IntervalUnit.HOURS), (Interval(0),))
        sdp = SessionDescription(
            origin=ORIGIN, times=(Time(1, 2, (repeat,)), Time(3, 4))
        )
        assert sdp.to_lines()[3:] == ["t=1 2", "r=7d 1h 0", "t=3 4"]

    def test_media_order(self) -> None:
        media = MediaDescription(
            "audio",
            5004,
            "RTP/AVP",
            ("0",),
            attributes=(Attribute("sendrecv"),),
            encryption_key=EncryptionKey(EncryptionMethod.PROMPT),
            bandwidths=(BandwidthDescription("AS", 64),),
            connections=(ConnectionDescription("IN", "IP4", "10.0.0.2"),),
            title="voice",
        )
        assert media.to_lines() == [
            "m=audio 5004 RTP/AVP 0",
            "i=voice",
            "c=IN IP4 10.0.0.2",
            "b=AS:64",
            "k=prompt",
            "a=sendrecv",
        ]

    def test_optional_fields_are_omitted(self) -> None:
        sdp = SessionDescription(origin=ORIGIN)
        assert sdp.to_lines() == ["v=0", "o=- 1 1 IN IP4 10.0.0.1", "s=-"]


class TestFieldRendering:
    def test_media_uses_its_own_bandwidths(self) -> None:
        sdp = SessionDescription(
            origin=ORIGIN,
            bandwidths=(BandwidthDescription("CT", 1000),),
            media=(
                MediaDescription(
                    "video", 5006, "RTP/AVP", ("31",),
                    bandwidths=(BandwidthDescription("AS", 256),),
                ),
            ),
        )
        assert sdp.to_lines().count("b=CT:1000") == 1
        assert sdp.to_lines()[-1] == "b=AS:256"

    def test_port_count_only_when_above_one(self) -> None:
        assert MediaDescription("audio", 5004, "RTP/AVP", ("0",)).header() == "audio 5004 RTP/AVP 0"
        media = MediaDescription("audio", 5004, "RTP/AVP", ("0", "8"), number_of_ports=2)
        assert media.header() == "audio 5004/2 RTP/AVP 0 8"

    def test_contact_name_uses_parentheses(self) -> None:
        sdp = parse(
            "v=0\r\no=- 1 1 IN IP4 10.0.0.1\r\ns=-\r\n"
            "e=Jane Doe <j.doe@example.com>\r\n"
        )
        assert "e=j.doe@example.com (Jane Doe)" in sdp.to_lines()

    def test_unknown_connection_types_are_verbatim(self) -> None:
        conn = ConnectionDescription.parse("ATM NSAP 47.0005.80.ffe100/2")
        assert str(conn) == "ATM NSAP 47.0005.80.ffe100/2"


class TestOutput:
    def test_every_line_ends_with_crlf(self) -> None:
        text = stringify(SessionDescription(origin=ORIGIN))
        assert text == "v=0\r\no=- 1 1 IN IP4 10.0.0.1\r\ns=-\r\n"

    def test_bytes_and_str(self) -> None:
        sdp = parse(RFC4566_EXAMPLE)
        assert str(sdp) == RFC4566_EXAMPLE
        assert sdp.to_bytes() == RFC4566_EXAMPLE.encode("utf-8")

    def test_missing_origin(self) -> None:
        with pytest.raises(SDPEncodeError):
            stringify(SessionDescription())
