import pytest

from pktgen.errors import InvalidFieldValueError, InvalidLengthError
from pktgen.icmp import DestUnreachableCode, IcmpBuilder, IcmpPacket, IcmpType

HELLO = b"Hello, World!"


def test_icmp_echo_request():
    packet = IcmpPacket.echo_request(1, 1, HELLO)
    assert packet.header.message_type == IcmpType.ECHO_REQUEST
    assert packet.header.code == 0
    assert packet.payload == HELLO
    packet.validate()
    assert packet.length() == 8 + len(HELLO)


def test_icmp_echo_reply():
    packet = IcmpPacket.echo_reply(1, 1, HELLO)
    assert packet.header.message_type == IcmpType.ECHO_REPLY
    assert packet.header.code == 0
    assert packet.payload == HELLO
    packet.validate()
    assert packet.build()[0] == 0


def test_icmp_builder():
    packet = (
        IcmpPacket.builder()
        .message_type(IcmpType.DESTINATION_UNREACHABLE)
        .code(DestUnreachableCode.PORT_UNREACHABLE)
        .rest_of_header(0)
        .payload(bytes([1, 2, 3, 4]))
        .build()
    )
    assert packet.header.message_type == IcmpType.DESTINATION_UNREACHABLE
    assert packet.header.code == DestUnreachableCode.PORT_UNREACHABLE
    packet.validate()
    assert packet.build() == bytes([3, 3, 0, 0, 0, 0, 0, 0, 1, 2, 3, 4])


def test_invalid_payload_size():
    packet = IcmpPacket.echo_request(1, 1, bytes(65508))
    with pytest.raises(InvalidLengthError):
        packet.validate()


def test_echo_payload_at_limit_is_valid():
    packet = IcmpPacket.echo_request(1, 1, bytes(65507))
    packet.validate()
    assert packet.length() == 65515


def test_non_echo_payload_limit():
    ok = IcmpBuilder().message_type(IcmpType.TIME_EXCEEDED).payload(bytes(1500)).build()
    ok.validate()
    too_big = IcmpBuilder().message_type(IcmpType.TIME_EXCEEDED).payload(bytes(1501)).build()
    with pytest.raises(InvalidLengthError):
        too_big.validate()


def test_builder_requires_message_type():
    with pytest.raises(InvalidFieldValueError) as info:
        IcmpBuilder().code(0).build()
    assert info.value.detail == "ICMP message type not set"


def test_echo_request_header_bytes():
    packet = IcmpPacket.echo_request(1, 1, b"")
    assert packet.header.as_bytes() == b"\x08\x00\x00\x00\x00\x01\x00\x01"
    assert packet.header.header_length() == 8


def test_echo_identifier_and_sequence_placement():
    packet = IcmpPacket.echo_request(0x1234, 0xABCD, b"")
    assert packet.header.rest_of_header == 0x1234ABCD
    assert packet.build()[4:8] == b"\x12\x34\xab\xcd"


def test_checksum_round_trip():
    packet = IcmpPacket.echo_request(7, 3, HELLO)
    assert packet.header.verify_checksum() is False
    packet.header.checksum = packet.header.calculate_checksum()
    assert packet.header.verify_checksum() is True


def test_build_appends_payload():
    packet = IcmpPacket.echo_reply(2, 9, HELLO)
    data = packet.build()
    assert data[8:] == HELLO
    assert len(data) == packet.length()