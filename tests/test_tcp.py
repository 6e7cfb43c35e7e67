import pytest

from pktgen.errors import InvalidFieldValueError
from pktgen.tcp import TcpBuilder, TcpFlags, TcpHeader, TcpOption, TcpPacket


def _syn_flags():
    flags = TcpFlags()
    flags.syn = True
    return flags


def test_tcp_builder_with_mss_option():
    packet = (
        TcpPacket.builder()
        .src_port(12345)
        .dst_port(80)
        .sequence(1000)
        .flags(_syn_flags())
        .add_option(TcpOption.maximum_segment_size(1460))
        .payload(bytes([1, 2, 3, 4]))
        .build()
    )
    packet.validate()
    assert packet.header.data_offset == 6
    assert packet.length() == 28


def test_tcp_builder_missing_destination_port():
    with pytest.raises(InvalidFieldValueError) as info:
        TcpPacket.builder().src_port(12345).sequence(1000).build()
    assert info.value.detail == "Destination port not set"


def test_tcp_builder_missing_source_port():
    with pytest.raises(InvalidFieldValueError) as info:
        TcpPacket.builder().dst_port(80).build()
    assert info.value.detail == "Source port not set"


def test_tcp_packet_bytes_length():
    packet = (
        TcpPacket.builder()
        .src_port(12345)
        .dst_port(80)
        .sequence(1000)
        .flags(_syn_flags())
        .payload(bytes([1, 2, 3, 4]))
        .build()
    )
    packet.validate()
    data = packet.build()
    assert len(data) == 24
    assert data[-4:] == bytes([1, 2, 3, 4])


def test_header_wire_layout():
    packet = (
        TcpPacket.builder()
        .src_port(12345)
        .dst_port(80)
        .sequence(1000)
        .flags(_syn_flags())
        .add_option(TcpOption.maximum_segment_size(1460))
        .build()
    )
    data = packet.build()
    assert data[0:2] == (12345).to_bytes(2, "big")
    assert data[2:4] == (80).to_bytes(2, "big")
    assert data[4:8] == (1000).to_bytes(4, "big")
    assert data[12] == 0x60
    assert data[13] == 0x02
    assert data[14:16] == b"\xff\xff"
    assert data[20:24] == bytes([2, 4, 0x05, 0xB4])


def test_flags_as_u8():
    assert TcpFlags().as_u8() == 0
    assert TcpFlags(fin=True).as_u8() == 0x01
    assert TcpFlags(syn=True, ack=True).as_u8() == 0x12
    assert TcpFlags(cwr=True).as_u8() == 0x80
    all_set = TcpFlags(True, True, True, True, True, True, True, True)
    assert all_set.as_u8() == 0xFF


@pytest.mark.parametrize(
    "option, expected",
    [
        (TcpOption.end_of_option_list(), b"\x00"),
        (TcpOption.no_operation(), b"\x01"),
        (TcpOption.maximum_segment_size(1460), b"\x02\x04\x05\xb4"),
        (TcpOption.window_scale(7), b"\x03\x03\x07"),
        (TcpOption.selective_ack_permitted(), b"\x04\x02"),
        (TcpOption.timestamp(1, 2), b"\x08\x0a\x00\x00\x00\x01\x00\x00\x00\x02"),
    ],
)
def test_option_bytes(option, expected):
    assert option.as_bytes() == expected


def test_timestamp_option_padded_to_word_boundary():
    header = TcpHeader(src_port=1, dst_port=2, options=[TcpOption.timestamp(5, 6)])
    assert header.data_offset == 8
    data = header.as_bytes()
    assert len(data) == 32
    assert data[30:] == b"\x00\x00"


def test_acknowledgment_sets_ack_flag():
    packet = TcpBuilder().src_port(1).dst_port(2).acknowledgment(99).build()
    assert packet.header.flags.ack is True
    assert packet.header.acknowledgment_number == 99


def test_urgent_pointer_sets_urg_flag():
    packet = TcpBuilder().src_port(1).dst_port(2).urgent_pointer(7).build()
    assert packet.header.flags.urg is True
    assert packet.header.urgent_pointer == 7


def test_flags_after_acknowledgment_override_it():
    packet = TcpBuilder().src_port(1).dst_port(2).acknowledgment(5).flags(_syn_flags()).build()
    assert packet.header.flags.ack is False
    assert packet.header.flags.syn is True


def test_builder_does_not_mutate_callers_flags():
    flags = _syn_flags()
    TcpBuilder().src_port(1).dst_port(2).flags(flags).acknowledgment(1).build()
    assert flags.ack is False


def test_validate_rejects_short_data_offset():
    packet = TcpBuilder().src_port(1).dst_port(2).build()
    packet.header.data_offset = 4
    with pytest.raises(InvalidFieldValueError):
        packet.validate()


def test_checksum_round_trip():
    packet = TcpBuilder().src_port(12345).dst_port(80).sequence(1000).build()
    assert packet.header.verify_checksum() is False
    packet.header.checksum = packet.header.calculate_checksum()
    assert packet.header.verify_checksum() is True


def test_window_size_default_and_override():
    default = TcpBuilder().src_port(1).dst_port(2).build()
    custom = TcpBuilder().src_port(1).dst_port(2).window_size(1024).build()
    assert default.header.window_size == 65535
    assert custom.build()[14:16] == (1024).to_bytes(2, "big")