import pytest

from pktgen.errors import InvalidAddressError, InvalidFieldValueError, InvalidLengthError
from pktgen.ip import IpProtocol, Ipv4Address, Ipv4Flags, Ipv4Header, Ipv4Packet

SRC = Ipv4Address([192, 168, 1, 1])
DST = Ipv4Address([192, 168, 1, 2])


def _packet(payload=b"\x01\x02\x03\x04"):
    return (
        Ipv4Packet.builder()
        .protocol(IpProtocol.TCP)
        .src_addr(SRC)
        .dst_addr(DST)
        .payload(payload)
        .build()
    )


def test_ipv4_builder_length():
    packet = (
        Ipv4Packet.builder()
        .protocol(IpProtocol.TCP)
        .src_addr(SRC)
        .dst_addr(DST)
        .identification(1234)
        .ttl(64)
        .payload([1, 2, 3, 4])
        .build()
    )
    assert packet.length() == 24


def test_ipv4_builder_missing_destination():
    builder = Ipv4Packet.builder().protocol(IpProtocol.TCP).src_addr(SRC)
    with pytest.raises(InvalidFieldValueError, match="Destination address not set"):
        builder.build()


def test_ipv4_builder_missing_protocol():
    with pytest.raises(InvalidFieldValueError, match="Protocol not set"):
        Ipv4Packet.builder().src_addr(SRC).dst_addr(DST).build()


def test_ipv4_packet_bytes_length():
    assert len(_packet().build()) == 24


def test_ipv4_packet_wire_format():
    data = _packet().build()
    assert data[0] == 0x45
    assert data[1] == 0
    assert data[2:4] == (24).to_bytes(2, "big")
    assert data[6:8] == b"\x40\x00"
    assert data[8] == 64
    assert data[9] == 6
    assert data[12:16] == bytes([192, 168, 1, 1])
    assert data[16:20] == bytes([192, 168, 1, 2])
    assert data[20:] == b"\x01\x02\x03\x04"


def test_oversized_packet_rejected():
    with pytest.raises(InvalidLengthError):
        _packet(bytes(65516))


def test_known_header_checksum():
    header = Ipv4Header(
        protocol=IpProtocol.UDP,
        src_addr=Ipv4Address([192, 168, 0, 1]),
        dst_addr=Ipv4Address([192, 168, 0, 199]),
        total_length=0x73,
    )
    assert header.calculate_checksum() == 0xB861


def test_checksum_roundtrip():
    header = _packet().header
    assert not header.verify_checksum()
    header.checksum = header.calculate_checksum()
    assert header.verify_checksum()


def test_flags_as_u8():
    assert Ipv4Flags().as_u8() == 0b010
    assert Ipv4Flags(dont_fragment=False, more_fragments=True).as_u8() == 0b001
    assert Ipv4Flags(True, True, reserved=True).as_u8() == 0b111


def test_address_str_and_bytes():
    assert str(SRC) == "192.168.1.1"
    assert bytes(DST) == b"\xc0\xa8\x01\x02"
    assert Ipv4Address([192, 168, 1, 1]) == SRC


@pytest.mark.parametrize("octets", [[1, 2, 3], [1, 2, 3, 4, 5], [256, 0, 0, 0]])
def test_invalid_address(octets):
    with pytest.raises(InvalidAddressError):
        Ipv4Address(octets)