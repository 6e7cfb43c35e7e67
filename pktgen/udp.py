"""UDP headers and datagram construction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .base import Checksumable, PacketBuilder, PacketHeader, internet_checksum
from .errors import InvalidFieldValueError, InvalidLengthError

_HEADER_LENGTH = 8
_MAX_PACKET = 65535


@dataclass
class UdpHeader(PacketHeader, Checksumable):
    """Source and destination ports, length and checksum."""

    src_port: int
    dst_port: int
    length: int
    checksum: int = 0

    def header_length(self) -> int:
        return _HEADER_LENGTH

    def as_bytes(self) -> bytes:
        return b"".join(
            value.to_bytes(2, "big")
            for value in (self.src_port, self.dst_port, self.length, self.checksum)
        )

    def calculate_checksum(self) -> int:
        """Return the one's-complement checksum over the header only."""
        return internet_checksum(self.as_bytes())

    def verify_checksum(self) -> bool:
        """Return True when the header sums to zero."""
        return self.calculate_checksum() == 0


@dataclass
class UdpPacket(PacketBuilder):
    """A UDP header followed by its payload."""

    header: UdpHeader
    payload: bytes = b""

    @staticmethod
    def builder() -> UdpBuilder:
        return UdpBuilder()

    def build(self) -> bytes:
        return self.header.as_bytes() + self.payload

    def length(self) -> int:
        return self.header.header_length() + len(self.payload)

    def validate(self) -> None:
        if self.length() > _MAX_PACKET:
            raise InvalidLengthError()


@dataclass
class UdpBuilder:
    """Fluent builder for UDP datagrams."""

    _src_port: Optional[int] = None
    _dst_port: Optional[int] = None
    _payload: bytes = b""

    def src_port(self, port: int) -> UdpBuilder:
        self._src_port = port
        return self

    def dst_port(self, port: int) -> UdpBuilder:
        self._dst_port = port
        return self

    def payload(self, payload: bytes) -> UdpBuilder:
        self._payload = bytes(payload)
        return self

    def build(self) -> UdpPacket:
        """Assemble and validate the datagram, raising on missing fields."""
        if self._src_port is None:
            raise InvalidFieldValueError("Source port not set")
        if self._dst_port is None:
            raise InvalidFieldValueError("Destination port not set")
        length = (_HEADER_LENGTH + len(self._payload)) & 0xFFFF
        packet = UdpPacket(
            header=UdpHeader(self._src_port, self._dst_port, length),
            payload=self._payload,
        )
        packet.validate()
        return packet