"""IPv4 addresses, headers and packet construction."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Optional

from .base import Checksumable, PacketBuilder, PacketHeader, internet_checksum
from .errors import InvalidAddressError, InvalidFieldValueError, InvalidLengthError

_MAX_PACKET = 65535


class IpProtocol(IntEnum):
    """IP protocol numbers."""

    ICMP = 1
    TCP = 6
    UDP = 17


@dataclass(frozen=True)
class Ipv4Address:
    """A four-byte IPv4 address."""

    octets: bytes

    def __init__(self, octets: Iterable[int]) -> None:
        try:
            raw = bytes(octets)
        except (TypeError, ValueError) as exc:
            raise InvalidAddressError() from exc
        if len(raw) != 4:
            raise InvalidAddressError()
        object.__setattr__(self, "octets", raw)

    def __bytes__(self) -> bytes:
        return self.octets

    def __str__(self) -> str:
        return ".".join(str(b) for b in self.octets)


@dataclass(frozen=True)
class Ipv4Flags:
    """The three flag bits of the IPv4 header."""

    dont_fragment: bool = True
    more_fragments: bool = False
    reserved: bool = False

    def as_u8(self) -> int:
        """Return the flags packed into the low three bits."""
        return (
            (0b100 if self.reserved else 0)
            | (0b010 if self.dont_fragment else 0)
            | (0b001 if self.more_fragments else 0)
        )


@dataclass
class Ipv4Header(PacketHeader, Checksumable):
    """An IPv4 header without options."""

    protocol: IpProtocol
    src_addr: Ipv4Address
    dst_addr: Ipv4Address
    identification: int = 0
    flags: Ipv4Flags = field(default_factory=Ipv4Flags)
    ttl: int = 64
    dscp: int = 0
    ecn: int = 0
    version: int = 4
    ihl: int = 5
    total_length: int = 20
    fragment_offset: int = 0
    checksum: int = 0

    def header_length(self) -> int:
        return self.ihl * 4

    def as_bytes(self) -> bytes:
        flags_and_offset = ((self.flags.as_u8() << 13) | (self.fragment_offset & 0x1FFF)) & 0xFFFF
        return b"".join(
            (
                bytes([((self.version << 4) | self.ihl) & 0xFF, ((self.dscp << 2) | self.ecn) & 0xFF]),
                self.total_length.to_bytes(2, "big"),
                self.identification.to_bytes(2, "big"),
                flags_and_offset.to_bytes(2, "big"),
                bytes([self.ttl, int(self.protocol)]),
                self.checksum.to_bytes(2, "big"),
                bytes(self.src_addr),
                bytes(self.dst_addr),
            )
        )

    def calculate_checksum(self) -> int:
        """Return the one's-complement checksum over the header bytes."""
        return internet_checksum(self.as_bytes())

    def verify_checksum(self) -> bool:
        """Return True when the header sums to zero."""
        return self.calculate_checksum() == 0


@dataclass
class Ipv4Packet(PacketBuilder):
    """An IPv4 header followed by its payload."""

    header: Ipv4Header
    payload: bytes = b""

    @staticmethod
    def builder() -> Ipv4Builder:
        return Ipv4Builder()

    def build(self) -> bytes:
        return self.header.as_bytes() + self.payload

    def length(self) -> int:
        return self.header.header_length() + len(self.payload)

    def validate(self) -> None:
        if self.length() > _MAX_PACKET:
            raise InvalidLengthError()


@dataclass
class Ipv4Builder:
    """Fluent builder for IPv4 packets."""

    _protocol: Optional[IpProtocol] = None
    _src_addr: Optional[Ipv4Address] = None
    _dst_addr: Optional[Ipv4Address] = None
    _identification: int = 0
    _flags: Ipv4Flags = field(default_factory=Ipv4Flags)
    _ttl: int = 64
    _dscp: int = 0
    _ecn: int = 0
    _payload: bytes = b""

    def protocol(self, protocol: IpProtocol) -> Ipv4Builder:
        self._protocol = IpProtocol(protocol)
        return self

    def src_addr(self, addr: Ipv4Address) -> Ipv4Builder:
        self._src_addr = addr
        return self

    def dst_addr(self, addr: Ipv4Address) -> Ipv4Builder:
        self._dst_addr = addr
        return self

    def identification(self, ident: int) -> Ipv4Builder:
        self._identification = ident
        return self

    def flags(self, flags: Ipv4Flags) -> Ipv4Builder:
        self._flags = flags
        return self

    def ttl(self, ttl: int) -> Ipv4Builder:
        self._ttl = ttl
        return self

    def dscp(self, dscp: int) -> Ipv4Builder:
        self._dscp = dscp
        return self

    def ecn(self, ecn: int) -> Ipv4Builder:
        self._ecn = ecn
        return self

    def payload(self, payload: bytes) -> Ipv4Builder:
        self._payload = bytes(payload)
        return self

    def build(self) -> Ipv4Packet:
        """Assemble and validate the packet, raising on missing fields."""
        if self._protocol is None:
            raise InvalidFieldValueError("Protocol not set")
        if self._src_addr is None:
            raise InvalidFieldValueError("Source address not set")
        if self._dst_addr is None:
            raise InvalidFieldValueError("Destination address not set")
        header = Ipv4Header(
            protocol=self._protocol,
            src_addr=self._src_addr,
            dst_addr=self._dst_addr,
            identification=self._identification,
            flags=self._flags,
            ttl=self._ttl,
            dscp=self._dscp,
            ecn=self._ecn,
        )
        packet = Ipv4Packet(header=header, payload=self._payload)
        packet.validate()
        header.total_length = packet.length()
        return packet