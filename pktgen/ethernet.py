"""Ethernet frames: MAC addresses, EtherTypes and frame construction."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Optional

from .base import PacketBuilder, PacketHeader
from .errors import InvalidAddressError, InvalidFieldValueError, InvalidLengthError

_HEADER_LENGTH = 14
_MIN_PAYLOAD = 46
_MAX_PAYLOAD = 1500


@dataclass(frozen=True)
class MacAddress:
    """A six-byte hardware address."""

    octets: bytes

    def __init__(self, octets: Iterable[int]) -> None:
        try:
            raw = bytes(octets)
        except (TypeError, ValueError) as exc:
            raise InvalidAddressError() from exc
        if len(raw) != 6:
            raise InvalidAddressError()
        object.__setattr__(self, "octets", raw)

    def __bytes__(self) -> bytes:
        return self.octets

    def __str__(self) -> str:
        return ":".join(f"{b:02x}" for b in self.octets)


class EtherType(IntEnum):
    """Protocol identifiers carried in the EtherType field."""

    IPV4 = 0x0800
    IPV6 = 0x86DD
    ARP = 0x0806


@dataclass
class EthernetHeader(PacketHeader):
    """Destination and source MAC addresses plus the EtherType."""

    dst_mac: MacAddress
    src_mac: MacAddress
    ether_type: EtherType

    def header_length(self) -> int:
        return _HEADER_LENGTH

    def as_bytes(self) -> bytes:
        return bytes(self.dst_mac) + bytes(self.src_mac) + int(self.ether_type).to_bytes(2, "big")


@dataclass
class EthernetPacket(PacketBuilder):
    """An Ethernet frame: header and payload, padded to the minimum size."""

    header: EthernetHeader
    payload: bytes = b""

    @staticmethod
    def builder() -> EthernetBuilder:
        return EthernetBuilder()

    def _padding_length(self) -> int:
        return max(0, _MIN_PAYLOAD - len(self.payload))

    def build(self) -> bytes:
        self.validate()
        return self.header.as_bytes() + self.payload + bytes(self._padding_length())

    def length(self) -> int:
        return self.header.header_length() + len(self.payload) + self._padding_length()

    def validate(self) -> None:
        if len(self.payload) > _MAX_PAYLOAD:
            raise InvalidLengthError()


@dataclass
class EthernetBuilder:
    """Fluent builder for Ethernet frames."""

    _src_mac: Optional[MacAddress] = None
    _dst_mac: Optional[MacAddress] = None
    _ether_type: Optional[EtherType] = None
    _payload: bytes = field(default=b"")

    def src_mac(self, mac: MacAddress) -> EthernetBuilder:
        self._src_mac = mac
        return self

    def dst_mac(self, mac: MacAddress) -> EthernetBuilder:
        self._dst_mac = mac
        return self

    def ether_type(self, ether_type: EtherType) -> EthernetBuilder:
        self._ether_type = EtherType(ether_type)
        return self

    def payload(self, payload: bytes) -> EthernetBuilder:
        self._payload = bytes(payload)
        return self

    def build(self) -> EthernetPacket:
        """Assemble and validate the frame, raising on missing fields."""
        if self._src_mac is None:
            raise InvalidFieldValueError("Source MAC address not set")
        if self._dst_mac is None:
            raise InvalidFieldValueError("Destination MAC address not set")
        if self._ether_type is None:
            raise InvalidFieldValueError("EtherType not set")
        packet = EthernetPacket(
            header=EthernetHeader(self._dst_mac, self._src_mac, self._ether_type),
            payload=self._payload,
        )
        packet.validate()
        return packet