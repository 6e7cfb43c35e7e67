"""ARP packets for resolving IPv4 addresses to Ethernet hardware addresses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from .base import PacketBuilder, PacketHeader
from .errors import InvalidFieldValueError, UnsupportedProtocolError
from .ethernet import MacAddress
from .ip import Ipv4Address

_HEADER_LENGTH = 28
_PROTOCOL_IPV4 = 0x0800
_MAC_LENGTH = 6
_IPV4_LENGTH = 4


class HardwareType(IntEnum):
    """ARP hardware address types."""

    ETHERNET = 1
    EXPERIMENTAL_ETHERNET = 2
    AX25 = 3
    PRO_NET_TOKEN_RING = 4
    CHAOS = 5
    IEEE802 = 6
    ARCNET = 7


class Operation(IntEnum):
    """ARP operation codes."""

    REQUEST = 1
    REPLY = 2
    REVERSE_REQUEST = 3
    REVERSE_REPLY = 4


@dataclass
class ArpHeader(PacketHeader):
    """An Ethernet/IPv4 ARP header."""

    operation: Operation
    sender_hardware_addr: MacAddress
    sender_protocol_addr: Ipv4Address
    target_hardware_addr: MacAddress
    target_protocol_addr: Ipv4Address
    hardware_type: HardwareType = HardwareType.ETHERNET
    protocol_type: int = _PROTOCOL_IPV4
    hardware_addr_len: int = _MAC_LENGTH
    protocol_addr_len: int = _IPV4_LENGTH

    def header_length(self) -> int:
        return _HEADER_LENGTH

    def as_bytes(self) -> bytes:
        return b"".join(
            (
                int(self.hardware_type).to_bytes(2, "big"),
                self.protocol_type.to_bytes(2, "big"),
                bytes([self.hardware_addr_len, self.protocol_addr_len]),
                int(self.operation).to_bytes(2, "big"),
                bytes(self.sender_hardware_addr),
                bytes(self.sender_protocol_addr),
                bytes(self.target_hardware_addr),
                bytes(self.target_protocol_addr),
            )
        )


@dataclass
class ArpPacket(PacketBuilder):
    """A complete ARP packet; ARP carries no payload."""

    header: ArpHeader

    @staticmethod
    def builder() -> ArpBuilder:
        return ArpBuilder()

    @staticmethod
    def request(
        sender_hardware_addr: MacAddress,
        sender_protocol_addr: Ipv4Address,
        target_protocol_addr: Ipv4Address,
    ) -> ArpPacket:
        """Create a request asking who holds *target_protocol_addr*."""
        return (
            ArpBuilder()
            .operation(Operation.REQUEST)
            .sender_hardware_addr(sender_hardware_addr)
            .sender_protocol_addr(sender_protocol_addr)
            .target_hardware_addr(MacAddress(bytes(_MAC_LENGTH)))
            .target_protocol_addr(target_protocol_addr)
            .build()
        )

    @staticmethod
    def reply(
        sender_hardware_addr: MacAddress,
        sender_protocol_addr: Ipv4Address,
        target_hardware_addr: MacAddress,
        target_protocol_addr: Ipv4Address,
    ) -> ArpPacket:
        """Create a reply addressed to the given target."""
        return (
            ArpBuilder()
            .operation(Operation.REPLY)
            .sender_hardware_addr(sender_hardware_addr)
            .sender_protocol_addr(sender_protocol_addr)
            .target_hardware_addr(target_hardware_addr)
            .target_protocol_addr(target_protocol_addr)
            .build()
        )

    def build(self) -> bytes:
        return self.header.as_bytes()

    def length(self) -> int:
        return self.header.header_length()

    def validate(self) -> None:
        if self.header.hardware_type != HardwareType.ETHERNET:
            raise UnsupportedProtocolError("Only Ethernet hardware type is supported")
        if self.header.protocol_type != _PROTOCOL_IPV4:
            raise UnsupportedProtocolError("Only IPv4 protocol type is supported")


@dataclass
class ArpBuilder:
    """Fluent builder for ARP packets."""

    _operation: Optional[Operation] = None
    _sender_hardware_addr: Optional[MacAddress] = None
    _sender_protocol_addr: Optional[Ipv4Address] = None
    _target_hardware_addr: Optional[MacAddress] = None
    _target_protocol_addr: Optional[Ipv4Address] = None

    def operation(self, operation: Operation) -> ArpBuilder:
        self._operation = Operation(operation)
        return self

    def sender_hardware_addr(self, addr: MacAddress) -> ArpBuilder:
        self._sender_hardware_addr = addr
        return self

    def sender_protocol_addr(self, addr: Ipv4Address) -> ArpBuilder:
        self._sender_protocol_addr = addr
        return self

    def target_hardware_addr(self, addr: MacAddress) -> ArpBuilder:
        self._target_hardware_addr = addr
        return self

    def target_protocol_addr(self, addr: Ipv4Address) -> ArpBuilder:
        self._target_protocol_addr = addr
        return self

    def build(self) -> ArpPacket:
        """Assemble and validate the packet, raising on missing fields."""
        if self._operation is None:
            raise InvalidFieldValueError("ARP operation not set")
        if self._sender_hardware_addr is None:
            raise InvalidFieldValueError("Sender hardware address not set")
        if self._sender_protocol_addr is None:
            raise InvalidFieldValueError("Sender protocol address not set")
        if self._target_hardware_addr is None:
            raise InvalidFieldValueError("Target hardware address not set")
        if self._target_protocol_addr is None:
            raise InvalidFieldValueError("Target protocol address not set")
        packet = ArpPacket(
            header=ArpHeader(
                operation=self._operation,
                sender_hardware_addr=self._sender_hardware_addr,
                sender_protocol_addr=self._sender_protocol_addr,
                target_hardware_addr=self._target_hardware_addr,
                target_protocol_addr=self._target_protocol_addr,
            )
        )
        packet.validate()
        return packet