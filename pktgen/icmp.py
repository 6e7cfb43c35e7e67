"""ICMP message types, headers and packet construction."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from .base import Checksumable, PacketBuilder, PacketHeader, internet_checksum
from .errors import InvalidFieldValueError, InvalidLengthError

_HEADER_LENGTH = 8
_MAX_ECHO_PAYLOAD = 65507
_MAX_PAYLOAD = 1500


class IcmpType(IntEnum):
    """ICMP message types."""

    ECHO_REPLY = 0
    DESTINATION_UNREACHABLE = 3
    SOURCE_QUENCH = 4
    REDIRECT = 5
    ECHO_REQUEST = 8
    ROUTER_ADVERTISEMENT = 9
    ROUTER_SOLICITATION = 10
    TIME_EXCEEDED = 11
    PARAMETER_PROBLEM = 12
    TIMESTAMP_REQUEST = 13
    TIMESTAMP_REPLY = 14


class DestUnreachableCode(IntEnum):
    """Codes for Destination Unreachable messages."""

    NETWORK_UNREACHABLE = 0
    HOST_UNREACHABLE = 1
    PROTOCOL_UNREACHABLE = 2
    PORT_UNREACHABLE = 3
    FRAGMENTATION_NEEDED = 4
    SOURCE_ROUTE_FAILED = 5


@dataclass
class IcmpHeader(PacketHeader, Checksumable):
    """Type, code, checksum and the four-byte rest of header."""

    message_type: IcmpType
    code: int = 0
    rest_of_header: int = 0
    checksum: int = 0

    def header_length(self) -> int:
        return _HEADER_LENGTH

    def as_bytes(self) -> bytes:
        return (
            bytes([int(self.message_type), self.code])
            + self.checksum.to_bytes(2, "big")
            + self.rest_of_header.to_bytes(4, "big")
        )

    def calculate_checksum(self) -> int:
        """Return the one's-complement checksum over the header bytes."""
        return internet_checksum(self.as_bytes())

    def verify_checksum(self) -> bool:
        """Return True when the header sums to zero."""
        return self.calculate_checksum() == 0


def _echo_rest(identifier: int, sequence: int) -> int:
    return ((identifier & 0xFFFF) << 16) | (sequence & 0xFFFF)


@dataclass
class IcmpPacket(PacketBuilder):
    """An ICMP header followed by its payload."""

    header: IcmpHeader
    payload: bytes = b""

    @staticmethod
    def builder() -> IcmpBuilder:
        return IcmpBuilder()

    @staticmethod
    def echo_request(identifier: int, sequence: int, payload: bytes) -> IcmpPacket:
        """Create an Echo Request carrying *payload*."""
        return (
            IcmpBuilder()
            .message_type(IcmpType.ECHO_REQUEST)
            .code(0)
            .rest_of_header(_echo_rest(identifier, sequence))
            .payload(payload)
            .build()
        )

    @staticmethod
    def echo_reply(identifier: int, sequence: int, payload: bytes) -> IcmpPacket:
        """Create an Echo Reply carrying *payload*."""
        return (
            IcmpBuilder()
            .message_type(IcmpType.ECHO_REPLY)
            .code(0)
            .rest_of_header(_echo_rest(identifier, sequence))
            .payload(payload)
            .build()
        )

    def build(self) -> bytes:
        return self.header.as_bytes() + self.payload

    def length(self) -> int:
        return self.header.header_length() + len(self.payload)

    def validate(self) -> None:
        if self.header.message_type in (IcmpType.ECHO_REQUEST, IcmpType.ECHO_REPLY):
            limit = _MAX_ECHO_PAYLOAD
        else:
            limit = _MAX_PAYLOAD
        if len(self.payload) > limit:
            raise InvalidLengthError()


@dataclass
class IcmpBuilder:
    """Fluent builder for ICMP packets."""

    _message_type: Optional[IcmpType] = None
    _code: int = 0
    _rest_of_header: int = 0
    _payload: bytes = b""

    def message_type(self, message_type: IcmpType) -> IcmpBuilder:
        self._message_type = IcmpType(message_type)
        return self

    def code(self, code: int) -> IcmpBuilder:
        self._code = int(code)
        return self

    def rest_of_header(self, rest_of_header: int) -> IcmpBuilder:
        self._rest_of_header = rest_of_header
        return self

    def payload(self, payload: bytes) -> IcmpBuilder:
        self._payload = bytes(payload)
        return self

    def build(self) -> IcmpPacket:
        """Assemble the packet; raises if the message type is missing."""
        if self._message_type is None:
            raise InvalidFieldValueError("ICMP message type not set")
        return IcmpPacket(
            header=IcmpHeader(self._message_type, self._code, self._rest_of_header),
            payload=self._payload,
        )