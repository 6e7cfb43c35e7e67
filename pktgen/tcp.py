"""TCP flags, options, headers and segment construction."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import List, Optional, Tuple

from .base import Checksumable, PacketBuilder, PacketHeader, internet_checksum
from .errors import InvalidFieldValueError

_BASE_HEADER_LENGTH = 20


@dataclass
class TcpFlags:
    """The eight TCP control bits, all clear by default."""

    fin: bool = False
    syn: bool = False
    rst: bool = False
    psh: bool = False
    ack: bool = False
    urg: bool = False
    ece: bool = False
    cwr: bool = False

    def as_u8(self) -> int:
        """Return the flags packed into one byte, FIN in the lowest bit."""
        bits = (self.fin, self.syn, self.rst, self.psh, self.ack, self.urg, self.ece, self.cwr)
        return sum(1 << position for position, is_set in enumerate(bits) if is_set)


class TcpOptionKind(IntEnum):
    """Option kinds understood by this module."""

    END_OF_OPTION_LIST = 0
    NO_OPERATION = 1
    MAXIMUM_SEGMENT_SIZE = 2
    WINDOW_SCALE = 3
    SELECTIVE_ACK_PERMITTED = 4
    TIMESTAMP = 8


@dataclass(frozen=True)
class TcpOption:
    """A single TCP header option and its values."""

    kind: TcpOptionKind
    values: Tuple[int, ...] = ()

    @staticmethod
    def end_of_option_list() -> TcpOption:
        return TcpOption(TcpOptionKind.END_OF_OPTION_LIST)

    @staticmethod
    def no_operation() -> TcpOption:
        return TcpOption(TcpOptionKind.NO_OPERATION)

    @staticmethod
    def maximum_segment_size(size: int) -> TcpOption:
        return TcpOption(TcpOptionKind.MAXIMUM_SEGMENT_SIZE, (size,))

    @staticmethod
    def window_scale(shift: int) -> TcpOption:
        return TcpOption(TcpOptionKind.WINDOW_SCALE, (shift,))

    @staticmethod
    def selective_ack_permitted() -> TcpOption:
        return TcpOption(TcpOptionKind.SELECTIVE_ACK_PERMITTED)

    @staticmethod
    def timestamp(value: int, echo: int) -> TcpOption:
        return TcpOption(TcpOptionKind.TIMESTAMP, (value, echo))

    def as_bytes(self) -> bytes:
        """Return the option in wire format."""
        kind = self.kind
        if kind in (TcpOptionKind.END_OF_OPTION_LIST, TcpOptionKind.NO_OPERATION):
            return bytes([kind])
        if kind is TcpOptionKind.MAXIMUM_SEGMENT_SIZE:
            return bytes([2, 4]) + (self.values[0] & 0xFFFF).to_bytes(2, "big")
        if kind is TcpOptionKind.WINDOW_SCALE:
            return bytes([3, 3, self.values[0] & 0xFF])
        if kind is TcpOptionKind.SELECTIVE_ACK_PERMITTED:
            return bytes([4, 2])
        value, echo = self.values
        return bytes([8, 10]) + value.to_bytes(4, "big") + echo.to_bytes(4, "big")


@dataclass
class TcpHeader(PacketHeader, Checksumable):
    """A TCP header; the data offset follows from the options."""

    src_port: int
    dst_port: int
    sequence_number: int = 0
    acknowledgment_number: int = 0
    flags: TcpFlags = field(default_factory=TcpFlags)
    window_size: int = 65535
    urgent_pointer: int = 0
    options: List[TcpOption] = field(default_factory=list)
    checksum: int = 0
    data_offset: int = field(init=False)

    def __post_init__(self) -> None:
        options_length = sum(len(option.as_bytes()) for option in self.options)
        padded = (_BASE_HEADER_LENGTH + options_length + 3) & ~3
        self.data_offset = (padded // 4) & 0xFF

    def header_length(self) -> int:
        return self.data_offset * 4

    def as_bytes(self) -> bytes:
        raw = b"".join(
            (
                self.src_port.to_bytes(2, "big"),
                self.dst_port.to_bytes(2, "big"),
                self.sequence_number.to_bytes(4, "big"),
                self.acknowledgment_number.to_bytes(4, "big"),
                bytes([(self.data_offset << 4) & 0xFF, self.flags.as_u8()]),
                self.window_size.to_bytes(2, "big"),
                self.checksum.to_bytes(2, "big"),
                self.urgent_pointer.to_bytes(2, "big"),
                *(option.as_bytes() for option in self.options),
            )
        )
        return raw + bytes(max(0, self.header_length() - len(raw)))

    def calculate_checksum(self) -> int:
        """Return the one's-complement checksum over the header only."""
        return internet_checksum(self.as_bytes())

    def verify_checksum(self) -> bool:
        """Return True when the header sums to zero."""
        return self.calculate_checksum() == 0


@dataclass
class TcpPacket(PacketBuilder):
    """A TCP header followed by its payload."""

    header: TcpHeader
    payload: bytes = b""

    @staticmethod
    def builder() -> TcpBuilder:
        return TcpBuilder()

    def build(self) -> bytes:
        return self.header.as_bytes() + self.payload

    def length(self) -> int:
        return self.header.header_length() + len(self.payload)

    def validate(self) -> None:
        if self.header.data_offset < 5:
            raise InvalidFieldValueError("TCP header length must be at least 20 bytes")


@dataclass
class TcpBuilder:
    """Fluent builder for TCP segments."""

    _src_port: Optional[int] = None
    _dst_port: Optional[int] = None
    _sequence_number: int = 0
    _acknowledgment_number: int = 0
    _flags: TcpFlags = field(default_factory=TcpFlags)
    _window_size: int = 65535
    _urgent_pointer: int = 0
    _options: List[TcpOption] = field(default_factory=list)
    _payload: bytes = b""

    def src_port(self, port: int) -> TcpBuilder:
        self._src_port = port
        return self

    def dst_port(self, port: int) -> TcpBuilder:
        self._dst_port = port
        return self

    def sequence(self, seq: int) -> TcpBuilder:
        self._sequence_number = seq
        return self

    def acknowledgment(self, ack: int) -> TcpBuilder:
        """Set the acknowledgment number and the ACK flag."""
        self._acknowledgment_number = ack
        self._flags = replace(self._flags, ack=True)
        return self

    def flags(self, flags: TcpFlags) -> TcpBuilder:
        self._flags = replace(flags)
        return self

    def window_size(self, size: int) -> TcpBuilder:
        self._window_size = size
        return self

    def urgent_pointer(self, pointer: int) -> TcpBuilder:
        """Set the urgent pointer and the URG flag."""
        self._urgent_pointer = pointer
        self._flags = replace(self._flags, urg=True)
        return self

    def add_option(self, option: TcpOption) -> TcpBuilder:
        self._options.append(option)
        return self

    def payload(self, payload: bytes) -> TcpBuilder:
        self._payload = bytes(payload)
        return self

    def build(self) -> TcpPacket:
        """Assemble and validate the segment, raising on missing fields."""
        if self._src_port is None:
            raise InvalidFieldValueError("Source port not set")
        if self._dst_port is None:
            raise InvalidFieldValueError("Destination port not set")
        header = TcpHeader(
            src_port=self._src_port,
            dst_port=self._dst_port,
            sequence_number=self._sequence_number,
            acknowledgment_number=self._acknowledgment_number,
            flags=replace(self._flags),
            window_size=self._window_size,
            urgent_pointer=self._urgent_pointer,
            options=list(self._options),
        )
        packet = TcpPacket(header=header, payload=self._payload)
        packet.validate()
        return packet