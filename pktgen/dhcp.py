"""DHCP messages, options and packet construction."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional

from .base import PacketBuilder, PacketHeader
from .errors import InvalidFieldValueError
from .ethernet import MacAddress
from .ip import Ipv4Address

_FIXED_LENGTH = 236
_MAGIC_COOKIE = bytes([99, 130, 83, 99])
_END_OPTION = 255
_BOOTREQUEST = 1
_HTYPE_ETHERNET = 1


class MessageType(IntEnum):
    """DHCP message types carried in the message type option."""

    DISCOVER = 1
    OFFER = 2
    REQUEST = 3
    DECLINE = 4
    ACK = 5
    NAK = 6
    RELEASE = 7
    INFORM = 8


class OptionCode(IntEnum):
    """DHCP option codes."""

    PAD = 0
    SUBNET_MASK = 1
    ROUTER = 3
    DOMAIN_NAME_SERVER = 6
    HOST_NAME = 12
    DOMAIN_NAME = 15
    INTERFACE_MTU = 26
    BROADCAST_ADDRESS = 28
    NTP_SERVERS = 42
    REQUESTED_IP_ADDRESS = 50
    IP_ADDRESS_LEASE_TIME = 51
    MESSAGE_TYPE = 53
    SERVER_IDENTIFIER = 54
    PARAMETER_REQUEST_LIST = 55
    MAX_DHCP_MESSAGE_SIZE = 57
    RENEWAL_TIME_VALUE = 58
    REBINDING_TIME_VALUE = 59
    CLIENT_IDENTIFIER = 61
    END = 255


@dataclass(frozen=True)
class DhcpOption:
    """A single code/length/data DHCP option."""

    code: OptionCode
    data: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "code", OptionCode(self.code))
        object.__setattr__(self, "data", bytes(self.data))

    @property
    def length(self) -> int:
        """The length byte written on the wire."""
        return len(self.data) & 0xFF

    @staticmethod
    def message_type(message_type: MessageType) -> DhcpOption:
        return DhcpOption(OptionCode.MESSAGE_TYPE, bytes([int(message_type)]))

    @staticmethod
    def requested_ip_address(addr: Ipv4Address) -> DhcpOption:
        return DhcpOption(OptionCode.REQUESTED_IP_ADDRESS, bytes(addr))

    @staticmethod
    def server_identifier(addr: Ipv4Address) -> DhcpOption:
        return DhcpOption(OptionCode.SERVER_IDENTIFIER, bytes(addr))

    @staticmethod
    def client_identifier(hardware_type: int, mac: MacAddress) -> DhcpOption:
        return DhcpOption(OptionCode.CLIENT_IDENTIFIER, bytes([hardware_type]) + bytes(mac))

    def as_bytes(self) -> bytes:
        """Return the option in wire format."""
        return bytes([int(self.code), self.length]) + self.data


def _zero_address() -> Ipv4Address:
    return Ipv4Address(bytes(4))


@dataclass
class DhcpHeader(PacketHeader):
    """The fixed BOOTP fields followed by the DHCP options."""

    op: int
    xid: int
    chaddr: MacAddress
    ciaddr: Ipv4Address = field(default_factory=_zero_address)
    yiaddr: Ipv4Address = field(default_factory=_zero_address)
    siaddr: Ipv4Address = field(default_factory=_zero_address)
    giaddr: Ipv4Address = field(default_factory=_zero_address)
    options: List[DhcpOption] = field(default_factory=list)
    htype: int = _HTYPE_ETHERNET
    hlen: int = 6
    hops: int = 0
    secs: int = 0
    flags: int = 0

    def header_length(self) -> int:
        options_length = sum(2 + len(option.data) for option in self.options)
        return _FIXED_LENGTH + len(_MAGIC_COOKIE) + options_length + 1

    def as_bytes(self) -> bytes:
        fixed = b"".join(
            (
                bytes([self.op, self.htype, self.hlen, self.hops]),
                self.xid.to_bytes(4, "big"),
                self.secs.to_bytes(2, "big"),
                self.flags.to_bytes(2, "big"),
                bytes(self.ciaddr),
                bytes(self.yiaddr),
                bytes(self.siaddr),
                bytes(self.giaddr),
                bytes(self.chaddr),
            )
        )
        fixed += bytes(_FIXED_LENGTH - len(fixed))
        options = b"".join(option.as_bytes() for option in self.options)
        return fixed + _MAGIC_COOKIE + options + bytes([_END_OPTION])


@dataclass
class DhcpPacket(PacketBuilder):
    """A complete DHCP message."""

    header: DhcpHeader

    @staticmethod
    def builder() -> DhcpBuilder:
        return DhcpBuilder()

    @staticmethod
    def discover(xid: int, chaddr: MacAddress) -> DhcpPacket:
        """Create a DHCP Discover message from the client *chaddr*."""
        return (
            DhcpBuilder()
            .op(_BOOTREQUEST)
            .xid(xid)
            .chaddr(chaddr)
            .add_option(DhcpOption.message_type(MessageType.DISCOVER))
            .add_option(DhcpOption.client_identifier(_HTYPE_ETHERNET, chaddr))
            .build()
        )

    @staticmethod
    def request(
        xid: int,
        chaddr: MacAddress,
        requested_ip: Ipv4Address,
        server_id: Ipv4Address,
    ) -> DhcpPacket:
        """Create a DHCP Request for *requested_ip* from server *server_id*."""
        return (
            DhcpBuilder()
            .op(_BOOTREQUEST)
            .xid(xid)
            .chaddr(chaddr)
            .add_option(DhcpOption.message_type(MessageType.REQUEST))
            .add_option(DhcpOption.client_identifier(_HTYPE_ETHERNET, chaddr))
            .add_option(DhcpOption.requested_ip_address(requested_ip))
            .add_option(DhcpOption.server_identifier(server_id))
            .build()
        )

    def build(self) -> bytes:
        return self.header.as_bytes()

    def length(self) -> int:
        return self.header.header_length()

    def validate(self) -> None:
        if not any(option.code == OptionCode.MESSAGE_TYPE for option in self.header.options):
            raise InvalidFieldValueError("DHCP message type option is required")


@dataclass
class DhcpBuilder:
    """Fluent builder for DHCP messages."""

    _op: Optional[int] = None
    _xid: Optional[int] = None
    _ciaddr: Optional[Ipv4Address] = None
    _yiaddr: Optional[Ipv4Address] = None
    _siaddr: Optional[Ipv4Address] = None
    _giaddr: Optional[Ipv4Address] = None
    _chaddr: Optional[MacAddress] = None
    _options: List[DhcpOption] = field(default_factory=list)

    def op(self, op: int) -> DhcpBuilder:
        self._op = op
        return self

    def xid(self, xid: int) -> DhcpBuilder:
        self._xid = xid
        return self

    def ciaddr(self, addr: Ipv4Address) -> DhcpBuilder:
        self._ciaddr = addr
        return self

    def yiaddr(self, addr: Ipv4Address) -> DhcpBuilder:
        self._yiaddr = addr
        return self

    def siaddr(self, addr: Ipv4Address) -> DhcpBuilder:
        self._siaddr = addr
        return self

    def giaddr(self, addr: Ipv4Address) -> DhcpBuilder:
        self._giaddr = addr
        return self

    def chaddr(self, addr: MacAddress) -> DhcpBuilder:
        self._chaddr = addr
        return self

    def add_option(self, option: DhcpOption) -> DhcpBuilder:
        self._options.append(option)
        return self

    def build(self) -> DhcpPacket:
        """Assemble and validate the message, raising on missing fields."""
        if self._op is None:
            raise InvalidFieldValueError("Operation code not set")
        if self._xid is None:
            raise InvalidFieldValueError("Transaction ID not set")
        if self._chaddr is None:
            raise InvalidFieldValueError("Client hardware address not set")
        packet = DhcpPacket(
            header=DhcpHeader(
                op=self._op,
                xid=self._xid,
                chaddr=self._chaddr,
                ciaddr=self._ciaddr or _zero_address(),
                yiaddr=self._yiaddr or _zero_address(),
                siaddr=self._siaddr or _zero_address(),
                giaddr=self._giaddr or _zero_address(),
                options=list(self._options),
            )
        )
        packet.validate()
        return packet