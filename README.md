# pktgen

A small library for building network packets byte by byte: Ethernet frames,
IPv4 packets, TCP segments, UDP datagrams, ICMP messages, ARP and DHCP
packets. Each protocol comes with a fluent builder that checks required
fields, and every packet can be validated and serialised to wire format.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

| Module             | Contents                                                        |
|--------------------|-----------------------------------------------------------------|
| `pktgen.base`      | `PacketBuilder`, `PacketHeader`, `Checksumable`, `internet_checksum` |
| `pktgen.errors`    | `PacketError` and its subclasses                                |
| `pktgen.ethernet`  | `MacAddress`, `EtherType`, `EthernetHeader`, `EthernetPacket`, `EthernetBuilder` |
| `pktgen.ip`        | `IpProtocol`, `Ipv4Address`, `Ipv4Flags`, `Ipv4Header`, `Ipv4Packet`, `Ipv4Builder` |
| `pktgen.tcp`       | `TcpFlags`, `TcpOption`, `TcpHeader`, `TcpPacket`, `TcpBuilder` |
| `pktgen.udp`       | `UdpHeader`, `UdpPacket`, `UdpBuilder`                          |
| `pktgen.icmp`      | `IcmpType`, `DestUnreachableCode`, `IcmpHeader`, `IcmpPacket`, `IcmpBuilder` |
| `pktgen.arp`       | `HardwareType`, `Operation`, `ArpHeader`, `ArpPacket`, `ArpBuilder` |
| `pktgen.dhcp`      | `MessageType`, `OptionCode`, `DhcpOption`, `DhcpHeader`, `DhcpPacket`, `DhcpBuilder` |

## Building packets

Every builder is reached from its packet class with `builder()`. Setters
return the builder, and `build()` on the builder returns the packet or raises
a `PacketError` subclass when a required field is missing or the packet is
invalid. On the packet, `build()` returns its bytes, `length()` its size and
`validate()` raises if it breaks a limit.

```python
from pktgen.ethernet import EtherType, EthernetPacket, MacAddress

frame = (
    EthernetPacket.builder()
    .src_mac(MacAddress(bytes([0x02, 0x00, 0x00, 0x00, 0x00, 0x01])))
    .dst_mac(MacAddress(bytes([0x02, 0x00, 0x00, 0x00, 0x00, 0x02])))
    .ether_type(EtherType.IPV4)
    .payload(b"\x01\x02\x03\x04")
    .build()
)
frame.length()        # 60: payloads shorter than 46 bytes are zero-padded
data = frame.build()  # bytes
```

Ethernet payloads over 1500 bytes raise `InvalidLengthError`.

```python
from pktgen.ip import IpProtocol, Ipv4Address, Ipv4Flags, Ipv4Packet
from pktgen.tcp import TcpFlags, TcpOption, TcpPacket

segment = (
    TcpPacket.builder()
    .src_port(12345)
    .dst_port(80)
    .sequence(1000)
    .flags(TcpFlags(syn=True))
    .add_option(TcpOption.maximum_segment_size(1460))
    .build()
)

packet = (
    Ipv4Packet.builder()
    .protocol(IpProtocol.TCP)
    .src_addr(Ipv4Address(bytes([192, 168, 1, 1])))
    .dst_addr(Ipv4Address(bytes([192, 168, 1, 2])))
    .flags(Ipv4Flags(dont_fragment=True))
    .ttl(64)
    .payload(segment.build())
    .build()
)
```

The IPv4 builder defaults to TTL 64 with the don't-fragment flag set, and
fills in the header's total length. The TCP builder defaults to a window of
65535; `acknowledgment()` also sets the ACK flag and `urgent_pointer()` the
URG flag. TCP options are padded to a 4-byte boundary and the data offset
follows from them. UDP datagrams carry their length in the header.

`MacAddress` takes exactly six bytes and `Ipv4Address` exactly four; anything
else raises `InvalidAddressError`. `str()` gives `02:00:00:00:00:01` and
`192.168.1.1` forms.

Shortcuts exist for common messages:

```python
from pktgen.arp import ArpPacket
from pktgen.dhcp import DhcpPacket
from pktgen.ethernet import MacAddress
from pktgen.icmp import IcmpPacket
from pktgen.ip import Ipv4Address

mac = MacAddress(bytes([0x02, 0x00, 0x00, 0x00, 0x00, 0x01]))

ping = IcmpPacket.echo_request(1, 1, b"Hello, World!")
pong = IcmpPacket.echo_reply(1, 1, b"Hello, World!")
who_has = ArpPacket.request(mac, Ipv4Address(bytes([192, 168, 1, 1])),
                            Ipv4Address(bytes([192, 168, 1, 2])))
discover = DhcpPacket.discover(0x12345678, mac)
```

`ArpPacket.request` leaves the target hardware address zeroed;
`ArpPacket.reply` takes it as an argument. DHCP packets always end with the
magic cookie, the options and an end option, and a DHCP packet without a
message type option raises `InvalidFieldValueError`. `DhcpOption` offers
`message_type`, `requested_ip_address`, `server_identifier` and
`client_identifier` constructors.

ICMP echo messages accept payloads up to 65507 bytes, other ICMP types up to
1500; the check happens in `validate()`, not in the builder.

## Checksums

Headers that carry a checksum (`Ipv4Header`, `TcpHeader`, `UdpHeader`,
`IcmpHeader`) offer `calculate_checksum()` and `verify_checksum()`, computed
over the header bytes alone. `pktgen.base.internet_checksum` computes the
16-bit ones'-complement checksum over any bytes. Checksums are not written
into the headers automatically.

## Errors

All errors derive from `pktgen.errors.PacketError`, for example
`InvalidFieldValueError` for a missing field, `InvalidLengthError` for an
oversized payload, `InvalidAddressError` for a malformed address and
`UnsupportedProtocolError` for unsupported ARP types. Errors that carry a
message keep it in `detail`.

## What the package does not do

The package builds and serialises packets only. It does not open sockets,
send or receive packets, or parse bytes back into packets.