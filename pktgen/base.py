"""Abstract interfaces shared by all packet types, and the Internet checksum."""

from __future__ import annotations

from abc import ABC, abstractmethod


def internet_checksum(data: bytes) -> int:
    """Return the 16-bit ones' complement checksum of *data*.

    Words are read big-endian; an odd trailing byte is padded with zero.
    """
    if len(data) % 2:
        data = bytes(data) + b"\x00"
    total = sum(int.from_bytes(data[i : i + 2], "big") for i in range(0, len(data), 2))
    while total >> 16:
        total = (total & 0xFFFF) + (total >> 16)
    return ~total & 0xFFFF


class PacketBuilder(ABC):
    """Interface implemented by every complete packet."""

    @abstractmethod
    def build(self) -> bytes:
        """Serialize the packet to its wire form."""

    @abstractmethod
    def length(self) -> int:
        """Return the total length of the packet in bytes."""

    @abstractmethod
    def validate(self) -> None:
        """Check the packet, raising a PacketError if it is invalid."""


class PacketHeader(ABC):
    """Interface implemented by every protocol header."""

    @abstractmethod
    def header_length(self) -> int:
        """Return the header length in bytes."""

    @abstractmethod
    def as_bytes(self) -> bytes:
        """Serialize the header to its wire form."""


class Checksumable(ABC):
    """Mixin for headers protected by the Internet checksum."""

    @abstractmethod
    def as_bytes(self) -> bytes:
        """Serialize the data covered by the checksum."""

    def calculate_checksum(self) -> int:
        """Return the Internet checksum over the serialized header."""
        return internet_checksum(self.as_bytes())

    def verify_checksum(self) -> bool:
        """Return True if the serialized header checksums to zero."""
        return self.calculate_checksum() == 0