"""Exception hierarchy for packet construction, validation and transmission."""

from __future__ import annotations


class PacketError(Exception):
    """Base class for every error raised by this package."""

    message = "Packet error"

    def __init__(self, *args: object) -> None:
        super().__init__(*(args or (self.message,)))


class _DetailedPacketError(PacketError):
    """A packet error that carries a human-readable detail string."""

    prefix = "Packet error"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"{self.prefix}: {detail}")


class InvalidLengthError(PacketError):
    """The packet length is invalid (too short or too long)."""

    message = "Invalid packet length"


class InvalidChecksumError(PacketError):
    """The packet checksum is invalid or verification failed."""

    message = "Invalid checksum"


class SerializationError(_DetailedPacketError):
    """An error occurred during packet serialization."""

    prefix = "Serialization error"


class InvalidFieldValueError(_DetailedPacketError):
    """A field in the packet holds an invalid value or is missing."""

    prefix = "Invalid field value"


class BufferTooSmallError(PacketError):
    """The provided buffer is too small to hold the packet."""

    message = "Buffer too small"


class InvalidProtocolVersionError(PacketError):
    """The protocol version is not supported or invalid."""

    message = "Invalid protocol version"


class InvalidHeaderFormatError(PacketError):
    """The packet header format is invalid or corrupted."""

    message = "Invalid header format"


class UnsupportedProtocolError(_DetailedPacketError):
    """The requested protocol is not supported."""

    prefix = "Unsupported protocol"


class InvalidOperationError(_DetailedPacketError):
    """The requested operation is invalid in the current state."""

    prefix = "Invalid operation"


class InvalidAddressError(PacketError):
    """A network address is invalid or malformed."""

    message = "Invalid address"


class WouldBlockError(PacketError):
    """A non-blocking operation would block."""

    message = "Operation would block"


class PacketIOError(PacketError):
    """An operating-system level I/O error occurred."""

    def __init__(self, error: OSError) -> None:
        self.error = error
        super().__init__(f"I/O error: {error}")