"""Binary serialization primitives shared by all wire types."""

from __future__ import annotations

import io
import struct
from abc import ABC, abstractmethod
from typing import BinaryIO, TypeVar

_T = TypeVar("_T", bound="ByteFormat")

_MAX_U64 = (1 << 64) - 1


class SerError(Exception):
    """Raised when data cannot be serialized or deserialized."""


def compact_int_length(value: int) -> int:
    """Return the number of bytes the compact-int encoding of ``value`` takes."""
    if value < 0 or value > _MAX_U64:
        raise SerError(f"compact int out of range: {value}")
    if value < 0xFD:
        return 1
    if value <= 0xFFFF:
        return 3
    if value <= 0xFFFF_FFFF:
        return 5
    return 9


def write_compact_int(value: int) -> bytes:
    """Encode ``value`` as a Bitcoin compact (var) int."""
    length = compact_int_length(value)
    if length == 1:
        return bytes([value])
    if length == 3:
        return b"\xfd" + struct.pack("<H", value)
    if length == 5:
        return b"\xfe" + struct.pack("<I", value)
    return b"\xff" + struct.pack("<Q", value)


def read_exact(stream: BinaryIO, size: int) -> bytes:
    """Read exactly ``size`` bytes from ``stream`` or raise ``SerError``."""
    data = stream.read(size)
    if len(data) != size:
        raise SerError(f"expected {size} bytes, got {len(data)}")
    return data


def read_compact_int(stream: BinaryIO) -> int:
    """Read a Bitcoin compact (var) int from ``stream``."""
    first = read_exact(stream, 1)[0]
    if first < 0xFD:
        return first
    fmt, size = {0xFD: ("<H", 2), 0xFE: ("<I", 4), 0xFF: ("<Q", 8)}[first]
    return struct.unpack(fmt, read_exact(stream, size))[0]


class ByteFormat(ABC):
    """A type with a canonical binary encoding."""

    @abstractmethod
    def serialized_length(self) -> int:
        """Return the length of the serialized form in bytes."""

    @abstractmethod
    def write_to(self, stream: BinaryIO) -> int:
        """Write the serialized form to ``stream`` and return the bytes written."""

    @classmethod
    @abstractmethod
    def read_from(cls: type[_T], stream: BinaryIO) -> _T:
        """Read an instance from ``stream``."""

    def serialize(self) -> bytes:
        """Return the serialized form as bytes."""
        buffer = io.BytesIO()
        self.write_to(buffer)
        return buffer.getvalue()

    def serialize_hex(self) -> str:
        """Return the serialized form as a lowercase hex string."""
        return self.serialize().hex()

    @classmethod
    def deserialize(cls: type[_T], data: bytes) -> _T:
        """Read an instance from a bytes-like object."""
        return cls.read_from(io.BytesIO(bytes(data)))

    @classmethod
    def deserialize_hex(cls: type[_T], hex_str: str) -> _T:
        """Read an instance from a hex string."""
        try:
            data = bytes.fromhex(hex_str)
        except ValueError as exc:
            raise SerError(f"invalid hex: {exc}") from exc
        return cls.deserialize(data)