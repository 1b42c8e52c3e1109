import io
import struct
from dataclasses import dataclass

import pytest

from coinkit.ser import (
    ByteFormat,
    SerError,
    compact_int_length,
    read_compact_int,
    read_exact,
    write_compact_int,
)


@dataclass
class _Pair(ByteFormat):
    first: int
    blob: bytes

    def serialized_length(self):
        return 4 + compact_int_length(len(self.blob)) + len(self.blob)

    def write_to(self, stream):
        data = struct.pack("<I", self.first) + write_compact_int(len(self.blob)) + self.blob
        return stream.write(data)

    @classmethod
    def read_from(cls, stream):
        first = struct.unpack("<I", read_exact(stream, 4))[0]
        blob = read_exact(stream, read_compact_int(stream))
        return cls(first, blob)


VALUES = [0, 1, 0xFC, 0xFD, 0xFFFF, 0x10000, 0xFFFF_FFFF, 1 << 32, (1 << 64) - 1]


@pytest.mark.parametrize("value", VALUES)
def test_compact_int_round_trip(value):
    encoded = write_compact_int(value)
    assert len(encoded) == compact_int_length(value)
    assert read_compact_int(io.BytesIO(encoded)) == value


def test_compact_int_wire_bytes():
    assert write_compact_int(0xFC) == b"\xfc"
    assert write_compact_int(0xFD) == b"\xfd\xfd\x00"
    assert write_compact_int(0x10000) == b"\xfe\x00\x00\x01\x00"


def test_compact_int_lengths_grow_monotonically():
    lengths = [compact_int_length(v) for v in VALUES]
    assert lengths == sorted(lengths)


@pytest.mark.parametrize("value", [-1, 1 << 64])
def test_compact_int_out_of_range(value):
    with pytest.raises(SerError):
        write_compact_int(value)


def test_read_compact_int_empty_stream():
    with pytest.raises(SerError):
        read_compact_int(io.BytesIO(b""))


def test_read_compact_int_truncated():
    with pytest.raises(SerError):
        read_compact_int(io.BytesIO(b"\xfe\x01"))


def test_read_exact_short():
    with pytest.raises(SerError):
        read_exact(io.BytesIO(b"ab"), 3)


def test_read_exact_returns_requested():
    stream = io.BytesIO(b"abcdef")
    assert read_exact(stream, 4) == b"abcd"
    assert stream.read() == b"ef"


def test_byte_format_round_trip():
    pair = _Pair(7, b"hello")
    data = ByteFormat.serialize(pair)
    assert data == b"\x07\x00\x00\x00\x05hello"
    assert len(data) == pair.serialized_length()
    assert read_compact_int(io.BytesIO(data[4:])) == 5
    assert _Pair.deserialize(data) == pair
    hex_str = ByteFormat.serialize_hex(pair)
    assert hex_str == data.hex()
    assert _Pair.deserialize_hex(hex_str) == pair


def test_deserialize_hex_rejects_bad_hex():
    pair = _Pair(3, b"xy")
    assert _Pair.deserialize_hex(ByteFormat.serialize_hex(pair)) == pair
    with pytest.raises(SerError):
        _Pair.deserialize_hex("zz")


def test_deserialize_truncated():
    data = ByteFormat.serialize(_Pair(1, b"abc"))
    assert len(data) == 8
    with pytest.raises(SerError):
        _Pair.deserialize(data[:-1])