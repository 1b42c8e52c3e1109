"""Hash functions and marked digest types."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import BinaryIO, ClassVar, TypeVar

from Crypto.Hash import RIPEMD160

from coinkit.ser import ByteFormat, read_exact

_D = TypeVar("_D", bound="MarkedDigest")


def sha256(data: bytes) -> bytes:
    """Single SHA-256."""
    return hashlib.sha256(bytes(data)).digest()


def hash256(data: bytes) -> bytes:
    """Double SHA-256."""
    return sha256(sha256(data))


def hash160(data: bytes) -> bytes:
    """RIPEMD-160 of SHA-256."""
    return RIPEMD160.new(sha256(data)).digest()


@dataclass(frozen=True)
class MarkedDigest(ByteFormat):
    """A fixed-size digest whose type records what it is a digest of."""

    digest: bytes

    SIZE: ClassVar[int] = 32

    def __post_init__(self) -> None:
        value = bytes(self.digest)
        if len(value) != self.SIZE:
            raise ValueError(
                f"{type(self).__name__} needs {self.SIZE} bytes, got {len(value)}"
            )
        object.__setattr__(self, "digest", value)

    def __bytes__(self) -> bytes:
        return self.digest

    @classmethod
    def zero(cls: type[_D]) -> _D:
        """Return the all-zero digest."""
        return cls(bytes(cls.SIZE))

    def reversed(self: _D) -> _D:
        """Return the digest with its byte order reversed."""
        return type(self)(self.digest[::-1])

    def serialized_length(self) -> int:
        return self.SIZE

    def write_to(self, stream: BinaryIO) -> int:
        stream.write(self.digest)
        return self.SIZE

    @classmethod
    def read_from(cls: type[_D], stream: BinaryIO) -> _D:
        return cls(read_exact(stream, cls.SIZE))


class Hash160Digest(MarkedDigest):
    """A 20-byte HASH160 digest."""

    SIZE: ClassVar[int] = 20


class Hash256Digest(MarkedDigest):
    """A 32-byte digest."""

    SIZE: ClassVar[int] = 32


class TXID(Hash256Digest):
    """A transaction ID."""


class WTXID(Hash256Digest):
    """A witness transaction ID."""


class BlockHash(Hash256Digest):
    """A block hash."""