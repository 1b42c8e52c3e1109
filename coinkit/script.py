"""Opaque script byte vectors and standard script type detection."""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass
from typing import BinaryIO, TypeVar, Union

from coinkit.hashes import Hash160Digest, Hash256Digest, hash160, sha256
from coinkit.ser import ByteFormat, compact_int_length, read_compact_int, read_exact, write_compact_int

_S = TypeVar("_S", bound="ScriptBytes")


@dataclass(frozen=True)
class ScriptBytes(ByteFormat):
    """A length-prefixed byte vector with no script semantics.

    Any script type can be built from bytes or from another script type.
    """

    data: bytes = b""

    def __post_init__(self) -> None:
        value = self.data
        if isinstance(value, int):
            raise TypeError("script data must be bytes-like, not int")
        if isinstance(value, ScriptBytes):
            value = value.data
        object.__setattr__(self, "data", bytes(value))

    @classmethod
    def null(cls: type[_S]) -> _S:
        """Return the empty script."""
        return cls(b"")

    def items(self) -> bytes:
        """Return the underlying bytes."""
        return self.data

    def __bytes__(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return len(self.data)

    def __getitem__(self, index):
        return self.data[index]

    def __iter__(self) -> Iterator[int]:
        return iter(self.data)

    def serialized_length(self) -> int:
        return compact_int_length(len(self.data)) + len(self.data)

    def write_to(self, stream: BinaryIO) -> int:
        encoded = write_compact_int(len(self.data)) + self.data
        stream.write(encoded)
        return len(encoded)

    @classmethod
    def read_from(cls: type[_S], stream: BinaryIO) -> _S:
        return cls(read_exact(stream, read_compact_int(stream)))


class Script(ScriptBytes):
    """A script used as the prevout script in sighash arguments."""


class ScriptSig(ScriptBytes):
    """The script_sig of a transaction input."""


class WitnessStackItem(ScriptBytes):
    """One item of an input's witness stack."""


class ScriptKind(enum.Enum):
    """Standard script kinds."""

    PKH = "pkh"
    SH = "sh"
    WPKH = "wpkh"
    WSH = "wsh"
    OP_RETURN = "op_return"
    NON_STANDARD = "non_standard"


@dataclass(frozen=True)
class ScriptType:
    """A script kind with its payload (hash or OP_RETURN data)."""

    kind: ScriptKind
    payload: Union[Hash160Digest, Hash256Digest, bytes, None] = None


class ScriptPubkey(ScriptBytes):
    """The locking script of a transaction output."""

    @classmethod
    def p2pkh(cls, key: bytes) -> ScriptPubkey:
        """Standard pay-to-pubkey-hash script from serialized public key bytes."""
        return cls(b"\x76\xa9\x14" + hash160(bytes(key)) + b"\x88\xac")

    @classmethod
    def p2wpkh(cls, key: bytes) -> ScriptPubkey:
        """Standard pay-to-witness-pubkey-hash script from serialized public key bytes."""
        return cls(b"\x00\x14" + hash160(bytes(key)))

    @classmethod
    def p2sh(cls, script: ScriptBytes) -> ScriptPubkey:
        """Standard pay-to-script-hash script."""
        return cls(b"\xa9\x14" + hash160(bytes(script)) + b"\x87")

    @classmethod
    def p2wsh(cls, script: ScriptBytes) -> ScriptPubkey:
        """Standard pay-to-witness-script-hash script."""
        return cls(b"\x00\x20" + sha256(bytes(script)))

    def extract_op_return_data(self) -> bytes | None:
        """Return the OP_RETURN payload, or None if this is not a small OP_RETURN."""
        data = self.data
        if len(data) < 2:
            return None
        if data[0] == 0x6A and data[1] <= 75 and data[1] == len(data) - 2:
            return data[2:]
        return None

    def standard_type(self) -> ScriptType:
        """Determine the standard type of this script."""
        op_return = self.extract_op_return_data()
        if op_return is not None:
            return ScriptType(ScriptKind.OP_RETURN, op_return)

        items = self.data
        size = len(items)
        if size == 0x19 and items[:3] == b"\x76\xa9\x14" and items[0x17:] == b"\x88\xac":
            return ScriptType(ScriptKind.PKH, Hash160Digest(items[3:23]))
        if size == 0x17 and items[:2] == b"\xa9\x14" and items[0x16:] == b"\x87":
            return ScriptType(ScriptKind.SH, Hash160Digest(items[2:22]))
        if size == 0x16 and items[:2] == b"\x00\x14":
            return ScriptType(ScriptKind.WPKH, Hash160Digest(items[2:22]))
        if size == 0x22 and items[:2] == b"\x00\x20":
            return ScriptType(ScriptKind.WSH, Hash256Digest(items[2:34]))
        return ScriptType(ScriptKind.NON_STANDARD)