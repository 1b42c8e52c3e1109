"""Transaction outputs."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import BinaryIO

from coinkit.script import ScriptPubkey, ScriptType
from coinkit.ser import ByteFormat, read_exact

_MAX_U64 = 0xFFFF_FFFF_FFFF_FFFF
_MAX_OP_RETURN = 75


@dataclass(frozen=True)
class TxOut(ByteFormat):
    """A transaction output: a value in satoshis and the script that locks it.

    The default output is the null output (maximum value, empty script) used in
    legacy sighash computation.
    """

    value: int = _MAX_U64
    script_pubkey: ScriptPubkey = field(default_factory=ScriptPubkey)

    def __post_init__(self) -> None:
        if not 0 <= self.value <= _MAX_U64:
            raise ValueError(f"value out of u64 range: {self.value}")
        if not isinstance(self.script_pubkey, ScriptPubkey):
            object.__setattr__(self, "script_pubkey", ScriptPubkey(self.script_pubkey))

    @classmethod
    def null(cls) -> TxOut:
        """Return the null output used in legacy sighash."""
        return cls(_MAX_U64, ScriptPubkey())

    @classmethod
    def op_return(cls, data: bytes) -> TxOut:
        """Return a zero-value OP_RETURN output; data beyond 75 bytes is discarded."""
        payload = bytes(data)[:_MAX_OP_RETURN]
        return cls(0, ScriptPubkey(bytes([0x6A, len(payload)]) + payload))

    def standard_type(self) -> ScriptType:
        """Return the standard type of the locking script."""
        return self.script_pubkey.standard_type()

    def extract_op_return_data(self) -> bytes | None:
        """Return the OP_RETURN payload, or None if this is not an OP_RETURN output."""
        return self.script_pubkey.extract_op_return_data()

    def serialized_length(self) -> int:
        return 8 + self.script_pubkey.serialized_length()

    def write_to(self, stream: BinaryIO) -> int:
        stream.write(struct.pack("<Q", self.value))
        return 8 + self.script_pubkey.write_to(stream)

    @classmethod
    def read_from(cls, stream: BinaryIO) -> TxOut:
        (value,) = struct.unpack("<Q", read_exact(stream, 8))
        return cls(value, ScriptPubkey.read_from(stream))