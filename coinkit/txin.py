"""Outpoints and transaction inputs."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field, replace
from typing import BinaryIO

from coinkit.hashes import TXID
from coinkit.script import ScriptSig
from coinkit.ser import ByteFormat, read_exact

_MAX_U32 = 0xFFFF_FFFF


def _check_u32(name: str, value: int) -> None:
    if not 0 <= value <= _MAX_U32:
        raise ValueError(f"{name} out of u32 range: {value}")


@dataclass(frozen=True)
class Outpoint(ByteFormat):
    """A reference to a transaction output: the creating txid and the output index.

    The default outpoint is the null outpoint used by coinbase inputs: an all-zero
    txid and index 0xffffffff.
    """

    txid: TXID = field(default_factory=TXID.zero)
    idx: int = _MAX_U32

    def __post_init__(self) -> None:
        if not isinstance(self.txid, TXID):
            object.__setattr__(self, "txid", TXID(bytes(self.txid)))
        _check_u32("idx", self.idx)

    @classmethod
    def null(cls) -> Outpoint:
        """Return the null outpoint used in coinbase inputs."""
        return cls(TXID.zero(), _MAX_U32)

    def txid_be_hex(self) -> str:
        """Return the txid in big-endian hex, as shown by block explorers."""
        return self.txid.reversed().serialize_hex()

    @classmethod
    def from_explorer_format(cls, txid_be: TXID, idx: int) -> Outpoint:
        """Build an outpoint from a big-endian (explorer format) txid and an index."""
        return cls(TXID(bytes(txid_be)).reversed(), idx)

    def serialized_length(self) -> int:
        return 36

    def write_to(self, stream: BinaryIO) -> int:
        written = self.txid.write_to(stream)
        stream.write(struct.pack("<I", self.idx))
        return written + 4

    @classmethod
    def read_from(cls, stream: BinaryIO) -> Outpoint:
        txid = TXID.read_from(stream)
        (idx,) = struct.unpack("<I", read_exact(stream, 4))
        return cls(txid, idx)


@dataclass(frozen=True)
class TxIn(ByteFormat):
    """A transaction input: the outpoint spent, its script_sig and its sequence number."""

    outpoint: Outpoint = field(default_factory=Outpoint)
    script_sig: ScriptSig = field(default_factory=ScriptSig)
    sequence: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.script_sig, ScriptSig):
            object.__setattr__(self, "script_sig", ScriptSig(self.script_sig))
        _check_u32("sequence", self.sequence)

    def unsigned(self) -> TxIn:
        """Return a copy of this input with an empty script_sig."""
        return replace(self, script_sig=ScriptSig())

    def serialized_length(self) -> int:
        return self.outpoint.serialized_length() + self.script_sig.serialized_length() + 4

    def write_to(self, stream: BinaryIO) -> int:
        written = self.outpoint.write_to(stream)
        written += self.script_sig.write_to(stream)
        stream.write(struct.pack("<I", self.sequence))
        return written + 4

    @classmethod
    def read_from(cls, stream: BinaryIO) -> TxIn:
        outpoint = Outpoint.read_from(stream)
        script_sig = ScriptSig.read_from(stream)
        (sequence,) = struct.unpack("<I", read_exact(stream, 4))
        return cls(outpoint, script_sig, sequence)