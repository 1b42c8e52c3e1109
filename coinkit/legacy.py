"""Legacy (non-witness) transactions and their sighash."""

from __future__ import annotations

import struct
from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Any, BinaryIO

from coinkit.hashes import TXID, Hash256Digest, hash256
from coinkit.script import Script, ScriptSig
from coinkit.ser import ByteFormat, compact_int_length, read_compact_int, read_exact, write_compact_int
from coinkit.sighash import EmptyVin, EmptyVout, NoneUnsupported, Sighash, SighashSingleBug
from coinkit.txin import Outpoint, TxIn
from coinkit.txout import TxOut

_MAX_U32 = 0xFFFF_FFFF
_ANYONE_CAN_PAY = 0x80


@dataclass(frozen=True)
class LegacySighashArgs:
    """Arguments for the legacy sighash of one input.

    After signing the digest, the sighash flag byte must be appended to the signature.
    """

    index: int
    sighash_flag: Sighash
    prevout_script: Script

    @classmethod
    def from_witness_args(cls, args: Any) -> LegacySighashArgs:
        """Build legacy arguments from witness sighash arguments, dropping the value."""
        return cls(args.index, args.sighash_flag, Script(args.prevout_script))


@dataclass(frozen=True)
class LegacyTx(ByteFormat):
    """A legacy (non-witness) transaction."""

    version: int = 0
    vin: tuple[TxIn, ...] = ()
    vout: tuple[TxOut, ...] = ()
    locktime: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "vin", tuple(self.vin))
        object.__setattr__(self, "vout", tuple(self.vout))
        for name in ("version", "locktime"):
            value = getattr(self, name)
            if not 0 <= value <= _MAX_U32:
                raise ValueError(f"{name} out of u32 range: {value}")

    @classmethod
    def create(
        cls, version: int, vin: Iterable[TxIn], vout: Iterable[TxOut], locktime: int
    ) -> LegacyTx:
        """Build a transaction, requiring at least one input and one output."""
        inputs = tuple(vin)
        outputs = tuple(vout)
        if not inputs:
            raise EmptyVin()
        if not outputs:
            raise EmptyVout()
        return cls(version, inputs, outputs, locktime)

    @property
    def witnesses(self) -> tuple:
        """Legacy transactions carry no witnesses."""
        return ()

    def as_legacy(self) -> LegacyTx:
        """Return this transaction as a legacy transaction."""
        return self

    def txid(self) -> TXID:
        """Return the transaction ID (internal byte order)."""
        return TXID(hash256(self.serialize()))

    def txout_from_outpoint(self, outpoint: Outpoint) -> TxOut | None:
        """Return the output an outpoint refers to, if it belongs to this transaction."""
        if outpoint.txid == self.txid() and outpoint.idx < len(self.vout):
            return self.vout[outpoint.idx]
        return None

    def _sighash_prep(self, index: int, prevout_script: Script) -> LegacyTx:
        vin = tuple(
            replace(
                txin,
                script_sig=ScriptSig(prevout_script.items()) if i == index else ScriptSig(),
            )
            for i, txin in enumerate(self.vin)
        )
        return replace(self, vin=vin)

    @staticmethod
    def _sighash_single(copy_tx: LegacyTx, index: int) -> LegacyTx:
        vout = tuple(TxOut.null() for _ in range(index)) + (copy_tx.vout[index],)
        vin = tuple(
            txin if i == index else replace(txin, sequence=0)
            for i, txin in enumerate(copy_tx.vin)
        )
        return replace(copy_tx, vin=vin, vout=vout)

    @staticmethod
    def _sighash_anyone_can_pay(copy_tx: LegacyTx, index: int) -> LegacyTx:
        return replace(copy_tx, vin=(copy_tx.vin[index],))

    def write_sighash_preimage(self, stream: BinaryIO, args: LegacySighashArgs) -> None:
        """Write the legacy sighash preimage for ``args`` to ``stream``."""
        flag = Sighash(args.sighash_flag)
        if flag in (Sighash.NONE, Sighash.NONE_ACP):
            raise NoneUnsupported()

        copy_tx = self._sighash_prep(args.index, args.prevout_script)
        if flag in (Sighash.SINGLE, Sighash.SINGLE_ACP):
            if args.index >= len(self.vout):
                raise SighashSingleBug()
            copy_tx = self._sighash_single(copy_tx, args.index)

        if flag & _ANYONE_CAN_PAY:
            copy_tx = self._sighash_anyone_can_pay(copy_tx, args.index)

        copy_tx.write_to(stream)
        stream.write(struct.pack("<I", int(flag)))

    def sighash(self, args: LegacySighashArgs) -> Hash256Digest:
        """Return the legacy sighash digest for ``args``."""
        import io

        buffer = io.BytesIO()
        self.write_sighash_preimage(buffer, args)
        return Hash256Digest(hash256(buffer.getvalue()))

    def serialized_length(self) -> int:
        return (
            4
            + compact_int_length(len(self.vin))
            + sum(txin.serialized_length() for txin in self.vin)
            + compact_int_length(len(self.vout))
            + sum(txout.serialized_length() for txout in self.vout)
            + 4
        )

    def write_to(self, stream: BinaryIO) -> int:
        written = 0
        head = struct.pack("<I", self.version) + write_compact_int(len(self.vin))
        stream.write(head)
        written += len(head)
        for txin in self.vin:
            written += txin.write_to(stream)
        count = write_compact_int(len(self.vout))
        stream.write(count)
        written += len(count)
        for txout in self.vout:
            written += txout.write_to(stream)
        stream.write(struct.pack("<I", self.locktime))
        return written + 4

    @classmethod
    def read_from(cls, stream: BinaryIO) -> LegacyTx:
        (version,) = struct.unpack("<I", read_exact(stream, 4))
        vin = tuple(TxIn.read_from(stream) for _ in range(read_compact_int(stream)))
        vout = tuple(TxOut.read_from(stream) for _ in range(read_compact_int(stream)))
        (locktime,) = struct.unpack("<I", read_exact(stream, 4))
        return cls(version, vin, vout, locktime)