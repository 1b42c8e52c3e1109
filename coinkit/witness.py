"""Witness (segwit) transactions and their BIP143 sighash."""

from __future__ import annotations

import io
import struct
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import BinaryIO

from coinkit.hashes import TXID, WTXID, Hash256Digest, hash256
from coinkit.legacy import LegacySighashArgs, LegacyTx
from coinkit.script import Script, WitnessStackItem
from coinkit.ser import ByteFormat, compact_int_length, read_compact_int, read_exact, write_compact_int
from coinkit.sighash import BadWitnessFlag, NoneUnsupported, Sighash, SighashSingleBug
from coinkit.txin import Outpoint, TxIn
from coinkit.txout import TxOut

Witness = tuple[WitnessStackItem, ...]

_ANYONE_CAN_PAY = 0x80
_SEGWIT_FLAG = b"\x00\x01"


def _to_witness(items: Iterable) -> Witness:
    return tuple(
        item if isinstance(item, WitnessStackItem) else WitnessStackItem(item)
        for item in items
    )


@dataclass(frozen=True)
class WitnessSighashArgs:
    """Arguments for the BIP143 sighash of one input.

    After signing the digest, the sighash flag byte must be appended to the signature.
    """

    index: int
    sighash_flag: Sighash
    prevout_script: Script
    prevout_value: int


@dataclass(frozen=True)
class WitnessTx(ByteFormat):
    """A transaction carrying one witness per input."""

    legacy_tx: LegacyTx = field(default_factory=LegacyTx)
    witnesses: tuple[Witness, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "witnesses", tuple(_to_witness(w) for w in self.witnesses)
        )

    @classmethod
    def create(
        cls,
        version: int,
        vin: Iterable[TxIn],
        vout: Iterable[TxOut],
        witnesses: Iterable[Iterable],
        locktime: int,
    ) -> WitnessTx:
        """Build a witness transaction.

        The witnesses are trimmed or padded with empty witnesses to match the inputs.
        """
        inputs = tuple(vin)
        wits = [_to_witness(w) for w in witnesses][: len(inputs)]
        wits.extend(() for _ in range(len(inputs) - len(wits)))
        legacy_tx = LegacyTx.create(version, inputs, vout, locktime)
        return cls(legacy_tx, tuple(wits))

    @classmethod
    def from_legacy(cls, legacy_tx: LegacyTx) -> WitnessTx:
        """Wrap a legacy transaction, giving every input an empty witness."""
        return cls(legacy_tx, tuple(() for _ in legacy_tx.vin))

    @property
    def version(self) -> int:
        return self.legacy_tx.version

    @property
    def vin(self) -> tuple[TxIn, ...]:
        return self.legacy_tx.vin

    @property
    def vout(self) -> tuple[TxOut, ...]:
        return self.legacy_tx.vout

    @property
    def locktime(self) -> int:
        return self.legacy_tx.locktime

    def as_legacy(self) -> LegacyTx:
        """Return the transaction without its witnesses."""
        return self.legacy_tx

    def txid(self) -> TXID:
        """Return the transaction ID, which excludes witnesses."""
        return self.legacy_tx.txid()

    def wtxid(self) -> WTXID:
        """Return the witness transaction ID."""
        return WTXID(hash256(self.serialize()))

    def txout_from_outpoint(self, outpoint: Outpoint) -> TxOut | None:
        """Return the output an outpoint refers to, if it belongs to this transaction."""
        return self.legacy_tx.txout_from_outpoint(outpoint)

    def write_legacy_sighash_preimage(self, stream: BinaryIO, args: LegacySighashArgs) -> None:
        """Write the legacy sighash preimage to ``stream``."""
        self.legacy_tx.write_sighash_preimage(stream, args)

    def legacy_sighash(self, args: LegacySighashArgs) -> Hash256Digest:
        """Return the legacy sighash digest."""
        return self.legacy_tx.sighash(args)

    def _hash_prevouts(self, flag: Sighash) -> Hash256Digest:
        if flag & _ANYONE_CAN_PAY:
            return Hash256Digest.zero()
        data = b"".join(txin.outpoint.serialize() for txin in self.vin)
        return Hash256Digest(hash256(data))

    def _hash_sequence(self, flag: Sighash) -> Hash256Digest:
        if flag == Sighash.SINGLE or flag & _ANYONE_CAN_PAY:
            return Hash256Digest.zero()
        data = b"".join(struct.pack("<I", txin.sequence) for txin in self.vin)
        return Hash256Digest(hash256(data))

    def _hash_outputs(self, index: int, flag: Sighash) -> Hash256Digest:
        if flag in (Sighash.ALL, Sighash.ALL_ACP):
            data = b"".join(txout.serialize() for txout in self.vout)
            return Hash256Digest(hash256(data))
        if flag in (Sighash.SINGLE, Sighash.SINGLE_ACP):
            return Hash256Digest(hash256(self.vout[index].serialize()))
        return Hash256Digest.zero()

    def write_witness_sighash_preimage(self, stream: BinaryIO, args: WitnessSighashArgs) -> None:
        """Write the BIP143 sighash preimage for ``args`` to ``stream``."""
        flag = Sighash(args.sighash_flag)
        if flag in (Sighash.NONE, Sighash.NONE_ACP):
            raise NoneUnsupported()
        if flag in (Sighash.SINGLE, Sighash.SINGLE_ACP) and args.index >= len(self.vout):
            raise SighashSingleBug()

        txin = self.vin[args.index]
        stream.write(struct.pack("<I", self.version))
        self._hash_prevouts(flag).write_to(stream)
        self._hash_sequence(flag).write_to(stream)
        txin.outpoint.write_to(stream)
        Script(args.prevout_script).write_to(stream)
        stream.write(struct.pack("<Q", args.prevout_value))
        stream.write(struct.pack("<I", txin.sequence))
        self._hash_outputs(args.index, flag).write_to(stream)
        stream.write(struct.pack("<I", self.locktime))
        stream.write(struct.pack("<I", int(flag)))

    def witness_sighash(self, args: WitnessSighashArgs) -> Hash256Digest:
        """Return the BIP143 sighash digest for ``args``."""
        buffer = io.BytesIO()
        self.write_witness_sighash_preimage(buffer, args)
        return Hash256Digest(hash256(buffer.getvalue()))

    def write_sighash_preimage(self, stream: BinaryIO, args: WitnessSighashArgs) -> None:
        """Write the BIP143 sighash preimage for ``args`` to ``stream``."""
        self.write_witness_sighash_preimage(stream, args)

    def sighash(self, args: WitnessSighashArgs) -> Hash256Digest:
        """Return the BIP143 sighash digest for ``args``."""
        return self.witness_sighash(args)

    def serialized_length(self) -> int:
        length = 4 + len(_SEGWIT_FLAG)
        length += compact_int_length(len(self.vin))
        length += sum(txin.serialized_length() for txin in self.vin)
        length += compact_int_length(len(self.vout))
        length += sum(txout.serialized_length() for txout in self.vout)
        for witness in self.witnesses:
            length += compact_int_length(len(witness))
            length += sum(item.serialized_length() for item in witness)
        return length + 4

    def write_to(self, stream: BinaryIO) -> int:
        head = struct.pack("<I", self.version) + _SEGWIT_FLAG + write_compact_int(len(self.vin))
        stream.write(head)
        written = len(head)
        for txin in self.vin:
            written += txin.write_to(stream)
        count = write_compact_int(len(self.vout))
        stream.write(count)
        written += len(count)
        for txout in self.vout:
            written += txout.write_to(stream)
        for witness in self.witnesses:
            count = write_compact_int(len(witness))
            stream.write(count)
            written += len(count)
            for item in witness:
                written += item.write_to(stream)
        stream.write(struct.pack("<I", self.locktime))
        return written + 4

    @classmethod
    def read_from(cls, stream: BinaryIO) -> WitnessTx:
        (version,) = struct.unpack("<I", read_exact(stream, 4))
        flag = read_exact(stream, 2)
        if flag != _SEGWIT_FLAG:
            raise BadWitnessFlag(flag)
        vin = tuple(TxIn.read_from(stream) for _ in range(read_compact_int(stream)))
        vout = tuple(TxOut.read_from(stream) for _ in range(read_compact_int(stream)))
        witnesses = tuple(
            tuple(WitnessStackItem.read_from(stream) for _ in range(read_compact_int(stream)))
            for _ in vin
        )
        (locktime,) = struct.unpack("<I", read_exact(stream, 4))
        return cls(LegacyTx(version, vin, vout, locktime), witnesses)