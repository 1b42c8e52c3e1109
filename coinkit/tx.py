"""Reading transactions of either kind, and operations common to both."""

from __future__ import annotations

import io
from typing import BinaryIO, Union

from coinkit.hashes import Hash256Digest
from coinkit.legacy import LegacySighashArgs, LegacyTx
from coinkit.ser import SerError, read_exact
from coinkit.sighash import WrongSighashArgs
from coinkit.witness import WitnessSighashArgs, WitnessTx

BitcoinTx = Union[LegacyTx, WitnessTx]

_SEGWIT_FLAG = b"\x00\x01"


class _PrefixedStream:
    """A reader that yields ``prefix`` before the rest of ``stream``."""

    def __init__(self, prefix: bytes, stream: BinaryIO) -> None:
        self._prefix = prefix
        self._stream = stream

    def read(self, size: int = -1) -> bytes:
        if size is None or size < 0:
            data = self._prefix + self._stream.read()
            self._prefix = b""
            return data
        head = self._prefix[:size]
        self._prefix = self._prefix[size:]
        if len(head) < size:
            head += self._stream.read(size - len(head))
        return head


def read_tx(stream: BinaryIO) -> BitcoinTx:
    """Read a transaction, choosing witness or legacy from the segwit marker."""
    tag = read_exact(stream, 6)
    chained = _PrefixedStream(tag, stream)
    if tag[4:6] == _SEGWIT_FLAG:
        return WitnessTx.read_from(chained)
    return LegacyTx.read_from(chained)


def parse_tx(data: bytes) -> BitcoinTx:
    """Parse a transaction of either kind from bytes."""
    return read_tx(io.BytesIO(bytes(data)))


def parse_tx_hex(hex_str: str) -> BitcoinTx:
    """Parse a transaction of either kind from a hex string."""
    try:
        data = bytes.fromhex(hex_str)
    except ValueError as exc:
        raise SerError(f"invalid hex: {exc}") from exc
    return parse_tx(data)


def to_legacy(tx: BitcoinTx) -> LegacyTx:
    """Return the transaction as a legacy transaction, dropping any witnesses."""
    return tx.as_legacy()


def to_witness(tx: BitcoinTx) -> WitnessTx:
    """Return the transaction as a witness transaction, never dropping information."""
    if isinstance(tx, WitnessTx):
        return tx
    return WitnessTx.from_legacy(tx)


def tx_sighash(
    tx: BitcoinTx, args: WitnessSighashArgs | LegacySighashArgs
) -> Hash256Digest:
    """Return the sighash of a transaction of either kind.

    Witness transactions use BIP143 and need ``WitnessSighashArgs``; legacy
    transactions use the legacy algorithm, ignoring the prevout value.
    """
    if isinstance(tx, WitnessTx):
        if not isinstance(args, WitnessSighashArgs):
            raise WrongSighashArgs()
        return tx.sighash(args)
    if isinstance(args, LegacySighashArgs):
        return tx.sighash(args)
    return tx.sighash(LegacySighashArgs.from_witness_args(args))