"""A builder for legacy and witness transactions."""

from __future__ import annotations

from collections.abc import Iterable

from coinkit.encoder import MAINNET_ENCODER, Address, AddressEncoder
from coinkit.legacy import LegacyTx
from coinkit.script import ScriptPubkey, ScriptSig
from coinkit.txin import Outpoint, TxIn
from coinkit.txout import TxOut
from coinkit.witness import WitnessTx


class TxBuilder:
    """Builds a transaction step by step; each step returns the builder.

    ``build`` produces a witness transaction when the builder started from one or
    witnesses were added, and a legacy transaction otherwise. The order of inputs
    and outputs may matter, e.g. for SIGHASH_SINGLE.
    """

    def __init__(self, encoder: AddressEncoder = MAINNET_ENCODER) -> None:
        self.encoder = encoder
        self._version = 0
        self._vin: list[TxIn] = []
        self._vout: list[TxOut] = []
        self._locktime = 0
        self._witnesses: list[tuple] = []
        self._produce_witness = False

    def _state(self) -> tuple:
        return (
            self.encoder,
            self._version,
            tuple(self._vin),
            tuple(self._vout),
            self._locktime,
            tuple(self._witnesses),
            self._produce_witness,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TxBuilder):
            return NotImplemented
        return self._state() == other._state()

    def __repr__(self) -> str:
        return (
            f"TxBuilder(version={self._version}, vin={self._vin!r}, vout={self._vout!r}, "
            f"locktime={self._locktime}, witnesses={self._witnesses!r}, "
            f"produce_witness={self._produce_witness})"
        )

    @classmethod
    def from_tx(
        cls, tx: LegacyTx | WitnessTx, encoder: AddressEncoder = MAINNET_ENCODER
    ) -> TxBuilder:
        """Start a builder holding the contents of an existing transaction."""
        builder = cls(encoder)
        builder._version = tx.version
        builder._vin = list(tx.vin)
        builder._vout = list(tx.vout)
        builder._locktime = tx.locktime
        builder._witnesses = [tuple(w) for w in tx.witnesses]
        builder._produce_witness = isinstance(tx, WitnessTx)
        return builder

    def version(self, version: int) -> TxBuilder:
        """Set the version number."""
        self._version = version
        return self

    def locktime(self, locktime: int) -> TxBuilder:
        """Set the locktime."""
        self._locktime = locktime
        return self

    def spend(self, prevout: Outpoint, sequence: int) -> TxBuilder:
        """Add an input spending ``prevout`` with an empty script_sig."""
        self._vin.append(TxIn(prevout, ScriptSig(), sequence))
        return self

    def pay(self, value: int, address: Address) -> TxBuilder:
        """Add an output paying ``value`` to ``address``."""
        return self.pay_script_pubkey(value, self.encoder.decode_address(address))

    def pay_script_pubkey(self, value: int, script_pubkey: ScriptPubkey) -> TxBuilder:
        """Add an output paying ``value`` to ``script_pubkey``."""
        self._vout.append(TxOut(value, script_pubkey))
        return self

    def op_return(self, message: bytes) -> TxBuilder:
        """Add an OP_RETURN output. Using this twice may make the tx non-standard."""
        self._vout.append(TxOut.op_return(message))
        return self

    def insert_input(self, index: int, txin: TxIn) -> TxBuilder:
        """Insert an input at ``index``, or at the end if ``index`` is past it."""
        self._vin.insert(min(index, len(self._vin)), txin)
        return self

    def extend_inputs(self, inputs: Iterable[TxIn]) -> TxBuilder:
        """Append inputs."""
        self._vin.extend(inputs)
        return self

    def insert_output(self, index: int, output: TxOut) -> TxBuilder:
        """Insert an output at ``index``, or at the end if ``index`` is past it."""
        self._vout.insert(min(index, len(self._vout)), output)
        return self

    def extend_outputs(self, outputs: Iterable[TxOut]) -> TxBuilder:
        """Append outputs."""
        self._vout.extend(outputs)
        return self

    def extend_witnesses(self, witnesses: Iterable[Iterable]) -> TxBuilder:
        """Append witnesses; the built transaction will be a witness transaction."""
        self._witnesses.extend(tuple(w) for w in witnesses)
        return self

    def insert_witness(self, index: int, txin: TxIn) -> TxBuilder:
        """Insert an input at ``index``, or at the end if ``index`` is past it."""
        self._vin.insert(min(index, len(self._vin)), txin)
        return self

    def set_script_sig(self, input_idx: int, script_sig: ScriptSig) -> TxBuilder:
        """Set the script_sig of an input; do nothing if there is no such input."""
        if 0 <= input_idx < len(self._vin):
            txin = self._vin[input_idx]
            self._vin[input_idx] = TxIn(txin.outpoint, ScriptSig(script_sig), txin.sequence)
        return self

    def build(self) -> LegacyTx | WitnessTx:
        """Build a witness transaction if witnesses are involved, else a legacy one."""
        if self._produce_witness or self._witnesses:
            return self.build_witness()
        return self.build_legacy()

    def build_legacy(self) -> LegacyTx:
        """Build a legacy transaction, discarding any witnesses."""
        return LegacyTx.create(self._version, self._vin, self._vout, self._locktime)

    def build_witness(self) -> WitnessTx:
        """Build a witness transaction."""
        return WitnessTx.create(
            self._version, self._vin, self._vout, self._witnesses, self._locktime
        )