"""Unspent outputs and the information needed to sign a spend of them."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from coinkit.hashes import hash160, sha256
from coinkit.legacy import LegacySighashArgs, LegacyTx
from coinkit.script import Script, ScriptKind, ScriptPubkey, ScriptType
from coinkit.sighash import Sighash
from coinkit.txin import Outpoint
from coinkit.txout import TxOut
from coinkit.witness import WitnessSighashArgs, WitnessTx


class SpendScriptStatus(enum.Enum):
    """Whether a script pubkey needs a spend script, and whether it is known."""

    NONE = "none"
    MISSING = "missing"
    KNOWN = "known"


@dataclass(frozen=True)
class SpendScript:
    """The redeem or witness script of an output, if it has one."""

    status: SpendScriptStatus
    script: Script | None = None

    def __post_init__(self) -> None:
        if self.status is SpendScriptStatus.KNOWN:
            if self.script is None:
                raise ValueError("a known spend script needs a script")
            if not isinstance(self.script, Script):
                object.__setattr__(self, "script", Script(self.script))
        elif self.script is not None:
            raise ValueError(f"a {self.status.value} spend script carries no script")

    @classmethod
    def from_script_pubkey(cls, script_pubkey: ScriptPubkey) -> SpendScript:
        """Return MISSING for SH and WSH script pubkeys, NONE for all others."""
        kind = script_pubkey.standard_type().kind
        if kind in (ScriptKind.SH, ScriptKind.WSH):
            return cls(SpendScriptStatus.MISSING)
        return cls(SpendScriptStatus.NONE)


@dataclass
class Utxo:
    """An unspent output with what is needed to sign a spend of it.

    A spend script given for a script pubkey that needs none is discarded.
    """

    outpoint: Outpoint
    value: int
    script_pubkey: ScriptPubkey
    spend_script: SpendScript = field(
        default_factory=lambda: SpendScript(SpendScriptStatus.MISSING)
    )

    def __post_init__(self) -> None:
        if not isinstance(self.script_pubkey, ScriptPubkey):
            self.script_pubkey = ScriptPubkey(self.script_pubkey)
        required = SpendScript.from_script_pubkey(self.script_pubkey)
        if required.status is SpendScriptStatus.NONE:
            self.spend_script = required

    @classmethod
    def from_tx_output(cls, tx: LegacyTx | WitnessTx, idx: int) -> Utxo:
        """Build a UTXO from output ``idx`` of a transaction."""
        output = tx.vout[idx]
        return cls(
            Outpoint(tx.txid(), idx),
            output.value,
            output.script_pubkey,
            SpendScript.from_script_pubkey(output.script_pubkey),
        )

    @classmethod
    def from_output_and_outpoint(cls, output: TxOut, outpoint: Outpoint) -> Utxo:
        """Build a UTXO from an output and the outpoint that identifies it."""
        return cls(
            outpoint,
            output.value,
            output.script_pubkey,
            SpendScript.from_script_pubkey(output.script_pubkey),
        )

    def signing_script(self) -> Script | None:
        """Return the script to sign, or None if it is not known.

        This is the spend script if known, the script pubkey for PKH, and the
        equivalent PKH script for WPKH.
        """
        status = self.spend_script.status
        if status is SpendScriptStatus.KNOWN:
            return self.spend_script.script
        if status is SpendScriptStatus.MISSING:
            return None
        script_type = self.script_pubkey.standard_type()
        if script_type.kind is ScriptKind.PKH:
            return Script(self.script_pubkey.items())
        if script_type.kind is ScriptKind.WPKH:
            return Script(b"\x76\xa9\x14" + bytes(script_type.payload) + b"\x88\xac")
        return None

    def standard_type(self) -> ScriptType:
        """Return the standard type of the script pubkey."""
        return self.script_pubkey.standard_type()

    def set_spend_script(self, script: Script) -> bool:
        """Record the spend script if its hash matches the script pubkey.

        Returns True on success. Always False for PKH and WPKH outputs.
        """
        script = Script(script)
        script_type = self.standard_type()
        if script_type.kind is ScriptKind.SH:
            matches = bytes(script_type.payload) == hash160(script.items())
        elif script_type.kind is ScriptKind.WSH:
            matches = bytes(script_type.payload) == sha256(script.items())
        else:
            return False
        if matches:
            self.spend_script = SpendScript(SpendScriptStatus.KNOWN, script)
        return matches

    def sighash_args(self, index: int, flag: Sighash) -> LegacySighashArgs | None:
        """Return legacy sighash arguments, or None if the signing script is unknown."""
        script = self.signing_script()
        if script is None:
            return None
        return LegacySighashArgs(index, flag, script)

    def witness_sighash_args(self, index: int, flag: Sighash) -> WitnessSighashArgs | None:
        """Return BIP143 sighash arguments, or None if the signing script is unknown."""
        script = self.signing_script()
        if script is None:
            return None
        return WitnessSighashArgs(index, flag, script, self.value)