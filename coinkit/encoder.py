"""Address types and per-network address encoders."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from coinkit.bases import (
    EncodingError,
    NullDataScript,
    UnknownScriptType,
    decode_base58check,
    decode_bech32,
    encode_base58check,
    encode_bech32,
)
from coinkit.script import ScriptKind, ScriptPubkey


class AddressKind(enum.Enum):
    """The standard address kinds."""

    PKH = "pkh"
    SH = "sh"
    WPKH = "wpkh"
    WSH = "wsh"


@dataclass(frozen=True)
class Address:
    """An address string tagged with its kind."""

    kind: AddressKind
    string: str

    def __str__(self) -> str:
        return self.string

    def to_descriptor(self) -> str:
        """Return the address as an ``addr()`` descriptor."""
        return f"addr({self.string})"


@dataclass(frozen=True)
class NetworkParams:
    """Address encoding parameters of a network."""

    hrp: str
    pkh_version: int
    sh_version: int


MAINNET_PARAMS = NetworkParams(hrp="bc", pkh_version=0x00, sh_version=0x05)
TESTNET_PARAMS = NetworkParams(hrp="tb", pkh_version=0x6F, sh_version=0xC4)
SIGNET_PARAMS = NetworkParams(hrp="sb", pkh_version=0x7D, sh_version=0x57)


@dataclass(frozen=True)
class AddressEncoder:
    """Converts between script pubkeys and addresses for one network."""

    params: NetworkParams

    def encode_address(self, script_pubkey: ScriptPubkey) -> Address:
        """Return the address of a standard script pubkey."""
        script_type = script_pubkey.standard_type()
        kind = script_type.kind
        if kind is ScriptKind.PKH:
            return Address(
                AddressKind.PKH,
                encode_base58check(self.params.pkh_version, bytes(script_type.payload)),
            )
        if kind is ScriptKind.SH:
            return Address(
                AddressKind.SH,
                encode_base58check(self.params.sh_version, bytes(script_type.payload)),
            )
        if kind is ScriptKind.WSH:
            return Address(AddressKind.WSH, encode_bech32(self.params.hrp, script_pubkey.items()))
        if kind is ScriptKind.WPKH:
            return Address(AddressKind.WPKH, encode_bech32(self.params.hrp, script_pubkey.items()))
        if kind is ScriptKind.OP_RETURN:
            raise NullDataScript("OP_RETURN scripts have no address")
        raise UnknownScriptType("non-standard script")

    def decode_address(self, address: Address) -> ScriptPubkey:
        """Return the script pubkey an address pays to."""
        if address.kind is AddressKind.PKH:
            digest = decode_base58check(self.params.pkh_version, address.string)
            return ScriptPubkey(b"\x76\xa9\x14" + digest + b"\x88\xac")
        if address.kind is AddressKind.SH:
            digest = decode_base58check(self.params.sh_version, address.string)
            return ScriptPubkey(b"\xa9\x14" + digest + b"\x87")
        return ScriptPubkey(decode_bech32(self.params.hrp, address.string))

    def string_to_address(self, string: str) -> Address:
        """Parse an address string, determining its kind."""
        if string.startswith(self.params.hrp):
            program = decode_bech32(self.params.hrp, string)
            if len(program) == 22:
                return Address(AddressKind.WPKH, string)
            if len(program) == 34:
                return Address(AddressKind.WSH, string)
            raise UnknownScriptType(f"unexpected witness program length {len(program)}")
        for kind, version in (
            (AddressKind.PKH, self.params.pkh_version),
            (AddressKind.SH, self.params.sh_version),
        ):
            try:
                decode_base58check(version, string)
            except EncodingError:
                continue
            return Address(kind, string)
        raise UnknownScriptType(f"unrecognised address {string!r}")


MAINNET_ENCODER = AddressEncoder(MAINNET_PARAMS)
TESTNET_ENCODER = AddressEncoder(TESTNET_PARAMS)
SIGNET_ENCODER = AddressEncoder(SIGNET_PARAMS)