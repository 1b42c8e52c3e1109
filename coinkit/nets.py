"""Bitcoin network definitions: the main entry point to the library."""

from __future__ import annotations

from dataclasses import dataclass

from coinkit.builder import TxBuilder
from coinkit.encoder import (
    MAINNET_ENCODER,
    SIGNET_ENCODER,
    TESTNET_ENCODER,
    Address,
    AddressEncoder,
)
from coinkit.legacy import LegacyTx
from coinkit.script import ScriptPubkey
from coinkit.tx import parse_tx_hex
from coinkit.witness import WitnessTx


@dataclass(frozen=True)
class Network:
    """A Bitcoin network, distinguished by its address encoder."""

    name: str
    encoder: AddressEncoder

    def tx_builder(self) -> TxBuilder:
        """Return an empty transaction builder for this network."""
        return TxBuilder(self.encoder)

    def builder_from_tx(self, tx: LegacyTx | WitnessTx) -> TxBuilder:
        """Return a builder holding the contents of ``tx``."""
        return TxBuilder.from_tx(tx, self.encoder)

    def builder_from_hex(self, hex_str: str) -> TxBuilder:
        """Parse a transaction of either kind from hex and return a builder for it."""
        return self.builder_from_tx(parse_tx_hex(hex_str))

    def encode_address(self, script_pubkey: ScriptPubkey) -> Address:
        """Return the address of a standard script pubkey."""
        return self.encoder.encode_address(script_pubkey)

    def decode_address(self, address: Address) -> ScriptPubkey:
        """Return the script pubkey an address pays to."""
        return self.encoder.decode_address(address)

    def string_to_address(self, string: str) -> Address:
        """Parse an address string for this network."""
        return self.encoder.string_to_address(string)

    def parse_script_pubkey(self, string: str) -> ScriptPubkey:
        """Parse an address string and return the script pubkey it pays to."""
        return self.decode_address(self.string_to_address(string))


BITCOIN_MAINNET = Network("mainnet", MAINNET_ENCODER)
BITCOIN_TESTNET = Network("testnet", TESTNET_ENCODER)
BITCOIN_SIGNET = Network("signet", SIGNET_ENCODER)

DEFAULT_NETWORK = BITCOIN_MAINNET