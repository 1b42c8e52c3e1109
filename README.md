# coinkit

A small library for working with Bitcoin transactions on mainnet, testnet and
signet:

- byte-exact serialization and parsing of legacy and witness (segwit) transactions
- TXID and WTXID calculation
- legacy and BIP143 (witness) sighash digests for `ALL`, `SINGLE` and their
  `ANYONECANPAY` variants
- bech32 and base58check address encoding, and conversion between addresses
  and script pubkeys
- standard script pubkey classification (P2PKH, P2SH, P2WPKH, P2WSH, OP_RETURN)
- a chainable transaction builder that picks legacy or witness form automatically
- UTXO records that know which script has to be signed

Its only dependency is `pycryptodome`, used for RIPEMD-160.

## Installation

```
pip install coinkit
```

For running the test suite:

```
pip install "coinkit[test]"
pytest
```

## Parsing transactions

`coinkit.tx.parse_tx_hex` (and `parse_tx` for bytes, `read_tx` for a binary
stream) looks at the segwit marker and returns either a `LegacyTx` or a
`WitnessTx`:

```python
from coinkit.tx import parse_tx_hex

tx = parse_tx_hex(
    "0200000002ee9242c89e79ab2aa537408839329895392b97505b3496d5543d6d2f531b94d2"
    "0000000000fdffffffee9242c89e79ab2aa537408839329895392b97505b3496d5543d6d2f"
    "531b94d20000000000fdffffff0273d301000000000017a914bba5acbec4e6e3374a0345bf"
    "3609fa7cfea825f18773d301000000000017a914bba5acbec4e6e3374a0345bf3609fa7cfe"
    "a825f18700000000"
)
print(tx.txid().serialize_hex())
print(tx.serialized_length())
```

Every serializable type (transactions, `TxIn`, `TxOut`, `Outpoint`, scripts and
digests such as `TXID`, `WTXID` and `BlockHash`) derives from
`coinkit.ser.ByteFormat` and offers `serialize()`, `serialize_hex()`,
`deserialize(data)` and `deserialize_hex(hex_str)`, plus stream-based
`write_to` / `read_from`. Malformed or truncated data raises `SerError`; a
witness transaction without the `0001` marker raises `BadWitnessFlag`.

`coinkit.tx.to_legacy` drops witnesses, `coinkit.tx.to_witness` wraps a legacy
transaction with empty witnesses, and `WitnessTx.wtxid()` gives the witness
transaction ID.

## Sighash digests

```python
from coinkit.legacy import LegacySighashArgs, LegacyTx
from coinkit.script import Script
from coinkit.sighash import Sighash

tx = LegacyTx.deserialize_hex(
    "0200000002ee9242c89e79ab2aa537408839329895392b97505b3496d5543d6d2f531b94d2"
    "0000000000fdffffffee9242c89e79ab2aa537408839329895392b97505b3496d5543d6d2f"
    "531b94d20000000000fdffffff0273d301000000000017a914bba5acbec4e6e3374a0345bf"
    "3609fa7cfea825f18773d301000000000017a914bba5acbec4e6e3374a0345bf3609fa7cfe"
    "a825f18700000000"
)
args = LegacySighashArgs(
    index=1,
    sighash_flag=Sighash.ALL,
    prevout_script=Script.deserialize_hex("160014758ce550380d964051086798d6546bebdca27a73"),
)
digest = tx.sighash(args)
```

Witness transactions use `coinkit.witness.WitnessSighashArgs`, which also
carries the value of the output being spent, with `WitnessTx.witness_sighash`
(or `WitnessTx.sighash`); `WitnessTx.legacy_sighash` is available as well.
`coinkit.tx.tx_sighash` works on either kind of transaction and raises
`WrongSighashArgs` when a witness transaction is given legacy arguments.

`SIGHASH_NONE` is rejected with `NoneUnsupported`, and `SIGHASH_SINGLE` on an
input with no matching output is rejected with `SighashSingleBug` instead of
producing the well-known insecure digest. `Sighash.from_u8` converts a flag
byte and raises `UnknownSighash` for anything else. All of these errors derive
from `TxError`.

After signing a digest, remember to append the sighash flag byte to the signature.

## Addresses and scripts

```python
from coinkit.bases import decode_bech32, encode_bech32

program = decode_bech32("bc", "bc1qvyyvsdcd0t9863stt7u9rf37wx443lzasg0usy")
assert encode_bech32("bc", program) == "bc1qvyyvsdcd0t9863stt7u9rf37wx443lzasg0usy"
```

`encode_base58check` and `decode_base58check` handle legacy addresses.

A `coinkit.nets.Network` ties an `AddressEncoder` to a transaction builder;
`BITCOIN_MAINNET` (also `DEFAULT_NETWORK`), `BITCOIN_TESTNET` and
`BITCOIN_SIGNET` are predefined. Its `string_to_address`, `decode_address` and
`encode_address` methods convert between address strings, `Address` values and
`ScriptPubkey`s; `parse_script_pubkey` goes straight from a string to a script
pubkey. `Address.to_descriptor()` gives an `addr(...)` descriptor.

Address strings that cannot be parsed raise a subclass of `EncodingError`
(`UnknownScriptType`, `WrongHrp`, `Bech32Error` or `Base58Error`), and
`OP_RETURN` scripts cannot be turned into addresses (`NullDataScript`).

`ScriptPubkey.standard_type()` classifies a script, returning a `ScriptType`
with a `ScriptKind` and its payload. `ScriptPubkey.p2sh` and
`ScriptPubkey.p2wsh` build the standard forms from a script, and
`ScriptPubkey.p2pkh` and `ScriptPubkey.p2wpkh` from serialized public key bytes.
`TxOut.op_return` builds an OP_RETURN output, keeping at most 75 bytes of data.

## Building transactions

`Network.tx_builder()` returns a `TxBuilder`. Its methods return the builder,
so calls can be chained:

```python
from coinkit.nets import BITCOIN_MAINNET
from coinkit.txin import Outpoint

network = BITCOIN_MAINNET
tx = (
    network.tx_builder()
    .version(2)
    .spend(Outpoint.null(), 0xAABBCCDD)
    .pay(0x8888_8888_8888_8888, network.string_to_address("bc1qvyyvsdcd0t9863stt7u9rf37wx443lzasg0usy"))
    .op_return(b"hello")
    .build()
)
```

`build()` produces a `WitnessTx` when witnesses were supplied or the builder
was created from a witness transaction, and a `LegacyTx` otherwise;
`build_legacy()` and `build_witness()` force one form. A witness transaction
gets exactly one witness per input: extra witnesses are dropped and missing
ones are filled with empty witnesses. Building a transaction without inputs or
outputs raises `EmptyVin` or `EmptyVout`. An existing transaction can be edited
through `Network.builder_from_tx` or `Network.builder_from_hex`.

## UTXOs

`Utxo.from_tx_output` and `Utxo.from_output_and_outpoint` record what is needed
to spend an output later. For P2SH and P2WSH outputs, supply the redeem or
witness script with `Utxo.set_spend_script`, which only accepts a script whose
hash matches the script pubkey. `Utxo.signing_script()` returns the script to
sign, and `Utxo.sighash_args` and `Utxo.witness_sighash_args` give ready-made
sighash arguments, or `None` while the script is still unknown.

## What it does not do

coinkit has no command-line tool and makes no network connections: it neither
fetches nor broadcasts transactions. It does not hold or derive keys and does
not produce signatures; it stops at the sighash digest. Scripts are opaque byte
strings: there is no script assembly, disassembly or execution, and nested
witness-in-P2SH outputs are not handled by `Utxo`.