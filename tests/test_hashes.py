import io

import pytest

from coinkit.hashes import (
    TXID,
    WTXID,
    BlockHash,
    Hash160Digest,
    Hash256Digest,
    hash160,
    hash256,
    sha256,
)
from coinkit.ser import SerError

ZERO_HEX = "0000000000000000000000000000000000000000000000000000000000000000"


def test_it_serializes_and_deserializes_hash256digests():
    digest = TXID.deserialize_hex(ZERO_HEX)
    assert digest.serialized_length() == 32
    assert digest == TXID.zero()
    assert digest.serialize_hex() == ZERO_HEX
    assert TXID.zero().serialize_hex() == ZERO_HEX


def test_known_hash_vectors():
    assert sha256(b"").hex() == (
        "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    )
    assert hash256(b"").hex() == (
        "5df6e0e2761359d30a8275058e299fcc0381534545f55cf43e41983f5d4c9456"
    )
    assert hash160(b"").hex() == "b472a266d0bd89c13706a4132ccfb16f7c3b9fcb"


def test_reversed_twice_is_identity():
    digest = WTXID(sha256(b"abc"))
    assert digest.reversed().reversed() == digest
    assert digest.reversed().digest == digest.digest[::-1]


def test_marked_types_are_distinct():
    raw = sha256(b"abc")
    assert TXID(raw) != Hash256Digest(raw)
    assert TXID(raw) != BlockHash(raw)
    assert TXID(raw) == TXID(raw)


def test_wrong_length_rejected():
    with pytest.raises(ValueError):
        TXID(b"\x00" * 20)
    with pytest.raises(ValueError):
        Hash160Digest(b"\x00" * 32)


def test_hash160_digest_round_trip():
    digest = Hash160Digest(hash160(b"abc"))
    assert digest.serialized_length() == 20
    assert Hash160Digest.deserialize(digest.serialize()) == digest
    assert bytes(digest) == hash160(b"abc")


def test_read_from_short_stream():
    with pytest.raises(SerError):
        TXID.read_from(io.BytesIO(b"\x00" * 31))