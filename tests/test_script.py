import pytest

from coinkit.hashes import Hash160Digest, Hash256Digest, hash160, sha256
from coinkit.ser import SerError
from coinkit.script import (
    Script,
    ScriptKind,
    ScriptPubkey,
    ScriptSig,
    ScriptType,
    WitnessStackItem,
)

WPKH_HEX = "0014758ce550380d964051086798d6546bebdca27a73"


@pytest.mark.parametrize("cls", [Script, WitnessStackItem])
@pytest.mark.parametrize(
    "make,hex_str,length",
    [
        (lambda c: c(bytes.fromhex(WPKH_HEX)), "16" + WPKH_HEX, 22),
        (lambda c: c(b""), "00", 0),
        (lambda c: c.null(), "00", 0),
    ],
)
def test_it_serializes_and_deserializes_scripts(cls, make, hex_str, length):
    expected = make(cls)
    parsed = cls.deserialize_hex(hex_str)
    assert expected.serialize_hex() == hex_str
    assert len(expected) == length
    assert (len(expected) == 0) == (length == 0)
    assert parsed == expected
    assert parsed.serialize_hex() == hex_str
    assert len(parsed) == length
    assert parsed.serialized_length() == len(hex_str) // 2


def test_it_converts_between_bitcoin_script_types():
    si = WitnessStackItem(bytes.fromhex(WPKH_HEX))
    sc = Script(si.items())
    spk = ScriptPubkey(si.items())
    ss = ScriptSig(si.items())
    for target in (Script, ScriptPubkey, ScriptSig, WitnessStackItem):
        for source in (si, sc, spk, ss):
            converted = target(source)
            assert converted.items() == si.items()
            assert type(converted) is target


def test_script_types_are_distinct():
    data = bytes.fromhex(WPKH_HEX)
    assert Script(data) != ScriptPubkey(data)
    assert Script(data) == Script(data)


def test_truncated_script_fails():
    with pytest.raises(SerError):
        Script.deserialize_hex("16" + WPKH_HEX[:-2])


def test_int_is_rejected():
    with pytest.raises(TypeError):
        Script(5)


NS = ScriptType(ScriptKind.NON_STANDARD)

TYPE_CASES = [
    ("a914e88869b88866281ab166541ad8aafba8f8aba47a87",
     ScriptType(ScriptKind.SH, Hash160Digest(bytes([232, 136, 105, 184, 136, 102, 40, 26, 177, 102, 84, 26, 216, 170, 251, 168, 248, 171, 164, 122])))),
    ("a914e88869b88866281ab166541ad8aafba8f8aba47a89", NS),
    ("aa14e88869b88866281ab166541ad8aafba8f8aba47a87", NS),
    ("76a9140e5c3c8d420c7f11e88d76f7b860d471e6517a4488ac",
     ScriptType(ScriptKind.PKH, Hash160Digest(bytes([14, 92, 60, 141, 66, 12, 127, 17, 232, 141, 118, 247, 184, 96, 212, 113, 230, 81, 122, 68])))),
    ("76a9140e5c3c8d420c7f11e88d76f7b860d471e6517a4488ad", NS),
    ("77a9140e5c3c8d420c7f11e88d76f7b860d471e6517a4488ac", NS),
    ("00201bf8a1831db5443b42a44f30a121d1b616d011ab15df62b588722a845864cc99",
     ScriptType(ScriptKind.WSH, Hash256Digest(bytes([27, 248, 161, 131, 29, 181, 68, 59, 66, 164, 79, 48, 161, 33, 209, 182, 22, 208, 17, 171, 21, 223, 98, 181, 136, 114, 42, 132, 88, 100, 204, 153])))),
    ("01201bf8a1831db5443b42a44f30a121d1b616d011ab15df62b588722a845864cc99", NS),
    ("00141bf8a1831db5443b42a44f30a121d1b616d011ab",
     ScriptType(ScriptKind.WPKH, Hash160Digest(bytes([27, 248, 161, 131, 29, 181, 68, 59, 66, 164, 79, 48, 161, 33, 209, 182, 22, 208, 17, 171])))),
    ("01141bf8a1831db5443b42a44f30a121d1b616d011ab", NS),
    ("0011223344", NS),
    ("deadbeefdeadbeefdeadbeefdeadbeef", NS),
    ("02031bf8a1831db5443b42a44f30a121d1b616d011ab15df62b588722a845864cc99041bf8a1831db5443b42a44f30a121d1b616d011ab15df62b588722a845864cc9902af", NS),
]


@pytest.mark.parametrize("hex_str,expected", TYPE_CASES)
def test_it_determines_script_pubkey_types_accurately(hex_str, expected):
    assert ScriptPubkey(bytes.fromhex(hex_str)).standard_type() == expected


def test_op_return_extraction():
    spk = ScriptPubkey(b"\x6a\x03abc")
    assert spk.extract_op_return_data() == b"abc"
    assert spk.standard_type() == ScriptType(ScriptKind.OP_RETURN, b"abc")


def test_op_return_rejects_mismatched_length():
    assert ScriptPubkey(b"\x6a\x04abc").extract_op_return_data() is None
    assert ScriptPubkey(b"\x6a").extract_op_return_data() is None
    big = bytes([0x6A, 76]) + bytes(76)
    assert ScriptPubkey(big).extract_op_return_data() is None


def test_p2pkh_and_p2wpkh_from_key():
    key = bytes([0x02]) + bytes(range(32))
    pkh = ScriptPubkey.p2pkh(key)
    wpkh = ScriptPubkey.p2wpkh(key)
    assert pkh.standard_type() == ScriptType(ScriptKind.PKH, Hash160Digest(hash160(key)))
    assert wpkh.standard_type() == ScriptType(ScriptKind.WPKH, Hash160Digest(hash160(key)))


def test_p2sh_and_p2wsh_from_script():
    script = Script(bytes.fromhex(WPKH_HEX))
    sh = ScriptPubkey.p2sh(script)
    wsh = ScriptPubkey.p2wsh(script)
    assert sh.standard_type() == ScriptType(ScriptKind.SH, Hash160Digest(hash160(script.items())))
    assert wsh.standard_type() == ScriptType(ScriptKind.WSH, Hash256Digest(sha256(script.items())))
    assert len(sh) == 0x17
    assert len(wsh) == 0x22