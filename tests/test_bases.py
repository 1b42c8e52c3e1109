import pytest

from coinkit.bases import (
    Base58Error,
    Bech32Error,
    EncodingError,
    UnknownScriptType,
    WrongHrp,
    decode_base58check,
    decode_bech32,
    encode_base58check,
    encode_bech32,
)

ADDRS = [
    "bc1q233q49ve8ysdsztqh9ue57m6227627j8ztscl9",
    "bc1qaqm8wh8sr6gfx49mdpz3w70z48xdh0pzlf5kgr",
    "bc1qjl8uwezzlech723lpnyuza0h2cdkvxvh54v3dn",
    "bc1qn0q63kkp3rj5wyap5fzymlvat28cu2s87tgzu6",
    "bc1qnsupj8eqya02nm8v6tmk93zslu2e2z8chlmcej",
    "bc1qmcwrdlcqrwcfs6654m8zvmzdmtpuvcxuzn9ahy",
    "bc1qvyyvsdcd0t9863stt7u9rf37wx443lzasg0usy",
    "bc1qza7dfgl2q83cf68fqkkdd754qx546h4u9vd9tg",
    "bc1qwqdg6squsna38e46795at95yu9atm8azzmyvckulcc7kytlcckxswvvzej",
]


@pytest.mark.parametrize("addr", ADDRS)
def test_it_should_encode_and_decode_bech32(addr):
    program = decode_bech32("bc", addr)
    assert encode_bech32("bc", program) == addr


def test_encode_known_witness_programs():
    wpkh = bytes.fromhex("00141bf8a1831db5443b42a44f30a121d1b616d011ab")
    wsh = bytes.fromhex(
        "00201bf8a1831db5443b42a44f30a121d1b616d011ab15df62b588722a845864cc99"
    )
    assert encode_bech32("bc", wpkh) == "bc1qr0u2rqcak4zrks4yfuc2zgw3kctdqydt3wy5yh"
    assert encode_bech32("bc", wsh) == (
        "bc1qr0u2rqcak4zrks4yfuc2zgw3kctdqydtzh0k9dvgwg4ggkryejvsy49jvz"
    )


def test_decoded_program_layout():
    program = decode_bech32("bc", ADDRS[0])
    assert program[0] == 0
    assert program[1] == len(program) - 2


def test_decodes_valid_bech32_with_unusual_length():
    program = decode_bech32("bc", "bc10pu8s7rc0pu8s7rc0putt44am")
    assert program[0] == 15
    assert len(program) == program[1] + 2
    assert len(program) not in (22, 34)


def test_encode_rejects_bad_length():
    with pytest.raises(Bech32Error):
        encode_bech32("bc", b"\x00")
    with pytest.raises(Bech32Error):
        encode_bech32("bc", b"\x00\x27" + bytes(39))


def test_encode_rejects_non_witness_programs():
    with pytest.raises(UnknownScriptType):
        encode_bech32("bc", b"\x11\x02ab")
    with pytest.raises(UnknownScriptType):
        encode_bech32("bc", b"\x00\x05ab")


def test_decode_rejects_wrong_hrp():
    with pytest.raises(WrongHrp):
        decode_bech32("tb", ADDRS[0])


def test_decode_rejects_bad_checksum():
    corrupted = ADDRS[0][:-1] + ("q" if ADDRS[0][-1] != "q" else "p")
    with pytest.raises(Bech32Error):
        decode_bech32("bc", corrupted)


def test_decode_accepts_uppercase():
    assert decode_bech32("bc", ADDRS[1].upper()) == decode_bech32("bc", ADDRS[1])


def test_errors_share_base_class():
    with pytest.raises(EncodingError):
        decode_bech32("bc", "hello")


def test_encode_base58check_known_addresses():
    pkh = bytes.fromhex("0e5c3c8d420c7f11e88d76f7b860d471e6517a44")
    sh = bytes.fromhex("e88869b88866281ab166541ad8aafba8f8aba47a")
    assert encode_base58check(0x00, pkh) == "12JvxPk4mT4PKMVHuHc1aQGBZpotQWQwF6"
    assert encode_base58check(0x05, sh) == "3NtY7BrF3xrcb31JXXaYCKVcz1cH3Azo5y"


@pytest.mark.parametrize(
    "version,addr",
    [
        (0x00, "1AqE7oGF1EUoJviX1uuYrwpRBdEBTuGhES"),
        (0x05, "3HXNFmJpxjgTVFN35Y9f6Waje5YFsLEQZ2"),
        (0x00, "12JvxPk4mT4PKMVHuHc1aQGBZpotQWQwF6"),
    ],
)
def test_base58check_round_trip(version, addr):
    payload = decode_base58check(version, addr)
    assert len(payload) == 20
    assert encode_base58check(version, payload) == addr


def test_base58check_wrong_version():
    with pytest.raises(Base58Error):
        decode_base58check(0x05, "1AqE7oGF1EUoJviX1uuYrwpRBdEBTuGhES")


def test_base58check_rejects_garbage():
    with pytest.raises(Base58Error):
        decode_base58check(0x00, "this isn't a real address")
    with pytest.raises(Base58Error):
        decode_base58check(0x00, "")


def test_base58check_bad_checksum():
    with pytest.raises(Base58Error):
        decode_base58check(0x00, "1AqE7oGF1EUoJviX1uuYrwpRBdEBTuGhET")