"""Bech32 and base58check encoding for addresses."""

from __future__ import annotations

from collections.abc import Iterable

from coinkit.hashes import hash256


class EncodingError(Exception):
    """Base class for address encoding errors."""


class UnknownScriptType(EncodingError):
    """The script is not of a type that has an address form."""


class NullDataScript(EncodingError):
    """The script is an OP_RETURN output, which has no address."""


class WrongHrp(EncodingError):
    """A bech32 string carries an unexpected human-readable part."""

    def __init__(self, got: str, expected: str) -> None:
        super().__init__(f"wrong HRP: got {got!r}, expected {expected!r}")
        self.got = got
        self.expected = expected


class Bech32Error(EncodingError):
    """A bech32 string or witness program is malformed."""


class Base58Error(EncodingError):
    """A base58check string is malformed or has the wrong version."""


_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_BECH32_CONST = 1
_BECH32M_CONST = 0x2BC830A3
_GENERATORS = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)

_B58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"


def _polymod(values: Iterable[int]) -> int:
    chk = 1
    for value in values:
        top = chk >> 25
        chk = ((chk & 0x1FFFFFF) << 5) ^ value
        for bit, generator in enumerate(_GENERATORS):
            if (top >> bit) & 1:
                chk ^= generator
    return chk


def _hrp_expand(hrp: str) -> list[int]:
    return [ord(c) >> 5 for c in hrp] + [0] + [ord(c) & 31 for c in hrp]


def _checksum(hrp: str, data: list[int], const: int) -> list[int]:
    pm = _polymod(_hrp_expand(hrp) + data + [0] * 6) ^ const
    return [(pm >> (5 * (5 - i))) & 31 for i in range(6)]


def _convert_bits(data: Iterable[int], from_bits: int, to_bits: int, pad: bool) -> list[int]:
    acc = 0
    bits = 0
    out: list[int] = []
    max_value = (1 << to_bits) - 1
    for value in data:
        if value >> from_bits:
            raise Bech32Error("invalid data value")
        acc = (acc << from_bits) | value
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            out.append((acc >> bits) & max_value)
    if pad:
        if bits:
            out.append((acc << (to_bits - bits)) & max_value)
    elif bits >= from_bits or (acc << (to_bits - bits)) & max_value:
        raise Bech32Error("invalid padding")
    return out


def _split_bech32(s: str) -> tuple[str, list[int]]:
    if any(ord(c) < 33 or ord(c) > 126 for c in s):
        raise Bech32Error("invalid character")
    if s.lower() != s and s.upper() != s:
        raise Bech32Error("mixed case")
    s = s.lower()
    pos = s.rfind("1")
    if pos < 1 or pos + 7 > len(s) or len(s) > 90:
        raise Bech32Error("invalid separator position or length")
    hrp = s[:pos]
    try:
        data = [_CHARSET.index(c) for c in s[pos + 1:]]
    except ValueError as exc:
        raise Bech32Error("invalid data character") from exc
    if _polymod(_hrp_expand(hrp) + data) not in (_BECH32_CONST, _BECH32M_CONST):
        raise Bech32Error("invalid checksum")
    return hrp, data[:-6]


def encode_bech32(hrp: str, program: bytes) -> str:
    """Encode a witness program (version, length, payload) as a bech32 address."""
    program = bytes(program)
    if len(program) < 2 or len(program) > 40:
        raise Bech32Error("invalid length")
    version, length, payload = program[0], program[1], program[2:]
    if version > 16 or length != len(payload):
        raise UnknownScriptType("not a witness program")
    hrp = hrp.lower()
    data = [version] + _convert_bits(payload, 8, 5, True)
    const = _BECH32_CONST if version == 0 else _BECH32M_CONST
    return hrp + "1" + "".join(_CHARSET[d] for d in data + _checksum(hrp, data, const))


def decode_bech32(expected_hrp: str, s: str) -> bytes:
    """Decode a bech32 address into a witness program (version, length, payload)."""
    hrp, data = _split_bech32(s)
    if hrp != expected_hrp.lower():
        raise WrongHrp(hrp, expected_hrp)
    if not data:
        raise Bech32Error("empty data")
    version = data[0]
    if version > 16:
        raise Bech32Error("invalid witness version")
    payload = bytes(_convert_bits(data[1:], 5, 8, False))
    if len(payload) < 2 or len(payload) > 40:
        raise Bech32Error("invalid program length")
    return bytes([version, len(payload)]) + payload


def _b58encode(data: bytes) -> str:
    number = int.from_bytes(data, "big")
    chars: list[str] = []
    while number:
        number, rem = divmod(number, 58)
        chars.append(_B58_ALPHABET[rem])
    leading = len(data) - len(data.lstrip(b"\x00"))
    return "1" * leading + "".join(reversed(chars))


def _b58decode(s: str) -> bytes:
    number = 0
    for char in s:
        digit = _B58_ALPHABET.find(char)
        if digit < 0:
            raise Base58Error(f"invalid base58 character {char!r}")
        number = number * 58 + digit
    leading = len(s) - len(s.lstrip("1"))
    body = number.to_bytes((number.bit_length() + 7) // 8, "big")
    return b"\x00" * leading + body


def encode_base58check(version: int, payload: bytes) -> str:
    """Encode ``payload`` with a version byte and checksum as base58check."""
    if not 0 <= version <= 0xFF:
        raise Base58Error(f"version out of range: {version}")
    data = bytes([version]) + bytes(payload)
    return _b58encode(data + hash256(data)[:4])


def decode_base58check(expected_version: int, s: str) -> bytes:
    """Decode a base58check string and return its payload without the version byte."""
    raw = _b58decode(s)
    if len(raw) < 5:
        raise Base58Error("too short")
    data, checksum = raw[:-4], raw[-4:]
    if hash256(data)[:4] != checksum:
        raise Base58Error("invalid checksum")
    if data[0] != expected_version:
        raise Base58Error(
            f"wrong version: got {data[0]:#04x}, expected {expected_version:#04x}"
        )
    return data[1:]