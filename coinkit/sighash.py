"""Sighash modes and the errors raised by transaction types."""

from __future__ import annotations

import enum


class TxError(Exception):
    """Base class for transaction errors."""


class NoneUnsupported(TxError):
    """SIGHASH_NONE and SIGHASH_NONE|ANYONECANPAY are not supported."""

    def __init__(self) -> None:
        super().__init__("SIGHASH_NONE is unsupported")


class SighashSingleBug(TxError):
    """SIGHASH_SINGLE was requested for an input with no matching output."""

    def __init__(self) -> None:
        super().__init__("SIGHASH_SINGLE bug is unsupported")


class UnknownSighash(TxError):
    """A byte does not name a known sighash mode."""

    def __init__(self, flag: int) -> None:
        super().__init__(f"Unknown Sighash: {flag}")
        self.flag = flag


class BadWitnessFlag(TxError):
    """The two bytes after the version are not the segwit marker and flag."""

    def __init__(self, flag: bytes) -> None:
        flag = bytes(flag)
        super().__init__(
            f"Witness flag not as expected. Got {list(flag)}. Expected [0, 1]."
        )
        self.flag = flag


class WrongSighashArgs(TxError):
    """Sighash arguments do not match the wrapped transaction type."""

    def __init__(self) -> None:
        super().__init__("Sighash args must match the wrapped tx type")


class EmptyVout(TxError):
    """A transaction was built with no outputs."""

    def __init__(self) -> None:
        super().__init__("Vout may not be empty")


class EmptyVin(TxError):
    """A transaction was built with no inputs."""

    def __init__(self) -> None:
        super().__init__("Vin may not be empty")


class Sighash(enum.IntEnum):
    """All sighash modes."""

    ALL = 0x01
    NONE = 0x02
    SINGLE = 0x03
    ALL_ACP = 0x81
    NONE_ACP = 0x82
    SINGLE_ACP = 0x83

    @classmethod
    def from_u8(cls, flag: int) -> Sighash:
        """Return the sighash mode named by ``flag``, or raise ``UnknownSighash``."""
        try:
            return cls(flag)
        except ValueError:
            raise UnknownSighash(flag) from None