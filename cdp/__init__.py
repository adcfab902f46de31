"""Conditional DePhase (Differential Manchester, IEEE 802.5) codec."""

from cdp.codec import (
    CapacityError,
    CdpError,
    InvalidSymbolError,
    OddLengthError,
    SignalLevel,
    Symbol,
    decode,
    decode_into,
    encode,
    encode_into,
)

__version__ = "1.0.0"

__all__ = [
    "CapacityError",
    "CdpError",
    "InvalidSymbolError",
    "OddLengthError",
    "SignalLevel",
    "Symbol",
    "decode",
    "decode_into",
    "encode",
    "encode_into",
]
