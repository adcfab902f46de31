"""Conditional DePhase (Differential Manchester) encode/decode, IEEE 802.5.

Every data bit becomes a two-bit symbol, so each bit cell carries a
transition. Truth table (c = signal level, d = data bit, o = symbol):

    cd | 00 | 01 | 10 | 11
     o | 10 | 01 | 01 | 10     ("01" -> signal goes '0' then '1')

Wire layout of one encoded byte (16-bit unit, sent big-endian):
    symbols for raw bits 0..3 -> high byte, bits 8..15
    symbols for raw bits 4..7 -> low byte,  bits 0..7
Within a pair the symbol's high bit sits at the lower-numbered position.

The signal level starts HIGH on every buffer call and is carried from
byte to byte; nothing survives between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from enum import IntEnum

from cdp.bits import get_bit

log = logging.getLogger(__name__)


class SignalLevel(IntEnum):
    LOW = 0
    HIGH = 1


class Symbol(IntEnum):
    FALLING = 0b10
    RISING = 0b01


INITIAL_SIGNAL_LEVEL = SignalLevel.HIGH

# Unit bit position of each symbol, in raw-bit order 0..7.
_PAIR_POSITIONS = (8, 10, 12, 14, 0, 2, 4, 6)

_VALID_SYMBOLS = frozenset(Symbol)


# -- Errors ------------------------------------------------------------------


class CdpError(ValueError):
    """Base class for codec errors."""


class CapacityError(CdpError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            f"output buffer too small: need {required} bytes, have {available}"
        )
        self.required = required
        self.available = available


class OddLengthError(CdpError):
    def __init__(self, length: int) -> None:
        super().__init__(f"encoded input length must be even, got {length}")
        self.length = length


class InvalidSymbolError(CdpError):
    def __init__(
        self, symbol: int, offset: int | None = None, bit_index: int | None = None
    ) -> None:
        where = ""
        if offset is not None:
            where += f" at byte {offset}"
        if bit_index is not None:
            where += f" bit {bit_index}"
        super().__init__(f"invalid symbol {symbol:02b}{where}")
        self.symbol = symbol
        self.offset = offset
        self.bit_index = bit_index


# -- Bit coder ---------------------------------------------------------------


def encode_bit(bit: int, level: SignalLevel) -> tuple[Symbol, SignalLevel]:
    """Encode one data bit. Returns (symbol, new signal level)."""
    if bit not in (0, 1):
        raise ValueError(f"bit must be 0 or 1, got {bit!r}")
    if bit == level:
        return Symbol.FALLING, SignalLevel.LOW
    return Symbol.RISING, SignalLevel.HIGH


def decode_bit(
    symbol: int, level: SignalLevel, strict: bool = True
) -> tuple[int, SignalLevel]:
    """Decode one symbol. Returns (bit, new signal level).

    With strict=False, 00 and 11 are taken as RISING, as legacy CDP
    decoders do.
    """
    if symbol == Symbol.FALLING:
        return int(level), SignalLevel.LOW
    if strict and symbol != Symbol.RISING:
        raise InvalidSymbolError(symbol)
    return int(not level), SignalLevel.HIGH


# -- Byte coder --------------------------------------------------------------


def encode_byte(value: int, level: SignalLevel) -> tuple[int, SignalLevel]:
    """Encode a raw byte into a 16-bit unit. Returns (unit, new level)."""
    if not 0 <= value <= 0xFF:
        raise ValueError(f"byte out of range: {value!r}")

    unit = 0
    for i, pos in enumerate(_PAIR_POSITIONS):
        symbol, level = encode_bit(get_bit(value, i), level)
        unit |= get_bit(symbol, 1) << pos
        unit |= get_bit(symbol, 0) << (pos + 1)
    return unit, level


def _unit_symbols(unit: int) -> Iterator[tuple[int, int]]:
    """Yield (raw bit index, symbol) for a unit, in decode order."""
    for i, pos in enumerate(_PAIR_POSITIONS):
        yield i, (get_bit(unit, pos) << 1) | get_bit(unit, pos + 1)


def decode_byte(
    unit: int, level: SignalLevel, strict: bool = True
) -> tuple[int, SignalLevel]:
    """Decode a 16-bit unit back to a raw byte. Returns (byte, new level)."""
    if not 0 <= unit <= 0xFFFF:
        raise ValueError(f"unit out of range: {unit!r}")

    value = 0
    for i, symbol in _unit_symbols(unit):
        try:
            bit, level = decode_bit(symbol, level, strict)
        except InvalidSymbolError:
            raise InvalidSymbolError(symbol, bit_index=i) from None
        value |= bit << i
    return value, level


# -- Buffer coder ------------------------------------------------------------


def _check_length(data: bytes, length: int | None) -> int:
    if length is None:
        return len(data)
    if length < 0 or length > len(data):
        raise ValueError(f"length {length} outside input of {len(data)} bytes")
    return length


def encode_into(data: bytes, out: bytearray, length: int | None = None) -> int:
    """Encode the first ``length`` bytes of data into out.

    Returns the number of bytes written (2 * length). Raises CapacityError
    before touching out if it cannot hold the result.
    """
    length = _check_length(data, length)
    if length * 2 > len(out):
        raise CapacityError(length * 2, len(out))

    level = INITIAL_SIGNAL_LEVEL
    for k in range(length):
        unit, level = encode_byte(data[k], level)
        out[2 * k] = (unit >> 8) & 0xFF
        out[2 * k + 1] = unit & 0xFF
    return length * 2


def decode_into(
    data: bytes, out: bytearray, length: int | None = None, strict: bool = True
) -> int:
    """Decode the first ``length`` bytes of encoded data into out.

    Returns the number of bytes written (length // 2). out is left
    untouched on any error.
    """
    length = _check_length(data, length)
    if length % 2:
        raise OddLengthError(length)
    if len(out) * 2 < length:
        raise CapacityError(length // 2, len(out))

    decoded = bytearray(length // 2)
    level = INITIAL_SIGNAL_LEVEL
    invalid = 0
    for k in range(0, length, 2):
        unit = (data[k] << 8) | data[k + 1]
        if not strict:
            invalid += sum(1 for _, s in _unit_symbols(unit) if s not in _VALID_SYMBOLS)
        try:
            decoded[k // 2], level = decode_byte(unit, level, strict)
        except InvalidSymbolError as e:
            raise InvalidSymbolError(
                e.symbol, offset=k, bit_index=e.bit_index
            ) from None

    if invalid:
        log.warning("accepted %d invalid symbols in %d encoded bytes", invalid, length)
    out[: len(decoded)] = decoded
    return len(decoded)


def encode(data: bytes) -> bytes:
    """CDP-encode data. Output is exactly twice as long."""
    out = bytearray(len(data) * 2)
    encode_into(data, out)
    return bytes(out)


def decode(data: bytes, strict: bool = True) -> bytes:
    """CDP-decode data. Input length must be even."""
    out = bytearray(len(data) // 2)
    decode_into(data, out, strict=strict)
    return bytes(out)
