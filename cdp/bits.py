"""Bit helpers shared by the codec and the CLI dumps."""

from __future__ import annotations


def get_bit(value: int, n: int) -> int:
    """Return bit ``n`` (0 = LSB) of value as 0 or 1."""
    return (value >> n) & 0x01


def format_bits(data: bytes, sep: str = " ") -> str:
    """Render bytes as MSB-first binary groups, e.g. b"\\x74" -> "01110100"."""
    return sep.join(f"{b:08b}" for b in data)
