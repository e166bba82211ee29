"""CRC-16 as used for the AX.25 frame check sequence."""

from __future__ import annotations

from collections.abc import Iterable

_POLY = 0x8408  # reflected CCITT polynomial


def _build_table() -> tuple[int, ...]:
    table = []
    for byte in range(256):
        crc = byte
        for _ in range(8):
            crc = (crc >> 1) ^ _POLY if crc & 1 else crc >> 1
        table.append(crc)
    return tuple(table)


CCITT_TABLE: tuple[int, ...] = _build_table()


def ax25_crc(data: bytes | bytearray | Iterable[int]) -> int:
    """Return the 16-bit AX.25 frame check sequence of ``data``."""
    crc = 0xFFFF
    for byte in bytes(data):
        crc = (crc >> 8) ^ CCITT_TABLE[(crc ^ byte) & 0xFF]
    return ~crc & 0xFFFF