"""AX.25 frame buffer with frame check sequence handling."""

from __future__ import annotations

from collections.abc import Iterable

from .crc import ax25_crc

AX25_MAX_PACKET_LEN = 300


class AX25Frame:
    """An AX.25 frame of at most ``AX25_MAX_PACKET_LEN`` bytes."""

    def __init__(self, data: bytes | bytearray | Iterable[int] = b"") -> None:
        self.data = bytearray(bytes(data)[: AX25_MAX_PACKET_LEN - 2])
        self.fcs = 0

    def __len__(self) -> int:
        return len(self.data)

    def __bytes__(self) -> bytes:
        return bytes(self.data)

    def __repr__(self) -> str:
        return f"AX25Frame(data={bytes(self.data)!r}, fcs=0x{self.fcs:04X})"

    def append(self, value: int) -> None:
        """Append one byte; raise OverflowError when the frame is full."""
        if len(self.data) >= AX25_MAX_PACKET_LEN:
            raise OverflowError("AX.25 frame is full")
        self.data.append(value & 0xFF)

    def check_crc(self) -> bool:
        """Check the trailing two-byte FCS, recording it in ``fcs`` if valid."""
        if len(self.data) < 2:
            return False
        crc = ax25_crc(self.data[:-2])
        if self.data[-2:] == crc.to_bytes(2, "little"):
            self.fcs = crc
            return True
        return False

    def add_crc(self) -> None:
        """Compute the FCS and append it, low byte first."""
        if len(self.data) + 2 > AX25_MAX_PACKET_LEN:
            raise OverflowError("no room for the frame check sequence")
        crc = ax25_crc(self.data)
        self.fcs = crc
        self.data += crc.to_bytes(2, "little")