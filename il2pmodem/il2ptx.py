"""Transmit side of IL2P: AX.25 frames to scrambled, RS-protected blocks."""

from __future__ import annotations

from collections.abc import Iterable

from . import hamming
from .crc import ax25_crc
from .il2prx import (
    HEADER_PARITY_LENGTH,
    IL2P_HDR_LENGTH,
    IL2P_TO_AX25_PID,
    PAYLOAD_PARITY_LENGTH,
    _block_sizes,
)
from .rs import ReedSolomon

MAX_PAYLOAD_LENGTH = 0x3FF  # ten bits in the header

# AX.25 PID -> IL2P PID
AX25_TO_IL2P_PID: dict[int, int] = {ax25: il2p for il2p, ax25 in IL2P_TO_AX25_PID.items()}


def _bits(data: bytes) -> Iterable[int]:
    for byte in data:
        for shift in range(7, -1, -1):
            yield (byte >> shift) & 1


def _pack(bits: list[int]) -> bytes:
    out = bytearray(len(bits) // 8)
    for index, bit in enumerate(bits):
        if bit:
            out[index >> 3] |= 0x80 >> (index & 7)
    return bytes(out)


def _scramble(data: bytes | bytearray) -> bytes:
    """Apply the IL2P scrambler, most significant bit first.

    The scrambler output runs five bits behind its input; the register is
    flushed at the end so the result is as long as the input.
    """
    if not data:
        return b""
    sr = 0x000F
    out: list[int] = []
    for index, bit in enumerate(_bits(bytes(data))):
        feedback = sr & 1
        sr >>= 1
        if bit:
            sr |= 0x100
        if feedback:
            sr ^= 0x0108
        if index > 4:
            out.append((sr >> 3) & 1)
    for _ in range(5):
        feedback = sr & 1
        sr >>= 1
        if feedback:
            sr ^= 0x0108
        out.append((sr >> 3) & 1)
    return _pack(out)


def _set_length_bits(header: bytearray, length: int) -> None:
    for k, index in enumerate(range(2, 12)):
        if length & (0x200 >> k):
            header[index] |= 0x80


def is_type1(frame: bytes | bytearray | Iterable[int]) -> bool:
    """Return True if the AX.25 frame header can be carried in an IL2P type 1 header."""
    data = bytes(frame)
    if len(data) < 15:
        return False

    # Digipeaters present?
    if not data[13] & 0x01:
        return False

    # SABME?
    if len(data) == 15 and (data[14] & 0xEF) == 0x6F:
        return False

    # I or UI frame with a PID that has no IL2P equivalent?
    control = data[14]
    if not control & 0x01 or (control & 0xEF) == 0x03:
        if len(data) < 16 or data[15] not in AX25_TO_IL2P_PID:
            return False

    # Callsign characters must fit in SIXBIT (0x20 to 0x5F).
    for byte in data[0:6] + data[7:13]:
        if not 0x20 <= byte >> 1 <= 0x5F:
            return False

    return True


def _type0_header(length: int) -> bytearray:
    header = bytearray(IL2P_HDR_LENGTH)
    _set_length_bits(header, length)
    return header


def _type1_header(frame: bytes) -> tuple[bytearray, int, int]:
    """Build a type 1 header; return it with the payload offset and length."""
    header = bytearray(IL2P_HDR_LENGTH)

    # Callsigns to SIXBIT
    for i in range(6):
        header[i] = (frame[i] >> 1) - 0x20
        header[i + 6] = (frame[i + 7] >> 1) - 0x20
    header[1] |= 0x80  # type 1 marker

    header[12] = ((frame[13] >> 1) & 0x0F) | ((frame[6] << 3) & 0xF0)

    command = bool(frame[6] & 0x80) and not frame[13] & 0x80
    control = frame[14]
    poll = bool(control & 0x10)

    def mark(*indices: int) -> None:
        for index in indices:
            header[index] |= 0x40

    def copy(pairs: Iterable[tuple[int, int]]) -> None:
        for index, mask in pairs:
            if control & mask:
                header[index] |= 0x40

    has_pid = False
    has_data = False

    if not control & 0x01:
        # I frame
        copy(((5, 0x10), (6, 0x80), (7, 0x40), (8, 0x20),
              (9, 0x08), (10, 0x04), (11, 0x02)))
        has_pid = True
        has_data = True
    elif (control & 0x03) == 0x01:
        # S frame; an IL2P PID of zero is the default
        copy(((6, 0x80), (7, 0x40), (8, 0x20), (10, 0x08), (11, 0x04)))
        if command:
            mark(9)
    else:
        kind = control & 0xEF
        if kind == 0x2F:  # SABM
            mark(4, 5, 9)
        elif kind == 0x43:  # DISC
            mark(4, 5, 8, 9)
        elif kind == 0x0F:  # DM
            mark(4, 5, 7)
        elif kind == 0x63:  # UA
            mark(4, 5, 7, 8)
        elif kind == 0x87:  # FRMR
            mark(4, 5, 6)
            has_data = True
        elif kind == 0x03:  # UI
            if poll:
                mark(5)
            mark(6, 8)
            if command:
                mark(9)
            header[0] |= 0x40
            has_pid = True
            has_data = True
        elif kind in (0xAF, 0xE3):  # XID, TEST
            mark(4, 6, 7)
            if kind == 0xE3:
                mark(8)
            if poll:
                mark(5)
            if command:
                mark(9)
            has_data = True

    if has_pid and len(frame) > 15:
        pid = AX25_TO_IL2P_PID.get(frame[15])
        if pid is not None:
            for index, mask in ((1, 0x08), (2, 0x04), (3, 0x02), (4, 0x01)):
                if pid & mask:
                    header[index] |= 0x40

    if not has_data:
        return header, 0, 0

    offset = 16 if has_pid else 15
    length = max(len(frame) - offset, 0)
    if length > 0:
        _set_length_bits(header, length)
    return header, offset, length


class IL2PEncoder:
    """Encodes AX.25 frames (without FCS) into IL2P frames with a trailing CRC."""

    def __init__(self) -> None:
        self._rs_header = ReedSolomon(HEADER_PARITY_LENGTH)
        self._rs_payload = ReedSolomon(PAYLOAD_PARITY_LENGTH)

    def encode(self, frame: bytes | bytearray | Iterable[int]) -> bytes:
        """Return the IL2P encoding of ``frame``: header, payload blocks and CRC."""
        data = bytes(frame)
        crc = ax25_crc(data)

        if is_type1(data):
            header, offset, length = _type1_header(data)
        else:
            header, offset, length = _type0_header(len(data)), 0, len(data)

        if length > MAX_PAYLOAD_LENGTH:
            raise ValueError(
                f"IL2P payload of {length} bytes is longer than {MAX_PAYLOAD_LENGTH}"
            )

        scrambled = _scramble(header)
        out = bytearray(scrambled + self._rs_header.encode(scrambled))

        position = offset
        for size in _block_sizes(length):
            block = _scramble(data[position: position + size])
            out += block + self._rs_payload.encode(block)
            position += size

        out += bytes(hamming.encode(crc >> shift) for shift in (12, 8, 4, 0))
        return bytes(out)