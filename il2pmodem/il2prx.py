"""Receive side of IL2P: header and payload decoding back to AX.25."""

from __future__ import annotations

from collections.abc import Iterable

from . import hamming
from .crc import ax25_crc
from .rs import ReedSolomon

IL2P_HDR_LENGTH = 13
HEADER_PARITY_LENGTH = 2
PAYLOAD_PARITY_LENGTH = 16
MAX_BLOCK_PAYLOAD = 239
CRC_LENGTH = 4

# IL2P PID -> AX.25 PID
IL2P_TO_AX25_PID: dict[int, int] = {
    0x0F: 0xF0,  # No layer 3
    0x0E: 0xCF,  # NET/ROM
    0x0B: 0xCC,  # IP
    0x0C: 0xCD,  # ARP
    0x06: 0x08,  # Segmentation
    0x03: 0x01,  # ROSE
    0x04: 0x06,  # Compressed TCP
    0x05: 0x07,  # Uncompressed TCP
    0x0D: 0xCE,  # FlexNet
}

_S_FRAME_CONTROL = (0x01, 0x05, 0x09, 0x0D)  # RR, RNR, REJ, SREJ


def _unscramble(data: bytes | bytearray) -> bytearray:
    """Undo the IL2P scrambler, processing bits most significant first."""
    out = bytearray(len(data))
    sr = 0x01F0
    for index, byte in enumerate(data):
        value = 0
        for shift in range(7, -1, -1):
            if (byte >> shift) & 1:
                sr ^= 0x0211
            value = (value << 1) | (sr & 1)
            sr >>= 1
        out[index] = value
    return out


def _collect_bits(data: bytes | bytearray, mask: int) -> int:
    """Build an integer from the ``mask`` bit of each byte, first byte highest."""
    value = 0
    for byte in data:
        value = (value << 1) | (1 if byte & mask else 0)
    return value


def _block_sizes(payload_length: int) -> list[int]:
    """Return payload block sizes, large blocks first."""
    if payload_length == 0:
        return []
    count = -(-payload_length // MAX_BLOCK_PAYLOAD)
    small = payload_length // count
    large_count = payload_length - count * small
    return [small + 1] * large_count + [small] * (count - large_count)


class IL2PDecoder:
    """Decodes IL2P headers and payloads, tracking the frame being received."""

    def __init__(self) -> None:
        self._rs_header = ReedSolomon(HEADER_PARITY_LENGTH)
        self._rs_payload = ReedSolomon(PAYLOAD_PARITY_LENGTH)
        self.header_length = 0
        self.payload_length = 0
        self.has_crc = False
        self._blocks: list[int] = []

    @property
    def block_sizes(self) -> tuple[int, ...]:
        return tuple(self._blocks)

    @property
    def payload_parity_length(self) -> int:
        return PAYLOAD_PARITY_LENGTH * len(self._blocks)

    @staticmethod
    def _decode(rs: ReedSolomon, codeword: bytes, length: int) -> bytearray:
        corrected, _ = rs.decode(codeword)
        return _unscramble(corrected[:length])

    def process_header(self, data: bytes | bytearray | Iterable[int]) -> bytes:
        """Decode a 15-byte IL2P header and return the AX.25 header it implies.

        A type 0 header carries the AX.25 header in the payload, so an empty
        result is returned for it.  Raises ReedSolomonError if the header
        cannot be corrected.
        """
        raw = bytes(data)
        needed = IL2P_HDR_LENGTH + HEADER_PARITY_LENGTH
        if len(raw) < needed:
            raise ValueError(f"IL2P header needs {needed} bytes, got {len(raw)}")

        header = self._decode(self._rs_header, raw[:needed], IL2P_HDR_LENGTH)

        if header[1] & 0x80:
            ax25 = self._type1_header(header)
        else:
            ax25 = b""
            self.header_length = 0
            self.payload_length = _collect_bits(header[2:12], 0x80)

        # A clear bit means a CRC is appended
        self.has_crc = not header[0] & 0x80
        self._blocks = _block_sizes(self.payload_length)
        return ax25

    def _type1_header(self, header: bytearray) -> bytes:
        out = bytearray(16)

        # SIXBIT callsigns back to shifted ASCII
        for i in range(6):
            out[i] = ((header[i] & 0x3F) + 0x20) << 1
            out[i + 7] = ((header[i + 6] & 0x3F) + 0x20) << 1

        out[6] = ((header[12] & 0xF0) >> 3) | 0x60
        out[13] = ((header[12] & 0x0F) << 1) | 0x61

        control = _collect_bits(header[5:12], 0x40)
        pid = _collect_bits(header[1:5], 0x40)
        command = bool(control & 0x04)

        has_pid = False
        has_data = False

        def mark_command(with_response: bool = True) -> None:
            if command:
                out[6] |= 0x80
            elif with_response:
                out[13] |= 0x80

        def poll_final() -> None:
            if control & 0x40:
                out[14] |= 0x10

        if pid == 0x00:
            # S frame
            out[14] = _S_FRAME_CONTROL[control & 0x03]
            if control & 0x20:
                out[14] |= 0x80
            mark_command(with_response=False)
        elif pid == 0x01:
            # U frame other than UI
            kind = control & 0x38
            if kind == 0x00:  # SABM
                out[14] = 0x3F
                out[6] |= 0x80
            elif kind == 0x08:  # DISC
                out[14] = 0x53
                out[6] |= 0x80
            elif kind == 0x10:  # DM
                out[14] = 0x1F
            elif kind == 0x18:  # UA
                out[14] = 0x73
            elif kind == 0x20:  # FRMR
                out[14] = 0x97
                has_data = True
            elif kind in (0x30, 0x38):  # XID, TEST
                out[14] = 0xAF if kind == 0x30 else 0xE3
                poll_final()
                mark_command()
                has_data = True
        elif header[0] & 0x40:
            # UI frame
            out[14] = 0x03
            poll_final()
            mark_command()
            has_pid = True
            has_data = True
        else:
            # I frame
            out[14] = 0x00
            poll_final()
            for src, dst in ((0x20, 0x80), (0x10, 0x40), (0x08, 0x20),
                             (0x04, 0x08), (0x02, 0x04), (0x01, 0x02)):
                if control & src:
                    out[14] |= dst
            mark_command()
            has_pid = True
            has_data = True

        if has_pid:
            out[15] = IL2P_TO_AX25_PID.get(pid, 0x00)

        self.payload_length = _collect_bits(header[2:12], 0x80) if has_data else 0
        self.header_length = 16 if has_pid else 15
        return bytes(out[: self.header_length])

    def process_payload(self, data: bytes | bytearray | Iterable[int]) -> bytes:
        """Decode the payload blocks announced by the last header.

        Raises ReedSolomonError if any block cannot be corrected.
        """
        raw = bytes(data)
        expected = self.payload_length + self.payload_parity_length
        if len(raw) < expected:
            raise ValueError(f"IL2P payload needs {expected} bytes, got {len(raw)}")

        out = bytearray()
        offset = 0
        for size in self._blocks:
            chunk = raw[offset: offset + size + PAYLOAD_PARITY_LENGTH]
            out += self._decode(self._rs_payload, chunk, size)
            offset += size + PAYLOAD_PARITY_LENGTH
        return bytes(out)

    def check_crc(
        self,
        frame: bytes | bytearray | Iterable[int],
        crc: bytes | bytearray | Iterable[int],
    ) -> bool:
        """Check the Hamming-coded trailing CRC against the rebuilt AX.25 frame."""
        codewords = bytes(crc)
        if len(codewords) < CRC_LENGTH:
            raise ValueError(f"IL2P CRC needs {CRC_LENGTH} bytes, got {len(codewords)}")
        received = 0
        for codeword in codewords[:CRC_LENGTH]:
            received = (received << 4) | hamming.decode(codeword)
        calculated = ax25_crc(bytes(frame)[: self.header_length + self.payload_length])
        return received == calculated