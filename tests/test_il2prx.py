import pytest
from hypothesis import given, settings, strategies as st

from il2pmodem import hamming
from il2pmodem.crc import ax25_crc
from il2pmodem.il2prx import IL2PDecoder
from il2pmodem.rs import ReedSolomon, ReedSolomonError


def scramble(data):
    """Inverse of the receive-side descrambler."""
    out = bytearray(len(data))
    sr = 0x01F0
    for index, byte in enumerate(data):
        value = 0
        for shift in range(7, -1, -1):
            wanted = (byte >> shift) & 1
            bit = wanted ^ (sr & 1)
            if bit:
                sr ^= 0x0211
            sr >>= 1
            value = (value << 1) | bit
        out[index] = value
    return bytes(out)


def protect(block, nroots):
    scrambled = scramble(block)
    return scrambled + ReedSolomon(nroots).encode(scrambled)


def set_length(header, length):
    for k in range(10):
        if length & (0x200 >> k):
            header[2 + k] |= 0x80


def type0_header(length, crc=True):
    header = bytearray(13)
    set_length(header, length)
    if not crc:
        header[0] |= 0x80
    return protect(bytes(header), 2)


def encode_payload(payload, sizes):
    out = b""
    offset = 0
    for size in sizes:
        out += protect(payload[offset:offset + size], 16)
        offset += size
    return out


def sixbit_header(dest, dssid, src, sssid):
    header = bytearray(13)
    for i in range(6):
        header[i] = dest[i] - 0x20
        header[i + 6] = src[i] - 0x20
    header[1] |= 0x80
    header[12] = (dssid << 4) | sssid
    return header


def test_type0_header_reports_length_and_crc():
    decoder = IL2PDecoder()
    assert decoder.process_header(type0_header(300)) == b""
    assert decoder.header_length == 0
    assert decoder.payload_length == 300
    assert decoder.has_crc is True
    assert decoder.block_sizes == (150, 150)
    assert decoder.payload_parity_length == 32


def test_type0_without_crc():
    decoder = IL2PDecoder()
    decoder.process_header(type0_header(10, crc=False))
    assert decoder.has_crc is False
    assert decoder.payload_length == 10


def test_block_sizes_put_large_blocks_first():
    decoder = IL2PDecoder()
    decoder.process_header(type0_header(241))
    assert decoder.block_sizes == (121, 120)
    assert sum(decoder.block_sizes) == 241


def test_payload_round_trip():
    decoder = IL2PDecoder()
    payload = bytes(range(256)) + bytes(range(44))
    decoder.process_header(type0_header(len(payload)))
    encoded = encode_payload(payload, decoder.block_sizes)
    assert decoder.process_payload(encoded) == payload


@settings(max_examples=20, deadline=None)
@given(st.binary(min_size=1, max_size=600))
def test_payload_round_trip_any_length(payload):
    decoder = IL2PDecoder()
    decoder.process_header(type0_header(len(payload)))
    assert sum(decoder.block_sizes) == len(payload)
    assert all(size <= 239 for size in decoder.block_sizes)
    encoded = encode_payload(payload, decoder.block_sizes)
    assert decoder.process_payload(encoded) == payload


def test_header_single_error_is_corrected():
    decoder = IL2PDecoder()
    damaged = bytearray(type0_header(77))
    damaged[4] ^= 0x5A
    decoder.process_header(damaged)
    assert decoder.payload_length == 77


def test_payload_errors_are_corrected():
    decoder = IL2PDecoder()
    payload = bytes((i * 7) & 0xFF for i in range(100))
    decoder.process_header(type0_header(len(payload)))
    encoded = bytearray(encode_payload(payload, decoder.block_sizes))
    for pos in (0, 13, 50, 99, 105):
        encoded[pos] ^= 0xFF
    assert decoder.process_payload(encoded) == payload


def test_payload_too_many_errors_raises():
    decoder = IL2PDecoder()
    payload = bytes((i * 3) & 0xFF for i in range(100))
    decoder.process_header(type0_header(len(payload)))
    encoded = bytearray(encode_payload(payload, decoder.block_sizes))
    for pos in range(0, 90, 10):
        encoded[pos] ^= 0xA5
    with pytest.raises(ReedSolomonError):
        decoder.process_payload(encoded)


def test_short_header_raises():
    with pytest.raises(ValueError):
        IL2PDecoder().process_header(bytes(14))


def test_short_payload_raises():
    decoder = IL2PDecoder()
    decoder.process_header(type0_header(50))
    with pytest.raises(ValueError):
        decoder.process_payload(bytes(50))


def test_type1_ui_header():
    header = sixbit_header(b"APRS  ", 0, b"N0CALL", 7)
    header[0] |= 0x40  # UI
    header[6] |= 0x40
    header[8] |= 0x40
    header[9] |= 0x40  # command
    for i in range(1, 5):
        header[i] |= 0x40  # PID 0x0F, no layer 3
    set_length(header, 5)

    decoder = IL2PDecoder()
    ax25 = decoder.process_header(protect(bytes(header), 2))
    expected = (
        bytes(c << 1 for c in b"APRS  ") + bytes([0xE0])
        + bytes(c << 1 for c in b"N0CALL") + bytes([(7 << 1) | 0x61])
        + bytes([0x03, 0xF0])
    )
    assert ax25 == expected
    assert decoder.header_length == 16
    assert decoder.payload_length == 5


def test_type1_sabm_header():
    header = sixbit_header(b"N0CALL", 2, b"N1CALL", 3)
    header[4] |= 0x40  # PID 1: U frame
    header[5] |= 0x40
    header[9] |= 0x40
    decoder = IL2PDecoder()
    ax25 = decoder.process_header(protect(bytes(header), 2))
    assert decoder.header_length == 15
    assert decoder.payload_length == 0
    assert decoder.block_sizes == ()
    assert ax25[6] == (2 << 1) | 0xE0
    assert ax25[13] == (3 << 1) | 0x61
    assert ax25[14] == 0x3F


def test_type1_rr_header():
    header = sixbit_header(b"N0CALL", 0, b"N1CALL", 0)
    decoder = IL2PDecoder()
    ax25 = decoder.process_header(protect(bytes(header), 2))
    assert len(ax25) == 15
    assert ax25[14] == 0x01


def _full_frame():
    header = sixbit_header(b"APRS  ", 0, b"N0CALL", 1)
    header[0] |= 0x40
    header[6] |= 0x40
    header[8] |= 0x40
    for i in range(1, 5):
        header[i] |= 0x40
    payload = b"hello world"
    set_length(header, len(payload))
    decoder = IL2PDecoder()
    ax25_header = decoder.process_header(protect(bytes(header), 2))
    decoded = decoder.process_payload(encode_payload(payload, decoder.block_sizes))
    return decoder, ax25_header + decoded


def _crc_codewords(frame):
    crc = ax25_crc(frame)
    return bytes(hamming.encode(crc >> shift) for shift in (12, 8, 4, 0))


def test_check_crc_accepts_matching_frame():
    decoder, frame = _full_frame()
    assert frame.endswith(b"hello world")
    assert decoder.check_crc(frame, _crc_codewords(frame)) is True


def test_check_crc_corrects_codeword_bit_error():
    decoder, frame = _full_frame()
    crc = bytearray(_crc_codewords(frame))
    crc[2] ^= 0x04
    assert decoder.check_crc(frame, crc) is True


def test_check_crc_rejects_corrupt_frame():
    decoder, frame = _full_frame()
    crc = _crc_codewords(frame)
    corrupt = bytearray(frame)
    corrupt[-1] ^= 0x01
    assert decoder.check_crc(corrupt, crc) is False