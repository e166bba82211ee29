# il2pmodem

Framing for packet-radio modems, in pure Python. It covers AX.25 frames and
IL2P (Improved Layer 2 Protocol), the encoding that carries them over the air.

## Modules

- `il2pmodem.crc`: `ax25_crc(data)` returns the 16-bit CCITT frame check
  sequence that AX.25 uses.
- `il2pmodem.hamming`: `encode(value)` turns the low nibble of `value` into a
  7-bit Hamming(7,4) codeword. `decode(value)` returns the nibble and corrects
  a single bit error.
- `il2pmodem.frame`: `AX25Frame(data)` is a frame buffer of at most 300 bytes.
  It has the following methods:
  - `append(value)` adds a byte and raises `OverflowError` when the buffer is
    full.
  - `add_crc()` appends the FCS, low byte first, and stores it in `fcs`.
  - `check_crc()` checks the last two bytes against the FCS of the rest of the
    frame.
- `il2pmodem.twist`: `Twist(twist)` is a 9-tap Q15 FIR filter that tilts the
  1200/2200 Hz tone balance. Its settings run from -6 to 12, and 6 gives a
  flat response. `set_twist(twist)` changes the response and keeps the sample
  history. `process(samples)` filters one block of samples and carries on from
  the previous block. A setting outside that range raises `ValueError`.
- `il2pmodem.rs`: `ReedSolomon(nroots)` is a GF(256) Reed-Solomon code with
  first consecutive root alpha^0. IL2P uses 2 parity symbols for headers and
  16 for payload blocks. Blocks shorter than 255 bytes are treated as
  shortened codes.
  - `encode(data)` returns the parity bytes.
  - `decode(codeword)` returns the corrected codeword and the positions of the
    errors it found.
  - When a block cannot be corrected, `decode` raises `ReedSolomonError`. It
    also raises it when the only possible correction would fall in the
    implied zero padding.
- `il2pmodem.il2ptx`: `IL2PEncoder().encode(frame)` turns an AX.25 frame,
  given without its FCS, into an IL2P stream. The stream holds a scrambled
  13-byte header with 2 RS parity bytes, then scrambled payload blocks of at
  most 239 bytes with 16 parity bytes each, then the frame's CRC as four
  Hamming codewords. `is_type1(frame)` tells whether the frame's addresses and
  control field fit the compact type 1 header. Any other frame is sent whole
  as the payload of a type 0 header. A payload longer than 1023 bytes raises
  `ValueError`.
- `il2pmodem.il2prx`: `IL2PDecoder` reverses the encoding.
  - `process_header(data)` decodes the 15 header bytes and returns the AX.25
    header they stand for. A type 0 header returns empty bytes.
  - After `process_header`, the attributes `header_length`, `payload_length`,
    `payload_parity_length`, `block_sizes` and `has_crc` describe the rest of
    the frame.
  - `process_payload(data)` returns the decoded payload.
  - `check_crc(frame, crc)` compares the trailing CRC with the rebuilt frame.

## Installing

```
pip install il2pmodem
```

## Example

```python
from il2pmodem.il2ptx import IL2PEncoder
from il2pmodem.il2prx import IL2PDecoder


def address(call, ssid_byte):
    return bytes(ord(c) << 1 for c in call.ljust(6)) + bytes([ssid_byte])


# A UI command frame with PID 0xF0, without its FCS
frame = address("APRS", 0xE0) + address("N0CALL", 0x61) + b"\x03\xf0hello"
stream = IL2PEncoder().encode(frame)

decoder = IL2PDecoder()
header = decoder.process_header(stream[:15])
n = decoder.payload_length + decoder.payload_parity_length
payload = decoder.process_payload(stream[15:15 + n])
crc = stream[15 + n:15 + n + 4]

assert header + payload == frame
assert decoder.check_crc(header + payload, crc)
```

## What it does not do

The package works on bytes and on blocks of Q15 samples. It includes no AFSK
or 4-level FSK modulator or demodulator, no HDLC bit layer, no sync detection,
no KISS or serial interface, and no audio or radio input and output. The twist
filter is its only piece of signal processing.

## Tests

Install the `test` extra and run `pytest`.