"""AX.25 and IL2P framing for packet radio: CRC, Hamming, Reed-Solomon, twist filter and IL2P codec."""

__version__ = "0.1.0"

__all__ = ["crc", "hamming", "frame", "twist", "rs", "il2prx", "il2ptx"]