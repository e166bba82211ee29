"""Fixed-point twist (pre-emphasis) filters for the 1200/2200 Hz tones."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable

# Keyed by twist in dB: negative attenuates 1200 Hz, positive attenuates 2200 Hz.
TWIST_COEFFS: dict[int, tuple[int, ...]] = {
    -6: (89, -1473, -5396, -9722, 32767, -9722, -5396, -1473, 89),
    -5: (67, -1516, -5381, -9603, 32767, -9603, -5381, -1516, 67),
    -4: (40, -1566, -5361, -9460, 32767, -9460, -5361, -1566, 40),
    -3: (9, -1624, -5334, -9287, 32767, -9287, -5334, -1624, 9),
    -2: (-30, -1691, -5296, -9074, 32767, -9074, -5296, -1691, -30),
    -1: (-79, -1769, -5241, -8806, 32767, -8806, -5241, -1769, -79),
    0: (-137, -1855, -5161, -8469, 32767, -8469, -5161, -1855, -137),
    1: (-211, -1950, -5036, -8026, 32767, -8026, -5036, -1950, -211),
    2: (-299, -2040, -4841, -7444, 32767, -7444, -4841, -2040, -299),
    3: (-402, -2101, -4510, -6627, 32767, -6627, -4510, -2101, -402),
    4: (-497, -2047, -3919, -5444, 32767, -5444, -3919, -2047, -497),
    5: (-493, -1638, -2767, -3593, 32767, -3593, -2767, -1638, -493),
    6: (0, 0, 0, 0, 32767, 0, 0, 0, 0),
    7: (-3320, 6906, 3482, -22842, 32767, -22842, 3482, 6906, -3320),
    8: (-3082, 6962, 3210, -22701, 32767, -22701, 3210, 6962, -3082),
    9: (-2765, 7022, 2857, -22515, 32767, -22515, 2857, 7022, -2765),
    10: (-2336, 7079, 2391, -22265, 32767, -22265, 2391, 7079, -2336),
    11: (-1745, 7116, 1768, -21919, 32767, -21919, 1768, 7116, -1745),
    12: (-950, 7092, 954, -21447, 32767, -21447, 954, 7092, -950),
}

_NUM_TAPS = 9


def _saturate16(value: int) -> int:
    return max(-32768, min(32767, value))


class Twist:
    """A 9-tap Q15 FIR filter whose response is chosen by a twist setting.

    The valid settings run from -6 to 12; 6 is a flat response.
    """

    def __init__(self, twist: int) -> None:
        self._history: deque[int] = deque([0] * (_NUM_TAPS - 1), maxlen=_NUM_TAPS - 1)
        self._coeffs: tuple[int, ...] = ()
        self.set_twist(twist)

    @property
    def coeffs(self) -> tuple[int, ...]:
        return self._coeffs

    def set_twist(self, twist: int) -> None:
        """Select a new filter response, keeping the sample history."""
        try:
            self._coeffs = TWIST_COEFFS[twist]
        except KeyError:
            raise ValueError(f"twist must be between -6 and 12, not {twist}") from None

    def process(self, samples: Iterable[int]) -> list[int]:
        """Filter a block of Q15 samples, continuing from the previous block."""
        out = []
        for sample in samples:
            # window[0] is the newest sample, window[k] is k samples older
            window = [sample, *reversed(self._history)]
            acc = sum(c * x for c, x in zip(self._coeffs, window))
            out.append(_saturate16(acc >> 15))
            self._history.append(sample)
        return out