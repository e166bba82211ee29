"""Reed-Solomon codec over GF(256) as used by IL2P.

The field is generated by x^8 + x^4 + x^3 + x^2 + 1, the first consecutive
root is alpha^0 and the primitive element is alpha.  Blocks shorter than
255 bytes are handled as shortened codes, with virtual leading zeros.
"""

from __future__ import annotations

from collections.abc import Iterable

MM = 8
NN = (1 << MM) - 1
A0 = NN  # index-form representation of zero
FCR = 0
PRIM = 1
IPRIM = 1

_GF_POLY = 0x11D


def _build_tables() -> tuple[tuple[int, ...], tuple[int, ...]]:
    alpha_to = [0] * (NN + 1)
    index_of = [0] * (NN + 1)
    index_of[0] = A0
    alpha_to[A0] = 0
    sr = 1
    for i in range(NN):
        index_of[sr] = i
        alpha_to[i] = sr
        sr <<= 1
        if sr & (1 << MM):
            sr ^= _GF_POLY
        sr &= NN
    return tuple(alpha_to), tuple(index_of)


ALPHA_TO, INDEX_OF = _build_tables()


def _modnn(value: int) -> int:
    return value % NN


def _generator(nroots: int) -> tuple[int, ...]:
    """Return the generator polynomial in index form, lowest power first."""
    gen = [1] + [0] * nroots
    root = FCR * PRIM
    for i in range(nroots):
        gen[i + 1] = 1
        for j in range(i, 0, -1):
            if gen[j] != 0:
                gen[j] = gen[j - 1] ^ ALPHA_TO[_modnn(INDEX_OF[gen[j]] + root)]
            else:
                gen[j] = gen[j - 1]
        gen[0] = ALPHA_TO[_modnn(INDEX_OF[gen[0]] + root)]
        root += PRIM
    return tuple(INDEX_OF[coeff] for coeff in gen)


class ReedSolomonError(ValueError):
    """Raised when a block holds more errors than the code can correct."""


class ReedSolomon:
    """A Reed-Solomon code with ``nroots`` parity symbols per block."""

    def __init__(self, nroots: int) -> None:
        if not 1 <= nroots < NN:
            raise ValueError(f"nroots must be between 1 and {NN - 1}, not {nroots}")
        self.nroots = nroots
        self.generator = _generator(nroots)

    def __repr__(self) -> str:
        return f"ReedSolomon(nroots={self.nroots})"

    @property
    def max_message_length(self) -> int:
        return NN - self.nroots

    def encode(self, data: bytes | bytearray | Iterable[int]) -> bytes:
        """Return the parity symbols for ``data`` (at most 255 - nroots bytes)."""
        message = bytes(data)
        nroots = self.nroots
        if len(message) > self.max_message_length:
            raise ValueError(
                f"message of {len(message)} bytes is longer than {self.max_message_length}"
            )
        gen = self.generator
        parity = [0] * nroots
        for byte in message:
            feedback = INDEX_OF[byte ^ parity[0]]
            if feedback != A0:
                for j in range(1, nroots):
                    parity[j] ^= ALPHA_TO[_modnn(feedback + gen[nroots - j])]
            tail = ALPHA_TO[_modnn(feedback + gen[0])] if feedback != A0 else 0
            parity = parity[1:] + [tail]
        return bytes(parity)

    def decode(
        self, data: bytes | bytearray | Iterable[int]
    ) -> tuple[bytes, tuple[int, ...]]:
        """Correct a codeword (message followed by parity).

        Returns the corrected codeword and the positions, within ``data``,
        of the symbols found to be in error.  Raises ReedSolomonError if the
        block cannot be corrected, including when the only correction would
        fall in the virtual zero padding of a shortened block.
        """
        word = bytes(data)
        nroots = self.nroots
        if not nroots <= len(word) <= NN:
            raise ValueError(
                f"codeword must be between {nroots} and {NN} bytes, not {len(word)}"
            )
        pad = NN - len(word)
        block = bytearray(pad) + bytearray(word)

        locations = self._decode_block(block)
        if any(loc < pad for loc in locations):
            raise ReedSolomonError("correction falls outside the shortened block")
        return bytes(block[pad:]), tuple(loc - pad for loc in locations)

    def _decode_block(self, block: bytearray) -> list[int]:
        nroots = self.nroots

        # Syndromes: evaluate the block at the roots of the generator.
        syn = [block[0]] * nroots
        for byte in block[1:]:
            syn = [
                byte if s == 0 else byte ^ ALPHA_TO[_modnn(INDEX_OF[s] + (FCR + i) * PRIM)]
                for i, s in enumerate(syn)
            ]
        if not any(syn):
            return []
        s = [INDEX_OF[value] for value in syn]

        # Berlekamp-Massey: error locator polynomial.
        lam = [1] + [0] * nroots
        b = [INDEX_OF[value] for value in lam]
        el = 0
        for r in range(1, nroots + 1):
            discr = 0
            for i in range(r):
                if lam[i] != 0 and s[r - i - 1] != A0:
                    discr ^= ALPHA_TO[_modnn(INDEX_OF[lam[i]] + s[r - i - 1])]
            discr = INDEX_OF[discr]
            if discr == A0:
                b = [A0] + b[:-1]
                continue
            t = [lam[0]] + [
                lam[i + 1] ^ ALPHA_TO[_modnn(discr + b[i])] if b[i] != A0 else lam[i + 1]
                for i in range(nroots)
            ]
            if 2 * el <= r - 1:
                el = r - el
                b = [A0 if v == 0 else _modnn(INDEX_OF[v] - discr + NN) for v in lam]
            else:
                b = [A0] + b[:-1]
            lam = t

        lam = [INDEX_OF[v] for v in lam]
        deg_lambda = max((i for i, v in enumerate(lam) if v != A0), default=0)

        # Chien search for the roots of the locator.
        reg = lam[:]
        roots: list[int] = []
        locs: list[int] = []
        k = IPRIM - 1
        for i in range(1, NN + 1):
            q = 1
            for j in range(deg_lambda, 0, -1):
                if reg[j] != A0:
                    reg[j] = _modnn(reg[j] + j)
                    q ^= ALPHA_TO[reg[j]]
            if q == 0:
                roots.append(i)
                locs.append(k)
                if len(roots) == deg_lambda:
                    break
            k = _modnn(k + IPRIM)
        if len(roots) != deg_lambda:
            raise ReedSolomonError("uncorrectable block")

        # Error evaluator polynomial.
        deg_omega = deg_lambda - 1
        omega = []
        for i in range(deg_omega + 1):
            tmp = 0
            for j in range(i, -1, -1):
                if s[i - j] != A0 and lam[j] != A0:
                    tmp ^= ALPHA_TO[_modnn(s[i - j] + lam[j])]
            omega.append(INDEX_OF[tmp])

        # Forney: error values.
        for root, loc in reversed(list(zip(roots, locs))):
            num1 = 0
            for i in range(deg_omega, -1, -1):
                if omega[i] != A0:
                    num1 ^= ALPHA_TO[_modnn(omega[i] + i * root)]
            num2 = ALPHA_TO[_modnn(root * (FCR - 1) + NN)]
            den = 0
            for i in range(min(deg_lambda, nroots - 1) & ~1, -1, -2):
                if lam[i + 1] != A0:
                    den ^= ALPHA_TO[_modnn(lam[i + 1] + i * root)]
            if num1 != 0:
                block[loc] ^= ALPHA_TO[
                    _modnn(INDEX_OF[num1] + INDEX_OF[num2] + NN - INDEX_OF[den])
                ]

        return locs