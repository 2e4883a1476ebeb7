"""Core arithmetic for the Chaum-Pedersen identification protocol."""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

from .constants import ALPHA, BETA, P, Q


class RandomSource(Protocol):
    """Anything able to draw a uniform integer in ``[0, bound)``."""

    def randbelow(self, bound: int) -> int:
        ...


class SystemRandomSource:
    """Randomness backed by the operating system CSPRNG."""

    def randbelow(self, bound: int) -> int:
        return secrets.randbelow(bound)


@dataclass(frozen=True)
class GroupParameters:
    """Discrete-log group: modulus ``p``, subgroup order ``q`` and two generators."""

    p: int
    q: int
    alpha: int
    beta: int

    @classmethod
    def default(cls) -> "GroupParameters":
        return cls(p=P, q=Q, alpha=ALPHA, beta=BETA)

    def validate(self) -> "GroupParameters":
        if (self.p - 1) % self.q != 0:
            raise ValueError("q must divide p - 1")
        for name, generator in (("alpha", self.alpha), ("beta", self.beta)):
            if not 1 < generator < self.p:
                raise ValueError(f"{name} must lie in (1, p)")
            if pow(generator, self.q, self.p) != 1:
                raise ValueError(f"{name} must generate the order-q subgroup")
        return self


def exponentiate(n: int, exponent: int, modulus: int) -> int:
    """Return ``n^exponent mod modulus``."""

    return pow(n, exponent, modulus)


class ChaumPedersen:
    """Prover and verifier arithmetic for equality of two discrete logs.

    The same engine is used on both ends: the client derives commitments and
    solves challenges, the server checks the two verification equations.
    """

    def __init__(
        self,
        params: Optional[GroupParameters] = None,
        rng: Optional[RandomSource] = None,
    ) -> None:
        self.params = params or GroupParameters.default()
        self.rng = rng or SystemRandomSource()

    @property
    def q(self) -> int:
        return self.params.q

    def commitment_pair(self, exponent: int) -> Tuple[int, int]:
        """Return ``(alpha^e mod p, beta^e mod p)``."""

        p = self.params.p
        return exponentiate(self.params.alpha, exponent, p), exponentiate(self.params.beta, exponent, p)

    def random_exponent(self, bound: Optional[int] = None) -> int:
        return self.rng.randbelow(self.q if bound is None else bound)

    def solve(self, k: int, c: int, x: int) -> int:
        """Return ``s = k - c*x mod q``, always in ``[0, q)``."""

        q = self.q
        cx = c * x
        if k >= cx:
            return (k - cx) % q
        # q - 0 would escape the range when c*x - k is a multiple of q.
        return (q - (cx - k) % q) % q

    def verify(self, y1: int, y2: int, r1: int, r2: int, c: int, s: int) -> bool:
        """Check ``r1 = alpha^s * y1^c`` and ``r2 = beta^s * y2^c`` modulo ``p``."""

        p = self.params.p
        # alpha and beta have order q.
        s %= self.q
        condition1 = r1 == (pow(self.params.alpha, s, p) * pow(y1, c, p)) % p
        condition2 = r2 == (pow(self.params.beta, s, p) * pow(y2, c, p)) % p
        return condition1 and condition2


__all__ = [
    "ChaumPedersen",
    "GroupParameters",
    "RandomSource",
    "SystemRandomSource",
    "exponentiate",
]
