"""
The masked probe function from the Kuwakado-Morii quantum distinguisher for
3-round Feistel networks. Given an oracle ``V`` on ``2*n_bits``-bit blocks and
two constants ``alpha`` and ``beta``, the probe maps ``n_bits+1`` bits to
``n_bits`` bits::

    f(a || b) = high_half(V(a || mask)) ^ mask,   mask = beta if b else alpha

If ``V`` is a 3-round Feistel network with round functions ``F1, F2, F3``
then ``f(a || 0) = F2(a ^ F1(alpha))`` and ``f(a || 1) = F2(a ^ F1(beta))``,
so ``f(u) == f(u ^ s)`` for every ``u`` with the secret string
``s = (F1(alpha) ^ F1(beta)) || 1``. A random permutation has no such ``s``.
"""

from dataclasses import dataclass
from typing import Callable

import numpy as np

Oracle = Callable[[int], int]

@dataclass(frozen=True)
class MaskingParams:
    """
    The two masks used by the probe function. Chosen once per run.
    """
    alpha: int
    beta: int
    n_bits: int

    def __post_init__(self):
        if self.n_bits <= 0:
            raise ValueError('Expected positive number of bits but got '
                             + str(self.n_bits))
        for name in ('alpha', 'beta'):
            if not 0 <= getattr(self, name) < 1 << self.n_bits:
                raise ValueError('{} = {} does not fit in {} bits'
                                 .format(name, getattr(self, name),
                                         self.n_bits))

    @classmethod
    def random(cls, n_bits: int, rng: np.random.Generator):
        alpha, beta = (int(m) for m in rng.integers(0, 1 << n_bits, size=2))
        return cls(alpha, beta, n_bits)

def probe(x: int, oracle: Oracle, params: MaskingParams) -> int:
    """
    Evaluate the probe function on ``x``, an ``n_bits+1``-bit integer whose
    low bit selects the mask.
    """
    n_bits = params.n_bits
    if not 0 <= x < 1 << (n_bits+1):
        raise ValueError('Probe input {} does not fit in {} bits'
                         .format(x, n_bits+1))

    a = x >> 1
    b = x & 0x1
    mask = params.beta if b else params.alpha

    w = (oracle(a << n_bits | mask) >> n_bits) & ((1 << n_bits) - 1)
    return w ^ mask

class ProbeFunction:
    """
    ``probe()`` with the oracle and masks bound, so that it can be handed to
    the oracle adapter as an ordinary one-argument function.
    """

    def __init__(self, oracle: Oracle, params: MaskingParams):
        self.oracle = oracle
        self.params = params

    @property
    def input_width(self) -> int:
        return self.params.n_bits + 1

    @property
    def output_width(self) -> int:
        return self.params.n_bits

    def __call__(self, x: int) -> int:
        return probe(x, self.oracle, self.params)

    def is_period(self, s: int, u: int) -> bool:
        """
        The classical consistency check: does ``f(u) == f(u ^ s)``?
        """
        return self(u) == self(u ^ s)
