"""
Turns a classical function ``f`` from ``n_in`` bits to ``n_out`` bits into a
bit-flip oracle ``U_f|x>|y> = |x>|y ^ f(x)>``, described as a list of
conditional bit flips: for every input ``i`` and every output bit ``j`` set in
``f(i)``, flip output bit ``j`` when the input register equals ``i``.

Nothing here touches a quantum state. A ``Sampler`` (see ``sampling.py``)
decides how to realize the flips. Enumerating every input costs ``2**n_in``
evaluations of ``f``, which is what limits the usable widths.
"""

from dataclasses import dataclass
from typing import Callable, List, Tuple

import numpy as np

from .err import OracleError

# Enumeration (and the truth table) grows as 2**n_in
MAX_INPUT_WIDTH = 16

@dataclass(frozen=True)
class BitFlip:
    """
    Flip output bit ``target`` if the input register holds exactly ``value``.
    """
    value: int
    target: int

def control_positions(mask: int, width: int, offset: int = 0) -> List[int]:
    """
    Indices of the set bits of ``mask`` (only the low ``width`` bits are
    looked at), shifted by ``offset``. For example, ``offset=2, mask=0b101``
    gives ``[2, 4]``.
    """
    return [offset + j for j in range(width) if mask >> j & 0x1]

class BitFlipOracle:
    """
    The flips realizing ``U_f`` for some classical ``f``, along with the truth
    table they were computed from. Build one with ``to_reversible()``.

    Qubits ``0..n_in-1`` are the input register and ``n_in..n_in+n_out-1``
    the output register, least significant bit first.
    """

    def __init__(self, n_in: int, n_out: int, truth_table: np.ndarray):
        self.n_in = n_in
        self.n_out = n_out
        self.truth_table = truth_table
        self.truth_table.setflags(write=False)

        flips = []
        for value, result in enumerate(truth_table):
            flips.extend(BitFlip(value, j)
                         for j in control_positions(int(result), n_out))
        self.flips: Tuple[BitFlip, ...] = tuple(flips)

    @property
    def n_qubits(self) -> int:
        return self.n_in + self.n_out

    def __len__(self):
        return len(self.flips)

    def __repr__(self):
        return 'BitFlipOracle(n_in={}, n_out={}, flips={})' \
               .format(self.n_in, self.n_out, len(self.flips))

    def flips_for(self, value: int) -> List[BitFlip]:
        """All flips conditioned on the input register equaling ``value``."""
        return [flip for flip in self.flips if flip.value == value]

    def apply(self, x: int, y: int) -> int:
        """
        Classical action of the oracle on a basis state: apply every flip
        whose condition matches ``x`` to the output register ``y``. Always
        equals ``y ^ f(x)``.
        """
        for flip in self.flips:
            if flip.value == x:
                y ^= 1 << flip.target
        return y

def to_reversible(fn: Callable[[int], int], n_in: int,
                  n_out: int) -> BitFlipOracle:
    """
    Evaluate ``fn`` on every input in ``[0, 2**n_in)`` and return the
    bit-flip oracle for it.
    """
    if n_in <= 0 or n_out <= 0:
        raise OracleError('Register widths must be positive, got n_in={} '
                          'and n_out={}'.format(n_in, n_out))
    if n_in > MAX_INPUT_WIDTH:
        raise OracleError('Refusing to enumerate 2**{} inputs (the limit is '
                          '2**{})'.format(n_in, MAX_INPUT_WIDTH))

    truth_table = np.empty(1 << n_in, dtype=np.int64)
    for i in range(1 << n_in):
        result = fn(i)
        if not 0 <= result < 1 << n_out:
            raise OracleError('f({}) = {} does not fit in {} output bits'
                              .format(i, result, n_out))
        truth_table[i] = result

    return BitFlipOracle(n_in, n_out, truth_table)
