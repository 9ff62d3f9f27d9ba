"""
An incremental solver for systems of linear equations over GF(2), the field
with two elements. This is the classical half of Simon's algorithm: every
measurement ``y`` of the input register is an equation ``y . s = 0 (mod 2)``
in the unknown secret string ``s``.

Equations arrive one at a time (one per sample), and the caller needs to know
the rank after each one to decide whether to keep sampling. So rather than
row reducing the whole system at the end, each new equation is tested for
independence as it arrives by row reducing a snapshot of the independent
equations plus the newcomer.

All arithmetic is mod 2: adding two rows is XORing them. Rows are numpy
``uint8`` arrays of length ``n_bits+1``; the final column holds the target.
"""

import enum
import logging
from typing import Iterator, List, Tuple

import numpy as np

from .bitvec import BitVector
from .err import LinearSystemError, InconsistentEquationError, \
                 UnderdeterminedSystemError

logger = logging.getLogger(__name__)

class RowStatus(enum.Enum):
    """
    How a newly submitted equation relates to the equations already held.
    """

    INDEPENDENT = 'independent'
    REDUNDANT = 'redundant'
    INCONSISTENT = 'inconsistent'

def encode_equation(coefficients: BitVector, target: int) -> int:
    """
    Pack an equation into a single integer: bit 0 is the target and bits
    ``1..N`` are the coefficients.
    """
    return int(coefficients) << 1 | (int(target) & 0x1)

def decode_equation(encoded: int, n_bits: int) -> Tuple[BitVector, int]:
    """
    Inverse of ``encode_equation()``.
    """
    if not isinstance(encoded, (int, np.integer)):
        raise TypeError('Expected int as encoded equation, not '
                        + type(encoded).__name__)
    encoded = int(encoded)
    if encoded < 0 or encoded >= 1 << (n_bits+1):
        raise ValueError('Encoded equation {} does not fit in {} bits'
                         .format(encoded, n_bits+1))
    return BitVector(encoded >> 1, n_bits), encoded & 0x1

# Convert the matrix passed in into row echelon form (REF), in place. Columns
# are scanned left to right; the first row at or below the current offset with
# a 1 in the column becomes the pivot, gets swapped up to the offset, and is
# then added (mod 2) to every lower row with a 1 in that column. Returns the
# number of pivots found.
def _ref(mat: np.ndarray) -> int:
    num_rows, num_cols = mat.shape
    row_offset = 0

    for col in range(num_cols):
        if row_offset == num_rows:
            break

        rows_of_nonzeros = mat[row_offset:,col].nonzero()[0]+row_offset
        if not rows_of_nonzeros.size:
            continue

        first_nonzero_row_idx = rows_of_nonzeros[0]
        if first_nonzero_row_idx != row_offset:
            # Swap first nonzero row and the row at the offset
            mat[(row_offset, first_nonzero_row_idx),:] = \
                mat[(first_nonzero_row_idx, row_offset),:]

        for nonzero_row_idx in rows_of_nonzeros[1:]:
            mat[nonzero_row_idx,:] ^= mat[row_offset,:]

        row_offset += 1

    return row_offset

class LinearSolver:
    """
    Holds a system of linear equations over GF(2) in ``n_bits`` unknowns.

    Stored rows are split into an independent prefix, whose length is the
    current ``rank()``, followed by redundant rows that were accepted but
    added no information. Equations that contradict the independent prefix
    are never stored.
    """

    def __init__(self, n_bits: int):
        if not isinstance(n_bits, int):
            raise TypeError('Expected int as number of unknowns, not '
                            + type(n_bits).__name__)
        if n_bits <= 0:
            raise ValueError('Expected positive number of unknowns but got '
                             + str(n_bits))

        self.n_bits = n_bits
        self._rows: List[np.ndarray] = []
        self._rank = 0

    def rank(self) -> int:
        """Number of linearly independent equations held."""
        return self._rank

    def is_full_rank(self) -> bool:
        return self._rank == self.n_bits

    @property
    def n_equations(self) -> int:
        """Number of stored equations, redundant ones included."""
        return len(self._rows)

    def equations(self) -> Iterator[Tuple[BitVector, int]]:
        """
        Yield every stored equation as ``(coefficients, target)``, independent
        equations first.
        """
        for row in self._rows:
            yield BitVector.from_bits(row[:self.n_bits]), int(row[self.n_bits])

    def _as_row(self, coefficients, target) -> np.ndarray:
        if isinstance(coefficients, BitVector):
            if coefficients.n_bits != self.n_bits:
                raise ValueError('Expected {} coefficients but got {}'
                                 .format(self.n_bits, coefficients.n_bits))
            coeffs = np.fromiter(coefficients.get_bits(), dtype=np.uint8,
                                 count=self.n_bits)
        else:
            coeffs = np.asarray(coefficients)
            if coeffs.shape != (self.n_bits,):
                raise ValueError('Expected {} coefficients but got shape {}'
                                 .format(self.n_bits, coeffs.shape))
            if not np.isin(coeffs, (0, 1)).all():
                raise ValueError('Coefficients must all be 0 or 1')
            coeffs = coeffs.astype(np.uint8)

        if int(target) not in (0, 1):
            raise ValueError('Target must be 0 or 1, not ' + str(target))

        return np.append(coeffs, np.uint8(int(target)))

    def _classify(self, row: np.ndarray) -> RowStatus:
        """
        Row reduce a copy of the independent rows plus ``row`` (which goes
        last) and look at what is left of the last row.
        """
        snapshot = np.array(self._rows[:self._rank] + [row], dtype=np.uint8)
        _ref(snapshot)
        reduced = snapshot[-1]

        if not reduced[:self.n_bits].any():
            # Nothing left of the coefficients. Either 0 = 0 or 0 = 1
            return RowStatus.INCONSISTENT if reduced[self.n_bits] \
                   else RowStatus.REDUNDANT
        return RowStatus.INDEPENDENT

    def try_add_equation(self, coefficients, target) -> RowStatus:
        """
        Submit the equation ``coefficients . s = target (mod 2)`` and report
        what happened to it. Inconsistent equations are dropped and reported
        as ``RowStatus.INCONSISTENT`` rather than raised.
        """
        row = self._as_row(coefficients, target)
        status = self._classify(row)

        if status == RowStatus.INDEPENDENT:
            # Store it at the end, then swap it into the independent prefix
            self._rows.append(row)
            last = len(self._rows) - 1
            self._rows[self._rank], self._rows[last] = \
                self._rows[last], self._rows[self._rank]
            self._rank += 1
        elif status == RowStatus.REDUNDANT:
            self._rows.append(row)

        logger.debug('equation %s = %d is %s (rank %d/%d)',
                     ''.join(str(b) for b in row[:self.n_bits]),
                     row[self.n_bits], status.value, self._rank, self.n_bits)
        return status

    def add_equation(self, coefficients, target) -> RowStatus:
        """
        Like ``try_add_equation()``, except an equation contradicting the
        independent equations raises ``InconsistentEquationError``.
        """
        status = self.try_add_equation(coefficients, target)
        if status == RowStatus.INCONSISTENT:
            if not isinstance(coefficients, BitVector):
                coefficients = BitVector.from_bits(coefficients)
            raise InconsistentEquationError(coefficients, int(target),
                                            self._rank)
        return status

    def try_add_encoded(self, encoded: int) -> RowStatus:
        """
        Submit an equation in encoded form: bit 0 is the target, bits ``1..N``
        are the coefficients.
        """
        return self.try_add_equation(*decode_equation(encoded, self.n_bits))

    def add_encoded(self, encoded: int) -> RowStatus:
        return self.add_equation(*decode_equation(encoded, self.n_bits))

    def solve(self) -> BitVector:
        """
        Return the unique vector satisfying every equation. Requires full
        rank. Works on a copy of the independent rows, so calling this
        repeatedly gives the same answer and leaves the solver untouched.
        """
        if self._rank != self.n_bits:
            raise UnderdeterminedSystemError(self._rank, self.n_bits)

        n = self.n_bits
        mat = np.array(self._rows[:n], dtype=np.uint8)

        # Forward phase: with full rank, every pivot lands on the diagonal
        pivots = _ref(mat)
        if pivots != n or not mat.diagonal().all():
            raise LinearSystemError('Independent rows reduced to rank {} '
                                    'instead of {}'.format(pivots, n))

        # Backward phase: resolve unknowns from the last row upward
        result = np.zeros(n, dtype=np.uint8)
        for idx in reversed(range(n)):
            already = np.bitwise_xor.reduce(mat[idx,idx+1:n] & result[idx+1:])
            result[idx] = mat[idx,n] ^ already

        return BitVector.from_bits(result)

    def solve_encoded(self) -> int:
        """
        Solve, then return the solution in the encoded form used for secret
        strings: bit 0 is always 1 and bits ``1..N`` are the solution.
        """
        return int(self.solve()) << 1 | 0x1
