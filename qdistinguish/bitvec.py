"""
A small fixed-width bit vector type. Rows of the GF(2) solver, solutions and
secret strings are all ``BitVector`` instances.

Unlike a Python ``str`` of ``'0'``s and ``'1'``s, component ``i`` of a
``BitVector`` is bit ``i`` of the backing integer, i.e., index 0 is the
*least* significant bit. That is the same convention as the encoded equation
format, where bit 0 holds the target and bits ``1..N`` hold the coefficients.
"""

import operator
import functools
from typing import Iterable, Iterator

class BitVector:
    """
    An immutable vector of ``n_bits`` bits. Instantiate one with::

        v = BitVector(0b110, 3)

    or from its components (least significant first)::

        v = BitVector.from_bits([0, 1, 1])

    ``str(v)`` prints the most significant bit first, like a binary literal.
    """

    __slots__ = ('as_int', 'n_bits')

    def __init__(self, as_int: int, n_bits: int):
        if not isinstance(as_int, int):
            raise TypeError('Expected int as value of BitVector, not '
                            + type(as_int).__name__)
        if not isinstance(n_bits, int):
            raise TypeError('Expected int as number of bits for BitVector, '
                            'not ' + type(n_bits).__name__)
        if n_bits <= 0:
            raise ValueError('Expected positive number of bits but got '
                             + str(n_bits))

        object.__setattr__(self, 'as_int', as_int & ((1 << n_bits)-1))
        object.__setattr__(self, 'n_bits', n_bits)

    def __setattr__(self, name, value):
        raise AttributeError('BitVector is immutable')

    @classmethod
    def zeros(cls, n_bits: int):
        return cls(0, n_bits)

    @classmethod
    def from_bits(cls, bits: Iterable[int]):
        """
        Build a vector from an iterable of 0/1 components, least significant
        component first. Accepts numpy arrays too.
        """
        as_int = 0
        n_bits = 0
        for i, b in enumerate(bits):
            if int(b) not in (0, 1):
                raise ValueError('Expected only 0 or 1 components, got '
                                 + str(b))
            as_int |= int(b) << i
            n_bits += 1
        return cls(as_int, n_bits)

    @classmethod
    def from_str(cls, bits: str):
        """
        Parse a nonempty binary string written most significant bit first, so
        that ``BitVector.from_str('110') == BitVector(0b110, 3)``.
        """
        return cls(int(bits, 2), len(bits))

    def __hash__(self):
        return hash((self.as_int, self.n_bits))

    def __len__(self):
        return self.n_bits

    def __eq__(self, other):
        return isinstance(other, BitVector) \
               and other.as_int == self.as_int \
               and other.n_bits == self.n_bits

    def __str__(self):
        return '{:0{n}b}'.format(self.as_int, n=self.n_bits)

    def __repr__(self):
        return 'BitVector(0b{:0{}b}, {})'.format(self.as_int, self.n_bits,
                                                 self.n_bits)

    def __bool__(self):
        return bool(self.as_int)

    def __int__(self):
        return self.as_int

    def __index__(self):
        return self.as_int

    def __getitem__(self, idx: int) -> int:
        idx = int(idx)
        if idx < 0 or idx >= self.n_bits:
            raise IndexError('index out of range')
        return (self.as_int >> idx) & 0x1

    def __iter__(self) -> Iterator[int]:
        return self.get_bits()

    def get_bits(self) -> Iterator[int]:
        """
        Yield every component (each as an ``int``), least significant first.
        """
        for i in range(self.n_bits):
            yield (self.as_int >> i) & 0x1

    def _get_other_int(self, other):
        if isinstance(other, BitVector):
            if self.n_bits != other.n_bits:
                raise TypeError('bit size mismatch: {} != {}'
                                .format(self.n_bits, other.n_bits))
            return other.as_int
        elif isinstance(other, int):
            return other
        else:
            return NotImplemented

    def __xor__(self, other):
        other_int = self._get_other_int(other)
        if other_int is NotImplemented:
            return NotImplemented
        return BitVector(self.as_int ^ other_int, self.n_bits)

    def __and__(self, other):
        other_int = self._get_other_int(other)
        if other_int is NotImplemented:
            return NotImplemented
        return BitVector(self.as_int & other_int, self.n_bits)

    def __rxor__(self, other):
        # XOR is commutative
        return self.__xor__(other)

    def __rand__(self, other):
        # AND is commutative
        return self.__and__(other)

    def xor_reduce(self) -> int:
        """
        XOR all components together (the parity of the vector).
        """
        return functools.reduce(operator.xor, self.get_bits(), 0)

    def dot(self, other) -> int:
        """
        Inner product over GF(2), i.e., ``sum(a_i * b_i) mod 2``.
        """
        return (self & other).xor_reduce()

    def weight(self) -> int:
        """Hamming weight."""
        return bin(self.as_int).count('1')
