"""
Generic Feistel networks. These are the test subjects of the distinguisher:
a 3-round network built here should always be recognized as a Feistel network,
whereas a random permutation (also built here, as a lookup table) should not.

A block is an integer of ``2*n_bits`` bits. The left half is the high
``n_bits`` bits and the right half is the low ``n_bits`` bits. Each round maps
``(left, right)`` to ``(right, left ^ F(right, key))``.
"""

import functools
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

import numpy as np

RoundFunction = Callable[[int, int], int]

def _halves(value: int, n_bits: int) -> Tuple[int, int]:
    r_mask = (1 << n_bits) - 1
    return (value >> n_bits) & r_mask, value & r_mask

def feistel_encrypt(value: int, round_function: RoundFunction,
                    keys: Sequence[int], n_bits: int) -> int:
    """
    Run the network forward, consuming ``keys`` in order.
    """
    l, r = _halves(value, n_bits)

    for key in keys:
        l, r = r, l ^ round_function(r, key)

    return r | (l << n_bits)

def feistel_decrypt(value: int, round_function: RoundFunction,
                    keys: Sequence[int], n_bits: int) -> int:
    """
    Run the network backward, consuming ``keys`` in reverse order. This undoes
    ``feistel_encrypt()`` no matter what ``round_function`` is, since the
    round function is only ever evaluated in the forward direction.
    """
    l, r = _halves(value, n_bits)

    for key in reversed(keys):
        l, r = r ^ round_function(l, key), l

    return r | (l << n_bits)

def make_feistel_encrypt(round_function: RoundFunction, keys: Sequence[int],
                         n_bits: int) -> Callable[[int], int]:
    """
    Bind the round function and keys, returning ``f(value)``.
    """
    return functools.partial(feistel_encrypt, round_function=round_function,
                             keys=tuple(keys), n_bits=n_bits)

def make_feistel_decrypt(round_function: RoundFunction, keys: Sequence[int],
                         n_bits: int) -> Callable[[int], int]:
    return functools.partial(feistel_decrypt, round_function=round_function,
                             keys=tuple(keys), n_bits=n_bits)

@dataclass(frozen=True)
class FeistelNetwork:
    """
    A Feistel network instance: a round function, an immutable key schedule
    and the half-block width. Calling an instance encrypts.
    """
    round_function: RoundFunction
    keys: Tuple[int, ...]
    n_bits: int

    def __post_init__(self):
        # Freeze whatever sequence we were handed
        object.__setattr__(self, 'keys', tuple(self.keys))
        if self.n_bits <= 0:
            raise ValueError('Expected positive half-block width but got '
                             + str(self.n_bits))
        for key in self.keys:
            if not 0 <= key < 1 << self.n_bits:
                raise ValueError('Round key {} does not fit in {} bits'
                                 .format(key, self.n_bits))

    @property
    def n_rounds(self) -> int:
        return len(self.keys)

    @property
    def block_bits(self) -> int:
        return 2*self.n_bits

    def encrypt(self, value: int) -> int:
        return feistel_encrypt(value, self.round_function, self.keys,
                               self.n_bits)

    def decrypt(self, value: int) -> int:
        return feistel_decrypt(value, self.round_function, self.keys,
                               self.n_bits)

    __call__ = encrypt

def random_keys(n_rounds: int, n_bits: int,
                rng: np.random.Generator) -> Tuple[int, ...]:
    """Draw a key schedule of ``n_rounds`` uniform ``n_bits``-bit keys."""
    return tuple(int(k) for k in rng.integers(0, 1 << n_bits, size=n_rounds))

def random_permutation_table(size: int, rng: np.random.Generator,
                             n_swaps: Optional[int] = None) -> np.ndarray:
    """
    Return a lookup table in which every integer in ``[0, size)`` appears
    exactly once. By default the permutation is uniform. Passing ``n_swaps``
    instead starts from the identity and applies that many random
    transpositions (some of which may be no-ops).
    """
    if size <= 0:
        raise ValueError('Expected positive table size but got ' + str(size))

    if n_swaps is None:
        return rng.permutation(size)

    table = np.arange(size)
    xs = rng.integers(0, size, size=n_swaps)
    ys = rng.integers(0, size, size=n_swaps)
    for x, y in zip(xs, ys):
        table[x], table[y] = table[y], table[x]
    return table

def table_round_function(table: np.ndarray) -> RoundFunction:
    """
    A minimal Pearson-hashing style round function: ``F(x, k) = table[x ^ k]``.
    When ``table`` is a permutation, so is ``F(., k)`` for every key.
    """
    table = np.array(table, copy=True)
    table.setflags(write=False)

    def round_function(x: int, key: int) -> int:
        return int(table[x ^ key])

    return round_function

def pair_swap_round_function(x: int, key: int) -> int:
    """
    A toy 4-bit round function: moves the low bit pair up and puts the key in
    the low bit pair.
    """
    left_part = x & 0x3
    right_part = ((x & 0xc) >> 2) ^ key
    return (left_part << 2) | (right_part & 0x3)

def permutation_oracle(table: np.ndarray) -> Callable[[int], int]:
    """
    Wrap a permutation table as a one-argument function ``f(x) = table[x]``.
    """
    table = np.array(table, copy=True)
    table.setflags(write=False)

    def oracle(x: int) -> int:
        return int(table[x])

    return oracle
