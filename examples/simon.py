#!/usr/bin/env python3

"""
Simon's algorithm on its own, using the same sampler and GF(2) solver as the
Feistel distinguisher.

The black box is ``f(x) = min(x, x ^ s)``, which is 2-to-1 with secret string
``s``. Like the distinguisher, this only handles secret strings whose lowest
bit is 1: each measurement ``y`` then gives the equation
``y_1 s_1 ^ ... ^ y_n s_n = y_0`` in the remaining bits, which has a unique
solution once ``n`` independent measurements are in.
"""

from argparse import ArgumentParser

import numpy as np

from qdistinguish import LinearSolver, BitVector, get_sampler, to_reversible
from qdistinguish.sampling import sampler_names

def simon(f, num_bits, sampler, num_attempts):
    oracle = to_reversible(f, num_bits, num_bits)
    solver = LinearSolver(num_bits - 1)

    for _ in range(num_attempts):
        solver.try_add_encoded(sampler.sample(oracle))
        if solver.is_full_rank():
            return BitVector(solver.solve_encoded(), num_bits)

    raise Exception(f'exceeded {num_attempts} tries')

def get_black_box(secret):
    def black_box(x):
        return min(x, x ^ secret)
    return black_box

def naive_classical(f, num_bits):
    out_to_x = {}
    for x in range(2**num_bits):
        out = f(x)
        if out in out_to_x:
            return BitVector(x ^ out_to_x[out], num_bits)
        out_to_x[out] = x

if __name__ == '__main__':
    parser = ArgumentParser(description=__doc__)
    parser.add_argument('secret_bits',
                        help='The secret bitstring, ending in 1. '
                             'Example: 1101')
    parser.add_argument('--sampler',
                        choices=sampler_names(),
                        default=None,
                        help='How to run the circuit. The default is exact '
                             'classical sampling.')
    parser.add_argument('--attempts', '-a',
                        type=int,
                        default=256,
                        help='Measurements to take before giving up')
    args = parser.parse_args()

    secret = BitVector.from_str(args.secret_bits)
    if not secret[0] or len(secret) < 2:
        parser.error('secret must have at least 2 bits and end in 1')

    num_bits = len(secret)
    f = get_black_box(int(secret))
    sampler = get_sampler(args.sampler, rng=np.random.default_rng())

    print('Classical:', naive_classical(f, num_bits))
    print('Quantum:  ', simon(f, num_bits, sampler, args.attempts))
