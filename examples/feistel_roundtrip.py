#!/usr/bin/env python3

"""
Encrypt a random block with a small Feistel network and decrypt it again. The
round function swaps bit pairs and mixes in the key, and is not invertible on
its own; the network is anyway.
"""

from argparse import ArgumentParser

import numpy as np

from qdistinguish import FeistelNetwork
from qdistinguish.feistel import pair_swap_round_function

if __name__ == '__main__':
    parser = ArgumentParser(description=__doc__)
    parser.add_argument('--seed', '-s',
                        type=int,
                        default=None,
                        help='Random seed for the input block')
    args = parser.parse_args()

    rng = np.random.default_rng(args.seed)
    network = FeistelNetwork(pair_swap_round_function, (1, 2, 3), n_bits=4)

    plaintext = int(rng.integers(0, 1 << network.block_bits))
    encrypted = network.encrypt(plaintext)
    decrypted = network.decrypt(encrypted)

    print('Input:    ', plaintext)
    print('Encrypted:', encrypted)
    print('Decrypted:', decrypted)
