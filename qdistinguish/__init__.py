"""
A quantum distinguisher for 3-round Feistel networks (Kuwakado and Morii),
with Simon's algorithm behind a pluggable ``Sampler``. Typical use::

    import numpy as np
    from qdistinguish import *

    rng = np.random.default_rng()
    table = random_permutation_table(2**8, rng)
    network = FeistelNetwork(table_round_function(table),
                             random_keys(3, 8, rng), n_bits=8)
    outcome = distinguish(network, n_bits=8, rng=rng)
    print(outcome.describe())
"""

from .err import DistinguisherError, LinearSystemError, \
                 InconsistentEquationError, UnderdeterminedSystemError, \
                 OracleError
from .bitvec import BitVector
from .gf2 import LinearSolver, RowStatus, encode_equation, decode_equation
from .feistel import FeistelNetwork, feistel_encrypt, feistel_decrypt, \
                     make_feistel_encrypt, make_feistel_decrypt, \
                     random_keys, random_permutation_table, \
                     table_round_function, permutation_oracle
from .probe import MaskingParams, ProbeFunction, probe
from .oracle import BitFlip, BitFlipOracle, to_reversible
from .sampling import Sampler, WalshSampler, QiskitSampler, get_sampler
from .config import DistinguisherConfig
from .distinguish import FeistelDistinguisher, Outcome, Verdict, Reason, \
                         State, distinguish

__all__ = ['DistinguisherError', 'LinearSystemError',
           'InconsistentEquationError', 'UnderdeterminedSystemError',
           'OracleError', 'BitVector', 'LinearSolver', 'RowStatus',
           'encode_equation', 'decode_equation', 'FeistelNetwork',
           'feistel_encrypt', 'feistel_decrypt', 'make_feistel_encrypt',
           'make_feistel_decrypt', 'random_keys', 'random_permutation_table',
           'table_round_function', 'permutation_oracle', 'MaskingParams',
           'ProbeFunction', 'probe', 'BitFlip', 'BitFlipOracle',
           'to_reversible', 'Sampler', 'WalshSampler', 'QiskitSampler',
           'get_sampler', 'DistinguisherConfig', 'FeistelDistinguisher',
           'Outcome', 'Verdict', 'Reason', 'State', 'distinguish']
