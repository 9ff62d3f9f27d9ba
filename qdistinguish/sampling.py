"""
The quantum half of Simon's algorithm, hidden behind one method:
``Sampler.sample(oracle)`` prepares ``|+>^n_in |0>^n_out``, applies the
bit-flip oracle, applies Hadamards to the input register and measures it.

The result ``y`` is distributed as::

    P(y) = sum_z |sum_{x : f(x) = z} (-1)^(x . y)|^2 / 4**n_in

which vanishes unless ``y . s = 0 (mod 2)`` for every period ``s`` of ``f``.
Any sampler honoring that distribution can be swapped in. Two are provided:

* ``WalshSampler`` (``'walsh'``) computes the distribution above exactly,
  with an integer fast Walsh-Hadamard transform in numpy.
* ``QiskitSampler`` (``'qiskit'``) builds the actual circuit gate by gate in
  qiskit and simulates it with a statevector.
"""

import logging
import itertools
import weakref
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np
import qiskit.qasm2
from qiskit import QuantumCircuit
from qiskit.quantum_info import Statevector

from .oracle import BitFlipOracle, control_positions

logger = logging.getLogger(__name__)

# Number of distinct outputs transformed at once by WalshSampler. Bounds the
# size of the one-hot matrix to 2**n_in rows by this many columns
_WALSH_CHUNK = 256

# Statevector probabilities below this are float noise on amplitudes that
# cancel exactly
_PROB_EPSILON = 1e-12

def _walsh_hadamard(mat: np.ndarray) -> np.ndarray:
    """
    Unnormalized fast Walsh-Hadamard transform of every column of ``mat``,
    whose number of rows must be a power of two.
    """
    n, cols = mat.shape
    out = mat.copy()
    h = 1
    while h < n:
        # Pair up rows whose indices differ only in the bit worth h
        blocks = out.reshape(n // (2*h), 2, h, cols)
        lo, hi = blocks[:,0], blocks[:,1]
        out = np.stack((lo + hi, lo - hi), axis=1).reshape(n, cols)
        h *= 2
    return out

class Sampler(ABC):
    """
    One run of Simon's circuit for a bit-flip oracle, returning the measured
    input register as an ``int``.
    """

    name = None

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()
        # Distributions keyed by oracle, since the controller samples the
        # same oracle many times in a row
        self._dists = weakref.WeakKeyDictionary()

    @abstractmethod
    def _compute_distribution(self, oracle: BitFlipOracle) -> np.ndarray:
        ...

    def distribution(self, oracle: BitFlipOracle) -> np.ndarray:
        """
        Probability of measuring each ``y`` in ``[0, 2**n_in)``.
        """
        dist = self._dists.get(oracle)
        if dist is None:
            dist = self._compute_distribution(oracle)
            self._dists[oracle] = dist
        return dist

    def sample(self, oracle: BitFlipOracle) -> int:
        dist = self.distribution(oracle)
        return int(self.rng.choice(dist.size, p=dist))

class WalshSampler(Sampler):
    """
    Samples Simon's output distribution without simulating a circuit. The
    spectrum is computed in integers, so outcomes that must not occur get
    probability exactly zero.
    """

    name = 'walsh'

    def counts(self, oracle: BitFlipOracle) -> np.ndarray:
        """
        ``4**n_in * P(y)`` for every ``y``, as exact integers.
        """
        n = 1 << oracle.n_in
        _, inverse = np.unique(oracle.truth_table, return_inverse=True)
        inverse = inverse.reshape(-1)
        n_groups = int(inverse.max()) + 1

        counts = np.zeros(n, dtype=np.int64)
        for start in range(0, n_groups, _WALSH_CHUNK):
            groups = np.arange(start, min(start + _WALSH_CHUNK, n_groups))
            onehot = (inverse[:,None] == groups[None,:]).astype(np.int64)
            spectrum = _walsh_hadamard(onehot)
            counts += (spectrum * spectrum).sum(axis=1)
        return counts

    def _compute_distribution(self, oracle: BitFlipOracle) -> np.ndarray:
        counts = self.counts(oracle)
        return counts / counts.sum()

class QiskitSampler(Sampler):
    """
    Builds Simon's circuit in qiskit. Every group of flips conditioned on the
    same input value ``i`` is realized as: X on the input qubits where ``i``
    has a 0 bit, one multi-controlled X per flipped output bit (controlled on
    the whole input register), then the same X gates again to clean up.
    """

    name = 'qiskit'

    def circuit(self, oracle: BitFlipOracle) -> QuantumCircuit:
        n_in = oracle.n_in
        inputs = list(range(n_in))
        all_ones = (1 << n_in) - 1

        qc = QuantumCircuit(oracle.n_qubits)
        qc.h(inputs)

        for value, flips in itertools.groupby(oracle.flips,
                                              key=lambda flip: flip.value):
            zeros = control_positions(~value & all_ones, n_in)
            if zeros:
                qc.x(zeros)
            for flip in flips:
                qc.mcx(inputs, n_in + flip.target)
            if zeros:
                qc.x(zeros)

        qc.h(inputs)
        return qc

    def qasm(self, oracle: BitFlipOracle) -> str:
        """OpenQASM 2 for the circuit (without measurement)."""
        return qiskit.qasm2.dumps(self.circuit(oracle))

    def _compute_distribution(self, oracle: BitFlipOracle) -> np.ndarray:
        qc = self.circuit(oracle)
        logger.debug('simulating %d-qubit circuit with %d gates',
                     qc.num_qubits, qc.size())
        probs = Statevector(qc).probabilities(qargs=list(range(oracle.n_in)))
        probs[probs < _PROB_EPSILON] = 0.0
        return probs / probs.sum()

_SAMPLERS = {cls.name: cls for cls in (WalshSampler, QiskitSampler)}

def sampler_names():
    return sorted(_SAMPLERS)

def get_sampler(name: Optional[str] = None,
                rng: Optional[np.random.Generator] = None) -> Sampler:
    """
    Instantiate a sampler by name. The default (``None``) is ``'walsh'``.
    """
    if name is None:
        name = WalshSampler.name
    try:
        cls = _SAMPLERS[name]
    except KeyError:
        raise ValueError('Unknown sampler {!r}; expected one of {}'
                         .format(name, ', '.join(sampler_names()))) from None
    return cls(rng=rng)
