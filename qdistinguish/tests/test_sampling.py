import unittest
import numpy as np
from qdistinguish.oracle import to_reversible
from qdistinguish.sampling import WalshSampler, QiskitSampler, get_sampler, \
                                  sampler_names, _walsh_hadamard

# A 2-to-1 function with secret string s = 110
SIMON_TABLE = [5, 2, 0, 6, 0, 6, 5, 2]
SIMON_SECRET = 0b110

def parity(x):
    return bin(x).count('1') & 0x1

class SamplingTests(unittest.TestCase):
    def setUp(self):
        self.rng = np.random.default_rng(31337)
        self.simon_oracle = to_reversible(lambda x: SIMON_TABLE[x], 3, 3)

    def test_walsh_hadamard_matches_matrix(self):
        h = np.array([[1]])
        for _ in range(3):
            h = np.block([[h, h], [h, -h]])
        mat = self.rng.integers(-3, 4, size=(8, 5))
        np.testing.assert_array_equal(_walsh_hadamard(mat), h @ mat)

    def test_walsh_counts_exact(self):
        counts = WalshSampler().counts(self.simon_oracle)
        self.assertEqual(counts.sum(), 64)
        self.assertEqual(counts.tolist(), [16, 16, 0, 0, 0, 0, 16, 16])

    def test_walsh_distribution_orthogonal_to_secret(self):
        dist = WalshSampler().distribution(self.simon_oracle)
        for y, p in enumerate(dist):
            if parity(y & SIMON_SECRET):
                self.assertEqual(p, 0.0)
            else:
                self.assertAlmostEqual(p, 0.25)

    def test_walsh_samples_orthogonal_to_secret(self):
        sampler = WalshSampler(rng=self.rng)
        for _ in range(2000):
            y = sampler.sample(self.simon_oracle)
            self.assertEqual(parity(y & SIMON_SECRET), 0)

    def test_walsh_bijection_is_uniform(self):
        table = self.rng.permutation(32)
        oracle = to_reversible(lambda x: int(table[x]), 5, 5)
        dist = WalshSampler().distribution(oracle)
        np.testing.assert_allclose(dist, np.full(32, 1/32))

    def test_walsh_constant_function(self):
        oracle = to_reversible(lambda x: 3, 3, 2)
        dist = WalshSampler().distribution(oracle)
        self.assertEqual(dist.tolist(), [1.0] + [0.0]*7)

    def test_walsh_distribution_is_cached(self):
        sampler = WalshSampler()
        self.assertIs(sampler.distribution(self.simon_oracle),
                      sampler.distribution(self.simon_oracle))

    def test_qiskit_distribution_orthogonal_to_secret(self):
        dist = QiskitSampler().distribution(self.simon_oracle)
        for y, p in enumerate(dist):
            if parity(y & SIMON_SECRET):
                self.assertEqual(p, 0.0)
            else:
                self.assertAlmostEqual(p, 0.25)

    def test_qiskit_samples_orthogonal_to_secret(self):
        sampler = QiskitSampler(rng=self.rng)
        for _ in range(500):
            y = sampler.sample(self.simon_oracle)
            self.assertEqual(parity(y & SIMON_SECRET), 0)

    def test_qiskit_agrees_with_walsh(self):
        table = self.rng.integers(0, 4, size=16)
        oracle = to_reversible(lambda x: int(table[x]), 4, 2)
        np.testing.assert_allclose(QiskitSampler().distribution(oracle),
                                   WalshSampler().distribution(oracle),
                                   atol=1e-9)

    def test_qiskit_circuit_shape(self):
        qc = QiskitSampler().circuit(self.simon_oracle)
        self.assertEqual(qc.num_qubits, 6)
        ops = qc.count_ops()
        # Three Hadamards on the way in and three on the way out
        self.assertEqual(ops['h'], 6)
        # One multi-controlled X per flip, plus X gates around them
        n_controlled = sum(n for name, n in ops.items() if name not in ('h', 'x'))
        self.assertEqual(n_controlled, len(self.simon_oracle))

    def test_qiskit_qasm(self):
        qasm = QiskitSampler().qasm(self.simon_oracle)
        self.assertTrue(qasm.startswith('OPENQASM 2.0;'))

    def test_get_sampler(self):
        self.assertIsInstance(get_sampler(), WalshSampler)
        self.assertIsInstance(get_sampler('qiskit'), QiskitSampler)
        self.assertEqual(sampler_names(), ['qiskit', 'walsh'])

    def test_get_sampler_unknown(self):
        with self.assertRaisesRegex(ValueError, "Unknown sampler 'libquantum'"):
            get_sampler('libquantum')

    def test_get_sampler_uses_rng(self):
        rng = np.random.default_rng(5)
        self.assertIs(get_sampler('walsh', rng=rng).rng, rng)
