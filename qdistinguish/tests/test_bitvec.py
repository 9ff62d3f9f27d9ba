import unittest
import numpy as np
from qdistinguish.bitvec import BitVector

class BitVectorTests(unittest.TestCase):
    def test_str(self):
        self.assertEqual(str(BitVector(0b1101, 4)), '1101')

    def test_str_leading_zeros(self):
        self.assertEqual(str(BitVector(0b00001101, 8)), '00001101')

    def test_repr(self):
        self.assertEqual(repr(BitVector(0b101, 3)), 'BitVector(0b101, 3)')

    def test_value_masked_to_width(self):
        self.assertEqual(int(BitVector(0b11101, 3)), 0b101)

    def test_zero_n_bits(self):
        with self.assertRaisesRegex(ValueError, "positive"):
            BitVector(0, 0)

    def test_nonint_val(self):
        with self.assertRaisesRegex(TypeError, "int.*, not float"):
            BitVector(13.0, 4)

    def test_components_least_significant_first(self):
        v = BitVector(0b110, 3)
        self.assertEqual(list(v.get_bits()), [0, 1, 1])
        self.assertEqual(v[0], 0)
        self.assertEqual(v[2], 1)

    def test_index_out_of_range(self):
        with self.assertRaises(IndexError):
            BitVector(0b110, 3)[3]

    def test_from_bits(self):
        self.assertEqual(BitVector.from_bits([0, 1, 1]), BitVector(0b110, 3))

    def test_from_bits_numpy(self):
        bits = np.array([1, 0, 1, 1], dtype=np.uint8)
        self.assertEqual(BitVector.from_bits(bits), BitVector(0b1101, 4))

    def test_from_bits_rejects_non_bits(self):
        with self.assertRaisesRegex(ValueError, "0 or 1"):
            BitVector.from_bits([0, 2])

    def test_from_str(self):
        self.assertEqual(BitVector.from_str('110'), BitVector(0b110, 3))

    def test_eq_needs_same_width(self):
        self.assertNotEqual(BitVector(0b1, 1), BitVector(0b1, 2))

    def test_xor(self):
        self.assertEqual(BitVector(0b110, 3) ^ BitVector(0b011, 3),
                         BitVector(0b101, 3))

    def test_xor_size_mismatch(self):
        with self.assertRaisesRegex(TypeError, "mismatch"):
            BitVector(0b110, 3) ^ BitVector(0b1, 1)

    def test_dot(self):
        self.assertEqual(BitVector(0b110, 3).dot(BitVector(0b011, 3)), 1)
        self.assertEqual(BitVector(0b110, 3).dot(BitVector(0b111, 3)), 0)

    def test_weight(self):
        self.assertEqual(BitVector(0b1011, 4).weight(), 3)

    def test_immutable(self):
        v = BitVector(0b1, 1)
        with self.assertRaises(AttributeError):
            v.as_int = 0

    def test_hashable(self):
        self.assertEqual(len({BitVector(0b10, 2), BitVector(0b10, 2)}), 1)
