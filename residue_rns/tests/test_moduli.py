"""
Unit tests for ModulusSet construction and default generation.
"""

import unittest
import math
import sys
import os

import numpy as np

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from residue_rns.errors import InvalidConfiguration
from residue_rns.moduli import (
    ModulusSet, DEFAULT_MODULI,
    construct, default_moduli, generate_coprime_moduli, prime_moduli,
)


class TestConstruct(unittest.TestCase):

    def test_valid_set(self):
        ms = construct([251, 253, 255])
        self.assertEqual(ms.moduli, (251, 253, 255))
        self.assertEqual(ms.dynamic_range, 251 * 253 * 255)
        self.assertEqual(len(ms), 3)
        self.assertEqual(list(ms), [251, 253, 255])
        self.assertEqual(ms[1], 253)

    def test_single_modulus(self):
        ms = construct([7])
        self.assertEqual(ms.dynamic_range, 7)

    def test_duplicate_rejected(self):
        with self.assertRaises(InvalidConfiguration) as ctx:
            construct([5, 5])
        self.assertEqual(ctx.exception.pair, (5, 5))

    def test_common_factor_rejected(self):
        with self.assertRaises(InvalidConfiguration) as ctx:
            construct([6, 9])
        self.assertEqual(ctx.exception.pair, (6, 9))

    def test_non_adjacent_pair_rejected(self):
        with self.assertRaises(InvalidConfiguration) as ctx:
            construct([4, 7, 11, 10])
        self.assertEqual(ctx.exception.pair, (4, 10))
        self.assertIn("gcd(4,10)=2", str(ctx.exception))

    def test_small_moduli_rejected(self):
        for bad in ([1, 3], [0, 3], [-5, 3]):
            with self.assertRaises(InvalidConfiguration):
                construct(bad)

    def test_empty_rejected(self):
        with self.assertRaises(InvalidConfiguration):
            construct([])

    def test_non_integer_rejected(self):
        for bad in ([2.0, 3], ["5", 7], [True, 3]):
            with self.assertRaises(InvalidConfiguration):
                construct(bad)

    def test_is_value_error(self):
        with self.assertRaises(ValueError):
            construct([5, 5])

    def test_numpy_integers_normalised(self):
        ms = construct(np.array([3, 5, 7], dtype=np.int32))
        self.assertEqual(ms.moduli, (3, 5, 7))
        self.assertTrue(all(type(m) is int for m in ms.moduli))
        self.assertEqual(ms.dynamic_range, 105)

    def test_direct_constructor_validates(self):
        with self.assertRaises(InvalidConfiguration):
            ModulusSet((6, 9))
        self.assertEqual(ModulusSet([3, 5]).moduli, (3, 5))


class TestImmutability(unittest.TestCase):

    def test_frozen(self):
        ms = construct([3, 5])
        with self.assertRaises(AttributeError):
            ms.moduli = (7, 11)
        with self.assertRaises(AttributeError):
            ms.dynamic_range = 1

    def test_value_equality_and_hash(self):
        a = construct([3, 5, 7])
        b = construct([3, 5, 7])
        self.assertIsNot(a, b)
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        self.assertNotEqual(a, construct([3, 7, 5]))

    def test_array_read_only(self):
        arr = construct([3, 5]).to_array()
        self.assertEqual(arr.dtype, np.int64)
        with self.assertRaises(ValueError):
            arr[0] = 9

    def test_bit_length(self):
        self.assertEqual(construct([3, 5]).bit_length(), 4)       # 14 -> 4 bits
        self.assertEqual(construct([2]).bit_length(), 1)
        self.assertEqual(construct([256, 3]).bit_length(), 10)    # 767


class TestDefaultModuli(unittest.TestCase):

    def test_three(self):
        ms = default_moduli(3)
        self.assertEqual(ms.moduli, (251, 253, 255))
        self.assertEqual(ms.dynamic_range, 16193265)

    def test_four(self):
        ms = default_moduli(4)
        self.assertEqual(ms.moduli, (251, 253, 255, 256))
        self.assertEqual(ms.dynamic_range, 4145475840)

    def test_table_sets_are_coprime(self):
        for moduli in DEFAULT_MODULI.values():
            construct(moduli)

    def test_generated_sizes(self):
        for n in [1, 2, 5, 6, 10, 25]:
            ms = default_moduli(n)
            self.assertEqual(len(ms), n)
            for i in range(n):
                for j in range(i + 1, n):
                    self.assertEqual(math.gcd(ms[i], ms[j]), 1)

    def test_generated_are_first_primes(self):
        self.assertEqual(default_moduli(1).moduli, (2,))
        self.assertEqual(default_moduli(2).moduli, (2, 3))
        self.assertEqual(default_moduli(6).moduli, (2, 3, 5, 7, 11, 13))

    def test_deterministic(self):
        self.assertEqual(default_moduli(12), default_moduli(12))

    def test_bad_size(self):
        for n in [0, -1]:
            with self.assertRaises(InvalidConfiguration):
                default_moduli(n)
        with self.assertRaises(InvalidConfiguration):
            default_moduli(2.5)

    def test_search_from_other_start(self):
        # 10 kept; 11 coprime; 12 shares 2 with 10; 13 kept
        self.assertEqual(generate_coprime_moduli(3, start=10), [10, 11, 13])
        with self.assertRaises(InvalidConfiguration):
            generate_coprime_moduli(3, start=1)


class TestPrimeModuli(unittest.TestCase):

    def test_prime_set(self):
        ms = prime_moduli(8)
        self.assertEqual(len(ms), 8)
        self.assertGreater(ms.bit_length(), 8 * 30)

    def test_bad_count(self):
        with self.assertRaises(InvalidConfiguration):
            prime_moduli(0)


if __name__ == "__main__":
    unittest.main()
