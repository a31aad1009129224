"""
Unit tests for code construction module
"""

import unittest
from unittest import mock
import numpy as np
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ldpctools.code import LinearCode, RandomRegularCode
from ldpctools.errors import ConfigurationError, DegreeInfeasible
from ldpctools.matrix import ParityCheckMatrix
from ldpctools.noise import BinarySymmetricChannel, ErrorVector
from ldpctools.sampler import TannerGraphSampler


def sample_code(n, m, d_v, d_c, seed):
    return (LinearCode.random_regular_code()
            .block_size(n)
            .number_of_checks(m)
            .bit_degree(d_v)
            .check_degree(d_c)
            .sample_with(np.random.default_rng(seed)))


class TestRandomRegularCode(unittest.TestCase):
    """Test cases for the random regular code builder"""

    def setUp(self):
        """Set up test fixtures"""
        self.code = sample_code(40, 20, 3, 6, seed=2024)

    def test_builder_returns_itself(self):
        builder = LinearCode.random_regular_code()
        self.assertIsInstance(builder, RandomRegularCode)
        self.assertIs(builder.block_size(4), builder)
        self.assertIs(builder.number_of_checks(2), builder)
        self.assertIs(builder.bit_degree(1), builder)
        self.assertIs(builder.check_degree(2), builder)

    def test_parameters(self):
        """Test code dimensions and edge count"""
        self.assertEqual(self.code.block_size(), 40)
        self.assertEqual(self.code.number_of_checks(), 20)
        self.assertEqual(self.code.parity_check_matrix.number_of_edges, 120)

    def test_exact_degrees(self):
        for check in range(20):
            self.assertEqual(len(self.code.parity_row(check)), 6)
        for bit in range(40):
            self.assertEqual(len(self.code.parity_column(bit)), 3)

    def test_no_repeated_edges(self):
        edges = list(self.code.edges())
        self.assertEqual(len(edges), len(set(edges)))
        self.assertEqual(edges, sorted(edges))

    def test_other_shapes(self):
        for n, m, d_v, d_c in [(20, 15, 3, 4), (20, 12, 3, 5), (30, 30, 4, 4), (12, 6, 2, 4)]:
            code = sample_code(n, m, d_v, d_c, seed=n * m)
            H = code.parity_check_matrix
            np.testing.assert_array_equal(H.column_degrees(), np.full(n, d_v))
            np.testing.assert_array_equal(H.row_degrees(), np.full(m, d_c))

    def test_same_seed_same_code(self):
        self.assertEqual(sample_code(40, 20, 3, 6, seed=2024), self.code)

    def test_different_seed_different_code(self):
        other = sample_code(40, 20, 3, 6, seed=2025)
        self.assertNotEqual(list(other.edges()), list(self.code.edges()))

    def test_edge_count_mismatch(self):
        with mock.patch.object(TannerGraphSampler, "sample") as sample:
            with self.assertRaises(ConfigurationError) as ctx:
                sample_code(10, 5, 3, 4, seed=0)
        sample.assert_not_called()
        self.assertNotIsInstance(ctx.exception, DegreeInfeasible)

    def test_degree_infeasible(self):
        with self.assertRaises(DegreeInfeasible):
            sample_code(5, 5, 9, 9, seed=0)

    def test_defaults_give_empty_code(self):
        code = LinearCode.random_regular_code().sample_with(np.random.default_rng(0))
        self.assertEqual(code.block_size(), 0)
        self.assertEqual(code.number_of_checks(), 0)


class TestLinearCode(unittest.TestCase):
    """Test cases for LinearCode"""

    def setUp(self):
        """Set up test fixtures"""
        self.hamming = LinearCode.from_parity_check_matrix(
            ParityCheckMatrix(7, [[0, 1, 2, 4], [0, 1, 3, 5], [0, 2, 3, 6]])
        )

    def test_hamming_parameters(self):
        code = LinearCode.hamming_code()
        self.assertEqual(code.block_size(), 7)
        self.assertEqual(code.number_of_checks(), 3)
        self.assertEqual(code.dimension(), 4)
        self.assertEqual(code.minimal_distance(), 3)

    def test_repetition_code(self):
        code = LinearCode.repetition_code(3)
        self.assertEqual(code.block_size(), 3)
        self.assertEqual(code.dimension(), 1)
        self.assertEqual(code.minimal_distance(), 3)

    def test_code_without_codewords(self):
        code = LinearCode(ParityCheckMatrix(2, [[0], [1]]))
        self.assertEqual(code.dimension(), 0)
        self.assertIsNone(code.minimal_distance())

    def test_from_generator_matrix(self):
        generators = ParityCheckMatrix(7, [[0, 4, 5, 6], [1, 4, 5], [2, 4, 6], [3, 5, 6]])
        code = LinearCode.from_generator_matrix(generators)
        self.assertEqual(code.block_size(), 7)
        self.assertEqual(code.dimension(), 4)
        self.assertTrue(code.has_same_codespace_as(self.hamming))

    def test_same_codespace(self):
        other = LinearCode(ParityCheckMatrix(7, [[0, 1, 2, 4], [2, 3, 4, 5], [1, 3, 4, 6]]))
        self.assertTrue(self.hamming.has_same_codespace_as(other))
        self.assertNotEqual(self.hamming, other)
        self.assertFalse(self.hamming.has_same_codespace_as(LinearCode.repetition_code(7)))

    def test_syndrome(self):
        message = np.zeros(7, dtype=int)
        message[[0, 2, 4]] = 1
        np.testing.assert_array_equal(self.hamming.syndrome(message), [1, 1, 0])

    def test_syndrome_of_sparse_error(self):
        error = ErrorVector.from_positions(7, [0, 2, 4])
        np.testing.assert_array_equal(self.hamming.syndrome(error), [1, 1, 0])
        with self.assertRaises(ValueError):
            self.hamming.syndrome(ErrorVector.from_positions(6, [0]))

    def test_has_codeword(self):
        error = [1, 0, 1, 0, 1, 0, 0]
        codeword = [0, 0, 1, 1, 1, 1, 0]
        self.assertFalse(self.hamming.has_codeword(error))
        self.assertTrue(self.hamming.has_codeword(codeword))

    def test_generators_are_codewords(self):
        code = sample_code(24, 12, 3, 6, seed=5)
        self.assertEqual(code.number_of_generators(), code.dimension())
        for row in code.generator_matrix.to_dense():
            self.assertTrue(code.has_codeword(row))

    def test_edges_of_hamming_code(self):
        edges = list(LinearCode.hamming_code().edges())
        self.assertEqual(edges[:4], [(0, 3), (0, 4), (0, 5), (0, 6)])
        self.assertEqual(edges[4:8], [(1, 1), (1, 2), (1, 5), (1, 6)])
        self.assertEqual(edges[8:], [(2, 0), (2, 2), (2, 4), (2, 6)])

    def test_random_error(self):
        noise = BinarySymmetricChannel.with_probability(0.25)
        error = self.hamming.random_error(noise, np.random.default_rng(3))
        self.assertEqual(error.length, 7)
        self.assertTrue(all(0 <= bit < 7 for bit in error))


if __name__ == "__main__":
    unittest.main()
