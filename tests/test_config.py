"""
Unit tests for configuration and degree validation
"""

import unittest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ldpctools.config import RegularCodeConfig, SamplerConfig, validate_degrees
from ldpctools.errors import ConfigurationError, DegreeInfeasible, LDPCError


class TestValidateDegrees(unittest.TestCase):
    """Test cases for validate_degrees"""

    def test_accepts_consistent_shape(self):
        validate_degrees(40, 20, 3, 6)
        validate_degrees(20, 15, 3, 4)
        validate_degrees(0, 0, 0, 0)

    def test_edge_count_mismatch(self):
        with self.assertRaises(ConfigurationError) as ctx:
            validate_degrees(10, 5, 3, 4)
        self.assertNotIsInstance(ctx.exception, DegreeInfeasible)
        self.assertIn("10 bits of degree 3", str(ctx.exception))

    def test_bit_degree_too_large(self):
        with self.assertRaises(DegreeInfeasible):
            validate_degrees(5, 5, 9, 9)
        # Reported even when the edge count is also inconsistent
        with self.assertRaises(DegreeInfeasible):
            validate_degrees(10, 5, 9, 4)

    def test_check_degree_too_large(self):
        with self.assertRaises(DegreeInfeasible):
            validate_degrees(3, 6, 4, 8)

    def test_rejects_non_integers(self):
        for args in [(10.5, 5, 1, 2), (10, -5, 1, 2), (10, 5, True, 2), (10, 5, 1, "2")]:
            with self.assertRaises(ConfigurationError):
                validate_degrees(*args)

    def test_error_hierarchy(self):
        self.assertTrue(issubclass(DegreeInfeasible, ConfigurationError))
        self.assertTrue(issubclass(ConfigurationError, LDPCError))
        self.assertTrue(issubclass(ConfigurationError, ValueError))


class TestRegularCodeConfig(unittest.TestCase):
    """Test cases for RegularCodeConfig"""

    def test_validate_returns_config(self):
        config = RegularCodeConfig(40, 20, 3, 6)
        self.assertIs(config.validate(), config)
        self.assertEqual(config.number_of_edges, 120)

    def test_is_frozen(self):
        config = RegularCodeConfig(40, 20, 3, 6)
        with self.assertRaises(AttributeError):
            config.block_size = 10


class TestSamplerConfig(unittest.TestCase):
    """Test cases for SamplerConfig"""

    def test_defaults(self):
        config = SamplerConfig()
        self.assertEqual(config.max_resamples, 100)
        self.assertEqual(config.max_repairs, 10)

    def test_rejects_empty_budget(self):
        with self.assertRaises(ConfigurationError):
            SamplerConfig(max_resamples=0)
        with self.assertRaises(ConfigurationError):
            SamplerConfig(max_repairs=-1)


if __name__ == "__main__":
    unittest.main()
