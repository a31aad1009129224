"""
Unit tests for the syndrome simulator
"""

import unittest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ldpctools.code import LinearCode
from ldpctools.errors import InvalidProbability
from ldpctools.noise import IndependentFlipChannel
from ldpctools.simulator import SyndromeSimulator, worker_simulation


class TestSyndromeSimulator(unittest.TestCase):
    """Test cases for SyndromeSimulator"""

    def setUp(self):
        """Set up test fixtures"""
        self.code = LinearCode.hamming_code()
        self.simulator = SyndromeSimulator(self.code, num_cores=1, seed=3)

    def test_noiseless_channel(self):
        result = self.simulator.run_point(0.0, total_shots=50)
        self.assertEqual(result["shots"], 50)
        self.assertEqual(result["detected"], 0)
        self.assertEqual(result["undetected"], 0)
        self.assertEqual(result["flip_fraction"], 0.0)

    def test_all_ones_is_a_codeword(self):
        # Every Hamming check has even weight, so flipping all bits is invisible
        result = self.simulator.run_point(1.0, total_shots=20)
        self.assertEqual(result["undetected"], 20)
        self.assertEqual(result["undetected_rate"], 1.0)
        self.assertEqual(result["flip_fraction"], 1.0)

    def test_single_flips_always_detected(self):
        probabilities = [0.0] * 7
        probabilities[5] = 1.0
        result = self.simulator.run_model(IndependentFlipChannel(probabilities), total_shots=10)
        self.assertEqual(result["detection_rate"], 1.0)

    def test_run_experiment(self):
        results = self.simulator.run_experiment([0.0, 0.1, 0.5], total_shots=200, verbose=False)
        self.assertEqual(list(results), [0.0, 0.1, 0.5])
        for stats in results.values():
            self.assertEqual(stats["shots"], 200)
            self.assertLessEqual(stats["detected"] + stats["undetected"], 200)
        self.assertGreater(results[0.5]["detected"], results[0.1]["detected"])

    def test_seeded_runs_repeat(self):
        first = SyndromeSimulator(self.code, num_cores=1, seed=9).run_point(0.2, 100)
        second = SyndromeSimulator(self.code, num_cores=1, seed=9).run_point(0.2, 100)
        self.assertEqual(first["detected"], second["detected"])
        self.assertEqual(first["undetected"], second["undetected"])

    def test_rejects_invalid_probability(self):
        with self.assertRaises(InvalidProbability):
            self.simulator.run_experiment([0.1, 1.5], total_shots=10, verbose=False)

    def test_worker_counts(self):
        from ldpctools.noise import BinarySymmetricChannel
        counts = worker_simulation((0, 5, self.code, BinarySymmetricChannel.with_probability(1.0)))
        self.assertEqual(counts, {"detected": 0, "undetected": 5, "weight": 35, "shots": 5})


if __name__ == "__main__":
    unittest.main()
