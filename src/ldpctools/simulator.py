"""
Syndrome Simulator

Monte Carlo estimate of how often random channel errors are detected by
the parity checks of a code, with parallel processing support.
"""

import multiprocessing
import time
from typing import Dict, List, Optional, Tuple

import numpy as np

from .code import LinearCode
from .noise import BinarySymmetricChannel, NoiseModel, random_error


def worker_simulation(args: Tuple) -> Dict[str, int]:
    """
    Runs a batch of Monte Carlo shots on a single core.

    This function is designed to be called by multiprocessing.Pool.
    Each worker receives its own seed sequence so no generator is ever
    shared between processes.

    Parameters
    ----------
    args : tuple
        (seed_sequence, shots, code, noise_model)

    Returns
    -------
    dict
        Counts ``detected``, ``undetected``, ``weight`` and ``shots``
    """
    seed, shots, code, noise_model = args
    rng = np.random.default_rng(seed)

    detected = 0
    undetected = 0
    total_weight = 0

    for _ in range(shots):
        error = random_error(code, noise_model, rng)
        total_weight += error.weight
        if error.is_zero():
            continue
        if np.any(code.syndrome(error)):
            detected += 1
        else:
            # Non-zero codeword: invisible to every check
            undetected += 1

    return {
        "detected": detected,
        "undetected": undetected,
        "weight": total_weight,
        "shots": shots,
    }


class SyndromeSimulator:
    """
    Error detection simulator for linear codes.

    For each channel probability, errors are drawn from a binary symmetric
    channel, split across worker processes, and classified by their
    syndrome.

    Parameters
    ----------
    code : LinearCode
        The code to simulate
    num_cores : int, optional
        Number of CPU cores to use. If None, uses all but one. With a
        single core, shots run in the calling process.
    seed : int, optional
        Root seed; worker seeds are spawned from it
    """

    def __init__(self, code: LinearCode, num_cores: int = None,
                 seed: Optional[int] = None):
        self.code = code
        self.num_cores = num_cores or max(1, multiprocessing.cpu_count() - 1)
        self._seed_sequence = np.random.SeedSequence(seed)

    def _run(self, noise_model: NoiseModel, total_shots: int, pool) -> Dict[str, float]:
        shots_per_worker = total_shots // self.num_cores
        args = [
            (child, shots_per_worker, self.code, noise_model)
            for child in self._seed_sequence.spawn(self.num_cores)
        ]

        start_time = time.time()
        if pool is None:
            worker_results = list(map(worker_simulation, args))
        else:
            worker_results = pool.map(worker_simulation, args)

        shots = sum(r["shots"] for r in worker_results)
        detected = sum(r["detected"] for r in worker_results)
        undetected = sum(r["undetected"] for r in worker_results)
        weight = sum(r["weight"] for r in worker_results)
        elapsed = time.time() - start_time

        return {
            "shots": int(shots),
            "detected": int(detected),
            "undetected": int(undetected),
            "detection_rate": float(detected / shots) if shots else 0.0,
            "undetected_rate": float(undetected / shots) if shots else 0.0,
            "flip_fraction": float(weight / (shots * self.code.block_size()))
            if shots and self.code.block_size() else 0.0,
            "seconds": float(elapsed),
        }

    def run_point(self, probability: float, total_shots: int, pool=None) -> Dict[str, float]:
        """
        Run a single channel probability and return detailed stats.
        """
        noise_model = BinarySymmetricChannel.with_probability(probability)
        return self.run_model(noise_model, total_shots, pool=pool)

    def run_model(self, noise_model: NoiseModel, total_shots: int, pool=None) -> Dict[str, float]:
        """
        Same as :meth:`run_point` for an arbitrary noise model.
        """
        created_pool = False
        if pool is None and self.num_cores > 1:
            pool = multiprocessing.Pool(self.num_cores)
            created_pool = True
        try:
            return self._run(noise_model, total_shots, pool)
        finally:
            if created_pool:
                pool.close()
                pool.join()

    def run_experiment(
        self,
        probabilities: List[float],
        total_shots: int = 5000,
        verbose: bool = True,
        pool=None,
    ) -> Dict[float, Dict[str, float]]:
        """
        Run Monte Carlo simulation across multiple flip probabilities.

        Parameters
        ----------
        probabilities : list of float
            Channel flip probabilities to test
        total_shots : int, default=5000
            Total number of shots per probability, rounded down to a
            multiple of ``num_cores``
        verbose : bool, default=True
            Whether to print progress information

        Returns
        -------
        dict
            {p: {"shots", "detected", "undetected", "detection_rate",
            "undetected_rate", "flip_fraction", "seconds"}}
        """
        # Validate every probability before spending time on workers
        models = [BinarySymmetricChannel.with_probability(p) for p in probabilities]

        if verbose:
            print(f"--- SIMULATING {self.code!r} ---")
            print(f"{'Flip Prob':<12} | {'Shots':<10} | {'Detected':<10} | "
                  f"{'Undetected':<10} | {'Flip Frac':<10} | {'Time (s)':<10}")
            print("-" * 76)

        created_pool = False
        if pool is None and self.num_cores > 1:
            pool = multiprocessing.Pool(self.num_cores)
            created_pool = True

        results = {}
        try:
            for p, model in zip(probabilities, models):
                r = self._run(model, total_shots, pool)
                if verbose:
                    print(f"{p:<12.4f} | {r['shots']:<10} | {r['detected']:<10} | "
                          f"{r['undetected']:<10} | {r['flip_fraction']:<10.5f} | "
                          f"{r['seconds']:<10.2f}")
                results[p] = r
        finally:
            if created_pool:
                pool.close()
                pool.join()

        if verbose:
            print("\n--- SIMULATION COMPLETE ---")
        return results
