"""
Tanner Graph Sampler

Draws random simple bipartite graphs in which every bit node has degree
``d_v`` and every check node has degree ``d_c``, using the configuration
model: bit stubs and check stubs are shuffled and paired positionally.
Parallel edges produced by the pairing are removed by swapping bit
endpoints with other edges; a candidate that cannot be repaired is
discarded and the stubs are reshuffled. Graphs holding more than half
of all bit/check pairs are drawn through their sparser complement.
"""

import logging
from typing import List, Optional, Tuple

import numpy as np

from .config import RegularCodeConfig, SamplerConfig
from .errors import SamplingFailed

logger = logging.getLogger(__name__)

Edge = Tuple[int, int]


class TannerGraphSampler:
    """
    Random regular Tanner graph sampler.

    Parameters
    ----------
    config : RegularCodeConfig
        Shape of the graph. It is validated on construction.
    sampler_config : SamplerConfig, optional
        Repair and resample budget. If None, uses default settings.

    Examples
    --------
    >>> sampler = TannerGraphSampler(RegularCodeConfig(40, 20, 3, 6))
    >>> edges = sampler.sample(np.random.default_rng(7))
    >>> len(edges)
    120
    """

    def __init__(self, config: RegularCodeConfig,
                 sampler_config: SamplerConfig = None):
        self.config = config.validate()
        self.sampler_config = sampler_config or SamplerConfig()

        n, m = config.block_size, config.number_of_checks
        # Stub sequences: node i repeated degree(i) times
        self._bit_stubs = np.repeat(np.arange(n, dtype=np.int64), config.bit_degree)
        self._check_stubs = np.repeat(np.arange(m, dtype=np.int64), config.check_degree)

    def sample(self, rng=None) -> List[Edge]:
        """
        Draw one graph.

        Parameters
        ----------
        rng : numpy.random.Generator, int or None
            Random source, or a seed for ``numpy.random.default_rng``.
            The generator is advanced; it must not be shared with other
            threads during the call.

        Returns
        -------
        list of (check, bit) tuples
            Unique edges sorted by check then bit.

        Raises
        ------
        SamplingFailed
            If no conflict-free graph was found within the budget.
        """
        rng = np.random.default_rng(rng)
        config = self.config

        if config.number_of_edges == 0:
            return []
        if 2 * config.bit_degree > config.number_of_checks:
            return self._sample_complement(rng)

        for attempt in range(1, self.sampler_config.max_resamples + 1):
            edges = self._pair_stubs(rng)
            if self._remove_conflicts(edges, rng):
                logger.debug(
                    "sampled %d edges after %d attempt(s)", len(edges), attempt
                )
                return sorted(edges)
            logger.debug("attempt %d left unresolved conflicts, reshuffling", attempt)

        raise SamplingFailed(
            f"no simple graph with {config.block_size} bits of degree "
            f"{config.bit_degree} and {config.number_of_checks} checks of degree "
            f"{config.check_degree} after {self.sampler_config.max_resamples} attempts"
        )

    def _sample_complement(self, rng: np.random.Generator) -> List[Edge]:
        """
        Draw a graph with more than half of all possible edges.

        Complementation is a bijection between simple graphs with degrees
        ``(d_v, d_c)`` and those with ``(m - d_v, n - d_c)``, so the sparse
        complement is sampled instead and inverted.
        """
        config = self.config
        n, m = config.block_size, config.number_of_checks
        complement = RegularCodeConfig(n, m, m - config.bit_degree, n - config.check_degree)
        logger.debug("sampling complement graph with degrees (%d, %d)",
                     complement.bit_degree, complement.check_degree)
        missing = set(TannerGraphSampler(complement, self.sampler_config).sample(rng))
        return [
            (check, bit)
            for check in range(m)
            for bit in range(n)
            if (check, bit) not in missing
        ]

    def _pair_stubs(self, rng: np.random.Generator) -> List[Edge]:
        bits = rng.permutation(self._bit_stubs)
        checks = rng.permutation(self._check_stubs)
        return list(zip(checks.tolist(), bits.tolist()))

    def _remove_conflicts(self, edges: List[Edge], rng: np.random.Generator) -> bool:
        """
        Make ``edges`` simple in place by swapping bit endpoints.

        Conflicts are retried in passes; a conflict that exhausts its repair
        budget stays pending for the next pass. Returns False once a whole
        pass resolves nothing. The multiset of bit stubs and of check stubs
        is unchanged by every swap, so degrees are preserved.
        """
        seen = set()
        conflicts = []
        for position, edge in enumerate(edges):
            if edge in seen:
                conflicts.append(position)
            else:
                seen.add(edge)

        if not conflicts:
            return True
        logger.debug("repairing %d parallel edge(s)", len(conflicts))

        pending = set(conflicts)
        while pending:
            resolved = 0
            for position in sorted(pending):
                # An earlier swap may have moved the edge this one duplicated
                if edges[position] not in seen:
                    seen.add(edges[position])
                elif not self._repair(position, edges, seen, pending, rng):
                    continue
                pending.discard(position)
                resolved += 1
            if not resolved:
                logger.debug("%d parallel edge(s) left after repair", len(pending))
                return False
        return True

    def _repair(self, position, edges, seen, pending, rng) -> bool:
        check, bit = edges[position]
        for _ in range(self.sampler_config.max_repairs):
            other = int(rng.integers(len(edges)))
            if other in pending:
                continue
            other_check, other_bit = edges[other]
            first = (check, other_bit)
            second = (other_check, bit)
            if first == second:
                continue

            seen.discard((other_check, other_bit))
            if first not in seen and second not in seen:
                seen.add(first)
                seen.add(second)
                edges[position] = first
                edges[other] = second
                return True
            seen.add((other_check, other_bit))
        return False


def sample_tanner_graph(block_size, number_of_checks, bit_degree, check_degree,
                        rng=None, sampler_config: Optional[SamplerConfig] = None):
    """Shorthand for ``TannerGraphSampler(...).sample(rng)``."""
    config = RegularCodeConfig(block_size, number_of_checks, bit_degree, check_degree)
    return TannerGraphSampler(config, sampler_config).sample(rng)
