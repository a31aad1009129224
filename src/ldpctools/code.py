"""
Code Construction Module

Implements linear codes defined by a sparse parity check matrix, and the
builder for random regular LDPC codes.
"""

import logging
from itertools import combinations
from typing import Iterator, Optional, Tuple

import numpy as np

from . import gf2
from .config import RegularCodeConfig, SamplerConfig
from .matrix import ParityCheckMatrix
from .noise import ErrorVector, NoiseModel, random_error
from .sampler import TannerGraphSampler

logger = logging.getLogger(__name__)


class LinearCode:
    """
    Binary linear code optimized for LDPC codes.

    A code is defined by its parity check matrix ``H``: the codewords are
    the words ``x`` with ``H x = 0`` over GF(2). The generator matrix
    ``G`` (rows spanning the codewords, ``H G^T = 0``) is derived on first
    use.

    Parameters
    ----------
    parity_check_matrix : ParityCheckMatrix
        The checks of the code. The code takes ownership of it.

    Attributes
    ----------
    parity_check_matrix : ParityCheckMatrix
        Sparse matrix with ``number_of_checks()`` rows and
        ``block_size()`` columns

    Examples
    --------
    >>> code = LinearCode.hamming_code()
    >>> code.block_size(), code.dimension(), code.minimal_distance()
    (7, 4, 3)
    """

    def __init__(self, parity_check_matrix: ParityCheckMatrix,
                 generator_matrix: Optional[ParityCheckMatrix] = None):
        self._parity_check_matrix = parity_check_matrix
        self._generator_matrix = generator_matrix

    @classmethod
    def from_parity_check_matrix(cls, matrix: ParityCheckMatrix) -> "LinearCode":
        return cls(matrix)

    @classmethod
    def from_generator_matrix(cls, matrix: ParityCheckMatrix) -> "LinearCode":
        """Build the code spanned by the rows of ``matrix``."""
        parity = ParityCheckMatrix.from_dense(matrix.nullspace())
        return cls(parity, generator_matrix=matrix)

    @classmethod
    def hamming_code(cls) -> "LinearCode":
        """The [7, 4, 3] Hamming code."""
        return cls(ParityCheckMatrix(7, [[3, 4, 5, 6], [1, 2, 5, 6], [0, 2, 4, 6]]))

    @classmethod
    def repetition_code(cls, length: int) -> "LinearCode":
        """The [length, 1, length] repetition code, checked by neighbouring pairs."""
        if length < 1:
            raise ValueError(f"length must be positive, got {length}")
        return cls(ParityCheckMatrix(length, [[i, i + 1] for i in range(length - 1)]))

    @staticmethod
    def random_regular_code() -> "RandomRegularCode":
        """
        Returns a builder for random LDPC codes with a regular parity
        check matrix.

        Examples
        --------
        >>> code = (LinearCode.random_regular_code()
        ...         .block_size(20)
        ...         .number_of_checks(15)
        ...         .bit_degree(3)
        ...         .check_degree(4)
        ...         .sample_with(np.random.default_rng(1)))
        >>> code.parity_check_matrix.number_of_edges
        60
        """
        return RandomRegularCode()

    @property
    def parity_check_matrix(self) -> ParityCheckMatrix:
        return self._parity_check_matrix

    @property
    def generator_matrix(self) -> ParityCheckMatrix:
        if self._generator_matrix is None:
            self._generator_matrix = ParityCheckMatrix.from_dense(
                self._parity_check_matrix.nullspace()
            )
        return self._generator_matrix

    def block_size(self) -> int:
        """Number of bits of the code."""
        return self._parity_check_matrix.block_size

    def number_of_checks(self) -> int:
        """Number of rows of the parity check matrix."""
        return self._parity_check_matrix.number_of_checks

    def number_of_generators(self) -> int:
        return self.generator_matrix.number_of_checks

    def dimension(self) -> int:
        """Number of linearly independent codewords."""
        return gf2.rank(self.generator_matrix.to_dense())

    def parity_row(self, check: int) -> Tuple[int, ...]:
        return self._parity_check_matrix.row(check)

    def parity_column(self, bit: int) -> Tuple[int, ...]:
        return self._parity_check_matrix.column(bit)

    def edges(self) -> Iterator[Tuple[int, int]]:
        """Tanner graph edges as ``(check, bit)`` pairs, sorted."""
        return self._parity_check_matrix.edges()

    def syndrome(self, word) -> np.ndarray:
        """
        Product of the parity check matrix with ``word``.

        Parameters
        ----------
        word : ErrorVector or sequence of int
            Sparse error or dense binary word of length ``block_size()``

        Returns
        -------
        np.ndarray
            uint8 vector of length ``number_of_checks()``
        """
        if isinstance(word, ErrorVector):
            if word.length != self.block_size():
                raise ValueError(
                    f"error of length {word.length} is incompatible with "
                    f"block size {self.block_size()}"
                )
            return self._parity_check_matrix.syndrome_of_positions(word.positions)
        return self._parity_check_matrix.syndrome(word)

    def has_codeword(self, word) -> bool:
        """True if ``word`` has zero syndrome."""
        return not np.any(self.syndrome(word))

    def random_error(self, noise_model: NoiseModel, rng=None) -> ErrorVector:
        """Draw an error on the bits of this code. See :func:`random_error`."""
        return random_error(self, noise_model, rng)

    def minimal_distance(self) -> Optional[int]:
        """
        Weight of the lightest non-zero codeword, or None if the code has
        no non-zero codeword.

        The search enumerates every combination of generators, so the
        running time grows exponentially with the dimension.
        """
        generators = self.generator_matrix.to_dense()
        best = None
        for size in range(1, generators.shape[0] + 1):
            for subset in combinations(range(generators.shape[0]), size):
                weight = int(np.bitwise_xor.reduce(generators[list(subset)], axis=0).sum())
                if weight > 0 and (best is None or weight < best):
                    best = weight
        return best

    def has_same_codespace_as(self, other: "LinearCode") -> bool:
        """
        True if both codes have exactly the same codewords, even when
        their parity check matrices differ.
        """
        if self.block_size() != other.block_size():
            return False
        if self.dimension() != other.dimension():
            return False
        return all(self.has_codeword(row) for row in other.generator_matrix.to_dense())

    def __eq__(self, other):
        if not isinstance(other, LinearCode):
            return NotImplemented
        return self._parity_check_matrix == other._parity_check_matrix

    def __hash__(self):
        return hash(self._parity_check_matrix)

    def __repr__(self):
        return (
            f"LinearCode(block_size={self.block_size()}, "
            f"number_of_checks={self.number_of_checks()})"
        )


class RandomRegularCode:
    """
    Builder for random regular LDPC codes.

    Every setter returns the builder so calls can be chained. All values
    default to 0. See :meth:`LinearCode.random_regular_code`.
    """

    def __init__(self):
        self._block_size = 0
        self._number_of_checks = 0
        self._bit_degree = 0
        self._check_degree = 0

    def block_size(self, block_size: int) -> "RandomRegularCode":
        """Fixes the number of bits of the code."""
        self._block_size = block_size
        return self

    def number_of_checks(self, number_of_checks: int) -> "RandomRegularCode":
        """Fixes the number of checks of the code."""
        self._number_of_checks = number_of_checks
        return self

    def bit_degree(self, bit_degree: int) -> "RandomRegularCode":
        """Fixes the number of checks connected to each bit."""
        self._bit_degree = bit_degree
        return self

    def check_degree(self, check_degree: int) -> "RandomRegularCode":
        """Fixes the number of bits connected to each check."""
        self._check_degree = check_degree
        return self

    def config(self) -> RegularCodeConfig:
        return RegularCodeConfig(
            block_size=self._block_size,
            number_of_checks=self._number_of_checks,
            bit_degree=self._bit_degree,
            check_degree=self._check_degree,
        )

    def sample_with(self, rng=None, sampler_config: SamplerConfig = None) -> LinearCode:
        """
        Samples a random code with the given random number generator.

        Raises
        ------
        DegreeInfeasible
            If a degree exceeds the number of nodes on the other side.
        ConfigurationError
            If ``n * d_v != m * d_c``.
        SamplingFailed
            If the sampler ran out of attempts.
        """
        config = self.config()
        sampler = TannerGraphSampler(config, sampler_config)
        edges = sampler.sample(rng)
        matrix = ParityCheckMatrix.from_edges(
            config.block_size, config.number_of_checks, edges
        )
        logger.info(
            "sampled regular code: n=%d m=%d d_v=%d d_c=%d",
            config.block_size, config.number_of_checks,
            config.bit_degree, config.check_degree,
        )
        return LinearCode(matrix)
