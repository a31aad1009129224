"""
Noise Models

Per-bit flip probabilities and the sampler that turns them into sparse
error vectors.

Any subclass of :class:`NoiseModel` can be used to draw random errors;
the sampler only ever asks a model for its flip probabilities, so new
channels plug in without touching codes or matrices.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

import numpy as np

from .errors import InvalidProbability


def check_probability(probability) -> float:
    """Return ``probability`` as a float or raise InvalidProbability."""
    try:
        value = float(probability)
    except (TypeError, ValueError):
        raise InvalidProbability(f"probability {probability!r} is not a number") from None
    if math.isnan(value) or not 0.0 <= value <= 1.0:
        raise InvalidProbability(f"probability {probability} is not between 0 and 1")
    return value


@dataclass(frozen=True)
class ErrorVector:
    """
    Sparse binary vector: the sorted positions of the flipped bits.

    Iterating, ``len`` and ``in`` act on the flipped positions; the
    full vector length is ``length``.
    """
    length: int
    positions: Tuple[int, ...]

    @classmethod
    def from_positions(cls, length: int, positions: Iterable[int]) -> "ErrorVector":
        positions = tuple(sorted(set(int(p) for p in positions)))
        if positions and (positions[0] < 0 or positions[-1] >= length):
            raise IndexError(f"error positions {positions} outside of 0..{length}")
        return cls(length, positions)

    @classmethod
    def zeros(cls, length: int) -> "ErrorVector":
        return cls(length, ())

    @property
    def weight(self) -> int:
        return len(self.positions)

    def is_zero(self) -> bool:
        return not self.positions

    def to_dense(self) -> np.ndarray:
        dense = np.zeros(self.length, dtype=np.uint8)
        dense[list(self.positions)] = 1
        return dense

    def __iter__(self):
        return iter(self.positions)

    def __len__(self):
        return len(self.positions)

    def __contains__(self, bit):
        return bit in self.positions

    def __xor__(self, other: "ErrorVector") -> "ErrorVector":
        """Sum over GF(2): positions flipped in exactly one of the two."""
        if not isinstance(other, ErrorVector):
            return NotImplemented
        if other.length != self.length:
            raise ValueError(f"cannot add vectors of length {self.length} and {other.length}")
        return ErrorVector(self.length, tuple(sorted(set(self.positions) ^ set(other.positions))))

    __add__ = __xor__


class NoiseModel(ABC):
    """
    Capability interface for channels that flip bits independently.
    """

    @abstractmethod
    def flip_probability(self, bit_index: int) -> float:
        """Probability that the bit at ``bit_index`` is flipped."""

    def flip_probabilities(self, length: int) -> np.ndarray:
        """Vector of flip probabilities for bits ``0..length``."""
        return np.array([self.flip_probability(i) for i in range(length)], dtype=float)

    def sample_error_of_length(self, length: int, rng=None) -> ErrorVector:
        """Draw one error on ``length`` bits. See :func:`random_error`."""
        rng = np.random.default_rng(rng)
        if length < 0:
            raise ValueError(f"length must be non-negative, got {length}")
        draws = rng.random(length)
        flips = draws < self.flip_probabilities(length)
        return ErrorVector(length, tuple(np.flatnonzero(flips).tolist()))


class BinarySymmetricChannel(NoiseModel):
    """
    Flips every bit independently with the same probability.

    Use :meth:`with_probability` to build one.
    """

    def __init__(self, probability: float):
        self._probability = check_probability(probability)

    @classmethod
    def with_probability(cls, probability: float) -> "BinarySymmetricChannel":
        """
        Create a channel with the given flip probability.

        Raises
        ------
        InvalidProbability
            If ``probability`` is not in [0, 1].
        """
        return cls(probability)

    @property
    def probability(self) -> float:
        return self._probability

    def flip_probability(self, bit_index: int) -> float:
        if bit_index < 0:
            raise IndexError(f"bit index must be non-negative, got {bit_index}")
        return self._probability

    def flip_probabilities(self, length: int) -> np.ndarray:
        return np.full(length, self._probability, dtype=float)

    def __eq__(self, other):
        if not isinstance(other, BinarySymmetricChannel):
            return NotImplemented
        return self._probability == other._probability

    def __hash__(self):
        return hash(("bsc", self._probability))

    def __repr__(self):
        return f"BinarySymmetricChannel(probability={self._probability})"


class ErasureChannel(NoiseModel):
    """
    Erases every bit independently with the same probability.

    Sampling returns an :class:`ErrorVector` whose positions are the
    erased bits rather than flipped ones; ``flip_probability`` reports
    the erasure probability so the channel shares the sampler of the
    other models.
    """

    def __init__(self, probability: float):
        self._probability = check_probability(probability)

    @classmethod
    def with_probability(cls, probability: float) -> "ErasureChannel":
        """
        Create a channel with the given erasure probability.

        Raises
        ------
        InvalidProbability
            If ``probability`` is not in [0, 1].
        """
        return cls(probability)

    @property
    def probability(self) -> float:
        return self._probability

    def erasure_probability(self, bit_index: int) -> float:
        if bit_index < 0:
            raise IndexError(f"bit index must be non-negative, got {bit_index}")
        return self._probability

    flip_probability = erasure_probability

    def flip_probabilities(self, length: int) -> np.ndarray:
        return np.full(length, self._probability, dtype=float)

    def __eq__(self, other):
        if not isinstance(other, ErasureChannel):
            return NotImplemented
        return self._probability == other._probability

    def __hash__(self):
        return hash(("erasure", self._probability))

    def __str__(self):
        return f"Erasure({self._probability})"

    def __repr__(self):
        return f"ErasureChannel(probability={self._probability})"


class IndependentFlipChannel(NoiseModel):
    """
    Flips bit ``i`` independently with its own probability ``probabilities[i]``.

    Parameters
    ----------
    probabilities : sequence of float
        One flip probability per bit, each in [0, 1]
    """

    def __init__(self, probabilities: Sequence[float]):
        self._probabilities = np.array(
            [check_probability(p) for p in probabilities], dtype=float
        )
        self._probabilities.setflags(write=False)

    def __len__(self):
        return self._probabilities.shape[0]

    def flip_probability(self, bit_index: int) -> float:
        if not 0 <= bit_index < len(self):
            raise IndexError(f"bit {bit_index} outside of 0..{len(self)}")
        return float(self._probabilities[bit_index])

    def flip_probabilities(self, length: int) -> np.ndarray:
        if length > len(self):
            raise IndexError(
                f"channel defines {len(self)} probabilities, {length} requested"
            )
        return self._probabilities[:length].copy()

    def __repr__(self):
        return f"IndependentFlipChannel(length={len(self)})"


def random_error(code_or_block_size, noise_model: NoiseModel, rng=None) -> ErrorVector:
    """
    Draw a random error from a noise model.

    Bit ``i`` is flipped iff a fresh uniform draw in [0, 1) is less than
    ``noise_model.flip_probability(i)``. One draw is consumed per bit, in
    index order, so the same generator state always yields the same error.

    Parameters
    ----------
    code_or_block_size : LinearCode or int
        Anything with a ``block_size()`` method, or the number of bits
    noise_model : NoiseModel
        Source of the per-bit flip probabilities
    rng : numpy.random.Generator, int or None
        Random source, or a seed for ``numpy.random.default_rng``

    Returns
    -------
    ErrorVector
        Sorted positions of the flipped bits
    """
    block_size = getattr(code_or_block_size, "block_size", code_or_block_size)
    if callable(block_size):
        block_size = block_size()
    block_size = int(block_size)
    return noise_model.sample_error_of_length(block_size, rng)
