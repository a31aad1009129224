"""
Configuration Module

Immutable parameter sets for random regular codes and for the
Tanner graph sampler, plus the feasibility check run before sampling.
"""

import numbers
from dataclasses import dataclass

from .errors import ConfigurationError, DegreeInfeasible


def _check_count(name, value):
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise ConfigurationError(f"{name} must be non-negative, got {value}")
    return int(value)


def validate_degrees(block_size, number_of_checks, bit_degree, check_degree):
    """
    Checks that a regular bipartite graph with the given shape can exist.

    Parameters
    ----------
    block_size : int
        Number of bit nodes ``n``
    number_of_checks : int
        Number of check nodes ``m``
    bit_degree : int
        Number of checks connected to each bit, ``d_v``
    check_degree : int
        Number of bits connected to each check, ``d_c``

    Raises
    ------
    DegreeInfeasible
        If ``d_v > m`` or ``d_c > n``. A simple graph cannot connect a node
        to more distinct partners than exist.
    ConfigurationError
        If a parameter is not a non-negative integer or if
        ``n * d_v != m * d_c``.
    """
    n = _check_count("block_size", block_size)
    m = _check_count("number_of_checks", number_of_checks)
    d_v = _check_count("bit_degree", bit_degree)
    d_c = _check_count("check_degree", check_degree)

    if d_v > m:
        raise DegreeInfeasible(
            f"bit degree {d_v} exceeds the number of checks {m}"
        )
    if d_c > n:
        raise DegreeInfeasible(
            f"check degree {d_c} exceeds the block size {n}"
        )
    if n * d_v != m * d_c:
        raise ConfigurationError(
            f"can't generate a regular code with {n} bits of degree {d_v} "
            f"and {m} checks of degree {d_c} ({n * d_v} != {m * d_c} edges)"
        )


@dataclass(frozen=True)
class RegularCodeConfig:
    """
    Shape of a random regular LDPC code.

    Parameters
    ----------
    block_size : int, default=0
        Number of bits ``n``
    number_of_checks : int, default=0
        Number of parity checks ``m``
    bit_degree : int, default=0
        Checks per bit ``d_v``
    check_degree : int, default=0
        Bits per check ``d_c``
    """
    block_size: int = 0
    number_of_checks: int = 0
    bit_degree: int = 0
    check_degree: int = 0

    def validate(self):
        """Raises if no simple regular graph has this shape."""
        validate_degrees(
            self.block_size,
            self.number_of_checks,
            self.bit_degree,
            self.check_degree,
        )
        return self

    @property
    def number_of_edges(self) -> int:
        return self.block_size * self.bit_degree


@dataclass(frozen=True)
class SamplerConfig:
    """
    Attempt budget of the Tanner graph sampler.

    Parameters
    ----------
    max_resamples : int, default=100
        Number of full reshuffles before giving up
    max_repairs : int, default=10
        Number of endpoint swaps tried for each conflicting edge
    """
    max_resamples: int = 100
    max_repairs: int = 10

    def __post_init__(self):
        if _check_count("max_resamples", self.max_resamples) < 1:
            raise ConfigurationError("max_resamples must be at least 1")
        _check_count("max_repairs", self.max_repairs)
