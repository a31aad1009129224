"""
Error Types

Exceptions raised while configuring, sampling and using LDPC codes.
"""


class LDPCError(Exception):
    """Base class for all errors raised by ldpctools."""


class ConfigurationError(LDPCError, ValueError):
    """
    The requested code shape is inconsistent.

    Raised when the number of bit stubs ``n * d_v`` differs from the
    number of check stubs ``m * d_c``, or when a parameter is not a
    non-negative integer.
    """


class DegreeInfeasible(ConfigurationError):
    """A requested degree exceeds the number of nodes on the other side."""


class SamplingFailed(LDPCError, RuntimeError):
    """The sampler exhausted its resample budget without a simple graph."""


class InvalidProbability(LDPCError, ValueError):
    """A noise parameter lies outside of [0, 1]."""
