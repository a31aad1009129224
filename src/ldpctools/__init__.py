"""
ldpctools: random regular LDPC codes and channel noise

Samples random regular Tanner graphs under exact degree constraints,
stores them as sparse GF(2) parity check matrices, and draws synthetic
errors from pluggable noise models.
"""

__version__ = "0.1.0"

from .config import RegularCodeConfig, SamplerConfig, validate_degrees
from .errors import (
    ConfigurationError,
    DegreeInfeasible,
    InvalidProbability,
    LDPCError,
    SamplingFailed,
)
from .matrix import ParityCheckMatrix
from .sampler import TannerGraphSampler
from .code import LinearCode, RandomRegularCode
from .noise import (
    BinarySymmetricChannel,
    ErasureChannel,
    ErrorVector,
    IndependentFlipChannel,
    NoiseModel,
    random_error,
)
from .simulator import SyndromeSimulator

__all__ = [
    "RegularCodeConfig",
    "SamplerConfig",
    "validate_degrees",
    "LDPCError",
    "ConfigurationError",
    "DegreeInfeasible",
    "SamplingFailed",
    "InvalidProbability",
    "ParityCheckMatrix",
    "TannerGraphSampler",
    "LinearCode",
    "RandomRegularCode",
    "NoiseModel",
    "BinarySymmetricChannel",
    "ErasureChannel",
    "IndependentFlipChannel",
    "ErrorVector",
    "random_error",
    "SyndromeSimulator",
]
