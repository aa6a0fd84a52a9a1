"""
Core module - precision, configuration, environment, errors and logging.
"""

from v3d.core.config import ConfigManager, KernelConfig, PrecisionProfile
from v3d.core.environment import (
    Environment,
    default_environment,
    resolve_precision,
    set_default_environment,
)
from v3d.core.exceptions import (
    ConfigurationError,
    ConstructionError,
    UnsupportedOperationError,
    V3DError,
)
from v3d.core.precision import RationalSqrt, RoundingMode, as_rational, round_rational

__all__ = [
    # Config
    "ConfigManager",
    "KernelConfig",
    "PrecisionProfile",
    # Environment
    "Environment",
    "default_environment",
    "resolve_precision",
    "set_default_environment",
    # Exceptions
    "V3DError",
    "ConfigurationError",
    "ConstructionError",
    "UnsupportedOperationError",
    # Precision
    "RationalSqrt",
    "RoundingMode",
    "as_rational",
    "round_rational",
]
