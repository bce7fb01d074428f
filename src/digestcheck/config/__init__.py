"""Configuration model and loader for digestcheck."""

from .loader import ALGORITHM_ENV_VAR, ConfigError, load_config
from .models import AlgorithmName, ChecksumConfig

__all__ = [
    "ALGORITHM_ENV_VAR",
    "AlgorithmName",
    "ChecksumConfig",
    "ConfigError",
    "load_config",
]
