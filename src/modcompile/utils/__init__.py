"""
Shared utilities: logging setup and async helpers.
"""

from modcompile.utils.async_utils import dual, sequence
from modcompile.utils.logging import get_logger, setup_logging, setup_logging_from_config

__all__ = [
    "dual",
    "sequence",
    "get_logger",
    "setup_logging",
    "setup_logging_from_config",
]
