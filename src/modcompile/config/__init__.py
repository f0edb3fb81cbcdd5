"""
Configuration management: modcompile.yaml loading and environment resolution.
"""

from modcompile.config.loader import CONFIG_FILENAME, Config, load_config

__all__ = [
    "CONFIG_FILENAME",
    "load_config",
    "Config",
]
