"""
Modcompile - dependency-ordered module compilation into bundles or mirrored trees.
"""

__version__ = "0.1.0"

# Programmatic API
from modcompile.core.api import bundle, compile_each

# Pipeline
from modcompile.core.types import CompileOptions, Entry, EntryKind, ModuleMode
from modcompile.core.writer import (
    EntryResult,
    compile_each_to_directory,
    compile_to_single_file,
    recursive_module_compile,
)

# Exceptions
from modcompile.exceptions import (
    CompileError,
    ConfigurationError,
    ModcompileError,
    OutputError,
    ResolutionError,
    SessionClosedError,
)

# Logging utilities
from modcompile.utils.logging import get_logger, setup_logging, setup_logging_from_config

__all__ = [
    # API
    "bundle",
    "compile_each",
    # Pipeline
    "compile_to_single_file",
    "compile_each_to_directory",
    "recursive_module_compile",
    "CompileOptions",
    "Entry",
    "EntryKind",
    "EntryResult",
    "ModuleMode",
    # Logging
    "setup_logging",
    "setup_logging_from_config",
    "get_logger",
    # Exceptions
    "ModcompileError",
    "ConfigurationError",
    "ResolutionError",
    "CompileError",
    "OutputError",
    "SessionClosedError",
]
