"""
Modcompile exception hierarchy.

All domain-specific exceptions inherit from ModcompileError, so callers can
catch any framework error with a single base class while still handling
specific failures when needed.

Hierarchy::

    ModcompileError
    ├── ConfigurationError   - config loading, parsing, validation
    ├── ResolutionError      - a module name cannot be located or read
    ├── CompileError         - a unit was rejected by the compiler
    ├── OutputError          - an artifact could not be written
    └── SessionClosedError   - a finished session was mutated

The compile pipeline itself never wraps these: whatever a loader or compiler
raises reaches the caller unchanged.
"""

from __future__ import annotations


class ModcompileError(Exception):
    """Base exception for all modcompile errors."""

    def __init__(self, message: str, *, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


# --- Configuration -----------------------------------------------------------


class ConfigurationError(ModcompileError):
    """Raised when configuration loading, parsing, or validation fails."""


# --- Loading -----------------------------------------------------------------


class ResolutionError(ModcompileError):
    """Raised when a module or script name cannot be resolved to source text."""

    def __init__(self, name: str, message: str, *, referrer: str | None = None) -> None:
        full = f"Cannot resolve '{name}'"
        if referrer:
            full += f" (imported from '{referrer}')"
        super().__init__(f"{full}: {message}", details={"name": name, "referrer": referrer})
        self.name = name
        self.referrer = referrer


class CompileError(ModcompileError):
    """Raised when a single unit fails to compile."""

    def __init__(self, name: str, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(f"Failed to compile '{name}': {message}", details={"name": name})
        self.name = name
        if cause is not None:
            self.__cause__ = cause


# --- Output ------------------------------------------------------------------


class OutputError(ModcompileError):
    """Raised when a compiled tree cannot be written."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"Cannot write '{path}': {message}", details={"path": path})
        self.path = path


# --- Session -----------------------------------------------------------------


class SessionClosedError(ModcompileError):
    """Raised when a loader session is used after its tree was extracted."""
