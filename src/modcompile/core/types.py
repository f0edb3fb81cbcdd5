"""
Type definitions for modcompile.

Entries, compile options and the per-load options handed to a loader.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from modcompile.exceptions import ConfigurationError


class EntryKind(str, Enum):
    """How an entry is loaded."""

    MODULE = "module"
    SCRIPT = "script"


class ModuleMode(str, Enum):
    """Module output format requested from the compiler."""

    REGISTER = "register"
    INLINE = "inline"
    BOOTSTRAP = "bootstrap"


@dataclass(frozen=True)
class Entry:
    """One caller-specified compilation unit."""

    name: str
    kind: EntryKind = EntryKind.MODULE

    @property
    def is_script(self) -> bool:
        return self.kind is EntryKind.SCRIPT

    @classmethod
    def parse(cls, spec: str) -> Entry:
        """Parse ``script:path`` as a script entry and anything else as a module."""
        prefix, sep, rest = spec.partition(":")
        if sep and prefix in (EntryKind.SCRIPT.value, EntryKind.MODULE.value) and rest:
            return cls(rest, EntryKind(prefix))
        return cls(spec, EntryKind.MODULE)


# Aliases accepted in config files, mapped to CompileOptions field names
_OPTION_ALIASES = {
    "modules": "module_mode",
    "module_mode": "module_mode",
    "referrer": "referrer_name",
    "referrer_name": "referrer_name",
    "dep_target": "dependency_target",
    "dependency_target": "dependency_target",
}


@dataclass(frozen=True)
class CompileOptions:
    """
    Options for one compile request.

    ``bundle`` is derived by the single-file writer from the entry count.
    ``extras`` holds pass-through settings for the loader and compiler; each
    load receives its own deep copy via :meth:`copy`.
    """

    bundle: bool = False
    dependency_target: str | None = None
    referrer_name: str | None = None
    module_mode: ModuleMode | None = None
    extras: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.module_mode is not None and not isinstance(self.module_mode, ModuleMode):
            object.__setattr__(self, "module_mode", _parse_module_mode(self.module_mode))

    @property
    def is_register(self) -> bool:
        return self.module_mode is ModuleMode.REGISTER

    def copy(self) -> CompileOptions:
        """Return an independent copy, extras included."""
        return replace(self, extras=copy.deepcopy(self.extras))

    def with_bundle(self, bundle: bool) -> CompileOptions:
        return replace(self.copy(), bundle=bundle)

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a pass-through setting."""
        return self.extras.get(key, default)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None, **overrides: Any) -> CompileOptions:
        """
        Build options from a config mapping.

        Recognised keys (and their aliases) become fields, ``bundle`` is
        dropped, everything else lands in ``extras``. Keyword overrides follow
        the same rules, win over the mapping, and are ignored when None.
        """
        fields: dict[str, Any] = {}
        extras: dict[str, Any] = {}
        for key, value in (data or {}).items():
            if key == "bundle":
                continue
            target = _OPTION_ALIASES.get(key)
            if target is None:
                extras[key] = copy.deepcopy(value)
            else:
                fields[target] = value
        for key, value in overrides.items():
            if value is None or key == "bundle":
                continue
            target = _OPTION_ALIASES.get(key)
            if target is None:
                extras[key] = value
            else:
                fields[target] = value
        return cls(extras=extras, **fields)


def _parse_module_mode(value: Any) -> ModuleMode:
    try:
        return ModuleMode(value)
    except ValueError:
        valid = ", ".join(m.value for m in ModuleMode)
        raise ConfigurationError(f"Unknown module mode '{value}' (expected one of: {valid})") from None


@dataclass
class LoadOptions:
    """Context passed to every loader call and propagated to nested dependency loads."""

    referrer_name: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def options(self) -> CompileOptions | None:
        """The effective per-entry compile options, if any."""
        return self.metadata.get("options")
