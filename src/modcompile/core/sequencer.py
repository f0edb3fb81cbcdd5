"""
Strictly ordered entry loading.
"""

from __future__ import annotations

from collections.abc import Sequence

from modcompile.core.orchestrator import ModuleLoadOrchestrator
from modcompile.core.types import CompileOptions, Entry
from modcompile.utils.async_utils import sequence


async def run_all(entries: Sequence[Entry], options: CompileOptions, orchestrator: ModuleLoadOrchestrator) -> None:
    """
    Load ``entries`` one after another, in list order.

    Entry ``i + 1`` is not started until entry ``i`` has finished loading, so
    top-level elements land in the session in caller order. The first failure
    stops the run.
    """
    await sequence(entries, lambda entry: orchestrator.load_one(entry, options))
