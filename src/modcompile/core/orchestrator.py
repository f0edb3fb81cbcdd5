"""
Per-entry load decisions.
"""

from __future__ import annotations

from collections.abc import Callable

from modcompile.codegen import create_module_evaluation_statement
from modcompile.core.elements import Element
from modcompile.core.interfaces import Loader
from modcompile.core.session import LoaderSession
from modcompile.core.types import CompileOptions, Entry, LoadOptions
from modcompile.utils.logging import get_logger

logger = get_logger("modcompile.orchestrator")


class ModuleLoadOrchestrator:
    """
    Loads one entry through a loader.

    Scripts go through ``load_as_script``; modules through ``import_module``.
    In register mode a module is followed by an evaluation statement for the
    name the loader registered it under, appended once the import has
    completed. Loader errors propagate unchanged.
    """

    def __init__(
        self,
        loader: Loader,
        session: LoaderSession,
        evaluation_factory: Callable[[str], Element] = create_module_evaluation_statement,
    ):
        self.loader = loader
        self.session = session
        self._create_evaluation = evaluation_factory

    async def load_one(self, entry: Entry, options: CompileOptions) -> None:
        # Each load gets its own copy so nested loads cannot leak changes
        entry_options = options.copy()
        load_options = LoadOptions(
            referrer_name=entry_options.referrer_name,
            metadata={"options": entry_options},
        )

        if entry.is_script:
            logger.debug(f"Loading script {entry.name}")
            await self.loader.load_as_script(entry.name, load_options)
            return

        logger.debug(f"Importing module {entry.name}")
        await self.loader.import_module(entry.name, load_options)
        if entry_options.is_register:
            registered = self.loader.canonical_name(entry.name, entry_options.referrer_name, entry_options)
            self.session.append(self._create_evaluation(registered))
