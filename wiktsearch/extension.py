"""
Wiktionary Extension - Plug the provider into a launcher's QueryRouter.

The extension owns the provider: enable() builds it and registers its
handler, disable() unregisters and tears it down. Nothing is global, so
several launchers (or tests) can each hold their own extension.

Usage:
  router = QueryRouter()
  extension = WiktionaryExtension(router, on_update=panel.show_results)
  extension.enable()
"""

from typing import Any, Callable, Dict, Optional

from loguru import logger

from wiktsearch.search.handlers.wiktionary import WiktionarySearchHandler
from wiktsearch.search.router import QueryRouter, ResultItem
from wiktsearch.services.dispatcher import Scheduler
from wiktsearch.services.provider import WiktionarySearchProvider
from wiktsearch.utils.helpers import load_settings


class WiktionaryExtension:
    """Owns one provider instance and its registration with the router."""

    def __init__(
        self,
        router: QueryRouter,
        settings: Optional[Dict[str, Any]] = None,
        scheduler: Optional[Scheduler] = None,
        on_update: Optional[Callable[[list[ResultItem]], None]] = None,
    ):
        self.router = router
        self.settings = settings
        self.scheduler = scheduler
        self.on_update = on_update
        self.provider: Optional[WiktionarySearchProvider] = None
        self.handler: Optional[WiktionarySearchHandler] = None

    @property
    def enabled(self) -> bool:
        return self.provider is not None

    def enable(self) -> None:
        if self.provider is not None:
            return

        settings = self.settings if self.settings is not None else load_settings()
        scheduler = self.scheduler
        if scheduler is None:
            # GLib is only needed when running inside the launcher
            from wiktsearch.services.mainloop import GLibScheduler
            scheduler = GLibScheduler()

        self.provider = WiktionarySearchProvider.from_settings(settings, scheduler)
        self.handler = WiktionarySearchHandler(self.provider, on_update=self.on_update)
        self.router.register(self.handler)
        logger.debug("Wiktionary search provider enabled")

    def disable(self) -> None:
        if self.provider is None:
            return

        self.router.unregister(self.handler)
        self.provider.destroy()
        self.provider = None
        self.handler = None
        logger.debug("Wiktionary search provider disabled")
