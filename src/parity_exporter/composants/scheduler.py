"""
RefreshScheduler - declenche le rafraichissement a intervalle fixe.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from ..app.decorateurs import log_appel
from ..domain import ConditionSante
from .base import BaseComponent

if TYPE_CHECKING:
    from ..interfaces import GestionnaireConfig

logger = logging.getLogger(__name__)


class RefreshScheduler(BaseComponent):
    """Appelle ``refresh`` immediatement puis toutes les ``intervalle`` secondes."""

    def __init__(
        self,
        refresh: Callable[[], Awaitable[None]],
        intervalle: float = 15.0,
        config: GestionnaireConfig | None = None,
    ) -> None:
        super().__init__(config, "scheduler")
        self._refresh = refresh
        self.intervalle = intervalle
        self._tache: asyncio.Task | None = None
        self.nb_cycles = 0

    @log_appel()
    async def demarrer(self) -> None:
        if self._tache is not None and not self._tache.done():
            logger.warning("Planificateur deja demarre")
            return
        await super().demarrer()
        self._tache = asyncio.create_task(self._boucle(), name="parity-exporter-refresh")

    @log_appel()
    async def arreter(self) -> None:
        await super().arreter()
        if self._tache is None:
            return
        try:
            await asyncio.wait_for(self._tache, timeout=self.intervalle)
        except asyncio.TimeoutError:
            self._tache.cancel()
            await asyncio.gather(self._tache, return_exceptions=True)
        self._tache = None

    async def _boucle(self) -> None:
        logger.info("Rafraichissement toutes les %ss", self.intervalle)
        while not self.shutdown_requested():
            try:
                await self._refresh()
            except Exception as exc:
                logger.error("Cycle de rafraichissement en erreur: %s", exc, exc_info=True)
            self.nb_cycles += 1
            try:
                await asyncio.wait_for(self._shutdown_event.wait(), timeout=self.intervalle)
            except asyncio.TimeoutError:
                continue
        logger.info("Planificateur arrete apres %d cycles", self.nb_cycles)

    async def verifier_sante(self) -> ConditionSante:
        condition = await super().verifier_sante()
        return ConditionSante(
            nom_composant=condition.nom_composant,
            sain=condition.sain,
            message=condition.message,
            details={**condition.details, "cycles": self.nb_cycles, "intervalle": self.intervalle},
        )


__all__ = ["RefreshScheduler"]
