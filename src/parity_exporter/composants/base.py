"""Base class for managed components."""

import asyncio
import logging

from ..app.decorateurs import log_appel, metriques
from ..domain import ConditionSante
from ..interfaces import GestionnaireConfig


class BaseComponent:
    """Base class for managed components."""

    def __init__(self, config: GestionnaireConfig | None = None, nom_composant: str | None = None) -> None:
        self._config: GestionnaireConfig | None = config
        self.nom_composant = nom_composant or self.__class__.__name__.lower()
        self._shutdown_event = asyncio.Event()
        self._is_running = False
        self._logger = logging.getLogger(f"{__name__}.{self.nom_composant}")

    @log_appel()
    @metriques("component.start")
    async def demarrer(self) -> None:
        self._shutdown_event.clear()
        self._is_running = True
        self._logger.info("Composant demarre: %s", self.nom_composant)

    @log_appel()
    @metriques("component.stop")
    async def arreter(self) -> None:
        self._shutdown_event.set()
        self._is_running = False
        self._logger.info("Composant arrete: %s", self.nom_composant)

    async def verifier_sante(self) -> ConditionSante:
        return ConditionSante(
            nom_composant=self.nom_composant,
            sain=self._is_running,
            message="Operationnel" if self._is_running else "Arrete",
            details={"running": self._is_running},
        )

    def shutdown_requested(self) -> bool:
        return self._shutdown_event.is_set()

    @property
    def is_running(self) -> bool:
        return self._is_running


__all__ = ["BaseComponent"]
