"""
Injection de dependances - conteneur DI avec punq.
"""

import logging
from pathlib import Path as _Path
from typing import Any, TypeVar

import punq
from prometheus_client import CollectorRegistry

from ..composants.collector import NodeCollector
from ..composants.exporter import MetricsExporter
from ..composants.scheduler import RefreshScheduler
from ..config.loader import ConfigManager
from ..config.models import ExporterConfig
from ..infrastructure.rpc_client import ClientRpc
from ..interfaces import ClientNoeud, GestionnaireConfig

T = TypeVar("T")


class ConteneurDI:
    """Conteneur d'injection de dependances."""

    def __init__(self) -> None:
        self._container = punq.Container()
        self._instances: dict[type, Any] = {}
        self._logger = logging.getLogger(__name__)

    def enregistrer_singleton(self, interface: type[T], instance: T) -> None:
        self._container.register(interface, instance=instance)
        self._instances[interface] = instance
        self._logger.debug("Singleton enregistre: %s", interface.__name__)

    def enregistrer_services(
        self,
        config_source: dict[str, Any] | str | _Path | ConfigManager,
        client: ClientNoeud | None = None,
    ) -> None:
        """
        Construit le graphe d'objets de l'exporteur.

        Un seul registre Prometheus est partage par le collecteur et
        l'exporteur ; aucun n'utilise le registre global.

        Raises:
            ErreurConfiguration: Si la configuration est invalide
        """
        self._logger.info("Enregistrement des services...")

        if isinstance(config_source, ConfigManager):
            config_mgr = config_source
        elif isinstance(config_source, (str, _Path)):
            config_mgr = ConfigManager(str(config_source))
        elif isinstance(config_source, dict):
            config_mgr = ConfigManager.from_dict(config_source)
        else:
            raise TypeError("config_source doit etre un dict, un chemin ou un ConfigManager")

        config = ExporterConfig.depuis_config(config_mgr)
        self.enregistrer_singleton(GestionnaireConfig, config_mgr)
        self.enregistrer_singleton(ExporterConfig, config)

        registry = CollectorRegistry()
        rpc = client or ClientRpc(timeout=config.node.timeout)
        collector = NodeCollector(
            config.node.url,
            registry,
            client=rpc,
            prefix=config.exporter.metric_prefix,
            config=config_mgr,
        )
        scheduler = RefreshScheduler(
            collector.refresh,
            intervalle=config.exporter.refresh_interval,
            config=config_mgr,
        )

        self.enregistrer_singleton(CollectorRegistry, registry)
        self.enregistrer_singleton(ClientNoeud, rpc)
        self.enregistrer_singleton(NodeCollector, collector)
        self.enregistrer_singleton(MetricsExporter, MetricsExporter(registry))
        self.enregistrer_singleton(RefreshScheduler, scheduler)

        self._logger.info("Services enregistres pour le noeud %s", config.node.url)

    def resoudre(self, service_type: type[T]) -> T:
        if service_type in self._instances:
            return self._instances[service_type]
        instance = self._container.resolve(service_type)
        self._logger.debug("Service resolu: %s", service_type.__name__)
        return instance


class ConteneurFactory:
    """Factory pour creer et configurer un conteneur DI."""

    @staticmethod
    def creer_conteneur_test(
        config: dict[str, Any] | None = None,
        client: ClientNoeud | None = None,
    ) -> ConteneurDI:
        container = ConteneurDI()
        container.enregistrer_services(config or {}, client=client)
        return container

    @staticmethod
    def creer_conteneur_prod(config_source: str | ConfigManager) -> ConteneurDI:
        container = ConteneurDI()
        container.enregistrer_services(config_source)
        return container


__all__ = ["ConteneurDI", "ConteneurFactory"]
