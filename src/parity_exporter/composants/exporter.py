"""
MetricsExporter - rendu texte du registre Prometheus.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from fastapi import Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from .collector import NodeCollector

if TYPE_CHECKING:
    from ..interfaces import ClientNoeud


class MetricsExporter:
    """Expose l'etat courant des jauges. Ne declenche jamais de collecte."""

    def __init__(self, registry: CollectorRegistry) -> None:
        self.registry = registry

    @property
    def content_type(self) -> str:
        return CONTENT_TYPE_LATEST

    def render(self) -> bytes:
        return generate_latest(self.registry)

    async def serve_metrics(self, request: Request | None = None) -> Response:
        return Response(content=self.render(), media_type=self.content_type)


class PrometheusClient:
    """Paire collecteur / exporteur partageant un registre dedie."""

    def __init__(
        self,
        node_url: str,
        client: ClientNoeud | None = None,
        prefix: str = "parity",
    ) -> None:
        self.registry = CollectorRegistry()
        self.node_url = node_url
        self._collector = NodeCollector(node_url, self.registry, client=client, prefix=prefix)
        self._exporter = MetricsExporter(self.registry)

    def create_metrics(self) -> Callable[[], Awaitable[None]]:
        """Renvoie le refresh lie au noeud. Les jauges sont creees une seule fois."""
        return self._collector.refresh

    async def serve_metrics(self, request: Request | None = None) -> Response:
        return await self._exporter.serve_metrics(request)


def create_prometheus_client(
    node_url: str,
    client: ClientNoeud | None = None,
    prefix: str = "parity",
) -> PrometheusClient:
    return PrometheusClient(node_url, client=client, prefix=prefix)


__all__ = ["MetricsExporter", "PrometheusClient", "create_prometheus_client"]
