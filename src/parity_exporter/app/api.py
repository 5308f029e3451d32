"""
Application HTTP (FastAPI) exposant /metrics et /health.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import Any

from fastapi import FastAPI, Request, Response

from .. import __version__
from ..composants.collector import NodeCollector
from ..composants.exporter import MetricsExporter
from ..composants.scheduler import RefreshScheduler
from .container import ConteneurDI

logger = logging.getLogger(__name__)


def creer_app(conteneur: ConteneurDI) -> FastAPI:
    """Create the exporter application around an already wired container."""
    exporter = conteneur.resoudre(MetricsExporter)
    collector = conteneur.resoudre(NodeCollector)
    scheduler = conteneur.resoudre(RefreshScheduler)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Demarrage de l'exporteur pour %s", collector.node_url)
        await scheduler.demarrer()
        try:
            yield
        finally:
            await scheduler.arreter()
            logger.info("Exporteur arrete")

    app = FastAPI(
        title="Parity Exporter",
        description="Indicateurs de sante d'un noeud Parity au format Prometheus",
        version=__version__,
        lifespan=lifespan,
    )

    @app.get("/metrics")
    async def metrics(request: Request) -> Response:
        return await exporter.serve_metrics(request)

    @app.get("/health")
    async def health() -> dict[str, Any]:
        noeud = await collector.verifier_sante()
        planificateur = await scheduler.verifier_sante()
        return {
            "status": "ok" if noeud.sain else "degraded",
            "version": __version__,
            "node": _serialiser(asdict(noeud)),
            "scheduler": _serialiser(asdict(planificateur)),
        }

    return app


def _serialiser(condition: dict[str, Any]) -> dict[str, Any]:
    condition["derniere_verification"] = condition["derniere_verification"].isoformat()
    return condition


__all__ = ["creer_app"]
