"""Composants - collecteur, exporteur et planificateur."""

from .base import BaseComponent
from .collector import JeuJauges, NodeCollector, create_metrics, interpreter_instantane
from .exporter import MetricsExporter, PrometheusClient, create_prometheus_client
from .scheduler import RefreshScheduler

__all__ = [
    "BaseComponent",
    "JeuJauges",
    "MetricsExporter",
    "NodeCollector",
    "PrometheusClient",
    "RefreshScheduler",
    "create_metrics",
    "create_prometheus_client",
    "interpreter_instantane",
]
