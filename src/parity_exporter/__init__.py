"""
parity-exporter - Exporteur Prometheus pour noeuds Parity / Ethereum.

Interroge l'endpoint JSON-RPC d'un noeud et republie ses indicateurs de sante
(version, pairs, retard de synchronisation, bloc courant) sous forme de jauges.
"""

__version__ = "1.0.0"
__license__ = "MIT"


# Lazy imports to avoid circular dependencies
def __getattr__(name):
    if name == "NodeCollector":
        from .composants.collector import NodeCollector
        return NodeCollector
    elif name == "MetricsExporter":
        from .composants.exporter import MetricsExporter
        return MetricsExporter
    elif name == "create_metrics":
        from .composants.collector import create_metrics
        return create_metrics
    elif name == "create_prometheus_client":
        from .composants.exporter import create_prometheus_client
        return create_prometheus_client
    elif name == "ConteneurDI":
        from .app.container import ConteneurDI
        return ConteneurDI
    raise AttributeError(f"module 'parity_exporter' has no attribute '{name}'")


__all__ = [
    "ConteneurDI",
    "MetricsExporter",
    "NodeCollector",
    "create_metrics",
    "create_prometheus_client",
]
