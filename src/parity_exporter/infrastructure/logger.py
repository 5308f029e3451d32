"""
Logging utilities for the exporter.
"""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

FORMAT_TEXTE = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FORMAT_JSON = "%(asctime)s %(name)s %(levelname)s %(message)s"


def configurer_logging(niveau: str = "INFO", json: bool = False) -> None:
    """Configure le logger racine, en texte ou en JSON."""
    level = getattr(logging, niveau.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)

    handler = logging.StreamHandler()
    if json:
        handler.setFormatter(JsonFormatter(FORMAT_JSON))
    else:
        handler.setFormatter(logging.Formatter(FORMAT_TEXTE))

    root.handlers.clear()
    root.addHandler(handler)


__all__ = ["configurer_logging"]
