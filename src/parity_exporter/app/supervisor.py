"""
Point d'entree principal de l'exporteur.
"""

import argparse
import logging
import sys
from pathlib import Path

import uvicorn

from ..config.loader import ConfigManager
from ..config.models import ExporterConfig
from ..domain.exceptions import ErreurConfiguration
from ..infrastructure.logger import configurer_logging
from .api import creer_app
from .container import ConteneurFactory

logger = logging.getLogger(__name__)


def construire_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="parity-exporter",
        description="Expose les indicateurs d'un noeud Parity au format Prometheus.",
    )
    parser.add_argument("-c", "--config", help="Fichier config.yaml (optionnel)")
    parser.add_argument("--node-url", help="URL JSON-RPC du noeud (node.url)")
    parser.add_argument("--host", help="Adresse d'ecoute (exporter.host)")
    parser.add_argument("--port", type=int, help="Port d'ecoute (exporter.port)")
    parser.add_argument(
        "--interval", type=float, help="Intervalle de rafraichissement en secondes"
    )
    parser.add_argument("--log-level", help="Niveau de log (logging.level)")
    parser.add_argument(
        "--log-json", action="store_true", default=None, help="Logs au format JSON"
    )
    return parser


def charger_config(args: argparse.Namespace) -> ConfigManager:
    """Charge le fichier de configuration puis applique les options CLI."""
    if args.config:
        config_mgr = ConfigManager(str(Path(args.config)))
    else:
        config_mgr = ConfigManager.from_dict({})

    surcharges = {
        "node.url": args.node_url,
        "exporter.host": args.host,
        "exporter.port": args.port,
        "exporter.refresh_interval": args.interval,
        "logging.level": args.log_level,
        "logging.json": args.log_json,
    }
    for cle, valeur in surcharges.items():
        if valeur is not None:
            config_mgr.definir(cle, valeur)
    return config_mgr


def main(argv: list[str] | None = None) -> int:
    args = construire_parser().parse_args(argv)
    try:
        config_mgr = charger_config(args)
        config = ExporterConfig.depuis_config(config_mgr)
    except ErreurConfiguration as exc:
        configurer_logging("INFO")
        logger.error("Configuration invalide: %s", exc)
        return 1

    configurer_logging(config.logging.level, json=config.logging.json)

    try:
        conteneur = ConteneurFactory.creer_conteneur_prod(config_mgr)
        app = creer_app(conteneur)
        uvicorn.run(
            app,
            host=config.exporter.host,
            port=config.exporter.port,
            log_config=None,
        )
        return 0
    except KeyboardInterrupt:
        logger.info("Interruption clavier, arret...")
        return 0
    except Exception as exc:
        logger.error("Erreur fatale: %s", exc, exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
