from dataclasses import dataclass, field
from urllib.parse import urlparse

from ..domain.exceptions import ErreurConfiguration
from ..interfaces import GestionnaireConfig

_VRAI = {"true", "yes", "on", "1"}
_FAUX = {"false", "no", "off", "0"}


def _booleen(cle: str, valeur: object) -> bool:
    if isinstance(valeur, bool):
        return valeur
    if isinstance(valeur, str) and valeur.strip().lower() in _VRAI | _FAUX:
        return valeur.strip().lower() in _VRAI
    raise ValueError(f"{cle} doit etre un booleen, recu {valeur!r}")


@dataclass
class NodeConfig:
    """Connexion au noeud JSON-RPC."""
    url: str = "http://localhost:8545"
    timeout: float = 10.0


@dataclass
class ServeurConfig:
    """Serveur HTTP exposant /metrics."""
    host: str = "0.0.0.0"
    port: int = 9632
    refresh_interval: float = 15.0
    metric_prefix: str = "parity"


@dataclass
class LoggingConfig:
    level: str = "INFO"
    json: bool = False


@dataclass
class ExporterConfig:
    """Configuration globale de l'exporteur."""
    node: NodeConfig = field(default_factory=NodeConfig)
    exporter: ServeurConfig = field(default_factory=ServeurConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def depuis_config(cls, config: GestionnaireConfig) -> "ExporterConfig":
        """Construit et valide la configuration typee depuis un GestionnaireConfig."""
        defauts = cls()
        try:
            resultat = cls(
                node=NodeConfig(
                    url=str(config.obtenir("node.url", defauts.node.url)),
                    timeout=float(config.obtenir("node.timeout", defauts.node.timeout)),
                ),
                exporter=ServeurConfig(
                    host=str(config.obtenir("exporter.host", defauts.exporter.host)),
                    port=int(config.obtenir("exporter.port", defauts.exporter.port)),
                    refresh_interval=float(
                        config.obtenir("exporter.refresh_interval", defauts.exporter.refresh_interval)
                    ),
                    metric_prefix=str(
                        config.obtenir("exporter.metric_prefix", defauts.exporter.metric_prefix)
                    ),
                ),
                logging=LoggingConfig(
                    level=str(config.obtenir("logging.level", defauts.logging.level)).upper(),
                    json=_booleen("logging.json", config.obtenir("logging.json", defauts.logging.json)),
                ),
            )
        except (TypeError, ValueError) as exc:
            raise ErreurConfiguration(f"Valeur de configuration invalide: {exc}") from exc

        resultat.valider()
        return resultat

    def valider(self) -> None:
        parsed = urlparse(self.node.url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ErreurConfiguration(f"node.url doit etre une URL http(s): {self.node.url!r}")
        if self.node.timeout <= 0:
            raise ErreurConfiguration("node.timeout doit etre strictement positif")
        if self.exporter.refresh_interval <= 0:
            raise ErreurConfiguration("exporter.refresh_interval doit etre strictement positif")
        if not 0 < self.exporter.port < 65536:
            raise ErreurConfiguration(f"exporter.port hors limites: {self.exporter.port}")
        if not self.exporter.metric_prefix:
            raise ErreurConfiguration("exporter.metric_prefix ne peut pas etre vide")
