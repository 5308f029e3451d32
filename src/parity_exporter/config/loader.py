"""
Gestionnaire de Configuration - Chargement de config.yaml.

Implemente l'interface GestionnaireConfig.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict

import yaml

from ..domain.exceptions import ErreurConfiguration


class ConfigManager:
    """
    Gere le chargement et l'acces a la configuration YAML.

    Implemente le Protocol GestionnaireConfig.
    """

    def __init__(self, config_path: str | Dict[str, Any] = "config.yaml"):
        """
        Initialise le gestionnaire de configuration.

        Args:
            config_path: Chemin vers le fichier config.yaml ou dict en memoire

        Raises:
            ErreurConfiguration: Si le fichier est introuvable ou invalide
        """
        self.logger = logging.getLogger(__name__)

        if isinstance(config_path, dict):
            self.config_path = None
            self._config = copy.deepcopy(config_path)
            self.logger.info("Configuration chargee depuis un dictionnaire")
            return

        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise ErreurConfiguration(
                f"Fichier de configuration introuvable: {self.config_path}"
            )
        self._config = self._charger_config()
        self.logger.info("Configuration chargee depuis %s", self.config_path)

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "ConfigManager":
        """Cree un ConfigManager a partir d'un dict en memoire."""
        return cls(config)

    def _charger_config(self) -> Dict[str, Any]:
        """Charge le fichier YAML."""
        try:
            with open(self.config_path, encoding="utf-8") as f:
                donnees = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            self.logger.error("Erreur lors du parsing YAML: %s", e)
            raise ErreurConfiguration(f"YAML invalide: {self.config_path}") from e

        if not isinstance(donnees, dict):
            raise ErreurConfiguration(
                f"La racine de {self.config_path} doit etre un dictionnaire"
            )
        return donnees

    def obtenir(self, cle: str, defaut: Any = None) -> Any:
        """
        Obtient une valeur de configuration.

        Supporte les cles imbriquees en notation pointee :
        Ex: "node.url" -> self._config["node"]["url"]
        """
        valeur = self._config

        for partie in cle.split("."):
            if isinstance(valeur, dict) and partie in valeur:
                valeur = valeur[partie]
            else:
                return defaut

        return valeur

    def get(self, cle: str, defaut: Any = None) -> Any:
        """Alias pour obtenir()."""
        return self.obtenir(cle, defaut)

    def definir(self, cle: str, valeur: Any) -> None:
        """
        Definit une valeur de configuration.

        Modifie la configuration en memoire uniquement, pas le fichier.
        """
        parties = cle.split(".")
        config = self._config

        for partie in parties[:-1]:
            if not isinstance(config.get(partie), dict):
                config[partie] = {}
            config = config[partie]

        config[parties[-1]] = valeur
        self.logger.debug("Configuration modifiee: %s = %s", cle, valeur)

    def recharger(self) -> None:
        """Recharge la configuration depuis le fichier."""
        if self.config_path is None:
            return
        self._config = self._charger_config()
        self.logger.info("Configuration rechargee")

    def get_all(self) -> Dict[str, Any]:
        """Retourne une copie de la configuration complete."""
        return copy.deepcopy(self._config)

    def __repr__(self) -> str:
        return f"ConfigManager({self.config_path or 'dict'})"


__all__ = ["ConfigManager"]
