"""
Interfaces (Protocol) - Contrats sans implementation.

Les composants dependent de ces abstractions plutot que des
implementations concretes (client aiohttp, ConfigManager YAML).
"""

from typing import Any, Dict, Protocol

from ..domain import ResultatRpc


class GestionnaireConfig(Protocol):
    """Interface pour la gestion de configuration."""

    def obtenir(self, cle: str, defaut: Any = None) -> Any:
        """Obtient une valeur de configuration (cle pointee)."""
        ...

    def definir(self, cle: str, valeur: Any) -> None:
        """Definit une valeur de configuration."""
        ...

    def recharger(self) -> None:
        """Recharge la configuration depuis la source."""
        ...

    def get_all(self) -> Dict[str, Any]:
        """Retourne la configuration complete."""
        ...


class ClientNoeud(Protocol):
    """
    Capacite d'appel JSON-RPC vers un noeud.

    Les echecs attendus (transport, HTTP, erreur JSON-RPC) sont renvoyes
    sous forme de ``ResultatRpc.echec`` ; seules les erreurs inattendues
    sont levees.
    """

    async def make_request(self, endpoint: str, methode: str, *params: Any) -> ResultatRpc:
        ...


__all__ = [
    "ClientNoeud",
    "GestionnaireConfig",
]
