"""
Domain - Entites de donnees structurees.

Modeles immuables representant un cycle de collecte : resultats RPC,
instantane du noeud et valeurs de jauges calculees.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .exceptions import (
    ErreurConfiguration,
    ErreurExporter,
    ReponseNoeudInvalide,
)


def _maintenant() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ResultatRpc:
    """
    Resultat d'un appel JSON-RPC : succes avec charge utile, ou echec.

    La charge utile d'un succes peut etre falsy (``eth_syncing`` renvoie
    ``False`` quand le noeud est synchronise) ; seul ``ok`` distingue
    les deux cas.
    """
    ok: bool
    valeur: Any = None
    erreur: str = ""

    @classmethod
    def succes(cls, valeur: Any) -> "ResultatRpc":
        return cls(ok=True, valeur=valeur)

    @classmethod
    def echec(cls, erreur: str) -> "ResultatRpc":
        return cls(ok=False, erreur=erreur)

    def __repr__(self) -> str:
        if self.ok:
            return f"ResultatRpc(succes={self.valeur!r})"
        return f"ResultatRpc(echec={self.erreur!r})"


@dataclass(frozen=True)
class InstantaneNoeud:
    """Les quatre resultats RPC d'un cycle de collecte."""
    version_client: ResultatRpc
    synchronisation: ResultatRpc
    numero_bloc: ResultatRpc
    pairs: ResultatRpc


@dataclass(frozen=True)
class EtatNoeud:
    """
    Valeurs de jauges calculees a partir d'un instantane.

    ``up`` a 0 signifie que seule la jauge ``up`` doit etre ecrite.
    """
    up: int
    version: Optional[str] = None
    sync_status: int = 0
    current_block: int = 0
    active_peers: int = 0
    connected_peers: int = 0
    max_peers: int = 0
    enode: Optional[str] = None

    @classmethod
    def hors_ligne(cls) -> "EtatNoeud":
        return cls(up=0)


@dataclass(frozen=True)
class ConditionSante:
    """Etat de sante d'un composant."""
    nom_composant: str
    sain: bool
    message: str = ""
    derniere_verification: datetime = field(default_factory=_maintenant)
    details: Dict[str, Any] = field(default_factory=dict)


__all__ = [
    "ConditionSante",
    "ErreurConfiguration",
    "ErreurExporter",
    "EtatNoeud",
    "InstantaneNoeud",
    "ReponseNoeudInvalide",
    "ResultatRpc",
]
