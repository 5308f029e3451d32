"""
NodeCollector - collecte periodique des indicateurs d'un noeud Parity.

Un cycle (``refresh``) lance quatre appels JSON-RPC en parallele, calcule
l'ensemble des valeurs de jauges a partir des reponses, puis les ecrit en
une seule etape synchrone. Un cycle en echec ne modifie aucune jauge et
ne leve jamais d'exception.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from prometheus_client import CollectorRegistry, Gauge

from ..app.decorateurs import log_appel, metriques
from ..domain import ConditionSante, EtatNoeud, InstantaneNoeud, ReponseNoeudInvalide, ResultatRpc
from ..infrastructure.rpc_client import ClientRpc, parse_hex
from .base import BaseComponent

if TYPE_CHECKING:
    from ..interfaces import ClientNoeud, GestionnaireConfig

logger = logging.getLogger(__name__)

METHODE_VERSION = "web3_clientVersion"
METHODE_SYNC = "eth_syncing"
METHODE_BLOC = "eth_blockNumber"
METHODE_PAIRS = "parity_enode"


class JeuJauges:
    """Jauges exposees, enregistrees sur un registre explicite."""

    def __init__(self, registry: CollectorRegistry, prefix: str = "parity") -> None:
        def jauge(nom: str, aide: str, labels: tuple[str, ...] = ()) -> Gauge:
            return Gauge(f"{prefix}_{nom}", aide, labels, registry=registry)

        self.version = jauge("version", "Client version", ("value",))
        self.connected_peers = jauge("connected_peers", "Connected Peers")
        self.active_peers = jauge("active_peers", "Active Peers")
        self.max_peers = jauge("max_peers", "Maximum Peers")
        self.sync_status = jauge("sync_status", "Blocks behind the latest block of the network")
        self.current_block = jauge("current_block", "Current Block of Parity Node")
        self.up = jauge("up", "Parity up/down")
        self.enode_address = jauge("enode_address", "Ethereum Node Address (enode URL)", ("value",))
        self._labels: dict[str, str] = {}

    def appliquer(self, etat: EtatNoeud) -> None:
        """Ecrit un etat complet. Aucune suspension entre les ecritures."""
        self.up.set(etat.up)
        if not etat.up:
            return

        self._remplacer_label("version", self.version, etat.version)
        self.sync_status.set(etat.sync_status)
        self.current_block.set(etat.current_block)
        self.active_peers.set(etat.active_peers)
        self.connected_peers.set(etat.connected_peers)
        self.max_peers.set(etat.max_peers)
        if etat.enode:
            self._remplacer_label("enode_address", self.enode_address, etat.enode)

    def _remplacer_label(self, cle: str, jauge: Gauge, valeur: str | None) -> None:
        if valeur is None:
            return
        if self._labels.get(cle) != valeur:
            jauge.clear()
            self._labels[cle] = valeur
        jauge.labels(value=valeur).set(1)


def _champ(methode: str, charge: Any, nom: str) -> Any:
    if not isinstance(charge, dict):
        raise ReponseNoeudInvalide(methode, f"objet attendu, recu {type(charge).__name__}")
    if nom not in charge:
        raise ReponseNoeudInvalide(methode, f"champ '{nom}' absent")
    return charge[nom]


def _quantite(methode: str, valeur: Any) -> int:
    try:
        return parse_hex(valeur)
    except (TypeError, ValueError) as exc:
        raise ReponseNoeudInvalide(methode, f"quantite invalide {valeur!r}") from exc


def _exiger(methode: str, resultat: ResultatRpc) -> Any:
    if not resultat.ok:
        raise ReponseNoeudInvalide(methode, resultat.erreur or "appel en echec")
    return resultat.valeur


def interpreter_instantane(instantane: InstantaneNoeud) -> EtatNoeud:
    """
    Calcule les valeurs de jauges d'un cycle.

    Raises:
        ReponseNoeudInvalide: reponse mal formee, ou echec de eth_blockNumber
            ou parity_enode alors que le noeud repond
    """
    if not instantane.version_client.ok:
        return EtatNoeud.hors_ligne()

    sync = instantane.synchronisation
    if sync.ok and sync.valeur:
        courant = _quantite(METHODE_SYNC, _champ(METHODE_SYNC, sync.valeur, "currentBlock"))
        plus_haut = _quantite(METHODE_SYNC, _champ(METHODE_SYNC, sync.valeur, "highestBlock"))
        sync_status = plus_haut - courant
    else:
        sync_status = 0

    bloc = _quantite(METHODE_BLOC, _exiger(METHODE_BLOC, instantane.numero_bloc))

    pairs = _exiger(METHODE_PAIRS, instantane.pairs)
    enode = pairs.get("enode") if isinstance(pairs, dict) else None

    return EtatNoeud(
        up=1,
        version=str(instantane.version_client.valeur),
        sync_status=sync_status,
        current_block=bloc,
        active_peers=_quantite(METHODE_PAIRS, _champ(METHODE_PAIRS, pairs, "active")),
        connected_peers=_quantite(METHODE_PAIRS, _champ(METHODE_PAIRS, pairs, "connected")),
        max_peers=_quantite(METHODE_PAIRS, _champ(METHODE_PAIRS, pairs, "max")),
        enode=enode if isinstance(enode, str) and enode else None,
    )


class NodeCollector(BaseComponent):
    """Collecteur des indicateurs de sante d'un noeud."""

    def __init__(
        self,
        node_url: str,
        registry: CollectorRegistry,
        client: ClientNoeud | None = None,
        prefix: str = "parity",
        config: GestionnaireConfig | None = None,
    ) -> None:
        super().__init__(config, "collector")
        self.node_url = node_url
        self.registry = registry
        self._client: ClientNoeud = client or ClientRpc()
        self._jauges = JeuJauges(registry, prefix)
        self._verrou = asyncio.Lock()
        self._dernier_up: int | None = None
        self._derniere_collecte: datetime | None = None
        self._derniere_erreur: str | None = None

    @property
    def jauges(self) -> JeuJauges:
        return self._jauges

    async def _collecter(self) -> InstantaneNoeud:
        version, sync, bloc, pairs = await asyncio.gather(
            self._client.make_request(self.node_url, METHODE_VERSION),
            self._client.make_request(self.node_url, METHODE_SYNC),
            self._client.make_request(self.node_url, METHODE_BLOC),
            self._client.make_request(self.node_url, METHODE_PAIRS),
        )
        return InstantaneNoeud(
            version_client=version,
            synchronisation=sync,
            numero_bloc=bloc,
            pairs=pairs,
        )

    @log_appel()
    @metriques("collector.refresh")
    async def refresh(self) -> None:
        if self._verrou.locked():
            logger.debug("Cycle deja en cours pour %s, rafraichissement ignore", self.node_url)
            return

        async with self._verrou:
            try:
                instantane = await self._collecter()
                etat = interpreter_instantane(instantane)
                self._jauges.appliquer(etat)
            except Exception as exc:
                self._derniere_erreur = str(exc)
                logger.error(
                    "Echec de la recuperation des informations du noeud %s: %s",
                    self.node_url,
                    exc,
                    exc_info=True,
                )
                return

            self._dernier_up = etat.up
            self._derniere_collecte = datetime.now(timezone.utc)
            if etat.up:
                self._derniere_erreur = None
            else:
                self._derniere_erreur = instantane.version_client.erreur
                logger.warning("Noeud %s injoignable: %s", self.node_url, self._derniere_erreur)

    async def verifier_sante(self) -> ConditionSante:
        if self._dernier_up is None:
            message = "Aucun cycle termine"
        elif self._dernier_up:
            message = "Noeud joignable"
        else:
            message = "Noeud injoignable"
        return ConditionSante(
            nom_composant=self.nom_composant,
            sain=self._dernier_up == 1,
            message=message,
            details={
                "node_url": self.node_url,
                "up": self._dernier_up,
                "derniere_collecte": (
                    self._derniere_collecte.isoformat() if self._derniere_collecte else None
                ),
                "derniere_erreur": self._derniere_erreur,
            },
        )


def create_metrics(
    registry: CollectorRegistry,
    node_url: str,
    client: ClientNoeud | None = None,
    prefix: str = "parity",
) -> Callable[[], Awaitable[None]]:
    """Cree les jauges sur ``registry`` et renvoie l'operation refresh liee a ``node_url``."""
    return NodeCollector(node_url, registry, client=client, prefix=prefix).refresh


__all__ = [
    "JeuJauges",
    "NodeCollector",
    "create_metrics",
    "interpreter_instantane",
]
