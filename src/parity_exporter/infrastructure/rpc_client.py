"""
Client JSON-RPC 2.0 vers le noeud, base sur aiohttp.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from typing import Any

import aiohttp

from ..app.decorateurs import log_appel, metriques
from ..domain import ResultatRpc

logger = logging.getLogger(__name__)


def parse_hex(valeur: str | int) -> int:
    """Decode une quantite JSON-RPC en base 16 ("0x64" -> 100).

    Le prefixe ``0x`` est optionnel ; un entier deja decode est renvoye tel quel.
    """
    if isinstance(valeur, bool):
        raise TypeError(f"Quantite hexadecimale attendue, recu un booleen: {valeur!r}")
    if isinstance(valeur, int):
        return valeur
    if not isinstance(valeur, str):
        raise TypeError(f"Quantite hexadecimale attendue, recu {type(valeur).__name__}")
    return int(valeur, 16)


def _interpreter_reponse(methode: str, corps: Any) -> ResultatRpc:
    if not isinstance(corps, dict):
        return ResultatRpc.echec(f"{methode}: reponse JSON-RPC invalide")

    erreur = corps.get("error")
    if erreur is not None:
        if isinstance(erreur, dict):
            return ResultatRpc.echec(
                f"{methode}: erreur {erreur.get('code')} {erreur.get('message', '')}".rstrip()
            )
        return ResultatRpc.echec(f"{methode}: erreur {erreur}")

    if "result" not in corps:
        return ResultatRpc.echec(f"{methode}: champ 'result' absent")

    return ResultatRpc.succes(corps["result"])


class ClientRpc:
    """
    Client JSON-RPC minimal.

    Implemente le Protocol ClientNoeud : les echecs de transport, les statuts
    HTTP >= 400 et les erreurs JSON-RPC deviennent des ``ResultatRpc.echec``.
    Sans session injectee, chaque appel ouvre sa propre session.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._ids = itertools.count(1)

    def _payload(self, methode: str, params: tuple[Any, ...]) -> dict[str, Any]:
        return {
            "jsonrpc": "2.0",
            "method": methode,
            "params": list(params),
            "id": next(self._ids),
        }

    @log_appel(afficher_args=True, afficher_retour=True)
    @metriques("rpc.make_request")
    async def make_request(self, endpoint: str, methode: str, *params: Any) -> ResultatRpc:
        payload = self._payload(methode, params)
        try:
            if self._session is not None:
                return await self._envoyer(self._session, endpoint, methode, payload)
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                return await self._envoyer(session, endpoint, methode, payload)
        except asyncio.TimeoutError:
            logger.warning("Appel %s vers %s: delai depasse", methode, endpoint)
            return ResultatRpc.echec(f"{methode}: delai depasse")
        except aiohttp.ClientError as exc:
            logger.warning("Appel %s vers %s echoue: %s", methode, endpoint, exc)
            return ResultatRpc.echec(f"{methode}: {exc}")

    async def _envoyer(
        self,
        session: aiohttp.ClientSession,
        endpoint: str,
        methode: str,
        payload: dict[str, Any],
    ) -> ResultatRpc:
        async with session.post(endpoint, json=payload, timeout=self._timeout) as response:
            if response.status >= 400:
                logger.warning("Appel %s vers %s: HTTP %s", methode, endpoint, response.status)
                return ResultatRpc.echec(f"{methode}: HTTP {response.status}")
            try:
                corps = await response.json(content_type=None)
            except ValueError as exc:
                logger.warning("Appel %s vers %s: JSON invalide (%s)", methode, endpoint, exc)
                return ResultatRpc.echec(f"{methode}: JSON invalide")

        resultat = _interpreter_reponse(methode, corps)
        if not resultat.ok:
            logger.warning("Appel %s vers %s: %s", methode, endpoint, resultat.erreur)
        return resultat


__all__ = ["ClientRpc", "parse_hex"]
