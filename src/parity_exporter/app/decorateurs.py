"""
Decorateurs - journalisation des appels et mesure de duree.

@log_appel et @metriques s'appliquent indifferemment aux fonctions
synchrones et aux coroutines.
"""

import functools
import inspect
import logging
import time
from collections.abc import Callable
from typing import TypeVar, cast

T = TypeVar("T")


def log_appel(
    niveau: int = logging.DEBUG,
    afficher_args: bool = False,
    afficher_retour: bool = False,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorateur pour logger les appels de fonction.

    Utilisation :
        @log_appel()
        async def refresh(self) -> None:
            ...

        @log_appel(afficher_args=True, afficher_retour=True)
        async def make_request(self, endpoint, methode, *params):
            ...

    Args:
        niveau: Niveau de log de l'appel et du retour
        afficher_args: Afficher les arguments
        afficher_retour: Afficher la valeur de retour
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        logger = logging.getLogger(func.__module__)

        def _avant(args, kwargs) -> None:
            msg = f"Appel: {func.__qualname__}"
            if afficher_args:
                msg += f"({args}, {kwargs})"
            logger.log(niveau, msg)

        def _apres(resultat) -> None:
            if afficher_retour:
                logger.log(niveau, f"Retour: {func.__qualname__} -> {resultat!r}")

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs) -> T:
                _avant(args, kwargs)
                try:
                    resultat = await func(*args, **kwargs)
                except Exception as e:
                    logger.error(f"Exception dans {func.__qualname__}: {e}")
                    raise
                _apres(resultat)
                return resultat

            return cast("Callable[..., T]", async_wrapper)

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs) -> T:
            _avant(args, kwargs)
            try:
                resultat = func(*args, **kwargs)
            except Exception as e:
                logger.error(f"Exception dans {func.__qualname__}: {e}")
                raise
            _apres(resultat)
            return resultat

        return cast("Callable[..., T]", sync_wrapper)

    return decorator


def metriques(nom_metrique: str | None = None) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorateur mesurant la duree d'execution (log DEBUG).

    Utilisation :
        @metriques("collector.refresh")
        async def refresh(self) -> None:
            ...

    Args:
        nom_metrique: Nom de la mesure (par defaut: execution_time.<fonction>)
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        logger = logging.getLogger(func.__module__)
        metrique_name = nom_metrique or f"execution_time.{func.__name__}"

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs) -> T:
                debut = time.perf_counter()
                try:
                    return await func(*args, **kwargs)
                finally:
                    logger.debug(f"{metrique_name}: {time.perf_counter() - debut:.3f}s")

            return cast("Callable[..., T]", async_wrapper)

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs) -> T:
            debut = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                logger.debug(f"{metrique_name}: {time.perf_counter() - debut:.3f}s")

        return cast("Callable[..., T]", sync_wrapper)

    return decorator


__all__ = [
    "log_appel",
    "metriques",
]
