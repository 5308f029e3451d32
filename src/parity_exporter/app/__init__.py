"""Package app - API HTTP, conteneur DI et point d'entree.

Les sous-modules (container, api, supervisor) s'importent explicitement :
les composants dependent de ``app.decorateurs`` et un import ici creerait
un cycle.
"""

from .decorateurs import log_appel, metriques

__all__ = [
    "log_appel",
    "metriques",
]
