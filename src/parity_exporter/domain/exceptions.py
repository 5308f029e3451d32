"""
Exceptions metier de l'exporteur.
"""


class ErreurExporter(Exception):
    """Classe de base pour les erreurs de l'exporteur."""

    pass


class ErreurConfiguration(ErreurExporter):
    """Erreur lors du chargement ou de la validation de la configuration."""

    pass


class ReponseNoeudInvalide(ErreurExporter):
    """Le noeud a renvoye une reponse inexploitable."""

    def __init__(self, methode: str, message: str) -> None:
        super().__init__(f"{methode}: {message}")
        self.methode = methode


__all__ = [
    "ErreurConfiguration",
    "ErreurExporter",
    "ReponseNoeudInvalide",
]
