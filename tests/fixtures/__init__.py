"""
Package fixtures - Fixtures reutilisables pour pytest.
"""

from .config_fixtures import (
    config_dict_test,
    config_file,
    config_manager_test,
)
from .rpc_fixtures import (
    NODE_URL,
    ClientBloque,
    FakeClientNoeud,
    etat_registre,
    fake_client,
    registry,
    reponses,
    reponses_nominales,
)

__all__ = [
    # Config fixtures
    "config_dict_test",
    "config_file",
    "config_manager_test",

    # RPC fixtures
    "NODE_URL",
    "ClientBloque",
    "FakeClientNoeud",
    "etat_registre",
    "fake_client",
    "registry",
    "reponses",
    "reponses_nominales",
]
