"""
conftest.py - Fixtures et configuration globale pytest.
"""

import logging

import pytest

from fixtures.config_fixtures import (
    config_dict_test,
    config_file,
    config_manager_test,
)
from fixtures.rpc_fixtures import (
    fake_client,
    registry,
    reponses,
)


@pytest.fixture(autouse=True)
def reset_logging():
    """Reinitialise la configuration logging apres chaque test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    niveau = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(niveau)
