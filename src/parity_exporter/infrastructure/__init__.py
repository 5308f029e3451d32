"""Infrastructure - transport JSON-RPC et journalisation."""

from .logger import configurer_logging
from .rpc_client import ClientRpc, parse_hex

__all__ = [
    "ClientRpc",
    "configurer_logging",
    "parse_hex",
]
