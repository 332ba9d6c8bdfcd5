"""Configuration package for the RESP client."""

from resp_client.config.client_config import (
    MAX_BULK_LENGTH,
    ClientConfig,
    configure_logging,
)
from resp_client.config.models import ClientConfigModel, load_config

__all__ = [
    "MAX_BULK_LENGTH",
    "ClientConfig",
    "ClientConfigModel",
    "configure_logging",
    "load_config",
]
