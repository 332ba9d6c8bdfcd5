"""Utility functions for the RESP client.

This package provides the exception hierarchy shared by the protocol,
pipeline and connection modules.
"""

from resp_client.utils.error_handling import (
    ConfigurationError,
    ConnectionBrokenError,
    ConnectionClosedError,
    ProtocolError,
    RespClientError,
    ServerError,
    UnsupportedTypeError,
    annotate_pipeline_error,
)

__all__ = [
    "RespClientError",
    "ProtocolError",
    "ServerError",
    "UnsupportedTypeError",
    "ConnectionClosedError",
    "ConnectionBrokenError",
    "ConfigurationError",
    "annotate_pipeline_error",
]
