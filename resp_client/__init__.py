"""Minimal RESP2 client.

This package encodes commands to, and decodes replies from, a byte stream
speaking the REdis Serialization Protocol, with support for pipelined
request/response batches.
"""

from resp_client.config import ClientConfig, ClientConfigModel, load_config
from resp_client.connection import RedisConnection
from resp_client.pipeline import Pipeline
from resp_client.protocol import (
    CommandArg,
    Decoder,
    Encoder,
    RespType,
    RespValue,
    decode_reply,
    encode_command,
)
from resp_client.utils.error_handling import (
    ConfigurationError,
    ConnectionBrokenError,
    ConnectionClosedError,
    ProtocolError,
    RespClientError,
    ServerError,
    UnsupportedTypeError,
)

__all__ = [
    # Core classes
    "RedisConnection",
    "Pipeline",
    "Encoder",
    "Decoder",
    # Value model
    "CommandArg",
    "RespType",
    "RespValue",
    "encode_command",
    "decode_reply",
    # Config
    "ClientConfig",
    "ClientConfigModel",
    "load_config",
    # Errors
    "RespClientError",
    "ProtocolError",
    "ServerError",
    "UnsupportedTypeError",
    "ConnectionClosedError",
    "ConnectionBrokenError",
    "ConfigurationError",
]
