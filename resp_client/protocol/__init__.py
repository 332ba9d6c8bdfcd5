"""RESP2 protocol package: value model, encoder and decoder."""

from resp_client.protocol.decoder import Decoder, decode_reply
from resp_client.protocol.encoder import Encoder, encode_command
from resp_client.protocol.types import CommandArg, RespType, RespValue

__all__ = [
    "CommandArg",
    "Decoder",
    "Encoder",
    "RespType",
    "RespValue",
    "decode_reply",
    "encode_command",
]
