"""RESP2 command encoder.

Serializes commands into RESP wire bytes and writes them to the output side
of a binary stream:

    str / bytes     $<byte length>\\r\\n<bytes>\\r\\n
    int             :<decimal>\\r\\n
    list / tuple    *<count>\\r\\n followed by each element

A whole command is packed in memory before the first byte reaches the stream,
so a command rejected with UnsupportedTypeError leaves the stream untouched.
"""

import logging
from typing import BinaryIO, Optional, Sequence, Union

from resp_client.config.client_config import ClientConfig
from resp_client.protocol.types import CommandArg
from resp_client.utils.error_handling import UnsupportedTypeError

logger = logging.getLogger(__name__)

CRLF = b"\r\n"


class Encoder:
    """Write RESP-encoded commands to a binary output stream.

    Attributes:
        stream: Output stream exposing ``write`` and ``flush``
        encoding: Text encoding applied to str arguments
        encoding_errors: Error handler used while encoding str arguments
    """

    def __init__(self, stream: BinaryIO, config: Optional[ClientConfig] = None):
        """Initialize the encoder.

        Args:
            stream: Output stream exposing ``write`` and ``flush``
            config: Client configuration; defaults are used if omitted
        """
        config = config or ClientConfig()
        self.stream = stream
        self.encoding = config.encoding
        self.encoding_errors = config.encoding_errors

    def write(self, command: Sequence[CommandArg]) -> None:
        """Encode a command as a RESP array, write it and flush the stream.

        Args:
            command: Command name and arguments

        Raises:
            UnsupportedTypeError: If the command is not a list or tuple, or any
                argument is not a string, integer or list
        """
        if not isinstance(command, (list, tuple)):
            raise UnsupportedTypeError(command)
        data = self.pack(command)
        self.stream.write(data)
        self.stream.flush()
        logger.debug("Wrote %d bytes: %r", len(data), data)

    def pack(self, value: CommandArg) -> bytes:
        """Return the wire bytes of a value without touching the stream."""
        buffer = bytearray()
        self._pack_into(buffer, value)
        return bytes(buffer)

    def write_bulk(self, value: Union[str, bytes]) -> None:
        buffer = bytearray()
        self._pack_bulk(buffer, value)
        self.stream.write(buffer)

    def write_integer(self, value: int) -> None:
        buffer = bytearray()
        self._pack_integer(buffer, value)
        self.stream.write(buffer)

    def write_array(self, values: Sequence[CommandArg]) -> None:
        """Write an array without flushing; ``write`` is the flushing entry point."""
        buffer = bytearray()
        self._pack_array(buffer, values)
        self.stream.write(buffer)

    def _pack_into(self, buffer: bytearray, value: CommandArg) -> None:
        # bool is an int subclass but has no RESP representation
        if isinstance(value, bool):
            raise UnsupportedTypeError(value)
        if isinstance(value, (str, bytes)):
            self._pack_bulk(buffer, value)
        elif isinstance(value, int):
            self._pack_integer(buffer, value)
        elif isinstance(value, (list, tuple)):
            self._pack_array(buffer, value)
        else:
            raise UnsupportedTypeError(value)

    def _pack_bulk(self, buffer: bytearray, value: Union[str, bytes]) -> None:
        if isinstance(value, str):
            value = value.encode(self.encoding, self.encoding_errors)
        buffer += b"$%d\r\n" % len(value)
        buffer += value
        buffer += CRLF

    def _pack_integer(self, buffer: bytearray, value: int) -> None:
        buffer += b":%d\r\n" % value

    def _pack_array(self, buffer: bytearray, values: Sequence[CommandArg]) -> None:
        buffer += b"*%d\r\n" % len(values)
        for item in values:
            self._pack_into(buffer, item)


def encode_command(*args: CommandArg, config: Optional[ClientConfig] = None) -> bytes:
    """Return the wire bytes of a command.

    Example:
        >>> encode_command("SET", "key", "value")
        b'*3\\r\\n$3\\r\\nSET\\r\\n$3\\r\\nkey\\r\\n$5\\r\\nvalue\\r\\n'
    """
    return Encoder(None, config).pack(list(args))
