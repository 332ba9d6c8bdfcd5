"""Connection binding an encoder/decoder pair to one byte stream.

The connection never opens or closes the transport. It wraps a socket (or a
pair of caller-supplied binary streams) in buffered views, owns those views,
and exposes one-shot calls and pipelines on top of them.

Usage:
    sock = socket.create_connection(("localhost", 6379))
    with RedisConnection.from_socket(sock) as conn:
        conn.call("SET", "key", "value")
        value = conn.call("GET", "key")
    sock.close()
"""

import logging
import socket
from typing import Any, BinaryIO, Optional

from resp_client.config.client_config import ClientConfig
from resp_client.pipeline import Pipeline
from resp_client.protocol.decoder import Decoder
from resp_client.protocol.encoder import Encoder
from resp_client.protocol.types import CommandArg
from resp_client.utils.error_handling import ConnectionBrokenError, ProtocolError

logger = logging.getLogger(__name__)


class RedisConnection:
    """Synchronous RESP2 client over a single stream.

    One logical thread of control may use a connection at a time; no
    locking is done here. A ProtocolError or I/O failure leaves the stream
    position undefined, after which the connection refuses further use.

    Attributes:
        config: Client configuration
        reader: Buffered input view owned by this connection
        writer: Buffered output view owned by this connection
        encoder: Encoder writing to ``writer``
        decoder: Decoder reading from ``reader``
        broken: Whether a fatal error has invalidated the stream
    """

    def __init__(
        self,
        reader: BinaryIO,
        writer: BinaryIO,
        config: Optional[ClientConfig] = None,
    ):
        """Bind to a pair of binary streams.

        Args:
            reader: Stream exposing ``read``
            writer: Stream exposing ``write`` and ``flush``
            config: Client configuration; defaults are used if omitted
        """
        self.config = config or ClientConfig()
        self.reader = reader
        self.writer = writer
        self.encoder = Encoder(writer, self.config)
        self.decoder = Decoder(reader, self.config)
        self.broken = False
        self._error: Optional[Exception] = None

    @classmethod
    def from_socket(
        cls, sock: socket.socket, config: Optional[ClientConfig] = None
    ) -> "RedisConnection":
        """Wrap a connected socket in buffered reader/writer views.

        Args:
            sock: Connected socket; its lifecycle stays with the caller
            config: Client configuration; defaults are used if omitted
        """
        config = config or ClientConfig()
        reader = sock.makefile("rb", buffering=config.buffer_size)
        writer = sock.makefile("wb", buffering=config.buffer_size)
        logger.info(
            "Opened RESP connection on %s (buffer_size=%d)",
            _peer_name(sock),
            config.buffer_size,
        )
        return cls(reader, writer, config)

    def __enter__(self) -> "RedisConnection":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def call(self, *args: CommandArg) -> Any:
        """Send one command and wait for its reply.

        Args:
            *args: Command name and arguments

        Returns:
            The decoded reply

        Raises:
            ServerError: If the server answers with an error reply
            ProtocolError: If the reply is malformed
            UnsupportedTypeError: If an argument cannot be encoded
            ConnectionBrokenError: If an earlier failure invalidated the stream
        """
        self.check_usable()
        try:
            self.encoder.write(list(args))
            return self.decoder.parse()
        except (ProtocolError, OSError) as e:
            self.mark_broken(e)
            raise

    def pipeline(self) -> Pipeline:
        """Create a pipeline sharing this connection's stream."""
        self.check_usable()
        return Pipeline(self.encoder, self.decoder, connection=self)

    def check_usable(self) -> None:
        """Raise ConnectionBrokenError if a fatal error occurred earlier."""
        if self.broken:
            raise ConnectionBrokenError(
                f"Connection unusable after earlier failure: {self._error}"
            ) from self._error

    def mark_broken(self, error: Exception) -> None:
        """Record a fatal failure; the stream must not be used again."""
        if not self.broken:
            logger.error("RESP connection failed: %s", error)
        self.broken = True
        self._error = error

    def close(self) -> None:
        """Close the buffered views. The underlying transport is left open."""
        for stream in (self.writer, self.reader):
            try:
                stream.close()
            except OSError as e:
                # Flushing pending output can fail on a dead transport
                logger.warning("Error closing stream: %s", e)
        logger.info("Closed RESP connection")


def _peer_name(sock: socket.socket) -> str:
    try:
        return str(sock.getpeername())
    except OSError:
        return "unconnected socket"
