"""Pipelined command execution.

A pipeline writes each queued command to the stream as soon as it is called
and defers every read until ``read``, so a whole batch reaches the server
before the first reply is awaited.

Usage:
    pipe = connection.pipeline()
    pipe.call("SET", "a", "1").call("INCR", "a").call("GET", "a")
    results = pipe.read()    # [b"OK", 2, b"2"]
"""

import logging
from typing import TYPE_CHECKING, Any, List, Optional

from resp_client.protocol.decoder import Decoder
from resp_client.protocol.encoder import Encoder
from resp_client.protocol.types import CommandArg
from resp_client.utils.error_handling import (
    ProtocolError,
    ServerError,
    annotate_pipeline_error,
)

if TYPE_CHECKING:
    from resp_client.connection import RedisConnection

logger = logging.getLogger(__name__)


class Pipeline:
    """Queue commands now, collect their replies later.

    Error semantics: a server error in one slot never stops the remaining
    reads. Every outstanding reply is drained so the stream stays aligned
    with the command sequence. Protocol and I/O failures are fatal and
    propagate immediately.

    Not thread safe. Callers sharing a pipeline across threads must
    serialize access themselves.

    Attributes:
        encoder: Encoder writing to the shared stream
        decoder: Decoder reading from the shared stream
        connection: Owning connection, marked broken on fatal errors
    """

    def __init__(
        self,
        encoder: Encoder,
        decoder: Decoder,
        connection: Optional["RedisConnection"] = None,
    ):
        self.encoder = encoder
        self.decoder = decoder
        self.connection = connection
        self._outstanding = 0
        self._reading = False

    @property
    def outstanding(self) -> int:
        """Number of written commands whose replies are not yet read."""
        return self._outstanding

    def __len__(self) -> int:
        return self._outstanding

    def __enter__(self) -> "Pipeline":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        if self._reading:
            # A read was cut short mid-reply, the stream position is undefined
            self._fail(exc_value)
            return
        # Leave the stream aligned for the next user of the connection
        if self._outstanding and not self._is_broken():
            logger.debug("Discarding %d unread pipeline replies", self._outstanding)
            self.read(raise_on_error=False)

    def call(self, *args: CommandArg) -> "Pipeline":
        """Encode and write a command without waiting for its reply.

        Args:
            *args: Command name and arguments

        Returns:
            This pipeline, so calls can be chained

        Raises:
            UnsupportedTypeError: If an argument cannot be encoded
        """
        if self.connection is not None:
            self.connection.check_usable()
        try:
            self.encoder.write(list(args))
        except OSError as e:
            self._fail(e)
            raise
        self._outstanding += 1
        return self

    def read(self, raise_on_error: bool = True) -> List[Any]:
        """Read the replies of every queued command, in call order.

        Args:
            raise_on_error: Raise the first server error after draining all
                replies. When False, errors are returned in their slots.

        Returns:
            One result per queued command

        Raises:
            ServerError: First failing slot, if ``raise_on_error`` is set. Its
                ``pipeline_results`` holds the outcome of every slot.
            ProtocolError: If a reply is malformed
            ConnectionClosedError: If the stream ends before all replies
        """
        results: List[Any] = []
        first_error: Optional[int] = None

        self._reading = True
        try:
            while self._outstanding > 0:
                try:
                    value = self.decoder.parse()
                except ServerError as e:
                    value = e
                    if first_error is None:
                        first_error = len(results)
                self._outstanding -= 1
                results.append(value)
        except (ProtocolError, OSError) as e:
            self._fail(e)
            raise
        self._reading = False

        if first_error is not None and raise_on_error:
            raise annotate_pipeline_error(results[first_error], first_error, results)
        return results

    def _fail(self, error: Exception) -> None:
        logger.error(
            "Pipeline aborted with %d replies outstanding: %s", self._outstanding, error
        )
        self._outstanding = 0
        self._reading = False
        if self.connection is not None:
            self.connection.mark_broken(error)

    def _is_broken(self) -> bool:
        return self.connection is not None and self.connection.broken
