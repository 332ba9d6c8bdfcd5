"""Error handling utilities for the RESP client.

This module defines the exception hierarchy raised by the encoder, decoder,
pipeline and connection. Nothing here retries or suppresses failures: every
error propagates to the immediate caller.
"""

import logging
from typing import Any, List, Optional

logger = logging.getLogger(__name__)


class RespClientError(Exception):
    """Base class for all RESP client exceptions."""
    pass


class ProtocolError(RespClientError):
    """Malformed input received from the peer.

    The stream is left at an indeterminate position. The connection that
    raised it must not be reused.
    """
    pass


class ServerError(RespClientError):
    """A well-formed error reply (``-`` prefix) sent by the server.

    Attributes:
        message: Full error line as sent by the server
        code: Leading word of the message (``ERR``, ``WRONGTYPE``, ...)
        pipeline_results: Per-slot outcomes when raised from a pipeline read
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.code = message.split(" ", 1)[0] if message else ""
        self.pipeline_results: Optional[List[Any]] = None

    def __eq__(self, other):
        if not isinstance(other, ServerError):
            return NotImplemented
        return self.message == other.message

    def __hash__(self):
        return hash(self.message)


class UnsupportedTypeError(RespClientError, TypeError):
    """Attempt to encode a value that is not a string, integer or list."""

    def __init__(self, value: Any):
        self.value_type = type(value).__name__
        super().__init__(f"Unsupported argument type: {self.value_type}")


class ConnectionClosedError(RespClientError, ConnectionError):
    """The stream reached end of input before a full reply was read."""
    pass


class ConnectionBrokenError(RespClientError):
    """Connection reused after a protocol or I/O failure."""
    pass


class ConfigurationError(RespClientError):
    """Invalid client configuration."""
    pass


def annotate_pipeline_error(
    error: ServerError, index: int, results: List[Any]
) -> ServerError:
    """Attach pipeline slot information to a server error.

    Args:
        error: Error decoded for one pipeline slot
        index: Zero-based slot of the failing command
        results: Per-slot outcomes of the whole batch

    Returns:
        The same error instance, with ``pipeline_results`` set
    """
    error.pipeline_results = results
    error.args = (f"Command #{index + 1} of pipeline caused error: {error.message}",)
    logger.debug("Pipeline slot %d failed: %s", index, error.message)
    return error
