"""RESP2 reply decoder.

Reads exactly one RESP value per ``parse`` call from the input side of a
binary stream, blocking until the value is complete. The first byte selects
the value type:

    +   simple string       line up to CRLF
    -   error               line up to CRLF, raised as ServerError
    :   integer             line parsed as a signed base-10 integer
    $   bulk string         length line, then exactly that many bytes and CRLF;
                            length -1 is null
    *   array               count line, then count values parsed recursively;
                            count -1 is null

Any ProtocolError or I/O failure leaves the stream at an undefined position.
"""

import io
import logging
from typing import Any, BinaryIO, Optional, Union

from resp_client.config.client_config import ClientConfig
from resp_client.protocol.types import RespType, RespValue
from resp_client.utils.error_handling import (
    ConnectionClosedError,
    ProtocolError,
    ServerError,
)

logger = logging.getLogger(__name__)

CR = b"\r"
LF = b"\n"


class Decoder:
    """Parse RESP replies from a binary input stream.

    Attributes:
        stream: Input stream exposing ``read``
        initial_line_size: Starting capacity of the line buffer
        max_bulk_length: Largest bulk string length accepted
        decode_responses: Whether strings are returned as str
    """

    def __init__(self, stream: BinaryIO, config: Optional[ClientConfig] = None):
        """Initialize the decoder.

        Args:
            stream: Input stream exposing ``read``
            config: Client configuration; defaults are used if omitted
        """
        config = config or ClientConfig()
        self.stream = stream
        self.initial_line_size = config.initial_line_size
        self.max_bulk_length = config.max_bulk_length
        self.decode_responses = config.decode_responses
        self.encoding = config.encoding
        self.encoding_errors = config.encoding_errors

    def parse(self) -> Any:
        """Parse one reply and convert it to native Python values.

        Returns:
            str or bytes, int, list, or None for null replies

        Raises:
            ServerError: If the reply is an error reply
            ProtocolError: If the input is malformed
            ConnectionClosedError: If the stream ends mid-reply
        """
        return self.parse_value().to_python()

    def parse_value(self) -> RespValue:
        """Parse one reply into a tagged RespValue.

        The whole reply is consumed before an error is raised, so an error
        nested inside an array does not leave unread elements on the stream.

        Raises:
            ServerError: If the reply is, or contains, an error reply
            ProtocolError: If the input is malformed
            ConnectionClosedError: If the stream ends mid-reply
        """
        value = self._read_value()
        error = _first_error(value)
        if error is not None:
            raise error
        return value

    def _read_value(self) -> RespValue:
        prefix = self._read_byte()

        if prefix == b"+":
            return RespValue.simple_string(self._to_string(self._scan_line()))
        elif prefix == b"-":
            message = self._scan_line().decode(self.encoding, "replace")
            logger.debug("Server error reply: %s", message)
            return RespValue.error(ServerError(message))
        elif prefix == b":":
            return RespValue.integer(self._parse_number())
        elif prefix == b"$":
            return self._parse_bulk_string()
        elif prefix == b"*":
            return self._parse_array()

        raise ProtocolError(f"Unexpected input: {prefix!r}")

    def _parse_bulk_string(self) -> RespValue:
        length = self._parse_number()
        if length == -1:
            return RespValue.null()
        if length < -1:
            raise ProtocolError(f"Invalid bulk string length: {length}")
        if length > self.max_bulk_length:
            raise ProtocolError(f"Length too large: {length}")

        payload = self._read_exact(length)
        if self._read_exact(2) != b"\r\n":
            raise ProtocolError("Expected CRLF after bulk string")
        return RespValue.bulk_string(self._to_string(payload))

    def _parse_array(self) -> RespValue:
        count = self._parse_number()
        if count == -1:
            return RespValue.null()
        if count < -1:
            raise ProtocolError(f"Invalid array length: {count}")
        return RespValue.array([self._read_value() for _ in range(count)])

    def _parse_number(self) -> int:
        line = self._scan_line()
        digits = line[1:] if line[:1] == b"-" else line
        if not digits.isdigit():
            raise ProtocolError(f"Invalid integer: {bytes(line)!r}")
        return int(line)

    def _scan_line(self) -> bytearray:
        """Read up to CR, then require LF. The returned line excludes CRLF."""
        buffer = bytearray(self.initial_line_size)
        size = 0
        while True:
            ch = self._read_byte()
            if ch == CR:
                break
            if ch == LF:
                raise ProtocolError("Unexpected LF without CR")
            if size == len(buffer):
                buffer.extend(bytes(len(buffer) or 1))
            buffer[size] = ch[0]
            size += 1

        if self._read_byte() != LF:
            raise ProtocolError("Expected LF")
        del buffer[size:]
        return buffer

    def _read_byte(self) -> bytes:
        ch = self.stream.read(1)
        if not ch:
            raise ConnectionClosedError("Connection closed by peer")
        return ch

    def _read_exact(self, size: int) -> bytes:
        chunks = []
        remaining = size
        while remaining > 0:
            chunk = self.stream.read(remaining)
            if not chunk:
                raise ConnectionClosedError("Connection closed by peer")
            chunks.append(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)

    def _to_string(self, data: Union[bytes, bytearray]) -> Union[str, bytes]:
        if self.decode_responses:
            try:
                return bytes(data).decode(self.encoding, self.encoding_errors)
            except UnicodeDecodeError as e:
                raise ProtocolError(f"Reply is not valid {self.encoding}: {e}") from e
        return bytes(data)


def decode_reply(data: bytes, config: Optional[ClientConfig] = None) -> Any:
    """Parse a single reply from a complete byte string.

    Example:
        >>> decode_reply(b"*2\\r\\n*1\\r\\n:1\\r\\n:2\\r\\n")
        [[1], 2]
    """
    return Decoder(io.BytesIO(data), config).parse()


def _first_error(value: RespValue) -> Optional[ServerError]:
    if value.type is RespType.ERROR:
        return value.value
    if value.type is RespType.ARRAY:
        for item in value.value:
            error = _first_error(item)
            if error is not None:
                return error
    return None
