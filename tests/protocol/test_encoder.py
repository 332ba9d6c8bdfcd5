"""Unit tests for the RESP encoder."""

import io
from unittest.mock import MagicMock

import pytest

from resp_client.config import ClientConfig
from resp_client.protocol.encoder import Encoder, encode_command
from resp_client.utils.error_handling import UnsupportedTypeError


@pytest.fixture
def output():
    return io.BytesIO()


@pytest.fixture
def encoder(output):
    return Encoder(output)


class TestEncoderScalars:
    """Test encoding of single values."""

    def test_bulk_string(self, encoder, output):
        encoder.write_bulk("hello")
        assert output.getvalue() == b"$5\r\nhello\r\n"

    def test_empty_bulk_string(self, encoder, output):
        encoder.write_bulk("")
        assert output.getvalue() == b"$0\r\n\r\n"

    def test_bulk_length_counts_bytes_not_characters(self, encoder, output):
        encoder.write_bulk("héllo")
        assert output.getvalue() == b"$6\r\nh\xc3\xa9llo\r\n"

    def test_bytes_written_verbatim(self, encoder, output):
        encoder.write_bulk(b"\x00\r\n\xff")
        assert output.getvalue() == b"$4\r\n\x00\r\n\xff\r\n"

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0, b":0\r\n"),
            (-1, b":-1\r\n"),
            (9223372036854775807, b":9223372036854775807\r\n"),
        ],
    )
    def test_integer(self, encoder, output, value, expected):
        encoder.write_integer(value)
        assert output.getvalue() == expected

    def test_configured_encoding(self, output):
        encoder = Encoder(output, ClientConfig(encoding="latin-1"))
        encoder.write_bulk("é")
        assert output.getvalue() == b"$1\r\n\xe9\r\n"


class TestEncoderCommands:
    """Test encoding of whole commands."""

    def test_command(self, encoder, output):
        encoder.write(["SET", "key", "value"])
        assert output.getvalue() == (
            b"*3\r\n$3\r\nSET\r\n$3\r\nkey\r\n$5\r\nvalue\r\n"
        )

    def test_mixed_and_nested_elements(self, encoder, output):
        encoder.write(["CMD", 42, ["a", ("b", 1)]])
        assert output.getvalue() == (
            b"*3\r\n$3\r\nCMD\r\n:42\r\n"
            b"*2\r\n$1\r\na\r\n*2\r\n$1\r\nb\r\n:1\r\n"
        )

    def test_empty_command(self, encoder, output):
        encoder.write([])
        assert output.getvalue() == b"*0\r\n"

    def test_write_flushes_stream(self):
        stream = MagicMock()
        Encoder(stream).write(["PING"])
        stream.write.assert_called_once_with(b"*1\r\n$4\r\nPING\r\n")
        stream.flush.assert_called_once()

    def test_write_array_does_not_flush(self):
        stream = MagicMock()
        Encoder(stream).write_array(["PING"])
        stream.flush.assert_not_called()

    def test_pack_leaves_stream_untouched(self):
        stream = MagicMock()
        data = Encoder(stream).pack(["GET", "k"])
        assert data == b"*2\r\n$3\r\nGET\r\n$1\r\nk\r\n"
        stream.write.assert_not_called()

    def test_encode_command_helper(self):
        assert encode_command("PING") == b"*1\r\n$4\r\nPING\r\n"


class TestUnsupportedTypes:
    """Test rejection of values outside string, integer and list."""

    @pytest.mark.parametrize(
        "value,type_name",
        [(1.5, "float"), (None, "NoneType"), (True, "bool"), ({"a": 1}, "dict")],
    )
    def test_rejected(self, encoder, value, type_name):
        with pytest.raises(UnsupportedTypeError) as excinfo:
            encoder.write(["SET", "key", value])
        assert excinfo.value.value_type == type_name
        assert type_name in str(excinfo.value)

    def test_nothing_written_on_rejection(self, encoder, output):
        with pytest.raises(UnsupportedTypeError):
            encoder.write(["SET", "key", object()])
        assert output.getvalue() == b""

    def test_is_type_error(self, encoder):
        with pytest.raises(TypeError):
            encoder.write([3.14])

    @pytest.mark.parametrize("command", ["PING", b"PING", 5])
    def test_scalar_command_rejected(self, encoder, output, command):
        with pytest.raises(UnsupportedTypeError):
            encoder.write(command)
        assert output.getvalue() == b""
