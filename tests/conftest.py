"""Pytest configuration for RESP client tests.

This module contains shared fixtures for building encoders, decoders and
connections over in-memory streams.
"""

import io
import logging

import pytest

from resp_client.config import ClientConfig
from resp_client.connection import RedisConnection
from resp_client.protocol.decoder import Decoder
from resp_client.protocol.encoder import Encoder


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: mark a test as an integration test requiring external services"
    )


@pytest.fixture(autouse=True)
def disable_logging():
    """Disable logging during tests to keep the test output clean."""
    logging.disable(logging.CRITICAL)
    yield
    logging.disable(logging.NOTSET)


@pytest.fixture
def make_decoder():
    """Factory for decoders reading from a fixed byte string."""

    def factory(data: bytes, **config_values) -> Decoder:
        return Decoder(io.BytesIO(data), ClientConfig(**config_values))

    return factory


@pytest.fixture
def make_connection():
    """Factory for connections whose server replies are pre-recorded.

    The factory returns a tuple of (connection, output stream capturing what
    the client wrote).
    """

    def factory(replies: bytes, **config_values):
        output = io.BytesIO()
        connection = RedisConnection(
            io.BytesIO(replies), output, ClientConfig(**config_values)
        )
        return connection, output

    return factory


@pytest.fixture
def loopback():
    """Encoder and decoder sharing one in-memory buffer.

    Bytes written by the encoder are read back by the decoder after
    ``rewind`` is called.
    """

    class Loopback:
        def __init__(self):
            self.buffer = io.BytesIO()
            self.encoder = Encoder(self.buffer)
            self.decoder = Decoder(self.buffer)

        def rewind(self):
            self.buffer.seek(0)

    return Loopback()
