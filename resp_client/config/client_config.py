"""Configuration for the RESP client."""

import logging
from dataclasses import dataclass

# Largest bulk string length accepted from the wire (signed 32-bit)
MAX_BULK_LENGTH = 2**31 - 1


@dataclass
class ClientConfig:
    """Configuration for an encoder/decoder pair bound to one stream."""

    # Buffered stream wrappers
    buffer_size: int = 64 * 1024

    # Decoder settings
    initial_line_size: int = 1024  # Starting capacity of the line buffer
    max_bulk_length: int = MAX_BULK_LENGTH
    decode_responses: bool = False  # Return str instead of bytes

    # Text handling for str arguments and decoded replies
    encoding: str = "utf-8"
    encoding_errors: str = "strict"

    logging_level: str = "INFO"


def configure_logging(config: ClientConfig) -> None:
    """Apply the configured logging level to the root logger."""
    logging.basicConfig(level=getattr(logging, config.logging_level))
