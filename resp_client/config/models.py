"""Pydantic models for configuration validation in the RESP client."""

import codecs
import logging

from pydantic import BaseModel, Field, ValidationError, field_validator

from resp_client.config.client_config import MAX_BULK_LENGTH, ClientConfig
from resp_client.utils.error_handling import ConfigurationError

logger = logging.getLogger(__name__)

VALID_LOGGING_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
VALID_ENCODING_ERRORS = ("strict", "replace", "ignore", "backslashreplace", "surrogateescape")


class ClientConfigModel(BaseModel):
    """Configuration model for the RESP client."""

    buffer_size: int = Field(
        default=64 * 1024, description="Size of the buffered stream wrappers", ge=1
    )
    initial_line_size: int = Field(
        default=1024, description="Initial capacity of the decoder line buffer", ge=1
    )
    max_bulk_length: int = Field(
        default=MAX_BULK_LENGTH,
        description="Largest bulk string length accepted from the server",
        ge=0,
        le=MAX_BULK_LENGTH,
    )
    decode_responses: bool = Field(
        default=False, description="Decode string replies to str"
    )
    encoding: str = Field(default="utf-8", description="Text encoding for strings")
    encoding_errors: str = Field(
        default="strict", description="Error handler used when encoding or decoding text"
    )
    logging_level: str = Field(default="INFO", description="Logging level")

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v):
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown encoding: {v}")
        return v

    @field_validator("encoding_errors")
    @classmethod
    def validate_encoding_errors(cls, v):
        if v not in VALID_ENCODING_ERRORS:
            raise ValueError(
                f"Encoding error handler must be one of {', '.join(VALID_ENCODING_ERRORS)}"
            )
        return v

    @field_validator("logging_level")
    @classmethod
    def validate_logging_level(cls, v):
        level = v.upper()
        if level not in VALID_LOGGING_LEVELS:
            raise ValueError(
                f"Logging level must be one of {', '.join(VALID_LOGGING_LEVELS)}"
            )
        return level

    def to_config_object(self, config: ClientConfig) -> ClientConfig:
        """Apply validated model values to a config object.

        Args:
            config: The config object to update

        Returns:
            The updated config object
        """
        for key, value in self.model_dump().items():
            if hasattr(config, key):
                setattr(config, key, value)
        return config


def load_config(**overrides) -> ClientConfig:
    """Build a validated ClientConfig.

    Args:
        **overrides: Values replacing the defaults

    Returns:
        A ClientConfig carrying the validated values

    Raises:
        ConfigurationError: If any value fails validation
    """
    try:
        validated_model = ClientConfigModel(**overrides)
    except ValidationError as e:
        logger.error(f"Configuration validation failed: {e}")
        raise ConfigurationError(f"Invalid configuration: {str(e)}") from e

    return validated_model.to_config_object(ClientConfig())
