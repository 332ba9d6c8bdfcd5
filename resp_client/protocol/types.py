"""RESP2 value model.

Every reply parsed by the decoder is a ``RespValue``: a ``RespType`` tag plus
a payload whose Python type depends on the tag.

    SIMPLE_STRING   str or bytes
    INTEGER         int
    BULK_STRING     str or bytes
    ARRAY           tuple of RespValue
    ERROR           ServerError
    NULL            None
"""

import enum
from dataclasses import dataclass
from typing import Any, Sequence, Union

from resp_client.utils.error_handling import ServerError

# Argument accepted by the encoder: strings, integers and nested lists of both
CommandArg = Union[str, bytes, int, Sequence["CommandArg"]]


class RespType(enum.Enum):
    """Tags of the RESP2 value union."""
    SIMPLE_STRING = "+"
    ERROR = "-"
    INTEGER = ":"
    BULK_STRING = "$"
    ARRAY = "*"
    NULL = "null"


@dataclass(frozen=True)
class RespValue:
    """One parsed RESP value.

    Attributes:
        type: Tag of the value
        value: Payload, typed per tag
    """

    type: RespType
    value: Any = None

    @classmethod
    def simple_string(cls, value: Union[str, bytes]) -> "RespValue":
        return cls(RespType.SIMPLE_STRING, value)

    @classmethod
    def integer(cls, value: int) -> "RespValue":
        return cls(RespType.INTEGER, value)

    @classmethod
    def bulk_string(cls, value: Union[str, bytes]) -> "RespValue":
        return cls(RespType.BULK_STRING, value)

    @classmethod
    def array(cls, items: Sequence["RespValue"]) -> "RespValue":
        return cls(RespType.ARRAY, tuple(items))

    @classmethod
    def error(cls, error: ServerError) -> "RespValue":
        return cls(RespType.ERROR, error)

    @classmethod
    def null(cls) -> "RespValue":
        return cls(RespType.NULL)

    @property
    def is_null(self) -> bool:
        return self.type is RespType.NULL

    @property
    def is_error(self) -> bool:
        return self.type is RespType.ERROR

    def to_python(self) -> Any:
        """Convert to native Python values.

        Arrays become lists (recursively), null becomes None. An error value
        converts to its ServerError instance rather than being raised.
        """
        if self.type is RespType.ARRAY:
            return [item.to_python() for item in self.value]
        return self.value

