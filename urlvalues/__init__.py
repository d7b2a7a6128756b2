from .client import Client
from .errors import (
    ConfigError,
    CustomEncodeError,
    QueryParseError,
    RecordEncodeError,
    TypeMismatchError,
    URLValuesError,
)
from .marshal import MarshalerOptions, marshal
from .record import encode_record
from .values import Marshaler, QueryValues, parse_query
from .version import __version__

__all__ = [
    "Client",
    "ConfigError",
    "CustomEncodeError",
    "Marshaler",
    "MarshalerOptions",
    "QueryParseError",
    "QueryValues",
    "RecordEncodeError",
    "TypeMismatchError",
    "URLValuesError",
    "__version__",
    "encode_record",
    "marshal",
    "parse_query",
]
