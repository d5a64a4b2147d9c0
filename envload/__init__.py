"""envload: populate dataclass instances from environment variables or any other lookup source."""

from envload.base import (
    DEFAULT_PREFIX,
    Loader,
    get_default_loader,
    load,
    new,
    new_with_lookup,
    set_default_loader,
    set_value,
    zero_value,
)
from envload.errors import (
    ConversionError,
    EnvLoadError,
    InvalidTargetError,
    MissingRequiredError,
    NilTargetError,
)
from envload.lookups import chain_lookup, dotenv_lookup, lookup_env, mapping_lookup
from envload.numeric import (
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    Uint,
    Uint8,
    Uint16,
    Uint32,
    Uint64,
)
from envload.protocols import BinaryUnmarshaler, Setter, TextUnmarshaler
from envload.tags import Embed, Env, camel_case_to_snake, camel_case_to_upper_snake

__all__ = [
    "load",
    "new",
    "new_with_lookup",
    "Loader",
    "get_default_loader",
    "set_default_loader",
    "set_value",
    "zero_value",
    "DEFAULT_PREFIX",
    "EnvLoadError",
    "InvalidTargetError",
    "NilTargetError",
    "MissingRequiredError",
    "ConversionError",
    "lookup_env",
    "mapping_lookup",
    "dotenv_lookup",
    "chain_lookup",
    "Env",
    "Embed",
    "camel_case_to_snake",
    "camel_case_to_upper_snake",
    "Setter",
    "TextUnmarshaler",
    "BinaryUnmarshaler",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "Uint",
    "Uint8",
    "Uint16",
    "Uint32",
    "Uint64",
    "Float32",
    "Float64",
]
