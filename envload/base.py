"""
Reflection-based record loader.
Walks a dataclass instance, resolves a lookup name per field, converts the found string and assigns it.
"""

import copy
import logging
import types
from dataclasses import MISSING, fields, is_dataclass
from typing import Annotated, Any, Callable, Optional, Union, get_args, get_origin, get_type_hints

from pydantic import TypeAdapter
from pydantic_core import from_json, to_json

from envload import tags
from envload.errors import ConversionError, InvalidTargetError, MissingRequiredError, NilTargetError
from envload.lookups import LookupFunc, lookup_env
from envload.numeric import float_bits, int_bits, parse_bool, parse_float, parse_int, parse_uint
from envload.protocols import hook_for

logger = logging.getLogger(__name__)

LogFunc = Callable[..., None]

DEFAULT_PREFIX = "APP_"
SECRET_MASK = "***"


def _split_annotated(hint: Any) -> tuple[Any, list[Any]]:
    """Strip Annotated[T, ...] and return T with its extras."""
    if get_origin(hint) is Annotated:
        args = get_args(hint)
        return args[0], list(args[1:])
    return hint, []


def _unwrap_optional(hint: Any) -> tuple[Any, bool]:
    """Return T for Optional[T] (Union[T, None] or T | None)."""
    origin = get_origin(hint)
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(hint) if a is not type(None)]
        if len(args) == 1 and len(get_args(hint)) == 2:
            inner, _ = _split_annotated(args[0])
            return inner, True
    return hint, False


def _field_hint(hint: Any) -> tuple[Any, list[Any]]:
    """Split a field annotation into its type and the Annotated extras, including those inside Optional[...]."""
    hint, extras = _split_annotated(hint)
    origin = get_origin(hint)
    if origin is Union or origin is types.UnionType:
        for arg in get_args(hint):
            extras += _split_annotated(arg)[1]
    return hint, extras


def _is_class(hint: Any) -> bool:
    return isinstance(hint, type) and get_origin(hint) is None


def zero_value(hint: Any) -> Any:
    """
    Build the zero value of a type.

    Optional types are None, numbers are 0, strings and bytes are empty,
    containers are empty and dataclasses are built from their field defaults,
    zeroing every field that has none. Other classes are called without
    arguments.
    """
    hint, _ = _split_annotated(hint)
    hint, optional = _unwrap_optional(hint)
    if optional:
        return None
    origin = get_origin(hint)
    if origin is not None:
        return origin() if isinstance(origin, type) else None
    if not isinstance(hint, type):
        return None
    if is_dataclass(hint):
        hints = get_type_hints(hint, include_extras=True)
        kwargs = {}
        for f in fields(hint):
            if not f.init or f.default is not MISSING or f.default_factory is not MISSING:
                continue
            kwargs[f.name] = zero_value(hints.get(f.name, f.type))
        return hint(**kwargs)
    if hint is bool:
        return False
    try:
        return hint()
    except TypeError as e:
        raise InvalidTargetError(hint, f"cannot allocate a zero value of {hint.__name__}") from e


def indirect(hint: Any, current: Any) -> Any:
    """Return current, or a freshly allocated zero value when it is None."""
    if current is None:
        return zero_value(hint)
    return current


def _merges_into(hint: Any, current: Any) -> bool:
    if isinstance(current, dict):
        return hint is dict or get_origin(hint) is dict
    return _is_class(hint) and is_dataclass(hint) and isinstance(current, hint)


def set_value(hint: Any, current: Any, value: str) -> Any:
    """
    Convert a string to the type described by hint and return the result.

    - types implementing set / unmarshal_text / unmarshal_binary parse the
      value themselves; the hook runs on a copy of current (or a zero value)
    - str, bool, ints, floats and bytes are parsed strictly
    - anything else is decoded from JSON with pydantic
    """
    hint, _ = _split_annotated(hint)
    hint, _ = _unwrap_optional(hint)

    method = hook_for(hint) if _is_class(hint) else None
    if method:
        target = copy.copy(current) if isinstance(current, hint) else zero_value(hint)
        getattr(target, method)(value if method == "set" else value.encode())
        return target

    if hint is str:
        return value
    if hint is bool:
        return parse_bool(value)
    if _is_class(hint):
        if issubclass(hint, str):
            return hint(value)
        if issubclass(hint, int):
            bits, signed = int_bits(hint)
            parsed = parse_int(value, bits) if signed else parse_uint(value, bits)
            return parsed if hint is int else hint(parsed)
        if issubclass(hint, float):
            parsed = parse_float(value, float_bits(hint))
            return parsed if hint is float else hint(parsed)
        if issubclass(hint, (bytes, bytearray)):
            return hint(value.encode())

    # assume the string is in JSON format for non-basic types
    adapter = TypeAdapter(hint)
    if _merges_into(hint, current):
        decoded = from_json(value)
        if isinstance(decoded, dict):
            # keys missing from the document keep their current values
            merged = adapter.dump_python(current, mode="json")
            merged.update(decoded)
            value = to_json(merged)
    return adapter.validate_json(value, strict=True)


class Loader:
    """Loads a dataclass instance with values returned by a lookup function."""

    def __init__(
        self,
        prefix: str = "",
        lookup: LookupFunc = lookup_env,
        log: Optional[LogFunc] = None,
        tag_name: Optional[str] = None,
    ):
        """
        Args:
            prefix: prepended to every lookup name
            lookup: returns the value for a name, or None when not found
            log: printf-style function called once per populated field; None disables logging
            tag_name: field metadata key holding the tag (default: tags.TAG_NAME)
        """
        self.prefix = prefix
        self.lookup = lookup
        self.log = log
        self.tag_name = tag_name

    def __repr__(self) -> str:
        return f"Loader(prefix={self.prefix!r})"

    def load(self, obj: Any) -> None:
        """
        Populate a dataclass instance with the values returned by the lookup function.

        For every public field (name not starting with "_"), in declaration order:
        - embedded fields (Annotated[T, Embed()] or metadata {"embed": True}) are
          allocated when None and loaded recursively
        - the lookup name is the tag override, or the field name in
          UPPER_SNAKE_CASE, prefixed with the loader prefix; tag "-" skips the field
        - a found value is converted to the field type and assigned; a missing one
          raises MissingRequiredError unless the tag has the "optional" option

        Every populated field is logged; values of fields tagged "secret" are masked.

        Raises:
            NilTargetError: obj is None
            InvalidTargetError: obj is not a mutable dataclass instance
            MissingRequiredError: a required value is missing
            ConversionError: a found value cannot be converted
        """
        if obj is None:
            raise NilTargetError()
        if not is_dataclass(obj) or isinstance(obj, type) or obj.__dataclass_params__.frozen:
            raise InvalidTargetError(obj)

        tag_name = self.tag_name or tags.TAG_NAME
        hints = get_type_hints(type(obj), include_extras=True)

        for f in fields(obj):
            if f.name.startswith("_"):
                continue

            hint, extras = _field_hint(hints.get(f.name, f.type))

            if tags.is_embedded(f.metadata, extras):
                self._load_embedded(obj, f.name, hint)
                continue

            name, options = tags.get_name(tags.field_tag(f.metadata, extras, tag_name), f.name)
            if name == tags.SKIP:
                continue

            name = self.prefix + name

            value = self.lookup(name)
            if value is None:
                if not options.optional:
                    raise MissingRequiredError(name)
                continue

            if self.log is not None:
                self.log('set %s with $%s="%s"', f.name, name, SECRET_MASK if options.secret else value)
            try:
                converted = set_value(hint, getattr(obj, f.name, None), value)
            except Exception as e:
                raise ConversionError(f.name, e) from e
            setattr(obj, f.name, converted)

    def _load_embedded(self, obj: Any, name: str, hint: Any) -> None:
        hint, _ = _unwrap_optional(hint)
        current = indirect(hint, getattr(obj, name, None))
        setattr(obj, name, current)
        if is_dataclass(current) and not isinstance(current, type):
            self.load(current)

    def build(self, cls: type) -> Any:
        """Create a zero-valued instance of a dataclass, populate it and return it."""
        if not (isinstance(cls, type) and is_dataclass(cls)):
            raise InvalidTargetError(cls)
        obj = zero_value(cls)
        self.load(obj)
        return obj


def new(prefix: str, log: Optional[LogFunc] = None) -> Loader:
    """Create a loader that reads process environment variables."""
    return Loader(prefix=prefix, lookup=lookup_env, log=log)


def new_with_lookup(prefix: str, lookup: LookupFunc, log: Optional[LogFunc] = None) -> Loader:
    """Create a loader that reads from the given lookup function."""
    return Loader(prefix=prefix, lookup=lookup, log=log)


_default_loader: Optional[Loader] = None


def get_default_loader() -> Loader:
    """The process-wide loader used by load(): prefix "APP_", environment lookup, logs at INFO."""
    global _default_loader
    if _default_loader is None:
        _default_loader = new(DEFAULT_PREFIX, logger.info)
    return _default_loader


def set_default_loader(loader: Optional[Loader]) -> Optional[Loader]:
    """Replace the default loader and return the previous one. None resets it to a fresh default."""
    global _default_loader
    previous = _default_loader
    _default_loader = loader
    return previous


def load(obj: Any) -> None:
    """Populate obj from the environment with the default loader."""
    get_default_loader().load(obj)
