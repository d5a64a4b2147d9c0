"""
Tag types and tag parsing for record fields.

A tag is a string of the form ``NAME[,optional][,secret]``. It can be attached
to a dataclass field in two ways:

    port: int = field(default=0, metadata={"env": "PORT,optional"})
    password: Annotated[str, Env(",secret")] = ""

The literal tag ``-`` skips the field.
"""

import re
from dataclasses import dataclass
from typing import Any

# Metadata key holding the tag string. Loaders read it at call time.
TAG_NAME = "env"
# Metadata key marking a field as an embedded record.
EMBED_KEY = "embed"

SKIP = "-"
OPTIONAL = "optional"
SECRET = "secret"

_name_regex = re.compile(r"([^A-Z_])([A-Z])")


class Env:
    """Tag holder for use inside Annotated[type, ...]."""

    def __init__(self, tag: str = ""):
        self.tag = tag

    def __repr__(self) -> str:
        return f"Env({self.tag!r})"


class Embed:
    """Mark a record-typed field as embedded: its fields are loaded into the parent namespace."""

    def __repr__(self) -> str:
        return "Embed()"


@dataclass
class TagOptions:
    optional: bool = False
    secret: bool = False


def camel_case_to_snake(name: str) -> str:
    """Insert an underscore at every lower-to-upper transition: MyURLName -> My_URLName."""
    return _name_regex.sub(r"\1_\2", name)


def camel_case_to_upper_snake(name: str) -> str:
    """Convert a camelCase or snake_case name to UPPER_SNAKE_CASE."""
    return camel_case_to_snake(name).upper()


def _trim_option(tag: str, option: str) -> tuple[str, bool]:
    suffix = "," + option
    if tag.endswith(suffix):
        return tag[: -len(suffix)], True
    return tag, False


def parse_tag(tag: str) -> tuple[str, TagOptions]:
    """
    Split a tag into the override name and its options.

    Options may come in any order. Suffixes that are not known options are
    kept as part of the name, except an empty one (a trailing comma).
    """
    options = TagOptions()
    remaining = [OPTIONAL, SECRET, ""]
    trimmed = tag
    found = True
    while found:
        found = False
        for option in remaining:
            trimmed, found = _trim_option(trimmed, option)
            if found:
                if option:
                    setattr(options, option, True)
                remaining.remove(option)
                break
    return trimmed, options


def get_name(tag: str, field_name: str) -> tuple[str, TagOptions]:
    """Resolve the lookup name from the tag, or derive it from the field name."""
    name, options = parse_tag(tag)
    if not name:
        name = camel_case_to_upper_snake(field_name)
    return name, options


def field_tag(metadata: Any, extras: list[Any], tag_name: str) -> str:
    """Find the tag string in Annotated extras first, then in the field metadata."""
    for m in extras:
        if isinstance(m, Env):
            return m.tag
    if metadata:
        return str(metadata.get(tag_name, ""))
    return ""


def is_embedded(metadata: Any, extras: list[Any]) -> bool:
    if any(isinstance(m, Embed) or m is Embed for m in extras):
        return True
    return bool(metadata and metadata.get(EMBED_KEY))
