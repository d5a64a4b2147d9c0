"""
Lookup functions: sources of name -> value pairs for a Loader.
A lookup returns the value as a string, or None when the name is not found.
"""

import os
from pathlib import Path
from typing import Callable, Mapping, Optional

from dotenv import dotenv_values

LookupFunc = Callable[[str], Optional[str]]


def lookup_env(name: str) -> Optional[str]:
    """Read a process environment variable by its exact name."""
    return os.environ.get(name)


def mapping_lookup(values: Mapping[str, str]) -> LookupFunc:
    """Look names up in a fixed mapping. Pass a dict for tests."""

    def lookup(name: str) -> Optional[str]:
        return values.get(name)

    return lookup


def dotenv_lookup(path: str | Path = ".env", encoding: str = "utf-8") -> LookupFunc:
    """
    Look names up in a .env file.

    The file is parsed once, when the lookup is created. Keys declared without
    a value (a bare ``KEY`` line) are treated as not found. A missing file
    yields a lookup that finds nothing.
    """
    values = {k: v for k, v in dotenv_values(path, encoding=encoding).items() if v is not None}
    return mapping_lookup(values)


def chain_lookup(*lookups: LookupFunc) -> LookupFunc:
    """Try each lookup in turn; the first one that finds the name wins."""

    def lookup(name: str) -> Optional[str]:
        for fn in lookups:
            value = fn(name)
            if value is not None:
                return value
        return None

    return lookup
