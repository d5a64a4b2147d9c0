"""
Conversion hooks a field type can implement to parse its own string value.
They are checked in this order: Setter, TextUnmarshaler, BinaryUnmarshaler.

The loader detects hooks by method name (hook_for); a type does not need to
subclass these protocols. They exist for type annotations and isinstance checks.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Setter(Protocol):
    def set(self, value: str) -> None:
        """Set the object from a string value. Raise to reject the value."""
        ...


@runtime_checkable
class TextUnmarshaler(Protocol):
    def unmarshal_text(self, data: bytes) -> None:
        ...


@runtime_checkable
class BinaryUnmarshaler(Protocol):
    def unmarshal_binary(self, data: bytes) -> None:
        ...


_HOOKS = ("set", "unmarshal_text", "unmarshal_binary")


def hook_for(tp: type) -> str | None:
    """Name of the first conversion hook method implemented by tp, or None."""
    for method in _HOOKS:
        if callable(getattr(tp, method, None)):
            return method
    return None
