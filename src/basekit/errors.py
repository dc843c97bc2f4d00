"""Structured failures raised by basekit objects.

An ``ObjectError`` carries the concatenated message text together with a
component tag derived from the class that raised it::

    [basekit-examples-point] No value specified for y
"""

from __future__ import annotations

from typing import Any


class ObjectError(Exception):
    """Failure raised through ``Base.error``.

    ``text``, ``component`` and ``message`` are read-only once the error
    has been created.
    """

    def __init__(self, text: str, component: str = "") -> None:
        self._text = text
        self._component = component
        super().__init__(self.message)

    @property
    def text(self) -> str:
        return self._text

    @property
    def component(self) -> str:
        return self._component

    @property
    def message(self) -> str:
        if self._component:
            return f"[{self._component}] {self._text}"
        return self._text

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._text!r}, component={self._component!r})"


class ArgumentError(ObjectError):
    """Constructor arguments could not be folded into a mapping."""


def component_name(cls: type) -> str:
    """Return the normalized component tag for *cls*.

    A ``COMPONENT`` attribute wins; otherwise the dotted path of the class
    is lower-cased with ``.`` replaced by ``-``.
    """
    explicit = cls.__dict__.get("COMPONENT")
    if explicit:
        return str(explicit)
    parts = [cls.__module__, cls.__qualname__]
    if parts[0] == "__main__":
        parts = parts[1:]
    return ".".join(parts).lower().replace(".", "-")


def join_fragments(*fragments: Any) -> str:
    """Concatenate *fragments* print-style, without a separator."""
    return "".join(str(f) for f in fragments)
