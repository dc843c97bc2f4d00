"""Base class for objects built from a configuration mapping.

Construction goes through ``new()``, which accepts either a single mapping
or alternating key/value arguments (keyword arguments are merged on top)::

    Point.new({"x": 10, "y": 20})
    Point.new("x", 10, "y", 20)
    Point.new(x=10, y=20)

The folded mapping is handed to ``init()``, the per-class hook.  A hook
that finds something wrong calls ``error()``, which raises an
``ObjectError`` tagged with the class's component name.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping, Sequence
from typing import Any, NoReturn

import basekit.errors
import basekit.result

logger = logging.getLogger("basekit.base")


@dataclasses.dataclass(frozen=True)
class Field:
    """One declared configuration item, validated by ``Base.init``."""

    name: str
    required: bool = True
    default: Any = None


def fold_arguments(
    args: Sequence[Any],
    kwargs: Mapping[str, Any] | None = None,
    *,
    component: str = "",
) -> dict[str, Any]:
    """Fold constructor arguments into a fresh configuration mapping.

    A single mapping is copied; otherwise adjacent items are paired up as
    key and value.  Keyword arguments are applied last.
    """
    if len(args) == 1 and isinstance(args[0], Mapping):
        config = dict(args[0])
    elif len(args) % 2:
        raise basekit.errors.ArgumentError(
            basekit.errors.join_fragments(
                "Odd number of arguments (", len(args), "), expected a mapping or key/value pairs"
            ),
            component,
        )
    else:
        config = {}
        for i in range(0, len(args), 2):
            config[args[i]] = args[i + 1]

    for key in config:
        if not isinstance(key, str):
            raise basekit.errors.ArgumentError(
                f"Configuration keys must be strings, got {key!r}", component
            )

    if kwargs:
        config.update(kwargs)
    return config


class _Constructor(type):
    """Route ``Class(...)`` through ``Class.new(...)``."""

    def __call__(cls, *args: Any, **kwargs: Any) -> Any:
        return cls.new(*args, **kwargs)


class Base(metaclass=_Constructor):
    """Configurable base object.

    Subclasses either override ``init()`` or declare ``FIELDS``; the default
    hook assigns each declared field and reports missing required ones.
    """

    EXCEPTION: type[basekit.errors.ObjectError] = basekit.errors.ObjectError
    FIELDS: Sequence[Field] = ()

    @classmethod
    def new(cls, *args: Any, **kwargs: Any) -> Any:
        """Allocate an instance and run ``init()`` with the folded config."""
        config = cls._fold(args, kwargs)
        instance = cls.__new__(cls)
        logger.debug("%s: init with %s", cls.component(), sorted(config))
        result = instance.init(config)
        return result if isinstance(result, Base) else instance

    @classmethod
    def attempt(cls, *args: Any, **kwargs: Any) -> basekit.result.Outcome:
        """Like ``new()``, but return an ``Outcome`` instead of raising."""
        try:
            return basekit.result.Outcome.success(cls.new(*args, **kwargs))
        except basekit.errors.ObjectError as exc:
            return basekit.result.Outcome.fail(exc)

    @classmethod
    def _fold(cls, args: Sequence[Any], kwargs: Mapping[str, Any]) -> dict[str, Any]:
        return fold_arguments(args, kwargs, component=cls.component())

    def init(self, config: dict[str, Any]) -> Base:
        for field in self.config_items().values():
            value = config.get(field.name)
            if value is None:
                if field.required:
                    self.error("No value specified for ", field.name)
                value = field.default
            setattr(self, field.name, value)
        return self

    @classmethod
    def error(cls, *fragments: Any) -> NoReturn:
        """Raise ``EXCEPTION`` with *fragments* joined and tagged.

        An ``ObjectError`` passed on its own is re-raised as it is.
        """
        if len(fragments) == 1 and isinstance(fragments[0], basekit.errors.ObjectError):
            raise fragments[0]
        component = cls.component()
        text = basekit.errors.join_fragments(*fragments)
        logger.debug("%s: %s", component, text)
        raise cls.EXCEPTION(text, component)

    @classmethod
    def component(cls) -> str:
        return basekit.errors.component_name(cls)

    @classmethod
    def config_items(cls) -> dict[str, Field]:
        """Declared fields by name, base classes first."""
        items: dict[str, Field] = {}
        for klass in reversed(cls.__mro__):
            for field in klass.__dict__.get("FIELDS", ()):
                items[field.name] = field
        return items

    def __repr__(self) -> str:
        fields = ", ".join(
            f"{k}={v!r}" for k, v in vars(self).items() if not k.startswith("_")
        )
        return f"{type(self).__name__}({fields})"
