"""Configuration registry with TOML-backed persistence.

``@configurable`` registers a class under a section name; ``load()`` merges
class defaults → global TOML → local TOML → keyword overrides and builds
the instance.  Plain dataclasses are built with ``cls(**kwargs)``, ``Base``
subclasses go through ``cls.new(config)`` so their ``init()`` hook
validates the merged mapping.

Config files:
    ~/.config/basekit/config.toml     global (user-wide)
    .basekit/config.toml              local  (project-specific)
"""

from __future__ import annotations

import dataclasses
import logging
import pathlib
import tomllib
from typing import Any, TypeVar

import basekit.base

T = TypeVar("T")

logger = logging.getLogger("basekit.config")

_REGISTRY: dict[str, type] = {}


# ---------------------------------------------------------------------------
# Decorator
# ---------------------------------------------------------------------------

def configurable(section: str):
    """Class decorator: register a dataclass or Base subclass as a section."""

    def decorator(cls: type[T]) -> type[T]:
        if not (dataclasses.is_dataclass(cls) or issubclass(cls, basekit.base.Base)):
            raise TypeError(f"{cls.__name__} is neither a dataclass nor a Base subclass")
        _REGISTRY[section] = cls
        return cls

    return decorator


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

def _global_path() -> pathlib.Path:
    return pathlib.Path.home() / ".config" / "basekit" / "config.toml"


def _local_path(root: pathlib.Path) -> pathlib.Path:
    return root / ".basekit" / "config.toml"


def find_root(start: pathlib.Path) -> pathlib.Path | None:
    """Walk up from *start* to the first directory holding .basekit or .git."""
    for candidate in [start, *start.parents]:
        if (candidate / ".basekit").is_dir() or (candidate / ".git").exists():
            return candidate
    return None


def _find_root(root: pathlib.Path | None = None) -> pathlib.Path:
    """Locate the project root (marker directory or cwd)."""
    if root is not None:
        return root
    cwd = pathlib.Path.cwd()
    found = find_root(cwd)
    return found if found is not None else cwd


# ---------------------------------------------------------------------------
# TOML I/O
# ---------------------------------------------------------------------------

def _load_toml(path: pathlib.Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        return tomllib.loads(path.read_text())
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return {}


def _section_table(path: pathlib.Path, section: str) -> dict[str, Any]:
    """Return the [section] table of *path*, or {} when it is absent or not a table."""
    data = _load_toml(path).get(section, {})
    if not isinstance(data, dict):
        logger.warning("Ignoring non-table [%s] in %s", section, path)
        return {}
    return data


def _write_toml(path: pathlib.Path, data: dict[str, Any]) -> None:
    import tomli_w

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(tomli_w.dumps(data).encode())


# ---------------------------------------------------------------------------
# Fields and type coercion
# ---------------------------------------------------------------------------

def field_names(cls: type) -> list[str]:
    """Names of the configuration items a section accepts."""
    if dataclasses.is_dataclass(cls):
        return [f.name for f in dataclasses.fields(cls)]
    return list(cls.config_items())


def field_defaults(cls: type) -> dict[str, Any]:
    """Declared defaults; required items without one are left out."""
    if dataclasses.is_dataclass(cls):
        return {
            f.name: f.default
            for f in dataclasses.fields(cls)
            if f.default is not dataclasses.MISSING
        }
    return {
        name: item.default
        for name, item in cls.config_items().items()
        if item.default is not None
    }


def parse_value(text: str) -> Any:
    """Read *text* as a TOML scalar (`10`, `1.5`, `true`), else keep the string."""
    try:
        return tomllib.loads(f"value = {text}")["value"]
    except tomllib.TOMLDecodeError:
        return text


def _coerce(value: str, target_type: type) -> Any:
    """Coerce a CLI string to *target_type*."""
    if target_type is bool:
        return value.lower() in ("true", "1", "yes")
    if target_type is int:
        return int(value)
    if target_type is float:
        return float(value)
    return value


def _field_type(cls: type, field_name: str) -> type | None:
    """Return the concrete type for a section field, if one is known."""
    if dataclasses.is_dataclass(cls):
        for f in dataclasses.fields(cls):
            if f.name == field_name:
                t = f.type
                # Handle string annotations
                if isinstance(t, str):
                    mapping = {"int": int, "float": float, "bool": bool, "str": str}
                    return mapping.get(t, str)
                return t
        raise KeyError(field_name)
    # Base fields carry no declared type; values are read as TOML scalars
    if field_name not in cls.config_items():
        raise KeyError(field_name)
    return None


# ---------------------------------------------------------------------------
# Core API
# ---------------------------------------------------------------------------

def list_sections() -> dict[str, type]:
    """Return a copy of the registry."""
    return dict(_REGISTRY)


def _section_class(section: str) -> type:
    cls = _REGISTRY.get(section)
    if cls is None:
        raise KeyError(f"Unknown config section: {section}")
    return cls


def merged_values(
    section: str,
    root: pathlib.Path | None = None,
    **overrides: Any,
) -> dict[str, Any]:
    """Merge defaults → global → local → non-None overrides for *section*."""
    cls = _section_class(section)
    root = _find_root(root)

    global_data = _section_table(_global_path(), section)
    local_data = _section_table(_local_path(root), section)
    filtered = {k: v for k, v in overrides.items() if v is not None}

    return {**field_defaults(cls), **global_data, **local_data, **filtered}


def load(section: str, root: pathlib.Path | None = None, **overrides: Any) -> Any:
    """Load a config section and build its instance."""
    cls = _section_class(section)
    merged = merged_values(section, root, **overrides)

    if issubclass(cls, basekit.base.Base):
        return cls.new(merged)

    # Filter to valid field names
    valid_fields = set(field_names(cls))
    kwargs = {k: v for k, v in merged.items() if k in valid_fields}
    return cls(**kwargs)


def get_effective(
    section: str,
    key: str,
    root: pathlib.Path | None = None,
) -> Any:
    """Get the effective value for a single config key."""
    instance = load(section, root)
    return getattr(instance, key)


def set_value(
    section: str,
    key: str,
    value: Any,
    *,
    scope: str = "local",
    root: pathlib.Path | None = None,
) -> None:
    """Write a config value to the appropriate TOML file."""
    cls = _section_class(section)
    if key not in field_names(cls):
        raise KeyError(f"Unknown key: {section}.{key}")

    if isinstance(value, str):
        target = _field_type(cls, key)
        value = _coerce(value, target) if target is not None else parse_value(value)

    root = _find_root(root)
    path = _global_path() if scope == "global" else _local_path(root)
    data = _load_toml(path)
    data.setdefault(section, {})[key] = value
    _write_toml(path, data)
    logger.debug("Set %s.%s in %s", section, key, path)


def reset_value(
    section: str,
    key: str,
    *,
    scope: str = "local",
    root: pathlib.Path | None = None,
) -> None:
    """Remove a config override from the TOML file."""
    root = _find_root(root)
    path = _global_path() if scope == "global" else _local_path(root)
    data = _load_toml(path)
    sec = data.get(section, {})
    if key in sec:
        del sec[key]
        if not sec:
            del data[section]
        _write_toml(path, data)
