"""basekit CLI.

Usage:
    basekit new <target> [key=value ...]   Construct an object and print it
                                           (target: module:Class or a config section)
    basekit config <cmd>                   Configuration (get/set/list/show/reset)
"""

from __future__ import annotations

import argparse
import importlib
import pathlib
import sys
from typing import Any

import basekit.base
import basekit.config
import basekit.config_cli
import basekit.errors
import basekit.log


def _parse_pairs(items: list[str]) -> dict[str, Any]:
    """Turn ``key=value`` items into a mapping, values read as TOML scalars."""
    values: dict[str, Any] = {}
    for item in items:
        key, sep, raw = item.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected key=value, got {item!r}")
        values[key] = basekit.config.parse_value(raw)
    return values


def _resolve_class(target: str) -> type[basekit.base.Base]:
    """Import ``module:Class``; anything else must name a Base section."""
    if ":" in target:
        module_name, _, attr = target.partition(":")
        try:
            cls = getattr(importlib.import_module(module_name), attr)
        except (ImportError, AttributeError) as exc:
            raise KeyError(f"Cannot load {target}: {exc}") from exc
    else:
        basekit.config_cli._ensure_registry()
        cls = basekit.config.list_sections().get(target)
        if cls is None:
            raise KeyError(f"Unknown config section: {target}")
    if not (isinstance(cls, type) and issubclass(cls, basekit.base.Base)):
        raise KeyError(f"{target} is not a basekit.base.Base subclass")
    return cls


def _cmd_new(args: list[str]) -> int:
    """Construct an object from key=value arguments."""
    parser = argparse.ArgumentParser(
        prog="basekit new",
        description="Construct an object and print it.",
    )
    parser.add_argument("target", help="module:Class or config section")
    parser.add_argument("values", nargs="*", help="key=value configuration items")
    parser.add_argument("--path", type=pathlib.Path, default=pathlib.Path.cwd())
    parser.add_argument("--log-level", default=None)
    ns = parser.parse_args(args)

    try:
        basekit.log.setup_logging(ns.log_level, ns.path)
        values = _parse_pairs(ns.values)
        cls = _resolve_class(ns.target)
        if ":" in ns.target:
            instance = cls.new(values)
        else:
            section = ns.target
            instance = basekit.config.load(section, ns.path, **values)
    except (KeyError, ValueError) as exc:
        print(str(exc).strip("'\""), file=sys.stderr)
        return 1
    except basekit.errors.ObjectError as exc:
        print(exc.message, file=sys.stderr)
        return 1

    print(repr(instance))
    return 0


def _cmd_config(args: list[str]) -> int:
    """Configuration management."""
    return basekit.config_cli.main(args)


def main() -> None:
    args = sys.argv[1:]
    if not args:
        print(__doc__)
        sys.exit(1)

    cmd = args[0]
    rest = args[1:]

    if cmd == "new":
        sys.exit(_cmd_new(rest))
    elif cmd == "config":
        sys.exit(_cmd_config(rest))
    else:
        print(__doc__)
        sys.exit(1)


if __name__ == "__main__":
    main()
