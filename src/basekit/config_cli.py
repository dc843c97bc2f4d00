"""CLI for basekit configuration.

Usage:
    basekit config list                         Show all configurable sections
    basekit config get <section.key>            Print effective value
    basekit config set [--global] <key> <value> Write a config value
    basekit config reset [--global] <key>       Remove an override
    basekit config show                         Dump full effective config
"""

from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path

import basekit.config
import basekit.errors


def _ensure_registry() -> None:
    """Import the modules that register config sections."""
    import basekit.examples
    import basekit.log  # noqa: F401


def _split_key(key: str) -> tuple[str, str] | None:
    parts = key.split(".", 1)
    if len(parts) != 2:
        print(f"Invalid key format: {key!r} (expected section.key)", file=sys.stderr)
        return None
    return parts[0], parts[1]


def _describe(cls: type) -> list[str]:
    if dataclasses.is_dataclass(cls):
        lines = []
        for f in dataclasses.fields(cls):
            type_name = f.type if isinstance(f.type, str) else f.type.__name__
            lines.append(f"  {f.name}: {type_name} = {f.default!r}")
        return lines
    return [
        f"  {name}: required" if item.required else f"  {name} = {item.default!r}"
        for name, item in cls.config_items().items()
    ]


def cmd_list() -> int:
    """Print all registered sections with their fields."""
    _ensure_registry()
    sections = basekit.config.list_sections()
    if not sections:
        print("No configurable sections registered.")
        return 0

    for name, cls in sorted(sections.items()):
        print(f"[{name}]")
        for line in _describe(cls):
            print(line)
        print()
    return 0


def cmd_get(key: str, root: Path) -> int:
    """Print the effective value for section.key."""
    _ensure_registry()
    parts = _split_key(key)
    if parts is None:
        return 1
    section, field = parts
    try:
        value = basekit.config.get_effective(section, field, root)
    except (KeyError, AttributeError, basekit.errors.ObjectError) as exc:
        print(str(exc), file=sys.stderr)
        return 1
    print(value)
    return 0


def cmd_set(key: str, value: str, *, global_flag: bool, root: Path) -> int:
    """Set a config value in the TOML file."""
    _ensure_registry()
    parts = _split_key(key)
    if parts is None:
        return 1
    section, field = parts
    scope = "global" if global_flag else "local"
    try:
        basekit.config.set_value(section, field, value, scope=scope, root=root)
    except (KeyError, ValueError) as exc:
        print(str(exc), file=sys.stderr)
        return 1
    print(f"Set {key} = {value} ({scope})")
    return 0


def cmd_reset(key: str, *, global_flag: bool, root: Path) -> int:
    """Remove a config override."""
    _ensure_registry()
    parts = _split_key(key)
    if parts is None:
        return 1
    section, field = parts
    scope = "global" if global_flag else "local"
    basekit.config.reset_value(section, field, scope=scope, root=root)
    print(f"Reset {key} ({scope})")
    return 0


def cmd_show(root: Path) -> int:
    """Dump the effective config; sections that fail to build are reported."""
    _ensure_registry()
    rc = 0
    for name in sorted(basekit.config.list_sections()):
        print(f"[{name}]")
        values = basekit.config.merged_values(name, root)
        try:
            basekit.config.load(name, root)
        except basekit.errors.ObjectError as exc:
            print(f"  ! {exc}")
            rc = 1
        for key, value in values.items():
            print(f"  {key} = {value!r}")
        print()
    return rc


def main(argv: list[str] | None = None) -> int:
    """Entry point for ``basekit config``."""
    parser = argparse.ArgumentParser(
        prog="basekit config",
        description="basekit configuration.",
    )
    sub = parser.add_subparsers(dest="subcmd")

    sub.add_parser("list", help="Show all configurable sections")

    p_get = sub.add_parser("get", help="Print effective value")
    p_get.add_argument("key", help="section.key")
    p_get.add_argument("--path", type=Path, default=Path.cwd())

    p_set = sub.add_parser("set", help="Set a config value")
    p_set.add_argument("key", help="section.key")
    p_set.add_argument("value", help="New value")
    p_set.add_argument("--global", dest="global_flag", action="store_true")
    p_set.add_argument("--path", type=Path, default=Path.cwd())

    p_reset = sub.add_parser("reset", help="Remove an override")
    p_reset.add_argument("key", help="section.key")
    p_reset.add_argument("--global", dest="global_flag", action="store_true")
    p_reset.add_argument("--path", type=Path, default=Path.cwd())

    p_show = sub.add_parser("show", help="Dump full effective config")
    p_show.add_argument("--path", type=Path, default=Path.cwd())

    args = parser.parse_args(argv)

    if args.subcmd is None:
        parser.print_help()
        return 1

    if args.subcmd == "list":
        return cmd_list()
    elif args.subcmd == "get":
        return cmd_get(args.key, args.path)
    elif args.subcmd == "set":
        return cmd_set(
            args.key, args.value, global_flag=args.global_flag, root=args.path
        )
    elif args.subcmd == "reset":
        return cmd_reset(args.key, global_flag=args.global_flag, root=args.path)
    elif args.subcmd == "show":
        return cmd_show(args.path)
    else:
        parser.print_help()
        return 1
