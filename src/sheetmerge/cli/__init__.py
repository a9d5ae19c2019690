from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sheetmerge._optional_deps import import_optional_attr

__all__ = ["main", "build_parser", "CliHeadings"]

if TYPE_CHECKING:
    from .console import CliHeadings
    from .app import main
    from .parser import build_parser

_DICT_ATTR_MODULES: dict[str, str] = {
    "main": ".app",
    "build_parser": ".parser",
    "CliHeadings": ".console",
}


def __getattr__(name: str) -> Any:
    module_name = _DICT_ATTR_MODULES.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    return import_optional_attr(
        module_name=module_name,
        attr_name=name,
        package=__name__,
        feature="sheetmerge.cli",
        extras=("cli",),
        required_modules=("rich_argparse", "rich"),
    )
