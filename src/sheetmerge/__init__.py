from __future__ import annotations

from importlib import import_module
from importlib.metadata import PackageNotFoundError, version
from types import ModuleType
from typing import TYPE_CHECKING, Any

__all__ = [
    "__version__",
    "io_xlsx",
    "io_fs",
    "cli",
]

try:
    __version__ = version("sheetmerge")
except PackageNotFoundError:
    __version__ = "0.0.0"

if TYPE_CHECKING:
    import sheetmerge.cli as cli
    import sheetmerge.io.fs as io_fs
    import sheetmerge.io.xlsx as io_xlsx

_ALIAS_MODULES: dict[str, str] = {
    "cli": "sheetmerge.cli",
    "io_xlsx": "sheetmerge.io.xlsx",
    "io_fs": "sheetmerge.io.fs",
}


def __getattr__(name: str) -> Any:
    module_name = _ALIAS_MODULES.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module_loaded: ModuleType = import_module(module_name)
    globals()[name] = module_loaded
    return module_loaded


def __dir__() -> list[str]:
    return sorted(set(globals()) | set(__all__))
