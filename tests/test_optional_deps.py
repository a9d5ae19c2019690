from __future__ import annotations

import re
import sys
import tomllib
from pathlib import Path

import pytest

# Ensure src-layout imports work when running tests from repo checkout.
SRC_DIR = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(SRC_DIR))

from sheetmerge._optional_deps import import_optional_module  # noqa: E402


def test_optional_import_error_contains_install_hint() -> None:
    with pytest.raises(ModuleNotFoundError) as exc_info:
        import_optional_module(
            module_name=".missing_cli_module",
            package="sheetmerge",
            feature="sheetmerge.cli",
            extras=("cli",),
            required_modules=("missing_cli_module",),
        )

    message = str(exc_info.value)
    assert "sheetmerge.cli is unavailable" in message
    assert re.search(r'pip install "sheetmerge\[cli\]"', message)
    assert "pdm sync -G cli" in message


def test_unrelated_missing_module_propagates_unchanged() -> None:
    with pytest.raises(ModuleNotFoundError) as exc_info:
        import_optional_module(
            module_name=".missing_cli_module",
            package="sheetmerge",
            feature="sheetmerge.cli",
            extras=("cli",),
            required_modules=("rich",),
        )

    assert "is unavailable" not in str(exc_info.value)


def test_console_script_targets_lazy_cli_attribute() -> None:
    dict_pyproject = tomllib.loads(
        (SRC_DIR.parent / "pyproject.toml").read_text(encoding="utf-8")
    )
    assert dict_pyproject["project"]["scripts"]["sheetmerge"] == "sheetmerge.cli:main"


def test_cli_main_without_extra_raises_install_hint(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    for _name in list(sys.modules):
        if _name.startswith("sheetmerge.cli."):
            monkeypatch.delitem(sys.modules, _name)
        elif _name.split(".")[0] in ("rich", "rich_argparse"):
            monkeypatch.setitem(sys.modules, _name, None)
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich_argparse", None)

    import sheetmerge.cli as cli_pkg

    with pytest.raises(ModuleNotFoundError) as exc_info:
        getattr(cli_pkg, "main")

    message = str(exc_info.value)
    assert "sheetmerge.cli is unavailable" in message
    assert re.search(r'pip install "sheetmerge\[cli\]"', message)
