from __future__ import annotations

from collections.abc import Sequence
from importlib import import_module
from types import ModuleType
from typing import Any

_NAME_DISTRIBUTION = "sheetmerge"


def _format_extra_names(extras: Sequence[str]) -> str:
    return ",".join(dict.fromkeys(extras))


def build_optional_dependency_error(
    *,
    feature: str,
    extras: Sequence[str],
    missing_module: str | None,
) -> ModuleNotFoundError:
    c_extras = _format_extra_names(extras)
    c_missing = (
        f"Missing optional dependency `{missing_module}`."
        if missing_module
        else "Missing optional dependency."
    )
    return ModuleNotFoundError(
        f"{feature} is unavailable. {c_missing} "
        f"Install extras with `pip install \"{_NAME_DISTRIBUTION}[{c_extras}]\"` "
        f"or sync in development with `pdm sync -G {c_extras}`."
    )


def _collect_name_candidates(dotted_names: Sequence[str]) -> set[str]:
    set_candidates: set[str] = set()
    for _name in dotted_names:
        l_parts = _name.split(".")
        set_candidates |= set(l_parts)
        set_candidates.add(l_parts[0])
        set_candidates.add(l_parts[-1])
    return set_candidates


def import_optional_module(
    *,
    module_name: str,
    package: str,
    feature: str,
    extras: Sequence[str],
    required_modules: Sequence[str],
) -> ModuleType:
    """Import a module whose third-party requirements live in an extra.

    A ``ModuleNotFoundError`` raised for one of ``required_modules`` (or for
    any module when none are listed) is re-raised with an install hint; other
    missing modules propagate unchanged.
    """
    try:
        return import_module(module_name, package=package)
    except ModuleNotFoundError as exc:
        set_missing = _collect_name_candidates([exc.name or ""])
        set_required = _collect_name_candidates(required_modules)

        if not required_modules or bool(set_missing & set_required):
            raise build_optional_dependency_error(
                feature=feature,
                extras=extras,
                missing_module=exc.name,
            ) from exc
        raise


def import_optional_attr(
    *,
    module_name: str,
    attr_name: str,
    package: str,
    feature: str,
    extras: Sequence[str],
    required_modules: Sequence[str],
) -> Any:
    module = import_optional_module(
        module_name=module_name,
        package=package,
        feature=feature,
        extras=extras,
        required_modules=required_modules,
    )
    return getattr(module, attr_name)
