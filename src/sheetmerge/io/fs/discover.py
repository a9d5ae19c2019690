import os
import stat
from collections.abc import Iterable
from pathlib import Path

from loguru import logger

from sheetmerge.errors import DiscoveryError

from .filter import DefaultFilter, FileFilter


def _raise_walk_error(error: OSError) -> None:
    raise error


def _normalize_path(path: Path) -> Path:
    try:
        return path.resolve()
    except OSError:
        return path.absolute()


def find_workbook_files(
    dir_source: os.PathLike[str] | str,
    file_filter: FileFilter | None = None,
    *,
    paths_exclude: Iterable[os.PathLike[str] | str] = (),
) -> list[Path]:
    """Recursively collect the files under ``dir_source`` accepted by a filter.

    Directory and file names are visited in sorted order, so the result is
    deterministic for a given tree. Only regular files (after following
    symlinks) are offered to the filter.

    Args:
        dir_source: Directory to walk.
        file_filter: Predicate deciding inclusion; ``DefaultFilter`` if None.
        paths_exclude: Paths never returned, e.g. the merge output file.

    Returns:
        Qualifying file paths in traversal order.

    Raises:
        DiscoveryError: If the walk fails or no file qualifies.
    """
    path_dir_src = Path(dir_source)
    cfg_filter = DefaultFilter() if file_filter is None else file_filter
    set_excluded = {_normalize_path(Path(_p)) for _p in paths_exclude}

    if not path_dir_src.is_dir():
        raise DiscoveryError(
            f"Source is not a directory: {path_dir_src}", dir_source=path_dir_src
        )

    l_files: list[Path] = []
    n_scanned = 0
    try:
        for _root, _dirnames, _filenames in os.walk(
            path_dir_src, onerror=_raise_walk_error
        ):
            _dirnames.sort()
            path_root = Path(_root)
            for _filename in sorted(_filenames):
                path_file = path_root / _filename
                try:
                    stat_file = path_file.stat()
                except OSError as e:
                    logger.warning(f"Skipping unreadable entry: {path_file} ({e})")
                    continue
                if not stat.S_ISREG(stat_file.st_mode):
                    continue

                n_scanned += 1
                if set_excluded and _normalize_path(path_file) in set_excluded:
                    continue
                if cfg_filter.should_include(path_file, stat_file):
                    l_files.append(path_file)
    except OSError as e:
        raise DiscoveryError(
            f"Failed to walk source directory {path_dir_src}: {e}",
            dir_source=path_dir_src,
        ) from e

    logger.debug(
        f"Discovered {len(l_files)} workbook(s) out of {n_scanned} file(s) "
        f"under {path_dir_src}"
    )
    if not l_files:
        raise DiscoveryError(
            f"No qualifying workbook found under {path_dir_src}",
            dir_source=path_dir_src,
        )
    return l_files
