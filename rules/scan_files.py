"""
scan_files.py - File Scanning Module

Collects the files whose names removal rules will be applied to
"""

from pathlib import Path
from typing import Callable, Iterable, List, Optional
import logging
import os

from .models_fs import DEFAULT_IGNORE_DIRS, FileItem, RenameOptions
from .text_match import contains

logger = logging.getLogger(__name__)


def _is_hidden(name: str) -> bool:
    return name.startswith('.')


def _collect(
    paths: Iterable[Path],
    keyword: str,
    case_sensitive: bool,
    include_hidden: bool,
    progress_callback: Optional[Callable[[str], None]],
) -> List[FileItem]:
    results: List[FileItem] = []
    for filepath in paths:
        if not include_hidden and _is_hidden(filepath.name):
            continue

        if progress_callback:
            progress_callback(str(filepath))

        if not contains(filepath.name, keyword, case_sensitive):
            continue

        try:
            results.append(FileItem.from_path(filepath))
        except OSError as e:
            logger.warning("Skipping %s: %s", filepath, e)
    return results


def scan_recursive(
    root: Path,
    keyword: str = "",
    case_sensitive: bool = True,
    include_hidden: bool = False,
    ignore_dirs: Optional[List[str]] = None,
    progress_callback: Optional[Callable[[str], None]] = None
) -> List[FileItem]:
    """
    Recursively scan a folder for files whose name contains keyword

    Args:
        root: Root directory
        keyword: Name filter (empty string matches all)
        case_sensitive: Whether the keyword is case-sensitive
        include_hidden: Whether to include hidden files and folders
        ignore_dirs: Directory names never entered
        progress_callback: Called with each visited path

    Returns:
        Matched files

    Raises:
        ValueError: root is not a directory
    """
    if ignore_dirs is None:
        ignore_dirs = DEFAULT_IGNORE_DIRS

    root = Path(root).resolve()
    if not root.is_dir():
        raise ValueError(f"Directory does not exist: {root}")

    results: List[FileItem] = []
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)

        # Pruning dirnames in place keeps os.walk out of these directories
        dirnames[:] = sorted(
            d for d in dirnames
            if d not in ignore_dirs and (include_hidden or not _is_hidden(d))
        )

        results.extend(_collect(
            (current_dir / name for name in sorted(filenames)),
            keyword, case_sensitive, include_hidden, progress_callback,
        ))

    logger.debug("Scanned %s recursively: %d files", root, len(results))
    return results


def scan_directory(
    directory: Path,
    keyword: str = "",
    case_sensitive: bool = True,
    include_hidden: bool = False,
    progress_callback: Optional[Callable[[str], None]] = None
) -> List[FileItem]:
    """
    Scan a single directory (non-recursive)

    Raises:
        ValueError: directory does not exist
    """
    directory = Path(directory).resolve()
    if not directory.is_dir():
        raise ValueError(f"Directory does not exist: {directory}")

    files = sorted(item for item in directory.iterdir() if item.is_file())
    results = _collect(files, keyword, case_sensitive, include_hidden, progress_callback)

    logger.debug("Scanned %s: %d files", directory, len(results))
    return results


def scan_with_options(
    directory: Path,
    options: RenameOptions,
    keyword: str = "",
    case_sensitive: bool = True,
    progress_callback: Optional[Callable[[str], None]] = None
) -> List[FileItem]:
    """Scan according to RenameOptions (recursive or not)"""
    if options.recursive:
        return scan_recursive(
            directory,
            keyword=keyword,
            case_sensitive=case_sensitive,
            include_hidden=options.include_hidden,
            ignore_dirs=options.ignore_dirs,
            progress_callback=progress_callback,
        )
    return scan_directory(
        directory,
        keyword=keyword,
        case_sensitive=case_sensitive,
        include_hidden=options.include_hidden,
        progress_callback=progress_callback,
    )


def get_existing_names(directory: Path) -> set:
    """
    Get names of all entries already in a directory (for conflict detection)

    Directories count too: a file cannot be renamed onto a folder name.
    """
    directory = Path(directory)
    if not directory.is_dir():
        return set()
    return {item.name for item in directory.iterdir()}
