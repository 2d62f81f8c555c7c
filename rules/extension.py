"""
extension.py - Extension Splitting

Separates the part of a name that rules may modify from the extension
that must be kept as-is.
"""

from typing import Tuple


def split_extension(name: str, ignore_extension: bool = True) -> Tuple[str, str]:
    """
    Split a name into (stem, preserved_suffix)

    Only the last dot is considered, and only when it separates a non-empty
    base from a non-empty extension. A leading dot marks a hidden file, not
    an extension, so ".bashrc" keeps everything in the stem.

        "archive.tar.gz" -> ("archive.tar", ".gz")
        ".bashrc"        -> (".bashrc", "")
        "..bashrc"       -> (".", ".bashrc")
        "notes."         -> ("notes.", "")
        ""               -> ("", "")

    Args:
        name: Name to split (treated as an opaque string)
        ignore_extension: When False, the whole name is the stem

    Returns:
        (stem, preserved_suffix), where stem + preserved_suffix == name
    """
    if not ignore_extension:
        return name, ""

    dot = name.rfind(".")
    if dot <= 0 or dot == len(name) - 1:
        return name, ""

    return name[:dot], name[dot:]
