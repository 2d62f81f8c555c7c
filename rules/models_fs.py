"""
models_fs.py - File and Rename Plan Data Structures

Contains:
- FileItem: File information
- RenameOp: Single rename operation
- RenamePlan: Batch rename plan
- RenameOptions: Rename options configuration
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, List
from enum import Enum
import platform

DEFAULT_IGNORE_DIRS = [".git", "__pycache__", ".rename_backup", "node_modules"]


class ConflictPolicy(Enum):
    """Conflict handling policy"""
    SUFFIX_NUMBER = "suffix_number"  # Add _1, _2, _3...
    SKIP = "skip"                    # Leave the file as it is


@dataclass
class FileItem:
    """File information data class"""
    path: Path                      # Full path
    name: str                       # Filename (with suffix)
    stem: str                       # Filename (without suffix)
    suffix: str                     # Suffix (e.g., .png)
    size: int                       # File size (bytes)
    mtime: float                    # Modification time (timestamp)

    @classmethod
    def from_path(cls, p: Path) -> "FileItem":
        """Create FileItem from Path object"""
        stat = p.stat()
        return cls(
            path=p,
            name=p.name,
            stem=p.stem,
            suffix=p.suffix,
            size=stat.st_size,
            mtime=stat.st_mtime,
        )

    def relative_to(self, base: Path) -> str:
        """Get relative path string"""
        try:
            return str(self.path.relative_to(base))
        except ValueError:
            return str(self.path)


@dataclass
class RenameOp:
    """Single rename operation"""
    src: Path
    dst: Path
    note: str = ""                  # e.g. conflict resolution explanation

    @property
    def is_same(self) -> bool:
        return self.src == self.dst


@dataclass
class RenameOptions:
    """Rename options configuration"""
    conflict_policy: ConflictPolicy = ConflictPolicy.SUFFIX_NUMBER

    # Windows/macOS filesystems are case-insensitive by default
    case_insensitive_detect: bool = field(default_factory=lambda: is_case_insensitive_fs())

    # Scan options
    recursive: bool = True
    include_hidden: bool = False
    ignore_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_IGNORE_DIRS))

    # Execution options
    dry_run: bool = False
    log_dir: Optional[Path] = None  # Where JSON execution logs go (None = no logs)


@dataclass
class RenamePlan:
    """Batch rename plan"""
    ops: List[RenameOp] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    options: RenameOptions = field(default_factory=RenameOptions)

    @property
    def valid_ops(self) -> List[RenameOp]:
        """Operations that actually change something"""
        return [op for op in self.ops if not op.is_same]

    @property
    def conflict_count(self) -> int:
        return sum(1 for op in self.ops if op.note.startswith("conflict resolved"))

    @property
    def total_count(self) -> int:
        return len(self.valid_ops)

    def add_op(self, src: Path, dst: Path, note: str = "") -> None:
        self.ops.append(RenameOp(src=src, dst=dst, note=note))

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)

    def summary(self) -> str:
        """Generate summary"""
        lines = [
            "Rename Plan Summary:",
            f"  - Total operations: {self.total_count}",
            f"  - Conflict resolutions: {self.conflict_count}",
            f"  - Warnings: {len(self.warnings)}",
            f"  - Errors: {len(self.errors)}",
        ]
        return "\n".join(lines)


def is_case_insensitive_fs() -> bool:
    """Guess whether the current filesystem is case-insensitive"""
    return platform.system() in ("Windows", "Darwin")


def normalize_for_comparison(name: str, case_insensitive: bool) -> str:
    """Normalize filename for comparison"""
    if case_insensitive:
        return name.casefold()
    return name
