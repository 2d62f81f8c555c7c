"""
plan_rename.py - Rename Plan Generation Module

Responsibilities:
- Apply removal rules to each file name
- Reject names that cannot exist on disk
- Conflict detection and resolution (auto add _1, _2... or skip)
- Output RenamePlan
"""

from collections import defaultdict
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Tuple
import logging

from .extension import split_extension
from .models_fs import (
    ConflictPolicy, FileItem, RenameOptions, RenamePlan, normalize_for_comparison
)
from .models_rule import RuleSet
from .remove import remove_all
from .scan_files import get_existing_names
from .text_match import is_valid_filename

logger = logging.getLogger(__name__)

MAX_CONFLICT_ATTEMPTS = 10000


class ConflictResolver:
    """Tracks occupied names per directory"""

    def __init__(self, case_insensitive: bool = True):
        self.case_insensitive = case_insensitive
        # key: directory, value: normalized occupied names
        self.occupied: Dict[Path, Set[str]] = defaultdict(set)

    def _normalize(self, name: str) -> str:
        return normalize_for_comparison(name, self.case_insensitive)

    def add_existing(self, directory: Path, names: Iterable[str]) -> None:
        """Register names already present on disk"""
        self.occupied[directory].update(self._normalize(n) for n in names)

    def remove_participating(self, directory: Path, names: Iterable[str]) -> None:
        """Free the names of files that are about to be renamed"""
        self.occupied[directory] -= {self._normalize(n) for n in names}

    def is_occupied(self, directory: Path, name: str) -> bool:
        return self._normalize(name) in self.occupied[directory]

    def mark_occupied(self, directory: Path, name: str) -> None:
        self.occupied[directory].add(self._normalize(name))

    def resolve(self, directory: Path, desired_name: str) -> Tuple[str, bool]:
        """
        Return an available name

        Args:
            directory: Directory
            desired_name: Desired filename

        Returns:
            (actual filename, whether conflict occurred)

        Raises:
            RuntimeError: No free name found
        """
        if not self.is_occupied(directory, desired_name):
            self.mark_occupied(directory, desired_name)
            return desired_name, False

        stem, suffix = split_extension(desired_name)
        for n in range(1, MAX_CONFLICT_ATTEMPTS + 1):
            candidate = f"{stem}_{n}{suffix}"
            if not self.is_occupied(directory, candidate):
                self.mark_occupied(directory, candidate)
                return candidate, True

        raise RuntimeError(
            f"Cannot find available name for {desired_name} (tried over {MAX_CONFLICT_ATTEMPTS} times)"
        )


def has_effective_rule(rules: RuleSet) -> bool:
    """Whether at least one rule has text to remove"""
    return any(not rule.is_noop for rule in rules)


def preview_names(names: Iterable[str], rules: RuleSet) -> List[Tuple[str, str]]:
    """Apply rules to plain names without touching the filesystem"""
    return [(name, remove_all(name, rules)) for name in names]


def _drop_skipped(
    plan: RenamePlan,
    resolver: ConflictResolver,
    directory: Path,
    pending: List[Tuple[FileItem, str]]
) -> List[Tuple[FileItem, str]]:
    """
    Remove colliding renames under the SKIP policy

    A skipped file keeps its name, which can in turn block a rename that
    was accepted earlier, so the check repeats until nothing more is skipped.
    Skipped sources are left marked occupied in resolver.
    """
    accepted = list(pending)
    changed = True
    while changed:
        changed = False
        claimed: Set[str] = set()
        for index, (f, new_name) in enumerate(accepted):
            key = normalize_for_comparison(new_name, resolver.case_insensitive)
            if resolver.is_occupied(directory, new_name) or key in claimed:
                plan.add_warning(f"Skip {f.path}: {new_name} already exists")
                resolver.mark_occupied(directory, f.name)
                del accepted[index]
                changed = True
                break
            claimed.add(key)
    return accepted


def plan_remove_rename(
    files: List[FileItem],
    rules: RuleSet,
    options: Optional[RenameOptions] = None
) -> RenamePlan:
    """
    Generate a rename plan from removal rules

    Args:
        files: File list
        rules: Removal rules, applied in order to every file name
        options: Rename options

    Returns:
        Rename plan
    """
    if options is None:
        options = RenameOptions()

    plan = RenamePlan(options=options)

    if not has_effective_rule(rules):
        plan.add_error("No removal rule with text to remove")
        return plan

    files_by_dir: Dict[Path, List[FileItem]] = defaultdict(list)
    for f in files:
        files_by_dir[f.path.parent].append(f)

    for directory, dir_files in files_by_dir.items():
        # Stable processing order
        dir_files = sorted(dir_files, key=lambda f: str(f.path).lower())

        resolver = ConflictResolver(case_insensitive=options.case_insensitive_detect)
        resolver.add_existing(directory, get_existing_names(directory))
        resolver.remove_participating(directory, (f.name for f in dir_files))

        # Files that keep their names (unchanged or invalid) stay occupied
        pending: List[Tuple[FileItem, str]] = []
        for f in dir_files:
            new_name = remove_all(f.name, rules)
            if new_name == f.name:
                resolver.mark_occupied(directory, f.name)
                continue

            valid, error = is_valid_filename(new_name)
            if not valid:
                plan.add_warning(f"Skip {f.path}: {error}")
                resolver.mark_occupied(directory, f.name)
                continue

            pending.append((f, new_name))

        if options.conflict_policy is ConflictPolicy.SKIP:
            pending = _drop_skipped(plan, resolver, directory, pending)

        for f, new_name in pending:
            if options.conflict_policy is ConflictPolicy.SKIP:
                resolver.mark_occupied(directory, new_name)
                final_name, had_conflict = new_name, False
            else:
                final_name, had_conflict = resolver.resolve(directory, new_name)

            note = ""
            if had_conflict:
                note = f"conflict resolved: {new_name} -> {final_name}"
            plan.add_op(f.path, directory / final_name, note)

    logger.debug(
        "Planned %d renames for %d files (%d warnings)",
        plan.total_count, len(files), len(plan.warnings),
    )
    return plan


def validate_plan(plan: RenamePlan) -> List[str]:
    """
    Validate rename plan

    Returns:
        Error list
    """
    errors = []

    for op in plan.ops:
        if not op.src.exists():
            errors.append(f"Source file does not exist: {op.src}")

    dst_set: Dict[str, List[Path]] = defaultdict(list)
    for op in plan.ops:
        key = str(op.dst).casefold() if plan.options.case_insensitive_detect else str(op.dst)
        dst_set[key].append(op.src)

    for dst_key, srcs in dst_set.items():
        if len(srcs) > 1:
            errors.append(f"Multiple files have the same destination: {srcs} -> {dst_key}")

    return errors
