"""
exec_rename.py - Rename Execution Module

Responsibilities:
- Two-phase execution (source -> temporary name -> final name)
- Restore the source name when the second phase fails
- JSON execution logs
- dry_run support
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Tuple
import json
import logging
import os
import uuid

from .models_fs import RenameOp, RenamePlan

logger = logging.getLogger(__name__)

TEMP_PREFIX = ".__tmp_rename__"

ProgressCallback = Callable[[int, int, str], None]


@dataclass
class RenameResult:
    """Rename execution result"""
    success: List[RenameOp] = field(default_factory=list)
    failed: List[Tuple[RenameOp, str]] = field(default_factory=list)  # (op, error_msg)

    @property
    def success_count(self) -> int:
        return len(self.success)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    def summary(self, max_failures: int = 10) -> str:
        lines = [
            "Execution Result:",
            f"  - Success: {self.success_count}",
            f"  - Failed: {self.failed_count}",
        ]
        if self.failed:
            lines.append("Failure Details:")
            for op, error in self.failed[:max_failures]:
                lines.append(f"  - {op.src.name} -> {op.dst.name}: {error}")
            if len(self.failed) > max_failures:
                lines.append(f"  ... and {len(self.failed) - max_failures} more failures")
        return "\n".join(lines)


def _temp_path_for(original: Path) -> Path:
    unique_id = uuid.uuid4().hex[:8]
    return original.parent / f"{TEMP_PREFIX}{unique_id}__{original.name}"


def _is_temp_name(name: str) -> bool:
    return name.startswith(TEMP_PREFIX)


def _original_name_from_temp(name: str) -> Optional[str]:
    """Temporary name format: .__tmp_rename__{uuid}__{original_name}"""
    rest = name[len(TEMP_PREFIX):]
    _, sep, original = rest.partition("__")
    return original if sep and original else None


def execute_rename(
    plan: RenamePlan,
    dry_run: Optional[bool] = None,
    progress_callback: Optional[ProgressCallback] = None,
    log_dir: Optional[Path] = None
) -> RenameResult:
    """
    Execute rename plan (two-phase)

    Args:
        plan: Rename plan
        dry_run: Preview only; defaults to plan.options.dry_run
        progress_callback: Progress callback (current, total, message)
        log_dir: Directory for JSON logs; defaults to plan.options.log_dir

    Returns:
        Execution result
    """
    if dry_run is None:
        dry_run = plan.options.dry_run
    if log_dir is None:
        log_dir = plan.options.log_dir

    result = RenameResult()
    valid_ops = plan.valid_ops
    total = len(valid_ops)

    if total == 0:
        return result

    if dry_run:
        for i, op in enumerate(valid_ops):
            if progress_callback:
                progress_callback(i + 1, total, f"[Preview] {op.src.name} -> {op.dst.name}")
            result.success.append(op)
        return result

    if log_dir:
        save_plan_log(plan, log_dir)

    # Phase 1: move every source out of the way
    staged: List[Tuple[RenameOp, Path]] = []
    for i, op in enumerate(valid_ops):
        if progress_callback:
            progress_callback(i + 1, total * 2, f"[Phase 1] {op.src.name} -> temp name")

        if not op.src.exists():
            result.failed.append((op, "Source file does not exist"))
            continue

        temp_path = _temp_path_for(op.src)
        try:
            os.rename(op.src, temp_path)
            staged.append((op, temp_path))
        except OSError as e:
            logger.warning("Phase 1 failed for %s: %s", op.src, e)
            result.failed.append((op, f"Phase 1 failed: {e}"))

    # Phase 2: temporary name -> final name
    for i, (op, temp_path) in enumerate(staged):
        if progress_callback:
            progress_callback(total + i + 1, total * 2, f"[Phase 2] temp name -> {op.dst.name}")

        if op.dst.exists():
            _restore(op, temp_path, result, "Destination already exists")
            continue

        try:
            os.rename(temp_path, op.dst)
            result.success.append(op)
        except OSError as e:
            _restore(op, temp_path, result, f"Phase 2 failed: {e}")

    logger.info(
        "Renamed %d files (%d failed)", result.success_count, result.failed_count
    )

    if log_dir:
        save_result_log(result, log_dir)

    return result


def _restore(op: RenameOp, temp_path: Path, result: RenameResult, reason: str) -> None:
    try:
        os.rename(temp_path, op.src)
        result.failed.append((op, f"{reason} (restored)"))
    except OSError as e:
        logger.error("Could not restore %s from %s: %s", op.src, temp_path, e)
        result.failed.append((op, f"{reason} (restore also failed: {e})"))


def _write_log(log_dir: Path, kind: str, data: dict) -> Path:
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / f"rename_{kind}_{data['timestamp']}.json"
    with open(log_file, 'w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    logger.debug("Wrote %s log to %s", kind, log_file)
    return log_file


def _timestamp() -> str:
    return datetime.now().strftime("%Y%m%d_%H%M%S_%f")


def save_plan_log(plan: RenamePlan, log_dir: Path) -> Path:
    """Save execution plan log"""
    return _write_log(log_dir, "plan", {
        "timestamp": _timestamp(),
        "total_ops": plan.total_count,
        "operations": [
            {"src": str(op.src), "dst": str(op.dst), "note": op.note}
            for op in plan.valid_ops
        ],
        "warnings": plan.warnings,
        "errors": plan.errors,
    })


def save_result_log(result: RenameResult, log_dir: Path) -> Path:
    """Save execution result log"""
    return _write_log(log_dir, "result", {
        "timestamp": _timestamp(),
        "success_count": result.success_count,
        "failed_count": result.failed_count,
        "success": [{"src": str(op.src), "dst": str(op.dst)} for op in result.success],
        "failed": [
            {"src": str(op.src), "dst": str(op.dst), "error": error}
            for op, error in result.failed
        ],
    })


def cleanup_temp_files(directory: Path) -> int:
    """
    Restore files left under temporary names (after an interrupted run)

    Returns:
        Number of restored files
    """
    count = 0
    for item in Path(directory).iterdir():
        if not (item.is_file() and _is_temp_name(item.name)):
            continue
        original_name = _original_name_from_temp(item.name)
        if original_name is None:
            continue
        original_path = item.parent / original_name
        if original_path.exists():
            logger.warning("Not restoring %s: %s already exists", item, original_path)
            continue
        try:
            os.rename(item, original_path)
            count += 1
        except OSError as e:
            logger.warning("Could not restore %s: %s", item, e)
    return count
