"""
rules - Remove-Text Rename Core

The rule evaluator (remove, remove_all) is pure string processing; the
scanning, planning and execution modules are the filesystem side that
feeds it file names.
"""

from .models_rule import (
    RemovePosition,
    RemovalRule,
    RuleSet,
)

from .models_fs import (
    FileItem,
    RenameOp,
    RenamePlan,
    RenameOptions,
    ConflictPolicy,
)

from .errors import (
    RuleFormatError,
    RuleFileError,
    RuleFileNotFoundError,
    InvalidRuleFileError,
)

from .extension import split_extension

from .text_match import (
    contains,
    find_occurrences,
    remove_occurrences,
    is_valid_filename,
)

from .remove import (
    remove,
    remove_all,
)

from .rule_store import (
    dumps_rules,
    loads_rules,
    load_rules,
    save_rules,
)

from .scan_files import (
    scan_recursive,
    scan_directory,
    scan_with_options,
    get_existing_names,
)

from .plan_rename import (
    plan_remove_rename,
    preview_names,
    has_effective_rule,
    validate_plan,
    ConflictResolver,
)

from .exec_rename import (
    execute_rename,
    RenameResult,
    cleanup_temp_files,
)

__all__ = [
    # Rules
    "RemovePosition",
    "RemovalRule",
    "RuleSet",

    # Data models
    "FileItem",
    "RenameOp",
    "RenamePlan",
    "RenameOptions",
    "ConflictPolicy",
    "RenameResult",

    # Errors
    "RuleFormatError",
    "RuleFileError",
    "RuleFileNotFoundError",
    "InvalidRuleFileError",

    # Evaluation
    "split_extension",
    "contains",
    "find_occurrences",
    "remove_occurrences",
    "is_valid_filename",
    "remove",
    "remove_all",

    # Rule files
    "dumps_rules",
    "loads_rules",
    "load_rules",
    "save_rules",

    # Scanning
    "scan_recursive",
    "scan_directory",
    "scan_with_options",
    "get_existing_names",

    # Planning
    "plan_remove_rename",
    "preview_names",
    "has_effective_rule",
    "validate_plan",
    "ConflictResolver",

    # Execution
    "execute_rename",
    "cleanup_temp_files",
]
