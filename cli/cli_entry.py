"""
cli_entry.py - CLI Entry Point

Supports:
- Command-line argument mode
- Interactive mode (no subcommand)
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rules import (
    RemovalRule, RemovePosition, RenameOptions, RenamePlan, RuleFileError,
    execute_rename, has_effective_rule, load_rules, plan_remove_rename,
    preview_names, save_rules, scan_with_options,
)

from .cli_interactive import interactive_mode

PREVIEW_LIMIT = 20


def configure_logging(verbose: bool = False) -> None:
    """Send library log records to stderr"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def add_rule_arguments(parser: argparse.ArgumentParser) -> None:
    """Options that build the removal rule list"""
    group = parser.add_argument_group("removal rules")
    group.add_argument("--text", "-t", action="append", default=[], metavar="TEXT",
                       help="Text to remove (repeat for several rules, applied in order)")
    group.add_argument("--position", "-p", choices=[p.value for p in RemovePosition],
                       default=RemovePosition.ALL.value, help="Which occurrence(s) to remove")
    group.add_argument("--ignore-case", "-i", action="store_true", help="Case-insensitive matching")
    group.add_argument("--include-extension", "-e", action="store_true",
                       help="Allow removal inside the file extension")
    group.add_argument("--rules-file", "-r", type=str, help="Load rules from a JSON file (applied first)")
    group.add_argument("--save-rules", type=str, metavar="FILE", help="Save the resulting rules to a JSON file")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser"""
    parser = argparse.ArgumentParser(
        prog="rename-remove",
        description="Batch Rename Tool - remove text from file names",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  rename-remove

  # Try rules on names without touching files
  rename-remove preview "IMG_0001 (copy).jpg" --text " (copy)"

  # Remove text from every file name under a folder
  rename-remove remove ./photos --text ".realcugan" --text "_final" --dry-run

  # Reuse saved rules
  rename-remove remove ./photos --rules-file cleanup.json --yes
"""
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Subcommands")

    # preview subcommand
    preview_parser = subparsers.add_parser("preview", help="Apply rules to names (no file access)")
    preview_parser.add_argument("names", nargs="+", help="Names to transform")
    add_rule_arguments(preview_parser)

    # remove subcommand
    remove_parser = subparsers.add_parser("remove", help="Remove text from file names in a directory")
    remove_parser.add_argument("directory", type=str, help="Target directory")
    remove_parser.add_argument("--keyword", "-k", type=str, default="", help="Only files whose name contains this")
    remove_parser.add_argument("--no-recursive", dest="recursive", action="store_false",
                               help="Do not descend into subdirectories")
    remove_parser.add_argument("--include-hidden", action="store_true", help="Include hidden files")
    remove_parser.add_argument("--log-dir", type=str, help="Write JSON execution logs here")
    remove_parser.add_argument("--dry-run", "-d", action="store_true", help="Preview only, do not execute")
    remove_parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")
    add_rule_arguments(remove_parser)

    # rules subcommand
    rules_parser = subparsers.add_parser("rules", help="Show the rules stored in a file")
    rules_parser.add_argument("file", type=str, help="Rule file")

    return parser


def build_rules(args: argparse.Namespace) -> List[RemovalRule]:
    """
    Build rules from parsed arguments

    Rules from --rules-file come first, then one rule per --text.

    Raises:
        RuleFileError: Rule file missing or malformed
    """
    rules: List[RemovalRule] = []
    if args.rules_file:
        rules.extend(load_rules(Path(args.rules_file)))

    position = RemovePosition.parse(args.position)
    for text in args.text:
        rules.append(RemovalRule(
            target_text=text,
            position=position,
            case_sensitive=not args.ignore_case,
            ignore_extension=not args.include_extension,
        ))

    if args.save_rules:
        path = save_rules(rules, Path(args.save_rules))
        print(f"Saved {len(rules)} rules to {path}")

    return rules


def print_rules(rules: List[RemovalRule]) -> None:
    for i, rule in enumerate(rules, 1):
        print(f"  {i}. {rule.describe()}")


def print_plan(plan: RenamePlan, limit: int = PREVIEW_LIMIT) -> None:
    print(f"Will perform {plan.total_count} rename operations:")
    print("-" * 80)
    for op in plan.valid_ops[:limit]:
        note = f" ({op.note})" if op.note else ""
        print(f"  {op.src.name:<40} -> {op.dst.name}{note}")
    if len(plan.valid_ops) > limit:
        print(f"  ... and {len(plan.valid_ops) - limit} more operations")
    print("-" * 80)

    if plan.warnings:
        print("Warnings:")
        for warn in plan.warnings:
            print(f"  - {warn}")


def cmd_preview(args) -> int:
    """Handle preview command"""
    rules = build_rules(args)
    if not has_effective_rule(rules):
        print("Error: No removal rule with text to remove (use --text or --rules-file)")
        return 1

    for old, new in preview_names(args.names, rules):
        marker = "" if new != old else "  (unchanged)"
        print(f"{old} -> {new}{marker}")
    return 0


def cmd_remove(args) -> int:
    """Handle remove command"""
    directory = Path(args.directory).resolve()
    if not directory.is_dir():
        print(f"Error: Directory does not exist: {directory}")
        return 1

    rules = build_rules(args)
    if not has_effective_rule(rules):
        print("Error: No removal rule with text to remove (use --text or --rules-file)")
        return 1

    options = RenameOptions(
        recursive=args.recursive,
        include_hidden=args.include_hidden,
        dry_run=args.dry_run,
        log_dir=Path(args.log_dir) if args.log_dir else None,
    )

    print(f"Directory: {directory}")
    print("Rules:")
    print_rules(rules)

    files = scan_with_options(directory, options, keyword=args.keyword)
    if not files:
        print("No matching files found")
        return 0
    print(f"Found {len(files)} files")

    plan = plan_remove_rename(files, rules, options)
    if plan.errors:
        print("Errors:")
        for err in plan.errors:
            print(f"  - {err}")
        return 1

    if not plan.valid_ops:
        print("No files need renaming")
        for warn in plan.warnings:
            print(f"  - {warn}")
        return 0

    print()
    print_plan(plan)

    if args.dry_run:
        print("\n[Preview mode] Will not actually execute")
        return 0

    if not args.yes:
        confirm = input("\nConfirm execution? (y/N): ").strip().lower()
        if confirm != 'y':
            print("Cancelled")
            return 0

    print("\nExecuting...")
    result = execute_rename(plan)
    print(result.summary())

    return 0 if result.failed_count == 0 else 1


def cmd_rules(args) -> int:
    """Handle rules command"""
    rules = load_rules(Path(args.file))
    print(f"{args.file}: {len(rules)} rules")
    print_rules(rules)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.command is None:
        return interactive_mode()

    commands = {
        "preview": cmd_preview,
        "remove": cmd_remove,
        "rules": cmd_rules,
    }
    try:
        return commands[args.command](args)
    except RuleFileError as e:
        print(f"Error: {e}")
        return 1
    except ValueError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
