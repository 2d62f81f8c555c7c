"""
cli_interactive.py - Interactive CLI

Provides a menu-style interactive interface
"""

import os
from pathlib import Path
from typing import List, Optional

from rules import (
    RemovalRule, RemovePosition, RenameOptions, RuleFileError,
    execute_rename, load_rules, plan_remove_rename, preview_names,
    save_rules, scan_with_options,
)


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def print_header(title: str):
    print()
    print("=" * 60)
    print(f"  {title}")
    print("=" * 60)
    print()


def pause():
    input("Press Enter to return...")


def input_directory(prompt: str = "Please enter directory path") -> Optional[Path]:
    """Input and validate directory"""
    while True:
        path_str = input(f"{prompt} (q to return): ").strip()
        if path_str.lower() == 'q':
            return None

        path = Path(path_str).expanduser().resolve()
        if path.is_dir():
            return path
        print(f"Error: Directory does not exist: {path}")


def input_choice(prompt: str, choices: List[str], default: Optional[str] = None) -> Optional[str]:
    """Input choice"""
    choices_str = "/".join(choices)
    default_str = f" [{default}]" if default else ""

    while True:
        value = input(f"{prompt} ({choices_str}){default_str}: ").strip()
        if not value and default:
            return default
        if value.lower() == 'q':
            return None
        if value in choices:
            return value
        print(f"Invalid choice, please enter: {choices_str}")


def input_bool(prompt: str, default: bool = False) -> bool:
    """Input boolean value"""
    default_str = "Y/n" if default else "y/N"
    value = input(f"{prompt} ({default_str}): ").strip().lower()
    if not value:
        return default
    return value == 'y'


def input_rule() -> Optional[RemovalRule]:
    """Prompt for one rule; empty text ends input"""
    # Not stripped: leading/trailing spaces are valid text to remove
    text = input("Text to remove (leave empty to finish): ")
    if not text:
        return None

    position = input_choice(
        "Remove which occurrence", [p.value for p in RemovePosition], RemovePosition.ALL.value
    )
    if position is None:
        return None

    return RemovalRule(
        target_text=text,
        position=RemovePosition.parse(position),
        case_sensitive=input_bool("Case sensitive", default=True),
        ignore_extension=input_bool("Keep file extension unchanged", default=True),
    )


def input_rules() -> List[RemovalRule]:
    """Build a rule list from a file and/or prompts"""
    rules: List[RemovalRule] = []

    path_str = input("Rule file to load (leave empty to skip): ").strip()
    if path_str:
        try:
            rules.extend(load_rules(Path(path_str).expanduser()))
            print(f"Loaded {len(rules)} rules")
        except RuleFileError as e:
            print(f"Error: {e}")

    print("\nAdd rules (applied in order):")
    while True:
        rule = input_rule()
        if rule is None:
            break
        rules.append(rule)
        print(f"  + {rule.describe()}")

    if rules and input_bool("Save these rules to a file", default=False):
        target = input("File path: ").strip()
        if target:
            path = save_rules(rules, Path(target).expanduser())
            print(f"Saved to {path}")

    return rules


def menu_preview_names():
    """Preview names menu"""
    print_header("Preview Names")

    rules = input_rules()
    if not rules:
        print("No rules given")
        pause()
        return

    print("\nEnter names one per line, empty line to finish:")
    names = []
    while True:
        name = input("> ")
        if not name:
            break
        names.append(name)

    print("-" * 70)
    for old, new in preview_names(names, rules):
        print(f"  {old:<30} -> {new}")
    print("-" * 70)
    pause()


def menu_remove_in_directory():
    """Remove text from file names menu"""
    print_header("Remove Text From File Names")

    directory = input_directory("Please enter target directory")
    if directory is None:
        return

    options = RenameOptions(
        recursive=input_bool("Include subdirectories", default=True),
        include_hidden=input_bool("Include hidden files", default=False),
    )
    keyword = input("Only names containing (leave empty to match all): ").strip()

    print(f"\nScanning {directory} ...")
    files = scan_with_options(directory, options, keyword=keyword)
    if not files:
        print("No matching files found")
        pause()
        return
    print(f"Found {len(files)} files\n")

    rules = input_rules()

    print("\nGenerating rename plan...")
    plan = plan_remove_rename(files, rules, options)

    if plan.errors:
        print("\nErrors:")
        for err in plan.errors:
            print(f"  - {err}")
        pause()
        return

    if not plan.valid_ops:
        print("No files need renaming")
        pause()
        return

    print(f"\nWill perform {plan.total_count} rename operations:")
    print("-" * 70)
    for op in plan.valid_ops[:15]:
        note = " [Conflict resolution]" if op.note else ""
        print(f"  {op.src.name:<30} -> {op.dst.name}{note}")
    if len(plan.valid_ops) > 15:
        print(f"  ... and {len(plan.valid_ops) - 15} more operations")
    print("-" * 70)

    if plan.conflict_count > 0:
        print(f"Note: {plan.conflict_count} files automatically renamed due to conflicts (adding _1, _2...)")
    for warn in plan.warnings:
        print(f"Warning: {warn}")

    print()
    if not input_bool("Confirm execution", default=False):
        print("Cancelled")
        pause()
        return

    print("\nExecuting...")
    result = execute_rename(plan, dry_run=False)
    print()
    print(result.summary())

    input("\nPress Enter to return...")


def menu_show_rule_file():
    """Show rule file menu"""
    print_header("Show Rule File")

    path_str = input("Rule file path (q to return): ").strip()
    if not path_str or path_str.lower() == 'q':
        return

    try:
        rules = load_rules(Path(path_str).expanduser())
    except RuleFileError as e:
        print(f"Error: {e}")
        pause()
        return

    print(f"\n{len(rules)} rules:")
    for i, rule in enumerate(rules, 1):
        print(f"  {i}. {rule.describe()}")
    print()
    pause()


def interactive_mode() -> int:
    """Interactive mode main loop"""
    while True:
        clear_screen()
        print_header("Batch Rename Tool - Remove Text")

        print("Please select function:")
        print()
        print("  1. Preview rules on names")
        print("  2. Remove text from file names")
        print("  3. Show rule file")
        print()
        print("  q. Exit")
        print()

        choice = input("Please select (1/2/3/q): ").strip().lower()

        if choice == 'q':
            print("Goodbye!")
            return 0
        elif choice == '1':
            menu_preview_names()
        elif choice == '2':
            menu_remove_in_directory()
        elif choice == '3':
            menu_show_rule_file()
        else:
            print("Invalid choice")
            input("Press Enter to continue...")


if __name__ == "__main__":
    interactive_mode()
