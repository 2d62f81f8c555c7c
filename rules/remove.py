"""
remove.py - Removal Rule Evaluation

remove() applies one rule to a name, remove_all() folds a rule list over
it left to right. Both are pure and never raise for string input.
"""

from functools import reduce
from typing import Iterable

from .extension import split_extension
from .models_rule import RemovalRule
from .text_match import remove_occurrences


def remove(name: str, rule: RemovalRule) -> str:
    """
    Apply a single removal rule

    Args:
        name: Input name (a single name component)
        rule: Rule to apply

    Returns:
        New name, never longer than the input
    """
    if not rule.target_text:
        return name

    stem, suffix = split_extension(name, rule.ignore_extension)

    # Nothing to remove from
    if not stem:
        return suffix

    new_stem = remove_occurrences(stem, rule.target_text, rule.position, rule.case_sensitive)
    return new_stem + suffix


def remove_all(name: str, rules: Iterable[RemovalRule]) -> str:
    """
    Apply rules in order, each one seeing the previous rule's output

    Args:
        name: Input name
        rules: Ordered rules (empty leaves the name unchanged)

    Returns:
        New name
    """
    return reduce(remove, rules, name)
