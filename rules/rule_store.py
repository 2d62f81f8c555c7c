"""
rule_store.py - Rule File Persistence

Rule files are JSON documents:

    {
      "version": 1,
      "rules": [
        {"target_text": "_copy", "position": "all",
         "case_sensitive": true, "ignore_extension": true}
      ]
    }

A bare list of rule objects is accepted as well.
"""

from pathlib import Path
from typing import Any, List, Optional
import json
import logging

from .errors import InvalidRuleFileError, RuleFileNotFoundError, RuleFormatError
from .models_rule import RemovalRule, RuleSet

logger = logging.getLogger(__name__)

RULE_FILE_VERSION = 1


def dumps_rules(rules: RuleSet) -> str:
    """Serialize rules to a JSON document string"""
    data = {
        "version": RULE_FILE_VERSION,
        "rules": [rule.to_dict() for rule in rules],
    }
    return json.dumps(data, ensure_ascii=False, indent=2)


def loads_rules(text: str, path: Optional[Path] = None) -> List[RemovalRule]:
    """
    Parse rules from a JSON document string

    Args:
        text: JSON text
        path: Source path, only used in error messages

    Returns:
        Rule list

    Raises:
        InvalidRuleFileError: Malformed JSON or rule
    """
    source = path if path is not None else Path("<string>")

    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidRuleFileError(source, str(e)) from e

    if isinstance(data, dict):
        version = data.get("version", RULE_FILE_VERSION)
        # bool is an int subclass, so true would otherwise pass as 1
        if type(version) is not int or version != RULE_FILE_VERSION:
            raise InvalidRuleFileError(source, f"unsupported version {version!r}")
        items = data.get("rules")
    else:
        items = data

    if not isinstance(items, list):
        raise InvalidRuleFileError(source, "'rules' must be a list")

    rules = []
    for index, item in enumerate(items):
        try:
            rules.append(RemovalRule.from_dict(item))
        except RuleFormatError as e:
            raise InvalidRuleFileError(source, f"rule {index}: {e}") from e
    return rules


def load_rules(path: Path) -> List[RemovalRule]:
    """
    Load rules from a file

    Raises:
        RuleFileNotFoundError: File does not exist
        InvalidRuleFileError: Unreadable or malformed content
    """
    path = Path(path)
    if not path.is_file():
        raise RuleFileNotFoundError(path)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidRuleFileError(path, str(e)) from e

    rules = loads_rules(text, path)
    logger.debug("Loaded %d rules from %s", len(rules), path)
    return rules


def save_rules(rules: RuleSet, path: Path) -> Path:
    """Save rules to a file, creating parent directories"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w', encoding='utf-8') as f:
        f.write(dumps_rules(rules))
        f.write("\n")

    logger.debug("Saved %d rules to %s", len(rules), path)
    return path
