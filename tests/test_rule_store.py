import json
from pathlib import Path

import pytest

from rules import (
    InvalidRuleFileError,
    RemovalRule,
    RemovePosition,
    RuleFileError,
    RuleFileNotFoundError,
    RuleFormatError,
    dumps_rules,
    load_rules,
    loads_rules,
    save_rules,
)


# --- RemovePosition ---


@pytest.mark.parametrize("value", ["All", "all", "ALL", " all ", RemovePosition.ALL])
def test_position_parse_is_case_insensitive(value) -> None:
    assert RemovePosition.parse(value) is RemovePosition.ALL


@pytest.mark.parametrize("value", ["middle", "", None, 1])
def test_position_parse_rejects_unknown(value) -> None:
    with pytest.raises(RuleFormatError):
        RemovePosition.parse(value)


# --- RemovalRule ---


def test_rule_is_immutable() -> None:
    rule = RemovalRule("abc")

    with pytest.raises(AttributeError):
        rule.target_text = "x"  # type: ignore[misc]


def test_rule_defaults() -> None:
    rule = RemovalRule("abc")

    assert rule.position is RemovePosition.ALL
    assert rule.case_sensitive is True
    assert rule.ignore_extension is True
    assert not rule.is_noop
    assert RemovalRule("").is_noop


def test_rule_to_dict() -> None:
    rule = RemovalRule("abc", RemovePosition.LAST, case_sensitive=False, ignore_extension=False)

    assert rule.to_dict() == {
        "target_text": "abc",
        "position": "last",
        "case_sensitive": False,
        "ignore_extension": False,
    }
    assert RemovalRule.from_dict(rule.to_dict()) == rule


def test_rule_from_dict_accepts_legacy_keys() -> None:
    data = {"text": "a", "remove_position": "First", "case_sensitive": True, "ignore_extension": False}

    rule = RemovalRule.from_dict(data)

    assert rule == RemovalRule("a", RemovePosition.FIRST, case_sensitive=True, ignore_extension=False)


def test_rule_from_dict_fills_defaults() -> None:
    assert RemovalRule.from_dict({"target_text": "a"}) == RemovalRule("a")


@pytest.mark.parametrize(
    "data",
    [
        [],
        {},
        {"target_text": 1},
        {"target_text": "a", "case_sensitive": "yes"},
        {"target_text": "a", "ignore_extension": None},
        {"target_text": "a", "position": "sometimes"},
    ],
)
def test_rule_from_dict_rejects_bad_data(data) -> None:
    with pytest.raises(RuleFormatError):
        RemovalRule.from_dict(data)


def test_rule_describe() -> None:
    rule = RemovalRule("_copy", RemovePosition.FIRST, case_sensitive=False)

    assert rule.describe() == "remove first '_copy' (ignore case, keep extension)"


# --- rule files ---


def test_save_and_load_rules(tmp_path: Path) -> None:
    rules = [
        RemovalRule("(1)"),
        RemovalRule("Copy of ", RemovePosition.FIRST, case_sensitive=False),
        RemovalRule(".bak", RemovePosition.LAST, ignore_extension=False),
    ]
    path = tmp_path / "nested" / "rules.json"

    saved = save_rules(rules, path)

    assert saved == path
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["version"] == 1
    assert len(data["rules"]) == 3
    assert load_rules(path) == rules


def test_save_rules_keeps_non_ascii_text(tmp_path: Path) -> None:
    path = tmp_path / "rules.json"

    save_rules([RemovalRule("副本")], path)

    assert "副本" in path.read_text(encoding="utf-8")


def test_loads_rules_accepts_bare_list() -> None:
    text = json.dumps([{"text": "a", "remove_position": "All", "case_sensitive": True, "ignore_extension": True}])

    assert loads_rules(text) == [RemovalRule("a")]


def test_dumps_rules_empty() -> None:
    assert loads_rules(dumps_rules([])) == []


def test_load_rules_missing_file(tmp_path: Path) -> None:
    path = tmp_path / "missing.json"

    with pytest.raises(RuleFileNotFoundError) as exc_info:
        load_rules(path)

    assert exc_info.value.path == path
    assert "does not exist" in str(exc_info.value)


def test_load_rules_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text("{bad json", encoding="utf-8")

    with pytest.raises(InvalidRuleFileError) as exc_info:
        load_rules(path)

    assert exc_info.value.path == path
    assert isinstance(exc_info.value, RuleFileError)


@pytest.mark.parametrize(
    ("document", "detail"),
    [
        ({"version": 2, "rules": []}, "unsupported version"),
        ({"version": 1}, "'rules' must be a list"),
        ({"version": 1, "rules": [{"target_text": "a"}, {"target_text": 5}]}, "rule 1"),
        ("just text", "'rules' must be a list"),
    ],
)
def test_loads_rules_schema_errors(document, detail: str) -> None:
    with pytest.raises(InvalidRuleFileError) as exc_info:
        loads_rules(json.dumps(document))

    assert detail in exc_info.value.detail


def test_load_rules_non_utf8_file(tmp_path: Path) -> None:
    path = tmp_path / "latin1.json"
    path.write_bytes(b'[{"target_text": "\xff"}]')

    with pytest.raises(InvalidRuleFileError) as exc_info:
        load_rules(path)

    assert exc_info.value.path == path
    assert "utf-8" in exc_info.value.detail


@pytest.mark.parametrize("version", [True, 1.0, "1"])
def test_loads_rules_version_must_be_integer(version) -> None:
    with pytest.raises(InvalidRuleFileError) as exc_info:
        loads_rules(json.dumps({"version": version, "rules": []}))

    assert "unsupported version" in exc_info.value.detail


def test_rule_position_accepts_stored_spelling() -> None:
    assert RemovalRule("a", "First").position is RemovePosition.FIRST  # type: ignore[arg-type]


def test_rule_rejects_unknown_position() -> None:
    with pytest.raises(RuleFormatError):
        RemovalRule("a", "middle")  # type: ignore[arg-type]
