import logging
import re

import pytest

from rules import (
    RemovePosition,
    contains,
    find_occurrences,
    is_valid_filename,
    remove_occurrences,
    split_extension,
)
from rules import text_match


# --- split_extension ---


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("a.txt", ("a", ".txt")),
        ("archive.tar.gz", ("archive.tar", ".gz")),
        (".bashrc", (".bashrc", "")),
        ("..bashrc", (".", ".bashrc")),
        (".config.json", (".config", ".json")),
        ("nodot", ("nodot", "")),
        ("notes.", ("notes.", "")),
        (".", (".", "")),
        ("..", ("..", "")),
        ("", ("", "")),
    ],
)
def test_split_extension(name: str, expected: tuple) -> None:
    assert split_extension(name) == expected


def test_split_extension_disabled() -> None:
    assert split_extension("archive.tar.gz", ignore_extension=False) == ("archive.tar.gz", "")


# --- find_occurrences ---


def test_find_occurrences_is_non_overlapping() -> None:
    assert find_occurrences("aaaa", "aa") == [(0, 2), (2, 4)]
    assert find_occurrences("aaa", "aa") == [(0, 2)]


def test_find_occurrences_ignore_case_spans_refer_to_original() -> None:
    assert find_occurrences("xAbYaB", "ab", case_sensitive=False) == [(1, 3), (4, 6)]


def test_find_occurrences_empty_target() -> None:
    assert find_occurrences("abc", "") == []


# --- remove_occurrences ---


@pytest.mark.parametrize(
    ("position", "expected"),
    [
        (RemovePosition.ALL, "__"),
        (RemovePosition.FIRST, "_Ab_aB"),
        (RemovePosition.LAST, "ab_Ab_"),
    ],
)
def test_remove_occurrences_ignore_case(position: RemovePosition, expected: str) -> None:
    assert remove_occurrences("ab_Ab_aB", "AB", position, case_sensitive=False) == expected


def test_remove_occurrences_does_not_rescan_joined_text() -> None:
    assert remove_occurrences("aabb", "ab") == "ab"


@pytest.mark.parametrize("position", list(RemovePosition))
def test_matcher_failure_leaves_text_unchanged(
    position: RemovePosition, monkeypatch, caplog
) -> None:
    def _fail(target: str, case_sensitive: bool = True):
        raise re.error("pattern too large")

    monkeypatch.setattr(text_match, "compile_literal", _fail)

    with caplog.at_level(logging.WARNING, logger="rules.text_match"):
        result = remove_occurrences("ABCabc", "abc", position, case_sensitive=False)

    assert result == "ABCabc"
    assert "Cannot match" in caplog.text


def test_case_sensitive_matching_does_not_need_regex(monkeypatch) -> None:
    def _fail(target: str, case_sensitive: bool = True):
        raise AssertionError("regex should not be used")

    monkeypatch.setattr(text_match, "compile_literal", _fail)

    assert remove_occurrences("abcabc", "abc", RemovePosition.LAST) == "abc"


# --- contains ---


def test_contains() -> None:
    assert contains("Holiday.JPG", "")
    assert contains("Holiday.JPG", "day")
    assert not contains("Holiday.JPG", "jpg")
    assert contains("Holiday.JPG", "jpg", case_sensitive=False)


# --- is_valid_filename ---


@pytest.mark.parametrize(
    "name",
    ["", ".", "..", "a/b", "a:b", "name.", "name ", "CON", "con.txt", "x" * 256],
)
def test_is_valid_filename_rejects(name: str) -> None:
    valid, error = is_valid_filename(name)

    assert not valid
    assert error


@pytest.mark.parametrize("name", ["a.txt", ".txt", ".bashrc", "archive..gz", "console.txt"])
def test_is_valid_filename_accepts(name: str) -> None:
    assert is_valid_filename(name) == (True, None)


def test_remove_occurrences_rejects_unknown_position() -> None:
    with pytest.raises(ValueError):
        remove_occurrences("abcabc", "abc", "first")  # type: ignore[arg-type]
