import json
from pathlib import Path

import pytest

from cli import main
from cli import cli_interactive
from rules import RemovalRule, RemovePosition, load_rules, save_rules


def _touch(directory: Path, *names: str) -> None:
    for name in names:
        (directory / name).write_text(name, encoding="utf-8")


# --- preview ---


def test_cli_preview(capsys) -> None:
    exit_code = main(["preview", "a.txt", "b.txt", "--text", "a"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "a.txt -> .txt" in out
    assert "b.txt -> b.txt  (unchanged)" in out


def test_cli_preview_rule_options(capsys) -> None:
    exit_code = main([
        "preview", "ABC_abc.ABC",
        "-t", "abc", "--position", "last", "--ignore-case", "--include-extension",
    ])

    assert exit_code == 0
    assert "ABC_abc.ABC -> ABC_abc." in capsys.readouterr().out


def test_cli_preview_applies_texts_in_order(capsys) -> None:
    exit_code = main(["preview", "123abc456.txt"] + [arg for n in "123456" for arg in ("-t", n)])

    assert exit_code == 0
    assert "123abc456.txt -> abc.txt" in capsys.readouterr().out


def test_cli_preview_without_rules(capsys) -> None:
    exit_code = main(["preview", "a.txt"])

    assert exit_code == 1
    assert "No removal rule" in capsys.readouterr().out


def test_cli_requires_names() -> None:
    with pytest.raises(SystemExit):
        main(["preview", "--text", "a"])


# --- rule files ---


def test_cli_save_and_reuse_rules(tmp_path: Path, capsys) -> None:
    rules_path = tmp_path / "rules.json"

    main(["preview", "x", "-t", "_copy", "-i", "--save-rules", str(rules_path)])

    assert load_rules(rules_path) == [RemovalRule("_copy", case_sensitive=False)]

    exit_code = main(["preview", "IMG_COPY.jpg", "--rules-file", str(rules_path), "-t", "IMG"])

    assert exit_code == 0
    assert "IMG_COPY.jpg -> .jpg" in capsys.readouterr().out


def test_cli_rules_command(tmp_path: Path, capsys) -> None:
    rules_path = save_rules([RemovalRule("(1)", RemovePosition.FIRST)], tmp_path / "rules.json")

    exit_code = main(["rules", str(rules_path)])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "1 rules" in out
    assert "remove first '(1)' (keep extension)" in out


def test_cli_missing_rules_file(tmp_path: Path, capsys) -> None:
    exit_code = main(["rules", str(tmp_path / "missing.json")])

    assert exit_code == 1
    assert "Rule file does not exist" in capsys.readouterr().out


def test_cli_invalid_rules_file(tmp_path: Path, capsys) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"rules": [{"target_text": "a", "position": "middle"}]}), encoding="utf-8")

    exit_code = main(["preview", "a", "--rules-file", str(path)])

    assert exit_code == 1
    assert "rule 0" in capsys.readouterr().out


# --- remove ---


def test_cli_remove_dry_run(tmp_path: Path, capsys) -> None:
    _touch(tmp_path, "a_copy.txt")

    exit_code = main(["remove", str(tmp_path), "-t", "_copy", "--dry-run"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Preview mode" in out
    assert (tmp_path / "a_copy.txt").exists()


def test_cli_remove_executes_with_yes(tmp_path: Path, capsys) -> None:
    _touch(tmp_path, "a_copy.txt", "b.txt")
    (tmp_path / "sub").mkdir()
    _touch(tmp_path / "sub", "c_copy.txt")

    exit_code = main(["remove", str(tmp_path), "-t", "_copy", "--yes"])

    assert exit_code == 0
    assert (tmp_path / "a.txt").exists()
    assert (tmp_path / "sub" / "c.txt").exists()
    assert "Success: 2" in capsys.readouterr().out


def test_cli_remove_no_recursive(tmp_path: Path) -> None:
    _touch(tmp_path, "a_copy.txt")
    (tmp_path / "sub").mkdir()
    _touch(tmp_path / "sub", "c_copy.txt")

    exit_code = main(["remove", str(tmp_path), "-t", "_copy", "--yes", "--no-recursive"])

    assert exit_code == 0
    assert (tmp_path / "a.txt").exists()
    assert (tmp_path / "sub" / "c_copy.txt").exists()


def test_cli_remove_cancelled(tmp_path: Path, monkeypatch, capsys) -> None:
    _touch(tmp_path, "a_copy.txt")
    monkeypatch.setattr("builtins.input", lambda prompt="": "n")

    exit_code = main(["remove", str(tmp_path), "-t", "_copy"])

    assert exit_code == 0
    assert "Cancelled" in capsys.readouterr().out
    assert (tmp_path / "a_copy.txt").exists()


def test_cli_remove_missing_directory(tmp_path: Path, capsys) -> None:
    exit_code = main(["remove", str(tmp_path / "missing"), "-t", "x"])

    assert exit_code == 1
    assert "Directory does not exist" in capsys.readouterr().out


def test_cli_remove_nothing_to_do(tmp_path: Path, capsys) -> None:
    _touch(tmp_path, "a.txt")

    exit_code = main(["remove", str(tmp_path), "-t", "zzz"])

    assert exit_code == 0
    assert "No files need renaming" in capsys.readouterr().out


def test_cli_remove_writes_logs(tmp_path: Path) -> None:
    work = tmp_path / "work"
    work.mkdir()
    _touch(work, "a_copy.txt")

    exit_code = main(["remove", str(work), "-t", "_copy", "-y", "--log-dir", str(tmp_path / "logs")])

    assert exit_code == 0
    assert len(list((tmp_path / "logs").glob("rename_result_*.json"))) == 1


# --- interactive ---


def test_interactive_input_rules(monkeypatch) -> None:
    answers = iter([
        "",         # no rule file
        " (1)",     # text
        "first",    # position
        "n",        # case sensitive
        "",         # keep extension (default yes)
        "",         # finish
        "n",        # do not save
    ])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))

    rules = cli_interactive.input_rules()

    assert rules == [RemovalRule(" (1)", RemovePosition.FIRST, case_sensitive=False, ignore_extension=True)]
