"""
errors.py - Rule File Errors
"""

from pathlib import Path


class RuleFormatError(ValueError):
    """A single rule could not be read from its stored form"""


class RuleFileError(Exception):
    """Base error for reading or writing rule files"""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class RuleFileNotFoundError(RuleFileError):
    def __init__(self, path: Path) -> None:
        super().__init__(path=path, message="Rule file does not exist")


class InvalidRuleFileError(RuleFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid rule file ({detail})")
