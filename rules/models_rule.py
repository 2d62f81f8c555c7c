"""
models_rule.py - Removal Rule Definitions

Contains:
- RemovePosition: Which occurrence(s) a rule removes
- RemovalRule: A single immutable removal operation
- RuleSet: Ordered sequence of rules, applied one after another
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Sequence

from .errors import RuleFormatError


class RemovePosition(Enum):
    """Occurrence selection"""
    ALL = "all"        # Remove every occurrence
    FIRST = "first"    # Remove the left-most occurrence
    LAST = "last"      # Remove the right-most occurrence

    @classmethod
    def parse(cls, value: Any) -> "RemovePosition":
        """
        Convert a stored value to a position

        Accepts enum members and names/values in any case ("All", "first", "LAST").

        Raises:
            RuleFormatError: Unknown position
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if member.value == key:
                    return member
        raise RuleFormatError(f"Unknown remove position: {value!r}")


@dataclass(frozen=True)
class RemovalRule:
    """Removal rule"""
    target_text: str                                # Text to remove (empty = no-op)
    position: RemovePosition = RemovePosition.ALL   # Which occurrence(s)
    case_sensitive: bool = True                     # Exact case matching
    ignore_extension: bool = True                   # Leave the trailing extension untouched

    def __post_init__(self):
        # Stored spellings such as "first" become enum members; anything else is rejected
        object.__setattr__(self, "position", RemovePosition.parse(self.position))

    @property
    def is_noop(self) -> bool:
        """Whether the rule can never change a name"""
        return not self.target_text

    def describe(self) -> str:
        """Short human readable description"""
        flags = []
        if not self.case_sensitive:
            flags.append("ignore case")
        if self.ignore_extension:
            flags.append("keep extension")
        extra = f" ({', '.join(flags)})" if flags else ""
        return f"remove {self.position.value} {self.target_text!r}{extra}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target_text": self.target_text,
            "position": self.position.value,
            "case_sensitive": self.case_sensitive,
            "ignore_extension": self.ignore_extension,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RemovalRule":
        """
        Build a rule from its dictionary form

        The keys "text" and "remove_position" are accepted as aliases of
        "target_text" and "position".

        Args:
            data: Rule dictionary

        Returns:
            Rule

        Raises:
            RuleFormatError: Missing or mistyped field
        """
        if not isinstance(data, dict):
            raise RuleFormatError(f"Rule must be an object, got {type(data).__name__}")

        text = data.get("target_text", data.get("text"))
        if not isinstance(text, str):
            raise RuleFormatError("Rule field 'target_text' must be a string")

        position = RemovePosition.parse(
            data.get("position", data.get("remove_position", RemovePosition.ALL))
        )

        case_sensitive = data.get("case_sensitive", True)
        ignore_extension = data.get("ignore_extension", True)
        for key, value in (("case_sensitive", case_sensitive), ("ignore_extension", ignore_extension)):
            if not isinstance(value, bool):
                raise RuleFormatError(f"Rule field '{key}' must be a boolean")

        return cls(
            target_text=text,
            position=position,
            case_sensitive=case_sensitive,
            ignore_extension=ignore_extension,
        )


RuleSet = Sequence[RemovalRule]
