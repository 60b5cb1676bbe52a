"""
RegexValidator - implements the "regex" and "email" rules.
"""

import re
from re import Pattern
from typing import Any

from .base_validator import BaseValidator

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

DELIMITED_FLAGS = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL, "x": re.VERBOSE}


class RegexValidator(BaseValidator):
    """
    Fails when the pattern is not found in the value's text form.

    The match is a search: authors anchor with ^ and $ for a full match.
    Patterns may be written bare ("^[a-z]+$") or delimited with trailing
    flags ("/^[a-z]+$/i").

    Parameters:
    - pattern: Pattern text or a compiled Pattern
    - flags: Extra re flags OR-ed with any delimited flags
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        self.pattern: Pattern = self._compile(self.parameters.get("pattern"), self.parameters.get("flags", 0))

    @staticmethod
    def _compile(pattern: Any, flags: int) -> Pattern:
        if isinstance(pattern, Pattern):
            return pattern
        if not isinstance(pattern, str) or not pattern:
            raise ValueError("RegexValidator requires a non-empty 'pattern' parameter")

        body, delimited_flags = _strip_delimiters(pattern)
        try:
            return re.compile(body, flags | delimited_flags)
        except re.error as e:
            raise ValueError(f"Invalid regex pattern {pattern!r}: {e}") from e

    def check(self, value: Any, record: dict[str, Any]) -> None:
        text = str(value)
        if self.pattern.search(text) is None:
            raise self.violation(f"{text!r} does not match {self.pattern.pattern!r}")

    @property
    def rule_type(self) -> str:
        return "regex"


def _strip_delimiters(pattern: str) -> tuple[str, int]:
    """Split "/body/flags" into the body and re flags; bare patterns pass through."""
    if len(pattern) < 2 or pattern[0] != "/":
        return pattern, 0

    end = pattern.rfind("/")
    if end == 0:
        return pattern, 0

    suffix = pattern[end + 1:]
    if any(ch not in DELIMITED_FLAGS for ch in suffix):
        return pattern, 0

    flags = 0
    for ch in suffix:
        flags |= DELIMITED_FLAGS[ch]
    return pattern[1:end], flags
