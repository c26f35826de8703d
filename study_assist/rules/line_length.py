"""Overlong line rule."""

from __future__ import annotations

from study_assist.rules.base import LineRule
from study_assist.source import SourceCode

MAX_LINE_LENGTH = 120


class LineLengthRule(LineRule):
    """Flags lines longer than 120 characters."""

    rule_id = "line_length"
    type = "warning"
    severity = "medium"
    message = "行长度超过120个字符"
    suggestion = "考虑将长行拆分为多行以提高可读性"

    def matches(self, line: str, source: SourceCode) -> bool:
        return len(line) > MAX_LINE_LENGTH
