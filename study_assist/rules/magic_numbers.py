"""Hard-coded number rule.

Any standalone run of four or more digits counts, so years, ports and ids
are reported too. Lines carrying a ``//`` comment are skipped.
"""

from __future__ import annotations

import re

from study_assist.rules.base import LineRule
from study_assist.source import SourceCode

DIGIT_RUN_RE = re.compile(r"\b[0-9]{4,}\b", re.ASCII)


class MagicNumbersRule(LineRule):
    """Flags long numeric literals that are not explained by a comment."""

    rule_id = "magic_numbers"
    type = "suggestion"
    severity = "low"
    message = "发现可能的魔法数字"
    suggestion = "考虑将数字定义为常量以提高代码可维护性"

    def matches(self, line: str, source: SourceCode) -> bool:
        return DIGIT_RUN_RE.search(line) is not None and "//" not in line
