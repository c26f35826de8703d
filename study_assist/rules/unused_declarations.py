"""Declaration-without-assignment rule for JavaScript."""

from __future__ import annotations

from study_assist.rules.base import LineRule
from study_assist.source import SourceCode


class UnusedDeclarationsRule(LineRule):
    """Flags JavaScript ``const`` lines that never assign a value."""

    rule_id = "unused_declarations"
    type = "warning"
    severity = "medium"
    message = "可能的未使用变量"
    suggestion = "检查变量是否被使用，如果未使用请删除"

    def matches(self, line: str, source: SourceCode) -> bool:
        return source.language == "javascript" and "const " in line and "=" not in line
