"""Deferred-work marker rule."""

from __future__ import annotations

from study_assist.rules.base import DocumentRule
from study_assist.source import SourceCode

MARKERS = ("TODO", "FIXME")


class DeferredMarkersRule(DocumentRule):
    """Flags TODO/FIXME markers anywhere in the sample."""

    rule_id = "deferred_markers"
    type = "warning"
    severity = "medium"
    message = "发现TODO或FIXME标记"
    suggestion = "请及时处理TODO和FIXME标记"

    def matches(self, source: SourceCode) -> bool:
        return any(marker in source.text for marker in MARKERS)
