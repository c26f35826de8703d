"""Tests for the built-in review rules and the rule registry."""

from __future__ import annotations

import pytest

from study_assist.rules import build_rules, default_rules, list_rule_info
from study_assist.rules.deferred_markers import DeferredMarkersRule
from study_assist.rules.line_length import LineLengthRule
from study_assist.rules.magic_numbers import MagicNumbersRule
from study_assist.rules.unused_declarations import UnusedDeclarationsRule
from study_assist.source import SourceCode


def test_line_length_rule_flags_lines_over_limit() -> None:
    rule = LineLengthRule()
    assert rule.evaluate(SourceCode("a" * 120)) == []

    findings = rule.evaluate(SourceCode("short\n" + "a" * 121))
    assert len(findings) == 1
    assert findings[0].line == 2
    assert findings[0].type == "warning"
    assert findings[0].severity == "medium"
    assert findings[0].message == "行长度超过120个字符"


def test_magic_numbers_rule_needs_standalone_four_digit_run() -> None:
    rule = MagicNumbersRule()
    findings = rule.evaluate(SourceCode("x = 1000000\ny = 999\nid_12345 = 0"))
    assert [finding.line for finding in findings] == [1]
    assert findings[0].type == "suggestion"
    assert findings[0].severity == "low"


def test_magic_numbers_rule_skips_lines_with_line_comment() -> None:
    rule = MagicNumbersRule()
    assert rule.evaluate(SourceCode("timeout = 30000 // thirty seconds")) == []


def test_unused_declarations_rule_only_applies_to_javascript() -> None:
    rule = UnusedDeclarationsRule()
    js_findings = rule.evaluate(SourceCode("const total;\nconst x = 1;", language="javascript"))
    assert [finding.line for finding in js_findings] == [1]

    assert rule.evaluate(SourceCode("const total;", language="python")) == []


def test_deferred_markers_rule_reports_once_without_line() -> None:
    rule = DeferredMarkersRule()
    findings = rule.evaluate(SourceCode("# TODO: one\n# FIXME: two"))
    assert len(findings) == 1
    assert findings[0].line is None
    assert findings[0].message == "发现TODO或FIXME标记"


def test_deferred_markers_rule_is_case_sensitive() -> None:
    assert DeferredMarkersRule().evaluate(SourceCode("# todo later")) == []


def test_default_rules_follow_registry_order() -> None:
    assert [rule.rule_id for rule in default_rules()] == [
        "line_length",
        "magic_numbers",
        "unused_declarations",
        "deferred_markers",
    ]


def test_build_rules_applies_enable_and_disable_filters() -> None:
    enabled = build_rules(enabled_rule_ids=["deferred_markers", "line_length"])
    assert [rule.rule_id for rule in enabled] == ["line_length", "deferred_markers"]

    remaining = build_rules(disabled_rule_ids=["magic_numbers"])
    assert "magic_numbers" not in {rule.rule_id for rule in remaining}
    assert len(remaining) == 3


def test_build_rules_rejects_unknown_ids() -> None:
    with pytest.raises(ValueError, match="Unknown rule ids: nope"):
        build_rules(enabled_rule_ids=["nope"])
    with pytest.raises(ValueError, match="Unknown rule ids"):
        build_rules(disabled_rule_ids=["also_nope"])


def test_list_rule_info_reports_scope_and_category() -> None:
    info = {item.rule_id: item for item in list_rule_info()}
    assert info["line_length"].scope == "line"
    assert info["line_length"].category == "style"
    assert info["deferred_markers"].scope == "document"
    assert info["unused_declarations"].category == "correctness"
    assert info["magic_numbers"].description
