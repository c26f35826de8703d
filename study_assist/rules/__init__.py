"""Rules package."""

from collections.abc import Callable
from dataclasses import dataclass

from study_assist.rules.base import DocumentRule, Finding, LineRule, Rule
from study_assist.rules.deferred_markers import DeferredMarkersRule
from study_assist.rules.line_length import LineLengthRule
from study_assist.rules.magic_numbers import MagicNumbersRule
from study_assist.rules.unused_declarations import UnusedDeclarationsRule


@dataclass(frozen=True, slots=True)
class RuleInfo:
    """Rule metadata for listing and selection."""

    rule_id: str
    name: str
    description: str
    category: str
    scope: str


@dataclass(frozen=True, slots=True)
class _RuleSpec:
    rule_id: str
    factory: Callable[[], Rule]
    name: str
    description: str
    category: str
    scope: str


def default_rules() -> list[Rule]:
    """Return the built-in rule set in evaluation order."""
    return build_rules()


def build_rules(
    *,
    enabled_rule_ids: list[str] | None = None,
    disabled_rule_ids: list[str] | None = None,
) -> list[Rule]:
    """Build rule instances applying enable/disable filters."""
    specs = _ordered_rule_specs()
    registry = {spec.rule_id: spec for spec in specs}
    disabled_set = set(disabled_rule_ids or [])
    requested_ids = set(enabled_rule_ids or []) | disabled_set

    unknown = [rule_id for rule_id in requested_ids if rule_id not in registry]
    if unknown:
        joined = ", ".join(sorted(unknown))
        raise ValueError(f"Unknown rule ids: {joined}")

    if enabled_rule_ids is None:
        selected = [spec.rule_id for spec in specs]
    else:
        # Registry order is kept so findings on one line stay in a stable order.
        wanted = set(enabled_rule_ids)
        selected = [spec.rule_id for spec in specs if spec.rule_id in wanted]

    return [registry[rule_id].factory() for rule_id in selected if rule_id not in disabled_set]


def list_rule_info() -> list[RuleInfo]:
    """Return metadata for every built-in rule."""
    return [
        RuleInfo(
            rule_id=spec.rule_id,
            name=spec.name,
            description=spec.description,
            category=spec.category,
            scope=spec.scope,
        )
        for spec in _ordered_rule_specs()
    ]


def _ordered_rule_specs() -> list[_RuleSpec]:
    return [
        _spec(LineLengthRule, category="style"),
        _spec(MagicNumbersRule, category="maintainability"),
        _spec(UnusedDeclarationsRule, category="correctness"),
        _spec(DeferredMarkersRule, category="maintainability"),
    ]


def _spec(rule_cls: type[LineRule] | type[DocumentRule], *, category: str) -> _RuleSpec:
    return _RuleSpec(
        rule_id=rule_cls.rule_id,
        factory=rule_cls,
        name=rule_cls.__name__,
        description=(rule_cls.__doc__ or "").strip(),
        category=category,
        scope="document" if issubclass(rule_cls, DocumentRule) else "line",
    )


__all__ = [
    "Finding",
    "Rule",
    "RuleInfo",
    "build_rules",
    "default_rules",
    "list_rule_info",
]
