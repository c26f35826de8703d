"""Output rendering."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any

import click

from study_assist import __version__
from study_assist.qa import QaResult
from study_assist.review import ReviewResult
from study_assist.rules.base import Finding
from study_assist.workflow import AssistantReply

_SEVERITY_COLORS = {"high": "red", "medium": "yellow", "low": "cyan"}

# Display-only bands for the score heading; they do not affect the score.
GOOD_SCORE_AT = 85
FAIR_SCORE_AT = 70


def render_review_human(result: ReviewResult) -> str:
    """Render a compact colorized review summary."""
    label, color = _score_label(result.overall_score)
    lines: list[str] = [
        click.style(
            f"Overall quality score: {result.overall_score}/100 ({label})",
            fg=color,
            bold=True,
        ),
        f"Language: {result.language}",
        (
            f"Lines: {result.stats.total_lines} total, "
            f"{result.stats.comment_lines} comment ({result.stats.comment_ratio:.0%})"
        ),
    ]

    if result.issues:
        lines.append(click.style("Issues:", bold=True))
        for index, issue in enumerate(result.issues, start=1):
            lines.append(f"{index}. {_issue_heading(issue)} {issue.message}")
            lines.append(f"   suggestion: {issue.suggestion}")
    else:
        lines.append("No issues found.")

    complexity = result.complexity
    lines.append(click.style("Complexity:", bold=True))
    lines.append(
        f"- cyclomatic {complexity.cyclomatic}, cognitive {complexity.cognitive}, "
        f"maintainability {complexity.maintainability}"
    )

    performance = result.performance
    lines.append(click.style("Performance:", bold=True))
    lines.append(
        f"- time {performance.time_complexity}, space {performance.space_complexity} (placeholder)"
    )
    lines.extend(f"- {hint}" for hint in performance.optimization)

    lines.append(click.style("Improvements:", bold=True))
    lines.extend(f"- {item}" for item in result.improvements)
    lines.append(click.style("Best practices:", bold=True))
    lines.extend(f"- {item}" for item in result.best_practices)
    return "\n".join(lines)


def render_qa_human(result: QaResult) -> str:
    lines = [
        click.style(f"[{result.subject}] difficulty: {result.difficulty}", bold=True),
        result.answer,
        "",
        result.explanation,
        "",
        f"Related concepts: {', '.join(result.related_concepts)}",
        f"Confidence: {result.confidence:.2f}",
    ]
    return "\n".join(lines)


def render_reply_human(reply: AssistantReply) -> str:
    lines = [reply.response]
    if reply.analysis is not None:
        lines.append("")
        heading = f"Analysis ({reply.analysis.type})"
        if reply.analysis.score is not None:
            heading += f": score {reply.analysis.score}/100"
        lines.append(click.style(heading, bold=True))
        lines.extend(f"- {item}" for item in reply.analysis.suggestions or ())
    if reply.related_topics:
        lines.append("")
        lines.append(f"Related topics: {', '.join(reply.related_topics)}")
    return "\n".join(lines)


def render_json(payload: dict[str, Any], *, command: str) -> str:
    """Render stable JSON output with a metadata block."""
    output = dict(payload)
    output["meta"] = {
        "command": command,
        "generated_at": datetime.now(tz=UTC)
        .replace(microsecond=0)
        .isoformat()
        .replace("+00:00", "Z"),
        "version": __version__,
    }
    return json.dumps(output, sort_keys=True, ensure_ascii=False)


def _issue_heading(issue: Finding) -> str:
    location = f"line {issue.line}" if issue.line is not None else "document"
    tag = click.style(f"[{issue.type}/{issue.severity}]", fg=_SEVERITY_COLORS[issue.severity])
    return f"{tag} {issue.rule_id} ({location})"


def _score_label(score: int) -> tuple[str, str]:
    if score >= GOOD_SCORE_AT:
        return ("GOOD", "green")
    if score >= FAIR_SCORE_AT:
        return ("FAIR", "yellow")
    return ("POOR", "red")
