"""Code sample primitives shared by the review rules and estimators."""

from __future__ import annotations

from dataclasses import dataclass

COMMENT_PREFIXES = ("//", "#", "/*", "*")


@dataclass(frozen=True, slots=True)
class CodeStats:
    """Line counts measured over a code sample."""

    total_lines: int
    comment_lines: int
    code_lines: int
    comment_ratio: float


@dataclass(frozen=True, slots=True)
class SourceCode:
    """A code sample submitted for review, tagged with its language."""

    text: str
    language: str = "unknown"

    @property
    def lines(self) -> list[str]:
        """Lines split on ``\\n``; an empty sample is a single empty line."""
        return self.text.split("\n")


def measure(text: str) -> CodeStats:
    """Count total and comment lines."""
    lines = text.split("\n")
    total = len(lines)
    comments = sum(1 for line in lines if line.strip().startswith(COMMENT_PREFIXES))
    return CodeStats(
        total_lines=total,
        comment_lines=comments,
        code_lines=total - comments,
        comment_ratio=comments / total,
    )
