"""Question answering path.

Answer and explanation are fixed templates; the generated answer for a
question comes from the workflow's text generator, not from here.
"""

from __future__ import annotations

from dataclasses import dataclass

from study_assist.classify import detect_subject
from study_assist.estimate import assess_difficulty, subject_confidence
from study_assist.guidance import related_concepts_for

ANSWER_TEMPLATE = (
    '这是关于{subject}的问题"{question}"的详细答案。'
    "在实际实现中，这里会调用AI模型来生成准确、详细的答案。"
)
EXPLANATION_TEMPLATE = (
    "解题思路：首先分析问题的核心要点，然后按照{subject}的相关原理和方法来逐步解答。"
    "在实际实现中，这里会提供详细的解题步骤和思路分析。"
)


@dataclass(frozen=True, slots=True)
class QaResult:
    subject: str
    answer: str
    explanation: str
    related_concepts: tuple[str, ...]
    difficulty: str
    confidence: float


def answer_question(
    question: str,
    subject: str | None = None,
    difficulty: str | None = None,
) -> QaResult:
    """Classify a question and fill in the answer templates."""
    resolved_subject = subject or detect_subject(question)
    return QaResult(
        subject=resolved_subject,
        answer=ANSWER_TEMPLATE.format(subject=resolved_subject, question=question),
        explanation=EXPLANATION_TEMPLATE.format(subject=resolved_subject),
        related_concepts=tuple(related_concepts_for(resolved_subject)),
        difficulty=difficulty or assess_difficulty(question),
        confidence=subject_confidence(resolved_subject),
    )
