"""Prompt text sent to the text generator."""

from __future__ import annotations

from study_assist.classify import REQUEST_TYPE_CODE_REVIEW

CODE_REVIEW_PREFIX = "请审查以下代码并提供改进建议：\n\n"

STUDY_ASSISTANT_INSTRUCTIONS = "\n".join(
    [
        "你是一个专业的学习助手，专门帮助学生和自学者解决学习问题。",
        "",
        "你的主要功能包括：",
        "1. 智能问答：回答各种学科问题，包括数学、物理、化学、编程等",
        "2. 代码审查：分析代码质量，提供优化建议和最佳实践指导",
        "",
        "回答要求：",
        "- 提供详细、准确的答案和解释",
        "- 使用清晰、易懂的语言",
        "- 给出解题思路和步骤",
        "- 推荐相关知识点和学习资源",
        "- 对于代码问题，提供具体的改进建议",
        "- 保持专业、友好的态度",
        "",
        "记住用户的学习历史，提供个性化的学习建议。",
    ]
)


def build_outbound_prompt(user_input: str, request_type: str) -> str:
    """Prefix code-review requests with the review instruction."""
    if request_type == REQUEST_TYPE_CODE_REVIEW:
        return f"{CODE_REVIEW_PREFIX}{user_input}"
    return user_input
