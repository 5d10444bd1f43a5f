"""
Markdown documents written as Stage2 and Stage3 artifacts.

Each document starts with a short metadata header, restates the user
question, and ends with the raw LLM output under its own heading. The
finalize stage reads peer review documents back whole as review text.
"""

from typing import List

from .models import LabeledAnswer
from .prompts import format_labeled_responses


def generate_review_markdown(
    title: str,
    engine: str,
    query: str,
    labeled: List[LabeledAnswer],
    review_output: str
) -> str:
    """
    Render the peer review document.

    The anonymized responses are embedded exactly as the reviewer saw them,
    followed by the label -> model mapping so a reader can de-anonymize
    the ranking.
    """
    lines = []

    # Header
    lines.append("# Peer Review")
    lines.append(f"- title: {title}")
    lines.append(f"- engine: {engine}")
    lines.append(f"- answers reviewed: {len(labeled)}")
    lines.append("")
    lines.append("## User Question")
    lines.append(query)
    lines.append("")

    # Responses as shown to the reviewer
    lines.append("## Responses")
    lines.append(format_labeled_responses(labeled))
    lines.append("")
    lines.append("### Label Mapping")
    for item in labeled:
        lines.append(f"- {item.label}: {item.answer.model}")
    lines.append("")

    lines.append("## Review")
    lines.append(review_output)

    return "\n".join(lines)


def generate_final_markdown(
    title: str,
    engine: str,
    query: str,
    stage1_count: int,
    stage2_count: int,
    final_output: str
) -> str:
    """Render the final answer document."""
    lines = [
        "# Final Answer",
        f"- title: {title}",
        f"- engine: {engine}",
        f"- stage1 responses: {stage1_count}",
        f"- stage2 reviews: {stage2_count}",
        "",
        "## User Question",
        query,
        "",
        "## Final Answer",
        final_output,
    ]
    return "\n".join(lines)
