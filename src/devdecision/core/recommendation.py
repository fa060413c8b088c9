"""Template recommendation summary attached to comparison results.

Deterministic text built from the scores alone. Richer, AI-written insight
lives outside this package.
"""

from __future__ import annotations

from typing import Optional, Sequence

from .comparison import format_decimal
from .models import TechnologyScore, UserConstraints
from .scoring import TAG_MULTIPLIER


def summarize_recommendation(
    scores: Sequence[TechnologyScore],
    constraints: Optional[UserConstraints] = None,
) -> str:
    """Name the top-scoring technology and the priority areas that were boosted."""
    if not scores:
        return "No technologies to compare."

    top = max(scores, key=lambda s: s.overall_score)
    summary = (
        f"Based on your criteria, {top.technology_name} scores highest "
        f"with {format_decimal(top.overall_score)} points."
    )

    if constraints is not None and constraints.priority_tags:
        areas = ", ".join(sorted(constraints.priority_tags))
        summary += f" Your priority areas ({areas}) were given {TAG_MULTIPLIER}x weight in the scoring."

    return summary
