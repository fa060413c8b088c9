"""Weighted, tag-boosted technology scoring engine.

Turns raw per-technology metrics into normalized 0-100 criterion scores and
one weighted overall score. Raw metrics arrive on mixed scales (5-point
ratings, 10-point scales, percentages, star counts), so the scale of each
value is inferred from its magnitude.

Every function here is pure over its arguments.
"""

from __future__ import annotations

import logging
import math
from typing import NamedTuple, Optional, Sequence

from .models import Criterion, CriterionType, Technology, TechnologyScore, UserConstraints

logger = logging.getLogger(__name__)

TAG_MULTIPLIER = 1.5
MIN_SCORE = 0.0
MAX_SCORE = 100.0

# Unbounded counts (GitHub stars, downloads) saturate here on the log scale
COUNT_CAP = 100_000.0


class CriterionProfile(NamedTuple):
    """Where a criterion type's raw metric lives and which priority tags boost it."""

    metric_key: str
    tag_aliases: tuple[str, ...]


CRITERION_PROFILES: dict[CriterionType, CriterionProfile] = {
    CriterionType.PERFORMANCE: CriterionProfile("performance_score", ("performance",)),
    CriterionType.LEARNING_CURVE: CriterionProfile("learning_curve_score", ("learning-curve", "learning_curve")),
    CriterionType.COMMUNITY: CriterionProfile("community_score", ("community",)),
    CriterionType.DOCUMENTATION: CriterionProfile("documentation_score", ("documentation",)),
    CriterionType.SCALABILITY: CriterionProfile("scalability_score", ("scalability",)),
    CriterionType.SECURITY: CriterionProfile("security_score", ("security",)),
    CriterionType.MATURITY: CriterionProfile("maturity_score", ("maturity",)),
    CriterionType.DEVELOPER_EXPERIENCE: CriterionProfile(
        "developer_experience_score", ("developer-experience", "developer_experience")
    ),
    CriterionType.COST: CriterionProfile("cost_score", ("cost",)),
    CriterionType.CUSTOM: CriterionProfile("custom_score", ("custom",)),
    CriterionType.POPULARITY: CriterionProfile("github_stars", ("popularity",)),
    CriterionType.ADOPTION: CriterionProfile("npm_downloads", ("adoption",)),
    CriterionType.JOB_MARKET: CriterionProfile("job_openings", ("job-market", "job_market")),
    CriterionType.SATISFACTION: CriterionProfile("satisfaction_score", ("satisfaction",)),
}


def criterion_profile(criterion_type: CriterionType) -> CriterionProfile:
    return CRITERION_PROFILES[criterion_type]


def normalize_score(value: float) -> float:
    """Map a raw metric of unknown scale onto 0-100.

    Rules, first match wins:
      - value <= 5    -> 5-point rating, scaled linearly
      - value <= 10   -> 10-point scale, scaled linearly
      - value <= 100  -> already 0-100
      - otherwise     -> unbounded count, capped at 100k and log-scaled

    Callers must pass a finite, non-negative value.
    """
    if value <= 5.0:
        return (value / 5.0) * 100.0
    if value <= 10.0:
        return value * 10.0
    if value <= 100.0:
        return value
    capped = min(value, COUNT_CAP)
    return (math.log10(capped + 1) / math.log10(COUNT_CAP + 1)) * 100.0


def apply_tag_multiplier(
    raw_score: float,
    constraints: Optional[UserConstraints],
    criterion_type: CriterionType,
) -> float:
    """Boost a raw score by TAG_MULTIPLIER when the user prioritized its criterion type.

    The boost is applied to the raw value, before normalization, so a boosted
    value can land in a different normalization band than the unboosted value.
    """
    if constraints is None or not constraints.priority_tags:
        return raw_score

    aliases = criterion_profile(criterion_type).tag_aliases
    if any(constraints.has_priority_tag(alias) for alias in aliases):
        logger.debug("Applying %.1fx multiplier to %s (user priority)", TAG_MULTIPLIER, criterion_type.value)
        return raw_score * TAG_MULTIPLIER
    return raw_score


def score_technology(
    technology: Technology,
    criteria: Sequence[Criterion],
    constraints: Optional[UserConstraints] = None,
) -> TechnologyScore:
    """Compute the weighted overall score of one technology.

    Criteria whose metric the technology lacks are skipped entirely: they add
    nothing to the weighted sum or to the weight total.
    """
    criterion_scores: dict[str, float] = {}
    weighted_sum = 0.0
    weight_total = 0.0

    for criterion in criteria:
        raw = technology.metric(criterion_profile(criterion.type).metric_key)
        if raw is None:
            continue

        adjusted = apply_tag_multiplier(raw, constraints, criterion.type)
        normalized = normalize_score(adjusted)

        criterion_scores[criterion.name] = normalized
        weighted_sum += normalized * criterion.weight
        weight_total += criterion.weight

        logger.debug(
            "%s / %s: raw=%s adjusted=%s normalized=%.2f weight=%s",
            technology.name, criterion.name, raw, adjusted, normalized, criterion.weight,
        )

    overall = weighted_sum / weight_total if weight_total > 0 else 0.0
    overall = max(MIN_SCORE, min(MAX_SCORE, overall))

    logger.debug("%s overall score: %.2f (%d criteria matched)", technology.name, overall, len(criterion_scores))
    return TechnologyScore(
        technology=technology,
        overall_score=overall,
        criterion_scores=criterion_scores,
    )


def score_technologies(
    technologies: Sequence[Technology],
    criteria: Sequence[Criterion],
    constraints: Optional[UserConstraints] = None,
) -> list[TechnologyScore]:
    """Score each technology against the same criteria, preserving input order."""
    return [score_technology(tech, criteria, constraints) for tech in technologies]
