"""Comparison assembly: radar matrix, KPI figures, and the orchestrator.

Takes already-fetched technology and criteria records, scores them, and
shapes the scores into a ComparisonResult ready for JSON serialization.
Fetching records is the caller's job; nothing here touches the store.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, NamedTuple, Optional, Sequence

from .models import (
    FULL_MARK,
    ComparisonResult,
    Criterion,
    KpiMetric,
    KpiMetricType,
    RadarChartRow,
    Technology,
    TechnologyScore,
    UserConstraints,
    technology_name_key,
)
from .scoring import score_technologies

logger = logging.getLogger(__name__)

MAX_TECHNOLOGIES = 5

# Second radar series for single-technology comparisons
PLACEHOLDER_SCORE = 0.0


class ComparisonError(ValueError):
    """The comparison request is malformed (empty, oversized, duplicated, or unknown technology)."""


# ─── Radar matrix ─────────────────────────────────────────────────────────────


def build_radar_rows(scores: Sequence[TechnologyScore]) -> list[RadarChartRow]:
    """Build one radar row per criterion scored for the first technology.

    Rows follow the first technology's criterion order; slots follow the
    order of ``scores``. A criterion some other technology has no score for
    is left out, so every row has exactly one slot per technology.
    """
    if not scores:
        return []

    rows = []
    for criterion_name in scores[0].criterion_scores:
        values = [s.criterion_score(criterion_name) for s in scores]
        if any(v is None for v in values):
            logger.debug("Skipping radar row %r: not scored for every technology", criterion_name)
            continue
        if len(values) == 1:
            values.append(PLACEHOLDER_SCORE)
        rows.append(RadarChartRow(subject=criterion_name, scores=tuple(values), full_mark=FULL_MARK))

    logger.debug("Generated %d radar rows for %d technologies", len(rows), len(scores))
    return rows


# ─── KPI figures ──────────────────────────────────────────────────────────────


def format_decimal(value: float) -> str:
    """At most one decimal place, trailing '.0' dropped: 8.7 -> '8.7', 45.0 -> '45'."""
    text = f"{value:.1f}"
    return text[:-2] if text.endswith(".0") else text


def format_count(value: float) -> str:
    """Whole number with thousands separators: 220000 -> '220,000'."""
    return f"{int(value):,}"


def format_large_number(value: float) -> str:
    """Abbreviate with K/M/B suffixes: 20500000 -> '20.5M'."""
    if value >= 1_000_000_000:
        return format_decimal(value / 1_000_000_000) + "B"
    if value >= 1_000_000:
        return format_decimal(value / 1_000_000) + "M"
    if value >= 1_000:
        return format_decimal(value / 1_000) + "K"
    return format_count(value)


def format_rating(value: float) -> str:
    return format_decimal(value) + "/5"


class KpiSpec(NamedTuple):
    metric_key: str
    name: str
    formatter: Callable[[float], str]
    unit: str
    description: str
    type: KpiMetricType


KPI_SPECS: tuple[KpiSpec, ...] = (
    KpiSpec("github_stars", "GitHub Stars", format_count, "stars", "Community popularity on GitHub", KpiMetricType.COUNT),
    KpiSpec("npm_downloads", "NPM Downloads", format_large_number, "downloads/month", "Monthly NPM package downloads", KpiMetricType.COUNT),
    KpiSpec("job_openings", "Job Openings", format_count, "jobs", "Current job market demand", KpiMetricType.COUNT),
    KpiSpec("satisfaction_score", "Satisfaction", format_rating, "stars", "Developer satisfaction rating", KpiMetricType.RATING),
)


def overall_score_kpi(score: TechnologyScore) -> KpiMetric:
    return KpiMetric(
        name="Overall Score",
        value=score.overall_score,
        display_value=format_decimal(score.overall_score),
        unit="points",
        description="Weighted overall comparison score",
        type=KpiMetricType.NUMERIC,
    )


def build_kpi_metrics(score: TechnologyScore) -> list[KpiMetric]:
    """KPI list for one technology, always ending with its Overall Score.

    Absent metrics are skipped. A metric that fails to format is logged and
    skipped too; the rest of the list is still returned.
    """
    technology = score.technology
    metrics = []

    for spec in KPI_SPECS:
        raw = technology.metrics.get(spec.metric_key)
        if raw is None:
            continue
        try:
            metrics.append(KpiMetric(
                name=spec.name,
                value=raw,
                display_value=spec.formatter(raw),
                unit=spec.unit,
                description=spec.description,
                type=spec.type,
            ))
        except (TypeError, ValueError, OverflowError) as exc:
            logger.warning("Could not format KPI %s for %s: %s", spec.name, technology.name, exc)

    metrics.append(overall_score_kpi(score))
    return metrics


# ─── Orchestrator ─────────────────────────────────────────────────────────────


def validate_selection(identifiers: Sequence) -> None:
    """Reject empty, oversized, or duplicated technology selections."""
    if not identifiers:
        raise ComparisonError("At least one technology is required for comparison")
    if len(identifiers) > MAX_TECHNOLOGIES:
        raise ComparisonError(
            f"Cannot compare more than {MAX_TECHNOLOGIES} technologies at once (got {len(identifiers)})"
        )
    seen = set()
    for identifier in identifiers:
        key = technology_name_key(identifier) if isinstance(identifier, str) else identifier
        if key in seen:
            raise ComparisonError(f"Technology listed more than once: {identifier}")
        seen.add(key)


def resolve_technology_ids(
    technology_names: Sequence[str],
    technologies: Iterable[Technology],
) -> list[int]:
    """Map names (case-insensitive) to technology ids, keeping request order."""
    validate_selection(technology_names)
    by_name = {technology_name_key(t.name): t for t in technologies}

    missing = [name for name in technology_names if technology_name_key(name) not in by_name]
    if missing:
        raise ComparisonError(f"Technology not found with name: {', '.join(missing)}")
    return [by_name[technology_name_key(name)].id for name in technology_names]


def generate_comparison(
    technology_ids: Sequence[int],
    technologies: Iterable[Technology],
    criteria: Sequence[Criterion],
    constraints: Optional[UserConstraints] = None,
) -> ComparisonResult:
    """Score, chart, and summarize the requested technologies.

    Args:
        technology_ids: 1-5 distinct ids; radar slots and score order follow this order.
        technologies: Candidate records; must contain every requested id. Extras are ignored.
        criteria: Evaluation criteria shared by all technologies.
        constraints: Priority tags and project context. None means no constraints.

    Raises:
        ComparisonError: The selection is empty, larger than five, has
            duplicates, or names an id missing from ``technologies``.
    """
    validate_selection(technology_ids)
    catalog = {t.id: t for t in technologies}

    missing = [tech_id for tech_id in technology_ids if tech_id not in catalog]
    if missing:
        raise ComparisonError(f"Technology not found with ID: {', '.join(str(m) for m in missing)}")

    constraints = constraints or UserConstraints.empty()
    selected = [catalog[tech_id] for tech_id in technology_ids]

    logger.info(
        "Generating comparison for %d technologies with %d priority tags",
        len(selected), len(constraints.priority_tags),
    )

    scores = score_technologies(selected, criteria, constraints)
    radar_rows = build_radar_rows(scores)
    kpi_metrics = {s.technology_name: build_kpi_metrics(s) for s in scores}

    return ComparisonResult(
        scores=scores,
        radar_data=radar_rows,
        kpi_metrics=kpi_metrics,
        constraints=constraints,
    )


def generate_comparison_by_names(
    technology_names: Sequence[str],
    technologies: Iterable[Technology],
    criteria: Sequence[Criterion],
    constraints: Optional[UserConstraints] = None,
) -> ComparisonResult:
    """Same as generate_comparison, selecting technologies by name."""
    technologies = list(technologies)
    technology_ids = resolve_technology_ids(technology_names, technologies)
    return generate_comparison(technology_ids, technologies, criteria, constraints)
