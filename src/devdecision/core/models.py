"""Pydantic data models, the shared business objects.

The scoring engine, the inventory store, and the tool server all exchange
these models. Every model is frozen: a value built for one comparison is
never mutated afterwards.
"""

from __future__ import annotations

import hashlib
import json
import math
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Any, Iterable, Mapping, Optional

from pydantic import (
    AfterValidator,
    AliasGenerator,
    BaseModel,
    ConfigDict,
    Field,
    WrapSerializer,
    field_serializer,
    field_validator,
    model_serializer,
)
from pydantic.alias_generators import to_camel

FULL_MARK = 100.0
RADAR_SLOT_LABELS = ("A", "B", "C", "D", "E")

Score = Annotated[float, Field(ge=0.0, le=100.0)]


def technology_name_key(name: str) -> str:
    """Case-folded lookup form of a technology name: ' Élan ' -> 'élan'."""
    return name.strip().casefold()


def _read_only(value: dict) -> Mapping:
    return MappingProxyType(value)


def _dump_mapping(value: Mapping, handler):
    return handler(dict(value))


# Mapping fields of frozen models are validated into read-only views and
# serialized back as plain dicts.
MetricMap = Annotated[dict[str, float], AfterValidator(_read_only), WrapSerializer(_dump_mapping)]
ScoreMap = Annotated[dict[str, Score], AfterValidator(_read_only), WrapSerializer(_dump_mapping)]

# Frozen values that serialize with camelCase keys (overallScore, displayValue, ...)
WIRE_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=AliasGenerator(serialization_alias=to_camel),
)


def _lowercase_tags(value: Any) -> frozenset[str]:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        value = [value]
    return frozenset(str(tag).strip().lower() for tag in value if str(tag).strip())


class CriterionType(str, Enum):
    """Evaluation dimension a criterion measures."""

    PERFORMANCE = "performance"
    LEARNING_CURVE = "learning_curve"
    COMMUNITY = "community"
    DOCUMENTATION = "documentation"
    SCALABILITY = "scalability"
    SECURITY = "security"
    MATURITY = "maturity"
    DEVELOPER_EXPERIENCE = "developer_experience"
    COST = "cost"
    CUSTOM = "custom"
    # Market signals read straight from raw counts
    POPULARITY = "popularity"
    ADOPTION = "adoption"
    JOB_MARKET = "job_market"
    SATISFACTION = "satisfaction"

    @property
    def display_name(self) -> str:
        return _CRITERION_DISPLAY_NAMES[self]

    @property
    def tag(self) -> str:
        """Hyphenated priority-tag form, e.g. 'learning-curve'."""
        return self.value.replace("_", "-")

    @classmethod
    def from_string(cls, value: str) -> CriterionType:
        """Resolve a type from its value, enum name, tag form, or display name."""
        candidate = value.strip().lower()
        for member in cls:
            if candidate in (member.value, member.tag, member.display_name.lower()):
                return member
        raise ValueError(f"Unknown criterion type: {value}")


_CRITERION_DISPLAY_NAMES = {
    CriterionType.PERFORMANCE: "Performance",
    CriterionType.LEARNING_CURVE: "Learning Curve",
    CriterionType.COMMUNITY: "Community Support",
    CriterionType.DOCUMENTATION: "Documentation Quality",
    CriterionType.SCALABILITY: "Scalability",
    CriterionType.SECURITY: "Security",
    CriterionType.MATURITY: "Maturity",
    CriterionType.DEVELOPER_EXPERIENCE: "Developer Experience",
    CriterionType.COST: "Cost",
    CriterionType.CUSTOM: "Custom",
    CriterionType.POPULARITY: "Popularity",
    CriterionType.ADOPTION: "Adoption",
    CriterionType.JOB_MARKET: "Job Market",
    CriterionType.SATISFACTION: "Satisfaction",
}


class KpiMetricType(str, Enum):
    """How a KPI value should be read."""

    NUMERIC = "numeric"
    PERCENTAGE = "percentage"
    RATING = "rating"
    COUNT = "count"
    TREND = "trend"
    CATEGORICAL = "categorical"


class Technology(BaseModel):
    """A technology, framework, or service that can be compared."""

    model_config = WIRE_CONFIG

    id: int
    name: str = Field(min_length=1, max_length=100)
    category: str = Field(min_length=1, max_length=50)
    description: Optional[str] = None
    metrics: MetricMap = Field(
        default_factory=dict,
        validate_default=True,
        description="Raw metrics on a 0-5, 0-10, 0-100 or unbounded count scale",
    )
    tags: frozenset[str] = Field(default_factory=frozenset)

    @field_validator("metrics")
    @classmethod
    def reject_unscorable_metrics(cls, v: Mapping[str, float]) -> Mapping[str, float]:
        for key, value in v.items():
            if math.isnan(value) or math.isinf(value):
                raise ValueError(f"Metric {key!r} must be a finite number")
            if value < 0:
                raise ValueError(f"Metric {key!r} must be non-negative, got {value}")
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v: Any) -> frozenset[str]:
        return _lowercase_tags(v)

    @field_serializer("tags")
    def serialize_tags(self, tags: frozenset[str]) -> list[str]:
        return sorted(tags)

    def metric(self, key: str) -> Optional[float]:
        return self.metrics.get(key)

    def has_tag(self, tag: str) -> bool:
        return tag.lower() in self.tags


class Criterion(BaseModel):
    """A named, weighted evaluation dimension."""

    model_config = WIRE_CONFIG

    id: int
    name: str = Field(min_length=1, max_length=100)
    type: CriterionType
    weight: float = Field(default=1.0, ge=0.0, le=10.0)
    description: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def parse_type(cls, v: Any) -> Any:
        if isinstance(v, str) and not isinstance(v, CriterionType):
            return CriterionType.from_string(v)
        return v


class UserConstraints(BaseModel):
    """Priority tags and project context supplied with a comparison request.

    Priority tags are lowercased on construction, so two constraints built
    from differently-cased tags compare equal.
    """

    model_config = WIRE_CONFIG

    priority_tags: frozenset[str] = Field(default_factory=frozenset)
    project_type: Optional[str] = None
    team_size: Optional[str] = None
    timeline: Optional[str] = None

    @field_validator("priority_tags", mode="before")
    @classmethod
    def normalize_priority_tags(cls, v: Any) -> frozenset[str]:
        return _lowercase_tags(v)

    @field_serializer("priority_tags")
    def serialize_priority_tags(self, tags: frozenset[str]) -> list[str]:
        return sorted(tags)

    @classmethod
    def empty(cls) -> UserConstraints:
        return cls()

    @classmethod
    def with_priority_tags(cls, tags: Iterable[str]) -> UserConstraints:
        return cls(priority_tags=frozenset(tags))

    def has_priority_tag(self, tag: str) -> bool:
        return tag.lower() in self.priority_tags

    def cache_key(self) -> str:
        """Stable digest of the constraints content, identical across processes."""
        canonical = json.dumps(self.model_dump(mode="json"), sort_keys=True)
        return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


class TechnologyScore(BaseModel):
    """Overall and per-criterion scores of one technology within a comparison."""

    model_config = WIRE_CONFIG

    technology: Technology
    overall_score: Score
    criterion_scores: ScoreMap = Field(
        default_factory=dict,
        validate_default=True,
        description="Criterion name -> normalized 0-100 score, in criteria order",
    )
    explanation: Optional[str] = None

    @property
    def technology_name(self) -> str:
        return self.technology.name

    def criterion_score(self, criterion_name: str) -> Optional[float]:
        return self.criterion_scores.get(criterion_name)


class RadarChartRow(BaseModel):
    """One criterion's scores across the compared technologies.

    ``scores`` holds one entry per technology in request order. A
    single-technology comparison carries a second 0.0 placeholder score
    because the chart renderer always draws two series. Serializes to the
    renderer's shape: ``subject``, ``A``..``E`` (populated slots only) and
    ``fullMark``.
    """

    model_config = ConfigDict(frozen=True)

    subject: str = Field(min_length=1)
    scores: tuple[Score, ...] = Field(min_length=1, max_length=len(RADAR_SLOT_LABELS))
    full_mark: float = FULL_MARK

    @property
    def slot_count(self) -> int:
        return len(self.scores)

    def score_at(self, index: int) -> Optional[float]:
        """Score in slot ``index`` (0 = A), or None when the slot is unused."""
        if not 0 <= index < len(RADAR_SLOT_LABELS):
            raise ValueError(f"Invalid technology index: {index}")
        if index < len(self.scores):
            return self.scores[index]
        return None

    @model_serializer
    def serialize_row(self) -> dict[str, Any]:
        row: dict[str, Any] = {"subject": self.subject}
        row.update(zip(RADAR_SLOT_LABELS, self.scores))
        row["fullMark"] = self.full_mark
        return row


class KpiMetric(BaseModel):
    """A human-readable, unit-labeled display metric for one technology."""

    model_config = WIRE_CONFIG

    name: str = Field(min_length=1)
    value: float
    display_value: str = Field(min_length=1)
    unit: Optional[str] = None
    description: Optional[str] = None
    type: KpiMetricType = KpiMetricType.NUMERIC

    @property
    def formatted_display(self) -> str:
        if self.unit and self.unit.strip():
            return f"{self.display_value} {self.unit}"
        return self.display_value


KpiMetricMap = Annotated[
    dict[str, tuple[KpiMetric, ...]], AfterValidator(_read_only), WrapSerializer(_dump_mapping)
]


class ComparisonResult(BaseModel):
    """Complete result of a technology comparison.

    Built once by the comparison orchestrator. A recommendation is attached
    afterwards with ``with_recommendation``, which returns a new value.
    """

    model_config = WIRE_CONFIG

    scores: tuple[TechnologyScore, ...] = Field(min_length=1, max_length=5)
    radar_data: tuple[RadarChartRow, ...] = ()
    kpi_metrics: KpiMetricMap = Field(default_factory=dict, validate_default=True)
    recommendation_summary: Optional[str] = None
    constraints: UserConstraints = Field(default_factory=UserConstraints)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def technology_count(self) -> int:
        return len(self.scores)

    def technology_names(self) -> list[str]:
        return [s.technology_name for s in self.scores]

    def top_score(self) -> TechnologyScore:
        return max(self.scores, key=lambda s: s.overall_score)

    def sorted_scores(self) -> list[TechnologyScore]:
        """Scores ordered highest first; ties keep request order."""
        return sorted(self.scores, key=lambda s: s.overall_score, reverse=True)

    def score_for(self, technology_name: str) -> Optional[TechnologyScore]:
        wanted = technology_name_key(technology_name)
        return next((s for s in self.scores if technology_name_key(s.technology_name) == wanted), None)

    def kpi_metrics_for(self, technology_name: str) -> tuple[KpiMetric, ...]:
        return self.kpi_metrics.get(technology_name, ())

    def has_recommendation(self) -> bool:
        return bool(self.recommendation_summary and self.recommendation_summary.strip())

    def with_recommendation(self, recommendation: Optional[str]) -> ComparisonResult:
        return self.model_copy(update={"recommendation_summary": recommendation})

    def to_json(self) -> dict[str, Any]:
        """JSON-ready dict in the stable wire shape the chart layer binds to."""
        return self.model_dump(mode="json", by_alias=True)
