"""Tests for the shared pydantic models."""

import pytest
from pydantic import ValidationError

from devdecision.core.models import (
    ComparisonResult,
    Criterion,
    CriterionType,
    KpiMetric,
    KpiMetricType,
    Technology,
    TechnologyScore,
    UserConstraints,
)


def _make_technology(tech_id=1, name="React", **kwargs) -> Technology:
    kwargs.setdefault("category", "frontend-framework")
    return Technology(id=tech_id, name=name, **kwargs)


def _make_score(name="React", overall=80.0, tech_id=1) -> TechnologyScore:
    return TechnologyScore(technology=_make_technology(tech_id, name), overall_score=overall)


# =============================================================================
# CriterionType
# =============================================================================


class TestCriterionType:
    def test_tag_form_is_hyphenated(self):
        assert CriterionType.LEARNING_CURVE.tag == "learning-curve"
        assert CriterionType.PERFORMANCE.tag == "performance"

    def test_display_name(self):
        assert CriterionType.COMMUNITY.display_name == "Community Support"
        assert CriterionType.DEVELOPER_EXPERIENCE.display_name == "Developer Experience"

    @pytest.mark.parametrize("text", ["learning_curve", "learning-curve", "Learning Curve", "  LEARNING_CURVE "])
    def test_from_string_accepts_all_forms(self, text):
        assert CriterionType.from_string(text) is CriterionType.LEARNING_CURVE

    def test_from_string_rejects_unknown(self):
        with pytest.raises(ValueError, match="Unknown criterion type"):
            CriterionType.from_string("vibes")

    def test_every_type_has_display_name(self):
        for member in CriterionType:
            assert member.display_name


# =============================================================================
# Technology / Criterion
# =============================================================================


class TestTechnology:
    def test_tags_lowercased_and_serialized_sorted(self):
        tech = _make_technology(tags=["Frontend", "JavaScript", "frontend"])

        assert tech.tags == frozenset({"frontend", "javascript"})
        assert tech.has_tag("JAVASCRIPT")
        assert tech.model_dump(mode="json")["tags"] == ["frontend", "javascript"]

    def test_metric_lookup(self):
        tech = _make_technology(metrics={"github_stars": 1200.0})
        assert tech.metric("github_stars") == 1200.0
        assert tech.metric("npm_downloads") is None

    @pytest.mark.parametrize("bad", [-1.0, float("nan"), float("inf")])
    def test_rejects_unscorable_metrics(self, bad):
        with pytest.raises(ValidationError):
            _make_technology(metrics={"performance_score": bad})

    def test_name_length_bounds(self):
        with pytest.raises(ValidationError):
            _make_technology(name="")
        with pytest.raises(ValidationError):
            _make_technology(name="x" * 101)

    def test_frozen(self):
        tech = _make_technology()
        with pytest.raises(ValidationError):
            tech.name = "Vue.js"

    def test_metrics_cannot_be_changed_in_place(self):
        tech = _make_technology(metrics={"performance_score": 3.0})

        with pytest.raises(TypeError):
            tech.metrics["performance_score"] = -5.0

        assert tech.metric("performance_score") == 3.0

    def test_default_metrics_are_read_only(self):
        tech = _make_technology()
        with pytest.raises(TypeError):
            tech.metrics["github_stars"] = 1.0

    def test_metrics_do_not_track_the_input_dict(self):
        raw = {"performance_score": 3.0}
        tech = _make_technology(metrics=raw)

        raw["performance_score"] = -5.0

        assert tech.metric("performance_score") == 3.0

    def test_metrics_serialize_as_plain_dict(self):
        data = _make_technology(metrics={"github_stars": 1200.0}).model_dump(mode="json")
        assert data["metrics"] == {"github_stars": 1200.0}
        assert type(data["metrics"]) is dict


class TestCriterion:
    def test_type_parsed_from_tag_form(self):
        criterion = Criterion(id=1, name="Learning Curve", type="learning-curve")
        assert criterion.type is CriterionType.LEARNING_CURVE
        assert criterion.weight == 1.0

    def test_weight_bounds(self):
        with pytest.raises(ValidationError):
            Criterion(id=1, name="Cost", type=CriterionType.COST, weight=-0.5)
        with pytest.raises(ValidationError):
            Criterion(id=1, name="Cost", type=CriterionType.COST, weight=11.0)

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            Criterion(id=1, name="Vibes", type="vibes")


# =============================================================================
# UserConstraints
# =============================================================================


class TestUserConstraints:
    def test_empty(self):
        constraints = UserConstraints.empty()
        assert constraints.priority_tags == frozenset()
        assert constraints.project_type is None

    def test_priority_tags_lowercased(self):
        constraints = UserConstraints.with_priority_tags(["Performance", "SECURITY"])
        assert constraints.has_priority_tag("performance")
        assert constraints.has_priority_tag("Security")
        assert not constraints.has_priority_tag("cost")

    def test_equal_content_gives_equal_cache_key(self):
        first = UserConstraints(priority_tags=["security", "Performance"], team_size="small")
        second = UserConstraints(priority_tags=["performance", "security"], team_size="small")

        assert first == second
        assert first.cache_key() == second.cache_key()

    def test_different_content_gives_different_cache_key(self):
        plain = UserConstraints.empty()
        tagged = UserConstraints.with_priority_tags(["performance"])
        assert plain.cache_key() != tagged.cache_key()

    def test_serialization_uses_camel_case(self):
        data = UserConstraints(priority_tags=["b", "a"], project_type="web-app").model_dump(by_alias=True)
        assert data["priorityTags"] == ["a", "b"]
        assert data["projectType"] == "web-app"


# =============================================================================
# KpiMetric
# =============================================================================


class TestKpiMetric:
    def test_formatted_display_with_unit(self):
        metric = KpiMetric(name="GitHub Stars", value=220000, display_value="220,000", unit="stars")
        assert metric.formatted_display == "220,000 stars"

    @pytest.mark.parametrize("unit", [None, "", "   "])
    def test_formatted_display_without_unit(self, unit):
        metric = KpiMetric(name="Overall Score", value=88.0, display_value="88", unit=unit)
        assert metric.formatted_display == "88"

    def test_defaults_to_numeric(self):
        metric = KpiMetric(name="Overall Score", value=88.0, display_value="88")
        assert metric.type is KpiMetricType.NUMERIC

    def test_display_value_required(self):
        with pytest.raises(ValidationError):
            KpiMetric(name="Overall Score", value=88.0, display_value="")


# =============================================================================
# TechnologyScore / ComparisonResult
# =============================================================================


class TestTechnologyScore:
    def test_overall_score_bounds(self):
        with pytest.raises(ValidationError):
            _make_score(overall=100.5)
        with pytest.raises(ValidationError):
            _make_score(overall=-1.0)

    def test_criterion_score_lookup(self):
        score = TechnologyScore(
            technology=_make_technology(),
            overall_score=85.0,
            criterion_scores={"Performance": 85.0},
        )
        assert score.technology_name == "React"
        assert score.criterion_score("Performance") == 85.0
        assert score.criterion_score("Cost") is None

    def test_criterion_scores_are_read_only(self):
        score = TechnologyScore(
            technology=_make_technology(),
            overall_score=85.0,
            criterion_scores={"Performance": 85.0},
        )

        with pytest.raises(TypeError):
            score.criterion_scores["Performance"] = 500.0
        with pytest.raises(TypeError):
            score.criterion_scores["Cost"] = 10.0

        assert score.model_dump(by_alias=True)["criterionScores"] == {"Performance": 85.0}


class TestComparisonResult:
    def test_requires_one_to_five_scores(self):
        with pytest.raises(ValidationError):
            ComparisonResult(scores=())
        with pytest.raises(ValidationError):
            ComparisonResult(scores=tuple(_make_score(f"T{i}", tech_id=i) for i in range(6)))

    def test_top_and_sorted_scores(self):
        result = ComparisonResult(scores=(
            _make_score("React", 70.0, 1),
            _make_score("Vue.js", 90.0, 2),
            _make_score("Angular", 70.0, 3),
        ))

        assert result.technology_count == 3
        assert result.technology_names() == ["React", "Vue.js", "Angular"]
        assert result.top_score().technology_name == "Vue.js"
        assert [s.technology_name for s in result.sorted_scores()] == ["Vue.js", "React", "Angular"]

    def test_score_for_is_case_insensitive(self):
        result = ComparisonResult(scores=(_make_score("Vue.js", 88.0),))
        assert result.score_for("vue.JS").overall_score == 88.0
        assert result.score_for("React") is None

    def test_score_for_folds_non_ascii_case(self):
        result = ComparisonResult(scores=(_make_score("Élan", 61.0),))
        assert result.score_for("élan").overall_score == 61.0

    def test_kpi_metrics_are_read_only(self):
        metric = KpiMetric(name="Overall Score", value=80.0, display_value="80")
        result = ComparisonResult(scores=(_make_score(),), kpi_metrics={"React": [metric]})

        with pytest.raises(TypeError):
            result.kpi_metrics["React"] = ()
        with pytest.raises(TypeError):
            del result.kpi_metrics["React"]

        assert result.kpi_metrics_for("React") == (metric,)
        assert result.to_json()["kpiMetrics"]["React"][0]["displayValue"] == "80"

    def test_kpi_metrics_for_unknown_name_is_empty(self):
        result = ComparisonResult(scores=(_make_score(),))
        assert result.kpi_metrics_for("Angular") == ()

    def test_with_recommendation_returns_new_value(self):
        result = ComparisonResult(scores=(_make_score(),))

        updated = result.with_recommendation("Pick React.")

        assert not result.has_recommendation()
        assert updated.has_recommendation()
        assert updated.recommendation_summary == "Pick React."
        assert updated.generated_at == result.generated_at

    def test_blank_recommendation_does_not_count(self):
        result = ComparisonResult(scores=(_make_score(),)).with_recommendation("   ")
        assert not result.has_recommendation()

    def test_generated_at_is_utc(self):
        result = ComparisonResult(scores=(_make_score(),))
        assert result.generated_at.utcoffset() is not None
        assert result.generated_at.utcoffset().total_seconds() == 0
