"""Scoring output for a (resume, job description) pair."""

from typing import Literal

from pydantic import field_validator

from models.schemas.resume import CamelModel

CategoryStatus = Literal["good", "warning", "critical"]

# Score gauge thresholds: above 80 is good, above 50 needs work
GOOD_THRESHOLD = 80
WARNING_THRESHOLD = 50


def _clamp_score(value: float) -> float:
    return min(100.0, max(0.0, float(value)))


class ScoreCategory(CamelModel):
    """One rubric dimension.

    ``status`` comes from the scoring service as-is; it is not derived from
    ``score`` and the two may disagree.
    """
    name: str = ""
    score: float = 0.0
    feedback: str = ""
    status: CategoryStatus

    @field_validator("score")
    @classmethod
    def clamp_score(cls, value: float) -> float:
        return _clamp_score(value)


class AnalysisResult(CamelModel):
    overall_score: float = 0.0
    categories: list[ScoreCategory] = []
    keyword_gaps: list[str] = []
    formatting_issues: list[str] = []
    top_strengths: list[str] = []
    tailoring_suggestions: list[str] = []

    @field_validator("overall_score")
    @classmethod
    def clamp_overall_score(cls, value: float) -> float:
        return _clamp_score(value)

    @property
    def priority_fixes(self) -> list[ScoreCategory]:
        return [c for c in self.categories if c.status != "good"]


def score_band(score: float) -> CategoryStatus:
    """Map an overall score to the gauge band shown on the dashboard."""
    if score > GOOD_THRESHOLD:
        return "good"
    if score > WARNING_THRESHOLD:
        return "warning"
    return "critical"
