import pytest
from pydantic import ValidationError

from conftest import SAMPLE_RESUME, make_analysis, make_resume
from models.schemas.analysis import AnalysisResult, ScoreCategory, score_band
from models.schemas.resume import Education, ResumeData, WorkExperience


def test_resume_round_trips_camel_case_keys():
    resume = make_resume()
    assert resume.full_name == "Jane Doe"
    assert resume.contact_info.linkedin == "linkedin.com/in/janedoe"
    dumped = resume.model_dump(by_alias=True)
    assert dumped["fullName"] == "Jane Doe"
    assert dumped["contactInfo"]["email"] == SAMPLE_RESUME["contactInfo"]["email"]
    assert "full_name" not in dumped


def test_resume_accepts_snake_case_too():
    resume = ResumeData(full_name="Sam Lee", skills=["Go"])
    assert resume.full_name == "Sam Lee"
    assert resume.contact_info.location is None


def test_optional_fields_may_be_absent():
    resume = ResumeData.model_validate({"fullName": "Sam", "contactInfo": {"email": "s@x.io"}})
    assert resume.contact_info.phone == ""
    assert resume.experience == []
    assert resume.raw_text is None


def test_find_experience():
    resume = make_resume()
    assert resume.find_experience("exp_meta").company == "Meta"
    assert resume.find_experience("nope") is None


class TestIds:
    def test_duplicate_ids_spans_both_lists(self):
        resume = ResumeData(
            experience=[WorkExperience(id="a"), WorkExperience(id="b")],
            education=[Education(id="a")],
        )
        assert resume.duplicate_ids() == ["a"]

    def test_blank_ids_are_not_duplicates(self):
        resume = ResumeData(experience=[WorkExperience(), WorkExperience(id="a")], education=[Education()])
        assert resume.duplicate_ids() == []

    def test_assign_unique_ids_keeps_first_owner(self):
        resume = ResumeData(
            experience=[WorkExperience(id="a"), WorkExperience(id="a"), WorkExperience()],
            education=[Education(id="b"), Education(id="a")],
        )
        resume.assign_unique_ids()

        exp_ids = [e.id for e in resume.experience]
        edu_ids = [e.id for e in resume.education]
        assert exp_ids[0] == "a"
        assert edu_ids[0] == "b"
        assert exp_ids[1].startswith("exp_") and exp_ids[2].startswith("exp_")
        assert edu_ids[1].startswith("edu_")
        assert resume.duplicate_ids() == []

    def test_assign_unique_ids_leaves_clean_resume_alone(self):
        resume = make_resume()
        resume.assign_unique_ids()
        assert [e.id for e in resume.experience] == ["exp_google", "exp_meta"]
        assert [e.id for e in resume.education] == ["edu_stanford"]


class TestAnalysis:
    def test_status_is_not_derived_from_score(self):
        category = ScoreCategory(name="Impact", score=95, feedback="", status="critical")
        assert category.status == "critical"

    def test_invalid_status_rejected(self):
        with pytest.raises(ValidationError):
            ScoreCategory(name="Impact", score=50, feedback="", status="okay")

    def test_scores_clamped(self):
        result = AnalysisResult(
            overall_score=101.5,
            categories=[ScoreCategory(name="x", score=-3, status="good")],
        )
        assert result.overall_score == 100
        assert result.categories[0].score == 0

    def test_priority_fixes(self):
        analysis = make_analysis()
        assert [c.name for c in analysis.priority_fixes] == ["Keyword Match", "Impact"]

    @pytest.mark.parametrize(
        "score, band",
        [(100, "good"), (81, "good"), (80, "warning"), (51, "warning"), (50, "critical"), (0, "critical")],
    )
    def test_score_band(self, score, band):
        assert score_band(score) == band
