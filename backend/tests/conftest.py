"""Shared fixtures: sample resume/analysis data and a scripted fake gateway."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from models.schemas.analysis import AnalysisResult
from models.schemas.resume import RAW_TEXT_MARKER, ResumeData
from services.session import ReviewSession
from services.session_store import SessionStore

SAMPLE_RESUME = {
    "fullName": "Jane Doe",
    "contactInfo": {
        "email": "jane.doe@email.com",
        "phone": "+1-555-0123",
        "linkedin": "linkedin.com/in/janedoe",
        "location": "Austin, TX",
    },
    "summary": "Backend engineer with 7 years of experience building payment systems.",
    "skills": ["Python", "FastAPI", "PostgreSQL", "Docker"],
    "experience": [
        {
            "id": "exp_google",
            "company": "Google",
            "role": "Senior Software Engineer",
            "dates": "Jan 2020 - Present",
            "location": "Mountain View, CA",
            "description": [
                "Built scalable microservices using Python and Go",
                "Led team of 5 engineers on payment platform",
            ],
        },
        {
            "id": "exp_meta",
            "company": "Meta",
            "role": "",
            "dates": "Jun 2017 - Dec 2019",
            "description": [
                "Worked on React frontend applications",
                "Helped with CI/CD pipelines",
            ],
        },
    ],
    "education": [
        {
            "id": "edu_stanford",
            "school": "Stanford University",
            "degree": "B.S. Computer Science",
            "dates": "2013 - 2017",
        },
    ],
    "rawText": RAW_TEXT_MARKER,
}

SAMPLE_ANALYSIS = {
    "overallScore": 72,
    "categories": [
        {"name": "Parsing Success", "score": 90, "feedback": "Clean structure.", "status": "good"},
        {"name": "Keyword Match", "score": 55, "feedback": "Missing Kubernetes.", "status": "warning"},
        {"name": "Impact", "score": 40, "feedback": "Few metrics.", "status": "critical"},
        {"name": "Formatting", "score": 85, "feedback": "No tables.", "status": "good"},
    ],
    "keywordGaps": ["Kubernetes", "Redis"],
    "formattingIssues": [],
    "topStrengths": ["Payment domain experience"],
    "tailoringSuggestions": ["Mention Redis caching work"],
}


def make_resume() -> ResumeData:
    return ResumeData.model_validate(SAMPLE_RESUME)


def make_analysis(overall_score: float = 72) -> AnalysisResult:
    return AnalysisResult.model_validate({**SAMPLE_ANALYSIS, "overallScore": overall_score})


class FakeGateway:
    """Stand-in for GeminiGateway that records calls and returns scripted results."""

    def __init__(self, configured: bool = True) -> None:
        self.is_configured = configured
        self.calls: list[tuple] = []
        self.parse_error: Exception | None = None
        self.analysis_error: Exception | None = None
        self.rewrite_error: Exception | None = None
        self.analysis_scores: list[float] = []
        self.rewrite_result: str | None = None
        # bullet text -> event the rewrite waits on before returning
        self.rewrite_gates: dict[str, asyncio.Event] = {}

    async def parse_document(self, content: bytes, mime_type: str) -> ResumeData:
        self.calls.append(("parse", mime_type))
        if self.parse_error:
            raise self.parse_error
        return make_resume()

    async def analyze_match(self, resume: ResumeData, job_description: str) -> AnalysisResult:
        self.calls.append(("analyze", job_description))
        if self.analysis_error:
            raise self.analysis_error
        score = self.analysis_scores.pop(0) if self.analysis_scores else 72
        return make_analysis(score)

    async def rewrite_bullet(self, bullet_text: str, role_context: str) -> str:
        self.calls.append(("rewrite", bullet_text, role_context))
        gate = self.rewrite_gates.get(bullet_text)
        if gate is not None:
            await gate.wait()
        if self.rewrite_error:
            raise self.rewrite_error
        if self.rewrite_result is not None:
            return self.rewrite_result
        return f"Improved: {bullet_text}"


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def session(fake_gateway):
    return ReviewSession("ses_test", fake_gateway)


@pytest.fixture
def client(fake_gateway):
    from api.dependencies import get_gateway, get_store
    from api.router import limiter
    from main import app

    store = SessionStore()
    app.dependency_overrides[get_gateway] = lambda: fake_gateway
    app.dependency_overrides[get_store] = lambda: store
    limiter.reset()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
