"""Domain model shared by the gateway, the session and the API."""

from models.schemas.analysis import AnalysisResult, ScoreCategory, score_band
from models.schemas.resume import (
    RAW_TEXT_MARKER,
    ContactInfo,
    Education,
    ResumeData,
    WorkExperience,
)

__all__ = [
    "RAW_TEXT_MARKER",
    "AnalysisResult",
    "ContactInfo",
    "Education",
    "ResumeData",
    "ScoreCategory",
    "WorkExperience",
    "score_band",
]
