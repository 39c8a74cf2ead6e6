from pydantic import BaseModel

from models.schemas.analysis import AnalysisResult, CategoryStatus, ScoreCategory
from models.schemas.resume import CamelModel, ResumeData


class HealthResponse(BaseModel):
    status: str = "ok"
    gemini_configured: bool = False


class PendingBullet(CamelModel):
    experience_id: str
    bullet_index: int


class SessionView(CamelModel):
    """Everything a client needs to render the current view of a session."""
    session_id: str
    phase: str
    progress_label: str = ""
    job_description: str = ""
    resume: ResumeData | None = None
    analysis: AnalysisResult | None = None
    score_band: CategoryStatus | None = None
    priority_fixes: list[ScoreCategory] = []
    pending_bullets: list[PendingBullet] = []
    notice: str | None = None
    config_warning: str | None = None


class RewriteResponse(CamelModel):
    experience_id: str
    bullet_index: int
    original: str
    rewritten: str
    applied: bool = True
