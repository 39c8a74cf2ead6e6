from pydantic import Field

from config import settings
from models.schemas.resume import CamelModel


class AnalyzeRequest(CamelModel):
    job_description: str = Field(
        "",
        max_length=settings.max_job_description_chars,
        description="Target job description; empty for a general review",
    )


class RewriteRequest(CamelModel):
    current_text: str | None = Field(None, max_length=2000, description="Bullet text as shown; defaults to the stored text")
