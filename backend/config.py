import os
from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    gemini_api_key: str = ""
    max_upload_size_mb: int = 5
    max_job_description_chars: int = 10000
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False

    # Gemini models per gateway operation
    parse_model: str = "gemini-2.5-flash"
    analysis_model: str = "gemini-2.5-flash"
    rewrite_model: str = "gemini-2.5-flash"
    analysis_thinking_budget: int = 1024  # reasoning tokens allowed before scoring

    rate_limit: str = "10/minute"  # applied to every AI-backed endpoint
    # if False, a failed re-analysis drops the session back to the upload view
    retain_results_on_failed_reanalysis: bool = True

    # in-memory session registry bounds
    session_ttl_minutes: int = 60
    max_sessions: int = 1000
    session_rate_limit: str = "30/minute"  # applied to session creation

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "protected_namespaces": ("settings_",)}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
