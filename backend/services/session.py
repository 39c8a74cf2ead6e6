"""Review session: the state machine behind one user's upload/analyze/edit flow.

Phases:
    UPLOAD ──(file)──> ANALYZING ──(parse + analyze ok)──> DASHBOARD
       ^                   │                                 │  │
       └──────(failure)────┘          (job description) ─────┘  │
       └────────────────────────(reset)──────────────────────────┘

All state changes happen in this class. Every gateway-backed intent moves the
phase before its first ``await``, so on a single event loop two overlapping
requests can never both start a call.
"""

import logging
from enum import Enum

from models.responses import PendingBullet, RewriteResponse, SessionView
from models.schemas.analysis import AnalysisResult, score_band
from models.schemas.resume import ResumeData
from services import document_loader
from services.errors import (
    AnalysisError,
    BulletNotFoundError,
    GatewayNotConfiguredError,
    InvalidResumeError,
    ParseError,
    PhaseConflictError,
    RewriteError,
    RewritePendingError,
    UnsupportedFileTypeError,
)
from services.gemini_client import GeminiGateway

logger = logging.getLogger(__name__)

PARSING_LABEL = "Parsing resume structure..."
SCORING_LABEL = "Analyzing against ATS algorithms..."
DEFAULT_ROLE = "Professional"

PARSE_FAILED_NOTICE = "Failed to parse resume. Please try a different file."
ANALYSIS_FAILED_NOTICE = "Analysis failed. Please try again."
MISSING_KEY_WARNING = "Missing API Key: set GEMINI_API_KEY to enable analysis."


class AppPhase(str, Enum):
    UPLOAD = "upload"
    ANALYZING = "analyzing"
    DASHBOARD = "dashboard"


class ReviewSession:
    def __init__(
        self,
        session_id: str,
        gateway: GeminiGateway,
        retain_results_on_failed_reanalysis: bool = True,
    ) -> None:
        self.session_id = session_id
        self._gateway = gateway
        self._retain_on_failure = retain_results_on_failed_reanalysis

        self.phase = AppPhase.UPLOAD
        self.progress_label = ""
        self.resume: ResumeData | None = None
        self.analysis: AnalysisResult | None = None
        self.job_description = ""
        self.notice: str | None = None
        self._pending: dict[tuple[str, int], object] = {}

    # --- Guards ---

    def _require_phase(self, *allowed: AppPhase) -> None:
        if self.phase not in allowed:
            raise PhaseConflictError(f"Not allowed while session is in the {self.phase.value} phase")

    def _require_gateway(self) -> None:
        if not self._gateway.is_configured:
            raise GatewayNotConfiguredError()

    def _enter_analyzing(self, label: str) -> None:
        self.phase = AppPhase.ANALYZING
        self.progress_label = label
        self.notice = None

    def _enter(self, phase: AppPhase, notice: str | None = None) -> None:
        self.phase = phase
        self.progress_label = ""
        self.notice = notice
        logger.info("Session %s -> %s", self.session_id, phase.value)

    # --- Intents ---

    async def upload(self, content: bytes, mime_type: str, job_description: str | None = None) -> None:
        """Parse an uploaded resume and score it in one uninterrupted chain."""
        self._require_phase(AppPhase.UPLOAD)
        if not document_loader.is_supported(mime_type):
            raise UnsupportedFileTypeError(mime_type)
        self._require_gateway()

        if job_description is not None:
            self.job_description = job_description
        self._enter_analyzing(PARSING_LABEL)

        try:
            resume = await self._gateway.parse_document(content, mime_type)
        except ParseError:
            self._enter(AppPhase.UPLOAD, PARSE_FAILED_NOTICE)
            raise
        except BaseException:
            self._enter(AppPhase.UPLOAD)
            raise

        self.progress_label = SCORING_LABEL
        try:
            analysis = await self._gateway.analyze_match(resume, self.job_description)
        except AnalysisError:
            self._enter(AppPhase.UPLOAD, ANALYSIS_FAILED_NOTICE)
            raise
        except BaseException:
            self._enter(AppPhase.UPLOAD)
            raise

        self.resume = resume
        self.analysis = analysis
        self._enter(AppPhase.DASHBOARD)

    async def analyze(self, job_description: str) -> None:
        """Re-score the current resume against a new job description."""
        self._require_phase(AppPhase.DASHBOARD)
        self._require_gateway()

        self.job_description = job_description
        resume = self.resume
        self._enter_analyzing(SCORING_LABEL)

        try:
            analysis = await self._gateway.analyze_match(resume, job_description)
        except AnalysisError:
            if self._retain_on_failure:
                self._enter(AppPhase.DASHBOARD, ANALYSIS_FAILED_NOTICE)
            else:
                self.resume = None
                self.analysis = None
                self._pending.clear()
                self._enter(AppPhase.UPLOAD, ANALYSIS_FAILED_NOTICE)
            raise
        except BaseException:
            # cancelled or unexpected: leave the previous results in place
            self._enter(AppPhase.DASHBOARD)
            raise

        self.analysis = analysis
        self._enter(AppPhase.DASHBOARD)

    def reset(self) -> None:
        self._require_phase(AppPhase.UPLOAD, AppPhase.DASHBOARD)
        self.resume = None
        self.analysis = None
        self.job_description = ""
        self._pending.clear()
        self._enter(AppPhase.UPLOAD)

    def update_resume(self, resume: ResumeData) -> None:
        """Replace the resume with a manually edited one; the analysis is kept."""
        self._require_phase(AppPhase.DASHBOARD)
        if self._pending:
            raise PhaseConflictError("Wait for pending bullet rewrites before editing")
        dupes = resume.duplicate_ids()
        if dupes:
            raise InvalidResumeError(f"Duplicate entry ids: {', '.join(dupes)}")
        resume.assign_unique_ids()
        self.resume = resume

    async def rewrite_bullet(
        self,
        experience_id: str,
        bullet_index: int,
        current_text: str | None = None,
    ) -> RewriteResponse:
        """Rewrite one bullet in place.

        A result that arrives after the resume was replaced or reset is
        returned with ``applied=False`` and leaves the session untouched.
        """
        self._require_phase(AppPhase.DASHBOARD)
        self._require_gateway()

        resume = self.resume
        experience = resume.find_experience(experience_id)
        if experience is None:
            raise BulletNotFoundError(f"Experience not found: {experience_id}")
        if not 0 <= bullet_index < len(experience.description):
            raise BulletNotFoundError(f"Bullet {bullet_index} not found in {experience_id}")

        key = (experience_id, bullet_index)
        if key in self._pending:
            raise RewritePendingError(experience_id, bullet_index)

        original = current_text if current_text is not None else experience.description[bullet_index]
        role = experience.role.strip() or DEFAULT_ROLE

        token = object()
        self._pending[key] = token
        try:
            rewritten = await self._gateway.rewrite_bullet(original, role)
        except RewriteError:
            logger.warning("Rewrite failed for %s[%d], keeping original text", experience_id, bullet_index)
            raise
        finally:
            if self._pending.get(key) is token:
                del self._pending[key]

        # Re-resolve against the live resume; no await between lookup and write.
        target = self.resume.find_experience(experience_id) if self.resume is resume else None
        if target is None or bullet_index >= len(target.description):
            logger.warning("Discarding stale rewrite for %s[%d]", experience_id, bullet_index)
            return RewriteResponse(
                experience_id=experience_id,
                bullet_index=bullet_index,
                original=original,
                rewritten=rewritten,
                applied=False,
            )

        target.description[bullet_index] = rewritten
        return RewriteResponse(
            experience_id=experience_id,
            bullet_index=bullet_index,
            original=original,
            rewritten=rewritten,
        )

    # --- Rendering ---

    def view(self) -> SessionView:
        analysis = self.analysis
        return SessionView(
            session_id=self.session_id,
            phase=self.phase.value,
            progress_label=self.progress_label,
            job_description=self.job_description,
            resume=self.resume,
            analysis=analysis,
            score_band=score_band(analysis.overall_score) if analysis else None,
            priority_fixes=analysis.priority_fixes if analysis else [],
            pending_bullets=[
                PendingBullet(experience_id=exp_id, bullet_index=idx)
                for exp_id, idx in sorted(self._pending)
            ],
            notice=self.notice,
            config_warning=None if self._gateway.is_configured else MISSING_KEY_WARNING,
        )
