"""Google Gemini gateway: the only code that talks to the AI service.

Parsing and analysis use structured output because callers index into named
fields. Rewriting is free text, substituted as-is into the resume.
"""

import asyncio
import logging

from google import genai
from google.genai import types
from pydantic import ValidationError

from config import Settings
from models.schemas.analysis import AnalysisResult
from models.schemas.resume import RAW_TEXT_MARKER, ResumeData
from services import document_loader, prompt_builder
from services.errors import (
    AnalysisError,
    GatewayError,
    GatewayNotConfiguredError,
    ParseError,
    RewriteError,
)
from services.output_schemas import ANALYSIS_SCHEMA, RESUME_SCHEMA

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"


def _strip_code_fences(text: str) -> str:
    """Strip markdown code fences if present."""
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()
    return text


class GeminiGateway:
    def __init__(
        self,
        api_key: str,
        parse_model: str = DEFAULT_MODEL,
        analysis_model: str = DEFAULT_MODEL,
        rewrite_model: str = DEFAULT_MODEL,
        thinking_budget: int = 1024,
    ) -> None:
        self._api_key = api_key
        self.parse_model = parse_model
        self.analysis_model = analysis_model
        self.rewrite_model = rewrite_model
        self.thinking_budget = thinking_budget
        self._client: genai.Client | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiGateway":
        return cls(
            api_key=settings.gemini_api_key,
            parse_model=settings.parse_model,
            analysis_model=settings.analysis_model,
            rewrite_model=settings.rewrite_model,
            thinking_budget=settings.analysis_thinking_budget,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    def get_client(self) -> genai.Client:
        if not self._api_key:
            logger.warning("No GEMINI_API_KEY set - Gemini features disabled")
            raise GatewayNotConfiguredError()
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def _generate(
        self,
        error_cls: type[GatewayError],
        *,
        model: str,
        contents: list | str,
        config: types.GenerateContentConfig | None = None,
    ) -> str | None:
        """Run one generate_content call off the event loop; return its text."""
        client = self.get_client()
        try:
            response = await asyncio.to_thread(
                client.models.generate_content,
                model=model,
                contents=contents,
                config=config,
            )
            return response.text
        except Exception as e:
            logger.error("Gemini API error (%s): %s", model, e)
            raise error_cls(f"Gemini request failed: {e}") from e

    async def parse_document(self, content: bytes, mime_type: str) -> ResumeData:
        """Extract a ResumeData from raw PDF, DOCX or plain-text bytes."""
        try:
            payload, payload_mime = document_loader.prepare_inline_document(content, mime_type)
        except Exception as e:
            logger.warning("Could not read %s upload: %s", mime_type, e)
            raise ParseError("Could not read the uploaded document") from e

        text = await self._generate(
            ParseError,
            model=self.parse_model,
            contents=[
                types.Part.from_bytes(data=payload, mime_type=payload_mime),
                prompt_builder.build_parse_prompt(),
            ],
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=RESUME_SCHEMA,
            ),
        )
        if not text or not text.strip():
            raise ParseError("No data returned from parsing")

        try:
            resume = ResumeData.model_validate_json(_strip_code_fences(text))
        except ValidationError as e:
            logger.warning("Gemini parse response did not match the resume schema: %s", e)
            raise ParseError("Resume parser returned invalid data") from e

        if not resume.full_name.strip():
            raise ParseError("No candidate name found in the document")

        resume.assign_unique_ids()
        resume.raw_text = RAW_TEXT_MARKER
        logger.info(
            "Parsed resume: %d experience, %d education entries",
            len(resume.experience),
            len(resume.education),
        )
        return resume

    async def analyze_match(self, resume: ResumeData, job_description: str) -> AnalysisResult:
        """Score a resume against a job description (empty = general best practice)."""
        text = await self._generate(
            AnalysisError,
            model=self.analysis_model,
            contents=prompt_builder.build_analysis_prompt(resume, job_description),
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=ANALYSIS_SCHEMA,
                thinking_config=types.ThinkingConfig(thinking_budget=self.thinking_budget),
            ),
        )
        if not text or not text.strip():
            raise AnalysisError("No analysis generated")

        try:
            analysis = AnalysisResult.model_validate_json(_strip_code_fences(text))
        except ValidationError as e:
            logger.warning("Gemini analysis response did not match the schema: %s", e)
            raise AnalysisError("Analysis returned invalid data") from e

        if not analysis.categories:
            raise AnalysisError("Analysis returned no score categories")
        return analysis

    async def rewrite_bullet(self, bullet_text: str, role_context: str) -> str:
        """Rewrite one bullet. Falls back to the original when Gemini returns nothing."""
        text = await self._generate(
            RewriteError,
            model=self.rewrite_model,
            contents=prompt_builder.build_rewrite_prompt(bullet_text, role_context),
        )
        rewritten = (text or "").strip()
        if not rewritten:
            logger.info("Empty rewrite returned, keeping original bullet")
            return bullet_text
        return rewritten
