"""All prompt templates for Gemini API calls."""

from models.schemas.resume import ResumeData

NO_JOB_DESCRIPTION = "No specific job description provided. Analyze for general best practices."

PARSE_PROMPT = """You are an expert ATS Resume Parser.
Extract the structured data from this resume document.
Normalize the data into clean JSON.
For 'id' fields, generate a unique string.
Ensure 'description' in experience is an array of bullet point strings."""


def build_parse_prompt() -> str:
    """Call A: structured extraction of an inline resume document."""
    return PARSE_PROMPT


def build_analysis_prompt(resume: ResumeData, job_description: str) -> str:
    """Call B: scoring against a job description.

    An empty job description switches the rubric to general ATS best practice.
    """
    resume_json = resume.model_dump_json(by_alias=True, exclude={"raw_text"})
    jd_text = job_description.strip() or NO_JOB_DESCRIPTION

    return f"""You are an advanced ATS (Applicant Tracking System) simulator and Resume Coach.

RESUME DATA:
---
{resume_json}
---

TARGET JOB DESCRIPTION:
---
{jd_text}
---

TASK:
Analyze the resume against the job description (if provided) or general ATS standards.
Provide a score (0-100) and detailed breakdown.

SCORING RUBRIC:
- Parsing Success: Is the data structured well?
- Keyword Match: Do skills match the JD?
- Impact: Do bullets use action verbs and metrics?
- Formatting: Are there potential parsing risks?

Give one category per rubric dimension, each scored 0-100 with a status of
"good", "warning" or "critical".

Return strict JSON matching the schema."""


def build_rewrite_prompt(bullet: str, role_context: str) -> str:
    """Call C: single bullet rewrite, free text out."""
    return f"""Rewrite the following resume bullet point to be more ATS-friendly and impactful.
Use strong action verbs.
Quantify results where possible (use placeholders like [X]% if needed).
Context: This is for a {role_context} role.

Original Bullet: "{bullet}"

Return ONLY the rewritten bullet point text, nothing else."""
