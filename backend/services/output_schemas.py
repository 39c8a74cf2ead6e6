"""Structured-output schemas declared to Gemini.

Field names mirror the camelCase JSON of ``models.schemas`` one for one.
"""

from google.genai import types

_STRING = types.Schema(type=types.Type.STRING)
_STRING_LIST = types.Schema(type=types.Type.ARRAY, items=_STRING)

RESUME_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "fullName": _STRING,
        "contactInfo": types.Schema(
            type=types.Type.OBJECT,
            properties={
                "email": _STRING,
                "phone": _STRING,
                "linkedin": _STRING,
                "location": _STRING,
            },
        ),
        "summary": _STRING,
        "skills": _STRING_LIST,
        "experience": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "id": _STRING,
                    "company": _STRING,
                    "role": _STRING,
                    "dates": _STRING,
                    "location": _STRING,
                    "description": _STRING_LIST,
                },
            ),
        ),
        "education": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "id": _STRING,
                    "school": _STRING,
                    "degree": _STRING,
                    "dates": _STRING,
                },
            ),
        ),
    },
)

ANALYSIS_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "overallScore": types.Schema(type=types.Type.NUMBER),
        "categories": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "name": _STRING,
                    "score": types.Schema(type=types.Type.NUMBER),
                    "feedback": _STRING,
                    "status": types.Schema(
                        type=types.Type.STRING,
                        enum=["good", "warning", "critical"],
                    ),
                },
                required=["name", "score", "feedback", "status"],
            ),
        ),
        "keywordGaps": _STRING_LIST,
        "formattingIssues": _STRING_LIST,
        "topStrengths": _STRING_LIST,
        "tailoringSuggestions": _STRING_LIST,
    },
    required=["overallScore", "categories"],
)
