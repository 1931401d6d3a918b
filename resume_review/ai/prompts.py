from __future__ import annotations

import json
from typing import Any

SYSTEM_INSTRUCTION = (
    "You are an expert HR recruiter and professional resume reviewer. "
    "Analyze the provided resume and extract structured information. "
    "Provide an overall score (0-100) and specific breakdown scores. "
    "Identify improvements and upskilling opportunities based on modern industry standards. "
    "Ensure the output is valid JSON according to the specified schema."
)

IMAGE_PROMPT = "Analyze this resume image."


def text_prompt(resume_text: str) -> str:
    return f"Analyze this resume text: {resume_text}"


def _string() -> dict[str, Any]:
    return {"type": "STRING"}


def _string_list() -> dict[str, Any]:
    return {"type": "ARRAY", "items": _string()}


RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "personalInfo": {
            "type": "OBJECT",
            "properties": {
                "name": _string(),
                "email": _string(),
                "phone": _string(),
                "linkedin": _string(),
            },
            "required": ["name"],
        },
        "score": {
            "type": "OBJECT",
            "properties": {
                "overall": {"type": "NUMBER"},
                "formatting": {"type": "NUMBER"},
                "impact": {"type": "NUMBER"},
                "keywords": {"type": "NUMBER"},
                "relevance": {"type": "NUMBER"},
            },
            "required": ["overall", "formatting", "impact", "keywords", "relevance"],
        },
        "summary": _string(),
        "sections": {
            "type": "OBJECT",
            "properties": {
                "experience": {
                    "type": "ARRAY",
                    "items": {
                        "type": "OBJECT",
                        "properties": {
                            "company": _string(),
                            "role": _string(),
                            "duration": _string(),
                            "description": _string_list(),
                        },
                    },
                },
                "education": {
                    "type": "ARRAY",
                    "items": {
                        "type": "OBJECT",
                        "properties": {
                            "institution": _string(),
                            "degree": _string(),
                            "year": _string(),
                        },
                    },
                },
                "skills": _string_list(),
            },
        },
        "improvements": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "category": _string(),
                    "suggestion": _string(),
                    "priority": {"type": "STRING", "enum": ["High", "Medium", "Low"]},
                },
            },
        },
        "upskilling": _string_list(),
    },
    "required": ["personalInfo", "score", "summary", "sections", "improvements", "upskilling"],
}


def json_schema_instruction() -> str:
    """System prompt variant for providers without native response schemas."""
    return (
        f"{SYSTEM_INSTRUCTION}\n"
        "Respond with a single JSON object matching this schema "
        "(types are OpenAPI style, scores are integers 0-100):\n"
        f"{json.dumps(RESPONSE_SCHEMA, ensure_ascii=False)}"
    )
