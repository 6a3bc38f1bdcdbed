"""
Prompt templates for the hosted model.

Resume content is passed to the model as JSON in the persisted camelCase shape,
so the model sees exactly what the user entered.
"""

import json

from hireme.contexts.editing.resume_data_structure import ResumeData

# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

_WRITER_SYSTEM_PROMPT = """\
You are a professional resume writer. Reply with the requested text only:
no preamble, no quotation marks, no markdown."""

_ANALYST_SYSTEM_PROMPT = """\
You are an ATS (Applicant Tracking System) expert. You compare resumes against job
descriptions and reply with a single JSON object in the requested shape."""

_SUMMARY_PROMPT_TEMPLATE = """\
Based on the following experience and skills, write a professional, concise executive
summary (max 3 sentences) for a resume.

Experience: {experience_json}
Skills: {skills_json}
Target Job: {target_job}

Return only the summary text."""

_IMPROVE_PROMPT_TEMPLATE = """\
Rewrite the following resume bullet point for a {role} position to be more impactful,
using action verbs and quantitative results where possible. Keep it concise.

Original: "{text}"

Return only the improved text."""

_ANALYSIS_PROMPT_TEMPLATE = """\
Analyze this resume against the provided Job Description (JD).

Resume Data: {resume_json}
Job Description: "{job_description}"

Provide the output in JSON format with the following schema:
{{
  "score": number (0-100),
  "atsCompatibility": "Low" | "Medium" | "High",
  "keywordMatches": string[],
  "missingKeywords": string[],
  "suggestions": string (short paragraph on how to improve)
}}"""

# JSON-schema style description of the analysis reply, translated per provider
ANALYSIS_RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "score": {"type": "integer"},
        "atsCompatibility": {"type": "string"},
        "keywordMatches": {"type": "array", "items": {"type": "string"}},
        "missingKeywords": {"type": "array", "items": {"type": "string"}},
        "suggestions": {"type": "string"},
    },
    "required": ["score", "atsCompatibility", "keywordMatches", "missingKeywords", "suggestions"],
}

# Placeholder role when an experience entry has no title yet
DEFAULT_ROLE = "professional"


# =============================================================================
# PROMPT BUILDERS
# =============================================================================


def writer_system_prompt() -> str:
    return _WRITER_SYSTEM_PROMPT


def analyst_system_prompt() -> str:
    return _ANALYST_SYSTEM_PROMPT


def build_summary_prompt(data: ResumeData) -> str:
    """Summary prompt from experience, skills and target job ("General" if empty)."""
    document = data.to_dict()
    return _SUMMARY_PROMPT_TEMPLATE.format(
        experience_json=json.dumps(document["experience"], ensure_ascii=False),
        skills_json=json.dumps(document["skills"], ensure_ascii=False),
        target_job=data.target_job_description or "General",
    )


def build_improve_prompt(text: str, role: str) -> str:
    """Rewrite prompt for one description or bullet."""
    return _IMPROVE_PROMPT_TEMPLATE.format(role=role or DEFAULT_ROLE, text=text)


def build_analysis_prompt(data: ResumeData) -> str:
    """Job-match prompt carrying the whole resume and the job description."""
    return _ANALYSIS_PROMPT_TEMPLATE.format(
        resume_json=json.dumps(data.to_dict(), ensure_ascii=False),
        job_description=data.target_job_description,
    )
