"""
Prompt text for LLM-based job description extraction.
"""

import json

# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

SYSTEM_PROMPT = """\
You are an expert job description analyzer. Extract structured information from job postings.
Return ONLY a JSON object with exactly the requested keys. Use an empty list for any list
field you cannot find. Never omit a key."""

_USER_PROMPT_TEMPLATE = """\
Parse the following job description and extract structured information.
Extract and categorize all relevant information. Be thorough and accurate.

Return a JSON object with these exact keys:

{fields_json}

---
Job Description:
{job_description}"""

# =============================================================================
# FIELD INSTRUCTIONS
# =============================================================================

FIELD_INSTRUCTIONS = {
    "role": "string. The job title/role.",
    "seniority": "string. Seniority level: Junior, Mid, Senior, Lead, Principal, etc.",
    "hard_skills": "list of strings. Technical skills required (e.g., Java, React, SQL).",
    "soft_skills": "list of strings. Soft skills (e.g., communication, leadership, teamwork).",
    "tools": "list of strings. Tools and technologies (e.g., Git, Docker, AWS).",
    "responsibilities": "list of strings. Key responsibilities and duties.",
    "requirements": "list of strings. Required qualifications and experience.",
    "keywords": "list of strings. Important keywords from the job description.",
    "nice_to_have": "list of strings. Nice-to-have skills or qualifications.",
}


def build_extraction_prompt(job_description: str) -> str:
    """
    Build the user prompt for extracting ParsedJobData from a job posting.

    Args:
        job_description: Raw job posting text (no length cap applied here)

    Returns:
        User prompt string for the LLM
    """
    return _USER_PROMPT_TEMPLATE.format(
        fields_json=json.dumps(FIELD_INSTRUCTIONS, indent=2),
        job_description=job_description,
    )
