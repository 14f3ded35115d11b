"""
Intake Context

Responsibilities:
- Ingests raw job posting text
- Extracts role, seniority, skills, tools and responsibilities via an LLM
- Validates the extraction strictly against the ParsedJobData schema

Owns: Job description extraction contract
Never: Scores profiles or reads stored candidate data
"""

from careersie.contexts.intake.job_data_structure import ParsedJobData
from careersie.contexts.intake.job_parser import extract_keywords, parse_job_description

__all__ = ["ParsedJobData", "extract_keywords", "parse_job_description"]
