"""
LLM-based job description extraction for the Intake context.

Turns raw job posting prose into a validated ParsedJobData. The model call is
reached through a CompletionClient so callers (and tests) can inject their own.
"""

import json
import re
from typing import Any, Optional

from careersie.contexts.intake.job_data_structure import ParsedJobData
from careersie.contexts.intake.logger import _log_debug, _log_error, _log_info, _log_success
from careersie.contexts.intake.prompts import SYSTEM_PROMPT, build_extraction_prompt
from careersie.exceptions import ExtractionError, ExtractionSchemaError, ModelCallError
from careersie.utils.llm import CompletionClient, get_provider

_CODE_FENCE_OPEN = re.compile(r"^```(?:json)?\s*")
_CODE_FENCE_CLOSE = re.compile(r"\s*```$")


def parse_job_description(
    raw_text: str, client: Optional[CompletionClient] = None
) -> ParsedJobData:
    """
    Parse a job description with an LLM and extract structured data.

    Args:
        raw_text: Raw job posting text
        client: Completion client to use (default: provider from environment)

    Returns:
        Validated ParsedJobData

    Raises:
        ConfigurationError: No client given and the environment has no usable provider
        ExtractionError: raw_text is empty
        ModelCallError: The model call failed upstream
        ExtractionSchemaError: Response is not JSON or does not match the schema
    """
    # Resolve the client first so a missing credential is reported before anything else
    if client is None:
        client = get_provider()

    if not raw_text or not raw_text.strip():
        raise ExtractionError("Job description is empty")

    _log_info(f"Parsing job description ({len(raw_text)} chars)")

    try:
        response = client.complete(SYSTEM_PROMPT, build_extraction_prompt(raw_text))
    except ModelCallError as e:
        _log_error(f"Model call failed: {e}")
        raise
    _log_debug(f"Model response: {(response or '')[:500]}")

    try:
        data = _decode_json_object(response)
        parsed = ParsedJobData.from_dict(data, raw_response=response)
    except ExtractionSchemaError as e:
        _log_error(f"Extraction failed schema validation: {e.message}")
        raise

    _log_success(
        f"Parsed '{parsed.role}' ({parsed.seniority}): "
        f"{len(parsed.hard_skills)} hard skills, {len(parsed.responsibilities)} responsibilities"
    )
    return parsed


def extract_keywords(parsed: ParsedJobData) -> list[str]:
    """
    Collect unique normalized keywords from parsed job data.

    Concatenates hard_skills, soft_skills, tools and keywords, lower-cases and
    strips each, then removes duplicates keeping the first occurrence.
    """
    all_keywords = parsed.hard_skills + parsed.soft_skills + parsed.tools + parsed.keywords
    return list(dict.fromkeys(k.lower().strip() for k in all_keywords))


# =============================================================================
# RESPONSE PARSING
# =============================================================================


def _decode_json_object(text: str) -> Any:
    """
    Decode JSON from an LLM response, handling markdown code blocks.

    Unlike a lenient parser, this never returns a fallback value: anything
    that does not decode raises ExtractionSchemaError.
    """
    if text is None:
        raise ExtractionSchemaError("Model returned no content")

    stripped = text.strip()

    # Try direct parse first
    try:
        return json.loads(stripped)
    except json.JSONDecodeError:
        pass

    # Strip markdown code blocks
    unfenced = _CODE_FENCE_CLOSE.sub("", _CODE_FENCE_OPEN.sub("", stripped))
    try:
        return json.loads(unfenced)
    except json.JSONDecodeError:
        pass

    # Try the outermost JSON object embedded in surrounding prose
    start = unfenced.find("{")
    end = unfenced.rfind("}")
    if start != -1 and end > start:
        try:
            return json.loads(unfenced[start : end + 1])
        except json.JSONDecodeError:
            pass

    raise ExtractionSchemaError("Model response is not valid JSON", response_snippet=text)
