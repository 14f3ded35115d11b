"""
Structured job description data for the Intake context.

Provides ParsedJobData, the schema every extraction must satisfy before the
Targeting context is allowed to score against it.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Mapping, Optional

from careersie.exceptions import ExtractionSchemaError

STRING_FIELDS = ("role", "seniority")

LIST_FIELDS = (
    "hard_skills",
    "soft_skills",
    "tools",
    "responsibilities",
    "requirements",
    "keywords",
    "nice_to_have",
)

REQUIRED_FIELDS = STRING_FIELDS + LIST_FIELDS


@dataclass
class ParsedJobData:
    """
    Structured extraction of a job posting's requirements.

    Created once per job posting parse and treated as immutable afterwards.
    List fields are never None; an extraction that found nothing yields an
    empty list. Duplicates are kept as extracted (see extract_keywords).
    """

    role: str
    seniority: str
    hard_skills: list[str] = field(default_factory=list)
    soft_skills: list[str] = field(default_factory=list)
    tools: list[str] = field(default_factory=list)
    responsibilities: list[str] = field(default_factory=list)
    requirements: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    nice_to_have: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any], raw_response: Optional[str] = None
    ) -> "ParsedJobData":
        """
        Validate a decoded model response and build a ParsedJobData.

        Every required key must be present with the right type. Nothing is
        defaulted: an incomplete response is a hard failure.

        Args:
            data: Decoded JSON object
            raw_response: Original response text, attached to errors for debugging

        Returns:
            ParsedJobData instance

        Raises:
            ExtractionSchemaError: If data is not a mapping, or keys are missing or mistyped
        """
        if not isinstance(data, Mapping):
            raise ExtractionSchemaError(
                f"Expected a JSON object, got {type(data).__name__}",
                response_snippet=raw_response,
            )

        missing = [key for key in REQUIRED_FIELDS if key not in data]

        invalid = [
            key for key in STRING_FIELDS if key in data and not isinstance(data[key], str)
        ]
        invalid += [
            key
            for key in LIST_FIELDS
            if key in data
            and not (
                isinstance(data[key], list) and all(isinstance(item, str) for item in data[key])
            )
        ]

        if missing or invalid:
            raise ExtractionSchemaError(
                "Model response does not match the ParsedJobData schema",
                missing_keys=missing,
                invalid_keys=invalid,
                response_snippet=raw_response,
            )

        return cls(**{key: data[key] for key in REQUIRED_FIELDS})

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable representation, suitable for storing as parsed_data."""
        return asdict(self)
