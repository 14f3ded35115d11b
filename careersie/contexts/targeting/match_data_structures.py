"""
Data structures for profile-to-job matching in the Targeting context.

ProfileData is the scoring-relevant subset of a stored candidate profile.
ScoreBreakdown, MatchDetails and RelevanceScore are the scorer's outputs and
serialize to the JSON shapes returned by the job-match endpoint.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Mapping

DEFAULT_SENIORITY = "mid"


@dataclass
class ProfileData:
    """
    Scoring-relevant subset of a candidate profile.

    Every field is optional at the boundary; absent values become empty lists
    and the "mid" seniority.
    """

    hard_skills: list[str] = field(default_factory=list)
    soft_skills: list[str] = field(default_factory=list)
    experience: list[dict[str, Any]] = field(default_factory=list)
    seniority: str = DEFAULT_SENIORITY

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ProfileData":
        """
        Build ProfileData from a stored profile row.

        Wrongly typed columns are treated as absent: a non-list skill column
        becomes [] and a non-string seniority becomes "mid".
        """

        def _list_of(key: str) -> list:
            value = record.get(key)
            return list(value) if isinstance(value, list) else []

        seniority = record.get("seniority")

        return cls(
            hard_skills=_list_of("hard_skills"),
            soft_skills=_list_of("soft_skills"),
            experience=[exp for exp in _list_of("experience") if isinstance(exp, Mapping)],
            seniority=seniority if isinstance(seniority, str) and seniority else DEFAULT_SENIORITY,
        )

    def all_responsibilities(self) -> list[str]:
        """Responsibilities of every experience entry, flattened in order."""
        return [
            responsibility
            for exp in self.experience
            for responsibility in (exp.get("responsibilities") or [])
        ]


@dataclass
class ScoreBreakdown:
    """Per-dimension sub-scores and the weighted overall score, all integers in [0, 100]."""

    hard_skills: int
    soft_skills: int
    responsibilities: int
    keywords: int
    seniority: int
    overall: int


@dataclass
class MatchDetails:
    """Human-readable explanation of a match."""

    matched_hard_skills: list[str]
    missing_hard_skills: list[str]
    matched_soft_skills: list[str]
    missing_soft_skills: list[str]
    matched_keywords: list[str]
    experience_alignment: str  # "high" | "medium" | "low"


@dataclass
class RelevanceScore:
    score_breakdown: ScoreBreakdown
    match_details: MatchDetails

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
