"""
Targeting Context

Responsibilities:
- Scores relevance of a candidate profile against parsed job requirements
- Orders past experience by similarity to the job's responsibilities
- Reports matched and missing skills, skill gaps and skills worth learning
- Builds customized story version records from a score

Owns: Similarity metrics, weighting, seniority ladder, match explanations
Never: Calls the LLM or parses raw job descriptions
"""

from careersie.contexts.targeting.match_data_structures import (
    MatchDetails,
    ProfileData,
    RelevanceScore,
    ScoreBreakdown,
)
from careersie.contexts.targeting.relevance_scorer import (
    calculate_relevance_score,
    reorder_experience,
)

__all__ = [
    "MatchDetails",
    "ProfileData",
    "RelevanceScore",
    "ScoreBreakdown",
    "calculate_relevance_score",
    "reorder_experience",
]
