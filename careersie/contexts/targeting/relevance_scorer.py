"""
Relevance scoring of a candidate profile against parsed job requirements.

Score dimensions and weights:
- hard_skills (0.4): Jaccard similarity of hard skill sets
- soft_skills (0.2): Jaccard similarity of soft skill sets
- responsibilities (0.2): bag-of-words cosine of experience vs job responsibilities
- keywords (0.1): share of job keywords found in the profile
- seniority (0.1): step score by distance on the seniority ladder

Each sub-score is rounded on its own, and the overall score is the rounded
weighted sum of those rounded sub-scores.

The matched/missing skill lists are explanations, computed with substring
containment rather than the exact sets behind the Jaccard score. The two can
disagree at the margins ("React" is listed as matching "React.js" while the
hard skill score sees no overlap).
"""

from typing import Any, Mapping, Union

from careersie.contexts.intake.job_data_structure import ParsedJobData
from careersie.contexts.targeting.logger import _log_debug
from careersie.contexts.targeting.match_data_structures import (
    MatchDetails,
    ProfileData,
    RelevanceScore,
    ScoreBreakdown,
)
from careersie.contexts.targeting.seniority import seniority_alignment
from careersie.contexts.targeting.similarity import (
    contains_keyword,
    cosine_similarity,
    jaccard_similarity,
    keyword_overlap,
    round_half_up,
)

SCORE_WEIGHTS = {
    "hard_skills": 0.4,
    "soft_skills": 0.2,
    "responsibilities": 0.2,
    "keywords": 0.1,
    "seniority": 0.1,
}

# Raw responsibilities cosine thresholds for experience_alignment
HIGH_ALIGNMENT_THRESHOLD = 0.7
MEDIUM_ALIGNMENT_THRESHOLD = 0.4


def match_skills(profile_skills: list[str], job_skills: list[str]) -> list[str]:
    """Profile skills contained (case-insensitively) in at least one job skill."""
    return [
        skill
        for skill in profile_skills
        if any(skill.lower() in job_skill.lower() for job_skill in job_skills)
    ]


def missing_skills(profile_skills: list[str], job_skills: list[str]) -> list[str]:
    """Job skills not contained (case-insensitively) in any profile skill."""
    return [
        skill
        for skill in job_skills
        if not any(skill.lower() in profile_skill.lower() for profile_skill in profile_skills)
    ]


def experience_alignment(responsibilities_similarity: float) -> str:
    if responsibilities_similarity > HIGH_ALIGNMENT_THRESHOLD:
        return "high"
    if responsibilities_similarity > MEDIUM_ALIGNMENT_THRESHOLD:
        return "medium"
    return "low"


def calculate_relevance_score(
    profile: Union[ProfileData, Mapping[str, Any]], job: ParsedJobData
) -> RelevanceScore:
    """
    Calculate the weighted relevance of a profile to a job.

    Args:
        profile: ProfileData, or a raw profile record with any fields missing
        job: Validated job extraction

    Returns:
        RelevanceScore with score_breakdown and match_details

    Example:
        >>> profile = ProfileData(hard_skills=["React", "Node.js"], seniority="Senior Engineer")
        >>> job = ParsedJobData(role="Frontend Engineer", seniority="Senior",
        ...                     hard_skills=["react", "redux"])
        >>> calculate_relevance_score(profile, job).score_breakdown.hard_skills
        33
    """
    if not isinstance(profile, ProfileData):
        profile = ProfileData.from_record(profile)

    profile_responsibilities = profile.all_responsibilities()

    hard_skills_score = jaccard_similarity(profile.hard_skills, job.hard_skills) * 100
    soft_skills_score = jaccard_similarity(profile.soft_skills, job.soft_skills) * 100

    responsibilities_similarity = cosine_similarity(
        profile_responsibilities, job.responsibilities
    )
    responsibilities_score = responsibilities_similarity * 100

    # Keyword pool: skills as written plus every word of every responsibility
    profile_keywords = (
        profile.hard_skills
        + profile.soft_skills
        + " ".join(profile_responsibilities).split()
    )
    keywords_score = keyword_overlap(profile_keywords, job.keywords)

    seniority_score = seniority_alignment(profile.seniority, job.seniority)

    sub_scores = {
        "hard_skills": round_half_up(hard_skills_score),
        "soft_skills": round_half_up(soft_skills_score),
        "responsibilities": round_half_up(responsibilities_score),
        "keywords": round_half_up(keywords_score),
        "seniority": round_half_up(seniority_score),
    }
    overall = round_half_up(
        sum(SCORE_WEIGHTS[dimension] * score for dimension, score in sub_scores.items())
    )

    _log_debug(f"Scored '{job.role}': {sub_scores} -> overall {overall}")

    return RelevanceScore(
        score_breakdown=ScoreBreakdown(**sub_scores, overall=overall),
        match_details=MatchDetails(
            matched_hard_skills=match_skills(profile.hard_skills, job.hard_skills),
            missing_hard_skills=missing_skills(profile.hard_skills, job.hard_skills),
            matched_soft_skills=match_skills(profile.soft_skills, job.soft_skills),
            missing_soft_skills=missing_skills(profile.soft_skills, job.soft_skills),
            matched_keywords=[
                keyword for keyword in job.keywords if contains_keyword(profile_keywords, keyword)
            ],
            experience_alignment=experience_alignment(responsibilities_similarity),
        ),
    )


def reorder_experience(
    experience: list[Mapping[str, Any]], job_responsibilities: list[str]
) -> list[dict[str, Any]]:
    """
    Rank experience entries by similarity to the job's responsibilities.

    Each entry is copied with an added integer "relevance" (cosine x 100,
    rounded). Sorting is stable, so equal relevance keeps input order.
    """
    scored = [
        {
            **exp,
            "relevance": round_half_up(
                cosine_similarity(exp.get("responsibilities") or [], job_responsibilities) * 100
            ),
        }
        for exp in experience
    ]
    return sorted(scored, key=lambda exp: exp["relevance"], reverse=True)
