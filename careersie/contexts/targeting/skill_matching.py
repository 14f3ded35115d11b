"""
Skill gap analysis across one or more parsed jobs.

Matching here is bidirectional substring containment after lower-casing and
trimming, so "React" and "React.js" count as the same skill in either
direction. Required skills are a job's hard skills plus tools; nice-to-have
skills come from nice_to_have.
"""

from collections import Counter
from dataclasses import dataclass

from careersie.contexts.intake.job_data_structure import ParsedJobData

REQUIRED_WEIGHT = 0.7
NICE_TO_HAVE_WEIGHT = 0.3

HIGH_PRIORITY_RATIO = 0.7
MEDIUM_PRIORITY_RATIO = 0.4


@dataclass
class SkillMatch:
    matches: list[str]
    score: float


@dataclass
class SkillGap:
    """Required and nice-to-have coverage of a job by a set of user skills."""

    matched_required: list[str]
    missing_required: list[str]
    matched_nice_to_have: list[str]
    missing_nice_to_have: list[str]
    coverage_score: float


@dataclass
class RankedJob:
    job: ParsedJobData
    match_score: float
    coverage_score: float


@dataclass
class SkillRecommendation:
    skill: str
    demand_count: int
    priority: str  # "high" | "medium" | "low"


def _normalize(skill: str) -> str:
    return skill.lower().strip()


def skills_overlap(skill1: str, skill2: str) -> bool:
    """True if either normalized skill contains the other."""
    a, b = _normalize(skill1), _normalize(skill2)
    return a in b or b in a


def _has_skill(user_skills: list[str], skill: str) -> bool:
    return any(skills_overlap(user_skill, skill) for user_skill in user_skills)


def required_skills(job: ParsedJobData) -> list[str]:
    return job.hard_skills + job.tools


def calculate_skill_match(user_skills: list[str], job_skills: list[str]) -> SkillMatch:
    """
    Share of job skills covered by the user's skills.

    Returns:
        SkillMatch with the matching user skills (normalized) and
        score = matches / len(job_skills), or 0 when the job lists no skills
    """
    matches = [
        _normalize(user_skill)
        for user_skill in user_skills
        if any(skills_overlap(user_skill, job_skill) for job_skill in job_skills)
    ]
    score = len(matches) / len(job_skills) if job_skills else 0.0
    return SkillMatch(matches=matches, score=score)


def calculate_skill_gap(user_skills: list[str], job: ParsedJobData) -> SkillGap:
    """
    Required and nice-to-have skills the user has and lacks for a job.

    Coverage weights required skills at 0.7 and nice-to-have at 0.3. An empty
    category counts as fully covered.
    """
    required = required_skills(job)

    matched_required = [skill for skill in required if _has_skill(user_skills, skill)]
    missing_required = [skill for skill in required if skill not in matched_required]

    matched_nice = [skill for skill in job.nice_to_have if _has_skill(user_skills, skill)]
    missing_nice = [skill for skill in job.nice_to_have if skill not in matched_nice]

    required_coverage = len(matched_required) / len(required) if required else 1.0
    nice_coverage = len(matched_nice) / len(job.nice_to_have) if job.nice_to_have else 1.0

    return SkillGap(
        matched_required=matched_required,
        missing_required=missing_required,
        matched_nice_to_have=matched_nice,
        missing_nice_to_have=missing_nice,
        coverage_score=required_coverage * REQUIRED_WEIGHT + nice_coverage * NICE_TO_HAVE_WEIGHT,
    )


def rank_jobs_by_skill_match(
    user_skills: list[str], jobs: list[ParsedJobData]
) -> list[RankedJob]:
    """Rank jobs by skill gap coverage, best first; ties keep input order."""
    ranked = [
        RankedJob(
            job=job,
            match_score=calculate_skill_match(
                user_skills, required_skills(job) + job.nice_to_have
            ).score,
            coverage_score=calculate_skill_gap(user_skills, job).coverage_score,
        )
        for job in jobs
    ]
    return sorted(ranked, key=lambda r: r.coverage_score, reverse=True)


def recommend_skills(
    user_skills: list[str], target_jobs: list[ParsedJobData], max_recommendations: int = 10
) -> list[SkillRecommendation]:
    """
    Skills the user lacks, ordered by how many target jobs ask for them.

    Priority is relative to the most demanded missing skill: a demand ratio
    of at least 0.7 is "high", at least 0.4 "medium", otherwise "low".
    """
    demand = Counter(
        _normalize(skill)
        for job in target_jobs
        for skill in required_skills(job) + job.nice_to_have
    )

    missing = [
        (skill, count) for skill, count in demand.most_common() if not _has_skill(user_skills, skill)
    ][:max_recommendations]

    if not missing:
        return []

    max_demand = missing[0][1]

    recommendations = []
    for skill, count in missing:
        ratio = count / max_demand
        if ratio >= HIGH_PRIORITY_RATIO:
            priority = "high"
        elif ratio >= MEDIUM_PRIORITY_RATIO:
            priority = "medium"
        else:
            priority = "low"
        recommendations.append(SkillRecommendation(skill=skill, demand_count=count, priority=priority))

    return recommendations
