"""Unit tests for skill gap analysis."""

import pytest

from careersie.contexts.intake.job_data_structure import ParsedJobData
from careersie.contexts.targeting.skill_matching import (
    calculate_skill_gap,
    calculate_skill_match,
    rank_jobs_by_skill_match,
    recommend_skills,
    skills_overlap,
)


def make_job(role, hard_skills=(), tools=(), nice_to_have=()) -> ParsedJobData:
    return ParsedJobData(
        role=role,
        seniority="Mid",
        hard_skills=list(hard_skills),
        tools=list(tools),
        nice_to_have=list(nice_to_have),
    )


@pytest.mark.unit
def test_skills_overlap_is_bidirectional():
    assert skills_overlap("React", "react.js")
    assert skills_overlap("React.js", " react")
    assert not skills_overlap("Go", "Rust")


class TestCalculateSkillMatch:
    @pytest.mark.unit
    def test_score_is_share_of_job_skills(self):
        match = calculate_skill_match(["Python", "Docker"], ["python", "aws", "docker", "sql"])

        assert match.matches == ["python", "docker"]
        assert match.score == 0.5

    @pytest.mark.unit
    def test_no_job_skills(self):
        assert calculate_skill_match(["python"], []).score == 0


class TestCalculateSkillGap:
    @pytest.mark.unit
    def test_gap_lists_and_coverage(self):
        job = make_job(
            "Backend Engineer",
            hard_skills=["Python", "PostgreSQL"],
            tools=["Docker", "Kubernetes"],
            nice_to_have=["Go", "Terraform"],
        )
        gap = calculate_skill_gap(["python", "postgres", "Docker", "terraform"], job)

        assert gap.matched_required == ["Python", "PostgreSQL", "Docker"]
        assert gap.missing_required == ["Kubernetes"]
        assert gap.matched_nice_to_have == ["Terraform"]
        assert gap.missing_nice_to_have == ["Go"]
        assert gap.coverage_score == pytest.approx(0.75 * 0.7 + 0.5 * 0.3)

    @pytest.mark.unit
    def test_empty_categories_count_as_covered(self):
        gap = calculate_skill_gap([], make_job("Generalist"))
        assert gap.coverage_score == pytest.approx(1.0)

    @pytest.mark.unit
    def test_no_user_skills(self):
        gap = calculate_skill_gap([], make_job("Dev", hard_skills=["Python"], nice_to_have=["Go"]))

        assert gap.missing_required == ["Python"]
        assert gap.coverage_score == pytest.approx(0.0)


class TestRanking:
    @pytest.mark.unit
    def test_rank_by_coverage(self):
        jobs = [
            make_job("Data", hard_skills=["Spark", "Scala"]),
            make_job("Web", hard_skills=["Python", "Django"]),
            make_job("Ops", hard_skills=["Python", "Ansible"]),
        ]
        ranked = rank_jobs_by_skill_match(["python", "django"], jobs)

        assert [r.job.role for r in ranked] == ["Web", "Ops", "Data"]
        assert ranked[0].match_score == 1.0
        assert ranked[0].coverage_score == pytest.approx(1.0)

    @pytest.mark.unit
    def test_recommend_skills(self):
        jobs = [
            make_job("A", hard_skills=["Kubernetes", "Python"], tools=["Terraform"]),
            make_job("B", hard_skills=["kubernetes"], nice_to_have=["Terraform"]),
            make_job("C", hard_skills=["Kubernetes", "Rust"]),
        ]
        recommendations = recommend_skills(["Python"], jobs)

        assert [(r.skill, r.demand_count, r.priority) for r in recommendations] == [
            ("kubernetes", 3, "high"),
            ("terraform", 2, "medium"),
            ("rust", 1, "low"),
        ]

    @pytest.mark.unit
    def test_recommend_skills_limit_and_empty(self):
        jobs = [make_job("A", hard_skills=["Go", "Rust", "Zig"])]

        assert len(recommend_skills([], jobs, max_recommendations=2)) == 2
        assert recommend_skills(["go", "rust", "zig"], jobs) == []
