"""Unit tests for profile-to-job relevance scoring."""

import json
import random

import pytest

from careersie.contexts.intake.job_data_structure import ParsedJobData
from careersie.contexts.targeting.match_data_structures import ProfileData
from careersie.contexts.targeting.relevance_scorer import (
    SCORE_WEIGHTS,
    calculate_relevance_score,
    experience_alignment,
    match_skills,
    missing_skills,
    reorder_experience,
)
from careersie.contexts.targeting.similarity import round_half_up


def make_job(**overrides) -> ParsedJobData:
    data = {
        "role": "Frontend Engineer",
        "seniority": "Senior",
        "hard_skills": [],
        "soft_skills": [],
        "tools": [],
        "responsibilities": [],
        "requirements": [],
        "keywords": [],
        "nice_to_have": [],
    }
    data.update(overrides)
    return ParsedJobData(**data)


@pytest.fixture
def frontend_profile():
    return ProfileData(
        hard_skills=["React", "Node.js"],
        soft_skills=["communication"],
        seniority="Senior Engineer",
    )


@pytest.fixture
def frontend_job():
    return make_job(hard_skills=["react", "redux"], soft_skills=["communication"])


class TestEndToEndScenario:
    @pytest.mark.unit
    def test_score_breakdown(self, frontend_profile, frontend_job):
        breakdown = calculate_relevance_score(frontend_profile, frontend_job).score_breakdown

        assert breakdown.hard_skills == 33
        assert breakdown.soft_skills == 100
        assert breakdown.responsibilities == 0
        assert breakdown.keywords == 100
        assert breakdown.seniority == 100
        assert breakdown.overall == 53

    @pytest.mark.unit
    def test_match_details(self, frontend_profile, frontend_job):
        details = calculate_relevance_score(frontend_profile, frontend_job).match_details

        assert details.matched_hard_skills == ["React"]
        assert details.missing_hard_skills == ["redux"]
        assert details.matched_soft_skills == ["communication"]
        assert details.missing_soft_skills == []
        assert details.matched_keywords == []
        assert details.experience_alignment == "low"

    @pytest.mark.unit
    def test_result_is_json_serializable(self, frontend_profile, frontend_job):
        result = calculate_relevance_score(frontend_profile, frontend_job).to_dict()
        decoded = json.loads(json.dumps(result))

        assert set(decoded) == {"score_breakdown", "match_details"}
        assert decoded["score_breakdown"]["overall"] == 53


class TestMissingProfileFields:
    @pytest.mark.unit
    def test_empty_mapping_does_not_raise(self):
        job = make_job(hard_skills=["python"], keywords=["python"], seniority="Mid")
        breakdown = calculate_relevance_score({}, job).score_breakdown

        assert breakdown.hard_skills == 0
        assert breakdown.keywords == 0
        # Missing seniority defaults to mid
        assert breakdown.seniority == 100

    @pytest.mark.unit
    def test_record_with_wrong_types_is_tolerated(self):
        record = {"hard_skills": "python", "experience": None, "seniority": 7}
        profile = ProfileData.from_record(record)

        assert profile.hard_skills == []
        assert profile.experience == []
        assert profile.seniority == "mid"

    @pytest.mark.unit
    def test_experience_without_responsibilities(self):
        profile = {"experience": [{"title": "Engineer"}, {"responsibilities": None}]}
        job = make_job(responsibilities=["ship features"])

        assert calculate_relevance_score(profile, job).score_breakdown.responsibilities == 0


class TestScoring:
    @pytest.mark.unit
    def test_weights_sum_to_one(self):
        assert sum(SCORE_WEIGHTS.values()) == pytest.approx(1.0)

    @pytest.mark.unit
    def test_overall_uses_rounded_sub_scores(self):
        profile = ProfileData(
            hard_skills=["python", "sql", "go"],
            soft_skills=["teamwork", "ownership"],
            experience=[{"responsibilities": ["design data pipelines", "mentor engineers"]}],
            seniority="Lead",
        )
        job = make_job(
            seniority="Senior",
            hard_skills=["python", "spark"],
            soft_skills=["ownership"],
            responsibilities=["design batch pipelines", "mentor junior engineers"],
            keywords=["python", "pipelines", "airflow"],
        )
        breakdown = calculate_relevance_score(profile, job).score_breakdown

        expected = round_half_up(
            0.4 * breakdown.hard_skills
            + 0.2 * breakdown.soft_skills
            + 0.2 * breakdown.responsibilities
            + 0.1 * breakdown.keywords
            + 0.1 * breakdown.seniority
        )
        assert breakdown.overall == expected
        assert breakdown.hard_skills == 25
        assert breakdown.soft_skills == 50
        assert breakdown.keywords == 67
        assert breakdown.seniority == 70

    @pytest.mark.unit
    def test_overall_rounds_each_sub_score_first(self):
        keywords = [f"k{i}" for i in range(5)]
        profile = ProfileData(hard_skills=keywords, soft_skills=["a", "b"], seniority="Senior")
        job = make_job(soft_skills=["a", "b", "c"], keywords=keywords + ["zz1", "zz2"])
        breakdown = calculate_relevance_score(profile, job).score_breakdown

        assert breakdown.hard_skills == 0
        assert breakdown.soft_skills == 67
        assert breakdown.responsibilities == 0
        assert breakdown.keywords == 71
        assert breakdown.seniority == 100
        # 0.2 * 67 + 0.1 * 71 + 10 = 30.5; the unrounded sub-scores sum to about 30.48
        assert breakdown.overall == 31

    @pytest.mark.unit
    def test_responsibility_words_feed_keyword_pool(self):
        profile = ProfileData(experience=[{"responsibilities": ["Maintained Kubernetes clusters"]}])
        job = make_job(keywords=["kubernetes", "terraform"])
        result = calculate_relevance_score(profile, job)

        assert result.score_breakdown.keywords == 50
        assert result.match_details.matched_keywords == ["kubernetes"]

    @pytest.mark.unit
    def test_matching_responsibilities_align_high(self):
        responsibilities = ["build react components", "write unit tests"]
        profile = ProfileData(experience=[{"responsibilities": responsibilities}])
        job = make_job(responsibilities=responsibilities)
        result = calculate_relevance_score(profile, job)

        assert result.score_breakdown.responsibilities == 100
        assert result.match_details.experience_alignment == "high"

    @pytest.mark.unit
    def test_overall_is_integer_in_range(self):
        rng = random.Random(7)
        vocabulary = ["python", "react", "sql", "lead", "design", "apis", "teamwork", "go"]
        levels = ["Junior", "Mid", "Senior", "Lead", "Staff", "Principal", ""]

        for _ in range(50):
            profile = ProfileData(
                hard_skills=rng.sample(vocabulary, rng.randint(0, 4)),
                soft_skills=rng.sample(vocabulary, rng.randint(0, 3)),
                experience=[{"responsibilities": [" ".join(rng.sample(vocabulary, 3))]}],
                seniority=rng.choice(levels),
            )
            job = make_job(
                seniority=rng.choice(levels),
                hard_skills=rng.sample(vocabulary, rng.randint(0, 4)),
                soft_skills=rng.sample(vocabulary, rng.randint(0, 3)),
                responsibilities=[" ".join(rng.sample(vocabulary, 4))],
                keywords=rng.sample(vocabulary, rng.randint(0, 5)),
            )
            overall = calculate_relevance_score(profile, job).score_breakdown.overall

            assert isinstance(overall, int)
            assert 0 <= overall <= 100


class TestSkillExplanations:
    @pytest.mark.unit
    def test_substring_match_differs_from_jaccard(self):
        """React matches React.js in the explanation but not in the hard skill score."""
        profile = ProfileData(hard_skills=["React"])
        job = make_job(hard_skills=["React.js"])
        result = calculate_relevance_score(profile, job)

        assert result.score_breakdown.hard_skills == 0
        assert result.match_details.matched_hard_skills == ["React"]

    @pytest.mark.unit
    def test_match_direction_is_asymmetric(self):
        # Profile skill "React.js" is not contained in job skill "React"
        assert match_skills(["React.js"], ["React"]) == []
        # ...but job skill "React" is contained in profile skill "React.js"
        assert missing_skills(["React.js"], ["React"]) == []

    @pytest.mark.unit
    def test_missing_skills_keep_job_spelling(self):
        assert missing_skills(["python"], ["Python", "Go"]) == ["Go"]

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "similarity, expected", [(0.71, "high"), (0.7, "medium"), (0.41, "medium"), (0.4, "low")]
    )
    def test_experience_alignment_thresholds(self, similarity, expected):
        assert experience_alignment(similarity) == expected


class TestReorderExperience:
    JOB_RESPONSIBILITIES = ["build data pipelines", "own data quality"]

    @pytest.mark.unit
    def test_sorted_by_relevance(self):
        experience = [
            {"title": "Barista", "responsibilities": ["make coffee"]},
            {"title": "Data Engineer", "responsibilities": ["build data pipelines"]},
            {"title": "Analyst", "responsibilities": ["report on data"]},
        ]
        ranked = reorder_experience(experience, self.JOB_RESPONSIBILITIES)

        assert [exp["title"] for exp in ranked] == ["Data Engineer", "Analyst", "Barista"]
        assert ranked[-1]["relevance"] == 0
        relevances = [exp["relevance"] for exp in ranked]
        assert relevances == sorted(relevances, reverse=True)
        assert all(isinstance(r, int) for r in relevances)

    @pytest.mark.unit
    def test_input_not_mutated(self):
        experience = [{"title": "Engineer", "responsibilities": ["build data pipelines"]}]
        reorder_experience(experience, self.JOB_RESPONSIBILITIES)

        assert "relevance" not in experience[0]

    @pytest.mark.unit
    def test_missing_responsibilities_score_zero(self):
        ranked = reorder_experience([{"title": "Volunteer"}], self.JOB_RESPONSIBILITIES)
        assert ranked == [{"title": "Volunteer", "relevance": 0}]

    @pytest.mark.unit
    def test_equal_relevance_keeps_input_order(self):
        """Compare against a stable-sort oracle after shuffling tied entries."""
        rng = random.Random(42)
        experience = [
            {"id": i, "responsibilities": ["build data pipelines"] if i % 2 else ["make coffee"]}
            for i in range(10)
        ]

        for _ in range(5):
            rng.shuffle(experience)
            ranked = reorder_experience(experience, self.JOB_RESPONSIBILITIES)

            relevance_of = {
                exp["id"]: reorder_experience([exp], self.JOB_RESPONSIBILITIES)[0]["relevance"]
                for exp in experience
            }
            oracle = sorted(experience, key=lambda exp: -relevance_of[exp["id"]])

            assert [exp["id"] for exp in ranked] == [exp["id"] for exp in oracle]
