"""
Customized story versions built from relevance scores.

A customized story version records how a profile scored against a job so the
tailored story can be revisited later. Records are appended to a JSON Lines
file (one JSON object per line), which stands in for the customized stories
table.

Usage:
    from careersie.contexts.targeting.story_versions import (
        append_story_version,
        build_story_version,
    )

    record = build_story_version(
        profile_id="p-1",
        job_post_id="j-9",
        version_name="Acme frontend",
        relevance=calculate_relevance_score(profile, job),
    )
    append_story_version(record)
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from careersie.contexts.targeting.logger import _log_info
from careersie.contexts.targeting.match_data_structures import RelevanceScore
from careersie.utils.timestamp import now_exact

load_dotenv()
STORY_VERSIONS_FILE = Path(os.getenv("STORY_VERSIONS_FILE", "outs/story_versions.jsonl"))


def build_story_version(
    profile_id: str,
    job_post_id: str,
    version_name: str,
    relevance: RelevanceScore,
    story: Optional[str] = None,
) -> dict[str, Any]:
    """
    Build a customized story version record from a relevance score.

    Args:
        profile_id: Scored profile
        job_post_id: Job post scored against
        version_name: User-facing name of this version
        relevance: Result of calculate_relevance_score()
        story: Tailored story text (default: placeholder naming the version)

    Returns:
        JSON-serializable record

    Raises:
        ValueError: If profile_id, job_post_id or version_name is empty
    """
    missing = [
        name
        for name, value in (
            ("profile_id", profile_id),
            ("job_post_id", job_post_id),
            ("version_name", version_name),
        )
        if not value
    ]
    if missing:
        raise ValueError(f"{', '.join(missing)} required to save a story version")

    breakdown = relevance.score_breakdown

    return {
        "profile_id": profile_id,
        "job_post_id": job_post_id,
        "version_name": version_name,
        "story": story if story is not None else f"Customized story for {version_name}",
        "highlighted_skills": list(relevance.match_details.matched_hard_skills),
        "match_score": breakdown.overall,
        "score_breakdown": relevance.to_dict()["score_breakdown"],
        "is_active": True,
        "created_at": now_exact(),
    }


def append_story_version(record: dict[str, Any], path: Optional[Path] = None) -> Path:
    """
    Append a story version record to the JSON Lines store.

    Args:
        record: Record from build_story_version()
        path: Store file (default: STORY_VERSIONS_FILE)

    Returns:
        Path written to
    """
    path = path or STORY_VERSIONS_FILE
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "a", encoding="utf-8") as f:
        f.write(json.dumps(record) + "\n")

    _log_info(
        f"Saved story version '{record['version_name']}' "
        f"(job {record['job_post_id']}, score {record['match_score']})"
    )
    return path


def load_story_versions(
    path: Optional[Path] = None,
    job_post_id: Optional[str] = None,
    profile_id: Optional[str] = None,
    active_only: bool = False,
) -> list[dict[str, Any]]:
    """
    Read story version records, optionally filtered.

    Returns:
        Records in the order they were saved (oldest first)
    """
    path = path or STORY_VERSIONS_FILE
    if not path.exists():
        return []

    records = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            try:
                records.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                # Skip malformed lines
                continue

    if job_post_id:
        records = [r for r in records if r.get("job_post_id") == job_post_id]

    if profile_id:
        records = [r for r in records if r.get("profile_id") == profile_id]

    if active_only:
        records = [r for r in records if r.get("is_active")]

    return records
