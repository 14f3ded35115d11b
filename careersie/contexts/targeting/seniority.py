"""
Seniority ladder and alignment scoring.
"""

SENIORITY_LEVELS = ["junior", "mid", "senior", "lead", "principal", "staff"]

# Checked in order; the first matching bucket wins.
# "staff" shares the "principal" bucket, so no label ever normalizes to "staff".
_LEVEL_MARKERS = [
    ("junior", ("junior", "entry")),
    ("mid", ("mid", "intermediate")),
    ("senior", ("senior",)),
    ("lead", ("lead",)),
    ("principal", ("principal", "staff")),
]

DEFAULT_LEVEL = "mid"

# Score by ordinal distance between levels; anything further apart scores 20
DISTANCE_SCORES = {0: 100, 1: 70, 2: 40}
FAR_DISTANCE_SCORE = 20


def normalize_seniority(label: str) -> str:
    """
    Map a free-text seniority label onto the ladder.

    Examples:
        normalize_seniority("Senior Engineer")  # "senior"
        normalize_seniority("Entry level")      # "junior"
        normalize_seniority("Staff Engineer")   # "principal"
        normalize_seniority("")                 # "mid"
    """
    lower = (label or "").lower()
    for level, markers in _LEVEL_MARKERS:
        if any(marker in lower for marker in markers):
            return level
    return DEFAULT_LEVEL


def seniority_distance(profile_seniority: str, job_seniority: str) -> int:
    profile_index = SENIORITY_LEVELS.index(normalize_seniority(profile_seniority))
    job_index = SENIORITY_LEVELS.index(normalize_seniority(job_seniority))
    return abs(profile_index - job_index)


def seniority_alignment(profile_seniority: str, job_seniority: str) -> int:
    """Step score for how close two seniority labels sit on the ladder (100/70/40/20)."""
    distance = seniority_distance(profile_seniority, job_seniority)
    return DISTANCE_SCORES.get(distance, FAR_DISTANCE_SCORE)
