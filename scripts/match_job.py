#!/usr/bin/env python3
"""
Score a candidate profile against a parsed job description.

Both inputs are YAML or JSON files. The profile needs any of hard_skills,
soft_skills, experience and seniority; the job file must hold a complete
ParsedJobData (as written by parse_job.py).

Usage:
    python scripts/match_job.py profile.yaml parsed/acme.yaml
    python scripts/match_job.py profile.yaml parsed/acme.yaml --reorder --gap
    python scripts/match_job.py profile.yaml parsed/acme.yaml --json
    python scripts/match_job.py profile.yaml parsed/acme.yaml \\
        --save-version "Acme frontend" --profile-id p-1 --job-id j-9
"""

import json
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf

from careersie.contexts.intake.job_data_structure import ParsedJobData
from careersie.contexts.targeting.logger import setup_targeting_logger
from careersie.contexts.targeting.match_data_structures import ProfileData
from careersie.contexts.targeting.relevance_scorer import (
    calculate_relevance_score,
    reorder_experience,
)
from careersie.contexts.targeting.skill_matching import calculate_skill_gap
from careersie.contexts.targeting.story_versions import append_story_version, build_story_version
from careersie.exceptions import ExtractionSchemaError
from careersie.utils.logger import default_log_dir

load_dotenv()

app = typer.Typer(help="Score a profile against a parsed job.", add_completion=False)


def load_mapping(path: Path) -> dict:
    """Load a YAML or JSON file into a plain dict."""
    # Profile text may contain "${...}"; keep it literal rather than interpolating
    container = OmegaConf.to_container(OmegaConf.load(path), resolve=False)
    if not isinstance(container, dict):
        raise typer.BadParameter(f"{path} must contain a mapping at the top level")
    return container


@app.command()
def main(
    profile_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Profile YAML/JSON"),
    job_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="ParsedJobData YAML/JSON"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw score JSON"),
    reorder: bool = typer.Option(False, "--reorder", help="Rank experience by job relevance"),
    gap: bool = typer.Option(False, "--gap", help="Show required/nice-to-have skill gap"),
    save_version: Optional[str] = typer.Option(None, "--save-version", help="Save as a story version"),
    profile_id: Optional[str] = typer.Option(None, "--profile-id"),
    job_id: Optional[str] = typer.Option(None, "--job-id"),
):
    """Score PROFILE_FILE against JOB_FILE."""
    setup_targeting_logger(default_log_dir("match"), job_name=job_file.stem)

    try:
        job = ParsedJobData.from_dict(load_mapping(job_file))
    except ExtractionSchemaError as e:
        typer.echo(f"ERROR: {job_file} is not valid parsed job data\n{e}", err=True)
        raise typer.Exit(3)

    profile = ProfileData.from_record(load_mapping(profile_file))
    relevance = calculate_relevance_score(profile, job)

    if as_json:
        typer.echo(json.dumps(relevance.to_dict(), indent=2))
    else:
        breakdown = relevance.score_breakdown
        details = relevance.match_details

        typer.echo(f"=== {job.role} ({job.seniority}) ===")
        typer.secho(f"Overall: {breakdown.overall}", bold=True)
        typer.echo(f"  Hard skills:      {breakdown.hard_skills}")
        typer.echo(f"  Soft skills:      {breakdown.soft_skills}")
        typer.echo(f"  Responsibilities: {breakdown.responsibilities}")
        typer.echo(f"  Keywords:         {breakdown.keywords}")
        typer.echo(f"  Seniority:        {breakdown.seniority}")

        typer.echo("\n=== Match Details ===")
        typer.echo(f"  Matched hard skills: {', '.join(details.matched_hard_skills) or 'None'}")
        typer.echo(f"  Missing hard skills: {', '.join(details.missing_hard_skills) or 'None'}")
        typer.echo(f"  Matched soft skills: {', '.join(details.matched_soft_skills) or 'None'}")
        typer.echo(f"  Missing soft skills: {', '.join(details.missing_soft_skills) or 'None'}")
        typer.echo(f"  Matched keywords:    {', '.join(details.matched_keywords) or 'None'}")
        typer.echo(f"  Experience alignment: {details.experience_alignment}")

    if reorder:
        typer.echo("\n=== Experience by Relevance ===")
        for exp in reorder_experience(profile.experience, job.responsibilities):
            label = exp.get("title") or exp.get("company") or "(untitled)"
            typer.echo(f"  {exp['relevance']:>3}  {label}")

    if gap:
        skill_gap = calculate_skill_gap(profile.hard_skills + profile.soft_skills, job)
        typer.echo("\n=== Skill Gap ===")
        typer.echo(f"  Coverage: {skill_gap.coverage_score:.0%}")
        typer.echo(f"  Missing required: {', '.join(skill_gap.missing_required) or 'None'}")
        typer.echo(f"  Missing nice-to-have: {', '.join(skill_gap.missing_nice_to_have) or 'None'}")

    if save_version:
        try:
            record = build_story_version(
                profile_id=profile_id or profile_file.stem,
                job_post_id=job_id or job_file.stem,
                version_name=save_version,
                relevance=relevance,
            )
        except ValueError as e:
            typer.echo(f"ERROR: {e}", err=True)
            raise typer.Exit(1)
        path = append_story_version(record)
        typer.secho(f"\nSaved story version '{save_version}' to {path}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
