#!/usr/bin/env python3
"""
Extract structured requirements from a job description.

Reads raw job posting text, calls the configured LLM provider once, validates
the response against the ParsedJobData schema and writes it as YAML or JSON.

Usage:
    python scripts/parse_job.py posting.txt
    python scripts/parse_job.py posting.txt --output parsed/acme.yaml
    python scripts/parse_job.py posting.txt --provider anthropic --format json

Exit codes:
    0  success
    1  unreadable job file or empty description
    2  configuration error (missing API key, unknown provider)
    3  model response failed schema validation (retrying may help)
    4  model call failed upstream (connection, HTTP error, exhausted retries)
"""

import json
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf

from careersie.contexts.intake.job_parser import extract_keywords, parse_job_description
from careersie.contexts.intake.logger import setup_intake_logger
from careersie.exceptions import (
    ConfigurationError,
    ExtractionError,
    ExtractionSchemaError,
    ModelCallError,
)
from careersie.utils.llm import get_provider
from careersie.utils.logger import default_log_dir

load_dotenv()

app = typer.Typer(help="Extract structured requirements from a job description.", add_completion=False)


@app.command()
def main(
    job_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Raw job posting text"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write result here"),
    output_format: str = typer.Option("yaml", "--format", "-f", help="yaml or json"),
    provider: Optional[str] = typer.Option(None, "--provider", help="openai or anthropic"),
    model: Optional[str] = typer.Option(None, "--model", help="Override provider model"),
    keywords: bool = typer.Option(False, "--keywords", help="Also print the de-duplicated keyword list"),
):
    """Parse JOB_FILE into ParsedJobData."""
    if output_format not in ("yaml", "json"):
        typer.echo(f"ERROR: Unknown format: {output_format}", err=True)
        raise typer.Exit(1)

    try:
        raw_text = job_file.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        typer.echo(f"ERROR: {job_file} is not valid UTF-8 text ({e.reason})", err=True)
        raise typer.Exit(1)

    try:
        client = get_provider(provider_name=provider, model=model)
        setup_intake_logger(default_log_dir("parse"), provider_name=client.name)
        parsed = parse_job_description(raw_text, client=client)
    except ConfigurationError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(2)
    except ExtractionSchemaError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(3)
    except ModelCallError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(4)
    except ExtractionError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    data = parsed.to_dict()
    if output_format == "json":
        rendered = json.dumps(data, indent=2)
    else:
        rendered = OmegaConf.to_yaml(OmegaConf.create(data))

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(rendered, encoding="utf-8")
        typer.secho(f"Saved {parsed.role} to {output}", fg=typer.colors.GREEN)
    else:
        typer.echo(rendered)

    if keywords:
        typer.echo("\n=== Keywords ===")
        typer.echo(", ".join(extract_keywords(parsed)))


if __name__ == "__main__":
    app()
