"""
DynamoDB Fleet Cost Optimizer — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Generate a fresh fleet for the requested profile.
  4. Derive stats / recommendations.
  5. Report result to stdout.

Every command generates a new fleet; nothing is persisted between runs except
files written by ``export``.

Install and run::

    pip install -e .
    fleet-optimizer --help
    fleet-optimizer profiles
    fleet-optimizer fleet --profile gaming --top 20
    fleet-optimizer stats --profile financial
    fleet-optimizer recommend --profile ecommerce --limit 5
    fleet-optimizer export --profile gaming
    fleet-optimizer ask "Which tables should I fix first?" --profile gaming
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="fleet-optimizer",
    help="Simulated DynamoDB fleet cost analysis and optimization recommendations.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from pydantic import ValidationError

    from fleet_optimizer.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except (ValidationError, ValueError) as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from fleet_optimizer.utils.logging import configure_logging
    configure_logging(config.logging)


def _setup(config_path: Optional[str]):
    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    return config


def _generate(profile: str):
    """Resolve the profile and generate its fleet."""
    from fleet_optimizer.simulation.generator import generate_fleet
    from fleet_optimizer.simulation.profiles import resolve_profile

    return resolve_profile(profile), generate_fleet(profile)


_PROFILE_HELP = "Fleet profile: ecommerce, gaming, financial (others use a 50-table fallback)."
_CONFIG_HELP = "Path to TOML config file."


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("profiles")
def list_profiles() -> None:
    """List the available fleet profiles."""
    from fleet_optimizer.reporting.formatters import format_profiles_table
    from fleet_optimizer.simulation.profiles import PROFILES

    typer.echo(format_profiles_table(list(PROFILES.values())))


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Default profile:  {config.simulation.default_profile}")
    typer.echo(f"  Rec. limit:       {config.recommendations.limit}")
    typer.echo(f"  Output dir:       {config.reporting.output_dir}")
    typer.echo(f"  Chat model:       {config.chat.model}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("fleet")
def show_fleet(
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help=_PROFILE_HELP),
    top: Optional[int] = typer.Option(
        None, "--top", "-n", min=1, help="Show only the N most wasteful tables."
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Generate a fleet and list its tables, most wasteful first."""
    from fleet_optimizer.reporting.formatters import format_fleet_table

    config = _setup(config_path)
    fleet_profile, tables = _generate(profile or config.simulation.default_profile)

    typer.echo(f"{fleet_profile.icon} {fleet_profile.name}: {len(tables)} tables")
    typer.echo(format_fleet_table(tables, top=top))


@app.command("stats")
def show_stats(
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help=_PROFILE_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Generate a fleet and print its summary statistics."""
    from fleet_optimizer.analysis.stats import compute_fleet_stats
    from fleet_optimizer.reporting.formatters import format_fleet_summary

    config = _setup(config_path)
    fleet_profile, tables = _generate(profile or config.simulation.default_profile)

    typer.echo(format_fleet_summary(fleet_profile, compute_fleet_stats(tables)))


@app.command("recommend")
def recommend(
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help=_PROFILE_HELP),
    limit: Optional[int] = typer.Option(
        None, "--limit", "-l", min=1, help="Max tables to recommend (default: config)."
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Generate a fleet and print ranked optimization recommendations."""
    from fleet_optimizer.analysis.stats import compute_fleet_stats
    from fleet_optimizer.recommendations.engine import generate_recommendations
    from fleet_optimizer.reporting.formatters import (
        format_fleet_summary,
        format_recommendations,
    )

    config = _setup(config_path)
    fleet_profile, tables = _generate(profile or config.simulation.default_profile)
    recs = generate_recommendations(tables, limit or config.recommendations.limit)

    typer.echo(format_fleet_summary(fleet_profile, compute_fleet_stats(tables)))
    typer.echo(format_recommendations(recs))


@app.command("export")
def export(
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help=_PROFILE_HELP),
    limit: Optional[int] = typer.Option(
        None, "--limit", "-l", min=1, help="Max tables to recommend (default: config)."
    ),
    output_dir: Optional[str] = typer.Option(
        None, "--output-dir", "-o", help="Override reporting.output_dir from config."
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Generate a fleet and write CSV + JSON reports.

    \b
    Files written (date = today, local time):
      fleet_{profile}_{date}.csv            one row per table
      recommendations_{profile}_{date}.csv  one row per recommended action
      report_{profile}_{date}.json          stats + recommendations + tables
    """
    from fleet_optimizer.analysis.stats import compute_fleet_stats
    from fleet_optimizer.recommendations.engine import generate_recommendations
    from fleet_optimizer.reporting.export import (
        build_report_payload,
        export_to_csv,
        export_to_json,
        flatten_recommendations_for_export,
        flatten_tables_for_export,
    )

    config = _setup(config_path)
    fleet_profile, tables = _generate(profile or config.simulation.default_profile)
    stats = compute_fleet_stats(tables)
    recs = generate_recommendations(tables, limit or config.recommendations.limit)

    out_dir = Path(output_dir or config.reporting.output_dir)
    stamp = f"{fleet_profile.profile_id}_{date.today().isoformat()}"

    written = [
        export_to_csv(flatten_tables_for_export(tables), out_dir / f"fleet_{stamp}.csv"),
        export_to_csv(
            flatten_recommendations_for_export(recs),
            out_dir / f"recommendations_{stamp}.csv",
        ),
        export_to_json(
            build_report_payload(fleet_profile.profile_id, tables, stats, recs),
            out_dir / f"report_{stamp}.json",
        ),
    ]

    for path in written:
        typer.echo(f"  Wrote {path}")
    typer.echo(f"[OK] Exported {len(tables)} tables and {len(recs)} recommendation(s).")


@app.command("ask")
def ask(
    message: str = typer.Argument(..., help="Question for the fleet assistant."),
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help=_PROFILE_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Ask the assistant about a freshly generated fleet.

    \b
    Requires the token named by chat.api_key_env (default AI_BUILDER_TOKEN)
    in the environment or .env. Without it a fallback reply is printed.
    """
    from fleet_optimizer.analysis.stats import compute_fleet_stats
    from fleet_optimizer.assistant.client import AssistantClient
    from fleet_optimizer.assistant.context import FleetContext
    from fleet_optimizer.recommendations.engine import generate_recommendations

    config = _setup(config_path)
    fleet_profile, tables = _generate(profile or config.simulation.default_profile)
    recs = generate_recommendations(tables, config.recommendations.limit)

    context = FleetContext.from_fleet(
        fleet_profile.profile_id,
        compute_fleet_stats(tables),
        recs,
        limit=config.recommendations.chat_context_limit,
    )
    typer.echo(AssistantClient(config.chat).ask(message, context))


if __name__ == "__main__":
    app()
