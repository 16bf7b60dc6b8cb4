"""CLI command: awardcheck check -- Run the eligibility calculation."""

from __future__ import annotations

import json
import logging

import click

logger = logging.getLogger(__name__)


@click.command("check")
@click.option("--program", "-p", required=True, help="Program code, RobotEvents id, or event SKU")
@click.option("--teams", "teams_path", required=True, type=click.Path(exists=True, dir_okay=False),
              help="Team roster (CSV or JSON)")
@click.option("--standings", "standings_path", required=True,
              type=click.Path(exists=True, dir_okay=False), help="Qualification rankings (CSV or JSON)")
@click.option("--skills", "skills_path", required=True, type=click.Path(exists=True, dir_okay=False),
              help="Skills runs (CSV or JSON)")
@click.option("--split-grades/--combined", default=False,
              help="Whether this event's award is given separately per grade")
@click.option("--sort", "sort_key", default=None, help="Sort key (default: eligible, then rank)")
@click.option("--descending", is_flag=True, help="Reverse the sort key order")
@click.option("--grade", default=None, help="Only show teams whose grade contains this text")
@click.option("--search", default=None, help="Only show teams matching number, name or organization")
@click.option("--eligible-only", is_flag=True, help="Only show eligible teams")
@click.option("--format", "fmt", type=click.Choice(["table", "csv", "json"]), default=None,
              help="Output format (default from config)")
@click.option("--output", "-o", "output_path", type=click.Path(dir_okay=False), default=None,
              help="Write csv/json output to this file instead of stdout")
@click.pass_context
def check_cmd(
    ctx: click.Context,
    program: str,
    teams_path: str,
    standings_path: str,
    skills_path: str,
    split_grades: bool,
    sort_key: str | None,
    descending: bool,
    grade: str | None,
    search: str | None,
    eligible_only: bool,
    fmt: str | None,
    output_path: str | None,
) -> None:
    """Compute award eligibility for every attending team of an event.

    Reads the roster, qualification standings and skills runs, applies the
    program's award criteria, and prints one row per attending team.
    """
    from awardcheck.config.loader import load_config
    from awardcheck.data.event_reader import (
        EventDataError,
        load_skill_runs,
        load_standings,
        load_teams,
    )
    from awardcheck.engine.pipeline import run_eligibility
    from awardcheck.engine.programs import UnknownProgramError, resolve_program
    from awardcheck.engine.sorter import filter_results, sort_results
    from awardcheck.output.report import render_table, results_to_frame, write_results

    try:
        config = load_config(ctx.obj.get("config_path"))
        fmt = fmt or config.output.format
        sort_key = sort_key or config.output.sort_key
        descending = descending or config.output.descending

        selected = resolve_program(program)
        teams = load_teams(teams_path)
        standings = load_standings(standings_path)
        runs = load_skill_runs(skills_path)
        report = run_eligibility(
            teams,
            standings,
            runs,
            selected,
            split_grades,
            rules=config.rules_for(selected),
        )
        results = filter_results(report.results, search=search, grade=grade)
        if eligible_only:
            results = [r for r in results if r.eligible]
        if sort_key:
            results = sort_results(results, key=sort_key, descending=descending)
        logger.debug("Showing %d of %d attending teams", len(results), report.attending)
    except (UnknownProgramError, EventDataError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1) from None

    if output_path:
        if fmt == "table":
            fmt = "csv"
        path = write_results(results, output_path, fmt)
        click.echo(f"Wrote {len(results)} result(s) to {path}")
    elif fmt == "json":
        click.echo(json.dumps([r.to_dict() for r in results], indent=2, default=str))
    elif fmt == "csv":
        click.echo(results_to_frame(results).to_csv(index=False), nl=False)
    else:
        click.echo(f"{selected.value.upper()} award eligibility")
        click.echo("=" * 40)
        click.echo(
            f"Registered: {report.registered}  Attending: {report.attending}  "
            f"Eligible: {report.n_eligible}"
        )
        for pool in report.pools:
            line = (
                f"  {pool.key}: {pool.size} team(s), "
                f"qualifying/skills cutoff {pool.qualifying_cutoff}"
            )
            if pool.programming_only_cutoff is not None:
                line += f", programming-only cutoff {pool.programming_only_cutoff}"
            click.echo(line)
        click.echo("")
        click.echo(
            render_table(
                results,
                selected,
                show_programming_only=report.rules.requires_programming_only_rank,
            )
        )
