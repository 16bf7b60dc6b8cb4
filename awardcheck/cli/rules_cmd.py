"""CLI command: awardcheck rules -- print each program's award criteria."""

from __future__ import annotations

import click


@click.command("rules")
@click.argument("program", required=False)
@click.pass_context
def rules_cmd(ctx: click.Context, program: str | None) -> None:
    """List the eligibility criteria for PROGRAM (or every program)."""
    from awardcheck.config.loader import load_config
    from awardcheck.engine.programs import (
        PROGRAM_DETAILS,
        Program,
        UnknownProgramError,
        describe_requirements,
        resolve_program,
    )

    try:
        config = load_config(ctx.obj.get("config_path"))
    except (ValueError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1) from None

    if program:
        try:
            programs = [resolve_program(program)]
        except UnknownProgramError as e:
            click.echo(str(e), err=True)
            raise SystemExit(1) from None
    else:
        programs = list(Program)

    for selected in programs:
        info = PROGRAM_DETAILS[selected]
        click.echo(f"{info.name} ({selected.value}) -- {info.award_name}")
        for line in describe_requirements(selected, config.rules_for(selected)):
            click.echo(f"  - {line}")
        click.echo("")
