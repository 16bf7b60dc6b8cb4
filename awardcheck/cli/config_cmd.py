"""Config CLI commands: show, validate."""

from __future__ import annotations

import click


@click.group("config")
def config_group() -> None:
    """Inspect and validate the award rule configuration."""


@config_group.command("show")
@click.option("--program", "-p", default=None, help="Only show this program's rules")
@click.pass_context
def config_show(ctx: click.Context, program: str | None) -> None:
    """Print the resolved configuration as YAML."""
    import yaml

    from awardcheck.config.loader import load_config
    from awardcheck.engine.programs import UnknownProgramError, resolve_program

    data = load_config(ctx.obj.get("config_path")).model_dump()
    if program:
        try:
            selected = resolve_program(program)
        except UnknownProgramError as e:
            click.echo(str(e), err=True)
            raise SystemExit(1) from None
        data = {selected.value: data["programs"][selected.value]}

    click.echo(yaml.safe_dump(data, sort_keys=False), nl=False)


@config_group.command("validate")
@click.pass_context
def config_validate(ctx: click.Context) -> None:
    """Validate awardcheck.yaml and summarize each program's rules."""
    from awardcheck.config.loader import load_config

    try:
        config = load_config(ctx.obj.get("config_path"))
    except (ValueError, OSError) as e:
        click.echo(f"Config validation failed: {e}", err=True)
        raise SystemExit(1) from None

    click.echo("Config is valid.")
    click.echo(f"  Version: {config.version}")
    for name, rules in sorted(config.programs.items()):
        click.echo(
            f"  {name}: threshold={rules.threshold:g}, rounding={rules.rounding}, "
            f"grades={', '.join(rules.grade_partitions) or '-'}"
        )
    click.echo(f"  Output format: {config.output.format}")
