"""Top-level CLI entry point for awardcheck."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from awardcheck import __version__


def _configure_logging(verbose: bool, quiet: bool) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


@click.group()
@click.version_option(version=__version__, prog_name="awardcheck")
@click.option(
    "--config",
    type=click.Path(dir_okay=False),
    default=None,
    envvar="AWARDCHECK_CONFIG",
    help="Path to awardcheck.yaml",
)
@click.option("--verbose", "-v", is_flag=True, help="Log per-pool detail")
@click.option("--quiet", "-q", is_flag=True, help="Only log warnings and errors")
@click.pass_context
def cli(ctx: click.Context, config: str | None, verbose: bool, quiet: bool) -> None:
    """awardcheck -- Excellence / All Around Champion eligibility for VEX and ADC events."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    _configure_logging(verbose, quiet)


@cli.command()
@click.option(
    "--path",
    "target",
    type=click.Path(dir_okay=False),
    default="awardcheck.yaml",
    show_default=True,
    help="Where to write the starter config",
)
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def init(target: str, force: bool) -> None:
    """Write a starter config holding the built-in program rules."""
    import yaml

    from awardcheck.config.schema import AwardCheckConfig

    path = Path(target).expanduser()
    if path.exists() and not force:
        click.echo(f"{path} already exists (use --force to overwrite)", err=True)
        raise SystemExit(1)

    data = AwardCheckConfig().model_dump()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        f.write("# awardcheck configuration -- edit a program's rules to override them\n")
        yaml.safe_dump(data, f, sort_keys=False)

    click.echo(f"Wrote {path}")
    click.echo("Next steps:")
    click.echo(f"  1. Review the program rules in {path}")
    click.echo("  2. Run: awardcheck check --program v5rc --teams ... --standings ... --skills ...")


# Register sub-commands
from awardcheck.cli.check_cmd import check_cmd  # noqa: E402
from awardcheck.cli.config_cmd import config_group  # noqa: E402
from awardcheck.cli.rules_cmd import rules_cmd  # noqa: E402

cli.add_command(check_cmd, "check")
cli.add_command(config_group, "config")
cli.add_command(rules_cmd, "rules")
