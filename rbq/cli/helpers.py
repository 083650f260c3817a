from __future__ import annotations
import click

from ..config import load_config
from ..version import __version__


@click.group()
@click.version_option(version=__version__, prog_name="roller-blind-quote")
@click.option('--log-level', default=None, help='Override the configured log level (DEBUG, INFO, ...)')
@click.pass_context
def cli(ctx: click.Context, log_level: str | None):
    """Roller-blind order builder tools.

    \b
    EXAMPLES:
      rbq config                       # Show merged configuration
      rbq session edit.txt --rows quote.json
    """
    overrides = {'log_level': log_level} if log_level else None
    ctx.obj = load_config(overrides=overrides)


__all__ = ["cli"]
