"""Headless replay of detail-configuration command scripts."""

from __future__ import annotations
from pathlib import Path
import json as _json
import click
import logging

from .helpers import cli
from ..config_types import AppConfig
from ..utils.formatting import format_notification, format_state_summary, format_table

logger = logging.getLogger(__name__)


@cli.command(name="session")
@click.argument("script", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--rows", "rows_file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="JSON file with the order lines to start from.")
@click.option("--save", "save_file", type=click.Path(dir_okay=False, path_type=Path),
              help="Write the resulting order lines to this JSON file.")
@click.option("--json", "as_json", is_flag=True, help="Print the resulting order lines as JSON.")
@click.pass_context
def session(ctx: click.Context, script: Path, rows_file: Path | None, save_file: Path | None, as_json: bool):
    """Replay a command SCRIPT against the detail-configuration editors.

    \b
    One command per line ('#' starts a comment), rows are 1-based:
      detail | quick | tab ID
      focus location|fabric    location TEXT
      click ROW COLUMN         seq ROW
      k3 | cycle COLUMN        lf-edit | lf-delete
      k4 dual|chain            chain VALUE
      panel-blur TYPE FIELD VALUE | panel-enter
      choose LABEL             wait MS
    """
    from PySide6.QtCore import QCoreApplication
    from ..app.autosave_controller import AutosaveController
    from ..app.session import HeadlessSession, ScriptError
    from ..quote.persistence import load_rows, save_rows, rows_to_payload

    _app = QCoreApplication.instance() or QCoreApplication([])  # noqa: F841 - QObjects need an app instance

    config = AppConfig.from_dict(ctx.obj)
    rows = []
    if rows_file:
        try:
            rows = load_rows(rows_file)
        except (OSError, ValueError) as e:
            raise click.ClickException(f"Cannot read rows from {rows_file}: {e}")

    runner = HeadlessSession(rows, config)
    runner.orchestrator.notificationRaised.connect(
        lambda message, severity: click.echo(format_notification(message, severity), err=as_json)
    )
    runner.orchestrator.confirmationRequested.connect(
        lambda decision: click.echo(click.style(
            f"? {decision.message} [{' / '.join(decision.labels)}]", fg="magenta"
        ), err=as_json)
    )

    lines = script.read_text(encoding="utf-8").splitlines()
    try:
        accepted = runner.run_script(lines)
    except ScriptError as e:
        raise click.ClickException(str(e))

    snapshot = runner.snapshot()
    if as_json:
        click.echo(_json.dumps(rows_to_payload(snapshot.order_lines), indent=2))
    else:
        click.echo(format_table(snapshot))
        click.echo(format_state_summary(snapshot))
        click.echo(f"{accepted} command(s) accepted, {len(runner.snapshots)} publish(es)")

    if save_file:
        save_rows(save_file, snapshot.order_lines)
        click.echo(f"Saved {len(snapshot.order_lines)} rows to {save_file}")

    if config.autosave.enabled:
        autosave = AutosaveController(runner.quotes, Path(config.autosave.path), config.autosave.interval_ms)
        if autosave.save_now():
            logger.info(f"Session snapshot auto-saved to {autosave.path}")


__all__ = ["session"]
