"""Plain-text rendering of detail snapshots for the CLI."""
from __future__ import annotations
from typing import Any, Dict, List
import click

from ..detail.state import DetailSnapshot
from ..quote import OrderLine

# Table column key -> OrderLine attribute
COLUMN_ATTRIBUTES: Dict[str, str] = {
    "sequence": "sequence",
    "width": "width",
    "height": "height",
    "TYPE": "fabric_type",
    "fabricTypeDisplay": "fabric_type",
    "fabric": "fabric",
    "color": "color",
    "location": "location",
    "over": "over",
    "oi": "oi",
    "lr": "lr",
    "dual": "dual",
    "chain": "chain",
}

COLUMN_HEADERS: Dict[str, str] = {
    "sequence": "#",
    "TYPE": "Type",
    "fabricTypeDisplay": "Type",
}


def _cell_text(row: OrderLine, column: str) -> str:
    attribute = COLUMN_ATTRIBUTES.get(column)
    if attribute is None:
        return ""
    value: Any = getattr(row, attribute)
    return "" if value is None else str(value)


def format_table(snapshot: DetailSnapshot) -> str:
    """Render the visible columns, marking target (*) and transient active (!) cells."""
    state = snapshot.interaction
    columns = list(state.visible_columns)
    headers = [COLUMN_HEADERS.get(c, c) for c in columns]
    marks = {}
    if state.target_cell:
        marks[(state.target_cell.row_index, state.target_cell.column)] = "*"
    if state.active_cell:
        marks[(state.active_cell.row_index, state.active_cell.column)] = "!"

    body: List[List[str]] = []
    for index, row in enumerate(snapshot.order_lines):
        cells = []
        for column in columns:
            text = _cell_text(row, column) + marks.get((index, column), "")
            if column == "sequence" and index in state.lf_selected_row_indexes:
                text += "+"
            cells.append(text)
        body.append(cells)

    widths = [max([len(h)] + [len(r[i]) for r in body]) for i, h in enumerate(headers)]
    lines = [" | ".join(h.ljust(w) for h, w in zip(headers, widths))]
    lines.append("-+-".join("-" * w for w in widths))
    lines.extend(" | ".join(c.ljust(w) for c, w in zip(cells, widths)) for cells in body)
    return "\n".join(lines)


def format_state_summary(snapshot: DetailSnapshot) -> str:
    state = snapshot.interaction
    parts = [
        f"view={click.style(state.current_view.value, fg='cyan')}",
        f"tab={state.active_tab_id}",
        f"mode={click.style(state.active_edit_mode.value, fg='yellow')}",
        f"k4={click.style(state.k4_active_mode.value, fg='yellow')}",
    ]
    if state.location_input_value:
        parts.append(f"location_buffer={state.location_input_value!r}")
    if state.chain_input_value:
        parts.append(f"chain_buffer={state.chain_input_value!r}")
    if state.lf_modified_row_indexes:
        parts.append(f"lf_modified={sorted(i + 1 for i in state.lf_modified_row_indexes)}")
    if state.k4_dual_price is not None:
        parts.append(f"dual_price=${state.k4_dual_price:.2f}")
    return " | ".join(parts)


def format_notification(message: str, severity: str) -> str:
    if severity == "error":
        return click.style(f"✗ {message}", fg="red")
    return click.style(f"ℹ {message}", fg="blue")


__all__ = ["format_table", "format_state_summary", "format_notification"]
