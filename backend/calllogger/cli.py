from collections import Counter

import typer

from calllogger.core.config import settings
from calllogger.services.call_log import fetch_calls
from calllogger.services.codec import HEADER, is_header
from calllogger.services.query import PRIORITY_RANK, UNKNOWN_PRIORITY_RANK
from calllogger.services.row_store import build_store

app = typer.Typer()


@app.command()
def ensure_header():
    """Write the column header to an empty sheet."""
    store = build_store(settings)
    rows = store.fetch_all_rows()
    if rows:
        if is_header(rows[0]):
            typer.echo("Header already present")
        else:
            typer.echo("Sheet already has rows; header not written")
        return
    store.append_row(list(HEADER))
    typer.echo("Header written")


@app.command()
def stats():
    """Print the number of call logs and a breakdown by priority."""
    store = build_store(settings)
    entries = fetch_calls(store)
    typer.echo(f"Total: {len(entries)}")
    counts = Counter(entry.priority or "(none)" for entry in entries)
    for priority, count in sorted(
        counts.items(),
        key=lambda item: (PRIORITY_RANK.get(item[0], UNKNOWN_PRIORITY_RANK), item[0]),
    ):
        typer.echo(f"{priority}: {count}")


if __name__ == "__main__":
    app()
