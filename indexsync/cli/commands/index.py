"""Index administration commands."""

import sys
from collections.abc import Callable

import cyclopts

from indexsync.cli import context
from indexsync.cli.console import get_console
from indexsync.domain.index.model.value import OperationResult
from indexsync.domain.index.service.index import Index
from indexsync.domain.shared.error import IndexSyncError

app = cyclopts.App(name="index", help="Manage the search index")


def _run(action: Callable[[Index], OperationResult]) -> None:
    console = get_console()
    container = context.open_container()
    try:
        result = action(container.get(Index))
    except IndexSyncError as e:
        console.error(e.message)
        sys.exit(1)
    finally:
        container.close()

    console.success(result.summary)


@app.command
def create() -> None:
    """Create the index with the configured settings and mappings."""
    _run(Index.create)


@app.command
def delete() -> None:
    """Delete the index. A missing index is not an error."""
    _run(Index.delete)


@app.command
def flush() -> None:
    """Delete and recreate the index, dropping every document."""
    _run(Index.flush)


@app.command
def status() -> None:
    """Show whether the index exists and its cluster health."""
    console = get_console()
    container = context.open_container()
    try:
        index = container.get(Index)
        exists = index.exists()
        health = index.health() if exists else "-"
        indexables = [t.__name__ for t in index.settings.get_indexables()]
    except IndexSyncError as e:
        console.error(e.message)
        sys.exit(1)
    finally:
        container.close()

    console.table(
        [
            {
                "name": index.name,
                "exists": "yes" if exists else "no",
                "health": health,
                "indexables": ", ".join(indexables) or "-",
            }
        ],
        [("name", "Index"), ("exists", "Exists"), ("health", "Health"), ("indexables", "Indexables")],
    )
