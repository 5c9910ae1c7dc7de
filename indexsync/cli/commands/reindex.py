"""Reindex command."""

import sys
from typing import Annotated

import cyclopts
from sqlalchemy.exc import SQLAlchemyError

from indexsync.cli import context
from indexsync.cli.console import get_console
from indexsync.domain.index.model.settings import IndexSettings
from indexsync.domain.index.service.reindex import ReindexService
from indexsync.domain.shared.error import IndexSyncError

app = cyclopts.App(name="reindex", help="Rebuild documents from the database")


@app.default
def reindex(
    *,
    types: Annotated[list[str] | None, cyclopts.Parameter(name="--type")] = None,
) -> None:
    """Index every stored instance of the registered indexable types.

    Args:
        types: Only reindex these types (class names). Repeat for several.
    """
    console = get_console()
    container = context.open_container()
    try:
        settings = container.get(IndexSettings)
        selected = _select_types(settings, types) if types else None
        with console.status(f"Reindexing into '{settings.name}'..."):
            report = container.get(ReindexService).reindex(selected)
    except IndexSyncError as e:
        console.error(e.message)
        sys.exit(1)
    except SQLAlchemyError as e:
        console.error(f"Could not read from the database: {e}")
        sys.exit(1)
    finally:
        container.close()

    if not report.types:
        console.warning(report.summary)
        return

    console.table(
        [t.model_dump() for t in report.types],
        [("entity_type", "Type"), ("indexed", "Indexed"), ("failed", "Failed")],
    )
    if not report.ok:
        console.error(
            f"{report.failed} document(s) failed to index",
            hint="See the alert log for details",
        )
        sys.exit(1)
    console.success(f"Reindexed {report.indexed} document(s)")


def _select_types(settings: IndexSettings, names: list[str]) -> list[type]:
    registered = {t.__name__: t for t in settings.get_indexables()}
    unknown = [name for name in names if name not in registered]
    if unknown:
        get_console().error(
            f"Unknown indexable type(s): {', '.join(unknown)}",
            hint=f"Registered: {', '.join(registered) or 'none'}",
        )
        sys.exit(1)
    return [registered[name] for name in names]
