"""Main CLI application using Cyclopts.

Commands are thin wrappers over the Index and ReindexService operations.
"""

import cyclopts

from indexsync.cli.commands import index, reindex

app = cyclopts.App(
    name="indexsync",
    help="Keep a search index in sync with the database",
)

app.command(index.app, name="index")
app.command(reindex.app, name="reindex")
