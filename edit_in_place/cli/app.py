"""Cyclopts application and command routing for the edit-in-place CLI.

The CLI provides the following commands:
- render: Render a field in a given mode
- list-field-types: List registered field types
- list-middlewares: List registered middlewares
- check-config: Validate configuration files
"""

from cyclopts import App

from edit_in_place import __version__
from edit_in_place.cli import commands

app = App(
    name="edit-in-place",
    help="Render mode-aware fields through a middleware pipeline",
    version=__version__,
)

app.command(commands.render)
app.command(commands.list_field_types, name="list-field-types")
app.command(commands.list_middlewares, name="list-middlewares")
app.command(commands.check_config, name="check-config")
