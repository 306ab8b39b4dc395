"""CLI entry point for edit_in_place.

Enables invocation via `python -m edit_in_place` or `edit-in-place`.
"""

import sys

from edit_in_place.cli.app import app

if __name__ == "__main__":
    exit_code = app()
    sys.exit(exit_code if exit_code is not None else 0)
