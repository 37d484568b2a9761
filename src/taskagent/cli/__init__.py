"""
taskagent command-line interface.

Entry point: ``taskagent`` (see ``taskagent.cli.app:app``).
"""

from taskagent.cli.app import app

__all__ = ["app"]
