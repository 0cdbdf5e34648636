"""CLI framework for gtokenchecker."""
from __future__ import annotations

from gtokenchecker.cli.app import ExitCode
from gtokenchecker.cli.app import app
from gtokenchecker.cli.app import run_app

__all__ = ["app", "run_app", "ExitCode"]
