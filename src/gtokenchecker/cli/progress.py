"""Progress tracking for concurrent token checks."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import contextmanager

from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn
from rich.progress import MofNCompleteColumn
from rich.progress import Progress
from rich.progress import SpinnerColumn
from rich.progress import TaskID
from rich.progress import TextColumn
from rich.progress import TimeElapsedColumn

from gtokenchecker.models import CheckOutcome
from gtokenchecker.tokens import mask_token


@contextmanager
def create_progress(console: Console | None = None, quiet: bool = False):
    """Create a Rich progress context for tracking token checks.

    Args:
        console: Rich console (uses default if None)
        quiet: If True, suppresses progress output

    Yields:
        ProgressTracker instance or None if quiet
    """
    if quiet:
        yield None
        return

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(complete_style="rgb(67,142,247)", finished_style="rgb(98,189,119)"),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=True,  # Auto-remove progress when complete
    )

    tracker = ProgressTracker(progress)
    try:
        yield tracker
    finally:
        tracker.stop()


class ProgressTracker:
    """Tracks progress over a batch of tokens."""

    def __init__(self, progress: Progress) -> None:
        self.progress = progress
        self.total_count = 0
        self.completed_count = 0
        self.failed_count = 0
        self._main_task_id: TaskID | None = None

    def start(self, total: int) -> None:
        """Initialize progress tracking for ``total`` tokens."""
        self.total_count = total
        self.completed_count = 0
        self.failed_count = 0

        self._main_task_id = self.progress.add_task(
            "[cyan]Checking tokens...",
            total=self.total_count,
        )
        self.progress.start()

    def update(self, outcome: CheckOutcome) -> None:
        """Update progress for a finished token."""
        self.completed_count += 1
        if not outcome.success:
            self.failed_count += 1

        if self._main_task_id is not None:
            self.progress.update(
                self._main_task_id,
                completed=self.completed_count,
                description=self._get_main_description(outcome),
            )

    def _get_main_description(self, last: CheckOutcome) -> str:
        if self.completed_count >= self.total_count:
            return "[green]Check complete[/green]"
        color = "green" if last.success else "red"
        token = escape(mask_token(last.token))
        return f"[cyan]Checking tokens...[/cyan] [{color}]{token}[/{color}]"

    def stop(self) -> None:
        """Stop progress tracking."""
        self.progress.stop()


def create_progress_callback(
    tracker: ProgressTracker | None,
) -> Callable[[CheckOutcome], None] | None:
    """Create a progress callback for use with the orchestrator.

    Args:
        tracker: ProgressTracker instance (returns None if tracker is None)

    Returns:
        Callback function or None
    """
    if tracker is None:
        return None
    return tracker.update
