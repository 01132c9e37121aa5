"""Console output formatting utilities for workflowgen."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Mapping, Optional

from ..errors import WorkflowGenError


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug

    def print_generated(self, path: Path, job_ids: list[str]) -> None:
        """Print the result of a generate run."""
        print("\nWORKFLOW GENERATED")
        print(f"File: {path}")
        print(f"Jobs: {', '.join(job_ids) if job_ids else '(none)'}")

    def print_up_to_date(self, path: Path) -> None:
        print(f"UP TO DATE: {path}")

    def print_drift(self, path: str, diff: str) -> None:
        """
        Print a drift report for `check`.

        The diff is only shown in full in debug mode; otherwise a line count.
        """
        print(f"\nOUT OF DATE: {path}", file=sys.stderr)
        if self.debug:
            print(diff, file=sys.stderr)
        else:
            changed = sum(
                1 for line in diff.splitlines()
                if line[:1] in ("+", "-") and not line.startswith(("+++", "---"))
            )
            print(f"Changed lines: {changed}", file=sys.stderr)
        print("\nRegenerate it with:\n  workflowgen generate", file=sys.stderr)

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[Mapping[str, object]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print a failure the user can act on.

        Args:
            title: What failed (generate, settings loading, ...)
            message: One-line description
            details: Context such as the offending key or settings path,
                printed as `key: value` lines
            suggestion: How to fix it
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(message, file=sys.stderr)
        for key, value in (details or {}).items():
            print(f"  {key}: {value}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)

    def print_exception(self, exc: Exception) -> None:
        """
        Print an unexpected failure.

        Generator errors show their kind; the traceback is only shown in debug mode.
        """
        if self.debug:
            import traceback
            traceback.print_exception(type(exc), exc, exc.__traceback__)
        elif isinstance(exc, WorkflowGenError):
            print(f"Error [{exc.kind}]: {exc.message}", file=sys.stderr)
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_debug(self, message: str) -> None:
        if self.debug:
            print(f"[workflowgen] {message}", file=sys.stderr)


# Process console, replaced by the CLI once --debug is known
_console = Console()


def get_console() -> Console:
    return _console


def set_console(console: Console) -> Console:
    """Install `console` for the rest of the process and return the previous one."""
    global _console
    previous, _console = _console, console
    return previous
