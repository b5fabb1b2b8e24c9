"""Console output formatting utilities for taskguard."""

from __future__ import annotations

from typing import Dict, List, Optional

import click

from ..model import ExecutionResult, RenderedStep, Target

# Makefile-style colors: OK for banners, INFO for sections, ERROR for failures
OK_COLOR = "green"
INFO_COLOR = "cyan"
WARN_COLOR = "yellow"
ERROR_COLOR = "red"

BANNER = "taskguard"


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False, color: Optional[bool] = None):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
            color: Force colors on/off; None lets click decide from the tty
        """
        self.debug = debug
        self.color = color

    def _echo(self, message: str = "", *, fg: str | None = None, bold: bool = False, err: bool = True) -> None:
        if fg or bold:
            message = click.style(message, fg=fg, bold=bold)
        click.echo(message, err=err, color=self.color)

    def print_target_started(self, target: Target) -> None:
        """Print the banner for a target, the `[APP] Plan infrastructure` echo."""
        label = target.help or target.name
        self._echo(f"[{target.name}] {label}", fg=OK_COLOR)

    def print_step(self, step: RenderedStep) -> None:
        """Print step start message."""
        where = f" (in {step.cwd})" if step.cwd else ""
        self._echo(f"  ▶ {step.command}{where}")

    def print_plan(self, steps: List[RenderedStep]) -> None:
        """Print the rendered plan (dry run) on stdout."""
        current = None
        for step in steps:
            if step.target != current:
                current = step.target
                self._echo(f"[{step.target}]", fg=INFO_COLOR, err=False)
            if step.cwd:
                self._echo(f"  cd {step.cwd} && {step.command}", err=False)
            else:
                self._echo(f"  {step.command}", err=False)

    def print_help(self, groups: Dict[str, List[Target]], banner: str = BANNER) -> None:
        """
        Print targets grouped by category.

        Mirrors the awk help of a Makefile: a usage line, then each
        `##@ Section` header followed by `target   description` rows.
        """
        self._echo(f"Usage: {banner} <target> [KEY=VALUE ...]", err=False)
        width = max((len(t.name) for ts in groups.values() for t in ts), default=0)
        for label, targets in groups.items():
            self._echo("", err=False)
            self._echo(label, bold=True, err=False)
            for t in targets:
                name = click.style(f"{t.name:<{width}}", fg=INFO_COLOR)
                self._echo(f"  {name}  {t.help or ''}".rstrip(), err=False)

    def print_result(self, result: ExecutionResult) -> None:
        """Print final status line."""
        if result.ok:
            self._echo(f"[{result.target}] done", fg=OK_COLOR)
        else:
            self._echo(
                f"[{result.failed_target or result.target}] failed (exit={result.exit_code})",
                fg=ERROR_COLOR,
            )

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        self._echo(f"\nERROR: {title}", fg=ERROR_COLOR, bold=True)
        self._echo(message)
        if details:
            for detail in details:
                self._echo(f"  {detail}")
        if suggestion:
            self._echo(f"\n{suggestion}")

    def print_exception(self, exc: BaseException) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            self._echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).rstrip())
        else:
            self._echo(f"Error: {exc}", fg=ERROR_COLOR)

    def print_info(self, message: str) -> None:
        """Print informational message."""
        self._echo(message)

    def print_warning(self, message: str) -> None:
        self._echo(message, fg=WARN_COLOR)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            self._echo(f"[DEBUG] {message}")


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
