# cli.py
from __future__ import annotations

import difflib
import re
import sys
from pathlib import Path

import click

from taskguard.catalog import builtin_targets
from taskguard.errors import TaskError, TargetDefinitionError, UnknownTarget
from taskguard.model import Variables
from taskguard.registry import Registry
from taskguard.runner import dispatch, load_targets
from taskguard.ui.console import Console, set_console, get_console

HELP_TARGET = "help"
DEFAULT_TARGETS_FILE = "taskguard_targets.py"
INTERRUPTED_EXIT = 130

ASSIGNMENT_RE = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)=(.*)$", re.DOTALL)


def find_targets_files() -> list[Path]:
    """
    Find all targets files in the current directory.

    Returns:
        List of Path objects for targets files
    """
    targets_files = []
    current_dir = Path(".")

    default_file = current_dir / DEFAULT_TARGETS_FILE
    if default_file.exists():
        targets_files.append(default_file)

    for path in current_dir.glob("*_targets.py"):
        if path != default_file:
            targets_files.append(path)

    return sorted(targets_files)


def discover_targets_file(file_arg: str | None) -> Path | None:
    """
    Pick the targets file from the argument or the current directory.

    Returns None when nothing is found, meaning the built-in catalog applies.

    Raises:
        TargetDefinitionError: If several candidate files exist
    """
    if file_arg:
        return Path(file_arg)

    candidates = find_targets_files()
    if len(candidates) > 1:
        raise TargetDefinitionError(
            "Multiple targets files found",
            details=[str(f) for f in candidates] + [f"Specify one explicitly: taskguard --file {DEFAULT_TARGETS_FILE}"],
        )
    return candidates[0] if candidates else None


def load_registry(file_arg: str | None) -> Registry:
    console = get_console()
    path = discover_targets_file(file_arg)
    if path is None:
        console.print_debug("no targets file found, using built-in catalog")
        return Registry(builtin_targets())
    console.print_debug(f"loading targets from {path}")
    return Registry(load_targets(path))


def parse_assignments(ctx, param, values) -> dict[str, str]:
    """click callback: turn KEY=VALUE arguments into a dict (later wins)."""
    out: dict[str, str] = {}
    for raw in values:
        m = ASSIGNMENT_RE.match(raw)
        if not m:
            raise click.BadParameter(f"expected KEY=VALUE, got {raw!r}", ctx=ctx, param=param)
        out[m.group(1)] = m.group(2)
    return out


def _error_details(exc: TaskError) -> list[str] | None:
    if isinstance(exc, UnknownTarget):
        close = difflib.get_close_matches(exc.name, exc.known, n=3)
        return [f"Did you mean: {', '.join(close)}?"] if close else None
    return getattr(exc, "details", None) or None


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--file",
    "-f",
    "file_",
    default=None,
    envvar="TASKGUARD_FILE",
    type=click.Path(exists=True, dir_okay=False),
    help=f"Targets file (defaults to {DEFAULT_TARGETS_FILE} if present, else the built-in targets)",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    envvar="TASKGUARD_DEBUG",
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.option("--dry-run", "-n", is_flag=True, default=False, help="Print the rendered commands without running them")
@click.argument("target_name", metavar="TARGET", required=False, default=HELP_TARGET)
@click.argument("assignments", metavar="[KEY=VALUE]...", nargs=-1, callback=parse_assignments)
def cli(file_, debug, dry_run, target_name, assignments):
    """taskguard — guarded shell targets for AWS and Terraform chores."""
    console = Console(debug=debug)
    set_console(console)

    try:
        registry = load_registry(file_)

        if target_name == HELP_TARGET:
            console.print_help(registry.grouped())
            return

        variables = Variables.from_environ(assignments)
        result = dispatch(registry, target_name, variables, dry_run=dry_run, console=console)
        result.raise_for_status()
        if not dry_run:
            console.print_result(result)

    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(INTERRUPTED_EXIT)
    except TaskError as e:
        console.print_error(e.title, str(e), details=_error_details(e), suggestion=e.suggestion)
        if debug:
            console.print_exception(e)
        sys.exit(e.exit_code)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)


if __name__ == "__main__":
    cli()
