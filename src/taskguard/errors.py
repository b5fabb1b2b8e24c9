# errors.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

UNKNOWN_TARGET_EXIT = 2
MISSING_VARIABLE_EXIT = 3
UNRESOLVED_PLACEHOLDER_EXIT = 4
DEFINITION_ERROR_EXIT = 5


class TaskError(Exception):
    """
    Base class for every fatal dispatch error.

    `exit_code` is what the CLI exits with; `title` and `suggestion`
    feed the structured error block printed by the console.
    """
    exit_code: int = 1
    title: str = "Task error"

    @property
    def suggestion(self) -> str | None:
        return None


@dataclass
class UnknownTarget(TaskError):
    name: str
    known: Tuple[str, ...] = ()

    exit_code = UNKNOWN_TARGET_EXIT
    title = "Unknown target"

    def __str__(self) -> str:
        return f"unknown target '{self.name}'"

    @property
    def suggestion(self) -> str | None:
        return "List available targets with:\n  taskguard help"


@dataclass
class MissingGuardedVariable(TaskError):
    names: Tuple[str, ...]
    target: str | None = None

    exit_code = MISSING_VARIABLE_EXIT
    title = "Missing variable"

    def __str__(self) -> str:
        joined = ", ".join(self.names)
        where = f" for target '{self.target}'" if self.target else ""
        return f"required variable(s) not set{where}: {joined}"

    @property
    def suggestion(self) -> str | None:
        example = " ".join(f"{n}=xxx" for n in self.names)
        return f"Pass the value(s) on the command line:\n  taskguard {self.target or '<target>'} {example}"


@dataclass
class UnresolvedPlaceholder(TaskError):
    name: str
    template: str | None = None
    # every unresolved name of the plan, `name` being the first
    names: Tuple[str, ...] = ()

    exit_code = UNRESOLVED_PLACEHOLDER_EXIT
    title = "Unresolved placeholder"

    def __str__(self) -> str:
        if len(self.names) > 1:
            return "no value for " + ", ".join(f"${{{n}}}" for n in self.names)
        if self.template:
            return f"no value for ${{{self.name}}} in: {self.template}"
        return f"no value for ${{{self.name}}}"


@dataclass
class StepExecutionFailed(TaskError):
    step_index: int
    exit_code: int = 1
    target: str | None = None

    title = "Step failed"

    def __str__(self) -> str:
        where = f"[{self.target}] " if self.target else ""
        return f"{where}step {self.step_index} failed (exit={self.exit_code})"


@dataclass
class TargetDefinitionError(TaskError):
    message: str
    details: list[str] = field(default_factory=list)

    exit_code = DEFINITION_ERROR_EXIT
    title = "Invalid target definitions"

    def __str__(self) -> str:
        return self.message
