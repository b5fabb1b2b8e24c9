# model.py
from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple

from .errors import StepExecutionFailed
from .template import StepTemplate


class Variables(Mapping):
    """
    Immutable variable environment used for guards and substitution.

    Built once before dispatch and handed to child processes as their env.
    """

    def __init__(self, values: Mapping[str, str] | None = None):
        self._values: Dict[str, str] = {k: str(v) for k, v in (values or {}).items()}

    @classmethod
    def from_environ(
        cls,
        overrides: Mapping[str, str] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> Variables:
        """Merge `overrides` (KEY=VALUE arguments) over the process environment."""
        base = dict(os.environ if environ is None else environ)
        base.update(overrides or {})
        return cls(base)

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Variables({len(self._values)} names)"


@dataclass(frozen=True)
class Target:
    """A named unit of work: guarded variables + ordered step templates."""
    name: str
    steps: Tuple[StepTemplate, ...]
    guards: Tuple[str, ...] = ()
    help: Optional[str] = None
    category: Optional[str] = None

    # prerequisite targets, planned before this one
    needs: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RenderedStep:
    """A step with every placeholder substituted, ready for the process runner."""
    target: str
    index: int
    command: str
    cwd: str | None = None


class DispatchState(str, Enum):
    IDLE = "idle"
    GUARD_CHECKING = "guard_checking"
    STEP_RUNNING = "step_running"
    ABORTED = "aborted"
    FAILED = "failed"
    SUCCEEDED = "succeeded"


@dataclass(frozen=True)
class ExecutionResult:
    target: str
    exit_code: int
    state: DispatchState
    stopped_at: int | None = None
    failed_target: str | None = None

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def raise_for_status(self) -> None:
        if self.state is DispatchState.FAILED:
            raise StepExecutionFailed(
                step_index=self.stopped_at if self.stopped_at is not None else -1,
                exit_code=self.exit_code,
                target=self.failed_target or self.target,
            )
