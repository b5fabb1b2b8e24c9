# runner.py
from __future__ import annotations

import os
import runpy
import signal
import subprocess
from collections.abc import Mapping
from pathlib import Path
from typing import Callable, List, Optional

from .errors import TargetDefinitionError, TaskError, UnresolvedPlaceholder
from .guard import check_plan_guards
from .model import DispatchState, ExecutionResult, RenderedStep, Target, Variables
from .registry import Registry
from .ui.console import Console, get_console

# A process runner gets one rendered step plus the variable environment
# and returns the exit code. Output streams are not touched.
ProcessRunner = Callable[[RenderedStep, Mapping[str, str]], int]

# Seconds a child gets to exit after SIGINT before it is killed.
INTERRUPT_GRACE = 5.0


# ----------------------------------------------------------------------
# Targets loading (local file)
# ----------------------------------------------------------------------

def load_targets(path: str | Path) -> List[Target]:
    """
    Load targets from a python file path.

    The file must define either:
      - targets() -> List[Target]
      - TARGETS = [Target, ...]
    """
    tf_path = Path(path).expanduser().resolve()
    if not tf_path.exists():
        raise FileNotFoundError(f"Targets file not found: {tf_path}")
    if tf_path.suffix != ".py":
        raise TargetDefinitionError(f"Targets file must be a .py file, got: {tf_path.name}")

    module_name = f"taskguard_targets_{tf_path.stem}"
    globals_dict = runpy.run_path(str(tf_path), run_name=module_name)

    found = None
    if "targets" in globals_dict and callable(globals_dict["targets"]):
        found = globals_dict["targets"]()
    elif "TARGETS" in globals_dict:
        found = globals_dict["TARGETS"]

    if not isinstance(found, list) or not all(isinstance(t, Target) for t in found):
        raise TargetDefinitionError(
            f"{tf_path.name} must return/define a List[Target]",
            details=["Define targets() -> List[Target] or TARGETS = [Target, ...]."],
        )

    return found


# ----------------------------------------------------------------------
# Execution primitives
# ----------------------------------------------------------------------

def _signal_group(proc: subprocess.Popen, sig: int) -> None:
    try:
        os.killpg(proc.pid, sig)
    except ProcessLookupError:
        # the whole group has already exited
        pass


def subprocess_runner(step: RenderedStep, variables: Mapping[str, str]) -> int:
    """
    Run one rendered step through the shell and wait for it.

    stdout/stderr are inherited so output passes through unmodified.
    The shell leads its own session, so on Ctrl-C SIGINT goes to its whole
    process group (then SIGKILL after a grace period) and the interrupt is
    re-raised so no further step runs.
    """
    cwd = None
    if step.cwd:
        cwd = Path(step.cwd)
        if not cwd.is_dir():
            get_console().print_warning(f"[{step.target}] working directory not found: {cwd}")
            return 1

    proc = subprocess.Popen(step.command, shell=True, cwd=cwd, env=dict(variables), start_new_session=True)
    try:
        code = proc.wait()
    except KeyboardInterrupt:
        _signal_group(proc, signal.SIGINT)
        try:
            proc.wait(timeout=INTERRUPT_GRACE)
        except subprocess.TimeoutExpired:
            _signal_group(proc, signal.SIGKILL)
            proc.wait()
        raise

    # killed by signal N -> shell convention 128+N
    return 128 - code if code < 0 else code


def render_plan(plan: List[Target], variables: Mapping[str, str]) -> List[RenderedStep]:
    """
    Render every step of every planned target.

    All unresolved ${NAME}s of the plan are reported together before
    anything is substituted.
    """
    unresolved: List[str] = []
    first_template = None
    for target in plan:
        for template in target.steps:
            for name in template.missing(variables):
                if name not in unresolved:
                    unresolved.append(name)
                    first_template = first_template or template.command
    if unresolved:
        raise UnresolvedPlaceholder(name=unresolved[0], template=first_template, names=tuple(unresolved))

    rendered: List[RenderedStep] = []
    for target in plan:
        for template in target.steps:
            command, cwd = template.render(variables)
            rendered.append(RenderedStep(target=target.name, index=len(rendered), command=command, cwd=cwd))
    return rendered


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------

def _enter(console: Console, name: str, state: DispatchState) -> DispatchState:
    console.print_debug(f"{name}: {state.value}")
    return state


def dispatch(
    registry: Registry,
    name: str,
    variables: Variables,
    *,
    runner: ProcessRunner = subprocess_runner,
    dry_run: bool = False,
    console: Optional[Console] = None,
) -> ExecutionResult:
    """
    Run target `name` (and its prerequisites) against `variables`.

    Lookup, guard and render errors are raised before any process runs.
    A failing step does not raise: its exit code ends up in the result.
    """
    console = console or get_console()
    _enter(console, name, DispatchState.IDLE)

    plan = registry.plan(name)
    console.print_debug(f"plan for {name}: {[t.name for t in plan]}")

    _enter(console, name, DispatchState.GUARD_CHECKING)
    try:
        check_plan_guards(plan, variables)
        steps = render_plan(plan, variables)
    except TaskError:
        _enter(console, name, DispatchState.ABORTED)
        raise

    if dry_run:
        console.print_plan(steps)
        return ExecutionResult(target=name, exit_code=0, state=DispatchState.SUCCEEDED)

    by_name = {t.name: t for t in plan}
    current = None
    for step in steps:
        if step.target != current:
            current = step.target
            console.print_target_started(by_name[current])
        _enter(console, name, DispatchState.STEP_RUNNING)
        console.print_step(step)

        code = runner(step, variables)
        if code != 0:
            return ExecutionResult(
                target=name,
                exit_code=code,
                state=_enter(console, name, DispatchState.FAILED),
                stopped_at=step.index,
                failed_target=step.target,
            )

    # targets without steps of their own (pure aggregation) still get a banner
    if not steps:
        console.print_target_started(by_name[name])

    return ExecutionResult(target=name, exit_code=0, state=_enter(console, name, DispatchState.SUCCEEDED))
