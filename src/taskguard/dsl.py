# src/taskguard/dsl.py
from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List, Optional, Sequence, Union

from .model import Target
from .template import StepTemplate


# ---------------------------------------------------------------------
# Step helper
# ---------------------------------------------------------------------

def sh(cmd: str, *, cwd: str | None = None) -> StepTemplate:
    """Create a shell step. Both `cmd` and `cwd` may hold ${NAME} placeholders."""
    return StepTemplate(command=cmd, cwd=cwd)


# ---------------------------------------------------------------------
# Functional Target helper
# ---------------------------------------------------------------------

def target(
    name: str,
    *steps: StepTemplate,  # allow: target("x", sh(...), sh(...))
    guard: Optional[Sequence[str]] = None,
    help: Optional[str] = None,
    category: Optional[str] = None,
    needs: Optional[Sequence[str]] = None,
    cwd: str | None = None,  # default cwd applied to steps missing cwd
) -> Target:
    steps_final = list(steps)

    # a target may be pure aggregation over its needs (e.g. `check`)
    if not steps_final and not needs:
        raise ValueError(f"target({name!r}) must have at least one step or need")

    if cwd is not None:
        steps_final = [s if s.cwd is not None else replace(s, cwd=cwd) for s in steps_final]

    return Target(
        name=name,
        steps=tuple(steps_final),
        guards=tuple(guard or ()),
        help=help,
        category=category,
        needs=tuple(needs or ()),
    )


# ---------------------------------------------------------------------
# Builder API
# ---------------------------------------------------------------------

class TargetBuilder:
    def __init__(self, name: str):
        self.name = name
        self._steps: list[StepTemplate] = []
        self._guards: list[str] = []
        self._needs: list[str] = []
        self._help: Optional[str] = None
        self._category: Optional[str] = None

    def guard(self, *variables: str):
        self._guards.extend(variables)
        return self

    def depends_on(self, *target_names: str):
        self._needs.extend(target_names)
        return self

    def define_step(self, run: str, cwd: str | None = None):
        self._steps.append(StepTemplate(command=run, cwd=cwd))
        return self

    def describe(self, text: str, category: Optional[str] = None):
        self._help = text
        if category is not None:
            self._category = category
        return self

    def build(self) -> Target:
        return target(
            self.name,
            *self._steps,
            guard=self._guards,
            help=self._help,
            category=self._category,
            needs=self._needs,
        )


def build(name: str) -> TargetBuilder:
    """Convenience: build('deploy').guard('ENV').define_step(...).build()"""
    return TargetBuilder(name)


# ---------------------------------------------------------------------
# Grouping helpers (the `##@ Section` headers of a Makefile)
# ---------------------------------------------------------------------

def category(label: str, *targets: Target) -> List[Target]:
    """Stamp `label` onto every target that has no category yet."""
    return [t if t.category else replace(t, category=label) for t in targets]


def collect(*items: Union[Target, Iterable[Target]]) -> List[Target]:
    """
    Flatten targets and lists of targets into one list.

    Use this name so you can define your own
    def targets(): return collect(category(...), target(...)).
    """
    out: List[Target] = []
    for item in items:
        if isinstance(item, Target):
            out.append(item)
        else:
            out.extend(item)
    return out
