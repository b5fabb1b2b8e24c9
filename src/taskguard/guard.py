# guard.py
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import List

from .errors import MissingGuardedVariable
from .model import Target


def missing_variables(names: Iterable[str], variables: Mapping[str, str]) -> List[str]:
    """Guarded names whose value is unset or blank, in declared order."""
    missing: List[str] = []
    for name in names:
        value = variables.get(name)
        if value is None or not value.strip():
            if name not in missing:
                missing.append(name)
    return missing


def check_guards(target: Target, variables: Mapping[str, str]) -> None:
    """
    Abort before any side effect if a guarded variable is unset or blank.

    Every missing name is reported at once, not just the first.
    """
    missing = missing_variables(target.guards, variables)
    if missing:
        raise MissingGuardedVariable(names=tuple(missing), target=target.name)


def check_plan_guards(plan: Iterable[Target], variables: Mapping[str, str]) -> None:
    """Guard every target of a plan; the first target with gaps is reported."""
    for target in plan:
        check_guards(target, variables)
