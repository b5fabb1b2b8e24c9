# template.py
from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Tuple

from .errors import UnresolvedPlaceholder

# Only ${NAME} is a placeholder; $NAME and $(...) are left for the shell.
PLACEHOLDER_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def placeholders_in(text: str | None) -> Tuple[str, ...]:
    """Placeholder names in `text`, in order of first appearance."""
    if not text:
        return ()
    seen: list[str] = []
    for m in PLACEHOLDER_RE.finditer(text):
        if m.group(1) not in seen:
            seen.append(m.group(1))
    return tuple(seen)


def render(text: str, variables: Mapping[str, str]) -> str:
    """Substitute every ${NAME} in `text`; an unset NAME raises UnresolvedPlaceholder."""
    def _sub(m: re.Match) -> str:
        name = m.group(1)
        if name not in variables:
            raise UnresolvedPlaceholder(name=name, template=text)
        return variables[name]

    return PLACEHOLDER_RE.sub(_sub, text)


@dataclass(frozen=True)
class StepTemplate:
    """
    A command line plus optional working directory, both templated.

    `placeholders` is computed up front so a target can be checked
    against the variable environment before anything runs.
    """
    command: str
    cwd: str | None = None
    placeholders: Tuple[str, ...] = field(init=False)

    def __post_init__(self) -> None:
        names = list(placeholders_in(self.cwd))
        names += [n for n in placeholders_in(self.command) if n not in names]
        object.__setattr__(self, "placeholders", tuple(names))

    def missing(self, variables: Mapping[str, str]) -> Tuple[str, ...]:
        return tuple(n for n in self.placeholders if n not in variables)

    def render(self, variables: Mapping[str, str]) -> Tuple[str, str | None]:
        cwd = render(self.cwd, variables) if self.cwd is not None else None
        return render(self.command, variables), cwd
