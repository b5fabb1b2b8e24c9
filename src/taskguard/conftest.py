from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

import pytest

from taskguard.model import RenderedStep
from taskguard.ui.console import Console, set_console


@dataclass
class RecordingRunner:
    """Fake process runner: records every step, returns scripted exit codes."""
    codes: Dict[int, int] = field(default_factory=dict)
    calls: List[RenderedStep] = field(default_factory=list)
    envs: List[dict] = field(default_factory=list)

    def __call__(self, step: RenderedStep, variables) -> int:
        self.calls.append(step)
        self.envs.append(dict(variables))
        return self.codes.get(step.index, 0)

    @property
    def commands(self) -> List[str]:
        return [s.command for s in self.calls]


@pytest.fixture
def recorder() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture(autouse=True)
def quiet_console():
    console = Console(debug=False, color=False)
    set_console(console)
    return console
