# catalog/tools.py
from __future__ import annotations

import shlex
from typing import List

from ..dsl import sh, target
from ..model import Target

TOOL_HINTS = {
    "aws": "Install the AWS CLI v2 or fix PATH.",
    "terraform": "Install Terraform (https://developer.hashicorp.com/terraform/install) or fix PATH.",
    "tflint": "Install tflint (e.g., brew install tflint).",
    "tfsec": "Install tfsec (e.g., brew install tfsec).",
    "docker": "Install Docker and ensure the daemon is running.",
    "poetry": "Install poetry (e.g., pipx install poetry).",
}


def check_tool_target(tool: str) -> Target:
    """A `check-<tool>` target that fails with a hint when `tool` is not on PATH."""
    hint = TOOL_HINTS.get(tool, f"Install {tool} or fix PATH.")
    cmd = (
        f"command -v {shlex.quote(tool)} >/dev/null 2>&1 "
        f"|| {{ echo {shlex.quote(f'{tool} is not available. {hint}')} >&2; exit 1; }}"
    )
    return target(f"check-{tool}", sh(cmd), help=f"Check that {tool} is installed")


def check_targets(*tools: str) -> List[Target]:
    """One `check-<tool>` per tool plus an aggregate `check` that needs them all."""
    checks = [check_tool_target(t) for t in tools]
    return checks + [target("check", needs=[c.name for c in checks], help="Check requirements")]
