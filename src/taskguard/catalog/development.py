# catalog/development.py
from __future__ import annotations

from typing import List

from ..dsl import category, sh, target
from ..model import Target
from .tools import check_targets

LICENSE_EYE_IMAGE = "ghcr.io/apache/skywalking-eyes/license-eye"


def development_targets() -> List[Target]:
    return category(
        "Development",
        target(
            "clean",
            sh("echo Cleanup"),
            help="Cleanup",
        ),
        *check_targets("aws", "terraform", "tflint", "tfsec", "docker"),
        target(
            "validate",
            sh("poetry run pre-commit run -a"),
            help="Execute git-hooks",
        ),
        target(
            "license",
            sh(
                'docker run -it --rm -v "$(pwd)":/github/workspace '
                f"{LICENSE_EYE_IMAGE} --config /github/workspace/.licenserc.yaml header ${{ACTION}}"
            ),
            guard=["ACTION"],
            help="Check license (ACTION=xxx : fix or check)",
        ),
    )
