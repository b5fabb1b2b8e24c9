from __future__ import annotations

from typing import List

from ..dsl import collect
from ..model import Target
from .aws import aws_targets
from .development import development_targets
from .terraform import terraform_targets


def builtin_targets() -> List[Target]:
    """Targets available when no targets file is found."""
    return collect(development_targets(), aws_targets(), terraform_targets())


__all__ = ["builtin_targets", "aws_targets", "development_targets", "terraform_targets"]
