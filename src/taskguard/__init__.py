from .dsl import sh, target, build, category, collect, TargetBuilder
from .errors import (
    TaskError,
    UnknownTarget,
    MissingGuardedVariable,
    UnresolvedPlaceholder,
    StepExecutionFailed,
    TargetDefinitionError,
)
from .model import Target, Variables, RenderedStep, ExecutionResult, DispatchState
from .registry import Registry
from .runner import dispatch
from .template import StepTemplate

__all__ = [
    "sh", "target", "build", "category", "collect", "TargetBuilder",
    "TaskError", "UnknownTarget", "MissingGuardedVariable", "UnresolvedPlaceholder",
    "StepExecutionFailed", "TargetDefinitionError",
    "Target", "Variables", "RenderedStep", "ExecutionResult", "DispatchState",
    "Registry", "dispatch", "StepTemplate",
]
