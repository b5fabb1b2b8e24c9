# registry.py
from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, List, Set, Tuple

from .errors import TargetDefinitionError, UnknownTarget
from .model import Target

DEFAULT_CATEGORY = "Other"


def build_graph(targets: List[Target]) -> Tuple[Dict[str, Set[str]], Dict[str, int]]:
    """
    Build the prerequisite graph.

    Edge need -> target (the need must run BEFORE the target).
    """
    names = [t.name for t in targets]
    if len(set(names)) != len(names):
        dupes = sorted({n for n in names if names.count(n) > 1})
        raise TargetDefinitionError(f"Duplicate target names found: {dupes}")

    name_set = set(names)
    adj: Dict[str, Set[str]] = {n: set() for n in name_set}
    indeg: Dict[str, int] = {n: 0 for n in name_set}

    for target in targets:
        for need in target.needs:
            if need not in name_set:
                raise TargetDefinitionError(
                    f"Target '{target.name}' needs missing target '{need}'",
                    details=[f"Known targets: {sorted(name_set)}"],
                )
            if target.name not in adj[need]:
                adj[need].add(target.name)
                indeg[target.name] += 1

    return adj, indeg


def check_acyclic(adj: Dict[str, Set[str]], indeg: Dict[str, int]) -> None:
    indeg = dict(indeg)  # copy (we mutate it)
    q = deque(sorted(n for n, d in indeg.items() if d == 0))
    processed = 0

    while q:
        node = q.popleft()
        processed += 1
        for child in sorted(adj.get(node, set())):
            indeg[child] -= 1
            if indeg[child] == 0:
                q.append(child)

    if processed != len(indeg):
        remaining = sorted(n for n, d in indeg.items() if d > 0)
        raise TargetDefinitionError(f"Targets have a prerequisite cycle. Stuck targets: {remaining}")


class Registry:
    """Name -> Target lookup, validated once when built."""

    def __init__(self, targets: Iterable[Target]):
        self._targets: List[Target] = list(targets)
        for t in self._targets:
            if not isinstance(t, Target):
                raise TargetDefinitionError(f"Expected Target, got {type(t).__name__}: {t!r}")
        adj, indeg = build_graph(self._targets)
        check_acyclic(adj, indeg)
        self._by_name: Dict[str, Target] = {t.name: t for t in self._targets}

    def __contains__(self, name: str) -> bool:
        return name in self._by_name

    def __iter__(self):
        return iter(self._targets)

    def __len__(self) -> int:
        return len(self._targets)

    @property
    def names(self) -> List[str]:
        return [t.name for t in self._targets]

    def get(self, name: str) -> Target:
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownTarget(name=name, known=tuple(self.names)) from None

    def plan(self, name: str) -> List[Target]:
        """
        The target plus its transitive prerequisites, prerequisites first.

        Each target appears once; needs are visited in declared order.
        """
        ordered: List[Target] = []
        seen: Set[str] = set()

        def visit(target: Target) -> None:
            if target.name in seen:
                return
            seen.add(target.name)
            for need in target.needs:
                visit(self._by_name[need])
            ordered.append(target)

        visit(self.get(name))
        return ordered

    def grouped(self) -> Dict[str, List[Target]]:
        """Targets by category label, categories in first-seen order."""
        groups: Dict[str, List[Target]] = {}
        for t in self._targets:
            groups.setdefault(t.category or DEFAULT_CATEGORY, []).append(t)
        return groups
