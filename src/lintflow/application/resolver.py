"""
DependencyResolver: deterministic topological ordering of a phase set.

Each phase gets a dense index from its definition order; edges are kept
as index lists and Kahn's algorithm pops the smallest ready index, so
ties between independent phases always follow definition order.
"""

import heapq
from collections.abc import Iterable, Sequence

from lintflow.domain.exceptions import (
    CyclicDependency,
    DuplicatePhaseId,
    UnknownDependency,
)
from lintflow.domain.models import Phase


class DependencyResolver:
    """
    Pure resolver from a phase set to an execution order.

    Raises definition errors in a fixed order: duplicates, then unknown
    dependencies, then cycles.
    """

    def resolve(self, phases: Iterable[Phase]) -> tuple[Phase, ...]:
        """
        Order phases so that every phase follows its dependencies and
        the phase its condition refers to.

        Args:
            phases: Phase set in definition order

        Returns:
            Phases in execution order

        Raises:
            DuplicatePhaseId: Two phases share an id
            UnknownDependency: A phase depends on an id not in the set
            CyclicDependency: The dependency graph has a cycle
        """
        ordered = tuple(phases)
        index = self._index(ordered)
        dependents, in_degree = self._build_graph(ordered, index)

        ready = [i for i, degree in enumerate(in_degree) if degree == 0]
        heapq.heapify(ready)
        result: list[int] = []

        while ready:
            current = heapq.heappop(ready)
            result.append(current)
            for dependent in dependents[current]:
                in_degree[dependent] -= 1
                if in_degree[dependent] == 0:
                    heapq.heappush(ready, dependent)

        if len(result) < len(ordered):
            emitted = set(result)
            unresolved = tuple(
                phase.id for i, phase in enumerate(ordered) if i not in emitted
            )
            raise CyclicDependency(unresolved)

        return tuple(ordered[i] for i in result)

    def _index(self, phases: Sequence[Phase]) -> dict[str, int]:
        """Assign each phase its definition-order index."""
        index: dict[str, int] = {}
        for i, phase in enumerate(phases):
            if phase.id in index:
                raise DuplicatePhaseId(phase.id)
            index[phase.id] = i
        return index

    def _build_graph(
        self, phases: Sequence[Phase], index: dict[str, int]
    ) -> tuple[list[list[int]], list[int]]:
        """Build dependent lists and in-degrees over phase indices."""
        dependents: list[list[int]] = [[] for _ in phases]
        in_degree = [0] * len(phases)

        for i, phase in enumerate(phases):
            # A repeated dependency id is one edge, not two; a condition
            # target is ordered like a dependency
            for dep_id in dict.fromkeys(phase.prerequisites):
                dep = index.get(dep_id)
                if dep is None:
                    raise UnknownDependency(phase.id, dep_id)
                dependents[dep].append(i)
                in_degree[i] += 1

        return dependents, in_degree


def resolve_phases(phases: Iterable[Phase]) -> tuple[Phase, ...]:
    """Resolve a phase set with a default DependencyResolver."""
    return DependencyResolver().resolve(phases)
