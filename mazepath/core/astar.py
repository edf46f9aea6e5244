# mazepath/core/astar.py
#!/usr/bin/env python3
"""
A* over a maze Grid, one expansion per step() so a driver can pause between
expansions (animation, debugging) or just loop until a terminal status.

Lifecycle:
- begin(grid, start, goal) -> step() ... -> FOUND | EXHAUSTED
- reconstruct_path() once FOUND

Costs:
- g: Euclidean step cost accumulated from start (1.0 per cardinal move).
- h: straight-line distance to the goal.
- f = g + h; lowest f is expanded next, ties go to whichever node comes first
  in the open ordering (stable sort, so earlier entries win).

Open-set updates follow `policy`:
- "improve":   a revisited open node is only rewritten when the new g is lower.
- "overwrite": last write wins, whatever the cost. Kept so older recorded
               runs (which used that rule) can be replayed step for step.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from mazepath.core.errors import InvalidBounds, NoPathExists, ReconstructBeforeFound
from mazepath.core.types import (
    Grid,
    Location,
    NodeClosed,
    NodeExpanded,
    SearchEvent,
    SearchExhausted,
    SearchFound,
    SearchNode,
    SearchStatus,
    StepResult,
)

log = logging.getLogger(__name__)

Observer = Callable[[SearchEvent], None]

POLICIES = ("improve", "overwrite")


@dataclass
class SearchEngine:
    name: str = "A*"
    policy: str = "improve"
    observer: Optional[Observer] = None

    # Internal state
    grid: Optional[Grid] = None
    open_nodes: Dict[Location, SearchNode] = field(default_factory=dict)    # insertion-ordered frontier
    closed_nodes: Dict[Location, SearchNode] = field(default_factory=dict)
    start: Optional[SearchNode] = None
    goal: Optional[SearchNode] = None
    current: Optional[SearchNode] = None
    path: List[SearchNode] = field(default_factory=list)
    status: SearchStatus = SearchStatus.IDLE
    steps: int = 0
    popped_count: int = 0
    _observers: List[Observer] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.policy not in POLICIES:
            raise ValueError(f"unknown update policy {self.policy!r}, expected one of {POLICIES}")
        if self.observer is not None:
            self._observers.append(self.observer)

    # -------------------- lifecycle --------------------

    def subscribe(self, observer: Observer) -> None:
        self._observers.append(observer)

    def begin(self, grid: Grid, start: Location, goal: Location) -> None:
        """Discard any previous search and seed the open set with `start`."""
        for label, loc in (("start", start), ("goal", goal)):
            if not grid.in_bounds(loc):
                raise InvalidBounds(f"{label} {loc.as_tuple()} outside {grid.width}x{grid.depth} grid")

        self.grid = grid
        self.open_nodes.clear()
        self.closed_nodes.clear()
        self.path.clear()
        self.steps = 0
        self.popped_count = 0

        # goal costs only mean something once the goal is actually reached
        self.start = SearchNode(start, 0.0, 0.0, 0.0, None)
        self.goal = SearchNode(goal, 0.0, 0.0, 0.0, None)
        self.open_nodes[start] = self.start
        self.current = self.start
        self.status = SearchStatus.RUNNING
        log.info("search begin start=%s goal=%s policy=%s", start.as_tuple(), goal.as_tuple(), self.policy)

    def run(self, max_steps: Optional[int] = None) -> StepResult:
        """Call step() until a terminal status (or `max_steps` calls)."""
        if max_steps is not None and max_steps < 1:
            raise ValueError(f"max_steps must be at least 1, got {max_steps}")
        result = self.step()
        taken = 1
        while result.status is SearchStatus.RUNNING:
            if max_steps is not None and taken >= max_steps:
                break
            result = self.step()
            taken += 1
        return result

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        """
        Run ONE expansion:
          - Stop if the current node is the goal, or the frontier is empty.
          - Open/update the in-bounds, passable, unclosed neighbors of current.
          - Move the lowest-f frontier node to closed; it is the next current.
        """
        if self.status is SearchStatus.IDLE:
            return StepResult(status=SearchStatus.IDLE, metrics=self._metrics())
        if self.status.terminal:
            return self._terminal_result()

        self.steps += 1

        # goal check first: the goal may have been the last frontier node
        current = self.current
        if current.location == self.goal.location:
            return self._found()

        if not self.open_nodes:
            return self._exhaust()

        opened: List[Location] = []
        for neighbor in self.grid.neighbors(current.location):
            if not self.grid.in_bounds(neighbor) or self.grid.is_blocked(neighbor):
                continue
            if neighbor in self.closed_nodes:
                continue

            g = current.g + current.location.distance(neighbor)
            h = neighbor.distance(self.goal.location)
            f = g + h

            node = self.open_nodes.get(neighbor)
            if node is None:
                node = SearchNode(neighbor, g, h, f, current.location)
                self.open_nodes[neighbor] = node
            elif self.policy == "overwrite" or g < node.g:
                node.g, node.h, node.f = g, h, f
                node.parent = current.location
            else:
                continue

            opened.append(neighbor)
            self._emit(NodeExpanded(neighbor, g, h, f))

        if not self.open_nodes:
            return self._exhaust(opened)

        best = self._pop_best()
        self.closed_nodes[best.location] = best
        self.popped_count += 1
        self.current = best
        log.debug("expanded %s, next %s f=%.3f open=%d",
                  current.location.as_tuple(), best.location.as_tuple(), best.f, len(self.open_nodes))
        if best.location not in (self.start.location, self.goal.location):
            self._emit(NodeClosed(best.location))

        return StepResult(
            status=SearchStatus.RUNNING,
            opened=opened,
            closed=[best.location],
            current=best.location,
            metrics=self._metrics(),
        )

    def _pop_best(self) -> SearchNode:
        ordered = sorted(self.open_nodes.values(), key=lambda n: n.f)  # stable
        self.open_nodes = {n.location: n for n in ordered[1:]}
        return ordered[0]

    def _found(self) -> StepResult:
        self.status = SearchStatus.FOUND
        locations = self.path_locations()
        log.info("goal %s reached after %d steps, path length %d",
                 self.goal.location.as_tuple(), self.steps, len(locations))
        self._emit(SearchFound(tuple(locations)))
        return self._terminal_result()

    def _exhaust(self, opened: Optional[List[Location]] = None) -> StepResult:
        self.status = SearchStatus.EXHAUSTED
        log.info("no path from %s to %s (open set empty after %d steps)",
                 self.start.location.as_tuple(), self.goal.location.as_tuple(), self.steps)
        self._emit(SearchExhausted())
        result = self._terminal_result()
        result.opened = list(opened or [])
        return result

    def _terminal_result(self) -> StepResult:
        path = self.path_locations() if self.status is SearchStatus.FOUND else None
        return StepResult(
            status=self.status,
            current=self.current.location if self.current else None,
            path=path,
            metrics=self._metrics(path_len=len(path) if path else 0),
        )

    def _emit(self, event: SearchEvent) -> None:
        for observer in self._observers:
            observer(event)

    # -------------------- path --------------------

    def _lookup(self, loc: Location) -> Optional[SearchNode]:
        node = self.closed_nodes.get(loc)
        return node if node is not None else self.open_nodes.get(loc)

    def reconstruct_path(self) -> List[SearchNode]:
        """Nodes from the first move to the goal (start excluded)."""
        if self.status is not SearchStatus.FOUND:
            raise ReconstructBeforeFound(f"no path to reconstruct while search is {self.status.value}")

        path: List[SearchNode] = []
        node = self.current
        while node is not None and node.location != self.start.location:
            path.append(node)
            node = self._lookup(node.parent) if node.parent is not None else None
        path.reverse()

        self.path = path
        return list(path)

    def path_locations(self) -> List[Location]:
        return [n.location for n in self.reconstruct_path()]

    def require_path(self) -> List[Location]:
        """Like path_locations(), but an exhausted search raises NoPathExists."""
        if self.status is SearchStatus.EXHAUSTED:
            raise NoPathExists(
                f"no path from {self.start.location.as_tuple()} to {self.goal.location.as_tuple()}"
            )
        return self.path_locations()

    # -------------------- metrics --------------------

    def _metrics(self, path_len: int = 0) -> dict:
        found = self.status is SearchStatus.FOUND
        return {
            "algo": self.name,
            "steps": self.steps,
            "popped": self.popped_count,
            "open_size": len(self.open_nodes),
            "closed_count": len(self.closed_nodes),
            "path_len": path_len,
            "total_cost": self.current.g if found else None,
        }
