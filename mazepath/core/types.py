# mazepath/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Dict, Any, Sequence, Tuple, Union

from mazepath.core.errors import InvalidGrid

OPEN = 0
WALL = 1


@dataclass(frozen=True)
class Location:
    x: int
    z: int

    def __add__(self, other: "Location") -> "Location":
        return Location(self.x + other.x, self.z + other.z)

    def distance(self, other: "Location") -> float:
        """Straight-line distance, used for both step cost and heuristic."""
        return ((self.x - other.x) ** 2 + (self.z - other.z) ** 2) ** 0.5

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.z)


# Order matters: it decides which of several equal-F nodes is opened first.
DIRECTIONS: Tuple[Location, ...] = (
    Location(1, 0),
    Location(0, 1),
    Location(-1, 0),
    Location(0, -1),
)


@dataclass
class Grid:
    width: int
    depth: int
    cells: List[List[int]]             # [z][x]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Grid":
        try:
            if not rows or not rows[0]:
                raise InvalidGrid("grid needs at least one row and one column")
            width = len(rows[0])
            if any(len(r) != width for r in rows):
                raise InvalidGrid("cells size mismatch: rows have different lengths")
            cells = [[int(v) for v in r] for r in rows]
        except InvalidGrid:
            raise
        except (TypeError, ValueError) as exc:
            raise InvalidGrid(f"cells must be rows of integers: {exc}") from exc
        return cls(width, len(rows), cells)

    @classmethod
    def open_room(cls, width: int, depth: int) -> "Grid":
        """Open interior surrounded by a one-cell wall ring."""
        rows = []
        for z in range(depth):
            rows.append([
                WALL if x in (0, width - 1) or z in (0, depth - 1) else OPEN
                for x in range(width)
            ])
        return cls.from_rows(rows)

    def in_bounds(self, loc: Location) -> bool:
        return 0 <= loc.x < self.width and 0 <= loc.z < self.depth

    def is_blocked(self, loc: Location) -> bool:
        # caller bounds-checks first; no clamping here
        return self.cells[loc.z][loc.x] == WALL

    def neighbors(self, loc: Location) -> List[Location]:
        """Offset `loc` by every direction. Nothing is filtered."""
        return [loc + d for d in DIRECTIONS]

    def interior(self) -> Iterator[Location]:
        for z in range(1, self.depth - 1):
            for x in range(1, self.width - 1):
                yield Location(x, z)


@dataclass(eq=False)
class SearchNode:
    location: Location
    g: float = 0.0
    h: float = 0.0
    f: float = 0.0
    parent: Optional[Location] = None  # key into the engine's node arena

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SearchNode):
            return NotImplemented
        return self.location == other.location

    def __hash__(self) -> int:
        return hash(self.location)


class SearchStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    FOUND = "found"
    EXHAUSTED = "exhausted"

    @property
    def terminal(self) -> bool:
        return self in (SearchStatus.FOUND, SearchStatus.EXHAUSTED)


@dataclass
class StepResult:
    status: SearchStatus
    opened: List[Location] = field(default_factory=list)
    closed: List[Location] = field(default_factory=list)
    current: Optional[Location] = None
    path: Optional[List[Location]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)


# -------------------- observer events --------------------

@dataclass(frozen=True)
class NodeExpanded:
    location: Location
    g: float
    h: float
    f: float


@dataclass(frozen=True)
class NodeClosed:
    location: Location


@dataclass(frozen=True)
class SearchFound:
    path: Tuple[Location, ...]


@dataclass(frozen=True)
class SearchExhausted:
    pass


SearchEvent = Union[NodeExpanded, NodeClosed, SearchFound, SearchExhausted]
