# mazepath/core/placement.py
#!/usr/bin/env python3
import logging
import random
from typing import List, Optional, Tuple

from mazepath.core.errors import InsufficientFreeCells
from mazepath.core.types import Grid, Location

log = logging.getLogger(__name__)


def free_cells(grid: Grid) -> List[Location]:
    """Passable interior cells; the border ring is never a candidate."""
    return [loc for loc in grid.interior() if not grid.is_blocked(loc)]


def choose_endpoints(grid: Grid, rng: Optional[random.Random] = None) -> Tuple[Location, Location]:
    """
    Pick distinct start and goal cells at random.

    The candidate list is shuffled and its first and last entries are used, so
    the two can only coincide when there is a single candidate (rejected).
    """
    locations = free_cells(grid)
    if len(locations) < 2:
        log.error("Not enough free tiles to place start and goal (%d free)", len(locations))
        raise InsufficientFreeCells(len(locations))

    (rng or random.Random()).shuffle(locations)
    return locations[0], locations[-1]
