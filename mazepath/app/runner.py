# mazepath/app/runner.py
#!/usr/bin/env python3
"""
Headless maze search runner — loads a map, places start/goal if the map has
none, drives the engine to a terminal status and prints the outcome.

Options:
    --map=<name|path>          map stem under maps/ or a JSON file (default 01_open_room)
    --policy=improve|overwrite open-set update rule
    --seed=<int>               seed for random start/goal placement
    --max-steps=<int>          give up after this many step() calls
    --log-level=<LEVEL>        logging level
    --trace                    print every search event

Environment:
    MAZEPATH_POLICY, MAZEPATH_LOG_LEVEL, MAZEPATH_MAP_DIR
CLI flags win over the environment.

Exit codes: 0 path found, 1 no path, 2 bad configuration.
"""

# --- bootstrap import path so `from mazepath...` works when run as a script ---
import sys, os, logging, random
from pathlib import Path
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))
# -------------------------------------------------------------------------------

from typing import List, Optional

from mazepath.app.maps import load_map, resolve_map
from mazepath.core.astar import POLICIES, SearchEngine
from mazepath.core.errors import MazePathError
from mazepath.core.placement import choose_endpoints
from mazepath.core.types import NodeClosed, NodeExpanded, SearchEvent, SearchFound, SearchStatus

log = logging.getLogger("mazepath.runner")

DEFAULT_MAP = "01_open_room"

_ENV = {
    "policy": "MAZEPATH_POLICY",
    "log-level": "MAZEPATH_LOG_LEVEL",
}
_DEFAULTS = {
    "map": DEFAULT_MAP,
    "policy": "improve",
    "seed": None,
    "max-steps": None,
    "log-level": "WARNING",
}


# ---------- option resolution ----------
def resolve_options(argv: List[str]) -> dict:
    opts = dict(_DEFAULTS)
    for key, env in _ENV.items():
        if os.getenv(env):
            opts[key] = os.getenv(env)
    opts["trace"] = False
    for arg in argv:
        if arg == "--trace":
            opts["trace"] = True
        elif arg.startswith("--") and "=" in arg:
            key, value = arg[2:].split("=", 1)
            if key not in _DEFAULTS:
                raise MazePathError(f"unknown option --{key}")
            opts[key] = value
        else:
            raise MazePathError(f"unrecognised argument {arg!r}")

    opts["log-level"] = str(opts["log-level"]).upper()
    if not isinstance(logging.getLevelName(opts["log-level"]), int):
        raise MazePathError(f"unknown log level {opts['log-level']!r}")
    opts["policy"] = str(opts["policy"]).lower()
    if opts["policy"] not in POLICIES:
        raise MazePathError(f"--policy must be one of {', '.join(POLICIES)}")
    for key in ("seed", "max-steps"):
        if opts[key] is not None:
            try:
                opts[key] = int(opts[key])
            except ValueError:
                raise MazePathError(f"--{key} expects an integer, got {opts[key]!r}") from None
    if opts["max-steps"] is not None and opts["max-steps"] < 1:
        raise MazePathError("--max-steps must be at least 1")
    return opts


def print_event(event: SearchEvent) -> None:
    if isinstance(event, NodeExpanded):
        print(f"  open   ({event.location.x},{event.location.z})  g={event.g:.2f} h={event.h:.2f} f={event.f:.2f}")
    elif isinstance(event, NodeClosed):
        print(f"  close  ({event.location.x},{event.location.z})")
    elif isinstance(event, SearchFound):
        print(f"  found  {len(event.path)} steps")
    else:
        print("  exhausted")


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    try:
        opts = resolve_options(argv)
    except MazePathError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=opts["log-level"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        maze = load_map(resolve_map(opts["map"]))
        start, goal = maze.start, maze.goal
        if start is None or goal is None:
            start, goal = choose_endpoints(maze.grid, random.Random(opts["seed"]))
            log.info("placed start=%s goal=%s", start.as_tuple(), goal.as_tuple())

        engine = SearchEngine(policy=opts["policy"])
        if opts["trace"]:
            engine.subscribe(print_event)
        engine.begin(maze.grid, start, goal)
    except (MazePathError, OSError, ValueError) as exc:
        log.error("cannot start search: %s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    res = engine.run(max_steps=opts["max-steps"])
    m = res.metrics
    print(f"map={maze.name} start={start.as_tuple()} goal={goal.as_tuple()} policy={opts['policy']}")
    print(f"status={res.status.value} steps={m['steps']} popped={m['popped']} "
          f"open={m['open_size']} closed={m['closed_count']}")

    if res.status is SearchStatus.FOUND:
        print(f"cost={m['total_cost']:.2f} path=" + " ".join(f"({c.x},{c.z})" for c in res.path))
        return 0
    if res.status is SearchStatus.RUNNING:
        print(f"stopped after {opts['max-steps']} steps without a result")
    return 1


if __name__ == "__main__":
    sys.exit(main())
