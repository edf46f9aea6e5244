# mazepath/core/errors.py
#!/usr/bin/env python3
"""
Error types raised by the maze search core.

"No path" is normally a terminal status, not an exception; NoPathExists is
only raised when a caller asks for it via SearchEngine.require_path().
"""


class MazePathError(Exception):
    """Base class for every error raised by mazepath."""


class InvalidGrid(MazePathError, ValueError):
    pass


class InvalidBounds(MazePathError, ValueError):
    pass


class NoPathExists(MazePathError):
    pass


class ReconstructBeforeFound(MazePathError, RuntimeError):
    pass


class InsufficientFreeCells(MazePathError):
    def __init__(self, available: int):
        super().__init__(f"Not enough free tiles to place start and goal ({available} available)")
        self.available = available
