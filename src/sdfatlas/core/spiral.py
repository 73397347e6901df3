"""Square spiral traversal of grid offsets.

The walk starts at (0, 0) and moves outward one cell at a time:
(1, 0), (1, 1), (0, 1), (-1, 1), (-1, 0), (-1, -1), (0, -1), (1, -1),
(2, -1), ... Searching neighbors in this order visits cells roughly in
order of increasing ring distance, so a nearest-pixel search can stop
early once a hit has been found.
"""

from collections.abc import Iterator

# Direction cursor phases
_RIGHT = 0
_UP = 1
_LEFT = 2
_DOWN = 3


class SpiralWalk:
    """A stateful outward square spiral iterator.

    Attributes:
        ring: Current ring, starting at 1 and incremented after the walk
            completes the four sides of a ring
        x: Current horizontal offset
        y: Current vertical offset

    Example:
        walk = SpiralWalk()
        offsets = [next(walk) for _ in range(3)]  # [(1, 0), (1, 1), (0, 1)]
    """

    __slots__ = ("_direction", "ring", "x", "y")

    def __init__(self) -> None:
        self._direction = _RIGHT
        self.ring = 1
        self.x = 0
        self.y = 0

    def advance(self) -> None:
        """Move one cell along the current side of the ring."""
        direction = self._direction

        if direction == _RIGHT:
            self.x += 1
            if self.x == self.ring:
                self._direction = _UP
        elif direction == _UP:
            self.y += 1
            if self.y == self.ring:
                self._direction = _LEFT
        elif direction == _LEFT:
            self.x -= 1
            if -self.x == self.ring:
                self._direction = _DOWN
        else:
            self.y -= 1
            if -self.y == self.ring:
                self._direction = _RIGHT
                self.ring += 1

    def __iter__(self) -> Iterator[tuple[int, int]]:
        return self

    def __next__(self) -> tuple[int, int]:
        self.advance()
        return self.x, self.y
