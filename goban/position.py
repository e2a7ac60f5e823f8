"""Board position snapshot for the Go rules engine."""

from typing import Dict, Iterator, List, Optional, Tuple
from enum import Enum


class Stone(Enum):
    """Represents the content of a board field.

    BLACK and WHITE are additive inverses, so ``-stone`` is the opponent.
    """
    EMPTY = 0
    BLACK = 1
    WHITE = -1

    def __neg__(self) -> 'Stone':
        return Stone(-self.value)

    @property
    def opponent(self) -> 'Stone':
        """The opposing color (EMPTY stays EMPTY)."""
        return -self


class Position:
    """One board state: grid of stones, player to move and capture counts."""

    def __init__(self, size: int = 19):
        """Initialize an empty position.

        Args:
            size: Board edge length

        Raises:
            ValueError: If size is not a positive integer
        """
        if not isinstance(size, int) or isinstance(size, bool) or size < 1:
            raise ValueError(f"Invalid board size: {size!r}")

        self.size = size
        self._grid = [Stone.EMPTY] * (size * size)
        self.turn = Stone.BLACK
        self.captures = {Stone.BLACK: 0, Stone.WHITE: 0}

    def is_on_board(self, x: int, y: int) -> bool:
        """Check if a coordinate lies on the board.

        Args:
            x: Column index (0-based)
            y: Row index (0-based)

        Returns:
            True if coordinate is valid
        """
        return 0 <= x < self.size and 0 <= y < self.size

    def get(self, x: int, y: int) -> Stone:
        """Get the stone at a coordinate.

        Args:
            x: Column index
            y: Row index

        Returns:
            Stone at coordinate
        """
        if not self.is_on_board(x, y):
            raise ValueError(f"Invalid position: ({x}, {y})")
        return self._grid[y * self.size + x]

    def set(self, x: int, y: int, stone: Stone) -> None:
        """Write a stone at a coordinate (no rules are applied).

        Args:
            x: Column index
            y: Row index
            stone: Stone to place, Stone.EMPTY clears the field
        """
        if not self.is_on_board(x, y):
            raise ValueError(f"Invalid position: ({x}, {y})")
        if not isinstance(stone, Stone):
            raise ValueError(f"Invalid stone: {stone!r}")
        self._grid[y * self.size + x] = stone

    def get_adjacent_positions(self, x: int, y: int) -> List[Tuple[int, int]]:
        """Get on-board neighbours in the order left, right, up, down."""
        adjacent = []
        for dx, dy in [(-1, 0), (1, 0), (0, -1), (0, 1)]:
            new_x, new_y = x + dx, y + dy
            if self.is_on_board(new_x, new_y):
                adjacent.append((new_x, new_y))
        return adjacent

    def stones(self) -> Iterator[Tuple[int, int, Stone]]:
        """Iterate over occupied fields in row-major order.

        Yields:
            (x, y, stone) tuples
        """
        for index, stone in enumerate(self._grid):
            if stone != Stone.EMPTY:
                y, x = divmod(index, self.size)
                yield x, y, stone

    def is_empty(self) -> bool:
        """Check whether no stone is on the board."""
        return all(stone == Stone.EMPTY for stone in self._grid)

    def clone(self) -> 'Position':
        """Create a copy sharing no mutable state with this position.

        Returns:
            New Position instance with same state
        """
        new_position = Position(self.size)
        new_position._grid = self._grid[:]
        new_position.turn = self.turn
        new_position.captures = self.captures.copy()
        return new_position

    def same_field(self, other: 'Position', x: int, y: int) -> bool:
        """Check whether both positions hold the same stone at one coordinate."""
        return self.get(x, y) == other.get(x, y)

    def replace_grid(self, other: 'Position') -> None:
        """Take over the stones of another position of the same size.

        Turn and capture counts of this position are kept.
        """
        if other.size != self.size:
            raise ValueError(f"Board size mismatch: {other.size} != {self.size}")
        self._grid = other._grid[:]

    def __eq__(self, other: object) -> bool:
        # Turn and captures are not part of positional identity.
        if not isinstance(other, Position):
            return NotImplemented
        return self.size == other.size and self._grid == other._grid

    __hash__ = None

    def __repr__(self) -> str:
        return f"Position(size={self.size}, turn={self.turn.name}, stones={sum(1 for _ in self.stones())})"

    def __str__(self) -> str:
        """String representation of the board."""
        symbols: Dict[Stone, str] = {Stone.BLACK: "X", Stone.WHITE: "O", Stone.EMPTY: "."}
        lines = []
        for y in range(self.size):
            row = self._grid[y * self.size:(y + 1) * self.size]
            lines.append(" ".join(symbols[stone] for stone in row))
        return "\n".join(lines)


def parse_position(diagram: str, turn: Optional[Stone] = None) -> Position:
    """Build a position from an ASCII diagram as produced by ``str(position)``.

    Args:
        diagram: Rows of ``X``, ``O`` and ``.`` separated by whitespace
        turn: Player to move (default black)

    Returns:
        New Position
    """
    rows = [line.split() for line in diagram.strip().splitlines() if line.strip()]
    size = len(rows)
    position = Position(size)
    symbols = {"X": Stone.BLACK, "O": Stone.WHITE, ".": Stone.EMPTY}
    for y, row in enumerate(rows):
        if len(row) != size:
            raise ValueError(f"Row {y} has {len(row)} fields, expected {size}")
        for x, symbol in enumerate(row):
            if symbol not in symbols:
                raise ValueError(f"Unknown symbol {symbol!r} at ({x}, {y})")
            position.set(x, y, symbols[symbol])
    if turn is not None:
        position.turn = turn
    return position
