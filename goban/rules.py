"""Go game rules implementation."""

from typing import List, Optional, Tuple, Union
from enum import Enum
from goban.config import Config
from goban.position import Position, Stone


class MoveError(Enum):
    """Reason why a move was rejected."""
    OUT_OF_BOARD = 1
    FIELD_OCCUPIED = 2
    SUICIDE = 3
    POSITION_REPEATED = 4

    @property
    def message(self) -> str:
        return _ERROR_MESSAGES[self]


_ERROR_MESSAGES = {
    MoveError.OUT_OF_BOARD: "Position is off the board",
    MoveError.FIELD_OCCUPIED: "Position is already occupied",
    MoveError.SUICIDE: "Suicide move not allowed",
    MoveError.POSITION_REPEATED: "Position repetition not allowed",
}


class RepeatPolicy(Enum):
    """How repeated positions are handled.

    NONE allows any repetition, KO forbids recreating the position from
    two plies back and SUPERKO forbids recreating any earlier position.
    """
    NONE = "NONE"
    KO = "KO"
    SUPERKO = "SUPERKO"

    @classmethod
    def parse(cls, value: Union['RepeatPolicy', str, None]) -> 'RepeatPolicy':
        """Convert a policy name to a RepeatPolicy.

        Args:
            value: Policy, name (case-insensitive, 'ALL' means SUPERKO) or None

        Returns:
            Matching RepeatPolicy
        """
        if isinstance(value, RepeatPolicy):
            return value
        if value is None or value == "":
            return cls.NONE
        name = str(value).strip().upper()
        if name == "ALL":
            return cls.SUPERKO
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"Unknown repeat policy: {value!r}") from None


class MoveResult:
    """Result of attempting a move."""

    def __init__(
        self,
        valid: bool,
        error: Optional[MoveError] = None,
        captured: Optional[List[Tuple[int, int]]] = None
    ):
        """Initialize move result.

        Args:
            valid: Whether the move is valid
            error: Reason of rejection if invalid
            captured: Coordinates of captured stones
        """
        self.valid = valid
        self.error = error
        self.captured = captured if captured is not None else []

    @classmethod
    def rejected(cls, error: MoveError) -> 'MoveResult':
        return cls(False, error)

    @property
    def captures(self) -> int:
        """Number of stones captured."""
        return len(self.captured)

    @property
    def message(self) -> str:
        """Error message if invalid, empty string otherwise."""
        return self.error.message if self.error is not None else ""

    def __repr__(self) -> str:
        if self.valid:
            return f"MoveResult(valid=True, captured={self.captured})"
        return f"MoveResult(valid=False, error={self.error.name})"


def has_liberties(position: Position, x: int, y: int, color: Stone) -> bool:
    """Check whether the group at a coordinate touches an empty field.

    Walks the connected stones of ``color`` starting from (x, y) and stops
    at the first liberty found.

    Args:
        position: Position to inspect
        x: Column of a stone of the group
        y: Row of a stone of the group
        color: Color of the group

    Returns:
        True if the group has at least one liberty
    """
    if position.get(x, y) == Stone.EMPTY:
        return True

    tested = set()
    to_check = [(x, y)]

    while to_check:
        cx, cy = to_check.pop()
        if (cx, cy) in tested:
            continue
        tested.add((cx, cy))

        for adj_x, adj_y in position.get_adjacent_positions(cx, cy):
            stone = position.get(adj_x, adj_y)
            if stone == Stone.EMPTY:
                return True
            if stone == color and (adj_x, adj_y) not in tested:
                to_check.append((adj_x, adj_y))

    return False


def capture_group(position: Position, x: int, y: int, color: Stone) -> List[Tuple[int, int]]:
    """Remove the connected group of ``color`` at (x, y) from the position.

    Liberties are not checked here.

    Returns:
        Coordinates of removed stones
    """
    captured = []
    to_check = [(x, y)]

    while to_check:
        cx, cy = to_check.pop()
        if position.get(cx, cy) != color:
            continue

        position.set(cx, cy, Stone.EMPTY)
        captured.append((cx, cy))

        for adj_x, adj_y in position.get_adjacent_positions(cx, cy):
            if position.get(adj_x, adj_y) == color:
                to_check.append((adj_x, adj_y))

    return captured


def capture_if_possible(position: Position, x: int, y: int, color: Stone) -> List[Tuple[int, int]]:
    """Capture the group of ``color`` at (x, y) if it has no liberties."""
    if not position.is_on_board(x, y) or position.get(x, y) != color:
        return []
    if has_liberties(position, x, y, color):
        return []
    return capture_group(position, x, y, color)


class Game:
    """Go game rules engine.

    Analyses moves, captures stones and keeps every position since the
    start of the game, so repeated positions can be detected and older
    positions restored. The last history entry is the current position.
    """

    def __init__(
        self,
        size: int = 19,
        repeat: Union[RepeatPolicy, str, None] = RepeatPolicy.KO,
        allow_rewrite: bool = False,
        allow_suicide: bool = False
    ):
        """Initialize rules engine.

        Args:
            size: Size of the board
            repeat: Repetition policy (NONE, KO or SUPERKO)
            allow_rewrite: Allow moves onto occupied fields
            allow_suicide: Allow suicide, the played group is captured at once
        """
        self.size = size
        self.repeat = RepeatPolicy.parse(repeat)
        self.allow_rewrite = allow_rewrite
        self.allow_suicide = allow_suicide
        self._history: List[Position] = [Position(size)]

    @classmethod
    def from_config(cls, config: Config) -> 'Game':
        """Create a game with the rules stored in a configuration.

        Args:
            config: Loaded configuration

        Returns:
            New Game instance
        """
        return cls(
            size=config.get_board_size(),
            repeat=config.get_repeat_policy(),
            allow_rewrite=config.get_allow_rewrite(),
            allow_suicide=config.get_allow_suicide()
        )

    def __len__(self) -> int:
        return len(self._history)

    def current_position(self) -> Position:
        """Get the current position (last history entry)."""
        return self._history[-1]

    def get_history(self) -> Tuple[Position, ...]:
        """Get all positions from the first to the current one.

        Returns:
            Tuple of positions, read-only by convention
        """
        return tuple(self._history)

    def get_turn(self) -> Stone:
        return self.current_position().turn

    def is_on_board(self, x: int, y: int) -> bool:
        """Check if a coordinate is on the board.

        Args:
            x: Column index
            y: Row index

        Returns:
            True if coordinate is on the board
        """
        return 0 <= x < self.size and 0 <= y < self.size

    def _resolve_color(self, color: Optional[Stone]) -> Stone:
        if color is None or color == Stone.EMPTY:
            return self.current_position().turn
        return color

    def _is_repeated(self, position: Position, x: int, y: int) -> bool:
        """Check a candidate position against history per the repeat policy."""
        if self.repeat == RepeatPolicy.NONE:
            return False

        last = len(self._history) - 2
        if last < 0:
            return False
        stop = last if self.repeat == RepeatPolicy.KO else 0

        for i in range(last, stop - 1, -1):
            previous = self._history[i]
            # Compare the played field first, the full grid only on a match
            if previous.same_field(position, x, y) and previous == position:
                return True
        return False

    def play(self, x: int, y: int, color: Optional[Stone] = None, noplay: bool = False) -> MoveResult:
        """Play a move.

        Args:
            x: Column index
            y: Row index
            color: Stone color to place (default: player to move)
            noplay: Only check the move, leave the game untouched

        Returns:
            MoveResult with captured stones, or the reason of rejection
        """
        position = self.current_position()

        if not self.is_on_board(x, y):
            return MoveResult.rejected(MoveError.OUT_OF_BOARD)
        if not self.allow_rewrite and position.get(x, y) != Stone.EMPTY:
            return MoveResult.rejected(MoveError.FIELD_OCCUPIED)

        color = self._resolve_color(color)
        new_position = position.clone()
        new_position.set(x, y, color)

        captures_color = color
        captured: List[Tuple[int, int]] = []
        for adj_x, adj_y in new_position.get_adjacent_positions(x, y):
            captured.extend(capture_if_possible(new_position, adj_x, adj_y, -color))

        if not captured and not has_liberties(new_position, x, y, color):
            if not self.allow_suicide:
                return MoveResult.rejected(MoveError.SUICIDE)
            # Self-capture is credited to the opponent
            captures_color = -color
            captured = capture_group(new_position, x, y, color)

        if self._is_repeated(new_position, x, y):
            return MoveResult.rejected(MoveError.POSITION_REPEATED)

        if noplay:
            return MoveResult(True, captured=captured)

        new_position.turn = -color
        new_position.captures[captures_color] += len(captured)
        self.push_position(new_position)

        return MoveResult(True, captured=captured)

    def pass_turn(self, color: Optional[Stone] = None) -> None:
        """Play a pass.

        Args:
            color: Passing color (default: player to move)
        """
        color = self._resolve_color(color)
        self.push_position()
        self.current_position().turn = -color

    def is_valid(self, x: int, y: int, color: Optional[Stone] = None) -> bool:
        """Check if a move can be played without playing it."""
        return self.play(x, y, color, noplay=True).valid

    def get_valid_moves(self, color: Optional[Stone] = None) -> List[Tuple[int, int]]:
        """Get every coordinate where a move is valid.

        Args:
            color: Stone color to check (default: player to move)

        Returns:
            List of (x, y) in row-major order
        """
        return [
            (x, y)
            for y in range(self.size)
            for x in range(self.size)
            if self.is_valid(x, y, color)
        ]

    def add_stone(self, x: int, y: int, color: Optional[Stone] = None) -> bool:
        """Insert a stone into the current position, e.g. a handicap stone.

        The field must be empty. No capturing is done.

        Returns:
            True if the stone was inserted
        """
        position = self.current_position()
        if self.is_on_board(x, y) and position.get(x, y) == Stone.EMPTY:
            position.set(x, y, color or Stone.EMPTY)
            return True
        return False

    def remove_stone(self, x: int, y: int) -> bool:
        """Remove a stone from the current position.

        Returns:
            True if a stone was removed
        """
        position = self.current_position()
        if self.is_on_board(x, y) and position.get(x, y) != Stone.EMPTY:
            position.set(x, y, Stone.EMPTY)
            return True
        return False

    def set_stone(self, x: int, y: int, color: Optional[Stone] = None) -> bool:
        """Set or clear a field of the current position.

        Returns:
            True if the coordinate is on the board
        """
        if self.is_on_board(x, y):
            self.current_position().set(x, y, color or Stone.EMPTY)
            return True
        return False

    def get_stone(self, x: int, y: int) -> Optional[Stone]:
        """Get the stone at a coordinate, or None if it is off the board."""
        if self.is_on_board(x, y):
            return self.current_position().get(x, y)
        return None

    def push_position(self, position: Optional[Position] = None) -> 'Game':
        """Add a position to history, making it the current one.

        Args:
            position: Position to add (default: clone of the current one).
                The game takes ownership of it.

        Returns:
            This game

        Raises:
            ValueError: If the size differs or the position is already in history
        """
        if position is None:
            position = self.current_position().clone()
        elif position.size != self.size:
            raise ValueError(f"Board size mismatch: {position.size} != {self.size}")
        elif any(entry is position for entry in self._history):
            raise ValueError("Position is already in history, push a clone instead")
        self._history.append(position)
        return self

    def pop_position(self) -> Position:
        """Remove the current position; the previous one becomes current.

        Returns:
            The removed position

        Raises:
            ValueError: If only the initial position is left
        """
        if len(self._history) <= 1:
            raise ValueError("Cannot remove the initial position")
        return self._history.pop()

    def first_position(self) -> 'Game':
        """Discard all history and start again from an empty board."""
        self._history = [Position(self.size)]
        return self

    def get_capture_count(self, color: Stone) -> int:
        """Get number of stones captured by a color.

        Args:
            color: Stone.BLACK or Stone.WHITE

        Returns:
            Capture count
        """
        captures = self.current_position().captures
        if color not in captures:
            raise ValueError(f"No capture count for {color!r}")
        return captures[color]

    def validate_position(self) -> List[Tuple[int, int]]:
        """Remove stones without liberties from the current position.

        Every field is tested from (0, 0) to (size-1, size-1). Use this
        after inserting stones with the setup methods. History is not
        extended; the current position is corrected in place.

        Returns:
            Coordinates of removed stones
        """
        position = self.current_position()
        resolved = position.clone()
        captured: List[Tuple[int, int]] = []
        counts = {Stone.BLACK: 0, Stone.WHITE: 0}

        for x in range(self.size):
            for y in range(self.size):
                color = position.get(x, y)
                if color == Stone.EMPTY:
                    continue
                for adj_x, adj_y in position.get_adjacent_positions(x, y):
                    stones = capture_if_possible(resolved, adj_x, adj_y, -color)
                    counts[color] += len(stones)
                    captured.extend(stones)

        position.captures[Stone.BLACK] += counts[Stone.BLACK]
        position.captures[Stone.WHITE] += counts[Stone.WHITE]
        position.replace_grid(resolved)

        return captured
