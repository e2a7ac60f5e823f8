"""Tests for the Position value type and the Stone enum."""

import pytest

from goban.position import Position, Stone, parse_position


def test_stone_colors_are_inverses():
    assert -Stone.BLACK == Stone.WHITE
    assert -Stone.WHITE == Stone.BLACK
    assert -Stone.EMPTY == Stone.EMPTY
    assert Stone.BLACK.opponent == Stone.WHITE
    assert Stone.BLACK.value + Stone.WHITE.value == 0


def test_new_position_is_empty():
    position = Position(9)

    assert position.size == 9
    assert position.is_empty()
    assert position.turn == Stone.BLACK
    assert position.captures == {Stone.BLACK: 0, Stone.WHITE: 0}
    assert all(position.get(x, y) == Stone.EMPTY for x in range(9) for y in range(9))


@pytest.mark.parametrize("size", [0, -3, 2.5, "19", True])
def test_invalid_size_rejected(size):
    with pytest.raises(ValueError):
        Position(size)


def test_get_and_set():
    position = Position(5)
    position.set(3, 1, Stone.WHITE)

    assert position.get(3, 1) == Stone.WHITE
    assert position.get(1, 3) == Stone.EMPTY
    assert list(position.stones()) == [(3, 1, Stone.WHITE)]


@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (5, 0), (0, 5)])
def test_out_of_bounds_access_raises(x, y):
    position = Position(5)

    with pytest.raises(ValueError):
        position.get(x, y)
    with pytest.raises(ValueError):
        position.set(x, y, Stone.BLACK)


def test_set_rejects_non_stone():
    with pytest.raises(ValueError):
        Position(5).set(0, 0, 1)


def test_adjacent_positions_order_and_edges():
    position = Position(5)

    assert position.get_adjacent_positions(2, 2) == [(1, 2), (3, 2), (2, 1), (2, 3)]
    assert position.get_adjacent_positions(0, 0) == [(1, 0), (0, 1)]
    assert position.get_adjacent_positions(4, 4) == [(3, 4), (4, 3)]


def test_clone_shares_no_state():
    position = Position(5)
    position.set(0, 0, Stone.BLACK)
    position.captures[Stone.WHITE] = 2
    position.turn = Stone.WHITE

    copy = position.clone()
    copy.set(1, 1, Stone.WHITE)
    copy.captures[Stone.WHITE] = 7

    assert copy.get(0, 0) == Stone.BLACK
    assert copy.turn == Stone.WHITE
    assert position.get(1, 1) == Stone.EMPTY
    assert position.captures[Stone.WHITE] == 2


def test_equality_ignores_turn_and_captures():
    first = Position(5)
    second = Position(5)
    first.set(2, 2, Stone.BLACK)
    second.set(2, 2, Stone.BLACK)
    second.turn = Stone.WHITE
    second.captures[Stone.BLACK] = 3

    assert first == second

    second.set(0, 0, Stone.WHITE)
    assert first != second
    assert Position(5) != Position(7)


def test_positions_are_unhashable():
    with pytest.raises(TypeError):
        hash(Position(3))


def test_replace_grid_keeps_turn_and_captures():
    target = Position(3)
    target.turn = Stone.WHITE
    target.captures[Stone.BLACK] = 1
    source = Position(3)
    source.set(1, 1, Stone.BLACK)

    target.replace_grid(source)
    source.set(0, 0, Stone.WHITE)

    assert target.get(1, 1) == Stone.BLACK
    assert target.get(0, 0) == Stone.EMPTY
    assert target.turn == Stone.WHITE
    assert target.captures[Stone.BLACK] == 1

    with pytest.raises(ValueError):
        target.replace_grid(Position(5))


def test_str_and_parse():
    diagram = """
        . X .
        O . .
        . . X
    """
    position = parse_position(diagram, turn=Stone.WHITE)

    assert position.size == 3
    assert position.turn == Stone.WHITE
    assert position.get(1, 0) == Stone.BLACK
    assert position.get(0, 1) == Stone.WHITE
    assert str(position) == ". X .\nO . .\n. . X"
    assert parse_position(str(position)) == position


def test_parse_rejects_bad_diagrams():
    with pytest.raises(ValueError):
        parse_position(". .\n. . .")
    with pytest.raises(ValueError):
        parse_position(". #\n. .")
