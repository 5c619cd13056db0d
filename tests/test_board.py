"""
Tests for the board registry.
"""

import pytest

from language_monopoly.board import Board
from language_monopoly.exceptions import UnknownSpaceError
from language_monopoly.spaces import BoardSpace, SpaceType, property_space


def test_standard_board_color_groups():
    board = Board()

    assert len(board) == 24
    assert board.color_group("brown") == frozenset({1, 2})
    assert board.color_group("green") == frozenset({17, 18, 20, 21})
    assert board.color_group(None) == frozenset()
    assert board.color_group("purple") == frozenset()


def test_every_colored_space_is_in_exactly_one_group():
    board = Board()

    for space in board.spaces:
        groups = [color for color, ids in board.color_groups.items() if space.id in ids]
        if space.color is None:
            assert groups == []
        else:
            assert groups == [space.color]


def test_special_spaces_are_not_ownable():
    board = Board()

    assert board.get_space(3).space_type == SpaceType.LIBRARY
    assert board.get_space(7).space_type == SpaceType.CANTEEN
    assert board.get_space(13).space_type == SpaceType.ORATORY
    assert 3 not in board.ownable_space_ids()
    assert 1 in board.ownable_space_ids()


def test_spaces_are_immutable():
    board = Board()

    with pytest.raises(AttributeError):
        board.get_space(1).cost = 1


def test_advance_wraps_and_reports_passing_start():
    board = Board()

    assert board.advance(0, 5) == (5, False)
    assert board.advance(22, 2) == (0, True)
    assert board.advance(20, 7) == (3, True)


def test_unknown_space_raises():
    board = Board()

    with pytest.raises(UnknownSpaceError):
        board.get_space(99)


def test_custom_board_rejects_duplicate_ids():
    spaces = [
        BoardSpace(0, "Start", SpaceType.START),
        property_space(1, "A", 10, 1, "red"),
        property_space(1, "B", 10, 1, "red"),
    ]

    with pytest.raises(ValueError):
        Board(spaces)


def test_custom_board_with_sparse_ids():
    board = Board([
        BoardSpace(10, "Start", SpaceType.START),
        property_space(20, "A", 10, 1, "red"),
        property_space(30, "B", 10, 1, "red"),
    ])

    assert board.advance(10, 1) == (20, False)
    assert board.advance(30, 1) == (10, True)
    assert board.color_group("red") == frozenset({20, 30})
