"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest

from chessrules.core.move import Move, parse_coordinates
from chessrules.core.move_applier import MoveApplier
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.position import Position

PlayFn = Callable[..., Position]


def find_move(position: Position, text: str) -> Move:
    """Resolve coordinate text such as ``e2e4`` against *position*."""
    move = MoveGenerator(position).find(*parse_coordinates(text))
    assert move is not None, f"{text} is not legal here"
    return move


@pytest.fixture
def play() -> PlayFn:
    """``play(position, "e2e4", "e7e5", ...)`` -> position after the moves."""

    def _play(position: Position, *texts: str) -> Position:
        for text in texts:
            position = MoveApplier.apply(position, find_move(position, text))
        return position

    return _play


@pytest.fixture
def start() -> Position:
    return Position.initial()


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Singleton QCoreApplication for tests that touch Qt objects."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app
