"""Tests for the random baseline policy."""

import random

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color
from chessrules.core.errors import NoLegalMoveError
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.position import Position
from chessrules.policy.base import OpponentPolicy
from chessrules.policy.random_policy import RandomPolicy


class TestRandomPolicy:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(RandomPolicy(), OpponentPolicy)

    def test_choice_is_legal(self, start: Position) -> None:
        policy = RandomPolicy(seed=0)
        legal = MoveGenerator(start).generate_legal_moves()
        for _ in range(20):
            assert policy.select_move(start) in legal

    def test_seed_is_reproducible(self, start: Position, play) -> None:
        pos = play(start, "e2e4", "e7e5")
        first = [RandomPolicy(seed=42).select_move(pos) for _ in range(3)]
        assert len(set(first)) == 1

        a, b = RandomPolicy(seed=7), RandomPolicy(seed=7)
        assert [a.select_move(pos) for _ in range(10)] == [
            b.select_move(pos) for _ in range(10)
        ]

    def test_uses_given_rng(self, start: Position) -> None:
        legal = MoveGenerator(start).generate_legal_moves()
        expected = random.Random(5).choice(legal)
        assert RandomPolicy(rng=random.Random(5)).select_move(start) == expected

    def test_only_move(self) -> None:
        # Rook on the seventh leaves the cornered king only b8.
        pos = Position(
            Board.from_mapping({"a8": "k", "h1": "K", "h7": "R"}),
            side_to_move=Color.BLACK,
            castling=CastlingRights.NONE,
        )
        legal = MoveGenerator(pos).generate_legal_moves()
        assert len(legal) == 1
        assert RandomPolicy(seed=3).select_move(pos) == legal[0]

    def test_checkmate_raises(self, start: Position, play) -> None:
        pos = play(start, "f2f3", "e7e5", "g2g4", "d8h4")
        with pytest.raises(NoLegalMoveError):
            RandomPolicy().select_move(pos)

    def test_stalemate_raises(self) -> None:
        pos = Position(
            Board.from_mapping({"h8": "k", "f6": "K", "g6": "Q"}),
            side_to_move=Color.BLACK,
            castling=CastlingRights.NONE,
        )
        with pytest.raises(NoLegalMoveError):
            RandomPolicy().select_move(pos)
