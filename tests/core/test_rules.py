"""Tests for Rules: checkmate, stalemate, draw detection."""

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color, TerminationKind
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.position import Position
from chessrules.core.rules import Rules
from chessrules.core.termination import Termination


def _pos(placement: dict[str, str], side: Color = Color.WHITE, halfmove: int = 0) -> Position:
    return Position(
        Board.from_mapping(placement),
        side_to_move=side,
        castling=CastlingRights.NONE,
        halfmove_clock=halfmove,
    )


class TestCheckmate:
    def test_fools_mate(self, start: Position, play) -> None:
        pos = play(start, "f2f3", "e7e5", "g2g4", "d8h4")
        assert Rules.is_in_check(pos)
        assert Rules.is_checkmate(pos)
        assert MoveGenerator(pos).generate_legal_moves() == []
        assert Rules.termination(pos) == Termination.checkmate(Color.BLACK)

    def test_back_rank_mate(self) -> None:
        pos = _pos({"a8": "R", "d8": "k", "d6": "K"}, side=Color.BLACK)
        assert Rules.is_checkmate(pos)
        assert Rules.termination(pos).winner == Color.WHITE

    def test_not_checkmate_when_can_escape(self) -> None:
        pos = _pos({"e8": "k", "a1": "r", "e1": "K"})
        assert Rules.is_in_check(pos)
        assert not Rules.is_checkmate(pos)


class TestStalemate:
    def test_king_boxed_by_queen(self) -> None:
        pos = _pos({"h8": "k", "f6": "K", "g6": "Q"}, side=Color.BLACK)
        assert MoveGenerator(pos).generate_legal_moves() == []
        assert not Rules.is_in_check(pos)
        assert Rules.is_stalemate(pos)
        assert Rules.termination(pos) == Termination.stalemate()
        assert Rules.termination(pos).is_draw

    def test_not_stalemate_when_has_moves(self) -> None:
        pos = _pos({"h8": "k", "f6": "K"}, side=Color.BLACK)
        assert not Rules.is_stalemate(pos)


class TestInsufficientMaterial:
    def test_k_vs_k(self) -> None:
        assert Rules.is_insufficient_material(_pos({"e6": "k", "e3": "K"}))

    def test_minor_vs_k(self) -> None:
        assert Rules.is_insufficient_material(_pos({"e6": "k", "e3": "K", "d2": "B"}))
        assert Rules.is_insufficient_material(_pos({"e6": "k", "e3": "K", "d2": "n"}))

    def test_same_colour_bishops(self) -> None:
        # c1 and f8 are both dark squares
        pos = _pos({"e6": "k", "e3": "K", "c1": "B", "f8": "b"})
        assert Rules.is_insufficient_material(pos)

    def test_opposite_colour_bishops_sufficient(self) -> None:
        pos = _pos({"e6": "k", "e3": "K", "c1": "B", "c8": "b"})
        assert not Rules.is_insufficient_material(pos)

    def test_rook_or_pawn_sufficient(self) -> None:
        assert not Rules.is_insufficient_material(_pos({"e6": "k", "e3": "K", "d2": "R"}))
        assert not Rules.is_insufficient_material(_pos({"e6": "k", "e3": "K", "e4": "P"}))

    def test_termination(self) -> None:
        pos = _pos({"e6": "k", "e3": "K", "d2": "N"})
        assert Rules.termination(pos).kind == TerminationKind.DRAW_BY_INSUFFICIENT_MATERIAL


class TestFiftyMoveRule:
    def test_not_triggered_below_100(self) -> None:
        pos = _pos({"e6": "k", "e3": "K", "h1": "R"}, halfmove=99)
        assert not Rules.is_fifty_move_rule(pos)
        assert Rules.termination(pos) == Termination.in_progress()

    def test_triggered_at_100(self) -> None:
        pos = _pos({"e6": "k", "e3": "K", "h1": "R"}, halfmove=100)
        assert Rules.is_fifty_move_rule(pos)
        assert Rules.termination(pos) == Termination.draw_by_fifty_move()

    def test_checkmate_wins_over_fifty_moves(self) -> None:
        pos = _pos({"a8": "R", "d8": "k", "d6": "K"}, side=Color.BLACK, halfmove=100)
        assert Rules.termination(pos) == Termination.checkmate(Color.WHITE)


class TestTerminationStatus:
    def test_in_progress_at_start(self, start: Position) -> None:
        assert Rules.termination(start) == Termination.in_progress()
        assert not Rules.termination(start).is_over

    def test_mate_and_stalemate_exclude_legal_moves(self, start: Position, play) -> None:
        positions = [
            start,
            play(start, "f2f3", "e7e5", "g2g4", "d8h4"),
            _pos({"h8": "k", "f6": "K", "g6": "Q"}, side=Color.BLACK),
            _pos({"e8": "k", "a1": "r", "e1": "K"}),
        ]
        for pos in positions:
            has_moves = bool(MoveGenerator(pos).generate_legal_moves())
            kind = Rules.termination(pos).kind
            assert has_moves != (kind in (TerminationKind.CHECKMATE, TerminationKind.STALEMATE))

    def test_resigned_winner(self) -> None:
        status = Termination.resigned(Color.WHITE)
        assert status.is_over
        assert status.winner == Color.BLACK
        assert not status.is_draw
        assert str(status) == "white resigned"

    def test_color_required_for_checkmate(self) -> None:
        with pytest.raises(ValueError):
            Termination(TerminationKind.CHECKMATE)
        with pytest.raises(ValueError):
            Termination(TerminationKind.STALEMATE, Color.WHITE)
