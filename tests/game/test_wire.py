"""Tests for the plain-data move, position and termination records."""

import pytest

from chessrules.core.enums import CastlingRights, Color, MoveFlag, PieceKind
from chessrules.core.move import Move
from chessrules.core.position import Position
from chessrules.core.termination import Termination
from chessrules.core.types import A7, A8, E1, E2, E3, E4, G1
from chessrules.game.wire import (
    decode_castling,
    decode_move,
    decode_position,
    decode_termination,
    encode_castling,
    encode_move,
    encode_position,
    encode_termination,
)


class TestMoveRecord:
    def test_encode(self) -> None:
        assert encode_move(Move(E2, E4, MoveFlag.DOUBLE_PAWN)) == {
            "from": "e2",
            "to": "e4",
            "flag": "double_pawn",
            "promotion": None,
        }

    def test_promotion_round_trip(self) -> None:
        move = Move(A7, A8, MoveFlag.PROMOTION, PieceKind.KNIGHT)
        data = encode_move(move)
        assert data["promotion"] == "knight"
        assert decode_move(data) == move

    def test_castle_round_trip(self) -> None:
        move = Move(E1, G1, MoveFlag.CASTLE_KINGSIDE)
        assert decode_move(encode_move(move)) == move

    def test_flag_defaults_to_normal(self) -> None:
        assert decode_move({"from": "e2", "to": "e3"}) == Move(E2, E3)

    @pytest.mark.parametrize(
        "data",
        [
            None,
            ["e2", "e4"],
            {"from": "e2"},
            {"from": 12, "to": "e4"},
            {"from": "e2", "to": "e9"},
            {"from": "e2", "to": "e4", "flag": 3},
            {"from": "a7", "to": "a8", "flag": "promotion", "promotion": "king"},
            {"from": "a7", "to": "a8", "flag": "promotion"},
        ],
    )
    def test_malformed(self, data: object) -> None:
        with pytest.raises(ValueError):
            decode_move(data)


class TestCastlingText:
    def test_encode(self) -> None:
        assert encode_castling(CastlingRights.ALL) == "KQkq"
        assert encode_castling(CastlingRights.NONE) == "-"
        assert encode_castling(CastlingRights.BLACK_BOTH) == "kq"

    def test_decode(self) -> None:
        assert decode_castling("Kq") == (
            CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_QUEENSIDE
        )
        assert decode_castling("-") == CastlingRights.NONE

    @pytest.mark.parametrize("text", ["KK", "x", "KQkqK", None])
    def test_invalid(self, text: object) -> None:
        with pytest.raises(ValueError):
            decode_castling(text)


class TestPositionRecord:
    def test_initial(self) -> None:
        data = encode_position(Position.initial())
        assert data["board"][0] == "rnbqkbnr"
        assert data["side_to_move"] == "white"
        assert data["castling"] == "KQkq"
        assert data["en_passant"] is None
        assert decode_position(data) == Position.initial()

    def test_en_passant_and_clocks(self) -> None:
        pos = Position(side_to_move=Color.BLACK, en_passant=E3, halfmove_clock=0, fullmove_number=1)
        data = encode_position(pos)
        assert data["en_passant"] == "e3"
        assert decode_position(data) == pos

    @pytest.mark.parametrize(
        "change",
        [
            {"board": ["rnbqkbnr"]},
            {"board": "rnbqkbnr"},
            {"side_to_move": "red"},
            {"castling": "KQxq"},
            {"en_passant": "z3"},
            {"halfmove_clock": True},
            {"halfmove_clock": -1},
            {"fullmove_number": "1"},
        ],
    )
    def test_malformed(self, change: dict) -> None:
        data = encode_position(Position.initial())
        data.update(change)
        with pytest.raises(ValueError):
            decode_position(data)


class TestTerminationRecord:
    def test_round_trip(self) -> None:
        for status in (
            Termination.in_progress(),
            Termination.checkmate(Color.WHITE),
            Termination.resigned(Color.BLACK),
            Termination.draw_by_fifty_move(),
        ):
            assert decode_termination(encode_termination(status)) == status

    def test_encode(self) -> None:
        assert encode_termination(Termination.checkmate(Color.BLACK)) == {
            "kind": "checkmate",
            "color": "black",
        }

    @pytest.mark.parametrize(
        "data",
        [
            {"kind": "abandoned", "color": None},
            {"kind": "checkmate", "color": None},
            {"kind": "stalemate", "color": "white"},
            "stalemate",
        ],
    )
    def test_malformed(self, data: object) -> None:
        with pytest.raises(ValueError):
            decode_termination(data)
