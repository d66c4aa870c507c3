"""Plain-data records for moves, positions and termination.

These dictionaries are what leaves the engine: the multiplayer collaborator
exchanges move records between peers, and saved games are built from all
three. Decoders raise ``ValueError`` on anything malformed; they check shape
only, never legality.
"""

from __future__ import annotations

from typing import Any

from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color, MoveFlag, PieceKind, TerminationKind
from chessrules.core.move import Move
from chessrules.core.position import Position
from chessrules.core.termination import Termination
from chessrules.core.types import parse_square, square_name

_CASTLING_LETTERS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


def _enum_member(enum_cls: Any, text: Any, what: str) -> Any:
    if not isinstance(text, str):
        raise ValueError(f"Invalid {what}: {text!r}")
    try:
        return enum_cls[text.upper()]
    except KeyError:
        raise ValueError(f"Invalid {what}: {text!r}") from None


def _require_int(value: Any, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Invalid {what}: {value!r}")
    return value


def _require_mapping(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"{what} must be an object, got {type(data).__name__}")
    return data


def _square(value: Any) -> int:
    if not isinstance(value, str):
        raise ValueError(f"Invalid square: {value!r}")
    return parse_square(value)


# ── Moves ────────────────────────────────────────────────────────────────────


def encode_move(move: Move) -> dict[str, Any]:
    return {
        "from": square_name(move.from_sq),
        "to": square_name(move.to_sq),
        "flag": move.flag.name.lower(),
        "promotion": str(move.promotion) if move.promotion is not None else None,
    }


def decode_move(data: Any) -> Move:
    data = _require_mapping(data, "Move record")
    try:
        from_text = data["from"]
        to_text = data["to"]
    except KeyError as exc:
        raise ValueError(f"Move record missing {exc.args[0]!r}") from None
    flag = _enum_member(MoveFlag, data.get("flag", "normal"), "move flag")
    promotion_text = data.get("promotion")
    promotion = (
        None
        if promotion_text is None
        else _enum_member(PieceKind, promotion_text, "promotion piece")
    )
    return Move(_square(from_text), _square(to_text), flag, promotion)


# ── Positions ────────────────────────────────────────────────────────────────


def encode_castling(rights: CastlingRights) -> str:
    text = "".join(ch for ch, right in _CASTLING_LETTERS if rights & right)
    return text or "-"


def decode_castling(text: Any) -> CastlingRights:
    if not isinstance(text, str):
        raise ValueError(f"Invalid castling rights: {text!r}")
    rights = CastlingRights.NONE
    if text == "-":
        return rights
    letters = dict(_CASTLING_LETTERS)
    for ch in text:
        right = letters.get(ch)
        if right is None or rights & right:
            raise ValueError(f"Invalid castling rights: {text!r}")
        rights |= right
    return rights


def encode_position(position: Position) -> dict[str, Any]:
    return {
        "board": position.board.rows(),
        "side_to_move": str(position.side_to_move),
        "castling": encode_castling(position.castling),
        "en_passant": (
            square_name(position.en_passant) if position.en_passant is not None else None
        ),
        "halfmove_clock": position.halfmove_clock,
        "fullmove_number": position.fullmove_number,
    }


def decode_position(data: Any) -> Position:
    data = _require_mapping(data, "Position record")
    try:
        rows = data["board"]
        side = data["side_to_move"]
    except KeyError as exc:
        raise ValueError(f"Position record missing {exc.args[0]!r}") from None
    if not isinstance(rows, list) or not all(isinstance(row, str) for row in rows):
        raise ValueError("Position board must be a list of 8 strings")
    en_passant = data.get("en_passant")
    return Position(
        board=Board.from_rows(rows),
        side_to_move=_enum_member(Color, side, "side to move"),
        castling=decode_castling(data.get("castling", "-")),
        en_passant=None if en_passant is None else _square(en_passant),
        halfmove_clock=_require_int(data.get("halfmove_clock", 0), "halfmove clock"),
        fullmove_number=_require_int(data.get("fullmove_number", 1), "fullmove number"),
    )


# ── Termination ──────────────────────────────────────────────────────────────


def encode_termination(termination: Termination) -> dict[str, Any]:
    return {
        "kind": str(termination.kind),
        "color": str(termination.color) if termination.color is not None else None,
    }


def decode_termination(data: Any) -> Termination:
    data = _require_mapping(data, "Termination record")
    kind = _enum_member(TerminationKind, data.get("kind"), "termination kind")
    color_text = data.get("color")
    color = None if color_text is None else _enum_member(Color, color_text, "color")
    return Termination(kind, color)
