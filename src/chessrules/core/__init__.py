"""Core rules layer - pure chess logic with no third-party dependencies.

Quick start::

    from chessrules.core import MoveApplier, MoveGenerator, Position, Rules

    pos = Position.initial()
    for move in MoveGenerator(pos).generate_legal_moves():
        print(move, Rules.termination(MoveApplier.apply(pos, move)))
"""

from chessrules.core.board import Board
from chessrules.core.enums import (
    CastlingRights,
    Color,
    MoveFlag,
    PieceKind,
    TerminationKind,
)
from chessrules.core.errors import (
    ChessError,
    CorruptSaveError,
    GameOverError,
    IllegalMoveError,
    NoLegalMoveError,
)
from chessrules.core.move import PROMOTION_KINDS, Move, parse_coordinates
from chessrules.core.move_applier import MoveApplier
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.rules import Rules
from chessrules.core.termination import Termination
from chessrules.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "MoveFlag",
    "PieceKind",
    "TerminationKind",
    # Errors
    "ChessError",
    "CorruptSaveError",
    "GameOverError",
    "IllegalMoveError",
    "NoLegalMoveError",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    "parse_coordinates",
    "PROMOTION_KINDS",
    # Domain objects
    "Board",
    "Move",
    "MoveApplier",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    "Termination",
]
