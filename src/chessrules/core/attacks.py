"""Precomputed move tables and square-attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.enums import Color, PieceKind
from chessrules.core.types import Square, make_square

if TYPE_CHECKING:
    from chessrules.core.board import Board


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS


# -- Table builders --------------------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        targets.append(
            tuple(
                make_square(file_idx + df, rank_idx + dr)
                for df, dr in offsets
                if 0 <= file_idx + df < 8 and 0 <= rank_idx + dr < 8
            )
        )
    return tuple(targets)


def _build_masks(targets: tuple[tuple[Square, ...], ...]) -> tuple[int, ...]:
    masks: list[int] = []
    for sq_targets in targets:
        mask = 0
        for to_sq in sq_targets:
            mask |= 1 << to_sq
        masks.append(mask)
    return tuple(masks)


def _build_pawn_attacker_masks() -> tuple[tuple[int, ...], tuple[int, ...]]:
    """[color][sq] -> squares from which a pawn of *color* attacks *sq*."""
    per_color: list[tuple[int, ...]] = []
    for behind in (-1, 1):  # white pawns attack upward, so they sit below
        masks: list[int] = []
        for sq in range(64):
            file_idx = sq & 7
            rank_idx = sq >> 3
            mask = 0
            src_rank = rank_idx + behind
            if 0 <= src_rank < 8:
                for df in (-1, 1):
                    if 0 <= file_idx + df < 8:
                        mask |= 1 << make_square(file_idx + df, src_rank)
            masks.append(mask)
        per_color.append(tuple(masks))
    return per_color[0], per_color[1]


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_idx + df
            ar = rank_idx + dr
            ray: list[Square] = []
            while 0 <= af < 8 and 0 <= ar < 8:
                ray.append(make_square(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
KING_TARGETS = _build_targets(KING_OFFSETS)
BISHOP_RAYS = _build_rays(BISHOP_DIRS)
ROOK_RAYS = _build_rays(ROOK_DIRS)
QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_KNIGHT_MASKS = _build_masks(KNIGHT_TARGETS)
_KING_MASKS = _build_masks(KING_TARGETS)
_PAWN_ATTACKER_MASKS = _build_pawn_attacker_masks()


# -- Attack query -----------------------------------------------------------


def _ray_hits(
    board: Board,
    rays: tuple[tuple[Square, ...], ...],
    by_color: Color,
    kinds: tuple[PieceKind, PieceKind],
) -> bool:
    for ray in rays:
        for to_sq in ray:
            piece = board[to_sq]
            if piece is None:
                continue
            if piece.color == by_color and piece.kind in kinds:
                return True
            break
    return False


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Whether any piece of *by_color* attacks *sq* on *board*.

    Check safety of the attacker is ignored, and *sq* need not be empty.
    """
    if board.pieces_bitboard(by_color, PieceKind.PAWN) & _PAWN_ATTACKER_MASKS[by_color][sq]:
        return True
    if board.pieces_bitboard(by_color, PieceKind.KNIGHT) & _KNIGHT_MASKS[sq]:
        return True
    if board.pieces_bitboard(by_color, PieceKind.KING) & _KING_MASKS[sq]:
        return True

    has_queen = board.has_piece(by_color, PieceKind.QUEEN)
    if (has_queen or board.has_piece(by_color, PieceKind.BISHOP)) and _ray_hits(
        board, BISHOP_RAYS[sq], by_color, (PieceKind.BISHOP, PieceKind.QUEEN)
    ):
        return True
    if (has_queen or board.has_piece(by_color, PieceKind.ROOK)) and _ray_hits(
        board, ROOK_RAYS[sq], by_color, (PieceKind.ROOK, PieceKind.QUEEN)
    ):
        return True
    return False
