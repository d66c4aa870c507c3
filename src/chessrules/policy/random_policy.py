"""Baseline policy: a uniformly random legal move."""

from __future__ import annotations

import logging
import random

from chessrules.core.errors import NoLegalMoveError
from chessrules.core.move import Move
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.position import Position

logger = logging.getLogger(__name__)


class RandomPolicy:
    """Picks uniformly among the legal moves.

    Args:
        seed: Seed for a private generator, for reproducible games.
        rng: An existing generator to draw from instead; wins over *seed*.
    """

    __slots__ = ("_rng",)

    def __init__(self, seed: int | None = None, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random(seed)

    def select_move(self, position: Position) -> Move:
        legal = MoveGenerator(position).generate_legal_moves()
        if not legal:
            raise NoLegalMoveError(
                f"No legal moves for {position.side_to_move}; game is already over"
            )
        move = self._rng.choice(legal)
        logger.debug("Random policy chose %s out of %d moves", move, len(legal))
        return move
