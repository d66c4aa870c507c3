"""GameState - the turn-taking state machine of a single game.

Owns the authoritative :class:`Position`, the :class:`GameRecord` and the
:class:`Termination`. Every move, whether typed by a local human, chosen by
a policy or received from a remote peer, goes through the same legality
check before it is applied.

Not thread-safe: a host serving several games keeps one ``GameState`` per
game and serialises calls into each.
"""

from __future__ import annotations

import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from chessrules.core.enums import Color, PieceKind
from chessrules.core.errors import GameOverError, IllegalMoveError
from chessrules.core.move import Move
from chessrules.core.move_applier import MoveApplier
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.position import Position
from chessrules.core.rules import Rules
from chessrules.core.termination import Termination
from chessrules.core.types import Square, square_name
from chessrules.game.config import GameConfig
from chessrules.game.interfaces import GamePhase, IPlayer
from chessrules.game.record import GameRecord, MoveRecord
from chessrules.game.wire import decode_move

logger = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, "GameState"], None]
GameOverCallback = Callable[[Termination], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


def new_game_id() -> str:
    """Short random token identifying a game session."""
    return secrets.token_hex(5)


class GameState:
    """SETUP -> IN_PROGRESS -> FINISHED.

    In SETUP the players are being bound; once both colours have a player
    the game starts. In IN_PROGRESS moves are validated and applied, and a
    policy player answers as soon as it is its turn. FINISHED rejects moves
    until :meth:`reset`.
    """

    __slots__ = (
        "_record",
        "_phase",
        "_termination",
        "_players",
        "game_id",
        "events",
    )

    def __init__(self, position: Position | None = None, game_id: str | None = None) -> None:
        self._record = GameRecord(start=position if position is not None else Position.initial())
        self._phase = GamePhase.SETUP
        self._termination = Termination.in_progress()
        self._players: dict[Color, IPlayer] = {}
        self.game_id = game_id or new_game_id()
        self.events = GameEvents()

    @classmethod
    def from_config(cls, config: GameConfig, position: Position | None = None) -> GameState:
        """A game with *config*'s players bound and already started."""
        state = cls(position)
        white, black = config.build_players()
        state.bind(white)
        state.bind(black)
        return state

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def position(self) -> Position:
        return self._record.current

    @property
    def record(self) -> GameRecord:
        return self._record

    @property
    def termination(self) -> Termination:
        return self._termination

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def is_game_over(self) -> bool:
        return self._phase == GamePhase.FINISHED

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self._record)

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self.side_to_move)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # ── Setup ────────────────────────────────────────────────────────────

    def bind(self, player: IPlayer, autoplay: bool = True) -> None:
        """Seat *player* on its colour; the game starts once both are seated.

        With *autoplay* off a policy whose turn it is at start waits for
        :meth:`resume` instead of moving at once.
        """
        if self._phase != GamePhase.SETUP:
            raise ValueError(f"Cannot bind players while {self._phase}")
        if player.color in self._players:
            raise ValueError(f"{player.color} is already bound")
        self._players[player.color] = player
        logger.debug("Game %s: %s bound to %s", self.game_id, player.name, player.color)
        if len(self._players) == len(Color):
            self._start(autoplay)

    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        position: Position | None = None,
    ) -> None:
        """Reset, then bind both players from *position* (default: start)."""
        self.reset(position)
        self.bind(white)
        self.bind(black)

    def reset(self, position: Position | None = None) -> None:
        """Back to SETUP: history cleared and players unbound."""
        start = position if position is not None else self._record.start
        self._record = GameRecord(start=start)
        self._players = {}
        self._termination = Termination.in_progress()
        self._set_phase(GamePhase.SETUP)

    # ── Queries ──────────────────────────────────────────────────────────

    def legal_moves(self) -> list[Move]:
        """Legal moves in the current position (none once finished)."""
        if self._phase == GamePhase.FINISHED:
            return []
        return MoveGenerator(self.position).generate_legal_moves()

    def legal_moves_from(self, sq: Square) -> list[Move]:
        """Legal moves of the piece on *sq*, for destination highlighting."""
        if self._phase == GamePhase.FINISHED:
            return []
        return MoveGenerator(self.position).legal_moves_from(sq)

    # ── Moves ────────────────────────────────────────────────────────────

    def submit_move(self, move: Move, color: Color | None = None) -> MoveRecord:
        """Validate and apply *move* on behalf of *color*.

        Omitting *color* submits for whichever side is to move. If the next
        side is policy-controlled its reply is played before returning.

        Raises:
            GameOverError: The game has finished.
            IllegalMoveError: Not started, not *color*'s turn, the side is
                policy-controlled, or *move* is not legal.
        """
        self._check_accepting(color)
        record = self._apply(move)
        self._play_policy_turns()
        return record

    def submit_selection(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceKind | None = None,
        color: Color | None = None,
    ) -> MoveRecord:
        """Resolve a from/to selection to a legal move and submit it.

        A promotion without a chosen piece defaults to a queen.
        """
        self._check_accepting(color)
        move = MoveGenerator(self.position).find(from_sq, to_sq, promotion)
        if move is not None:
            return self.submit_move(move, color)
        raise IllegalMoveError(
            f"No legal move {square_name(from_sq)}-{square_name(to_sq)}"
            + (f" promoting to {promotion}" if promotion is not None else "")
        )

    def submit_remote_move(self, payload: Any, color: Color | None = None) -> MoveRecord:
        """Decode a peer's move record and submit it like a local move."""
        try:
            move = decode_move(payload)
        except ValueError as exc:
            raise IllegalMoveError(f"Malformed remote move: {exc}") from exc
        return self.submit_move(move, color)

    def resign(self, color: Color) -> None:
        """*color* resigns; the opponent wins."""
        if self._phase == GamePhase.FINISHED:
            raise GameOverError(f"Game already over ({self._termination})")
        if self._phase != GamePhase.IN_PROGRESS:
            raise IllegalMoveError("Game has not started")
        self._finish(Termination.resigned(color))

    def undo_last_move(self) -> Move | None:
        """Take back one half-move. Returns it, or ``None`` if none was played.

        Raises:
            GameOverError: The game has finished.
            IllegalMoveError: The move was played by a policy-controlled
                side; use :meth:`undo_turn` instead.
        """
        if self._phase == GamePhase.FINISHED:
            raise GameOverError(f"Game already over ({self._termination})")
        if not self._record.entries:
            return None
        mover = self._players.get(self._record[-1].position.side_to_move.opposite)
        if mover is not None and not mover.is_human:
            raise IllegalMoveError(
                f"Last move was played by {mover.name}; use undo_turn to take back a turn"
            )
        return self._pop()

    def undo_turn(self) -> list[Move]:
        """Take back moves until a human is to move again.

        In a game against a policy this removes the policy's reply together
        with the human move before it. When the policy opened the game and
        everything is taken back, it is asked to open again.
        """
        if self._phase == GamePhase.FINISHED:
            raise GameOverError(f"Game already over ({self._termination})")
        undone: list[Move] = []
        while self._record.entries:
            undone.append(self._pop())
            player = self.current_player
            if player is None or player.is_human:
                break
        self._play_policy_turns()
        return undone

    def resume(self) -> None:
        """Let a policy play if it is its turn, e.g. after loading a save."""
        self._play_policy_turns()

    # ── Internal ─────────────────────────────────────────────────────────

    def _start(self, autoplay: bool = True) -> None:
        if not self._termination.is_over:
            self._termination = Rules.termination(self.position)
        if self._termination.is_over:
            self._finish(self._termination)
            return
        self._set_phase(GamePhase.IN_PROGRESS)
        if autoplay:
            self._play_policy_turns()

    def _check_accepting(self, color: Color | None) -> None:
        if self._phase == GamePhase.FINISHED:
            raise GameOverError(f"Game already over ({self._termination})")
        if self._phase != GamePhase.IN_PROGRESS:
            raise IllegalMoveError("Game has not started")
        side = self.side_to_move
        if color is not None and color != side:
            raise IllegalMoveError(f"It is {side}'s turn, not {color}'s")
        player = self._players[side]
        if not player.is_human:
            raise IllegalMoveError(f"{side} is played by {player.name}")

    def _apply(self, move: Move) -> MoveRecord:
        before = self.position
        after = MoveApplier.apply(before, move)
        record = MoveRecord.build(before, move, after)
        self._record.append(record)
        logger.debug("Game %s: %s played %s", self.game_id, before.side_to_move, move)

        termination = Rules.termination(after)
        if termination.is_over:
            self._finish(termination)

        for cb in self.events.on_move:
            cb(record, self)
        return record

    def _pop(self) -> Move:
        record = self._record.pop()
        logger.debug("Game %s: undo %s", self.game_id, record.move)
        return record.move

    def _play_policy_turns(self) -> None:
        while self._phase == GamePhase.IN_PROGRESS:
            player = self._players[self.side_to_move]
            if player.is_human:
                return
            move = player.choose_move(self.position)
            if move is None:
                return
            self._apply(move)

    def _finish(self, termination: Termination) -> None:
        self._termination = termination
        logger.info("Game %s finished: %s", self.game_id, termination)
        self._set_phase(GamePhase.FINISHED)
        for cb in self.events.on_game_over:
            cb(termination)

    def _set_phase(self, phase: GamePhase) -> None:
        if phase == self._phase:
            return
        logger.info("Game %s: %s -> %s", self.game_id, self._phase, phase)
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)

    def restore(self, record: GameRecord, termination: Termination) -> None:
        """Install an already validated history while still in SETUP.

        Used when loading a saved game; no legality checks happen here.
        """
        if self._phase != GamePhase.SETUP:
            raise ValueError(f"Cannot restore history while {self._phase}")
        self._record = record
        self._termination = termination
