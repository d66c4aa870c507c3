"""Saving and loading games.

A save holds the start position, the full record of (move, position) pairs,
the current position, the termination status and who was seated on each
side. Loading trusts nothing: the board is checked for consistency and every
recorded move is replayed through the legality check. A load either yields a
complete new :class:`GameState` or raises :class:`CorruptSaveError`; it never
touches an existing game.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from chessrules.core.enums import CastlingRights, Color, PieceKind, TerminationKind
from chessrules.core.errors import CorruptSaveError, IllegalMoveError
from chessrules.core.move_applier import MoveApplier
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.rules import Rules
from chessrules.core.termination import Termination
from chessrules.core.types import A1, A8, E1, E8, H1, H8, rank_of, square_name
from chessrules.game.interfaces import IPlayer
from chessrules.game.player import HumanPlayer, PolicyPlayer
from chessrules.game.record import GameRecord, MoveRecord
from chessrules.game.state import GameState
from chessrules.game.wire import (
    decode_move,
    decode_position,
    decode_termination,
    encode_move,
    encode_position,
    encode_termination,
)
from chessrules.policy.base import OpponentPolicy
from chessrules.policy.random_policy import RandomPolicy

logger = logging.getLogger(__name__)

SAVE_VERSION = 1

PolicyFactory = Callable[[Color], OpponentPolicy]

# Castling right -> (king home, rook home)
_CASTLING_HOMES: dict[CastlingRights, tuple[int, int]] = {
    CastlingRights.WHITE_KINGSIDE: (E1, H1),
    CastlingRights.WHITE_QUEENSIDE: (E1, A1),
    CastlingRights.BLACK_KINGSIDE: (E8, H8),
    CastlingRights.BLACK_QUEENSIDE: (E8, A8),
}


# ── Save ─────────────────────────────────────────────────────────────────────


def save_game(state: GameState) -> dict[str, Any]:
    """Plain-data snapshot of *state*, ready for JSON."""
    players: dict[str, Any] = {}
    for color in Color:
        player = state.player(color)
        if player is not None:
            players[str(color)] = {
                "kind": "human" if player.is_human else "policy",
                "name": player.name,
            }
    return {
        "version": SAVE_VERSION,
        "game_id": state.game_id,
        "players": players,
        "start": encode_position(state.record.start),
        "record": [
            {"move": encode_move(entry.move), "position": encode_position(entry.position)}
            for entry in state.record
        ],
        "position": encode_position(state.position),
        "termination": encode_termination(state.termination),
    }


def dumps(state: GameState) -> str:
    return json.dumps(save_game(state), indent=2)


def save_to_file(state: GameState, path: Path | str) -> None:
    Path(path).write_text(dumps(state), encoding="utf-8")


# ── Load ─────────────────────────────────────────────────────────────────────


def load_game(
    data: Any,
    policy_factory: PolicyFactory | None = None,
) -> GameState:
    """Rebuild a :class:`GameState` from :func:`save_game` output.

    Args:
        data: The decoded save.
        policy_factory: Builds the policy for a policy-controlled side;
            defaults to a fresh :class:`RandomPolicy`.

    Raises:
        CorruptSaveError: The data is malformed or describes a game that
            could not have been played.
    """
    try:
        return _load(data, policy_factory or (lambda _color: RandomPolicy()))
    except CorruptSaveError as exc:
        logger.warning("Rejected saved game: %s", exc)
        raise
    except (ValueError, TypeError, KeyError, IllegalMoveError) as exc:
        logger.warning("Rejected saved game: %s", exc)
        raise CorruptSaveError(f"Cannot load game: {exc}") from exc


def loads(text: str, policy_factory: PolicyFactory | None = None) -> GameState:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CorruptSaveError(f"Cannot load game: not valid JSON ({exc})") from exc
    return load_game(data, policy_factory)


def load_from_file(path: Path | str, policy_factory: PolicyFactory | None = None) -> GameState:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise CorruptSaveError(f"Cannot load game: {exc}") from exc
    return loads(text, policy_factory)


def validate_position(position: Position) -> None:
    """Reject a position that no legal game could reach.

    Raises:
        CorruptSaveError: Listing every problem found.
    """
    problems: list[str] = []
    board = position.board

    for color in Color:
        count = board.king_count(color)
        if count != 1:
            problems.append(f"{color} has {count} kings")

    for color in Color:
        for sq in board.pieces(color, PieceKind.PAWN):
            if rank_of(sq) in (0, 7):
                problems.append(f"{color} pawn on {square_name(sq)}")

    for right, (king_sq, rook_sq) in _CASTLING_HOMES.items():
        if not position.castling & right:
            continue
        color = Color.WHITE if right & CastlingRights.WHITE_BOTH else Color.BLACK
        if board[king_sq] != Piece(color, PieceKind.KING) or board[rook_sq] != Piece(
            color, PieceKind.ROOK
        ):
            problems.append(
                f"castling right {right.name} without king and rook at home"
            )

    ep = position.en_passant
    if ep is not None:
        mover = position.side_to_move
        # The pawn that just advanced two squares belongs to the other side.
        expected_rank = 5 if mover == Color.WHITE else 2
        pushed = ep - mover.pawn_direction
        origin = ep + mover.pawn_direction
        if (
            rank_of(ep) != expected_rank
            or not board.is_empty(ep)
            or not board.is_empty(origin)
            or board[pushed] != Piece(mover.opposite, PieceKind.PAWN)
        ):
            problems.append(f"impossible en-passant target {square_name(ep)}")

    if not problems and position.is_in_check(position.side_to_move.opposite):
        problems.append(f"{position.side_to_move.opposite} is in check but not to move")

    if problems:
        raise CorruptSaveError("Inconsistent position: " + "; ".join(problems))


# ── Internal ─────────────────────────────────────────────────────────────────


def _load(data: Any, policy_factory: PolicyFactory) -> GameState:
    if not isinstance(data, dict):
        raise CorruptSaveError("Save must be a JSON object")
    if data.get("version") != SAVE_VERSION:
        raise CorruptSaveError(f"Unsupported save version: {data.get('version')!r}")

    start = decode_position(data["start"])
    validate_position(start)

    entries = data["record"]
    if not isinstance(entries, list):
        raise CorruptSaveError("Record must be a list")

    record = GameRecord(start=start)
    previous = start
    for ply, entry in enumerate(entries, start=1):
        if not isinstance(entry, dict):
            raise CorruptSaveError(f"Record entry {ply} must be an object")
        move = decode_move(entry["move"])
        stored = decode_position(entry["position"])
        if Rules.termination(previous).is_over:
            raise CorruptSaveError(f"Record entry {ply} continues a finished game")
        try:
            replayed = MoveApplier.apply(previous, move)
        except IllegalMoveError as exc:
            raise CorruptSaveError(f"Record entry {ply}: {exc}") from exc
        if replayed != stored:
            raise CorruptSaveError(f"Record entry {ply} does not match its move")
        record.append(MoveRecord.build(previous, move, replayed))
        previous = replayed

    if decode_position(data["position"]) != record.current:
        raise CorruptSaveError("Current position does not match the record")

    termination = _checked_termination(decode_termination(data["termination"]), record.current)

    game_id = data.get("game_id")
    if game_id is not None and not isinstance(game_id, str):
        raise CorruptSaveError(f"Invalid game id: {game_id!r}")

    players = _decode_players(data.get("players", {}), policy_factory)

    state = GameState(start, game_id=game_id)
    state.restore(record, termination)
    for player in players:
        state.bind(player, autoplay=False)
    logger.info("Loaded game %s at ply %d", state.game_id, state.ply_count)
    return state


def _checked_termination(claimed: Termination, position: Position) -> Termination:
    derived = Rules.termination(position)
    if claimed.kind == TerminationKind.RESIGNED:
        if derived.is_over:
            raise CorruptSaveError(f"Resignation recorded after {derived}")
        return claimed
    if claimed != derived:
        raise CorruptSaveError(f"Saved status {claimed} but position is {derived}")
    return claimed


def _decode_players(data: Any, policy_factory: PolicyFactory) -> list[IPlayer]:
    if not isinstance(data, dict):
        raise CorruptSaveError("Players must be an object")
    players: list[IPlayer] = []
    for color in Color:
        entry = data.get(str(color))
        if entry is None:
            continue
        if not isinstance(entry, dict):
            raise CorruptSaveError(f"Invalid {color} player entry")
        name = entry.get("name", "")
        if not isinstance(name, str):
            raise CorruptSaveError(f"Invalid {color} player name: {name!r}")
        kind = entry.get("kind")
        if kind == "human":
            players.append(HumanPlayer(color, name))
        elif kind == "policy":
            players.append(PolicyPlayer(color, policy_factory(color), name or "Computer"))
        else:
            raise CorruptSaveError(f"Unknown {color} player kind: {kind!r}")
    return players
