"""Game layer - players, configuration, state machine, persistence.

Quick start::

    from chessrules.core import parse_square
    from chessrules.game import GameConfig, GameState

    game = GameState.from_config(GameConfig.human_vs_policy(seed=7))
    game.submit_selection(parse_square("e2"), parse_square("e4"))
    print(game.record.uci_moves())   # ['e2e4', <the policy's reply>]
"""

from chessrules.game.config import GameConfig
from chessrules.game.interfaces import GameMode, GamePhase, IPlayer
from chessrules.game.persistence import (
    dumps,
    load_from_file,
    load_game,
    loads,
    save_game,
    save_to_file,
    validate_position,
)
from chessrules.game.player import HumanPlayer, PolicyPlayer
from chessrules.game.record import GameRecord, MoveRecord
from chessrules.game.state import GameEvents, GameState
from chessrules.game.wire import decode_move, encode_move

__all__ = [
    # Interfaces
    "GameMode",
    "GamePhase",
    "IPlayer",
    # Concrete
    "GameConfig",
    "GameEvents",
    "GameRecord",
    "GameState",
    "HumanPlayer",
    "MoveRecord",
    "PolicyPlayer",
    # Persistence / wire
    "decode_move",
    "dumps",
    "encode_move",
    "load_from_file",
    "load_game",
    "loads",
    "save_game",
    "save_to_file",
    "validate_position",
]
