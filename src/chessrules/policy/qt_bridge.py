"""Qt bridge to run an opponent policy in a worker thread."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chessrules.core.errors import NoLegalMoveError
from chessrules.core.position import Position
from chessrules.policy.base import OpponentPolicy
from chessrules.policy.random_policy import RandomPolicy

logger = logging.getLogger(__name__)


class PolicyWorker(QObject):
    """Thread-affine worker that asks a policy for moves on demand.

    Move it to a ``QThread`` and invoke :meth:`request_move` through a
    queued connection; results come back as signals tagged with the
    caller's request id so stale answers can be dropped.
    """

    move_ready = pyqtSignal(int, object)
    no_move = pyqtSignal(int)
    policy_error = pyqtSignal(int, str)

    def __init__(self, policy: OpponentPolicy | None = None) -> None:
        super().__init__()
        self._policy: OpponentPolicy = policy if policy is not None else RandomPolicy()

    @property
    def policy(self) -> OpponentPolicy:
        return self._policy

    def set_policy(self, policy: OpponentPolicy) -> None:
        """Swap the strategy; takes effect on the next request."""
        self._policy = policy

    @pyqtSlot(object, int)
    def request_move(self, position_obj: object, request_id: int) -> None:
        """Select a move in *position_obj* and emit the outcome."""
        if not isinstance(position_obj, Position):
            self.policy_error.emit(request_id, "Policy received invalid position")
            return

        try:
            move = self._policy.select_move(position_obj)
        except NoLegalMoveError:
            self.no_move.emit(request_id)
            return
        except Exception as exc:
            logger.warning("Policy request %d failed: %s", request_id, exc)
            self.policy_error.emit(request_id, str(exc))
            return

        self.move_ready.emit(request_id, move)
