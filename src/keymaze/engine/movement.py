from __future__ import annotations

import logging

from ..maze.grid import FULLY_OPEN, Direction
from .events import GameEvent, MoveResult
from .state import SessionState

logger = logging.getLogger(__name__)


class MovementEngine:
    """Applies player moves to a session and reports what happened.

    Legality is checked in two phases. A step is allowed when the current cell
    is open toward the target or the target is a locked door; only after the
    step does the engine decide whether the door (or the exit) actually lets
    the player stay. Blocked outcomes roll the player back to where they were.
    """

    def can_move(self, session: SessionState, direction: Direction) -> bool:
        pos = session.player.position
        target = pos.step(direction)
        if not session.grid.in_bounds(target):
            return False
        return session.grid.has_passage(pos, direction) or target in session.doors

    def try_move(self, session: SessionState, direction: Direction) -> MoveResult:
        player = session.player
        if session.won:
            logger.debug("Ignoring move %s; session already won", direction.name)
            return MoveResult(new_position=player.position)

        if not self.can_move(session, direction):
            logger.debug("Blocked move %s from %s", direction.name, player.position)
            return MoveResult(new_position=player.position)

        player.step_to(player.position.step(direction))
        pos = player.position
        result = MoveResult(new_position=pos, moved=True)
        logger.debug("Player moved %s to %s", direction.name, pos)

        if pos in session.keys:
            session.keys.discard(pos)
            player.has_key = True
            result.events.append(GameEvent.KEY_COLLECTED)
            logger.info("Key collected at %s", pos)

        if pos in session.doors:
            if player.has_key:
                session.doors.discard(pos)
                player.has_key = False
                session.grid.set_mask(pos, FULLY_OPEN)
                result.events.append(GameEvent.DOOR_UNLOCKED)
                logger.info("Door at %s unlocked", pos)
            else:
                result.events.append(GameEvent.DOOR_BLOCKED)
                self._rollback(session, result)
                logger.info("Blocked by locked door at %s; no key", pos)
                return result

        if pos == session.exit:
            if session.doors:
                result.events.append(GameEvent.WIN_BLOCKED)
                self._rollback(session, result)
                logger.info("Reached exit with %d door(s) still locked", len(session.doors))
            else:
                session.won = True
                session.elapsed = max(0.0, session.clock() - session.started_at)
                result.elapsed = session.elapsed
                result.events.append(GameEvent.GAME_WON)
                logger.info("Maze completed in %.2fs", session.elapsed)
        return result

    @staticmethod
    def _rollback(session: SessionState, result: MoveResult) -> None:
        session.player.rollback()
        result.new_position = session.player.position
        result.rolled_back = True


__all__ = ["MovementEngine"]
