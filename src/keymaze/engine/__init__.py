from .events import GameEvent, MoveResult
from .movement import MovementEngine
from .session import move, new_session, regenerate
from .state import PlayerState, SessionState

__all__ = [
    "GameEvent",
    "MoveResult",
    "MovementEngine",
    "PlayerState",
    "SessionState",
    "new_session",
    "regenerate",
    "move",
]
