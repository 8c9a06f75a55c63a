"""
Engine Core - Game state and the action reducer.

The engine is the runtime that:
1. Holds GameState
2. Parses raw requests into typed Actions
3. Applies actions via the reducer
4. Reports typed errors for rejected actions
"""

from .errors import (
    error_for_kind,
    ErrorKind,
    GameError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ConflictError,
    InternalError,
)
from .state import (
    GameState,
    PlayerState,
    Zone,
    CardRef,
    MaskType,
    TurnPhase,
    SelectionStage,
    MAX_LOG_ENTRIES,
    MIN_PLAYERS,
    MAX_PLAYERS,
)
from .action import Action, ActionType, ActionPayload, ActionResult, parse_action
from .reducer import Reducer, apply_action, draw_cost, format_log_entry

__all__ = [
    "ErrorKind",
    "error_for_kind",
    "GameError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ConflictError",
    "InternalError",
    "GameState",
    "PlayerState",
    "Zone",
    "CardRef",
    "MaskType",
    "TurnPhase",
    "SelectionStage",
    "MAX_LOG_ENTRIES",
    "MIN_PLAYERS",
    "MAX_PLAYERS",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "parse_action",
    "Reducer",
    "apply_action",
    "draw_cost",
    "format_log_entry",
]
