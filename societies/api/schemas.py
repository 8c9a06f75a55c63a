"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between game clients and the server.
All responses include explicit types for OpenAPI schema generation.

Error Codes:
- VALIDATION_ERROR: Missing or malformed request or action payload
- AUTHENTICATION_ERROR: Wrong lobby password
- AUTHORIZATION_ERROR: Not the host, not your turn, or wrong phase
- NOT_FOUND: Session or player does not exist
- CONFLICT: Lobby full, name taken, or the session changed underneath
- INTERNAL_ERROR: Server-side invariant violated
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes. Values match the engine's error kinds."""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    AUTHORIZATION_ERROR = "AUTHORIZATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """A physical secret card with its catalog details."""
    instance_id: str
    id: str
    name: str
    zone: Optional[str] = None
    rarity: Optional[str] = None
    exploit_effect: Optional[str] = None
    reveal_effect: Optional[str] = None
    flavor: Optional[str] = None


class VictoryConditionInfo(BaseModel):
    id: str
    name: str
    description: str

    model_config = {"from_attributes": True}


class EventInfo(BaseModel):
    id: str
    name: str
    description: str

    model_config = {"from_attributes": True}


class HandRevealRequestInfo(BaseModel):
    player_id: str
    player_name: str


class PlayerInfo(BaseModel):
    """Player information for display."""
    player_id: str
    name: str
    gold: int
    trust: int
    information: int
    secrecy: int
    hand: list[CardInfo] = Field(default_factory=list)
    masks: dict[str, Optional[CardInfo]] = Field(default_factory=dict)
    current_zone: str
    victory_condition: Optional[VictoryConditionInfo] = None
    is_victory_condition_revealed: bool = False
    is_eliminated: bool = False
    is_host: bool = False
    is_current_turn: bool = False
    pending_hand_reveal_request_from: Optional[HandRevealRequestInfo] = None


class ZoneInfo(BaseModel):
    """A map zone. Deck contents stay on the server; only the size is shown."""
    name: str
    borders: list[str]
    deck_size: int


class RevealedHandInfo(BaseModel):
    for_player_id: str
    target_player_id: str
    target_player_name: str
    hand: list[CardInfo] = Field(default_factory=list)


class RevealedMaskInfo(BaseModel):
    player_id: str
    mask_type: str
    revealed_by_player_id: str


class LeaderboardEntryInfo(BaseModel):
    player_name: str
    wins: int

    model_config = {"from_attributes": True}


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to create a new lobby."""
    host_name: str = Field(..., description="Display name of the host")
    password: Optional[str] = Field(None, description="Optional lobby password")


class JoinSessionRequest(BaseModel):
    """Request to join an open lobby."""
    player_name: str = Field(..., description="Display name, unique within the lobby")
    password: Optional[str] = Field(None, description="Lobby password, if one is set")


class ActionRequest(BaseModel):
    """
    A game action.

    Payload keys may be camelCase or snake_case. Type and payload are
    checked by the engine so a missing field is a 400, not a 422.
    """
    type: Optional[str] = Field(None, description="Action type, e.g. CONFIRM_DRAW")
    payload: Optional[dict[str, Any]] = Field(None, description="Action-specific fields")
    action_id: Optional[str] = Field(None, description="Client-side id echoed in logs")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class CreateSessionResponse(BaseModel):
    session_id: str
    host_player_id: str
    host_name: str
    api_version: str = "v1"


class JoinSessionResponse(BaseModel):
    message: str
    session_id: str
    player_id: str
    api_version: str = "v1"


class GameStateResponse(BaseModel):
    """Complete game state for display."""
    session_id: str
    players: list[PlayerInfo]
    current_player_id: Optional[str] = None
    current_turn_player_index: int
    vc_selection_player_index: int
    round: int
    turn_phase: str
    selection_stage: str
    turn_order: list[str]
    has_moved_this_turn: bool
    suspicion: int
    max_suspicion_adjustment: int
    zones: list[ZoneInfo]
    active_event: Optional[EventInfo] = None
    upcoming_event: Optional[EventInfo] = None
    available_victory_condition_count: int
    game_log: list[str]
    revealed_hand: Optional[RevealedHandInfo] = None
    revealed_mask_types_this_turn: list[str] = Field(default_factory=list)
    currently_revealed_masks: list[RevealedMaskInfo] = Field(default_factory=list)
    has_password: bool = False
    created_at: Optional[str] = None
    version: int
    api_version: str = "v1"


class ActionResponse(BaseModel):
    """
    Result of an accepted action.

    Read-only actions (GET_VC_OFFER, REQUEST_DRAW_OFFER) carry their offer
    in data and no state. Concluding or terminating deletes the session,
    so state is absent there too.
    """
    success: bool = True
    action_type: str
    message: Optional[str] = None
    state: Optional[GameStateResponse] = None
    log_entries: list[str] = Field(default_factory=list)
    data: dict[str, Any] = Field(default_factory=dict)
    session_deleted: bool = False
    winner_name: Optional[str] = None
    api_version: str = "v1"


class LeaderboardResponse(BaseModel):
    leaderboard: list[LeaderboardEntryInfo]
    api_version: str = "v1"


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
