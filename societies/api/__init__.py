"""
API Module - Client interface.

Exposes the game server via REST and WebSocket.
Clients:
1. Create or join a lobby
2. Submit actions for their own player
3. Receive state pushes over a WebSocket
4. Read the leaderboard

Players are identified by the player id returned on create/join.
No persistent user accounts required.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    JoinSessionRequest,
    ActionRequest,
    # Responses
    CreateSessionResponse,
    JoinSessionResponse,
    GameStateResponse,
    ActionResponse,
    LeaderboardResponse,
    ErrorResponse,
    HealthResponse,
    # Shared
    PlayerInfo,
    ZoneInfo,
    CardInfo,
    ErrorCode,
)
from .service import APIService
from .app import create_app, build_gateway

__all__ = [
    # Requests
    "CreateSessionRequest",
    "JoinSessionRequest",
    "ActionRequest",
    # Responses
    "CreateSessionResponse",
    "JoinSessionResponse",
    "GameStateResponse",
    "ActionResponse",
    "LeaderboardResponse",
    "ErrorResponse",
    "HealthResponse",
    # Shared
    "PlayerInfo",
    "ZoneInfo",
    "CardInfo",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
    "build_gateway",
]
