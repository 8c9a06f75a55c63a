"""
Session Module - Stores and drives game sessions.

A session represents one play-through of Secret Societies:
- Created as a lobby by its host
- Joined by up to three more players
- Advanced by validated actions, saved with compare-and-swap
- Deleted when the host concludes or terminates it

Win counts outlive sessions and feed the leaderboard.
"""

from .store import (
    GameStore,
    InMemoryGameStore,
    JsonFileGameStore,
    StoreTransaction,
    LeaderboardEntry,
    sanitize_stat_id,
)
from .gateway import SessionGateway

__all__ = [
    "GameStore",
    "InMemoryGameStore",
    "JsonFileGameStore",
    "StoreTransaction",
    "LeaderboardEntry",
    "sanitize_stat_id",
    "SessionGateway",
]
