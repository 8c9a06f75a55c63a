"""
Secret Societies - A secret-identity board game for 2-4 players.

Key mechanics:
- Each player secretly holds a Victory Condition
- Secrets are drawn from the deck of the zone a player stands in
- Exploiting places a Secret on a mask; revealing exposes a mask
- A shared Suspicion counter and round events shape the game
- The host concludes the game and records the winner

This module contains:
- Reference data: zones, secret cards, events, victory conditions
- The catalog that indexes them
- Lobby setup with per-session card instance ids
"""

from .definitions import SecretCard, EventCard, VictoryCondition, ZoneDefinition, Rarity
from .catalog import SecretSocietiesCatalog, create_secret_societies_catalog
from .setup import (
    create_lobby_state,
    create_player,
    build_zone_decks,
    shuffled,
    InstanceIdSequence,
    STARTING_RESOURCES,
)

__all__ = [
    "SecretCard",
    "EventCard",
    "VictoryCondition",
    "ZoneDefinition",
    "Rarity",
    "SecretSocietiesCatalog",
    "create_secret_societies_catalog",
    "create_lobby_state",
    "create_player",
    "build_zone_decks",
    "shuffled",
    "InstanceIdSequence",
    "STARTING_RESOURCES",
]
