"""
Secret Societies Setup - Creates the initial lobby state.

This module handles:
- Shuffling with an injected RNG for determinism
- Per-session card instance ids
- Building one shuffled secret deck per zone
- Creating players with starting resources
- Seeding the event deck and the victory condition pool

Setup follows the base rules for 2-4 players; the host is created with
the lobby and everyone else joins later.
"""

from __future__ import annotations
import random
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TypeVar

from ...engine_core.state import GameState, PlayerState, Zone, CardRef, TurnPhase, SelectionStage
from .catalog import SecretSocietiesCatalog

T = TypeVar("T")

STARTING_RESOURCES = {
    "gold": 5,
    "trust": 8,
    "information": 2,
    "secrecy": 0,
}
STARTING_MAX_SUSPICION_ADJUSTMENT = 2


def shuffled(items: list[T], rng: random.Random) -> list[T]:
    """Return a shuffled copy; the input list is left alone."""
    result = list(items)
    rng.shuffle(result)
    return result


@dataclass
class InstanceIdSequence:
    """
    Monotonic card instance ids scoped to one session.

    The prefix keeps ids from different sessions apart; the counter
    keeps them unique within one.
    """
    prefix: str
    counter: int = 0

    def next_id(self, base_id: str) -> str:
        self.counter += 1
        return f"{self.prefix}:{base_id}:{self.counter}"


def new_player_id() -> str:
    return f"p_{uuid.uuid4().hex[:10]}"


def new_session_id() -> str:
    return uuid.uuid4().hex[:20]


def create_player(
    player_id: str,
    name: str,
    catalog: SecretSocietiesCatalog,
    rng: random.Random,
) -> PlayerState:
    """Create a player with starting resources in a random starting zone."""
    return PlayerState(
        player_id=player_id,
        name=name,
        current_zone=rng.choice(catalog.starting_zones),
        **STARTING_RESOURCES,
    )


def build_zone_decks(
    catalog: SecretSocietiesCatalog,
    ids: InstanceIdSequence,
    rng: random.Random,
) -> list[Zone]:
    """Create every physical card copy and shuffle each zone's deck."""
    zones = []
    for zone_def in catalog.zones:
        deck = [
            CardRef(base_id=card.id, instance_id=ids.next_id(card.id))
            for card in catalog.cards_in_zone(zone_def.name)
            for _ in range(card.copies)
        ]
        zones.append(Zone(
            name=zone_def.name,
            borders=list(zone_def.borders),
            secret_deck=shuffled(deck, rng),
        ))
    return zones


def create_lobby_state(
    host_name: str,
    catalog: SecretSocietiesCatalog,
    rng: random.Random | None = None,
    session_id: str | None = None,
    host_player_id: str | None = None,
    password: str | None = None,
    created_at: str | None = None,
) -> GameState:
    """
    Set up a new lobby with the host as its only player.

    Args:
        host_name: Display name of the host (already trimmed)
        catalog: Reference data to build decks from
        rng: Random source for all shuffles (defaults to a fresh Random)
        session_id: Explicit session id (generated if not provided)
        host_player_id: Explicit host id (generated if not provided)
        password: Optional lobby password
        created_at: ISO timestamp (now if not provided)

    Returns:
        GameState in VC_SELECTION / lobby stage
    """
    rng = rng or random.Random()
    session_id = session_id or new_session_id()
    host = create_player(host_player_id or new_player_id(), host_name, catalog, rng)

    event_deck = shuffled([e.id for e in catalog.events], rng)
    upcoming_event = event_deck.pop(0) if event_deck else None

    return GameState(
        session_id=session_id,
        players=[host],
        current_player_id=host.player_id,
        current_turn_player_index=0,
        vc_selection_player_index=0,
        round=1,
        turn_phase=TurnPhase.VC_SELECTION,
        selection_stage=SelectionStage.LOBBY,
        turn_order=[host.player_id],
        suspicion=0,
        max_suspicion_adjustment=STARTING_MAX_SUSPICION_ADJUSTMENT,
        zones=build_zone_decks(catalog, InstanceIdSequence(prefix=session_id), rng),
        active_event=None,
        upcoming_event=upcoming_event,
        event_deck=event_deck,
        available_victory_conditions=shuffled([vc.id for vc in catalog.victory_conditions], rng),
        game_log=[f"Lobby created by {host_name}. Waiting for players..."],
        password=password or None,
        created_at=created_at or datetime.now(timezone.utc).isoformat(),
    )
