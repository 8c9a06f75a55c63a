"""
Pytest fixtures for Secret Societies tests.
"""

import random
from datetime import datetime
from typing import Callable

import pytest

from ..engine_core.state import GameState, TurnPhase
from ..engine_core.action import (
    Action,
    ActionPayload,
    ActionResult,
    StartGameFromLobby,
    SelectVc,
)
from ..engine_core.reducer import Reducer
from ..games.secret_societies.catalog import SecretSocietiesCatalog, create_secret_societies_catalog
from ..games.secret_societies.setup import create_lobby_state, create_player
from ..session import SessionGateway, InMemoryGameStore


FIXED_NOW = datetime(2024, 1, 1, 12, 0, 0)


def fixed_clock() -> datetime:
    return FIXED_NOW


@pytest.fixture
def catalog() -> SecretSocietiesCatalog:
    """Standard Secret Societies catalog."""
    return create_secret_societies_catalog()


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source so shuffles repeat."""
    return random.Random(1234)


@pytest.fixture
def reducer(catalog, rng) -> Reducer:
    """Reducer with pinned randomness and clock."""
    return Reducer(catalog=catalog, rng=rng, clock=fixed_clock)


@pytest.fixture
def lobby_state(catalog) -> GameState:
    """A fresh lobby with only the host, Alice."""
    return create_lobby_state(
        "Alice",
        catalog,
        rng=random.Random(7),
        session_id="session1",
        host_player_id="p_alice",
        created_at="2024-01-01T00:00:00+00:00",
    )


@pytest.fixture
def two_player_lobby(lobby_state, catalog) -> GameState:
    """Lobby with Alice (host) and Bob."""
    state = lobby_state.clone()
    state.players.append(create_player("p_bob", "Bob", catalog, random.Random(8)))
    state.turn_order.append("p_bob")
    return state


@pytest.fixture
def act(reducer) -> Callable[[GameState, ActionPayload], ActionResult]:
    """Apply a payload and return the raw result."""
    def _act(state: GameState, payload: ActionPayload) -> ActionResult:
        return reducer.apply(state, Action.of(payload))
    return _act


@pytest.fixture
def advance(act) -> Callable[[GameState, ActionPayload], GameState]:
    """Apply a payload that must succeed and return the new state."""
    def _advance(state: GameState, payload: ActionPayload) -> GameState:
        result = act(state, payload)
        assert result.success, result.error
        return result.new_state
    return _advance


@pytest.fixture
def selecting_state(two_player_lobby, advance) -> GameState:
    """Game started; first player in turn order is choosing a victory condition."""
    return advance(two_player_lobby, StartGameFromLobby("p_alice"))


@pytest.fixture
def draw_state(selecting_state, advance) -> GameState:
    """Both victory conditions selected; first player is in the Draw phase."""
    state = selecting_state
    while state.turn_phase == TurnPhase.VC_SELECTION:
        state = advance(state, SelectVc(
            state.current_player_id,
            state.available_victory_conditions[0],
        ))
    return state


@pytest.fixture
def store() -> InMemoryGameStore:
    return InMemoryGameStore()


@pytest.fixture
def gateway(store, catalog) -> SessionGateway:
    """Gateway over an in-memory store with pinned randomness."""
    return SessionGateway(
        store=store,
        catalog=catalog,
        rng=random.Random(99),
        clock=fixed_clock,
    )
