"""
Session Gateway - The entry point for every session operation.

LIFECYCLE:
1. Host creates a lobby -> stored at version 1
2. Players join while the lobby is open
3. Host starts the game; players select victory conditions
4. Turn actions are parsed, reduced, and saved with compare-and-swap
5. Host concludes (win recorded + session deleted atomically) or terminates

CONCURRENCY:
- Every write is load -> reduce -> save(expected_version)
- A lost race reloads and re-applies the action against the fresh state
- Rejections are raised as typed GameErrors; nothing is written
"""

from __future__ import annotations
import logging
import random
from datetime import datetime
from typing import Any, Callable

from ..engine_core.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ValidationError,
    error_for_kind,
)
from ..engine_core.state import GameState, SelectionStage, TurnPhase, MAX_PLAYERS
from ..engine_core.action import Action, ActionResult, parse_action
from ..engine_core.reducer import Reducer, format_log_entry
from ..games.secret_societies.catalog import SecretSocietiesCatalog, create_secret_societies_catalog
from ..games.secret_societies.setup import create_lobby_state, create_player, new_player_id
from .store import GameStore, InMemoryGameStore, LeaderboardEntry, LEADERBOARD_SIZE, Listener

logger = logging.getLogger(__name__)

DEFAULT_SAVE_RETRIES = 3


class SessionGateway:
    """
    Creates, joins and drives sessions on top of a GameStore.

    Usage:
        gateway = SessionGateway(InMemoryGameStore())

        state, host_id = gateway.create_session("Alice")
        state, bob_id = gateway.join_session(state.session_id, "Bob")

        result = gateway.submit_action(state.session_id, {
            "type": "START_GAME_FROM_LOBBY",
            "payload": {"playerId": host_id},
        })
    """

    def __init__(
        self,
        store: GameStore | None = None,
        catalog: SecretSocietiesCatalog | None = None,
        reducer: Reducer | None = None,
        rng: random.Random | None = None,
        save_retries: int = DEFAULT_SAVE_RETRIES,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.store = store or InMemoryGameStore()
        self.catalog = catalog or create_secret_societies_catalog()
        self.rng = rng or random.Random()
        self.clock = clock
        self.reducer = reducer or Reducer(catalog=self.catalog, rng=self.rng, clock=clock)
        self.save_retries = max(0, save_retries)

    # =========================================================================
    # Lobby
    # =========================================================================

    def create_session(self, host_name: str, password: str | None = None) -> tuple[GameState, str]:
        """
        Create a lobby with the caller as host.

        Returns:
            (stored state, host player id)
        """
        name = (host_name or "").strip()
        if not name:
            raise ValidationError("Host name is required")

        state = create_lobby_state(name, self.catalog, rng=self.rng, password=password or None)
        state = self.store.create(state)
        host_id = state.players[0].player_id
        logger.info(
            "Session created",
            extra={"session_id": state.session_id, "host_player_id": host_id},
        )
        return state, host_id

    def join_session(
        self,
        session_id: str,
        player_name: str,
        password: str | None = None,
    ) -> tuple[GameState, str]:
        """
        Add a player to an open lobby.

        Returns:
            (stored state, new player id)
        """
        name = (player_name or "").strip()
        if not name:
            raise ValidationError("Player name is required")
        player_id = new_player_id()

        def _join(state: GameState) -> GameState:
            if state.password is not None and password != state.password:
                raise AuthenticationError("Incorrect password")
            if state.num_players >= MAX_PLAYERS:
                raise ConflictError("Lobby is full")
            if (
                state.turn_phase != TurnPhase.VC_SELECTION
                or state.selection_stage != SelectionStage.LOBBY
            ):
                raise AuthorizationError("Game has already started")
            if any(p.name.lower() == name.lower() for p in state.players):
                raise ConflictError(f"Player name {name} is already taken in this lobby")

            state.players.append(create_player(player_id, name, self.catalog, self.rng))
            state.turn_order.append(player_id)
            state.add_log_entries([format_log_entry(f"{name} joined the lobby.", self.clock())])
            return state

        state = self._update(session_id, _join)
        logger.info(
            "Player joined",
            extra={"session_id": session_id, "player_id": player_id},
        )
        return state, player_id

    def get_state(self, session_id: str) -> GameState:
        return self.store.load(session_id)

    # =========================================================================
    # Actions
    # =========================================================================

    def submit_action(self, session_id: str, data: dict[str, Any] | Action) -> ActionResult:
        """
        Parse and apply one action, then persist the result.

        Read-only actions (offers) return without writing. Rejections
        raise the matching GameError subclass.
        """
        action = data if isinstance(data, Action) else parse_action(data)

        for attempt in range(self.save_retries + 1):
            state = self.store.load(session_id)
            result = self.reducer.apply(state, action)
            if not result.success:
                logger.warning(
                    "Action rejected",
                    extra={
                        "session_id": session_id,
                        "action_type": action.action_type.value,
                        "player_id": action.actor_id,
                        "error": result.error,
                    },
                )
                raise error_for_kind(result.error_kind, result.error or "Action failed")

            if not result.state_changed:
                return result

            try:
                if result.delete_session:
                    self._finish_session(state, result)
                else:
                    result.new_state = self.store.save(result.new_state, state.version)
            except ConflictError:
                logger.warning(
                    "Save conflict, retrying",
                    extra={"session_id": session_id, "attempt": attempt + 1},
                )
                continue

            logger.debug(
                "Action applied",
                extra={
                    "session_id": session_id,
                    "action_type": action.action_type.value,
                    "player_id": action.actor_id,
                },
            )
            return result

        raise ConflictError("Session was modified concurrently. Please retry.")

    def _finish_session(self, loaded: GameState, result: ActionResult):
        """Delete the session, recording the winner in the same transaction."""
        session_id = loaded.session_id

        def _finish(txn):
            current = txn.load(session_id)
            if current.version != loaded.version:
                raise ConflictError("Session was modified concurrently")
            if result.winner_name:
                txn.put_stat(result.winner_name, txn.get_stat(result.winner_name) + 1)
            txn.delete(session_id)

        self.store.transaction(_finish)
        if result.winner_name:
            logger.info(
                "Game concluded",
                extra={"session_id": session_id, "winner": result.winner_name},
            )
        else:
            logger.info("Session terminated", extra={"session_id": session_id})

    def _update(self, session_id: str, fn: Callable[[GameState], GameState]) -> GameState:
        """Load, mutate and compare-and-swap save, retrying on conflicts."""
        for attempt in range(self.save_retries + 1):
            state = self.store.load(session_id)
            updated = fn(state.clone())
            try:
                return self.store.save(updated, state.version)
            except ConflictError:
                logger.warning(
                    "Save conflict, retrying",
                    extra={"session_id": session_id, "attempt": attempt + 1},
                )
        raise ConflictError("Session was modified concurrently. Please retry.")

    # =========================================================================
    # Leaderboard and subscriptions
    # =========================================================================

    def leaderboard(self, limit: int = LEADERBOARD_SIZE) -> list[LeaderboardEntry]:
        return self.store.leaderboard(limit)

    def subscribe(self, session_id: str, callback: Listener) -> Callable[[], None]:
        return self.store.subscribe(session_id, callback)
