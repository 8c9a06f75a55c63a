"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to gateway calls
2. Expands catalog ids into display models
3. Formats responses for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
Errors propagate as GameError subclasses; the web layer maps them.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

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
    # Shared
    CardInfo,
    EventInfo,
    HandRevealRequestInfo,
    LeaderboardEntryInfo,
    PlayerInfo,
    RevealedHandInfo,
    RevealedMaskInfo,
    VictoryConditionInfo,
    ZoneInfo,
)
from ..engine_core.action import ActionType
from ..engine_core.state import GameState, CardRef
from ..session import SessionGateway


@dataclass
class APIService:
    """
    Main API service for game clients.

    Usage:
        service = APIService()

        # Create a lobby
        created = service.create_session(CreateSessionRequest(host_name="Alice"))

        # Join it
        joined = service.join_session(created.session_id, JoinSessionRequest(player_name="Bob"))

        # Act
        response = service.submit_action(created.session_id, ActionRequest(...))
    """
    gateway: SessionGateway = field(default_factory=SessionGateway)

    def create_session(self, request: CreateSessionRequest) -> CreateSessionResponse:
        state, host_id = self.gateway.create_session(request.host_name, request.password)
        return CreateSessionResponse(
            session_id=state.session_id,
            host_player_id=host_id,
            host_name=state.players[0].name,
        )

    def join_session(self, session_id: str, request: JoinSessionRequest) -> JoinSessionResponse:
        state, player_id = self.gateway.join_session(
            session_id, request.player_name, request.password,
        )
        return JoinSessionResponse(
            message="Player joined successfully",
            session_id=state.session_id,
            player_id=player_id,
        )

    def get_game_state(self, session_id: str) -> GameStateResponse:
        return self.convert_game_state(self.gateway.get_state(session_id))

    def submit_action(self, session_id: str, request: ActionRequest) -> ActionResponse:
        """
        Apply an action and describe the outcome.

        The raw request is handed to the engine parser unchanged.
        """
        result = self.gateway.submit_action(session_id, {
            "type": request.type,
            "payload": request.payload,
            "action_id": request.action_id,
        })

        message = None
        if result.winner_name:
            message = f"Game concluded. {result.winner_name} wins! Session deleted."
        elif result.delete_session:
            message = "Session terminated successfully"

        return ActionResponse(
            action_type=ActionType(request.type).value,
            message=message,
            state=(
                self.convert_game_state(result.new_state)
                if result.state_changed and not result.delete_session else None
            ),
            log_entries=result.state_changes,
            data=result.data,
            session_deleted=result.delete_session,
            winner_name=result.winner_name,
        )

    def leaderboard(self, limit: int = 10) -> LeaderboardResponse:
        entries = self.gateway.leaderboard(limit)
        return LeaderboardResponse(
            leaderboard=[LeaderboardEntryInfo.model_validate(e) for e in entries],
        )

    # =========================================================================
    # Conversion helpers
    # =========================================================================

    def convert_snapshot(self, snapshot: dict[str, Any]) -> GameStateResponse:
        """Convert a store push (public dict, no password) to a response model."""
        state = GameState.from_dict(snapshot)
        return self.convert_game_state(state, has_password=snapshot.get("has_password", False))

    def convert_game_state(
        self,
        state: GameState,
        has_password: bool | None = None,
    ) -> GameStateResponse:
        catalog = self.gateway.catalog
        active = catalog.get_event(state.active_event) if state.active_event else None
        upcoming = catalog.get_event(state.upcoming_event) if state.upcoming_event else None
        revealed = state.revealed_hand

        return GameStateResponse(
            session_id=state.session_id,
            players=[
                self._convert_player(state, p)
                for p in state.players
            ],
            current_player_id=state.current_player_id,
            current_turn_player_index=state.current_turn_player_index,
            vc_selection_player_index=state.vc_selection_player_index,
            round=state.round,
            turn_phase=state.turn_phase.value,
            selection_stage=state.selection_stage.value,
            turn_order=list(state.turn_order),
            has_moved_this_turn=state.has_moved_this_turn,
            suspicion=state.suspicion,
            max_suspicion_adjustment=state.max_suspicion_adjustment,
            zones=[
                ZoneInfo(name=z.name, borders=list(z.borders), deck_size=len(z.secret_deck))
                for z in state.zones
            ],
            active_event=EventInfo.model_validate(active) if active else None,
            upcoming_event=EventInfo.model_validate(upcoming) if upcoming else None,
            available_victory_condition_count=len(state.available_victory_conditions),
            game_log=list(state.game_log),
            revealed_hand=RevealedHandInfo(
                for_player_id=revealed.for_player_id,
                target_player_id=revealed.target_player_id,
                target_player_name=revealed.target_player_name,
                hand=[self._convert_card(ref) for ref in revealed.hand],
            ) if revealed else None,
            revealed_mask_types_this_turn=[m.value for m in state.revealed_mask_types_this_turn],
            currently_revealed_masks=[
                RevealedMaskInfo(
                    player_id=m.player_id,
                    mask_type=m.mask_type.value,
                    revealed_by_player_id=m.revealed_by_player_id,
                )
                for m in state.currently_revealed_masks
            ],
            has_password=state.password is not None if has_password is None else has_password,
            created_at=state.created_at,
            version=state.version,
        )

    def _convert_player(self, state: GameState, player) -> PlayerInfo:
        vc = (
            self.gateway.catalog.get_victory_condition(player.victory_condition)
            if player.victory_condition else None
        )
        request = player.pending_hand_reveal_request_from
        return PlayerInfo(
            player_id=player.player_id,
            name=player.name,
            gold=player.gold,
            trust=player.trust,
            information=player.information,
            secrecy=player.secrecy,
            hand=[self._convert_card(ref) for ref in player.hand],
            masks={
                mask.value: self._convert_card(ref) if ref else None
                for mask, ref in player.masks.items()
            },
            current_zone=player.current_zone,
            victory_condition=VictoryConditionInfo.model_validate(vc) if vc else None,
            is_victory_condition_revealed=player.is_victory_condition_revealed,
            is_eliminated=player.is_eliminated,
            is_host=state.is_host(player.player_id),
            is_current_turn=state.current_player_id == player.player_id,
            pending_hand_reveal_request_from=HandRevealRequestInfo(
                player_id=request.player_id,
                player_name=request.player_name,
            ) if request else None,
        )

    def _convert_card(self, ref: CardRef) -> CardInfo:
        card = self.gateway.catalog.get_card(ref.base_id)
        if card is None:
            return CardInfo(instance_id=ref.instance_id, id=ref.base_id, name=ref.base_id)
        return CardInfo(instance_id=ref.instance_id, **card.to_dict())
